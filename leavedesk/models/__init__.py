"""
Database models
"""
from leavedesk.models.balance import LeaveBalanceRecord
from leavedesk.models.leave import LeaveRequest, LeaveType, LeaveStatus
from leavedesk.models.holiday import Holiday, HolidayType, OfficeStatus

__all__ = [
    "LeaveBalanceRecord",
    "LeaveRequest",
    "LeaveType",
    "LeaveStatus",
    "Holiday",
    "HolidayType",
    "OfficeStatus",
]
