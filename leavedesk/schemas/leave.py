"""
Leave request schemas
"""
from datetime import date as date_type, datetime
from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator, model_validator

from leavedesk.models.leave import LeaveStatus, LeaveType


class LeaveRequestCreate(BaseModel):
    """Schema for submitting a leave request. Working days are always computed server-side."""
    requester: str = Field(..., description="Requester email")
    leave_type: LeaveType
    start_date: date_type
    end_date: date_type
    is_half_day: bool = Field(False, description="Each counted day contributes 0.5")
    title: Optional[str] = None
    detail: Optional[str] = None
    approver: Optional[str] = None

    @model_validator(mode="after")
    def _validate_range(self):
        if self.start_date > self.end_date:
            raise ValueError("start_date must be on or before end_date")
        return self


class LeaveRequestUpdate(BaseModel):
    """Schema for editing a pending leave request"""
    leave_type: Optional[LeaveType] = None
    start_date: Optional[date_type] = None
    end_date: Optional[date_type] = None
    is_half_day: Optional[bool] = None
    title: Optional[str] = None
    detail: Optional[str] = None


class LeaveRequestOut(BaseModel):
    id: int
    requester: str
    approver: Optional[str] = None
    title: Optional[str] = None
    detail: Optional[str] = None
    leave_type: LeaveType
    start_date: date_type
    end_date: date_type
    is_half_day: bool
    working_days: float
    status: LeaveStatus
    created_at: datetime
    modified_at: datetime

    model_config = ConfigDict(from_attributes=True)

    @field_serializer("created_at", "modified_at", when_used="always")
    @classmethod
    def _ser_datetime(cls, dt):
        from leavedesk.utils.datetime_utils import iso_8601_utc
        return iso_8601_utc(dt) if dt is not None else None


class EditEligibilityOut(BaseModel):
    leave_id: int
    can_edit: bool
    reason: Optional[str] = None


class WorkingDaysRequest(BaseModel):
    """
    Working-days calculation input.

    When both holiday lists are omitted the closed-office holidays stored for
    the range are used.
    """
    start_date: date_type
    end_date: date_type
    is_half_day: bool = False
    public_holidays: Optional[List[Union[datetime, date_type]]] = None
    company_holidays: Optional[List[Union[datetime, date_type]]] = None


class WorkingDaysOut(BaseModel):
    start_date: date_type
    end_date: date_type
    is_half_day: bool
    working_days: float
    holidays_excluded: List[date_type]


class LeaveStatusUpdate(BaseModel):
    """Decision on a pending leave request"""
    status: LeaveStatus = Field(..., description="approved or rejected")
    approver: Optional[str] = Field(None, description="Email of the approving manager")

    @field_validator("status")
    @classmethod
    def _decision_only(cls, v):
        if v not in (LeaveStatus.APPROVED, LeaveStatus.REJECTED):
            raise ValueError("status must be approved or rejected")
        return v
