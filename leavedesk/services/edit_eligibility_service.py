"""
Edit eligibility for leave requests.

An employee may edit (or cancel) a request only while it is pending and its
first day is still in the future. Always evaluate against the date of the
attempt; results must not be cached.
"""
from datetime import date
from typing import Optional

from leavedesk.models.leave import LeaveStatus
from leavedesk.utils.datetime_utils import DateLike, to_date

FIRST_DAY_PASSED_REASON = "Cannot edit requests where the first day has passed"


def _status_value(status) -> str:
    if isinstance(status, LeaveStatus):
        return status.value
    if status is None:
        return "unknown"
    return str(status).strip().lower()


def edit_restriction_reason(request, today: DateLike) -> Optional[str]:
    """
    Why a request cannot be edited, or None when it can.

    Args:
        request: Leave request (ORM row or schema) with status and start_date
        today: Date of the edit attempt

    Raises:
        ValueError: If request is None
    """
    if request is None:
        raise ValueError("A leave request is required to check edit eligibility")

    status = _status_value(getattr(request, "status", None))
    if status != LeaveStatus.PENDING.value:
        return f"Cannot edit {status} requests"

    start = to_date(getattr(request, "start_date", None))
    current = to_date(today) or date.today()
    if start is None or start <= current:
        return FIRST_DAY_PASSED_REASON
    return None


def can_edit(request, today: DateLike) -> bool:
    return edit_restriction_reason(request, today) is None
