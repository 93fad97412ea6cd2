"""
Leave service - submission, editing, approval and cancellation of leave requests
"""
import logging
from datetime import date
from decimal import Decimal
from typing import List, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session
from fastapi import HTTPException, status

from leavedesk.core.constants import DAYS_PER_WEEK, DAYS_PER_YEAR, LEAVE_UNITS, MONTHS_PER_CYCLE
from leavedesk.models.leave import LeaveRequest, LeaveStatus, LeaveType
from leavedesk.schemas.leave import LeaveRequestCreate, LeaveRequestUpdate
from leavedesk.services.balance_record_service import find_balance_row, get_balance_record
from leavedesk.services.balance_service import available_balance, balance_as_of, has_sufficient_balance
from leavedesk.services.edit_eligibility_service import edit_restriction_reason
from leavedesk.services.holiday_service import get_closed_holidays_in_range
from leavedesk.services.working_days_service import working_days
from leavedesk.utils.datetime_utils import now_utc

logger = logging.getLogger(__name__)


def compute_request_days(
    db: Session,
    start_date: date,
    end_date: date,
    is_half_day: bool = False
) -> float:
    """
    Working days for a request range against the stored holiday calendar.

    The only source of LeaveRequest.working_days; client-supplied counts are ignored.
    """
    public, company = get_closed_holidays_in_range(db, start_date, end_date)
    return working_days(start_date, end_date, public, company, is_half_day)


def validate_leave_year(start_date: date, end_date: date) -> None:
    """
    Validate that both dates fall within the same leave year.

    Balance records are kept per year, so a cross-year request (e.g., Dec 31
    to Jan 2) cannot be charged against a single record.

    Raises:
        HTTPException: If dates cross year boundary
    """
    if start_date.year != end_date.year:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Leave cannot span across years. Start date year: {start_date.year}, end date year: {end_date.year}"
        )


def validate_overlap(
    db: Session,
    requester: str,
    start_date: date,
    end_date: date,
    exclude_leave_id: Optional[int] = None
) -> None:
    """
    Validate that the range doesn't overlap the requester's PENDING or APPROVED requests.

    Raises:
        HTTPException: If overlap detected (409 Conflict)
    """
    query = db.query(LeaveRequest).filter(
        func.lower(LeaveRequest.requester) == requester.strip().lower(),
        LeaveRequest.status.in_([LeaveStatus.PENDING, LeaveStatus.APPROVED]),
        LeaveRequest.end_date >= start_date,
        LeaveRequest.start_date <= end_date
    )
    if exclude_leave_id:
        query = query.filter(LeaveRequest.id != exclude_leave_id)

    overlapping = query.first()
    if overlapping:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"Leave request overlaps with existing leave from {overlapping.start_date} to {overlapping.end_date}"
        )


def validate_balance(
    db: Session,
    requester: str,
    leave_type: LeaveType,
    start_date: date,
    requested_days: float,
    today: date
) -> None:
    """
    Validate the requester can cover the request from the current balance.

    Only day-denominated types are checked here; maternity (months) and
    parental/adoption (weeks) are settled in the approval workflow.

    Raises:
        HTTPException: 404 if the requester has no balance record, 400 if the balance is insufficient
    """
    if LEAVE_UNITS[leave_type.value] != "days":
        logger.info(
            "Skipping balance check for %s leave (%s), counted in %s",
            leave_type.value, requester, LEAVE_UNITS[leave_type.value]
        )
        return

    year = start_date.year
    record = get_balance_record(db, requester, year)
    as_of = balance_as_of(year, today)
    if not has_sufficient_balance(record, leave_type, requested_days, as_of=as_of):
        available = round(available_balance(record, leave_type, as_of=as_of), 2)
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Insufficient {leave_type.value} leave balance: requested {requested_days}, available {available}"
        )


def _require_working_days(days: float) -> None:
    if days <= 0:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Requested range contains no working days"
        )


def submit_leave_request(
    db: Session,
    data: LeaveRequestCreate,
    today: date
) -> LeaveRequest:
    """
    Submit a new leave request (status PENDING)

    Args:
        db: Database session
        data: Submission payload
        today: Date of submission in the leave calendar

    Returns:
        Created LeaveRequest instance

    Raises:
        HTTPException: If the range, overlap or balance validation fails
    """
    validate_leave_year(data.start_date, data.end_date)
    days = compute_request_days(db, data.start_date, data.end_date, data.is_half_day)
    _require_working_days(days)
    validate_overlap(db, data.requester, data.start_date, data.end_date)
    validate_balance(db, data.requester, data.leave_type, data.start_date, days, today)

    now = now_utc()
    leave = LeaveRequest(
        requester=data.requester.strip().lower(),
        approver=data.approver,
        title=data.title,
        detail=data.detail,
        leave_type=data.leave_type,
        start_date=data.start_date,
        end_date=data.end_date,
        is_half_day=data.is_half_day,
        working_days=Decimal(str(days)),
        status=LeaveStatus.PENDING,
        created_at=now,
        modified_at=now,
    )
    db.add(leave)
    db.commit()
    db.refresh(leave)

    logger.info(
        "Leave request %s submitted by %s: %s %s..%s (%s days)",
        leave.id, leave.requester, leave.leave_type.value, leave.start_date, leave.end_date, days
    )
    return leave


def get_leave_request(db: Session, leave_id: int) -> LeaveRequest:
    """
    Get a leave request by ID

    Raises:
        HTTPException: If not found
    """
    leave = db.query(LeaveRequest).filter(LeaveRequest.id == leave_id).first()
    if not leave:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Leave request with id {leave_id} not found"
        )
    return leave


def list_leave_requests(
    db: Session,
    requester: Optional[str] = None,
    status_filter: Optional[LeaveStatus] = None
) -> List[LeaveRequest]:
    query = db.query(LeaveRequest)
    if requester:
        query = query.filter(func.lower(LeaveRequest.requester) == requester.strip().lower())
    if status_filter:
        query = query.filter(LeaveRequest.status == status_filter)
    return query.order_by(LeaveRequest.start_date.desc(), LeaveRequest.id.desc()).all()


def _require_owner(leave: LeaveRequest, requester: str) -> None:
    if leave.requester.lower() != requester.strip().lower():
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Only the requesting employee can change this leave request"
        )


def update_leave_request(
    db: Session,
    leave_id: int,
    requester: str,
    data: LeaveRequestUpdate,
    today: date
) -> LeaveRequest:
    """
    Edit a pending leave request whose first day has not passed.

    Working days are recomputed from the new range; balance and overlap are re-validated.

    Raises:
        HTTPException: 404 if missing, 403 if not the owner, 409 if no longer editable
    """
    leave = get_leave_request(db, leave_id)
    _require_owner(leave, requester)

    reason = edit_restriction_reason(leave, today)
    if reason:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=reason)

    leave_type = data.leave_type or leave.leave_type
    start_date = data.start_date or leave.start_date
    end_date = data.end_date or leave.end_date
    is_half_day = leave.is_half_day if data.is_half_day is None else data.is_half_day

    if start_date > end_date:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="start_date must be on or before end_date"
        )
    validate_leave_year(start_date, end_date)
    days = compute_request_days(db, start_date, end_date, is_half_day)
    _require_working_days(days)
    validate_overlap(db, leave.requester, start_date, end_date, exclude_leave_id=leave.id)
    validate_balance(db, leave.requester, leave_type, start_date, days, today)

    leave.leave_type = leave_type
    leave.start_date = start_date
    leave.end_date = end_date
    leave.is_half_day = is_half_day
    leave.working_days = Decimal(str(days))
    if data.title is not None:
        leave.title = data.title
    if data.detail is not None:
        leave.detail = data.detail
    leave.modified_at = now_utc()

    db.commit()
    db.refresh(leave)
    logger.info("Leave request %s edited by %s (%s days)", leave.id, leave.requester, days)
    return leave


def cancel_leave_request(
    db: Session,
    leave_id: int,
    requester: str,
    today: date
) -> LeaveRequest:
    """
    Cancel a leave request on behalf of the requesting employee.

    Same window as editing: pending and not yet started.

    Raises:
        HTTPException: 404 if missing, 403 if not the owner, 409 if no longer cancellable
    """
    leave = get_leave_request(db, leave_id)
    _require_owner(leave, requester)

    reason = edit_restriction_reason(leave, today)
    if reason:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=reason.replace("Cannot edit", "Cannot cancel", 1)
        )

    leave.status = LeaveStatus.CANCELLED
    leave.modified_at = now_utc()
    db.commit()
    db.refresh(leave)
    logger.info("Leave request %s cancelled by %s", leave.id, leave.requester)
    return leave


def approved_amount(leave: LeaveRequest) -> Decimal:
    """
    Amount an approved request draws from its leave type, in that type's unit.

    Day types use the recomputed working days. Week and month types are
    consecutive-period entitlements and are charged by calendar span.
    """
    unit = LEAVE_UNITS[leave.leave_type.value]
    if unit == "days":
        return Decimal(str(leave.working_days))
    span = (leave.end_date - leave.start_date).days + 1
    if unit == "weeks":
        amount = span / DAYS_PER_WEEK
    else:
        amount = span * MONTHS_PER_CYCLE / DAYS_PER_YEAR
    return Decimal(str(round(amount, 2)))


def _require_pending(leave: LeaveRequest, action: str) -> None:
    if leave.status != LeaveStatus.PENDING:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Cannot {action} leave request with status {leave.status.value}"
        )


def approve_leave_request(
    db: Session,
    leave_id: int,
    approver: Optional[str],
    today: date
) -> LeaveRequest:
    """
    Approve a pending leave request and charge it to the requester's balance

    The used amount of the matching leave type is incremented in the same
    transaction as the status change.

    Raises:
        HTTPException: 404 if the request or balance record is missing,
            400 if not pending or the balance no longer covers it
    """
    leave = get_leave_request(db, leave_id)
    _require_pending(leave, "approve")

    year = leave.start_date.year
    row = find_balance_row(db, leave.requester, year)
    if row is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"No leave balance record for {leave.requester} in {year}"
        )
    # Balance may have moved since submission
    validate_balance(db, leave.requester, leave.leave_type, leave.start_date, float(leave.working_days), today)

    amount = approved_amount(leave)
    column = f"{leave.leave_type.value}_used"
    before_status = leave.status.value
    try:
        setattr(row, column, Decimal(str(getattr(row, column) or 0)) + amount)
        leave.status = LeaveStatus.APPROVED
        if approver:
            leave.approver = approver.strip().lower()
        leave.modified_at = now_utc()
        db.commit()
    except Exception:
        db.rollback()
        logger.error("Approval of leave request %s failed, rolled back", leave_id, exc_info=True)
        raise
    db.refresh(leave)

    logger.info(
        "leave status transition: leave_id=%s before=%s after=approved %s += %s",
        leave.id, before_status, column, amount
    )
    return leave


def reject_leave_request(
    db: Session,
    leave_id: int,
    approver: Optional[str]
) -> LeaveRequest:
    """
    Reject a pending leave request; no balance change

    Raises:
        HTTPException: 404 if missing, 400 if not pending
    """
    leave = get_leave_request(db, leave_id)
    _require_pending(leave, "reject")

    before_status = leave.status.value
    leave.status = LeaveStatus.REJECTED
    if approver:
        leave.approver = approver.strip().lower()
    leave.modified_at = now_utc()
    db.commit()
    db.refresh(leave)

    logger.info(
        "leave status transition: leave_id=%s before=%s after=rejected",
        leave.id, before_status
    )
    return leave
