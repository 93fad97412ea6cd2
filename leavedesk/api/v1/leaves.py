"""
Leave request endpoints
"""
from datetime import date
from typing import List, Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from leavedesk.core.deps import get_db, get_today
from leavedesk.models.leave import LeaveStatus
from leavedesk.schemas.leave import (
    EditEligibilityOut,
    LeaveRequestCreate,
    LeaveRequestOut,
    LeaveRequestUpdate,
    LeaveStatusUpdate,
)
from leavedesk.services.edit_eligibility_service import edit_restriction_reason
from leavedesk.services.leave_service import (
    approve_leave_request,
    cancel_leave_request,
    get_leave_request,
    list_leave_requests,
    reject_leave_request,
    submit_leave_request,
    update_leave_request,
)

router = APIRouter()


@router.post("", response_model=LeaveRequestOut, status_code=201)
async def submit_leave_endpoint(
    payload: LeaveRequestCreate,
    db: Session = Depends(get_db),
    today: date = Depends(get_today)
):
    """
    Submit a leave request.

    Working days are computed from the range and the holiday calendar, then
    checked against the requester's current balance.
    """
    return submit_leave_request(db, payload, today)


@router.get("", response_model=List[LeaveRequestOut])
async def list_leaves_endpoint(
    requester: Optional[str] = Query(None, description="Filter by requester email"),
    status: Optional[LeaveStatus] = Query(None, description="Filter by status"),
    db: Session = Depends(get_db)
):
    """List leave requests, newest first"""
    return list_leave_requests(db, requester=requester, status_filter=status)


@router.get("/{leave_id}", response_model=LeaveRequestOut)
async def get_leave_endpoint(
    leave_id: int,
    db: Session = Depends(get_db)
):
    """Get a leave request by ID"""
    return get_leave_request(db, leave_id)


@router.get("/{leave_id}/edit-eligibility", response_model=EditEligibilityOut)
async def edit_eligibility_endpoint(
    leave_id: int,
    db: Session = Depends(get_db),
    today: date = Depends(get_today)
):
    """Whether the request can still be edited, with the reason when it cannot"""
    leave = get_leave_request(db, leave_id)
    reason = edit_restriction_reason(leave, today)
    return {"leave_id": leave.id, "can_edit": reason is None, "reason": reason}


@router.patch("/{leave_id}", response_model=LeaveRequestOut)
async def update_leave_endpoint(
    leave_id: int,
    payload: LeaveRequestUpdate,
    requester: str = Query(..., description="Email of the employee making the change"),
    db: Session = Depends(get_db),
    today: date = Depends(get_today)
):
    """Edit a pending request whose first day has not passed"""
    return update_leave_request(db, leave_id, requester, payload, today)


@router.post("/{leave_id}/cancel", response_model=LeaveRequestOut)
async def cancel_leave_endpoint(
    leave_id: int,
    requester: str = Query(..., description="Email of the employee cancelling"),
    db: Session = Depends(get_db),
    today: date = Depends(get_today)
):
    """Cancel a pending request whose first day has not passed"""
    return cancel_leave_request(db, leave_id, requester, today)


@router.put("/{leave_id}/status", response_model=LeaveRequestOut)
async def update_leave_status_endpoint(
    leave_id: int,
    payload: LeaveStatusUpdate,
    db: Session = Depends(get_db),
    today: date = Depends(get_today)
):
    """
    Approve or reject a pending leave request.

    On approval the request is charged to the requester's balance for its
    leave type. Rejection leaves the balance unchanged.
    """
    if payload.status == LeaveStatus.APPROVED:
        return approve_leave_request(db, leave_id, payload.approver, today)
    return reject_leave_request(db, leave_id, payload.approver)
