"""
Leave calendar endpoints: holiday listing and working-days calculation
"""
from typing import List, Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from leavedesk.core.deps import get_db
from leavedesk.schemas.holiday import HolidayOut
from leavedesk.schemas.leave import WorkingDaysRequest, WorkingDaysOut
from leavedesk.services.holiday_service import get_closed_holidays_in_range, list_holidays
from leavedesk.services.working_days_service import excluded_holidays, working_days

router = APIRouter()


@router.get("/holidays", response_model=List[HolidayOut])
async def list_holidays_endpoint(
    year: Optional[int] = Query(None, description="Filter by year"),
    closed_only: bool = Query(False, description="Return only holidays on which the office is closed"),
    db: Session = Depends(get_db)
):
    """List public and company holidays"""
    return list_holidays(db, year=year, closed_only=closed_only)


@router.post("/working-days", response_model=WorkingDaysOut)
async def working_days_endpoint(
    payload: WorkingDaysRequest,
    db: Session = Depends(get_db)
):
    """
    Count the working days a leave range would consume.

    Holidays supplied in the body are used as-is; when both lists are omitted
    the closed-office holidays stored for the range are used.
    """
    public = payload.public_holidays
    company = payload.company_holidays
    if public is None and company is None:
        public, company = get_closed_holidays_in_range(db, payload.start_date, payload.end_date)

    return {
        "start_date": payload.start_date,
        "end_date": payload.end_date,
        "is_half_day": payload.is_half_day,
        "working_days": working_days(
            payload.start_date, payload.end_date, public, company, payload.is_half_day
        ),
        "holidays_excluded": excluded_holidays(payload.start_date, payload.end_date, public, company),
    }
