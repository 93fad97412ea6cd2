"""
Leave balance endpoints: dashboard balances, forfeiture warning, year-end rollover
"""
from datetime import date
from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from leavedesk.core.deps import get_db, get_today
from leavedesk.schemas.balance import BalanceSummaryOut, ForfeitureOut, RolloverRequest, RolloverOut
from leavedesk.services.balance_record_service import get_balance_record
from leavedesk.services.balance_service import balance_summary
from leavedesk.services.forfeiture_service import days_to_forfeit, forfeiture_deadline, should_warn_forfeiture
from leavedesk.services.rollover_service import preview_rollover, run_rollover

router = APIRouter()


@router.post("/rollover/preview", response_model=RolloverOut)
async def preview_rollover_endpoint(
    payload: RolloverRequest,
    db: Session = Depends(get_db),
    today: date = Depends(get_today)
):
    """Preview year-end rollover without writing any records"""
    return preview_rollover(db, payload.from_year, payload.to_year, today)


@router.post("/rollover", response_model=RolloverOut, status_code=201)
async def run_rollover_endpoint(
    payload: RolloverRequest,
    db: Session = Depends(get_db),
    today: date = Depends(get_today)
):
    """
    Run year-end rollover.

    Creates to_year records for all active employees; from_year records are preserved.
    Refused if to_year already has records.
    """
    return run_rollover(db, payload.from_year, payload.to_year, today)


@router.get("/{employee_email}", response_model=BalanceSummaryOut)
async def get_balances_endpoint(
    employee_email: str,
    year: Optional[int] = Query(None, description="Leave year (defaults to the current year)"),
    as_of: Optional[date] = Query(None, description="Evaluate balances at this date (defaults to today)"),
    db: Session = Depends(get_db),
    today: date = Depends(get_today)
):
    """Current balance of all eight leave types for an employee"""
    record = get_balance_record(db, employee_email, year or today.year)
    return balance_summary(record, today, as_of=as_of)


@router.get("/{employee_email}/forfeiture", response_model=ForfeitureOut)
async def get_forfeiture_endpoint(
    employee_email: str,
    year: Optional[int] = Query(None, description="Leave year (defaults to the current year)"),
    db: Session = Depends(get_db),
    today: date = Depends(get_today)
):
    """Brought-forward days that lapse if unused by 31 July"""
    year = year or today.year
    record = get_balance_record(db, employee_email, year)
    return {
        "employee_email": record.employee_email,
        "year": year,
        "brought_forward": record.brought_forward,
        "annual_used": record.annual_used,
        "days_to_forfeit": days_to_forfeit(record.brought_forward, record.annual_used),
        "deadline": forfeiture_deadline(year),
        "show_warning": today.year == year and should_warn_forfeiture(
            record.brought_forward, record.annual_used, today
        ),
    }
