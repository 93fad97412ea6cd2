"""
Balance record service - loads per-employee balance records from the store.

Read-only. Used amounts are written by leave approval (leave_service) and new
years by rollover (rollover_service).
"""
from typing import List, Optional
from sqlalchemy import func
from sqlalchemy.orm import Session
from fastapi import HTTPException, status
from leavedesk.models.balance import LeaveBalanceRecord
from leavedesk.schemas.balance import EmployeeBalanceRecord


def find_balance_row(db: Session, employee_email: str, year: int) -> Optional[LeaveBalanceRecord]:
    """Balance row for (email, year); email match is case-insensitive"""
    return db.query(LeaveBalanceRecord).filter(
        func.lower(LeaveBalanceRecord.employee_email) == employee_email.strip().lower(),
        LeaveBalanceRecord.year == year,
    ).first()


def get_balance_record(db: Session, employee_email: str, year: int) -> EmployeeBalanceRecord:
    """
    Get the typed balance record for an employee and leave year

    Raises:
        HTTPException: 404 if no record exists
    """
    row = find_balance_row(db, employee_email, year)
    if not row:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"No leave balance record for {employee_email} in {year}"
        )
    return EmployeeBalanceRecord.model_validate(row)


def list_balance_rows(db: Session, year: int) -> List[LeaveBalanceRecord]:
    return (
        db.query(LeaveBalanceRecord)
        .filter(LeaveBalanceRecord.year == year)
        .order_by(LeaveBalanceRecord.employee_email)
        .all()
    )


def count_balance_rows(db: Session, year: int) -> int:
    return db.query(func.count(LeaveBalanceRecord.id)).filter(LeaveBalanceRecord.year == year).scalar() or 0
