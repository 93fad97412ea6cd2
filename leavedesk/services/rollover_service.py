"""
Year-end rollover - create next year's balance records from the closing year.

Unused annual leave becomes the new brought-forward amount (never negative).
Annual used/adjustments/forfeited start at 0. Sick leave runs on a multi-year
cycle so sick used carries over; all other used amounts reset.
Closing-year records are left untouched.
"""
import logging
from datetime import date
from decimal import Decimal
from typing import Dict, List, Tuple

from sqlalchemy.orm import Session
from fastapi import HTTPException, status

from leavedesk.core.constants import EMPLOYEE_STATUS_ACTIVE
from leavedesk.models.balance import LeaveBalanceRecord
from leavedesk.schemas.balance import EmployeeBalanceRecord
from leavedesk.services.balance_record_service import count_balance_rows, list_balance_rows
from leavedesk.services.balance_service import annual_allocation, employee_status, rollover_brought_forward

logger = logging.getLogger(__name__)


def _validate_years(db: Session, from_year: int, to_year: int) -> None:
    if to_year <= from_year:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid year parameters"
        )
    if count_balance_rows(db, to_year) > 0:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"Leave balances for year {to_year} already exist. Cannot perform rollover."
        )


def _active_rows(
    db: Session,
    from_year: int,
    today: date
) -> List[Tuple[LeaveBalanceRecord, EmployeeBalanceRecord]]:
    rows = []
    for row in list_balance_rows(db, from_year):
        record = EmployeeBalanceRecord.model_validate(row)
        if employee_status(record.contract_termination_date, today) != EMPLOYEE_STATUS_ACTIVE:
            continue
        rows.append((row, record))
    return rows


def _preview_row(record: EmployeeBalanceRecord, from_year: int) -> Dict:
    return {
        "employee_email": record.employee_email,
        "employee_name": record.employee_name,
        "brought_forward": record.brought_forward,
        "accrued": round(annual_allocation(record, date(from_year, 12, 31)), 1),
        "annual_used": record.annual_used,
        "forfeited": record.forfeited,
        "annual_leave_adjustments": record.annual_leave_adjustments,
        "new_brought_forward": rollover_brought_forward(record, from_year),
    }


def preview_rollover(
    db: Session,
    from_year: int,
    to_year: int,
    today: date
) -> Dict:
    """
    Compute the rollover without writing anything

    Raises:
        HTTPException: If the years are invalid or to_year already has records
    """
    _validate_years(db, from_year, to_year)
    rows = [_preview_row(record, from_year) for _, record in _active_rows(db, from_year, today)]
    return {
        "from_year": from_year,
        "to_year": to_year,
        "employees_processed": len(rows),
        "records_preserved": count_balance_rows(db, from_year),
        "records_created": 0,
        "rows": rows,
    }


def run_rollover(
    db: Session,
    from_year: int,
    to_year: int,
    today: date
) -> Dict:
    """
    Create to_year balance records for every active employee of from_year

    Runs in one transaction; nothing is written if any row fails.

    Raises:
        HTTPException: If the years are invalid, to_year already has records,
            or from_year has no active records
    """
    _validate_years(db, from_year, to_year)
    active = _active_rows(db, from_year, today)
    if not active:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"No active employee balances found for year {from_year}"
        )
    preserved_before = count_balance_rows(db, from_year)

    preview = []
    try:
        for row, record in active:
            summary = _preview_row(record, from_year)
            preview.append(summary)
            db.add(LeaveBalanceRecord(
                employee_email=row.employee_email,
                employee_name=row.employee_name,
                department=row.department,
                manager=row.manager,
                year=to_year,
                start_date=row.start_date,
                contract_termination_date=row.contract_termination_date,
                brought_forward=Decimal(str(summary["new_brought_forward"])),
                annual_leave_adjustments=Decimal("0"),
                forfeited=Decimal("0"),
                annual_used=Decimal("0"),
                sick_used=row.sick_used,
                maternity_used=Decimal("0"),
                parental_used=Decimal("0"),
                family_used=Decimal("0"),
                adoption_used=Decimal("0"),
                study_used=Decimal("0"),
                wellness_used=Decimal("0"),
                comment=f"Rolled over from {from_year}",
            ))
        db.flush()
        preserved_after = count_balance_rows(db, from_year)
        if preserved_after != preserved_before:
            raise RuntimeError(
                f"Rollover modified {from_year} records: {preserved_before} before, {preserved_after} after"
            )
        db.commit()
    except Exception:
        db.rollback()
        logger.error("Year rollover %s -> %s failed, rolled back", from_year, to_year, exc_info=True)
        raise

    created = count_balance_rows(db, to_year)
    logger.info(
        "Year rollover %s -> %s: %s employees processed, %s records created",
        from_year, to_year, len(preview), created
    )
    return {
        "from_year": from_year,
        "to_year": to_year,
        "employees_processed": len(preview),
        "records_preserved": preserved_before,
        "records_created": created,
        "rows": preview,
    }
