"""
Balance service - current available balance per leave type.

- Annual: accrued-to-date + brought forward + adjustments - used - forfeited.
- Sick, maternity, parental, family, adoption, study, wellness:
  fixed allocation - used (no monthly accrual, no brought forward).
- Display values are rounded to one decimal and never negative.
"""
import logging
from datetime import date
from typing import Dict, Optional

from leavedesk.core.constants import (
    EMPLOYEE_STATUS_ACTIVE,
    EMPLOYEE_STATUS_INACTIVE,
    FIXED_ALLOCATIONS,
    LEAVE_UNITS,
)
from leavedesk.models.leave import LeaveType
from leavedesk.schemas.balance import EmployeeBalanceRecord
from leavedesk.services.accrual_service import accrued_to_date, termination_accrual
from leavedesk.utils.datetime_utils import DateLike, to_date

logger = logging.getLogger(__name__)

BALANCE_TOLERANCE = 1e-9


def _require_record(record: Optional[EmployeeBalanceRecord]) -> EmployeeBalanceRecord:
    if record is None:
        raise ValueError("A balance record is required to compute leave balances")
    if not isinstance(record, EmployeeBalanceRecord):
        # ORM rows and plain objects with the same attribute names are accepted
        record = EmployeeBalanceRecord.model_validate(record)
    return record


def _display(value: float, record: EmployeeBalanceRecord, leave_type: str) -> float:
    rounded = round(value, 1)
    if rounded < 0:
        logger.warning(
            "Negative %s balance %.1f for %s clamped to 0",
            leave_type, rounded, record.employee_email,
        )
        return 0.0
    return rounded + 0.0


def fixed_allocation(leave_type) -> float:
    """Statutory/contractual allocation for a non-accruing type; 0 for annual and unknown keys."""
    lt = LeaveType.parse(leave_type)
    if lt is None:
        return 0.0
    return float(FIXED_ALLOCATIONS.get(lt.value, 0))


def annual_allocation(
    record: EmployeeBalanceRecord,
    as_of: date,
    start_date: Optional[DateLike] = None,
) -> float:
    hire_date = to_date(start_date) or record.start_date
    return accrued_to_date(as_of, hire_date, record.contract_termination_date)


def _annual_raw(record: EmployeeBalanceRecord, accrued: float) -> float:
    return (
        accrued
        + record.brought_forward
        + record.annual_leave_adjustments
        - record.annual_used
        - record.forfeited
    )


def _raw_balance(
    record: EmployeeBalanceRecord,
    lt: LeaveType,
    as_of: date,
    start_date: Optional[DateLike] = None,
) -> float:
    if lt == LeaveType.ANNUAL:
        return _annual_raw(record, annual_allocation(record, as_of, start_date))
    return fixed_allocation(lt) - record.used_for(lt.value)


def current_balance(
    record: EmployeeBalanceRecord,
    leave_type,
    start_date: Optional[DateLike] = None,
    as_of: Optional[DateLike] = None,
) -> float:
    """
    Current available balance for one leave type.

    Args:
        record: Employee balance record
        leave_type: Leave-type key (case-insensitive)
        start_date: Hire date override for accrual; defaults to record.start_date
        as_of: Date the balance is evaluated at; defaults to today

    Returns:
        Available amount in the type's unit, never negative

    Raises:
        ValueError: If record is None
    """
    record = _require_record(record)
    as_of_date = to_date(as_of) or date.today()

    lt = LeaveType.parse(leave_type)
    if lt is None:
        logger.warning(
            "Unknown leave type %r requested for %s, reporting zero balance",
            leave_type, record.employee_email,
        )
        return 0.0

    return _display(_raw_balance(record, lt, as_of_date, start_date), record, lt.value)


def all_leave_balances(
    record: EmployeeBalanceRecord,
    as_of: Optional[DateLike] = None,
    start_date: Optional[DateLike] = None,
) -> Dict[str, float]:
    """Current balance for each of the eight leave types, keyed by leave-type value"""
    record = _require_record(record)
    return {
        lt.value: current_balance(record, lt, start_date=start_date, as_of=as_of)
        for lt in LeaveType
    }


def available_balance(
    record: EmployeeBalanceRecord,
    leave_type,
    as_of: Optional[DateLike] = None,
) -> float:
    """Balance at full precision clamped at 0, for validating requests. 0 for unknown types."""
    record = _require_record(record)
    lt = LeaveType.parse(leave_type)
    if lt is None:
        return 0.0
    return max(0.0, _raw_balance(record, lt, to_date(as_of) or date.today()))


def has_sufficient_balance(
    record: EmployeeBalanceRecord,
    leave_type,
    requested: float,
    as_of: Optional[DateLike] = None,
) -> bool:
    """
    True if the requested amount (in the type's unit) fits the current balance.

    Compared against the unrounded balance; display rounding must not let a
    request overdraw. Unknown types never fit.
    """
    if LeaveType.parse(leave_type) is None:
        return False
    # Tolerance absorbs float noise from the 20/12 monthly rate
    return available_balance(record, leave_type, as_of=as_of) + BALANCE_TOLERANCE >= float(requested)


def has_termination_date_passed(termination_date: Optional[DateLike], today: DateLike) -> bool:
    """A termination date takes effect at the end of that day, so today counts as passed."""
    termination = to_date(termination_date)
    if termination is None:
        return False
    return termination <= (to_date(today) or date.today())


def employee_status(termination_date: Optional[DateLike], today: DateLike) -> str:
    if has_termination_date_passed(termination_date, today):
        return EMPLOYEE_STATUS_INACTIVE
    return EMPLOYEE_STATUS_ACTIVE


def termination_balance(record: EmployeeBalanceRecord) -> Optional[float]:
    """
    Annual balance payable at contract termination, with the termination
    month accrued pro-rata by day. None when the record has no termination date.

    For a record of another leave year than the termination, that year's own
    accrual applies: nothing after an earlier termination, the full year
    before a later one.
    """
    record = _require_record(record)
    termination = record.contract_termination_date
    if termination is None:
        return None
    if record.year is not None and termination.year != record.year:
        accrued = accrued_to_date(date(record.year, 12, 31), record.start_date, termination)
    else:
        accrued = termination_accrual(termination, record.start_date)
    return _display(_annual_raw(record, accrued), record, LeaveType.ANNUAL.value)


def rollover_brought_forward(record: EmployeeBalanceRecord, year: int) -> float:
    """Brought-forward days for the year after `year`: the annual balance left at 31 December."""
    record = _require_record(record)
    return current_balance(record, LeaveType.ANNUAL, as_of=date(year, 12, 31))


def balance_as_of(year: int, today: date) -> date:
    """Evaluate a year's balance today, or at the nearest edge of that leave year."""
    return min(max(today, date(year, 1, 1)), date(year, 12, 31))


def balance_summary(record: EmployeeBalanceRecord, today: date, as_of: Optional[date] = None) -> Dict:
    """
    Dashboard view of a record: every type's allocation, usage and availability.

    Args:
        record: Employee balance record
        today: Current date (drives employee status)
        as_of: Evaluation date, defaults to today; clamped into the record's year
    """
    record = _require_record(record)
    year = record.year or today.year
    as_of = balance_as_of(year, as_of or today)

    accrued = annual_allocation(record, as_of)
    balances = []
    for lt in LeaveType:
        if lt == LeaveType.ANNUAL:
            allocated = accrued
            used = record.annual_used
        else:
            allocated = fixed_allocation(lt)
            used = record.used_for(lt.value)
        balances.append({
            "leave_type": lt.value,
            "unit": LEAVE_UNITS[lt.value],
            "allocated": round(allocated, 1),
            "used": used,
            "available": current_balance(record, lt, as_of=as_of),
        })

    status = employee_status(record.contract_termination_date, today)
    return {
        "employee_email": record.employee_email,
        "employee_name": record.employee_name,
        "year": year,
        "as_of": as_of,
        "status": status,
        "accrued_to_date": round(accrued, 1),
        "brought_forward": record.brought_forward,
        "annual_leave_adjustments": record.annual_leave_adjustments,
        "balances": balances,
        "termination_balance": termination_balance(record) if status == EMPLOYEE_STATUS_INACTIVE else None,
    }
