"""
Accrual service - monthly pro-rata crediting of annual leave.

Annual leave accrues at 20/12 days per month of the leave cycle (calendar
year). Accrual starts in the hire month for employees hired during the cycle
and stops at the contract termination month.
"""
import logging
from datetime import date
from typing import Optional

from leavedesk.core.constants import ANNUAL_LEAVE_DAYS_PER_YEAR, MONTHS_PER_CYCLE
from leavedesk.utils.datetime_utils import DateLike, last_day_of_month, to_date

logger = logging.getLogger(__name__)

MONTHLY_ACCRUAL_RATE = ANNUAL_LEAVE_DAYS_PER_YEAR / MONTHS_PER_CYCLE


def _clamp_month(reference_month) -> int:
    try:
        month = int(reference_month)
    except (TypeError, ValueError):
        logger.warning("Invalid reference month %r, accruing nothing", reference_month)
        return 0
    return max(0, min(MONTHS_PER_CYCLE, month))


def _days(months: int) -> float:
    # Multiply before dividing so a full cycle is exactly 20
    return months * ANNUAL_LEAVE_DAYS_PER_YEAR / MONTHS_PER_CYCLE


def monthly_accrual(
    reference_month: int,
    contract_termination_date: Optional[DateLike] = None,
    cycle_year: Optional[int] = None,
) -> float:
    """
    Annual-leave days accrued by the end of reference_month.

    A termination date earlier than the reference month caps accrual at the
    termination month. With cycle_year given, a termination in an earlier year
    accrues nothing and one in a later year does not cap. Never raises.
    """
    month = _clamp_month(reference_month)
    termination = to_date(contract_termination_date)

    if termination is not None:
        if cycle_year is not None and termination.year != cycle_year:
            if termination.year < cycle_year:
                return 0.0
        elif termination.month < month:
            month = termination.month

    return _days(month)


def accrued_months(
    as_of: date,
    start_date: Optional[DateLike] = None,
    contract_termination_date: Optional[DateLike] = None,
) -> int:
    """Months of the as_of cycle that count towards accrual."""
    year = as_of.year
    hired = to_date(start_date)
    if hired is not None and hired > as_of:
        return 0

    last_month = as_of.month
    termination = to_date(contract_termination_date)
    if termination is not None:
        if termination.year < year:
            return 0
        if termination.year == year:
            last_month = min(last_month, termination.month)

    first_month = hired.month if hired is not None and hired.year == year else 1
    return max(0, last_month - first_month + 1)


def accrued_to_date(
    as_of: DateLike,
    start_date: Optional[DateLike] = None,
    contract_termination_date: Optional[DateLike] = None,
) -> float:
    """
    Annual-leave allocation an employee may draw on as of a date.

    Raises:
        ValueError: If as_of is missing or not a date
    """
    as_of_date = to_date(as_of)
    if as_of_date is None:
        raise ValueError("as_of date is required to compute accrued leave")
    return _days(accrued_months(as_of_date, start_date, contract_termination_date))


def termination_accrual(
    termination_date: DateLike,
    start_date: Optional[DateLike] = None,
) -> float:
    """
    Accrual up to an exact termination date: full months before the
    termination month plus a daily pro-rata share of the termination month.
    """
    termination = to_date(termination_date)
    if termination is None:
        return 0.0

    hired = to_date(start_date)
    if hired is not None and hired > termination:
        return 0.0
    first_month = hired.month if hired is not None and hired.year == termination.year else 1

    completed_months = max(0, termination.month - first_month)
    days_in_month = last_day_of_month(termination.year, termination.month)
    partial = MONTHLY_ACCRUAL_RATE * termination.day / days_in_month
    return min(float(ANNUAL_LEAVE_DAYS_PER_YEAR), _days(completed_months) + partial)
