"""
Working-days calculator.

Counts the calendar days of a leave range that consume leave: weekends and
closed-office public/company holidays are excluded, holidays are matched by
calendar date only.
"""
from datetime import date, timedelta
from typing import Iterable, List, Optional, Set

from leavedesk.utils.datetime_utils import DateLike, to_date

SATURDAY = 5
SUNDAY = 6


def is_weekend(check_date: date) -> bool:
    """Saturday or Sunday"""
    return check_date.weekday() in (SATURDAY, SUNDAY)


def _holiday_dates(holidays: Optional[Iterable[DateLike]]) -> Set[date]:
    if not holidays:
        return set()
    dates = set()
    for h in holidays:
        d = to_date(h)
        if d is not None:
            dates.add(d)
    return dates


def working_days(
    start: DateLike,
    end: DateLike,
    public_holidays: Optional[Iterable[DateLike]] = None,
    company_holidays: Optional[Iterable[DateLike]] = None,
    is_half_day: bool = False,
) -> float:
    """
    Number of working days consumed by a leave request.

    Args:
        start: First day of leave (inclusive)
        end: Last day of leave (inclusive)
        public_holidays: Public holiday dates; time of day is ignored
        company_holidays: Company holiday dates; time of day is ignored
        is_half_day: Each counted day contributes 0.5 instead of 1

    Returns:
        Non-negative day count; 0 when start is after end or either bound is missing
    """
    start_date = to_date(start)
    end_date = to_date(end)
    if start_date is None or end_date is None or start_date > end_date:
        return 0.0

    holidays = _holiday_dates(public_holidays) | _holiday_dates(company_holidays)
    per_day = 0.5 if is_half_day else 1.0

    total = 0.0
    # Offsets from start so the range may end on date.max
    for offset in range((end_date - start_date).days + 1):
        day = start_date + timedelta(days=offset)
        if not is_weekend(day) and day not in holidays:
            total += per_day
    return total


def excluded_holidays(
    start: DateLike,
    end: DateLike,
    public_holidays: Optional[Iterable[DateLike]] = None,
    company_holidays: Optional[Iterable[DateLike]] = None,
) -> List[date]:
    """Weekday holidays inside the range, i.e. the days the holiday calendar removed from the count."""
    start_date = to_date(start)
    end_date = to_date(end)
    if start_date is None or end_date is None or start_date > end_date:
        return []
    holidays = _holiday_dates(public_holidays) | _holiday_dates(company_holidays)
    return sorted(
        d for d in holidays
        if start_date <= d <= end_date and not is_weekend(d)
    )
