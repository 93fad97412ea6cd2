"""
Date helpers for the leave calendar.
- Leave rules compare calendar dates only; time of day is always discarded.
- "Today" is resolved in the configured leave-calendar timezone (SAST by default).
"""
import logging
from datetime import date, datetime, timezone
from typing import Optional, Union
from zoneinfo import ZoneInfo

logger = logging.getLogger(__name__)

UTC = timezone.utc

DateLike = Union[date, datetime, str]


def now_utc() -> datetime:
    """Current time in UTC (timezone-aware). Use for created_at/modified_at."""
    return datetime.now(UTC)


def today_local(tz_name: Optional[str] = None) -> date:
    """Today's date in the leave-calendar timezone (settings.TZ unless given)."""
    if tz_name is None:
        from leavedesk.core.config import settings
        tz_name = settings.TZ
    return datetime.now(ZoneInfo(tz_name)).date()


def to_date(value: Optional[DateLike]) -> Optional[date]:
    """
    Normalize a date-like value to a calendar date.

    datetime -> its date part (time of day dropped); ISO string -> parsed date
    (a trailing time component is accepted and dropped). Returns None for None,
    empty or unparseable input; never raises.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            return date.fromisoformat(text[:10])
        except ValueError:
            logger.warning("Unparseable date value %r, treating as absent", value)
            return None
    logger.warning("Unsupported date value of type %s, treating as absent", type(value).__name__)
    return None


def last_day_of_month(year: int, month: int) -> int:
    if month == 12:
        return 31
    return (date(year, month + 1, 1) - date(year, month, 1)).days


def iso_8601_utc(dt: Optional[datetime]) -> Optional[str]:
    """ISO-8601 with Z for UTC."""
    if dt is None:
        return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC)
    s = dt.astimezone(UTC).isoformat()
    if s.endswith("+00:00"):
        s = s[:-6] + "Z"
    return s
