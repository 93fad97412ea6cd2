"""
Forfeiture service - brought-forward days at risk at the 31 July deadline.

Brought-forward days are assumed to be consumed before newly accrued days, so
any annual leave used this cycle first reduces the amount at risk.
"""
import logging
import math
from datetime import date
from typing import Optional

from leavedesk.core.constants import forfeit_deadline_for
from leavedesk.utils.datetime_utils import DateLike, to_date

logger = logging.getLogger(__name__)


def _amount(value, name: str) -> float:
    try:
        amount = float(value or 0)
    except (TypeError, ValueError):
        logger.warning("Invalid %s %r in forfeiture check, using 0", name, value)
        return 0.0
    if not math.isfinite(amount):
        logger.warning("Non-finite %s %r in forfeiture check, using 0", name, value)
        return 0.0
    return max(0.0, amount)


def days_to_forfeit(brought_forward, annual_used) -> float:
    """Brought-forward days that lapse if not used by the deadline; never negative, never above brought_forward."""
    bf = _amount(brought_forward, "brought_forward")
    used = _amount(annual_used, "annual_used")
    return max(0.0, bf - min(bf, used))


def forfeiture_deadline(year: int) -> date:
    return forfeit_deadline_for(year)


def should_warn_forfeiture(brought_forward, annual_used, today: Optional[DateLike] = None) -> bool:
    """Warn from 1 January through the deadline, and only while days are at risk."""
    current = to_date(today) or date.today()
    if days_to_forfeit(brought_forward, annual_used) == 0:
        return False
    return date(current.year, 1, 1) <= current <= forfeiture_deadline(current.year)
