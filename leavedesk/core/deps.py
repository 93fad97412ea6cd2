"""
Dependencies for FastAPI endpoints
"""
from datetime import date
from typing import Generator

from leavedesk.db.session import SessionLocal
from leavedesk.utils.datetime_utils import today_local


def get_db() -> Generator:
    """Dependency for getting database session"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_today() -> date:
    """
    Current calendar date in the leave calendar's timezone.

    Resolved per request so eligibility and accrual checks are never cached;
    tests override this dependency to pin the date.
    """
    return today_local()
