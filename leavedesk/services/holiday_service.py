"""
Holiday calendar service - read access to the holiday store
"""
from datetime import date
from typing import List, Optional, Tuple
from sqlalchemy.orm import Session
from sqlalchemy import and_
from leavedesk.models.holiday import Holiday, HolidayType, OfficeStatus


def list_holidays(
    db: Session,
    year: Optional[int] = None,
    closed_only: bool = False
) -> List[Holiday]:
    """
    List holidays

    Args:
        db: Database session
        year: Optional year filter
        closed_only: If True, return only holidays on which the office is closed

    Returns:
        List of Holiday instances ordered by date
    """
    query = db.query(Holiday)

    if year:
        query = query.filter(
            Holiday.date >= date(year, 1, 1),
            Holiday.date <= date(year, 12, 31)
        )

    if closed_only:
        query = query.filter(Holiday.office_status == OfficeStatus.CLOSED)

    return query.order_by(Holiday.date).all()


def get_closed_holidays_in_range(
    db: Session,
    from_date: date,
    to_date: date
) -> Tuple[List[date], List[date]]:
    """
    Get closed-office holiday dates within the given date range

    Holidays where the office stays open are working days and are left out.

    Args:
        db: Database session
        from_date: Start date (inclusive)
        to_date: End date (inclusive)

    Returns:
        Tuple of (public holiday dates, company holiday dates)
    """
    rows = db.query(Holiday.date, Holiday.type).filter(
        and_(
            Holiday.office_status == OfficeStatus.CLOSED,
            Holiday.date >= from_date,
            Holiday.date <= to_date
        )
    ).order_by(Holiday.date).all()

    public = [d for (d, kind) in rows if kind == HolidayType.PUBLIC]
    company = [d for (d, kind) in rows if kind == HolidayType.COMPANY]
    return public, company
