"""
Holiday calendar model
"""
import enum
from sqlalchemy import Column, Integer, Date, DateTime, String, Enum as SQLEnum, UniqueConstraint
from sqlalchemy.sql import func
from leavedesk.db.base import Base


class HolidayType(str, enum.Enum):
    PUBLIC = "public"
    COMPANY = "company"


class OfficeStatus(str, enum.Enum):
    OPEN = "open"
    CLOSED = "closed"


class Holiday(Base):
    __tablename__ = "company_holidays"

    id = Column(Integer, primary_key=True, index=True)
    date = Column(Date, nullable=False, index=True)
    name = Column(String(255), nullable=False)
    type = Column(SQLEnum(HolidayType), nullable=False, default=HolidayType.PUBLIC)
    office_status = Column(SQLEnum(OfficeStatus), nullable=False, default=OfficeStatus.CLOSED)
    created_at = Column(DateTime(timezone=True), server_default=func.current_timestamp(), nullable=False)

    __table_args__ = (
        UniqueConstraint("date", "type", name="uq_holiday_date_type"),
    )
