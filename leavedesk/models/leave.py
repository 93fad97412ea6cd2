"""
Leave models
"""
from sqlalchemy import (
    Column,
    Integer,
    Date,
    DateTime,
    String,
    Text,
    Numeric,
    Enum as SQLEnum,
    Boolean,
    Index,
    CheckConstraint,
)
from sqlalchemy.sql import text
import enum
from leavedesk.db.base import Base


class LeaveType(str, enum.Enum):
    ANNUAL = "annual"
    SICK = "sick"
    MATERNITY = "maternity"
    PARENTAL = "parental"
    FAMILY = "family"
    ADOPTION = "adoption"
    STUDY = "study"
    WELLNESS = "wellness"

    @classmethod
    def parse(cls, value):
        """Case-insensitive lookup; returns None for unknown keys."""
        if isinstance(value, cls):
            return value
        if value is None:
            return None
        key = str(value).strip().lower()
        # Older records call wellness leave "mental health"
        if key in ("mentalhealth", "mental_health"):
            key = cls.WELLNESS.value
        try:
            return cls(key)
        except ValueError:
            return None


class LeaveStatus(str, enum.Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
    CANCELLED = "cancelled"


class LeaveRequest(Base):
    __tablename__ = "leave_requests"

    id = Column(Integer, primary_key=True, index=True)
    requester = Column(String(255), nullable=False, index=True)  # employee email
    approver = Column(String(255), nullable=True)
    title = Column(String(255), nullable=True)
    detail = Column(Text, nullable=True)
    leave_type = Column(SQLEnum(LeaveType), nullable=False)
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=False)
    is_half_day = Column(Boolean, nullable=False, default=False)
    working_days = Column(Numeric(5, 1), nullable=False)  # recomputed server-side, 0.5 steps
    status = Column(SQLEnum(LeaveStatus), nullable=False, default=LeaveStatus.PENDING)
    created_at = Column(DateTime(timezone=True), server_default=text("CURRENT_TIMESTAMP"), nullable=False)
    modified_at = Column(
        DateTime(timezone=True),
        server_default=text("CURRENT_TIMESTAMP"),
        onupdate=text("CURRENT_TIMESTAMP"),
        nullable=False,
    )

    __table_args__ = (
        Index("ix_leave_requests_requester_dates", "requester", "start_date", "end_date"),
        CheckConstraint("start_date <= end_date", name="check_start_date_le_end_date"),
    )
