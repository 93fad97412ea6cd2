"""
Leave balance record model: one row per employee per leave year.
"""
from sqlalchemy import Column, Integer, Date, DateTime, String, Text, Numeric, UniqueConstraint
from sqlalchemy.sql import text
from leavedesk.db.base import Base


class LeaveBalanceRecord(Base):
    __tablename__ = "leave_balances"

    id = Column(Integer, primary_key=True, index=True)
    employee_email = Column(String(255), nullable=False, index=True)
    employee_name = Column(String(255), nullable=True)
    department = Column(String(255), nullable=True)
    manager = Column(String(255), nullable=True)
    year = Column(Integer, nullable=False, index=True)
    start_date = Column(Date, nullable=True)  # hire / contract start
    contract_termination_date = Column(Date, nullable=True)

    # Annual leave (days)
    brought_forward = Column(Numeric(6, 2), nullable=False, default=0)
    annual_leave_adjustments = Column(Numeric(6, 2), nullable=False, default=0)  # signed manual correction
    forfeited = Column(Numeric(6, 2), nullable=False, default=0)
    annual_used = Column(Numeric(6, 2), nullable=False, default=0)

    # Fixed-allocation types
    sick_used = Column(Numeric(6, 2), nullable=False, default=0)  # days
    maternity_used = Column(Numeric(6, 2), nullable=False, default=0)  # months
    parental_used = Column(Numeric(6, 2), nullable=False, default=0)  # weeks
    family_used = Column(Numeric(6, 2), nullable=False, default=0)  # days
    adoption_used = Column(Numeric(6, 2), nullable=False, default=0)  # weeks
    study_used = Column(Numeric(6, 2), nullable=False, default=0)  # days
    wellness_used = Column(Numeric(6, 2), nullable=False, default=0)  # days

    comment = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=text("CURRENT_TIMESTAMP"), nullable=False)
    updated_at = Column(
        DateTime(timezone=True),
        server_default=text("CURRENT_TIMESTAMP"),
        onupdate=text("CURRENT_TIMESTAMP"),
        nullable=False,
    )

    __table_args__ = (
        UniqueConstraint("employee_email", "year", name="uq_leave_balances_email_year"),
    )
