"""
Leave balance schemas
"""
import logging
import math
from datetime import date
from typing import List, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from leavedesk.utils.datetime_utils import to_date

logger = logging.getLogger(__name__)

_NUMERIC_FIELDS = (
    "brought_forward",
    "annual_leave_adjustments",
    "forfeited",
    "annual_used",
    "sick_used",
    "maternity_used",
    "parental_used",
    "family_used",
    "adoption_used",
    "study_used",
    "wellness_used",
)


class EmployeeBalanceRecord(BaseModel):
    """
    Per-employee, per-year balance record as consumed by the balance engine.

    Built from a LeaveBalanceRecord row (from_attributes) or a JSON payload.
    Missing or non-numeric amounts read as 0; bad dates read as absent.
    """
    employee_email: str
    employee_name: Optional[str] = None
    department: Optional[str] = None
    manager: Optional[str] = None
    year: Optional[int] = None
    start_date: Optional[date] = None
    contract_termination_date: Optional[date] = None

    brought_forward: float = 0.0
    annual_leave_adjustments: float = 0.0
    forfeited: float = 0.0
    annual_used: float = 0.0
    sick_used: float = 0.0
    maternity_used: float = 0.0
    parental_used: float = 0.0
    family_used: float = 0.0
    adoption_used: float = 0.0
    study_used: float = 0.0
    wellness_used: float = Field(
        default=0.0,
        validation_alias=AliasChoices("wellness_used", "mentalhealth_used"),
    )

    model_config = ConfigDict(from_attributes=True, populate_by_name=True, frozen=True)

    @field_validator(*_NUMERIC_FIELDS, mode="before")
    @classmethod
    def _coerce_amount(cls, v, info):
        if v is None or v == "":
            return 0.0
        try:
            amount = float(v)
        except (TypeError, ValueError):
            logger.warning("Non-numeric %s value %r on balance record, using 0", info.field_name, v)
            return 0.0
        if not math.isfinite(amount):
            logger.warning("Non-finite %s value %r on balance record, using 0", info.field_name, v)
            return 0.0
        return amount

    @field_validator("start_date", "contract_termination_date", mode="before")
    @classmethod
    def _coerce_date(cls, v):
        return to_date(v)

    def used_for(self, leave_type: str) -> float:
        """Used amount for a leave-type key; 0 for unknown keys."""
        return float(getattr(self, f"{leave_type}_used", 0.0) or 0.0)


class LeaveBalanceOut(BaseModel):
    leave_type: str
    unit: str
    allocated: float
    used: float
    available: float


class BalanceSummaryOut(BaseModel):
    """Dashboard view of one employee's balances for a year."""
    employee_email: str
    employee_name: Optional[str] = None
    year: int
    as_of: date
    status: str
    accrued_to_date: float
    brought_forward: float
    annual_leave_adjustments: float
    balances: List[LeaveBalanceOut]
    termination_balance: Optional[float] = None


class ForfeitureOut(BaseModel):
    employee_email: str
    year: int
    brought_forward: float
    annual_used: float
    days_to_forfeit: float
    deadline: date
    show_warning: bool


class RolloverRequest(BaseModel):
    from_year: int = Field(..., description="Leave year being closed (e.g., 2025)")
    to_year: int = Field(..., description="Leave year to create (e.g., 2026)")

    @field_validator("to_year")
    @classmethod
    def _to_after_from(cls, v, info):
        from_year = info.data.get("from_year")
        if from_year is not None and v <= from_year:
            raise ValueError("to_year must be after from_year")
        return v


class RolloverPreviewRow(BaseModel):
    employee_email: str
    employee_name: Optional[str] = None
    brought_forward: float
    accrued: float
    annual_used: float
    forfeited: float
    annual_leave_adjustments: float
    new_brought_forward: float


class RolloverOut(BaseModel):
    from_year: int
    to_year: int
    employees_processed: int
    records_preserved: int
    records_created: int
    rows: List[RolloverPreviewRow]

