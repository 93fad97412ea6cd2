"""
Tests for the balance calculator
"""
import logging
from datetime import date
from decimal import Decimal
from types import SimpleNamespace

import pytest

from leavedesk.models.leave import LeaveType
from leavedesk.schemas.balance import EmployeeBalanceRecord
from leavedesk.services.balance_service import (
    all_leave_balances,
    available_balance,
    balance_as_of,
    balance_summary,
    current_balance,
    employee_status,
    fixed_allocation,
    has_sufficient_balance,
    has_termination_date_passed,
    rollover_brought_forward,
    termination_balance,
)

AS_OF = date(2026, 3, 18)


def make_record(**overrides):
    data = {
        "employee_email": "thandi@example.co.za",
        "employee_name": "Thandi Mokoena",
        "year": 2026,
        "start_date": date(2020, 1, 6),
        "brought_forward": 5,
        "annual_leave_adjustments": 1,
        "annual_used": 3,
        "sick_used": 4,
    }
    data.update(overrides)
    return EmployeeBalanceRecord(**data)


def test_annual_balance_adds_accrual_brought_forward_and_adjustments():
    # 3 months accrued (5.0) + 5 bf + 1 adjustment - 3 used
    assert current_balance(make_record(), "annual", as_of=AS_OF) == 8.0


def test_negative_adjustment_reduces_annual_balance():
    record = make_record(annual_leave_adjustments=-2)
    assert current_balance(record, "annual", as_of=AS_OF) == 5.0


def test_forfeited_days_are_not_available():
    record = make_record(forfeited=2)
    assert current_balance(record, "annual", as_of=AS_OF) == 6.0


def test_sick_balance_is_fixed_allocation_minus_used():
    assert current_balance(make_record(), "sick", as_of=AS_OF) == 32.0


@pytest.mark.parametrize("leave_type,expected", [
    ("maternity", 3.0),
    ("parental", 4.0),
    ("family", 3.0),
    ("adoption", 4.0),
    ("study", 6.0),
    ("wellness", 2.0),
])
def test_untouched_fixed_types_report_full_allocation(leave_type, expected):
    assert current_balance(make_record(), leave_type, as_of=AS_OF) == expected


def test_leave_type_is_case_insensitive():
    assert current_balance(make_record(), "SICK", as_of=AS_OF) == 32.0
    assert current_balance(make_record(), LeaveType.SICK, as_of=AS_OF) == 32.0


def test_balance_is_clamped_at_zero(caplog):
    record = make_record(sick_used=40)
    with caplog.at_level(logging.WARNING):
        assert current_balance(record, "sick", as_of=AS_OF) == 0.0
    assert "clamped" in caplog.text


def test_overdrawn_annual_balance_is_zero():
    record = make_record(annual_used=30)
    assert current_balance(record, "annual", as_of=AS_OF) == 0.0


def test_balance_is_rounded_to_one_decimal():
    # Hired in February: 2 months accrued = 3.333...
    record = make_record(start_date=date(2026, 2, 1), brought_forward=0, annual_leave_adjustments=0, annual_used=0)
    assert current_balance(record, "annual", as_of=AS_OF) == 3.3


def test_unknown_leave_type_is_zero_and_logged(caplog):
    with caplog.at_level(logging.WARNING):
        assert current_balance(make_record(), "sabbatical", as_of=AS_OF) == 0.0
    assert "sabbatical" in caplog.text


def test_missing_record_raises():
    with pytest.raises(ValueError):
        current_balance(None, "annual", as_of=AS_OF)


def test_start_date_override_replaces_record_hire_date():
    record = make_record()
    # Hired in March 2026: one month accrued (1.67) + 5 + 1 - 3
    assert current_balance(record, "annual", start_date=date(2026, 3, 1), as_of=AS_OF) == 4.7


def test_hire_after_as_of_accrues_nothing():
    record = make_record(start_date=date(2026, 6, 1))
    assert current_balance(record, "annual", as_of=AS_OF) == 3.0


def test_as_of_accepts_iso_string():
    assert current_balance(make_record(), "annual", as_of="2026-03-18T09:00:00") == 8.0


def test_orm_like_object_is_accepted():
    row = SimpleNamespace(
        employee_email="sipho@example.co.za",
        employee_name=None,
        department=None,
        manager=None,
        year=2026,
        start_date=date(2019, 4, 1),
        contract_termination_date=None,
        brought_forward=Decimal("2.50"),
        annual_leave_adjustments=Decimal("0"),
        forfeited=Decimal("0"),
        annual_used=Decimal("1"),
        sick_used=Decimal("0"),
        maternity_used=Decimal("0"),
        parental_used=Decimal("0"),
        family_used=Decimal("1"),
        adoption_used=Decimal("0"),
        study_used=Decimal("0"),
        wellness_used=Decimal("0"),
    )
    assert current_balance(row, "annual", as_of=AS_OF) == 6.5
    assert current_balance(row, "family", as_of=AS_OF) == 2.0


def test_legacy_mentalhealth_used_field_feeds_wellness():
    record = EmployeeBalanceRecord.model_validate({
        "employee_email": "lerato@example.co.za",
        "mentalhealth_used": 1,
    })
    assert record.wellness_used == 1.0
    assert current_balance(record, "wellness", as_of=AS_OF) == 1.0
    assert current_balance(record, "mentalhealth", as_of=AS_OF) == 1.0


def test_non_numeric_amounts_read_as_zero(caplog):
    with caplog.at_level(logging.WARNING):
        record = make_record(sick_used="n/a", brought_forward=None)
    assert record.sick_used == 0.0
    assert record.brought_forward == 0.0
    assert "sick_used" in caplog.text


def test_all_leave_balances_covers_every_type():
    balances = all_leave_balances(make_record(), as_of=AS_OF)
    assert set(balances) == {lt.value for lt in LeaveType}
    assert balances["annual"] == 8.0
    assert balances["sick"] == 32.0


def test_fixed_allocation():
    assert fixed_allocation("sick") == 36
    assert fixed_allocation("maternity") == 3
    assert fixed_allocation("annual") == 0
    assert fixed_allocation("unknown") == 0


def test_has_sufficient_balance():
    record = make_record()
    assert has_sufficient_balance(record, "annual", 8, as_of=AS_OF)
    assert not has_sufficient_balance(record, "annual", 8.5, as_of=AS_OF)
    assert not has_sufficient_balance(record, "sabbatical", 0, as_of=AS_OF)


def test_termination_date_passes_at_end_of_day():
    assert has_termination_date_passed(date(2026, 3, 18), AS_OF)
    assert not has_termination_date_passed(date(2026, 3, 19), AS_OF)
    assert not has_termination_date_passed(None, AS_OF)


def test_employee_status():
    assert employee_status(None, AS_OF) == "Active"
    assert employee_status(date(2026, 6, 30), AS_OF) == "Active"
    assert employee_status(date(2026, 2, 28), AS_OF) == "Inactive"


def test_termination_balance_prorates_final_month():
    record = make_record(contract_termination_date=date(2026, 4, 15))
    # 3 full months (5.0) + half of April (0.83) + 5 + 1 - 3
    assert termination_balance(record) == 8.8


def test_termination_balance_without_termination_date_is_none():
    assert termination_balance(make_record()) is None


def test_termination_caps_month_granular_accrual():
    record = make_record(contract_termination_date=date(2026, 2, 20))
    assert current_balance(record, "annual", as_of=date(2026, 6, 30)) == 6.3


def test_rollover_brought_forward_uses_year_end_balance():
    # Full 20 accrued + 5 + 1 - 3
    assert rollover_brought_forward(make_record(), 2026) == 23.0


def test_rollover_brought_forward_never_negative():
    assert rollover_brought_forward(make_record(annual_used=40), 2026) == 0.0


def test_balance_as_of_clamps_into_leave_year():
    assert balance_as_of(2026, AS_OF) == AS_OF
    assert balance_as_of(2025, AS_OF) == date(2025, 12, 31)
    assert balance_as_of(2027, AS_OF) == date(2027, 1, 1)


def test_balance_summary_for_active_employee():
    summary = balance_summary(make_record(), AS_OF)
    assert summary["status"] == "Active"
    assert summary["as_of"] == AS_OF
    assert summary["accrued_to_date"] == 5.0
    assert summary["termination_balance"] is None
    annual = next(b for b in summary["balances"] if b["leave_type"] == "annual")
    assert annual == {"leave_type": "annual", "unit": "days", "allocated": 5.0, "used": 3.0, "available": 8.0}
    maternity = next(b for b in summary["balances"] if b["leave_type"] == "maternity")
    assert maternity["unit"] == "months"


def test_balance_summary_for_terminated_employee_includes_payout():
    record = make_record(contract_termination_date=date(2026, 2, 28))
    summary = balance_summary(record, AS_OF)
    assert summary["status"] == "Inactive"
    # January + all of February
    assert summary["termination_balance"] == 6.3


def test_sufficiency_uses_unrounded_balance():
    # January accrual 1.667 - 0.2 adjustment - 1 used = 0.467, displayed as 0.5
    record = make_record(brought_forward=0, annual_leave_adjustments=-0.2, annual_used=1)
    as_of = date(2026, 1, 20)
    assert current_balance(record, "annual", as_of=as_of) == 0.5
    assert available_balance(record, "annual", as_of=as_of) == pytest.approx(0.466667, abs=1e-6)
    assert not has_sufficient_balance(record, "annual", 0.5, as_of=as_of)
    assert has_sufficient_balance(record, "annual", 0.4, as_of=as_of)


def test_sufficiency_for_exact_balance_on_fractional_accrual():
    # Two months accrued is 3.333...; a request for all of it fits
    record = make_record(start_date=date(2026, 2, 1), brought_forward=0, annual_leave_adjustments=0, annual_used=0)
    assert has_sufficient_balance(record, "annual", 40 / 12, as_of=AS_OF)


def test_overdrawn_balance_is_not_sufficient_for_zero_plus():
    record = make_record(sick_used=40)
    assert available_balance(record, "sick", as_of=AS_OF) == 0.0
    assert not has_sufficient_balance(record, "sick", 0.5, as_of=AS_OF)


@pytest.mark.parametrize("value", ["nan", "inf", "-inf", float("nan")])
def test_non_finite_amounts_read_as_zero(value, caplog):
    with caplog.at_level(logging.WARNING):
        record = make_record(brought_forward=value)
    assert record.brought_forward == 0.0
    assert "Non-finite" in caplog.text
    # 5 accrued + 0 + 1 - 3
    assert current_balance(record, "annual", as_of=AS_OF) == 3.0


def test_termination_in_later_year_accrues_full_record_year():
    record = make_record(year=2025, contract_termination_date=date(2026, 4, 15))
    # 20 accrued in 2025 + 5 + 1 - 3
    assert termination_balance(record) == 23.0


def test_termination_in_earlier_year_accrues_nothing_in_record_year():
    record = make_record(year=2027, contract_termination_date=date(2026, 4, 15))
    assert termination_balance(record) == 3.0


def test_balance_summary_clamps_as_of_into_record_year():
    summary = balance_summary(make_record(year=2025), AS_OF, as_of=date(2026, 3, 1))
    assert summary["as_of"] == date(2025, 12, 31)
    assert summary["accrued_to_date"] == 20.0
