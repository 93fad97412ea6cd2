"""
Tests for leave request edit eligibility
"""
from datetime import date, datetime
from types import SimpleNamespace

import pytest

from leavedesk.models.leave import LeaveStatus
from leavedesk.services.edit_eligibility_service import (
    FIRST_DAY_PASSED_REASON,
    can_edit,
    edit_restriction_reason,
)

TODAY = date(2026, 3, 18)


def request(status=LeaveStatus.PENDING, start_date=date(2026, 3, 25)):
    return SimpleNamespace(status=status, start_date=start_date)


def test_pending_future_request_is_editable():
    assert can_edit(request(), TODAY)
    assert edit_restriction_reason(request(), TODAY) is None


def test_request_starting_tomorrow_is_editable():
    assert can_edit(request(start_date=date(2026, 3, 19)), TODAY)


def test_request_starting_today_is_not_editable():
    leave = request(start_date=TODAY)
    assert not can_edit(leave, TODAY)
    assert edit_restriction_reason(leave, TODAY) == FIRST_DAY_PASSED_REASON


def test_request_that_already_started_is_not_editable():
    leave = request(start_date=date(2026, 3, 10))
    assert edit_restriction_reason(leave, TODAY) == "Cannot edit requests where the first day has passed"


@pytest.mark.parametrize("status", [LeaveStatus.APPROVED, LeaveStatus.REJECTED, LeaveStatus.CANCELLED])
def test_non_pending_requests_are_not_editable(status):
    leave = request(status=status)
    assert not can_edit(leave, TODAY)
    assert edit_restriction_reason(leave, TODAY) == f"Cannot edit {status.value} requests"


def test_status_string_is_case_insensitive():
    assert can_edit(request(status="Pending"), TODAY)
    assert edit_restriction_reason(request(status="APPROVED"), TODAY) == "Cannot edit approved requests"


def test_time_of_day_is_ignored():
    leave = request(start_date=datetime(2026, 3, 19, 0, 0))
    assert can_edit(leave, datetime(2026, 3, 18, 23, 59))
    assert not can_edit(leave, datetime(2026, 3, 19, 0, 1))


def test_missing_start_date_is_not_editable():
    assert edit_restriction_reason(request(start_date=None), TODAY) == FIRST_DAY_PASSED_REASON


def test_missing_request_raises():
    with pytest.raises(ValueError):
        can_edit(None, TODAY)


def test_result_tracks_the_date_of_the_attempt():
    leave = request(start_date=date(2026, 3, 20))
    assert can_edit(leave, date(2026, 3, 19))
    assert not can_edit(leave, date(2026, 3, 20))
