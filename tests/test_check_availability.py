"""
Tests for slot conflict detection.
"""

from __future__ import annotations

from datetime import date

import pytest

from activity_scheduler.application.exceptions import ValidationError
from activity_scheduler.application.use_cases.check_availability import check_availability
from activity_scheduler.domain.entities.booking import BookingStatus
from conftest import TODAY, make_booking, make_request


def test_empty_booking_set_is_available():
    result = check_availability(make_request(), [], today=TODAY)
    assert result.ok is True
    assert result.reason == "available"
    assert result.previously_rejected is False


def test_same_slot_on_another_resource_never_conflicts():
    existing = [make_booking(resource="Gymnasium", status=BookingStatus.APPROVED)]
    result = check_availability(make_request(resource="Library"), existing, today=TODAY)
    assert result.ok is True


def test_pending_booking_blocks_slot():
    existing = [make_booking(status=BookingStatus.PENDING, department="History")]
    result = check_availability(make_request(), existing, today=TODAY)

    assert result.ok is False
    assert "History" in result.reason
    assert "pending" in result.reason
    assert result.conflicting is existing[0]


def test_approved_booking_blocks_slot():
    existing = [make_booking(status=BookingStatus.APPROVED)]
    result = check_availability(make_request(), existing, today=TODAY)

    assert result.ok is False
    assert "approved" in result.reason


def test_rejected_booking_frees_slot_with_advisory_note():
    existing = [make_booking(status=BookingStatus.REJECTED)]
    result = check_availability(make_request(), existing, today=TODAY)

    assert result.ok is True
    assert result.reason.startswith("available")
    assert "rejected" in result.reason
    assert result.previously_rejected is True


def test_active_booking_wins_over_rejected_history():
    existing = [
        make_booking(id="old", status=BookingStatus.REJECTED),
        make_booking(id="new", status=BookingStatus.PENDING),
    ]
    result = check_availability(make_request(), existing, today=TODAY)
    assert result.ok is False
    assert result.conflicting.id == "new"


def test_different_time_or_date_is_available():
    existing = [make_booking(status=BookingStatus.APPROVED)]
    assert check_availability(make_request(time="11:00 AM"), existing, today=TODAY).ok is True
    assert check_availability(make_request(date="2025-03-11"), existing, today=TODAY).ok is True


def test_past_date_takes_precedence_over_everything():
    result = check_availability(make_request(date="2025-02-28"), [], today=TODAY)
    assert result.ok is False
    assert result.reason.startswith("past date")
    assert result.conflicting is None


def test_today_is_bookable():
    result = check_availability(make_request(date=TODAY), [], today=TODAY)
    assert result.ok is True


def test_mapping_candidate_with_start_and_end_pair():
    existing = [make_booking(time="09:00 - 10:30", status=BookingStatus.PENDING)]
    candidate = {"resource": "Library", "date": "2025-03-10", "startTime": "09:00", "endTime": "10:30"}

    result = check_availability(candidate, existing, today=TODAY)
    assert result.ok is False


def test_date_objects_and_keys_compare_equal():
    existing = [make_booking(status=BookingStatus.PENDING)]
    result = check_availability(make_request(date=date(2025, 3, 10)), existing, today=TODAY)
    assert result.ok is False


def test_stored_labels_are_compared_in_canonical_form():
    existing = [make_booking(time="09:00 AM - 10:30 AM", status=BookingStatus.APPROVED)]

    for candidate in (
        {"resource": "Library", "date": "2025-03-10", "start_time": "9:00", "end_time": "10:30"},
        {"resource": "Library", "date": "2025-03-10", "time": "9:00 am - 10:30 am"},
    ):
        result = check_availability(candidate, existing, today=TODAY)
        assert result.ok is False
        assert result.conflicting is existing[0]


def test_candidate_without_time_slot_is_refused():
    existing = [make_booking(status=BookingStatus.PENDING)]

    with pytest.raises(ValidationError):
        check_availability({"resource": "Library", "date": "2099-03-10"}, existing, today=TODAY)
    with pytest.raises(ValidationError):
        check_availability({"resource": "Library", "date": "2099-03-10", "start_time": "09:00"}, existing, today=TODAY)
    with pytest.raises(ValidationError):
        check_availability({"resource": " ", "date": "2099-03-10", "time": "10:00 AM"}, existing, today=TODAY)
