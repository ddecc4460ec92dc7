"""
Tests for the month calendar projection.
"""

from __future__ import annotations

from datetime import date

from activity_scheduler.application.use_cases.project_calendar import (
    booking_stats,
    describe_day,
    project_month,
    status_for,
)
from activity_scheduler.domain.entities.booking import BookingStatus
from activity_scheduler.domain.entities.calendar import DayStatus
from conftest import TODAY, make_booking


def test_placeholder_cell_is_empty():
    assert status_for(None, [make_booking()], today=TODAY) is DayStatus.EMPTY


def test_past_day_is_past_even_with_active_booking():
    bookings = [make_booking(date="2025-02-20", status=BookingStatus.APPROVED)]
    assert status_for(date(2025, 2, 20), bookings, today=TODAY) is DayStatus.PAST


def test_active_booking_marks_day_booked():
    bookings = [make_booking(date="2025-03-10", status=BookingStatus.PENDING)]
    assert status_for(date(2025, 3, 10), bookings, today=TODAY) is DayStatus.BOOKED
    assert status_for(date(2025, 3, 11), bookings, today=TODAY) is DayStatus.AVAILABLE


def test_rejected_booking_leaves_day_available():
    bookings = [make_booking(date="2025-03-10", status=BookingStatus.REJECTED)]
    assert status_for("2025-03-10", bookings, today=TODAY) is DayStatus.AVAILABLE


def test_projection_is_independent_of_call_order():
    bookings = [make_booking(date="2025-03-10")]
    first = status_for(date(2025, 3, 10), bookings, today=TODAY)
    status_for(date(2025, 3, 11), bookings, today=TODAY)
    assert status_for(date(2025, 3, 10), bookings, today=TODAY) is first


def test_project_month_grid():
    bookings = [
        make_booking(id="a", date="2025-03-10"),
        make_booking(id="b", date="2025-03-12", resource="Gymnasium"),
    ]
    cells = project_month("2025-03", bookings, today=date(2025, 3, 5))

    # March 1, 2025 is a Saturday
    assert [c.status for c in cells[:6]] == [DayStatus.EMPTY] * 6
    by_key = {c.key: c.status for c in cells if c.key}
    assert len(by_key) == 31
    assert by_key["2025-03-04"] is DayStatus.PAST
    assert by_key["2025-03-05"] is DayStatus.AVAILABLE
    assert by_key["2025-03-10"] is DayStatus.BOOKED
    assert by_key["2025-03-12"] is DayStatus.BOOKED


def test_project_month_for_one_resource():
    bookings = [make_booking(date="2025-03-12", resource="Gymnasium")]
    cells = project_month("2025-03", bookings, resource="Library", today=TODAY)
    assert all(c.status is not DayStatus.BOOKED for c in cells)


def test_describe_day():
    bookings = [
        make_booking(id="late", time="02:00 PM", activity="Choir", department="Music"),
        make_booking(id="early", time="09:00 AM", activity="Debate", department="English",
                     status=BookingStatus.APPROVED),
        make_booking(id="gone", time="11:00 AM", status=BookingStatus.REJECTED),
    ]
    summary = describe_day("2025-03-10", bookings, today=TODAY)

    assert summary.splitlines() == [
        "Debate - English (09:00 AM) - approved",
        "Choir - Music (02:00 PM) - pending",
    ]
    assert describe_day("2025-03-11", bookings, today=TODAY) == "Available"
    assert describe_day("2025-02-01", bookings, today=TODAY) == "Past date - Cannot book"


def test_booking_stats():
    bookings = [
        make_booking(id="1", status=BookingStatus.PENDING),
        make_booking(id="2", status=BookingStatus.APPROVED),
        make_booking(id="3", status=BookingStatus.APPROVED),
        make_booking(id="4", status=BookingStatus.parse("denied")),
    ]
    stats = booking_stats(bookings)
    assert (stats.total, stats.pending, stats.approved, stats.rejected) == (4, 1, 2, 1)
