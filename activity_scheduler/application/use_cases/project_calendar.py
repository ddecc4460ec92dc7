from __future__ import annotations

from collections.abc import Iterable
from datetime import date

from activity_scheduler.application.utils.calendar_math import days_in_month, is_past_date, to_local_date_key
from activity_scheduler.application.utils.time_slots import slot_sort_key
from activity_scheduler.domain.entities.booking import Booking, BookingStatus
from activity_scheduler.domain.entities.calendar import BookingStats, DayCell, DayStatus


def active_bookings_on(day: date | str, bookings: Iterable[Booking]) -> list[Booking]:
    key = to_local_date_key(day)
    return [b for b in bookings if b.date == key and b.is_active]


def status_for(day: date | str | None, bookings: Iterable[Booking], today: date | None = None) -> DayStatus:
    """Project one calendar cell. Past beats booked."""
    if day is None:
        return DayStatus.EMPTY
    if is_past_date(day, today=today):
        return DayStatus.PAST
    if active_bookings_on(day, bookings):
        return DayStatus.BOOKED
    return DayStatus.AVAILABLE


def project_month(
    year_month: "str | tuple[int, int] | date",
    bookings: Iterable[Booking],
    resource: str | None = None,
    today: date | None = None,
) -> list[DayCell]:
    snapshot = [b for b in bookings if resource is None or b.resource == resource]
    cells: list[DayCell] = []
    for day in days_in_month(year_month):
        cells.append(
            DayCell(
                date=day,
                key=to_local_date_key(day) if day is not None else None,
                status=status_for(day, snapshot, today=today),
            )
        )
    return cells


def describe_day(day: date | str, bookings: Iterable[Booking], today: date | None = None) -> str:
    if is_past_date(day, today=today):
        return "Past date - Cannot book"

    day_bookings = sorted(active_bookings_on(day, bookings), key=lambda b: slot_sort_key(b.time))
    if not day_bookings:
        return "Available"

    return "\n".join(
        f"{b.activity} - {b.department} ({b.time}) - {b.status.value}" for b in day_bookings
    )


def booking_stats(bookings: Iterable[Booking]) -> BookingStats:
    counts = {status: 0 for status in BookingStatus}
    total = 0
    for booking in bookings:
        counts[booking.status] += 1
        total += 1
    return BookingStats(
        total=total,
        pending=counts[BookingStatus.PENDING],
        approved=counts[BookingStatus.APPROVED],
        rejected=counts[BookingStatus.REJECTED],
    )
