from __future__ import annotations

from collections.abc import Iterable, Mapping
from datetime import date
from typing import Any

from activity_scheduler.application.exceptions import ValidationError
from activity_scheduler.application.utils.calendar_math import is_past_date, to_local_date_key
from activity_scheduler.application.utils.time_slots import normalize_slot
from activity_scheduler.domain.entities.booking import Booking, BookingRequest, BookingStatus
from activity_scheduler.domain.entities.calendar import AvailabilityResult

PAST_DATE_REASON = "past date: cannot book past dates, please select a current or future date"


def candidate_slot(candidate: "BookingRequest | Booking | Mapping[str, Any]") -> tuple[str, str, str]:
    """Return the (resource, date key, time label) triple of a candidate booking."""
    if isinstance(candidate, Mapping):
        resource = candidate.get("resource") or ""
        raw_date = candidate.get("date") or ""
        time = normalize_slot(
            candidate.get("time"),
            candidate.get("startTime", candidate.get("start_time")),
            candidate.get("endTime", candidate.get("end_time")),
        )
    else:
        resource = candidate.resource
        raw_date = candidate.date
        time = normalize_slot(candidate.time, candidate.start_time, candidate.end_time)

    resource = resource.strip()
    if not resource or not time:
        raise ValidationError("A resource and a time slot are required to check availability")
    return resource, to_local_date_key(raw_date), time


def check_availability(
    candidate: "BookingRequest | Booking | Mapping[str, Any]",
    bookings: Iterable[Booking],
    today: date | None = None,
) -> AvailabilityResult:
    """
    Advisory check of a candidate slot against a booking snapshot.

    Rejected bookings never block; they only add a note that the slot was
    freed by a rejection.
    """
    resource, date_key, time = candidate_slot(candidate)

    if is_past_date(date_key, today=today):
        return AvailabilityResult(ok=False, reason=PAST_DATE_REASON)

    same_slot = [
        b for b in bookings
        if b.resource == resource and b.date == date_key and normalize_slot(b.time) == time
        and (not isinstance(candidate, Booking) or b.id != candidate.id)
    ]

    conflicting = next((b for b in same_slot if b.is_active), None)
    if conflicting is not None:
        return AvailabilityResult(
            ok=False,
            reason=(
                f"conflict with {conflicting.department} booking, status {conflicting.status.value}: "
                f"{resource} is already booked on {date_key} at {time}"
            ),
            conflicting=conflicting,
        )

    if any(b.status is BookingStatus.REJECTED for b in same_slot):
        return AvailabilityResult(
            ok=True,
            reason="available (note: a previous request for this slot was rejected, the slot is free again)",
            previously_rejected=True,
        )

    return AvailabilityResult(ok=True, reason="available")
