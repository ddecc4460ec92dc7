from __future__ import annotations

import logging
import threading
from dataclasses import fields, replace
from typing import Any, Callable

from activity_scheduler.application.ports.booking_store import BookingSnapshot, Unsubscribe
from activity_scheduler.domain.entities.booking import Booking, BookingStatus

_PATCHABLE_FIELDS = {f.name for f in fields(Booking)} - {"id"}

logger = logging.getLogger(__name__)


def apply_patch(booking: Booking, patch: dict[str, Any]) -> Booking:
    unknown = set(patch) - _PATCHABLE_FIELDS
    if unknown:
        raise ValueError(f"Unknown booking fields: {', '.join(sorted(unknown))}")
    changes = dict(patch)
    if "status" in changes:
        changes["status"] = BookingStatus.parse(changes["status"])
    return replace(booking, **changes)


def booking_sort_key(booking: Booking) -> tuple[str, str, str]:
    return (booking.date, booking.created_at, booking.id)


class SubscriberRegistry:
    """Fan-out of booking snapshots to live subscribers."""

    def __init__(self) -> None:
        self._subscribers: dict[int, Callable[[BookingSnapshot], None]] = {}
        self._next_id = 0
        self._lock = threading.Lock()

    def add(self, on_change: Callable[[BookingSnapshot], None]) -> Unsubscribe:
        with self._lock:
            token = self._next_id
            self._next_id += 1
            self._subscribers[token] = on_change

        def unsubscribe() -> None:
            with self._lock:
                self._subscribers.pop(token, None)

        return unsubscribe

    def publish(self, snapshot: BookingSnapshot) -> None:
        with self._lock:
            subscribers = list(self._subscribers.values())
        for on_change in subscribers:
            self.deliver(on_change, snapshot)

    def deliver(self, on_change: Callable[[BookingSnapshot], None], snapshot: BookingSnapshot) -> None:
        try:
            on_change(snapshot)
        except Exception:
            logger.exception("Booking subscriber failed", extra={"booking_count": len(snapshot)})
