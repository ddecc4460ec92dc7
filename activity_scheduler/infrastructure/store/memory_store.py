from __future__ import annotations

import threading
import uuid
from dataclasses import replace
from typing import Any, Callable, Iterable

from activity_scheduler.application.exceptions import NotFoundError
from activity_scheduler.application.ports.booking_store import BookingSnapshot, BookingStorePort, Unsubscribe
from activity_scheduler.domain.entities.booking import Booking, BookingFilter
from activity_scheduler.infrastructure.store.common import SubscriberRegistry, apply_patch, booking_sort_key


class MemoryBookingStore(BookingStorePort):
    def __init__(self, bookings: Iterable[Booking] = ()) -> None:
        self._bookings: dict[str, Booking] = {}
        for booking in bookings:
            booking_id = booking.id or uuid.uuid4().hex
            self._bookings[booking_id] = replace(booking, id=booking_id)
        # reentrant so subscribers may read the store while being notified
        self._lock = threading.RLock()
        self._subscribers = SubscriberRegistry()

    def create(self, booking: Booking) -> str:
        booking_id = uuid.uuid4().hex
        with self._lock:
            self._bookings[booking_id] = replace(booking, id=booking_id)
            self._subscribers.publish(self._snapshot())
        return booking_id

    def get(self, booking_id: str) -> Booking | None:
        with self._lock:
            return self._bookings.get(booking_id)

    def update(self, booking_id: str, patch: dict[str, Any]) -> Booking:
        with self._lock:
            current = self._bookings.get(booking_id)
            if current is None:
                raise NotFoundError(f"Booking {booking_id} not found")
            updated = apply_patch(current, patch)
            self._bookings[booking_id] = updated
            self._subscribers.publish(self._snapshot())
        return updated

    def delete(self, booking_id: str) -> None:
        with self._lock:
            if self._bookings.pop(booking_id, None) is None:
                raise NotFoundError(f"Booking {booking_id} not found")
            self._subscribers.publish(self._snapshot())

    def list(self, filter: BookingFilter | None = None) -> list[Booking]:
        with self._lock:
            snapshot = self._snapshot()
        if filter is None:
            return list(snapshot)
        return [b for b in snapshot if filter.matches(b)]

    def subscribe(self, on_change: Callable[[BookingSnapshot], None]) -> Unsubscribe:
        with self._lock:
            unsubscribe = self._subscribers.add(on_change)
            self._subscribers.deliver(on_change, self._snapshot())
        return unsubscribe

    def _snapshot(self) -> BookingSnapshot:
        return tuple(sorted(self._bookings.values(), key=booking_sort_key))
