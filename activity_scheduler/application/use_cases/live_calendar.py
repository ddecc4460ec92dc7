from __future__ import annotations

import logging
import threading
from collections.abc import Mapping
from datetime import date
from typing import Any, Callable

from activity_scheduler.application.ports.booking_store import BookingSnapshot, BookingStorePort
from activity_scheduler.application.use_cases.check_availability import check_availability
from activity_scheduler.application.use_cases.project_calendar import booking_stats, describe_day, project_month
from activity_scheduler.domain.entities.booking import Booking, BookingRequest
from activity_scheduler.domain.entities.calendar import AvailabilityResult, BookingStats, DayCell


class LiveCalendar:
    """
    Read-only view of the store's booking set, kept current through the
    store subscription. Each screen (teacher, admin) holds its own instance.
    """

    def __init__(self, store: BookingStorePort, today: Callable[[], date] | None = None) -> None:
        self._snapshot: BookingSnapshot = ()
        self._lock = threading.Lock()
        self._today = today
        self._logger = logging.getLogger(__name__)
        self._unsubscribe = store.subscribe(self._on_change)

    def bookings(self) -> BookingSnapshot:
        with self._lock:
            return self._snapshot

    def project_month(self, year_month: "str | tuple[int, int] | date", resource: str | None = None) -> list[DayCell]:
        return project_month(year_month, self.bookings(), resource=resource, today=self._current_day())

    def describe_day(self, day: date | str) -> str:
        return describe_day(day, self.bookings(), today=self._current_day())

    def check(self, candidate: "BookingRequest | Booking | Mapping[str, Any]") -> AvailabilityResult:
        return check_availability(candidate, self.bookings(), today=self._current_day())

    def stats(self) -> BookingStats:
        return booking_stats(self.bookings())

    def close(self) -> None:
        self._unsubscribe()

    def _current_day(self) -> date | None:
        return self._today() if self._today is not None else None

    def _on_change(self, snapshot: BookingSnapshot) -> None:
        with self._lock:
            self._snapshot = snapshot
        self._logger.debug("Booking snapshot refreshed", extra={"booking_count": len(snapshot)})
