from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Callable

from activity_scheduler.domain.entities.booking import Booking, BookingFilter

BookingSnapshot = tuple[Booking, ...]
Unsubscribe = Callable[[], None]


class BookingStorePort(ABC):
    @abstractmethod
    def create(self, booking: Booking) -> str:
        """Persist a new booking. The store assigns and returns its id."""
        raise NotImplementedError

    @abstractmethod
    def get(self, booking_id: str) -> Booking | None:
        raise NotImplementedError

    @abstractmethod
    def update(self, booking_id: str, patch: dict[str, Any]) -> Booking:
        """Apply field changes and return the updated booking. Raises NotFoundError."""
        raise NotImplementedError

    @abstractmethod
    def delete(self, booking_id: str) -> None:
        """Hard-delete a booking. Raises NotFoundError."""
        raise NotImplementedError

    @abstractmethod
    def list(self, filter: BookingFilter | None = None) -> list[Booking]:
        """Bookings ordered by date, then creation time."""
        raise NotImplementedError

    @abstractmethod
    def subscribe(self, on_change: Callable[[BookingSnapshot], None]) -> Unsubscribe:
        """
        Push the current snapshot to `on_change` now and after every mutation.
        Returns a callable that removes the subscription.
        """
        raise NotImplementedError
