from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from activity_scheduler.domain.entities.booking import Booking


class BookingError(RuntimeError):
    """Base class for errors returned by the booking workflow."""
    pass


class ValidationError(BookingError):
    """Raised when a submission is missing fields or carries malformed values."""

    def __init__(self, message: str, missing_fields: tuple[str, ...] = ()) -> None:
        super().__init__(message)
        self.missing_fields = missing_fields


class PastDateError(ValidationError):
    """Raised when a booking targets a local calendar date before today."""
    pass


class ConflictError(BookingError):
    """Raised when the requested slot is held by a pending or approved booking."""

    def __init__(self, message: str, conflicting: "Booking | None" = None) -> None:
        super().__init__(message)
        self.conflicting = conflicting


class NotFoundError(BookingError):
    pass


class StateError(BookingError):
    """Raised when a booking is not in the status an operation requires."""
    pass


class BookingPermissionError(BookingError):
    pass


class NotificationDeliveryError(RuntimeError):
    """Raised by notifier adapters; the workflow logs it and moves on."""
    pass
