from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import Enum

from activity_scheduler.domain.entities.booking import Booking


class DayStatus(str, Enum):
    EMPTY = "empty"
    PAST = "past"
    AVAILABLE = "available"
    BOOKED = "booked"


@dataclass(frozen=True)
class DayCell:
    date: date | None
    key: str | None
    status: DayStatus


@dataclass(frozen=True)
class AvailabilityResult:
    ok: bool
    reason: str
    conflicting: Booking | None = None
    previously_rejected: bool = False


@dataclass(frozen=True)
class BookingStats:
    total: int = 0
    pending: int = 0
    approved: int = 0
    rejected: int = 0
