from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import Enum


class BookingStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"

    @classmethod
    def parse(cls, value: "str | BookingStatus") -> "BookingStatus":
        if isinstance(value, BookingStatus):
            return value
        normalized = str(value).strip().lower()
        # older documents use "denied" for rejected requests
        if normalized == "denied":
            return cls.REJECTED
        return cls(normalized)

    @property
    def is_active(self) -> bool:
        return self is not BookingStatus.REJECTED


@dataclass(frozen=True)
class Booking:
    id: str
    teacher_id: str
    teacher_email: str
    teacher_name: str
    department: str
    activity: str
    resource: str
    date: str  # YYYY-MM-DD, local calendar date
    time: str
    status: BookingStatus = BookingStatus.PENDING
    notes: str = ""
    start_time: str | None = None
    end_time: str | None = None
    created_at: str = ""
    updated_at: str = ""
    reviewed_by: str | None = None
    reviewed_at: str | None = None
    admin_remarks: str = ""

    @property
    def is_active(self) -> bool:
        return self.status.is_active


@dataclass(frozen=True)
class BookingRequest:
    teacher_id: str
    teacher_email: str = ""
    teacher_name: str = ""
    department: str = ""
    activity: str = ""
    resource: str = ""
    date: "date | str" = ""
    time: str = ""
    start_time: str | None = None
    end_time: str | None = None
    notes: str = ""


@dataclass(frozen=True)
class BookingDecision:
    booking_id: str
    new_status: BookingStatus
    reviewer_id: str
    reason: str | None = None


@dataclass(frozen=True)
class BookingFilter:
    resource: str | None = None
    department: str | None = None
    teacher_id: str | None = None
    status: BookingStatus | None = None
    date_from: str | None = None  # inclusive YYYY-MM-DD
    date_to: str | None = None  # inclusive YYYY-MM-DD

    def matches(self, booking: Booking) -> bool:
        if self.resource is not None and booking.resource != self.resource:
            return False
        if self.department is not None and booking.department != self.department:
            return False
        if self.teacher_id is not None and booking.teacher_id != self.teacher_id:
            return False
        if self.status is not None and booking.status is not self.status:
            return False
        # keys are zero-padded so string comparison orders by calendar date
        if self.date_from is not None and booking.date < self.date_from:
            return False
        if self.date_to is not None and booking.date > self.date_to:
            return False
        return True
