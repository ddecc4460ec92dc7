from enum import Enum
from pydantic import BaseModel, Field

from activity_scheduler.domain.entities.booking import Booking
from activity_scheduler.domain.entities.calendar import AvailabilityResult, BookingStats, DayCell


class BookingStatusSchema(str, Enum):
    pending = "pending"
    approved = "approved"
    rejected = "rejected"


class OutcomeSchema(str, Enum):
    approved = "approved"
    rejected = "rejected"


class BookingCreateSchema(BaseModel):
    # Fields default to empty so the workflow reports every missing field at once
    teacher_id: str = ""
    teacher_email: str = ""
    teacher_name: str = ""
    department: str = ""
    activity: str = ""
    resource: str = ""
    date: str = ""
    time: str = ""
    start_time: str | None = None
    end_time: str | None = None
    notes: str = ""


class BookingSchema(BaseModel):
    id: str
    teacher_id: str
    teacher_email: str
    teacher_name: str
    department: str
    activity: str
    resource: str
    date: str
    time: str
    start_time: str | None = None
    end_time: str | None = None
    notes: str = ""
    status: BookingStatusSchema
    created_at: str
    updated_at: str
    reviewed_by: str | None = None
    reviewed_at: str | None = None
    admin_remarks: str = ""

    @classmethod
    def from_booking(cls, booking: Booking) -> "BookingSchema":
        return cls(
            id=booking.id,
            teacher_id=booking.teacher_id,
            teacher_email=booking.teacher_email,
            teacher_name=booking.teacher_name,
            department=booking.department,
            activity=booking.activity,
            resource=booking.resource,
            date=booking.date,
            time=booking.time,
            start_time=booking.start_time,
            end_time=booking.end_time,
            notes=booking.notes,
            status=BookingStatusSchema(booking.status.value),
            created_at=booking.created_at,
            updated_at=booking.updated_at,
            reviewed_by=booking.reviewed_by,
            reviewed_at=booking.reviewed_at,
            admin_remarks=booking.admin_remarks,
        )


class DecisionRequestSchema(BaseModel):
    outcome: OutcomeSchema
    reviewer_id: str
    reason: str | None = None


class ForceDecisionRequestSchema(BaseModel):
    outcome: OutcomeSchema
    reviewer_id: str
    reason: str = Field(min_length=1)


class AvailabilityRequestSchema(BaseModel):
    resource: str
    date: str
    time: str = ""
    start_time: str | None = None
    end_time: str | None = None


class AvailabilityResponseSchema(BaseModel):
    ok: bool
    reason: str
    previously_rejected: bool = False
    conflicting_booking_id: str | None = None

    @classmethod
    def from_result(cls, result: AvailabilityResult) -> "AvailabilityResponseSchema":
        return cls(
            ok=result.ok,
            reason=result.reason,
            previously_rejected=result.previously_rejected,
            conflicting_booking_id=result.conflicting.id if result.conflicting else None,
        )


class DayCellSchema(BaseModel):
    date: str | None
    status: str

    @classmethod
    def from_cell(cls, cell: DayCell) -> "DayCellSchema":
        return cls(date=cell.key, status=cell.status.value)


class CalendarResponseSchema(BaseModel):
    month: str
    resource: str | None = None
    days: list[DayCellSchema]


class StatsSchema(BaseModel):
    total: int
    pending: int
    approved: int
    rejected: int

    @classmethod
    def from_stats(cls, stats: BookingStats) -> "StatsSchema":
        return cls(total=stats.total, pending=stats.pending, approved=stats.approved, rejected=stats.rejected)
