from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date, datetime
from typing import Callable, Sequence

from activity_scheduler.application.exceptions import (
    BookingPermissionError,
    ConflictError,
    NotFoundError,
    PastDateError,
    StateError,
    ValidationError,
)
from activity_scheduler.application.ports.booking_store import BookingStorePort
from activity_scheduler.application.ports.notifier import NotificationPort
from activity_scheduler.application.use_cases.check_availability import check_availability
from activity_scheduler.application.utils.calendar_math import school_timezone, to_local_date_key
from activity_scheduler.application.utils.time_slots import canonical_clock, normalize_slot, to_minutes
from activity_scheduler.core.config import DEFAULT_DEPARTMENTS, DEFAULT_RESOURCES, DEFAULT_TIME_SLOTS
from activity_scheduler.domain.entities.booking import Booking, BookingDecision, BookingRequest, BookingStatus
from activity_scheduler.domain.entities.notification import NotificationPayload

ADMIN_ROLE = "admin"

_REQUIRED_FIELDS = ("teacher_id", "teacher_name", "department", "activity", "resource", "date")


class BookingWorkflow:
    """
    Approval state machine for activity bookings.

    pending -> approved | rejected. Both outcomes are terminal for `decide`;
    changing an existing decision goes through `force_decide`, which requires
    a reason and is logged as an override.
    """

    def __init__(
        self,
        store: BookingStorePort,
        notifier: NotificationPort,
        resources: Sequence[str] | None = None,
        time_slots: Sequence[str] | None = None,
        departments: Sequence[str] | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._store = store
        self._notifier = notifier
        self._resources = tuple(resources or DEFAULT_RESOURCES)
        self._time_slots = frozenset(normalize_slot(s) for s in (time_slots or DEFAULT_TIME_SLOTS))
        self._departments = tuple(departments or DEFAULT_DEPARTMENTS)
        self._clock = clock or (lambda: datetime.now(school_timezone()))
        self._logger = logging.getLogger(__name__)

    def today(self) -> date:
        return self._clock().date()

    def submit(self, request: BookingRequest) -> Booking:
        draft = self._validate_request(request)

        result = check_availability(draft, self._store.list(), today=self.today())
        if not result.ok:
            self._logger.info(
                "Booking submission refused",
                extra={"resource": draft.resource, "date": draft.date, "time": draft.time, "reason": result.reason},
            )
            if result.conflicting is None:
                raise PastDateError(result.reason)
            raise ConflictError(result.reason, conflicting=result.conflicting)

        booking_id = self._store.create(draft)
        booking = replace(draft, id=booking_id)
        self._logger.info(
            "Booking submitted",
            extra={
                "booking_id": booking.id,
                "resource": booking.resource,
                "date": booking.date,
                "time": booking.time,
                "status": booking.status.value,
            },
        )

        self._notify(
            ADMIN_ROLE,
            NotificationPayload(
                title="New Activity Request",
                message=(
                    f"{booking.teacher_name} from {booking.department} has requested to book "
                    f"{booking.resource} for {booking.activity} on {booking.date} at {booking.time}."
                ),
                type="activity_request",
                booking_id=booking.id,
                sender_id=booking.teacher_id,
                recipient_role=ADMIN_ROLE,
                priority="medium",
                status=booking.status.value,
                created_at=booking.created_at,
            ),
        )
        return booking

    def decide(
        self,
        booking_id: str,
        outcome: "BookingStatus | str",
        reviewer_id: str,
        reason: str | None = None,
    ) -> Booking:
        new_status = self._parse_outcome(outcome)
        booking = self._get(booking_id)
        if booking.status is not BookingStatus.PENDING:
            raise StateError(
                f"Booking {booking_id} is already {booking.status.value}; only pending bookings can be decided"
            )
        return self._apply_decision(booking, new_status, reviewer_id, reason)

    def force_decide(
        self,
        booking_id: str,
        outcome: "BookingStatus | str",
        reviewer_id: str,
        reason: str,
    ) -> Booking:
        """Re-review a booking regardless of its current status."""
        new_status = self._parse_outcome(outcome)
        if not reason or not reason.strip():
            raise ValidationError("A reason is required to override a decision", missing_fields=("reason",))

        booking = self._get(booking_id)
        if booking.status is new_status:
            raise StateError(f"Booking {booking_id} is already {new_status.value}")

        self._logger.warning(
            "Booking decision overridden",
            extra={
                "booking_id": booking.id,
                "status": f"{booking.status.value}->{new_status.value}",
                "reason": reason,
                "reviewer_id": reviewer_id,
            },
        )
        return self._apply_decision(booking, new_status, reviewer_id, reason)

    def review(self, decision: BookingDecision, force: bool = False) -> Booking:
        if force:
            return self.force_decide(decision.booking_id, decision.new_status, decision.reviewer_id, decision.reason or "")
        return self.decide(decision.booking_id, decision.new_status, decision.reviewer_id, decision.reason)

    def withdraw(self, booking_id: str, requester_id: str) -> None:
        booking = self._get(booking_id)
        if booking.teacher_id != requester_id:
            raise BookingPermissionError(f"Booking {booking_id} can only be withdrawn by the teacher who submitted it")
        if booking.status is not BookingStatus.PENDING:
            raise StateError(f"Booking {booking_id} is {booking.status.value}; only pending requests can be withdrawn")

        self._store.delete(booking_id)
        self._logger.info("Booking withdrawn", extra={"booking_id": booking_id, "resource": booking.resource})

    def _validate_request(self, request: BookingRequest) -> Booking:
        missing = [name for name in _REQUIRED_FIELDS if not _has_value(getattr(request, name))]
        has_pair = _has_value(request.start_time) and _has_value(request.end_time)
        if not has_pair and not _has_value(request.time):
            missing.append("time")
        if missing:
            raise ValidationError(f"Missing required fields: {', '.join(missing)}", missing_fields=tuple(missing))

        resource = request.resource.strip()
        if resource not in self._resources:
            raise ValidationError(f"Unknown resource '{resource}'")

        department = request.department.strip()
        if department not in self._departments:
            raise ValidationError(f"Unknown department '{department}'")

        date_key = to_local_date_key(request.date)

        if has_pair:
            start = to_minutes(request.start_time)
            end = to_minutes(request.end_time)
            if start is None or end is None:
                raise ValidationError(f"Invalid time range '{request.start_time}' - '{request.end_time}'")
            if end <= start:
                raise ValidationError("End time must be after start time")
        elif normalize_slot(request.time) not in self._time_slots:
            raise ValidationError(f"Unknown time slot '{request.time}'")

        now = self._clock().isoformat()
        return Booking(
            id="",
            teacher_id=request.teacher_id,
            teacher_email=request.teacher_email,
            teacher_name=request.teacher_name.strip(),
            department=department,
            activity=request.activity.strip(),
            resource=resource,
            date=date_key,
            time=normalize_slot(request.time, request.start_time, request.end_time),
            status=BookingStatus.PENDING,
            notes=request.notes or "",
            start_time=canonical_clock(request.start_time) if has_pair else None,
            end_time=canonical_clock(request.end_time) if has_pair else None,
            created_at=now,
            updated_at=now,
        )

    def _apply_decision(
        self,
        booking: Booking,
        new_status: BookingStatus,
        reviewer_id: str,
        reason: str | None,
    ) -> Booking:
        now = self._clock().isoformat()
        updated = self._store.update(
            booking.id,
            {
                "status": new_status,
                "reviewed_by": reviewer_id,
                "reviewed_at": now,
                "updated_at": now,
                "admin_remarks": reason or "",
            },
        )
        self._logger.info(
            "Booking decided",
            extra={"booking_id": updated.id, "status": updated.status.value, "reason": reason},
        )
        label = "Approved" if new_status is BookingStatus.APPROVED else "Rejected"
        message = (
            f'Your activity request "{updated.activity}" for {updated.resource} on {updated.date} '
            f"at {updated.time} was {new_status.value}."
        )
        if reason:
            message += f" Remarks: {reason}"

        self._notify(
            updated.teacher_id,
            NotificationPayload(
                title=f"Activity Request {label}",
                message=message,
                type="activity_decision",
                booking_id=updated.id,
                sender_id=reviewer_id,
                recipient_id=updated.teacher_id,
                status=new_status.value,
                created_at=now,
            ),
        )
        return updated

    def _get(self, booking_id: str) -> Booking:
        booking = self._store.get(booking_id)
        if booking is None:
            raise NotFoundError(f"Booking {booking_id} not found")
        return booking

    def _parse_outcome(self, outcome: "BookingStatus | str") -> BookingStatus:
        try:
            status = BookingStatus.parse(outcome)
        except ValueError as e:
            raise ValidationError(f"Unknown decision '{outcome}'") from e
        if status is BookingStatus.PENDING:
            raise ValidationError("A decision must be approved or rejected")
        return status

    def _notify(self, recipient: str, payload: NotificationPayload) -> None:
        try:
            self._notifier.notify(recipient, payload)
        except Exception:
            self._logger.exception(
                "Notification delivery failed",
                extra={"booking_id": payload.booking_id, "recipient": recipient},
            )


def _has_value(value: object) -> bool:
    if value is None:
        return False
    if isinstance(value, str):
        return bool(value.strip())
    return True
