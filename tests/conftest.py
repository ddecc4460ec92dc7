from __future__ import annotations

from datetime import date, datetime
from zoneinfo import ZoneInfo

import pytest

from activity_scheduler.application.use_cases.booking_workflow import BookingWorkflow
from activity_scheduler.domain.entities.booking import Booking, BookingRequest, BookingStatus
from activity_scheduler.infrastructure.notifications.memory_inbox import MemoryInboxNotifier
from activity_scheduler.infrastructure.store.memory_store import MemoryBookingStore

TODAY = date(2025, 3, 1)


def make_booking(
    id: str = "b1",
    resource: str = "Library",
    date: str = "2025-03-10",
    time: str = "10:00 AM",
    status: BookingStatus = BookingStatus.PENDING,
    department: str = "Science",
    teacher_id: str = "teacher-1",
    activity: str = "Reading Club",
    created_at: str = "2025-03-01T09:00:00+00:00",
) -> Booking:
    return Booking(
        id=id,
        teacher_id=teacher_id,
        teacher_email=f"{teacher_id}@school.test",
        teacher_name="Ms. Rivera",
        department=department,
        activity=activity,
        resource=resource,
        date=date,
        time=time,
        status=status,
        created_at=created_at,
        updated_at=created_at,
    )


def make_request(**overrides) -> BookingRequest:
    values = {
        "teacher_id": "teacher-1",
        "teacher_email": "teacher-1@school.test",
        "teacher_name": "Ms. Rivera",
        "department": "Science",
        "activity": "Reading Club",
        "resource": "Library",
        "date": "2025-03-10",
        "time": "10:00 AM",
    }
    values.update(overrides)
    return BookingRequest(**values)


class FailingNotifier(MemoryInboxNotifier):
    def notify(self, recipient, payload):
        raise RuntimeError("inbox unavailable")


@pytest.fixture
def store() -> MemoryBookingStore:
    return MemoryBookingStore()


@pytest.fixture
def notifier() -> MemoryInboxNotifier:
    return MemoryInboxNotifier()


@pytest.fixture
def workflow(store, notifier) -> BookingWorkflow:
    return BookingWorkflow(
        store=store,
        notifier=notifier,
        clock=lambda: datetime(2025, 3, 1, 9, 30, tzinfo=ZoneInfo("UTC")),
    )
