"""
Tests for the HTTP endpoints.
"""

from __future__ import annotations

from datetime import date, datetime
from zoneinfo import ZoneInfo

import pytest
from fastapi.testclient import TestClient

from activity_scheduler.application.use_cases.booking_workflow import BookingWorkflow
from activity_scheduler.application.use_cases.live_calendar import LiveCalendar
from activity_scheduler.infrastructure.notifications.memory_inbox import MemoryInboxNotifier
from activity_scheduler.infrastructure.store.memory_store import MemoryBookingStore
from activity_scheduler.main import app
from activity_scheduler.wiring.dependencies import get_booking_store, get_booking_workflow, get_live_calendar

BOOKING = {
    "teacher_id": "teacher-1",
    "teacher_email": "teacher-1@school.test",
    "teacher_name": "Ms. Rivera",
    "department": "Science",
    "activity": "Reading Club",
    "resource": "Library",
    "date": "2025-03-10",
    "time": "10:00 AM",
}


@pytest.fixture
def client():
    store = MemoryBookingStore()
    workflow = BookingWorkflow(
        store=store,
        notifier=MemoryInboxNotifier(),
        clock=lambda: datetime(2025, 3, 1, 9, 0, tzinfo=ZoneInfo("UTC")),
    )
    calendar = LiveCalendar(store, today=lambda: date(2025, 3, 1))

    app.dependency_overrides[get_booking_store] = lambda: store
    app.dependency_overrides[get_booking_workflow] = lambda: workflow
    app.dependency_overrides[get_live_calendar] = lambda: calendar
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
        calendar.close()


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}


def test_submit_then_duplicate_conflicts(client):
    resp = client.post("/api/v1/bookings", json=BOOKING)
    assert resp.status_code == 201
    assert resp.json()["status"] == "pending"

    duplicate = client.post("/api/v1/bookings", json=BOOKING)
    assert duplicate.status_code == 409
    assert "pending" in duplicate.json()["detail"]


def test_submit_validation_errors(client):
    resp = client.post("/api/v1/bookings", json={"teacher_id": "teacher-1"})
    assert resp.status_code == 400
    assert "Missing required fields" in resp.json()["detail"]

    past = client.post("/api/v1/bookings", json={**BOOKING, "date": "2025-02-01"})
    assert past.status_code == 400
    assert "past date" in past.json()["detail"]


def test_availability_endpoint(client):
    payload = {"resource": "Library", "date": "2025-03-10", "time": "10:00 AM"}
    assert client.post("/api/v1/bookings/availability", json=payload).json()["ok"] is True

    booking_id = client.post("/api/v1/bookings", json=BOOKING).json()["id"]
    result = client.post("/api/v1/bookings/availability", json=payload).json()
    assert result["ok"] is False
    assert result["conflicting_booking_id"] == booking_id

    bad = client.post("/api/v1/bookings/availability", json={**payload, "date": "10/03/2025"})
    assert bad.status_code == 400

    no_slot = client.post("/api/v1/bookings/availability", json={"resource": "Library", "date": "2025-03-10"})
    assert no_slot.status_code == 400
    assert "time slot" in no_slot.json()["detail"]


def test_submit_rejects_unknown_department(client):
    resp = client.post("/api/v1/bookings", json={**BOOKING, "department": "Astrology"})
    assert resp.status_code == 400
    assert "Unknown department" in resp.json()["detail"]


def test_decision_flow(client):
    booking_id = client.post("/api/v1/bookings", json=BOOKING).json()["id"]

    resp = client.post(
        f"/api/v1/bookings/{booking_id}/decision",
        json={"outcome": "rejected", "reviewer_id": "admin-1", "reason": "Exams"},
    )
    assert resp.status_code == 200
    assert resp.json()["admin_remarks"] == "Exams"

    again = client.post(
        f"/api/v1/bookings/{booking_id}/decision",
        json={"outcome": "approved", "reviewer_id": "admin-1"},
    )
    assert again.status_code == 409

    forced = client.post(
        f"/api/v1/bookings/{booking_id}/force-decision",
        json={"outcome": "approved", "reviewer_id": "admin-1", "reason": "Exams moved"},
    )
    assert forced.status_code == 200
    assert forced.json()["status"] == "approved"

    missing = client.post(
        "/api/v1/bookings/nope/decision",
        json={"outcome": "approved", "reviewer_id": "admin-1"},
    )
    assert missing.status_code == 404


def test_withdraw(client):
    booking_id = client.post("/api/v1/bookings", json=BOOKING).json()["id"]

    denied = client.delete(f"/api/v1/bookings/{booking_id}", params={"requester_id": "teacher-2"})
    assert denied.status_code == 403

    resp = client.delete(f"/api/v1/bookings/{booking_id}", params={"requester_id": "teacher-1"})
    assert resp.status_code == 204
    assert client.get("/api/v1/bookings").json() == []


def test_list_calendar_and_stats(client):
    client.post("/api/v1/bookings", json=BOOKING)
    client.post("/api/v1/bookings", json={**BOOKING, "resource": "Gymnasium", "date": "2025-03-12"})

    listed = client.get("/api/v1/bookings", params={"resource": "Gymnasium"}).json()
    assert [b["date"] for b in listed] == ["2025-03-12"]
    assert client.get("/api/v1/bookings", params={"status": "bogus"}).status_code == 400

    calendar = client.get("/api/v1/calendar/2025-03", params={"resource": "Library"}).json()
    statuses = {d["date"]: d["status"] for d in calendar["days"] if d["date"]}
    assert calendar["month"] == "2025-03"
    assert statuses["2025-03-10"] == "booked"
    assert statuses["2025-03-12"] == "available"
    assert client.get("/api/v1/calendar/2025-13").status_code == 400

    stats = client.get("/api/v1/bookings/stats").json()
    assert stats == {"total": 2, "pending": 2, "approved": 0, "rejected": 0}
