from __future__ import annotations

import json
import logging
import threading
import uuid
from dataclasses import replace
from pathlib import Path
from typing import Any, Callable

from activity_scheduler.application.exceptions import NotFoundError
from activity_scheduler.application.ports.booking_store import BookingSnapshot, BookingStorePort, Unsubscribe
from activity_scheduler.application.utils.time_slots import normalize_slot
from activity_scheduler.domain.entities.booking import Booking, BookingFilter, BookingStatus
from activity_scheduler.infrastructure.store.common import SubscriberRegistry, apply_patch, booking_sort_key

# Booking attribute -> document key
_DOCUMENT_KEYS = {
    "id": "id",
    "teacher_id": "teacherId",
    "teacher_email": "teacherEmail",
    "teacher_name": "teacherName",
    "department": "department",
    "activity": "activity",
    "resource": "resource",
    "date": "date",
    "time": "time",
    "start_time": "startTime",
    "end_time": "endTime",
    "notes": "notes",
    "status": "status",
    "created_at": "createdAt",
    "updated_at": "updatedAt",
    "reviewed_by": "reviewedBy",
    "reviewed_at": "reviewedAt",
    "admin_remarks": "adminRemarks",
}


class JsonBookingStore(BookingStorePort):
    """Bookings persisted as a single JSON document, rewritten atomically on every change."""

    def __init__(self, data_file: str = "./data/activity_bookings.json") -> None:
        self._path = Path(data_file)
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._lock = threading.RLock()
        self._subscribers = SubscriberRegistry()
        self._logger = logging.getLogger(__name__)

    def create(self, booking: Booking) -> str:
        booking_id = uuid.uuid4().hex
        with self._lock:
            bookings = self._load()
            bookings[booking_id] = replace(booking, id=booking_id)
            self._save(bookings)
            self._subscribers.publish(_snapshot(bookings))
        return booking_id

    def get(self, booking_id: str) -> Booking | None:
        with self._lock:
            return self._load().get(booking_id)

    def update(self, booking_id: str, patch: dict[str, Any]) -> Booking:
        with self._lock:
            bookings = self._load()
            current = bookings.get(booking_id)
            if current is None:
                raise NotFoundError(f"Booking {booking_id} not found")
            updated = apply_patch(current, patch)
            bookings[booking_id] = updated
            self._save(bookings)
            self._subscribers.publish(_snapshot(bookings))
        return updated

    def delete(self, booking_id: str) -> None:
        with self._lock:
            bookings = self._load()
            if bookings.pop(booking_id, None) is None:
                raise NotFoundError(f"Booking {booking_id} not found")
            self._save(bookings)
            self._subscribers.publish(_snapshot(bookings))

    def list(self, filter: BookingFilter | None = None) -> list[Booking]:
        with self._lock:
            snapshot = _snapshot(self._load())
        if filter is None:
            return list(snapshot)
        return [b for b in snapshot if filter.matches(b)]

    def subscribe(self, on_change: Callable[[BookingSnapshot], None]) -> Unsubscribe:
        with self._lock:
            unsubscribe = self._subscribers.add(on_change)
            self._subscribers.deliver(on_change, _snapshot(self._load()))
        return unsubscribe

    def _load(self) -> dict[str, Booking]:
        if not self._path.exists():
            return {}

        try:
            with open(self._path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (json.JSONDecodeError, IOError):
            # A corrupt file is treated as empty; the next write replaces it
            self._logger.exception("Failed to read bookings file", extra={"path": str(self._path)})
            return {}

        documents = data.get("bookings", []) if isinstance(data, dict) else None
        if not isinstance(documents, list):
            self._logger.error("Unexpected bookings file layout", extra={"path": str(self._path)})
            return {}

        bookings: dict[str, Booking] = {}
        for document in documents:
            try:
                booking = deserialize_booking(document)
            except (AttributeError, KeyError, ValueError, TypeError):
                self._logger.warning("Skipping malformed booking document", extra={"document": document})
                continue
            bookings[booking.id] = booking
        return bookings

    def _save(self, bookings: dict[str, Booking]) -> None:
        """Save bookings to the JSON file atomically."""
        temp_path = self._path.with_suffix(".json.tmp")
        data = {
            "version": 1,
            "bookings": [serialize_booking(b) for b in _snapshot(bookings)],
        }

        try:
            with open(temp_path, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2, ensure_ascii=False)
            temp_path.replace(self._path)
        except Exception:
            if temp_path.exists():
                try:
                    temp_path.unlink()
                except OSError:
                    pass
            raise


def serialize_booking(booking: Booking) -> dict[str, Any]:
    document: dict[str, Any] = {}
    for attr, key in _DOCUMENT_KEYS.items():
        value = getattr(booking, attr)
        document[key] = value.value if isinstance(value, BookingStatus) else value
    return document


def deserialize_booking(document: dict[str, Any]) -> Booking:
    values = {attr: document.get(key) for attr, key in _DOCUMENT_KEYS.items() if key in document}
    values["status"] = BookingStatus.parse(document.get("status", "pending"))
    for attr in ("notes", "created_at", "updated_at", "admin_remarks"):
        if values.get(attr) is None:
            values[attr] = ""
    # pre-normalization documents only carry startTime/endTime
    if values.get("time"):
        values["time"] = normalize_slot(values["time"])
    else:
        values["time"] = normalize_slot(None, values.get("start_time"), values.get("end_time"))
    for attr in ("id", "resource", "date", "time"):
        if not isinstance(values.get(attr), str) or not values[attr]:
            raise ValueError(f"Booking document has no {attr}")
    return Booking(**values)


def _snapshot(bookings: dict[str, Booking]) -> BookingSnapshot:
    return tuple(sorted(bookings.values(), key=booking_sort_key))
