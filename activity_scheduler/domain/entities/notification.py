from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class NotificationPayload:
    title: str
    message: str
    type: str  # "activity_request" | "activity_decision"
    booking_id: str
    sender_id: str | None = None
    recipient_role: str | None = None  # "admin" for new requests
    recipient_id: str | None = None  # teacher id for decisions
    priority: str = "normal"
    status: str | None = None
    created_at: str = ""
    read: bool = False
