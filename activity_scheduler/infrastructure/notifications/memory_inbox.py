from __future__ import annotations

import logging
import threading

from activity_scheduler.application.ports.notifier import NotificationPort
from activity_scheduler.domain.entities.notification import NotificationPayload


class MemoryInboxNotifier(NotificationPort):
    """Keeps delivered notifications per recipient, newest last."""

    def __init__(self) -> None:
        self._inboxes: dict[str, list[NotificationPayload]] = {}
        self._lock = threading.Lock()
        self._logger = logging.getLogger(__name__)

    def notify(self, recipient: str, payload: NotificationPayload) -> None:
        with self._lock:
            self._inboxes.setdefault(recipient, []).append(payload)
        self._logger.info(
            "Notification stored",
            extra={"recipient": recipient, "booking_id": payload.booking_id, "status": payload.status},
        )

    def inbox(self, recipient: str) -> list[NotificationPayload]:
        with self._lock:
            return list(self._inboxes.get(recipient, []))

    def unread_count(self, recipient: str) -> int:
        return sum(1 for n in self.inbox(recipient) if not n.read)
