from __future__ import annotations

import logging

from activity_scheduler.application.ports.notifier import NotificationPort
from activity_scheduler.domain.entities.notification import NotificationPayload


class LoggingNotifier(NotificationPort):
    def __init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def notify(self, recipient: str, payload: NotificationPayload) -> None:
        self._logger.info(
            "WOULD_NOTIFY",
            extra={"recipient": recipient, "booking_id": payload.booking_id, "reason": payload.title},
        )
