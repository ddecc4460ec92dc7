from __future__ import annotations

import logging

import httpx

from activity_scheduler.application.exceptions import NotificationDeliveryError
from activity_scheduler.application.ports.notifier import NotificationPort
from activity_scheduler.domain.entities.notification import NotificationPayload


class WebhookNotifier(NotificationPort):
    """POSTs each notification as JSON to an inbox service."""

    def __init__(self, endpoint: str, timeout: float = 5.0, client: httpx.Client | None = None) -> None:
        self._endpoint = endpoint
        self._client = client or httpx.Client(timeout=timeout)
        self._logger = logging.getLogger(__name__)

    def notify(self, recipient: str, payload: NotificationPayload) -> None:
        body = {
            "recipient": recipient,
            "notification": {
                "title": payload.title,
                "message": payload.message,
                "type": payload.type,
                "requestId": payload.booking_id,
                "senderId": payload.sender_id,
                "recipientRole": payload.recipient_role,
                "recipientId": payload.recipient_id,
                "priority": payload.priority,
                "status": payload.status,
                "createdAt": payload.created_at,
                "read": payload.read,
            },
        }
        try:
            resp = self._client.post(self._endpoint, json=body)
        except httpx.HTTPError as e:
            raise NotificationDeliveryError(f"Notification transport failed: {e}") from e

        if resp.status_code >= 400:
            self._logger.error(
                "Notification webhook rejected",
                extra={
                    "status": resp.status_code,
                    "recipient": recipient,
                    "booking_id": payload.booking_id,
                    "body": resp.text[:500],
                },
            )
            raise NotificationDeliveryError(f"Notification webhook returned {resp.status_code}")

    def close(self) -> None:
        self._client.close()
