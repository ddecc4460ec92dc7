from abc import ABC, abstractmethod

from activity_scheduler.domain.entities.notification import NotificationPayload


class NotificationPort(ABC):
    @abstractmethod
    def notify(self, recipient: str, payload: NotificationPayload) -> None:
        """Deliver to a role name ("admin") or a user id. May raise NotificationDeliveryError."""
        raise NotImplementedError
