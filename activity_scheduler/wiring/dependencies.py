from functools import lru_cache
import logging

from activity_scheduler.application.ports.booking_store import BookingStorePort
from activity_scheduler.application.ports.notifier import NotificationPort
from activity_scheduler.application.use_cases.booking_workflow import BookingWorkflow
from activity_scheduler.application.use_cases.live_calendar import LiveCalendar
from activity_scheduler.application.utils.calendar_math import local_today
from activity_scheduler.core.config import settings
from activity_scheduler.infrastructure.notifications.log_notifier import LoggingNotifier
from activity_scheduler.infrastructure.notifications.memory_inbox import MemoryInboxNotifier
from activity_scheduler.infrastructure.notifications.webhook_notifier import WebhookNotifier
from activity_scheduler.infrastructure.store.json_store import JsonBookingStore
from activity_scheduler.infrastructure.store.memory_store import MemoryBookingStore


_booking_store: BookingStorePort | None = None
_live_calendar: LiveCalendar | None = None


def get_booking_store() -> BookingStorePort:
    global _booking_store
    if _booking_store is None:
        if settings.STORE_PROVIDER.lower() == "json":
            _booking_store = JsonBookingStore(data_file=settings.BOOKINGS_DATA_FILE)
        else:
            _booking_store = MemoryBookingStore()
    return _booking_store


@lru_cache
def get_notifier() -> NotificationPort:
    logger = logging.getLogger(__name__)
    provider = settings.NOTIFIER_PROVIDER.lower()

    if provider == "webhook":
        if not settings.NOTIFY_WEBHOOK_URL:
            if settings.ENV.lower() in {"dev", "local"}:
                logger.info("Using LoggingNotifier (NOTIFY_WEBHOOK_URL missing, ENV=dev/local)")
                return LoggingNotifier()
            raise ValueError("NOTIFY_WEBHOOK_URL is required for the webhook notifier.")
        return WebhookNotifier(endpoint=settings.NOTIFY_WEBHOOK_URL, timeout=settings.NOTIFY_TIMEOUT_SECONDS)

    if provider == "log":
        return LoggingNotifier()
    return MemoryInboxNotifier()


def get_booking_workflow() -> BookingWorkflow:
    return BookingWorkflow(
        store=get_booking_store(),
        notifier=get_notifier(),
        resources=settings.RESOURCES,
        time_slots=settings.TIME_SLOTS,
        departments=settings.DEPARTMENTS,
    )


def get_live_calendar() -> LiveCalendar:
    global _live_calendar
    if _live_calendar is None:
        _live_calendar = LiveCalendar(store=get_booking_store(), today=local_today)
    return _live_calendar


def reset_container() -> None:
    """Drop cached adapters so the next call rebuilds them from settings."""
    global _booking_store, _live_calendar
    if _live_calendar is not None:
        _live_calendar.close()
    _booking_store = None
    _live_calendar = None
    get_notifier.cache_clear()
