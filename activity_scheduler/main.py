from fastapi import FastAPI

from activity_scheduler.api.v1.bookings import router as bookings_router
from activity_scheduler.core.config import settings
from activity_scheduler.core.log_config import configure_logging

configure_logging(settings.LOG_LEVEL)

app = FastAPI(title="Activity Scheduler", version="1.0.0")

app.include_router(bookings_router, prefix="/api/v1", tags=["bookings"])


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}
