from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_RESOURCES = [
    "Auditorium",
    "Gymnasium",
    "Library",
    "Computer Lab",
    "Science Lab",
    "Art Room",
    "Music Room",
    "Conference Room",
    "Cafeteria",
    "Outdoor Field",
]

DEFAULT_DEPARTMENTS = [
    "Mathematics",
    "Science",
    "English",
    "History",
    "Physical Education",
    "Art",
    "Music",
    "Computer Science",
    "Foreign Languages",
    "Administration",
]

DEFAULT_TIME_SLOTS = [
    "08:00 AM",
    "09:00 AM",
    "10:00 AM",
    "11:00 AM",
    "12:00 PM",
    "01:00 PM",
    "02:00 PM",
    "03:00 PM",
    "04:00 PM",
    "05:00 PM",
]


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    ENV: str = "dev"
    LOG_LEVEL: str = "INFO"
    SCHOOL_TIMEZONE: str = "UTC"

    STORE_PROVIDER: str = "memory"  # "memory" | "json"
    BOOKINGS_DATA_FILE: str = "./data/activity_bookings.json"

    NOTIFIER_PROVIDER: str = "memory"  # "memory" | "log" | "webhook"
    NOTIFY_WEBHOOK_URL: str | None = None
    NOTIFY_TIMEOUT_SECONDS: float = 5.0

    RESOURCES: list[str] = list(DEFAULT_RESOURCES)
    DEPARTMENTS: list[str] = list(DEFAULT_DEPARTMENTS)
    TIME_SLOTS: list[str] = list(DEFAULT_TIME_SLOTS)


settings = Settings()
