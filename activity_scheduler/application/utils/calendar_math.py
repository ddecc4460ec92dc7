from __future__ import annotations

import calendar
import re
from datetime import date, datetime
from typing import Iterator
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from activity_scheduler.application.exceptions import ValidationError
from activity_scheduler.core.config import settings

_DATE_KEY_RE = re.compile(r"^(\d{4})-(\d{2})-(\d{2})$")
_YEAR_MONTH_RE = re.compile(r"^(\d{4})-(\d{1,2})$")


def school_timezone(name: str | None = None) -> ZoneInfo:
    return _safe_timezone(name or settings.SCHOOL_TIMEZONE)


def local_today(timezone: str | None = None) -> date:
    """Today's calendar date in the school's timezone."""
    return datetime.now(school_timezone(timezone)).date()


def parse_local_date_key(key: str) -> date:
    match = _DATE_KEY_RE.match(key.strip()) if isinstance(key, str) else None
    if not match:
        raise ValidationError(f"Invalid date '{key}', expected YYYY-MM-DD")
    year, month, day = (int(part) for part in match.groups())
    try:
        return date(year, month, day)
    except ValueError as e:
        raise ValidationError(f"Invalid date '{key}': {e}") from e


def to_local_date_key(value: date | str) -> str:
    """
    Format a calendar date as YYYY-MM-DD from its own year/month/day.

    Aware datetimes are NOT converted to UTC first: 23:30 on the 10th at
    UTC-05:00 is still the 10th.
    """
    if isinstance(value, str):
        value = parse_local_date_key(value)
    if not isinstance(value, date):
        raise ValidationError(f"Cannot use {value!r} as a calendar date")
    return f"{value.year:04d}-{value.month:02d}-{value.day:02d}"


def to_date(value: date | str) -> date:
    if isinstance(value, datetime):
        return date(value.year, value.month, value.day)
    if isinstance(value, date):
        return value
    return parse_local_date_key(value)


def is_past_date(value: date | str | None, today: date | None = None) -> bool:
    """True if the calendar date is strictly before today. Today is bookable."""
    if value is None:
        return False
    if today is None:
        today = local_today()
    return to_date(value) < to_date(today)


def parse_year_month(year_month: "str | tuple[int, int] | date") -> tuple[int, int]:
    if isinstance(year_month, date):
        return year_month.year, year_month.month
    if isinstance(year_month, tuple) and len(year_month) == 2:
        year, month = int(year_month[0]), int(year_month[1])
    elif isinstance(year_month, str) and _YEAR_MONTH_RE.match(year_month.strip()):
        year_str, month_str = year_month.strip().split("-")
        year, month = int(year_str), int(month_str)
    else:
        raise ValidationError(f"Invalid month '{year_month}', expected YYYY-MM")
    if not 1 <= month <= 12 or year < 1:
        raise ValidationError(f"Invalid month '{year_month}', expected YYYY-MM")
    return year, month


def days_in_month(year_month: "str | tuple[int, int] | date") -> Iterator[date | None]:
    """
    Yield a 7-column month grid: None for each weekday before the 1st
    (Sunday=0), then one date per day of the month.
    """
    year, month = parse_year_month(year_month)
    return _month_grid(year, month)


def month_bounds(year_month: "str | tuple[int, int] | date") -> tuple[str, str]:
    year, month = parse_year_month(year_month)
    _, last_day = calendar.monthrange(year, month)
    return (
        to_local_date_key(date(year, month, 1)),
        to_local_date_key(date(year, month, last_day)),
    )


def _month_grid(year: int, month: int) -> Iterator[date | None]:
    first_weekday, last_day = calendar.monthrange(year, month)
    # calendar uses Monday=0; the grid starts on Sunday
    for _ in range((first_weekday + 1) % 7):
        yield None
    for day in range(1, last_day + 1):
        yield date(year, month, day)


def _safe_timezone(name: str) -> ZoneInfo:
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        return ZoneInfo("UTC")
