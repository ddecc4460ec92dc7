from __future__ import annotations

import re

_CLOCK_PATTERNS = [
    re.compile(r"^(\d{1,2}):(\d{2})\s*(am|pm)$"),
    re.compile(r"^(\d{1,2}):(\d{2})$"),
]
_RANGE_PATTERN = re.compile(r"^(.+?)\s*-\s*(.+)$")


def parse_clock(label: str | None) -> tuple[int, int] | None:
    """Parse '10:00 AM' or '14:30' into (hour, minute). Returns None if unparseable."""
    if not label:
        return None
    normalized = label.lower().strip()

    for pattern in _CLOCK_PATTERNS:
        match = pattern.match(normalized)
        if not match:
            continue
        hour = int(match.group(1))
        minute = int(match.group(2))
        am_pm = match.group(3) if match.lastindex == 3 else None

        if am_pm is not None:
            if not 1 <= hour <= 12:
                return None
            if am_pm == "pm" and hour != 12:
                hour += 12
            elif am_pm == "am" and hour == 12:
                hour = 0

        if 0 <= hour <= 23 and 0 <= minute <= 59:
            return (hour, minute)
        return None

    return None


def to_minutes(label: str | None) -> int | None:
    parsed = parse_clock(label)
    if parsed is None:
        return None
    hour, minute = parsed
    return hour * 60 + minute


def format_clock(hour: int, minute: int) -> str:
    suffix = "AM" if hour < 12 else "PM"
    return f"{hour % 12 or 12:02d}:{minute:02d} {suffix}"


def canonical_clock(label: str | None) -> str:
    """'9:00', '09:00 am' and '09:00 AM' all become '09:00 AM'. Unparseable labels are only stripped."""
    parsed = parse_clock(label)
    if parsed is None:
        return (label or "").strip()
    return format_clock(*parsed)


def normalize_slot(time: str | None, start_time: str | None = None, end_time: str | None = None) -> str:
    """
    Canonical slot label. A start/end pair becomes '<start> - <end>' so both
    request shapes compare on a single `time` value, and every clock reading
    is written as 'HH:MM AM/PM'.
    """
    start = (start_time or "").strip()
    end = (end_time or "").strip()
    if start and end:
        return f"{canonical_clock(start)} - {canonical_clock(end)}"

    label = (time or "").strip()
    match = _RANGE_PATTERN.match(label)
    if match:
        return f"{canonical_clock(match.group(1))} - {canonical_clock(match.group(2))}"
    return canonical_clock(label)


def slot_sort_key(label: str) -> tuple[int, str]:
    leading = label.split(" - ", 1)[0]
    minutes = to_minutes(leading)
    return (minutes if minutes is not None else 24 * 60, label)
