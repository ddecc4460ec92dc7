#!/usr/bin/env python3
"""
Print a month of the activity calendar from the configured booking store.

Usage:
  python3 scripts/show_calendar.py 2025-03
  python3 scripts/show_calendar.py 2025-03 --resource Library --data-file ./data/activity_bookings.json
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from activity_scheduler.application.exceptions import ValidationError
from activity_scheduler.application.use_cases.project_calendar import booking_stats, describe_day, project_month
from activity_scheduler.core.config import settings
from activity_scheduler.domain.entities.booking import BookingFilter
from activity_scheduler.domain.entities.calendar import DayStatus
from activity_scheduler.infrastructure.store.json_store import JsonBookingStore

_MARKERS = {
    DayStatus.AVAILABLE: " ",
    DayStatus.BOOKED: "*",
    DayStatus.PAST: ".",
}


def _print_grid(cells) -> None:
    print(" Su  Mo  Tu  We  Th  Fr  Sa")
    row = []
    for cell in cells:
        if cell.date is None:
            row.append("    ")
        else:
            row.append(f"{cell.date.day:>3}{_MARKERS[cell.status]}")
        if len(row) == 7:
            print("".join(row))
            row = []
    if row:
        print("".join(row))
    print("\n* booked   . past")


def main() -> int:
    parser = argparse.ArgumentParser(description="Show the activity calendar for a month.")
    parser.add_argument("month", help="YYYY-MM")
    parser.add_argument("--resource", default=None)
    parser.add_argument("--data-file", default=settings.BOOKINGS_DATA_FILE)
    args = parser.parse_args()

    store = JsonBookingStore(data_file=args.data_file)
    bookings = store.list(BookingFilter(resource=args.resource))

    try:
        cells = project_month(args.month, bookings)
    except ValidationError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2

    title = args.month if not args.resource else f"{args.month} ({args.resource})"
    print(title)
    print("-" * 28)
    _print_grid(cells)

    print()
    for cell in cells:
        if cell.status is DayStatus.BOOKED:
            print(f"{cell.key}:")
            for line in describe_day(cell.date, bookings).splitlines():
                print(f"  {line}")

    stats = booking_stats(bookings)
    print(f"\ntotal={stats.total} pending={stats.pending} approved={stats.approved} rejected={stats.rejected}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
