# app/core.py

import re

# Turnaround after every service, never shown to customers
CLEANUP_MINUTES = 5
# Candidate start times are aligned to this grid
SLOT_STEP_MINUTES = 15
# Same-day bookings must start at least this long after "now"
LEAD_TIME_MINUTES = 120

TIME_PATTERN = r"^([0-1]?[0-9]|2[0-3]):[0-5][0-9]$"
DATE_PATTERN = r"^\d{4}-\d{2}-\d{2}$"

_time_re = re.compile(TIME_PATTERN)


def is_valid_time(value: str) -> bool:
    return bool(_time_re.match(value))


def time_to_minutes(value: str) -> int:
    """Convert "HH:MM" to minutes since midnight. Callers validate the format."""
    hours, minutes = value.split(":")
    return int(hours) * 60 + int(minutes)


def minutes_to_time(total: int) -> str:
    """Convert minutes since midnight to zero-padded "HH:MM" (no 24h wrap)."""
    hours, minutes = divmod(total, 60)
    return f"{hours:02d}:{minutes:02d}"


def occupied_interval(start: int, duration: int, cleanup: int = CLEANUP_MINUTES) -> tuple[int, int]:
    """Half-open [start, end) a booking reserves, cleanup buffer included."""
    return start, start + duration + cleanup


def overlaps(a_start, a_end, b_start, b_end) -> bool:
    # touching endpoints do not overlap
    return a_start < b_end and a_end > b_start
