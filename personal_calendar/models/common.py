# File: personal_calendar/models/common.py

from datetime import date, datetime, time
from typing import Iterable, Optional

TIME_FORMATS = ("%H:%M", "%H:%M:%S")


def parse_date(date_str: Optional[str], formats: Iterable[str] = ("%Y-%m-%d", "%m/%d/%Y")) -> Optional[date]:
    """Parse a date string trying each format in turn. Returns None for empty input."""
    if date_str is None or not date_str.strip():
        return None
    clean_str = date_str.strip()
    for fmt in formats:
        try:
            return datetime.strptime(clean_str, fmt).date()
        except ValueError:
            continue
    raise ValueError(f"Invalid date: {date_str!r}")


def parse_time(time_str: Optional[str]) -> Optional[time]:
    """
    Parse a naive 24-hour HH:MM or HH:MM:SS time. Returns None for empty input.

    UTC offsets and fractional seconds are rejected.
    """
    if time_str is None or not time_str.strip():
        return None
    clean_str = time_str.strip()
    for fmt in TIME_FORMATS:
        try:
            return datetime.strptime(clean_str, fmt).time()
        except ValueError:
            continue
    raise ValueError(f"Invalid time: {time_str!r}")


def format_time(value: Optional[time]) -> str:
    """
    Format a time as HH:MM, or HH:MM:SS when it carries seconds.

    Microseconds are not written; a time with a sub-second part is
    truncated to whole seconds.
    """
    if value is None:
        return ""
    if value.second or value.microsecond:
        return value.strftime("%H:%M:%S")
    return value.strftime("%H:%M")
