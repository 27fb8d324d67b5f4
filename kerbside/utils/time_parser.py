# kerbside/utils/time_parser.py
"""
Helpers for turning sign-plate time strings into numeric time-of-day values.
Sign plates carry 24-hour "HH:MM:SS" strings; anything else is treated as absent.
"""

import re
from datetime import time
from typing import Optional

from kerbside.utils.values import is_blank

_TIME_RE = re.compile(r"^\s*(\d{1,2}):(\d{2})(?::(\d{2}))?\s*$")


def parse_time_of_day(value) -> Optional[float]:
    """
    Parse "HH:MM[:SS]" into minutes since midnight (seconds kept as a fraction).
    Returns None for missing or malformed input.
    """
    if is_blank(value):
        return None
    if isinstance(value, time):
        return value.hour * 60 + value.minute + value.second / 60

    match = _TIME_RE.match(str(value))
    if not match:
        return None

    hours, minutes = int(match.group(1)), int(match.group(2))
    seconds = int(match.group(3) or 0)
    # Sign plates write end-of-day as 24:00:00
    if hours == 24 and minutes == 0 and seconds == 0:
        return 24 * 60.0
    if hours > 23 or minutes > 59 or seconds > 59:
        return None
    return hours * 60 + minutes + seconds / 60


def hour_to_minutes(hour: int) -> float:
    """Query hours are always taken as HH:00:00."""
    return float(int(hour) * 60)


def format_minutes(minutes: Optional[float]) -> Optional[str]:
    """Inverse of parse_time_of_day, for logs and API output."""
    if minutes is None:
        return None
    total_seconds = int(round(minutes * 60))
    return f"{total_seconds // 3600:02d}:{(total_seconds % 3600) // 60:02d}:{total_seconds % 60:02d}"
