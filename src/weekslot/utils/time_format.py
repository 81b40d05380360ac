# File: src/weekslot/utils/time_format.py
"""
Minute-of-day helpers shared by the parser, the slot finder and the ranker.
"""

import re
from typing import Optional

MINUTES_PER_DAY = 1440

CLOCK_TIME_RE = re.compile(r"^\s*(\d{1,2})(?::(\d{2}))?\s*([AaPp]\.?[Mm]\.?)?\s*$")


def format_minutes(minutes: int) -> str:
    """540 -> '9:00 AM', 0 -> '12:00 AM', 780 -> '1:00 PM'."""
    hour, minute = divmod(minutes, 60)
    meridiem = "PM" if hour % 24 >= 12 else "AM"
    hour = hour % 12 or 12
    return f"{hour}:{minute:02d} {meridiem}"


def format_hhmm(minutes: int) -> str:
    """570 -> '09:30'."""
    hour, minute = divmod(minutes, 60)
    return f"{hour:02d}:{minute:02d}"


def to_minutes(hour: int, minute: int = 0, meridiem: Optional[str] = None) -> int:
    """
    Convert a clock reading to minutes since midnight.

    With a meridiem the usual 12-hour rules apply (12 AM is midnight,
    12 PM is noon). Without one the hour is taken as a 24-hour value.
    An hour above 12 is always 24-hour, so "14:00 PM" stays 14:00.
    """
    if meridiem and hour <= 12:
        ampm = meridiem.replace('.', '').upper()
        if ampm == 'PM' and hour != 12:
            hour += 12
        elif ampm == 'AM' and hour == 12:
            hour = 0
    return hour * 60 + minute


def parse_clock_time(text: str) -> int:
    """
    Parse "3 PM", "3:30pm", "15:00" into minutes since midnight.

    Raises:
        ValueError: if text is not a clock time
    """
    match = CLOCK_TIME_RE.match(text or "")
    if not match:
        raise ValueError(f"Not a clock time: {text!r}")

    hour = int(match.group(1))
    minute = int(match.group(2) or 0)
    meridiem = match.group(3)
    if minute > 59 or hour > 23 or (meridiem and hour == 0):
        raise ValueError(f"Not a clock time: {text!r}")
    return to_minutes(hour, minute, meridiem)
