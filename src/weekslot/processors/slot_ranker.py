# File: src/weekslot/processors/slot_ranker.py
"""
Slot ranking.

Candidate slots are ordered by distance to a preferred minute of the day
(the "bias minute") when the request names a time, otherwise by start.
"""

import datetime
import re
from typing import List, Optional, Tuple

import pytz

from weekslot.core.config_manager import Config
from weekslot.models import Intent, TimeSlot
from weekslot.utils.logger import setup_logger
from weekslot.utils.time_format import format_minutes, parse_clock_time, to_minutes

logger = setup_logger(__name__)

# Abbreviations people (and extraction models) tend to use instead of IANA names
TIMEZONE_ALIASES = {
    'ET': 'America/New_York',
    'EST': 'America/New_York',
    'EDT': 'America/New_York',
    'CT': 'America/Chicago',
    'CST': 'America/Chicago',
    'CDT': 'America/Chicago',
    'MT': 'America/Denver',
    'MST': 'America/Denver',
    'MDT': 'America/Denver',
    'PT': 'America/Los_Angeles',
    'PST': 'America/Los_Angeles',
    'PDT': 'America/Los_Angeles',
    'BST': 'Europe/London',
    'CET': 'Europe/Paris',
    'CEST': 'Europe/Paris',
    'IST': 'Asia/Kolkata',
    'JST': 'Asia/Tokyo',
    'GMT': 'UTC',
    'Z': 'UTC',
}

RAW_TIME_RE = re.compile(r"(?<![\d:])(\d{1,2})(?::\d{2})?\s*(AM|PM)\b", re.IGNORECASE)


def get_timezone(label: str) -> datetime.tzinfo:
    """
    Resolve a timezone label (IANA name or common abbreviation).

    Raises:
        pytz.UnknownTimeZoneError: if the label is not known
    """
    clean = (label or '').strip()
    return pytz.timezone(TIMEZONE_ALIASES.get(clean.upper(), clean))


def convert_minute(minute: int, on_date: str, source_tz: str, target_tz: str) -> int:
    """
    Convert a minute of day on `on_date` from one timezone to another.

    The result is the minute of day in the target zone; a conversion that
    crosses midnight wraps around.
    """
    day = datetime.date.fromisoformat(on_date)
    hour, minute_part = divmod(minute, 60)
    naive = datetime.datetime.combine(day, datetime.time(hour % 24, minute_part))

    source = get_timezone(source_tz)
    target = get_timezone(target_tz)
    converted = source.localize(naive).astimezone(target)
    return converted.hour * 60 + converted.minute


def scrape_bias_minute(raw_request: str) -> Optional[int]:
    """First usable 'H AM/PM' or 'H:MM AM/PM' in the request text, hour precision."""
    for match in RAW_TIME_RE.finditer(raw_request or ''):
        hour = int(match.group(1))
        if 1 <= hour <= 12:
            return to_minutes(hour, 0, match.group(2))
    return None


def compute_bias_minute(intent: Intent, resolved_date: str, local_timezone: str = Config.LOCAL_TIMEZONE) -> Optional[int]:
    """
    Preferred minute of day for ranking, in the calendar's local time.

    An explicit specific_time wins; it is converted from the intent's
    timezone (default: local) into local_timezone. A time that cannot be
    parsed or converted is logged and ignored. Otherwise the raw request
    is scanned for an 'H AM/PM' pattern.
    """
    if intent.specific_time:
        try:
            requested = parse_clock_time(intent.specific_time)
            source_tz = intent.timezone or local_timezone
            bias = convert_minute(requested, resolved_date, source_tz, local_timezone)
            logger.info(
                f"Requested {intent.specific_time} {source_tz} is {format_minutes(bias)} {local_timezone}"
            )
            return bias
        except (ValueError, pytz.UnknownTimeZoneError) as e:
            logger.error(f"Timezone conversion failed for specific time {intent.specific_time!r}: {e}")

    return scrape_bias_minute(intent.raw_request)


def preferred_time_warning(
    bias_minute: Optional[int],
    working_hours: Tuple[int, int],
    intent: Optional[Intent] = None
) -> Optional[str]:
    """Message when the preferred time falls outside working hours."""
    if bias_minute is None:
        return None
    day_start, day_end = working_hours
    if day_start <= bias_minute <= day_end:
        return None

    local = format_minutes(bias_minute)
    if intent is not None and intent.specific_time:
        tz_suffix = f" {intent.timezone}" if intent.timezone else ""
        requested = f"{intent.specific_time}{tz_suffix} (which is {local} local time)"
    else:
        requested = f"{local}"
    return (
        f"I notice you requested {requested}, "
        f"but this falls outside our typical working hours "
        f"({format_minutes(day_start)} - {format_minutes(day_end)})."
    )


def rank_slots(slots: List[TimeSlot], bias_minute: Optional[int] = None) -> List[TimeSlot]:
    """
    Order slots by distance to bias_minute, or chronologically without one.

    The sort is stable: equally distant slots keep their discretization order.
    """
    if bias_minute is None:
        return sorted(slots, key=lambda s: s.start_min)
    return sorted(slots, key=lambda s: abs(s.start_min - bias_minute))


def select_proposals(
    slots: List[TimeSlot],
    bias_minute: Optional[int] = None,
    limit: int = Config.MAX_PROPOSALS
) -> List[TimeSlot]:
    """The first `limit` ranked slots."""
    return rank_slots(slots, bias_minute)[:limit]
