# File: src/weekslot/processors/slot_finder.py
"""
Free slot computation.

Builds occupied intervals from one day's events, finds the gaps inside
working hours and cuts them into bookable slots of the requested length.
"""

from typing import Iterable, List, Tuple, Union

from weekslot.core.config_manager import Config
from weekslot.core.exceptions import NoSlotsAvailableError
from weekslot.models import CalendarEvent, TimeOfDay, TimeSlot
from weekslot.processors.intervals import Interval, merge_intervals
from weekslot.utils.logger import setup_logger
from weekslot.utils.time_format import format_minutes, format_hhmm

logger = setup_logger(__name__)

BUFFER = Config.BUFFER_MINUTES


def build_occupied_intervals(events: Iterable[CalendarEvent], buffer: int = BUFFER) -> List[Interval]:
    """
    One interval per valid event, sorted by start.

    An event is padded by `buffer` minutes only when the next event starts
    less than 2 * buffer after it ends, so back-to-back meetings get some
    breathing room and isolated ones do not.
    """
    valid = sorted((e for e in events if e.end_min > e.start_min), key=lambda e: e.start_min)

    occupied = []
    for i, event in enumerate(valid):
        end = event.end_min
        if i + 1 < len(valid) and valid[i + 1].start_min - event.end_min < buffer * 2:
            end += buffer
        occupied.append(Interval(event.start_min, end))
    return occupied


def find_gaps(merged: List[Interval], working_hours: Tuple[int, int], duration_min: int) -> List[Interval]:
    """Free stretches of at least duration_min inside working hours."""
    day_start, day_end = working_hours

    gaps = []
    cursor = day_start
    for busy in merged:
        gap_end = min(busy.start, day_end)
        if cursor < gap_end and gap_end - cursor >= duration_min:
            gaps.append(Interval(cursor, gap_end))
        cursor = max(cursor, busy.end)
    if cursor < day_end and day_end - cursor >= duration_min:
        gaps.append(Interval(cursor, day_end))
    return gaps


def _round_up(minute: int, step: int) -> int:
    return -(-minute // step) * step


def discretize(
    gaps: List[Interval],
    duration_min: int,
    target_date: str,
    timeframe: TimeOfDay = TimeOfDay.ANY,
    limit: int = Config.MAX_CANDIDATE_SLOTS
) -> List[TimeSlot]:
    """Cut gaps, clipped to the timeframe window, into candidate slots."""
    tf_start, tf_end = timeframe.window
    step = Config.SHORT_MEETING_STEP if duration_min <= 30 else Config.LONG_MEETING_STEP

    slots: List[TimeSlot] = []
    for gap in gaps:
        start = max(gap.start, tf_start)
        end = min(gap.end, tf_end)
        if end - start < duration_min:
            continue

        slot_start = _round_up(start, Config.SLOT_ROUNDING)
        while slot_start + duration_min <= end and len(slots) < limit:
            slots.append(TimeSlot(
                date=target_date,
                start_min=slot_start,
                end_min=slot_start + duration_min,
                display_start=format_minutes(slot_start),
                display_end=format_minutes(slot_start + duration_min),
            ))
            slot_start += step

        if len(slots) >= limit:
            break

    return slots


def compute_free_slots(
    working_hours: Tuple[int, int],
    day_events: Iterable[CalendarEvent],
    duration_min: int,
    target_date: str,
    timeframe: Union[TimeOfDay, str, None] = TimeOfDay.ANY
) -> List[TimeSlot]:
    """
    Compute bookable slots for one date, in chronological order.

    Args:
        working_hours: (start, end) minutes of the working day
        day_events: Events on target_date
        duration_min: Requested meeting length
        target_date: ISO date the slots belong to
        timeframe: Part-of-day filter (morning/afternoon/evening/any)

    Returns:
        Up to MAX_CANDIDATE_SLOTS slots

    Raises:
        NoSlotsAvailableError: if nothing fits
    """
    if not isinstance(timeframe, TimeOfDay):
        timeframe = TimeOfDay(timeframe or 'any')

    if duration_min <= 0:
        logger.warning(f"Cannot book a {duration_min}-minute meeting on {target_date}")
        raise NoSlotsAvailableError(target_date)

    events = list(day_events)
    occupied = build_occupied_intervals(events)
    merged = merge_intervals(occupied)

    logger.debug(f"Events for {target_date}:")
    for e in sorted(events, key=lambda e: e.start_min):
        logger.debug(f"  {format_hhmm(e.start_min)} - {format_hhmm(e.end_min)}: {e.title}")
    logger.debug("Merged occupied intervals:")
    for m in merged:
        logger.debug(f"  {format_hhmm(m.start)} - {format_hhmm(m.end)}")

    gaps = find_gaps(merged, working_hours, duration_min)

    logger.debug(f"Free intervals for {target_date}:")
    for g in gaps:
        logger.debug(f"  {format_hhmm(g.start)} - {format_hhmm(g.end)}")

    slots = discretize(gaps, duration_min, target_date, timeframe)
    if not slots:
        logger.warning(f"No {duration_min}-minute slots on {target_date} ({timeframe.value})")
        raise NoSlotsAvailableError(target_date)

    logger.info(f"Found {len(slots)} candidate slots on {target_date}")
    return slots
