# File: src/weekslot/processors/calendar_parser.py
"""
Calendar text parsing module.

Turns a free-form weekly calendar into a ParsedCalendar. Every non-empty
line is tried against an ordered list of rules; the first rule whose
pattern matches handles the line and unmatched lines are ignored. The
parser never raises on malformed text, it returns what it could read.

Expected shape (all sections optional):

    Week of January 20, 2026
    Working hours: 9:00 AM - 5:00 PM
    Timezone: America/New_York (Eastern)

    Monday Jan 20, 2026
    - 9:00 AM - 9:30 AM: Standup
"""

import datetime
import hashlib
import re
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple, Union

from weekslot.core.config_manager import Config
from weekslot.models import CalendarEvent, ParsedCalendar, parse_iso_date
from weekslot.utils.logger import setup_logger
from weekslot.utils.time_format import MINUTES_PER_DAY, to_minutes, format_hhmm

logger = setup_logger(__name__)

MONTHS = {
    'jan': 1, 'feb': 2, 'mar': 3, 'apr': 4, 'may': 5, 'jun': 6,
    'jul': 7, 'aug': 8, 'sep': 9, 'oct': 10, 'nov': 11, 'dec': 12,
}

_TIME = r"(\d{1,2})(?::(\d{2}))?\s*(AM|PM)?"

WEEK_OF_RE = re.compile(r"Week of\s+([A-Za-z]+)\s+(\d{1,2})(?:st|nd|rd|th)?,\s+(\d{4})", re.IGNORECASE)
WEEK_ALT_RE = re.compile(r"Week (?:beginning|of)?\s*([A-Za-z]+)\s+(\d{1,2})(?:st|nd|rd|th)?,?\s*(\d{4})", re.IGNORECASE)

WORKING_HOURS_RE = re.compile(rf"^(?:Working\s+)?hours:\s*{_TIME}\s*(?:-|to)\s*{_TIME}", re.IGNORECASE)
TIMEZONE_RE = re.compile(r"^Timezone:\s*(.+)", re.IGNORECASE)
DAY_HEADER_RE = re.compile(
    r"^(Monday|Tuesday|Wednesday|Thursday|Friday|Saturday|Sunday)?,?\s*"
    r"([A-Za-z]{3,})\s+(\d{1,2})(?:st|nd|rd|th)?(?:,?\s*(\d{4}))?",
    re.IGNORECASE,
)
EVENT_RE = re.compile(rf"^-\s*{_TIME}\s*(?:-|to)\s*{_TIME}[:\s]+(.+)", re.IGNORECASE)


def content_fingerprint(text: str) -> str:
    """SHA-256 hex digest of the calendar text."""
    return hashlib.sha256(text.encode('utf-8')).hexdigest()


def _date_from_parts(month_word: str, day: int, year: int) -> Optional[datetime.date]:
    """Build a date from 'Jan'/'January', day and year; None if it does not exist."""
    month = MONTHS.get(month_word[:3].lower())
    if month is None:
        return None
    try:
        return datetime.date(year, month, day)
    except ValueError:
        return None


def extract_anchor_date(text: str, reference_date: datetime.date) -> datetime.date:
    """
    Find the "Week of <Month Day, Year>" anchor.

    Falls back to reference_date when the phrase is missing or names a
    date that does not exist.
    """
    match = WEEK_OF_RE.search(text)
    if not match:
        match = WEEK_ALT_RE.search(text)
    if not match:
        return reference_date

    anchor = _date_from_parts(match.group(1), int(match.group(2)), int(match.group(3)))
    if anchor is None:
        logger.warning(f"Unparseable week anchor '{match.group(0)}', using reference date {reference_date}")
        return reference_date
    return anchor


def _token_minutes(hour: str, minute: Optional[str], meridiem: Optional[str]) -> Optional[int]:
    """Minutes for one captured time token, None if it cannot be a clock time."""
    m = int(minute or 0)
    if m > 59:
        return None
    value = to_minutes(int(hour), m, meridiem)
    if value > MINUTES_PER_DAY:
        return None
    return value


@dataclass
class _ParseState:
    """Mutable context threaded through the rule handlers."""
    anchor: datetime.date
    working_hours: Tuple[int, int]
    timezone: Optional[str] = None
    current_date: Optional[str] = None
    day_labels: Dict[str, str] = field(default_factory=dict)
    events: List[CalendarEvent] = field(default_factory=list)


class CalendarParser:
    """Line-oriented, first-match-wins calendar parser."""

    def __init__(self, default_working_hours: Tuple[int, int] = Config.DEFAULT_WORKING_HOURS):
        self.default_working_hours = default_working_hours
        self.logger = logger
        # Order matters: the first matching rule consumes the line
        self.rules = (
            ("working_hours", WORKING_HOURS_RE, self._on_working_hours),
            ("timezone", TIMEZONE_RE, self._on_timezone),
            ("day_header", DAY_HEADER_RE, self._on_day_header),
            ("event", EVENT_RE, self._on_event),
        )

    def parse(self, text: str, reference_date: Union[str, datetime.date]) -> ParsedCalendar:
        """
        Parse calendar text.

        Args:
            text: Raw calendar text
            reference_date: ISO date (or date) used when no week anchor is found

        Returns:
            ParsedCalendar with events in text order
        """
        reference = self._coerce_reference(reference_date)
        text = text or ""
        anchor = extract_anchor_date(text, reference)
        self.logger.debug(f"Parsed anchor: {anchor.isoformat()}")

        state = _ParseState(anchor=anchor, working_hours=self.default_working_hours)
        for raw_line in text.splitlines():
            line = raw_line.strip()
            if line:
                self.apply_rules(line, state)

        self.logger.info(
            f"Parsed calendar: week of {anchor.isoformat()}, "
            f"{len(state.events)} events over {len({e.date for e in state.events})} days"
        )
        return ParsedCalendar(
            week_start=anchor.isoformat(),
            working_hours=state.working_hours,
            timezone=state.timezone or Config.DEFAULT_TIMEZONE_LABEL,
            timezone_explicit=state.timezone is not None,
            day_labels=state.day_labels,
            events=state.events,
        )

    def apply_rules(self, line: str, state: _ParseState) -> Optional[str]:
        """Run the first matching rule on one trimmed line; returns its name."""
        for name, pattern, handler in self.rules:
            match = pattern.search(line)
            if match:
                handler(match, state)
                return name
        return None

    def _coerce_reference(self, reference_date: Union[str, datetime.date]) -> datetime.date:
        if isinstance(reference_date, datetime.datetime):
            return reference_date.date()
        if isinstance(reference_date, datetime.date):
            return reference_date
        parsed = parse_iso_date(reference_date)
        if parsed is None:
            self.logger.warning(f"Invalid reference date {reference_date!r}, using today")
            return datetime.date.today()
        return parsed

    # ---- rule handlers ----

    def _on_working_hours(self, match: re.Match, state: _ParseState) -> None:
        start = _token_minutes(match.group(1), match.group(2), match.group(3))
        end = _token_minutes(match.group(4), match.group(5), match.group(6))
        if start is None or end is None:
            self.logger.debug(f"Ignoring unreadable working hours: {match.group(0)!r}")
            return
        state.working_hours = (start, end)

    def _on_timezone(self, match: re.Match, state: _ParseState) -> None:
        label = re.sub(r"\(.*\)", "", match.group(1)).strip()
        if state.timezone is None and label:
            state.timezone = label

    def _on_day_header(self, match: re.Match, state: _ParseState) -> None:
        day_name, month_word, day_num, year = match.groups()
        resolved = _date_from_parts(month_word, int(day_num), int(year) if year else state.anchor.year)
        if resolved is None:
            # Unknown month or impossible day: keep the previous date context
            return

        state.current_date = resolved.isoformat()
        if day_name:
            state.day_labels[state.current_date] = day_name.capitalize()

    def _on_event(self, match: re.Match, state: _ParseState) -> None:
        if state.current_date is None:
            self.logger.debug(f"Dropping event before any day header: {match.group(0)!r}")
            return

        start_meridiem = match.group(3)
        start = _token_minutes(match.group(1), match.group(2), start_meridiem)
        # An end without meridiem inherits the start's ("2 PM - 3")
        end = _token_minutes(match.group(4), match.group(5), match.group(6) or start_meridiem)
        title = match.group(7).strip()

        if 'no events' in title.lower():
            return
        if start is None or end is None:
            self.logger.debug(f"Skipping event with unreadable time: {title}")
            return
        if start >= end:
            self.logger.debug(
                f"Skipping zero-duration event: {title} at {state.current_date} "
                f"({format_hhmm(start)}-{format_hhmm(end)})"
            )
            return

        state.events.append(CalendarEvent(date=state.current_date, start_min=start, end_min=end, title=title))


def parse_calendar(text: str, reference_date: Union[str, datetime.date]) -> ParsedCalendar:
    """Parse calendar text with the default parser."""
    return CalendarParser().parse(text, reference_date)
