# File: src/weekslot/models/calendar.py

from dataclasses import dataclass, field
from typing import Dict, List, Tuple

@dataclass(frozen=True)
class CalendarEvent:
    """A busy block parsed from the calendar text."""
    date: str       # ISO "2026-01-20"
    start_min: int  # minutes since midnight
    end_min: int
    title: str

    def __post_init__(self):
        """Validate event data."""
        if self.end_min <= self.start_min:
            raise ValueError(f"Event end must be after start: {self.title}")


@dataclass
class ParsedCalendar:
    """Best-effort result of parsing one calendar text."""
    week_start: str
    working_hours: Tuple[int, int]
    timezone: str
    day_labels: Dict[str, str] = field(default_factory=dict)
    events: List[CalendarEvent] = field(default_factory=list)
    timezone_explicit: bool = False  # False when `timezone` is the default label

    def events_on(self, date: str) -> List[CalendarEvent]:
        """Events attached to one ISO date, in text order."""
        return [e for e in self.events if e.date == date]


@dataclass(frozen=True)
class CalendarMeta:
    """One parsed calendar snapshot, replaced wholesale when the text changes."""
    week_start: str
    working_hours: Tuple[int, int]
    timezone: str
    day_labels: Dict[str, str]
    content_fingerprint: str
    timezone_explicit: bool = False

    @classmethod
    def from_parsed(cls, parsed: ParsedCalendar, fingerprint: str) -> 'CalendarMeta':
        return cls(
            week_start=parsed.week_start,
            working_hours=parsed.working_hours,
            timezone=parsed.timezone,
            day_labels=dict(parsed.day_labels),
            content_fingerprint=fingerprint,
            timezone_explicit=parsed.timezone_explicit,
        )

    def to_dict(self) -> dict:
        return {
            'weekStart': self.week_start,
            'workingHours': list(self.working_hours),
            'timezone': self.timezone,
            'dayLabels': dict(self.day_labels),
            'fileHash': self.content_fingerprint,
        }
