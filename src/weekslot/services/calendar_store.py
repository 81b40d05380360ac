# File: src/weekslot/services/calendar_store.py

from pathlib import Path
from typing import List, Optional, Tuple, Union

from weekslot.core.exceptions import CalendarLoadError
from weekslot.core.reference_date import ReferenceDate
from weekslot.models import CalendarEvent, CalendarMeta
from weekslot.processors.calendar_parser import CalendarParser, content_fingerprint
from weekslot.utils.logger import setup_logger

logger = setup_logger(__name__)


class CalendarStore:
    """
    Holds the current calendar snapshot.

    Text is re-parsed only when its content fingerprint changes, so
    repeated turns over an unchanged calendar reuse the previous result.
    """

    def __init__(self, reference_date: ReferenceDate, parser: Optional[CalendarParser] = None):
        self.reference_date = reference_date
        self.parser = parser or CalendarParser()
        self.meta: Optional[CalendarMeta] = None
        self.events: List[CalendarEvent] = []

    @property
    def is_loaded(self) -> bool:
        return self.meta is not None

    def load_text(self, text: str) -> Tuple[CalendarMeta, List[CalendarEvent]]:
        """Parse text unless it matches the cached snapshot."""
        fingerprint = content_fingerprint(text)
        if self.meta is not None and self.meta.content_fingerprint == fingerprint:
            logger.debug(f"Calendar unchanged ({fingerprint[:8]}), reusing parsed snapshot")
            return self.meta, list(self.events)

        logger.info(f"Calendar content hash: {fingerprint[:8]}")
        parsed = self.parser.parse(text, self.reference_date.value)
        self.meta = CalendarMeta.from_parsed(parsed, fingerprint)
        self.events = list(parsed.events)
        return self.meta, list(self.events)

    def load_file(self, path: Union[str, Path]) -> Tuple[CalendarMeta, List[CalendarEvent]]:
        """
        Read and parse a calendar file.

        Raises:
            CalendarLoadError: if the file cannot be read
        """
        path = Path(path)
        try:
            text = path.read_text(encoding='utf-8')
        except (OSError, UnicodeDecodeError) as e:
            logger.error(f"Failed to load calendar {path}: {e}")
            raise CalendarLoadError(f"Failed to load calendar: {e}")
        return self.load_text(text)

    def events_on(self, date: str) -> List[CalendarEvent]:
        """Events of the current snapshot on one ISO date."""
        return [e for e in self.events if e.date == date]

    def day_summary(self) -> str:
        """'Monday=2026-01-19 (2 events), ...' for prompts and logs."""
        if self.meta is None:
            return 'None'
        return ', '.join(
            f"{label}={date} ({len(self.events_on(date))} events)"
            for date, label in self.meta.day_labels.items()
        )
