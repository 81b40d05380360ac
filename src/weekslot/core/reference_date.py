# File: src/weekslot/core/reference_date.py
"""
The session's notion of "today".

A ReferenceDate is built once per session and passed to whatever needs
it; nothing reads a process-wide value.
"""

import datetime
from dataclasses import dataclass
from typing import Optional

from weekslot.core.exceptions import ReferenceDateError
from weekslot.models.common import ISO_DATE_RE
from weekslot.utils.logger import setup_logger

logger = setup_logger(__name__)


def parse_reference_date(date_str: str) -> datetime.date:
    """
    Parse YYYY-MM-DD (or a full ISO timestamp) into a date.

    Raises:
        ReferenceDateError: if the string is not a valid date
    """
    text = (date_str or '').strip()
    try:
        if ISO_DATE_RE.match(text):
            return datetime.date.fromisoformat(text)
        return datetime.datetime.fromisoformat(text.replace('Z', '+00:00')).date()
    except ValueError:
        raise ReferenceDateError(f'Invalid date format: "{date_str}". Use YYYY-MM-DD format.')


@dataclass(frozen=True)
class ReferenceDate:
    """Immutable reference date plus where it came from."""
    value: datetime.date
    source: str  # "cli", "env", "system" or "test"

    @classmethod
    def initialize(
        cls,
        cli_date: Optional[str] = None,
        env_date: Optional[str] = None,
        allow_system_date: bool = True
    ) -> 'ReferenceDate':
        """
        Pick the reference date with precedence CLI > environment > system clock.

        Raises:
            ReferenceDateError: if no date is given and the system clock is disallowed
        """
        if cli_date:
            ref = cls(parse_reference_date(cli_date), 'cli')
        elif env_date:
            ref = cls(parse_reference_date(env_date), 'env')
        elif allow_system_date:
            ref = cls(datetime.date.today(), 'system')
        else:
            raise ReferenceDateError(
                'REFERENCE_DATE not set. Tests must provide a date via --date flag or REFERENCE_DATE env var.'
            )

        logger.info(f"Using reference date {ref.iso} (source: {ref.source})")
        return ref

    @classmethod
    def fixed(cls, date_str: str) -> 'ReferenceDate':
        """Reference date pinned by a test or caller."""
        return cls(parse_reference_date(date_str), 'test')

    @property
    def iso(self) -> str:
        return self.value.isoformat()

    @property
    def weekday_name(self) -> str:
        return self.value.strftime('%A')

