# File: src/weekslot/models/enums.py

from enum import Enum
from typing import Tuple

class ConstraintKind(Enum):
    """How the extraction collaborator classified a time reference."""
    DAY_OF_WEEK = "DAY_OF_WEEK"  # "Monday", "Monday or Tuesday"
    RELATIVE = "RELATIVE"        # "today", "tomorrow"
    ABSOLUTE = "ABSOLUTE"        # "2026-01-20", "Jan 20"


class ConstraintModifier(Enum):
    THIS = "this"
    NEXT = "next"
    COMING = "coming"
    LAST = "last"


class TimeOfDay(Enum):
    """Requested part of the day."""
    MORNING = "morning"
    AFTERNOON = "afternoon"
    EVENING = "evening"
    ANY = "any"

    @property
    def window(self) -> Tuple[int, int]:
        """Minute-of-day window, end-exclusive."""
        return _TIME_OF_DAY_WINDOWS[self]


_TIME_OF_DAY_WINDOWS = {
    TimeOfDay.MORNING: (0, 720),
    TimeOfDay.AFTERNOON: (720, 1020),
    TimeOfDay.EVENING: (1020, 1440),
    TimeOfDay.ANY: (0, 1440),
}


class ParticipantMode(Enum):
    ALL_OF = "all_of"
    ANY_OF = "any_of"
    NONE = "none"

