# File: src/weekslot/models/constraint.py

from dataclasses import dataclass, field
from typing import List, Optional
from weekslot.core.config_manager import Config
from .enums import ConstraintKind, ConstraintModifier, TimeOfDay, ParticipantMode

@dataclass(frozen=True)
class TimeConstraint:
    """Semantic time reference, e.g. DAY_OF_WEEK "Monday"."""
    kind: ConstraintKind
    value: str
    modifier: Optional[ConstraintModifier] = None


@dataclass(frozen=True)
class Intent:
    """Structured scheduling request produced by intent extraction."""
    time_constraint: TimeConstraint
    duration_min: int = Config.DEFAULT_DURATION_MIN
    time_of_day: TimeOfDay = TimeOfDay.ANY
    participants: List[str] = field(default_factory=list)
    participant_mode: ParticipantMode = ParticipantMode.ALL_OF
    specific_time: Optional[str] = None  # "3:00 PM"
    timezone: Optional[str] = None       # timezone of specific_time
    raw_request: str = ""

    @property
    def effective_time_of_day(self) -> TimeOfDay:
        """An explicit time overrides the part-of-day filter."""
        return TimeOfDay.ANY if self.specific_time else self.time_of_day

    def participants_phrase(self) -> str:
        if not self.participants:
            return "us"
        joiner = " or " if self.participant_mode == ParticipantMode.ANY_OF else " and "
        return joiner.join(self.participants)
