from weekslot.core.exceptions import ErrorCode
from .enums import ConstraintKind, ConstraintModifier, TimeOfDay, ParticipantMode
from .common import parse_iso_date
from .calendar import CalendarEvent, ParsedCalendar, CalendarMeta
from .constraint import TimeConstraint, Intent
from .slots import TimeSlot, Confirmation
from .api import ErrorInfo, ProposalResult
from .utils import constraint_from_dict, intent_from_dict

__all__ = [
    "ConstraintKind",
    "ConstraintModifier",
    "TimeOfDay",
    "ParticipantMode",
    "ErrorCode",
    "parse_iso_date",
    "CalendarEvent",
    "ParsedCalendar",
    "CalendarMeta",
    "TimeConstraint",
    "Intent",
    "TimeSlot",
    "Confirmation",
    "ErrorInfo",
    "ProposalResult",
    "constraint_from_dict",
    "intent_from_dict",
]
