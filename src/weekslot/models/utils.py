# File: src/weekslot/models/utils.py
"""
Factories that build typed models from loose dictionaries
(intent extraction output, JSON files).
"""

from typing import Any, Optional
from weekslot.core.config_manager import Config
from weekslot.core.exceptions import IntentValidationError
from weekslot.utils.logger import setup_logger
from .enums import ConstraintKind, ConstraintModifier, TimeOfDay, ParticipantMode
from .constraint import TimeConstraint, Intent

logger = setup_logger(__name__)


def _pick(data: dict, *keys: str, default: Any = None) -> Any:
    """First present key; accepts camelCase wire names and snake_case."""
    for key in keys:
        if key in data and data[key] is not None:
            return data[key]
    return default


def constraint_from_dict(data: dict) -> TimeConstraint:
    """Create TimeConstraint from dictionary, raising on unusable input."""
    if not isinstance(data, dict):
        raise IntentValidationError("timeConstraint must be an object")

    raw_kind = _pick(data, 'type', 'kind')
    if raw_kind is None:
        raise IntentValidationError("timeConstraint.type is required")
    try:
        # Handle both "DAY_OF_WEEK" and "ConstraintKind.DAY_OF_WEEK"
        kind = ConstraintKind(str(raw_kind).split('.')[-1].upper())
    except ValueError:
        raise IntentValidationError(f"Unknown timeConstraint.type: {raw_kind}")

    value = _pick(data, 'value')
    if not isinstance(value, str):
        raise IntentValidationError("timeConstraint.value must be a string")

    modifier: Optional[ConstraintModifier] = None
    raw_modifier = _pick(data, 'modifier')
    if raw_modifier is not None:
        try:
            modifier = ConstraintModifier(str(raw_modifier).lower())
        except ValueError:
            logger.warning(f"Ignoring unknown constraint modifier '{raw_modifier}'")

    return TimeConstraint(kind=kind, value=value, modifier=modifier)


def intent_from_dict(data: Any) -> Intent:
    """
    Validate the structured output of intent extraction and build an Intent.

    Raises:
        IntentValidationError: if the payload cannot describe a request
    """
    if not isinstance(data, dict):
        raise IntentValidationError(f"Invalid intent extracted: expected an object, got {type(data).__name__}")

    raw_constraint = _pick(data, 'timeConstraint', 'time_constraint')
    if raw_constraint is None:
        raise IntentValidationError("Invalid intent extracted: timeConstraint is required")
    constraint = constraint_from_dict(raw_constraint)

    raw_duration = _pick(data, 'durationMin', 'duration_min', default=Config.DEFAULT_DURATION_MIN)
    try:
        duration = int(float(raw_duration))  # Handle "30.0" strings
    except (TypeError, ValueError):
        raise IntentValidationError(f"Invalid intent extracted: durationMin '{raw_duration}' is not a number")

    raw_request = str(_pick(data, 'rawRequest', 'raw_request', default=''))
    if duration <= 0:
        logger.warning(f"Intent has zero duration, investigating query: {raw_request!r}")

    try:
        time_of_day = TimeOfDay(str(_pick(data, 'timeOfDay', 'time_of_day', default='any')).lower())
    except ValueError:
        time_of_day = TimeOfDay.ANY

    try:
        mode = ParticipantMode(str(_pick(data, 'participantMode', 'participant_mode', default='all_of')).lower())
    except ValueError:
        mode = ParticipantMode.ALL_OF

    participants = _pick(data, 'participants', default=[])
    if not isinstance(participants, list):
        participants = [participants]

    specific_time = _pick(data, 'specificTime', 'specific_time')
    timezone = _pick(data, 'timezone')

    return Intent(
        time_constraint=constraint,
        duration_min=duration,
        time_of_day=time_of_day,
        participants=[str(p) for p in participants],
        participant_mode=mode,
        specific_time=str(specific_time) if specific_time else None,
        timezone=str(timezone) if timezone else None,
        raw_request=raw_request,
    )
