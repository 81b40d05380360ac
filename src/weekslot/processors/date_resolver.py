# File: src/weekslot/processors/date_resolver.py
"""
Date constraint resolution.

Maps a semantic TimeConstraint plus a reference date to one ISO date with
explicit rules only; nothing here guesses.
"""

import datetime
import re
from dataclasses import replace
from typing import Optional

from weekslot.core.exceptions import ResolutionMismatchError
from weekslot.models import ConstraintKind, TimeConstraint, parse_iso_date
from weekslot.models.common import ISO_DATE_RE
from weekslot.utils.logger import setup_logger

logger = setup_logger(__name__)

# Indexed like datetime.date.weekday(): Monday == 0
WEEKDAYS = ('monday', 'tuesday', 'wednesday', 'thursday', 'friday', 'saturday', 'sunday')

SUPPORTED_RELATIVE = ('today', 'tomorrow')

_OR_SPLIT_RE = re.compile(r"\s+or\s+")


def first_weekday_token(value: str) -> str:
    """'Monday or Tuesday' -> 'monday'."""
    return _OR_SPLIT_RE.split(value.strip().lower())[0].strip()


def normalize_constraint(constraint: TimeConstraint) -> TimeConstraint:
    """
    Reclassify an ABSOLUTE constraint whose value is a weekday name as
    DAY_OF_WEEK. Extraction often labels "Monday" as an absolute date.
    Every other constraint is returned unchanged.
    """
    if constraint.kind == ConstraintKind.ABSOLUTE and first_weekday_token(constraint.value) in WEEKDAYS:
        logger.debug(f"Reclassifying ABSOLUTE '{constraint.value}' as DAY_OF_WEEK")
        return replace(constraint, kind=ConstraintKind.DAY_OF_WEEK)
    return constraint


def resolve_target_date(constraint: TimeConstraint, reference_date: datetime.date) -> str:
    """
    Resolve a constraint to a concrete ISO date.

    Args:
        constraint: Semantic time constraint
        reference_date: The session's "today"

    Returns:
        ISO date string (YYYY-MM-DD)
    """
    constraint = normalize_constraint(constraint)
    today = reference_date.isoformat()
    value = constraint.value.strip()

    if constraint.kind == ConstraintKind.ABSOLUTE:
        if ISO_DATE_RE.match(value):
            return value
        parsed = parse_iso_date(value)
        if parsed is not None:
            return parsed.isoformat()
        logger.warning(f"Could not parse absolute date '{value}', using reference date {today}")
        return today

    if constraint.kind == ConstraintKind.RELATIVE:
        token = value.lower()
        if token == 'today':
            return today
        if token == 'tomorrow':
            return (reference_date + datetime.timedelta(days=1)).isoformat()
        logger.warning(f"Unsupported relative phrase '{value}', using reference date {today}")
        return today

    if constraint.kind == ConstraintKind.DAY_OF_WEEK:
        target = first_weekday_token(value)
        if target not in WEEKDAYS:
            logger.warning(f"Unknown weekday '{value}', using reference date {today}")
            return today

        diff = WEEKDAYS.index(target) - reference_date.weekday()
        # A day already past this week rolls to next week; the same day is today
        if diff < 0:
            diff += 7
        return (reference_date + datetime.timedelta(days=diff)).isoformat()

    return today


def resolution_warning(constraint: TimeConstraint) -> Optional[str]:
    """
    Describe why a constraint could only be resolved by falling back to the
    reference date, or None when one of the explicit rules applies.
    """
    constraint = normalize_constraint(constraint)
    value = constraint.value.strip()

    if constraint.kind == ConstraintKind.RELATIVE and value.lower() not in SUPPORTED_RELATIVE:
        return f"'{value}' is not a supported relative date; assumed the reference date."
    if constraint.kind == ConstraintKind.DAY_OF_WEEK and first_weekday_token(value) not in WEEKDAYS:
        return f"'{value}' is not a weekday name; assumed the reference date."
    if constraint.kind == ConstraintKind.ABSOLUTE and parse_iso_date(value) is None:
        return f"'{value}' is not an ISO date; assumed the reference date."
    return None


def validate_resolved_date(resolved_date: str, constraint: TimeConstraint) -> bool:
    """
    Check that the resolved date satisfies the constraint.

    For DAY_OF_WEEK the weekday of resolved_date must equal the
    constraint value (case-insensitive). Other kinds always pass.
    """
    parsed = parse_iso_date(resolved_date)
    if parsed is None:
        return False

    if constraint.kind == ConstraintKind.DAY_OF_WEEK:
        return WEEKDAYS[parsed.weekday()] == constraint.value.strip().lower()

    return True


def resolve_and_validate(constraint: TimeConstraint, reference_date: datetime.date) -> str:
    """
    Normalize, resolve and validate in one step.

    Raises:
        ResolutionMismatchError: if the resolved date fails validation
    """
    normalized = normalize_constraint(constraint)
    resolved = resolve_target_date(normalized, reference_date)

    if not validate_resolved_date(resolved, normalized):
        logger.error(f"Resolved date {resolved} does not match '{normalized.value}'")
        raise ResolutionMismatchError(resolved, normalized.value)

    logger.info(f"Resolved {normalized.kind.value} '{normalized.value}' -> {resolved}")
    return resolved
