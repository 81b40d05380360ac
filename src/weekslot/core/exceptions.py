# File: src/weekslot/core/exceptions.py
"""
Engine error types.

All of them are local, recoverable conditions. The orchestrator turns them
into typed ProposalResult values before they reach a caller.
"""

from enum import Enum


class ErrorCode(Enum):
    """Codes carried by failed ProposalResults."""
    LOAD_FAILED = "LOAD_FAILED"
    NO_CALENDAR = "NO_CALENDAR"
    EXTRACT_FAILED = "EXTRACT_FAILED"
    RESOLVE_FAILED = "RESOLVE_FAILED"
    NO_SLOTS = "NO_SLOTS"
    INVALID_SELECTION = "INVALID_SELECTION"


class SchedulingError(Exception):
    """Base class for availability engine errors."""
    code = ErrorCode.RESOLVE_FAILED

    def __init__(self, message: str, code: ErrorCode = None):
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code


class CalendarLoadError(SchedulingError):
    code = ErrorCode.LOAD_FAILED


class IntentValidationError(SchedulingError):
    code = ErrorCode.EXTRACT_FAILED


class ResolutionMismatchError(SchedulingError):
    """Resolved date does not satisfy the constraint it was resolved from."""
    code = ErrorCode.RESOLVE_FAILED

    def __init__(self, resolved_date: str, constraint_value: str):
        super().__init__(
            f"Resolved date {resolved_date} does not match semantic intent {constraint_value}"
        )
        self.resolved_date = resolved_date
        self.constraint_value = constraint_value


class NoSlotsAvailableError(SchedulingError):
    code = ErrorCode.NO_SLOTS

    def __init__(self, target_date: str):
        super().__init__(f"No slots available on {target_date}.")
        self.target_date = target_date


class ReferenceDateError(SchedulingError):
    code = ErrorCode.RESOLVE_FAILED


class InvalidSelectionError(SchedulingError):
    """Reply does not pick one of the proposed slots."""
    code = ErrorCode.INVALID_SELECTION
