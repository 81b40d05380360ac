# File: src/weekslot/models/api.py
"""
Result models handed back to callers of the engine.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional
from weekslot.core.exceptions import ErrorCode
from .constraint import Intent
from .slots import TimeSlot

@dataclass(frozen=True)
class ErrorInfo:
    """A recoverable engine failure."""
    message: str
    code: ErrorCode
    timestamp: str = field(default_factory=lambda: datetime.now().isoformat())

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"


@dataclass
class ProposalResult:
    """Outcome of one slot search."""
    status: str  # "success" or "fail"
    proposals: List[TimeSlot] = field(default_factory=list)
    resolved_date: Optional[str] = None
    bias_minute: Optional[int] = None
    preferred_time_warning: Optional[str] = None
    resolution_warning: Optional[str] = None  # set when the date fell back to the reference date
    error: Optional[ErrorInfo] = None
    intent: Optional[Intent] = None  # the request the proposals answer

    def is_success(self) -> bool:
        """Check if at least one slot was proposed."""
        return self.status == "success" and bool(self.proposals)

    @classmethod
    def failure(cls, message: str, code: ErrorCode, resolved_date: Optional[str] = None) -> 'ProposalResult':
        return cls(status="fail", resolved_date=resolved_date, error=ErrorInfo(message, code))

    def to_dict(self) -> dict:
        data = {
            'status': self.status,
            'resolvedDate': self.resolved_date,
            'biasMinute': self.bias_minute,
            'proposals': [slot.to_dict() for slot in self.proposals],
            'preferredTimeWarning': self.preferred_time_warning,
            'resolutionWarning': self.resolution_warning,
        }
        if self.error is not None:
            data['error'] = {'code': self.error.code.value, 'message': self.error.message}
        return data
