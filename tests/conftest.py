# File: tests/conftest.py
"""
Pytest configuration and shared fixtures.
Provides reusable calendar text, intents and mocks for all tests.
"""

import pytest
from pathlib import Path
from unittest.mock import Mock
import sys

# Add src to path for imports
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT / "src"))

from weekslot.core.reference_date import ReferenceDate
from weekslot.core.orchestrator import Orchestrator
from weekslot.models import (
    CalendarEvent, ConstraintKind, Intent, TimeConstraint, TimeOfDay, TimeSlot
)
from weekslot.utils.time_format import format_minutes


# ==================== Calendar Text Fixtures ====================

SAMPLE_CALENDAR = """Week of January 19, 2026
Working hours: 9:00 AM - 5:00 PM
Timezone: America/New_York (Eastern)

Monday Jan 19, 2026
- 9:00 AM - 9:30 AM: Team Standup
- 11:00 AM - 12:00 PM: Design Review

Tuesday Jan 20, 2026
- 9:00 AM - 9:30 AM: Team Standup
- 2:00 PM - 3:00 PM: 1:1 with Sarah

Wednesday Jan 21, 2026
- No events
"""


@pytest.fixture
def sample_calendar_text():
    """A small but complete weekly calendar."""
    return SAMPLE_CALENDAR


@pytest.fixture
def calendar_file(tmp_path, sample_calendar_text):
    """Sample calendar written to disk."""
    path = tmp_path / "calendar.txt"
    path.write_text(sample_calendar_text, encoding="utf-8")
    return path


# ==================== Reference Date Fixtures ====================

@pytest.fixture
def reference_date():
    """Tuesday, January 20, 2026."""
    return ReferenceDate.fixed("2026-01-20")


@pytest.fixture
def reference_day(reference_date):
    """The reference date as a datetime.date."""
    return reference_date.value


# ==================== Event Fixtures ====================

@pytest.fixture
def tuesday_events():
    """Events on 2026-01-20, matching the sample calendar."""
    return [
        CalendarEvent(date="2026-01-20", start_min=540, end_min=570, title="Team Standup"),
        CalendarEvent(date="2026-01-20", start_min=840, end_min=900, title="1:1 with Sarah"),
    ]


@pytest.fixture
def create_slot():
    """Factory fixture for creating slots on 2026-01-20."""
    def _create(start_min: int, duration_min: int = 30, date: str = "2026-01-20") -> TimeSlot:
        return TimeSlot(
            date=date,
            start_min=start_min,
            end_min=start_min + duration_min,
            display_start=format_minutes(start_min),
            display_end=format_minutes(start_min + duration_min),
        )

    return _create


# ==================== Intent Fixtures ====================

@pytest.fixture
def create_intent():
    """Factory fixture for creating intents."""
    def _create(
        value: str = "Tuesday",
        kind: ConstraintKind = ConstraintKind.DAY_OF_WEEK,
        duration_min: int = 30,
        time_of_day: TimeOfDay = TimeOfDay.ANY,
        **kwargs
    ) -> Intent:
        return Intent(
            time_constraint=TimeConstraint(kind=kind, value=value),
            duration_min=duration_min,
            time_of_day=time_of_day,
            **kwargs
        )

    return _create


@pytest.fixture
def intent_payload():
    """Structured output as returned by intent extraction."""
    return {
        "durationMin": 30,
        "timeConstraint": {"type": "DAY_OF_WEEK", "value": "Tuesday", "modifier": None},
        "timeOfDay": "morning",
        "participants": ["Jordan", "Sarah"],
        "participantMode": "any_of",
        "specificTime": None,
        "timezone": None,
        "rawRequest": "30 min with Jordan or Sarah Tuesday morning",
    }


# ==================== Orchestrator Fixtures ====================

@pytest.fixture
def orchestrator(reference_date):
    """Orchestrator without a calendar."""
    return Orchestrator(reference_date)


@pytest.fixture
def loaded_orchestrator(orchestrator, sample_calendar_text):
    """Orchestrator with the sample calendar loaded."""
    orchestrator.load_calendar_text(sample_calendar_text)
    return orchestrator


# ==================== LLM Mock Fixtures ====================

@pytest.fixture
def mock_groq_response():
    """Factory for a mocked requests.Response from the Groq API."""
    def _create(content: str) -> Mock:
        response = Mock()
        response.raise_for_status.return_value = None
        response.json.return_value = {
            "choices": [{"message": {"role": "assistant", "content": content}}]
        }
        return response

    return _create


# ==================== Pytest Markers ====================

def pytest_configure(config):
    """Configure custom pytest markers."""
    config.addinivalue_line(
        "markers", "unit: mark test as a unit test"
    )
    config.addinivalue_line(
        "markers", "integration: mark test as an integration test"
    )
    config.addinivalue_line(
        "markers", "external: mark test as requiring external services"
    )
