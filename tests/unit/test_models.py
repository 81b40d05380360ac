# File: tests/unit/test_models.py
"""
Unit tests for data models.
Tests the dataclasses, enums and dictionary factories.
"""

import pytest
from weekslot.core.config_manager import Config
from weekslot.core.exceptions import ErrorCode, IntentValidationError
from weekslot.models import (
    CalendarEvent, CalendarMeta, ConstraintKind, ConstraintModifier, Confirmation,
    ParsedCalendar, ParticipantMode, ProposalResult, TimeConstraint,
    TimeOfDay, constraint_from_dict, intent_from_dict, parse_iso_date
)


# ==================== CalendarEvent Tests ====================

class TestCalendarEvent:
    """Tests for CalendarEvent dataclass."""

    def test_event_creation(self):
        event = CalendarEvent(date="2026-01-20", start_min=540, end_min=570, title="Standup")

        assert event.end_min - event.start_min == 30
        assert event.title == "Standup"

    def test_event_end_before_start_rejected(self):
        """Events must have positive duration."""
        with pytest.raises(ValueError):
            CalendarEvent(date="2026-01-20", start_min=600, end_min=600, title="Empty")


# ==================== Calendar Snapshot Tests ====================

class TestCalendarMeta:
    """Tests for ParsedCalendar and CalendarMeta."""

    def test_events_on_filters_by_date(self):
        parsed = ParsedCalendar(
            week_start="2026-01-19",
            working_hours=(540, 1020),
            timezone="UTC",
            events=[
                CalendarEvent("2026-01-19", 540, 570, "A"),
                CalendarEvent("2026-01-20", 540, 570, "B"),
            ],
        )

        assert [e.title for e in parsed.events_on("2026-01-20")] == ["B"]

    def test_meta_from_parsed(self):
        parsed = ParsedCalendar("2026-01-19", (480, 960), "UTC", {"2026-01-19": "Monday"})
        meta = CalendarMeta.from_parsed(parsed, "abc123")

        assert meta.working_hours == (480, 960)
        assert meta.content_fingerprint == "abc123"
        assert meta.to_dict()['fileHash'] == "abc123"
        assert meta.to_dict()['workingHours'] == [480, 960]
        assert meta.timezone_explicit is False

    def test_meta_keeps_explicit_timezone_flag(self):
        parsed = ParsedCalendar("2026-01-19", (540, 1020), "Europe/Paris", timezone_explicit=True)

        assert CalendarMeta.from_parsed(parsed, "abc123").timezone_explicit is True


# ==================== Slot Tests ====================

class TestTimeSlot:
    """Tests for TimeSlot and Confirmation."""

    def test_slot_label(self, create_slot):
        slot = create_slot(570)

        assert slot.label() == "9:30 AM - 10:00 AM"

    def test_slot_to_dict(self, create_slot):
        data = create_slot(780, 60).to_dict()

        assert data['displayStart'] == "1:00 PM"
        assert data['displayEnd'] == "2:00 PM"
        assert data['endMin'] == 840

    def test_confirmation_summary(self, create_slot):
        confirmation = Confirmation(slot_index=0, slot=create_slot(600), timestamp="2026-01-20T08:00:00")

        assert confirmation.summary() == "2026-01-20, 10:00 AM - 10:30 AM"


# ==================== Intent Tests ====================

class TestIntent:
    """Tests for Intent and its enums."""

    def test_time_of_day_windows(self):
        assert TimeOfDay.MORNING.window == (0, 720)
        assert TimeOfDay.AFTERNOON.window == (720, 1020)
        assert TimeOfDay.EVENING.window == (1020, 1440)
        assert TimeOfDay.ANY.window == (0, 1440)

    def test_specific_time_overrides_time_of_day(self, create_intent):
        intent = create_intent(time_of_day=TimeOfDay.MORNING, specific_time="3:00 PM")

        assert intent.effective_time_of_day == TimeOfDay.ANY

    def test_participants_phrase(self, create_intent):
        assert create_intent().participants_phrase() == "us"
        assert create_intent(
            participants=["Jordan", "Sarah"], participant_mode=ParticipantMode.ANY_OF
        ).participants_phrase() == "Jordan or Sarah"
        assert create_intent(participants=["Jordan", "Sarah"]).participants_phrase() == "Jordan and Sarah"


class TestIntentFromDict:
    """Tests for the intent factories."""

    def test_full_payload(self, intent_payload):
        intent = intent_from_dict(intent_payload)

        assert intent.time_constraint == TimeConstraint(ConstraintKind.DAY_OF_WEEK, "Tuesday")
        assert intent.duration_min == 30
        assert intent.time_of_day == TimeOfDay.MORNING
        assert intent.participants == ["Jordan", "Sarah"]
        assert intent.participant_mode == ParticipantMode.ANY_OF
        assert intent.specific_time is None
        assert intent.raw_request.startswith("30 min")

    def test_defaults(self):
        intent = intent_from_dict({"timeConstraint": {"type": "RELATIVE", "value": "tomorrow"}})

        assert intent.duration_min == 30
        assert intent.time_of_day == TimeOfDay.ANY
        assert intent.participant_mode == ParticipantMode.ALL_OF
        assert intent.participants == []

    def test_default_duration_from_config(self, monkeypatch):
        monkeypatch.setattr(Config, "DEFAULT_DURATION_MIN", 45)

        intent = intent_from_dict({"timeConstraint": {"type": "RELATIVE", "value": "today"}})

        assert intent.duration_min == 45

    def test_snake_case_keys(self):
        intent = intent_from_dict({
            "time_constraint": {"kind": "absolute", "value": "2026-01-22"},
            "duration_min": "45.0",
            "specific_time": "3 PM",
        })

        assert intent.time_constraint.kind == ConstraintKind.ABSOLUTE
        assert intent.duration_min == 45
        assert intent.specific_time == "3 PM"

    def test_unknown_time_of_day_falls_back(self):
        intent = intent_from_dict({
            "timeConstraint": {"type": "DAY_OF_WEEK", "value": "Monday"},
            "timeOfDay": "night",
        })

        assert intent.time_of_day == TimeOfDay.ANY

    @pytest.mark.parametrize("payload", [
        None,
        "Monday",
        {},
        {"timeConstraint": {"value": "Monday"}},
        {"timeConstraint": {"type": "SOMEDAY", "value": "Monday"}},
        {"timeConstraint": {"type": "DAY_OF_WEEK", "value": 3}},
        {"timeConstraint": {"type": "DAY_OF_WEEK", "value": "Monday"}, "durationMin": "half an hour"},
    ])
    def test_invalid_payloads_raise(self, payload):
        with pytest.raises(IntentValidationError) as exc:
            intent_from_dict(payload)

        assert exc.value.code == ErrorCode.EXTRACT_FAILED

    def test_constraint_modifier(self):
        constraint = constraint_from_dict({"type": "DAY_OF_WEEK", "value": "Monday", "modifier": "NEXT"})

        assert constraint.modifier == ConstraintModifier.NEXT

    def test_unknown_modifier_ignored(self):
        constraint = constraint_from_dict({"type": "DAY_OF_WEEK", "value": "Monday", "modifier": "after"})

        assert constraint.modifier is None


# ==================== Result Tests ====================

class TestProposalResult:
    """Tests for ProposalResult."""

    def test_failure(self):
        result = ProposalResult.failure("No slots available on 2026-01-20.", ErrorCode.NO_SLOTS, "2026-01-20")

        assert result.status == "fail"
        assert result.is_success() is False
        assert result.error.code == ErrorCode.NO_SLOTS
        assert result.resolved_date == "2026-01-20"
        assert str(result.error) == "NO_SLOTS: No slots available on 2026-01-20."

    def test_success_requires_proposals(self, create_slot):
        assert ProposalResult(status="success").is_success() is False
        assert ProposalResult(status="success", proposals=[create_slot(540)]).is_success() is True

    def test_to_dict(self, create_slot, create_intent):
        result = ProposalResult(
            status="success",
            proposals=[create_slot(600)],
            resolved_date="2026-01-20",
            bias_minute=600,
            intent=create_intent(),
        )
        data = result.to_dict()

        assert data['status'] == "success"
        assert data['resolvedDate'] == "2026-01-20"
        assert data['biasMinute'] == 600
        assert data['proposals'][0]['displayStart'] == "10:00 AM"
        assert 'error' not in data

    def test_failure_to_dict(self):
        data = ProposalResult.failure("Bad date", ErrorCode.RESOLVE_FAILED).to_dict()

        assert data['error'] == {'code': "RESOLVE_FAILED", 'message': "Bad date"}
        assert data['proposals'] == []


class TestParseIsoDate:
    """Tests for parse_iso_date."""

    def test_plain_and_timestamp(self):
        assert parse_iso_date("2026-01-20").isoformat() == "2026-01-20"
        assert parse_iso_date("2026-01-20T10:00:00Z").isoformat() == "2026-01-20"

    def test_invalid(self):
        assert parse_iso_date("") is None
        assert parse_iso_date(None) is None
        assert parse_iso_date("2026-02-30") is None
        assert parse_iso_date("next Monday") is None
