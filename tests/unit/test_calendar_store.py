# File: tests/unit/test_calendar_store.py
"""
Unit tests for CalendarStore.
"""

import pytest
from unittest.mock import patch
from weekslot.core.exceptions import CalendarLoadError, ErrorCode
from weekslot.processors.calendar_parser import CalendarParser, content_fingerprint
from weekslot.services import calendar_store
from weekslot.services.calendar_store import CalendarStore


class TestCalendarStore:
    """Tests for loading and caching calendars."""

    def test_not_loaded_initially(self, reference_date):
        store = CalendarStore(reference_date)

        assert store.is_loaded is False
        assert store.day_summary() == "None"

    def test_load_text(self, reference_date, sample_calendar_text):
        store = CalendarStore(reference_date)

        meta, events = store.load_text(sample_calendar_text)

        assert store.is_loaded is True
        assert meta.week_start == "2026-01-19"
        assert meta.content_fingerprint == content_fingerprint(sample_calendar_text)
        assert len(events) == 4

    def test_unchanged_text_not_reparsed(self, reference_date, sample_calendar_text):
        parser = CalendarParser()
        store = CalendarStore(reference_date, parser=parser)

        with patch.object(parser, "parse", wraps=parser.parse) as mock_parse:
            first = store.load_text(sample_calendar_text)
            second = store.load_text(sample_calendar_text)

        assert mock_parse.call_count == 1
        assert first[0] is second[0]
        assert first[1] == second[1]

    def test_changed_text_replaces_snapshot(self, reference_date, sample_calendar_text):
        store = CalendarStore(reference_date)
        store.load_text(sample_calendar_text)

        meta, events = store.load_text("Week of March 2, 2026\nMonday Mar 2, 2026\n- 9 AM - 10 AM: Kickoff")

        assert meta.week_start == "2026-03-02"
        assert [e.title for e in events] == ["Kickoff"]
        assert store.events_on("2026-01-20") == []

    def test_returned_events_are_copies(self, reference_date, sample_calendar_text):
        store = CalendarStore(reference_date)
        _, events = store.load_text(sample_calendar_text)

        events.clear()

        assert len(store.events) == 4

    def test_events_on(self, reference_date, sample_calendar_text):
        store = CalendarStore(reference_date)
        store.load_text(sample_calendar_text)

        assert [e.title for e in store.events_on("2026-01-20")] == ["Team Standup", "1:1 with Sarah"]
        assert store.events_on("2026-01-21") == []

    def test_day_summary(self, reference_date, sample_calendar_text):
        store = CalendarStore(reference_date)
        store.load_text(sample_calendar_text)

        assert store.day_summary() == (
            "Monday=2026-01-19 (2 events), Tuesday=2026-01-20 (2 events), Wednesday=2026-01-21 (0 events)"
        )

    def test_load_file(self, reference_date, calendar_file):
        meta, _ = CalendarStore(reference_date).load_file(calendar_file)

        assert meta.timezone == "America/New_York"

    def test_missing_file_raises(self, reference_date, tmp_path):
        with pytest.raises(CalendarLoadError) as exc:
            CalendarStore(reference_date).load_file(tmp_path / "missing.txt")

        assert exc.value.code == ErrorCode.LOAD_FAILED

    def test_binary_file_raises(self, reference_date, tmp_path):
        path = tmp_path / "calendar.bin"
        path.write_bytes(b"\xff\xfe\x00\x81")

        with pytest.raises(CalendarLoadError):
            CalendarStore(reference_date).load_file(path)

    def test_logger_is_under_package_namespace(self):
        """--debug raises every 'weekslot*' logger, so the store's must be one."""
        assert calendar_store.logger.name == "weekslot.services.calendar_store"
