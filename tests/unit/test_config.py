# File: tests/unit/test_config.py
"""
Unit tests for configuration.
"""

from weekslot.core.config_manager import Config


class TestConfig:
    """Tests for Config."""

    def test_engine_defaults(self):
        assert Config.DEFAULT_WORKING_HOURS == (540, 1020)
        assert Config.BUFFER_MINUTES == 5
        assert Config.MAX_CANDIDATE_SLOTS == 20
        assert Config.MAX_PROPOSALS == 5

    def test_validate_missing_key(self, monkeypatch):
        monkeypatch.setattr(Config, "GROQ_API_KEY", None)

        assert "GROQ_API_KEY not set" in Config.validate()

    def test_validate_ok(self, monkeypatch):
        monkeypatch.setattr(Config, "GROQ_API_KEY", "gsk_test_key_0123456789")

        assert Config.validate() == []
