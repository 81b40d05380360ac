# File: src/weekslot/core/config_manager.py
"""
Centralized configuration management for Weekslot.
Loads settings from environment variables and the .env file.
"""

import os
from pathlib import Path
from typing import List, Tuple
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

class Config:
    """Application configuration."""

    # Base directories
    BASE_DIR = Path(__file__).parent.parent.parent.parent  # Up from src/weekslot/core/
    LOGS_DIR = Path(os.getenv("LOG_DIR", "logs"))

    # Logging
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

    # Files
    CALENDAR_FILE = Path(os.getenv("CALENDAR_PATH", "calendar.txt"))
    ENV_FILE = BASE_DIR / ".env"

    # Reference date ("today" for relative parsing)
    REFERENCE_DATE = os.getenv("REFERENCE_DATE")
    TEST_MODE = os.getenv("TEST_MODE", "").lower() in ("1", "true", "yes")

    # Local calendar timezone, used to convert explicitly requested times
    LOCAL_TIMEZONE = os.getenv("TIMEZONE", "America/New_York")

    # API Keys
    GROQ_API_KEY = os.getenv("GROQ_API_KEY")

    # LLM Settings
    GROQ_API_URL = os.getenv("GROQ_API_URL", "https://api.groq.com/openai/v1/chat/completions")
    MODEL_ID = os.getenv("MODEL_ID", "openai/gpt-oss-20b")
    LLM_TIMEOUT = 60
    MAX_COMPLETION_TOKENS = 1024

    # Availability engine
    DEFAULT_WORKING_HOURS: Tuple[int, int] = (540, 1020)  # 9:00 AM - 5:00 PM
    DEFAULT_TIMEZONE_LABEL = "UTC"
    DEFAULT_DURATION_MIN = 30
    BUFFER_MINUTES = 5
    SLOT_ROUNDING = 5
    SHORT_MEETING_STEP = 15
    LONG_MEETING_STEP = 30
    MAX_CANDIDATE_SLOTS = 20
    MAX_PROPOSALS = 5

    @classmethod
    def validate(cls) -> List[str]:
        """Return the list of configuration problems (empty when usable)."""
        errors = []

        if not cls.GROQ_API_KEY:
            errors.append("GROQ_API_KEY not set")

        if not cls.GROQ_API_URL:
            errors.append("GROQ_API_URL not set")

        return errors
