"""
First-run setup: writes .env settings and a sample calendar.txt.
Run once after `pip install -e .`.
"""

import sys

from weekslot.core.config_manager import Config
from weekslot.utils.logger import setup_logger

logger = setup_logger(__name__)

SAMPLE_CALENDAR = """Week of January 19, 2026
Working hours: 9:00 AM - 5:00 PM
Timezone: America/New_York (Eastern)

Monday Jan 19, 2026
- 9:00 AM - 9:30 AM: Team Standup
- 11:00 AM - 12:00 PM: Design Review
- 12:03 PM - 1:00 PM: Lunch with Jordan

Tuesday Jan 20, 2026
- 9:00 AM - 9:30 AM: Team Standup
- 2:00 PM - 3:00 PM: 1:1 with Sarah

Wednesday Jan 21, 2026
- No events
"""


def read_env_keys() -> set:
    """Keys already present in .env."""
    if not Config.ENV_FILE.exists():
        return set()
    with open(Config.ENV_FILE, 'r', encoding='utf-8') as f:
        return {line.split('=', 1)[0].strip() for line in f if '=' in line}


def append_env(key: str, value: str) -> None:
    current_content = Config.ENV_FILE.read_text(encoding='utf-8') if Config.ENV_FILE.exists() else ""
    Config.ENV_FILE.write_text(current_content.strip() + f"\n{key}={value}\n", encoding='utf-8')
    print(f"{key} saved.")


def setup_groq_api(existing: set) -> bool:
    """
    Set up Groq API key in .env file.

    Returns:
        True if a key is configured, False otherwise
    """
    print("Groq API Key Setup (used for free-text requests)")
    if 'GROQ_API_KEY' in existing:
        print("✓ Existing Groq API key detected.")
        return True

    print("Visit: https://console.groq.com/keys")
    key = input("Enter your Groq API key (blank to skip): ").strip()
    if not key:
        return False
    if len(key) < 20:
        print("Invalid API key.")
        return False

    append_env('GROQ_API_KEY', key)
    return True


def setup_timezone(existing: set) -> None:
    if 'TIMEZONE' in existing:
        print("✓ Existing TIMEZONE setting detected.")
        return
    tz = input(f"Local calendar timezone [{Config.LOCAL_TIMEZONE}]: ").strip()
    append_env('TIMEZONE', tz or Config.LOCAL_TIMEZONE)


def write_sample_calendar() -> None:
    path = Config.CALENDAR_FILE
    if path.exists():
        print(f"✓ {path} already exists, leaving it untouched.")
        return
    path.write_text(SAMPLE_CALENDAR, encoding='utf-8')
    print(f"Sample calendar written to {path}")


def main() -> None:
    """Main setup wizard."""
    print("Setting up Weekslot...")
    print("=" * 60)
    logger.info("Starting setup wizard")

    existing = read_env_keys()

    print("\nStep 1: Groq API Configuration")
    if not setup_groq_api(existing):
        print("Groq API key setup skipped. Use --intent files with find_slots.py.")

    print("\nStep 2: Timezone")
    setup_timezone(existing)

    print("\nStep 3: Calendar")
    write_sample_calendar()

    print("=" * 60)
    print("Setup complete!")
    print("\nYou can now run: python scripts/find_slots.py --date 2026-01-19 \"30 min Monday morning\"")


if __name__ == '__main__':
    try:
        main()
    except KeyboardInterrupt:
        print("\nSetup cancelled.")
        sys.exit(1)
