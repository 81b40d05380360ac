"""
Find open meeting slots in a weekly calendar file.

    python scripts/find_slots.py --date 2026-01-20 --intent request.json
    python scripts/find_slots.py --date 2026-01-20 "30 min with Sarah Monday afternoon"
    python scripts/find_slots.py --date 2026-01-20 --intent request.json --select "option 2"

The second form needs GROQ_API_KEY for intent extraction.
"""

import argparse
import json
import logging
import sys
import time
from pathlib import Path

from weekslot.core.config_manager import Config
from weekslot.core.exceptions import SchedulingError
from weekslot.core.orchestrator import Orchestrator
from weekslot.core.reference_date import ReferenceDate
from weekslot.llm.client import IntentExtractor
from weekslot.models import ProposalResult, intent_from_dict
from weekslot.utils.logger import setup_logger

logger = setup_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Deterministic meeting slot finder")
    parser.add_argument("message", nargs="?", help="Your scheduling request")
    parser.add_argument("-c", "--calendar", default=str(Config.CALENDAR_FILE), help="Calendar text file")
    parser.add_argument("-d", "--date", help="Reference date (YYYY-MM-DD)")
    parser.add_argument("-i", "--intent", help="JSON file with a structured intent (skips the LLM)")
    parser.add_argument("-s", "--select", metavar="REPLY", help="Pick a proposal, e.g. \"option 2\"")
    parser.add_argument("--json", action="store_true", help="Print the result as JSON")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    return parser


def main(argv=None) -> int:
    """
    Main execution function.

    Returns:
        Exit code (0 when slots were proposed, 1 otherwise)
    """
    args = build_parser().parse_args(argv)
    start_time = time.time()

    if args.debug:
        for name in list(logging.root.manager.loggerDict):
            if name.startswith("weekslot") or name == __name__:
                debug_logger = logging.getLogger(name)
                debug_logger.setLevel(logging.DEBUG)
                for handler in debug_logger.handlers:
                    handler.setLevel(logging.DEBUG)

    if not args.message and not args.intent:
        logger.error("Provide a message or --intent")
        return 1

    try:
        reference = ReferenceDate.initialize(
            cli_date=args.date,
            env_date=Config.REFERENCE_DATE,
            allow_system_date=not Config.TEST_MODE,
        )

        extractor = None
        if not args.intent:
            problems = Config.validate()
            if problems:
                for problem in problems:
                    logger.error(f"Configuration Error: {problem}")
                return 1
            extractor = IntentExtractor()

        orchestrator = Orchestrator(reference, intent_extractor=extractor)
        orchestrator.load_calendar_file(args.calendar)

        if args.intent:
            data = json.loads(Path(args.intent).read_text(encoding="utf-8"))
            result = orchestrator.find_proposals(intent_from_dict(data))
        else:
            result = orchestrator.schedule_request(args.message)

    except SchedulingError as e:
        logger.error(f"{e.code.value}: {e.message}")
        return 1
    except (OSError, json.JSONDecodeError) as e:
        logger.error(f"Could not read intent file: {e}")
        return 1
    finally:
        logger.info(f"Total execution time: {time.time() - start_time:.2f} seconds")

    if args.json:
        print(json.dumps({'calendar': orchestrator.store.meta.to_dict(), **result.to_dict()}, indent=2))
    elif not result.is_success():
        print(f"Error: {result.error.message if result.error else 'Something went wrong.'}")
    else:
        print_proposals(result)

    if not result.is_success():
        return 1

    if args.select:
        try:
            confirmation = Orchestrator.select_proposal(args.select, result.proposals)
        except SchedulingError as e:
            logger.error(f"{e.code.value}: {e.message}")
            return 1
        print(f"Selected: {confirmation.summary()}")
    return 0


def print_proposals(result: ProposalResult) -> None:
    if result.resolution_warning:
        print(f"Note: {result.resolution_warning}")
    if result.preferred_time_warning:
        print(result.preferred_time_warning)
        print("\nHere are some alternative slots closest to your request:")
    who = result.intent.participants_phrase() if result.intent else "us"
    print(f"Open slots for {who} on {result.resolved_date}:")
    for idx, slot in enumerate(result.proposals, start=1):
        print(f"  {idx}. {slot.label()}")


if __name__ == "__main__":
    sys.exit(main())
