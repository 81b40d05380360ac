# File: src/weekslot/core/orchestrator.py
"""
Main orchestrator module for Weekslot.
Coordinates calendar loading, date resolution, slot search and ranking
for one scheduling session.
"""

import datetime
import re
from pathlib import Path
from typing import List, Optional, Union

import pytz

from weekslot.core.config_manager import Config
from weekslot.core.exceptions import ErrorCode, InvalidSelectionError, SchedulingError
from weekslot.core.reference_date import ReferenceDate
from weekslot.llm.client import IntentExtractor
from weekslot.llm.prompt_builder import PromptBuilder
from weekslot.models import Confirmation, Intent, ProposalResult, TimeConstraint, TimeSlot
from weekslot.processors.date_resolver import resolve_and_validate, resolution_warning
from weekslot.processors.slot_finder import compute_free_slots
from weekslot.processors.slot_ranker import (
    compute_bias_minute,
    get_timezone,
    preferred_time_warning,
    select_proposals,
)
from weekslot.services.calendar_store import CalendarStore
from weekslot.utils.logger import setup_logger

logger = setup_logger(__name__)

SELECTION_RE = re.compile(r"option\s*(\d+)|^(\d+)$")


class Orchestrator:
    """
    One scheduling session.

    The reference date is fixed at construction and passed down explicitly,
    so several sessions can live in one process.
    """

    def __init__(
        self,
        reference_date: ReferenceDate,
        store: Optional[CalendarStore] = None,
        local_timezone: Optional[str] = None,
        intent_extractor: Optional[IntentExtractor] = None
    ):
        self.reference_date = reference_date
        self.store = store or CalendarStore(reference_date)
        self.local_timezone = local_timezone
        self.intent_extractor = intent_extractor
        self.prompt_builder = PromptBuilder(reference_date)
        logger.info(f"Orchestrator ready (reference date {reference_date.iso}, source: {reference_date.source})")

    # ---- calendar ----

    def load_calendar_text(self, text: str):
        """Load calendar text; unchanged text is not re-parsed."""
        return self.store.load_text(text)

    def load_calendar_file(self, path: Union[str, Path] = Config.CALENDAR_FILE):
        """Load a calendar file. Raises CalendarLoadError if unreadable."""
        return self.store.load_file(path)

    def calendar_timezone(self) -> str:
        """
        Timezone requested times are converted into: the explicit session
        zone, else the calendar's own Timezone line, else Config.LOCAL_TIMEZONE.
        """
        if self.local_timezone:
            return self.local_timezone
        meta = self.store.meta
        if meta is not None and meta.timezone_explicit:
            try:
                get_timezone(meta.timezone)
                return meta.timezone
            except pytz.UnknownTimeZoneError:
                logger.warning(f"Calendar timezone '{meta.timezone}' unknown, using {Config.LOCAL_TIMEZONE}")
        return Config.LOCAL_TIMEZONE

    # ---- resolution and search ----

    def resolve_date(self, constraint: TimeConstraint) -> str:
        """Resolve and validate a constraint against the session's reference date."""
        return resolve_and_validate(constraint, self.reference_date.value)

    def find_proposals(self, intent: Intent) -> ProposalResult:
        """
        Run the deterministic pipeline for one request.

        Never raises for engine conditions: failures come back as a
        ProposalResult with status "fail" and an ErrorInfo.
        """
        if not self.store.is_loaded:
            logger.error("No calendar loaded.")
            return ProposalResult.failure("No calendar loaded.", ErrorCode.NO_CALENDAR)

        meta = self.store.meta
        try:
            resolved_date = self.resolve_date(intent.time_constraint)
        except SchedulingError as e:
            logger.error(f"Resolution failed: {e.message}")
            return ProposalResult.failure(e.message, e.code)

        day_events = self.store.events_on(resolved_date)
        try:
            slots = compute_free_slots(
                meta.working_hours,
                day_events,
                intent.duration_min,
                resolved_date,
                intent.effective_time_of_day,
            )
        except SchedulingError as e:
            return ProposalResult.failure(e.message, e.code, resolved_date=resolved_date)

        bias = compute_bias_minute(intent, resolved_date, self.calendar_timezone())
        proposals = select_proposals(slots, bias)

        logger.info(
            f"Proposing {len(proposals)} of {len(slots)} slots on {resolved_date}"
            + (f" (bias {bias})" if bias is not None else "")
        )
        return ProposalResult(
            status="success",
            intent=intent,
            proposals=proposals,
            resolved_date=resolved_date,
            bias_minute=bias,
            preferred_time_warning=preferred_time_warning(bias, meta.working_hours, intent),
            resolution_warning=resolution_warning(intent.time_constraint),
        )

    def schedule_request(self, message: str) -> ProposalResult:
        """Extract an intent from free text, then find proposals."""
        if not self.store.is_loaded:
            logger.error("No calendar loaded.")
            return ProposalResult.failure("No calendar loaded.", ErrorCode.NO_CALENDAR)
        if self.intent_extractor is None:
            return ProposalResult.failure("No intent extractor configured.", ErrorCode.EXTRACT_FAILED)

        prompt = self.prompt_builder.build_intent_prompt(message, self.store.meta, self.store.day_summary())
        try:
            intent = self.intent_extractor.extract(message, prompt)
        except SchedulingError as e:
            logger.error(f"Extraction failed: {e.message}")
            return ProposalResult.failure(e.message, e.code)

        return self.find_proposals(intent)

    # ---- selection ----

    @staticmethod
    def select_proposal(reply: str, proposals: List[TimeSlot]) -> Confirmation:
        """
        Interpret a reply to a list of proposals.

        "option 2" or "2" picks the second proposal.

        Raises:
            InvalidSelectionError: for any other reply, including an out-of-range number
        """
        match = SELECTION_RE.search((reply or '').strip().lower())
        if not match:
            raise InvalidSelectionError(f"'{reply}' does not pick an option.")

        index = int(match.group(1) or match.group(2)) - 1
        if not 0 <= index < len(proposals):
            logger.warning(f"Selection {index + 1} out of range (1-{len(proposals)})")
            raise InvalidSelectionError(f"Option {index + 1} is not one of the {len(proposals)} proposals.")

        return Confirmation(
            slot_index=index,
            slot=proposals[index],
            timestamp=datetime.datetime.now().isoformat(),
        )

    @staticmethod
    def handle_selection(reply: str, proposals: List[TimeSlot]) -> Optional[Confirmation]:
        """Like select_proposal, but a rejection is None instead of an error."""
        try:
            return Orchestrator.select_proposal(reply, proposals)
        except InvalidSelectionError:
            return None
