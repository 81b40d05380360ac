# File: src/weekslot/llm/prompt_builder.py
"""
Prompt building module for intent extraction.
The model only tokenizes the request; dates are resolved deterministically later.
"""

from typing import Optional

from weekslot.core.reference_date import ReferenceDate
from weekslot.models import CalendarMeta
from weekslot.utils.logger import setup_logger

logger = setup_logger(__name__)

SYSTEM_PROMPT = (
    "You are a precision natural language parser. "
    "Parse the user's scheduling request into semantic tokens. Return ONLY JSON."
)

EXTRACTION_RULES = """[RULES]
1. WHAT DAY (timeConstraint):
   - Extract verbatim (e.g. "Monday", "tomorrow").
   - Mapping "type":
     * Day names ("Monday", "Tuesday", etc) -> type: "DAY_OF_WEEK"
     * "today", "tomorrow" -> type: "RELATIVE"
     * Specific dates ("Jan 15", "2026-01-20") -> type: "ABSOLUTE"
   - Output ONLY the verbatim string as "value".
   - If they specify "morning", "afternoon" or "evening", put it in "timeOfDay".
2. WHO (participants):
   - Extract ALL names mentioned (e.g. "Jordan", "Sarah").
   - "with Jordan or Sarah" -> participants: ["Jordan", "Sarah"], participantMode: "any_of"
   - Default participantMode is "all_of".
3. SPECIFIC TIME:
   - If mentioned (e.g. "at 3 PM UTC"), extract:
     * specificTime: "3:00 PM"
     * timezone: "UTC"
   - If no timezone mentioned but specific time is, leave timezone null.
4. HOW LONG (durationMin):
   - Extract number and convert to minutes. Default 30.
5. rawRequest: the user request, verbatim."""

OUTPUT_SCHEMA = {
    "type": "object",
    "properties": {
        "durationMin": {"type": "number"},
        "timeConstraint": {
            "type": "object",
            "properties": {
                "type": {"type": "string", "enum": ["DAY_OF_WEEK", "RELATIVE", "ABSOLUTE"]},
                "value": {"type": "string"},
                "modifier": {"type": ["string", "null"], "enum": ["this", "next", "coming", "last", None]},
            },
            "required": ["type", "value"],
        },
        "timeOfDay": {"type": "string", "enum": ["morning", "afternoon", "evening", "any"]},
        "participants": {"type": "array", "items": {"type": "string"}},
        "participantMode": {"type": "string", "enum": ["all_of", "any_of", "none"]},
        "specificTime": {"type": ["string", "null"]},
        "timezone": {"type": ["string", "null"]},
        "rawRequest": {"type": "string"},
    },
    "required": ["timeConstraint", "rawRequest"],
}


class PromptBuilder:
    """Builds the intent extraction prompt."""

    def __init__(self, reference_date: ReferenceDate):
        self.reference_date = reference_date

    def build_intent_prompt(
        self,
        message: str,
        calendar_meta: Optional[CalendarMeta] = None,
        day_summary: str = 'None'
    ) -> str:
        """
        Build the user prompt for one scheduling request.

        Args:
            message: The user's request, verbatim
            calendar_meta: Current calendar snapshot, if loaded
            day_summary: Per-day event counts ("Monday=2026-01-19 (2 events)")

        Returns:
            Prompt string
        """
        scope = calendar_meta.week_start if calendar_meta else 'unknown'

        prompt_lines = [
            "[CONTEXT]",
            f"- Today is: {self.reference_date.weekday_name}",
            f"- Calendar Scope: {scope}",
            f"- Available Days in file: {day_summary}",
            "",
            "[INPUT]",
            f'User Request: "{message}"',
            "",
            EXTRACTION_RULES,
            "",
            "Return ONLY JSON.",
        ]
        prompt = "\n".join(prompt_lines)
        logger.debug(f"Built intent prompt ({len(prompt)} characters)")
        return prompt
