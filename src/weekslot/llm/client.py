# File: src/weekslot/llm/client.py
"""
LLM integration module for Weekslot.
Sends a scheduling request to the Groq API and turns the reply into an Intent.
"""

import json
import re
from typing import Any, Dict, Optional

import requests

from weekslot.core.config_manager import Config
from weekslot.core.exceptions import IntentValidationError
from weekslot.llm.prompt_builder import SYSTEM_PROMPT, OUTPUT_SCHEMA
from weekslot.models import Intent, intent_from_dict
from weekslot.utils.logger import setup_logger

logger = setup_logger(__name__)


def _extract_json(llm_text: str) -> Optional[Dict[str, Any]]:
    """
    Extract the LAST valid JSON object from the text.

    Args:
        llm_text: Raw text response from LLM

    Returns:
        Parsed JSON dictionary or None if extraction fails
    """
    if not llm_text:
        logger.warning("Empty LLM text provided to _extract_json")
        return None

    json_candidates = list(re.finditer(r'\{[\s\S]*\}', llm_text))
    if not json_candidates:
        logger.error("No JSON-like blocks found in LLM response")
        return None

    last_block = json_candidates[-1].group(0)

    try:
        return json.loads(last_block)
    except json.JSONDecodeError:
        logger.debug("Direct JSON parsing failed, trying unescape")

    # Sometimes the JSON comes back escaped inside a string
    try:
        return json.loads(bytes(last_block, "utf-8").decode("unicode_escape"))
    except (json.JSONDecodeError, UnicodeDecodeError):
        logger.error("All JSON extraction attempts failed")

    return None


class IntentExtractor:
    """Extracts a structured Intent from free text via the Groq chat API."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        model_id: str = Config.MODEL_ID,
        api_url: str = Config.GROQ_API_URL,
        timeout: int = Config.LLM_TIMEOUT
    ):
        self.api_key = api_key or Config.GROQ_API_KEY
        if not self.api_key:
            raise ValueError("Groq API Key not found. Set GROQ_API_KEY in .env")
        self.model_id = model_id
        self.api_url = api_url
        self.timeout = timeout

    def _payload(self, prompt: str) -> Dict[str, Any]:
        system = f"{SYSTEM_PROMPT}\nJSON schema:\n{json.dumps(OUTPUT_SCHEMA)}"
        return {
            "model": self.model_id,
            "messages": [
                {"role": "system", "content": system},
                {"role": "user", "content": prompt},
            ],
            "temperature": 0,
            "max_completion_tokens": Config.MAX_COMPLETION_TOKENS,
            "response_format": {"type": "json_object"},
        }

    def extract(self, message: str, prompt: str) -> Intent:
        """
        Call the model and validate its answer.

        Args:
            message: The user's request (kept as rawRequest)
            prompt: Prompt built by PromptBuilder

        Returns:
            Validated Intent

        Raises:
            IntentValidationError: on network failure or an unusable reply
        """
        logger.info(f"Calling Groq LLM with model: {self.model_id}")
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json"
        }

        try:
            response = requests.post(self.api_url, headers=headers, json=self._payload(prompt), timeout=self.timeout)
            response.raise_for_status()
            data = response.json()
        except requests.exceptions.Timeout:
            logger.error("Groq API request timed out")
            raise IntentValidationError("Intent extraction timed out")
        except requests.exceptions.RequestException as e:
            logger.error(f"Network error calling Groq LLM: {e}", exc_info=True)
            raise IntentValidationError(f"Intent extraction failed: {e}")
        except ValueError as e:
            logger.error(f"Invalid response from Groq LLM: {e}")
            raise IntentValidationError(f"Intent extraction returned invalid JSON: {e}")

        if not data.get("choices"):
            logger.error("Groq API returned no choices")
            raise IntentValidationError("No choices in response")

        content = data["choices"][0].get("message", {}).get("content")
        extracted = _extract_json(content)
        if extracted is None:
            raise IntentValidationError("Could not parse JSON from model output")

        if not extracted.get("rawRequest"):
            extracted["rawRequest"] = message
        intent = intent_from_dict(extracted)
        logger.info(
            f"Extracted intent: {intent.time_constraint.kind.value} '{intent.time_constraint.value}', "
            f"{intent.duration_min} min, {intent.time_of_day.value}"
        )
        return intent
