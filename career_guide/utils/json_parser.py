"""
Utility functions for parsing JSON responses from LLMs.
Handles markdown code fences and surrounding chatter, then validates the
decoded value against the expected Pydantic shape.
"""

import json
import logging
import re
from typing import Any, TypeVar

from pydantic import TypeAdapter

from career_guide.services.ai_errors import AIError, AIErrorKind

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Opening fence: ```json\n, ```\n or a bare ``` directly before the payload
_OPENING_FENCE = re.compile(r"^```(?:[A-Za-z0-9_+-]*[ \t]*\r?\n|[ \t]*)")
_CLOSING_FENCE = re.compile(r"\r?\n?[ \t]*```$")

_decoder = json.JSONDecoder()


def strip_code_fence(response_text: str) -> str:
    """
    Remove a single leading and a single trailing markdown code fence.

    Args:
        response_text: Raw response text from LLM

    Returns:
        Text without the fence markers, trimmed
    """
    text = response_text.strip()
    text = _OPENING_FENCE.sub("", text, count=1)
    text = _CLOSING_FENCE.sub("", text, count=1)
    return text.strip()


def _first_json_start(text: str) -> int:
    positions = [i for i in (text.find("{"), text.find("[")) if i != -1]
    return min(positions) if positions else -1


def decode_json_payload(text: str) -> Any:
    """
    Decode a JSON value from unfenced text.

    Pre/post-amble noise ("Here is your plan: {...} Good luck!") is tolerated
    by decoding the first complete value that starts at the first bracket.
    The value is decoded whole or not at all.

    Raises:
        json.JSONDecodeError: If no complete JSON value can be decoded
    """
    try:
        return json.loads(text)
    except json.JSONDecodeError:
        start = _first_json_start(text)
        if start == -1:
            raise
        value, _ = _decoder.raw_decode(text, start)
        logger.debug("   Recovered JSON payload from surrounding text")
        return value


def parse_llm_json_response(response_text: str, shape: type[T]) -> T:
    """
    Parse and validate JSON from an LLM response.

    Args:
        response_text: Raw response text from LLM
        shape: Pydantic model class or a typing form such as list[QuizQuestion]

    Returns:
        Validated value of the expected shape

    Raises:
        AIError: MALFORMED_RESPONSE for syntax errors or shape mismatches,
            carrying the raw text for diagnostics
    """
    text = strip_code_fence(response_text or "")
    if not text:
        raise AIError(
            AIErrorKind.MALFORMED_RESPONSE,
            "AI response contained no JSON payload",
            raw_text=response_text,
        )

    try:
        data = decode_json_payload(text)
        return TypeAdapter(shape).validate_python(data)
    except (ValueError, RecursionError) as e:
        # json.JSONDecodeError and pydantic.ValidationError are both ValueErrors
        logger.error(f"❌ Failed to parse AI JSON response: {type(e).__name__}: {str(e)[:300]}")
        logger.debug(f"   Original response: {response_text[:500]}")
        raise AIError(AIErrorKind.MALFORMED_RESPONSE, raw_text=response_text) from e
