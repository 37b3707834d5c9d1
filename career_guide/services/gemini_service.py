"""
Google Gemini provider for content generation.
One HTTP call per prompt; timeouts and retries are applied by the
ResilientInvoker, not here.
"""

import logging
import time
from typing import Any

import httpx

from career_guide.config import settings

logger = logging.getLogger(__name__)

# Transport-level timeout. The invoker's deadline is shorter and wins the race.
HTTP_TIMEOUT_SECONDS = 60.0


class GeminiService:
    """Google Gemini text generation over the REST API."""

    def __init__(
        self,
        api_key: str | None = None,
        model: str | None = None,
        api_base: str | None = None,
        temperature: float | None = None,
    ):
        """
        Initialize GeminiService.

        A missing API key is not an error here: the invoker fails fast with
        MISSING_CREDENTIAL before any call is made.
        """
        self.api_key = api_key if api_key is not None else settings.gemini_api_key
        self.model = model or settings.gemini_model
        self.api_base = (api_base or settings.gemini_api_base).rstrip("/")
        self.temperature = temperature if temperature is not None else settings.gemini_temperature
        self.timeout = HTTP_TIMEOUT_SECONDS

        if self.api_key:
            logger.info("✅ GeminiService initialized")
        else:
            logger.error("❌ GEMINI_API_KEY is missing! AI generation will be unavailable.")
        logger.info(f"   🤖 Model: {self.model}")
        logger.debug(f"   ⏱️  HTTP timeout: {self.timeout}s")

    @property
    def has_credential(self) -> bool:
        return bool(self.api_key)

    @property
    def api_url(self) -> str:
        return f"{self.api_base}/{self.model}:generateContent"

    async def generate_content(self, prompt: str) -> str:
        """
        Send a prompt to Gemini and return the generated text.

        Args:
            prompt: Full instruction text

        Returns:
            Generated text ("" when the model produced no candidates)

        Raises:
            httpx.HTTPStatusError: On non-2xx responses (429 signals quota)
            httpx.HTTPError: On transport failures
        """
        start_time = time.time()

        payload = {
            "contents": [
                {
                    "parts": [
                        {
                            "text": prompt,
                        }
                    ]
                }
            ],
            "generationConfig": {
                "temperature": self.temperature,
            },
        }

        headers = {
            "Content-Type": "application/json",
            "x-goog-api-key": self.api_key or "",
        }

        logger.debug(f"   📤 Sending request to Gemini ({len(prompt)} chars)")

        async with httpx.AsyncClient(timeout=self.timeout) as client:
            response = await client.post(self.api_url, json=payload, headers=headers)
            response.raise_for_status()

            result = response.json()

        generated_text = extract_candidate_text(result)

        duration = time.time() - start_time
        logger.debug(f"✅ Gemini response generated in {duration:.2f}s ({len(generated_text)} chars)")

        return generated_text


def extract_candidate_text(result: dict[str, Any]) -> str:
    """Join the text parts of the first candidate."""
    candidates = result.get("candidates") or []
    if not candidates:
        block_reason = (result.get("promptFeedback") or {}).get("blockReason")
        if block_reason:
            logger.warning(f"⚠️  Gemini blocked the prompt: {block_reason}")
        return ""

    parts = (candidates[0].get("content") or {}).get("parts") or []
    return "".join(part.get("text", "") for part in parts)
