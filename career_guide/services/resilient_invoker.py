"""
Resilient invocation of the generation provider.
Wraps a single provider call with a timeout race, retries with exponential
backoff, and classification into AIError kinds.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable

from tenacity import (
    AsyncRetrying,
    before_sleep_log,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
)

from career_guide.config import settings
from career_guide.services.ai_errors import AIError, AIErrorKind, classify_error, is_quota_error

logger = logging.getLogger(__name__)

# Retry configuration
MAX_ATTEMPTS = 3  # Total attempts, including the first one
BASE_BACKOFF_SECONDS = 2.0  # 2s, then 4s
REQUEST_TIMEOUT_SECONDS = 20.0


def should_retry(error: BaseException) -> bool:
    """Classified errors carry their own policy; anything else is transient."""
    if isinstance(error, AIError):
        return error.retryable
    return isinstance(error, Exception)


class ResilientInvoker:
    """Runs provider calls with timeout, retry and error classification."""

    def __init__(
        self,
        has_credential: bool,
        timeout: float = REQUEST_TIMEOUT_SECONDS,
        max_attempts: int = MAX_ATTEMPTS,
        backoff_base: float = BASE_BACKOFF_SECONDS,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        """
        Args:
            has_credential: Whether the provider credential is configured
            timeout: Seconds each attempt may take before it is abandoned
            max_attempts: Total attempts per invocation
            backoff_base: Delay before the first retry; doubles per retry
            sleep: Coroutine used for backoff delays (injectable for tests)
        """
        self.has_credential = has_credential
        self.timeout = timeout
        self.max_attempts = max_attempts
        self.backoff_base = backoff_base
        self._sleep = sleep

    @classmethod
    def from_settings(cls, has_credential: bool) -> "ResilientInvoker":
        return cls(
            has_credential=has_credential,
            timeout=settings.ai_request_timeout,
            max_attempts=settings.ai_max_attempts,
            backoff_base=settings.ai_backoff_base,
        )

    async def invoke(self, operation_name: str, thunk: Callable[[], Awaitable[str]]) -> str:
        """
        Invoke the provider call with timeout, retry and classification.

        Retry Policy:
        - At most max_attempts calls, strictly sequential
        - Backoff before each retry: backoff_base * 2^(attempt - 1)
        - Timeout, quota and missing credential are surfaced immediately

        Args:
            operation_name: Name used in log messages
            thunk: Zero-argument coroutine factory performing one provider call

        Returns:
            The provider text, unchanged

        Raises:
            AIError: On any failure
        """
        if not self.has_credential:
            logger.error(f"❌ {operation_name}: AI provider credential is missing")
            raise AIError(AIErrorKind.MISSING_CREDENTIAL)

        retrying = AsyncRetrying(
            stop=stop_after_attempt(self.max_attempts),
            wait=wait_exponential(multiplier=self.backoff_base, min=self.backoff_base),
            retry=retry_if_exception(should_retry),
            before_sleep=before_sleep_log(logger, logging.WARNING),
            sleep=self._sleep,
            reraise=True,
        )

        try:
            async for attempt in retrying:
                with attempt:
                    text = await self._attempt(
                        operation_name, thunk, attempt.retry_state.attempt_number
                    )
        except AIError as e:
            logger.error(f"❌ {operation_name} failed: {e.kind.value} - {e.message}")
            raise
        except Exception as e:
            logger.error(
                f"❌ {operation_name} failed after {self.max_attempts} attempts: {e}",
                exc_info=True,
            )
            raise classify_error(e) from e

        if not text or not text.strip():
            logger.warning(f"⚠️  {operation_name}: provider returned an empty response")
            raise AIError(AIErrorKind.EMPTY_RESPONSE, raw_text=text)

        return text

    async def _attempt(
        self,
        operation_name: str,
        thunk: Callable[[], Awaitable[str]],
        attempt_number: int,
    ) -> str:
        logger.debug(f"   Attempt {attempt_number}/{self.max_attempts} for {operation_name}")
        try:
            return await asyncio.wait_for(thunk(), timeout=self.timeout)
        except asyncio.TimeoutError as e:
            logger.warning(f"⏳ {operation_name} timed out after {self.timeout}s")
            raise AIError(AIErrorKind.TIMEOUT) from e
        except AIError:
            raise
        except Exception as e:
            if is_quota_error(e):
                logger.warning(f"⏳ {operation_name} hit the provider quota: {e}")
                raise AIError(AIErrorKind.QUOTA_EXCEEDED) from e
            logger.warning(
                f"⚠️  {operation_name} attempt {attempt_number}/{self.max_attempts} failed: {e}"
            )
            raise
