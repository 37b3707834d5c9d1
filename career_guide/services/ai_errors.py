"""
Error taxonomy for AI generation.

Every failure that leaves the generation layer is an AIError with one of a
closed set of kinds. Whether a failure is retried, and which HTTP status it
maps to, depends only on the kind.
"""

import enum

import httpx
from google.api_core import exceptions as google_exceptions


class AIErrorKind(str, enum.Enum):
    TIMEOUT = "timeout"
    QUOTA_EXCEEDED = "quota_exceeded"
    MISSING_CREDENTIAL = "missing_credential"
    EMPTY_RESPONSE = "empty_response"
    MALFORMED_RESPONSE = "malformed_response"
    UNKNOWN = "unknown"

    @property
    def retryable(self) -> bool:
        """Only unclassified provider/network failures are worth another attempt."""
        return self is AIErrorKind.UNKNOWN

    @property
    def http_status(self) -> int:
        return _HTTP_STATUS[self]

    @property
    def code(self) -> str:
        """Machine-readable code exposed to API clients."""
        return _ERROR_CODES[self]


_HTTP_STATUS = {
    AIErrorKind.TIMEOUT: 504,
    AIErrorKind.QUOTA_EXCEEDED: 429,
    AIErrorKind.MISSING_CREDENTIAL: 503,
    AIErrorKind.EMPTY_RESPONSE: 500,
    AIErrorKind.MALFORMED_RESPONSE: 500,
    AIErrorKind.UNKNOWN: 500,
}

_ERROR_CODES = {
    AIErrorKind.TIMEOUT: "AI_TIMEOUT",
    AIErrorKind.QUOTA_EXCEEDED: "AI_QUOTA",
    AIErrorKind.MISSING_CREDENTIAL: "AI_API_KEY_MISSING",
    AIErrorKind.EMPTY_RESPONSE: "AI_NO_ANSWER",
    AIErrorKind.MALFORMED_RESPONSE: "AI_MALFORMED_RESPONSE",
    AIErrorKind.UNKNOWN: "LLM_ERROR",
}

_DEFAULT_MESSAGES = {
    AIErrorKind.TIMEOUT: "AI request timed out. Please try again.",
    AIErrorKind.QUOTA_EXCEEDED: "AI service quota exceeded. Please try again later.",
    AIErrorKind.MISSING_CREDENTIAL: "AI service not configured",
    AIErrorKind.EMPTY_RESPONSE: "AI returned empty response",
    AIErrorKind.MALFORMED_RESPONSE: "Failed to parse AI response",
    AIErrorKind.UNKNOWN: "AI service failed after retries",
}


class AIError(Exception):
    """
    A classified generation failure.

    Attributes:
        kind: One of AIErrorKind
        message: Human readable message, safe to show to end users
        raw_text: Provider output that caused the failure (diagnostics only)
    """

    def __init__(self, kind: AIErrorKind, message: str | None = None, raw_text: str | None = None):
        self.kind = kind
        self.message = message or _DEFAULT_MESSAGES[kind]
        self.raw_text = raw_text
        super().__init__(self.message)

    @property
    def retryable(self) -> bool:
        return self.kind.retryable

    def __repr__(self) -> str:
        return f"AIError(kind={self.kind.value!r}, message={self.message!r})"


# Last-resort markers. Provider client versions word these differently, so
# structured status codes are always checked first.
QUOTA_MARKERS = ("quota", "429", "rate limit", "resource exhausted", "resource_exhausted")


def _status_code_of(error: Exception) -> int | None:
    if isinstance(error, httpx.HTTPStatusError):
        return error.response.status_code
    for attr in ("status_code", "code"):
        value = getattr(error, attr, None)
        if isinstance(value, int):
            return value
    return None


def is_quota_error(error: Exception) -> bool:
    """
    Detect quota / rate-limit failures.

    Structured signals (HTTP status, google.api_core exception types) are
    checked before falling back to message sniffing.
    """
    if isinstance(error, (google_exceptions.TooManyRequests, google_exceptions.ResourceExhausted)):
        return True

    status_code = _status_code_of(error)
    if status_code is not None:
        return status_code == 429

    error_str = str(error).lower()
    return any(marker in error_str for marker in QUOTA_MARKERS)


def classify_error(error: BaseException) -> AIError:
    """
    Classify an exception into an AIError.

    Args:
        error: The exception to classify

    Returns:
        The error itself if already classified, otherwise a new AIError
    """
    if isinstance(error, AIError):
        return error

    if isinstance(error, TimeoutError):
        return AIError(AIErrorKind.TIMEOUT)

    if isinstance(error, Exception) and is_quota_error(error):
        return AIError(AIErrorKind.QUOTA_EXCEEDED)

    return AIError(AIErrorKind.UNKNOWN, f"AI service error: {type(error).__name__}")
