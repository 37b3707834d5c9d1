"""
Tests for ResilientInvoker: credential check, timeout, retry and classification.
"""
import asyncio

import httpx
import pytest
from google.api_core import exceptions as google_exceptions

from career_guide.services.ai_errors import AIError, AIErrorKind, classify_error, is_quota_error
from tests.fakes import FakeProvider


def _http_error(status_code, message=None):
    request = httpx.Request("POST", "https://example.test/models/gemini:generateContent")
    response = httpx.Response(status_code, request=request)
    return httpx.HTTPStatusError(
        message or f"{status_code} error", request=request, response=response
    )


@pytest.mark.asyncio
async def test_returns_provider_text_verbatim(make_invoker, recording_sleep):
    provider = FakeProvider(["  Hello, learner!\n"])
    invoker = make_invoker()

    text = await invoker.invoke("chat", lambda: provider.generate_content("hi"))

    assert text == "  Hello, learner!\n"
    assert provider.calls == 1
    assert recording_sleep.delays == []


@pytest.mark.asyncio
async def test_missing_credential_makes_no_calls(make_invoker):
    provider = FakeProvider(["never used"], has_credential=False)
    invoker = make_invoker(has_credential=False)

    with pytest.raises(AIError) as exc_info:
        await invoker.invoke("chat", lambda: provider.generate_content("hi"))

    assert exc_info.value.kind is AIErrorKind.MISSING_CREDENTIAL
    assert provider.calls == 0


@pytest.mark.asyncio
async def test_fail_fail_succeed_retries_with_backoff(make_invoker, recording_sleep):
    provider = FakeProvider([RuntimeError("boom"), RuntimeError("boom"), "third time lucky"])
    invoker = make_invoker()

    text = await invoker.invoke("generateRoadmap", lambda: provider.generate_content("p"))

    assert text == "third time lucky"
    assert provider.calls == 3
    assert recording_sleep.delays == [2, 4]


@pytest.mark.asyncio
async def test_exhausted_retries_raise_unknown(make_invoker, recording_sleep):
    provider = FakeProvider([ConnectionError("down")] * 3)
    invoker = make_invoker()

    with pytest.raises(AIError) as exc_info:
        await invoker.invoke("generateRoadmap", lambda: provider.generate_content("p"))

    assert exc_info.value.kind is AIErrorKind.UNKNOWN
    assert provider.calls == 3
    # No sleep after the final attempt
    assert recording_sleep.delays == [2, 4]


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "error",
    [
        _http_error(429),
        google_exceptions.ResourceExhausted("Quota exceeded for model"),
        google_exceptions.TooManyRequests("slow down"),
        RuntimeError("429 RESOURCE_EXHAUSTED: quota exceeded"),
    ],
)
async def test_quota_fails_fast_without_sleeping(make_invoker, recording_sleep, error):
    provider = FakeProvider([error, "unreachable"])
    invoker = make_invoker()

    with pytest.raises(AIError) as exc_info:
        await invoker.invoke("chat", lambda: provider.generate_content("p"))

    assert exc_info.value.kind is AIErrorKind.QUOTA_EXCEEDED
    assert provider.calls == 1
    assert recording_sleep.delays == []


@pytest.mark.asyncio
async def test_timeout_is_not_retried(make_invoker, recording_sleep):
    calls = []

    async def slow_call():
        calls.append(1)
        await asyncio.sleep(5)
        return "too late"

    invoker = make_invoker(timeout=0.01)

    with pytest.raises(AIError) as exc_info:
        await invoker.invoke("explainConcept", slow_call)

    assert exc_info.value.kind is AIErrorKind.TIMEOUT
    assert len(calls) == 1
    assert recording_sleep.delays == []


@pytest.mark.asyncio
@pytest.mark.parametrize("blank", ["", "   ", "\n\t"])
async def test_empty_output_raises_empty_response(make_invoker, recording_sleep, blank):
    provider = FakeProvider([blank])
    invoker = make_invoker()

    with pytest.raises(AIError) as exc_info:
        await invoker.invoke("chat", lambda: provider.generate_content("p"))

    assert exc_info.value.kind is AIErrorKind.EMPTY_RESPONSE
    assert provider.calls == 1
    assert recording_sleep.delays == []


@pytest.mark.asyncio
async def test_server_error_then_success(make_invoker, recording_sleep):
    provider = FakeProvider([_http_error(503), "recovered"])
    invoker = make_invoker()

    assert await invoker.invoke("chat", lambda: provider.generate_content("p")) == "recovered"
    assert recording_sleep.delays == [2]


class TestClassification:
    def test_only_unknown_is_retryable(self):
        retryable = {kind for kind in AIErrorKind if kind.retryable}
        assert retryable == {AIErrorKind.UNKNOWN}

    @pytest.mark.parametrize(
        "kind, status, code",
        [
            (AIErrorKind.TIMEOUT, 504, "AI_TIMEOUT"),
            (AIErrorKind.QUOTA_EXCEEDED, 429, "AI_QUOTA"),
            (AIErrorKind.MISSING_CREDENTIAL, 503, "AI_API_KEY_MISSING"),
            (AIErrorKind.EMPTY_RESPONSE, 500, "AI_NO_ANSWER"),
            (AIErrorKind.MALFORMED_RESPONSE, 500, "AI_MALFORMED_RESPONSE"),
            (AIErrorKind.UNKNOWN, 500, "LLM_ERROR"),
        ],
    )
    def test_status_and_code_per_kind(self, kind, status, code):
        assert kind.http_status == status
        assert kind.code == code

    def test_structured_status_wins_over_message(self):
        # A 500 whose body happens to mention "quota" is not a quota error
        assert is_quota_error(_http_error(500, "backend quota service unavailable")) is False
        assert is_quota_error(_http_error(429)) is True

    def test_classify_keeps_existing_ai_error(self):
        error = AIError(AIErrorKind.MALFORMED_RESPONSE)
        assert classify_error(error) is error

    def test_classify_unknown_hides_message(self):
        error = classify_error(ValueError("secret provider details"))
        assert error.kind is AIErrorKind.UNKNOWN
        assert "secret" not in error.message
