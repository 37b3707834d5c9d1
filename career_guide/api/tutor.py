"""
AI tutor routes: concept explanations, visual explanations and free chat.
Exchanges are recorded to the user's chat history when signed in.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends
from pydantic import Field, field_validator

from career_guide.api.deps import get_generation_service, get_history_recorder
from career_guide.api.responses import success_response
from career_guide.models import CamelModel, ChatRequest, ExplainRequest, ExplainVisualRequest
from career_guide.services.generation_service import GenerationService
from career_guide.services.history_service import HistoryNotFoundError, HistoryRecorder
from career_guide.utils.clerk_auth import optional_clerk_user, verify_clerk_token

router = APIRouter()
logger = logging.getLogger(__name__)


class ExplainBody(CamelModel):
    concept: str = Field(..., description="Concept to explain", min_length=2, max_length=500)
    context: Optional[str] = Field(None, max_length=2000)
    language: str = Field("en", description="Response language code")
    history_id: Optional[str] = Field(None, description="Existing chat history to append to")


class ExplainVisualBody(CamelModel):
    concept: str = Field(..., min_length=2, max_length=500)
    language: str = "en"


class ChatBody(CamelModel):
    message: str = Field(..., description="User's message", min_length=1, max_length=2000)
    language: Optional[str] = Field(None, description="Detected from the message when omitted")
    history_id: Optional[str] = None

    @field_validator("message")
    @classmethod
    def message_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Message cannot be empty")
        return v


def _check_history_access(
    recorder: HistoryRecorder, user_info: Optional[dict], history_id: Optional[str]
) -> None:
    if not user_info or not history_id:
        return
    try:
        recorder.check_access(user_info["clerk_user_id"], history_id)
    except HistoryNotFoundError:
        raise
    except Exception as e:
        logger.error(f"❌ Failed to check chat history {history_id}: {e}", exc_info=True)


def _record_exchange(
    recorder: HistoryRecorder,
    user_info: Optional[dict],
    history_id: Optional[str],
    user_text: str,
    reply: str,
    language: str,
    topic: Optional[str] = None,
) -> Optional[str]:
    if not user_info:
        return None
    try:
        return recorder.append_exchange(
            user_info["clerk_user_id"], history_id, user_text, reply, language, topic=topic
        )
    except HistoryNotFoundError:
        raise
    except Exception as e:
        logger.error(f"❌ Failed to record chat exchange: {e}", exc_info=True)
        return history_id


@router.post("")
async def explain_concept(
    body: ExplainBody,
    user_info: Optional[dict] = Depends(optional_clerk_user),
    service: GenerationService = Depends(get_generation_service),
    recorder: HistoryRecorder = Depends(get_history_recorder),
):
    """Explain a concept in the requested language."""
    logger.info(f"📚 Explain request: concept='{body.concept}', language={body.language}")
    _check_history_access(recorder, user_info, body.history_id)
    result = await service.generate(
        ExplainRequest(concept=body.concept, context=body.context, language=body.language)
    )
    history_id = _record_exchange(
        recorder, user_info, body.history_id, body.concept, result.explanation,
        body.language, topic=body.concept,
    )
    return success_response(
        {"explanation": result.explanation, "language": result.language, "historyId": history_id}
    )


@router.post("/visual")
async def explain_with_image(
    body: ExplainVisualBody,
    service: GenerationService = Depends(get_generation_service),
):
    """Explain a concept with a short spoken-friendly summary and a diagram description."""
    result = await service.generate(ExplainVisualRequest(concept=body.concept, language=body.language))
    return success_response(result)


@router.post("/chat")
async def chat(
    body: ChatBody,
    user_info: Optional[dict] = Depends(optional_clerk_user),
    service: GenerationService = Depends(get_generation_service),
    recorder: HistoryRecorder = Depends(get_history_recorder),
):
    """
    Free-form tutor chat.

    Returns the reply and, for signed-in users, the history id to continue
    the conversation with.
    """
    _check_history_access(recorder, user_info, body.history_id)
    language = body.language or await service.detect_language(body.message)
    logger.info(f"💬 Chat request ({len(body.message)} chars, language={language})")

    result = await service.generate(ChatRequest(message=body.message, language=language))
    history_id = _record_exchange(
        recorder, user_info, body.history_id, body.message, result.response, language
    )
    return success_response(
        {"response": result.response, "language": language, "historyId": history_id}
    )


@router.get("/history")
async def list_chat_histories(
    user_info: dict = Depends(verify_clerk_token),
    recorder: HistoryRecorder = Depends(get_history_recorder),
):
    """List the user's most recently updated chat histories."""
    return success_response(recorder.list_histories(user_info["clerk_user_id"]))


@router.get("/history/{history_id}")
async def get_chat_history(
    history_id: str,
    user_info: dict = Depends(verify_clerk_token),
    recorder: HistoryRecorder = Depends(get_history_recorder),
):
    """Get one chat history's messages in chronological order."""
    messages = recorder.get_messages(user_info["clerk_user_id"], history_id)
    return success_response({"historyId": history_id, "messages": messages})
