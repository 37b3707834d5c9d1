"""
History Recorder
Persists chat exchanges, generated roadmaps and skills evaluations for
authenticated users.
"""

import logging
import uuid

from career_guide.core.document_store import (
    CHAT_HISTORIES,
    ROADMAPS,
    SKILLS_EVALUATIONS,
    DocumentStore,
    utc_now_iso,
)
from career_guide.core.supabase_client import get_supabase_client
from career_guide.models import (
    ChatHistory,
    ChatMessage,
    RoadmapStage,
    SavedRoadmap,
    SkillsEvalRequest,
    SkillsEvaluationResult,
)

logger = logging.getLogger(__name__)

HISTORY_LIST_LIMIT = 20


class HistoryNotFoundError(LookupError):
    """The document does not exist or belongs to another user."""


class HistoryRecorder:
    """Service for recording and reading a user's learning history."""

    def __init__(self, store: DocumentStore | None = None):
        self._store = store

    @property
    def store(self) -> DocumentStore:
        # Anonymous requests never touch Supabase
        if self._store is None:
            self._store = DocumentStore(get_supabase_client())
        return self._store

    def _owned_document(self, collection: str, key: str, user_id: str) -> dict | None:
        document = self.store.read_document(collection, key)
        if document is not None and document.get("user_id") != user_id:
            raise HistoryNotFoundError(key)
        return document

    def check_access(self, user_id: str, history_id: str) -> None:
        """
        Raise HistoryNotFoundError when `history_id` belongs to another user.

        A history that does not exist yet is accessible; the first append creates it.
        """
        self._owned_document(CHAT_HISTORIES, history_id, user_id)

    def append_message(
        self, user_id: str, history_id: str, message: ChatMessage, topic: str | None = None
    ) -> None:
        self._owned_document(CHAT_HISTORIES, history_id, user_id)
        self.store.append_record(
            CHAT_HISTORIES,
            history_id,
            message.model_dump(mode="json", by_alias=True),
            defaults={"user_id": user_id, "topic": topic},
        )

    def append_exchange(
        self,
        user_id: str,
        history_id: str | None,
        user_text: str,
        reply: str,
        language: str = "en",
        topic: str | None = None,
    ) -> str:
        """
        Record a user message and the assistant's reply.

        The two messages are written independently, so a reader may briefly
        see one without the other.

        Returns:
            The history id (a new one when `history_id` is None)
        """
        history_id = history_id or str(uuid.uuid4())

        user_message = ChatMessage(role="user", content=user_text, language=language)
        self.append_message(user_id, history_id, user_message, topic=topic)

        assistant_message = ChatMessage(role="assistant", content=reply, language=language)
        self.append_message(user_id, history_id, assistant_message, topic=topic)

        logger.info(f"💬 Recorded exchange in history {history_id} for user {user_id}")
        return history_id

    def get_messages(self, user_id: str, history_id: str) -> list[ChatMessage]:
        """
        Return a history's messages in timestamp order.

        Raises:
            HistoryNotFoundError: Unknown history or owned by another user
        """
        if self._owned_document(CHAT_HISTORIES, history_id, user_id) is None:
            raise HistoryNotFoundError(history_id)

        records = self.store.read_collection(CHAT_HISTORIES, history_id)
        messages = [ChatMessage.model_validate(m) for m in records]
        # Storage order is not guaranteed
        return sorted(messages, key=lambda m: m.timestamp)

    def list_histories(self, user_id: str) -> list[ChatHistory]:
        """Return the user's most recently updated chat histories."""
        rows = self.store.list_documents(CHAT_HISTORIES, user_id, limit=HISTORY_LIST_LIMIT)
        histories = []
        for row in rows:
            history = ChatHistory.model_validate(row)
            history.messages.sort(key=lambda m: m.timestamp)
            histories.append(history)
        return histories

    def save_roadmap(
        self, user_id: str, career_goal: str, stages: list[RoadmapStage], language: str = "en"
    ) -> SavedRoadmap:
        roadmap_id = str(uuid.uuid4())
        now = utc_now_iso()
        row = self.store.upsert_document(
            ROADMAPS,
            roadmap_id,
            {
                "user_id": user_id,
                "career_goal": career_goal,
                "language": language,
                "stages": [stage.model_dump(mode="json", by_alias=True) for stage in stages],
                "created_at": now,
                "updated_at": now,
            },
            merge=False,
        )
        logger.info(f"🗺️  Saved roadmap {roadmap_id} for user {user_id}")
        return SavedRoadmap.model_validate(row)

    def list_roadmaps(self, user_id: str) -> list[SavedRoadmap]:
        rows = self.store.list_documents(ROADMAPS, user_id, order_by="created_at")
        return [SavedRoadmap.model_validate(row) for row in rows]

    def save_skills_evaluation(
        self, user_id: str, request: SkillsEvalRequest, result: SkillsEvaluationResult
    ) -> str:
        evaluation_id = str(uuid.uuid4())
        self.store.upsert_document(
            SKILLS_EVALUATIONS,
            evaluation_id,
            {
                "user_id": user_id,
                "career_goal": request.career_goal,
                "current_skills": list(request.current_skills),
                "experience": request.experience,
                "assessment": result.assessment,
                "skill_gaps": result.skill_gaps,
                "recommendations": result.recommendations,
                "created_at": utc_now_iso(),
            },
            merge=False,
        )
        logger.info(f"📊 Saved skills evaluation {evaluation_id} for user {user_id}")
        return evaluation_id
