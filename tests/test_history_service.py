"""
Tests for the history recorder and the Supabase document store.
"""
from datetime import UTC, datetime, timedelta
from unittest.mock import Mock

import pytest

from career_guide.core.document_store import CHAT_HISTORIES, ROADMAPS, DocumentStore
from career_guide.models import ChatMessage, RoadmapStage, SkillsEvalRequest, SkillsEvaluationResult
from career_guide.services.history_service import HISTORY_LIST_LIMIT, HistoryNotFoundError


def _message(content, timestamp):
    return ChatMessage(role="user", content=content, timestamp=timestamp).model_dump(
        mode="json", by_alias=True
    )


class TestHistoryRecorder:
    def test_append_exchange_writes_user_then_assistant(self, recorder, memory_store):
        history_id = recorder.append_exchange("user_1", None, "What is AI?", "AI is...", "en")

        document = memory_store.tables[CHAT_HISTORIES][history_id]
        assert document["user_id"] == "user_1"
        assert [m["role"] for m in document["messages"]] == ["user", "assistant"]
        assert document["messages"][0]["content"] == "What is AI?"

    def test_append_exchange_continues_existing_history(self, recorder):
        history_id = recorder.append_exchange("user_1", "h1", "Hi", "Hello", "en")
        recorder.append_exchange("user_1", history_id, "Explain loops", "Loops repeat", "en")

        messages = recorder.get_messages("user_1", history_id)
        assert history_id == "h1"
        assert [m.content for m in messages] == ["Hi", "Hello", "Explain loops", "Loops repeat"]

    def test_get_messages_sorts_by_timestamp(self, recorder, memory_store):
        t1 = datetime(2024, 5, 1, 9, 0, tzinfo=UTC)
        t2 = t1 + timedelta(minutes=1)
        t3 = t1 + timedelta(minutes=2)
        memory_store.upsert_document(
            CHAT_HISTORIES,
            "h1",
            {
                "user_id": "user_1",
                "messages": [_message("T3", t3), _message("T1", t1), _message("T2", t2)],
            },
        )

        messages = recorder.get_messages("user_1", "h1")

        assert [m.content for m in messages] == ["T1", "T2", "T3"]

    def test_get_messages_sorts_naive_and_aware_timestamps(self, recorder, memory_store):
        aware = ChatMessage(
            role="assistant", content="second", timestamp=datetime(2024, 1, 1, 12, tzinfo=UTC)
        ).model_dump(mode="json", by_alias=True)
        naive = {"role": "user", "content": "first", "timestamp": datetime(2024, 1, 1).isoformat()}
        memory_store.upsert_document(
            CHAT_HISTORIES, "h1", {"user_id": "user_1", "messages": [aware, naive]}
        )

        messages = recorder.get_messages("user_1", "h1")

        assert [m.content for m in messages] == ["first", "second"]
        assert messages[0].timestamp.tzinfo is not None

    def test_check_access_allows_new_and_owned_histories(self, recorder):
        recorder.check_access("user_1", "fresh")
        recorder.append_exchange("user_1", "h1", "Hi", "Hello", "en")
        recorder.check_access("user_1", "h1")

        with pytest.raises(HistoryNotFoundError):
            recorder.check_access("intruder", "h1")

    def test_get_messages_unknown_history(self, recorder):
        with pytest.raises(HistoryNotFoundError):
            recorder.get_messages("user_1", "missing")

    def test_other_users_history_is_not_visible_or_writable(self, recorder):
        recorder.append_exchange("owner", "h1", "Hi", "Hello", "en")

        with pytest.raises(HistoryNotFoundError):
            recorder.get_messages("intruder", "h1")
        with pytest.raises(HistoryNotFoundError):
            recorder.append_exchange("intruder", "h1", "Hijack", "No", "en")

        assert len(recorder.get_messages("owner", "h1")) == 2

    def test_list_histories_is_limited_and_most_recent_first(self, recorder, memory_store):
        base = datetime(2024, 1, 1, tzinfo=UTC)
        for i in range(HISTORY_LIST_LIMIT + 5):
            memory_store.upsert_document(
                CHAT_HISTORIES,
                f"h{i}",
                {
                    "user_id": "user_1",
                    "messages": [],
                    "updated_at": (base + timedelta(hours=i)).isoformat(),
                },
            )

        histories = recorder.list_histories("user_1")

        assert len(histories) == HISTORY_LIST_LIMIT
        assert histories[0].id == f"h{HISTORY_LIST_LIMIT + 4}"

    def test_save_and_list_roadmaps(self, recorder, memory_store):
        stages = [RoadmapStage(title="Beginner", description="Start", resources=["Docs"])]

        saved = recorder.save_roadmap("user_1", "Electrician", stages, language="am")

        assert memory_store.tables[ROADMAPS][saved.id]["stages"][0]["title"] == "Beginner"
        roadmaps = recorder.list_roadmaps("user_1")
        assert [r.career_goal for r in roadmaps] == ["Electrician"]
        assert roadmaps[0].language == "am"
        assert recorder.list_roadmaps("someone_else") == []

    def test_save_skills_evaluation(self, recorder, memory_store):
        request = SkillsEvalRequest(career_goal="Nurse", current_skills=("First aid", "Biology"))
        result = SkillsEvaluationResult(
            assessment="Good base", skill_gaps=["Pharmacology"], recommendations=["Study drugs"]
        )

        evaluation_id = recorder.save_skills_evaluation("user_1", request, result)

        row = memory_store.tables["skills_evaluations"][evaluation_id]
        assert row["current_skills"] == ["First aid", "Biology"]
        assert row["skill_gaps"] == ["Pharmacology"]


class TestDocumentStore:
    def test_read_document_queries_by_id(self, mock_supabase_client):
        mock_supabase_client.chain.execute.return_value = Mock(data=[{"id": "h1", "user_id": "u"}])
        store = DocumentStore(mock_supabase_client)

        assert store.read_document(CHAT_HISTORIES, "h1") == {"id": "h1", "user_id": "u"}
        mock_supabase_client.table.assert_called_with(CHAT_HISTORIES)
        mock_supabase_client.chain.eq.assert_called_with("id", "h1")

    def test_read_missing_document_returns_none(self, mock_supabase_client):
        store = DocumentStore(mock_supabase_client)
        assert store.read_document(CHAT_HISTORIES, "nope") is None
        assert store.read_collection(CHAT_HISTORIES, "nope") == []

    def test_upsert_merge_keeps_existing_columns(self, mock_supabase_client):
        mock_supabase_client.chain.execute.return_value = Mock(
            data=[{"id": "h1", "user_id": "u", "topic": "AI"}]
        )
        store = DocumentStore(mock_supabase_client)

        row = store.upsert_document(CHAT_HISTORIES, "h1", {"topic": "ML"}, merge=True)

        assert row == {"id": "h1", "user_id": "u", "topic": "ML"}
        mock_supabase_client.chain.upsert.assert_called_once_with(row)

    def test_upsert_without_merge_does_not_read(self, mock_supabase_client):
        store = DocumentStore(mock_supabase_client)

        store.upsert_document(ROADMAPS, "r1", {"user_id": "u"}, merge=False)

        mock_supabase_client.chain.select.assert_not_called()
        mock_supabase_client.chain.upsert.assert_called_once_with({"user_id": "u", "id": "r1"})

    def test_append_record_creates_document_with_defaults(self, mock_supabase_client):
        store = DocumentStore(mock_supabase_client)

        row = store.append_record(CHAT_HISTORIES, "h1", {"content": "hi"}, defaults={"user_id": "u"})

        assert row["messages"] == [{"content": "hi"}]
        assert row["user_id"] == "u"
        assert row["created_at"] == row["updated_at"]

    def test_list_documents_orders_and_limits(self, mock_supabase_client):
        store = DocumentStore(mock_supabase_client)

        store.list_documents(CHAT_HISTORIES, "u", limit=20)

        mock_supabase_client.chain.eq.assert_called_with("user_id", "u")
        mock_supabase_client.chain.order.assert_called_with("updated_at", desc=True)
        mock_supabase_client.chain.limit.assert_called_with(20)
