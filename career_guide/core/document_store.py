"""
Document store on top of Supabase tables.

Each collection is a table whose rows are keyed by a text `id` and owned by a
`user_id`. Writes are at-least-once and reads carry no ordering guarantee;
callers that need an order sort the records themselves.
"""

import logging
from datetime import UTC, datetime
from typing import Any

from supabase import Client

logger = logging.getLogger(__name__)

CHAT_HISTORIES = "chat_histories"
ROADMAPS = "roadmaps"
SKILLS_EVALUATIONS = "skills_evaluations"


def utc_now_iso() -> str:
    return datetime.now(UTC).isoformat()


class DocumentStore:
    """Read/append/upsert operations over Supabase rows."""

    def __init__(self, client: Client):
        self.client = client

    def read_document(self, collection: str, key: str) -> dict[str, Any] | None:
        response = self.client.table(collection).select("*").eq("id", key).execute()
        if not response.data:
            return None
        return response.data[0]

    def upsert_document(
        self, collection: str, key: str, fields: dict[str, Any], merge: bool = True
    ) -> dict[str, Any]:
        """
        Create or update a document.

        Args:
            collection: Table name
            key: Document id
            fields: Column values to write
            merge: Keep existing columns not present in `fields` when True;
                write only `fields` when False

        Returns:
            The row as written
        """
        row = {**fields, "id": key}
        if merge:
            existing = self.read_document(collection, key)
            if existing:
                row = {**existing, **row}

        self.client.table(collection).upsert(row).execute()
        logger.debug(f"   Upserted {collection}/{key} (merge={merge})")
        return row

    def append_record(
        self,
        collection: str,
        key: str,
        record: dict[str, Any],
        field: str = "messages",
        defaults: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """
        Append one record to a document's list column (read-modify-write).

        The document is created from `defaults` when it does not exist yet.
        There is no isolation between the read and the write, so concurrent
        appends to the same document may overwrite each other.
        """
        now = utc_now_iso()
        existing = self.read_document(collection, key)

        if existing is None:
            fields = {**(defaults or {}), field: [record], "created_at": now, "updated_at": now}
            return self.upsert_document(collection, key, fields, merge=False)

        records = list(existing.get(field) or [])
        records.append(record)
        return self.upsert_document(collection, key, {field: records, "updated_at": now}, merge=True)

    def read_collection(self, collection: str, key: str, field: str = "messages") -> list[dict[str, Any]]:
        """Return the records stored in a document's list column, in storage order."""
        document = self.read_document(collection, key)
        if document is None:
            return []
        return list(document.get(field) or [])

    def list_documents(
        self,
        collection: str,
        user_id: str,
        order_by: str = "updated_at",
        limit: int | None = None,
    ) -> list[dict[str, Any]]:
        """List a user's documents, most recent `order_by` first."""
        query = (
            self.client.table(collection)
            .select("*")
            .eq("user_id", user_id)
            .order(order_by, desc=True)
        )
        if limit:
            query = query.limit(limit)
        response = query.execute()
        return response.data or []
