"""Feedback record stores.

Goal: keep storage interactions in one place with a small surface area:
- create a record (insert-only, returns the generated id)
- read the most recent records, newest first
- close

There is deliberately no update or delete: records are immutable once created.
The API depends on `BaseFeedbackStore`, so backends are swappable.
"""

from __future__ import annotations

import threading
import uuid
from abc import ABC, abstractmethod
from typing import Any, Optional

from pydantic import ValidationError
from pymongo import DESCENDING, MongoClient
from pymongo.errors import PyMongoError

from ..core.config import Settings
from ..core.errors import PersistenceError
from ..core.logging import get_logger
from ..core.utils import utcnow
from ..schemas.feedback import FeedbackRecord, StoredFeedbackItem, ValidatedSubmission

logger = get_logger(__name__)


class BaseFeedbackStore(ABC):
    """Append-only persistence for validated feedback submissions."""

    @abstractmethod
    def create(self, submission: ValidatedSubmission) -> str:
        """Persist a new record and return its generated id.

        The effective timestamp defaults to the creation time when the
        submission carries none.

        Raises:
            PersistenceError: If the record could not be written.
        """

    @abstractmethod
    def find_recent_descending(self, limit: int) -> list[FeedbackRecord]:
        """Return up to `limit` records ordered by creation time, newest first."""

    def ping(self) -> None:
        """Raise if the store is not reachable. Default: always reachable."""

    def close(self) -> None:
        """Release any resources held by the store. Default is a no-op."""


class InMemoryFeedbackStore(BaseFeedbackStore):
    """Keeps records in process memory; used for local runs and tests."""

    def __init__(self) -> None:
        self._records: list[FeedbackRecord] = []
        self._lock = threading.Lock()

    def create(self, submission: ValidatedSubmission) -> str:
        now = utcnow()
        record = FeedbackRecord(
            id=uuid.uuid4().hex,
            items=[StoredFeedbackItem(**item.model_dump()) for item in submission.items],
            timestamp=submission.timestamp or now,
            created_at=now,
        )
        with self._lock:
            self._records.append(record)
        return record.id

    def find_recent_descending(self, limit: int) -> list[FeedbackRecord]:
        if limit <= 0:
            return []
        with self._lock:
            newest_first = list(reversed(self._records))[:limit]
        return [record.model_copy(deep=True) for record in newest_first]

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)


class MongoFeedbackStore(BaseFeedbackStore):
    """Stores each submission as one MongoDB document.

    Document layout: `items`, `timestamp`, `createdAt`, `updatedAt`.
    """

    def __init__(
        self,
        uri: Optional[str] = None,
        db_name: str = "feedback_form",
        collection_name: str = "feedbacks",
        *,
        client: Optional[MongoClient] = None,
    ):
        if client is None and not uri:
            raise ValueError("MONGODB_URI is required for the MongoDB feedback store")

        self._owns_client = client is None
        self._client = client if client is not None else MongoClient(uri, tz_aware=True, serverSelectionTimeoutMS=5000)
        self._db_name = db_name
        self._collection = self._client[db_name][collection_name]

    def create(self, submission: ValidatedSubmission) -> str:
        now = utcnow()
        doc = {
            "items": [item.model_dump() for item in submission.items],
            "timestamp": submission.timestamp or now,
            "createdAt": now,
            "updatedAt": now,
        }
        try:
            result = self._collection.insert_one(doc)
        except PyMongoError as exc:
            raise PersistenceError("Failed to insert feedback record") from exc
        return str(result.inserted_id)

    def find_recent_descending(self, limit: int) -> list[FeedbackRecord]:
        if limit <= 0:
            return []
        try:
            docs = list(self._collection.find().sort("createdAt", DESCENDING).limit(limit))
        except PyMongoError as exc:
            raise PersistenceError("Failed to read feedback records") from exc
        records = []
        for doc in docs:
            try:
                records.append(self._doc_to_record(doc))
            except (ValidationError, KeyError, TypeError, AttributeError):
                logger.warning("Skipping unreadable feedback document _id=%s", doc.get("_id"), exc_info=True)
        return records

    def ping(self) -> None:
        try:
            self._client.admin.command("ping")
        except PyMongoError as exc:
            raise PersistenceError(f"MongoDB not reachable (db={self._db_name})") from exc

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    @staticmethod
    def _doc_to_record(doc: dict[str, Any]) -> FeedbackRecord:
        created_at = doc.get("createdAt") or doc.get("timestamp") or utcnow()
        return FeedbackRecord(
            id=str(doc["_id"]),
            items=[
                StoredFeedbackItem(
                    subject=it.get("subject") or "",
                    rating=it.get("rating"),
                    comments=it.get("comments") or "",
                )
                for it in doc.get("items") or []
            ],
            timestamp=doc.get("timestamp") or created_at,
            created_at=created_at,
        )


def build_store(settings: Settings) -> BaseFeedbackStore:
    """Create the store selected by `FEEDBACK_STORE`."""
    if settings.feedback_store == "memory":
        logger.info("Using in-memory feedback store (records are lost on restart)")
        return InMemoryFeedbackStore()
    if settings.feedback_store == "mongodb":
        if not settings.mongodb_uri:
            raise RuntimeError("MONGODB_URI is not set")
        return MongoFeedbackStore(
            uri=settings.mongodb_uri,
            db_name=settings.mongodb_db,
            collection_name=settings.mongodb_collection,
        )
    raise ValueError(f"Unknown FEEDBACK_STORE: {settings.feedback_store!r} (expected 'mongodb' or 'memory')")
