"""Tests for feedback store implementations."""

from __future__ import annotations

from datetime import datetime, timezone
from unittest.mock import MagicMock

import pytest
from bson import ObjectId
from pymongo.errors import PyMongoError, ServerSelectionTimeoutError

from backend.core.config import Settings
from backend.core.errors import PersistenceError
from backend.db.feedback_store import (
    InMemoryFeedbackStore,
    MongoFeedbackStore,
    build_store,
)
from backend.schemas.feedback import FeedbackItem, ValidatedSubmission


def _make_submission(subject="Intro", timestamp=None):
    return ValidatedSubmission(
        items=[
            FeedbackItem(subject=subject, rating=5, comments=""),
            FeedbackItem(subject="Deep Dive", rating=3, comments="too fast"),
        ],
        timestamp=timestamp,
    )


def _mongo_store():
    client = MagicMock()
    collection = MagicMock()
    client.__getitem__.return_value.__getitem__.return_value = collection
    return MongoFeedbackStore(client=client), client, collection


# ---------------------------------------------------------------------------
# InMemoryFeedbackStore
# ---------------------------------------------------------------------------


class TestInMemoryFeedbackStore:
    def test_create_returns_distinct_ids(self):
        store = InMemoryFeedbackStore()
        first = store.create(_make_submission())
        second = store.create(_make_submission())

        assert first and second and first != second
        assert len(store) == 2

    def test_recent_descending_and_limited(self):
        store = InMemoryFeedbackStore()
        ids = [store.create(_make_submission(subject=f"Lesson {i}")) for i in range(5)]

        records = store.find_recent_descending(3)
        assert [r.id for r in records] == [ids[4], ids[3], ids[2]]
        assert records[0].items[0].subject == "Lesson 4"

    def test_non_positive_limit_returns_nothing(self):
        store = InMemoryFeedbackStore()
        store.create(_make_submission())
        assert store.find_recent_descending(0) == []

    def test_returned_records_are_copies(self):
        store = InMemoryFeedbackStore()
        store.create(_make_submission())

        store.find_recent_descending(1)[0].items[0].subject = "Tampered"
        assert store.find_recent_descending(1)[0].items[0].subject == "Intro"

    def test_timestamp_defaults_to_created_at(self):
        store = InMemoryFeedbackStore()
        store.create(_make_submission())
        record = store.find_recent_descending(1)[0]
        assert record.timestamp == record.created_at

    def test_client_timestamp_kept(self):
        moment = datetime(2025, 1, 2, 3, 4, 5, tzinfo=timezone.utc)
        store = InMemoryFeedbackStore()
        store.create(_make_submission(timestamp=moment))
        assert store.find_recent_descending(1)[0].timestamp == moment


# ---------------------------------------------------------------------------
# MongoFeedbackStore
# ---------------------------------------------------------------------------


class TestMongoFeedbackStore:
    def test_requires_uri_or_client(self):
        with pytest.raises(ValueError, match="MONGODB_URI"):
            MongoFeedbackStore()

    def test_create_inserts_document_and_returns_id(self):
        store, _, collection = _mongo_store()
        oid = ObjectId()
        collection.insert_one.return_value = MagicMock(inserted_id=oid)

        record_id = store.create(_make_submission())

        assert record_id == str(oid)
        doc = collection.insert_one.call_args[0][0]
        assert doc["items"] == [
            {"subject": "Intro", "rating": 5, "comments": ""},
            {"subject": "Deep Dive", "rating": 3, "comments": "too fast"},
        ]
        assert doc["timestamp"] == doc["createdAt"] == doc["updatedAt"]

    def test_create_keeps_client_timestamp(self):
        store, _, collection = _mongo_store()
        collection.insert_one.return_value = MagicMock(inserted_id=ObjectId())
        moment = datetime(2025, 1, 2, tzinfo=timezone.utc)

        store.create(_make_submission(timestamp=moment))

        doc = collection.insert_one.call_args[0][0]
        assert doc["timestamp"] == moment
        assert doc["createdAt"] != moment

    def test_insert_failure_raises_persistence_error(self):
        store, _, collection = _mongo_store()
        collection.insert_one.side_effect = PyMongoError("connection reset")

        with pytest.raises(PersistenceError):
            store.create(_make_submission())

    def test_find_recent_sorts_by_created_at_descending(self):
        store, _, collection = _mongo_store()
        created = datetime(2025, 3, 1, 9, 30, tzinfo=timezone.utc)
        oid = ObjectId()
        cursor = collection.find.return_value
        cursor.sort.return_value.limit.return_value = [
            {
                "_id": oid,
                "items": [{"subject": "Intro", "rating": 4, "comments": None}],
                "timestamp": created,
                "createdAt": created,
                "updatedAt": created,
                "__v": 0,
            }
        ]

        records = store.find_recent_descending(20)

        cursor.sort.assert_called_once_with("createdAt", -1)
        cursor.sort.return_value.limit.assert_called_once_with(20)
        assert len(records) == 1
        assert records[0].id == str(oid)
        assert records[0].items[0].comments == ""
        assert records[0].created_at == created

    def test_legacy_fractional_rating_read_back(self):
        store, _, collection = _mongo_store()
        created = datetime(2024, 6, 1, tzinfo=timezone.utc)
        collection.find.return_value.sort.return_value.limit.return_value = [
            {"_id": ObjectId(), "items": [{"subject": "Intro", "rating": 4}], "createdAt": created},
            {"_id": ObjectId(), "items": [{"subject": "Legacy", "rating": 3.5, "comments": ""}], "createdAt": created},
        ]

        records = store.find_recent_descending(20)

        assert [r.items[0].rating for r in records] == [4, 3.5]
        assert isinstance(records[0].items[0].rating, int)
        assert records[1].timestamp == created

    def test_unreadable_document_skipped(self, caplog):
        store, _, collection = _mongo_store()
        created = datetime(2024, 6, 1, tzinfo=timezone.utc)
        good_id = ObjectId()
        collection.find.return_value.sort.return_value.limit.return_value = [
            {"_id": ObjectId(), "items": [{"subject": "Broken", "rating": None}], "createdAt": created},
            {"_id": good_id, "items": [{"subject": "Intro", "rating": 5}], "createdAt": created},
        ]

        records = store.find_recent_descending(20)

        assert [r.id for r in records] == [str(good_id)]
        assert "Skipping unreadable feedback document" in caplog.text

    def test_find_failure_raises_persistence_error(self):
        store, _, collection = _mongo_store()
        collection.find.side_effect = PyMongoError("timeout")

        with pytest.raises(PersistenceError):
            store.find_recent_descending(20)

    def test_ping_failure_raises_persistence_error(self):
        store, client, _ = _mongo_store()
        client.admin.command.side_effect = ServerSelectionTimeoutError("no servers")

        with pytest.raises(PersistenceError, match="not reachable"):
            store.ping()

    def test_injected_client_not_closed(self):
        store, client, _ = _mongo_store()
        store.close()
        client.close.assert_not_called()


# ---------------------------------------------------------------------------
# build_store
# ---------------------------------------------------------------------------


def test_build_memory_store():
    assert isinstance(build_store(Settings(feedback_store="memory")), InMemoryFeedbackStore)


def test_build_mongodb_store_without_uri_fails():
    with pytest.raises(RuntimeError, match="MONGODB_URI is not set"):
        build_store(Settings(feedback_store="mongodb", mongodb_uri=None))


def test_build_unknown_store_fails():
    with pytest.raises(ValueError, match="Unknown FEEDBACK_STORE"):
        build_store(Settings(feedback_store="postgres"))
