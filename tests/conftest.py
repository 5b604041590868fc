"""Shared fixtures: an API wired to an in-memory store."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from backend.core.config import Settings
from backend.db.feedback_store import InMemoryFeedbackStore
from backend.main import create_app
from frontend.utils.rating_form import FeedbackForm


@pytest.fixture
def settings() -> Settings:
    return Settings(feedback_store="memory", cors_allow_origins="http://allowed.example")


@pytest.fixture
def store() -> InMemoryFeedbackStore:
    return InMemoryFeedbackStore()


@pytest.fixture
def app(settings, store):
    return create_app(settings=settings, store=store)


@pytest.fixture
def client(app) -> TestClient:
    return TestClient(app)


@pytest.fixture
def form() -> FeedbackForm:
    return FeedbackForm.from_subjects(["Intro", "Deep Dive", "Wrap-up"])


@pytest.fixture
def valid_payload() -> dict:
    return {
        "timestamp": "2025-03-01T09:30:00.000Z",
        "items": [
            {"subject": "Intro", "rating": 5, "comments": ""},
            {"subject": "Deep Dive", "rating": 3, "comments": "too fast"},
        ],
    }
