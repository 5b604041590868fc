"""Tests for backend logging setup."""

from __future__ import annotations

import logging

import pytest

from backend.core.config import Settings
from backend.core.logging import setup_logging
from backend.db.feedback_store import InMemoryFeedbackStore
from backend.main import create_app


@pytest.fixture(autouse=True)
def _restore_levels():
    root = logging.getLogger()
    previous = root.level
    yield
    root.setLevel(previous)
    logging.getLogger("pymongo").setLevel(logging.NOTSET)


def test_injected_settings_level_applied():
    setup_logging(settings=Settings(log_level="warning"))
    assert logging.getLogger().level == logging.WARNING


def test_debug_keeps_driver_loggers_at_info():
    setup_logging(settings=Settings(log_level="DEBUG"))
    assert logging.getLogger().level == logging.DEBUG
    assert logging.getLogger("pymongo").level == logging.INFO


def test_explicit_level_wins_over_settings():
    setup_logging(level="ERROR", settings=Settings(log_level="DEBUG"))
    assert logging.getLogger().level == logging.ERROR


def test_create_app_uses_its_settings_level():
    create_app(settings=Settings(feedback_store="memory", log_level="WARNING"), store=InMemoryFeedbackStore())
    assert logging.getLogger().level == logging.WARNING
