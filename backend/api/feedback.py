"""Feedback endpoints.

Frontend calls:
  POST /api/feedback   save one submission (all-or-nothing)
  GET  /api/feedback   most recent records, newest first (for inspection)

Errors are returned as `{"error": "..."}`; details stay in the server log.
"""

from __future__ import annotations

import json
from typing import Any

from fastapi import APIRouter, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse

from ..core.config import Settings, get_settings
from ..core.errors import PersistenceError, SubmissionValidationError
from ..core.logging import get_logger
from ..db.feedback_store import BaseFeedbackStore
from ..schemas.feedback import CreatedResponse, ErrorResponse, FeedbackRecord
from ..services.validation import ITEMS_REQUIRED, validate_submission

logger = get_logger(__name__)
router = APIRouter()

SAVE_FAILED = "Failed to save feedback"
LOAD_FAILED = "Failed to load feedback"
PAYLOAD_TOO_LARGE = "Payload too large."


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=ErrorResponse(error=message).model_dump())


def _settings(request: Request) -> Settings:
    return getattr(request.app.state, "settings", None) or get_settings()


def _store(request: Request) -> BaseFeedbackStore:
    store = getattr(request.app.state, "store", None)
    if store is None:
        raise PersistenceError("Feedback store is not initialised")
    return store


def _parse_json(raw: bytes) -> Any:
    if not raw:
        return None
    try:
        return json.loads(raw)
    except (ValueError, RecursionError):
        # RecursionError: nesting deeper than the decoder allows.
        return None


@router.post(
    "/feedback",
    status_code=201,
    response_model=CreatedResponse,
    responses={400: {"model": ErrorResponse}, 413: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def submit_feedback(request: Request):
    settings = _settings(request)

    raw = await request.body()
    if len(raw) > settings.max_body_bytes:
        logger.warning("Rejected feedback body of %d bytes (limit=%d)", len(raw), settings.max_body_bytes)
        return _error(413, PAYLOAD_TOO_LARGE)

    body = _parse_json(raw)
    if body is None:
        return _error(400, ITEMS_REQUIRED)

    try:
        submission = validate_submission(body)
    except SubmissionValidationError as e:
        logger.info("Feedback rejected: %s", e)
        return _error(400, str(e))

    try:
        record_id = await run_in_threadpool(_store(request).create, submission)
    except Exception as e:
        logger.exception("Saving feedback failed: %s", e)
        return _error(500, SAVE_FAILED)

    logger.info("Feedback saved (id=%s, items=%d)", record_id, len(submission.items))
    return JSONResponse(status_code=201, content=CreatedResponse(id=record_id).model_dump())


@router.get("/feedback", response_model=list[FeedbackRecord], responses={500: {"model": ErrorResponse}})
def list_feedback(request: Request):
    settings = _settings(request)
    try:
        records = _store(request).find_recent_descending(settings.recent_feedback_limit)
    except Exception as e:
        logger.exception("Loading feedback failed: %s", e)
        return _error(500, LOAD_FAILED)
    return records
