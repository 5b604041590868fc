"""Pydantic models for the /api/feedback endpoints.

Request bodies are validated by `services.validation` (so the error messages
match the wire contract); these models describe validated data and responses.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional, Union

from pydantic import BaseModel, Field


class FeedbackItem(BaseModel):
    subject: str = Field(..., min_length=1)
    rating: int = Field(..., ge=1, le=5)
    comments: str = ""


class ValidatedSubmission(BaseModel):
    items: list[FeedbackItem] = Field(..., min_length=1)
    timestamp: Optional[datetime] = None


class StoredFeedbackItem(BaseModel):
    """An item as read back from storage.

    Looser than FeedbackItem: older documents in a shared collection may hold
    non-integral ratings (e.g. 3.5) that the write path no longer accepts.
    """

    subject: str = ""
    rating: Union[int, float]
    comments: str = ""


class FeedbackRecord(BaseModel):
    id: str
    items: list[StoredFeedbackItem]
    timestamp: datetime
    created_at: datetime


class CreatedResponse(BaseModel):
    id: str


class ErrorResponse(BaseModel):
    error: str


class HealthResponse(BaseModel):
    ok: bool = True
