"""Server-side validation of feedback submissions.

Nothing from the client is trusted: the raw JSON body is checked item by item
and the first violation rejects the whole batch.
"""

from __future__ import annotations

import math
from typing import Any

from ..core.errors import SubmissionValidationError
from ..core.utils import parse_iso_datetime
from ..schemas.feedback import FeedbackItem, ValidatedSubmission

ITEMS_REQUIRED = "Invalid payload: items[] required."
TIMESTAMP_INVALID = "Invalid payload: timestamp must be an ISO-8601 string."

MIN_RATING = 1
MAX_RATING = 5


def _coerce_text(value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return ""


def _coerce_rating(value: Any) -> int | None:
    """Return the rating as an int, or None when it is not a whole number in range."""
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, str):
        try:
            value = float(value.strip())
        except ValueError:
            return None
    if isinstance(value, float):
        if not math.isfinite(value) or not value.is_integer():
            return None
        value = int(value)
    # Compare ints directly; arbitrarily large JSON integers never reach float().
    if not isinstance(value, int):
        return None
    if value < MIN_RATING or value > MAX_RATING:
        return None
    return value


def validate_item(raw: Any, index: int) -> FeedbackItem:
    """Validate one item; `index` is 1-based and only used in error messages."""
    fields = raw if isinstance(raw, dict) else {}

    subject = _coerce_text(fields.get("subject")).strip()
    if not subject:
        raise SubmissionValidationError(f"Item {index}: subject is required", item_index=index)

    rating = _coerce_rating(fields.get("rating"))
    if rating is None:
        raise SubmissionValidationError(f"Item {index}: rating must be 1-5", item_index=index)

    comments = _coerce_text(fields.get("comments"))
    return FeedbackItem(subject=subject, rating=rating, comments=comments)


def validate_submission(body: Any) -> ValidatedSubmission:
    """Validate an untrusted request body.

    Raises:
        SubmissionValidationError: On the first violation found.
    """
    if not isinstance(body, dict):
        raise SubmissionValidationError(ITEMS_REQUIRED)

    raw_items = body.get("items")
    if not isinstance(raw_items, list) or not raw_items:
        raise SubmissionValidationError(ITEMS_REQUIRED)

    items = [validate_item(raw, idx) for idx, raw in enumerate(raw_items, start=1)]

    timestamp = None
    raw_timestamp = body.get("timestamp")
    if raw_timestamp not in (None, ""):
        if not isinstance(raw_timestamp, str):
            raise SubmissionValidationError(TIMESTAMP_INVALID)
        try:
            timestamp = parse_iso_datetime(raw_timestamp)
        except (ValueError, OverflowError) as exc:
            raise SubmissionValidationError(TIMESTAMP_INVALID) from exc

    return ValidatedSubmission(items=items, timestamp=timestamp)
