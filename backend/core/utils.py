"""Core utility functions shared across the backend."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def parse_iso_datetime(value: Any) -> datetime:
    """Parse an ISO-8601 timestamp into an aware UTC datetime.

    Accepts both `...Z` and `...+00:00` styles. Naive values are treated as UTC.

    Raises:
        ValueError: If `value` is not an ISO-8601 string, or shifting it to UTC
            leaves the supported date range.
    """
    if isinstance(value, datetime):
        dt = value
    elif isinstance(value, str) and value.strip():
        dt = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
    else:
        raise ValueError(f"Not an ISO-8601 timestamp: {value!r}")

    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    try:
        return dt.astimezone(timezone.utc)
    except OverflowError as exc:
        raise ValueError(f"Timestamp out of range: {value!r}") from exc


def isoformat_utc(value: datetime) -> str:
    """Render an aware datetime as ISO-8601 with a trailing `Z`."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")
