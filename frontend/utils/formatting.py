"""Text formatting utilities for the recent-feedback panel.

Pure functions - no Streamlit dependencies.
"""

import re
from datetime import datetime, timezone
from typing import Any, Optional

from frontend.utils.rating_form import RATING_CHOICES


def clean_whitespace(text: Optional[str]) -> str:
    """Collapse runs of whitespace (including newlines) into single spaces."""
    if not text:
        return ""
    return re.sub(r"\s+", " ", text).strip()


def truncate(text: Optional[str], limit: int = 120) -> str:
    """Shorten `text` to at most `limit` characters, ending with an ellipsis if cut."""
    text = clean_whitespace(text)
    if len(text) <= limit:
        return text
    return text[: max(limit - 1, 0)].rstrip() + "…"


def format_rating(value: Any) -> str:
    """Render a rating as filled/empty dots, e.g. 3 -> "●●●○○ (3/5)".

    Values outside 1-5 are shown as "–" so bad records do not break the panel.
    """
    if isinstance(value, bool) or not isinstance(value, int) or value not in RATING_CHOICES:
        return "–"
    top = RATING_CHOICES[-1]
    return f"{'●' * value}{'○' * (top - value)} ({value}/{top})"


def format_timestamp_label(value: Optional[str]) -> str:
    """Turn an ISO-8601 timestamp from the API into "YYYY-MM-DD HH:MM UTC"."""
    if not value:
        return "unknown time"
    try:
        moment = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return value
    if moment.tzinfo is None:
        return moment.strftime("%Y-%m-%d %H:%M")
    return moment.astimezone(timezone.utc).strftime("%Y-%m-%d %H:%M") + " UTC"
