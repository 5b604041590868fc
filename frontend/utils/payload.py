"""Submission payload builder.

Turns validated rows into the JSON body sent to `POST /api/feedback`:

    {"timestamp": "<ISO-8601>", "items": [{"subject", "rating", "comments"}, ...]}
"""

from datetime import datetime, timezone
from typing import Any, Dict, Iterable, Optional

from frontend.utils.rating_form import RatingRow


def format_timestamp(moment: Optional[datetime] = None) -> str:
    """Format a point in time as ISO-8601 UTC with millisecond precision.

    Args:
        moment: The time to format; defaults to now. Naive values are taken as UTC.

    Returns:
        A string such as "2025-01-31T09:15:00.123Z".
    """
    if moment is None:
        moment = datetime.now(timezone.utc)
    elif moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    moment = moment.astimezone(timezone.utc)
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def build_payload(rows: Iterable[RatingRow], timestamp: Optional[datetime] = None) -> Dict[str, Any]:
    """Build the canonical submission body from extracted rows.

    Row order is preserved. Subjects and comments are trimmed; empty comments
    are sent as "" rather than omitted.

    Args:
        rows: Validated rows, in presentation order.
        timestamp: Submission time; defaults to now.

    Returns:
        A JSON-serialisable dictionary.
    """
    return {
        "timestamp": format_timestamp(timestamp),
        "items": [
            {
                "subject": row.subject.strip(),
                "rating": row.rating,
                "comments": (row.comments or "").strip(),
            }
            for row in rows
        ],
    }
