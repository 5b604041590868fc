"""Rating form state: per-lesson rows, selection, extraction and reset.

Pure Python - no Streamlit dependencies - so the capture logic can be tested
without a running UI. The Streamlit component in `components/rating_grid.py`
only renders a `FeedbackForm` and forwards user choices to it.

Rows are bound from an explicit list of descriptors (mappings with named
`subject`, `rating` and `comments` fields) instead of being inferred from the
layout of widgets on the page.
"""

import logging
from dataclasses import dataclass, replace
from typing import Any, Iterable, List, Mapping, Optional

logger = logging.getLogger(__name__)

# The only choices the UI renders for a rating.
RATING_CHOICES = (1, 2, 3, 4, 5)


@dataclass
class RatingRow:
    """Feedback for a single lesson.

    Attributes:
        subject: Trimmed, non-empty display label. Never changed after binding.
        rating: Selected rating, or None while unselected.
        comments: Free-text comments exactly as typed (may be empty).
    """

    subject: str
    rating: Optional[int] = None
    comments: str = ""


def _bind_row(descriptor: Any) -> Optional[RatingRow]:
    if not isinstance(descriptor, Mapping):
        return None

    subject = descriptor.get("subject")
    if not isinstance(subject, str) or not subject.strip():
        return None

    rating = descriptor.get("rating")
    if rating is not None and (isinstance(rating, bool) or not isinstance(rating, int)):
        return None

    comments = descriptor.get("comments", "")
    if comments is None:
        comments = ""
    if not isinstance(comments, str):
        return None

    return RatingRow(subject=subject.strip(), rating=rating, comments=comments)


def bind_rows(descriptors: Iterable[Any]) -> List[RatingRow]:
    """Bind declared row descriptors into rating rows.

    Each descriptor must provide a non-blank string `subject`; `rating` (int or
    None) and `comments` (str) are optional. Malformed descriptors are skipped
    and logged, the remaining rows keep their declared order.

    Args:
        descriptors: Row descriptors in presentation order.

    Returns:
        The bound rows, in the same order as the valid descriptors.
    """
    rows: List[RatingRow] = []
    for position, descriptor in enumerate(descriptors, start=1):
        row = _bind_row(descriptor)
        if row is None:
            logger.warning("Skipping malformed feedback row #%d: %r", position, descriptor)
            continue
        rows.append(row)
    return rows


class FeedbackForm:
    """The ordered rows of one feedback form, reused across submissions.

    `cycle` increases on every reset; the UI uses it to key its widgets so a
    reset also clears what is shown on screen.
    """

    def __init__(self, rows: Iterable[RatingRow]):
        self._rows: List[RatingRow] = list(rows)
        self.cycle = 0

    @classmethod
    def from_subjects(cls, subjects: Iterable[str]) -> "FeedbackForm":
        """Build a blank form with one row per lesson label."""
        return cls(bind_rows({"subject": subject} for subject in subjects))

    @property
    def rows(self) -> List[RatingRow]:
        return list(self._rows)

    def __len__(self) -> int:
        return len(self._rows)

    def select(self, index: int, value: int) -> None:
        """Select `value` for the row at `index`.

        The last choice wins; reselecting the current value changes nothing.
        `value` always comes from RATING_CHOICES, which is all the UI offers.
        """
        self._rows[index].rating = value

    def set_comments(self, index: int, text: str) -> None:
        """Store the comment text for the row at `index` as typed."""
        self._rows[index].comments = text or ""

    def extract_rows(self) -> List[RatingRow]:
        """Return a snapshot of every row, in presentation order.

        The snapshot is detached from the form, so later edits or a reset do
        not change rows that are already being submitted.
        """
        return [replace(row) for row in self._rows]

    def reset(self) -> None:
        """Return every row to an unset rating and empty comments.

        Idempotent: resetting an already blank form only advances `cycle`.
        """
        for row in self._rows:
            row.rating = None
            row.comments = ""
        self.cycle += 1
