"""Client-side validation for the feedback form.

A submission is allowed only when every lesson has a rating; comments are
always optional. Validation is all-or-nothing.
"""

from typing import Any, Iterable

from frontend.utils.rating_form import RATING_CHOICES, RatingRow


def is_valid_rating(value: Any) -> bool:
    """Return True if `value` is one of the ratings the form offers (1-5)."""
    if isinstance(value, bool) or not isinstance(value, int):
        return False
    return value in RATING_CHOICES


def validate_rows(rows: Iterable[RatingRow]) -> bool:
    """Check that every row carries a valid rating.

    Args:
        rows: Extracted rows, in presentation order.

    Returns:
        True if every row has a rating in 1-5, False as soon as one does not.
        An empty iterable is trivially valid; callers reject empty forms first.
    """
    return all(is_valid_rating(row.rating) for row in rows)
