"""Domain errors raised by the feedback backend.

Routers translate these into `{"error": ...}` JSON responses; the message is
safe to show to clients, the `__cause__` chain is only logged.
"""

from __future__ import annotations


class FeedbackError(Exception):
    """Base class for feedback backend errors."""


class SubmissionValidationError(FeedbackError):
    """The submitted payload failed server-side validation.

    The whole batch is rejected; `item_index` is the 1-based index of the first
    offending item, or None when the payload shape itself is wrong.
    """

    def __init__(self, message: str, item_index: int | None = None):
        super().__init__(message)
        self.item_index = item_index


class PersistenceError(FeedbackError):
    """The storage collaborator was unavailable or a write/read failed."""
