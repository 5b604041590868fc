"""Submit action for the feedback form.

One call = one user click:
  extract rows -> validate -> build payload -> submit once -> notice (+ reset on success)

No Streamlit dependencies; the UI renders the returned Notice.
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, Literal

from frontend.services.api_client import SubmissionFailure, SubmissionResult, SubmissionSuccess, submit_feedback
from frontend.utils.payload import build_payload
from frontend.utils.rating_form import FeedbackForm
from frontend.utils.validation import validate_rows

logger = logging.getLogger(__name__)

MSG_NO_LESSONS = "No lessons found."
MSG_INCOMPLETE = "Please select a rating for every lesson before sending."
MSG_THANKS = "Thanks for your feedback!"
MSG_FAILED = "Failed to submit feedback. Please try again."

Submitter = Callable[[Dict[str, Any]], SubmissionResult]


@dataclass(frozen=True)
class Notice:
    """A message for the user after a submit attempt."""

    level: Literal["success", "warning", "error"]
    message: str


def send_feedback(form: FeedbackForm, submit: Submitter = submit_feedback) -> Notice:
    """Run the submit action for `form`.

    Nothing is sent when the form has no rows or any row lacks a rating. On
    success every row is reset; on failure the user's input is kept so they
    can try again.

    Args:
        form: The form being submitted.
        submit: Sends the payload and returns a result; one call per invocation.

    Returns:
        The notice to show.
    """
    rows = form.extract_rows()
    if not rows:
        return Notice("warning", MSG_NO_LESSONS)

    if not validate_rows(rows):
        return Notice("warning", MSG_INCOMPLETE)

    result = submit(build_payload(rows))

    if isinstance(result, SubmissionSuccess):
        logger.info("Feedback stored (id=%s, rows=%d)", result.record_id, len(rows))
        form.reset()
        return Notice("success", MSG_THANKS)

    if isinstance(result, SubmissionFailure):
        logger.warning("Feedback not stored (status=%s): %s", result.status_code, result.message)
        return Notice("error", MSG_FAILED)

    raise TypeError(f"Unexpected submission result: {result!r}")
