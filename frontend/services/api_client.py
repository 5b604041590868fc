"""HTTP client for FastAPI backend communication.

Handles POST/GET requests, error handling, and response parsing.

`post_feedback` raises on failure (APIError hierarchy); `submit_feedback`
wraps it into an explicit SubmissionSuccess / SubmissionFailure result so
callers have to handle both outcomes.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Union

import requests

from frontend.config.settings import (
    API_FEEDBACK_ENDPOINT,
    BACKEND_BASE_URL,
    REQUEST_TIMEOUT,
)

logger = logging.getLogger(__name__)


class APIError(Exception):
    """Base exception for API client errors."""
    pass


class APIConnectionError(APIError):
    """Raised when unable to connect to the backend."""
    pass


class APITimeoutError(APIError):
    """Raised when the request exceeds the timeout."""
    pass


class APIHTTPError(APIError):
    """Raised when the backend returns a non-2xx status code."""

    def __init__(self, message: str, status_code: int, response_body: Optional[str] = None):
        super().__init__(message)
        self.status_code = status_code
        self.response_body = response_body


@dataclass(frozen=True)
class SubmissionSuccess:
    """The backend stored the submission under `record_id`."""

    record_id: str


@dataclass(frozen=True)
class SubmissionFailure:
    """The submission was not stored (network fault or rejected by the backend)."""

    message: str
    status_code: Optional[int] = None


SubmissionResult = Union[SubmissionSuccess, SubmissionFailure]


def _feedback_url(base_url: Optional[str]) -> str:
    return f"{(base_url or BACKEND_BASE_URL).rstrip('/')}{API_FEEDBACK_ENDPOINT}"


def _error_detail(response: Any) -> str:
    """Pull the backend's `{"error": ...}` message out of a failed response."""
    try:
        body = response.json()
    except ValueError:
        return ""
    if isinstance(body, dict) and body.get("error"):
        return str(body["error"])
    return ""


def _request(method: str, url: str, *, timeout: int, session: Any = None, **kwargs: Any) -> Any:
    """Send one request and return the parsed JSON body.

    Exactly one attempt is made - no retries.

    Raises:
        APIConnectionError: If unable to connect to the backend.
        APITimeoutError: If the request exceeds the timeout.
        APIHTTPError: If the backend returns a non-2xx status code.
        APIError: For any other transport failure or an unreadable body.
    """
    http = session or requests

    try:
        response = http.request(method, url, timeout=timeout, **kwargs)
    except requests.exceptions.ConnectionError as e:
        raise APIConnectionError(
            f"Unable to connect to backend at {url}. "
            "Please ensure the backend service is running."
        ) from e
    except requests.exceptions.Timeout as e:
        raise APITimeoutError(
            f"Request to backend exceeded timeout of {timeout} seconds."
        ) from e
    except requests.exceptions.RequestException as e:
        raise APIError(f"Request to backend failed: {e}") from e

    status_code = response.status_code
    if not 200 <= status_code < 300:
        detail = _error_detail(response)
        raise APIHTTPError(
            f"Backend returned error status {status_code}: {detail or 'no details'}",
            status_code=status_code,
            response_body=getattr(response, "text", None),
        )

    try:
        return response.json()
    except ValueError as e:
        raise APIError(f"Backend returned a non-JSON response (status {status_code})") from e


def post_feedback(
    payload: Dict[str, Any],
    base_url: Optional[str] = None,
    timeout: Optional[int] = None,
    session: Any = None,
) -> Dict[str, Any]:
    """Send a feedback submission to the backend.

    Args:
        payload: Body built by `frontend.utils.payload.build_payload`.
        base_url: Backend base URL; defaults to BACKEND_BASE_URL.
        timeout: Request timeout in seconds; defaults to REQUEST_TIMEOUT.
        session: Optional object with a requests-style `request()` method
            (e.g. `requests.Session`); the `requests` module is used otherwise.

    Returns:
        The response body, e.g. {"id": "..."}.

    Raises:
        APIConnectionError: If unable to connect to the backend.
        APITimeoutError: If the request exceeds the timeout.
        APIHTTPError: If the backend rejects the submission.
    """
    body = _request(
        "POST",
        _feedback_url(base_url),
        timeout=timeout or REQUEST_TIMEOUT,
        session=session,
        json=payload,
        headers={"Content-Type": "application/json"},
    )
    return body if isinstance(body, dict) else {}


def submit_feedback(
    payload: Dict[str, Any],
    base_url: Optional[str] = None,
    timeout: Optional[int] = None,
    session: Any = None,
) -> SubmissionResult:
    """Send a feedback submission and report the outcome as a result value.

    Arguments are the same as for `post_feedback`. Failures are logged with
    their full detail and returned, never raised.
    """
    try:
        body = post_feedback(payload, base_url=base_url, timeout=timeout, session=session)
    except APIError as exc:
        logger.error("Feedback submission failed: %s", exc, exc_info=True)
        return SubmissionFailure(message=str(exc), status_code=getattr(exc, "status_code", None))

    record_id = str(body.get("id") or "")
    if not record_id:
        logger.error("Backend accepted feedback but returned no record id: %r", body)
        return SubmissionFailure(message="Backend response did not include a record id")

    return SubmissionSuccess(record_id=record_id)


def list_recent_feedback(
    base_url: Optional[str] = None,
    timeout: Optional[int] = None,
    session: Any = None,
) -> List[Dict[str, Any]]:
    """Fetch the most recent stored submissions, newest first.

    Raises:
        APIError: Any subclass, as for `post_feedback`.
    """
    body = _request(
        "GET",
        _feedback_url(base_url),
        timeout=timeout or REQUEST_TIMEOUT,
        session=session,
    )
    return body if isinstance(body, list) else []
