"""Tests for server-side submission validation."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from backend.core.errors import SubmissionValidationError
from backend.services.validation import ITEMS_REQUIRED, validate_item, validate_submission


@pytest.mark.parametrize("body", [None, [], "items", {"items": None}, {"items": {}}, {"items": []}])
def test_items_required(body):
    with pytest.raises(SubmissionValidationError, match=r"items\[\] required") as exc:
        validate_submission(body)
    assert str(exc.value) == ITEMS_REQUIRED
    assert exc.value.item_index is None


def test_valid_submission_normalised():
    result = validate_submission(
        {
            "timestamp": "2025-03-01T09:30:00Z",
            "items": [
                {"subject": "  Intro  ", "rating": 5},
                {"subject": "Deep Dive", "rating": 3, "comments": "  too fast "},
            ],
        }
    )

    assert [item.subject for item in result.items] == ["Intro", "Deep Dive"]
    assert [item.rating for item in result.items] == [5, 3]
    # comments are coerced, not trimmed, on the server
    assert [item.comments for item in result.items] == ["", "  too fast "]
    assert result.timestamp == datetime(2025, 3, 1, 9, 30, tzinfo=timezone.utc)


def test_timestamp_optional():
    result = validate_submission({"items": [{"subject": "Intro", "rating": 1}]})
    assert result.timestamp is None


def test_naive_timestamp_is_utc():
    result = validate_submission({"timestamp": "2025-03-01T09:30:00", "items": [{"subject": "A", "rating": 1}]})
    assert result.timestamp.tzinfo is not None
    assert result.timestamp.utcoffset().total_seconds() == 0


@pytest.mark.parametrize("timestamp", ["not a date", 12345, {"at": "now"}])
def test_bad_timestamp(timestamp):
    with pytest.raises(SubmissionValidationError, match="timestamp"):
        validate_submission({"timestamp": timestamp, "items": [{"subject": "A", "rating": 1}]})


@pytest.mark.parametrize("rating", [0, 6, -1, 3.5, "abc", "", None, True, float("nan"), float("inf"), [4]])
def test_rating_must_be_1_to_5(rating):
    with pytest.raises(SubmissionValidationError) as exc:
        validate_item({"subject": "Intro", "rating": rating}, 4)
    assert str(exc.value) == "Item 4: rating must be 1-5"
    assert exc.value.item_index == 4


@pytest.mark.parametrize("rating,expected", [(1, 1), (5, 5), (4.0, 4), ("3", 3), (" 2 ", 2)])
def test_numeric_ratings_accepted(rating, expected):
    assert validate_item({"subject": "Intro", "rating": rating}, 1).rating == expected


@pytest.mark.parametrize("subject", [None, "", "   ", {"name": "Intro"}, ["Intro"]])
def test_subject_required(subject):
    with pytest.raises(SubmissionValidationError, match="Item 1: subject is required"):
        validate_item({"subject": subject, "rating": 3}, 1)


def test_numeric_subject_coerced_to_text():
    assert validate_item({"subject": 101, "rating": 3}, 1).subject == "101"


def test_non_object_item_reports_subject_first():
    with pytest.raises(SubmissionValidationError, match="Item 1: subject is required"):
        validate_item("Intro", 1)


def test_comments_coerced():
    assert validate_item({"subject": "A", "rating": 2, "comments": None}, 1).comments == ""
    assert validate_item({"subject": "A", "rating": 2, "comments": 42}, 1).comments == "42"


def test_first_offending_item_reported():
    body = {
        "items": [
            {"subject": "Intro", "rating": 5},
            {"subject": "Deep Dive", "rating": 9},
            {"subject": "", "rating": 3},
        ]
    }
    with pytest.raises(SubmissionValidationError) as exc:
        validate_submission(body)
    assert str(exc.value) == "Item 2: rating must be 1-5"
    assert exc.value.item_index == 2


def test_huge_integer_rating_is_out_of_range():
    with pytest.raises(SubmissionValidationError, match="Item 1: rating must be 1-5"):
        validate_item({"subject": "Intro", "rating": 10**400}, 1)


def test_timestamp_shifted_before_year_one_rejected():
    with pytest.raises(SubmissionValidationError, match="timestamp"):
        validate_submission({"timestamp": "0001-01-01T00:00:00+05:00", "items": [{"subject": "A", "rating": 1}]})
