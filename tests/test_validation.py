"""Tests for event write validation."""

from datetime import datetime, timezone

import pytest

from core.validation import build_event_document, check_update_range, validate_event_fields

VALID = {
    "title": "Client kickoff",
    "type": "meeting",
    "start": "2024-05-14T09:00:00Z",
    "end": "2024-05-14T10:00:00Z",
}


def test_valid_fields():
    assert validate_event_fields(VALID) == []


def test_missing_required_fields():
    errors = validate_event_fields({})
    assert "Missing event title" in errors
    assert "Missing start time" in errors
    assert "Missing end time" in errors


def test_collects_every_error():
    errors = validate_event_fields(
        {"title": "  ", "type": "party", "start": "later", "end": "2024-05-14", "owner": "x"}
    )
    assert errors == [
        "Unknown field(s): owner",
        "Missing event title",
        "Invalid event type 'party'",
        "Invalid start time 'later'",
    ]


def test_start_after_end():
    errors = validate_event_fields({**VALID, "start": "2024-05-14T11:00:00Z"})
    assert errors == ["Event start must not be after its end"]


def test_equal_start_and_end_allowed():
    assert validate_event_fields({**VALID, "end": VALID["start"]}) == []


def test_partial_only_checks_supplied_fields():
    assert validate_event_fields({"location": "Zoom"}, partial=True) == []
    assert validate_event_fields({"title": ""}, partial=True) == ["Missing event title"]


def test_build_event_document_converts_times():
    document = build_event_document({**VALID, "title": " Client kickoff ", "projectId": ""})

    assert document["title"] == "Client kickoff"
    assert document["start"] == datetime(2024, 5, 14, 9, 0, tzinfo=timezone.utc)
    assert document["projectId"] is None


def test_build_event_document_raises_one_line_per_error():
    with pytest.raises(ValueError) as exc_info:
        build_event_document({"type": "party"})
    assert str(exc_info.value).split("\n") == [
        "Missing event title",
        "Invalid event type 'party'",
        "Missing start time",
        "Missing end time",
    ]


def test_check_update_range():
    start = datetime(2024, 5, 14, 9, 0, tzinfo=timezone.utc)
    end = datetime(2024, 5, 14, 10, 0, tzinfo=timezone.utc)

    check_update_range(start, end, {"end": datetime(2024, 5, 14, 12, 0, tzinfo=timezone.utc)})
    with pytest.raises(ValueError):
        check_update_range(start, end, {"start": datetime(2024, 5, 14, 11, 0, tzinfo=timezone.utc)})
