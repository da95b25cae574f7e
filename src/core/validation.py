"""
Validation of calendar event fields before they are written.
"""

from datetime import datetime

from core.config import EDITABLE_EVENT_FIELDS, EVENT_TYPES
from services.calendar import parse_timestamp


def validate_event_fields(fields: dict, partial: bool = False) -> list[str]:
    """
    Check user-supplied event fields.

    Checks:
    1. Only editable fields are present
    2. Title is present (on create, or when supplied on update)
    3. Type is a known event type
    4. Start and end parse, and start is not after end

    Returns:
        List of error messages, empty when valid
    """
    errors = []

    unknown = sorted(set(fields) - EDITABLE_EVENT_FIELDS)
    if unknown:
        errors.append(f"Unknown field(s): {', '.join(unknown)}")

    if not partial or "title" in fields:
        title = fields.get("title")
        if not isinstance(title, str) or not title.strip():
            errors.append("Missing event title")

    if "type" in fields and fields["type"] not in EVENT_TYPES:
        errors.append(f"Invalid event type '{fields['type']}'")

    start = end = None
    for name in ("start", "end"):
        if name not in fields:
            if not partial:
                errors.append(f"Missing {name} time")
            continue
        parsed = parse_timestamp(fields[name])
        if parsed is None:
            errors.append(f"Invalid {name} time '{fields[name]}'")
        elif name == "start":
            start = parsed
        else:
            end = parsed

    if start and end and start > end:
        errors.append("Event start must not be after its end")

    return errors


def build_event_document(fields: dict, partial: bool = False) -> dict:
    """
    Validate fields and convert them to the stored document shape.

    Raises:
        ValueError: one line per validation error
    """
    errors = validate_event_fields(fields, partial=partial)
    if errors:
        raise ValueError("\n".join(errors))

    document = dict(fields)
    for name in ("start", "end"):
        if name in document:
            document[name] = parse_timestamp(document[name])
    if "title" in document:
        document["title"] = document["title"].strip()
    if "projectId" in document:
        document["projectId"] = document["projectId"] or None
    return document


def check_update_range(existing_start: datetime, existing_end: datetime, document: dict) -> None:
    """
    Ensure a partial update keeps start <= end against the stored values.

    Raises:
        ValueError: the merged range is inverted
    """
    start = document.get("start", existing_start)
    end = document.get("end", existing_end)
    if start > end:
        raise ValueError("Event start must not be after its end")
