"""
Conversion of Firestore calendar and project records into canonical events.
"""

from datetime import date, datetime, timezone

from core.config import (
    DEADLINE_ID_PREFIX,
    DEADLINE_TITLE_SUFFIX,
    ORIGIN_PROJECT_DEADLINE,
    ORIGIN_USER_EVENT,
    UNTITLED_EVENT,
)
from core.database import to_records
from models.events import Event


def parse_timestamp(value) -> datetime | None:
    """
    Convert a stored timestamp into a UTC-aware datetime.

    Accepts Firestore timestamps (DatetimeWithNanoseconds is a datetime
    subclass; protobuf Timestamps expose ToDatetime), plain datetimes and
    dates, and ISO strings. Date-only values map to midnight UTC.
    Returns None for anything else.
    """
    if value is None:
        return None

    if not isinstance(value, datetime):
        if hasattr(value, "to_datetime"):
            value = value.to_datetime()
        elif hasattr(value, "ToDatetime"):
            value = value.ToDatetime()

    if isinstance(value, datetime):
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        try:
            return value.astimezone(timezone.utc)
        except OverflowError:
            # Offset pushes the instant outside datetime's range
            return None

    if isinstance(value, date):
        return datetime(value.year, value.month, value.day, tzinfo=timezone.utc)

    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            if len(text) == 10:
                return parse_timestamp(date.fromisoformat(text))
            return parse_timestamp(datetime.fromisoformat(text.replace("Z", "+00:00")))
        except ValueError:
            return None

    return None


def _text(data: dict, key: str) -> str:
    value = data.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise TypeError(f"Field '{key}' must be a string, got {type(value).__name__}")
    return value


def deadline_event_id(project_id: str) -> str:
    """Deterministic event id for a project's deadline."""
    return f"{DEADLINE_ID_PREFIX}{project_id}"


def parse_calendar_event(doc_id: str, data: dict) -> Event | None:
    """
    Parse a calendarEvents document into a user event.

    A missing type stays empty, so it renders with the default style.

    Raises:
        TypeError: a text field holds something other than a string
    """
    start = parse_timestamp(data.get("start"))
    if start is None:
        return None
    end = parse_timestamp(data.get("end")) or start
    if end < start:
        return None

    return Event(
        id=doc_id,
        title=_text(data, "title") or UNTITLED_EVENT,
        start=start,
        end=end,
        type=_text(data, "type"),
        origin=ORIGIN_USER_EVENT,
        source_id=doc_id,
        all_day=bool(data.get("allDay", False)),
        location=_text(data, "location"),
        description=_text(data, "description"),
        project_id=_text(data, "projectId") or None,
        project_name=_text(data, "projectName") or None,
    )


def parse_project_deadline(doc_id: str, data: dict) -> Event | None:
    """Derive a deadline event from a project's endDate, or None if it has none."""
    deadline = parse_timestamp(data.get("endDate"))
    if deadline is None:
        return None

    name = _text(data, "name")
    return Event(
        id=deadline_event_id(doc_id),
        title=f"{name}{DEADLINE_TITLE_SUFFIX}",
        start=deadline,
        end=deadline,
        type="deadline",
        origin=ORIGIN_PROJECT_DEADLINE,
        source_id=doc_id,
        all_day=True,
        project_id=doc_id,
        project_name=name or None,
    )


def _parse_batch(docs, parse) -> list[Event]:
    # Keyed by id so a source document appears at most once per batch
    parsed: dict[str, Event] = {}
    for doc_id, data in to_records(docs):
        try:
            event = parse(doc_id, data)
        except (AttributeError, TypeError, ValueError, OverflowError):
            # Malformed record, drop it and keep going
            continue
        if event is not None:
            parsed[event.id] = event
    return list(parsed.values())


def parse_calendar_events(docs) -> list[Event]:
    """Parse a calendarEvents snapshot (records or document snapshots)."""
    return _parse_batch(docs, parse_calendar_event)


def parse_project_deadlines(docs) -> list[Event]:
    """Derive deadline events from a projects batch, skipping projects without one."""
    return _parse_batch(docs, parse_project_deadline)


def project_options(docs) -> list[dict]:
    """Project id/name pairs for the event form's project picker."""
    options = []
    for doc_id, data in to_records(docs):
        name = data.get("name")
        options.append({"id": doc_id, "name": name if isinstance(name, str) else ""})
    return options
