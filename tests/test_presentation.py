"""Tests for event render hints and click dispatch."""

from datetime import datetime, timezone

import pytest

from models.events import Event
from services.presentation import (
    Click,
    dispatch_click,
    event_color,
    event_style,
    render_event,
    type_badge,
    view_affordance_handler,
)

START = datetime(2024, 5, 14, 9, 0, tzinfo=timezone.utc)


def make_event(event_type, origin="user-event"):
    return Event(
        id="e1",
        title="Sync",
        start=START,
        end=START,
        type=event_type,
        origin=origin,
        source_id="e1",
    )


@pytest.mark.parametrize(
    "event_type, color",
    [
        ("meeting", "#8b5cf6"),
        ("deadline", "#ef4444"),
        ("milestone", "#f59e0b"),
        ("reminder", "#10b981"),
        ("task", "#3b82f6"),
        ("social", "#6b7280"),
        ("", "#6b7280"),
        (None, "#6b7280"),
    ],
)
def test_event_color_by_type(event_type, color):
    assert event_color(event_type) == color


def test_event_style_structure():
    style = event_style(make_event("deadline"), START, START, True)["style"]

    assert style["backgroundColor"] == "#ef4444"
    assert style["borderRadius"] == "4px"
    assert style["opacity"] == 0.8
    assert style["fontSize"] == "0.75rem"


def test_event_style_is_pure():
    event = make_event("task")
    assert event_style(event) == event_style(event)
    assert event_style(event) is not event_style(event)


def test_type_badge():
    assert type_badge(make_event("meeting")) == "bg-purple-100 text-purple-700"
    assert type_badge(make_event("reminder")) == "bg-blue-100 text-blue-700"


def test_render_event():
    rendered = render_event(make_event("milestone", origin="project-deadline"))

    assert rendered["start"] == "2024-05-14T09:00:00+00:00"
    assert rendered["editable"] is False
    assert rendered["style"]["backgroundColor"] == "#f59e0b"
    assert rendered["actions"] == ["view"]


# =============================================================================
# Click dispatch
# =============================================================================


def test_view_click_does_not_reach_slot_handler():
    opened = []
    created = []
    handlers = [
        ("view", view_affordance_handler(opened.append)),
        ("slot", lambda click: created.append(click.payload)),
    ]

    click = dispatch_click(Click(target="view", payload="e1"), handlers)

    assert opened == ["e1"]
    assert created == []
    assert click.propagation_stopped is True
    assert click.handled_by == ["view"]


def test_slot_click_bubbles_past_view_handler():
    opened = []
    created = []
    handlers = [
        ("view", view_affordance_handler(opened.append)),
        ("slot", lambda click: created.append(click.payload)),
    ]

    click = dispatch_click(Click(target="slot", payload={"start": START}), handlers)

    assert opened == []
    assert created == [{"start": START}]
    assert click.handled_by == ["view", "slot"]
