"""
Render hints for the calendar widget.

Everything here is a pure function of the event, except click dispatch,
which only routes a click through handlers.
"""

from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from typing import Any

from core.config import (
    DEFAULT_BADGE_CLASSES,
    DEFAULT_EVENT_COLOR,
    EVENT_BASE_STYLE,
    EVENT_TYPE_COLORS,
    TYPE_BADGE_CLASSES,
)
from models.events import Event

VIEW_ACTION = "view"


def event_color(event_type: str | None) -> str:
    """Background colour for an event type, gray for anything unrecognized."""
    return EVENT_TYPE_COLORS.get(event_type or "", DEFAULT_EVENT_COLOR)


def event_style(event: Event, start=None, end=None, is_selected: bool = False) -> dict:
    """
    Widget style callback.

    Takes the widget's (event, start, end, is_selected) arguments; only the
    event type affects the result.
    """
    return {"style": {"backgroundColor": event_color(event.type), **EVENT_BASE_STYLE}}


def type_badge(event: Event) -> str:
    """CSS classes for the type badge in the event detail view."""
    return TYPE_BADGE_CLASSES.get(event.type, DEFAULT_BADGE_CLASSES)


def render_event(event: Event) -> dict:
    """Serializable event with its style and interactive affordances."""
    return {
        "id": event.id,
        "title": event.title,
        "start": event.start.isoformat(),
        "end": event.end.isoformat(),
        "allDay": event.all_day,
        "type": event.type,
        "origin": event.origin,
        "editable": event.editable,
        "projectId": event.project_id,
        "projectName": event.project_name,
        "location": event.location,
        "description": event.description,
        "style": event_style(event)["style"],
        "badge": type_badge(event),
        "actions": [VIEW_ACTION],
    }


# =============================================================================
# CLICK DISPATCH
# =============================================================================


@dataclass
class Click:
    """A click on the calendar, bubbling from the innermost target outwards."""

    target: str  # "view" affordance, "event" body, or "slot"
    payload: Any = None
    propagation_stopped: bool = False
    handled_by: list[str] = field(default_factory=list)

    def stop_propagation(self) -> None:
        self.propagation_stopped = True


ClickHandler = tuple[str, Callable[[Click], None]]


def dispatch_click(click: Click, handlers: Sequence[ClickHandler]) -> Click:
    """
    Run handlers innermost first until one stops propagation.

    Each handler is a (name, callback) pair; the name is recorded in
    click.handled_by when it runs.
    """
    for name, handler in handlers:
        handler(click)
        click.handled_by.append(name)
        if click.propagation_stopped:
            break
    return click


def view_affordance_handler(open_detail: Callable[[Any], None]) -> Callable[[Click], None]:
    """Handler for the "view" control: open the detail view, and nothing underneath."""

    def handle(click: Click) -> None:
        if click.target != VIEW_ACTION:
            return
        click.stop_propagation()
        open_detail(click.payload)

    return handle
