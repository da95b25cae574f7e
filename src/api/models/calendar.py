"""Pydantic request/response models for calendar endpoints."""

import datetime as dt
from typing import Any, Literal

from pydantic import BaseModel, Field

ViewMode = Literal["month", "week", "day", "agenda"]
NavigateAction = Literal["PREV", "NEXT", "TODAY"]


class CalendarEventResponse(BaseModel):
    """One merged calendar event with its render hints."""

    id: str
    title: str
    start: dt.datetime
    end: dt.datetime
    allDay: bool = False
    type: str
    origin: str
    editable: bool
    projectId: str | None = None
    projectName: str | None = None
    location: str = ""
    description: str = ""
    style: dict[str, Any] = Field(default_factory=dict)
    badge: str = ""
    actions: list[str] = Field(default_factory=list)


class NavigationResponse(BaseModel):
    """Current view mode, focal date and the range it renders."""

    view: ViewMode
    date: dt.date
    range_start: dt.date
    range_end: dt.date


class CalendarEventsResponse(NavigationResponse):
    """Payload for GET /v1/calendar/events."""

    events: list[CalendarEventResponse] = Field(default_factory=list)
    count: int = 0


class NavigateRequest(BaseModel):
    """Request payload for POST /v1/calendar/navigate."""

    action: NavigateAction


class ViewRequest(BaseModel):
    """Request payload for PUT /v1/calendar/view."""

    view: ViewMode | None = None
    date: dt.date | None = None


class EventCreateRequest(BaseModel):
    """Request payload for POST /v1/calendar/events."""

    title: str
    type: str = "meeting"
    start: dt.datetime
    end: dt.datetime
    location: str = ""
    description: str = ""
    projectId: str | None = None
    projectName: str | None = None


class EventUpdateRequest(BaseModel):
    """Request payload for PATCH /v1/calendar/events/{event_id}. Only set fields change."""

    title: str | None = None
    type: str | None = None
    start: dt.datetime | None = None
    end: dt.datetime | None = None
    location: str | None = None
    description: str | None = None
    projectId: str | None = None
    projectName: str | None = None


class EventWriteResponse(BaseModel):
    """Result of a successful event write."""

    id: str
    status: Literal["created", "updated", "deleted"]


class ProjectOption(BaseModel):
    """Project choice for the event form."""

    id: str
    name: str
