"""API Pydantic models."""

from .calendar import (
    CalendarEventResponse,
    CalendarEventsResponse,
    EventCreateRequest,
    EventUpdateRequest,
    EventWriteResponse,
    NavigateRequest,
    NavigationResponse,
    ProjectOption,
    ViewRequest,
)
from .responses import ErrorCodes, ErrorResponse, HealthResponse

__all__ = [
    "HealthResponse",
    "ErrorResponse",
    "ErrorCodes",
    "CalendarEventResponse",
    "CalendarEventsResponse",
    "EventCreateRequest",
    "EventUpdateRequest",
    "EventWriteResponse",
    "NavigateRequest",
    "NavigationResponse",
    "ProjectOption",
    "ViewRequest",
]
