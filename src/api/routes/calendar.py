"""Calendar view, navigation and event write endpoints."""

import asyncio

from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response, status

from api.dependencies import (
    SessionRegistry,
    get_calendar_session,
    get_session_context,
    get_session_registry,
    verify_api_key,
)
from api.models.calendar import (
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
from api.models.responses import ErrorCodes
from models.calendar import SessionContext, WriteResult
from services.presentation import render_event
from services.session import CalendarSession

router = APIRouter(prefix="/v1/calendar", dependencies=[Depends(verify_api_key)])

# WriteResult code -> HTTP status
WRITE_ERROR_STATUS = {
    ErrorCodes.VALIDATION_ERROR: status.HTTP_422_UNPROCESSABLE_CONTENT,
    ErrorCodes.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCodes.READ_ONLY: status.HTTP_409_CONFLICT,
    ErrorCodes.UPSTREAM_ERROR: status.HTTP_502_BAD_GATEWAY,
}


def navigation_response(session: CalendarSession) -> NavigationResponse:
    range_start, range_end = session.navigator.visible_range()
    return NavigationResponse(
        view=session.navigator.view_mode,
        date=session.navigator.focal_date,
        range_start=range_start,
        range_end=range_end,
    )


def raise_for_write(request: Request, result: WriteResult) -> None:
    """Turn a failed write into an HTTP error carrying the inline message."""
    if result.ok:
        return

    request_log = getattr(request.state, "request_log", None)
    if request_log is not None:
        request_log.error_code = result.code
        request_log.error_message = result.error
        for detail in result.details:
            request_log.details.append(("validation_error", detail))

    raise HTTPException(
        status_code=WRITE_ERROR_STATUS.get(result.code, status.HTTP_500_INTERNAL_SERVER_ERROR),
        detail={
            "error": result.error,
            "code": result.code or ErrorCodes.INTERNAL_ERROR,
            "details": result.details,
        },
    )


@router.get("/events", response_model=CalendarEventsResponse)
async def list_events(
    request: Request,
    types: str | None = Query(None, description="Comma-separated event types to show"),
    projects: str | None = Query(None, description="Comma-separated project ids to show"),
    in_range: bool = Query(False, description="Only events overlapping the visible range"),
    session: CalendarSession = Depends(get_calendar_session),
):
    """
    Merged user events and project deadlines with render hints.

    Filters given here persist for the session.
    """
    if types is not None:
        session.set_filters(types=[t.strip() for t in types.split(",") if t.strip()])
    if projects is not None:
        session.set_filters(project_ids=[p.strip() for p in projects.split(",") if p.strip()])

    events = [CalendarEventResponse(**render_event(e)) for e in session.visible_events(in_range)]

    request_log = getattr(request.state, "request_log", None)
    if request_log is not None:
        request_log.event_count = len(events)

    return CalendarEventsResponse(
        **navigation_response(session).model_dump(),
        events=events,
        count=len(events),
    )


@router.get("/navigation", response_model=NavigationResponse)
async def get_navigation(session: CalendarSession = Depends(get_calendar_session)):
    """Current view mode and focal date."""
    return navigation_response(session)


@router.post("/navigate", response_model=NavigationResponse)
async def navigate(body: NavigateRequest, session: CalendarSession = Depends(get_calendar_session)):
    """Page PREV/NEXT by the current view's period, or jump to TODAY."""
    session.navigator.navigate(body.action)
    return navigation_response(session)


@router.put("/view", response_model=NavigationResponse)
async def set_view(body: ViewRequest, session: CalendarSession = Depends(get_calendar_session)):
    """Select a view mode and/or focal date."""
    if body.view is not None:
        session.navigator.set_view_mode(body.view)
    if body.date is not None:
        session.navigator.set_date(body.date)
    return navigation_response(session)


@router.get("/projects", response_model=list[ProjectOption])
async def list_projects(session: CalendarSession = Depends(get_calendar_session)):
    """Projects available for linking a new event."""
    return [ProjectOption(**p) for p in session.projects()]


@router.post("/deadlines/refresh", response_model=CalendarEventsResponse)
async def refresh_deadlines(request: Request, session: CalendarSession = Depends(get_calendar_session)):
    """Re-fetch project deadlines, which are otherwise fetched once per session."""
    if not await asyncio.to_thread(session.refresh_deadlines):
        raise_for_write(
            request,
            WriteResult(ok=False, error="Could not refresh project deadlines", code=ErrorCodes.UPSTREAM_ERROR),
        )
    return await list_events(request, None, None, False, session)


@router.post("/events", response_model=EventWriteResponse, status_code=status.HTTP_201_CREATED)
async def create_event(
    request: Request, body: EventCreateRequest, session: CalendarSession = Depends(get_calendar_session)
):
    """Create a calendar event for the caller's company."""
    result = await asyncio.to_thread(session.create_event, body.model_dump())
    raise_for_write(request, result)
    return EventWriteResponse(id=result.event_id, status="created")


@router.patch("/events/{event_id}", response_model=EventWriteResponse)
async def update_event(
    request: Request,
    event_id: str,
    body: EventUpdateRequest,
    session: CalendarSession = Depends(get_calendar_session),
):
    """Update fields of a user event. Project deadlines are read-only."""
    result = await asyncio.to_thread(session.update_event, event_id, body.model_dump(exclude_unset=True))
    raise_for_write(request, result)
    return EventWriteResponse(id=event_id, status="updated")


@router.delete("/events/{event_id}", response_model=EventWriteResponse)
async def delete_event(
    request: Request, event_id: str, session: CalendarSession = Depends(get_calendar_session)
):
    """Delete a user event. Project deadlines are read-only."""
    result = await asyncio.to_thread(session.delete_event, event_id)
    raise_for_write(request, result)
    return EventWriteResponse(id=event_id, status="deleted")


@router.delete("/session", status_code=status.HTTP_204_NO_CONTENT)
async def close_session(
    context: SessionContext = Depends(get_session_context),
    registry: SessionRegistry = Depends(get_session_registry),
):
    """Tear down the caller's session and its live subscription."""
    registry.close(context)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
