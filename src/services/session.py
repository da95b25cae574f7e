"""
Calendar session: one company's live calendar view.

Wires the event subscription and project fetch into the merge store, and
holds navigation, selection and filter state plus the event write path.
"""

import logging
from collections.abc import Callable, Iterable
from datetime import date, datetime, timezone

from google.api_core.exceptions import GoogleAPIError
from google.auth.exceptions import GoogleAuthError

from core.config import (
    DEFAULT_EVENT_TYPE,
    ORIGIN_PROJECT_DEADLINE,
    ORIGIN_USER_EVENT,
    VIEW_MODES,
)
from core.database import CalendarDatabase, Record
from core.validation import build_event_document, check_update_range
from models.calendar import EventFilters, SelectionState, SessionContext, WriteResult
from models.events import Event, PendingSlot
from services.calendar import (
    parse_calendar_events,
    parse_project_deadlines,
    parse_timestamp,
    project_options,
)
from services.merge_store import EventMergeStore
from services.navigation import Navigator
from services.presentation import VIEW_ACTION, Click, dispatch_click, event_style, view_affordance_handler

logger = logging.getLogger(__name__)

# Write failure codes, mirrored by the API's ErrorCodes
VALIDATION_ERROR = "VALIDATION_ERROR"
NOT_FOUND = "NOT_FOUND"
READ_ONLY = "READ_ONLY"
UPSTREAM_ERROR = "UPSTREAM_ERROR"

UPSTREAM_ERRORS = (GoogleAPIError, GoogleAuthError)


class CalendarSession:
    """Live calendar state for one authenticated caller."""

    def __init__(
        self,
        context: SessionContext,
        database: CalendarDatabase,
        viewport_width: int | None = None,
        today: date | None = None,
        clock: Callable[[], date] = date.today,
        now: Callable[[], datetime] | None = None,
    ):
        self.context = context
        self.database = database
        self.store = EventMergeStore()
        self.navigator = Navigator.from_viewport(viewport_width, today=today, clock=clock)
        self.selection = SelectionState()
        self.filters = EventFilters()
        self.loading = False
        self._projects: list[dict] = []
        self._unsubscribe: Callable[[], None] | None = None
        self._closed = False
        self._now = now or (lambda: datetime.now(timezone.utc))

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    @property
    def is_live(self) -> bool:
        return self._unsubscribe is not None

    def start(self) -> None:
        """
        Subscribe to calendar events and fetch project deadlines once.

        Deadlines are not kept live; they refresh on the next start or an
        explicit refresh_deadlines().
        """
        if self._unsubscribe is not None:
            return
        self._closed = False
        self._unsubscribe = self.database.subscribe_calendar_events(
            self.context.company_id, self._on_events_snapshot
        )
        self.refresh_deadlines()

    def close(self) -> None:
        """Unsubscribe from the event feed. Safe to call more than once."""
        self._closed = True
        unsubscribe, self._unsubscribe = self._unsubscribe, None
        if unsubscribe is not None:
            unsubscribe()
            logger.info("Closed calendar session for company %s", self.context.company_id)

    def __enter__(self) -> "CalendarSession":
        self.start()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def _on_events_snapshot(self, records: Iterable[Record]) -> None:
        # A watch can still deliver after unsubscribe; nobody reads this store any more
        if self._closed:
            return
        self.store.replace_partition(ORIGIN_USER_EVENT, parse_calendar_events(records))

    def refresh_deadlines(self) -> bool:
        """Re-fetch projects and replace the deadline partition. Returns False on failure."""
        try:
            records = self.database.fetch_projects(self.context.company_id)
        except UPSTREAM_ERRORS as e:
            logger.warning("Error fetching project deadlines: %s", e)
            return False
        self._projects = project_options(records)
        self.store.replace_partition(ORIGIN_PROJECT_DEADLINE, parse_project_deadlines(records))
        return True

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    def projects(self) -> list[dict]:
        """Project options for the create form, from the last project fetch."""
        return list(self._projects)

    def set_filters(
        self, types: Iterable[str] | None = None, project_ids: Iterable[str] | None = None
    ) -> None:
        if types is not None:
            self.filters.types = set(types)
        if project_ids is not None:
            self.filters.project_ids = set(project_ids)

    def visible_events(self, in_range: bool = False) -> list[Event]:
        """Merged events passing the filters, optionally limited to the visible range."""
        events = [e for e in self.store.current_events() if self.filters.matches(e)]
        if in_range:
            first, last = self.navigator.visible_range()
            events = [e for e in events if e.start.date() <= last and e.end.date() >= first]
        return sorted(events, key=lambda e: (e.start, e.end, e.id))

    def widget_props(self) -> dict:
        """Inputs and callbacks for the calendar widget."""
        return {
            "events": self.visible_events(),
            "startAccessor": "start",
            "endAccessor": "end",
            "eventPropGetter": event_style,
            "onSelectSlot": self.select_slot,
            "onSelectEvent": self.select_event,
            "view": self.navigator.view_mode,
            "date": self.navigator.focal_date,
            "onView": self.navigator.set_view_mode,
            "onNavigate": self.navigator.set_date,
            "views": list(VIEW_MODES),
            "selectable": True,
        }

    # -------------------------------------------------------------------------
    # Selection
    # -------------------------------------------------------------------------

    def select_event(self, event: Event | str) -> Event | None:
        """Open the detail view for an event (or event id)."""
        if isinstance(event, str):
            event = self.store.get(event)
        if event is None:
            return None
        self.selection.selected = event
        self.selection.is_detail_open = True
        return event

    def select_slot(self, start, end=None) -> PendingSlot:
        """Remember an empty slot and open the create form pre-filled with it."""
        if isinstance(start, dict):
            start, end = start.get("start"), start.get("end")
        slot_start = parse_timestamp(start)
        slot_end = parse_timestamp(end) or slot_start
        if slot_start is None:
            raise ValueError(f"Invalid slot start '{start}'")
        slot = PendingSlot(start=slot_start, end=slot_end)
        self.selection.selected = slot
        self.selection.is_create_open = True
        return slot

    def open_create(self) -> None:
        """Open a blank create form."""
        self.selection.selected = None
        self.selection.is_create_open = True

    def close_create(self) -> None:
        self.selection.is_create_open = False

    def close_detail(self) -> None:
        self.selection.is_detail_open = False

    def initial_dates(self) -> dict | None:
        """Create-form seed dates, only ever from a pending slot."""
        selected = self.selection.selected
        if isinstance(selected, PendingSlot):
            return {"start": selected.start, "end": selected.end}
        return None

    def handle_click(self, click: Click) -> Click:
        """
        Route a widget click: "view" control, then event body, then slot.

        The "view" control stops propagation, so it never also starts
        creating an event at the slot underneath.
        """

        def on_event(c: Click) -> None:
            if c.target in (VIEW_ACTION, "event"):
                c.stop_propagation()
                self.select_event(c.payload)

        def on_slot(c: Click) -> None:
            if c.target == "slot":
                self.select_slot(c.payload)

        return dispatch_click(
            click,
            [
                (VIEW_ACTION, view_affordance_handler(self.select_event)),
                ("event", on_event),
                ("slot", on_slot),
            ],
        )

    # -------------------------------------------------------------------------
    # Writes
    # -------------------------------------------------------------------------

    def _editable_event(self, event_id: str) -> Event | WriteResult:
        event = self.store.get(event_id)
        if event is None:
            return WriteResult(ok=False, event_id=event_id, error="Event not found", code=NOT_FOUND)
        if not event.editable:
            return WriteResult(
                ok=False,
                event_id=event_id,
                error="Project deadlines are read-only; edit the project instead",
                code=READ_ONLY,
            )
        return event

    def _write(self, action: str, event_id: str | None, write: Callable[[], str | None]) -> WriteResult:
        self.loading = True
        try:
            result_id = write()
        except UPSTREAM_ERRORS as e:
            logger.warning("Error trying to %s event %s: %s", action, event_id or "", e)
            return WriteResult(
                ok=False, event_id=event_id, error=f"Could not {action} event: {e}", code=UPSTREAM_ERROR
            )
        finally:
            self.loading = False
        return WriteResult(ok=True, event_id=result_id or event_id)

    def create_event(self, fields: dict) -> WriteResult:
        """Validate and add a new calendar event for this company."""
        try:
            document = build_event_document(fields)
        except ValueError as e:
            return _invalid(None, e)

        document.setdefault("type", DEFAULT_EVENT_TYPE)
        if document.get("projectId") and not document.get("projectName"):
            names = {p["id"]: p["name"] for p in self._projects}
            document["projectName"] = names.get(document["projectId"]) or None
        document.update(
            companyId=self.context.company_id,
            createdAt=self._now(),
            createdBy=self.context.user_id,
        )

        result = self._write("create", None, lambda: self.database.create_calendar_event(document))
        if result.ok:
            self.close_create()
        return result

    def update_event(self, event_id: str, fields: dict) -> WriteResult:
        """Apply a partial update to a user event."""
        event = self._editable_event(event_id)
        if isinstance(event, WriteResult):
            return event

        try:
            document = build_event_document(fields, partial=True)
            check_update_range(event.start, event.end, document)
        except ValueError as e:
            return _invalid(event_id, e)
        document["updatedAt"] = self._now()

        result = self._write("update", event_id, lambda: self.database.update_calendar_event(event_id, document))
        if result.ok:
            self.close_detail()
        return result

    def delete_event(self, event_id: str) -> WriteResult:
        """Delete a user event."""
        event = self._editable_event(event_id)
        if isinstance(event, WriteResult):
            return event

        result = self._write("delete", event_id, lambda: self.database.delete_calendar_event(event_id))
        if result.ok:
            self.close_detail()
            if isinstance(self.selection.selected, Event) and self.selection.selected.id == event_id:
                self.selection.selected = None
        return result


def _invalid(event_id: str | None, error: ValueError) -> WriteResult:
    details = [line.strip() for line in str(error).split("\n") if line.strip()]
    return WriteResult(
        ok=False, event_id=event_id, error="Event validation failed", code=VALIDATION_ERROR, details=details
    )
