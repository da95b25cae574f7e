"""
Data models for calendar session state.
"""

from dataclasses import dataclass, field
from datetime import date

from core.config import EVENT_TYPES
from models.events import Event, PendingSlot


@dataclass(frozen=True)
class SessionContext:
    """Authenticated caller passed into a calendar session."""

    company_id: str
    user_id: str
    theme: str | None = None


@dataclass
class NavigationState:
    """Current view mode and the date the calendar is paged on."""

    view_mode: str
    focal_date: date


@dataclass
class SelectionState:
    """What the user picked and which panel is open."""

    selected: Event | PendingSlot | None = None
    is_detail_open: bool = False
    is_create_open: bool = False


@dataclass
class EventFilters:
    """Visible event types and projects. Empty project_ids means all projects."""

    types: set[str] = field(default_factory=lambda: set(EVENT_TYPES))
    project_ids: set[str] = field(default_factory=set)

    def matches(self, event: Event) -> bool:
        # Unknown types have no toggle, so they are always shown
        if event.type in EVENT_TYPES and event.type not in self.types:
            return False
        if self.project_ids and event.project_id not in self.project_ids:
            return False
        return True


@dataclass
class WriteResult:
    """Outcome of a create/update/delete against the database."""

    ok: bool
    event_id: str | None = None
    error: str | None = None  # Inline message shown to the user
    code: str | None = None
    details: list[str] = field(default_factory=list)
