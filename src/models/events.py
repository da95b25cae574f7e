"""
Data models for calendar events.

Events are frozen dataclasses so a merged set can be shared between the
snapshot callback thread and readers without defensive copies.
"""

from dataclasses import dataclass
from datetime import datetime

from core.config import ORIGIN_PROJECT_DEADLINE, ORIGIN_USER_EVENT


@dataclass(frozen=True)
class Event:
    """Canonical calendar event, from either a user event or a project deadline."""

    id: str
    title: str
    start: datetime
    end: datetime
    type: str
    origin: str
    source_id: str
    all_day: bool = False
    location: str = ""
    description: str = ""
    project_id: str | None = None
    project_name: str | None = None

    @property
    def editable(self) -> bool:
        """Only user events can be edited or deleted."""
        return self.origin == ORIGIN_USER_EVENT

    @property
    def is_project_deadline(self) -> bool:
        return self.origin == ORIGIN_PROJECT_DEADLINE


@dataclass(frozen=True)
class PendingSlot:
    """Empty calendar slot picked by the user, used to pre-fill event creation."""

    start: datetime
    end: datetime
