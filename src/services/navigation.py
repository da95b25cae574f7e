"""
Calendar view navigation.

navigate() is a pure transition function (action, mode, date) -> date.
Navigator is the stateful wrapper a session holds.
"""

from collections.abc import Callable
from datetime import date, timedelta

from dateutil.relativedelta import relativedelta

from core.config import (
    AGENDA_LENGTH_DAYS,
    DEFAULT_VIEW_MODE,
    MOBILE_BREAKPOINT_PX,
    MOBILE_VIEW_MODE,
    NAVIGATE_ACTIONS,
    VIEW_MODES,
)
from models.calendar import NavigationState

# One PREV/NEXT step per view mode. Agenda has no fixed period and pages like month.
VIEW_STEPS = {
    "month": relativedelta(months=1),
    "week": relativedelta(weeks=1),
    "day": relativedelta(days=1),
    "agenda": relativedelta(months=1),
}


def validate_view_mode(mode: str) -> str:
    if mode not in VIEW_MODES:
        raise ValueError(f"Unknown view mode '{mode}', expected one of {', '.join(VIEW_MODES)}")
    return mode


def navigate(action: str, mode: str, current: date, today: date | None = None) -> date:
    """
    Compute the new focal date for a navigation action.

    Month steps clamp to the last day of the target month (Jan 31 -> Feb 28/29).

    Args:
        action: PREV, NEXT or TODAY
        mode: current view mode
        current: current focal date
        today: date TODAY resolves to; the system date when omitted

    Raises:
        ValueError: unknown action or view mode
    """
    validate_view_mode(mode)
    action = action.upper()

    if action == "TODAY":
        return today if today is not None else date.today()
    if action == "NEXT":
        return current + VIEW_STEPS[mode]
    if action == "PREV":
        return current - VIEW_STEPS[mode]

    raise ValueError(f"Unknown navigate action '{action}', expected one of {', '.join(NAVIGATE_ACTIONS)}")


def initial_view_mode(viewport_width: int | None) -> str:
    """Day view on narrow viewports, month view otherwise."""
    if viewport_width is not None and viewport_width < MOBILE_BREAKPOINT_PX:
        return MOBILE_VIEW_MODE
    return DEFAULT_VIEW_MODE


def _week_start(d: date) -> date:
    # Sunday-start weeks (en-US)
    return d - timedelta(days=(d.weekday() + 1) % 7)


def visible_range(mode: str, focal_date: date) -> tuple[date, date]:
    """
    Inclusive date range rendered for a view mode.

    Month view pads the month out to whole Sunday-start weeks.
    """
    validate_view_mode(mode)

    if mode == "month":
        first = focal_date.replace(day=1)
        last = first + relativedelta(months=1) - timedelta(days=1)
        return _week_start(first), _week_start(last) + timedelta(days=6)
    if mode == "week":
        start = _week_start(focal_date)
        return start, start + timedelta(days=6)
    if mode == "day":
        return focal_date, focal_date
    return focal_date, focal_date + timedelta(days=AGENDA_LENGTH_DAYS)


class Navigator:
    """Holds the navigation state for one calendar session."""

    def __init__(self, state: NavigationState, clock: Callable[[], date] = date.today):
        self.state = state
        self._clock = clock

    @classmethod
    def from_viewport(
        cls,
        viewport_width: int | None,
        today: date | None = None,
        clock: Callable[[], date] = date.today,
    ) -> "Navigator":
        """
        Initial state for a new session.

        The viewport only picks the starting mode; later resizes never
        override a mode the user chose.
        """
        state = NavigationState(
            view_mode=initial_view_mode(viewport_width),
            focal_date=today if today is not None else clock(),
        )
        return cls(state, clock=clock)

    @property
    def view_mode(self) -> str:
        return self.state.view_mode

    @property
    def focal_date(self) -> date:
        return self.state.focal_date

    def set_view_mode(self, mode: str) -> None:
        self.state.view_mode = validate_view_mode(mode)

    def set_date(self, focal_date: date) -> None:
        self.state.focal_date = focal_date

    def navigate(self, action: str) -> date:
        self.state.focal_date = navigate(
            action, self.state.view_mode, self.state.focal_date, today=self._clock()
        )
        return self.state.focal_date

    def visible_range(self) -> tuple[date, date]:
        return visible_range(self.state.view_mode, self.state.focal_date)
