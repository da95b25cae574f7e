"""
Configuration constants and environment setup.
"""

import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

# =============================================================================
# PATHS
# =============================================================================

PROJECT_ROOT = Path(__file__).parent.parent.parent
DB_PATH = Path(os.environ.get("FLOW_DB_PATH", PROJECT_ROOT / "data" / "db" / "flow-calendar.db"))

# =============================================================================
# FIRESTORE CONFIGURATION
# =============================================================================

CALENDAR_EVENTS_COLLECTION = "calendarEvents"
PROJECTS_COLLECTION = "projects"
COMPANY_FIELD = "companyId"

# =============================================================================
# EVENT CONFIGURATION
# =============================================================================

ORIGIN_USER_EVENT = "user-event"
ORIGIN_PROJECT_DEADLINE = "project-deadline"
ORIGINS = (ORIGIN_USER_EVENT, ORIGIN_PROJECT_DEADLINE)

EVENT_TYPES = ("meeting", "deadline", "milestone", "reminder", "task")
DEFAULT_EVENT_TYPE = "meeting"
DEADLINE_ID_PREFIX = "proj-"
DEADLINE_TITLE_SUFFIX = " Deadline"
UNTITLED_EVENT = "(untitled)"

# Fields a user may set on a calendar event (create and update)
EDITABLE_EVENT_FIELDS = {
    "title", "type", "start", "end", "location",
    "description", "projectId", "projectName",
}

# =============================================================================
# CALENDAR VIEW CONFIGURATION
# =============================================================================

VIEW_MODES = ("month", "week", "day", "agenda")
DEFAULT_VIEW_MODE = "month"
MOBILE_VIEW_MODE = "day"
MOBILE_BREAKPOINT_PX = 768  # Viewports narrower than this start in day view
AGENDA_LENGTH_DAYS = 30

NAVIGATE_ACTIONS = ("PREV", "NEXT", "TODAY")

# =============================================================================
# PRESENTATION
# =============================================================================

EVENT_TYPE_COLORS = {
    "meeting": "#8b5cf6",    # Purple
    "deadline": "#ef4444",   # Red
    "milestone": "#f59e0b",  # Amber
    "reminder": "#10b981",   # Emerald
    "task": "#3b82f6",       # Blue
}
DEFAULT_EVENT_COLOR = "#6b7280"  # Gray

EVENT_BASE_STYLE = {
    "borderRadius": "4px",
    "opacity": 0.8,
    "color": "white",
    "border": "0px",
    "display": "block",
    "fontSize": "0.75rem",
    "padding": "2px 4px",
}

TYPE_BADGE_CLASSES = {
    "meeting": "bg-purple-100 text-purple-700",
    "deadline": "bg-red-100 text-red-700",
    "milestone": "bg-amber-100 text-amber-700",
}
DEFAULT_BADGE_CLASSES = "bg-blue-100 text-blue-700"

# =============================================================================
# FIREBASE CREDENTIALS (from environment)
# =============================================================================

FIREBASE_PROJECT_ID = os.environ.get("FIREBASE_PROJECT_ID", "")
GOOGLE_APPLICATION_CREDENTIALS = os.environ.get("GOOGLE_APPLICATION_CREDENTIALS", "")

# =============================================================================
# API CONFIGURATION
# =============================================================================

FLOW_API_KEY = os.environ.get("FLOW_API_KEY", "")
API_HOST = os.environ.get("API_HOST", "0.0.0.0")
API_PORT = int(os.environ.get("API_PORT", "8000"))
API_DEBUG = os.environ.get("API_DEBUG", "false").lower() == "true"
API_VERSION = "1.0.0"
