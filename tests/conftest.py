"""
Pytest configuration and shared fixtures.
"""

import sys
from datetime import date, datetime, timezone
from pathlib import Path

import pytest
from google.api_core.exceptions import ServiceUnavailable

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from models.calendar import SessionContext  # noqa: E402


class FakeCalendarDatabase:
    """In-memory stand-in for CalendarDatabase that lets tests push snapshots."""

    def __init__(self, projects=None):
        self.projects = list(projects or [])
        self.callbacks = {}
        self.unsubscribed = []
        self.fetch_count = 0
        self.created = []
        self.updated = []
        self.deleted = []
        self.fail_writes = False
        self.fail_fetch = False

    def subscribe_calendar_events(self, company_id, callback):
        self.callbacks[company_id] = callback

        def unsubscribe():
            self.unsubscribed.append(company_id)
            self.callbacks.pop(company_id, None)

        return unsubscribe

    def push_events(self, company_id, records):
        """Deliver a full calendarEvents snapshot to the subscriber."""
        self.callbacks[company_id](records)

    def fetch_projects(self, company_id):
        self.fetch_count += 1
        if self.fail_fetch:
            raise ServiceUnavailable("projects unavailable")
        return list(self.projects)

    def create_calendar_event(self, data):
        if self.fail_writes:
            raise ServiceUnavailable("firestore unavailable")
        self.created.append(data)
        return f"new-{len(self.created)}"

    def update_calendar_event(self, event_id, data):
        if self.fail_writes:
            raise ServiceUnavailable("firestore unavailable")
        self.updated.append((event_id, data))

    def delete_calendar_event(self, event_id):
        if self.fail_writes:
            raise ServiceUnavailable("firestore unavailable")
        self.deleted.append(event_id)


@pytest.fixture
def context():
    """Session context for a test company."""
    return SessionContext(company_id="acme", user_id="user-1")


@pytest.fixture
def today():
    return date(2024, 5, 15)


@pytest.fixture
def event_record():
    """A calendarEvents document as (doc_id, data)."""
    return (
        "e1",
        {
            "companyId": "acme",
            "title": "Weekly Team Sync",
            "type": "meeting",
            "start": datetime(2024, 5, 14, 9, 0, tzinfo=timezone.utc),
            "end": datetime(2024, 5, 14, 10, 0, tzinfo=timezone.utc),
            "location": "Conference Room A",
            "description": "Agenda in the doc",
            "projectName": "Website Redesign",
        },
    )


@pytest.fixture
def project_record():
    """A projects document with a date-only endDate."""
    return ("proj-1", {"companyId": "acme", "name": "Website Redesign", "endDate": "2024-05-01"})


@pytest.fixture
def fake_db(project_record):
    return FakeCalendarDatabase(projects=[project_record])
