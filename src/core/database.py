"""
Firestore document access for calendar events and projects.

Every query is scoped to a single company via the companyId field.
"""

import logging
from collections.abc import Callable

from google.cloud.firestore_v1.base_query import FieldFilter

from core.config import CALENDAR_EVENTS_COLLECTION, COMPANY_FIELD, PROJECTS_COLLECTION
from core.firestore_client import get_firestore_client

logger = logging.getLogger(__name__)

Record = tuple[str, dict]
SnapshotCallback = Callable[[list[Record]], None]
Unsubscribe = Callable[[], None]


def to_records(docs) -> list[Record]:
    """Convert Firestore document snapshots into (doc_id, data) pairs. Pairs pass through."""
    return [doc if isinstance(doc, tuple) else (doc.id, doc.to_dict() or {}) for doc in docs]


class CalendarDatabase:
    """Firestore-backed reads, live subscriptions and writes for the calendar."""

    def __init__(self, client=None):
        self._client = client

    @property
    def client(self):
        if self._client is None:
            self._client = get_firestore_client()
        return self._client

    def _company_query(self, collection: str, company_id: str):
        return self.client.collection(collection).where(
            filter=FieldFilter(COMPANY_FIELD, "==", company_id)
        )

    def subscribe_calendar_events(
        self, company_id: str, callback: SnapshotCallback
    ) -> Unsubscribe:
        """
        Subscribe to the company's calendar events.

        The callback receives the full current snapshot on every change,
        on the Firestore watch thread. Returns the unsubscribe handle.
        """
        query = self._company_query(CALENDAR_EVENTS_COLLECTION, company_id)

        def on_snapshot(docs, changes, read_time):
            callback(to_records(docs))

        watch = query.on_snapshot(on_snapshot)
        logger.info("Subscribed to %s for company %s", CALENDAR_EVENTS_COLLECTION, company_id)
        return watch.unsubscribe

    def fetch_projects(self, company_id: str) -> list[Record]:
        """Fetch the company's projects once."""
        return to_records(self._company_query(PROJECTS_COLLECTION, company_id).get())

    def create_calendar_event(self, data: dict) -> str:
        """Add a calendar event document and return its id."""
        _, doc_ref = self.client.collection(CALENDAR_EVENTS_COLLECTION).add(data)
        return doc_ref.id

    def update_calendar_event(self, event_id: str, data: dict) -> None:
        self.client.collection(CALENDAR_EVENTS_COLLECTION).document(event_id).update(data)

    def delete_calendar_event(self, event_id: str) -> None:
        self.client.collection(CALENDAR_EVENTS_COLLECTION).document(event_id).delete()
