"""Tests for Firestore document access, against a mocked client."""

from unittest.mock import MagicMock

from core.database import CalendarDatabase, to_records


def make_doc(doc_id, data):
    doc = MagicMock()
    doc.id = doc_id
    doc.to_dict.return_value = data
    return doc


def test_to_records():
    assert to_records([make_doc("a", {"x": 1}), make_doc("b", None)]) == [("a", {"x": 1}), ("b", {})]
    assert to_records([("c", {"y": 2}), make_doc("d", {})]) == [("c", {"y": 2}), ("d", {})]


def test_subscribe_scopes_by_company_and_returns_unsubscribe():
    client = MagicMock()
    query = client.collection.return_value.where.return_value
    received = []

    unsubscribe = CalendarDatabase(client).subscribe_calendar_events("acme", received.append)

    client.collection.assert_called_once_with("calendarEvents")
    field_filter = client.collection.return_value.where.call_args.kwargs["filter"]
    assert (field_filter.field_path, field_filter.op_string, field_filter.value) == ("companyId", "==", "acme")

    # Firestore calls back with (docs, changes, read_time)
    on_snapshot = query.on_snapshot.call_args.args[0]
    on_snapshot([make_doc("e1", {"title": "Sync"})], [], None)
    assert received == [[("e1", {"title": "Sync"})]]

    unsubscribe()
    query.on_snapshot.return_value.unsubscribe.assert_called_once_with()


def test_fetch_projects():
    client = MagicMock()
    client.collection.return_value.where.return_value.get.return_value = [
        make_doc("p1", {"name": "Alpha", "endDate": "2024-05-01"}),
    ]

    records = CalendarDatabase(client).fetch_projects("acme")

    client.collection.assert_called_once_with("projects")
    assert records == [("p1", {"name": "Alpha", "endDate": "2024-05-01"})]


def test_writes():
    client = MagicMock()
    doc_ref = MagicMock()
    doc_ref.id = "new-id"
    client.collection.return_value.add.return_value = (None, doc_ref)
    database = CalendarDatabase(client)

    assert database.create_calendar_event({"title": "Sync"}) == "new-id"
    client.collection.return_value.add.assert_called_once_with({"title": "Sync"})

    database.update_calendar_event("e1", {"title": "Renamed"})
    client.collection.return_value.document.assert_called_with("e1")
    client.collection.return_value.document.return_value.update.assert_called_once_with({"title": "Renamed"})

    database.delete_calendar_event("e1")
    client.collection.return_value.document.return_value.delete.assert_called_once_with()
