#!/usr/bin/env python3
"""
List a company's merged calendar: user events plus project deadlines.

With --watch, stays subscribed and reprints on every event snapshot.

Usage:
    uv run python src/scripts/list_calendar_events.py --company acme --view week --date 2025-11-07
"""

import argparse
import sys
import time
from datetime import datetime
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from core.config import VIEW_MODES
from core.database import CalendarDatabase
from models.calendar import SessionContext
from services.session import CalendarSession


def print_events(session: CalendarSession):
    """Print the events in the session's visible range."""
    first, last = session.navigator.visible_range()
    events = session.visible_events(in_range=True)

    print(f"\n{session.navigator.view_mode.title()} view: {first} to {last}")
    print("=" * 80)

    if not events:
        print("No events in range.")
        return

    for event in events:
        when = event.start.strftime("%Y-%m-%d") if event.all_day else event.start.strftime("%Y-%m-%d %H:%M")
        print(f"  {when}  [{event.type}] {event.title}")
        print(f"      ID: {event.id} ({event.origin})")
        if event.location:
            print(f"      Location: {event.location}")

    print(f"\nTotal events: {len(events)}")


def main(company_id: str, view: str, date_str: str | None, watch: bool):
    """List calendar events for a company."""
    context = SessionContext(company_id=company_id, user_id="cli")
    session = CalendarSession(context, CalendarDatabase())
    session.navigator.set_view_mode(view)
    if date_str:
        session.navigator.set_date(datetime.strptime(date_str, "%Y-%m-%d").date())

    print(f"Fetching calendar for company {company_id}...")
    with session:
        # First event snapshot arrives on the watch thread
        time.sleep(2)
        print_events(session)

        if watch:
            session.store.add_listener(lambda events: print_events(session))
            print("\nWatching for changes (Ctrl+C to stop)...")
            try:
                while True:
                    time.sleep(1)
            except KeyboardInterrupt:
                pass

    print("\nDone!")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="List merged calendar events for a company")
    parser.add_argument("--company", required=True, help="Company id the queries are scoped to")
    parser.add_argument("--view", choices=VIEW_MODES, default="month", help="View mode. Defaults to month.")
    parser.add_argument("--date", help="Focal date (YYYY-MM-DD). Defaults to today.")
    parser.add_argument("--watch", action="store_true", help="Keep listening for event changes")
    args = parser.parse_args()

    main(args.company, args.view, args.date, args.watch)
