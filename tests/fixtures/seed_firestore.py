#!/usr/bin/env python3
"""
Seed a company's Firestore calendar with fake projects and events.

Projects get a mix of endDate shapes (date strings, timestamps, missing,
malformed) so the deadline derivation sees every case it handles.

Usage:
    uv run python tests/fixtures/seed_firestore.py --company demo-co --month 2025-11
    uv run python tests/fixtures/seed_firestore.py --company demo-co --dry-run
"""

import argparse
import random
import sys
from datetime import datetime, timedelta
from pathlib import Path
from zoneinfo import ZoneInfo

from faker import Faker

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent.parent / "src"))

from core.config import CALENDAR_EVENTS_COLLECTION, EVENT_TYPES, PROJECTS_COLLECTION

# Initialize Faker
fake = Faker()

# Timezone
EST = ZoneInfo("America/New_York")
UTC = ZoneInfo("UTC")

EVENT_TITLES = {
    "meeting": [
        "Weekly Team Sync",
        "Client kickoff call",
        "Sprint planning",
        "Design review",
        "1:1 check-in",
    ],
    "deadline": ["Proposal due", "Invoice run", "Contract signature due"],
    "milestone": ["Phase 1 sign-off", "Beta launch", "Handover to client"],
    "reminder": ["Renew insurance", "Send follow-up email", "Book venue"],
    "task": ["Prepare estimate", "Update CRM records", "Draft scope document"],
}

LOCATIONS = ["Conference Room A", "Conference Room B", "Zoom", "Client office", ""]


def month_days(year: int, month: int) -> list[datetime]:
    """All weekdays in a month."""
    day = datetime(year, month, 1)
    days = []
    while day.month == month:
        if day.weekday() < 5:
            days.append(day)
        day += timedelta(days=1)
    return days


def generate_projects(company_id: str, days: list[datetime], count: int) -> list[dict]:
    """Fake projects with every endDate shape the calendar accepts or skips."""
    projects = []
    for i in range(count):
        deadline = random.choice(days)
        shape = random.choices(
            ["string", "timestamp", "missing", "malformed"],
            weights=[0.5, 0.3, 0.15, 0.05],
            k=1,
        )[0]

        project = {"companyId": company_id, "name": fake.catch_phrase()}
        if shape == "string":
            project["endDate"] = deadline.strftime("%Y-%m-%d")
        elif shape == "timestamp":
            project["endDate"] = deadline.replace(hour=17, tzinfo=EST).astimezone(UTC)
        elif shape == "malformed":
            project["endDate"] = fake.word()
        projects.append(project)
    return projects


def generate_event(company_id: str, day: datetime, project: tuple[str, str] | None) -> dict:
    """A single calendarEvents document during EST working hours."""
    event_type = random.choices(EVENT_TYPES, weights=[0.5, 0.1, 0.1, 0.15, 0.15], k=1)[0]
    start_hour = random.choice([8, 9, 10, 11, 13, 14, 15, 16])
    duration = random.choice([0.5, 1, 1.5, 2])

    start = day.replace(hour=start_hour, tzinfo=EST)
    end = start + timedelta(hours=duration)

    return {
        "companyId": company_id,
        "title": random.choice(EVENT_TITLES[event_type]),
        "type": event_type,
        "start": start.astimezone(UTC),
        "end": end.astimezone(UTC),
        "location": random.choice(LOCATIONS),
        "description": fake.sentence(nb_words=10) if random.random() < 0.6 else "",
        "projectId": project[0] if project else None,
        "projectName": project[1] if project else None,
        "createdAt": datetime.now(UTC),
        "createdBy": "seed-script",
    }


def seed(company_id: str, year: int, month: int, project_count: int, events_per_day: int, dry_run: bool):
    """Generate and (unless dry_run) write projects and events."""
    days = month_days(year, month)
    projects = generate_projects(company_id, days, project_count)

    if dry_run:
        project_ids = [(f"dry-run-{i}", p["name"]) for i, p in enumerate(projects)]
    else:
        from core.firestore_client import get_firestore_client

        db = get_firestore_client()
        project_ids = []
        for project in projects:
            _, ref = db.collection(PROJECTS_COLLECTION).add(project)
            project_ids.append((ref.id, project["name"]))
    print(f"Generated {len(projects)} projects")

    events = []
    for day in days:
        for _ in range(random.randint(0, events_per_day)):
            project = random.choice(project_ids) if random.random() < 0.4 else None
            events.append(generate_event(company_id, day, project))

    if not dry_run:
        for event in events:
            db.collection(CALENDAR_EVENTS_COLLECTION).add(event)
    print(f"Generated {len(events)} calendar events")

    if dry_run:
        for event in events[:10]:
            print(f"  {event['start']:%Y-%m-%d %H:%M} [{event['type']}] {event['title']}")

    print("\nDone!")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Seed Firestore with fake calendar data")
    parser.add_argument("--company", required=True, help="companyId to write under")
    parser.add_argument("--month", help="Month to fill (YYYY-MM). Defaults to the current month.")
    parser.add_argument("--projects", type=int, default=8, help="Number of projects")
    parser.add_argument("--events-per-day", type=int, default=3, help="Maximum events per weekday")
    parser.add_argument("--dry-run", action="store_true", help="Print instead of writing")
    args = parser.parse_args()

    month = datetime.strptime(args.month, "%Y-%m") if args.month else datetime.now()
    seed(args.company, month.year, month.month, args.projects, args.events_per_day, args.dry_run)
