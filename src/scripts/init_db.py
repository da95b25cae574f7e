#!/usr/bin/env python3
"""Create the flow-calendar SQLite3 database with the API request log tables."""

import sqlite3
import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from core.config import DB_PATH


def create_database(db_path: Path = DB_PATH):
    """Create the database and tables if they don't exist."""
    # Ensure directory exists
    db_path.parent.mkdir(parents=True, exist_ok=True)

    conn = sqlite3.connect(db_path)
    conn.execute("PRAGMA foreign_keys = ON")
    cursor = conn.cursor()

    # Create API request logging table
    cursor.execute("""
        CREATE TABLE IF NOT EXISTS api_requests (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            request_id TEXT UNIQUE NOT NULL,
            timestamp TEXT NOT NULL,
            endpoint TEXT NOT NULL,
            method TEXT NOT NULL,
            client_ip TEXT,
            company_id TEXT,
            user_id TEXT,
            status_code INTEGER NOT NULL,
            error_code TEXT,
            error_message TEXT,
            processing_time_ms INTEGER NOT NULL,
            event_count INTEGER
        )
    """)

    # Create API request details table (for validation errors)
    cursor.execute("""
        CREATE TABLE IF NOT EXISTS api_request_details (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            request_id TEXT NOT NULL,
            detail_type TEXT NOT NULL CHECK(detail_type IN ('validation_error', 'warning')),
            message TEXT NOT NULL,
            FOREIGN KEY (request_id) REFERENCES api_requests(request_id)
        )
    """)

    # Create indexes for API logging
    cursor.execute(
        "CREATE INDEX IF NOT EXISTS idx_api_requests_timestamp ON api_requests(timestamp)"
    )
    cursor.execute(
        "CREATE INDEX IF NOT EXISTS idx_api_requests_company ON api_requests(company_id)"
    )
    cursor.execute(
        "CREATE INDEX IF NOT EXISTS idx_api_request_details_request ON api_request_details(request_id)"
    )

    conn.commit()
    conn.close()
    print(f"Database created successfully at: {db_path}")


if __name__ == "__main__":
    create_database()
