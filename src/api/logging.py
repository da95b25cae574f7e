"""SQLite request logging for API."""

import sqlite3
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone

from core.config import DB_PATH


@dataclass
class RequestLog:
    """Captured request/response data for logging."""

    request_id: str = field(default_factory=lambda: str(uuid.uuid4()))
    timestamp: str = field(
        default_factory=lambda: datetime.now(timezone.utc).isoformat()
    )
    endpoint: str = ""
    method: str = ""
    client_ip: str | None = None
    company_id: str | None = None
    user_id: str | None = None
    status_code: int = 0
    error_code: str | None = None
    error_message: str | None = None
    processing_time_ms: int = 0
    event_count: int | None = None
    details: list[tuple[str, str]] = field(default_factory=list)  # (type, message)


def log_request(log: RequestLog) -> None:
    """Write request log to SQLite database."""
    conn = sqlite3.connect(DB_PATH)
    try:
        cursor = conn.cursor()

        # Insert main request record
        cursor.execute(
            """
            INSERT INTO api_requests (
                request_id, timestamp, endpoint, method, client_ip,
                company_id, user_id, status_code, error_code, error_message,
                processing_time_ms, event_count
            ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
        """,
            (
                log.request_id,
                log.timestamp,
                log.endpoint,
                log.method,
                log.client_ip,
                log.company_id,
                log.user_id,
                log.status_code,
                log.error_code,
                log.error_message,
                log.processing_time_ms,
                log.event_count,
            ),
        )

        # Insert detail records
        for detail_type, message in log.details:
            cursor.execute(
                """
                INSERT INTO api_request_details (request_id, detail_type, message)
                VALUES (?, ?, ?)
            """,
                (log.request_id, detail_type, message),
            )

        conn.commit()
    finally:
        conn.close()
