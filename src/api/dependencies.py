"""FastAPI dependencies for authentication and shared resources."""

import asyncio
import secrets
import threading
from collections.abc import Callable

from fastapi import Depends, Header, HTTPException, Query, Request, status

from core.config import FLOW_API_KEY
from core.database import CalendarDatabase
from models.calendar import SessionContext
from services.session import CalendarSession


async def verify_api_key(x_api_key: str = Header(..., alias="X-API-Key")) -> str:
    """
    Verify API key from X-API-Key header.

    Raises:
        HTTPException: 401 if key is missing or invalid
    """
    if not FLOW_API_KEY:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={
                "error": "API key not configured on server",
                "code": "INTERNAL_ERROR",
                "details": [],
            },
        )

    # Use constant-time comparison to prevent timing attacks
    if not secrets.compare_digest(x_api_key, FLOW_API_KEY):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail={
                "error": "Invalid or missing API key",
                "code": "UNAUTHORIZED",
                "details": [],
            },
        )

    return x_api_key


async def get_session_context(
    request: Request,
    x_company_id: str = Header(..., alias="X-Company-Id"),
    x_user_id: str = Header(..., alias="X-User-Id"),
) -> SessionContext:
    """Caller identity, resolved upstream and forwarded in headers."""
    if not x_company_id.strip() or not x_user_id.strip():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={
                "error": "Missing company or user id",
                "code": "INVALID_REQUEST",
                "details": [],
            },
        )
    request_log = getattr(request.state, "request_log", None)
    if request_log is not None:
        request_log.company_id = x_company_id
        request_log.user_id = x_user_id
    return SessionContext(company_id=x_company_id, user_id=x_user_id)


class SessionRegistry:
    """Live calendar sessions, one per (company, user)."""

    def __init__(self, database_factory: Callable[[], CalendarDatabase] = CalendarDatabase):
        self._database_factory = database_factory
        self._sessions: dict[tuple[str, str], CalendarSession] = {}
        self._lock = threading.Lock()

    def get_or_start(self, context: SessionContext, viewport_width: int | None = None) -> CalendarSession:
        """Return the caller's session, starting it on first use."""
        key = (context.company_id, context.user_id)
        with self._lock:
            session = self._sessions.get(key)
            if session is None:
                session = CalendarSession(
                    context, self._database_factory(), viewport_width=viewport_width
                )
                session.start()
                self._sessions[key] = session
        return session

    def close(self, context: SessionContext) -> bool:
        with self._lock:
            session = self._sessions.pop((context.company_id, context.user_id), None)
        if session is None:
            return False
        session.close()
        return True

    def close_all(self) -> None:
        with self._lock:
            sessions, self._sessions = list(self._sessions.values()), {}
        for session in sessions:
            session.close()

    def __len__(self) -> int:
        return len(self._sessions)


session_registry = SessionRegistry()


def get_session_registry() -> SessionRegistry:
    return session_registry


async def get_calendar_session(
    context: SessionContext = Depends(get_session_context),
    registry: SessionRegistry = Depends(get_session_registry),
    viewport_width: int | None = Query(None, ge=0, description="Only used when the session starts"),
) -> CalendarSession:
    """Caller's live session; starting one subscribes to Firestore, so run it off the loop."""
    return await asyncio.to_thread(registry.get_or_start, context, viewport_width)
