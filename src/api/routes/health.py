"""Health check endpoint."""

from datetime import datetime, timezone

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from api.dependencies import SessionRegistry, get_session_registry
from api.models.responses import HealthResponse
from core.config import API_VERSION, FIREBASE_PROJECT_ID

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health_check(registry: SessionRegistry = Depends(get_session_registry)):
    """
    Health check endpoint for monitoring.

    Returns 200 if healthy, 503 if Firestore is not configured.
    """
    firestore_configured = bool(FIREBASE_PROJECT_ID)
    timestamp = datetime.now(timezone.utc).isoformat()

    if firestore_configured:
        return HealthResponse(
            status="healthy",
            version=API_VERSION,
            firestore_configured=True,
            live_sessions=len(registry),
            timestamp=timestamp,
        )
    else:
        return JSONResponse(
            status_code=503,
            content=HealthResponse(
                status="unhealthy",
                version=API_VERSION,
                firestore_configured=False,
                live_sessions=len(registry),
                timestamp=timestamp,
                error="FIREBASE_PROJECT_ID not configured",
            ).model_dump(),
        )
