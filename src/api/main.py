"""FastAPI application entry point."""

import logging
import time
import warnings
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from api.dependencies import session_registry
from api.logging import RequestLog, log_request
from api.models.responses import ErrorCodes, ErrorResponse
from api.routes import calendar_router, health_router
from core.config import API_DEBUG, API_VERSION, FIREBASE_PROJECT_ID

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup/shutdown."""
    # Startup: verify Firestore is configured
    if not FIREBASE_PROJECT_ID:
        warnings.warn("FIREBASE_PROJECT_ID is not set; calendar sessions cannot connect")

    yield

    # Shutdown: every live session unsubscribes from Firestore
    session_registry.close_all()


app = FastAPI(
    title="FLOW Calendar API",
    description="Merged calendar events and project deadlines with view navigation for FLOW",
    version=API_VERSION,
    debug=API_DEBUG,
    lifespan=lifespan,
)

# CORS middleware (for development)
if API_DEBUG:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )


def get_client_ip(request: Request) -> str:
    """Extract client IP from request, handling proxies."""
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.client.host if request.client else "unknown"


@app.middleware("http")
async def request_logging(request: Request, call_next):
    """Record every /v1 request in the SQLite request log."""
    if not request.url.path.startswith("/v1/"):
        return await call_next(request)

    start_time = time.time()
    request_log = RequestLog(
        endpoint=request.url.path,
        method=request.method,
        client_ip=get_client_ip(request),
    )
    request.state.request_log = request_log

    try:
        response = await call_next(request)
        request_log.status_code = response.status_code
        return response
    except Exception as e:
        request_log.status_code = 500
        request_log.error_code = ErrorCodes.INTERNAL_ERROR
        request_log.error_message = str(e)
        raise
    finally:
        request_log.processing_time_ms = int((time.time() - start_time) * 1000)
        # Always log the request, but never fail it because logging failed
        try:
            log_request(request_log)
        except Exception as e:
            logger.debug("Request log write failed: %s", e)


# Global exception handler for unexpected errors
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Handle unexpected exceptions with standard error format."""
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=500,
        content=ErrorResponse(
            error="Internal server error",
            code=ErrorCodes.INTERNAL_ERROR,
            details=[],
        ).model_dump(),
    )


# Include routers
app.include_router(health_router)
app.include_router(calendar_router)


# Entry point for uvicorn
if __name__ == "__main__":
    import uvicorn

    from core.config import API_HOST, API_PORT

    uvicorn.run(
        "api.main:app",
        host=API_HOST,
        port=API_PORT,
        reload=API_DEBUG,
    )
