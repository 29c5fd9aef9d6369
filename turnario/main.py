# turnario/main.py
"""
FastAPI application entry point.
"""

import sys
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from turnario.core.config import APP_VERSION, CORS_ORIGINS, DATA_DIR, IS_PRODUCTION
from turnario.core.logging_config import get_logger, setup_logging
from turnario.core.request_logging import RequestLoggingMiddleware
from turnario.core.storage import PendingChanges, StorageError
from turnario.core.time_utils import TimeArithmeticError
from turnario.routes.entries import router as entries_router
from turnario.routes.profile import router as profile_router
from turnario.routes.schedule_api import router as schedule_api_router

# Setup logging FIRST (before any other imports that might log)
setup_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    logger.info(
        "Application starting up",
        extra={
            "extra_fields": {
                "production": IS_PRODUCTION,
                "data_dir": str(DATA_DIR),
                "python_version": sys.version,
            }
        },
    )

    yield

    if app.state.pending.is_pending:
        logger.warning("Shutting down with an unsaved profile change")
    logger.info("Application shutting down")


app = FastAPI(
    title="Turnario",
    description="Shift cycle resolution and pay estimation for shift workers",
    version=APP_VERSION,
    lifespan=lifespan,
)
app.state.pending = PendingChanges()

if IS_PRODUCTION:
    # Production: Strict CORS - only allow specified origins
    if not CORS_ORIGINS:
        logger.warning(
            "Production mode but no CORS_ORIGINS set. CORS will block all cross-origin requests. "
            "Set CORS_ORIGINS environment variable if you need to allow specific origins."
        )

    allowed_origins = CORS_ORIGINS
    allowed_methods = ["GET", "POST", "PUT", "DELETE"]
    logger.info("CORS configured for production with origins: %s", allowed_origins)
else:
    # Development: Permissive CORS for easier testing
    allowed_origins = ["*"]
    allowed_methods = ["*"]
    logger.info("CORS configured for development (permissive)")

app.add_middleware(
    CORSMiddleware,
    allow_origins=allowed_origins,
    allow_credentials=True,
    allow_methods=allowed_methods,
    allow_headers=["*"],
    expose_headers=["X-Request-ID"],
)

app.add_middleware(RequestLoggingMiddleware)

app.include_router(profile_router)
app.include_router(entries_router)
app.include_router(schedule_api_router)


@app.exception_handler(TimeArithmeticError)
async def time_arithmetic_error_handler(request: Request, exc: TimeArithmeticError):
    logger.warning("Rejected %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=422, content={"detail": str(exc), "error": type(exc).__name__})


@app.exception_handler(ValidationError)
async def validation_error_handler(request: Request, exc: ValidationError):
    logger.warning("Invalid data in %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=422, content={"detail": str(exc), "error": "ValidationError"})


@app.exception_handler(StorageError)
async def storage_error_handler(request: Request, exc: StorageError):
    logger.error("Storage failure in %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=500, content={"detail": "Profile storage failed", "error": "StorageError"})


@app.get("/health", tags=["health"])
async def health_check():
    """
    Health check endpoint for monitoring.

    Reports whether a profile change is staged but not yet saved.
    """
    return {
        "status": "healthy",
        "service": "turnario",
        "version": APP_VERSION,
        "pending_changes": app.state.pending.is_pending,
    }
