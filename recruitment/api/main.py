"""
FastAPI Application Setup

Main entry point for the résumé upload API.

Responsibility:
    - FastAPI app initialization from AppSettings
    - Mail transport and upload staging assembly (stored on app.state)
    - Router registration (upload under /api and at the root)
    - CORS middleware configuration
    - Global exception handlers
    - Request logging middleware
    - Health check and port status endpoints

Architecture Notes:
    - Part of API Layer (Presentation)
    - Entry point for HTTP server (uvicorn)
    - Centralizes cross-cutting concerns (logging, CORS, error handling)
    - No business logic - pure HTTP orchestration

Contains:
    - create_app() factory function
    - Global exception handlers
    - Request logging middleware
    - Health check endpoint: GET /health
    - Port status endpoint: GET /api/port
"""

import logging
import time
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from recruitment import __version__
from recruitment.api.routers import upload_router
from recruitment.api.schemas.common import ErrorResponse
from recruitment.domain.shared.exceptions import ClientInputError
from recruitment.infrastructure.file_storage import FileStorageService
from recruitment.infrastructure.mail import create_mail_sender
from recruitment.shared.settings import AppSettings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

logger = logging.getLogger(__name__)


# ============================================================================
# RESPONSE MODELS
# ============================================================================


class HealthCheckResponse(BaseModel):
    """
    Health check response model.

    Attributes:
        status: Health status (always "ok" if endpoint responds)
        version: Package version
        timestamp: Unix timestamp of health check
    """

    status: str = "ok"
    version: str = __version__
    timestamp: float


class PortStatusResponse(BaseModel):
    """Tells the static front end which API serves uploads."""

    port: str = "api"
    upload_path: str = Field(default="/api/upload", alias="uploadPath")

    class Config:
        populate_by_name = True


# ============================================================================
# MIDDLEWARE
# ============================================================================


async def request_logging_middleware(request: Request, call_next):
    """
    Request logging middleware.

    Logs all incoming requests with method, path, status code, and duration.

    Logging Format:
        INFO: "Incoming request: POST /api/upload"
        INFO: "Request completed: POST /api/upload - 200 - 0.456s"
    """
    logger.info(f"Incoming request: {request.method} {request.url.path}")

    start_time = time.time()
    response = await call_next(request)
    duration = time.time() - start_time

    logger.info(
        f"Request completed: {request.method} {request.url.path} - "
        f"{response.status_code} - {duration:.3f}s"
    )

    return response


# ============================================================================
# EXCEPTION HANDLERS
# ============================================================================


async def client_input_exception_handler(request: Request, exc: ClientInputError):
    """
    Global exception handler for rejected submissions.

    Mapping (status_code and code carried by the exception):
        - MissingFileError -> 400 MISSING_FILE
        - TooManyFilesError -> 400 TOO_MANY_FILES
        - UnsupportedTypeError -> 415 UNSUPPORTED_TYPE
        - PayloadTooLargeError -> 413 PAYLOAD_TOO_LARGE

    Examples:
        >>> raise UnsupportedTypeError("unsupported type: only PDF files are accepted")
        >>> # Returns: 415 {"success": false, "code": "UNSUPPORTED_TYPE", "message": "...", "details": {...}}
    """
    details = {"exception_type": exc.__class__.__name__}
    details.update(
        {
            key: value
            for key, value in vars(exc).items()
            if key != "message" and value is not None
        }
    )

    error_response = ErrorResponse(code=exc.code, message=exc.message, details=details)

    logger.warning(
        f"Submission rejected: {exc.__class__.__name__} - {exc.message} - "
        f"Request: {request.method} {request.url.path}"
    )

    return JSONResponse(
        status_code=exc.status_code,
        content=error_response.model_dump(),
    )


async def request_validation_exception_handler(
    request: Request, exc: RequestValidationError
):
    """
    Malformed multipart body (e.g. a text value in the `file` field) -> 400.
    """
    error_response = ErrorResponse(
        code="INVALID_REQUEST",
        message="Malformed upload request",
        details={"errors": [error.get("msg") for error in exc.errors()]},
    )

    logger.warning(
        f"Malformed request: {request.method} {request.url.path} - {exc.errors()}"
    )

    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=error_response.model_dump(),
    )


async def generic_exception_handler(request: Request, exc: Exception):
    """
    Global exception handler for unexpected exceptions.

    Converts to 500 Internal Server Error. The exception text is returned
    in `details` only outside production; the full traceback is always logged.
    """
    settings: Optional[AppSettings] = getattr(request.app.state, "settings", None)
    hide_details = settings is None or settings.is_production

    error_response = ErrorResponse(
        code="INTERNAL_SERVER_ERROR",
        message="An unexpected error occurred",
        details=None
        if hide_details
        else {"error": str(exc), "type": exc.__class__.__name__},
    )

    logger.error(
        f"Unexpected error: {exc.__class__.__name__} - {str(exc)} - "
        f"Request: {request.method} {request.url.path}",
        exc_info=True,
    )

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_response.model_dump(exclude_none=True),
    )


# ============================================================================
# LIFESPAN
# ============================================================================


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Startup: sweep staged uploads left over by a previous process (disk mode).
    """
    file_storage: Optional[FileStorageService] = app.state.file_storage
    if file_storage is not None:
        hours = app.state.settings.upload_retention_hours
        removed = file_storage.cleanup_old_uploads(hours=hours)
        logger.info(f"Startup sweep removed {removed} staged uploads")
    yield


# ============================================================================
# APP FACTORY
# ============================================================================


def configure_logging(level: str) -> None:
    logging.basicConfig(level=level, format=LOG_FORMAT)
    logging.getLogger().setLevel(level)


def create_app(settings: Optional[AppSettings] = None) -> FastAPI:
    """
    FastAPI application factory.

    Creates and configures FastAPI app with all middleware, routers,
    and exception handlers.

    Args:
        settings: Application settings (defaults to AppSettings.from_env())

    Returns:
        Configured FastAPI application instance

    Raises:
        ValueError: If the environment holds invalid settings

    Usage:
        >>> app = create_app(AppSettings.for_testing(mail_transport="resend"))
        >>> # Run with uvicorn:
        >>> # uvicorn recruitment.api.main:app --reload
    """
    if settings is None:
        settings = AppSettings.from_env()

    configure_logging(settings.log_level)

    app = FastAPI(
        title="Recruitment Upload API",
        version=__version__,
        description=(
            "Accepts one PDF résumé per request and forwards it to the "
            "recruiting mailbox as {jobTitle}_{YYYYMMDD}_{originalName}."
        ),
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # Collaborators shared by every request
    app.state.settings = settings
    app.state.mail_sender = create_mail_sender(settings)
    app.state.file_storage = (
        FileStorageService(base_dir=settings.upload_temp_dir)
        if settings.upload_storage == "disk"
        else None
    )

    # Empty CORS_ALLOW_ORIGINS = any origin, without credentials
    origins = list(settings.cors_allow_origins)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins or ["*"],
        allow_credentials=bool(origins),
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.middleware("http")(request_logging_middleware)

    # Register global exception handlers
    app.add_exception_handler(ClientInputError, client_input_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_exception_handler)
    app.add_exception_handler(Exception, generic_exception_handler)

    # Same handler under /api/upload and /upload
    app.include_router(upload_router, prefix="/api")
    app.include_router(upload_router, include_in_schema=False)

    @app.get(
        "/health",
        response_model=HealthCheckResponse,
        status_code=status.HTTP_200_OK,
        summary="Health check endpoint",
        tags=["health"],
    )
    async def health_check() -> HealthCheckResponse:
        """
        Examples:
            >>> curl http://localhost:8000/health
            {"status": "ok", "version": "0.1.0", "timestamp": 1704976800.123}
        """
        return HealthCheckResponse(timestamp=time.time())

    @app.get("/api/port", summary="Upload API status", tags=["health"])
    async def port_status() -> JSONResponse:
        return JSONResponse(content=PortStatusResponse().model_dump(by_alias=True))

    configured = ", ".join(
        f"{name}={'set' if present else 'missing'}"
        for name, present in settings.configured_variables().items()
    )
    logger.info(
        f"FastAPI application created (env={settings.app_env}, "
        f"transport={settings.mail_transport}, storage={settings.upload_storage})"
    )
    logger.info(f"Mail settings: {configured}")
    logger.info("Upload endpoint available at: POST /api/upload, POST /upload")

    return app


# ============================================================================
# APP INSTANCE (for uvicorn)
# ============================================================================

# Usage: uvicorn recruitment.api.main:app --reload
app = create_app()
