"""
Person API: FastAPI Application Factory
==========================================

What:  Creates and configures the FastAPI application instance.
How:   create_app() assembles middleware, exception handlers and routers;
       the lifespan sets up logging and loads the PersonStore.
Who:   uvicorn (`uvicorn person_api.main:app`) and the test suite.

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌──────────────┐ ┌─────────────┐                   │
    │  │  Req ID      │→│  CORS       │                   │
    │  └──────────────┘ └─────────────┘                   │
    │                                                     │
    │  Routes:                                            │
    │  ┌──────────────────────┐ ┌──────────────────────┐  │
    │  │ /persons (GET, POST) │ │ GET /health          │  │
    │  └──────────────────────┘ └──────────────────────┘  │
    │                                                     │
    │  Exception Handlers (problem+json):                 │
    │  ┌──────────────────────────────────────────────┐   │
    │  │ Validation→400 │ NotFound→404 │ Storage→500  │   │
    │  └──────────────────────────────────────────────┘   │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:
    1. Initialize logging
    2. Load the CSV file into the PersonStore (a missing file aborts startup)
    Shutdown:
    1. Log shutdown (the store holds no open file handles between requests)
"""

import logging
import sys
from http import HTTPStatus
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Dict, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from person_api import __version__
from person_api.config import settings
from person_api.exceptions import (
    CsvFileNotFoundError,
    FileStorageError,
    NotFoundError,
    PersonApiError,
    ValidationError,
)
from person_api.middleware.request_id import (
    RequestIDLogFilter,
    RequestIDMiddleware,
    request_id_var,
)
from person_api.routes import health, persons
from person_api.storage import build_person_store

logger = logging.getLogger(__name__)

PROBLEM_MEDIA_TYPE = "application/problem+json"


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the entire application.

    Format: %(asctime)s [%(levelname)s] %(name)s [%(request_id)s]: %(message)s
    Level:  settings.log_level

    The request id is filled in by RequestIDLogFilter on the stdout handler
    ("-" for lines written outside a request).
    """
    handler = logging.StreamHandler(sys.stdout)
    handler.addFilter(RequestIDLogFilter())
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s [%(request_id)s]: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[handler],
        force=True,
    )


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Startup: configure logging and load the store.
    Shutdown: log and exit.

    A store already placed on app.state (tests do this) is kept as-is.
    CsvFileNotFoundError propagates and stops the server from starting.
    """
    # ── Startup ───────────────────────────────────────────────────────────
    setup_logging()
    logger.info("=" * 60)
    logger.info("Person API starting up...")

    if getattr(app.state, "person_store", None) is None:
        try:
            app.state.person_store = build_person_store(settings)
        except CsvFileNotFoundError as e:
            logger.error("Configuration error: %s", e.message)
            logger.error("Set CSV_FILE_PATH to an existing file and restart the server.")
            raise

    logger.info("CSV file: %s", app.state.person_store.file_path)
    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)
    logger.info("=" * 60)

    yield

    # ── Shutdown ──────────────────────────────────────────────────────────
    logger.info("Person API shutting down...")
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def problem_response(
    request: Request,
    status: int,
    title: str,
    detail: Optional[str] = None,
    errors: Optional[Dict[str, Any]] = None,
    headers: Optional[Dict[str, str]] = None,
) -> JSONResponse:
    """Build a problem details response for the current request."""
    content: Dict[str, Any] = {
        "type": "about:blank",
        "title": title,
        "status": status,
        "detail": detail,
        "instance": request.url.path,
        "request_id": request_id_var.get(""),
    }
    if errors:
        content["errors"] = errors
    return JSONResponse(
        status_code=status, content=content, media_type=PROBLEM_MEDIA_TYPE, headers=headers
    )


def register_exception_handlers(app: FastAPI) -> None:
    """
    Register global exception handlers for consistent error responses.

    Handler hierarchy:
        ValidationError         → 400 "Invalid person data"
        RequestValidationError  → 400 "Invalid person data" (schema errors)
        NotFoundError           → 404 "Person not found"
        HTTPException           → its status (unmatched routes, wrong methods)
        FileStorageError        → 500 (details logged, not returned)
        PersonApiError (base)   → 500
        Exception (fallback)    → 500 (stack trace logged)
    """

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        logger.warning("Validation error: %s", exc.message)
        return problem_response(request, 400, "Invalid person data", detail=exc.message)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, exc: RequestValidationError):
        errors: Dict[str, Any] = {}
        for error in exc.errors():
            location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
            errors.setdefault(location or "body", []).append(error.get("msg", "invalid"))
        logger.warning("Request validation failed: %s", errors)
        return problem_response(
            request,
            400,
            "Invalid person data",
            detail="One or more fields are missing or invalid.",
            errors=errors,
        )

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        return problem_response(
            request, 404, f"{exc.resource.capitalize()} not found", detail=exc.message
        )

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_error(request: Request, exc: StarletteHTTPException):
        # e.g. /persons/abc: the id convertor only matches digits
        return problem_response(
            request,
            exc.status_code,
            HTTPStatus(exc.status_code).phrase,
            detail=str(exc.detail),
            headers=exc.headers,
        )

    @app.exception_handler(FileStorageError)
    async def handle_file_storage_error(request: Request, exc: FileStorageError):
        logger.error("File storage error: %s | Context: %s", exc.message, exc.context)
        return problem_response(request, 500, "Storage error", detail=exc.message)

    @app.exception_handler(PersonApiError)
    async def handle_app_error(request: Request, exc: PersonApiError):
        logger.error("Application error: %s | Context: %s", exc.message, exc.context)
        return problem_response(request, 500, "Internal server error", detail=exc.message)

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        logger.error("Unexpected error: %s", str(exc), exc_info=True)
        return problem_response(
            request,
            500,
            "Internal server error",
            detail="An unexpected error occurred. Please try again or contact support.",
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns: A configured FastAPI instance. The PersonStore is attached
             during lifespan startup unless one is already on app.state.
    """
    app = FastAPI(
        title="Person API",
        description="Read and append person records stored in a CSV file.",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # Middleware executes in REVERSE order of addition:
    # RequestID → CORS → route
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID", "Location"],
    )
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    app.include_router(persons.router)
    app.include_router(health.router)

    return app


# uvicorn expects `person_api.main:app`
app = create_app()
