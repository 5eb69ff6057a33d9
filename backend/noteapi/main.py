"""
NoteAPI Backend — FastAPI Application Factory
===============================================

What:  Creates and configures the FastAPI application instance.
Why:   Centralizes configuration, middleware registration, route mounting,
       ownership of the NoteStore and AdminDirectory, and lifecycle
       management in one place.
How:   Factory pattern: create_app() returns a configured FastAPI instance.
Who:   Called by uvicorn to start the server (uvicorn noteapi.main:app)
       and by tests with their own store and directory.

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌──────┐ ┌────────┐ ┌──────────┐ ┌──────────────┐  │
    │  │ CORS │→│ Req ID │→│ Logging  │→│ Interceptors │  │
    │  └──────┘ └────────┘ └──────────┘ │  (AuthGate)  │  │
    │                                   └──────────────┘  │
    │  Routes:                                            │
    │  ┌───────────────────────────┐ ┌─────────────────┐  │
    │  │ /notes  (6 operations)    │ │ GET /health     │  │
    │  └───────────────────────────┘ └─────────────────┘  │
    │                                                     │
    │  App State:                                         │
    │    note_store       NoteStore (in-memory)           │
    │    admin_directory  AdminDirectory (allow-list)     │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:   configure logging, validate configuration, log readiness
    Shutdown:  clear the note store, log shutdown
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import PlainTextResponse

from noteapi import __version__
from noteapi.config import settings
from noteapi.exceptions import NoteAPIError
from noteapi.middleware.auth import AuthGate, InterceptorMiddleware
from noteapi.middleware.logging import RequestLoggingMiddleware
from noteapi.middleware.request_id import RequestIDMiddleware, request_id_var
from noteapi.routes import health, notes
from noteapi.services.admin_directory import AdminDirectory, build_admin_directory
from noteapi.services.note_store import NoteStore

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the entire application.

    When:    Called once during app startup, before anything else logs.
    Format:  %(asctime)s [%(levelname)s] %(name)s: %(message)s
    """
    log_format = (
        "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
    )

    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format=log_format,
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[
            logging.StreamHandler(sys.stdout),  # Docker captures stdout
        ],
        force=True,
    )

    # noteapi.access already covers every request
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Manage application lifecycle: startup and shutdown procedures.

    The NoteStore lives exactly as long as the app: it is created by
    create_app() and emptied here on shutdown.
    """
    # ── Startup ───────────────────────────────────────────────────────────
    setup_logging()
    logger.info("=" * 60)
    logger.info("NoteAPI Backend starting up...")

    try:
        settings.validate_required_for_production()
    except ValueError as e:
        # Don't exit: /health stays reachable and reports the problem
        logger.error("Configuration error: %s", str(e))

    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)
    logger.info("API docs: http://%s:%d/docs", settings.backend_host, settings.backend_port)
    logger.info("=" * 60)

    yield

    # ── Shutdown ──────────────────────────────────────────────────────────
    logger.info("NoteAPI Backend shutting down...")
    app.state.note_store.clear()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def register_exception_handlers(app: FastAPI) -> None:
    """
    Register global exception handlers for route errors.

    Handler hierarchy:
        NoteAPIError       → its status_code, its message
                             (NotFoundError: 404 with the route's text)
        Exception          → 500 "Internal Server Error"

    All bodies are plain text. Context dicts are logged, never returned.
    """

    @app.exception_handler(NoteAPIError)
    async def handle_app_error(request: Request, exc: NoteAPIError):
        rid = request_id_var.get("")
        if exc.status_code >= 500:
            logger.error("[%s] %s | Context: %s", rid, exc.message, exc.context)
        else:
            logger.debug("[%s] %d | Context: %s", rid, exc.status_code, exc.context)
        return PlainTextResponse(exc.message, status_code=exc.status_code)

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        """Catch-all: stack trace goes to the log, never to the client."""
        rid = request_id_var.get("")
        logger.error(
            "[%s] Unexpected error: %s",
            rid,
            str(exc),
            exc_info=True,
        )
        return PlainTextResponse("Internal Server Error", status_code=500)


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(
    note_store: Optional[NoteStore] = None,
    admin_directory: Optional[AdminDirectory] = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        note_store:       Store to serve; a fresh empty NoteStore if None.
        admin_directory:  Allow-list source; built from settings if None.

    Returns:
        Fully configured FastAPI instance ready to receive requests.
    """
    app = FastAPI(
        title="NoteAPI",
        description=(
            "CRUD API for notes. Every /notes request must carry an "
            "`authorization` header whose value is on the admin allow-list."
        ),
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # Attached at creation (not in lifespan) so ASGI test transports that
    # skip lifespan events still find them
    app.state.note_store = note_store if note_store is not None else NoteStore()
    app.state.admin_directory = (
        admin_directory if admin_directory is not None else build_admin_directory(settings)
    )

    # ── Register Middleware ───────────────────────────────────────────────
    # Last added = first to execute:
    # CORS → GZip → RequestID → Logging → Interceptors → routes

    app.add_middleware(
        InterceptorMiddleware,
        interceptors=[AuthGate(app.state.admin_directory)],
        path_prefix=notes.router.prefix,
    )

    app.add_middleware(RequestLoggingMiddleware, protected_prefix=notes.router.prefix)

    app.add_middleware(RequestIDMiddleware)

    app.add_middleware(GZipMiddleware, minimum_size=500)

    # Outermost so preflight OPTIONS requests never reach the AuthGate
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(notes.router)
    app.include_router(health.router)

    return app


# uvicorn expects `noteapi.main:app` to be importable
app = create_app()
