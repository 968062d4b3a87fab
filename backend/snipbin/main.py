"""
SnipBin Backend: FastAPI Application Factory
==============================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app() returns a configured FastAPI instance.
Who:   Called by uvicorn (uvicorn snipbin.main:app) and by the test suite.

Application Architecture:
    ┌──────────────────────────────────────────────────────┐
    │                    FastAPI App                       │
    │                                                      │
    │  Middleware Chain:                                   │
    │  ┌──────────┐ ┌──────────┐ ┌──────┐ ┌──────┐         │
    │  │  Req ID  │→│ Logging  │→│ GZip │→│ CORS │         │
    │  └──────────┘ └──────────┘ └──────┘ └──────┘         │
    │                                                      │
    │  Routes:                                             │
    │  POST /upload   GET /paste/{key}   GET /raw/{key}    │
    │  GET /health                                         │
    │                                                      │
    │  Exception Handlers:                                 │
    │  Validation→400 │ NotFound→404 │ Persistence→500     │
    └──────────────────────────────────────────────────────┘

Lifecycle:
    Startup:  logging, optional table creation
    Shutdown: dispose database engine
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse

from snipbin import __version__
from snipbin.config import settings
from snipbin.database import create_tables, dispose_engine
from snipbin.exceptions import NotFoundError, PersistenceError, ValidationError
from snipbin.middleware.logging import RequestLoggingMiddleware
from snipbin.middleware.request_id import RequestIDLogFilter, RequestIDMiddleware
from snipbin.routes import health, snippets, upload
from snipbin.services.memory_store import MemorySnippetStore

logger = logging.getLogger(__name__)

SERVER_ERROR_MESSAGE = "Server error"
NOT_FOUND_MESSAGE = "Snippet not found"


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the entire application.

    Called once during startup, before any other initialization.
    Format: %(asctime)s [%(levelname)s] [%(request_id)s] %(name)s: %(message)s
    so store and service lines about a snippet key carry the request ID.
    """
    handler = logging.StreamHandler(sys.stdout)  # Docker captures stdout
    handler.addFilter(RequestIDLogFilter())

    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] [%(request_id)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[handler],
        force=True,
    )

    # Per-request noise from third-party libraries
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    # ── Startup ───────────────────────────────────────────────────────────
    setup_logging()
    logger.info("SnipBin %s starting up (store=%s)", __version__, settings.store_backend)

    if settings.store_backend == "sql" and settings.db_auto_create:
        await create_tables()
        logger.info("Database tables ensured")

    logger.info("Server ready at http://%s:%d", settings.host, settings.port)

    yield

    # ── Shutdown ──────────────────────────────────────────────────────────
    logger.info("SnipBin shutting down...")
    await dispose_engine()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def register_exception_handlers(app: FastAPI) -> None:
    """
    Map application exceptions to HTTP responses.

    Handler table:
        ValidationError   → 400 {"error": <message>}
        NotFoundError     → 404 "Snippet not found" (text/plain)
        PersistenceError  → 500 {"error": "Server error"}
        Exception         → 500 {"error": "Server error"}

    Storage details are logged with the request ID and never returned.
    """

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        logger.warning("Validation error: %s", exc.message)
        return JSONResponse(status_code=400, content={"error": exc.message})

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        return PlainTextResponse(NOT_FOUND_MESSAGE, status_code=404)

    @app.exception_handler(PersistenceError)
    async def handle_persistence_error(request: Request, exc: PersistenceError):
        logger.error("Persistence error: %s | Context: %s", exc.message, exc.context)
        return JSONResponse(status_code=500, content={"error": SERVER_ERROR_MESSAGE})

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        logger.error("Unexpected error: %s", str(exc), exc_info=True)
        return JSONResponse(status_code=500, content={"error": SERVER_ERROR_MESSAGE})


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    With STORE_BACKEND=memory the app owns one MemorySnippetStore for its
    lifetime (app.state.memory_store); get_snippet_store() hands it out.
    """
    app = FastAPI(
        title="SnipBin API",
        description=(
            "Pastebin-style snippet store. Upload text, get a link; "
            "scripts fetch the raw text, browsers get a viewer page."
        ),
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    if settings.store_backend == "memory":
        app.state.memory_store = MemorySnippetStore()

    # ── Register Middleware ───────────────────────────────────────────────
    # Last added runs first: RequestID → Logging → GZip → CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    app.include_router(upload.router)
    app.include_router(snippets.router)
    app.include_router(health.router)

    return app


# uvicorn expects `snipbin.main:app` to be importable
app = create_app()
