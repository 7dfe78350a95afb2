"""
AgentDesk Backend - FastAPI Application Factory
=================================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app() builds the Database handle, registers
       middleware, exception handlers and routers, and returns the app.
Who:   uvicorn (`uvicorn agentdesk.main:app`) and the test suite.

Application Architecture:
    ┌──────────────────────────────────────────────────────────┐
    │                      FastAPI App                         │
    │                                                          │
    │  Middleware:  RequestID → Logging → GZip → CORS          │
    │                                                          │
    │  Routes:                                                 │
    │    /agents   /agents/{code}   /agents/area/{area}        │
    │    /foods    /lambdas/say     /health                    │
    │                                                          │
    │  Exception Handlers:                                     │
    │    Validation/Conflict→400  NotFound→404  Database→500   │
    │    LookupRequest→400  LookupService→500  Exception→500   │
    │                                                          │
    │  app.state.database: the one connection pool             │
    └──────────────────────────────────────────────────────────┘

Lifecycle:
    Startup:  configure logging, log the database target
    Shutdown: dispose the engine (close all pooled connections)
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.engine import make_url

from agentdesk import __version__
from agentdesk.config import settings
from agentdesk.database import Database
from agentdesk.exceptions import (
    AgentDeskError,
    ConflictError,
    DatabaseError,
    LookupRequestError,
    LookupServiceError,
    NotFoundError,
    ValidationError,
)
from agentdesk.middleware.logging import RequestLoggingMiddleware
from agentdesk.middleware.request_id import RequestIDMiddleware, request_id_var
from agentdesk.routes import agents, foods, health, lambdas

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the entire application.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    Output: stdout (captured by Docker / systemd)
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Third-party loggers that are chatty at INFO
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Startup: set up logging and report where the pool points.
    Shutdown: dispose the engine so MySQL sees clean disconnects.
    """
    setup_logging()
    database: Database = app.state.database

    # Log host/database only, never credentials
    url = make_url(database.url)
    logger.info("AgentDesk backend starting up (version %s)", __version__)
    logger.info(
        "Database: %s://%s/%s",
        url.get_backend_name(),
        url.host or "",
        url.database or "",
    )
    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)

    yield

    logger.info("AgentDesk backend shutting down...")
    await database.dispose()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def _error_body(error: str, message: str, details: Optional[dict] = None) -> dict:
    body = {"error": error, "message": message, "request_id": request_id_var.get("")}
    if details:
        body["details"] = details
    return body


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map application exceptions to HTTP responses.

    Handler table:
        ValidationError     → 400 validation_error
        ConflictError       → 400 conflict
        NotFoundError       → 404 not_found
        DatabaseError       → 500 server_error (generic message, context logged)
        LookupRequestError  → 400 {"error": message}
        LookupServiceError  → 500 {"error": message, "details": detail}
        AgentDeskError      → 500 server_error
        Exception           → 500 internal_server_error

    Responses never include SQL, driver messages or stack traces; the lookup
    proxy's `details` field is the only pass-through of an underlying error.
    """

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        logger.warning("[%s] Validation error: %s", request_id_var.get(""), exc.message)
        details = {k: v for k, v in exc.context.items() if k in ("field", "rule")}
        return JSONResponse(
            status_code=400,
            content=_error_body("validation_error", exc.message, details),
        )

    @app.exception_handler(ConflictError)
    async def handle_conflict(request: Request, exc: ConflictError):
        return JSONResponse(status_code=400, content=_error_body("conflict", exc.message))

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        return JSONResponse(status_code=404, content=_error_body("not_found", exc.message))

    @app.exception_handler(DatabaseError)
    async def handle_database_error(request: Request, exc: DatabaseError):
        logger.error(
            "[%s] Database error: %s | Context: %s",
            request_id_var.get(""),
            exc.message,
            exc.context,
        )
        return JSONResponse(status_code=500, content=_error_body("server_error", exc.message))

    @app.exception_handler(LookupRequestError)
    async def handle_lookup_request_error(request: Request, exc: LookupRequestError):
        return JSONResponse(status_code=400, content={"error": exc.message})

    @app.exception_handler(LookupServiceError)
    async def handle_lookup_service_error(request: Request, exc: LookupServiceError):
        logger.error("[%s] Lookup failed: %s", request_id_var.get(""), exc.detail)
        return JSONResponse(
            status_code=500,
            content={"error": exc.message, "details": exc.detail},
        )

    @app.exception_handler(AgentDeskError)
    async def handle_application_error(request: Request, exc: AgentDeskError):
        logger.error("[%s] Application error: %s", request_id_var.get(""), exc.message)
        return JSONResponse(status_code=500, content=_error_body("server_error", exc.message))

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        """Catch-all: generic 500, stack trace logged server-side only."""
        logger.error(
            "[%s] Unexpected error: %s",
            request_id_var.get(""),
            str(exc),
            exc_info=True,
        )
        return JSONResponse(
            status_code=500,
            content=_error_body(
                "internal_server_error",
                "An unexpected error occurred. Please try again or contact support.",
            ),
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(database: Optional[Database] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        database: Pool handle to use. Defaults to a new Database built from
            settings; tests pass one pointing at a temporary SQLite file.

    Returns:
        Fully configured FastAPI instance.
    """
    app = FastAPI(
        title="AgentDesk API",
        description="API for managing sales agents with CRUD operations, "
                    "listing foods, and relaying keyword lookups.",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    app.state.database = database or Database()

    # ── Register Middleware ───────────────────────────────────────────────
    # Middleware executes in REVERSE order of addition:
    # RequestID → Logging → GZip → CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(agents.router)
    app.include_router(foods.router)
    app.include_router(lambdas.router)
    app.include_router(health.router)

    return app


# uvicorn expects `agentdesk.main:app` to be importable
app = create_app()


def run() -> None:
    """Console entry point: serve the app with uvicorn."""
    import uvicorn

    uvicorn.run(
        "agentdesk.main:app",
        host=settings.backend_host,
        port=settings.backend_port,
        log_level=settings.log_level.lower(),
    )
