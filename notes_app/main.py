"""
Simple Notes — FastAPI Application Factory
===========================================

What:  Creates and configures the FastAPI application instance.
How:   create_app() builds the persistence gateway, registers middleware,
       fallback exception handlers and the notes router.
Who:   uvicorn (`uvicorn notes_app.main:app`) and the test suite.

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware:  [Request ID] → [Logging] → [GZip]     │
    │                                                     │
    │  Routes:      GET / , POST /   (notes page)         │
    │                                                     │
    │  app.state:   settings, note_gateway                │
    │                                                     │
    │  Fallback handlers: NotesAppError / Exception → 500 │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:  configure logging, log the database location
    Shutdown: dispose the gateway's engine
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import HTMLResponse

from notes_app import __version__
from notes_app.config import Settings, settings
from notes_app.exceptions import NotesAppError
from notes_app.middleware.logging import RequestLoggingMiddleware
from notes_app.middleware.request_id import RequestIDMiddleware, request_id_var
from notes_app.routes import notes
from notes_app.services.note_gateway import NoteGateway

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging(log_level: str = "INFO") -> None:
    """
    Configure application logging.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s, to stdout.
    Called once during app startup.
    """
    logging.basicConfig(
        level=getattr(logging, log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Reduce noise from third-party libraries
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    if log_level != "DEBUG":
        logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Startup: configure logging and report where notes are stored.
    Shutdown: close the database engine.

    The schema is not created here; every request ensures it, so a store
    that is unavailable at startup does not stop the server.
    """
    app_settings: Settings = app.state.settings
    gateway: NoteGateway = app.state.note_gateway

    setup_logging(app_settings.log_level)
    logger.info("Simple Notes %s starting up...", __version__)
    logger.info(
        "Notes database: %s",
        gateway.engine.url.render_as_string(hide_password=True),
    )
    logger.info("Server ready at http://%s:%d", app_settings.backend_host, app_settings.backend_port)

    yield

    logger.info("Simple Notes shutting down...")
    await gateway.dispose()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

ERROR_PAGE = (
    "<!DOCTYPE html><html lang=\"en\"><head><meta charset=\"UTF-8\">"
    "<title>Error</title></head><body><h1>Something went wrong</h1>"
    "<p>{message}</p><p>Reference: {request_id}</p></body></html>"
)


def _error_page(message: str, request_id: str, status_code: int = 500) -> HTMLResponse:
    # message is always a fixed string; request_id is cleaned by RequestIDMiddleware
    return HTMLResponse(
        content=ERROR_PAGE.format(message=message, request_id=request_id),
        status_code=status_code,
    )


def register_exception_handlers(app: FastAPI) -> None:
    """
    Register last-resort handlers for errors that escape the notes route.

    PageService already turns every expected failure into an inline message;
    these handlers only guarantee that nothing reaches the client as a stack
    trace. Details are logged server-side.
    """

    @app.exception_handler(NotesAppError)
    async def handle_app_error(request: Request, exc: NotesAppError):
        rid = request_id_var.get("")
        logger.error("[%s] Unhandled application error: %s | Context: %s", rid, exc.message, exc.context)
        return _error_page("The notes service could not complete the request.", rid)

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        rid = request_id_var.get("")
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        return _error_page("An unexpected error occurred. Please try again.", rid)


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(app_settings: Optional[Settings] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        app_settings: Settings to use; defaults to the module-level singleton.

    Returns:
        FastAPI instance with its own NoteGateway on `app.state`.
    """
    app_settings = app_settings or settings

    app = FastAPI(
        title=app_settings.app_title,
        version=__version__,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
        lifespan=lifespan,
    )

    app.state.settings = app_settings
    app.state.note_gateway = NoteGateway.from_settings(app_settings)

    # ── Register Middleware ───────────────────────────────────────────────
    # Middleware executes in REVERSE order of addition
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(notes.router)

    return app


# ── Application Instance ─────────────────────────────────────────────────
app = create_app()


if __name__ == "__main__":
    uvicorn.run(
        "notes_app.main:app",
        host=settings.backend_host,
        port=settings.backend_port,
        log_level=settings.log_level.lower(),
    )
