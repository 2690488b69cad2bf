"""
Ride Service Backend: FastAPI Application Factory
===================================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app() returns a configured FastAPI instance with
       its own RideStore on `app.state`.
Who:   uvicorn (`ride_service.main:app`), the `ride-service` console script,
       and the test suite (a fresh app, and so a fresh in-memory store, per test).

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware:  Request ID → Logging → CORS           │
    │                                                     │
    │  Routes:  POST /rides · GET /rides · GET /rides/{id}│
    │           GET /health                               │
    │                                                     │
    │  Exception Handlers:                                │
    │  ValidationError→422 │ RidesNotFound→404 │ DB→500   │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:  configure logging. The store connects lazily on first use.
    Shutdown: dispose the store's engine.
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from ride_service import __version__
from ride_service.config import Settings, settings
from ride_service.exceptions import RideServiceError
from ride_service.middleware.logging import RequestLoggingMiddleware
from ride_service.middleware.request_id import RequestIDMiddleware, request_id_var
from ride_service.routes import health, rides
from ride_service.services.ride_store import RideStore

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging(config: Optional[Settings] = None) -> None:
    """
    Configure logging for the entire application.

    Records go to stdout, and additionally to `config.log_file` when set
    (errors and all other levels share the one file).
    """
    config = config or settings

    handlers: list = [logging.StreamHandler(sys.stdout)]
    if config.log_file:
        handlers.append(logging.FileHandler(config.log_file, encoding="utf-8"))

    logging.basicConfig(
        level=getattr(logging, config.log_level, logging.INFO),
        format=LOG_FORMAT,
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=handlers,
        force=True,  # Override any existing logging config
    )

    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    config: Settings = app.state.settings
    setup_logging(config)
    logger.info("Ride Service %s starting up", __version__)
    logger.info("Server ready at http://%s:%d", config.backend_host, config.backend_port)

    yield

    logger.info("Ride Service shutting down...")
    await app.state.ride_store.dispose()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exceptions to `{"error_code", "message"}` responses.

    Handler hierarchy:
        RideServiceError (ValidationError 422, RidesNotFoundError 404,
                          DatabaseError 500) → status_code of the exception
        Exception (fallback)                 → 500 SERVER_ERROR

    Server errors never expose internal details; context is logged only.
    The error code is left on `request.state` for the access log.
    """

    @app.exception_handler(RideServiceError)
    async def handle_ride_service_error(request: Request, exc: RideServiceError):
        rid = request_id_var.get("")
        request.state.error_code = exc.error_code
        if exc.status_code >= 500:
            logger.error("[%s] %s: %s | Context: %s", rid, exc.error_code, exc.message, exc.context)
        else:
            logger.info("[%s] %s: %s", rid, exc.error_code, exc.message)
        return JSONResponse(status_code=exc.status_code, content=exc.to_response())

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        rid = request_id_var.get("")
        request.state.error_code = "SERVER_ERROR"
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        return JSONResponse(
            status_code=500,
            content={"error_code": "SERVER_ERROR", "message": "Unknown error"},
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(config: Optional[Settings] = None, store: Optional[RideStore] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        config: Settings to use (defaults to the module singleton)
        store:  RideStore to serve from (defaults to a new store for `config`)
    """
    config = config or settings

    app = FastAPI(
        title="Ride Service API",
        description="Create ride records and fetch them individually or page by page.",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = config
    app.state.ride_store = store or RideStore(config)

    # Last added runs first: RequestID → Logging → CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins_list,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    app.include_router(health.router)
    app.include_router(rides.router)

    return app


app = create_app()


def run() -> None:
    """Console entry point: serve `app` with uvicorn on the configured host/port."""
    import uvicorn

    setup_logging(settings)
    uvicorn.run(
        "ride_service.main:app",
        host=settings.backend_host,
        port=settings.backend_port,
        log_level=settings.log_level.lower(),
    )
