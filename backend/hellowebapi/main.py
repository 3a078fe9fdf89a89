"""
HelloWebAPI Backend — FastAPI Application Factory
==================================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app() returns a configured FastAPI instance.
Who:   Called by uvicorn to start the server (uvicorn hellowebapi.main:app),
       and by the test suite for a fresh app per test.

Application Architecture:
    ┌──────────────────────────────────────────────────────┐
    │                    FastAPI App                       │
    │                                                      │
    │  Middleware Chain:                                   │
    │  ┌──────────────┐ ┌──────────┐ ┌──────────────────┐  │
    │  │  Req ID      │→│ RateLim  │→│  Logging         │  │
    │  └──────────────┘ └──────────┘ └──────────────────┘  │
    │                                                      │
    │  Routes:                                             │
    │  ┌──────────────────────────────┐ ┌──────────────┐   │
    │  │ /api/Products ... (table)    │ │ GET /health  │   │
    │  └──────────────────────────────┘ └──────────────┘   │
    │                                                      │
    │  Exception Handlers:                                 │
    │  ┌────────────────────────────────────────────────┐  │
    │  │ BindingError→400 │ NotFound→404 │ other→500    │  │
    │  └────────────────────────────────────────────────┘  │
    └──────────────────────────────────────────────────────┘
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator

import uvicorn
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware

from hellowebapi import __version__
from hellowebapi.config import settings
from hellowebapi.exceptions import (
    HelloWebAPIError,
    BindingError,
    NotFoundError,
    error_response,
)
from hellowebapi.middleware.request_id import RequestIDMiddleware, current_request_id
from hellowebapi.middleware.logging import RequestLoggingMiddleware
from hellowebapi.middleware.rate_limit import RateLimitMiddleware
from hellowebapi.routes import health, products
from hellowebapi.routing import ignore_path_case
from hellowebapi.services.product_service import product_service

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the entire application.

    Format: 2024-01-15T12:00:00 [INFO] hellowebapi.access: GET /api/Products 200 ...
    Called once during app startup, before anything logs.
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # hellowebapi.access already logs every request
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    # ── Startup ───────────────────────────────────────────────────────────
    setup_logging()
    logger.info("=" * 60)
    logger.info("HelloWebAPI %s starting up...", __version__)
    logger.info("Catalog loaded: %d products", len(product_service))
    logger.info(
        "Formatters: %s",
        "JSON, XML" if settings.xml_formatter_enabled else "JSON",
    )
    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)
    logger.info("API docs: http://%s:%d/docs", settings.backend_host, settings.backend_port)
    logger.info("=" * 60)

    yield

    # ── Shutdown ──────────────────────────────────────────────────────────
    logger.info("HelloWebAPI shutting down. Nothing to release.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def register_exception_handlers(app: FastAPI) -> None:
    """
    Map application exceptions to HTTP responses with a uniform error body.

    Handler hierarchy:
        BindingError            → 400 Bad Request
        RequestValidationError  → 400 Bad Request (unbindable query/route value)
        NotFoundError           → 404 Not Found
        HelloWebAPIError (base) → 500 Internal Server Error
        Exception (fallback)    → 500 Internal Server Error

    429 responses are produced by RateLimitMiddleware, which answers
    before these handlers are reachable.
    """

    @app.exception_handler(BindingError)
    async def handle_binding_error(request: Request, exc: BindingError):
        logger.warning("[%s] Binding error: %s", current_request_id(request), exc.message)
        return error_response(
            request, 400, "binding_error", exc.message, details=exc.context
        )

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        """Simple parameters that fail conversion are bad requests, not 422s."""
        logger.warning(
            "[%s] Parameter binding failed: %d error(s)",
            current_request_id(request),
            len(exc.errors()),
        )
        return error_response(
            request,
            400,
            "binding_error",
            "The request is invalid.",
            details={"errors": jsonable_encoder(exc.errors())},
        )

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        return error_response(request, 404, "not_found", exc.message)

    @app.exception_handler(HelloWebAPIError)
    async def handle_app_error(request: Request, exc: HelloWebAPIError):
        logger.error(
            "[%s] Application error: %s | Context: %s",
            current_request_id(request),
            exc.message,
            exc.context,
        )
        return error_response(
            request,
            500,
            "server_error",
            "An internal error occurred. Please try again later.",
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        """
        Catch-all: generic 500 to the client, full traceback to the log.

        Runs in Starlette's ServerErrorMiddleware, outside RequestIDMiddleware,
        so the id comes from request.state rather than the context variable.
        """
        rid = current_request_id(request)
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        return error_response(
            request,
            500,
            "internal_server_error",
            "An unexpected error occurred. Please try again or contact support.",
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app() -> FastAPI:
    app = FastAPI(
        title="HelloWebAPI",
        description=(
            "Routing, verb dispatch, body binding and content negotiation "
            "over a fixed in-memory product list."
        ),
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # ── Register Middleware ───────────────────────────────────────────────
    # Middleware executes in REVERSE order of addition:
    # RequestID → RateLimit → Logging → GZip → CORS → routes
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID", "Retry-After"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RateLimitMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(products.router)
    app.include_router(health.router)
    ignore_path_case(app.router.routes, prefix=products.router.prefix)

    return app


def run() -> None:
    """Console entry point: serve the app with uvicorn."""
    uvicorn.run(
        "hellowebapi.main:app",
        host=settings.backend_host,
        port=settings.backend_port,
        log_level=settings.log_level.lower(),
    )


# uvicorn expects `hellowebapi.main:app` to be importable
app = create_app()
