"""Listings API main application module.

This module initializes the FastAPI application and configures
core middleware, routers, and startup/shutdown events.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

import structlog
from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from listings.api.auth import router as auth_router
from listings.api.constructions import router as constructions_router
from listings.api.health import router as health_router
from listings.api.middleware import error_response, setup_middleware
from listings.api.products import router as products_router
from listings.api.variants import router as variants_router
from listings.application.context import build_context
from listings.infrastructure.config import settings
from listings.infrastructure.database import engine
from listings.infrastructure.logging_config import configure_logging

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Handle application startup and shutdown events.

    Args:
        app: The FastAPI application instance.

    Yields:
        None after startup, cleanup happens after yield.
    """
    # Startup
    configure_logging(settings)
    logger.info(
        "Starting Listings API",
        version=settings.api_version,
        debug=settings.debug,
        session_backend=settings.session_backend,
        capability_policy=settings.capability_policy,
    )

    app.state.context = build_context(settings)

    yield

    # Shutdown
    logger.info("Shutting down Listings API")
    await app.state.context.close()
    await engine.dispose()


app = FastAPI(
    title="Listings API",
    description="Multi-tenant product and construction catalog backend",
    version=settings.api_version,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

# CORS middleware (must be added before custom middleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Setup custom middleware (request ID, error handling)
setup_middleware(app)

# Include routers
app.include_router(health_router, tags=["Health"])
app.include_router(auth_router)
app.include_router(products_router)
app.include_router(variants_router)
app.include_router(constructions_router)


# ============================================================================
# Custom Exception Handlers
# ============================================================================


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    """Render router errors (see ``raise_for_result``) in the error envelope."""
    detail = exc.detail if isinstance(exc.detail, dict) else {"message": str(exc.detail)}

    return error_response(
        request,
        exc.status_code,
        detail.get("error_code", "ERROR"),
        detail.get("message", ""),
        detail.get("details") or {},
        headers=exc.headers,
    )


@app.exception_handler(Exception)
async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Last resort for errors raised by the middleware stack itself."""
    logger.exception("Unhandled exception outside handlers", path=request.url.path)

    return error_response(
        request, 500, "INTERNAL_ERROR", "An internal error occurred", {}
    )
