"""HTTP middleware: request correlation and last-resort error responses."""

import time
from typing import Callable
from uuid import uuid4

import structlog
from fastapi import FastAPI, Request, Response, status
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.middleware.base import BaseHTTPMiddleware

from listings.api.dependencies import STATUS_BY_KIND
from listings.domain.exceptions import DomainError, StoreError

logger = structlog.get_logger()

# Probe endpoints are logged at debug to keep access logs readable
PROBE_PATHS = frozenset({"/health", "/ready"})
SLOW_REQUEST_MS = 1000.0


# ============================================================================
# Request ID Middleware
# ============================================================================


class RequestIdMiddleware(BaseHTTPMiddleware):
    """Attach a correlation ID to the request, its logs and its response.

    The ID comes from ``X-Request-ID`` when the caller sends one. Fields
    bound later in the request (the authenticated ``company_id``) end up
    on the completion log line too.
    """

    HEADER_NAME = "X-Request-ID"

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = request.headers.get(self.HEADER_NAME) or uuid4().hex
        request.state.request_id = request_id

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(request_id=request_id)

        started = time.perf_counter()
        status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
        try:
            response = await call_next(request)
            status_code = response.status_code
        finally:
            self._log_completion(request, status_code, time.perf_counter() - started)
            structlog.contextvars.clear_contextvars()

        response.headers[self.HEADER_NAME] = request_id
        return response

    @staticmethod
    def _log_completion(request: Request, status_code: int, elapsed: float) -> None:
        duration_ms = round(elapsed * 1000, 2)
        fields = {
            "method": request.method,
            "path": request.url.path,
            "status_code": status_code,
            "duration_ms": duration_ms,
        }

        if request.url.path in PROBE_PATHS:
            logger.debug("Probe served", **fields)
        elif duration_ms >= SLOW_REQUEST_MS:
            logger.warning("Slow request", **fields)
        else:
            logger.info("Request completed", **fields)


# ============================================================================
# Error Handling Middleware
# ============================================================================


def error_response(
    request: Request,
    status_code: int,
    error_code: str,
    message: str,
    details: dict,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    """Build the error envelope shared by middleware and exception handlers."""
    return JSONResponse(
        status_code=status_code,
        content={
            "error_code": error_code,
            "message": message,
            "details": details,
            "request_id": getattr(request.state, "request_id", None),
        },
        headers=headers,
    )


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    """Turn exceptions that escaped the routers into error envelopes.

    Services report failures as results, so what reaches this point is a
    failed commit in the session dependency, a domain error raised outside
    a service, or a bug.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        try:
            return await call_next(request)
        except DomainError as e:
            logger.warning(
                "Domain error escaped handler",
                path=request.url.path,
                error_code=e.error_code,
                error=e.message,
            )
            return error_response(
                request,
                STATUS_BY_KIND.get(e.error_kind, status.HTTP_500_INTERNAL_SERVER_ERROR),
                e.error_code,
                e.message,
                e.details,
            )
        except SQLAlchemyError as e:
            logger.error(
                "Catalog store failure",
                path=request.url.path,
                method=request.method,
                error=str(e),
            )
            return error_response(
                request,
                status.HTTP_500_INTERNAL_SERVER_ERROR,
                StoreError.error_code,
                "Catalog store unavailable",
                {},
            )
        except Exception as e:
            logger.exception(
                "Unhandled exception",
                path=request.url.path,
                method=request.method,
                error=str(e),
            )
            return error_response(
                request,
                status.HTTP_500_INTERNAL_SERVER_ERROR,
                "INTERNAL_ERROR",
                "An internal error occurred",
                {},
            )


def setup_middleware(app: FastAPI) -> None:
    """Install middleware; the last one added runs first."""
    app.add_middleware(ErrorHandlerMiddleware)
    app.add_middleware(RequestIdMiddleware)
