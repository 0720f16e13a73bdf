"""Centralized exception handlers for the FastAPI app.

Register with register_exception_handlers(app). Maps domain error codes
to HTTP responses; the body is always {"error", "message", "details"}.
"""

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from topology.core.config import get_settings
from topology.domain.exceptions import TopologyException
from topology.shared.telemetry.tracing import get_trace_id

logger = logging.getLogger(__name__)

# Domain error_code -> HTTP status
_ERROR_CODE_STATUS: dict[str, int] = {
    "RESOURCE_NOT_FOUND": 404,
    "BROKEN_CHAIN": 404,
    "CHAIN_CHECK_FAILED": 503,
    "TYPE_MISMATCH": 409,
    "PERMISSION_DENIED": 403,
    "MALFORMED_ENTITY": 502,
    "VALIDATION_ERROR": 400,
    "STORE_UNAVAILABLE": 503,
    "SERVICE_UNAVAILABLE": 503,
}


def status_for(error_code: str | None) -> int:
    """Return the HTTP status for a domain error code (400 when unmapped)."""
    return _ERROR_CODE_STATUS.get(error_code or "", 400)


def _topology_exception_handler(
    request: Request, exc: TopologyException
) -> JSONResponse:
    """Return JSON from TopologyException.to_dict() with the mapped status code."""
    status = status_for(exc.error_code)
    if status >= 500:
        logger.warning(
            "%s on %s %s (trace_id=%s): %s",
            exc.error_code,
            request.method,
            request.url.path,
            get_trace_id(),
            exc.message,
        )
    return JSONResponse(status_code=status, content=exc.to_dict())


def _validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Return 422 with validation error details."""
    return JSONResponse(
        status_code=422,
        content={
            "error": "VALIDATION_ERROR",
            "message": "Request validation failed",
            "details": exc.errors(),
        },
    )


def _http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """Return JSON for Starlette HTTP exceptions (status + detail)."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": "HTTP_ERROR", "message": exc.detail},
    )


def _generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Return 500; include detail only when debug is True."""
    logger.exception("Unhandled exception: %s", exc)
    detail: Any = str(exc) if get_settings().debug else "Internal server error"
    return JSONResponse(
        status_code=500,
        content={"error": "INTERNAL_ERROR", "message": detail},
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers on the FastAPI app.

    Handlers: TopologyException (and subclasses), RequestValidationError,
    StarletteHTTPException, generic Exception.
    """
    app.add_exception_handler(TopologyException, _topology_exception_handler)
    app.add_exception_handler(RequestValidationError, _validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(Exception, _generic_exception_handler)
