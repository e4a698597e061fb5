"""Fault Translator: turns every escaping failure into a structured JSON response.

Invariants:
    - Every response carries an X-Correlation-ID header, success or failure
    - RegistryError -> its mapped status, its own message and kind name
    - RequestValidationError -> 422 Validation with field-level details
    - Any other exception -> 500 with a generic message; the original message and
      type reach the log only
    - Wrapped causes are never serialized

Design Decisions:
    - Middleware wraps the whole pipeline (dependencies included), so faults raised
      while resolving the caller or opening the DB session are translated too
    - Inbound correlation ids are reused only if they look like ids; anything else
      is replaced to keep log lines and headers clean
"""

import logging
import re
import uuid
from datetime import datetime, timezone

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from registry.core.errors import (
    ErrorSeverity, FaultKind, InputValidationError, RegistryError,
)
from registry.infrastructure.observability import correlation_id_var

logger = logging.getLogger(__name__)

CORRELATION_HEADER = "X-Correlation-ID"
_CORRELATION_ID_RE = re.compile(r"^[A-Za-z0-9._-]{1,64}$")


def register_error_handlers(app: FastAPI) -> None:
    """Install the fault translator on the FastAPI app."""
    app.add_middleware(FaultTranslatorMiddleware)
    _register_validation_error_handler(app)


def resolve_correlation_id(request: Request) -> str:
    inbound = request.headers.get(CORRELATION_HEADER, "")
    if _CORRELATION_ID_RE.match(inbound):
        return inbound
    return uuid.uuid4().hex


def _correlation_id_of(request: Request) -> str | None:
    return getattr(request.state, "correlation_id", None)


class FaultTranslatorMiddleware(BaseHTTPMiddleware):
    """Outermost application middleware: correlation ids and fault rendering."""

    async def dispatch(self, request: Request, call_next):
        correlation_id = resolve_correlation_id(request)
        request.state.correlation_id = correlation_id
        token = correlation_id_var.set(correlation_id)
        try:
            try:
                response = await call_next(request)
            except RegistryError as exc:
                response = fault_response(request, exc)
            except Exception as exc:
                response = unexpected_error_response(request, exc)
            response.headers[CORRELATION_HEADER] = correlation_id
            return response
        finally:
            correlation_id_var.reset(token)


def fault_response(request: Request, exc: RegistryError) -> JSONResponse:
    """Render a taxonomy fault with its own status, kind and message."""
    log = logger.error if exc.http_status >= 500 else logger.warning
    log(
        f"{exc.kind.value}: {exc.message}",
        exc_info=exc.http_status >= 500,
        extra={
            "error_code": exc.code,
            "fault_kind": exc.kind.value,
            "path": request.url.path,
        },
    )
    return JSONResponse(
        status_code=exc.http_status,
        content=exc.to_response(_correlation_id_of(request)),
    )


def unexpected_error_response(request: Request, exc: Exception) -> JSONResponse:
    """Catch-all: never leaks internal details."""
    logger.error(
        f"Unhandled exception on {request.url.path}: {type(exc).__name__}: {exc}",
        exc_info=exc,
        extra={"path": request.url.path},
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": {
                "code": "INTERNAL_ERROR",
                "kind": FaultKind.SERVICE.value,
                "message": "An unexpected error occurred",
                "status": status.HTTP_500_INTERNAL_SERVER_ERROR,
                "severity": ErrorSeverity.CRITICAL.value,
                "timestamp": datetime.now(timezone.utc).isoformat(),
                "correlationId": _correlation_id_of(request),
            },
        },
    )


def _register_validation_error_handler(app: FastAPI) -> None:
    """Register Pydantic validation error handler."""

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        """Handle Pydantic validation errors as Validation faults."""
        logger.warning(
            f"Validation error on {request.url.path}: {exc.errors()}",
            extra={"path": request.url.path},
        )
        fault = InputValidationError(
            "Invalid request data", details=_validation_details(exc),
        )
        return JSONResponse(
            status_code=fault.http_status,
            content=fault.to_response(_correlation_id_of(request)),
        )


def _validation_details(exc: RequestValidationError) -> list[dict]:
    return [
        {
            "field": ".".join(str(loc) for loc in e["loc"]),
            "message": e["msg"],
            "type": e["type"],
        }
        for e in exc.errors()
    ]
