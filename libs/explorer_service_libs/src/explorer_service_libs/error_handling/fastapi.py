"""FastAPI integration: translate exceptions into ErrorEnvelope responses."""

from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.responses import JSONResponse, Response

from explorer_service_libs.error_handling.explorer_error import (
    ErrorEnvelope,
    ErrorType,
    ExplorerError,
)
from explorer_service_libs.logging_utils import create_service_logger

logger = create_service_logger("explorer_service_libs.error_handling")

ROUTE_NOT_FOUND_MESSAGE = "Endpoint not found"
INTERNAL_ERROR_MESSAGE = "Internal server error"
INVALID_REQUEST_MESSAGE = "Invalid request parameters"


def _envelope_response(status_code: int, envelope: ErrorEnvelope) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=envelope.to_response_body())


async def explorer_error_handler(request: Request, exc: ExplorerError) -> JSONResponse:
    logger.warning(
        "Request failed",
        path=request.url.path,
        error_type=exc.error_type.value,
        status_code=exc.status_code,
        error=exc.error,
        details=exc.details,
    )
    return _envelope_response(exc.status_code, exc.to_envelope())


async def http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    # Unknown paths and unsupported methods on known paths are both "not found"
    if exc.status_code in (404, 405):
        logger.info(
            "Route not found",
            path=request.url.path,
            method=request.method,
            error_type=ErrorType.ROUTE_NOT_FOUND.value,
        )
        return _envelope_response(404, ErrorEnvelope(error=ROUTE_NOT_FOUND_MESSAGE))
    return _envelope_response(exc.status_code, ErrorEnvelope(error=str(exc.detail)))


async def validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    details = "; ".join(
        f"{'.'.join(str(part) for part in error.get('loc', ()))}: {error.get('msg')}"
        for error in exc.errors()
    )
    return _envelope_response(
        400, ErrorEnvelope(error=INVALID_REQUEST_MESSAGE, details=details or None)
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        "Unhandled error",
        path=request.url.path,
        exc_type=type(exc).__name__,
        error_type=ErrorType.INTERNAL.value,
        exc_info=exc,
    )
    return _envelope_response(500, ErrorEnvelope(error=INTERNAL_ERROR_MESSAGE))


def register_error_handlers(app: FastAPI) -> None:
    """Install the Space Explorer exception handlers on ``app``.

    The ``Exception`` handler is a last resort; add ``InternalErrorMiddleware``
    as the innermost middleware for envelopes that pass through the stack.
    """
    app.add_exception_handler(ExplorerError, explorer_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, validation_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, unhandled_exception_handler)


class InternalErrorMiddleware(BaseHTTPMiddleware):
    """Render uncaught exceptions as the 500 envelope inside the middleware stack.

    Exception handlers registered for ``Exception`` run in Starlette's
    outermost ServerErrorMiddleware, so their responses skip every user
    middleware. Install this one first (innermost) so internal faults still
    pass through the outer middleware.
    """

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        try:
            return await call_next(request)
        except Exception as exc:
            return await unhandled_exception_handler(request, exc)
