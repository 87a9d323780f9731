"""Middleware for the NASA Gateway Service."""

from collections.abc import Sequence
from uuid import UUID, uuid4

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import JSONResponse
from starlette.types import ASGIApp

from explorer_service_libs.error_handling import ErrorEnvelope, ErrorType
from explorer_service_libs.logging_utils import bind_request_context, create_service_logger

logger = create_service_logger("nasa_gateway.middleware")

ORIGIN_NOT_ALLOWED_MESSAGE = "Not allowed by CORS"

SECURITY_HEADERS: dict[str, str] = {
    "Content-Security-Policy": "default-src 'self'",
    "Cross-Origin-Opener-Policy": "same-origin",
    "Cross-Origin-Resource-Policy": "same-origin",
    "Referrer-Policy": "no-referrer",
    "Strict-Transport-Security": "max-age=15552000; includeSubDomains",
    "X-Content-Type-Options": "nosniff",
    "X-DNS-Prefetch-Control": "off",
    "X-Frame-Options": "SAMEORIGIN",
    "X-Permitted-Cross-Domain-Policies": "none",
}


class CorrelationIDMiddleware(BaseHTTPMiddleware):
    """Middleware to ensure every request has a correlation ID as UUID."""

    async def dispatch(self, request: Request, call_next):
        """Extract or generate correlation ID, bind it for logging, echo it back."""
        x_correlation_id = request.headers.get("X-Correlation-ID")
        if x_correlation_id:
            try:
                correlation_id = UUID(x_correlation_id)
            except ValueError:
                logger.warning(
                    f"Invalid correlation ID format: {x_correlation_id}, generating new one"
                )
                correlation_id = uuid4()
        else:
            correlation_id = uuid4()

        request.state.correlation_id = correlation_id
        bind_request_context(
            str(correlation_id), method=request.method, path=request.url.path
        )

        response = await call_next(request)

        response.headers["X-Correlation-ID"] = str(correlation_id)

        return response


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Attach standard hardening headers to every response."""

    async def dispatch(self, request: Request, call_next):
        response = await call_next(request)
        for name, value in SECURITY_HEADERS.items():
            response.headers.setdefault(name, value)
        return response


class OriginAllowListMiddleware(BaseHTTPMiddleware):
    """Reject cross-origin requests from origins outside the allow-list.

    Requests without an ``Origin`` header (same-origin, curl, server-to-server)
    pass through. Preflights are answered by the CORS middleware before this runs.
    """

    def __init__(self, app: ASGIApp, allowed_origins: Sequence[str]) -> None:
        super().__init__(app)
        self.allowed_origins = frozenset(allowed_origins)

    async def dispatch(self, request: Request, call_next):
        origin = request.headers.get("Origin")
        if origin is None or "*" in self.allowed_origins or origin in self.allowed_origins:
            return await call_next(request)

        logger.info(
            "Origin rejected",
            origin=origin,
            path=request.url.path,
            error_type=ErrorType.ORIGIN_NOT_ALLOWED.value,
        )
        return JSONResponse(
            status_code=403,
            content=ErrorEnvelope(error=ORIGIN_NOT_ALLOWED_MESSAGE).to_response_body(),
        )
