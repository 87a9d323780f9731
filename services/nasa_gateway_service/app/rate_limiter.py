"""Per-client fixed-window rate limiting for every request the gateway receives.

The window is enforced in middleware rather than per route, so unmatched paths
count toward it as well.
"""

from __future__ import annotations

from limits import RateLimitItem, parse
from limits.storage import storage_from_string
from limits.aio.strategies import FixedWindowRateLimiter
from slowapi.util import get_remote_address
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import PlainTextResponse, Response
from starlette.types import ASGIApp

from explorer_service_libs.error_handling import ErrorType
from explorer_service_libs.logging_utils import create_service_logger
from services.nasa_gateway_service.config import Settings

RATE_LIMIT_MESSAGE = "Too many requests from this IP, please try again later."
RATE_LIMIT_NAMESPACE = "nasa-gateway"

logger = create_service_logger("nasa_gateway.rate_limiter")


def async_storage_uri(storage_uri: str) -> str:
    """``limits`` async storages use ``async+`` schemes, e.g. ``async+memory://``."""
    return storage_uri if storage_uri.startswith("async+") else f"async+{storage_uri}"


def create_rate_limiter(config: Settings) -> FixedWindowRateLimiter:
    storage = storage_from_string(async_storage_uri(config.RATE_LIMIT_STORAGE_URI))
    return FixedWindowRateLimiter(storage)


def rate_limit_exceeded_response(request: Request, limit: RateLimitItem) -> PlainTextResponse:
    logger.info(
        "Rate limit exceeded",
        client=get_remote_address(request),
        path=request.url.path,
        limit=str(limit),
        error_type=ErrorType.RATE_LIMIT.value,
    )
    return PlainTextResponse(RATE_LIMIT_MESSAGE, status_code=429)


class RateLimitMiddleware(BaseHTTPMiddleware):
    """One shared window per client address across all paths."""

    def __init__(self, app: ASGIApp, config: Settings) -> None:
        super().__init__(app)
        self.enabled = config.RATE_LIMIT_ENABLED
        self.limit = parse(config.rate_limit)
        self.limiter = create_rate_limiter(config)

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        if self.enabled and not await self.limiter.hit(
            self.limit, RATE_LIMIT_NAMESPACE, get_remote_address(request)
        ):
            return rate_limit_exceeded_response(request, self.limit)
        return await call_next(request)
