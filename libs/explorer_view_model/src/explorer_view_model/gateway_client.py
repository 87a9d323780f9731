"""HTTP client for the NASA gateway.

Every call goes through ``GatewayClient.fetch``, which turns transport and
status failures into ``GatewayRequestError`` subclasses carrying the
gateway's ErrorEnvelope text, so callers only ever handle one exception family.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import httpx

from explorer_service_libs.logging_utils import create_service_logger
from explorer_view_model.config import ViewModelSettings, settings
from explorer_view_model.routes import GatewayRoute

logger = create_service_logger("explorer_view_model.gateway_client")

RATE_LIMITED_MESSAGE = "Rate limit exceeded. Please try again later."
TIMEOUT_MESSAGE = "Request timeout. Please try again."

QueryParams = Mapping[str, str | int | None]


class GatewayRequestError(Exception):
    """A gateway call failed; ``message`` is safe to show to the user."""

    def __init__(
        self,
        message: str,
        *,
        route: GatewayRoute,
        status_code: int | None = None,
        details: str | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.route = route
        self.status_code = status_code
        self.details = details


class RateLimitedError(GatewayRequestError):
    pass


class GatewayTimeoutError(GatewayRequestError):
    pass


def _clean_params(query: QueryParams | None) -> dict[str, str]:
    if not query:
        return {}
    return {key: str(value) for key, value in query.items() if value is not None and value != ""}


def _envelope_fields(response: httpx.Response) -> tuple[str | None, str | None]:
    try:
        body = response.json()
    except ValueError:
        return None, None
    if not isinstance(body, dict):
        return None, None
    error = body.get("error")
    details = body.get("details")
    return (
        error if isinstance(error, str) else None,
        details if isinstance(details, str) else None,
    )


class GatewayClient:
    """Async client for the gateway's proxy routes."""

    def __init__(
        self,
        http_client: httpx.AsyncClient | None = None,
        config: ViewModelSettings | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            http_client: Optional pre-built client (tests pass one with a mock
                transport). When omitted, one is created and owned by this instance.
            config: View-model settings (gateway URL, timeout)
        """
        config = config or settings
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(
            base_url=config.API_URL,
            timeout=config.REQUEST_TIMEOUT_SECONDS,
            headers={"Accept": "application/json"},
        )

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> GatewayClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def fetch(self, route: GatewayRoute, query: QueryParams | None = None) -> Any:
        """GET ``route`` with ``query`` and return the decoded JSON body.

        Raises:
            RateLimitedError: The gateway answered 429
            GatewayTimeoutError: No answer within the timeout
            GatewayRequestError: Any other failure
        """
        params = _clean_params(query)
        try:
            response = await self._client.get(route.path, params=params)
        except httpx.TimeoutException as e:
            logger.warning("Gateway request timed out", route=route.value)
            raise GatewayTimeoutError(TIMEOUT_MESSAGE, route=route) from e
        except httpx.HTTPError as e:
            logger.warning("Gateway request failed", route=route.value, error=str(e))
            raise GatewayRequestError(route.fallback_message, route=route, details=str(e)) from e

        if response.status_code == 429:
            raise RateLimitedError(RATE_LIMITED_MESSAGE, route=route, status_code=429)

        if response.is_error:
            error, details = _envelope_fields(response)
            logger.info(
                "Gateway returned error",
                route=route.value,
                status_code=response.status_code,
                error=error,
            )
            # Health failures never surface the gateway's own text
            message = route.fallback_message if route is GatewayRoute.HEALTH else error
            raise GatewayRequestError(
                message or route.fallback_message,
                route=route,
                status_code=response.status_code,
                details=details,
            )

        try:
            return response.json()
        except ValueError as e:
            raise GatewayRequestError(
                route.fallback_message,
                route=route,
                status_code=response.status_code,
                details="Gateway returned malformed JSON",
            ) from e

    async def get_apod(self, date: str | None = None, count: int | None = None) -> Any:
        return await self.fetch(GatewayRoute.APOD, {"date": date, "count": count})

    async def get_mars_photos(
        self,
        sol: str | int | None = None,
        camera: str | None = None,
        rover: str | None = None,
        page: int | None = None,
    ) -> Any:
        return await self.fetch(
            GatewayRoute.MARS_PHOTOS,
            {"sol": sol, "camera": camera, "rover": rover, "page": page},
        )

    async def get_neo(self, start_date: str | None = None, end_date: str | None = None) -> Any:
        return await self.fetch(GatewayRoute.NEO, {"start_date": start_date, "end_date": end_date})

    async def get_epic(self, date: str | None = None) -> Any:
        return await self.fetch(GatewayRoute.EPIC, {"date": date})

    async def search_media(
        self, query: str, media_type: str | None = None, page: int | None = None
    ) -> Any:
        return await self.fetch(
            GatewayRoute.SEARCH_MEDIA, {"q": query, "media_type": media_type, "page": page}
        )

    async def get_health(self) -> Any:
        return await self.fetch(GatewayRoute.HEALTH)
