"""Upstream HTTP client for the NASA Gateway Service.

This module performs the one upstream call behind each gateway route using a
shared httpx AsyncClient, and normalizes every failure into an ExplorerError
so route handlers never see transport exceptions.
"""

from __future__ import annotations

from typing import Any

import httpx

from explorer_service_libs.error_handling import raise_upstream_error, raise_upstream_timeout
from explorer_service_libs.logging_utils import create_service_logger, redact_secret
from services.nasa_gateway_service.config import Settings
from services.nasa_gateway_service.protocols import MetricsProtocol, UpstreamClientProtocol
from services.nasa_gateway_service.upstream_routes import (
    UpstreamQuery,
    UpstreamRoute,
    UpstreamService,
    build_upstream_path,
    forwarded_query,
)

logger = create_service_logger("nasa_gateway.upstream_client")


def extract_upstream_message(response: httpx.Response) -> str | None:
    """Pull a human-readable error message out of an upstream error body.

    api.nasa.gov answers with ``{"error": {"message": ...}}``, APOD with
    ``{"msg": ...}`` and the image library with ``{"reason": ...}``.
    """
    try:
        body = response.json()
    except ValueError:
        return None
    if not isinstance(body, dict):
        return None

    error = body.get("error")
    if isinstance(error, dict) and isinstance(error.get("message"), str):
        return error["message"]
    if isinstance(error, str):
        return error
    for key in ("msg", "message", "reason"):
        if isinstance(body.get(key), str):
            return body[key]
    return None


class NasaUpstreamClient(UpstreamClientProtocol):
    """HTTP client implementation for the NASA upstreams.

    Attaches the API key where the route requires it, applies the fixed
    timeout, and records upstream call metrics.
    """

    def __init__(
        self, client: httpx.AsyncClient, config: Settings, metrics: MetricsProtocol
    ) -> None:
        """Initialize the upstream client.

        Args:
            client: The shared httpx AsyncClient to use
            config: Gateway settings (API key, base URLs, timeout)
            metrics: Metrics sink for upstream call counts and durations
        """
        self._client = client
        self._api_key = config.NASA_API_KEY.get_secret_value()
        self._timeout = config.HTTP_CLIENT_TIMEOUT_SECONDS
        self._base_urls = {
            UpstreamService.NASA_API: config.NASA_API_BASE_URL.rstrip("/"),
            UpstreamService.NASA_IMAGES: config.NASA_IMAGES_API_URL.rstrip("/"),
        }
        self._metrics = metrics

    def _redact(self, message: str) -> str:
        return redact_secret(message, self._api_key)

    def _record(self, route: UpstreamRoute, status: str) -> None:
        self._metrics.upstream_calls_total.labels(
            service=route.service.value, route=route.name.value, status_code=status
        ).inc()

    async def fetch(self, route: UpstreamRoute, values: UpstreamQuery) -> Any:
        """Send the upstream GET for ``route`` and return the decoded JSON body.

        Args:
            route: Forwarding rule from the upstream route table
            values: Validated, defaulted parameters from ``build_upstream_query``

        Returns:
            The upstream JSON payload, untouched

        Raises:
            ExplorerError: (500) on timeout, non-2xx status, transport failure
                or malformed JSON
        """
        url = f"{self._base_urls[route.service]}{build_upstream_path(route, values)}"
        params = forwarded_query(route, values)
        if route.requires_api_key:
            params["api_key"] = self._api_key

        try:
            with self._metrics.upstream_call_duration_seconds.labels(
                service=route.service.value, route=route.name.value
            ).time():
                response = await self._client.get(url, params=params, timeout=self._timeout)
            self._record(route, str(response.status_code))
            response.raise_for_status()
            return response.json()
        except httpx.TimeoutException:
            self._record(route, "timeout")
            logger.warning(
                "Upstream request timed out",
                route=route.name.value,
                timeout_seconds=self._timeout,
            )
            raise_upstream_timeout(route.failure_message, self._timeout, route=route.name.value)
        except httpx.HTTPStatusError as e:
            details = extract_upstream_message(e.response) or str(e)
            logger.warning(
                "Upstream returned error status",
                route=route.name.value,
                status_code=e.response.status_code,
                details=self._redact(details),
            )
            raise_upstream_error(
                route.failure_message,
                self._redact(details),
                route=route.name.value,
                upstream_status=e.response.status_code,
            )
        except httpx.HTTPError as e:
            self._record(route, "error")
            details = self._redact(str(e) or type(e).__name__)
            logger.warning("Upstream request failed", route=route.name.value, details=details)
            raise_upstream_error(route.failure_message, details, route=route.name.value)
        except ValueError:
            logger.warning("Upstream returned malformed JSON", route=route.name.value)
            raise_upstream_error(
                route.failure_message,
                "Upstream returned malformed JSON",
                route=route.name.value,
            )
