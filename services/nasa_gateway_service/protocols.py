"""
Protocols for the NASA Gateway Service.

Route handlers depend on these protocols, not on concrete implementations,
so tests can swap in their own providers.
"""

from __future__ import annotations

from typing import Any, Protocol

from prometheus_client import Counter, Histogram

from services.nasa_gateway_service.upstream_routes import UpstreamQuery, UpstreamRoute


class UpstreamClientProtocol(Protocol):
    """Protocol for the client that performs the single upstream call per route."""

    async def fetch(self, route: UpstreamRoute, values: UpstreamQuery) -> Any:
        """Call the upstream for ``route`` and return its decoded JSON body.

        Raises:
            ExplorerError: On any upstream failure, already normalized
        """
        ...


class MetricsProtocol(Protocol):
    """Protocol for metrics collection matching GatewayMetrics exactly."""

    @property
    def http_requests_total(self) -> Counter:
        """Total HTTP requests counter."""
        ...

    @property
    def http_request_duration_seconds(self) -> Histogram:
        """HTTP request duration histogram."""
        ...

    @property
    def upstream_calls_total(self) -> Counter:
        """Upstream NASA calls counter."""
        ...

    @property
    def upstream_call_duration_seconds(self) -> Histogram:
        """Upstream NASA call duration histogram."""
        ...

    @property
    def api_errors_total(self) -> Counter:
        """API errors counter."""
        ...
