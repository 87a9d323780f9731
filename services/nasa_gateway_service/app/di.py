from __future__ import annotations

from collections.abc import AsyncIterator

import httpx
from dishka import Provider, Scope, provide
from prometheus_client import REGISTRY, CollectorRegistry

from services.nasa_gateway_service.app.metrics import GatewayMetrics
from services.nasa_gateway_service.config import Settings, settings
from services.nasa_gateway_service.implementations.http_client import NasaUpstreamClient
from services.nasa_gateway_service.protocols import MetricsProtocol, UpstreamClientProtocol


class NasaGatewayProvider(Provider):
    scope = Scope.APP

    def __init__(
        self, config: Settings | None = None, registry: CollectorRegistry | None = None
    ) -> None:
        super().__init__()
        self._config = config or settings
        self._registry = registry if registry is not None else REGISTRY

    @provide
    def get_config(self) -> Settings:
        return self._config

    @provide
    async def get_http_client(self, config: Settings) -> AsyncIterator[httpx.AsyncClient]:
        # One pooled client for the process; closed with the container
        async with httpx.AsyncClient(
            timeout=httpx.Timeout(config.HTTP_CLIENT_TIMEOUT_SECONDS),
            headers={"Accept": "application/json"},
        ) as httpx_client:
            yield httpx_client

    @provide
    def get_upstream_client(
        self, client: httpx.AsyncClient, config: Settings, metrics: MetricsProtocol
    ) -> UpstreamClientProtocol:
        return NasaUpstreamClient(client, config, metrics)

    @provide
    def provide_registry(self) -> CollectorRegistry:
        return self._registry

    @provide
    def provide_metrics(self, registry: CollectorRegistry) -> MetricsProtocol:
        return GatewayMetrics(registry=registry)
