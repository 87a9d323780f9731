"""
Test configuration for the NASA Gateway Service.

The test provider mirrors NasaGatewayProvider but hands out an isolated
Prometheus registry, and optionally a substitute upstream client.
Upstream HTTP is intercepted with respx.
"""

from __future__ import annotations

from collections.abc import AsyncIterator, Iterator

import httpx
import pytest
from dishka import AsyncContainer, Provider, Scope, make_async_container, provide
from dishka.integrations.fastapi import FastapiProvider
from fastapi import FastAPI
from fastapi.testclient import TestClient
from prometheus_client import CollectorRegistry
from pydantic import SecretStr

from services.nasa_gateway_service.app.main import create_app
from services.nasa_gateway_service.app.metrics import GatewayMetrics
from services.nasa_gateway_service.config import Settings
from services.nasa_gateway_service.implementations.http_client import NasaUpstreamClient
from services.nasa_gateway_service.protocols import MetricsProtocol, UpstreamClientProtocol

TEST_API_KEY = "test-secret-key"
NASA_API = "https://api.nasa.gov"
NASA_IMAGES = "https://images-api.nasa.gov"


class TestNasaGatewayProvider(Provider):
    """Mirror of the production provider with an isolated metrics registry."""

    __test__ = False
    scope = Scope.APP

    def __init__(
        self,
        config: Settings,
        registry: CollectorRegistry,
        upstream_client: UpstreamClientProtocol | None = None,
    ) -> None:
        super().__init__()
        self._config = config
        self._registry = registry
        self._upstream_client = upstream_client

    @provide
    def get_config(self) -> Settings:
        return self._config

    @provide
    async def get_http_client(self, config: Settings) -> AsyncIterator[httpx.AsyncClient]:
        """Real client; respx intercepts its transport."""
        async with httpx.AsyncClient(timeout=config.HTTP_CLIENT_TIMEOUT_SECONDS) as client:
            yield client

    @provide
    def get_upstream_client(
        self, client: httpx.AsyncClient, config: Settings, metrics: MetricsProtocol
    ) -> UpstreamClientProtocol:
        if self._upstream_client is not None:
            return self._upstream_client
        return NasaUpstreamClient(client, config, metrics)

    @provide
    def provide_registry(self) -> CollectorRegistry:
        return self._registry

    @provide
    def provide_metrics(self, registry: CollectorRegistry) -> MetricsProtocol:
        return GatewayMetrics(registry=registry)


def make_settings(**overrides) -> Settings:
    values = {
        "NASA_API_KEY": SecretStr(TEST_API_KEY),
        "CORS_ORIGINS": ["http://localhost:3000"],
        "RATE_LIMIT_ENABLED": False,
        "ENVIRONMENT": "testing",
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


def make_test_app(
    config: Settings,
    registry: CollectorRegistry | None = None,
    upstream_client: UpstreamClientProtocol | None = None,
) -> FastAPI:
    container: AsyncContainer = make_async_container(
        TestNasaGatewayProvider(config, registry or CollectorRegistry(), upstream_client),
        FastapiProvider(),
    )
    return create_app(config, container)


@pytest.fixture
def test_settings() -> Settings:
    return make_settings()


@pytest.fixture
def registry() -> CollectorRegistry:
    """Isolated Prometheus registry for test independence."""
    return CollectorRegistry()


@pytest.fixture
def client(test_settings: Settings, registry: CollectorRegistry) -> Iterator[TestClient]:
    app = make_test_app(test_settings, registry)
    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client
