"""Shared fixtures for explorer_view_model tests."""

from __future__ import annotations

from collections.abc import AsyncIterator

import pytest

from explorer_view_model.config import ViewModelSettings
from explorer_view_model.gateway_client import GatewayClient


@pytest.fixture
def gateway_url() -> str:
    return "http://gateway.test"


@pytest.fixture
def view_model_settings(gateway_url: str) -> ViewModelSettings:
    return ViewModelSettings(_env_file=None, API_URL=gateway_url, REQUEST_TIMEOUT_SECONDS=5)


@pytest.fixture
async def gateway_client(view_model_settings: ViewModelSettings) -> AsyncIterator[GatewayClient]:
    """Client owning a real httpx AsyncClient for respx mocking."""
    async with GatewayClient(config=view_model_settings) as client:
        yield client
