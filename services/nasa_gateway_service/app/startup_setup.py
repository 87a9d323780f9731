"""Startup setup for the NASA Gateway Service."""

from __future__ import annotations

from dishka import AsyncContainer, Provider, make_async_container
from dishka.integrations.fastapi import FastapiProvider, setup_dishka
from fastapi import FastAPI

from explorer_service_libs.logging_utils import create_service_logger
from services.nasa_gateway_service.app.di import NasaGatewayProvider
from services.nasa_gateway_service.config import Settings

logger = create_service_logger("nasa_gateway.startup")


def create_di_container(
    config: Settings | None = None, provider: Provider | None = None
) -> AsyncContainer:
    """Create and configure the DI container."""
    try:
        logger.info("Creating DI container...")
        container = make_async_container(
            provider or NasaGatewayProvider(config),
            FastapiProvider(),  # Provides Request object to context
        )
        logger.info("DI container created successfully")
        return container
    except Exception as e:
        logger.critical(f"Failed to create DI container: {e}", exc_info=True)
        raise


def setup_dependency_injection(app: FastAPI, container: AsyncContainer) -> None:
    """Setup Dishka integration with FastAPI."""
    try:
        logger.info("Setting up dependency injection...")
        setup_dishka(container, app)
        logger.info("Dependency injection setup completed")
    except Exception as e:
        logger.critical(f"Failed to setup dependency injection: {e}", exc_info=True)
        raise


def log_api_key_mode(config: Settings) -> None:
    """Report which NASA key is in use without ever logging the key itself."""
    if config.uses_demo_key():
        logger.warning(
            "Using NASA DEMO_KEY; upstream rate limits are strict. "
            "Set NASA_API_KEY for a personal key."
        )
    else:
        logger.info("Using configured NASA API key")


async def shutdown_services(container: AsyncContainer) -> None:
    """Close the DI container, releasing the shared upstream HTTP client."""
    await container.close()
    logger.info("NASA Gateway Service shutdown completed")
