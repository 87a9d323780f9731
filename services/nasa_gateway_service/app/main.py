from __future__ import annotations

import time
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from dishka import AsyncContainer
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.gzip import GZipMiddleware

from explorer_service_libs.error_handling.fastapi import (
    InternalErrorMiddleware,
    register_error_handlers as register_fastapi_error_handlers,
)
from services.nasa_gateway_service.app.startup_setup import (
    create_di_container,
    log_api_key_mode,
    setup_dependency_injection,
    shutdown_services,
)
from services.nasa_gateway_service.config import Settings, settings

from ..routers import health_routes, nasa_routes
from .middleware import (
    CorrelationIDMiddleware,
    OriginAllowListMiddleware,
    SecurityHeadersMiddleware,
)
from .rate_limiter import RateLimitMiddleware


def create_app(
    config: Settings | None = None, container: AsyncContainer | None = None
) -> FastAPI:
    config = config or settings

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        log_api_key_mode(config)
        yield
        await shutdown_services(app.state.di_container)

    app = FastAPI(
        title=config.SERVICE_NAME,
        version="1.0.0",
        description="NASA Space Explorer gateway - proxies the NASA open APIs for the browser",
        docs_url="/docs" if config.is_development() else None,
        redoc_url=None,
        openapi_url="/openapi.json" if config.is_development() else None,
        lifespan=lifespan,
    )

    # Register error handlers
    register_fastapi_error_handlers(app)

    # Middleware added later wraps earlier ones; CORS ends up outermost
    app.add_middleware(InternalErrorMiddleware)
    app.add_middleware(GZipMiddleware, minimum_size=config.GZIP_MINIMUM_SIZE)
    app.add_middleware(RateLimitMiddleware, config=config)
    app.add_middleware(OriginAllowListMiddleware, allowed_origins=config.CORS_ORIGINS)
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(CorrelationIDMiddleware)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.CORS_ORIGINS,
        allow_credentials=config.CORS_ALLOW_CREDENTIALS,
        allow_methods=config.CORS_ALLOW_METHODS,
        allow_headers=config.CORS_ALLOW_HEADERS,
        expose_headers=["X-Correlation-ID"],
        max_age=config.CORS_MAX_AGE_SECONDS,
    )

    # Include routers
    app.include_router(health_routes.router, prefix=config.API_PREFIX, tags=["Health"])
    app.include_router(health_routes.metrics_router, tags=["Health"])
    app.include_router(nasa_routes.router, prefix=config.API_PREFIX, tags=["NASA"])

    # Setup Dishka DI
    container = container or create_di_container(config)
    setup_dependency_injection(app, container)

    # Store container reference for cleanup
    app.state.di_container = container
    app.state.started_at = time.monotonic()

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    from explorer_service_libs.logging_utils import configure_service_logging

    configure_service_logging(
        settings.SERVICE_NAME,
        environment=settings.ENVIRONMENT,
        log_level=settings.LOG_LEVEL,
    )
    uvicorn.run(
        app,
        host=settings.HTTP_HOST,
        port=settings.HTTP_PORT,
        log_level=settings.LOG_LEVEL.lower(),
        server_header=False,
    )
