"""Health and metrics routes for the NASA Gateway Service."""

from __future__ import annotations

import time
from datetime import datetime, timezone

from dishka import FromDishka
from dishka.integrations.fastapi import inject
from fastapi import APIRouter, Request
from fastapi.responses import PlainTextResponse
from prometheus_client import CONTENT_TYPE_LATEST, CollectorRegistry, generate_latest

from explorer_service_libs.logging_utils import create_service_logger

router = APIRouter(tags=["Health"])
metrics_router = APIRouter(tags=["Health"])
logger = create_service_logger("nasa_gateway.routers.health")


@router.get("/health")
async def health_check(request: Request) -> dict[str, str | float]:
    """Liveness probe; never contacts an upstream."""
    started_at = getattr(request.app.state, "started_at", time.monotonic())
    return {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
        "uptimeSeconds": round(time.monotonic() - started_at, 3),
    }


@metrics_router.get("/metrics", response_class=PlainTextResponse)
@inject
async def metrics(registry: FromDishka[CollectorRegistry]):
    """Prometheus metrics endpoint."""
    try:
        metrics_data = generate_latest(registry)
        return PlainTextResponse(content=metrics_data, media_type=CONTENT_TYPE_LATEST)
    except Exception as e:
        logger.error(f"Error generating metrics: {e}", exc_info=True)
        return PlainTextResponse(content="Error generating metrics", status_code=500)
