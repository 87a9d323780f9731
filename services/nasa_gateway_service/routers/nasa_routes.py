"""Proxy routes: one GET endpoint per NASA upstream.

Every handler collects its raw query parameters and hands them to
``_forward``, which applies the route table, performs the single upstream
call and relays the JSON body unchanged.
"""

from __future__ import annotations

import time
from typing import Any

from dishka.integrations.fastapi import FromDishka, inject
from fastapi import APIRouter, Query

from explorer_service_libs.error_handling import ErrorType, ExplorerError
from explorer_service_libs.logging_utils import create_service_logger
from services.nasa_gateway_service.protocols import MetricsProtocol, UpstreamClientProtocol
from services.nasa_gateway_service.upstream_routes import (
    UPSTREAM_ROUTES,
    RouteName,
    build_upstream_query,
)

router = APIRouter()
logger = create_service_logger("nasa_gateway.nasa_routes")


async def _forward(
    route_name: RouteName,
    raw: dict[str, str | None],
    client: UpstreamClientProtocol,
    metrics: MetricsProtocol,
) -> Any:
    route = UPSTREAM_ROUTES[route_name]
    endpoint = route_name.value
    start_time = time.perf_counter()
    status = "200"
    try:
        values = build_upstream_query(route, raw)
        logger.debug("Forwarding request", route=endpoint, params=sorted(values))
        return await client.fetch(route, values)
    except ExplorerError as e:
        status = str(e.status_code)
        metrics.api_errors_total.labels(endpoint=endpoint, error_type=e.error_type.value).inc()
        raise
    except Exception:
        status = "500"
        metrics.api_errors_total.labels(
            endpoint=endpoint, error_type=ErrorType.INTERNAL.value
        ).inc()
        raise
    finally:
        metrics.http_requests_total.labels(
            method="GET", endpoint=endpoint, http_status=status
        ).inc()
        metrics.http_request_duration_seconds.labels(method="GET", endpoint=endpoint).observe(
            time.perf_counter() - start_time
        )


@router.get(
    "/apod",
    summary="Astronomy Picture of the Day",
    description="Single entry for `date` (default today), or a list when `count` is given.",
)
@inject
async def get_apod(
    client: FromDishka[UpstreamClientProtocol],
    metrics: FromDishka[MetricsProtocol],
    date: str | None = Query(None, description="YYYY-MM-DD"),
    count: str | None = Query(None, description="Number of random entries"),
) -> Any:
    return await _forward(RouteName.APOD, {"date": date, "count": count}, client, metrics)


@router.get(
    "/mars-photos",
    summary="Mars rover photos",
    description="Photos for one rover, filtered by sol and camera. `page` defaults to 1.",
)
@inject
async def get_mars_photos(
    client: FromDishka[UpstreamClientProtocol],
    metrics: FromDishka[MetricsProtocol],
    sol: str | None = Query(None, description="Martian sol"),
    camera: str | None = Query(None, description="Camera abbreviation, e.g. FHAZ"),
    rover: str | None = Query(None, description="curiosity, opportunity or spirit"),
    page: str | None = Query(None),
) -> Any:
    raw = {"sol": sol, "camera": camera, "rover": rover, "page": page}
    return await _forward(RouteName.MARS_PHOTOS, raw, client, metrics)


@router.get("/neo", summary="Near Earth Objects feed")
@inject
async def get_neo(
    client: FromDishka[UpstreamClientProtocol],
    metrics: FromDishka[MetricsProtocol],
    start_date: str | None = Query(None, description="YYYY-MM-DD"),
    end_date: str | None = Query(None, description="YYYY-MM-DD"),
) -> Any:
    raw = {"start_date": start_date, "end_date": end_date}
    return await _forward(RouteName.NEO, raw, client, metrics)


@router.get(
    "/epic",
    summary="EPIC natural-color Earth images",
    description="Most recent set, or the set for `date` when given.",
)
@inject
async def get_epic(
    client: FromDishka[UpstreamClientProtocol],
    metrics: FromDishka[MetricsProtocol],
    date: str | None = Query(None, description="YYYY-MM-DD"),
) -> Any:
    return await _forward(RouteName.EPIC, {"date": date}, client, metrics)


@router.get("/search", summary="Search the NASA Image and Video Library")
@inject
async def search_media(
    client: FromDishka[UpstreamClientProtocol],
    metrics: FromDishka[MetricsProtocol],
    q: str | None = Query(None, description="Free-text query (required)"),
    media_type: str | None = Query(None, description="image, video or audio"),
    page: str | None = Query(None),
) -> Any:
    raw = {"q": q, "media_type": media_type, "page": page}
    return await _forward(RouteName.SEARCH_MEDIA, raw, client, metrics)
