"""Gateway routes as seen from the view-model layer."""

from __future__ import annotations

from enum import Enum


class GatewayRoute(str, Enum):
    APOD = "get-apod"
    MARS_PHOTOS = "get-mars-photos"
    NEO = "get-neo"
    EPIC = "get-epic"
    SEARCH_MEDIA = "search-media"
    HEALTH = "health"

    @property
    def path(self) -> str:
        return _PATHS[self]

    @property
    def fallback_message(self) -> str:
        """Error text used when the gateway gives no envelope to read."""
        return _FALLBACK_MESSAGES[self]


_PATHS: dict[GatewayRoute, str] = {
    GatewayRoute.APOD: "/api/apod",
    GatewayRoute.MARS_PHOTOS: "/api/mars-photos",
    GatewayRoute.NEO: "/api/neo",
    GatewayRoute.EPIC: "/api/epic",
    GatewayRoute.SEARCH_MEDIA: "/api/search",
    GatewayRoute.HEALTH: "/api/health",
}

_FALLBACK_MESSAGES: dict[GatewayRoute, str] = {
    GatewayRoute.APOD: "Failed to fetch APOD",
    GatewayRoute.MARS_PHOTOS: "Failed to fetch Mars photos",
    GatewayRoute.NEO: "Failed to fetch NEO data",
    GatewayRoute.EPIC: "Failed to fetch Earth images",
    GatewayRoute.SEARCH_MEDIA: "Failed to search media",
    GatewayRoute.HEALTH: "API health check failed",
}
