"""
View-model layer for the NASA Space Explorer.

Talks to the gateway, keeps a per-session cache of results and derives the
numbers the screens display.
"""

from .apod import ApodEntry, ApodMultiple, ApodSingle, parse_apod_result
from .epic import EpicImages, epic_image_url
from .favorites import FavoritesStore
from .gateway_client import (
    GatewayClient,
    GatewayRequestError,
    GatewayTimeoutError,
    RateLimitedError,
)
from .media_search import MediaSearchSummary, summarize_media_search
from .neo_stats import DangerLevel, NEOStatsView, classify_danger, derive_neo_stats
from .query_store import QueryCacheEntry, QueryKey, QueryStore
from .routes import GatewayRoute
from .rovers import ROVERS, validate_camera, validate_sol
from .validation import InputValidationError, validate_not_future

__all__ = [
    "ROVERS",
    "ApodEntry",
    "ApodMultiple",
    "ApodSingle",
    "DangerLevel",
    "EpicImages",
    "FavoritesStore",
    "GatewayClient",
    "GatewayRequestError",
    "GatewayRoute",
    "GatewayTimeoutError",
    "InputValidationError",
    "MediaSearchSummary",
    "NEOStatsView",
    "QueryCacheEntry",
    "QueryKey",
    "QueryStore",
    "RateLimitedError",
    "classify_danger",
    "derive_neo_stats",
    "epic_image_url",
    "parse_apod_result",
    "summarize_media_search",
    "validate_camera",
    "validate_not_future",
    "validate_sol",
]
