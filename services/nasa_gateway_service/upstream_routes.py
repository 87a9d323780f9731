"""
Upstream route table for the NASA Gateway Service.

Each gateway route maps to exactly one upstream NASA endpoint. The per-service
quirks (path segments, defaults, required parameters, whether an API key is
attached) live in this table so the proxy handlers stay a single generic
forwarding path.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum

from explorer_service_libs.error_handling import raise_client_input_error

UpstreamQuery = dict[str, str]

ROVERS = ("curiosity", "opportunity", "spirit")
ISO_DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")


class RouteName(str, Enum):
    APOD = "get-apod"
    MARS_PHOTOS = "get-mars-photos"
    NEO = "get-neo"
    EPIC = "get-epic"
    SEARCH_MEDIA = "search-media"


class UpstreamService(str, Enum):
    """Which upstream base URL a route is resolved against."""

    NASA_API = "nasa_api"
    NASA_IMAGES = "nasa_images"


@dataclass(frozen=True)
class UpstreamRoute:
    """Forwarding rule for one gateway route.

    Attributes:
        name: Gateway route name
        path: Upstream path template; ``{param}`` placeholders come from ``path_params``
        failure_message: ErrorEnvelope ``error`` text when the upstream call fails
        query_params: Recognized query parameters, in forwarding order
        path_params: Parameters substituted into ``path`` (never sent as query)
        path_suffixes: Optional path segments appended when their parameter is present
        defaults: Values applied before forwarding when a parameter is absent
        required: Parameter name to the 400 message raised when it is absent
        choices: Parameter name to its allowed values
        patterns: Parameter name to a regex its value must fully match
        service: Upstream base URL selector
        requires_api_key: Whether ``api_key`` is appended to the query
    """

    name: RouteName
    path: str
    failure_message: str
    query_params: tuple[str, ...] = ()
    path_params: tuple[str, ...] = ()
    path_suffixes: Mapping[str, str] = field(default_factory=dict)
    defaults: Mapping[str, str] = field(default_factory=dict)
    required: Mapping[str, str] = field(default_factory=dict)
    choices: Mapping[str, tuple[str, ...]] = field(default_factory=dict)
    patterns: Mapping[str, re.Pattern[str]] = field(default_factory=dict)
    service: UpstreamService = UpstreamService.NASA_API
    requires_api_key: bool = True

    @property
    def recognized_params(self) -> tuple[str, ...]:
        return self.query_params + self.path_params + tuple(self.path_suffixes)


UPSTREAM_ROUTES: dict[RouteName, UpstreamRoute] = {
    RouteName.APOD: UpstreamRoute(
        name=RouteName.APOD,
        path="/planetary/apod",
        failure_message="Failed to fetch Astronomy Picture of the Day",
        query_params=("date", "count"),
    ),
    RouteName.MARS_PHOTOS: UpstreamRoute(
        name=RouteName.MARS_PHOTOS,
        path="/mars-photos/api/v1/rovers/{rover}/photos",
        failure_message="Failed to fetch Mars rover photos",
        query_params=("page", "sol", "camera"),
        path_params=("rover",),
        defaults={"rover": "curiosity", "page": "1"},
        choices={"rover": ROVERS},
    ),
    RouteName.NEO: UpstreamRoute(
        name=RouteName.NEO,
        path="/neo/rest/v1/feed",
        failure_message="Failed to fetch Near Earth Objects",
        query_params=("start_date", "end_date"),
    ),
    RouteName.EPIC: UpstreamRoute(
        name=RouteName.EPIC,
        path="/EPIC/api/natural",
        failure_message="Failed to fetch Earth images",
        path_suffixes={"date": "/date/{date}"},
        patterns={"date": ISO_DATE_PATTERN},
    ),
    RouteName.SEARCH_MEDIA: UpstreamRoute(
        name=RouteName.SEARCH_MEDIA,
        path="/search",
        failure_message="Failed to search NASA media",
        query_params=("q", "media_type", "page"),
        defaults={"media_type": "image", "page": "1"},
        required={"q": "Search query is required"},
        service=UpstreamService.NASA_IMAGES,
        requires_api_key=False,
    ),
}


def build_upstream_query(route: UpstreamRoute, raw: Mapping[str, str | None]) -> UpstreamQuery:
    """Reduce raw client parameters to the recognized, defaulted set.

    Unknown keys are dropped, empty strings count as absent (whitespace does
    not), defaults fill the
    gaps, then required/choice/pattern rules are enforced.

    Raises:
        ExplorerError: (400) when a required parameter is missing or a value is invalid
    """
    values: UpstreamQuery = {}
    for name in route.recognized_params:
        value = raw.get(name)
        if value:
            values[name] = value
        elif name in route.defaults:
            values[name] = route.defaults[name]

    for name, message in route.required.items():
        if name not in values:
            raise_client_input_error(message, route=route.name.value, param=name)

    for name, allowed in route.choices.items():
        if name in values and values[name] not in allowed:
            raise_client_input_error(
                f"Invalid {name}",
                f"{name} must be one of: {', '.join(allowed)}",
                route=route.name.value,
                param=name,
            )

    for name, pattern in route.patterns.items():
        if name in values and not pattern.fullmatch(values[name]):
            raise_client_input_error(
                f"Invalid {name}",
                f"{name} must match {pattern.pattern}",
                route=route.name.value,
                param=name,
            )

    return values


def build_upstream_path(route: UpstreamRoute, values: Mapping[str, str]) -> str:
    """Render the upstream path, including any optional suffix segments."""
    path = route.path.format(**{name: values[name] for name in route.path_params})
    for name, suffix in route.path_suffixes.items():
        if name in values:
            path += suffix.format(**{name: values[name]})
    return path


def forwarded_query(route: UpstreamRoute, values: Mapping[str, str]) -> UpstreamQuery:
    """Query-string portion of ``values`` in the route's forwarding order."""
    return {name: values[name] for name in route.query_params if name in values}
