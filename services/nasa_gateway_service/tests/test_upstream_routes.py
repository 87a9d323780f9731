"""Unit tests for the upstream route table and its pure helpers."""

from __future__ import annotations

import pytest

from explorer_service_libs.error_handling import ErrorType, ExplorerError
from services.nasa_gateway_service.upstream_routes import (
    UPSTREAM_ROUTES,
    RouteName,
    UpstreamService,
    build_upstream_path,
    build_upstream_query,
    forwarded_query,
)

MARS = UPSTREAM_ROUTES[RouteName.MARS_PHOTOS]
EPIC = UPSTREAM_ROUTES[RouteName.EPIC]
SEARCH = UPSTREAM_ROUTES[RouteName.SEARCH_MEDIA]
APOD = UPSTREAM_ROUTES[RouteName.APOD]


class TestBuildUpstreamQuery:
    def test_mars_defaults_applied(self) -> None:
        values = build_upstream_query(MARS, {"sol": "1000"})

        assert values == {"sol": "1000", "rover": "curiosity", "page": "1"}

    def test_empty_values_count_as_absent(self) -> None:
        values = build_upstream_query(MARS, {"sol": "", "camera": "", "rover": ""})

        assert values == {"rover": "curiosity", "page": "1"}

    def test_whitespace_values_forwarded(self) -> None:
        values = build_upstream_query(MARS, {"sol": "1000", "camera": "   "})

        assert values == {"sol": "1000", "camera": "   ", "rover": "curiosity", "page": "1"}

    def test_unknown_keys_dropped(self) -> None:
        values = build_upstream_query(APOD, {"date": "2024-01-01", "hd": "true"})

        assert values == {"date": "2024-01-01"}

    @pytest.mark.parametrize("q", [None, ""])
    def test_search_requires_query(self, q: str | None) -> None:
        with pytest.raises(ExplorerError) as exc_info:
            build_upstream_query(SEARCH, {"q": q})

        assert exc_info.value.status_code == 400
        assert exc_info.value.error == "Search query is required"
        assert exc_info.value.error_type is ErrorType.CLIENT_INPUT

    def test_whitespace_search_query_is_present(self) -> None:
        values = build_upstream_query(SEARCH, {"q": " "})

        assert values["q"] == " "

    def test_search_defaults(self) -> None:
        values = build_upstream_query(SEARCH, {"q": "apollo"})

        assert forwarded_query(SEARCH, values) == {
            "q": "apollo",
            "media_type": "image",
            "page": "1",
        }

    def test_unknown_rover_rejected(self) -> None:
        with pytest.raises(ExplorerError) as exc_info:
            build_upstream_query(MARS, {"rover": "../../planetary"})

        assert exc_info.value.status_code == 400
        assert exc_info.value.error == "Invalid rover"
        assert "curiosity" in (exc_info.value.details or "")

    def test_malformed_epic_date_rejected(self) -> None:
        with pytest.raises(ExplorerError) as exc_info:
            build_upstream_query(EPIC, {"date": "2024/01/01"})

        assert exc_info.value.error == "Invalid date"


class TestUpstreamPath:
    def test_rover_selects_path_segment(self) -> None:
        values = build_upstream_query(MARS, {"rover": "spirit"})

        assert build_upstream_path(MARS, values) == "/mars-photos/api/v1/rovers/spirit/photos"

    def test_rover_never_forwarded_as_query(self) -> None:
        values = build_upstream_query(MARS, {"rover": "opportunity", "camera": "PANCAM"})

        assert forwarded_query(MARS, values) == {"page": "1", "camera": "PANCAM"}

    def test_epic_date_suffix(self) -> None:
        assert build_upstream_path(EPIC, {}) == "/EPIC/api/natural"
        assert (
            build_upstream_path(EPIC, {"date": "2024-01-15"})
            == "/EPIC/api/natural/date/2024-01-15"
        )
        assert forwarded_query(EPIC, {"date": "2024-01-15"}) == {}


def test_only_search_skips_api_key() -> None:
    keyless = [route.name for route in UPSTREAM_ROUTES.values() if not route.requires_api_key]

    assert keyless == [RouteName.SEARCH_MEDIA]
    assert SEARCH.service is UpstreamService.NASA_IMAGES
