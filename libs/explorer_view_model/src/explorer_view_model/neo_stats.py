"""Derived statistics for the Near Earth Object feed.

``derive_neo_stats`` is a pure function of one NEO feed payload: calling it
twice on the same payload gives equal results.
"""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field

NearEarthObject = Mapping[str, Any]

HIGH_DANGER_DIAMETER_M = 1000
MEDIUM_DANGER_DIAMETER_M = 500


class DangerLevel(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class DailyNEOCount(BaseModel):
    """One chart row per feed date."""

    date: str
    hazardous: int
    safe: int
    total: int


class FastestNEO(BaseModel):
    neo: dict[str, Any]
    speed_km_s: float


class NEOStatsView(BaseModel):
    total: int = 0
    hazardous: int = 0
    safe: int = 0
    largest: dict[str, Any] | None = None
    fastest: FastestNEO | None = None
    chart_data: list[DailyNEOCount] = Field(default_factory=list)


def max_diameter_m(neo: NearEarthObject) -> float:
    """``estimated_diameter.meters.estimated_diameter_max``, 0 when missing."""
    try:
        value = neo["estimated_diameter"]["meters"]["estimated_diameter_max"]
    except (KeyError, TypeError):
        return 0.0
    return float(value) if isinstance(value, (int, float)) else 0.0


def relative_velocity_km_s(neo: NearEarthObject) -> float:
    """First close approach's speed in km/s, 0 when missing or unparseable."""
    try:
        raw = neo["close_approach_data"][0]["relative_velocity"]["kilometers_per_second"]
        return float(raw)
    except (KeyError, IndexError, TypeError, ValueError):
        return 0.0


def is_hazardous(neo: NearEarthObject) -> bool:
    return bool(neo.get("is_potentially_hazardous_asteroid", False))


def classify_danger(neo: NearEarthObject) -> DangerLevel:
    """Rules are checked in order; the first match wins."""
    hazardous = is_hazardous(neo)
    size = max_diameter_m(neo)
    if hazardous and size > HIGH_DANGER_DIAMETER_M:
        return DangerLevel.HIGH
    if hazardous or size > MEDIUM_DANGER_DIAMETER_M:
        return DangerLevel.MEDIUM
    return DangerLevel.LOW


def flatten_neos(neo_response: Mapping[str, Any]) -> list[NearEarthObject]:
    """All objects from ``near_earth_objects`` in payload order."""
    by_date = neo_response.get("near_earth_objects")
    if not isinstance(by_date, Mapping):
        return []
    return [neo for neos in by_date.values() for neo in neos or ()]


def derive_neo_stats(neo_response: Mapping[str, Any]) -> NEOStatsView:
    by_date = neo_response.get("near_earth_objects")
    if not isinstance(by_date, Mapping):
        return NEOStatsView()

    chart_data: list[DailyNEOCount] = []
    for date, neos in by_date.items():
        neos = neos or []
        hazardous = sum(1 for neo in neos if is_hazardous(neo))
        chart_data.append(
            DailyNEOCount(
                date=date, hazardous=hazardous, safe=len(neos) - hazardous, total=len(neos)
            )
        )

    objects = flatten_neos(neo_response)
    largest: NearEarthObject | None = None
    largest_size = 0.0
    fastest: NearEarthObject | None = None
    fastest_speed = 0.0
    for neo in objects:
        # Strict comparison keeps the first-seen object on ties
        size = max_diameter_m(neo)
        if size > largest_size:
            largest, largest_size = neo, size
        speed = relative_velocity_km_s(neo)
        if speed > fastest_speed:
            fastest, fastest_speed = neo, speed

    hazardous_total = sum(1 for neo in objects if is_hazardous(neo))
    return NEOStatsView(
        total=len(objects),
        hazardous=hazardous_total,
        safe=len(objects) - hazardous_total,
        largest=dict(largest) if largest is not None else None,
        fastest=(
            FastestNEO(neo=dict(fastest), speed_km_s=fastest_speed)
            if fastest is not None
            else None
        ),
        chart_data=chart_data,
    )
