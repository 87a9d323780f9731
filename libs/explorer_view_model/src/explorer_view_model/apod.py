"""Astronomy Picture of the Day results.

The APOD route answers with one object for a date and with a list when
``count`` is given. ``parse_apod_result`` turns that into a tagged result so
callers branch on the shape instead of guessing.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, ConfigDict


class ApodEntry(BaseModel):
    model_config = ConfigDict(extra="allow")

    date: str
    title: str
    url: str | None = None
    media_type: str = "image"
    explanation: str = ""
    hdurl: str | None = None
    copyright: str | None = None

    @property
    def is_video(self) -> bool:
        return self.media_type == "video"

    @property
    def best_image_url(self) -> str | None:
        return self.hdurl or self.url


@dataclass(frozen=True)
class ApodSingle:
    entry: ApodEntry


@dataclass(frozen=True)
class ApodMultiple:
    entries: list[ApodEntry]


ApodResult = ApodSingle | ApodMultiple


def parse_apod_result(payload: Any) -> ApodResult:
    """
    Raises:
        ValueError: ``payload`` is neither an object nor a list of objects
    """
    if isinstance(payload, dict):
        return ApodSingle(ApodEntry.model_validate(payload))
    if isinstance(payload, list):
        return ApodMultiple([ApodEntry.model_validate(item) for item in payload])
    raise ValueError(f"Unexpected APOD payload type: {type(payload).__name__}")
