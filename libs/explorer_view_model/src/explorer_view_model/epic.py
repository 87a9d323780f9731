"""EPIC (Earth Polychromatic Imaging Camera) results and archive image URLs."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any
from urllib.parse import urlencode

from explorer_view_model.config import settings

EPIC_ARCHIVE_URL = "https://api.nasa.gov/EPIC/archive/natural"


def epic_image_url(image: dict[str, Any], api_key: str | None = None) -> str:
    """Archive PNG URL for one EPIC image record.

    The archive path is built from the image's own capture date
    (``"2024-01-15 00:13:03"`` becomes ``2024/01/15``), not from the date the
    user asked for, so "most recent" results resolve correctly. The key
    defaults to ``EXPLORER_NASA_API_KEY``.
    """
    day = str(image["date"]).split(" ")[0]
    return (
        f"{EPIC_ARCHIVE_URL}/{day.replace('-', '/')}/png/{image['image']}.png"
        f"?{urlencode({'api_key': api_key or settings.NASA_API_KEY.get_secret_value()})}"
    )


@dataclass(frozen=True)
class EpicImages:
    """A successful EPIC response; an empty list is still a success."""

    images: list[dict[str, Any]] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.images

    @classmethod
    def from_payload(cls, payload: Any) -> EpicImages:
        if not isinstance(payload, list):
            raise ValueError(f"Unexpected EPIC payload type: {type(payload).__name__}")
        return cls(images=[item for item in payload if isinstance(item, dict)])

    def image_urls(self, api_key: str | None = None) -> list[str]:
        return [epic_image_url(image, api_key) for image in self.images]
