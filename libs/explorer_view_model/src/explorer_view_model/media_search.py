"""Summaries of NASA Image and Video Library search results."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class MediaSummary(BaseModel):
    nasa_id: str | None = None
    title: str = "Untitled"
    media_type: str | None = None
    description: str | None = None
    date_created: str | None = None
    center: str | None = None
    keywords: list[str] = Field(default_factory=list)
    preview_url: str | None = None


class MediaSearchSummary(BaseModel):
    total_hits: int = 0
    items: list[MediaSummary] = Field(default_factory=list)
    has_next_page: bool = False


def _summarize_item(item: dict[str, Any]) -> MediaSummary:
    data = item.get("data") or [{}]
    metadata = data[0] if isinstance(data[0], dict) else {}
    links = item.get("links") or []
    preview = links[0].get("href") if links and isinstance(links[0], dict) else None
    return MediaSummary(
        nasa_id=metadata.get("nasa_id"),
        title=metadata.get("title") or "Untitled",
        media_type=metadata.get("media_type"),
        description=metadata.get("description"),
        date_created=metadata.get("date_created"),
        center=metadata.get("center"),
        keywords=list(metadata.get("keywords") or []),
        preview_url=preview,
    )


def summarize_media_search(response: dict[str, Any]) -> MediaSearchSummary:
    collection = response.get("collection") or {}
    items = [item for item in collection.get("items") or [] if isinstance(item, dict)]
    links = collection.get("links") or []
    return MediaSearchSummary(
        total_hits=int((collection.get("metadata") or {}).get("total_hits", len(items))),
        items=[_summarize_item(item) for item in items],
        has_next_page=any(
            isinstance(link, dict) and (link.get("rel") == "next" or "next" in link)
            for link in links
        ),
    )
