"""Favorited APOD dates for the current session."""

from __future__ import annotations


class FavoritesStore:
    def __init__(self, dates: list[str] | None = None) -> None:
        self._dates: set[str] = set(dates or ())

    def contains(self, date: str) -> bool:
        return date in self._dates

    def add(self, date: str) -> None:
        self._dates.add(date)

    def remove(self, date: str) -> None:
        self._dates.discard(date)

    def toggle(self, date: str) -> bool:
        """Flip ``date``; returns whether it is now a favorite."""
        if date in self._dates:
            self._dates.remove(date)
            return False
        self._dates.add(date)
        return True

    def dates(self) -> list[str]:
        return sorted(self._dates)

    def __len__(self) -> int:
        return len(self._dates)
