"""
Session cache of gateway results, one entry per (route, query) pair.

Entries are created on first request and replaced on every refetch; they are
dropped only by ``clear()``. A failed refetch keeps the last good data next to
the new error message. The store tracks the most recently requested key per
route so that a slow response for an older key is cached but does not reach
observers.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from typing import Any

from explorer_service_libs.logging_utils import create_service_logger
from explorer_view_model.gateway_client import GatewayClient, GatewayRequestError, QueryParams
from explorer_view_model.routes import GatewayRoute

logger = create_service_logger("explorer_view_model.query_store")


@dataclass(frozen=True)
class QueryKey:
    route: GatewayRoute
    params: tuple[tuple[str, str], ...] = ()

    @classmethod
    def build(cls, route: GatewayRoute, query: QueryParams | None = None) -> QueryKey:
        """Normalize ``query``: absent and empty values are dropped, order is ignored."""
        params = {
            name: str(value)
            for name, value in (query or {}).items()
            if value is not None and str(value).strip()
        }
        return cls(route=route, params=tuple(sorted(params.items())))

    @property
    def query(self) -> dict[str, str]:
        return dict(self.params)


@dataclass(frozen=True)
class QueryCacheEntry:
    key: QueryKey
    data: Any = None
    has_data: bool = False
    loading: bool = False
    error: str | None = None
    updated_at: datetime | None = None

    @property
    def is_fresh(self) -> bool:
        """Holds data from a successful call and no newer error."""
        return self.has_data and self.error is None


Observer = Callable[[QueryCacheEntry], None]


class QueryStore:
    """Explicit per-session cache in front of a ``GatewayClient``."""

    def __init__(self, client: GatewayClient) -> None:
        self._client = client
        self._entries: dict[QueryKey, QueryCacheEntry] = {}
        self._latest: dict[GatewayRoute, QueryKey] = {}
        self._observers: list[Observer] = []

    def subscribe(self, observer: Observer) -> Callable[[], None]:
        """Register ``observer``; the returned callable unregisters it."""
        self._observers.append(observer)

        def unsubscribe() -> None:
            if observer in self._observers:
                self._observers.remove(observer)

        return unsubscribe

    def get(
        self, route: GatewayRoute, query: QueryParams | None = None
    ) -> QueryCacheEntry | None:
        return self._entries.get(QueryKey.build(route, query))

    def current(self, route: GatewayRoute) -> QueryCacheEntry | None:
        """Entry for the most recently requested key on ``route``."""
        key = self._latest.get(route)
        return self._entries.get(key) if key is not None else None

    def clear(self) -> None:
        self._entries.clear()
        self._latest.clear()

    async def fetch(
        self, route: GatewayRoute, query: QueryParams | None = None
    ) -> QueryCacheEntry:
        """Return the cached entry when fresh, otherwise call the gateway."""
        key = QueryKey.build(route, query)
        self._latest[route] = key
        entry = self._entries.get(key)
        if entry is not None and entry.is_fresh:
            return entry
        return await self._load(key)

    async def refetch(
        self, route: GatewayRoute, query: QueryParams | None = None
    ) -> QueryCacheEntry:
        """Always call the gateway, replacing the entry."""
        key = QueryKey.build(route, query)
        self._latest[route] = key
        return await self._load(key)

    async def _load(self, key: QueryKey) -> QueryCacheEntry:
        previous = self._entries.get(key) or QueryCacheEntry(key=key)
        self._store(replace(previous, loading=True))

        try:
            data = await self._client.fetch(key.route, key.query)
        except GatewayRequestError as e:
            logger.info("Query failed", route=key.route.value, error=e.message)
            # Last-known-good data stays visible next to the error
            entry = replace(
                self._entries.get(key, previous),
                loading=False,
                error=e.message,
            )
        else:
            entry = QueryCacheEntry(
                key=key,
                data=data,
                has_data=True,
                updated_at=datetime.now(timezone.utc),
            )

        self._store(entry)
        return entry

    def _store(self, entry: QueryCacheEntry) -> None:
        self._entries[entry.key] = entry
        if self._latest.get(entry.key.route) != entry.key:
            logger.debug("Ignoring response for superseded query", route=entry.key.route.value)
            return
        self._notify(entry)

    def _notify(self, entry: QueryCacheEntry) -> None:
        for observer in list(self._observers):
            observer(entry)
