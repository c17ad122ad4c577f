# file: numerus/cache.py
"""
In-memory reference-data cache.

`ReferenceCache` implements `MetadataProvider`. All data lives in one immutable
snapshot that is replaced by a single attribute assignment, so readers never
lock and never observe a half-applied refresh. Refreshes run on a long period
(daily by default) and a failing source keeps its previous data.
"""

from __future__ import annotations

import asyncio
import csv
import logging
import time
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, Mapping

import httpx

from numerus.io.datasets import Source, fetch_source, parse_csv
from numerus.net.http import HttpClientConfig
from numerus.provider import Namespace

if TYPE_CHECKING:
    from numerus.config import NumerusSettings

logger = logging.getLogger(__name__)

DEFAULT_REFRESH_INTERVAL_SECONDS = 86_400

Table = Mapping[str, Mapping[str, str]]


@dataclass(frozen=True, slots=True)
class Snapshot:
    tables: Mapping[str, Table] = field(default_factory=dict)
    refreshed_at: float | None = None


def _freeze(data: Mapping[str, Mapping[str, str]]) -> Table:
    return MappingProxyType({k: MappingProxyType(dict(v)) for k, v in data.items()})


class ReferenceCache:
    def __init__(
        self,
        *,
        sources: Mapping[Namespace, Source] | None = None,
        refresh_interval_seconds: int = DEFAULT_REFRESH_INTERVAL_SECONDS,
        http_config: HttpClientConfig | None = None,
    ) -> None:
        self.sources: dict[Namespace, Source] = {ns: None for ns in Namespace}
        if sources:
            self.sources.update(sources)
        self.refresh_interval_seconds = refresh_interval_seconds
        self._http_config = http_config or HttpClientConfig()
        self._snapshot = Snapshot()

    @classmethod
    def from_settings(cls, settings: NumerusSettings) -> ReferenceCache:
        return cls(
            sources={
                Namespace.COUNTRY: settings.country_source,
                Namespace.NADP: settings.nadp_source,
            },
            refresh_interval_seconds=settings.refresh_interval_seconds,
            http_config=settings.http_config(),
        )

    # -- MetadataProvider -- #

    def get(self, namespace: str, key: str) -> Mapping[str, str] | None:
        table = self._snapshot.tables.get(namespace)
        if table is None:
            return None
        return table.get(key)

    # -- loading -- #

    @property
    def refreshed_at(self) -> float | None:
        return self._snapshot.refreshed_at

    def size(self, namespace: Namespace) -> int:
        return len(self._snapshot.tables.get(namespace.value, {}))

    def is_stale(self) -> bool:
        refreshed_at = self._snapshot.refreshed_at
        if refreshed_at is None:
            return True
        return time.time() - refreshed_at >= self.refresh_interval_seconds

    def load(self, namespace: Namespace, data: Mapping[str, Mapping[str, str]]) -> None:
        """Replace one namespace, leaving the others untouched."""

        self._swap({namespace: data})

    def _swap(self, updates: Mapping[Namespace, Mapping[str, Mapping[str, str]]]) -> None:
        tables = dict(self._snapshot.tables)
        for namespace, data in updates.items():
            tables[namespace.value] = _freeze(data)
        self._snapshot = Snapshot(tables=MappingProxyType(tables), refreshed_at=time.time())

    async def _read(self, namespace: Namespace) -> dict[str, dict[str, str]] | None:
        source = self.sources.get(namespace)
        try:
            text = await fetch_source(source, namespace, http_config=self._http_config)
            data = parse_csv(text, namespace)
        except (OSError, ValueError, csv.Error, httpx.HTTPError) as exc:
            logger.error(
                "Unable to load %s dataset: %s",
                namespace.value,
                exc,
                extra={"dataset": namespace.value, "source": str(source or "packaged")},
            )
            return None
        logger.info("Loaded %d %s entries", len(data), namespace.value)
        return data

    async def refresh(self) -> bool:
        """
        Reload every namespace from its source.

        Returns:
            True if every source loaded. Namespaces whose source failed keep
            their previous data.
        """

        results = await asyncio.gather(*(self._read(ns) for ns in Namespace))
        updates = {ns: data for ns, data in zip(Namespace, results) if data is not None}
        if updates:
            self._swap(updates)
        return len(updates) == len(results)


async def run_refresher(cache: ReferenceCache, *, stop: asyncio.Event | None = None) -> None:
    """
    Refresh `cache` every `refresh_interval_seconds` until `stop` is set or the
    task is cancelled. The first refresh happens immediately.
    """

    stop = stop or asyncio.Event()
    while not stop.is_set():
        await cache.refresh()
        try:
            await asyncio.wait_for(stop.wait(), timeout=cache.refresh_interval_seconds)
        except asyncio.TimeoutError:
            continue
