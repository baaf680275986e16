"""High-level async client for the government vehicle data pipeline."""

from __future__ import annotations

import asyncio
import contextlib
import copy
import logging
import time
from collections.abc import Callable
from datetime import UTC, datetime
from typing import Any

import aiohttp

from pygovdata._constants import DATA_SOURCES, REGION_EU, REGION_JAPAN, REGION_KOREA, REGION_UK, REGION_US, REGIONS
from pygovdata._transport import HttpTransport, Transport
from pygovdata.config import GovDataConfig
from pygovdata.exceptions import GovDataError
from pygovdata.ingestion.regions import RegionAdapter, build_adapters
from pygovdata.models.dataset import DataInfo, Dataset, RegionResult, Summary, UpdateMarker
from pygovdata.state import policy
from pygovdata.state.store import DATASET, SUMMARY, CacheStore, JsonFileCacheStore
from pygovdata.summary import generate_summary, search_index

_logger = logging.getLogger(__name__)


def _now_ms() -> int:
    """Current epoch timestamp in milliseconds."""
    return int(time.time() * 1000)


def _iso_from_ms(timestamp_ms: int) -> str:
    moment = datetime.fromtimestamp(timestamp_ms / 1000, tz=UTC)
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")


class GovDataClient:
    """Fetch, cache and search government fuel-economy datasets.

    Usage::

        async with GovDataClient(GovDataConfig.from_env()) as client:
            dataset = await client.get_data()
            hits = client.search("toyota")

    A caller-supplied ``transport`` (any object with ``fetch_bytes``) or
    ``store`` replaces the aiohttp transport and the JSON file store.
    """

    def __init__(
        self,
        config: GovDataConfig | None = None,
        *,
        session: aiohttp.ClientSession | None = None,
        transport: Transport | None = None,
        store: CacheStore | None = None,
        clock: Callable[[], int] = _now_ms,
    ) -> None:
        self._config = config or GovDataConfig()
        self._external_session = session is not None
        self._http_session = session
        self._transport: Transport | None = transport
        self._store: CacheStore = store if store is not None else JsonFileCacheStore(self._config.cache_dir)
        self._clock = clock
        self._adapters: dict[str, RegionAdapter] = {}
        if transport is not None:
            self._adapters = build_adapters(self._config, transport)
        self._update_lock = asyncio.Lock()
        self._inflight: asyncio.Task[Dataset] | None = None

    @property
    def config(self) -> GovDataConfig:
        return self._config

    @property
    def store(self) -> CacheStore:
        return self._store

    # ------------------------------------------------------------------
    # Context manager lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> GovDataClient:
        if self._transport is None:
            if self._http_session is None:
                self._http_session = aiohttp.ClientSession()
            self._transport = HttpTransport(self._config, self._http_session)
            self._adapters = build_adapters(self._config, self._transport)
        return self

    async def __aexit__(self, *exc: Any) -> None:
        if self._inflight is not None and not self._inflight.done():
            self._inflight.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await self._inflight
        if not self._external_session and self._http_session is not None:
            await self._http_session.close()
            self._http_session = None
            self._transport = None
            self._adapters = {}

    def _require_adapters(self) -> dict[str, RegionAdapter]:
        if not self._adapters:
            raise GovDataError("Client not started; use 'async with GovDataClient(...)' or pass a transport")
        return self._adapters

    # ------------------------------------------------------------------
    # Region fetches
    # ------------------------------------------------------------------

    async def fetch_region(self, region: str) -> RegionResult | None:
        """Run a single region adapter (``None`` on unexpected failure)."""
        adapters = self._require_adapters()
        if region not in adapters:
            raise KeyError(region)
        return await adapters[region].fetch()

    async def fetch_us_data(self) -> RegionResult | None:
        return await self.fetch_region(REGION_US)

    async def fetch_eu_data(self) -> RegionResult | None:
        return await self.fetch_region(REGION_EU)

    async def fetch_uk_data(self) -> RegionResult | None:
        return await self.fetch_region(REGION_UK)

    async def fetch_japan_data(self) -> RegionResult | None:
        return await self.fetch_region(REGION_JAPAN)

    async def fetch_korea_data(self) -> RegionResult | None:
        return await self.fetch_region(REGION_KOREA)

    # ------------------------------------------------------------------
    # Aggregation
    # ------------------------------------------------------------------

    async def fetch_all_data(self) -> Dataset:
        """Fetch every region, persist the dataset and summary, then the marker.

        Concurrent callers share the fetch already in progress.
        """
        async with self._update_lock:
            task = self._inflight
            if task is None or task.done():
                task = asyncio.ensure_future(self._fetch_all_data())
                self._inflight = task
            else:
                _logger.debug("Update already in progress; joining it")
        return await asyncio.shield(task)

    async def _fetch_all_data(self) -> Dataset:
        adapters = self._require_adapters()
        _logger.info("Starting government data fetch")

        results: dict[str, RegionResult | None] = {}
        for region in REGIONS:
            results[region] = await adapters[region].fetch()

        now_ms = self._clock()
        dataset = Dataset(
            **results,
            last_updated=_iso_from_ms(now_ms),
            sources=copy.deepcopy(DATA_SOURCES),
        )
        summary = generate_summary(dataset)

        saved = self._store.save(dataset)
        saved = self._store.save_summary(summary) and saved
        if saved:
            self._store.save_marker(UpdateMarker(timestamp=now_ms, date=_iso_from_ms(now_ms)))
        else:
            _logger.warning("Cache not fully written; update marker left untouched")

        _logger.info(
            "Government data fetch completed: %d vehicles across %d regions",
            summary.total_vehicles,
            len(summary.by_region),
        )
        return dataset

    def generate_summary(self, dataset: Dataset) -> Summary:
        """Build the search summary for *dataset* (no I/O)."""
        return generate_summary(dataset)

    # ------------------------------------------------------------------
    # Exposed operations
    # ------------------------------------------------------------------

    def needs_update(self) -> bool:
        """True when the cache is missing, unreadable or older than the update interval."""
        marker = self._store.load_marker()
        return policy.needs_update(marker, self._clock(), self._config.update_interval_ms)

    async def get_data(self) -> Dataset:
        """Return the cached dataset if fresh, otherwise refetch first."""
        if self.needs_update():
            _logger.info("Data needs update, fetching fresh data")
            return await self.fetch_all_data()

        cached = self._store.load()
        if cached is None:
            _logger.warning("Update marker is fresh but the cached dataset is unreadable; refetching")
            return await self.fetch_all_data()
        _logger.debug("Using cached data from %s", cached.last_updated)
        return cached

    async def force_update(self) -> Dataset:
        """Unconditionally refetch every region."""
        _logger.info("Forcing data update")
        return await self.fetch_all_data()

    def get_summary(self) -> Summary | None:
        return self._store.load_summary()

    def get_data_info(self) -> DataInfo:
        """Freshness diagnostics for the cached documents."""
        marker = self._store.load_marker()
        cache_exists = self._store.exists(DATASET)
        summary_exists = self._store.exists(SUMMARY)
        if marker is None:
            return DataInfo(cache_exists=cache_exists, summary_exists=summary_exists)

        now_ms = self._clock()
        return DataInfo(
            last_updated=marker.date,
            hours_ago=policy.hours_ago(marker, now_ms),
            needs_update=policy.needs_update(marker, now_ms, self._config.update_interval_ms),
            cache_exists=cache_exists,
            summary_exists=summary_exists,
        )

    def search(self, query: str | None) -> list[dict[str, Any]]:
        """Substring search over the cached summary's index."""
        if not (query or "").strip():
            return []
        summary = self._store.load_summary()
        if summary is None:
            return []
        return search_index(summary.search_index, query)
