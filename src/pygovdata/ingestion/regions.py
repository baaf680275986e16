"""Per-region fetch strategies.

Every adapter turns (configuration, static source descriptor) into a
:class:`RegionResult`. Failures of any known kind are converted into an
empty result whose ``notes`` say why; unexpected exceptions make
:meth:`RegionAdapter.fetch` return ``None``.
"""

from __future__ import annotations

import json
import logging
from typing import Any, ClassVar
from urllib.parse import parse_qsl, quote, urlsplit, urlunsplit

from pygovdata._constants import DATA_SOURCES, REGION_EU, REGION_JAPAN, REGION_KOREA, REGION_UK, REGION_US, REGIONS
from pygovdata._redact import redact_url
from pygovdata._transport import Transport
from pygovdata.config import GovDataConfig
from pygovdata.exceptions import GovDataConfigError, GovDataError, GovDataFormatError
from pygovdata.ingestion.archive import decode_text, extract_csv
from pygovdata.ingestion.envelopes import extract_items
from pygovdata.ingestion.tabular import parse_csv
from pygovdata.ingestion.vehicles import (
    EXTRA_FIELDS,
    GENERIC_FIELDS,
    US_FIELDS,
    FieldSpec,
    normalize_to_vehicle_records,
)
from pygovdata.models.dataset import RegionResult
from pygovdata.models.vehicle import VehicleRecord

_logger = logging.getLogger(__name__)


def url_kind(url: str) -> str | None:
    """Classify a source URL by path suffix: ``"zip"``, ``"csv"`` or ``None``."""
    path = urlsplit(url).path.lower()
    if path.endswith(".zip"):
        return "zip"
    if path.endswith(".csv"):
        return "csv"
    return None


def with_service_key(url: str, service_key: str | None) -> str:
    """Append ``serviceKey`` unless *url* already carries one.

    The existing query string is left untouched.
    """
    if not service_key:
        return url
    parts = urlsplit(url)
    pairs = parse_qsl(parts.query, keep_blank_values=True)
    if any(key.lower() == "servicekey" for key, _ in pairs):
        return url
    # Pre-encoded keys pass through unchanged.
    param = f"serviceKey={quote(service_key, safe='%')}"
    query = f"{parts.query}&{param}" if parts.query else param
    return urlunsplit(parts._replace(query=query))


class RegionAdapter:
    """Base fetch strategy for one region."""

    region: ClassVar[str]
    #: Note used when the region needs a URL and none is configured.
    missing_url_note: ClassVar[str] = ""

    def __init__(self, config: GovDataConfig, transport: Transport) -> None:
        self._config = config
        self._transport = transport

    @property
    def descriptor(self) -> dict[str, Any]:
        return DATA_SOURCES[self.region]

    def source_url(self) -> str | None:
        raise NotImplementedError

    async def load_vehicles(self, url: str) -> list[VehicleRecord]:
        raise NotImplementedError

    def _result(self, vehicles: list[VehicleRecord], *, api_endpoint: str, notes: str) -> RegionResult:
        return RegionResult(
            source=str(self.descriptor.get("source", self.region)),
            vehicles=vehicles,
            api_endpoint=api_endpoint,
            notes=notes,
        )

    async def fetch_region(self) -> RegionResult:
        """Fetch and normalize this region, degrading known failures to an empty result."""
        url = self.source_url()
        reference = str(self.descriptor.get("description", ""))
        if not url:
            _logger.info("Skipping %s data: no source configured", self.region)
            return self._result([], api_endpoint="", notes=self.missing_url_note or reference)

        safe_url = redact_url(url)
        _logger.info("Fetching %s data from %s", self.region, safe_url)
        try:
            vehicles = await self.load_vehicles(url)
        except GovDataError as exc:
            _logger.warning("No %s data: %s", self.region, exc)
            return self._result([], api_endpoint=safe_url, notes=f"No data fetched: {exc}")

        _logger.info("Fetched %d %s vehicles", len(vehicles), self.region)
        return self._result(vehicles, api_endpoint=safe_url, notes=str(self.descriptor.get("notes", reference)))

    async def fetch(self) -> RegionResult | None:
        """Run :meth:`fetch_region`; ``None`` on unexpected failure."""
        try:
            return await self.fetch_region()
        except Exception:
            _logger.exception("Unexpected error fetching %s data", self.region)
            return None


class CsvRegionAdapter(RegionAdapter):
    """Region published as a plain or zipped CSV file."""

    fields: ClassVar[tuple[FieldSpec, ...]] = GENERIC_FIELDS
    extras: ClassVar[tuple[FieldSpec, ...]] = EXTRA_FIELDS
    name_hint: ClassVar[str | None] = None

    async def load_vehicles(self, url: str) -> list[VehicleRecord]:
        kind = url_kind(url)
        if kind is None:
            raise GovDataConfigError(f"invalid URL (expected .csv or .zip): {redact_url(url)}")

        payload = await self._transport.fetch_bytes(url)
        text = extract_csv(payload, self.name_hint) if kind == "zip" else decode_text(payload)
        rows = parse_csv(text)
        _logger.debug("Parsed %d %s rows", len(rows), self.region)
        return normalize_to_vehicle_records(
            rows,
            self.region,
            fields=self.fields,
            extras=self.extras,
            limit=self._config.max_vehicles_per_region,
        )


class USAdapter(CsvRegionAdapter):
    region = REGION_US
    fields = US_FIELDS
    extras = ()
    name_hint = "vehicles"

    def source_url(self) -> str | None:
        return self._config.us_url


class EUAdapter(CsvRegionAdapter):
    region = REGION_EU

    def source_url(self) -> str | None:
        return self._config.eu_url


class UKAdapter(CsvRegionAdapter):
    region = REGION_UK
    missing_url_note = "UK source not configured; set GOVDATA_UK_URL to a CSV or zip export"

    def source_url(self) -> str | None:
        return self._config.uk_url


class JapanAdapter(CsvRegionAdapter):
    region = REGION_JAPAN
    missing_url_note = "Japan source not configured; set GOVDATA_JAPAN_URL to a CSV or zip export"

    def source_url(self) -> str | None:
        return self._config.japan_url


class KoreaAdapter(RegionAdapter):
    """Region served by a JSON API with an optional service key."""

    region = REGION_KOREA
    missing_url_note = "Korea source not configured; set GOVDATA_KOREA_URL (and GOVDATA_KOREA_SERVICE_KEY)"

    def source_url(self) -> str | None:
        url = self._config.korea_url
        if not url:
            return None
        if not self._config.korea_service_key:
            _logger.warning("GOVDATA_KOREA_SERVICE_KEY is not set; the Korea API may reject the request")
        return with_service_key(url, self._config.korea_service_key)

    async def load_vehicles(self, url: str) -> list[VehicleRecord]:
        payload = await self._transport.fetch_bytes(url)
        try:
            document = json.loads(decode_text(payload))
        except json.JSONDecodeError as exc:
            raise GovDataFormatError(f"Invalid JSON from {redact_url(url)}: {exc.msg}") from exc

        items = extract_items(document)
        _logger.debug("Resolved %d %s items", len(items), self.region)
        return normalize_to_vehicle_records(
            items,
            self.region,
            limit=self._config.max_vehicles_per_region,
        )


ADAPTERS: dict[str, type[RegionAdapter]] = {
    REGION_US: USAdapter,
    REGION_EU: EUAdapter,
    REGION_UK: UKAdapter,
    REGION_JAPAN: JapanAdapter,
    REGION_KOREA: KoreaAdapter,
}


def build_adapters(config: GovDataConfig, transport: Transport) -> dict[str, RegionAdapter]:
    """Instantiate every adapter in fetch order."""
    return {region: ADAPTERS[region](config, transport) for region in REGIONS}
