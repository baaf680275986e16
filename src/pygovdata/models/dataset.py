"""Dataset, summary and marker documents."""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any

from pydantic import Field

from pygovdata._constants import REGIONS
from pygovdata.models._base import GovDataModel, utcnow_iso
from pygovdata.models.vehicle import VehicleRecord


class RegionResult(GovDataModel):
    """Outcome of one region adapter run.

    Fully replaced on every fetch; an empty ``vehicles`` list with an
    explanatory ``notes`` is how a degraded region is reported.
    """

    source: str
    last_updated: str = Field(default_factory=utcnow_iso)
    vehicles: list[VehicleRecord] = Field(default_factory=list)
    api_endpoint: str = ""
    notes: str = ""

    @property
    def vehicle_count(self) -> int:
        return len(self.vehicles)


class Dataset(GovDataModel):
    """Combined snapshot of every region, the unit of cache persistence.

    A region whose adapter failed unexpectedly is kept as ``None``.
    """

    us: RegionResult | None = None
    eu: RegionResult | None = None
    uk: RegionResult | None = None
    japan: RegionResult | None = None
    korea: RegionResult | None = None
    last_updated: str = Field(default_factory=utcnow_iso)
    sources: dict[str, dict[str, Any]] = Field(default_factory=dict)

    def region(self, tag: str) -> RegionResult | None:
        if tag not in REGIONS:
            raise KeyError(tag)
        result: RegionResult | None = getattr(self, tag)
        return result

    def iter_regions(self) -> Iterator[tuple[str, RegionResult | None]]:
        """Yield ``(tag, result)`` pairs in fetch order, including ``None`` entries."""
        for tag in REGIONS:
            yield tag, getattr(self, tag)

    def to_document(self) -> dict[str, Any]:
        # Failed regions stay as explicit nulls in the persisted document.
        document = super().to_document()
        for tag in REGIONS:
            document.setdefault(tag, None)
        return document


class RegionSummary(GovDataModel):
    source: str
    vehicle_count: int
    last_updated: str


class Summary(GovDataModel):
    """Search summary derived from a :class:`Dataset`.

    ``total_vehicles == sum(r.vehicle_count for r in by_region.values())
    == len(search_index)`` always holds.
    """

    last_updated: str
    total_vehicles: int = 0
    by_region: dict[str, RegionSummary] = Field(default_factory=dict)
    by_fuel_type: dict[str, int] = Field(default_factory=dict)
    search_index: list[dict[str, Any]] = Field(default_factory=list)


class UpdateMarker(GovDataModel):
    """Written only after a successful full fetch."""

    timestamp: int
    """Epoch milliseconds of the fetch."""
    date: str
    """ISO-8601 rendering of ``timestamp``."""


class DataInfo(GovDataModel):
    """Diagnostic snapshot of cache freshness."""

    last_updated: str = "Never"
    hours_ago: float = float("inf")
    needs_update: bool = True
    cache_exists: bool = False
    summary_exists: bool = False
