"""Search summary generation and lookup."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from pygovdata.models.dataset import Dataset, RegionSummary, Summary

UNKNOWN_FUEL_TYPE = "Unknown"

_SEARCH_FIELDS: tuple[str, ...] = ("make", "model", "fuelType", "region")


def generate_summary(dataset: Dataset) -> Summary:
    """Build the summary for *dataset* in a single pass.

    Regions are visited in fetch order and vehicles in their dataset
    order, which fixes the order of ``search_index``. ``None`` regions
    are skipped.
    """
    by_region: dict[str, RegionSummary] = {}
    by_fuel_type: dict[str, int] = {}
    search_index: list[dict[str, Any]] = []

    for tag, result in dataset.iter_regions():
        if result is None:
            continue
        by_region[tag] = RegionSummary(
            source=result.source,
            vehicle_count=result.vehicle_count,
            last_updated=result.last_updated,
        )
        for vehicle in result.vehicles:
            search_index.append(vehicle.to_index_entry())
            fuel_type = vehicle.fuel_type or UNKNOWN_FUEL_TYPE
            by_fuel_type[fuel_type] = by_fuel_type.get(fuel_type, 0) + 1

    return Summary(
        last_updated=dataset.last_updated,
        total_vehicles=len(search_index),
        by_region=by_region,
        by_fuel_type=by_fuel_type,
        search_index=search_index,
    )


def _matches(entry: Mapping[str, Any], needle: str) -> bool:
    for field in _SEARCH_FIELDS:
        value = entry.get(field)
        if isinstance(value, str) and needle in value.lower():
            return True
    return False


def search_index(entries: Iterable[Mapping[str, Any]], query: str | None) -> list[dict[str, Any]]:
    """Case-insensitive substring match on make, model, fuel type and region.

    A blank query matches nothing. Results keep index order.
    """
    needle = (query or "").strip().lower()
    if not needle:
        return []
    return [dict(entry) for entry in entries if _matches(entry, needle)]
