from __future__ import annotations

import pytest

from pygovdata.models import Dataset, RegionResult, VehicleRecord
from pygovdata.summary import generate_summary, search_index


def _region(source: str, region: str, *vehicles: tuple[str, str, str | None]) -> RegionResult:
    return RegionResult(
        source=source,
        last_updated="2026-01-01T00:00:00.000Z",
        vehicles=[
            VehicleRecord(make=make, model=model, fuel_type=fuel, region=region) for make, model, fuel in vehicles
        ],
    )


def _dataset() -> Dataset:
    return Dataset(
        us=_region("EPA", "us", ("Toyota", "Camry", "Hybrid"), ("Honda", "Civic", "Gasoline")),
        eu=None,
        uk=_region("VCA", "uk", ("Land Rover", "Range Rover", "Hybrid")),
        japan=_region("MLIT", "japan"),
        korea=_region("MOLIT", "korea", ("Hyundai", "Ioniq 5", None), ("Kia", "EV6", "Electric")),
        last_updated="2026-01-01T00:00:00.000Z",
    )


@pytest.mark.parametrize(
    "dataset",
    [
        Dataset(last_updated="2026-01-01T00:00:00.000Z"),
        Dataset(japan=_region("MLIT", "japan"), last_updated="2026-01-01T00:00:00.000Z"),
        _dataset(),
    ],
)
def test_summary_counts_are_consistent(dataset: Dataset) -> None:
    summary = generate_summary(dataset)

    assert summary.total_vehicles == len(summary.search_index)
    assert sum(r.vehicle_count for r in summary.by_region.values()) == summary.total_vehicles
    assert sum(summary.by_fuel_type.values()) == summary.total_vehicles


def test_summary_skips_null_regions_and_counts_unknown_fuel() -> None:
    summary = generate_summary(_dataset())

    assert list(summary.by_region) == ["us", "uk", "japan", "korea"]
    assert summary.by_region["japan"].vehicle_count == 0
    assert summary.by_region["us"].source == "EPA"
    assert summary.by_fuel_type == {"Hybrid": 2, "Gasoline": 1, "Unknown": 1, "Electric": 1}
    assert summary.last_updated == "2026-01-01T00:00:00.000Z"


def test_search_index_follows_region_then_vehicle_order() -> None:
    summary = generate_summary(_dataset())

    assert [(e["region"], e["model"]) for e in summary.search_index] == [
        ("us", "Camry"),
        ("us", "Civic"),
        ("uk", "Range Rover"),
        ("korea", "Ioniq 5"),
        ("korea", "EV6"),
    ]


@pytest.mark.parametrize("query", ["", "   ", None])
def test_blank_query_matches_nothing(query: str | None) -> None:
    assert search_index(generate_summary(_dataset()).search_index, query) == []


def test_search_is_case_insensitive_substring_on_any_field() -> None:
    index = generate_summary(_dataset()).search_index

    assert [e["make"] for e in search_index(index, "TOYOTA")] == ["Toyota"]
    assert [e["model"] for e in search_index(index, "rover")] == ["Range Rover"]
    assert [e["model"] for e in search_index(index, "hybrid")] == ["Camry", "Range Rover"]
    assert [e["model"] for e in search_index(index, "korea")] == ["Ioniq 5", "EV6"]
    assert search_index(index, "tesla") == []


def test_search_ignores_non_searchable_fields() -> None:
    index = [{"make": "Kia", "model": "EV6", "region": "korea", "notes": "toyota rival"}]

    assert search_index(index, "toyota") == []
