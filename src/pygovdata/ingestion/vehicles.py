"""Vehicle record normalization.

Two explicit column-mapping tables are kept side by side: the EPA
schema used by the US dataset and a generic international schema used
by every other region. They name conceptually similar fields with
different upstream columns and are intentionally not unified.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from pydantic import ValidationError

from pygovdata._constants import DEFAULT_MAX_VEHICLES_PER_REGION
from pygovdata.ingestion.normalize import normalize_number, pick_first, safe_int, safe_str
from pygovdata.models.vehicle import VehicleRecord

_logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class FieldSpec:
    """One logical record field and the upstream columns that may carry it."""

    name: str
    keys: tuple[str, ...]
    coerce: Callable[[Any], Any]


US_FIELDS: tuple[FieldSpec, ...] = (
    FieldSpec("make", ("make", "Make"), safe_str),
    FieldSpec("model", ("model", "Model", "baseModel"), safe_str),
    FieldSpec("year", ("year", "Year"), safe_int),
    FieldSpec("fuel_type", ("fuelType", "fuelType1", "Fuel Type"), safe_str),
    FieldSpec("city_mpg", ("city08", "cityMPG"), normalize_number),
    FieldSpec("highway_mpg", ("highway08", "highwayMPG"), normalize_number),
    FieldSpec("combined_mpg", ("comb08", "combinedMPG"), normalize_number),
    FieldSpec("fuel_cost_per_year", ("fuelCost08", "fuelCostPerYear"), normalize_number),
    FieldSpec("co2_emissions", ("co2TailpipeGpm", "co2", "co2Emissions"), normalize_number),
)
"""EPA ``vehicles.csv`` columns."""

GENERIC_FIELDS: tuple[FieldSpec, ...] = (
    FieldSpec("make", ("make", "Make", "Mk", "Mh", "Manufacturer", "brand", "Brand"), safe_str),
    FieldSpec("model", ("model", "Model", "Cn", "Commercial name", "Model name", "modelName"), safe_str),
    FieldSpec("year", ("year", "Year", "Model year", "modelYear"), safe_int),
    FieldSpec("fuel_type", ("fuelType", "Fuel type", "Ft", "fuel", "Fuel"), safe_str),
    FieldSpec(
        "co2_emissions",
        ("co2", "CO2", "co2Emissions", "Ewltp (g/km)", "Ewltp", "Enedc (g/km)", "Enedc", "CO2 (g/km)"),
        normalize_number,
    ),
    FieldSpec(
        "fuel_consumption",
        ("fuelConsumption", "Fuel consumption", "Fuel consumption ", "fuel_consumption", "fuelEconomy"),
        normalize_number,
    ),
)
"""Generic international columns (EEA, VCA, MLIT, MOLIT exports)."""

EXTRA_FIELDS: tuple[FieldSpec, ...] = (
    FieldSpec("batteryCapacity", ("batteryCapacity", "Battery capacity", "battery_capacity"), normalize_number),
    FieldSpec("range", ("range", "Electric range (km)", "Range"), normalize_number),
    FieldSpec("efficiency", ("efficiency", "Efficiency"), normalize_number),
    FieldSpec("taxBand", ("taxBand", "Tax band", "VED band"), safe_str),
    FieldSpec("annualTax", ("annualTax", "Annual tax"), normalize_number),
    FieldSpec("euroStandard", ("euroStandard", "Euro standard", "Ie"), safe_str),
    FieldSpec("emissionStandard", ("emissionStandard", "Emission standard"), safe_str),
)
"""Region-specific extras passed through when present."""


def _apply_fields(row: Mapping[str, Any], fields: Iterable[FieldSpec]) -> dict[str, Any]:
    values: dict[str, Any] = {}
    for spec in fields:
        value = spec.coerce(pick_first(row, spec.keys))
        if value is not None:
            values[spec.name] = value
    return values


def normalize_to_vehicle_records(
    rows: Iterable[Mapping[str, Any]],
    region: str,
    *,
    fields: tuple[FieldSpec, ...] = GENERIC_FIELDS,
    extras: tuple[FieldSpec, ...] = EXTRA_FIELDS,
    limit: int | None = DEFAULT_MAX_VEHICLES_PER_REGION,
) -> list[VehicleRecord]:
    """Map raw rows onto :class:`VehicleRecord` for *region*.

    Rows lacking make or model are dropped. Output is truncated to
    *limit* records (``None`` for no cap).
    """
    vehicles: list[VehicleRecord] = []
    if limit is not None and limit <= 0:
        return vehicles

    dropped = 0
    for row in rows:
        values = _apply_fields(row, fields)
        if not values.get("make") or not values.get("model"):
            dropped += 1
            continue
        for key, value in _apply_fields(row, extras).items():
            values.setdefault(key, value)
        try:
            vehicles.append(VehicleRecord(region=region, **values))
        except ValidationError as exc:
            dropped += 1
            _logger.debug("Dropping %s row: %s", region, exc.errors()[0].get("msg", exc))
            continue
        if limit is not None and len(vehicles) >= limit:
            break

    if dropped:
        _logger.debug("Dropped %d %s rows without make/model", dropped, region)
    return vehicles
