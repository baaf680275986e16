"""Canonical vehicle record model."""

from __future__ import annotations

from typing import Any

from pydantic import ConfigDict, Field, field_validator, model_validator

from pygovdata._constants import REGIONS
from pygovdata.models._base import GovDataModel, is_sentinel

Number = int | float


class VehicleRecord(GovDataModel):
    """A normalized vehicle from one region's dataset.

    The canonical fields are fixed; region-specific extras (battery
    capacity, tax band, ...) are kept verbatim as extra attributes and
    exposed through :attr:`extras`. Records are immutable.
    """

    model_config = ConfigDict(extra="allow")

    make: str
    """Manufacturer (e.g. ``"Toyota"``)."""
    model: str
    """Model name (e.g. ``"Camry"``)."""
    region: str
    """Region tag the record was fetched for."""
    year: int | None = None
    """Model year."""
    fuel_type: str | None = None
    """Fuel type in the region's own vocabulary."""
    city_mpg: Number | None = Field(default=None, alias="cityMPG")
    highway_mpg: Number | None = Field(default=None, alias="highwayMPG")
    combined_mpg: Number | None = Field(default=None, alias="combinedMPG")
    co2_emissions: Number | None = None
    """CO2 emissions (g/mi for US, g/km elsewhere)."""
    fuel_cost_per_year: Number | None = None
    fuel_consumption: Number | None = None
    """Fuel consumption (L/100km or km/L, region dependent)."""

    @model_validator(mode="before")
    @classmethod
    def _drop_empty_values(cls, values: Any) -> Any:
        if not isinstance(values, dict):
            return values
        return {key: value for key, value in values.items() if not is_sentinel(value)}

    @field_validator("make", "model")
    @classmethod
    def _require_text(cls, value: str) -> str:
        text = value.strip()
        if not text:
            raise ValueError("must be non-empty")
        return text

    @field_validator("region")
    @classmethod
    def _known_region(cls, value: str) -> str:
        if value not in REGIONS:
            raise ValueError(f"unknown region {value!r}")
        return value

    @property
    def extras(self) -> dict[str, Any]:
        """Region-specific attributes outside the canonical field set."""
        return dict(self.model_extra or {})

    def to_index_entry(self) -> dict[str, Any]:
        """Flatten canonical and extra attributes into one search index entry."""
        entry: dict[str, Any] = {
            "make": self.make,
            "model": self.model,
            "year": self.year,
            "fuelType": self.fuel_type,
            "region": self.region,
        }
        entry.update(self.to_document())
        return entry
