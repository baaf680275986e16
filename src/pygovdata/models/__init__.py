"""Typed documents produced and persisted by pygovdata."""

from pygovdata.models.dataset import DataInfo, Dataset, RegionResult, RegionSummary, Summary, UpdateMarker
from pygovdata.models.vehicle import VehicleRecord

__all__ = [
    "DataInfo",
    "Dataset",
    "RegionResult",
    "RegionSummary",
    "Summary",
    "UpdateMarker",
    "VehicleRecord",
]
