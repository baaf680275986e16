"""Ingestion layer.

This package contains the fetch/decode/normalize path that turns
upstream government datasets into :class:`~pygovdata.models.VehicleRecord`
sequences.
"""

from pygovdata.ingestion.archive import extract_csv
from pygovdata.ingestion.normalize import normalize_number, pick_first
from pygovdata.ingestion.tabular import parse_csv
from pygovdata.ingestion.vehicles import normalize_to_vehicle_records

__all__ = [
    "extract_csv",
    "normalize_number",
    "normalize_to_vehicle_records",
    "parse_csv",
    "pick_first",
]
