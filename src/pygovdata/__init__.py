"""pygovdata - Async fetch/normalize/cache/search pipeline for government vehicle data."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pygovdata")
except PackageNotFoundError:
    __version__ = "0+local"
from pygovdata.client import GovDataClient
from pygovdata.config import GovDataConfig
from pygovdata.exceptions import (
    ConfigurationError,
    FetchTimeoutError,
    FormatError,
    GovDataConfigError,
    GovDataError,
    GovDataFormatError,
    GovDataTransportError,
    NetworkError,
)
from pygovdata.models import (
    DataInfo,
    Dataset,
    RegionResult,
    RegionSummary,
    Summary,
    UpdateMarker,
    VehicleRecord,
)
from pygovdata.state.store import CacheStore, JsonFileCacheStore, MemoryCacheStore

__all__ = [
    "__version__",
    "CacheStore",
    "ConfigurationError",
    "DataInfo",
    "Dataset",
    "FetchTimeoutError",
    "FormatError",
    "GovDataClient",
    "GovDataConfig",
    "GovDataConfigError",
    "GovDataError",
    "GovDataFormatError",
    "GovDataTransportError",
    "JsonFileCacheStore",
    "MemoryCacheStore",
    "NetworkError",
    "RegionResult",
    "RegionSummary",
    "Summary",
    "UpdateMarker",
    "VehicleRecord",
]
