"""Internal constants shared across the library."""

from __future__ import annotations

from typing import Any

USER_AGENT = "pygovdata/1.0 (+https://github.com/pygovdata/pygovdata)"

REGION_US = "us"
REGION_EU = "eu"
REGION_UK = "uk"
REGION_JAPAN = "japan"
REGION_KOREA = "korea"

#: Fetch order for the aggregator; also the search index order.
REGIONS: tuple[str, ...] = (REGION_US, REGION_EU, REGION_UK, REGION_JAPAN, REGION_KOREA)

DEFAULT_REQUEST_TIMEOUT_MS = 30_000
DEFAULT_MAX_VEHICLES_PER_REGION = 5_000
DEFAULT_UPDATE_INTERVAL_MS = 24 * 60 * 60 * 1000

DEFAULT_US_URL = "https://www.fueleconomy.gov/feg/epadata/vehicles.csv.zip"
DEFAULT_EU_URL = "https://www.eea.europa.eu/data-and-maps/data/co2-cars-emission-20/co2-passenger-cars-2023.zip"

CACHE_FILE = "government_data_cache.json"
SUMMARY_FILE = "data_summary.json"
MARKER_FILE = "last_update.json"

# ------------------------------------------------------------------
# Static source descriptors (reference metadata, never fetched)
# ------------------------------------------------------------------

DATA_SOURCES: dict[str, dict[str, Any]] = {
    REGION_US: {
        "fuelEconomy": DEFAULT_US_URL,
        "nhtsa": "https://api.nhtsa.gov/products/vehicle/makes",
        "epaGuide": "https://www.fueleconomy.gov/feg/download.shtml",
        "source": "US EPA Fuel Economy",
        "description": "US EPA Fuel Economy Data & NHTSA Vehicle Safety",
        "notes": "Based on 15,000 miles annually, 55% city and 45% highway driving",
    },
    REGION_EU: {
        "emissions": DEFAULT_EU_URL,
        "eea": "https://www.eea.europa.eu/data-and-maps/data/",
        "source": "EU Environmental Agency",
        "description": "EU Emissions & Environmental Agency Data",
        "notes": "WLTP testing procedure data",
    },
    REGION_UK: {
        "vca": "https://www.gov.uk/government/organisations/vehicle-certification-agency",
        "dvla": "https://www.gov.uk/government/statistical-data-sets/all-vehicles-veh01",
        "source": "UK Vehicle Certification Agency",
        "description": "UK Vehicle Certification Agency & DVLA Statistics",
        "notes": "UK road tax bands and emissions data",
    },
    REGION_JAPAN: {
        "mlit": "https://www.mlit.go.jp/jidosha/jidosha_tk10_000001.html",
        "source": "Japan Ministry of Land, Infrastructure, Transport and Tourism",
        "description": "Japan Ministry of Land, Infrastructure, Transport and Tourism",
        "notes": "JC08 and WLTC mode fuel economy data",
    },
    REGION_KOREA: {
        "molit": "https://www.molit.go.kr/english/intro.jsp",
        "source": "Korea Ministry of Land, Infrastructure and Transport",
        "description": "Korea Ministry of Land, Infrastructure and Transport",
        "notes": "Korean certification data",
    },
}
