from __future__ import annotations

from pathlib import Path

import pytest

from pygovdata._constants import DEFAULT_EU_URL, DEFAULT_US_URL
from pygovdata.config import GovDataConfig
from pygovdata.exceptions import ConfigurationError

_ENV_KEYS = (
    "GOVDATA_REQUEST_TIMEOUT_MS",
    "GOVDATA_MAX_VEHICLES_PER_REGION",
    "GOVDATA_UPDATE_INTERVAL_HOURS",
    "GOVDATA_CACHE_DIR",
    "GOVDATA_US_URL",
    "GOVDATA_EU_URL",
    "GOVDATA_UK_URL",
    "GOVDATA_JAPAN_URL",
    "GOVDATA_KOREA_URL",
    "GOVDATA_KOREA_SERVICE_KEY",
    "GOVDATA_USER_AGENT",
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in _ENV_KEYS:
        monkeypatch.delenv(key, raising=False)


def test_defaults() -> None:
    config = GovDataConfig.from_env()

    assert config.request_timeout_ms == 30_000
    assert config.request_timeout == 30.0
    assert config.max_vehicles_per_region == 5_000
    assert config.update_interval_ms == 24 * 3600 * 1000
    assert config.us_url == DEFAULT_US_URL
    assert config.eu_url == DEFAULT_EU_URL
    assert config.uk_url is None
    assert config.japan_url is None
    assert config.korea_url is None
    assert config.korea_service_key is None


def test_env_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("GOVDATA_REQUEST_TIMEOUT_MS", "5000")
    monkeypatch.setenv("GOVDATA_MAX_VEHICLES_PER_REGION", "250")
    monkeypatch.setenv("GOVDATA_UPDATE_INTERVAL_HOURS", "1.5")
    monkeypatch.setenv("GOVDATA_CACHE_DIR", "/var/cache/govdata")
    monkeypatch.setenv("GOVDATA_US_URL", "https://example.test/vehicles.csv")
    monkeypatch.setenv("GOVDATA_UK_URL", "https://example.test/uk.zip")
    monkeypatch.setenv("GOVDATA_KOREA_URL", "https://apis.example.kr/cars")
    monkeypatch.setenv("GOVDATA_KOREA_SERVICE_KEY", "secret")

    config = GovDataConfig.from_env()

    assert config.request_timeout_ms == 5000
    assert config.max_vehicles_per_region == 250
    assert config.update_interval_ms == int(1.5 * 3600 * 1000)
    assert config.cache_dir == Path("/var/cache/govdata")
    assert config.us_url == "https://example.test/vehicles.csv"
    assert config.uk_url == "https://example.test/uk.zip"
    assert config.korea_url == "https://apis.example.kr/cars"
    assert config.korea_service_key == "secret"


def test_blank_url_env_is_treated_as_unset(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("GOVDATA_JAPAN_URL", "   ")

    assert GovDataConfig.from_env().japan_url is None


def test_explicit_overrides_win(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("GOVDATA_REQUEST_TIMEOUT_MS", "5000")
    monkeypatch.setenv("GOVDATA_UK_URL", "https://example.test/env.csv")

    config = GovDataConfig.from_env(request_timeout_ms=100, uk_url="https://example.test/arg.csv")

    assert config.request_timeout_ms == 100
    assert config.uk_url == "https://example.test/arg.csv"


def test_invalid_numeric_env_raises(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("GOVDATA_MAX_VEHICLES_PER_REGION", "lots")

    with pytest.raises(ConfigurationError, match="GOVDATA_MAX_VEHICLES_PER_REGION"):
        GovDataConfig.from_env()


def test_invalid_values_rejected() -> None:
    with pytest.raises(ConfigurationError):
        GovDataConfig(request_timeout_ms=0)
    with pytest.raises(ConfigurationError):
        GovDataConfig(max_vehicles_per_region=-1)


def test_cache_dir_coerced_to_path() -> None:
    assert GovDataConfig(cache_dir="somewhere").cache_dir == Path("somewhere")  # type: ignore[arg-type]
