"""Client configuration for pygovdata."""

from __future__ import annotations

import dataclasses
import os
from pathlib import Path
from typing import Any

from pygovdata._constants import (
    DEFAULT_EU_URL,
    DEFAULT_MAX_VEHICLES_PER_REGION,
    DEFAULT_REQUEST_TIMEOUT_MS,
    DEFAULT_UPDATE_INTERVAL_MS,
    DEFAULT_US_URL,
    USER_AGENT,
)
from pygovdata.exceptions import GovDataConfigError


def _env_str(value: str | None) -> str | None:
    if value is None:
        return None
    stripped = value.strip()
    return stripped or None


def _env_number(env_key: str, value: str, cast: type[int] | type[float]) -> int | float:
    try:
        return cast(value.strip())
    except ValueError as exc:
        raise GovDataConfigError(f"{env_key} must be numeric, got {value!r}") from exc


@dataclasses.dataclass(frozen=True)
class GovDataConfig:
    """Pipeline configuration.

    Parameters
    ----------
    request_timeout_ms : int
        Per-request timeout in milliseconds. The in-flight request is
        aborted once it elapses.
    max_vehicles_per_region : int
        Upper bound on normalized records kept per region.
    update_interval_ms : int
        Age (milliseconds) after which the cached dataset is stale.
    cache_dir : Path
        Directory holding the dataset, summary and update marker documents.
    us_url : str
        EPA vehicles CSV or zipped CSV.
    eu_url : str
        EEA emissions CSV or zipped CSV.
    uk_url : str or None
        UK CSV/zip source. No default; the region stays empty without it.
    japan_url : str or None
        Japan CSV/zip source. No default; the region stays empty without it.
    korea_url : str or None
        Korea JSON API endpoint. No default.
    korea_service_key : str or None
        Service key appended to the Korea endpoint as ``serviceKey``.
    user_agent : str
        ``User-Agent`` header sent with every request.
    """

    request_timeout_ms: int = DEFAULT_REQUEST_TIMEOUT_MS
    max_vehicles_per_region: int = DEFAULT_MAX_VEHICLES_PER_REGION
    update_interval_ms: int = DEFAULT_UPDATE_INTERVAL_MS
    cache_dir: Path = Path("data")
    us_url: str = DEFAULT_US_URL
    eu_url: str = DEFAULT_EU_URL
    uk_url: str | None = None
    japan_url: str | None = None
    korea_url: str | None = None
    korea_service_key: str | None = None
    user_agent: str = USER_AGENT

    def __post_init__(self) -> None:
        if self.request_timeout_ms <= 0:
            raise GovDataConfigError("request_timeout_ms must be positive")
        if self.max_vehicles_per_region < 0:
            raise GovDataConfigError("max_vehicles_per_region must not be negative")
        if self.update_interval_ms < 0:
            raise GovDataConfigError("update_interval_ms must not be negative")
        if not isinstance(self.cache_dir, Path):
            object.__setattr__(self, "cache_dir", Path(self.cache_dir))

    @property
    def request_timeout(self) -> float:
        """Request timeout in seconds."""
        return self.request_timeout_ms / 1000.0

    @classmethod
    def from_env(cls, **overrides: Any) -> GovDataConfig:
        """Create configuration from ``GOVDATA_*`` environment variables.

        Explicit keyword arguments override environment values. Blank
        URL variables are treated as unset.
        """
        env = os.environ

        _ENV_URL_MAP = {
            "GOVDATA_US_URL": "us_url",
            "GOVDATA_EU_URL": "eu_url",
            "GOVDATA_UK_URL": "uk_url",
            "GOVDATA_JAPAN_URL": "japan_url",
            "GOVDATA_KOREA_URL": "korea_url",
            "GOVDATA_KOREA_SERVICE_KEY": "korea_service_key",
            "GOVDATA_USER_AGENT": "user_agent",
        }
        config_kwargs: dict[str, Any] = {}
        for env_key, field_name in _ENV_URL_MAP.items():
            val = _env_str(env.get(env_key))
            if val is not None:
                config_kwargs[field_name] = val

        timeout_env = env.get("GOVDATA_REQUEST_TIMEOUT_MS")
        if timeout_env is not None and "request_timeout_ms" not in overrides:
            config_kwargs["request_timeout_ms"] = int(_env_number("GOVDATA_REQUEST_TIMEOUT_MS", timeout_env, float))

        max_env = env.get("GOVDATA_MAX_VEHICLES_PER_REGION")
        if max_env is not None and "max_vehicles_per_region" not in overrides:
            config_kwargs["max_vehicles_per_region"] = int(
                _env_number("GOVDATA_MAX_VEHICLES_PER_REGION", max_env, int)
            )

        # Interval is configured in hours, stored in milliseconds.
        interval_env = env.get("GOVDATA_UPDATE_INTERVAL_HOURS")
        if interval_env is not None and "update_interval_ms" not in overrides:
            hours = _env_number("GOVDATA_UPDATE_INTERVAL_HOURS", interval_env, float)
            config_kwargs["update_interval_ms"] = int(hours * 3600 * 1000)

        cache_env = _env_str(env.get("GOVDATA_CACHE_DIR"))
        if cache_env is not None and "cache_dir" not in overrides:
            config_kwargs["cache_dir"] = Path(cache_env)

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
