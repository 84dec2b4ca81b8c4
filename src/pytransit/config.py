"""Client configuration for pytransit."""

from __future__ import annotations

import dataclasses
import os
from collections.abc import Mapping
from typing import Any

from pytransit._constants import (
    BASE_URL,
    DEFAULT_CENTER,
    DEFAULT_POLL_INTERVAL,
    DEFAULT_RADIUS_M,
    ROUTE_CATALOG_TTL,
    STOPS_URL,
)
from pytransit.exceptions import TransitConfigError


def _env_float(env: Mapping[str, str], key: str) -> float | None:
    value = env.get(key)
    if value is None:
        return None
    try:
        return float(value)
    except ValueError as exc:
        raise TransitConfigError(f"{key} must be numeric, got {value!r}") from exc


@dataclasses.dataclass(frozen=True)
class TransitConfig:
    """Client configuration.

    Parameters
    ----------
    base_url : str
        Transit-data provider base URL serving ``/routes``, ``/vehicles``
        and ``/seek``.
    stops_url : str
        URL of the stop catalog document.
    default_center : tuple[float, float]
        ``(latitude, longitude)`` used when the rider's position is unknown.
    default_radius_m : float
        Proximity radius in metres.
    poll_interval : float
        Seconds between live-vehicle refreshes.
    route_cache_ttl : float
        Route catalog time-to-live in seconds.  Defaults to 24 hours.
    cache_dir : str or None
        Directory for the persistent route catalog cache.  ``None`` keeps
        the cache in memory for the lifetime of the client.
    request_timeout : float
        Total per-request timeout handed to aiohttp.
    """

    base_url: str = BASE_URL
    stops_url: str = STOPS_URL
    default_center: tuple[float, float] = DEFAULT_CENTER
    default_radius_m: float = DEFAULT_RADIUS_M
    poll_interval: float = DEFAULT_POLL_INTERVAL
    route_cache_ttl: float = ROUTE_CATALOG_TTL
    cache_dir: str | None = None
    request_timeout: float = 30.0

    def __post_init__(self) -> None:
        if self.poll_interval <= 0:
            raise TransitConfigError(f"poll_interval must be positive, got {self.poll_interval}")
        if self.route_cache_ttl < 0:
            raise TransitConfigError(f"route_cache_ttl must not be negative, got {self.route_cache_ttl}")

    @classmethod
    def from_env(cls, **overrides: Any) -> TransitConfig:
        """Create configuration from ``TRANSIT_*`` environment variables.

        Explicit keyword arguments override environment values.
        """
        env = os.environ

        _ENV_CONFIG_MAP = {
            "TRANSIT_BASE_URL": "base_url",
            "TRANSIT_STOPS_URL": "stops_url",
            "TRANSIT_CACHE_DIR": "cache_dir",
        }
        config_kwargs: dict[str, Any] = {}
        for env_key, field_name in _ENV_CONFIG_MAP.items():
            val = env.get(env_key)
            if val is not None:
                config_kwargs[field_name] = val

        _ENV_FLOAT_MAP = {
            "TRANSIT_DEFAULT_RADIUS_M": "default_radius_m",
            "TRANSIT_POLL_INTERVAL": "poll_interval",
            "TRANSIT_ROUTE_CACHE_TTL": "route_cache_ttl",
            "TRANSIT_REQUEST_TIMEOUT": "request_timeout",
        }
        for env_key, field_name in _ENV_FLOAT_MAP.items():
            parsed = _env_float(env, env_key)
            if parsed is not None and field_name not in overrides:
                config_kwargs[field_name] = parsed

        # Center is "lat,lon"
        center_env = env.get("TRANSIT_DEFAULT_CENTER")
        if center_env is not None and "default_center" not in overrides:
            parts = center_env.split(",")
            try:
                lat, lon = (float(part) for part in parts)
            except ValueError as exc:
                raise TransitConfigError(
                    f"TRANSIT_DEFAULT_CENTER must be 'lat,lon', got {center_env!r}"
                ) from exc
            config_kwargs["default_center"] = (lat, lon)

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
