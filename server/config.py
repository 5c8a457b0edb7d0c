"""Configuration helpers for the geo service."""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Set


def env_bool(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _int_env(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


def _float_env(name: str, default: float) -> float:
    value = os.getenv(name)
    if value is None:
        return default
    try:
        return float(value)
    except ValueError:
        return default


def _parse_keys(raw: str) -> Set[str]:
    return {key.strip() for key in raw.split(",") if key.strip()}


@dataclass(frozen=True)
class _Settings:
    max_points: int = 50_000
    default_cluster_radius_m: float = 100.0
    default_geohash_precision: int = 7
    default_heatmap_grid_m: float = 500.0
    require_api_key: bool = False
    api_keys: frozenset[str] = frozenset()


@lru_cache(maxsize=1)
def get_settings() -> _Settings:
    """Return cached application settings."""

    return _Settings(
        max_points=max(_int_env("GEO_MAX_POINTS", 50_000), 1),
        default_cluster_radius_m=_float_env("GEO_DEFAULT_CLUSTER_RADIUS_M", 100.0),
        default_geohash_precision=_int_env("GEO_DEFAULT_GEOHASH_PRECISION", 7),
        default_heatmap_grid_m=_float_env("GEO_DEFAULT_HEATMAP_GRID_M", 500.0),
        require_api_key=env_bool("REQUIRE_API_KEY", False),
        api_keys=frozenset(_parse_keys(os.getenv("API_KEY", ""))),
    )


def reset_settings_cache() -> None:
    """Clear cached settings (primarily for tests)."""

    get_settings.cache_clear()


__all__ = ["env_bool", "get_settings", "reset_settings_cache"]
