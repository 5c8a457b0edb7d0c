"""Coercion of loosely shaped coordinate payloads into ``GeoPoint`` values."""

from __future__ import annotations

import logging
from math import isfinite
from typing import Any, Iterable, List, Mapping, Optional

from .types import GeoPoint

LOGGER = logging.getLogger(__name__)

_LAT_KEYS = ("latitude", "lat")
_LON_KEYS = ("longitude", "lon", "lng")


def _pick(mapping: Mapping[str, Any], keys: Iterable[str]) -> Any:
    for key in keys:
        if key in mapping and mapping[key] is not None:
            return mapping[key]
    return None


def _finite_point(lat: float, lon: float) -> GeoPoint:
    if not (isfinite(lat) and isfinite(lon)):
        raise ValueError(f"coordinate must be finite: lat={lat!r} lon={lon!r}")
    return GeoPoint(lat, lon)


def normalize_lat_lng(value: Any) -> GeoPoint:
    """Coerce ``value`` into a latitude-first ``GeoPoint``.

    Accepts a ``GeoPoint``, a mapping with latitude/longitude keys, or a
    GeoJSON-ordered ``[lon, lat]`` sequence. A sequence whose latitude is out
    of range while its longitude would be a valid latitude is assumed to be
    ``[lat, lon]`` and is swapped back. NaN and infinite values raise
    ``ValueError``.
    """

    if isinstance(value, GeoPoint):
        return _finite_point(value.lat, value.lon)

    if isinstance(value, Mapping):
        lat = _pick(value, _LAT_KEYS)
        lon = _pick(value, _LON_KEYS)
        if lat is None or lon is None:
            raise ValueError("coordinate mapping requires latitude and longitude")
        return _finite_point(float(lat), float(lon))

    if isinstance(value, (list, tuple)):
        if len(value) < 2:
            raise ValueError("coordinate sequence requires [longitude, latitude]")
        lon, lat = float(value[0]), float(value[1])
        if abs(lat) > 90 and abs(lon) <= 90:
            LOGGER.warning(
                "coordinate %s looks like [lat, lon]; treating it as [lon, lat]",
                list(value[:2]),
            )
            return _finite_point(lon, lat)
        return _finite_point(lat, lon)

    raise ValueError(f"unsupported coordinate value: {value!r}")


def normalize_lat_lng_list(values: Optional[Iterable[Any]]) -> List[GeoPoint]:
    if values is None:
        return []
    return [normalize_lat_lng(v) for v in values]


__all__ = ["normalize_lat_lng", "normalize_lat_lng_list"]
