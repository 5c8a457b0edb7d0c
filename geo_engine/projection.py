"""Web-Mercator (slippy map) tile and pixel conversions."""

from __future__ import annotations

from math import asin, cos, degrees, floor, isinf, isnan, log, pi, radians, sin, tan, tanh

from .constants import MAX_ZOOM, MERCATOR_MAX_LAT, TILE_SIZE_PX
from .types import GeoPoint, PixelResult, TileResult


def _clamp_zoom(zoom: int) -> int:
    return max(0, min(MAX_ZOOM, int(zoom)))


def _clamp_lat(lat: float) -> float:
    return max(-MERCATOR_MAX_LAT, min(MERCATOR_MAX_LAT, lat))


def world_size_px(zoom: int) -> float:
    return float(TILE_SIZE_PX * (1 << _clamp_zoom(zoom)))


def _tile_index(value: float, n: int) -> int:
    if isnan(value):
        return 0
    if isinf(value):
        return 0 if value < 0 else n - 1
    return max(0, min(n - 1, floor(value)))


def lat_lng_to_tile(lat: float, lon: float, zoom: int) -> TileResult:
    """Tile containing the point; non-finite coordinates land on an edge tile."""
    z = _clamp_zoom(zoom)
    n = 1 << z
    lat_rad = radians(_clamp_lat(lat))

    x = _tile_index((lon + 180.0) / 360.0 * n, n)
    y = _tile_index((1.0 - log(tan(lat_rad) + 1.0 / cos(lat_rad)) / pi) / 2.0 * n, n)
    return TileResult(x=x, y=y, z=z)


def tile_to_lat_lng(x: int, y: int, zoom: int) -> GeoPoint:
    """Return the north-west corner of tile ``(x, y)``."""
    n = float(1 << _clamp_zoom(zoom))
    lon = x / n * 360.0 - 180.0
    lat = degrees(asin(tanh(pi * (1.0 - 2.0 * y / n))))
    return GeoPoint(lat, lon)


def lat_lng_to_pixel(lat: float, lon: float, zoom: int) -> PixelResult:
    size = world_size_px(zoom)
    sin_lat = sin(radians(_clamp_lat(lat)))

    x = (lon + 180.0) / 360.0 * size
    y = (0.5 - log((1.0 + sin_lat) / (1.0 - sin_lat)) / (4.0 * pi)) * size
    return PixelResult(x=x, y=y)


def pixel_to_lat_lng(x: float, y: float, zoom: int) -> GeoPoint:
    size = world_size_px(zoom)
    lon = x / size * 360.0 - 180.0
    lat = degrees(asin(tanh(pi - 2.0 * pi * y / size)))
    return GeoPoint(lat, lon)


__all__ = [
    "lat_lng_to_pixel",
    "lat_lng_to_tile",
    "pixel_to_lat_lng",
    "tile_to_lat_lng",
    "world_size_px",
]
