"""Distance, containment, area and centroid helpers on lat/lon points."""

from __future__ import annotations

from math import atan2, cos, degrees, radians, sin, sqrt
from typing import Sequence

from .constants import CENTROID_AREA_EPSILON, EARTH_RADIUS_M
from .types import GeoPoint


def haversine_m(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Compute haversine distance between two lat/lon points in meters."""

    lat1_rad = radians(lat1)
    lat2_rad = radians(lat2)
    dlat = lat2_rad - lat1_rad
    dlon = radians(lon2 - lon1)

    sin_half_lat = sin(dlat / 2)
    sin_half_lon = sin(dlon / 2)
    a = sin_half_lat**2 + cos(lat1_rad) * cos(lat2_rad) * sin_half_lon**2
    a = min(a, 1.0)
    c = 2 * atan2(sqrt(a), sqrt(1 - a))
    return EARTH_RADIUS_M * c


def distance(a: GeoPoint, b: GeoPoint) -> float:
    return haversine_m(a[0], a[1], b[0], b[1])


def bearing_deg(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Initial true bearing from the first point to the second, in [0, 360)."""

    phi1 = radians(lat1)
    phi2 = radians(lat2)
    dlon = radians(lon2 - lon1)

    y = sin(dlon) * cos(phi2)
    x = cos(phi1) * sin(phi2) - sin(phi1) * cos(phi2) * cos(dlon)
    bearing = (degrees(atan2(y, x)) + 360.0) % 360.0
    # (-tiny + 360) % 360 can round up to exactly 360.
    return 0.0 if bearing >= 360.0 else bearing


def is_point_in_circle(point: GeoPoint, center: GeoPoint, radius_m: float) -> bool:
    if radius_m <= 0:
        return False
    return distance(point, center) <= radius_m


def is_point_in_polygon(point: GeoPoint, polygon: Sequence[GeoPoint]) -> bool:
    """Even-odd ray casting test.

    The ring does not need to be closed. Points exactly on an edge may land on
    either side.
    """

    n = len(polygon)
    if n < 3:
        return False

    lat, lon = point[0], point[1]
    inside = False
    j = n - 1
    for i in range(n):
        xi, yi = polygon[i][0], polygon[i][1]
        xj, yj = polygon[j][0], polygon[j][1]
        if (yi > lon) != (yj > lon) and lat < (xj - xi) * (lon - yi) / (yj - yi) + xi:
            inside = not inside
        j = i
    return inside


def find_point_in_polygons(
    point: GeoPoint, polygons: Sequence[Sequence[GeoPoint]]
) -> int:
    """Return the index of the first polygon containing ``point`` or -1."""

    for idx, polygon in enumerate(polygons):
        if is_point_in_polygon(point, polygon):
            return idx
    return -1


def polygon_area(polygon: Sequence[GeoPoint]) -> float:
    """Approximate spherical polygon area in square meters."""

    n = len(polygon)
    if n < 3:
        return 0.0

    total = 0.0
    for i in range(n):
        lat1, lon1 = polygon[i][0], polygon[i][1]
        lat2, lon2 = polygon[(i + 1) % n][0], polygon[(i + 1) % n][1]
        total += radians(lon2 - lon1) * (2.0 + sin(radians(lat1)) + sin(radians(lat2)))

    return abs(total) * EARTH_RADIUS_M * EARTH_RADIUS_M * 0.5


def rectangle_area(south_west: GeoPoint, north_east: GeoPoint) -> float:
    sw_lat, sw_lon = south_west[0], south_west[1]
    ne_lat, ne_lon = north_east[0], north_east[1]
    rectangle = [
        GeoPoint(sw_lat, sw_lon),
        GeoPoint(sw_lat, ne_lon),
        GeoPoint(ne_lat, ne_lon),
        GeoPoint(ne_lat, sw_lon),
    ]
    return polygon_area(rectangle)


def centroid(polygon: Sequence[GeoPoint]) -> GeoPoint:
    """Planar area-weighted centroid; only meaningful for small extents."""

    n = len(polygon)
    if n == 0:
        return GeoPoint(0.0, 0.0)

    first, last = polygon[0], polygon[-1]
    closed = first[0] == last[0] and first[1] == last[1]
    limit = n - 1 if closed else n

    signed_area = 0.0
    cx = 0.0
    cy = 0.0
    for i in range(limit):
        x0, y0 = polygon[i][0], polygon[i][1]
        x1, y1 = polygon[(i + 1) % n][0], polygon[(i + 1) % n][1]
        cross = x0 * y1 - x1 * y0
        signed_area += cross
        cx += (x0 + x1) * cross
        cy += (y0 + y1) * cross

    if abs(signed_area) < CENTROID_AREA_EPSILON:
        return GeoPoint(
            sum(p[0] for p in polygon) / n,
            sum(p[1] for p in polygon) / n,
        )

    signed_area *= 0.5
    return GeoPoint(cx / (6.0 * signed_area), cy / (6.0 * signed_area))


__all__ = [
    "bearing_deg",
    "centroid",
    "distance",
    "find_point_in_polygons",
    "haversine_m",
    "is_point_in_circle",
    "is_point_in_polygon",
    "polygon_area",
    "rectangle_area",
]
