"""Polyline helpers: simplification, length, sampling and snapping."""

from __future__ import annotations

import logging
import sys
from math import cos, radians
from typing import List, Optional, Sequence, Tuple

from .constants import SIMPLIFY_METERS_PER_DEGREE
from .measure import bearing_deg, haversine_m
from .types import GeoPoint, NearestPointResult, PathBounds, PointAtDistance

LOGGER = logging.getLogger(__name__)

Planar = Tuple[float, float]


def to_planar(points: Sequence[GeoPoint]) -> List[Planar]:
    """Project lat/lon points to a local planar frame (meters) anchored at the first point."""
    if not points:
        return []
    ref_lat, ref_lon = points[0][0], points[0][1]
    m_per_deg_lat = SIMPLIFY_METERS_PER_DEGREE
    m_per_deg_lon = SIMPLIFY_METERS_PER_DEGREE * cos(radians(ref_lat))

    return [
        ((p[1] - ref_lon) * m_per_deg_lon, (p[0] - ref_lat) * m_per_deg_lat)
        for p in points
    ]


def _sq_segment_distance(point: Planar, start: Planar, end: Planar) -> float:
    x, y = start
    dx = end[0] - x
    dy = end[1] - y

    if dx != 0 or dy != 0:
        t = ((point[0] - x) * dx + (point[1] - y) * dy) / (dx * dx + dy * dy)
        if t > 1:
            x, y = end
        elif t > 0:
            x += dx * t
            y += dy * t

    dx = point[0] - x
    dy = point[1] - y
    return dx * dx + dy * dy


def simplify_polyline(points: Sequence[GeoPoint], tolerance_m: float) -> List[GeoPoint]:
    """Simplify a polyline with Ramer–Douglas–Peucker (tolerance in meters)."""
    if len(points) <= 2:
        return list(points)

    projected = to_planar(points)
    sq_tolerance = tolerance_m * tolerance_m
    last_index = len(projected) - 1
    keep = {0, last_index}

    stack = [(0, last_index)]
    while stack:
        first, last = stack.pop()
        max_sq_dist = sq_tolerance
        index = 0
        for i in range(first + 1, last):
            sq_dist = _sq_segment_distance(projected[i], projected[first], projected[last])
            if sq_dist > max_sq_dist:
                index = i
                max_sq_dist = sq_dist

        if max_sq_dist > sq_tolerance:
            keep.add(index)
            if index - first > 1:
                stack.append((first, index))
            if last - index > 1:
                stack.append((index, last))

    simplified = [points[i] for i in sorted(keep)]
    LOGGER.debug("simplified polyline %d -> %d points", len(points), len(simplified))
    return simplified


def path_length(points: Sequence[GeoPoint]) -> float:
    if len(points) < 2:
        return 0.0
    total = 0.0
    for a, b in zip(points, points[1:]):
        total += haversine_m(a[0], a[1], b[0], b[1])
    return total


def point_at_distance(
    points: Sequence[GeoPoint], distance_m: float
) -> Optional[PointAtDistance]:
    """Sample the path ``distance_m`` meters from its start.

    Returns None for a negative distance or fewer than two points. Distances
    past the end clamp to the last point.
    """
    if len(points) < 2 or distance_m < 0:
        return None

    if distance_m == 0:
        a, b = points[0], points[1]
        return PointAtDistance(a[0], a[1], bearing_deg(a[0], a[1], b[0], b[1]))

    covered = 0.0
    for a, b in zip(points, points[1:]):
        segment = haversine_m(a[0], a[1], b[0], b[1])
        if covered + segment >= distance_m:
            fraction = (distance_m - covered) / segment
            # Planar interpolation is accurate enough at segment scale.
            return PointAtDistance(
                a[0] + (b[0] - a[0]) * fraction,
                a[1] + (b[1] - a[1]) * fraction,
                bearing_deg(a[0], a[1], b[0], b[1]),
            )
        covered += segment

    prev, last = points[-2], points[-1]
    return PointAtDistance(
        last[0], last[1], bearing_deg(prev[0], prev[1], last[0], last[1])
    )


def nearest_point_on_path(
    path: Sequence[GeoPoint], target: GeoPoint
) -> NearestPointResult:
    """Snap ``target`` onto the closest segment of ``path``.

    Projection treats lat/lon as Cartesian; the reported distance is the
    haversine distance to the projected coordinate. An empty path yields a
    ``distance_m`` of ``sys.float_info.max``.
    """
    if not path:
        return NearestPointResult(0.0, 0.0, 0, sys.float_info.max)

    t_lat, t_lon = target[0], target[1]
    if len(path) == 1:
        only = path[0]
        return NearestPointResult(
            only[0], only[1], 0, haversine_m(t_lat, t_lon, only[0], only[1])
        )

    best = NearestPointResult(0.0, 0.0, 0, sys.float_info.max)
    for i in range(len(path) - 1):
        ax, ay = path[i][0], path[i][1]
        bx, by = path[i + 1][0], path[i + 1][1]
        dx = bx - ax
        dy = by - ay

        length_sq = dx * dx + dy * dy
        t = 0.0
        if length_sq > 0:
            t = ((t_lat - ax) * dx + (t_lon - ay) * dy) / length_sq
            t = max(0.0, min(1.0, t))

        proj_lat = ax + t * dx
        proj_lon = ay + t * dy
        dist = haversine_m(t_lat, t_lon, proj_lat, proj_lon)
        if dist < best.distance_m:
            best = NearestPointResult(proj_lat, proj_lon, i, dist)

    return best


def path_bounds(points: Sequence[GeoPoint]) -> PathBounds:
    if not points:
        return PathBounds(
            north=-90.0, south=90.0, east=-180.0, west=180.0, center_lat=0.0, center_lon=0.0
        )

    lats = [p[0] for p in points]
    lons = [p[1] for p in points]
    north, south = max(lats), min(lats)
    east, west = max(lons), min(lons)
    return PathBounds(
        north=north,
        south=south,
        east=east,
        west=west,
        center_lat=(north + south) / 2.0,
        center_lon=(east + west) / 2.0,
    )


__all__ = [
    "nearest_point_on_path",
    "path_bounds",
    "path_length",
    "point_at_distance",
    "simplify_polyline",
    "to_planar",
]
