"""Array marshaling boundary around the geo engine.

Callers that hold coordinates as parallel latitude/longitude arrays (numpy
buffers, JSON lists, platform bridges) go through these helpers. Each one
validates the arrays, calls a single engine operation and flattens the result
into a fixed packed layout. Missing or length-mismatched arrays never raise;
they produce the neutral value documented on each function.
"""

from __future__ import annotations

from typing import Any, List, Optional, Sequence

import numpy as np

from .cluster import cluster_points
from .encoding import parse_polyline
from .heatmap import generate_heatmap_grid
from .measure import (
    centroid,
    find_point_in_polygons,
    is_point_in_circle,
    is_point_in_polygon,
    polygon_area,
)
from .paths import (
    nearest_point_on_path,
    path_bounds,
    path_length,
    point_at_distance,
    simplify_polyline,
)
from .projection import lat_lng_to_pixel, lat_lng_to_tile, pixel_to_lat_lng, tile_to_lat_lng
from .types import ClusterOutput, ClusterPoint, GeoPoint, HeatmapPoint

ArrayLike = Any


def _as_float_array(values: ArrayLike) -> Optional[np.ndarray]:
    if values is None:
        return None
    return np.asarray(values, dtype=np.float64).reshape(-1)


def _to_points(
    latitudes: ArrayLike, longitudes: ArrayLike, min_count: int = 0
) -> Optional[List[GeoPoint]]:
    lats = _as_float_array(latitudes)
    lons = _as_float_array(longitudes)
    if lats is None or lons is None:
        return None
    if lats.size != lons.size or lats.size < min_count:
        return None
    return [GeoPoint(float(lat), float(lon)) for lat, lon in zip(lats, lons)]


def _flatten_points(points: Sequence[GeoPoint]) -> np.ndarray:
    return np.asarray(
        [value for p in points for value in (p[0], p[1])], dtype=np.float64
    )


def cluster_points_packed(
    latitudes: ArrayLike, longitudes: ArrayLike, radius_m: float
) -> np.ndarray:
    """Return ``[count, (center, member_count, members...)*]`` as int32."""

    points = _to_points(latitudes, longitudes, min_count=1)
    if points is None:
        return np.zeros(1, dtype=np.int32)

    clusters = cluster_points(
        [ClusterPoint(p.lat, p.lon, i) for i, p in enumerate(points)], float(radius_m)
    )
    packed: List[int] = [len(clusters)]
    for cluster in clusters:
        packed.append(cluster.center_index)
        packed.append(len(cluster.indices))
        packed.extend(cluster.indices)
    return np.asarray(packed, dtype=np.int32)


def unpack_clusters(packed: ArrayLike) -> List[ClusterOutput]:
    if packed is None:
        return []
    values = [int(v) for v in np.asarray(packed).reshape(-1)]
    if not values:
        return []

    clusters: List[ClusterOutput] = []
    cursor = 1
    for _ in range(values[0]):
        if cursor + 2 > len(values):
            break
        center, count = values[cursor], values[cursor + 1]
        cursor += 2
        members = values[cursor : cursor + count]
        cursor += count
        clusters.append(ClusterOutput(center_index=center, indices=members))
    return clusters


def is_point_in_circle_packed(
    point_lat: float,
    point_lon: float,
    center_lat: float,
    center_lon: float,
    radius_m: float,
) -> bool:
    return is_point_in_circle(
        GeoPoint(point_lat, point_lon), GeoPoint(center_lat, center_lon), radius_m
    )


def is_point_in_polygon_packed(
    point_lat: float, point_lon: float, latitudes: ArrayLike, longitudes: ArrayLike
) -> bool:
    polygon = _to_points(latitudes, longitudes, min_count=3)
    if polygon is None:
        return False
    return is_point_in_polygon(GeoPoint(point_lat, point_lon), polygon)


def find_point_in_polygons_packed(
    point_lat: float,
    point_lon: float,
    polygons_lat: Optional[Sequence[ArrayLike]],
    polygons_lon: Optional[Sequence[ArrayLike]],
) -> int:
    """Index of the first containing polygon, -1 otherwise.

    Polygons whose arrays are missing or mismatched are kept as empty rings
    that contain nothing, so the index always refers to the caller's list.
    """

    if polygons_lat is None or polygons_lon is None or len(polygons_lat) == 0:
        return -1

    polygons: List[List[GeoPoint]] = []
    for lats, lons in zip(polygons_lat, polygons_lon):
        polygons.append(_to_points(lats, lons) or [])
    return find_point_in_polygons(GeoPoint(point_lat, point_lon), polygons)


def polygon_area_packed(latitudes: ArrayLike, longitudes: ArrayLike) -> float:
    polygon = _to_points(latitudes, longitudes, min_count=3)
    if polygon is None:
        return 0.0
    return polygon_area(polygon)


def centroid_packed(latitudes: ArrayLike, longitudes: ArrayLike) -> Optional[np.ndarray]:
    polygon = _to_points(latitudes, longitudes, min_count=3)
    if polygon is None:
        return None
    center = centroid(polygon)
    return np.asarray([center.lat, center.lon], dtype=np.float64)


def path_length_packed(latitudes: ArrayLike, longitudes: ArrayLike) -> float:
    points = _to_points(latitudes, longitudes, min_count=2)
    if points is None:
        return 0.0
    return path_length(points)


def simplify_polyline_packed(
    latitudes: ArrayLike, longitudes: ArrayLike, tolerance_m: float
) -> np.ndarray:
    points = _to_points(latitudes, longitudes)
    if points is None:
        return np.zeros(0, dtype=np.float64)
    return _flatten_points(simplify_polyline(points, float(tolerance_m)))


def point_at_distance_packed(
    latitudes: ArrayLike, longitudes: ArrayLike, distance_m: float
) -> Optional[np.ndarray]:
    points = _to_points(latitudes, longitudes, min_count=2)
    if points is None:
        return None
    sample = point_at_distance(points, float(distance_m))
    if sample is None:
        return None
    return np.asarray([sample.lat, sample.lon, sample.bearing], dtype=np.float64)


def nearest_point_packed(
    latitudes: ArrayLike, longitudes: ArrayLike, target_lat: float, target_lon: float
) -> Optional[np.ndarray]:
    path = _to_points(latitudes, longitudes, min_count=2)
    if path is None:
        return None
    result = nearest_point_on_path(path, GeoPoint(target_lat, target_lon))
    return np.asarray(
        [result.lat, result.lon, float(result.index), result.distance_m],
        dtype=np.float64,
    )


def path_bounds_packed(latitudes: ArrayLike, longitudes: ArrayLike) -> Optional[np.ndarray]:
    points = _to_points(latitudes, longitudes, min_count=1)
    if points is None:
        return None
    bounds = path_bounds(points)
    return np.asarray(
        [
            bounds.north,
            bounds.south,
            bounds.east,
            bounds.west,
            bounds.center_lat,
            bounds.center_lon,
        ],
        dtype=np.float64,
    )


def parse_polyline_packed(text: Optional[str]) -> Optional[np.ndarray]:
    if text is None:
        return None
    return _flatten_points(parse_polyline(text))


def heatmap_grid_packed(
    latitudes: ArrayLike,
    longitudes: ArrayLike,
    weights: ArrayLike,
    grid_size_m: float,
) -> Optional[np.ndarray]:
    lats = _as_float_array(latitudes)
    lons = _as_float_array(longitudes)
    wts = _as_float_array(weights)
    if lats is None or lons is None or wts is None:
        return None
    if lats.size == 0 or lats.size != lons.size or lats.size != wts.size:
        return None

    points = [
        HeatmapPoint(float(lat), float(lon), float(w))
        for lat, lon, w in zip(lats, lons, wts)
    ]
    cells = generate_heatmap_grid(points, float(grid_size_m))
    return np.asarray(
        [value for c in cells for value in (c.lat, c.lon, c.intensity)],
        dtype=np.float64,
    )


def lat_lng_to_tile_packed(lat: float, lon: float, zoom: int) -> np.ndarray:
    tile = lat_lng_to_tile(lat, lon, zoom)
    return np.asarray([tile.x, tile.y, tile.z], dtype=np.int32)


def tile_to_lat_lng_packed(x: int, y: int, zoom: int) -> np.ndarray:
    return np.asarray(tile_to_lat_lng(x, y, zoom), dtype=np.float64)


def lat_lng_to_pixel_packed(lat: float, lon: float, zoom: int) -> np.ndarray:
    pixel = lat_lng_to_pixel(lat, lon, zoom)
    return np.asarray([pixel.x, pixel.y], dtype=np.float64)


def pixel_to_lat_lng_packed(x: float, y: float, zoom: int) -> np.ndarray:
    return np.asarray(pixel_to_lat_lng(x, y, zoom), dtype=np.float64)


__all__ = [
    "centroid_packed",
    "cluster_points_packed",
    "find_point_in_polygons_packed",
    "heatmap_grid_packed",
    "is_point_in_circle_packed",
    "is_point_in_polygon_packed",
    "lat_lng_to_pixel_packed",
    "lat_lng_to_tile_packed",
    "nearest_point_packed",
    "parse_polyline_packed",
    "path_bounds_packed",
    "path_length_packed",
    "pixel_to_lat_lng_packed",
    "point_at_distance_packed",
    "polygon_area_packed",
    "simplify_polyline_packed",
    "tile_to_lat_lng_packed",
    "unpack_clusters",
]
