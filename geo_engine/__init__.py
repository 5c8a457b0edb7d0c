"""Spatial computations for map rendering: clustering, geometry and projection."""

from .cluster import cluster_points
from .coords import normalize_lat_lng, normalize_lat_lng_list
from .encoding import encode_geohash, parse_polyline
from .heatmap import generate_heatmap_grid
from .measure import (
    bearing_deg,
    centroid,
    distance,
    find_point_in_polygons,
    haversine_m,
    is_point_in_circle,
    is_point_in_polygon,
    polygon_area,
    rectangle_area,
)
from .paths import (
    nearest_point_on_path,
    path_bounds,
    path_length,
    point_at_distance,
    simplify_polyline,
)
from .projection import (
    lat_lng_to_pixel,
    lat_lng_to_tile,
    pixel_to_lat_lng,
    tile_to_lat_lng,
)
from .quadtree import QuadTree
from .types import (
    BoundingBox,
    ClusterOutput,
    ClusterPoint,
    GeoPoint,
    HeatmapGridCell,
    HeatmapPoint,
    NearestPointResult,
    PathBounds,
    PixelResult,
    PointAtDistance,
    TileResult,
)

__all__ = [
    "BoundingBox",
    "ClusterOutput",
    "ClusterPoint",
    "GeoPoint",
    "HeatmapGridCell",
    "HeatmapPoint",
    "NearestPointResult",
    "PathBounds",
    "PixelResult",
    "PointAtDistance",
    "QuadTree",
    "TileResult",
    "bearing_deg",
    "centroid",
    "cluster_points",
    "distance",
    "encode_geohash",
    "find_point_in_polygons",
    "generate_heatmap_grid",
    "haversine_m",
    "is_point_in_circle",
    "is_point_in_polygon",
    "lat_lng_to_pixel",
    "lat_lng_to_tile",
    "nearest_point_on_path",
    "normalize_lat_lng",
    "normalize_lat_lng_list",
    "parse_polyline",
    "path_bounds",
    "path_length",
    "pixel_to_lat_lng",
    "point_at_distance",
    "polygon_area",
    "rectangle_area",
    "simplify_polyline",
    "tile_to_lat_lng",
]
