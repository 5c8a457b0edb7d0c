"""Numeric constants used across the geo engine."""

EARTH_RADIUS_M = 6_371_000.0

# Degree-window estimate used to prune clustering candidates.
CLUSTER_METERS_PER_DEGREE = 111_000.0
# Equirectangular scale used by polyline simplification.
SIMPLIFY_METERS_PER_DEGREE = 111_319.9
# Cell height used by heatmap gridding.
HEATMAP_METERS_PER_DEGREE = 111_320.0

POLE_COS_EPSILON = 1e-5
CENTROID_AREA_EPSILON = 1e-9

QUADTREE_DEFAULT_CAPACITY = 20
QUADTREE_MAX_DEPTH = 32
CLUSTER_BOUNDS_PADDING_DEG = 1.0

GEOHASH_BASE32 = "0123456789bcdefghjkmnpqrstuvwxyz"
GEOHASH_MIN_PRECISION = 1
GEOHASH_MAX_PRECISION = 12

TILE_SIZE_PX = 256
MAX_ZOOM = 30
MERCATOR_MAX_LAT = 85.05112878
