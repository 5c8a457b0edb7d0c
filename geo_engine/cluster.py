"""Greedy radius clustering for dense marker sets."""

from __future__ import annotations

import logging
from math import cos, radians
from typing import List, Sequence, Set

from .constants import (
    CLUSTER_BOUNDS_PADDING_DEG,
    CLUSTER_METERS_PER_DEGREE,
    POLE_COS_EPSILON,
)
from .measure import haversine_m
from .quadtree import QuadTree
from .types import BoundingBox, ClusterOutput, ClusterPoint

LOGGER = logging.getLogger(__name__)


def _points_bounds(points: Sequence[ClusterPoint]) -> BoundingBox:
    min_lat = min(p.lat for p in points)
    max_lat = max(p.lat for p in points)
    min_lon = min(p.lon for p in points)
    max_lon = max(p.lon for p in points)
    pad = CLUSTER_BOUNDS_PADDING_DEG
    return BoundingBox(min_lat - pad, min_lon - pad, max_lat + pad, max_lon + pad)


def _search_window(seed: ClusterPoint, radius_m: float) -> BoundingBox:
    lat_span = radius_m / CLUSTER_METERS_PER_DEGREE
    cos_lat = abs(cos(radians(seed.lat)))
    if cos_lat < POLE_COS_EPSILON:
        lon_span = 360.0
    else:
        lon_span = radius_m / (CLUSTER_METERS_PER_DEGREE * cos_lat)
    return BoundingBox(
        seed.lat - lat_span,
        seed.lon - lon_span,
        seed.lat + lat_span,
        seed.lon + lon_span,
    )


def cluster_points(
    points: Sequence[ClusterPoint], radius_m: float
) -> List[ClusterOutput]:
    """Group points that lie within ``radius_m`` of a seed point.

    Seeds are taken in input order: the first unvisited point opens a cluster
    and absorbs every unvisited point within the radius of *that seed*. This
    is deliberately greedy rather than a transitive closure, so the result
    depends on input order and a point between two seeds belongs to whichever
    seed came first.

    Points with a negative index are ignored. Every remaining index appears in
    exactly one cluster.
    """

    if not points or radius_m <= 0:
        return []

    valid = [p for p in points if p.index >= 0]
    if len(valid) != len(points):
        LOGGER.debug("skipping %d points with negative index", len(points) - len(valid))
    if not valid:
        return []

    tree = QuadTree(_points_bounds(valid))
    for p in valid:
        tree.insert(p)

    visited: Set[int] = set()
    clusters: List[ClusterOutput] = []

    for seed in valid:
        if seed.index in visited:
            continue

        cluster = ClusterOutput(center_index=seed.index, indices=[seed.index])
        visited.add(seed.index)

        for candidate in tree.query(_search_window(seed, radius_m)):
            if candidate.index in visited:
                continue
            if haversine_m(seed.lat, seed.lon, candidate.lat, candidate.lon) <= radius_m:
                cluster.indices.append(candidate.index)
                visited.add(candidate.index)

        clusters.append(cluster)

    LOGGER.debug(
        "clustered %d points into %d clusters (radius=%.1fm)",
        len(valid),
        len(clusters),
        radius_m,
    )
    return clusters


__all__ = ["cluster_points"]
