"""Point quadtree over a fixed degree-space region."""

from __future__ import annotations

import logging
from typing import List, Optional

from .constants import QUADTREE_DEFAULT_CAPACITY, QUADTREE_MAX_DEPTH
from .types import BoundingBox, ClusterPoint

LOGGER = logging.getLogger(__name__)


class QuadTree:
    """Bucketed point quadtree.

    A node stores up to ``capacity`` points; the insert that would exceed it
    splits the node once into four equal quadrants (north-west, north-east,
    south-west, south-east) and pushes the held points down. Nodes at
    ``max_depth`` keep accepting points so duplicated coordinates cannot
    split forever.
    """

    def __init__(
        self,
        bounds: BoundingBox,
        capacity: int = QUADTREE_DEFAULT_CAPACITY,
        *,
        depth: int = 0,
        max_depth: int = QUADTREE_MAX_DEPTH,
    ) -> None:
        self.bounds = bounds
        self.capacity = max(int(capacity), 1)
        self.depth = depth
        self.max_depth = max_depth
        self.points: List[ClusterPoint] = []
        self.children: Optional[List["QuadTree"]] = None

    @property
    def subdivided(self) -> bool:
        return self.children is not None

    def __len__(self) -> int:
        total = len(self.points)
        for child in self.children or []:
            total += len(child)
        return total

    def insert(self, point: ClusterPoint) -> bool:
        if not self.bounds.contains(point.lat, point.lon):
            return False

        if self.children is None:
            if len(self.points) < self.capacity or self.depth >= self.max_depth:
                self.points.append(point)
                return True
            self._subdivide()

        if self._insert_into_children(point):
            return True

        LOGGER.debug(
            "quadtree dropped point index=%s lat=%s lon=%s at depth %s",
            point.index,
            point.lat,
            point.lon,
            self.depth,
        )
        return False

    def query(
        self, range_: BoundingBox, found: Optional[List[ClusterPoint]] = None
    ) -> List[ClusterPoint]:
        if found is None:
            found = []
        if not self.bounds.intersects(range_):
            return found

        for p in self.points:
            if range_.contains(p.lat, p.lon):
                found.append(p)

        for child in self.children or []:
            child.query(range_, found)
        return found

    def clear(self) -> None:
        self.points.clear()
        self.children = None

    def _insert_into_children(self, point: ClusterPoint) -> bool:
        for child in self.children or []:
            if child.insert(point):
                return True
        return False

    def _subdivide(self) -> None:
        b = self.bounds
        mid_lat = (b.min_lat + b.max_lat) / 2.0
        mid_lon = (b.min_lon + b.max_lon) / 2.0
        quadrants = (
            BoundingBox(mid_lat, b.min_lon, b.max_lat, mid_lon),
            BoundingBox(mid_lat, mid_lon, b.max_lat, b.max_lon),
            BoundingBox(b.min_lat, b.min_lon, mid_lat, mid_lon),
            BoundingBox(b.min_lat, mid_lon, mid_lat, b.max_lon),
        )
        self.children = [
            QuadTree(
                quadrant,
                self.capacity,
                depth=self.depth + 1,
                max_depth=self.max_depth,
            )
            for quadrant in quadrants
        ]

        for p in self.points:
            if not self._insert_into_children(p):
                LOGGER.debug(
                    "quadtree lost point index=%s during subdivision", p.index
                )
        self.points.clear()


__all__ = ["QuadTree"]
