"""Value types shared by the geometry, clustering and projection helpers."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, NamedTuple


class GeoPoint(NamedTuple):
    lat: float
    lon: float


class ClusterPoint(NamedTuple):
    lat: float
    lon: float
    index: int


class HeatmapPoint(NamedTuple):
    lat: float
    lon: float
    weight: float = 1.0


@dataclass(frozen=True)
class BoundingBox:
    """Axis-aligned rectangle in degree space (inclusive on every edge)."""

    min_lat: float
    min_lon: float
    max_lat: float
    max_lon: float

    def contains(self, lat: float, lon: float) -> bool:
        return (
            self.min_lat <= lat <= self.max_lat
            and self.min_lon <= lon <= self.max_lon
        )

    def intersects(self, other: "BoundingBox") -> bool:
        return not (
            other.min_lat > self.max_lat
            or other.max_lat < self.min_lat
            or other.min_lon > self.max_lon
            or other.max_lon < self.min_lon
        )

    def center(self) -> GeoPoint:
        return GeoPoint(
            (self.min_lat + self.max_lat) / 2.0,
            (self.min_lon + self.max_lon) / 2.0,
        )


@dataclass
class ClusterOutput:
    center_index: int
    indices: List[int] = field(default_factory=list)

    @property
    def size(self) -> int:
        return len(self.indices)


@dataclass(frozen=True)
class PathBounds:
    north: float
    south: float
    east: float
    west: float
    center_lat: float
    center_lon: float

    @property
    def is_empty(self) -> bool:
        # The empty-input sentinel is an inverted box.
        return self.south > self.north or self.west > self.east


@dataclass(frozen=True)
class NearestPointResult:
    lat: float
    lon: float
    index: int
    distance_m: float


@dataclass(frozen=True)
class PointAtDistance:
    lat: float
    lon: float
    bearing: float


@dataclass(frozen=True)
class TileResult:
    x: int
    y: int
    z: int


@dataclass(frozen=True)
class PixelResult:
    x: float
    y: float


@dataclass(frozen=True)
class HeatmapGridCell:
    lat: float
    lon: float
    intensity: float


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
    "TileResult",
]
