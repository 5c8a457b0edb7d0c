"""Grid aggregation of weighted points for heatmap overlays."""

from __future__ import annotations

import logging
from math import cos, floor, isfinite, radians
from typing import Dict, List, Sequence, Tuple

from .constants import HEATMAP_METERS_PER_DEGREE, POLE_COS_EPSILON
from .types import HeatmapGridCell, HeatmapPoint

LOGGER = logging.getLogger(__name__)


def _lon_step(band_center_lat: float, grid_size_m: float) -> float:
    cos_lat = abs(cos(radians(band_center_lat)))
    if cos_lat < POLE_COS_EPSILON:
        return 360.0
    return grid_size_m / (HEATMAP_METERS_PER_DEGREE * cos_lat)


def generate_heatmap_grid(
    points: Sequence[HeatmapPoint], grid_size_m: float
) -> List[HeatmapGridCell]:
    """Bucket weighted points into ``grid_size_m`` cells and sum their weights.

    Cells are roughly square on the ground: the cell height is fixed in
    degrees latitude while the width widens with the latitude band. One cell
    is emitted per non-empty bucket, centred in that bucket.
    """

    if not points or not (isfinite(grid_size_m) and grid_size_m > 0):
        return []

    lat_step = grid_size_m / HEATMAP_METERS_PER_DEGREE
    if lat_step <= 0:
        return []
    buckets: Dict[Tuple[int, int], float] = {}
    lon_steps: Dict[int, float] = {}
    skipped = 0

    for point in points:
        if not (isfinite(point.lat) and isfinite(point.lon) and isfinite(point.weight)):
            skipped += 1
            continue
        lat_cell = point.lat / lat_step
        if not isfinite(lat_cell):
            skipped += 1
            continue
        lat_idx = floor(lat_cell)
        lon_step = lon_steps.get(lat_idx)
        if lon_step is None:
            lon_step = _lon_step((lat_idx + 0.5) * lat_step, grid_size_m)
            lon_steps[lat_idx] = lon_step
        lon_cell = point.lon / lon_step if lon_step > 0 else float("nan")
        if not isfinite(lon_cell):
            skipped += 1
            continue
        key = (lat_idx, floor(lon_cell))
        buckets[key] = buckets.get(key, 0.0) + point.weight

    if skipped:
        LOGGER.debug("heatmap skipped %d points with non-finite cells", skipped)

    return [
        HeatmapGridCell(
            lat=(lat_idx + 0.5) * lat_step,
            lon=(lon_idx + 0.5) * lon_steps[lat_idx],
            intensity=weight,
        )
        for (lat_idx, lon_idx), weight in buckets.items()
    ]


__all__ = ["generate_heatmap_grid"]
