from __future__ import annotations

import math

import pytest

from geo_engine.heatmap import generate_heatmap_grid
from geo_engine.types import HeatmapPoint


def test_heatmap_empty_or_invalid_grid() -> None:
    assert generate_heatmap_grid([], 500.0) == []
    assert generate_heatmap_grid([HeatmapPoint(1.0, 1.0)], 0.0) == []
    assert generate_heatmap_grid([HeatmapPoint(1.0, 1.0)], -10.0) == []


def test_heatmap_sums_weights_per_cell() -> None:
    points = [
        HeatmapPoint(10.0, 20.0, 1.0),
        HeatmapPoint(10.0, 20.0, 2.0),
        HeatmapPoint(11.0, 21.0),
    ]
    cells = generate_heatmap_grid(points, 1000.0)
    assert len(cells) == 2
    assert cells[0].intensity == pytest.approx(3.0)
    assert cells[1].intensity == pytest.approx(1.0)
    assert sum(c.intensity for c in cells) == pytest.approx(sum(p.weight for p in points))


def test_heatmap_cell_is_centered_near_its_points() -> None:
    grid_m = 1000.0
    lat_step = grid_m / 111_320.0
    cells = generate_heatmap_grid([HeatmapPoint(45.123, 7.456)], grid_m)
    assert len(cells) == 1
    cell = cells[0]
    assert abs(cell.lat - 45.123) <= lat_step / 2
    # Cells widen with latitude, so the longitude half-width is larger.
    assert abs(cell.lon - 7.456) <= lat_step


def test_heatmap_emits_cells_in_first_seen_order() -> None:
    points = [HeatmapPoint(5.0, 5.0), HeatmapPoint(-5.0, -5.0), HeatmapPoint(5.0, 5.0)]
    cells = generate_heatmap_grid(points, 500.0)
    assert [c.intensity for c in cells] == [2.0, 1.0]
    assert cells[0].lat > 0 > cells[1].lat


def test_heatmap_handles_pole() -> None:
    cells = generate_heatmap_grid([HeatmapPoint(90.0, 10.0, 4.0)], 1000.0)
    assert len(cells) == 1
    assert cells[0].intensity == 4.0


@pytest.mark.parametrize(
    "bad",
    [
        HeatmapPoint(math.nan, 1.0),
        HeatmapPoint(1.0, math.inf),
        HeatmapPoint(-math.inf, 1.0),
        HeatmapPoint(1.0, 1.0, math.nan),
    ],
)
def test_heatmap_skips_non_finite_points(bad) -> None:
    cells = generate_heatmap_grid([bad, HeatmapPoint(10.0, 20.0, 2.0)], 500.0)
    assert len(cells) == 1
    assert cells[0].intensity == 2.0


@pytest.mark.parametrize("grid", [math.nan, math.inf, 5e-324])
def test_heatmap_degenerate_grid_sizes(grid) -> None:
    assert generate_heatmap_grid([HeatmapPoint(10.0, 20.0)], grid) == []
