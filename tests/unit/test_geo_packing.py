from __future__ import annotations

import numpy as np
import pytest

from geo_engine import packing


def test_cluster_packed_layout_for_singletons() -> None:
    packed = packing.cluster_points_packed([0.0, 1.0], [0.0, 1.0], 100.0)
    assert packed.dtype == np.int32
    assert packed.tolist() == [2, 0, 1, 0, 1, 1, 1]


def test_cluster_packed_groups_members_after_header() -> None:
    packed = packing.cluster_points_packed(
        np.array([0.0, 0.0, 5.0]), np.array([0.0, 0.0001, 5.0]), 50.0
    )
    assert packed.tolist() == [2, 0, 2, 0, 1, 2, 1, 2]

    clusters = packing.unpack_clusters(packed)
    assert [(c.center_index, c.indices) for c in clusters] == [(0, [0, 1]), (2, [2])]


@pytest.mark.parametrize(
    "lats, lons", [(None, [1.0]), ([1.0], None), ([1.0, 2.0], [1.0]), ([], [])]
)
def test_cluster_packed_invalid_input_yields_zero_count(lats, lons) -> None:
    assert packing.cluster_points_packed(lats, lons, 100.0).tolist() == [0]


def test_unpack_clusters_tolerates_truncated_buffers() -> None:
    assert packing.unpack_clusters(None) == []
    assert packing.unpack_clusters([]) == []
    assert packing.unpack_clusters([0]) == []
    assert len(packing.unpack_clusters([3, 0, 1, 0])) == 1


def test_polygon_helpers_validate_arrays() -> None:
    lats = [0.0, 0.0, 1.0, 1.0]
    lons = [0.0, 1.0, 1.0, 0.0]
    assert packing.is_point_in_polygon_packed(0.5, 0.5, lats, lons)
    assert not packing.is_point_in_polygon_packed(0.5, 0.5, lats, lons[:3])
    assert not packing.is_point_in_polygon_packed(0.5, 0.5, lats[:2], lons[:2])
    assert packing.polygon_area_packed(lats, lons) > 0
    assert packing.polygon_area_packed(lats, None) == 0.0

    center = packing.centroid_packed(lats, lons)
    assert center.tolist() == pytest.approx([0.5, 0.5])
    assert packing.centroid_packed(lats[:2], lons[:2]) is None


def test_find_point_in_polygons_packed() -> None:
    square_lat = [0.0, 0.0, 1.0, 1.0]
    square_lon = [0.0, 1.0, 1.0, 0.0]
    far_lat = [v + 10.0 for v in square_lat]
    far_lon = [v + 10.0 for v in square_lon]

    assert packing.find_point_in_polygons_packed(
        10.5, 10.5, [square_lat, far_lat], [square_lon, far_lon]
    ) == 1
    assert packing.find_point_in_polygons_packed(5.0, 5.0, [square_lat], [square_lon]) == -1
    assert packing.find_point_in_polygons_packed(0.5, 0.5, [], []) == -1
    assert packing.find_point_in_polygons_packed(0.5, 0.5, None, None) == -1


def test_circle_packed() -> None:
    assert packing.is_point_in_circle_packed(0.0, 0.001, 0.0, 0.0, 150.0)
    assert not packing.is_point_in_circle_packed(0.0, 0.001, 0.0, 0.0, 0.0)


def test_path_helpers_packed() -> None:
    lats = [0.0, 0.0, 0.0]
    lons = [0.0, 0.001, 0.002]

    assert packing.path_length_packed(lats, lons) == pytest.approx(222.39, rel=1e-3)
    assert packing.path_length_packed(lats[:1], lons[:1]) == 0.0

    simplified = packing.simplify_polyline_packed(lats, lons, 1.0)
    assert simplified.tolist() == [0.0, 0.0, 0.0, 0.002]
    assert packing.simplify_polyline_packed(None, lons, 1.0).size == 0

    sample = packing.point_at_distance_packed(lats, lons, 0.0)
    assert sample.tolist() == pytest.approx([0.0, 0.0, 90.0])
    assert packing.point_at_distance_packed(lats, lons, -5.0) is None

    nearest = packing.nearest_point_packed(lats, lons, 0.0005, 0.0015)
    assert nearest.shape == (4,)
    assert nearest[2] == 1.0
    assert packing.nearest_point_packed(lats[:1], lons[:1], 0.0, 0.0) is None


def test_path_bounds_packed_order() -> None:
    bounds = packing.path_bounds_packed([10.0, 12.0], [20.0, 18.0])
    assert bounds.tolist() == [12.0, 10.0, 20.0, 18.0, 11.0, 19.0]
    assert packing.path_bounds_packed([], []) is None


def test_parse_polyline_packed_flattens_lat_first() -> None:
    assert packing.parse_polyline_packed("116.4,39.9;116.5,40.0").tolist() == [
        39.9,
        116.4,
        40.0,
        116.5,
    ]
    assert packing.parse_polyline_packed("").size == 0
    assert packing.parse_polyline_packed(None) is None


def test_heatmap_grid_packed() -> None:
    grid = packing.heatmap_grid_packed([10.0, 10.0], [20.0, 20.0], [1.0, 2.5], 1000.0)
    assert grid.shape == (3,)
    assert grid[2] == pytest.approx(3.5)
    assert packing.heatmap_grid_packed([10.0], [20.0], [], 1000.0) is None
    assert packing.heatmap_grid_packed([], [], [], 1000.0) is None


def test_projection_packed() -> None:
    assert packing.lat_lng_to_tile_packed(0.0, 0.0, 1).tolist() == [1, 1, 1]
    assert packing.lat_lng_to_pixel_packed(0.0, 0.0, 0).tolist() == pytest.approx([128.0, 128.0])
    assert packing.tile_to_lat_lng_packed(0, 0, 0)[1] == pytest.approx(-180.0)
    assert packing.pixel_to_lat_lng_packed(128.0, 128.0, 0).tolist() == pytest.approx(
        [0.0, 0.0], abs=1e-9
    )


def test_find_point_in_polygons_packed_keeps_caller_indices() -> None:
    square_lat = [0.0, 0.0, 1.0, 1.0]
    square_lon = [0.0, 1.0, 1.0, 0.0]
    broken_lat = [5.0, 5.0]
    broken_lon = [5.0]

    index = packing.find_point_in_polygons_packed(
        0.5, 0.5, [broken_lat, None, square_lat], [broken_lon, None, square_lon]
    )
    assert index == 2
