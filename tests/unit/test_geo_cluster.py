from __future__ import annotations

import random

from geo_engine.cluster import cluster_points
from geo_engine.measure import haversine_m
from geo_engine.types import ClusterPoint


def _points(coords):
    return [ClusterPoint(lat, lon, i) for i, (lat, lon) in enumerate(coords)]


def test_empty_input_or_non_positive_radius() -> None:
    assert cluster_points([], 100.0) == []
    pts = _points([(0.0, 0.0), (0.0, 0.0001)])
    assert cluster_points(pts, 0.0) == []
    assert cluster_points(pts, -1.0) == []


def test_far_apart_points_form_singletons() -> None:
    pts = _points([(0.0, 0.0), (1.0, 1.0), (-1.0, 2.0), (10.0, -10.0)])
    clusters = cluster_points(pts, 100.0)
    assert [c.indices for c in clusters] == [[0], [1], [2], [3]]
    assert [c.center_index for c in clusters] == [0, 1, 2, 3]


def test_nearby_points_join_seed_cluster() -> None:
    pts = _points([(39.9, 116.4), (39.9001, 116.4), (39.9, 116.4001), (40.5, 116.4)])
    clusters = cluster_points(pts, 50.0)
    assert len(clusters) == 2
    assert clusters[0].center_index == 0
    assert clusters[0].indices[0] == 0
    assert sorted(clusters[0].indices) == [0, 1, 2]
    assert clusters[1].indices == [3]
    assert clusters[0].size == 3


def test_greedy_seed_does_not_chain() -> None:
    # a-b and b-c are ~89 m apart, a-c ~178 m.
    a, b, c = (0.0, 0.0), (0.0, 0.0008), (0.0, 0.0016)

    from_a = cluster_points(_points([a, b, c]), 100.0)
    assert [sorted(cl.indices) for cl in from_a] == [[0, 1], [2]]

    from_b = cluster_points(_points([b, a, c]), 100.0)
    assert len(from_b) == 1
    assert sorted(from_b[0].indices) == [0, 1, 2]


def test_negative_indices_are_skipped_and_sparse_indices_kept() -> None:
    pts = [
        ClusterPoint(0.0, 0.0, 5),
        ClusterPoint(0.0, 0.0001, -1),
        ClusterPoint(0.0, 0.0002, 12),
    ]
    clusters = cluster_points(pts, 100.0)
    assert len(clusters) == 1
    assert clusters[0].center_index == 5
    assert sorted(clusters[0].indices) == [5, 12]


def test_identical_points_collapse_into_one_cluster() -> None:
    pts = _points([(48.8566, 2.3522)] * 100)
    clusters = cluster_points(pts, 1.0)
    assert len(clusters) == 1
    assert sorted(clusters[0].indices) == list(range(100))


def test_points_near_pole_search_all_longitudes() -> None:
    pts = _points([(89.99999, 0.0), (89.99999, 90.0)])
    clusters = cluster_points(pts, 10.0)
    assert len(clusters) == 1


def test_clusters_partition_input_and_respect_radius() -> None:
    rng = random.Random(2024)
    pts = _points(
        [(31.2 + rng.uniform(0.0, 0.05), 121.4 + rng.uniform(0.0, 0.05)) for _ in range(300)]
    )
    radius = 500.0
    clusters = cluster_points(pts, radius)

    seen = [i for c in clusters for i in c.indices]
    assert sorted(seen) == list(range(len(pts)))

    for cluster in clusters:
        seed = pts[cluster.center_index]
        assert cluster.indices[0] == seed.index
        for idx in cluster.indices:
            member = pts[idx]
            assert haversine_m(seed.lat, seed.lon, member.lat, member.lon) <= radius


def test_sparse_large_indices_do_not_allocate_by_index() -> None:
    pts = [
        ClusterPoint(0.0, 0.0, 2**40),
        ClusterPoint(0.0, 0.0001, 7),
        ClusterPoint(5.0, 5.0, 2**62),
    ]
    clusters = cluster_points(pts, 100.0)
    assert [c.center_index for c in clusters] == [2**40, 2**62]
    assert clusters[0].indices == [2**40, 7]
    assert clusters[1].indices == [2**62]
