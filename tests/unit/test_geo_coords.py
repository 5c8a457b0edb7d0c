from __future__ import annotations

import logging
import math

import pytest

from geo_engine.coords import normalize_lat_lng, normalize_lat_lng_list
from geo_engine.types import GeoPoint


@pytest.mark.parametrize(
    "value",
    [
        {"latitude": 39.9, "longitude": 116.4},
        {"lat": 39.9, "lng": 116.4},
        {"lat": "39.9", "lon": "116.4"},
        [116.4, 39.9],
        (116.4, 39.9, 12.0),
        GeoPoint(39.9, 116.4),
    ],
)
def test_normalize_accepts_common_shapes(value) -> None:
    assert normalize_lat_lng(value) == GeoPoint(39.9, 116.4)


def test_normalize_swaps_lat_first_sequence(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING, logger="geo_engine.coords"):
        point = normalize_lat_lng([39.9, 116.4])
    assert point == GeoPoint(39.9, 116.4)
    assert "looks like [lat, lon]" in caplog.text


def test_normalize_keeps_valid_lon_lat_without_warning(
    caplog: pytest.LogCaptureFixture,
) -> None:
    with caplog.at_level(logging.WARNING, logger="geo_engine.coords"):
        assert normalize_lat_lng([10.0, 20.0]) == GeoPoint(20.0, 10.0)
    assert caplog.text == ""


@pytest.mark.parametrize("value", [{"lat": 1.0}, [1.0], "1,2", 42, None])
def test_normalize_rejects_unusable_values(value) -> None:
    with pytest.raises(ValueError):
        normalize_lat_lng(value)


def test_normalize_list() -> None:
    assert normalize_lat_lng_list(None) == []
    assert normalize_lat_lng_list([[1.0, 2.0], {"lat": 3.0, "lon": 4.0}]) == [
        GeoPoint(2.0, 1.0),
        GeoPoint(3.0, 4.0),
    ]


@pytest.mark.parametrize(
    "value",
    [
        [math.inf, 10.0],
        [10.0, math.nan],
        {"lat": "nan", "lon": 1.0},
        GeoPoint(math.inf, 0.0),
    ],
)
def test_normalize_rejects_non_finite_coordinates(value) -> None:
    with pytest.raises(ValueError):
        normalize_lat_lng(value)
