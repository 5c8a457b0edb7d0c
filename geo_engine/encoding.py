"""Geohash encoding and AMap-style polyline string parsing."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from .constants import GEOHASH_BASE32, GEOHASH_MAX_PRECISION, GEOHASH_MIN_PRECISION
from .types import GeoPoint


@dataclass
class _GeohashState:
    bit: int = 0
    char: int = 0
    even: bool = True

    def push(self, on: bool) -> Optional[str]:
        """Record one bit; return the finished base-32 character every fifth bit."""
        if on:
            self.char |= 1 << (4 - self.bit)
        self.even = not self.even
        if self.bit < 4:
            self.bit += 1
            return None
        out = GEOHASH_BASE32[self.char]
        self.bit = 0
        self.char = 0
        return out


def encode_geohash(lat: float, lon: float, precision: int) -> str:
    precision = max(GEOHASH_MIN_PRECISION, min(GEOHASH_MAX_PRECISION, int(precision)))

    min_lat, max_lat = -90.0, 90.0
    min_lon, max_lon = -180.0, 180.0
    state = _GeohashState()
    chars: List[str] = []

    while len(chars) < precision:
        if state.even:
            mid = (min_lon + max_lon) / 2.0
            on = lon > mid
            if on:
                min_lon = mid
            else:
                max_lon = mid
        else:
            mid = (min_lat + max_lat) / 2.0
            on = lat > mid
            if on:
                min_lat = mid
            else:
                max_lat = mid

        ch = state.push(on)
        if ch is not None:
            chars.append(ch)

    return "".join(chars)


def parse_polyline(text: Optional[str]) -> List[GeoPoint]:
    """Parse ``"lon,lat;lon,lat;..."`` into latitude-first points.

    Note the input is longitude first. Malformed pairs are skipped.
    """
    if not text:
        return []

    points: List[GeoPoint] = []
    for segment in text.split(";"):
        if "," not in segment:
            continue
        lon_text, lat_text = segment.split(",")[:2]
        try:
            lon = float(lon_text)
            lat = float(lat_text)
        except ValueError:
            continue
        points.append(GeoPoint(lat, lon))
    return points


__all__ = ["encode_geohash", "parse_polyline"]
