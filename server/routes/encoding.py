from __future__ import annotations

from fastapi import APIRouter, Depends

from geo_engine.constants import GEOHASH_MAX_PRECISION, GEOHASH_MIN_PRECISION
from geo_engine.encoding import encode_geohash, parse_polyline
from server.config import get_settings
from server.schemas.geo import (
    GeohashRequest,
    GeohashResponse,
    LatLon,
    PointsResponse,
    PolylineParseRequest,
)
from server.security import require_api_key

from .geo_common import enforce_point_limit

router = APIRouter(
    prefix="/geo", tags=["geo"], dependencies=[Depends(require_api_key)]
)


@router.post("/geohash", response_model=GeohashResponse)
async def geohash(payload: GeohashRequest) -> GeohashResponse:
    requested = (
        payload.precision
        if payload.precision is not None
        else get_settings().default_geohash_precision
    )
    precision = max(GEOHASH_MIN_PRECISION, min(GEOHASH_MAX_PRECISION, requested))
    return GeohashResponse(
        geohash=encode_geohash(payload.point.lat, payload.point.lon, precision),
        precision=precision,
    )


@router.post("/polyline/parse", response_model=PointsResponse)
async def polyline_parse(payload: PolylineParseRequest) -> PointsResponse:
    points = parse_polyline(payload.polyline)
    enforce_point_limit("polyline_parse", len(points))
    return PointsResponse(points=[LatLon.from_point(p) for p in points])


__all__ = ["router"]
