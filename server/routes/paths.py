from __future__ import annotations

from fastapi import APIRouter, Depends

from geo_engine.paths import (
    nearest_point_on_path,
    path_bounds,
    path_length,
    point_at_distance,
    simplify_polyline,
)
from server.schemas.geo import (
    BoundsResponse,
    LatLon,
    LengthResponse,
    NearestRequest,
    NearestResponse,
    PathRequest,
    PointAtRequest,
    PointAtResponse,
    PointsResponse,
    SimplifyRequest,
)
from server.security import require_api_key

from .geo_common import enforce_point_limit, logger

router = APIRouter(
    prefix="/geo/path", tags=["geo"], dependencies=[Depends(require_api_key)]
)


@router.post("/simplify", response_model=PointsResponse)
async def simplify(payload: SimplifyRequest) -> PointsResponse:
    enforce_point_limit("simplify", len(payload.points))
    simplified = simplify_polyline(payload.points, payload.tolerance_m)
    logger.info(
        "simplify: %d -> %d points (tolerance=%.2fm)",
        len(payload.points),
        len(simplified),
        payload.tolerance_m,
    )
    return PointsResponse(points=[LatLon.from_point(p) for p in simplified])


@router.post("/length", response_model=LengthResponse)
async def length(payload: PathRequest) -> LengthResponse:
    enforce_point_limit("path_length", len(payload.points))
    return LengthResponse(length_m=path_length(payload.points))


@router.post("/point-at", response_model=PointAtResponse)
async def point_at(payload: PointAtRequest) -> PointAtResponse:
    enforce_point_limit("point_at", len(payload.points))
    sample = point_at_distance(payload.points, payload.distance_m)
    if sample is None:
        return PointAtResponse()
    return PointAtResponse(
        point=LatLon(lat=sample.lat, lon=sample.lon), bearing=sample.bearing
    )


@router.post("/nearest", response_model=NearestResponse)
async def nearest(payload: NearestRequest) -> NearestResponse:
    enforce_point_limit("nearest", len(payload.points))
    if not payload.points:
        return NearestResponse(point=None, segment_index=0, distance_m=None)
    result = nearest_point_on_path(payload.points, payload.target)
    return NearestResponse(
        point=LatLon(lat=result.lat, lon=result.lon),
        segment_index=result.index,
        distance_m=result.distance_m,
    )


@router.post("/bounds", response_model=BoundsResponse)
async def bounds(payload: PathRequest) -> BoundsResponse:
    enforce_point_limit("bounds", len(payload.points))
    result = path_bounds(payload.points)
    return BoundsResponse(
        north=result.north,
        south=result.south,
        east=result.east,
        west=result.west,
        center=LatLon(lat=result.center_lat, lon=result.center_lon),
        empty=result.is_empty,
    )


__all__ = ["router"]
