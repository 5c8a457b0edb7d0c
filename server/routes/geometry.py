from __future__ import annotations

from fastapi import APIRouter, Depends

from geo_engine.measure import (
    bearing_deg,
    centroid,
    distance,
    find_point_in_polygons,
    is_point_in_circle,
    is_point_in_polygon,
    polygon_area,
    rectangle_area,
)
from server.schemas.geo import (
    AreaResponse,
    CircleContainsRequest,
    ContainsResponse,
    DistanceRequest,
    DistanceResponse,
    LatLon,
    PolygonContainsRequest,
    PolygonIndexResponse,
    PolygonRequest,
    PolygonsContainsRequest,
    RectangleAreaRequest,
)
from server.security import require_api_key

from .geo_common import enforce_point_limit

router = APIRouter(
    prefix="/geo", tags=["geo"], dependencies=[Depends(require_api_key)]
)


@router.post("/distance", response_model=DistanceResponse)
async def measure_distance(payload: DistanceRequest) -> DistanceResponse:
    start, end = payload.start, payload.end
    return DistanceResponse(
        distance_m=distance(start, end),
        bearing=bearing_deg(start.lat, start.lon, end.lat, end.lon),
    )


@router.post("/contains/circle", response_model=ContainsResponse)
async def contains_circle(payload: CircleContainsRequest) -> ContainsResponse:
    return ContainsResponse(
        inside=is_point_in_circle(payload.point, payload.center, payload.radius_m)
    )


@router.post("/contains/polygon", response_model=ContainsResponse)
async def contains_polygon(payload: PolygonContainsRequest) -> ContainsResponse:
    enforce_point_limit("contains_polygon", len(payload.polygon))
    return ContainsResponse(inside=is_point_in_polygon(payload.point, payload.polygon))


@router.post("/contains/polygons", response_model=PolygonIndexResponse)
async def contains_polygons(payload: PolygonsContainsRequest) -> PolygonIndexResponse:
    enforce_point_limit(
        "contains_polygons", sum(len(polygon) for polygon in payload.polygons)
    )
    return PolygonIndexResponse(
        index=find_point_in_polygons(payload.point, payload.polygons)
    )


@router.post("/area/polygon", response_model=AreaResponse)
async def area_polygon(payload: PolygonRequest) -> AreaResponse:
    enforce_point_limit("area_polygon", len(payload.polygon))
    return AreaResponse(area_m2=polygon_area(payload.polygon))


@router.post("/area/rectangle", response_model=AreaResponse)
async def area_rectangle(payload: RectangleAreaRequest) -> AreaResponse:
    return AreaResponse(area_m2=rectangle_area(payload.south_west, payload.north_east))


@router.post("/centroid", response_model=LatLon)
async def polygon_centroid(payload: PolygonRequest) -> LatLon:
    enforce_point_limit("centroid", len(payload.polygon))
    return LatLon.from_point(centroid(payload.polygon))


__all__ = ["router"]
