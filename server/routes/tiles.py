from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from geo_engine.constants import MAX_ZOOM
from geo_engine.heatmap import generate_heatmap_grid
from geo_engine.projection import (
    lat_lng_to_pixel,
    lat_lng_to_tile,
    pixel_to_lat_lng,
    tile_to_lat_lng,
)
from geo_engine.types import HeatmapPoint
from server.config import get_settings
from server.schemas.geo import (
    HeatmapCellOut,
    HeatmapRequest,
    HeatmapResponse,
    LatLon,
    PixelResponse,
    TileResponse,
)
from server.security import require_api_key

from .geo_common import enforce_point_limit, logger

router = APIRouter(
    prefix="/geo", tags=["geo"], dependencies=[Depends(require_api_key)]
)


@router.get("/tile", response_model=TileResponse)
async def tile_for_point(
    lat: float = Query(..., allow_inf_nan=False),
    lon: float = Query(..., allow_inf_nan=False),
    zoom: int = Query(...),
) -> TileResponse:
    tile = lat_lng_to_tile(lat, lon, zoom)
    return TileResponse(x=tile.x, y=tile.y, z=tile.z)


@router.get("/tile/latlng", response_model=LatLon)
async def tile_origin(
    x: int = Query(...), y: int = Query(...), zoom: int = Query(...)
) -> LatLon:
    return LatLon.from_point(tile_to_lat_lng(x, y, zoom))


@router.get("/pixel", response_model=PixelResponse)
async def pixel_for_point(
    lat: float = Query(..., allow_inf_nan=False),
    lon: float = Query(..., allow_inf_nan=False),
    zoom: int = Query(...),
) -> PixelResponse:
    pixel = lat_lng_to_pixel(lat, lon, zoom)
    return PixelResponse(x=pixel.x, y=pixel.y, z=max(0, min(MAX_ZOOM, zoom)))


@router.get("/pixel/latlng", response_model=LatLon)
async def pixel_origin(
    x: float = Query(..., allow_inf_nan=False),
    y: float = Query(..., allow_inf_nan=False),
    zoom: int = Query(...),
) -> LatLon:
    return LatLon.from_point(pixel_to_lat_lng(x, y, zoom))


@router.post("/heatmap", response_model=HeatmapResponse)
async def heatmap(payload: HeatmapRequest) -> HeatmapResponse:
    enforce_point_limit("heatmap", len(payload.points))
    grid = (
        payload.grid_size_m
        if payload.grid_size_m is not None
        else get_settings().default_heatmap_grid_m
    )
    cells = generate_heatmap_grid(
        [HeatmapPoint(p.lat, p.lon, p.weight) for p in payload.points], grid
    )
    logger.info("heatmap: %d points -> %d cells", len(payload.points), len(cells))
    return HeatmapResponse(
        grid_size_m=grid,
        cells=[
            HeatmapCellOut(lat=c.lat, lon=c.lon, intensity=c.intensity) for c in cells
        ],
    )


__all__ = ["router"]
