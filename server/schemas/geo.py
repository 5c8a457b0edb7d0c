"""Pydantic models for the geo endpoints."""

from __future__ import annotations

from typing import Annotated, Any, List, Optional

from pydantic import (
    AliasChoices,
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Field,
    model_validator,
)

from geo_engine.coords import normalize_lat_lng
from geo_engine.types import GeoPoint


def _coerce_point(value: Any) -> GeoPoint:
    try:
        return normalize_lat_lng(value)
    except TypeError as exc:
        raise ValueError(f"invalid coordinate: {value!r}") from exc


PointIn = Annotated[GeoPoint, BeforeValidator(_coerce_point)]


class GeoRequest(BaseModel):
    """Base for request bodies; NaN and infinity are rejected with a 422."""

    model_config = ConfigDict(populate_by_name=True, allow_inf_nan=False)


class LatLon(BaseModel):
    lat: float
    lon: float

    @classmethod
    def from_point(cls, point: GeoPoint) -> "LatLon":
        return cls(lat=point[0], lon=point[1])


class ClusterRequest(GeoRequest):
    points: List[PointIn]
    radius_m: Optional[float] = Field(
        default=None, validation_alias=AliasChoices("radius_m", "radiusM")
    )


class ClusterItem(BaseModel):
    center_index: int = Field(alias="centerIndex")
    indices: List[int]

    model_config = ConfigDict(populate_by_name=True)


class ClusterResponse(BaseModel):
    radius_m: float = Field(alias="radiusM")
    clusters: List[ClusterItem]
    packed: List[int]

    model_config = ConfigDict(populate_by_name=True)


class DistanceRequest(GeoRequest):
    start: PointIn
    end: PointIn


class DistanceResponse(BaseModel):
    distance_m: float = Field(alias="distanceM")
    bearing: float

    model_config = ConfigDict(populate_by_name=True)


class CircleContainsRequest(GeoRequest):
    point: PointIn
    center: PointIn
    radius_m: float = Field(validation_alias=AliasChoices("radius_m", "radiusM"))


class PolygonRequest(GeoRequest):
    polygon: List[PointIn]


class PolygonContainsRequest(PolygonRequest):
    point: PointIn


class PolygonsContainsRequest(GeoRequest):
    point: PointIn
    polygons: List[List[PointIn]]


class ContainsResponse(BaseModel):
    inside: bool


class PolygonIndexResponse(BaseModel):
    index: int


class RectangleAreaRequest(GeoRequest):
    south_west: PointIn = Field(
        validation_alias=AliasChoices("south_west", "southWest")
    )
    north_east: PointIn = Field(
        validation_alias=AliasChoices("north_east", "northEast")
    )


class AreaResponse(BaseModel):
    area_m2: float = Field(alias="areaM2")

    model_config = ConfigDict(populate_by_name=True)


class PathRequest(GeoRequest):
    points: List[PointIn]


class SimplifyRequest(PathRequest):
    tolerance_m: float = Field(
        validation_alias=AliasChoices("tolerance_m", "toleranceM")
    )


class PointsResponse(BaseModel):
    points: List[LatLon]


class LengthResponse(BaseModel):
    length_m: float = Field(alias="lengthM")

    model_config = ConfigDict(populate_by_name=True)


class PointAtRequest(PathRequest):
    distance_m: float = Field(
        validation_alias=AliasChoices("distance_m", "distanceM")
    )


class PointAtResponse(BaseModel):
    point: Optional[LatLon] = None
    bearing: Optional[float] = None


class NearestRequest(PathRequest):
    target: PointIn


class NearestResponse(BaseModel):
    point: Optional[LatLon] = None
    segment_index: int = Field(alias="segmentIndex")
    distance_m: Optional[float] = Field(default=None, alias="distanceM")

    model_config = ConfigDict(populate_by_name=True)


class BoundsResponse(BaseModel):
    north: float
    south: float
    east: float
    west: float
    center: LatLon
    empty: bool


class GeohashRequest(GeoRequest):
    point: PointIn
    precision: Optional[int] = None


class GeohashResponse(BaseModel):
    geohash: str
    precision: int


class PolylineParseRequest(GeoRequest):
    polyline: str


class TileResponse(BaseModel):
    x: int
    y: int
    z: int


class PixelResponse(BaseModel):
    x: float
    y: float
    z: int


class HeatmapPointIn(GeoRequest):
    lat: float = Field(validation_alias=AliasChoices("lat", "latitude"))
    lon: float = Field(validation_alias=AliasChoices("lon", "lng", "longitude"))
    weight: float = 1.0

    @model_validator(mode="before")
    @classmethod
    def _from_sequence(cls, value: Any) -> Any:
        # [lon, lat] or [lon, lat, weight], like every other point payload.
        if isinstance(value, (list, tuple)):
            point = _coerce_point(value)
            weight = value[2] if len(value) > 2 else 1.0
            return {"lat": point.lat, "lon": point.lon, "weight": weight}
        return value


class HeatmapRequest(GeoRequest):
    points: List[HeatmapPointIn]
    grid_size_m: Optional[float] = Field(
        default=None, validation_alias=AliasChoices("grid_size_m", "gridSizeM")
    )


class HeatmapCellOut(BaseModel):
    lat: float
    lon: float
    intensity: float


class HeatmapResponse(BaseModel):
    grid_size_m: float = Field(alias="gridSizeM")
    cells: List[HeatmapCellOut]

    model_config = ConfigDict(populate_by_name=True)


__all__ = [
    "AreaResponse",
    "BoundsResponse",
    "CircleContainsRequest",
    "ClusterItem",
    "ClusterRequest",
    "ClusterResponse",
    "ContainsResponse",
    "DistanceRequest",
    "DistanceResponse",
    "GeoRequest",
    "GeohashRequest",
    "GeohashResponse",
    "HeatmapCellOut",
    "HeatmapPointIn",
    "HeatmapRequest",
    "HeatmapResponse",
    "LatLon",
    "LengthResponse",
    "NearestRequest",
    "NearestResponse",
    "PathRequest",
    "PixelResponse",
    "PointAtRequest",
    "PointAtResponse",
    "PointIn",
    "PointsResponse",
    "PolygonContainsRequest",
    "PolygonIndexResponse",
    "PolygonRequest",
    "PolygonsContainsRequest",
    "PolylineParseRequest",
    "RectangleAreaRequest",
    "SimplifyRequest",
    "TileResponse",
]
