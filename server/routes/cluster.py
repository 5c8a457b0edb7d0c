from __future__ import annotations

from fastapi import APIRouter, Depends

from geo_engine.packing import cluster_points_packed, unpack_clusters
from server.config import get_settings
from server.schemas.geo import ClusterItem, ClusterRequest, ClusterResponse
from server.security import require_api_key

from .geo_common import enforce_point_limit, logger

router = APIRouter(
    prefix="/geo", tags=["geo"], dependencies=[Depends(require_api_key)]
)


@router.post("/cluster", response_model=ClusterResponse)
async def cluster(payload: ClusterRequest) -> ClusterResponse:
    enforce_point_limit("cluster", len(payload.points))
    radius = (
        payload.radius_m
        if payload.radius_m is not None
        else get_settings().default_cluster_radius_m
    )

    packed = cluster_points_packed(
        [p.lat for p in payload.points], [p.lon for p in payload.points], radius
    )
    clusters = unpack_clusters(packed)
    logger.info(
        "cluster: %d points -> %d clusters (radius=%.1fm)",
        len(payload.points),
        len(clusters),
        radius,
    )
    return ClusterResponse(
        radius_m=radius,
        clusters=[
            ClusterItem(center_index=c.center_index, indices=c.indices)
            for c in clusters
        ],
        packed=[int(v) for v in packed],
    )


__all__ = ["router"]
