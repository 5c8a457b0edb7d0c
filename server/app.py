from __future__ import annotations

import logging
import os

from fastapi import APIRouter, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from server.api.health import health as _health_handler
from server.metrics import MetricsMiddleware, metrics_app

from .routes.cluster import router as cluster_router
from .routes.encoding import router as encoding_router
from .routes.geometry import router as geometry_router
from .routes.paths import router as paths_router
from .routes.tiles import router as tiles_router

logger = logging.getLogger("server.app")


def create_app() -> FastAPI:
    app = FastAPI(title="geo-engine")

    allow = os.getenv(
        "CORS_ALLOW_ORIGINS", "http://localhost,http://127.0.0.1"
    ).split(",")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[o.strip() for o in allow if o.strip()],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(MetricsMiddleware)

    app.include_router(cluster_router)
    app.include_router(geometry_router)
    app.include_router(paths_router)
    app.include_router(encoding_router)
    app.include_router(tiles_router)
    app.add_api_route(
        "/health",
        _health_handler,
        methods=["GET"],
        response_model=None,
        tags=["health"],
    )

    metrics_router = APIRouter()

    @metrics_router.get("/metrics", include_in_schema=False)
    async def _metrics_endpoint(request: Request):
        return await metrics_app(request)

    app.include_router(metrics_router)
    logger.debug("geo service app created")
    return app


app = create_app()
