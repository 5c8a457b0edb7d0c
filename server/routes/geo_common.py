from __future__ import annotations

import logging

from fastapi import HTTPException, status

from server.config import get_settings
from server.metrics import observe_points

logger = logging.getLogger("server.geo")


def enforce_point_limit(operation: str, count: int) -> None:
    """Reject payloads above ``GEO_MAX_POINTS`` and record the request size."""

    limit = get_settings().max_points
    if count > limit:
        logger.warning(
            "%s rejected: %d points exceeds limit of %d", operation, count, limit
        )
        raise HTTPException(
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            detail=f"too many points ({count} > {limit})",
        )
    observe_points(operation, count)


__all__ = ["enforce_point_limit", "logger"]
