import platform
import time
from typing import Any, Dict

from server.config import get_settings
from server.metrics import BUILD_VERSION, GIT_SHA


async def health() -> Dict[str, Any]:
    settings = get_settings()
    return {
        "status": "ok",
        "version": BUILD_VERSION,
        "git": GIT_SHA,
        "ts": time.time(),
        "limits": {
            "max_points": settings.max_points,
        },
        "runtime": {
            "python": platform.python_version(),
        },
    }
