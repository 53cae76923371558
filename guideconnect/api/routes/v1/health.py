"""
Dependency health checks shared by /health and /api/v1/health.
"""

import logging
from typing import Any, Dict, Tuple

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from guideconnect import __version__, cache
from guideconnect.api.routes.v1.version import API_VERSION
from guideconnect.config import settings
from guideconnect.database import check_db_connection

logger = logging.getLogger(__name__)

router = APIRouter()


async def check_dependencies() -> Tuple[bool, Dict[str, str]]:
    """
    Check the database and the optional Redis cache.

    Only the database decides overall health; Redis is reported as
    "disabled" when it is not configured or unavailable.
    """
    db_healthy = await check_db_connection()

    redis_state = "disabled"
    if cache.redis_client is not None:
        try:
            await cache.redis_client.ping()
            redis_state = "healthy"
        except Exception as e:
            logger.error(f"Redis health check failed: {e}")
            redis_state = "unhealthy"

    return db_healthy, {
        "database": "healthy" if db_healthy else "unhealthy",
        "redis": redis_state,
    }


@router.get("", status_code=status.HTTP_200_OK)
async def health_check() -> JSONResponse:
    """Health of the API and its dependencies (503 if the database is down)."""
    db_healthy, dependencies = await check_dependencies()

    response: Dict[str, Any] = {
        "status": "healthy" if db_healthy else "unhealthy",
        "api_version": API_VERSION,
        "app_version": __version__,
        "environment": settings.environment,
        "dependencies": dependencies,
    }
    status_code = status.HTTP_200_OK if db_healthy else status.HTTP_503_SERVICE_UNAVAILABLE
    return JSONResponse(content=response, status_code=status_code)
