"""
API version information endpoint.
"""

from typing import Dict

from fastapi import APIRouter

from guideconnect import __app_name__, __version__
from guideconnect.config import settings

API_VERSION = "1.0.0"

router = APIRouter()


@router.get("", response_model=Dict[str, str])
async def get_version() -> Dict[str, str]:
    """Version details of the application and the v1 API."""
    return {
        "api_version": API_VERSION,
        "app_name": __app_name__,
        "app_version": __version__,
        "environment": settings.environment,
        "status": "stable",
    }
