"""
Admin dashboard overview route.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from guideconnect.api.dependencies import require_session
from guideconnect.api.schemas.stats import DashboardResponse
from guideconnect.cache import DASHBOARD_KEY, StatsCache, get_stats_cache
from guideconnect.database import get_async_session
from guideconnect.services import statistics_service

logger = logging.getLogger(__name__)

router = APIRouter(dependencies=[Depends(require_session)])


@router.get("/dashboard", response_model=DashboardResponse, status_code=status.HTTP_200_OK)
async def get_dashboard(
    db: AsyncSession = Depends(get_async_session),
    cache: StatsCache = Depends(get_stats_cache),
):
    """
    Dashboard overview: bookings, destinations, guides, customers, revenue,
    travelers and chart series, with month-over-month growth.
    """
    try:
        cached = await cache.get_json(DASHBOARD_KEY)
        if cached is not None:
            return cached

        stats = await statistics_service.get_dashboard_stats(db)
        await cache.set_json(DASHBOARD_KEY, stats.model_dump(mode="json"))
        return stats

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error fetching dashboard data: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch dashboard data",
        )
