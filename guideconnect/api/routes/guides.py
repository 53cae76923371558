"""
Guide roster and guide schedule routes.

All routes need a session; creating, changing and deleting guides or their
schedules requires the administrator account.
"""

import logging
from typing import List, Literal, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from guideconnect.api.dependencies import require_admin, require_session
from guideconnect.api.schemas.common import SuccessResponse
from guideconnect.api.schemas.guide import (
    GuideCreate,
    GuideListResponse,
    GuideResponse,
    GuideStatsResponse,
    GuideSummary,
    GuideUpdate,
    ScheduleCreate,
    ScheduleResponse,
    ScheduleStatus,
    ScheduleUpdate,
)
from guideconnect.cache import CATALOGUE_DEPENDENT_KEYS, GUIDE_STATS_KEY, StatsCache, get_stats_cache
from guideconnect.database import get_async_session
from guideconnect.exceptions import GuideConnectException
from guideconnect.services import statistics_service
from guideconnect.services.guide_service import GuideService

logger = logging.getLogger(__name__)

router = APIRouter(dependencies=[Depends(require_session)])


@router.get("/guides", response_model=GuideListResponse)
async def list_guides(
    search: Optional[str] = Query(None, description="Name, location or bio"),
    status_filter: Optional[Literal["active", "on_leave", "inactive"]] = Query(
        None, alias="status", description="Dashboard status"
    ),
    location: Optional[str] = Query(None, description="Country, region or city"),
    language: Optional[str] = Query(None, description="Spoken language"),
    specialty: Optional[str] = Query(None, description="Specialty"),
    min_rating: Optional[float] = Query(None, ge=0, le=5, description="Minimum rating"),
    limit: int = Query(10, ge=1, le=100),
    offset: int = Query(0, ge=0),
    db: AsyncSession = Depends(get_async_session),
) -> GuideListResponse:
    try:
        guides, total = await GuideService.list_guides(
            db,
            search=search,
            status=status_filter,
            location=location,
            language=language,
            specialty=specialty,
            min_rating=min_rating,
            limit=limit,
            offset=offset,
        )
        return GuideListResponse(guides=[GuideSummary.from_model(g) for g in guides], total=total)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error fetching guides: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch guides",
        )


@router.post(
    "/guides",
    response_model=GuideResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
)
async def create_guide(
    body: GuideCreate,
    db: AsyncSession = Depends(get_async_session),
    cache: StatsCache = Depends(get_stats_cache),
) -> GuideResponse:
    try:
        guide = await GuideService.create_guide(db, body)
        await cache.invalidate(*CATALOGUE_DEPENDENT_KEYS)
        return GuideResponse.from_model(guide)
    except (HTTPException, GuideConnectException):
        raise
    except Exception as e:
        logger.error(f"Error creating guide: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create guide",
        )


@router.get("/guides/stats", response_model=GuideStatsResponse)
async def guide_stats(
    db: AsyncSession = Depends(get_async_session),
    cache: StatsCache = Depends(get_stats_cache),
):
    try:
        cached = await cache.get_json(GUIDE_STATS_KEY)
        if cached is not None:
            return cached

        stats = await statistics_service.get_guide_stats(db)
        await cache.set_json(GUIDE_STATS_KEY, stats.model_dump(mode="json"))
        return stats
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error fetching guide statistics: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch guide statistics",
        )


@router.get("/guides/top-rated", response_model=List[GuideSummary])
async def top_rated_guides(
    limit: int = Query(5, ge=1, le=50),
    db: AsyncSession = Depends(get_async_session),
) -> List[GuideSummary]:
    try:
        guides = await GuideService.top_rated(db, limit=limit)
        return [GuideSummary.from_model(g) for g in guides]
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error fetching top rated guides: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch top rated guides",
        )


@router.get("/guides/languages", response_model=List[str])
async def guide_languages(db: AsyncSession = Depends(get_async_session)) -> List[str]:
    try:
        return await GuideService.languages(db)
    except Exception as e:
        logger.error(f"Error fetching guide languages: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch guide languages",
        )


@router.get("/guides/specialties", response_model=List[str])
async def guide_specialties(db: AsyncSession = Depends(get_async_session)) -> List[str]:
    try:
        return await GuideService.specialties(db)
    except Exception as e:
        logger.error(f"Error fetching guide specialties: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch guide specialties",
        )


@router.get("/guides/{guide_id}", response_model=GuideResponse)
async def get_guide(guide_id: int, db: AsyncSession = Depends(get_async_session)) -> GuideResponse:
    try:
        guide = await GuideService.get_guide(db, guide_id)
        return GuideResponse.from_model(guide)
    except (HTTPException, GuideConnectException):
        raise
    except Exception as e:
        logger.error(f"Error fetching guide {guide_id}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch guide",
        )


@router.put("/guides/{guide_id}", response_model=GuideResponse, dependencies=[Depends(require_admin)])
async def update_guide(
    guide_id: int,
    body: GuideUpdate,
    db: AsyncSession = Depends(get_async_session),
    cache: StatsCache = Depends(get_stats_cache),
) -> GuideResponse:
    try:
        guide = await GuideService.update_guide(db, guide_id, body)
        await cache.invalidate(*CATALOGUE_DEPENDENT_KEYS)
        return GuideResponse.from_model(guide)
    except (HTTPException, GuideConnectException):
        raise
    except Exception as e:
        logger.error(f"Error updating guide {guide_id}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update guide",
        )


@router.delete("/guides/{guide_id}", response_model=SuccessResponse, dependencies=[Depends(require_admin)])
async def delete_guide(
    guide_id: int,
    db: AsyncSession = Depends(get_async_session),
    cache: StatsCache = Depends(get_stats_cache),
) -> SuccessResponse:
    try:
        await GuideService.delete_guide(db, guide_id)
        await cache.invalidate(*CATALOGUE_DEPENDENT_KEYS)
        return SuccessResponse()
    except (HTTPException, GuideConnectException):
        raise
    except Exception as e:
        logger.error(f"Error deleting guide {guide_id}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to delete guide",
        )


# ============================================================================
# Schedules
# ============================================================================


@router.get("/guides/{guide_id}/schedules", response_model=List[ScheduleResponse])
async def list_schedules(
    guide_id: int,
    status_filter: Optional[ScheduleStatus] = Query(None, alias="status"),
    db: AsyncSession = Depends(get_async_session),
) -> List[ScheduleResponse]:
    try:
        schedules = await GuideService.list_schedules(db, guide_id, status=status_filter)
        return [ScheduleResponse.model_validate(s) for s in schedules]
    except (HTTPException, GuideConnectException):
        raise
    except Exception as e:
        logger.error(f"Error fetching schedules for guide {guide_id}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch guide schedules",
        )


@router.post(
    "/guides/{guide_id}/schedules",
    response_model=ScheduleResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
)
async def create_schedule(
    guide_id: int,
    body: ScheduleCreate,
    db: AsyncSession = Depends(get_async_session),
    cache: StatsCache = Depends(get_stats_cache),
) -> ScheduleResponse:
    try:
        schedule = await GuideService.create_schedule(db, guide_id, body)
        await cache.invalidate(GUIDE_STATS_KEY)
        return ScheduleResponse.model_validate(schedule)
    except (HTTPException, GuideConnectException):
        raise
    except Exception as e:
        logger.error(f"Error creating schedule for guide {guide_id}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create schedule",
        )


@router.get("/guides/{guide_id}/schedules/{schedule_id}", response_model=ScheduleResponse)
async def get_schedule(
    guide_id: int,
    schedule_id: int,
    db: AsyncSession = Depends(get_async_session),
) -> ScheduleResponse:
    try:
        schedule = await GuideService.get_schedule(db, guide_id, schedule_id)
        return ScheduleResponse.model_validate(schedule)
    except (HTTPException, GuideConnectException):
        raise
    except Exception as e:
        logger.error(f"Error fetching schedule {schedule_id}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch schedule",
        )


@router.put(
    "/guides/{guide_id}/schedules/{schedule_id}",
    response_model=ScheduleResponse,
    dependencies=[Depends(require_admin)],
)
async def update_schedule(
    guide_id: int,
    schedule_id: int,
    body: ScheduleUpdate,
    db: AsyncSession = Depends(get_async_session),
    cache: StatsCache = Depends(get_stats_cache),
) -> ScheduleResponse:
    try:
        schedule = await GuideService.update_schedule(db, guide_id, schedule_id, body)
        await cache.invalidate(GUIDE_STATS_KEY)
        return ScheduleResponse.model_validate(schedule)
    except (HTTPException, GuideConnectException):
        raise
    except Exception as e:
        logger.error(f"Error updating schedule {schedule_id}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update schedule",
        )


@router.delete(
    "/guides/{guide_id}/schedules/{schedule_id}",
    response_model=SuccessResponse,
    dependencies=[Depends(require_admin)],
)
async def delete_schedule(
    guide_id: int,
    schedule_id: int,
    db: AsyncSession = Depends(get_async_session),
    cache: StatsCache = Depends(get_stats_cache),
) -> SuccessResponse:
    try:
        await GuideService.delete_schedule(db, guide_id, schedule_id)
        await cache.invalidate(GUIDE_STATS_KEY)
        return SuccessResponse()
    except (HTTPException, GuideConnectException):
        raise
    except Exception as e:
        logger.error(f"Error deleting schedule {schedule_id}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to delete schedule",
        )
