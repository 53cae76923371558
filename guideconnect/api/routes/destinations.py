"""
Destination catalogue routes.

Reads are public; writes and statistics require the administrator account.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from guideconnect.api.dependencies import require_admin
from guideconnect.api.schemas.destination import (
    CountryCount,
    DestinationCreate,
    DestinationListResponse,
    DestinationResponse,
    DestinationStatsResponse,
    DestinationUpdate,
    Difficulty,
)
from guideconnect.cache import CATALOGUE_DEPENDENT_KEYS, StatsCache, get_stats_cache
from guideconnect.database import get_async_session
from guideconnect.exceptions import GuideConnectException
from guideconnect.services import statistics_service
from guideconnect.services.destination_service import DestinationService

logger = logging.getLogger(__name__)

router = APIRouter()


def _split_csv(value: Optional[str]) -> Optional[List[str]]:
    if not value:
        return None
    return [item.strip() for item in value.split(",") if item.strip()]


@router.get("/destinations", response_model=DestinationListResponse)
async def list_destinations(
    featured: Optional[bool] = Query(None, description="Only featured (or non-featured) destinations"),
    search: Optional[str] = Query(None, description="Name, description, country or region"),
    min_price: Optional[float] = Query(None, ge=0, description="Minimum price"),
    max_price: Optional[float] = Query(None, ge=0, description="Maximum price"),
    difficulty: Optional[Difficulty] = Query(None, description="Difficulty level"),
    country: Optional[str] = Query(None, description="Country"),
    activities: Optional[str] = Query(None, description="Comma-separated activities (match any)"),
    seasons: Optional[str] = Query(None, description="Comma-separated seasons (match any)"),
    rating: Optional[float] = Query(None, ge=0, le=5, description="Minimum rating"),
    limit: int = Query(10, ge=1, le=100, description="Maximum number of results"),
    offset: int = Query(0, ge=0, description="Number of results to skip"),
    db: AsyncSession = Depends(get_async_session),
) -> DestinationListResponse:
    try:
        destinations, total = await DestinationService.list_destinations(
            db,
            featured=featured,
            search=search,
            min_price=min_price,
            max_price=max_price,
            difficulty=difficulty,
            country=country,
            activities=_split_csv(activities),
            seasons=_split_csv(seasons),
            rating=rating,
            limit=limit,
            offset=offset,
        )
        return DestinationListResponse(
            destinations=[DestinationResponse.from_model(d) for d in destinations],
            total=total,
        )
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error fetching destinations: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch destinations",
        )


@router.post(
    "/destinations",
    response_model=DestinationResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
)
async def create_destination(
    body: DestinationCreate,
    db: AsyncSession = Depends(get_async_session),
    cache: StatsCache = Depends(get_stats_cache),
) -> DestinationResponse:
    try:
        destination = await DestinationService.create_destination(db, body)
        await cache.invalidate(*CATALOGUE_DEPENDENT_KEYS)
        return DestinationResponse.from_model(destination)
    except (HTTPException, GuideConnectException):
        raise
    except Exception as e:
        logger.error(f"Error creating destination: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create destination",
        )


@router.get("/destinations/popular", response_model=List[DestinationResponse])
async def popular_destinations(
    limit: int = Query(5, ge=1, le=50),
    db: AsyncSession = Depends(get_async_session),
) -> List[DestinationResponse]:
    """Destinations rated above 4 with at least one review."""
    try:
        destinations = await DestinationService.popular_destinations(db, limit=limit)
        return [DestinationResponse.from_model(d) for d in destinations]
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error fetching popular destinations: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch popular destinations",
        )


@router.get("/destinations/countries", response_model=List[CountryCount])
async def destination_countries(db: AsyncSession = Depends(get_async_session)) -> List[CountryCount]:
    try:
        return await DestinationService.countries(db)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error fetching destination countries: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch destination countries",
        )


@router.get(
    "/destinations/stats",
    response_model=DestinationStatsResponse,
    dependencies=[Depends(require_admin)],
)
async def destination_stats(db: AsyncSession = Depends(get_async_session)) -> DestinationStatsResponse:
    try:
        return await statistics_service.get_destination_stats(db)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error fetching destination statistics: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch destination statistics",
        )


@router.get("/destinations/{destination_id}", response_model=DestinationResponse)
async def get_destination(
    destination_id: int,
    db: AsyncSession = Depends(get_async_session),
) -> DestinationResponse:
    try:
        destination = await DestinationService.get_destination(db, destination_id)
        return DestinationResponse.from_model(destination)
    except (HTTPException, GuideConnectException):
        raise
    except Exception as e:
        logger.error(f"Error fetching destination {destination_id}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch destination",
        )


@router.put(
    "/destinations/{destination_id}",
    response_model=DestinationResponse,
    dependencies=[Depends(require_admin)],
)
async def update_destination(
    destination_id: int,
    body: DestinationUpdate,
    db: AsyncSession = Depends(get_async_session),
    cache: StatsCache = Depends(get_stats_cache),
) -> DestinationResponse:
    try:
        destination = await DestinationService.update_destination(db, destination_id, body)
        await cache.invalidate(*CATALOGUE_DEPENDENT_KEYS)
        return DestinationResponse.from_model(destination)
    except (HTTPException, GuideConnectException):
        raise
    except Exception as e:
        logger.error(f"Error updating destination {destination_id}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update destination",
        )


@router.delete(
    "/destinations/{destination_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(require_admin)],
)
async def delete_destination(
    destination_id: int,
    db: AsyncSession = Depends(get_async_session),
    cache: StatsCache = Depends(get_stats_cache),
) -> Response:
    """Delete a destination with its reviews, bookings and guide links."""
    try:
        await DestinationService.delete_destination(db, destination_id)
        await cache.invalidate(*CATALOGUE_DEPENDENT_KEYS)
        return Response(status_code=status.HTTP_204_NO_CONTENT)
    except (HTTPException, GuideConnectException):
        raise
    except Exception as e:
        logger.error(f"Error deleting destination {destination_id}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to delete destination",
        )
