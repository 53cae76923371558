"""
Booking management routes (authenticated).
"""

import logging
from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from guideconnect.api.dependencies import require_session
from guideconnect.api.schemas.booking import (
    BookingCreate,
    BookingListResponse,
    BookingResponse,
    BookingStatus,
    BookingUpdate,
    RecentBooking,
)
from guideconnect.api.schemas.common import SuccessResponse
from guideconnect.api.schemas.stats import BookingStatsResponse
from guideconnect.cache import BOOKING_DEPENDENT_KEYS, BOOKING_STATS_KEY, StatsCache, get_stats_cache
from guideconnect.database import get_async_session
from guideconnect.exceptions import GuideConnectException
from guideconnect.services import statistics_service
from guideconnect.services.booking_service import BookingService

logger = logging.getLogger(__name__)

router = APIRouter(dependencies=[Depends(require_session)])


@router.get("/bookings", response_model=BookingListResponse)
async def list_bookings(
    search: Optional[str] = Query(None, description="Booking number, customer or destination name"),
    status_filter: Optional[BookingStatus] = Query(None, alias="status", description="Booking status"),
    destination_id: Optional[int] = Query(None, description="Filter by destination"),
    guide_id: Optional[int] = Query(None, description="Filter by guide"),
    start_date: Optional[date] = Query(None, description="Trips starting on or after"),
    end_date: Optional[date] = Query(None, description="Trips ending on or before"),
    limit: int = Query(10, ge=1, le=100, description="Maximum number of results"),
    offset: int = Query(0, ge=0, description="Number of results to skip"),
    db: AsyncSession = Depends(get_async_session),
) -> BookingListResponse:
    """Paginated booking list, newest first."""
    try:
        bookings, total = await BookingService.list_bookings(
            db,
            search=search,
            status=status_filter,
            destination_id=destination_id,
            guide_id=guide_id,
            start_date=start_date,
            end_date=end_date,
            limit=limit,
            offset=offset,
        )
        return BookingListResponse(
            bookings=[BookingResponse.from_model(b) for b in bookings],
            total=total,
        )
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error fetching bookings: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch bookings",
        )


@router.post("/bookings", response_model=BookingResponse, status_code=status.HTTP_201_CREATED)
async def create_booking(
    body: BookingCreate,
    db: AsyncSession = Depends(get_async_session),
    cache: StatsCache = Depends(get_stats_cache),
) -> BookingResponse:
    """Create a booking; 404 for an unknown destination or guide, 409 for overlapping dates."""
    try:
        booking = await BookingService.create_booking(db, body)
        await cache.invalidate(*BOOKING_DEPENDENT_KEYS)
        return BookingResponse.from_model(booking)
    except (HTTPException, GuideConnectException):
        raise
    except Exception as e:
        logger.error(f"Error creating booking: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create booking",
        )


@router.get("/bookings/recent", response_model=List[RecentBooking])
async def recent_bookings(
    limit: int = Query(5, ge=1, le=50, description="Number of bookings"),
    db: AsyncSession = Depends(get_async_session),
) -> List[RecentBooking]:
    try:
        return await BookingService.recent_bookings(db, limit=limit)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error fetching recent bookings: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch recent bookings",
        )


@router.get("/bookings/stats", response_model=BookingStatsResponse)
async def booking_stats(
    db: AsyncSession = Depends(get_async_session),
    cache: StatsCache = Depends(get_stats_cache),
):
    """Booking counts by status, monthly growth, revenue, travelers and top-5 lists."""
    try:
        cached = await cache.get_json(BOOKING_STATS_KEY)
        if cached is not None:
            return cached

        stats = await statistics_service.get_booking_stats(db)
        await cache.set_json(BOOKING_STATS_KEY, stats.model_dump(mode="json"))
        return stats
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error fetching booking statistics: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch booking statistics",
        )


@router.get("/bookings/{booking_id}", response_model=BookingResponse)
async def get_booking(
    booking_id: int,
    db: AsyncSession = Depends(get_async_session),
) -> BookingResponse:
    try:
        booking = await BookingService.get_booking(db, booking_id)
        return BookingResponse.from_model(booking)
    except (HTTPException, GuideConnectException):
        raise
    except Exception as e:
        logger.error(f"Error fetching booking {booking_id}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch booking",
        )


@router.put("/bookings/{booking_id}", response_model=BookingResponse)
async def update_booking(
    booking_id: int,
    body: BookingUpdate,
    db: AsyncSession = Depends(get_async_session),
    cache: StatsCache = Depends(get_stats_cache),
) -> BookingResponse:
    """Partial update; lists in the body replace the stored rows."""
    try:
        booking = await BookingService.update_booking(db, booking_id, body)
        await cache.invalidate(*BOOKING_DEPENDENT_KEYS)
        return BookingResponse.from_model(booking)
    except (HTTPException, GuideConnectException):
        raise
    except Exception as e:
        logger.error(f"Error updating booking {booking_id}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update booking",
        )


@router.delete("/bookings/{booking_id}", response_model=SuccessResponse)
async def delete_booking(
    booking_id: int,
    db: AsyncSession = Depends(get_async_session),
    cache: StatsCache = Depends(get_stats_cache),
) -> SuccessResponse:
    try:
        await BookingService.delete_booking(db, booking_id)
        await cache.invalidate(*BOOKING_DEPENDENT_KEYS)
        return SuccessResponse()
    except (HTTPException, GuideConnectException):
        raise
    except Exception as e:
        logger.error(f"Error deleting booking {booking_id}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to delete booking",
        )
