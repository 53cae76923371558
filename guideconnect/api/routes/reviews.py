"""
Review routes (authenticated).
"""

import logging
from typing import Literal, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from guideconnect.api.dependencies import require_session
from guideconnect.api.schemas.common import SuccessResponse
from guideconnect.api.schemas.review import (
    ReviewCreate,
    ReviewListResponse,
    ReviewResponse,
    ReviewStatus,
    ReviewTypeFilter,
    ReviewUpdate,
)
from guideconnect.cache import CATALOGUE_DEPENDENT_KEYS, StatsCache, get_stats_cache
from guideconnect.database import get_async_session
from guideconnect.exceptions import GuideConnectException
from guideconnect.security import SessionUser
from guideconnect.services.review_service import ReviewService

logger = logging.getLogger(__name__)

router = APIRouter(dependencies=[Depends(require_session)])


@router.get("/reviews", response_model=ReviewListResponse)
async def list_reviews(
    type: ReviewTypeFilter = Query("all", description="all, guides, destinations or flagged"),
    status_filter: Optional[ReviewStatus] = Query(None, alias="status"),
    entity_id: Optional[int] = Query(None, description="Guide or destination id"),
    destination_id: Optional[int] = Query(None),
    guide_id: Optional[int] = Query(None),
    min_rating: Optional[int] = Query(None, ge=1, le=5),
    sort: Literal["date", "rating"] = Query("date"),
    limit: int = Query(10, ge=1, le=100),
    offset: int = Query(0, ge=0),
    db: AsyncSession = Depends(get_async_session),
) -> ReviewListResponse:
    try:
        reviews, total = await ReviewService.list_reviews(
            db,
            type=type,
            status=status_filter,
            entity_id=entity_id,
            destination_id=destination_id,
            guide_id=guide_id,
            min_rating=min_rating,
            sort=sort,
            limit=limit,
            offset=offset,
        )
        return ReviewListResponse(reviews=[ReviewResponse.from_model(r) for r in reviews], total=total)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error fetching reviews: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch reviews",
        )


@router.post("/reviews", response_model=ReviewResponse, status_code=status.HTTP_201_CREATED)
async def create_review(
    body: ReviewCreate,
    session: SessionUser = Depends(require_session),
    db: AsyncSession = Depends(get_async_session),
    cache: StatsCache = Depends(get_stats_cache),
) -> ReviewResponse:
    """Create a review as the signed-in user; 409 if they already reviewed the subject."""
    try:
        review = await ReviewService.create_review(db, body, session.email, session.name)
        await cache.invalidate(*CATALOGUE_DEPENDENT_KEYS)
        return ReviewResponse.from_model(review)
    except (HTTPException, GuideConnectException):
        raise
    except Exception as e:
        logger.error(f"Error creating review: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create review",
        )


@router.get("/reviews/{review_id}", response_model=ReviewResponse)
async def get_review(review_id: int, db: AsyncSession = Depends(get_async_session)) -> ReviewResponse:
    try:
        review = await ReviewService.get_review(db, review_id)
        return ReviewResponse.from_model(review)
    except (HTTPException, GuideConnectException):
        raise
    except Exception as e:
        logger.error(f"Error fetching review {review_id}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch review",
        )


@router.put("/reviews/{review_id}", response_model=ReviewResponse)
async def update_review(
    review_id: int,
    body: ReviewUpdate,
    db: AsyncSession = Depends(get_async_session),
    cache: StatsCache = Depends(get_stats_cache),
) -> ReviewResponse:
    try:
        review = await ReviewService.update_review(db, review_id, body)
        await cache.invalidate(*CATALOGUE_DEPENDENT_KEYS)
        return ReviewResponse.from_model(review)
    except (HTTPException, GuideConnectException):
        raise
    except Exception as e:
        logger.error(f"Error updating review {review_id}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update review",
        )


@router.delete("/reviews/{review_id}", response_model=SuccessResponse)
async def delete_review(
    review_id: int,
    db: AsyncSession = Depends(get_async_session),
    cache: StatsCache = Depends(get_stats_cache),
) -> SuccessResponse:
    try:
        await ReviewService.delete_review(db, review_id)
        await cache.invalidate(*CATALOGUE_DEPENDENT_KEYS)
        return SuccessResponse()
    except (HTTPException, GuideConnectException):
        raise
    except Exception as e:
        logger.error(f"Error deleting review {review_id}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to delete review",
        )
