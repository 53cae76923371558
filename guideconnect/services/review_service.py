"""
Review service: moderation queries, CRUD and rating recalculation.

Destination and guide ratings are denormalized; every write recalculates the
average (one decimal) and count of the affected destination and guide.
"""

import logging
from typing import List, Literal, Optional, Tuple

from sqlalchemy import String, and_, cast, func, not_, or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from guideconnect.api.schemas.common import provided_fields
from guideconnect.api.schemas.review import ReviewCreate, ReviewUpdate
from guideconnect.exceptions import ConflictError, NotFoundError
from guideconnect.models import Destination, Guide, Review, User
from guideconnect.utils.date_utils import utc_now

logger = logging.getLogger(__name__)

REVIEW_LOAD_OPTIONS = (selectinload(Review.destination), selectinload(Review.guide))

_flagged = cast(Review.tags, String).ilike('%"flagged"%')


def status_filter(status: str):
    """SQL condition matching the derived moderation status."""
    if status == "approved":
        return Review.verified.is_(True)
    if status == "flagged":
        return and_(Review.verified.is_(False), _flagged)
    return and_(Review.verified.is_(False), not_(_flagged))


async def recalculate_rating(db: AsyncSession, model, entity_id: Optional[int]) -> None:
    """Store the average rating and review count of a destination or guide."""
    if entity_id is None:
        return
    entity = await db.get(model, entity_id)
    if entity is None:
        return

    foreign_key = Review.destination_id if model is Destination else Review.guide_id
    row = (
        await db.execute(
            select(func.avg(Review.rating).label("average"), func.count().label("count")).where(
                foreign_key == entity_id
            )
        )
    ).one()

    entity.rating = round(float(row.average), 1) if row.count else 0.0
    entity.review_count = row.count
    logger.debug(f"{model.__name__} {entity_id} rating -> {entity.rating} ({entity.review_count} reviews)")


class ReviewService:
    """Review queries and writes."""

    @staticmethod
    async def _load(db: AsyncSession, review_id: int) -> Review:
        result = await db.execute(
            select(Review)
            .options(*REVIEW_LOAD_OPTIONS)
            .where(Review.id == review_id)
            .execution_options(populate_existing=True)
        )
        review = result.scalar_one_or_none()
        if review is None:
            raise NotFoundError("Review", review_id)
        return review

    @staticmethod
    async def _recalculate(db: AsyncSession, destination_id: Optional[int], guide_id: Optional[int]) -> None:
        await db.flush()
        await recalculate_rating(db, Destination, destination_id)
        await recalculate_rating(db, Guide, guide_id)

    @staticmethod
    async def list_reviews(
        db: AsyncSession,
        type: str = "all",
        status: Optional[str] = None,
        entity_id: Optional[int] = None,
        destination_id: Optional[int] = None,
        guide_id: Optional[int] = None,
        min_rating: Optional[int] = None,
        sort: Literal["date", "rating"] = "date",
        limit: int = 10,
        offset: int = 0,
    ) -> Tuple[List[Review], int]:
        """
        Filtered review list.

        Args:
            type: all, guides, destinations or flagged
            status: approved, pending or flagged
            entity_id: Reviews of the guide or destination with this id
            sort: Newest first ("date") or best first ("rating")
        """
        query = select(Review)

        if type == "guides":
            query = query.where(Review.guide_id.is_not(None))
        elif type == "destinations":
            query = query.where(Review.guide_id.is_(None), Review.destination_id.is_not(None))
        elif type == "flagged":
            query = query.where(status_filter("flagged"))

        if status:
            query = query.where(status_filter(status))
        if entity_id is not None:
            query = query.where(or_(Review.guide_id == entity_id, Review.destination_id == entity_id))
        if destination_id is not None:
            query = query.where(Review.destination_id == destination_id)
        if guide_id is not None:
            query = query.where(Review.guide_id == guide_id)
        if min_rating is not None:
            query = query.where(Review.rating >= min_rating)

        total = await db.scalar(select(func.count()).select_from(query.subquery())) or 0

        if sort == "rating":
            query = query.order_by(Review.rating.desc(), Review.date.desc(), Review.id.desc())
        else:
            query = query.order_by(Review.date.desc(), Review.id.desc())

        result = await db.execute(query.options(*REVIEW_LOAD_OPTIONS).limit(limit).offset(offset))
        return list(result.scalars().all()), total

    @staticmethod
    async def get_review(db: AsyncSession, review_id: int) -> Review:
        return await ReviewService._load(db, review_id)

    @staticmethod
    async def create_review(
        db: AsyncSession, data: ReviewCreate, author_email: str, author_name: str
    ) -> Review:
        """
        Create a review written by the signed-in user.

        Raises:
            NotFoundError: the destination or guide does not exist
            ConflictError: the author already reviewed this destination or guide
        """
        if data.destination_id is not None and await db.get(Destination, data.destination_id) is None:
            raise NotFoundError("Destination", data.destination_id)
        if data.guide_id is not None and await db.get(Guide, data.guide_id) is None:
            raise NotFoundError("Guide", data.guide_id)

        author = (await db.execute(select(User).where(User.email == author_email))).scalar_one_or_none()
        author_id = author.id if author else None
        name = author.name if author else author_name

        same_author = Review.author_id == author_id if author_id is not None else Review.author_name == name
        if data.destination_id is not None:
            duplicate = await db.scalar(
                select(Review.id).where(same_author, Review.destination_id == data.destination_id).limit(1)
            )
            if duplicate is not None:
                raise ConflictError("You have already reviewed this destination")
        if data.guide_id is not None:
            duplicate = await db.scalar(
                select(Review.id).where(same_author, Review.guide_id == data.guide_id).limit(1)
            )
            if duplicate is not None:
                raise ConflictError("You have already reviewed this guide")

        trip = data.trip
        review = Review(
            title=data.title,
            content=data.content,
            rating=data.rating,
            date=data.date or utc_now(),
            author_id=author_id,
            author_name=name,
            destination_id=data.destination_id,
            guide_id=data.guide_id,
            trip_start_date=trip.start_date if trip else None,
            trip_end_date=trip.end_date if trip else None,
            trip_duration=trip.duration if trip else None,
            trip_type=trip.type if trip else None,
            photos=list(data.photos),
            highlights=list(data.highlights),
            tags=list(data.tags),
            verified=data.verified,
            featured=data.featured,
        )
        db.add(review)
        await ReviewService._recalculate(db, data.destination_id, data.guide_id)
        await db.commit()

        logger.info(f"Review {review.id} created by {name} (rating {review.rating})")
        return await ReviewService._load(db, review.id)

    @staticmethod
    async def update_review(db: AsyncSession, review_id: int, data: ReviewUpdate) -> Review:
        review = await ReviewService._load(db, review_id)
        fields = provided_fields(data)

        for key in ("title", "content", "rating", "verified", "featured"):
            if fields.get(key) is not None:
                setattr(review, key, fields[key])
        for key in ("photos", "highlights", "tags"):
            if fields.get(key) is not None:
                setattr(review, key, list(fields[key]))

        if data.trip is not None:
            review.trip_start_date = data.trip.start_date
            review.trip_end_date = data.trip.end_date
            review.trip_duration = data.trip.duration
            review.trip_type = data.trip.type

        if "response" in fields:
            review.response = data.response
            review.response_date = utc_now() if data.response else None

        await ReviewService._recalculate(db, review.destination_id, review.guide_id)
        await db.commit()
        return await ReviewService._load(db, review.id)

    @staticmethod
    async def delete_review(db: AsyncSession, review_id: int) -> None:
        review = await ReviewService._load(db, review_id)
        destination_id, guide_id = review.destination_id, review.guide_id

        await db.delete(review)
        await ReviewService._recalculate(db, destination_id, guide_id)
        await db.commit()
        logger.info(f"Review {review_id} deleted")
