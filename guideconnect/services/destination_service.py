"""
Destination service: catalogue queries, CRUD and guide links.
"""

import logging
from typing import Any, Dict, List, Optional, Sequence, Tuple

from sqlalchemy import String, cast, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from guideconnect.api.schemas.common import provided_fields
from guideconnect.api.schemas.destination import (
    CountryCount,
    DestinationCreate,
    DestinationUpdate,
)
from guideconnect.exceptions import NotFoundError
from guideconnect.models import Booking, Destination, Guide
from guideconnect.services.notification_service import NotificationService

logger = logging.getLogger(__name__)


def json_list_contains_any(column, values: Sequence[str]):
    """
    Match rows whose JSON string array contains any of ``values``.

    Works on both PostgreSQL and SQLite by matching the quoted element in the
    serialized array.
    """
    return or_(*[cast(column, String).ilike(f'%"{value}"%') for value in values])


def _columns_from_input(data: Dict[str, Any]) -> Dict[str, Any]:
    """Flatten nested request fields onto Destination columns."""
    values: Dict[str, Any] = {}

    for key in ("name", "description", "featured", "rating", "review_count", "difficulty"):
        if key in data and data[key] is not None:
            values[key] = data[key]

    for key in ("activities", "seasons", "amenities"):
        if key in data and data[key] is not None:
            values[key] = list(data[key])

    if data.get("images") is not None:
        values["images"] = [str(url) for url in data["images"]]

    location = data.get("location")
    if location is not None:
        values["country"] = location.country
        values["region"] = location.region
        values["latitude"] = location.coordinates.latitude if location.coordinates else None
        values["longitude"] = location.coordinates.longitude if location.coordinates else None

    price = data.get("price")
    if price is not None:
        values["price_amount"] = price.amount
        values["price_currency"] = price.currency
        values["price_period"] = price.period

    duration = data.get("duration")
    if duration is not None:
        values["min_days"] = duration.min_days
        values["max_days"] = duration.max_days

    return values


class DestinationService:
    """Destination queries and writes."""

    @staticmethod
    async def _guides_by_id(db: AsyncSession, guide_ids: Sequence[int]) -> List[Guide]:
        if not guide_ids:
            return []
        result = await db.execute(select(Guide).where(Guide.id.in_(guide_ids)))
        guides = list(result.scalars().all())
        missing = set(guide_ids) - {g.id for g in guides}
        if missing:
            raise NotFoundError("Guide", sorted(missing)[0])
        return guides

    @staticmethod
    async def list_destinations(
        db: AsyncSession,
        featured: Optional[bool] = None,
        search: Optional[str] = None,
        min_price: Optional[float] = None,
        max_price: Optional[float] = None,
        difficulty: Optional[str] = None,
        country: Optional[str] = None,
        activities: Optional[List[str]] = None,
        seasons: Optional[List[str]] = None,
        rating: Optional[float] = None,
        limit: int = 10,
        offset: int = 0,
    ) -> Tuple[List[Destination], int]:
        """
        Filtered destination list, featured first then by rating.

        ``activities`` and ``seasons`` match destinations offering any of the
        given values.
        """
        query = select(Destination)

        if featured is not None:
            query = query.where(Destination.featured.is_(featured))
        if search:
            pattern = f"%{search}%"
            query = query.where(
                or_(
                    Destination.name.ilike(pattern),
                    Destination.description.ilike(pattern),
                    Destination.country.ilike(pattern),
                    Destination.region.ilike(pattern),
                )
            )
        if min_price is not None:
            query = query.where(Destination.price_amount >= min_price)
        if max_price is not None:
            query = query.where(Destination.price_amount <= max_price)
        if difficulty:
            query = query.where(Destination.difficulty == difficulty)
        if country:
            query = query.where(Destination.country == country)
        if activities:
            query = query.where(json_list_contains_any(Destination.activities, activities))
        if seasons:
            query = query.where(json_list_contains_any(Destination.seasons, seasons))
        if rating is not None:
            query = query.where(Destination.rating >= rating)

        total = await db.scalar(select(func.count()).select_from(query.subquery())) or 0

        result = await db.execute(
            query.options(selectinload(Destination.guides))
            .order_by(Destination.featured.desc(), Destination.rating.desc(), Destination.id)
            .limit(limit)
            .offset(offset)
        )
        return list(result.scalars().all()), total

    @staticmethod
    async def get_destination(db: AsyncSession, destination_id: int) -> Destination:
        result = await db.execute(
            select(Destination)
            .options(selectinload(Destination.guides))
            .where(Destination.id == destination_id)
            .execution_options(populate_existing=True)
        )
        destination = result.scalar_one_or_none()
        if destination is None:
            raise NotFoundError("Destination", destination_id)
        return destination

    @staticmethod
    async def create_destination(db: AsyncSession, data: DestinationCreate) -> Destination:
        guides = await DestinationService._guides_by_id(db, data.available_guides)

        destination = Destination(**_columns_from_input(dict(data)))
        destination.guides = guides
        db.add(destination)
        await db.flush()

        await NotificationService.notify_destination_added(db, destination.id, destination.name)
        await db.commit()

        logger.info(f"Destination created: {destination.name} (id={destination.id})")
        return await DestinationService.get_destination(db, destination.id)

    @staticmethod
    async def update_destination(
        db: AsyncSession, destination_id: int, data: DestinationUpdate
    ) -> Destination:
        destination = await DestinationService.get_destination(db, destination_id)
        fields = provided_fields(data)

        for key, value in _columns_from_input(fields).items():
            setattr(destination, key, value)

        if fields.get("available_guides") is not None:
            destination.guides = await DestinationService._guides_by_id(db, data.available_guides)

        await db.commit()
        logger.info(f"Destination updated: {destination.name} (id={destination.id})")
        return await DestinationService.get_destination(db, destination.id)

    @staticmethod
    async def delete_destination(db: AsyncSession, destination_id: int) -> None:
        """
        Delete a destination with its reviews, bookings (and their detail rows)
        and guide links in one transaction.
        """
        booking_children = [
            Booking.accommodations,
            Booking.transportation,
            Booking.activities,
            Booking.equipment_rental,
            Booking.transactions,
            Booking.documents,
            Booking.notes,
            Booking.emergency_contact,
        ]
        result = await db.execute(
            select(Destination)
            .options(
                selectinload(Destination.guides),
                selectinload(Destination.reviews),
                *[selectinload(Destination.bookings).selectinload(child) for child in booking_children],
            )
            .where(Destination.id == destination_id)
        )
        destination = result.scalar_one_or_none()
        if destination is None:
            raise NotFoundError("Destination", destination_id)

        name = destination.name
        booking_count = len(destination.bookings)
        try:
            await db.delete(destination)
            await db.commit()
        except Exception:
            await db.rollback()
            raise

        logger.info(f"Destination deleted: {name} (id={destination_id}, {booking_count} bookings removed)")

    @staticmethod
    async def popular_destinations(db: AsyncSession, limit: int = 5) -> List[Destination]:
        """Well reviewed destinations (rating above 4 with at least one review)."""
        result = await db.execute(
            select(Destination)
            .options(selectinload(Destination.guides))
            .where(Destination.rating > 4, Destination.review_count > 0)
            .order_by(Destination.rating.desc(), Destination.review_count.desc(), Destination.id)
            .limit(limit)
        )
        return list(result.scalars().all())

    @staticmethod
    async def featured_destinations(db: AsyncSession, limit: int = 6) -> List[Destination]:
        result = await db.execute(
            select(Destination)
            .where(Destination.featured.is_(True))
            .order_by(Destination.rating.desc(), Destination.id)
            .limit(limit)
        )
        return list(result.scalars().all())

    @staticmethod
    async def countries(db: AsyncSession) -> List[CountryCount]:
        result = await db.execute(
            select(Destination.country, func.count().label("count"))
            .group_by(Destination.country)
            .order_by(Destination.country)
        )
        return [CountryCount(country=row.country, count=row.count) for row in result.all()]
