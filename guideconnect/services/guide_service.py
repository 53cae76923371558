"""
Guide service: roster queries, profile CRUD and scheduled tours.
"""

import logging
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy import func, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from guideconnect.api.schemas.common import provided_fields
from guideconnect.api.schemas.guide import (
    STATUS_TO_AVAILABILITY,
    GuideCreate,
    GuideUpdate,
    ScheduleCreate,
    ScheduleUpdate,
)
from guideconnect.exceptions import InvalidInputError, NotFoundError
from guideconnect.models import (
    Booking,
    Destination,
    Guide,
    GuideAvailableDate,
    GuideCertification,
    GuideSchedule,
)
from guideconnect.services.destination_service import json_list_contains_any
from guideconnect.services.notification_service import NotificationService

logger = logging.getLogger(__name__)

GUIDE_PROFILE_OPTIONS = (
    selectinload(Guide.certifications),
    selectinload(Guide.available_dates),
    selectinload(Guide.destinations),
)


def _columns_from_input(data: Dict[str, Any]) -> Dict[str, Any]:
    """Flatten nested request fields onto Guide columns."""
    values: Dict[str, Any] = {}

    for key in ("name", "email", "phone", "bio", "hourly_rate", "availability", "rating", "review_count"):
        if data.get(key) is not None:
            values[key] = data[key]

    for key in ("languages", "specialties"):
        if data.get(key) is not None:
            values[key] = list(data[key])

    if data.get("photo") is not None:
        values["photo"] = str(data["photo"])

    location = data.get("location")
    if location is not None:
        values["country"] = location.country
        values["region"] = location.region
        values["city"] = location.city

    experience = data.get("experience")
    if experience is not None:
        values["experience_years"] = experience.years
        values["experience_level"] = experience.level
        values["expeditions"] = experience.expeditions

    social = data.get("social_media")
    if social is not None:
        values.update(social.model_dump())

    return values


class GuideService:
    """Guide queries and writes."""

    @staticmethod
    async def _destinations_by_id(db: AsyncSession, destination_ids: List[int]) -> List[Destination]:
        if not destination_ids:
            return []
        result = await db.execute(select(Destination).where(Destination.id.in_(destination_ids)))
        destinations = list(result.scalars().all())
        missing = set(destination_ids) - {d.id for d in destinations}
        if missing:
            raise NotFoundError("Destination", sorted(missing)[0])
        return destinations

    @staticmethod
    async def list_guides(
        db: AsyncSession,
        search: Optional[str] = None,
        status: Optional[str] = None,
        location: Optional[str] = None,
        language: Optional[str] = None,
        specialty: Optional[str] = None,
        min_rating: Optional[float] = None,
        limit: int = 10,
        offset: int = 0,
    ) -> Tuple[List[Guide], int]:
        """
        Filtered guide list ordered by name.

        Args:
            search: Case-insensitive match on name, country, region, city or bio
            status: Dashboard status (active, on_leave or inactive)
            location: Case-insensitive match on country, region or city
            language: Guides speaking this language
            specialty: Guides with this specialty
            min_rating: Minimum rating
        """
        query = select(Guide)

        if search:
            pattern = f"%{search}%"
            query = query.where(
                or_(
                    Guide.name.ilike(pattern),
                    Guide.country.ilike(pattern),
                    Guide.region.ilike(pattern),
                    Guide.city.ilike(pattern),
                    Guide.bio.ilike(pattern),
                )
            )
        if status:
            availability = STATUS_TO_AVAILABILITY.get(status)
            if availability is None:
                return [], 0
            query = query.where(Guide.availability == availability)
        if location:
            pattern = f"%{location}%"
            query = query.where(
                or_(Guide.country.ilike(pattern), Guide.region.ilike(pattern), Guide.city.ilike(pattern))
            )
        if language:
            query = query.where(json_list_contains_any(Guide.languages, [language]))
        if specialty:
            query = query.where(json_list_contains_any(Guide.specialties, [specialty]))
        if min_rating is not None:
            query = query.where(Guide.rating >= min_rating)

        total = await db.scalar(select(func.count()).select_from(query.subquery())) or 0

        result = await db.execute(query.order_by(Guide.name, Guide.id).limit(limit).offset(offset))
        return list(result.scalars().all()), total

    @staticmethod
    async def get_guide(db: AsyncSession, guide_id: int) -> Guide:
        result = await db.execute(
            select(Guide)
            .options(*GUIDE_PROFILE_OPTIONS)
            .where(Guide.id == guide_id)
            .execution_options(populate_existing=True)
        )
        guide = result.scalar_one_or_none()
        if guide is None:
            raise NotFoundError("Guide", guide_id)
        return guide

    @staticmethod
    async def create_guide(db: AsyncSession, data: GuideCreate) -> Guide:
        destinations = await GuideService._destinations_by_id(db, data.destinations)

        guide = Guide(**_columns_from_input(dict(data)))
        guide.certifications = [GuideCertification(**c.model_dump()) for c in data.certifications]
        guide.available_dates = [GuideAvailableDate(**d.model_dump()) for d in data.available_dates]
        guide.destinations = destinations
        db.add(guide)
        await db.flush()

        await NotificationService.notify_guide_added(db, guide.id, guide.name)
        await db.commit()

        logger.info(f"Guide created: {guide.name} (id={guide.id})")
        return await GuideService.get_guide(db, guide.id)

    @staticmethod
    async def update_guide(db: AsyncSession, guide_id: int, data: GuideUpdate) -> Guide:
        guide = await GuideService.get_guide(db, guide_id)
        fields = provided_fields(data)

        for key, value in _columns_from_input(fields).items():
            setattr(guide, key, value)

        if data.certifications is not None:
            guide.certifications = [GuideCertification(**c.model_dump()) for c in data.certifications]
        if data.available_dates is not None:
            guide.available_dates = [GuideAvailableDate(**d.model_dump()) for d in data.available_dates]
        if data.destinations is not None:
            guide.destinations = await GuideService._destinations_by_id(db, data.destinations)

        await db.commit()
        logger.info(f"Guide updated: {guide.name} (id={guide.id})")
        return await GuideService.get_guide(db, guide.id)

    @staticmethod
    async def delete_guide(db: AsyncSession, guide_id: int) -> None:
        """Delete a guide; their bookings stay but lose the guide assignment."""
        result = await db.execute(
            select(Guide)
            .options(
                *GUIDE_PROFILE_OPTIONS,
                selectinload(Guide.schedules),
                selectinload(Guide.reviews),
            )
            .where(Guide.id == guide_id)
        )
        guide = result.scalar_one_or_none()
        if guide is None:
            raise NotFoundError("Guide", guide_id)

        name = guide.name
        try:
            await db.execute(
                update(Booking).where(Booking.guide_id == guide_id).values(guide_id=None)
            )
            await db.delete(guide)
            await db.commit()
        except Exception:
            await db.rollback()
            raise

        logger.info(f"Guide deleted: {name} (id={guide_id})")

    @staticmethod
    async def top_rated(db: AsyncSession, limit: int = 5, available_only: bool = False) -> List[Guide]:
        """Guides rated 4.0 or higher, best first."""
        query = select(Guide).where(Guide.rating >= 4.0)
        if available_only:
            query = query.where(Guide.availability != "unavailable")
        result = await db.execute(
            query.order_by(Guide.rating.desc(), Guide.experience_years.desc(), Guide.id).limit(limit)
        )
        return list(result.scalars().all())

    @staticmethod
    async def languages(db: AsyncSession) -> List[str]:
        result = await db.execute(select(Guide.languages))
        return sorted({language for row in result.scalars().all() for language in (row or [])})

    @staticmethod
    async def specialties(db: AsyncSession) -> List[str]:
        result = await db.execute(select(Guide.specialties))
        return sorted({specialty for row in result.scalars().all() for specialty in (row or [])})

    # ------------------------------------------------------------------
    # Schedules
    # ------------------------------------------------------------------

    @staticmethod
    async def _require_guide(db: AsyncSession, guide_id: int) -> Guide:
        guide = await db.get(Guide, guide_id)
        if guide is None:
            raise NotFoundError("Guide", guide_id)
        return guide

    @staticmethod
    async def list_schedules(
        db: AsyncSession, guide_id: int, status: Optional[str] = None
    ) -> List[GuideSchedule]:
        await GuideService._require_guide(db, guide_id)
        query = select(GuideSchedule).where(GuideSchedule.guide_id == guide_id)
        if status:
            query = query.where(GuideSchedule.status == status)
        result = await db.execute(query.order_by(GuideSchedule.start_date, GuideSchedule.id))
        return list(result.scalars().all())

    @staticmethod
    async def get_schedule(db: AsyncSession, guide_id: int, schedule_id: int) -> GuideSchedule:
        await GuideService._require_guide(db, guide_id)
        result = await db.execute(
            select(GuideSchedule)
            .where(GuideSchedule.id == schedule_id, GuideSchedule.guide_id == guide_id)
            .execution_options(populate_existing=True)
        )
        schedule = result.scalar_one_or_none()
        if schedule is None:
            raise NotFoundError("Schedule", schedule_id)
        return schedule

    @staticmethod
    async def create_schedule(db: AsyncSession, guide_id: int, data: ScheduleCreate) -> GuideSchedule:
        await GuideService._require_guide(db, guide_id)
        schedule = GuideSchedule(guide_id=guide_id, **data.model_dump())
        db.add(schedule)
        await db.commit()
        logger.info(f"Schedule created for guide {guide_id}: {schedule.destination} from {schedule.start_date}")
        return await GuideService.get_schedule(db, guide_id, schedule.id)

    @staticmethod
    async def update_schedule(
        db: AsyncSession, guide_id: int, schedule_id: int, data: ScheduleUpdate
    ) -> GuideSchedule:
        schedule = await GuideService.get_schedule(db, guide_id, schedule_id)
        for key, value in provided_fields(data).items():
            if value is not None:
                setattr(schedule, key, value)
        if schedule.end_date < schedule.start_date:
            raise InvalidInputError("end_date must not be before start_date", field="end_date")
        await db.commit()
        return await GuideService.get_schedule(db, guide_id, schedule_id)

    @staticmethod
    async def delete_schedule(db: AsyncSession, guide_id: int, schedule_id: int) -> None:
        schedule = await GuideService.get_schedule(db, guide_id, schedule_id)
        await db.delete(schedule)
        await db.commit()
        logger.info(f"Schedule {schedule_id} of guide {guide_id} deleted")
