"""
Unit tests for GuideService: roster filters, profile CRUD and schedules.
"""

from datetime import date

import pytest
from sqlalchemy import select

from guideconnect.api.schemas.guide import (
    GuideCreate,
    GuideSummary,
    GuideUpdate,
    ScheduleCreate,
    ScheduleUpdate,
)
from guideconnect.exceptions import InvalidInputError, NotFoundError
from guideconnect.models import Booking, Notification
from guideconnect.services.guide_service import GuideService
from conftest import make_customer, make_destination, make_guide


@pytest.fixture
async def roster(db_session):
    guides = [
        make_guide(name="Pemba Sherpa", rating=4.9, review_count=40, experience_years=15),
        make_guide(
            name="Lakpa Dorje",
            email="lakpa@example.com",
            region="Gandaki",
            city="Pokhara",
            languages=["English", "Hindi"],
            specialties=["Cultural tours"],
            availability="partially_available",
            rating=4.4,
        ),
        make_guide(
            name="Mingma Tamang",
            email="mingma@example.com",
            region="Bagmati",
            city="Kathmandu",
            languages=["Nepali", "French"],
            availability="unavailable",
            rating=3.5,
        ),
    ]
    db_session.add_all(guides)
    await db_session.commit()
    return guides


def schedule_data(**overrides):
    payload = {
        "destination": "Everest Base Camp",
        "location": "Khumbu",
        "start_date": "2026-11-01",
        "end_date": "2026-11-14",
        "description": "Fourteen day classic EBC trek",
        "max_participants": 8,
        "price": 1450,
        "difficulty": "challenging",
        "itinerary": "Lukla, Namche, Tengboche, Dingboche, Lobuche, EBC",
    }
    payload.update(overrides)
    return ScheduleCreate.model_validate(payload)


class TestListGuides:
    async def test_ordered_by_name(self, db_session, roster):
        guides, total = await GuideService.list_guides(db_session)

        assert total == 3
        assert [g.name for g in guides] == ["Lakpa Dorje", "Mingma Tamang", "Pemba Sherpa"]

    @pytest.mark.parametrize(
        "filters, expected",
        [
            ({"status": "active"}, ["Pemba Sherpa"]),
            ({"status": "on_leave"}, ["Lakpa Dorje"]),
            ({"status": "inactive"}, ["Mingma Tamang"]),
            ({"location": "pokhara"}, ["Lakpa Dorje"]),
            ({"language": "French"}, ["Mingma Tamang"]),
            ({"specialty": "Cultural tours"}, ["Lakpa Dorje"]),
            ({"min_rating": 4.0}, ["Lakpa Dorje", "Pemba Sherpa"]),
            ({"search": "kathmandu"}, ["Mingma Tamang"]),
            ({"location": "Khumbu", "language": "Hindi"}, []),
        ],
    )
    async def test_filters(self, db_session, roster, filters, expected):
        guides, total = await GuideService.list_guides(db_session, **filters)

        assert [g.name for g in guides] == expected
        assert total == len(expected)

    async def test_unknown_status_matches_nothing(self, db_session, roster):
        assert await GuideService.list_guides(db_session, status="retired") == ([], 0)

    async def test_summary_maps_availability_to_status(self, db_session, roster):
        summary = GuideSummary.from_model(roster[1])

        assert summary.status == "on_leave"
        assert summary.location == "Gandaki, Nepal"
        assert summary.experience == "12 years"


class TestRosterQueries:
    async def test_top_rated(self, db_session, roster):
        top = await GuideService.top_rated(db_session)
        available = await GuideService.top_rated(db_session, available_only=True)

        assert [g.name for g in top] == ["Pemba Sherpa", "Lakpa Dorje"]
        assert [g.name for g in available] == ["Pemba Sherpa", "Lakpa Dorje"]

    async def test_languages_and_specialties(self, db_session, roster):
        assert await GuideService.languages(db_session) == ["English", "French", "Hindi", "Nepali"]
        assert await GuideService.specialties(db_session) == ["Cultural tours", "High altitude trekking"]


class TestGuideWrites:
    async def test_create_with_certifications_and_destinations(self, db_session, guide_payload):
        destination = make_destination()
        db_session.add(destination)
        await db_session.commit()

        guide = await GuideService.create_guide(
            db_session,
            GuideCreate.model_validate(
                {
                    **guide_payload,
                    "certifications": [{"name": "Trekking Guide Licence", "issued_by": "NATHM", "year": 2018}],
                    "available_dates": [{"date_from": "2026-11-01", "date_to": "2026-11-30"}],
                    "destinations": [destination.id],
                }
            ),
        )

        assert guide.availability == "available"
        assert guide.city == "Pokhara"
        assert guide.experience_level == "intermediate"
        assert [c.issued_by for c in guide.certifications] == ["NATHM"]
        assert guide.available_dates[0].date_to == date(2026, 11, 30)
        assert [d.name for d in guide.destinations] == ["Everest Base Camp"]
        titles = (await db_session.execute(select(Notification.title))).scalars().all()
        assert titles == ["New Guide Added"]

    async def test_create_with_unknown_destination(self, db_session, guide_payload):
        with pytest.raises(NotFoundError, match="Destination not found"):
            await GuideService.create_guide(
                db_session, GuideCreate.model_validate({**guide_payload, "destinations": [7]})
            )

    async def test_update_replaces_certifications(self, db_session, roster):
        pemba = roster[0]

        updated = await GuideService.update_guide(
            db_session,
            pemba.id,
            GuideUpdate.model_validate(
                {
                    "hourly_rate": 30,
                    "certifications": [{"name": "Wilderness First Aid", "issued_by": "NOLS", "year": 2024}],
                }
            ),
        )

        assert updated.hourly_rate == 30
        assert updated.name == "Pemba Sherpa"
        assert [c.name for c in updated.certifications] == ["Wilderness First Aid"]

    async def test_delete_keeps_bookings_without_guide(self, db_session, roster):
        pemba = roster[0]
        destination = make_destination()
        customer = make_customer()
        db_session.add_all([destination, customer])
        await db_session.flush()
        booking = Booking(
            booking_number="B-20261001-5555",
            customer_id=customer.id,
            destination_id=destination.id,
            guide_id=pemba.id,
            start_date=date(2026, 11, 1),
            end_date=date(2026, 11, 5),
            duration=5,
            total_amount=800,
        )
        db_session.add(booking)
        await db_session.commit()

        await GuideService.delete_guide(db_session, pemba.id)

        result = await db_session.execute(
            select(Booking.guide_id).where(Booking.booking_number == "B-20261001-5555")
        )
        assert result.scalar_one() is None
        with pytest.raises(NotFoundError, match="Guide not found"):
            await GuideService.get_guide(db_session, pemba.id)


class TestSchedules:
    async def test_schedule_lifecycle(self, db_session, roster):
        pemba = roster[0]

        created = await GuideService.create_schedule(db_session, pemba.id, schedule_data())
        assert created.status == "pending"

        updated = await GuideService.update_schedule(
            db_session, pemba.id, created.id, ScheduleUpdate(status="confirmed", max_participants=10)
        )
        assert updated.status == "confirmed"
        assert updated.max_participants == 10

        schedules = await GuideService.list_schedules(db_session, pemba.id, status="confirmed")
        assert [s.id for s in schedules] == [created.id]

        await GuideService.delete_schedule(db_session, pemba.id, created.id)
        assert await GuideService.list_schedules(db_session, pemba.id) == []

    async def test_update_rejects_inverted_dates(self, db_session, roster):
        pemba = roster[0]
        created = await GuideService.create_schedule(db_session, pemba.id, schedule_data())

        with pytest.raises(InvalidInputError) as exc_info:
            await GuideService.update_schedule(
                db_session, pemba.id, created.id, ScheduleUpdate(end_date=date(2026, 10, 1))
            )
        assert exc_info.value.field == "end_date"

    async def test_schedule_of_other_guide_is_not_found(self, db_session, roster):
        pemba, lakpa = roster[0], roster[1]
        created = await GuideService.create_schedule(db_session, pemba.id, schedule_data())

        with pytest.raises(NotFoundError, match="Schedule not found"):
            await GuideService.get_schedule(db_session, lakpa.id, created.id)

    async def test_unknown_guide(self, db_session):
        with pytest.raises(NotFoundError, match="Guide not found"):
            await GuideService.list_schedules(db_session, 404)
