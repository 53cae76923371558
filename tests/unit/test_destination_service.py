"""
Unit tests for DestinationService.
"""

from datetime import date

import pytest
from sqlalchemy import func, select

from guideconnect.api.schemas.destination import DestinationCreate, DestinationUpdate
from guideconnect.exceptions import NotFoundError
from guideconnect.models import Booking, BookingActivity, Notification, Review
from guideconnect.services.destination_service import DestinationService
from conftest import make_customer, make_destination, make_guide


@pytest.fixture
async def destinations(db_session):
    rows = [
        make_destination(name="Everest Base Camp", rating=4.8, review_count=12, price_amount=1500),
        make_destination(
            name="Chitwan Safari",
            region="Chitwan",
            description="Jungle safari on elephant back and canoe trips in the national park.",
            featured=False,
            rating=4.3,
            review_count=5,
            price_amount=400,
            difficulty="easy",
            activities=["wildlife", "canoeing"],
            seasons=["winter"],
        ),
        make_destination(
            name="Tiger's Nest",
            country="Bhutan",
            region="Paro",
            featured=False,
            rating=3.9,
            review_count=0,
            price_amount=900,
            difficulty="moderate",
            activities=["hiking"],
            seasons=["all year"],
        ),
    ]
    db_session.add_all(rows)
    await db_session.commit()
    return rows


class TestListDestinations:
    async def test_featured_first_then_rating(self, db_session, destinations):
        rows, total = await DestinationService.list_destinations(db_session)

        assert total == 3
        assert [d.name for d in rows] == ["Everest Base Camp", "Chitwan Safari", "Tiger's Nest"]

    @pytest.mark.parametrize(
        "filters, expected",
        [
            ({"featured": True}, ["Everest Base Camp"]),
            ({"search": "jungle"}, ["Chitwan Safari"]),
            ({"search": "paro"}, ["Tiger's Nest"]),
            ({"min_price": 500, "max_price": 1000}, ["Tiger's Nest"]),
            ({"difficulty": "easy"}, ["Chitwan Safari"]),
            ({"country": "Bhutan"}, ["Tiger's Nest"]),
            ({"activities": ["canoeing", "hiking"]}, ["Chitwan Safari", "Tiger's Nest"]),
            ({"seasons": ["autumn"]}, ["Everest Base Camp"]),
            ({"rating": 4.5}, ["Everest Base Camp"]),
        ],
    )
    async def test_filters(self, db_session, destinations, filters, expected):
        rows, total = await DestinationService.list_destinations(db_session, **filters)

        assert [d.name for d in rows] == expected
        assert total == len(expected)

    async def test_pagination_keeps_total(self, db_session, destinations):
        rows, total = await DestinationService.list_destinations(db_session, limit=1, offset=1)

        assert total == 3
        assert [d.name for d in rows] == ["Chitwan Safari"]


class TestReadOperations:
    async def test_popular_requires_reviews_and_rating_above_four(self, db_session, destinations):
        popular = await DestinationService.popular_destinations(db_session)

        assert [d.name for d in popular] == ["Everest Base Camp", "Chitwan Safari"]

    async def test_featured(self, db_session, destinations):
        featured = await DestinationService.featured_destinations(db_session)

        assert [d.name for d in featured] == ["Everest Base Camp"]

    async def test_countries(self, db_session, destinations):
        countries = await DestinationService.countries(db_session)

        assert [(c.country, c.count) for c in countries] == [("Bhutan", 1), ("Nepal", 2)]

    async def test_get_missing(self, db_session):
        with pytest.raises(NotFoundError, match="Destination not found"):
            await DestinationService.get_destination(db_session, 404)


class TestWrites:
    async def test_create_links_guides_and_notifies(self, db_session, destination_payload):
        guide = make_guide()
        db_session.add(guide)
        await db_session.commit()

        destination = await DestinationService.create_destination(
            db_session,
            DestinationCreate.model_validate({**destination_payload, "available_guides": [guide.id]}),
        )

        assert destination.name == "Annapurna Circuit"
        assert destination.region == "Gandaki"
        assert destination.images == ["https://images.example.com/annapurna.jpg"]
        assert destination.min_days == 14
        assert [g.name for g in destination.guides] == ["Pemba Sherpa"]
        titles = (await db_session.execute(select(Notification.title))).scalars().all()
        assert titles == ["New Destination Added"]

    async def test_create_with_unknown_guide(self, db_session, destination_payload):
        with pytest.raises(NotFoundError, match="Guide not found"):
            await DestinationService.create_destination(
                db_session,
                DestinationCreate.model_validate({**destination_payload, "available_guides": [99]}),
            )

    async def test_partial_update(self, db_session, destinations):
        everest = destinations[0]

        updated = await DestinationService.update_destination(
            db_session,
            everest.id,
            DestinationUpdate.model_validate({"price": {"amount": 1750}, "featured": False}),
        )

        assert updated.price_amount == 1750
        assert updated.featured is False
        assert updated.name == "Everest Base Camp"
        assert updated.difficulty == "challenging"

    async def test_delete_cascades_bookings_and_reviews(self, db_session, destinations):
        everest = destinations[0]
        customer = make_customer()
        db_session.add(customer)
        await db_session.flush()
        db_session.add_all(
            [
                Booking(
                    booking_number="B-20261001-1234",
                    customer_id=customer.id,
                    destination_id=everest.id,
                    start_date=date(2026, 11, 1),
                    end_date=date(2026, 11, 12),
                    duration=12,
                    total_amount=1500,
                    activities=[BookingActivity(name="Kala Patthar sunrise")],
                ),
                Review(
                    title="Unforgettable",
                    content="Standing at base camp was the highlight of my life.",
                    rating=5,
                    author_name="Anna",
                    destination_id=everest.id,
                ),
            ]
        )
        await db_session.commit()

        await DestinationService.delete_destination(db_session, everest.id)

        assert await db_session.scalar(select(func.count()).select_from(Booking)) == 0
        assert await db_session.scalar(select(func.count()).select_from(BookingActivity)) == 0
        assert await db_session.scalar(select(func.count()).select_from(Review)) == 0
        with pytest.raises(NotFoundError):
            await DestinationService.get_destination(db_session, everest.id)

    async def test_delete_missing(self, db_session):
        with pytest.raises(NotFoundError):
            await DestinationService.delete_destination(db_session, 404)
