"""
Seed data for a development database.
Populates destinations, guides and a few sample bookings through the service
layer so that notifications and ratings stay consistent.
"""

import logging
from datetime import date, timedelta
from typing import Dict, List

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from guideconnect.api.schemas.booking import BookingCreate
from guideconnect.api.schemas.destination import DestinationCreate
from guideconnect.api.schemas.guide import GuideCreate
from guideconnect.models import Booking, Destination, Guide
from guideconnect.services.booking_service import BookingService
from guideconnect.services.destination_service import DestinationService
from guideconnect.services.guide_service import GuideService

logger = logging.getLogger(__name__)

DESTINATIONS: List[Dict] = [
    {
        "name": "Everest Base Camp Trek",
        "location": {"country": "Nepal", "region": "Khumbu", "coordinates": {"latitude": 28.0043, "longitude": 86.8571}},
        "description": "Classic trek through Sherpa villages to the foot of the world's highest mountain.",
        "images": ["https://images.example.com/everest-base-camp.jpg"],
        "featured": True,
        "price": {"amount": 1450, "currency": "USD", "period": "per person"},
        "duration": {"min_days": 12, "max_days": 16},
        "difficulty": "challenging",
        "activities": ["trekking", "photography", "culture"],
        "seasons": ["spring", "autumn"],
        "amenities": ["teahouse lodging", "porter service"],
    },
    {
        "name": "Annapurna Circuit",
        "location": {"country": "Nepal", "region": "Annapurna", "coordinates": {"latitude": 28.7944, "longitude": 83.9378}},
        "description": "Long loop over the Thorong La pass with huge variety in landscape and culture.",
        "images": ["https://images.example.com/annapurna-circuit.jpg"],
        "featured": True,
        "price": {"amount": 1200, "currency": "USD", "period": "per person"},
        "duration": {"min_days": 14, "max_days": 21},
        "difficulty": "difficult",
        "activities": ["trekking", "hot springs"],
        "seasons": ["spring", "autumn"],
        "amenities": ["teahouse lodging"],
    },
    {
        "name": "Kathmandu Heritage Walk",
        "location": {"country": "Nepal", "region": "Bagmati"},
        "description": "Guided day through Durbar Square, Swayambhunath and the old bazaars of Kathmandu.",
        "images": ["https://images.example.com/kathmandu-heritage.jpg"],
        "price": {"amount": 60, "currency": "USD", "period": "per day"},
        "duration": {"min_days": 1, "max_days": 2},
        "difficulty": "easy",
        "activities": ["culture", "sightseeing", "food"],
        "seasons": ["all year"],
    },
    {
        "name": "Chitwan Jungle Safari",
        "location": {"country": "Nepal", "region": "Chitwan"},
        "description": "Jeep and canoe safaris in Chitwan National Park looking for rhinos and tigers.",
        "images": ["https://images.example.com/chitwan-safari.jpg"],
        "featured": True,
        "price": {"amount": 320, "currency": "USD", "period": "per person"},
        "duration": {"min_days": 2, "max_days": 4},
        "difficulty": "easy",
        "activities": ["wildlife", "canoeing"],
        "seasons": ["winter", "spring"],
    },
]

GUIDES: List[Dict] = [
    {
        "name": "Pemba Sherpa",
        "email": "pemba.sherpa@example.com",
        "phone": "+977 980 000 0001",
        "photo": "https://images.example.com/guides/pemba.jpg",
        "location": {"country": "Nepal", "region": "Khumbu", "city": "Namche Bazaar"},
        "languages": ["English", "Nepali", "Sherpa"],
        "specialties": ["high altitude trekking", "mountaineering"],
        "experience": {"years": 15, "level": "master", "expeditions": 40},
        "bio": "Born in Namche Bazaar, Pemba has led treks and climbing expeditions in the Khumbu for fifteen years.",
        "certifications": [{"name": "Trekking Guide License", "issued_by": "Nepal Tourism Board", "year": 2010}],
        "hourly_rate": 25,
        "rating": 4.9,
        "review_count": 0,
        "destinations": ["Everest Base Camp Trek"],
    },
    {
        "name": "Sita Gurung",
        "email": "sita.gurung@example.com",
        "phone": "+977 980 000 0002",
        "photo": "https://images.example.com/guides/sita.jpg",
        "location": {"country": "Nepal", "region": "Gandaki", "city": "Pokhara"},
        "languages": ["English", "Nepali", "Hindi"],
        "specialties": ["trekking", "cultural tours"],
        "experience": {"years": 8, "level": "expert"},
        "bio": "Sita guides the Annapurna region and runs homestay tours with Gurung families around Pokhara.",
        "hourly_rate": 20,
        "rating": 4.7,
        "destinations": ["Annapurna Circuit"],
    },
    {
        "name": "Ramesh Thapa",
        "email": "ramesh.thapa@example.com",
        "phone": "+977 980 000 0003",
        "photo": "https://images.example.com/guides/ramesh.jpg",
        "location": {"country": "Nepal", "region": "Bagmati", "city": "Kathmandu"},
        "languages": ["English", "Nepali", "German"],
        "specialties": ["cultural tours", "wildlife"],
        "experience": {"years": 5, "level": "intermediate"},
        "bio": "Ramesh is a history graduate who leads heritage walks in the valley and safaris in Chitwan.",
        "hourly_rate": 15,
        "availability": "partially_available",
        "rating": 4.3,
        "destinations": ["Kathmandu Heritage Walk", "Chitwan Jungle Safari"],
    },
]


async def _count(db: AsyncSession, model) -> int:
    return (await db.execute(select(func.count(model.id)))).scalar_one()


async def seed_destinations(db: AsyncSession) -> Dict[str, int]:
    """Create sample destinations. Returns a name -> id map."""
    result = await db.execute(select(Destination.name, Destination.id))
    existing = dict(result.all())

    for data in DESTINATIONS:
        if data["name"] in existing:
            continue
        destination = await DestinationService.create_destination(db, DestinationCreate(**data))
        existing[destination.name] = destination.id

    logger.info(f"Destinations seeded ({len(existing)} total)")
    return existing


async def seed_guides(db: AsyncSession, destination_ids: Dict[str, int]) -> Dict[str, int]:
    """Create sample guides linked to seeded destinations."""
    result = await db.execute(select(Guide.email, Guide.id))
    existing = dict(result.all())

    for data in GUIDES:
        if data["email"] in existing:
            continue
        payload = dict(data)
        payload["destinations"] = [destination_ids[name] for name in data["destinations"] if name in destination_ids]
        guide = await GuideService.create_guide(db, GuideCreate(**payload))
        existing[guide.email] = guide.id

    logger.info(f"Guides seeded ({len(existing)} total)")
    return existing


async def seed_bookings(db: AsyncSession, destination_ids: Dict[str, int], guide_ids: Dict[str, int]) -> None:
    """Create a handful of bookings spread over the coming weeks."""
    if await _count(db, Booking):
        logger.info("Bookings already exist, skipping")
        return

    start = date.today() + timedelta(days=14)
    samples = [
        ("Everest Base Camp Trek", "pemba.sherpa@example.com", "confirmed", "completed", 2, 2900),
        ("Annapurna Circuit", "sita.gurung@example.com", "pending", "pending", 1, 1200),
        ("Chitwan Jungle Safari", "ramesh.thapa@example.com", "confirmed", "partial", 4, 1280),
    ]

    for offset, (destination, guide_email, status, payment_status, adults, amount) in enumerate(samples):
        trip_start = start + timedelta(days=offset * 30)
        booking = BookingCreate(
            status=status,
            customer={
                "name": f"Sample Traveler {offset + 1}",
                "email": f"traveler{offset + 1}@example.com",
                "nationality": "United Kingdom",
            },
            destination_id=destination_ids[destination],
            guide_id=guide_ids.get(guide_email),
            dates={"start_date": trip_start, "end_date": trip_start + timedelta(days=5)},
            travelers={"adults": adults},
            payment={"total_amount": amount, "currency": "USD", "status": payment_status},
        )
        await BookingService.create_booking(db, booking)

    logger.info(f"Created {len(samples)} sample bookings")


async def seed_all(db: AsyncSession) -> None:
    """
    Run all seeding functions.

    Usage:
        async with get_async_session_context() as db:
            await seed_all(db)
    """
    logger.info("Starting database seeding...")

    destination_ids = await seed_destinations(db)
    guide_ids = await seed_guides(db, destination_ids)
    await seed_bookings(db, destination_ids, guide_ids)

    logger.info("Database seeding completed successfully!")
