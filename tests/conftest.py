"""
Pytest configuration and shared fixtures for Nepal Guide Connect tests.
"""

import os
from datetime import datetime, timezone
from pathlib import Path

import pytest
from dotenv import load_dotenv

# Load test environment variables before any app imports
env_file = Path(__file__).parent.parent / ".env.test"
if env_file.exists():
    load_dotenv(env_file, override=True)
else:
    # Fallback: Set minimal environment variables for testing
    os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
    os.environ.setdefault("SECRET_KEY", "test-secret-key-for-testing-at-least-32-characters-long")
    os.environ.setdefault("ADMIN_EMAIL", "admin@nepalguideconnect.com")
    os.environ.setdefault("LOG_TO_FILE", "false")
    os.environ.setdefault("DEBUG", "False")

from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine  # noqa: E402
from sqlalchemy.orm import Session  # noqa: E402
from sqlalchemy.pool import NullPool  # noqa: E402

from guideconnect.config import settings  # noqa: E402
from guideconnect.models import Base, Customer, Destination, Guide  # noqa: E402

ADMIN_EMAIL = settings.admin_email
USER_EMAIL = "traveler@example.com"


# ============================================================================
# Model factories
# ============================================================================


def make_destination(**overrides) -> Destination:
    values = {
        "name": "Everest Base Camp",
        "description": "Classic trek to the foot of the highest mountain on Earth.",
        "country": "Nepal",
        "region": "Khumbu",
        "images": ["https://images.example.com/ebc.jpg"],
        "featured": True,
        "rating": 0.0,
        "review_count": 0,
        "price_amount": 1500.0,
        "price_currency": "USD",
        "price_period": "per person",
        "min_days": 12,
        "max_days": 16,
        "difficulty": "challenging",
        "activities": ["trekking", "photography"],
        "seasons": ["spring", "autumn"],
        "amenities": ["tea houses"],
    }
    values.update(overrides)
    return Destination(**values)


def make_guide(**overrides) -> Guide:
    values = {
        "name": "Pemba Sherpa",
        "email": "pemba@example.com",
        "phone": "+977-9800000001",
        "photo": "https://images.example.com/pemba.jpg",
        "country": "Nepal",
        "region": "Khumbu",
        "city": "Namche Bazaar",
        "languages": ["English", "Nepali"],
        "specialties": ["High altitude trekking"],
        "experience_years": 12,
        "experience_level": "expert",
        "bio": "Licensed mountain guide from Solukhumbu with twelve years on Himalayan trails.",
        "hourly_rate": 25.0,
        "availability": "available",
        "rating": 0.0,
        "review_count": 0,
    }
    values.update(overrides)
    return Guide(**values)


def make_customer(**overrides) -> Customer:
    values = {"name": "Anna Traveler", "email": "anna@example.com", "country": "Germany"}
    values.update(overrides)
    return Customer(**values)


def utc(year: int, month: int, day: int, hour: int = 12) -> datetime:
    return datetime(year, month, day, hour, tzinfo=timezone.utc)


# ============================================================================
# Request payloads
# ============================================================================


@pytest.fixture
def booking_payload():
    """Factory for POST /bookings bodies."""

    def build(destination_id: int, guide_id=None, **overrides):
        payload = {
            "customer": {"name": "Anna Traveler", "email": "anna@example.com"},
            "destination_id": destination_id,
            "guide_id": guide_id,
            "dates": {"start_date": "2026-11-02", "end_date": "2026-11-14"},
            "travelers": {"adults": 2, "children": 1},
            "payment": {"total_amount": 3200.0, "currency": "USD"},
        }
        payload.update(overrides)
        return payload

    return build


@pytest.fixture
def destination_payload():
    return {
        "name": "Annapurna Circuit",
        "location": {"country": "Nepal", "region": "Gandaki"},
        "description": "Long circuit around the Annapurna massif over Thorong La pass.",
        "images": ["https://images.example.com/annapurna.jpg"],
        "featured": True,
        "price": {"amount": 1200, "currency": "USD", "period": "per person"},
        "duration": {"min_days": 14, "max_days": 21},
        "difficulty": "challenging",
        "activities": ["trekking"],
        "seasons": ["spring", "autumn"],
    }


@pytest.fixture
def guide_payload():
    return {
        "name": "Lakpa Dorje",
        "email": "lakpa@example.com",
        "phone": "+977-9800000002",
        "photo": "https://images.example.com/lakpa.jpg",
        "location": {"country": "Nepal", "region": "Gandaki", "city": "Pokhara"},
        "languages": ["English", "Nepali", "Hindi"],
        "specialties": ["Cultural tours"],
        "experience": {"years": 8, "level": "intermediate"},
        "bio": "Pokhara based guide leading Annapurna treks and cultural walks for eight years.",
        "hourly_rate": 20,
    }


# ============================================================================
# Database fixtures
# ============================================================================


@pytest.fixture
async def db_session():
    """Create an in-memory database session for testing."""
    engine = create_async_engine("sqlite+aiosqlite:///:memory:", echo=False)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async_session_maker = async_sessionmaker(
        engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
    )

    async with async_session_maker() as session:
        yield session

    await engine.dispose()


@pytest.fixture
def database_file(tmp_path):
    """SQLite file with all tables, shared by the test client and seeding helpers."""
    path = tmp_path / "guideconnect.db"
    engine = create_engine(f"sqlite:///{path}")
    Base.metadata.create_all(engine)
    engine.dispose()
    return path


@pytest.fixture
def seed(database_file):
    """
    Insert rows with a synchronous session and return them with ids loaded.

    Usage:
        destination, guide = seed(make_destination(), make_guide())
    """
    engine = create_engine(f"sqlite:///{database_file}")

    def insert(*objects):
        with Session(engine, expire_on_commit=False) as session:
            session.add_all(objects)
            session.commit()
        return objects if len(objects) > 1 else objects[0]

    yield insert
    engine.dispose()


@pytest.fixture
def client(database_file):
    """Test client whose requests use the temporary SQLite file."""
    from guideconnect.api.main import app
    from guideconnect.database import get_async_session

    engine = create_async_engine(f"sqlite+aiosqlite:///{database_file}", poolclass=NullPool)
    session_factory = async_sessionmaker(
        engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
    )

    async def override_get_async_session():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_async_session] = override_get_async_session
    yield TestClient(app)
    app.dependency_overrides.clear()


# ============================================================================
# Sessions
# ============================================================================


def _auth_headers(email: str, name: str) -> dict:
    from guideconnect.security import create_session_token

    token, _ = create_session_token(email, name)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def user_headers():
    return _auth_headers(USER_EMAIL, "Tenzing Traveler")


@pytest.fixture
def admin_headers():
    return _auth_headers(ADMIN_EMAIL, "Administrator")
