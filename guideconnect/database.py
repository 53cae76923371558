"""
Database connection and session management using SQLAlchemy.
Supports async operations with the asyncpg driver (aiosqlite for local runs and tests).
"""

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Dict

from sqlalchemy import event, text
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from guideconnect.config import settings
from guideconnect.models.base import Base

logger = logging.getLogger(__name__)


def _engine_options() -> Dict[str, Any]:
    """Pool options for the configured backend."""
    if not settings.is_postgres:
        return {}
    return {
        "pool_pre_ping": True,  # Verify connections before using
        "pool_size": 5,
        "max_overflow": 10,
        "pool_recycle": 3600,  # Recycle connections after 1 hour
        "pool_timeout": 30,
        "connect_args": {
            "server_settings": {"application_name": settings.app_name},
            "timeout": 10,
        },
    }


# Async Engine Configuration
async_engine = create_async_engine(
    settings.database_url,
    echo=settings.debug,
    **_engine_options(),
)

# Async Session Factory
AsyncSessionLocal = async_sessionmaker(
    bind=async_engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autocommit=False,
    autoflush=False,
)


if settings.is_postgres:

    @event.listens_for(async_engine.sync_engine, "connect")
    def set_postgres_pragmas(dbapi_connection, connection_record):
        """Set PostgreSQL connection parameters."""
        cursor = dbapi_connection.cursor()
        cursor.execute("SET timezone='UTC'")
        cursor.close()


async def get_async_session() -> AsyncGenerator[AsyncSession, None]:
    """
    Async dependency for FastAPI to get database session.

    Usage:
        @router.get("/items")
        async def read_items(db: AsyncSession = Depends(get_async_session)):
            result = await db.execute(select(Item))
            return result.scalars().all()
    """
    async with AsyncSessionLocal() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


@asynccontextmanager
async def get_async_session_context() -> AsyncGenerator[AsyncSession, None]:
    """
    Async context manager for database session.

    Usage:
        async with get_async_session_context() as db:
            result = await db.execute(select(Item))
            items = result.scalars().all()
    """
    async with AsyncSessionLocal() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


async def init_db() -> None:
    """
    Initialize database tables.

    WARNING: This should only be used in development.
    In production, use Alembic migrations instead.
    """
    import guideconnect.models  # noqa: F401  registers all tables

    async with async_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database tables created successfully")


async def drop_db() -> None:
    """
    Drop all database tables.

    WARNING: This will delete all data! Only use in development/testing.
    """
    import guideconnect.models  # noqa: F401

    async with async_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    logger.warning("All database tables dropped")


async def check_db_connection() -> bool:
    """
    Check if database connection is healthy.

    Returns:
        bool: True if connection is healthy, False otherwise
    """
    try:
        async with async_engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
        logger.info("Database connection is healthy")
        return True
    except Exception as e:
        logger.error(f"Database connection failed: {e}")
        return False


async def close_db_connections() -> None:
    """Close all database connections and dispose of the engine."""
    await async_engine.dispose()
    logger.info("Database connections closed")
