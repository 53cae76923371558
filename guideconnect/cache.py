"""
Redis-backed response cache for statistics endpoints.

The Redis client is created at application startup. When Redis is not
configured or unreachable the cache is a no-op and statistics are computed on
every request.
"""

import json
import logging
from typing import Any, Optional

import redis.asyncio as aioredis
from tenacity import (
    before_sleep_log,
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from guideconnect.config import settings

logger = logging.getLogger(__name__)

# Set by the application lifespan
redis_client: Optional[aioredis.Redis] = None

DASHBOARD_KEY = "stats:dashboard"
BOOKING_STATS_KEY = "stats:bookings"
GUIDE_STATS_KEY = "stats:guides"
DESTINATION_STATS_KEY = "stats:destinations"

BOOKING_DEPENDENT_KEYS = (DASHBOARD_KEY, BOOKING_STATS_KEY)
# Top destination and guide lists in the booking stats embed catalogue names and ratings
CATALOGUE_DEPENDENT_KEYS = (DASHBOARD_KEY, BOOKING_STATS_KEY, GUIDE_STATS_KEY, DESTINATION_STATS_KEY)


@retry(
    stop=stop_after_attempt(5),
    wait=wait_exponential(multiplier=1, min=2, max=10),
    retry=retry_if_exception_type(Exception),
    before_sleep=before_sleep_log(logger, logging.WARNING),
    reraise=True,
)
async def connect_to_redis(url: str) -> aioredis.Redis:
    """
    Connect to Redis with retry logic.

    Retries up to 5 times with exponential backoff (2-10 seconds) so the app
    can start while Redis is still coming up.
    """
    try:
        client = aioredis.from_url(url, encoding="utf-8", decode_responses=True)
        await client.ping()
        logger.info("Redis connection established")
        return client
    except Exception as e:
        logger.error(f"Redis connection failed: {e}")
        raise


class StatsCache:
    """JSON cache over an optional Redis client; every failure degrades to a miss."""

    def __init__(self, client: Optional[aioredis.Redis], ttl: Optional[int] = None):
        self.client = client
        self.ttl = ttl if ttl is not None else settings.cache_ttl_stats

    @property
    def enabled(self) -> bool:
        return self.client is not None and self.ttl > 0

    async def get_json(self, key: str) -> Optional[Any]:
        if not self.enabled:
            return None
        try:
            raw = await self.client.get(key)
        except Exception as e:
            logger.warning(f"Cache read failed for {key}: {e}")
            return None
        if raw is None:
            return None
        logger.debug(f"Cache hit: {key}")
        return json.loads(raw)

    async def set_json(self, key: str, value: Any) -> None:
        if not self.enabled:
            return
        try:
            await self.client.set(key, json.dumps(value, default=str), ex=self.ttl)
        except Exception as e:
            logger.warning(f"Cache write failed for {key}: {e}")

    async def invalidate(self, *keys: str) -> None:
        if self.client is None or not keys:
            return
        try:
            await self.client.delete(*keys)
            logger.debug(f"Cache invalidated: {', '.join(keys)}")
        except Exception as e:
            logger.warning(f"Cache invalidation failed: {e}")


def get_stats_cache() -> StatsCache:
    """FastAPI dependency returning a cache bound to the current Redis client."""
    return StatsCache(redis_client)
