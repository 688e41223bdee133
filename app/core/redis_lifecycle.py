# app/core/redis_lifecycle.py
import redis.asyncio as redis
from app.core.config import settings
from app.core.cache import RedisCache
from app.core.logger import logger
from typing import AsyncGenerator, Optional

_redis_client: Optional[redis.Redis] = None
_cache_instance: Optional[RedisCache] = None


async def init_redis_client() -> Optional[redis.Redis]:
    """Initialize and return a Redis client (for startup).

    Returns None when no REDIS_URL is configured or the server is unreachable;
    callers then run without a cache.
    """
    global _redis_client

    if not settings.REDIS_URL:
        return None

    if _redis_client is None:
        client = redis.from_url(settings.REDIS_URL, decode_responses=True)
        try:
            await client.ping()
        except (redis.ConnectionError, OSError) as e:
            logger.warning(f"⚠️ Could not connect to Redis, running without cache: {e}")
            return None
        _redis_client = client

    return _redis_client


async def get_cache_instance() -> Optional[RedisCache]:
    global _cache_instance

    if _cache_instance is None:
        client = await init_redis_client()
        if client is None:
            return None
        _cache_instance = RedisCache(client)

    return _cache_instance


async def get_cache() -> AsyncGenerator[Optional[RedisCache], None]:
    """FastAPI dependency injection for RedisCache."""
    yield await get_cache_instance()


async def close_redis():
    """Close the Redis connection on application shutdown."""
    global _redis_client, _cache_instance
    if _redis_client:
        await _redis_client.aclose()
        _redis_client = None
    _cache_instance = None
