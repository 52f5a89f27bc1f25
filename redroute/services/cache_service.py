"""
Redis caching service for hotel and event listings.

CACHING STRATEGY
================

What we cache:
  - Hotel and event list responses (JSON-serialized, camelCase)
  - Key pattern: "{namespace}:list:{sorted query params}"
    e.g. "hotels:list:city=paris", "events:list:q=jazz&take=20"

Invalidation strategy:
  - On a hotel review write: delete all "hotels:list:*" keys (rating changed)
  - On an event review write: delete all "events:list:*" keys
  - TTL-based expiry as safety net (REDIS_CACHE_TTL)

Failure mode:
  Redis is advisory. When it is disabled or unreachable every function
  here degrades to a no-op / cache miss and the database answers.

Detail pages are not cached in Redis: they embed the latest reviews and
are served with Cache-Control headers instead.
"""

import json
from typing import Optional

import redis.asyncio as redis
from redroute.core.config import get_settings
from redroute.core.metrics import record_cache_operation
from redroute.core.logging import get_logger

logger = get_logger(__name__)
settings = get_settings()

_redis_client: Optional[redis.Redis] = None


async def get_redis() -> Optional[redis.Redis]:
    """Get or create Redis connection. Returns None if Redis is disabled."""
    global _redis_client

    if not settings.REDIS_ENABLED:
        return None

    if _redis_client is None:
        try:
            _redis_client = redis.from_url(
                settings.REDIS_URL,
                encoding="utf-8",
                decode_responses=True,
                socket_connect_timeout=5,
                socket_timeout=5,
                retry_on_timeout=True,
            )
            # Test connection
            await _redis_client.ping()
            logger.info("redis_connected", url=settings.REDIS_URL)
        except Exception as e:
            logger.error("redis_connection_failed", error=str(e))
            _redis_client = None
            return None

    return _redis_client


async def close_redis() -> None:
    """Close Redis connection on shutdown."""
    global _redis_client
    if _redis_client:
        await _redis_client.aclose()
        _redis_client = None


def cache_control_value() -> str:
    """Cache-Control for public list and detail responses."""
    return (
        f"public, max-age={settings.CACHE_MAX_AGE}, "
        f"stale-while-revalidate={settings.CACHE_STALE_WHILE_REVALIDATE}"
    )


def make_list_key(namespace: str, **params) -> str:
    parts = [
        f"{name}={str(value).strip().lower()}"
        for name, value in sorted(params.items())
        if value not in (None, "")
    ]
    return f"{namespace}:list:{'&'.join(parts)}"


async def get_cached_list(namespace: str, **params) -> Optional[dict]:
    """Retrieve a cached list response."""
    client = await get_redis()
    if not client:
        return None

    key = make_list_key(namespace, **params)
    try:
        data = await client.get(key)
        if data:
            logger.debug("cache_hit", key=key)
            record_cache_operation("get", hit=True)
            return json.loads(data)
        logger.debug("cache_miss", key=key)
        record_cache_operation("get", hit=False)
    except Exception as e:
        logger.error("cache_get_error", key=key, error=str(e))

    return None


async def set_cached_list(namespace: str, data: dict, **params) -> None:
    """Cache a list response with TTL."""
    client = await get_redis()
    if not client:
        return

    key = make_list_key(namespace, **params)
    try:
        await client.setex(key, settings.REDIS_CACHE_TTL, json.dumps(data, default=str))
        logger.debug("cache_set", key=key, ttl=settings.REDIS_CACHE_TTL)
    except Exception as e:
        logger.error("cache_set_error", key=key, error=str(e))


async def invalidate_list_cache(namespace: str) -> None:
    """
    Invalidate all cached listings of a namespace.
    Uses SCAN to find and delete all keys matching the prefix.
    """
    client = await get_redis()
    if not client:
        return

    try:
        deleted = 0
        async for key in client.scan_iter(match=f"{namespace}:list:*", count=100):
            await client.delete(key)
            deleted += 1
        logger.info("cache_invalidated", namespace=namespace, keys_deleted=deleted)
    except Exception as e:
        logger.error("cache_invalidation_error", namespace=namespace, error=str(e))


async def get_cache_stats() -> dict:
    """Get Redis cache statistics for monitoring."""
    client = await get_redis()
    if not client:
        return {"status": "disabled"}

    try:
        info = await client.info("stats")
        hits = info.get("keyspace_hits", 0)
        misses = info.get("keyspace_misses", 0)
        return {
            "status": "connected",
            "hits": hits,
            "misses": misses,
            "hitRate": round(hits / max(hits + misses, 1) * 100, 2),
        }
    except Exception as e:
        return {"status": "error", "error": str(e)}
