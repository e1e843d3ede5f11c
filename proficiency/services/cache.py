"""Read-through cache for display-safe question lists.

Flow:  question_bank → cache → hit  → return
                             → miss → store → populate cache → return

Two invalidation mechanisms cover each other:
  - TTL (QUESTION_CACHE_TTL_SECONDS): stale entries expire on their own,
    in Redis and in the in-process cache alike.
  - Explicit: a bulk-load deletes every ``questions:*`` entry immediately.

The answer key is never written to the cache; only DisplayQuestion
payloads are.
"""

from __future__ import annotations

import time
from collections.abc import Callable
from typing import Protocol, runtime_checkable

from proficiency.core.config import SETTINGS
from proficiency.db.redis import redis_pool


@runtime_checkable
class CacheService(Protocol):
    async def get(self, key: str) -> str | None:
        """Fetch a cached value.  Returns None on cache miss."""
        ...

    async def set(self, key: str, value: str, ttl_seconds: int) -> None: ...

    async def delete(self, key: str) -> None: ...

    async def delete_pattern(self, pattern: str) -> None:
        """Delete all keys matching a trailing-glob pattern (``questions:*``)."""
        ...


class InMemoryCacheService:
    """In-process cache with per-entry expiry.  Tests clear ``_store``.

    Only invalidated by bulk-loads in the same process, so it is used
    only when the bank itself lives in this process (no DATABASE_URL).
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._store: dict[str, str] = {}
        self._expires_at: dict[str, float] = {}
        self._clock = clock

    async def get(self, key: str) -> str | None:
        expires_at = self._expires_at.get(key)
        if expires_at is not None and self._clock() >= expires_at:
            self._store.pop(key, None)
            del self._expires_at[key]
            return None
        return self._store.get(key)

    async def set(self, key: str, value: str, ttl_seconds: int) -> None:
        self._store[key] = value
        self._expires_at[key] = self._clock() + ttl_seconds

    async def delete(self, key: str) -> None:
        self._store.pop(key, None)
        self._expires_at.pop(key, None)

    async def delete_pattern(self, pattern: str) -> None:
        prefix = pattern.rstrip("*")
        for k in [k for k in self._store if k.startswith(prefix)]:
            del self._store[k]
            self._expires_at.pop(k, None)


class PassThroughCacheService:
    """Stores nothing: every read is a miss and goes to the store.

    Used when the bank is in PostgreSQL but Redis is not configured; an
    in-process copy would miss bulk-loads run from another process.
    """

    async def get(self, key: str) -> str | None:
        return None

    async def set(self, key: str, value: str, ttl_seconds: int) -> None:
        return None

    async def delete(self, key: str) -> None:
        return None

    async def delete_pattern(self, pattern: str) -> None:
        return None


class RedisCacheService:
    """Redis-backed cache shared by every API instance."""

    _PREFIX = "cache:"

    def __init__(self, redis_client) -> None:
        self._redis = redis_client

    async def get(self, key: str) -> str | None:
        return await self._redis.get(f"{self._PREFIX}{key}")

    async def set(self, key: str, value: str, ttl_seconds: int) -> None:
        await self._redis.setex(f"{self._PREFIX}{key}", ttl_seconds, value)

    async def delete(self, key: str) -> None:
        await self._redis.delete(f"{self._PREFIX}{key}")

    async def delete_pattern(self, pattern: str) -> None:
        # SCAN rather than KEYS: cursor-based, never blocks the server.
        cursor = 0
        while True:
            cursor, keys = await self._redis.scan(
                cursor, match=f"{self._PREFIX}{pattern}", count=100
            )
            if keys:
                await self._redis.delete(*keys)
            if cursor == 0:
                break


def build_cache_service(redis_client, *, database_configured: bool) -> CacheService:
    if redis_client is not None:
        return RedisCacheService(redis_client)
    if database_configured:
        return PassThroughCacheService()
    return InMemoryCacheService()


cache_service: CacheService = build_cache_service(
    redis_pool, database_configured=SETTINGS.database_url is not None
)
