"""Ephemeral Cache — ExpiringCache implementations (Redis and in-process).

Invariants:
    - set_with_expiry overwrites any existing value and resets its expiry
    - An expired key reads as absent (get → None, delete → False)
    - RedisCache maps every RedisError to CacheError
    - InMemoryTTLCache is process-local: valid only for single-instance runs and tests

Design Decisions:
    - Singleton cache initialized on startup, like db_manager
    - Injectable clock on InMemoryTTLCache so tests can expire keys without sleeping
"""

import logging
import time
from typing import Callable

from redis.asyncio import Redis
from redis.exceptions import RedisError

from intake.core.errors import CacheError, ErrorContext
from intake.core.repository_protocols import ExpiringCache

logger = logging.getLogger(__name__)


class RedisCache:
    """ExpiringCache on redis.asyncio (string values, decode_responses)."""

    def __init__(self, client: Redis):
        self._redis = client

    @classmethod
    def from_url(cls, url: str, socket_timeout: float | None = None) -> "RedisCache":
        return cls(Redis.from_url(
            url, decode_responses=True, socket_timeout=socket_timeout,
        ))

    async def set_with_expiry(self, key: str, value: str, seconds: int) -> None:
        try:
            await self._redis.set(key, value, ex=seconds)
        except RedisError as e:
            raise CacheError(
                f"SET {key} failed: {e}", context=ErrorContext(operation="cache_set"),
            ) from e

    async def get(self, key: str) -> str | None:
        try:
            return await self._redis.get(key)
        except RedisError as e:
            raise CacheError(
                f"GET {key} failed: {e}", context=ErrorContext(operation="cache_get"),
            ) from e

    async def delete(self, key: str) -> bool:
        try:
            return bool(await self._redis.delete(key))
        except RedisError as e:
            raise CacheError(
                f"DEL {key} failed: {e}", context=ErrorContext(operation="cache_delete"),
            ) from e

    async def ping(self) -> bool:
        try:
            return bool(await self._redis.ping())
        except RedisError as e:
            logger.error(f"Redis ping failed: {e}")
            return False

    async def close(self) -> None:
        await self._redis.aclose()


class InMemoryTTLCache:
    """Process-local ExpiringCache with lazy expiry on access."""

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._clock = clock
        self._entries: dict[str, tuple[str, float]] = {}

    def _live(self, key: str) -> str | None:
        entry = self._entries.get(key)
        if entry is None:
            return None
        value, expires_at = entry
        if self._clock() >= expires_at:
            del self._entries[key]
            return None
        return value

    async def set_with_expiry(self, key: str, value: str, seconds: int) -> None:
        self._entries[key] = (value, self._clock() + seconds)

    async def get(self, key: str) -> str | None:
        return self._live(key)

    async def delete(self, key: str) -> bool:
        if self._live(key) is None:
            return False
        del self._entries[key]
        return True

    async def ping(self) -> bool:
        return True

    async def close(self) -> None:
        self._entries.clear()


# Singleton (initialized on startup)
cache: RedisCache | InMemoryTTLCache | None = None


def init_cache(redis_url: str, socket_timeout: float | None = None):
    global cache
    if redis_url:
        cache = RedisCache.from_url(redis_url, socket_timeout=socket_timeout)
    else:
        logger.warning(
            "REDIS_URL not set: using in-process OTP cache "
            "(codes are not shared between workers or replicas)",
        )
        cache = InMemoryTTLCache()


async def close_cache():
    global cache
    if cache is not None:
        await cache.close()
        cache = None


def get_cache() -> ExpiringCache:
    """FastAPI dependency for the ephemeral cache."""
    if cache is None:
        raise CacheError("Cache not initialized")
    return cache
