"""
Optional Redis side-cache.

Every operation degrades to a no-op when Redis is unreachable: lookups
report ``CacheStatus.UNAVAILABLE`` instead of raising, and callers treat
that exactly like a miss. A connectivity flag gates all calls so a dead
connection is not hammered; while down, the connection is re-probed with
PING at most once per ``reconnect_interval`` seconds.

Deletes that could not reach Redis are remembered and replayed before a
reconnect is reported, so a key invalidated during an outage is never
served again once the cache comes back.
"""
import time
from dataclasses import dataclass
from enum import Enum
from typing import Optional

import structlog
from fastapi import Request
from redis.asyncio import Redis
from redis.exceptions import RedisError

from shared.observability.metrics import shop_cache_requests_total

logger = structlog.get_logger(__name__)

_CONNECTION_ERRORS = (RedisError, OSError)


class CacheStatus(str, Enum):
    HIT = "hit"
    MISS = "miss"
    UNAVAILABLE = "unavailable"


@dataclass(frozen=True)
class CacheLookup:
    status: CacheStatus
    value: Optional[bytes] = None

    @property
    def hit(self) -> bool:
        return self.status is CacheStatus.HIT


class RedisCache:

    def __init__(self, client: Optional[Redis], reconnect_interval: float = 30.0):
        self._client = client
        self.reconnect_interval = reconnect_interval
        self.is_connected = False
        self._last_probe = float("-inf")
        self._pending_deletes: set[str] = set()

    @classmethod
    async def connect(cls, url: Optional[str], reconnect_interval: float = 30.0) -> "RedisCache":
        """Build a cache for ``url``. Never raises; an unreachable server yields a disabled cache."""
        if not url:
            logger.warning("cache_disabled", reason="REDIS_URL is empty")
            return cls(None, reconnect_interval)

        client = Redis.from_url(url, socket_connect_timeout=2, socket_timeout=2)
        cache = cls(client, reconnect_interval)
        await cache.probe()
        if not cache.is_connected:
            logger.warning("cache_unavailable_at_startup", detail="continuing without product caching")
        return cache

    async def probe(self) -> bool:
        if self._client is None:
            return False
        self._last_probe = time.monotonic()
        try:
            await self._client.ping()
            if self._pending_deletes:
                await self._client.delete(*self._pending_deletes)
        except _CONNECTION_ERRORS as e:
            self._mark_disconnected(e)
        else:
            if self._pending_deletes:
                logger.info("cache_pending_invalidations_flushed", keys=sorted(self._pending_deletes))
                self._pending_deletes.clear()
            if not self.is_connected:
                logger.info("cache_connected")
            self.is_connected = True
        return self.is_connected

    def _mark_disconnected(self, exc: Exception) -> None:
        if self.is_connected:
            logger.warning("cache_disconnected", error=str(exc))
        self.is_connected = False

    async def _available(self) -> bool:
        if self._client is None:
            return False
        if self.is_connected:
            return True
        if time.monotonic() - self._last_probe >= self.reconnect_interval:
            return await self.probe()
        return False

    async def get(self, key: str) -> CacheLookup:
        if not await self._available():
            shop_cache_requests_total.labels(operation="get", result=CacheStatus.UNAVAILABLE.value).inc()
            return CacheLookup(CacheStatus.UNAVAILABLE)
        try:
            value = await self._client.get(key)
        except _CONNECTION_ERRORS as e:
            self._mark_disconnected(e)
            shop_cache_requests_total.labels(operation="get", result=CacheStatus.UNAVAILABLE.value).inc()
            return CacheLookup(CacheStatus.UNAVAILABLE)

        if value is None:
            shop_cache_requests_total.labels(operation="get", result=CacheStatus.MISS.value).inc()
            return CacheLookup(CacheStatus.MISS)
        if isinstance(value, str):
            value = value.encode()
        shop_cache_requests_total.labels(operation="get", result=CacheStatus.HIT.value).inc()
        return CacheLookup(CacheStatus.HIT, value)

    async def set(self, key: str, value: bytes, ttl: int) -> bool:
        if not await self._available():
            shop_cache_requests_total.labels(operation="set", result=CacheStatus.UNAVAILABLE.value).inc()
            return False
        try:
            await self._client.set(key, value, ex=ttl)
        except _CONNECTION_ERRORS as e:
            self._mark_disconnected(e)
            shop_cache_requests_total.labels(operation="set", result=CacheStatus.UNAVAILABLE.value).inc()
            return False
        shop_cache_requests_total.labels(operation="set", result="ok").inc()
        return True

    async def delete(self, key: str) -> bool:
        if not await self._available():
            self._remember_delete(key)
            shop_cache_requests_total.labels(operation="delete", result=CacheStatus.UNAVAILABLE.value).inc()
            return False
        try:
            await self._client.delete(key)
        except _CONNECTION_ERRORS as e:
            self._mark_disconnected(e)
            self._remember_delete(key)
            shop_cache_requests_total.labels(operation="delete", result=CacheStatus.UNAVAILABLE.value).inc()
            return False
        shop_cache_requests_total.labels(operation="delete", result="ok").inc()
        return True

    def _remember_delete(self, key: str) -> None:
        if self._client is not None:
            self._pending_deletes.add(key)

    async def close(self) -> None:
        if self._client is not None:
            await self._client.aclose()
        self.is_connected = False


def get_cache(request: Request) -> RedisCache:
    return request.app.state.cache
