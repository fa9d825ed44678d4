"""
Feed Cache Stores
=================
Key-value stores with time-to-live used to keep rendered feed documents.

Stores:
    - MemoryFeedCache: process-local dict (default, tests, single worker)
    - RedisFeedCache: shared Redis backend for multiple workers/processes

Responsibility: Store and expire rendered feed documents
"""

import logging
import threading
from datetime import datetime, timedelta, timezone
from typing import Optional, Dict, Protocol, Union, runtime_checkable

import redis

from .exceptions import CacheUnavailable

logger = logging.getLogger(__name__)

TTL = Union[int, float, timedelta]


def ttl_seconds(ttl: TTL) -> float:
    """Convert a TTL (seconds or timedelta) to seconds"""
    if isinstance(ttl, timedelta):
        return ttl.total_seconds()
    return float(ttl)


@runtime_checkable
class FeedCacheStore(Protocol):
    """Capabilities a FeedBuilder needs from a cache backend"""

    def has(self, key: str) -> bool:
        ...

    def get(self, key: str) -> Optional[str]:
        ...

    def put(self, key: str, value: str, ttl: TTL) -> None:
        ...


class MemoryFeedCache:
    """
    Simple in-memory cache for generated feeds.

    Every entry carries its own expiry; expired entries are dropped lazily
    on access. Use RedisFeedCache when several workers share feeds.
    """

    def __init__(self):
        self._cache: Dict[str, tuple[str, datetime]] = {}
        self._lock = threading.Lock()

    def _live_entry(self, key: str) -> Optional[str]:
        entry = self._cache.get(key)
        if entry is None:
            return None

        content, expires_at = entry
        if datetime.now(timezone.utc) >= expires_at:
            # Expired
            del self._cache[key]
            return None

        return content

    def has(self, key: str) -> bool:
        """Check whether a non-expired entry exists"""
        with self._lock:
            return self._live_entry(key) is not None

    def get(self, key: str) -> Optional[str]:
        """
        Get cached feed if not expired.

        Args:
            key: Cache key

        Returns:
            Cached feed XML or None if expired/missing
        """
        with self._lock:
            return self._live_entry(key)

    def put(self, key: str, value: str, ttl: TTL) -> None:
        """
        Cache a feed.

        Args:
            key: Cache key
            value: Feed XML content
            ttl: Time-to-live in seconds (or timedelta)
        """
        expires_at = datetime.now(timezone.utc) + timedelta(seconds=ttl_seconds(ttl))
        with self._lock:
            self._cache[key] = (value, expires_at)

    def forget(self, key: str) -> None:
        """Remove a single entry"""
        with self._lock:
            self._cache.pop(key, None)

    def clear(self) -> None:
        """Clear all cached feeds"""
        with self._lock:
            self._cache.clear()

    def size(self) -> int:
        """Get number of cached feeds (including not yet collected expired ones)"""
        with self._lock:
            return len(self._cache)


class RedisFeedCache:
    """
    Redis-backed feed cache.

    Keys are namespaced with ``key_prefix``. Any Redis error is raised as
    CacheUnavailable so the render fails instead of silently skipping the cache.
    """

    def __init__(self, client: redis.Redis, key_prefix: str = "feedsmith:"):
        self.client = client
        self.key_prefix = key_prefix

    @classmethod
    def from_url(cls, redis_url: str, key_prefix: str = "feedsmith:", **kwargs) -> "RedisFeedCache":
        """Create a cache from a redis:// URL"""
        client = redis.Redis.from_url(redis_url, decode_responses=True, **kwargs)
        return cls(client, key_prefix=key_prefix)

    def _key(self, key: str) -> str:
        return f"{self.key_prefix}{key}"

    def has(self, key: str) -> bool:
        try:
            return bool(self.client.exists(self._key(key)))
        except redis.RedisError as e:
            logger.error(f"Redis EXISTS failed for {key}: {e}")
            raise CacheUnavailable(f"Cannot check feed cache for {key}", e) from e

    def get(self, key: str) -> Optional[str]:
        try:
            value = self.client.get(self._key(key))
        except redis.RedisError as e:
            logger.error(f"Redis GET failed for {key}: {e}")
            raise CacheUnavailable(f"Cannot read feed cache for {key}", e) from e
        if isinstance(value, bytes):
            return value.decode("utf-8")
        return value

    def put(self, key: str, value: str, ttl: TTL) -> None:
        # Redis expiries are whole seconds and must be positive
        seconds = max(1, int(round(ttl_seconds(ttl))))
        try:
            self.client.setex(self._key(key), seconds, value)
        except redis.RedisError as e:
            logger.error(f"Redis SETEX failed for {key}: {e}")
            raise CacheUnavailable(f"Cannot write feed cache for {key}", e) from e

    def forget(self, key: str) -> None:
        try:
            self.client.delete(self._key(key))
        except redis.RedisError as e:
            logger.error(f"Redis DEL failed for {key}: {e}")
            raise CacheUnavailable(f"Cannot delete feed cache for {key}", e) from e


def build_feed_cache(settings) -> FeedCacheStore:
    """
    Create the cache store selected by configuration.

    Args:
        settings: Settings instance

    Returns:
        RedisFeedCache when Redis is enabled, otherwise MemoryFeedCache
    """
    if settings.redis_url:
        logger.info(f"Using Redis feed cache at {settings.redis.host}:{settings.redis.port}")
        return RedisFeedCache.from_url(
            settings.redis_url,
            key_prefix=settings.redis.key_prefix,
            socket_timeout=settings.redis.socket_timeout,
            socket_connect_timeout=settings.redis.socket_connect_timeout,
        )

    logger.info("Using in-memory feed cache")
    return MemoryFeedCache()
