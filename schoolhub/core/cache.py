# schoolhub/core/cache.py
"""Redis caching implementation."""
import pickle
import logging
from typing import Any, Optional, Union
from datetime import timedelta
import redis.asyncio as redis
from .config import settings

logger = logging.getLogger(__name__)


class CacheManager:
    def __init__(self):
        self.redis: Optional[redis.Redis] = None

    @property
    def enabled(self) -> bool:
        return settings.cache_enabled

    async def connect(self):
        """Initialize Redis connection."""
        if not self.redis and self.enabled:
            self.redis = redis.from_url(
                settings.redis_url,
                encoding="utf-8",
                decode_responses=False
            )

    async def disconnect(self):
        """Close Redis connection."""
        if self.redis:
            await self.redis.close()
            self.redis = None

    async def get(self, key: str) -> Optional[Any]:
        """Get value from cache."""
        if not self.enabled:
            return None
        await self.connect()

        try:
            value = await self.redis.get(key)
            if value:
                return pickle.loads(value)
        except Exception as e:
            logger.warning(f"Cache get failed for {key}: {e}")
        return None

    async def set(
        self,
        key: str,
        value: Any,
        expire: Optional[Union[int, timedelta]] = None
    ) -> bool:
        """Set value in cache."""
        if not self.enabled:
            return False
        await self.connect()

        try:
            serialized = pickle.dumps(value)
            if expire:
                if isinstance(expire, timedelta):
                    expire = int(expire.total_seconds())
                return await self.redis.setex(key, expire, serialized)
            return await self.redis.set(key, serialized)
        except Exception as e:
            logger.warning(f"Cache set failed for {key}: {e}")
            return False

    async def delete_pattern(self, pattern: str) -> int:
        """Delete every key matching a glob pattern."""
        if not self.enabled:
            return 0
        await self.connect()

        deleted = 0
        try:
            async for key in self.redis.scan_iter(match=pattern):
                deleted += await self.redis.delete(key)
        except Exception as e:
            logger.warning(f"Cache invalidation failed for {pattern}: {e}")
        return deleted

    async def ping(self) -> bool:
        if not self.enabled:
            return False
        await self.connect()
        try:
            return bool(await self.redis.ping())
        except Exception:
            return False


# Global cache instance
cache = CacheManager()
