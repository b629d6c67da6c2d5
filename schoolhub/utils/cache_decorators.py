# schoolhub/utils/cache_decorators.py
"""Cache decorator for list endpoints."""
import hashlib
import time
from functools import wraps
from typing import Callable, Optional, Union
from datetime import timedelta

from ..core.cache import cache
from ..core.config import settings
from .cache_metrics import metrics

# Never part of the key
SKIPPED_KWARGS = {"db"}


def cache_key(prefix: str, **kwargs) -> str:
    """Key from the endpoint arguments; the caller's role and id are part of it."""
    key_data = sorted(
        (k, str(v)) for k, v in kwargs.items()
        if k not in SKIPPED_KWARGS and v is not None
    )
    digest = hashlib.md5(str(key_data).encode()).hexdigest()
    return f"{prefix}:{digest}"


def cache_paginated_response(
    prefix: str,
    expire: Optional[Union[int, timedelta]] = None
):
    """Cache decorator specifically for paginated responses."""
    def decorator(func: Callable) -> Callable:
        @wraps(func)
        async def wrapper(*args, **kwargs):
            if not cache.enabled:
                return await func(*args, **kwargs)

            start_time = time.time()
            key = cache_key(prefix, **kwargs)

            cached_result = await cache.get(key)
            if cached_result is not None:
                metrics.record_hit(prefix, time.time() - start_time)
                return cached_result

            result = await func(*args, **kwargs)
            await cache.set(key, result, expire or settings.cache_ttl_seconds)
            metrics.record_miss(prefix)
            return result

        return wrapper
    return decorator
