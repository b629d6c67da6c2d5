# schoolhub/utils/cache_invalidation.py
"""Cache invalidation utilities."""
from ..core.cache import cache

# Cached lists that embed data of another entity
DEPENDENT_PREFIXES = {
    "teachers": ("teachers", "subjects", "lessons", "classes"),
    "students": ("students", "classes"),
    "parents": ("parents", "students"),
    "classes": ("classes", "students", "lessons", "teachers"),
    "subjects": ("subjects", "teachers", "lessons"),
    "lessons": ("lessons", "teachers", "students"),
}


async def invalidate_cache(entity: str) -> None:
    """Drop the cached pages of an entity and of the lists that show it."""
    for prefix in DEPENDENT_PREFIXES.get(entity, (entity,)):
        await cache.delete_pattern(f"{prefix}:*")
