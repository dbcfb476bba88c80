"""Cache: principal → user snapshot cache and key-value stores.

UserCache is process-local and short-lived (session resolution).
CacheService (Redis) and InMemoryKeyValueStore back tutorial persistence.
"""

from app.infrastructure.cache.memory_store import InMemoryKeyValueStore
from app.infrastructure.cache.redis_cache import CacheService
from app.infrastructure.cache.user_cache import CachedUserEntry, UserCache

__all__ = [
    "CacheService",
    "CachedUserEntry",
    "InMemoryKeyValueStore",
    "UserCache",
]
