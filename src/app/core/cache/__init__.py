"""Redis connection management, caching and short-lived locks."""

from app.core.cache.redis import (
    LockNotAcquired,
    close_redis_pool,
    redis_client,
    redis_lock,
)


__all__ = [
    "LockNotAcquired",
    "close_redis_pool",
    "redis_client",
    "redis_lock",
]
