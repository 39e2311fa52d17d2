"""Redis client configuration and connection management.

Provides an async Redis client with connection pooling and a SET NX
based lock used to serialise per-tenant jobs.
"""

import secrets
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import redis.asyncio as redis
from redis.asyncio.connection import ConnectionPool

from app.config import settings


# Connection pool for efficient connection reuse
_pool: ConnectionPool | None = None

# Deletes the lock only if it still holds our token
_RELEASE_SCRIPT = """
if redis.call("get", KEYS[1]) == ARGV[1] then
    return redis.call("del", KEYS[1])
end
return 0
"""


class LockNotAcquired(Exception):
    """Raised when a lock is already held by someone else."""

    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(f"Lock already held: {key}")


def _get_pool() -> ConnectionPool:
    global _pool
    if _pool is None:
        _pool = ConnectionPool.from_url(
            str(settings.redis_url),
            max_connections=50,
            decode_responses=True,
        )
    return _pool


@asynccontextmanager
async def redis_client() -> AsyncGenerator[redis.Redis, None]:  # type: ignore[type-arg]
    """Context manager for a pooled Redis client.

    Usage:
        async with redis_client() as client:
            await client.set("key", "value")
    """
    client = redis.Redis(connection_pool=_get_pool())
    try:
        yield client
    finally:
        await client.aclose()


async def close_redis_pool() -> None:
    """Close the Redis connection pool. Call during application shutdown."""
    global _pool
    if _pool is not None:
        await _pool.disconnect()
        _pool = None


@asynccontextmanager
async def redis_lock(key: str, ttl_seconds: int) -> AsyncGenerator[None, None]:
    """Hold ``key`` for the duration of the block.

    The TTL bounds how long a crashed holder can block others.

    Raises:
        LockNotAcquired: If another holder has the key
    """
    token = secrets.token_hex(16)
    async with redis_client() as client:
        acquired = await client.set(key, token, nx=True, ex=ttl_seconds)
        if not acquired:
            raise LockNotAcquired(key)
        try:
            yield
        finally:
            await client.eval(_RELEASE_SCRIPT, 1, key, token)
