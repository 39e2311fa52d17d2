"""Shared utilities for job infrastructure."""

from arq.connections import RedisSettings

from app.config import settings


def get_redis_settings() -> RedisSettings:
    """ARQ RedisSettings for both the worker and the enqueue pool.

    Host, port, password and database all come from ``REDIS_URL``.
    """
    return RedisSettings.from_dsn(str(settings.redis_url))
