"""ARQ worker configuration.

Run the worker with:
    arq app.core.jobs.worker.WorkerSettings
"""

from typing import Any, ClassVar

import structlog
from arq import cron
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from app.config import settings
from app.core.cache.redis import close_redis_pool
from app.core.jobs.tasks import (
    cleanup_expired_tokens,
    deliver_notification,
    sync_all_tenants,
    sync_tenant_documents,
)
from app.core.jobs.utils import get_redis_settings


log = structlog.get_logger()


async def startup(ctx: dict[str, Any]) -> None:
    """Create the database engine and session factory shared by all jobs."""
    log.info("worker_startup", environment=settings.environment)

    engine = create_async_engine(
        settings.async_database_url,
        pool_size=5,
        max_overflow=10,
        echo=settings.database_echo,
    )
    ctx["db_engine"] = engine
    ctx["db_session_factory"] = async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


async def shutdown(ctx: dict[str, Any]) -> None:
    log.info("worker_shutdown")
    engine = ctx.get("db_engine")
    if engine:
        await engine.dispose()
    await close_redis_pool()


class WorkerSettings:
    functions: ClassVar[list[Any]] = [
        cleanup_expired_tokens,
        deliver_notification,
        sync_all_tenants,
        sync_tenant_documents,
    ]

    cron_jobs: ClassVar[list[Any]] = [
        # Daily OpenFactura sync for every tenant
        cron(sync_all_tenants, hour=6, minute=0, unique=True),
        cron(cleanup_expired_tokens, hour=3, minute=0),
    ]

    on_startup = startup
    on_shutdown = shutdown

    redis_settings = get_redis_settings()

    max_jobs = 10
    # A full sync pages through OpenFactura slowly
    job_timeout = 1800
    keep_result = 3600
    retry_jobs = True
    max_tries = 3
