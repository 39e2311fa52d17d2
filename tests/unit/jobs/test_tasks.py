"""Unit tests for worker tasks."""

from contextlib import asynccontextmanager
from unittest.mock import AsyncMock, patch
from uuid import uuid4

import pytest
from arq import Retry

from app.core.jobs.tasks.cleanup import cleanup_expired_tokens
from app.core.jobs.tasks.notifications import deliver_notification
from app.core.jobs.tasks.sync import sync_all_tenants, sync_tenant_documents
from app.modules.sync.schemas import SyncStats, TenantSyncResult
from tests.fakes import fake_session


@pytest.fixture
def session():
    return fake_session()


@pytest.fixture
def ctx(session):
    @asynccontextmanager
    async def factory():
        yield session

    return {"db_session_factory": factory, "job_try": 1}


async def test_cleanup_deletes_expired_tokens(ctx, session):
    with patch("app.core.jobs.tasks.cleanup.RefreshTokenRepository") as repo_cls:
        repo_cls.return_value.delete_expired = AsyncMock(return_value=4)

        result = await cleanup_expired_tokens(ctx)

    assert result == {"refresh_tokens_deleted": 4}
    session.commit.assert_awaited_once()


async def test_deliver_returns_status(ctx, session):
    notification_id = uuid4()
    with patch(
        "app.core.jobs.tasks.notifications.NotificationService.deliver",
        new_callable=AsyncMock,
        return_value="SENT",
    ) as deliver:
        assert await deliver_notification(ctx, str(notification_id)) == "SENT"

    deliver.assert_awaited_once_with(notification_id)
    session.commit.assert_awaited_once()


async def test_deliver_retries_until_notification_is_committed(ctx):
    with patch(
        "app.core.jobs.tasks.notifications.NotificationService.deliver",
        new_callable=AsyncMock,
        return_value=None,
    ):
        with pytest.raises(Retry):
            await deliver_notification(ctx, str(uuid4()))

        ctx["job_try"] = 3
        assert await deliver_notification(ctx, str(uuid4())) is None


async def test_sync_tenant_parses_dates(ctx, session):
    tenant_id = uuid4()
    stats = SyncStats(new_documents=2)
    with patch(
        "app.core.jobs.tasks.sync.SyncService.sync_tenant",
        new_callable=AsyncMock,
        return_value=stats,
    ) as sync_tenant:
        result = await sync_tenant_documents(ctx, str(tenant_id), "2026-01-01")

    args = sync_tenant.await_args.args
    assert args[0] == tenant_id
    assert str(args[1]) == "2026-01-01"
    assert args[2] is None
    assert result["new_documents"] == 2
    session.commit.assert_awaited_once()


async def test_sync_all_counts_failures(ctx):
    results = [
        TenantSyncResult(tenant_id=uuid4(), tenant_name="A", success=True),
        TenantSyncResult(tenant_id=uuid4(), tenant_name="B", success=False, error="x"),
    ]
    with patch(
        "app.core.jobs.tasks.sync.SyncService.sync_all",
        new_callable=AsyncMock,
        return_value=results,
    ):
        assert await sync_all_tenants(ctx) == {"tenants": 2, "failed": 1}
