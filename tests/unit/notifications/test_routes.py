"""Notification inbox API tests."""

import datetime as dt
from unittest.mock import AsyncMock
from uuid import uuid4

import pytest

from app.core.auth.dependencies import get_current_user
from app.modules.notifications.services import NotificationService
from tests.factories.records import NotificationFactory
from tests.factories.tenant import UserFactory


@pytest.fixture
def current_user(app, tenant_id):
    user = UserFactory.build(id=uuid4(), tenant_id=tenant_id)
    app.dependency_overrides[get_current_user] = lambda: user
    return user


async def test_my_notifications_filters(client, override, current_user):
    service = override(NotificationService, AsyncMock())
    service.list_my.return_value = (
        [
            NotificationFactory.build(
                id=uuid4(), recipient_id=current_user.id, created_at=dt.datetime.now(dt.UTC)
            )
        ],
        1,
    )

    response = await client.get("/api/v1/notifications/my?status=unread&type=IN_APP")

    assert response.status_code == 200
    assert response.json()["total"] == 1
    kwargs = service.list_my.await_args.kwargs
    assert kwargs["status"] == "unread"
    assert kwargs["notification_type"] == "IN_APP"


async def test_my_notifications_bad_status(client, override, current_user):
    override(NotificationService, AsyncMock())

    response = await client.get("/api/v1/notifications/my?status=archived")

    assert response.status_code == 422


async def test_inbox_requires_login(client, override):
    override(NotificationService, AsyncMock())

    response = await client.get("/api/v1/notifications/my")

    assert response.status_code == 401


async def test_mark_all_read(client, override, current_user):
    service = override(NotificationService, AsyncMock())
    service.mark_all_read.return_value = 4

    response = await client.post("/api/v1/notifications/read-all")

    assert response.json() == {"updated": 4}
    service.mark_all_read.assert_awaited_once_with(current_user.id, current_user.tenant_id)
