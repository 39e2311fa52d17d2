"""Tenant service and routes."""

from unittest.mock import AsyncMock
from uuid import uuid4

import pytest

from app.core.auth.dependencies import get_current_user
from app.core.errors import NotFoundError
from app.modules.tenants.schemas import TenantUpdate
from app.modules.tenants.services import TenantService
from tests.factories.tenant import TenantFactory, UserFactory


@pytest.fixture
def repo():
    repo = AsyncMock()
    repo.update.side_effect = lambda tenant: tenant
    return repo


async def test_settings_are_merged(repo):
    tenant = TenantFactory.build(settings={"timezone": "America/Santiago", "theme": "light"})
    repo.get_by_id.return_value = tenant

    updated = await TenantService(repo).update_tenant(
        tenant.id, TenantUpdate(settings={"theme": "dark"})
    )

    assert updated.settings == {"timezone": "America/Santiago", "theme": "dark"}


async def test_save_setting_keeps_other_keys(repo):
    tenant = TenantFactory.build(settings={"a": 1})
    repo.get_by_id.return_value = tenant

    await TenantService(repo).save_setting(tenant.id, "last_openfactura_sync", {"errors": 0})

    assert tenant.settings == {"a": 1, "last_openfactura_sync": {"errors": 0}}


async def test_unknown_tenant(repo):
    repo.get_by_id.return_value = None

    with pytest.raises(NotFoundError):
        await TenantService(repo).get_tenant(uuid4())


def test_update_formats_rut():
    assert TenantUpdate(rut="761234560").rut == "76.123.456-0"
    with pytest.raises(ValueError):
        TenantUpdate(rut="76123456-1")


async def test_update_requires_administrator(app, client, override):
    override(TenantService, AsyncMock())
    app.dependency_overrides[get_current_user] = lambda: UserFactory.build(is_superuser=False)

    response = await client.patch("/api/v1/tenants/current", json={"name": "Nuevo"})

    assert response.status_code == 403


async def test_get_current_tenant(client, override, tenant_id):
    service = override(TenantService, AsyncMock())
    service.get_tenant.return_value = TenantFactory.build(id=tenant_id)

    response = await client.get("/api/v1/tenants/current")

    assert response.status_code == 200
    assert response.json()["id"] == str(tenant_id)
    service.get_tenant.assert_awaited_once_with(tenant_id)
