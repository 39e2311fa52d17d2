"""Tenant and token resolution."""

from unittest.mock import AsyncMock, patch
from uuid import uuid4

import pytest
from fastapi.security import HTTPAuthorizationCredentials

from app.core.auth.backend import create_access_token
from app.core.auth.dependencies import (
    get_current_superuser,
    get_optional_token_data,
    get_tenant_id,
    get_token_data,
)
from app.core.errors import ForbiddenError, UnauthorizedError
from tests.factories.tenant import TenantFactory, UserFactory
from tests.fakes import fake_session


def bearer(token: str) -> HTTPAuthorizationCredentials:
    return HTTPAuthorizationCredentials(scheme="Bearer", credentials=token)


@pytest.fixture
def tenants():
    repo = AsyncMock()
    with patch("app.modules.tenants.repos.TenantRepository", return_value=repo):
        yield repo


async def test_missing_token():
    with pytest.raises(UnauthorizedError) as exc_info:
        await get_token_data(None)

    assert exc_info.value.error_code == "missing_token"


async def test_refresh_type_token_is_rejected():
    token = create_access_token(uuid4(), uuid4(), additional_claims={"type": "refresh"})

    with pytest.raises(UnauthorizedError) as exc_info:
        await get_token_data(bearer(token))

    assert exc_info.value.error_code == "invalid_token_type"


async def test_optional_token():
    assert await get_optional_token_data(None) is None
    with pytest.raises(UnauthorizedError):
        await get_optional_token_data(bearer("garbage"))


async def test_tenant_from_token_wins_over_header(tenants):
    tenant = TenantFactory.build(id=uuid4())
    tenants.get_by_id.return_value = tenant
    token_data = await get_token_data(bearer(create_access_token(uuid4(), tenant.id)))

    result = await get_tenant_id(token_data, fake_session(), x_tenant_id=str(uuid4()))

    assert result == tenant.id
    tenants.get_by_id.assert_awaited_once_with(tenant.id)


async def test_tenant_from_header(tenants):
    tenant = TenantFactory.build(id=uuid4())
    tenants.get_by_id.return_value = tenant

    assert await get_tenant_id(None, fake_session(), x_tenant_id=str(tenant.id)) == tenant.id


@pytest.mark.parametrize(
    ("header", "code"),
    [(None, "tenant_required"), ("not-a-uuid", "tenant_required")],
)
async def test_tenant_missing_or_malformed(tenants, header, code):
    with pytest.raises(UnauthorizedError) as exc_info:
        await get_tenant_id(None, fake_session(), x_tenant_id=header)

    assert exc_info.value.error_code == code
    tenants.get_by_id.assert_not_awaited()


async def test_inactive_tenant(tenants):
    tenants.get_by_id.return_value = TenantFactory.build(is_active=False)

    with pytest.raises(UnauthorizedError) as exc_info:
        await get_tenant_id(None, fake_session(), x_tenant_id=str(uuid4()))

    assert exc_info.value.error_code == "tenant_invalid"


async def test_unknown_tenant(tenants):
    tenants.get_by_id.return_value = None

    with pytest.raises(UnauthorizedError):
        await get_tenant_id(None, fake_session(), x_tenant_id=str(uuid4()))


async def test_superuser_required():
    with pytest.raises(ForbiddenError):
        await get_current_superuser(UserFactory.build(is_superuser=False))

    admin = UserFactory.build(is_superuser=True)
    assert await get_current_superuser(admin) is admin


async def test_endpoint_without_tenant_context_is_rejected(app, client):
    from app.core.auth.dependencies import get_tenant_id as dependency  # noqa: PLC0415

    app.dependency_overrides.pop(dependency)

    response = await client.get("/api/v1/products")

    assert response.status_code == 401
    assert response.json()["type"].endswith("/errors/tenant_required")
