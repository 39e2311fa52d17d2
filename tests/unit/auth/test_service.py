"""Unit tests for registration, login and refresh rotation."""

from datetime import UTC, datetime, timedelta
from unittest.mock import AsyncMock
from uuid import uuid4

import pytest

from app.core.auth.backend import decode_token, hash_password, hash_token
from app.core.auth.service import AuthService
from app.core.errors import ConflictError, UnauthorizedError
from app.modules.users.models import RefreshToken
from tests.factories.tenant import TenantFactory, UserFactory
from tests.fakes import fake_session


async def _identity(obj):
    if getattr(obj, "id", None) is None:
        obj.id = uuid4()
    return obj


@pytest.fixture
def service() -> AuthService:
    service = AuthService(fake_session())
    service.user_repo = AsyncMock()
    service.token_repo = AsyncMock()
    service.tenant_repo = AsyncMock()
    service.user_repo.create.side_effect = _identity
    service.tenant_repo.create.side_effect = _identity
    service.token_repo.create.side_effect = _identity
    return service


async def test_register_creates_tenant_and_admin(service):
    service.user_repo.get_by_email_system.return_value = None
    service.tenant_repo.get_by_slug.return_value = None

    user, tokens = await service.register(
        "ana@cafe.cl", "s3cret-pass", "Ana Soto", "Café Muralla", "761234560"
    )

    tenant = service.tenant_repo.create.call_args.args[0]
    assert tenant.slug == "café-muralla"
    assert tenant.rut == "76.123.456-0"
    assert user.is_superuser is True
    assert user.tenant_id == tenant.id
    token_data = decode_token(tokens.access_token)
    assert token_data.tenant_id == tenant.id
    stored = service.token_repo.create.call_args.args[0]
    assert stored.token_hash == hash_token(tokens.refresh_token)


async def test_register_taken_slug_gets_suffix(service):
    service.user_repo.get_by_email_system.return_value = None
    service.tenant_repo.get_by_slug.return_value = TenantFactory.build()

    await service.register("ana@cafe.cl", "s3cret-pass", "Ana", "Muralla")

    slug = service.tenant_repo.create.call_args.args[0].slug
    assert slug.startswith("muralla-")
    assert slug != "muralla"


async def test_register_existing_email(service):
    service.user_repo.get_by_email_system.return_value = UserFactory.build()

    with pytest.raises(ConflictError):
        await service.register("ana@cafe.cl", "s3cret-pass", "Ana", "Muralla")

    service.tenant_repo.create.assert_not_awaited()


async def test_login(service):
    user = UserFactory.build(id=uuid4(), password_hash=hash_password("s3cret-pass"))
    service.user_repo.get_by_email_system.return_value = user

    _, tokens = await service.login(user.email, "s3cret-pass", user_agent="pytest")

    assert decode_token(tokens.access_token).user_id == user.id
    assert service.token_repo.create.call_args.args[0].user_agent == "pytest"


@pytest.mark.parametrize("password", ["wrong-pass", None])
async def test_login_bad_credentials(service, password):
    user = UserFactory.build(password_hash=hash_password("s3cret-pass"))
    service.user_repo.get_by_email_system.return_value = user if password else None

    with pytest.raises(UnauthorizedError) as exc_info:
        await service.login("ana@cafe.cl", password or "whatever")

    assert exc_info.value.error_code == "invalid_credentials"


async def test_login_inactive(service):
    service.user_repo.get_by_email_system.return_value = UserFactory.build(
        password_hash=hash_password("s3cret-pass"), is_active=False
    )

    with pytest.raises(UnauthorizedError) as exc_info:
        await service.login("ana@cafe.cl", "s3cret-pass")

    assert exc_info.value.error_code == "account_inactive"


async def test_refresh_rotates_token(service):
    user = UserFactory.build(id=uuid4())
    stored = RefreshToken(
        user_id=user.id,
        token_hash=hash_token("old"),
        expires_at=datetime.now(UTC) + timedelta(days=1),
    )
    service.token_repo.get_by_hash.return_value = stored
    service.user_repo.get_by_id.return_value = user

    tokens = await service.refresh_tokens("old")

    service.token_repo.get_by_hash.assert_awaited_once_with(hash_token("old"))
    service.token_repo.revoke.assert_awaited_once_with(stored)
    assert tokens.refresh_token != "old"


async def test_refresh_expired_token_is_revoked(service):
    stored = RefreshToken(
        user_id=uuid4(),
        token_hash=hash_token("old"),
        expires_at=datetime.now(UTC) - timedelta(seconds=1),
    )
    service.token_repo.get_by_hash.return_value = stored

    with pytest.raises(UnauthorizedError) as exc_info:
        await service.refresh_tokens("old")

    assert exc_info.value.error_code == "token_expired"
    service.token_repo.revoke.assert_awaited_once_with(stored)


async def test_logout_unknown_token_is_noop(service):
    service.token_repo.get_by_hash.return_value = None

    await service.logout("nothing")

    service.token_repo.revoke.assert_not_awaited()
