"""Authentication service for login, registration, and token management."""

from datetime import UTC, datetime
from typing import Annotated

from fastapi import Depends

from app.api.dependencies import DBSession
from app.config import settings
from app.core.auth.backend import (
    create_access_token,
    create_refresh_token,
    get_token_expiration,
    hash_password,
    hash_token,
    verify_password,
)
from app.core.auth.schemas import TokenPair
from app.core.errors import ConflictError, UnauthorizedError
from app.core.utils.chile import format_rut
from app.core.utils.text import generate_slug
from app.modules.tenants.models import Tenant
from app.modules.tenants.repos import TenantRepository
from app.modules.users.models import RefreshToken, User
from app.modules.users.repos import RefreshTokenRepository, UserRepository


class AuthService:
    """Registration, login and refresh-token rotation."""

    def __init__(self, db: DBSession) -> None:
        self.db = db
        self.user_repo = UserRepository(db)
        self.token_repo = RefreshTokenRepository(db)
        self.tenant_repo = TenantRepository(db)

    async def register(
        self,
        email: str,
        password: str,
        full_name: str,
        tenant_name: str,
        tenant_rut: str | None = None,
    ) -> tuple[User, TokenPair]:
        """Create a tenant and its first user, who becomes its administrator.

        Raises:
            ConflictError: If the email is already registered
        """
        existing = await self.user_repo.get_by_email_system(email)
        if existing:
            raise ConflictError(
                "Registration failed. If this email is already registered, please use the login page.",
                error_code="registration_failed",
            )

        slug = generate_slug(tenant_name)
        if await self.tenant_repo.get_by_slug(slug):
            slug = f"{slug[:56]}-{datetime.now(UTC):%H%M%S}"

        tenant = await self.tenant_repo.create(
            Tenant(
                name=tenant_name,
                slug=slug,
                rut=format_rut(tenant_rut) if tenant_rut else None,
            )
        )

        user = await self.user_repo.create(
            User(
                email=email,
                password_hash=hash_password(password),
                full_name=full_name,
                tenant_id=tenant.id,
                is_superuser=True,
            )
        )

        return user, await self._create_tokens(user)

    async def login(
        self,
        email: str,
        password: str,
        user_agent: str | None = None,
        ip_address: str | None = None,
    ) -> tuple[User, TokenPair]:
        """Authenticate with email and password.

        Raises:
            UnauthorizedError: If credentials are invalid or the account is inactive
        """
        user = await self.user_repo.get_by_email_system(email)
        if (
            not user
            or not user.password_hash
            or not verify_password(password, user.password_hash)
        ):
            raise UnauthorizedError(
                "Invalid email or password",
                error_code="invalid_credentials",
            )

        if not user.is_active:
            raise UnauthorizedError(
                "Account is deactivated",
                error_code="account_inactive",
            )

        return user, await self._create_tokens(user, user_agent, ip_address)

    async def refresh_tokens(
        self,
        refresh_token: str,
        user_agent: str | None = None,
        ip_address: str | None = None,
    ) -> TokenPair:
        """Rotate a refresh token: revoke it and issue a new pair."""
        stored_token = await self.token_repo.get_by_hash(hash_token(refresh_token))
        if not stored_token:
            raise UnauthorizedError(
                "Invalid refresh token",
                error_code="invalid_refresh_token",
            )

        await self.token_repo.revoke(stored_token)

        if stored_token.expires_at < datetime.now(UTC):
            raise UnauthorizedError(
                "Refresh token expired",
                error_code="token_expired",
            )

        user = await self.user_repo.get_by_id(stored_token.user_id)
        if not user or not user.is_active:
            raise UnauthorizedError(
                "User not found or inactive",
                error_code="user_invalid",
            )

        return await self._create_tokens(user, user_agent, ip_address)

    async def logout(self, refresh_token: str) -> None:
        stored_token = await self.token_repo.get_by_hash(hash_token(refresh_token))
        if stored_token:
            await self.token_repo.revoke(stored_token)

    async def _create_tokens(
        self,
        user: User,
        user_agent: str | None = None,
        ip_address: str | None = None,
    ) -> TokenPair:
        refresh_token = create_refresh_token()
        await self.token_repo.create(
            RefreshToken(
                user_id=user.id,
                token_hash=hash_token(refresh_token),
                expires_at=get_token_expiration(),
                user_agent=user_agent,
                ip_address=ip_address,
            )
        )

        return TokenPair(
            access_token=create_access_token(user.id, user.tenant_id),
            refresh_token=refresh_token,
            expires_in=settings.access_token_expire_minutes * 60,
        )


# Type alias for dependency injection
AuthSvc = Annotated[AuthService, Depends(AuthService)]
