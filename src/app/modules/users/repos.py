"""User repository for database operations."""

from collections.abc import Iterable
from datetime import datetime
from typing import Annotated
from uuid import UUID

from fastapi import Depends
from sqlalchemy import delete, func, or_, select

from app.api.dependencies import DBSession
from app.core.database import paginate
from app.modules.users.models import RefreshToken, User


class UserRepository:
    """Repository for User database operations.

    Queries are scoped to a tenant except for the ``*_system`` lookups used
    during login and registration, where the tenant is not known yet.
    """

    def __init__(self, session: DBSession) -> None:
        self.session = session

    async def create(self, user: User) -> User:
        self.session.add(user)
        await self.session.flush()
        await self.session.refresh(user)
        return user

    async def get_by_id(self, user_id: UUID, tenant_id: UUID | None = None) -> User | None:
        """Get a user by ID, optionally restricted to one tenant."""
        stmt = select(User).where(User.id == user_id)
        if tenant_id:
            stmt = stmt.where(User.tenant_id == tenant_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_email_system(self, email: str) -> User | None:
        """Look up a user by email across all tenants."""
        stmt = select(User).where(func.lower(User.email) == email.lower())
        result = await self.session.execute(stmt)
        return result.scalars().first()

    async def list_by_tenant(
        self,
        tenant_id: UUID,
        page: int = 1,
        page_size: int = 20,
        search: str | None = None,
    ) -> tuple[list[User], int]:
        """List users for a tenant with pagination.

        Returns:
            Tuple of (users list, total count)
        """
        base = select(User).where(User.tenant_id == tenant_id)
        if search:
            pattern = f"%{search}%"
            base = base.where(or_(User.email.ilike(pattern), User.full_name.ilike(pattern)))

        return await paginate(
            self.session, base.order_by(User.created_at.desc()), page, page_size
        )

    async def list_ids(
        self,
        tenant_id: UUID,
        user_ids: Iterable[UUID] | None = None,
        active_only: bool = True,
    ) -> list[UUID]:
        """Ids of users in the tenant, optionally restricted to ``user_ids``.

        Ids that do not belong to the tenant are silently dropped.
        """
        stmt = select(User.id).where(User.tenant_id == tenant_id)
        if user_ids is not None:
            stmt = stmt.where(User.id.in_(list(user_ids)))
        if active_only:
            stmt = stmt.where(User.is_active.is_(True))
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def update(self, user: User) -> User:
        await self.session.flush()
        await self.session.refresh(user)
        return user


class RefreshTokenRepository:
    """Repository for RefreshToken database operations."""

    def __init__(self, session: DBSession) -> None:
        self.session = session

    async def create(self, token: RefreshToken) -> RefreshToken:
        self.session.add(token)
        await self.session.flush()
        await self.session.refresh(token)
        return token

    async def get_by_hash(self, token_hash: str) -> RefreshToken | None:
        """Get a non-revoked refresh token by its hash."""
        stmt = select(RefreshToken).where(
            RefreshToken.token_hash == token_hash,
            RefreshToken.revoked.is_(False),
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def revoke(self, token: RefreshToken) -> None:
        token.revoked = True
        await self.session.flush()

    async def delete_expired(self, before: datetime) -> int:
        """Delete revoked tokens and tokens that expired before ``before``.

        Returns:
            Number of tokens deleted
        """
        stmt = delete(RefreshToken).where(
            or_(
                RefreshToken.expires_at < before,
                RefreshToken.revoked.is_(True),
            )
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount or 0


# Type aliases for dependency injection
UserRepo = Annotated[UserRepository, Depends(UserRepository)]
RefreshTokenRepo = Annotated[RefreshTokenRepository, Depends(RefreshTokenRepository)]
