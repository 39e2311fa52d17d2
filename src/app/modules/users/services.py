"""User service for business logic."""

from typing import Annotated
from uuid import UUID

from fastapi import Depends

from app.core.errors import NotFoundError
from app.modules.users.models import User
from app.modules.users.repos import UserRepo


class UserService:
    """Read access to the users of a tenant."""

    def __init__(self, repo: UserRepo) -> None:
        self.repo = repo

    async def get_user(self, user_id: UUID, tenant_id: UUID) -> User:
        """Get a user of the tenant.

        Raises:
            NotFoundError: If the user does not exist in this tenant
        """
        user = await self.repo.get_by_id(user_id, tenant_id)
        if not user:
            raise NotFoundError(
                "User not found",
                resource="user",
                resource_id=str(user_id),
            )
        return user

    async def list_users(
        self,
        tenant_id: UUID,
        page: int = 1,
        page_size: int = 20,
        search: str | None = None,
    ) -> tuple[list[User], int]:
        return await self.repo.list_by_tenant(tenant_id, page, page_size, search)


# Type alias for dependency injection
UserSvc = Annotated[UserService, Depends(UserService)]
