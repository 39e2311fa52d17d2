"""User API routes."""

from uuid import UUID

from app.api.dependencies import Pagination
from app.core.auth.dependencies import CurrentUser, TenantId
from app.modules.users import router
from app.modules.users.schemas import UserListResponse, UserResponse
from app.modules.users.services import UserSvc


@router.get("", response_model=UserListResponse, summary="List users")
async def list_users(
    tenant_id: TenantId,
    service: UserSvc,
    pagination: Pagination,
    current_user: CurrentUser,  # noqa: ARG001 - required for auth
    search: str | None = None,
) -> UserListResponse:
    users, total = await service.list_users(
        tenant_id, pagination.page, pagination.page_size, search
    )
    return UserListResponse(
        items=[UserResponse.model_validate(u) for u in users],
        total=total,
        page=pagination.page,
        page_size=pagination.page_size,
    )


@router.get("/{user_id}", response_model=UserResponse, summary="Get user")
async def get_user(
    user_id: UUID,
    tenant_id: TenantId,
    service: UserSvc,
    current_user: CurrentUser,  # noqa: ARG001 - required for auth
) -> UserResponse:
    user = await service.get_user(user_id, tenant_id)
    return UserResponse.model_validate(user)
