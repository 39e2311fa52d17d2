"""FastAPI dependencies for authentication and tenant resolution.

Tenant context comes from one of two places:
- the ``tenant_id`` claim of a bearer access token
- the ``X-Tenant-ID`` header, for callers without a user session

A token always wins over the header.
"""

from typing import Annotated, Any
from uuid import UUID

from fastapi import Depends, Header
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.api.dependencies import DBSession
from app.core.auth.backend import decode_token
from app.core.auth.schemas import TokenData
from app.core.errors import ForbiddenError, UnauthorizedError


bearer_scheme = HTTPBearer(auto_error=False)


def _validate_access_token(token: str) -> TokenData:
    token_data = decode_token(token)
    if not token_data:
        raise UnauthorizedError(
            "Invalid or expired token",
            error_code="invalid_token",
        )
    if token_data.type != "access":
        raise UnauthorizedError(
            "Invalid token type",
            error_code="invalid_token_type",
        )
    return token_data


async def get_token_data(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
) -> TokenData:
    """Extract and validate token data from the Authorization header.

    Raises:
        UnauthorizedError: If token is missing or invalid
    """
    if not credentials:
        raise UnauthorizedError(
            "Missing authentication token",
            error_code="missing_token",
        )
    return _validate_access_token(credentials.credentials)


async def get_optional_token_data(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
) -> TokenData | None:
    """Token data when a bearer token is sent, None otherwise.

    A token that is present but invalid is still rejected.
    """
    if not credentials:
        return None
    return _validate_access_token(credentials.credentials)


async def get_current_user(
    token_data: Annotated[TokenData, Depends(get_token_data)],
    db: DBSession,
) -> Any:  # Returns User, but use Any to avoid circular import
    """Get the currently authenticated user.

    Raises:
        UnauthorizedError: If user not found
        ForbiddenError: If user is deactivated
    """
    from app.modules.users.repos import UserRepository  # noqa: PLC0415

    repo = UserRepository(db)
    user = await repo.get_by_id(token_data.user_id, token_data.tenant_id)

    if not user:
        raise UnauthorizedError(
            "User not found",
            error_code="user_not_found",
        )

    if not user.is_active:
        raise ForbiddenError(
            "User account is deactivated",
            error_code="user_inactive",
        )

    return user


async def get_current_superuser(
    user: Annotated[Any, Depends(get_current_user)],
) -> Any:
    """Get the current user, ensuring they are a tenant administrator."""
    if not user.is_superuser:
        raise ForbiddenError(
            "Administrator privileges required",
            error_code="not_superuser",
        )
    return user


async def get_optional_user_id(
    token_data: Annotated[TokenData | None, Depends(get_optional_token_data)],
) -> UUID | None:
    """User id from the token, if any."""
    return token_data.user_id if token_data else None


async def get_tenant_id(
    token_data: Annotated[TokenData | None, Depends(get_optional_token_data)],
    db: DBSession,
    x_tenant_id: Annotated[str | None, Header(alias="X-Tenant-ID")] = None,
) -> UUID:
    """Resolve the current tenant.

    Raises:
        UnauthorizedError: If no tenant is given, or it is unknown or inactive
    """
    if token_data:
        tenant_id = token_data.tenant_id
    elif x_tenant_id:
        try:
            tenant_id = UUID(x_tenant_id)
        except ValueError:
            raise UnauthorizedError(
                "Malformed X-Tenant-ID header",
                error_code="tenant_required",
            ) from None
    else:
        raise UnauthorizedError(
            "Tenant context is required",
            error_code="tenant_required",
        )

    from app.modules.tenants.repos import TenantRepository  # noqa: PLC0415

    tenant = await TenantRepository(db).get_by_id(tenant_id)
    if not tenant or not tenant.is_active:
        raise UnauthorizedError(
            "Unknown or inactive tenant",
            error_code="tenant_invalid",
        )

    return tenant_id


# Type aliases for cleaner dependency injection
CurrentUser = Annotated[Any, Depends(get_current_user)]
CurrentSuperuser = Annotated[Any, Depends(get_current_superuser)]
OptionalUserId = Annotated[UUID | None, Depends(get_optional_user_id)]
TenantId = Annotated[UUID, Depends(get_tenant_id)]
