"""Authentication module for JWT, password handling and tenant resolution.

The auth router lives in ``app.core.auth.routes`` and is mounted by
``app.api.router``; it is not re-exported here to keep this package free of
imports from feature modules.
"""

from app.core.auth.backend import (
    create_access_token,
    create_refresh_token,
    decode_token,
    hash_password,
    hash_token,
    verify_password,
)
from app.core.auth.dependencies import (
    CurrentSuperuser,
    CurrentUser,
    OptionalUserId,
    TenantId,
    get_current_user,
    get_tenant_id,
)
from app.core.auth.middleware import RequestIdMiddleware, TenantContextMiddleware
from app.core.auth.schemas import TokenData, TokenPair


__all__ = [
    # Dependencies
    "CurrentSuperuser",
    "CurrentUser",
    "OptionalUserId",
    # Middleware
    "RequestIdMiddleware",
    "TenantContextMiddleware",
    "TenantId",
    # Schemas
    "TokenData",
    "TokenPair",
    # Token utilities
    "create_access_token",
    "create_refresh_token",
    "decode_token",
    "get_current_user",
    "get_tenant_id",
    # Password utilities
    "hash_password",
    "hash_token",
    "verify_password",
]
