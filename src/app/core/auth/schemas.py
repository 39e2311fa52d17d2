"""Authentication schemas for token handling."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel


class TokenData(BaseModel):
    """Data extracted from a JWT token.

    Attributes:
        user_id: The user's UUID
        tenant_id: The tenant's UUID
        exp: Token expiration time
        type: Token type (access or refresh)
        jti: Unique token identifier
    """

    user_id: UUID
    tenant_id: UUID
    exp: datetime
    type: str = "access"
    jti: str | None = None


class TokenPair(BaseModel):
    """A pair of access and refresh tokens."""

    access_token: str
    refresh_token: str
    token_type: str = "bearer"
    expires_in: int
