"""Cleanup tasks for expired data."""

from datetime import UTC, datetime
from typing import Any

import structlog

from app.modules.users.repos import RefreshTokenRepository


log = structlog.get_logger()


async def cleanup_expired_tokens(ctx: dict[str, Any]) -> dict[str, int]:
    """Delete refresh tokens that are expired or revoked.

    Args:
        ctx: Worker context containing the database session factory

    Returns:
        Dict with the number of deleted tokens
    """
    async with ctx["db_session_factory"]() as session:
        deleted = await RefreshTokenRepository(session).delete_expired(datetime.now(UTC))
        await session.commit()

    log.info("cleanup_expired_tokens_complete", refresh_tokens_deleted=deleted)
    return {"refresh_tokens_deleted": deleted}
