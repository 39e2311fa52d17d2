"""Notification delivery job."""

from typing import Any
from uuid import UUID

import structlog
from arq import Retry

from app.modules.notifications.repos import NotificationRepository
from app.modules.notifications.services import NotificationService
from app.modules.users.repos import UserRepository


log = structlog.get_logger()

# A job can start before the request that created the notification commits
MISSING_RETRIES = 3


async def deliver_notification(ctx: dict[str, Any], notification_id: str) -> str | None:
    """Deliver one notification.

    Returns:
        The final status, or None if the notification never appeared
    """
    async with ctx["db_session_factory"]() as session:
        service = NotificationService(NotificationRepository(session), UserRepository(session))
        status = await service.deliver(UUID(notification_id))
        await session.commit()

    if status is None:
        job_try = ctx.get("job_try", 1)
        if job_try < MISSING_RETRIES:
            raise Retry(defer=job_try * 5)
        log.warning("notification_not_found", notification_id=notification_id)
    return status
