"""Notification repository for database operations."""

from datetime import UTC, datetime
from typing import Annotated, TypeVar
from uuid import UUID

from fastapi import Depends
from sqlalchemy import select, update

from app.api.dependencies import DBSession
from app.core.database import paginate
from app.modules.notifications.models import (
    Notification,
    NotificationRule,
    NotificationTemplate,
)


T = TypeVar("T")


class NotificationRepository:
    def __init__(self, session: DBSession) -> None:
        self.session = session

    async def _save(self, obj: T) -> T:
        self.session.add(obj)
        await self.session.flush()
        await self.session.refresh(obj)
        return obj

    # ============================================================
    # Templates
    # ============================================================

    async def list_templates(
        self, tenant_id: UUID, page: int = 1, page_size: int = 20
    ) -> tuple[list[NotificationTemplate], int]:
        stmt = (
            select(NotificationTemplate)
            .where(
                NotificationTemplate.tenant_id == tenant_id,
                NotificationTemplate.is_deleted.is_(False),
            )
            .order_by(NotificationTemplate.name)
        )
        return await paginate(self.session, stmt, page, page_size)

    async def get_template(
        self, template_id: UUID, tenant_id: UUID
    ) -> NotificationTemplate | None:
        stmt = select(NotificationTemplate).where(
            NotificationTemplate.id == template_id,
            NotificationTemplate.tenant_id == tenant_id,
            NotificationTemplate.is_deleted.is_(False),
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_template_by_name(
        self, name: str, tenant_id: UUID
    ) -> NotificationTemplate | None:
        stmt = select(NotificationTemplate).where(
            NotificationTemplate.name == name,
            NotificationTemplate.tenant_id == tenant_id,
            NotificationTemplate.is_deleted.is_(False),
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def create_template(self, template: NotificationTemplate) -> NotificationTemplate:
        return await self._save(template)

    async def update_template(self, template: NotificationTemplate) -> NotificationTemplate:
        return await self._save(template)

    # ============================================================
    # Rules
    # ============================================================

    async def list_rules(
        self, tenant_id: UUID, page: int = 1, page_size: int = 20
    ) -> tuple[list[NotificationRule], int]:
        stmt = (
            select(NotificationRule)
            .where(NotificationRule.tenant_id == tenant_id)
            .order_by(NotificationRule.created_at)
        )
        return await paginate(self.session, stmt, page, page_size)

    async def list_active_rules(
        self, tenant_id: UUID, trigger: str
    ) -> list[NotificationRule]:
        stmt = (
            select(NotificationRule)
            .where(
                NotificationRule.tenant_id == tenant_id,
                NotificationRule.trigger == trigger,
                NotificationRule.is_active.is_(True),
            )
            .order_by(NotificationRule.created_at)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def get_rule(self, rule_id: UUID, tenant_id: UUID) -> NotificationRule | None:
        stmt = select(NotificationRule).where(
            NotificationRule.id == rule_id,
            NotificationRule.tenant_id == tenant_id,
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def create_rule(self, rule: NotificationRule) -> NotificationRule:
        return await self._save(rule)

    async def update_rule(self, rule: NotificationRule) -> NotificationRule:
        return await self._save(rule)

    async def delete_rule(self, rule: NotificationRule) -> None:
        await self.session.delete(rule)
        await self.session.flush()

    # ============================================================
    # Notifications
    # ============================================================

    async def add_notifications(self, *notifications: Notification) -> list[Notification]:
        self.session.add_all(notifications)
        await self.session.flush()
        return list(notifications)

    async def get_notification(self, notification_id: UUID) -> Notification | None:
        """Unscoped lookup, used by the delivery job."""
        return await self.session.get(Notification, notification_id)

    async def get_for_recipient(
        self, notification_id: UUID, recipient_id: UUID, tenant_id: UUID
    ) -> Notification | None:
        stmt = select(Notification).where(
            Notification.id == notification_id,
            Notification.recipient_id == recipient_id,
            Notification.tenant_id == tenant_id,
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def list_for_recipient(
        self,
        recipient_id: UUID,
        tenant_id: UUID,
        page: int = 1,
        page_size: int = 20,
        read: bool | None = None,
        notification_type: str | None = None,
    ) -> tuple[list[Notification], int]:
        stmt = select(Notification).where(
            Notification.recipient_id == recipient_id,
            Notification.tenant_id == tenant_id,
        )
        if read is True:
            stmt = stmt.where(Notification.read_at.is_not(None))
        elif read is False:
            stmt = stmt.where(Notification.read_at.is_(None))
        if notification_type:
            stmt = stmt.where(Notification.type == notification_type)

        return await paginate(
            self.session, stmt.order_by(Notification.created_at.desc()), page, page_size
        )

    async def update_notification(self, notification: Notification) -> Notification:
        return await self._save(notification)

    async def mark_all_read(self, recipient_id: UUID, tenant_id: UUID) -> int:
        stmt = (
            update(Notification)
            .where(
                Notification.recipient_id == recipient_id,
                Notification.tenant_id == tenant_id,
                Notification.read_at.is_(None),
            )
            .values(read_at=datetime.now(UTC))
        )
        result = await self.session.execute(stmt)
        return result.rowcount or 0  # type: ignore[attr-defined]


NotificationRepo = Annotated[NotificationRepository, Depends(NotificationRepository)]
