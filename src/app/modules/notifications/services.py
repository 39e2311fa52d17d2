"""Notification service: templates, rules, sending and delivery."""

from collections.abc import Iterable
from datetime import UTC, datetime, timedelta
from typing import Annotated, Any
from uuid import UUID

import structlog
from fastapi import Depends
from redis.exceptions import RedisError

from app.clients.base import ClientError
from app.clients.mailer import send_email
from app.config import settings
from app.core.errors import BadRequestError, ConflictError, NotFoundError
from app.core.jobs import enqueue
from app.core.utils.text import render_template
from app.modules.notifications.models import (
    Notification,
    NotificationRule,
    NotificationStatus,
    NotificationTemplate,
    NotificationType,
)
from app.modules.notifications.repos import NotificationRepo
from app.modules.notifications.rules import evaluate_conditions, explicit_recipients
from app.modules.notifications.schemas import (
    RuleCreate,
    RuleUpdate,
    SendRequest,
    TemplateCreate,
    TemplateUpdate,
)
from app.modules.users.repos import UserRepo


logger = structlog.get_logger()

DELIVERY_JOB = "deliver_notification"


class NotificationService:
    """Templates and rules are tenant data; delivery happens on the worker."""

    def __init__(self, repo: NotificationRepo, users: UserRepo) -> None:
        self.repo = repo
        self.users = users

    # ============================================================
    # Templates
    # ============================================================

    async def list_templates(
        self, tenant_id: UUID, page: int = 1, page_size: int = 20
    ) -> tuple[list[NotificationTemplate], int]:
        return await self.repo.list_templates(tenant_id, page, page_size)

    async def get_template(self, template_id: UUID, tenant_id: UUID) -> NotificationTemplate:
        template = await self.repo.get_template(template_id, tenant_id)
        if not template:
            raise NotFoundError(
                "Notification template not found",
                resource="notification_template",
                resource_id=str(template_id),
            )
        return template

    async def _ensure_name_free(
        self, name: str, tenant_id: UUID, exclude_id: UUID | None = None
    ) -> None:
        existing = await self.repo.get_template_by_name(name, tenant_id)
        if existing and existing.id != exclude_id:
            raise ConflictError(
                "A template with this name already exists",
                error_code="template_exists",
                details={"name": name},
            )

    async def create_template(
        self, tenant_id: UUID, data: TemplateCreate, created_by: UUID | None = None
    ) -> NotificationTemplate:
        await self._ensure_name_free(data.name, tenant_id)
        template = NotificationTemplate(
            tenant_id=tenant_id, created_by=created_by, **data.model_dump()
        )
        return await self.repo.create_template(template)

    async def update_template(
        self, template_id: UUID, tenant_id: UUID, data: TemplateUpdate
    ) -> NotificationTemplate:
        template = await self.get_template(template_id, tenant_id)
        changes = data.model_dump(exclude_unset=True)
        if changes.get("name") and changes["name"] != template.name:
            await self._ensure_name_free(changes["name"], tenant_id, exclude_id=template.id)
        for field, value in changes.items():
            setattr(template, field, value)
        return await self.repo.update_template(template)

    async def delete_template(self, template_id: UUID, tenant_id: UUID) -> None:
        template = await self.get_template(template_id, tenant_id)
        template.soft_delete()
        await self.repo.update_template(template)
        logger.info("notification_template_deleted", template_id=str(template_id))

    # ============================================================
    # Rules
    # ============================================================

    async def list_rules(
        self, tenant_id: UUID, page: int = 1, page_size: int = 20
    ) -> tuple[list[NotificationRule], int]:
        return await self.repo.list_rules(tenant_id, page, page_size)

    async def get_rule(self, rule_id: UUID, tenant_id: UUID) -> NotificationRule:
        rule = await self.repo.get_rule(rule_id, tenant_id)
        if not rule:
            raise NotFoundError(
                "Notification rule not found",
                resource="notification_rule",
                resource_id=str(rule_id),
            )
        return rule

    async def create_rule(self, tenant_id: UUID, data: RuleCreate) -> NotificationRule:
        await self.get_template(data.template_id, tenant_id)
        rule = NotificationRule(tenant_id=tenant_id, **data.model_dump(mode="json"))
        rule.template_id = data.template_id
        return await self.repo.create_rule(rule)

    async def update_rule(
        self, rule_id: UUID, tenant_id: UUID, data: RuleUpdate
    ) -> NotificationRule:
        rule = await self.get_rule(rule_id, tenant_id)
        if data.template_id is not None:
            await self.get_template(data.template_id, tenant_id)

        changes = data.model_dump(mode="json", exclude_unset=True)
        changes.pop("template_id", None)
        for field, value in changes.items():
            setattr(rule, field, value)
        if data.template_id is not None:
            rule.template_id = data.template_id
        return await self.repo.update_rule(rule)

    async def delete_rule(self, rule_id: UUID, tenant_id: UUID) -> None:
        rule = await self.get_rule(rule_id, tenant_id)
        await self.repo.delete_rule(rule)

    # ============================================================
    # Sending
    # ============================================================

    async def _enqueue_delivery(
        self, notifications: Iterable[Notification], delay_seconds: int | None = None
    ) -> None:
        defer_by = timedelta(seconds=delay_seconds) if delay_seconds else None
        for notification in notifications:
            try:
                await enqueue(
                    DELIVERY_JOB,
                    str(notification.id),
                    _defer_by=defer_by,
                    _job_id=f"notification:{notification.id}",
                )
            except (RuntimeError, RedisError, OSError) as e:
                logger.warning(
                    "notification_enqueue_failed",
                    notification_id=str(notification.id),
                    error=str(e),
                )

    async def _create_notifications(
        self,
        tenant_id: UUID,
        template: NotificationTemplate,
        recipient_ids: Iterable[UUID],
        variables: dict[str, Any],
        rule_id: UUID | None = None,
        context_type: str | None = None,
        context_id: str | None = None,
        delay_seconds: int | None = None,
    ) -> list[Notification]:
        subject = render_template(template.subject, variables) if template.subject else None
        content = render_template(template.content, variables)
        scheduled_for = (
            datetime.now(UTC) + timedelta(seconds=delay_seconds) if delay_seconds else None
        )

        notifications = [
            Notification(
                tenant_id=tenant_id,
                template_id=template.id,
                rule_id=rule_id,
                recipient_id=recipient_id,
                subject=subject,
                content=content,
                type=template.type,
                status=NotificationStatus.PENDING,
                context_type=context_type,
                context_id=context_id,
                scheduled_for=scheduled_for,
            )
            for recipient_id in recipient_ids
        ]
        if not notifications:
            return []
        return await self.repo.add_notifications(*notifications)

    async def send(self, tenant_id: UUID, data: SendRequest) -> list[Notification]:
        """Render a template for each recipient and queue delivery.

        Recipient ids outside the tenant are ignored.

        Raises:
            NotFoundError: If the template does not exist
            BadRequestError: If no recipient belongs to the tenant
        """
        template = await self.get_template(data.template_id, tenant_id)
        recipient_ids = await self.users.list_ids(tenant_id, user_ids=data.recipient_ids)
        if not recipient_ids:
            raise BadRequestError(
                "None of the recipients belong to this tenant",
                error_code="no_valid_recipients",
            )

        notifications = await self._create_notifications(
            tenant_id,
            template,
            recipient_ids,
            data.variables,
            context_type=data.context_type,
            context_id=data.context_id,
            delay_seconds=data.delay_seconds,
        )
        await self._enqueue_delivery(notifications, data.delay_seconds)
        logger.info(
            "notifications_sent",
            template_id=str(template.id),
            count=len(notifications),
        )
        return notifications

    async def process_rules(
        self,
        tenant_id: UUID,
        trigger: str,
        entity_data: dict[str, Any],
        context_type: str | None = None,
        context_id: str | None = None,
    ) -> int:
        """Fire every active rule for ``trigger`` against ``entity_data``.

        A failing rule is logged and rolled back to its savepoint; the
        remaining rules still run.

        Returns:
            Number of notifications created
        """
        rules = await self.repo.list_active_rules(tenant_id, trigger)
        created: list[Notification] = []

        for rule in rules:
            if not evaluate_conditions(rule.conditions, entity_data):
                continue
            try:
                async with self.repo.session.begin_nested():
                    created.extend(
                        await self._apply_rule(
                            rule, tenant_id, entity_data, context_type, context_id
                        )
                    )
            except Exception:
                logger.exception(
                    "notification_rule_failed",
                    rule_id=str(rule.id),
                    trigger=trigger,
                )

        await self._enqueue_delivery(created)
        if created:
            logger.info("notification_rules_processed", trigger=trigger, created=len(created))
        return len(created)

    async def _apply_rule(
        self,
        rule: NotificationRule,
        tenant_id: UUID,
        entity_data: dict[str, Any],
        context_type: str | None,
        context_id: str | None,
    ) -> list[Notification]:
        template = await self.repo.get_template(rule.template_id, tenant_id)
        if not template or not template.is_active:
            logger.warning("notification_rule_template_unavailable", rule_id=str(rule.id))
            return []

        candidate_ids, include_all = explicit_recipients(rule.recipients, entity_data)
        if include_all:
            recipient_ids = await self.users.list_ids(tenant_id)
        elif candidate_ids:
            recipient_ids = await self.users.list_ids(tenant_id, user_ids=candidate_ids)
        else:
            recipient_ids = []

        return await self._create_notifications(
            tenant_id,
            template,
            recipient_ids,
            entity_data,
            rule_id=rule.id,
            context_type=context_type,
            context_id=context_id,
        )

    # ============================================================
    # Inbox
    # ============================================================

    async def list_my(
        self,
        user_id: UUID,
        tenant_id: UUID,
        page: int = 1,
        page_size: int = 20,
        status: str | None = None,
        notification_type: str | None = None,
    ) -> tuple[list[Notification], int]:
        read = {"read": True, "unread": False}.get(status) if status else None
        return await self.repo.list_for_recipient(
            user_id,
            tenant_id,
            page=page,
            page_size=page_size,
            read=read,
            notification_type=notification_type,
        )

    async def mark_read(
        self, notification_id: UUID, user_id: UUID, tenant_id: UUID
    ) -> Notification:
        notification = await self.repo.get_for_recipient(notification_id, user_id, tenant_id)
        if not notification:
            raise NotFoundError(
                "Notification not found",
                resource="notification",
                resource_id=str(notification_id),
            )
        if notification.read_at is None:
            notification.read_at = datetime.now(UTC)
            notification = await self.repo.update_notification(notification)
        return notification

    async def mark_all_read(self, user_id: UUID, tenant_id: UUID) -> int:
        return await self.repo.mark_all_read(user_id, tenant_id)

    # ============================================================
    # Delivery
    # ============================================================

    async def deliver(self, notification_id: UUID) -> str | None:
        """Deliver one notification through its channel.

        Returns:
            The resulting status, or None when the notification does not exist
        """
        notification = await self.repo.get_notification(notification_id)
        if notification is None:
            return None
        if notification.status != NotificationStatus.PENDING:
            logger.info(
                "notification_delivery_skipped",
                notification_id=str(notification_id),
                status=notification.status,
            )
            return notification.status

        log = logger.bind(notification_id=str(notification_id), type=notification.type)
        try:
            await self._dispatch(notification)
        except (ClientError, RuntimeError, OSError) as e:
            notification.status = NotificationStatus.FAILED
            notification.failed_at = datetime.now(UTC)
            notification.error_message = str(e)
            log.warning("notification_delivery_failed", error=str(e))
        else:
            notification.status = NotificationStatus.SENT
            notification.sent_at = datetime.now(UTC)
            log.info("notification_delivered")

        await self.repo.update_notification(notification)
        return notification.status

    async def _dispatch(self, notification: Notification) -> None:
        match notification.type:
            case NotificationType.IN_APP:
                return
            case NotificationType.EMAIL:
                if not settings.smtp_enabled:
                    logger.info(
                        "email_delivery_simulated",
                        notification_id=str(notification.id),
                        subject=notification.subject,
                    )
                    return
                user = await self.users.get_by_id(
                    notification.recipient_id, notification.tenant_id
                )
                if user is None:
                    raise RuntimeError("Recipient no longer exists")
                await send_email(user.email, notification.subject or "", notification.content)
            case _:
                logger.info(
                    "notification_channel_not_connected",
                    notification_id=str(notification.id),
                    channel=notification.type,
                )


NotificationSvc = Annotated[NotificationService, Depends(NotificationService)]
