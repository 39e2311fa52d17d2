"""Notification database models."""

from datetime import datetime
from enum import StrEnum
from typing import Any
from uuid import UUID

from sqlalchemy import Boolean, DateTime, ForeignKey, Index, String, Text, text
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column

from app.core.database.base import (
    Base,
    SoftDeleteMixin,
    TenantMixin,
    TimestampMixin,
    UUIDMixin,
)


class NotificationType(StrEnum):
    EMAIL = "EMAIL"
    IN_APP = "IN_APP"
    PUSH = "PUSH"
    SMS = "SMS"


class NotificationStatus(StrEnum):
    PENDING = "PENDING"
    SENT = "SENT"
    FAILED = "FAILED"


class NotificationTrigger(StrEnum):
    PTO_REQUESTED = "PTO_REQUESTED"
    PTO_APPROVED = "PTO_APPROVED"
    PTO_DENIED = "PTO_DENIED"
    PAYROLL_PAID = "PAYROLL_PAID"
    EVENT_CREATED = "EVENT_CREATED"
    SYNC_COMPLETED = "SYNC_COMPLETED"
    MANUAL = "MANUAL"


class NotificationTemplate(Base, UUIDMixin, TimestampMixin, TenantMixin, SoftDeleteMixin):
    """Reusable message with ``{{variable}}`` placeholders."""

    __tablename__ = "notification_templates"
    __table_args__ = (
        Index(
            "uq_notification_templates_tenant_name",
            "tenant_id",
            "name",
            unique=True,
            postgresql_where=text("is_deleted = false"),
        ),
    )

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    type: Mapped[str] = mapped_column(String(16), nullable=False, default=NotificationType.IN_APP)
    subject: Mapped[str | None] = mapped_column(String(255))
    content: Mapped[str] = mapped_column(Text, nullable=False)
    variables: Mapped[list[str]] = mapped_column(JSONB, default=list, server_default="[]")
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    created_by: Mapped[UUID | None] = mapped_column(
        ForeignKey("users.id", ondelete="SET NULL")
    )


class NotificationRule(Base, UUIDMixin, TimestampMixin, TenantMixin):
    """Sends a template when ``trigger`` fires and all ``conditions`` hold.

    ``conditions`` is a list of ``{field, operator, value}``; ``recipients``
    is a list of ``{type, value}`` with type user, creator, assignee or all.
    """

    __tablename__ = "notification_rules"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    template_id: Mapped[UUID] = mapped_column(
        ForeignKey("notification_templates.id", ondelete="CASCADE"), nullable=False
    )
    trigger: Mapped[str] = mapped_column(String(32), nullable=False, index=True)
    conditions: Mapped[list[dict[str, Any]]] = mapped_column(
        JSONB, default=list, server_default="[]"
    )
    recipients: Mapped[list[dict[str, Any]]] = mapped_column(
        JSONB, default=list, server_default="[]"
    )
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)


class Notification(Base, UUIDMixin, TimestampMixin, TenantMixin):
    """One rendered message for one user."""

    __tablename__ = "notifications"
    __table_args__ = (Index("ix_notifications_recipient_read", "recipient_id", "read_at"),)

    template_id: Mapped[UUID | None] = mapped_column(
        ForeignKey("notification_templates.id", ondelete="SET NULL")
    )
    rule_id: Mapped[UUID | None] = mapped_column(
        ForeignKey("notification_rules.id", ondelete="SET NULL")
    )
    recipient_id: Mapped[UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    subject: Mapped[str | None] = mapped_column(String(255))
    content: Mapped[str] = mapped_column(Text, nullable=False)
    type: Mapped[str] = mapped_column(String(16), nullable=False)
    status: Mapped[str] = mapped_column(
        String(16), nullable=False, default=NotificationStatus.PENDING, index=True
    )
    read_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    sent_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    failed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    error_message: Mapped[str | None] = mapped_column(Text)
    context_type: Mapped[str | None] = mapped_column(String(50))
    context_id: Mapped[str | None] = mapped_column(String(64))
    scheduled_for: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
