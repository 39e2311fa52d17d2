"""Pydantic schemas for notifications."""

from datetime import datetime
from typing import Any, Literal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from app.modules.notifications.models import (
    NotificationStatus,
    NotificationTrigger,
    NotificationType,
)


# ============================================================
# Templates
# ============================================================


class TemplateCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    type: NotificationType = NotificationType.IN_APP
    subject: str | None = Field(None, max_length=255)
    content: str = Field(..., min_length=1)
    variables: list[str] = Field(default_factory=list)
    is_active: bool = True


class TemplateUpdate(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=255)
    type: NotificationType | None = None
    subject: str | None = Field(None, max_length=255)
    content: str | None = Field(None, min_length=1)
    variables: list[str] | None = None
    is_active: bool | None = None


class TemplateResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    type: NotificationType
    subject: str | None
    content: str
    variables: list[str]
    is_active: bool
    created_by: UUID | None
    created_at: datetime
    updated_at: datetime


class TemplateListResponse(BaseModel):
    items: list[TemplateResponse]
    total: int
    page: int
    page_size: int


# ============================================================
# Rules
# ============================================================


class RuleCondition(BaseModel):
    field: str = Field(..., min_length=1)
    operator: Literal["equals", "not_equals", "contains", "greater_than", "less_than"]
    value: Any = None


class RuleRecipient(BaseModel):
    type: Literal["user", "creator", "assignee", "all"]
    value: str | None = None


class RuleCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    template_id: UUID
    trigger: NotificationTrigger
    conditions: list[RuleCondition] = Field(default_factory=list)
    recipients: list[RuleRecipient] = Field(..., min_length=1)
    is_active: bool = True


class RuleUpdate(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=255)
    template_id: UUID | None = None
    trigger: NotificationTrigger | None = None
    conditions: list[RuleCondition] | None = None
    recipients: list[RuleRecipient] | None = Field(None, min_length=1)
    is_active: bool | None = None


class RuleResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    template_id: UUID
    trigger: NotificationTrigger
    conditions: list[dict[str, Any]]
    recipients: list[dict[str, Any]]
    is_active: bool
    created_at: datetime
    updated_at: datetime


class RuleListResponse(BaseModel):
    items: list[RuleResponse]
    total: int
    page: int
    page_size: int


# ============================================================
# Notifications
# ============================================================


class SendRequest(BaseModel):
    template_id: UUID
    recipient_ids: list[UUID] = Field(..., min_length=1)
    variables: dict[str, Any] = Field(default_factory=dict)
    delay_seconds: int | None = Field(None, ge=0)
    context_type: str | None = Field(None, max_length=50)
    context_id: str | None = Field(None, max_length=64)


class SendResponse(BaseModel):
    sent: int
    notification_ids: list[UUID]


class NotificationResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    template_id: UUID | None
    rule_id: UUID | None
    recipient_id: UUID
    subject: str | None
    content: str
    type: NotificationType
    status: NotificationStatus
    read_at: datetime | None
    sent_at: datetime | None
    context_type: str | None
    context_id: str | None
    scheduled_for: datetime | None
    created_at: datetime


class NotificationListResponse(BaseModel):
    items: list[NotificationResponse]
    total: int
    page: int
    page_size: int


class MarkAllReadResponse(BaseModel):
    updated: int
