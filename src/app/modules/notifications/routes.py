"""Notification API routes."""

from typing import Literal
from uuid import UUID

from fastapi import Query, status

from app.api.dependencies import Pagination
from app.core.auth.dependencies import CurrentUser, OptionalUserId, TenantId
from app.modules.notifications import router
from app.modules.notifications.models import NotificationType
from app.modules.notifications.schemas import (
    MarkAllReadResponse,
    NotificationListResponse,
    NotificationResponse,
    RuleCreate,
    RuleListResponse,
    RuleResponse,
    RuleUpdate,
    SendRequest,
    SendResponse,
    TemplateCreate,
    TemplateListResponse,
    TemplateResponse,
    TemplateUpdate,
)
from app.modules.notifications.services import NotificationSvc


# ============================================================
# Templates
# ============================================================


@router.get("/templates", response_model=TemplateListResponse, summary="List templates")
async def list_templates(
    tenant_id: TenantId, service: NotificationSvc, pagination: Pagination
) -> TemplateListResponse:
    templates, total = await service.list_templates(
        tenant_id, pagination.page, pagination.page_size
    )
    return TemplateListResponse(
        items=[TemplateResponse.model_validate(t) for t in templates],
        total=total,
        page=pagination.page,
        page_size=pagination.page_size,
    )


@router.post(
    "/templates",
    response_model=TemplateResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create template",
)
async def create_template(
    data: TemplateCreate,
    tenant_id: TenantId,
    user_id: OptionalUserId,
    service: NotificationSvc,
) -> TemplateResponse:
    template = await service.create_template(tenant_id, data, created_by=user_id)
    return TemplateResponse.model_validate(template)


@router.get("/templates/{template_id}", response_model=TemplateResponse)
async def get_template(
    template_id: UUID, tenant_id: TenantId, service: NotificationSvc
) -> TemplateResponse:
    template = await service.get_template(template_id, tenant_id)
    return TemplateResponse.model_validate(template)


@router.patch("/templates/{template_id}", response_model=TemplateResponse)
async def update_template(
    template_id: UUID, data: TemplateUpdate, tenant_id: TenantId, service: NotificationSvc
) -> TemplateResponse:
    template = await service.update_template(template_id, tenant_id, data)
    return TemplateResponse.model_validate(template)


@router.delete("/templates/{template_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_template(
    template_id: UUID, tenant_id: TenantId, service: NotificationSvc
) -> None:
    await service.delete_template(template_id, tenant_id)


# ============================================================
# Rules
# ============================================================


@router.get("/rules", response_model=RuleListResponse, summary="List rules")
async def list_rules(
    tenant_id: TenantId, service: NotificationSvc, pagination: Pagination
) -> RuleListResponse:
    rules, total = await service.list_rules(tenant_id, pagination.page, pagination.page_size)
    return RuleListResponse(
        items=[RuleResponse.model_validate(r) for r in rules],
        total=total,
        page=pagination.page,
        page_size=pagination.page_size,
    )


@router.post(
    "/rules",
    response_model=RuleResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create rule",
)
async def create_rule(
    data: RuleCreate, tenant_id: TenantId, service: NotificationSvc
) -> RuleResponse:
    rule = await service.create_rule(tenant_id, data)
    return RuleResponse.model_validate(rule)


@router.patch("/rules/{rule_id}", response_model=RuleResponse)
async def update_rule(
    rule_id: UUID, data: RuleUpdate, tenant_id: TenantId, service: NotificationSvc
) -> RuleResponse:
    rule = await service.update_rule(rule_id, tenant_id, data)
    return RuleResponse.model_validate(rule)


@router.delete("/rules/{rule_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_rule(rule_id: UUID, tenant_id: TenantId, service: NotificationSvc) -> None:
    await service.delete_rule(rule_id, tenant_id)


# ============================================================
# Sending and inbox
# ============================================================


@router.post(
    "/send",
    response_model=SendResponse,
    status_code=status.HTTP_202_ACCEPTED,
    summary="Send a template to users",
)
async def send_notifications(
    data: SendRequest, tenant_id: TenantId, service: NotificationSvc
) -> SendResponse:
    notifications = await service.send(tenant_id, data)
    return SendResponse(
        sent=len(notifications),
        notification_ids=[n.id for n in notifications],
    )


@router.get("/my", response_model=NotificationListResponse, summary="My notifications")
async def list_my_notifications(
    user: CurrentUser,
    service: NotificationSvc,
    pagination: Pagination,
    read_status: Literal["unread", "read"] | None = Query(None, alias="status"),
    type: NotificationType | None = None,  # noqa: A002
) -> NotificationListResponse:
    notifications, total = await service.list_my(
        user.id,
        user.tenant_id,
        page=pagination.page,
        page_size=pagination.page_size,
        status=read_status,
        notification_type=type,
    )
    return NotificationListResponse(
        items=[NotificationResponse.model_validate(n) for n in notifications],
        total=total,
        page=pagination.page,
        page_size=pagination.page_size,
    )


@router.post("/read-all", response_model=MarkAllReadResponse)
async def mark_all_read(user: CurrentUser, service: NotificationSvc) -> MarkAllReadResponse:
    updated = await service.mark_all_read(user.id, user.tenant_id)
    return MarkAllReadResponse(updated=updated)


@router.post("/{notification_id}/read", response_model=NotificationResponse)
async def mark_read(
    notification_id: UUID, user: CurrentUser, service: NotificationSvc
) -> NotificationResponse:
    notification = await service.mark_read(notification_id, user.id, user.tenant_id)
    return NotificationResponse.model_validate(notification)
