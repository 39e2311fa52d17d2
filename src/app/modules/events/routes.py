"""Event API routes."""

from uuid import UUID

from fastapi import Query, status

from app.api.dependencies import Pagination
from app.core.auth.dependencies import OptionalUserId, TenantId
from app.modules.events import router
from app.modules.events.models import EventCategory, EventStatus
from app.modules.events.schemas import (
    EventCreate,
    EventListResponse,
    EventResponse,
    EventUpdate,
)
from app.modules.events.services import EventSvc


@router.get("", response_model=EventListResponse, summary="List events")
async def list_events(
    tenant_id: TenantId,
    service: EventSvc,
    pagination: Pagination,
    event_status: EventStatus | None = Query(None, alias="status"),
    category: EventCategory | None = None,
    upcoming: bool = Query(False, description="Only future, non-cancelled events"),
) -> EventListResponse:
    events, total = await service.list_events(
        tenant_id,
        page=pagination.page,
        page_size=pagination.page_size,
        status=event_status,
        category=category,
        upcoming=upcoming,
    )
    return EventListResponse(
        items=[EventResponse.model_validate(e) for e in events],
        total=total,
        page=pagination.page,
        page_size=pagination.page_size,
    )


@router.post(
    "",
    response_model=EventResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create event",
)
async def create_event(
    data: EventCreate, tenant_id: TenantId, user_id: OptionalUserId, service: EventSvc
) -> EventResponse:
    event = await service.create_event(tenant_id, data, created_by_id=user_id)
    return EventResponse.model_validate(event)


@router.get("/{event_id}", response_model=EventResponse)
async def get_event(event_id: UUID, tenant_id: TenantId, service: EventSvc) -> EventResponse:
    event = await service.get_event(event_id, tenant_id)
    return EventResponse.model_validate(event)


@router.patch("/{event_id}", response_model=EventResponse)
async def update_event(
    event_id: UUID, data: EventUpdate, tenant_id: TenantId, service: EventSvc
) -> EventResponse:
    event = await service.update_event(event_id, tenant_id, data)
    return EventResponse.model_validate(event)


@router.delete("/{event_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_event(event_id: UUID, tenant_id: TenantId, service: EventSvc) -> None:
    await service.delete_event(event_id, tenant_id)
