"""Event service for business logic."""

from datetime import datetime
from typing import Annotated
from uuid import UUID

import structlog
from fastapi import Depends

from app.core.errors import BadRequestError, NotFoundError
from app.modules.events.models import Event
from app.modules.events.repos import EventRepo
from app.modules.events.schemas import EventCreate, EventResponse, EventUpdate
from app.modules.notifications.models import NotificationTrigger
from app.modules.notifications.services import NotificationSvc


logger = structlog.get_logger()


def _check_range(start: datetime, end: datetime) -> None:
    if end < start:
        raise BadRequestError(
            "Event end must not be before its start",
            error_code="invalid_date_range",
        )


class EventService:
    def __init__(self, repo: EventRepo, notifications: NotificationSvc) -> None:
        self.repo = repo
        self.notifications = notifications

    async def list_events(
        self,
        tenant_id: UUID,
        page: int = 1,
        page_size: int = 20,
        status: str | None = None,
        category: str | None = None,
        upcoming: bool = False,
    ) -> tuple[list[Event], int]:
        return await self.repo.list_events(
            tenant_id,
            page=page,
            page_size=page_size,
            status=status,
            category=category,
            upcoming=upcoming,
        )

    async def get_event(self, event_id: UUID, tenant_id: UUID) -> Event:
        event = await self.repo.get(event_id, tenant_id)
        if not event:
            raise NotFoundError("Event not found", resource="event", resource_id=str(event_id))
        return event

    async def create_event(
        self, tenant_id: UUID, data: EventCreate, created_by_id: UUID | None = None
    ) -> Event:
        _check_range(data.start_date, data.end_date)
        event = await self.repo.create(
            Event(tenant_id=tenant_id, created_by_id=created_by_id, **data.model_dump())
        )
        logger.info("event_created", event_id=str(event.id), title=event.title)

        await self.notifications.process_rules(
            tenant_id,
            NotificationTrigger.EVENT_CREATED,
            EventResponse.model_validate(event).model_dump(mode="json"),
            context_type="event",
            context_id=str(event.id),
        )
        return event

    async def update_event(self, event_id: UUID, tenant_id: UUID, data: EventUpdate) -> Event:
        event = await self.get_event(event_id, tenant_id)
        changes = data.model_dump(exclude_unset=True)
        _check_range(
            changes.get("start_date") or event.start_date,
            changes.get("end_date") or event.end_date,
        )
        for field, value in changes.items():
            setattr(event, field, value)
        return await self.repo.update(event)

    async def delete_event(self, event_id: UUID, tenant_id: UUID) -> None:
        event = await self.get_event(event_id, tenant_id)
        event.soft_delete()
        await self.repo.update(event)


EventSvc = Annotated[EventService, Depends(EventService)]
