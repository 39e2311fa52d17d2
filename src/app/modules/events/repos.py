"""Event repository for database operations."""

from datetime import UTC, datetime
from typing import Annotated
from uuid import UUID

from fastapi import Depends
from sqlalchemy import select

from app.api.dependencies import DBSession
from app.core.database import paginate
from app.modules.events.models import Event, EventStatus


class EventRepository:
    def __init__(self, session: DBSession) -> None:
        self.session = session

    async def list_events(
        self,
        tenant_id: UUID,
        page: int = 1,
        page_size: int = 20,
        status: str | None = None,
        category: str | None = None,
        upcoming: bool = False,
    ) -> tuple[list[Event], int]:
        stmt = select(Event).where(
            Event.tenant_id == tenant_id,
            Event.is_deleted.is_(False),
        )
        if status:
            stmt = stmt.where(Event.status == status)
        if category:
            stmt = stmt.where(Event.category == category)
        if upcoming:
            stmt = stmt.where(
                Event.start_date >= datetime.now(UTC),
                Event.status != EventStatus.CANCELLED,
            )
        return await paginate(self.session, stmt.order_by(Event.start_date), page, page_size)

    async def get(self, event_id: UUID, tenant_id: UUID) -> Event | None:
        stmt = select(Event).where(
            Event.id == event_id,
            Event.tenant_id == tenant_id,
            Event.is_deleted.is_(False),
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def create(self, event: Event) -> Event:
        self.session.add(event)
        await self.session.flush()
        await self.session.refresh(event)
        return event

    async def update(self, event: Event) -> Event:
        await self.session.flush()
        await self.session.refresh(event)
        return event


EventRepo = Annotated[EventRepository, Depends(EventRepository)]
