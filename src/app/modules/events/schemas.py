"""Pydantic schemas for events."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from app.modules.events.models import EventCategory, EventStatus


class EventCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    description: str | None = None
    start_date: datetime
    end_date: datetime
    location: str | None = Field(None, max_length=255)
    category: EventCategory = EventCategory.GENERAL
    status: EventStatus = EventStatus.UPCOMING
    is_public: bool = True


class EventUpdate(BaseModel):
    title: str | None = Field(None, min_length=1, max_length=255)
    description: str | None = None
    start_date: datetime | None = None
    end_date: datetime | None = None
    location: str | None = Field(None, max_length=255)
    category: EventCategory | None = None
    status: EventStatus | None = None
    is_public: bool | None = None


class EventResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    title: str
    description: str | None
    start_date: datetime
    end_date: datetime
    location: str | None
    category: EventCategory
    status: EventStatus
    is_public: bool
    created_by_id: UUID | None
    created_at: datetime
    updated_at: datetime


class EventListResponse(BaseModel):
    items: list[EventResponse]
    total: int
    page: int
    page_size: int
