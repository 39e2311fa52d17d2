"""Pydantic schemas for PTO requests."""

import datetime as dt
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from app.modules.pto.models import PTOStatus


class PTOCreate(BaseModel):
    staff_id: UUID
    start_date: dt.date
    end_date: dt.date
    reason: str | None = Field(None, max_length=1000)


class PTODeny(BaseModel):
    denial_reason: str | None = Field(None, max_length=1000)


class PTOResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    staff_id: UUID
    start_date: dt.date
    end_date: dt.date
    days_requested: int
    reason: str | None
    status: PTOStatus
    requested_date: dt.datetime
    reviewed_at: dt.datetime | None
    reviewed_by: UUID | None
    denial_reason: str | None


class PTOListResponse(BaseModel):
    items: list[PTOResponse]
    total: int
    page: int
    page_size: int
