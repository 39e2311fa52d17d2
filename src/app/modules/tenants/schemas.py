"""Pydantic schemas for tenants."""

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.core.utils.chile import format_rut, validate_rut


class TenantResponse(BaseModel):
    id: UUID
    name: str
    slug: str
    rut: str | None = None
    is_active: bool
    settings: dict[str, Any]
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class TenantUpdate(BaseModel):
    """Partial update of the current tenant.

    ``settings`` keys are merged into the stored settings, not replacing them.
    """

    name: str | None = Field(None, min_length=1, max_length=255)
    rut: str | None = None
    settings: dict[str, Any] | None = None

    @field_validator("rut")
    @classmethod
    def rut_is_valid(cls, v: str | None) -> str | None:
        if v is None:
            return v
        if not validate_rut(v):
            raise ValueError("Invalid RUT")
        return format_rut(v)
