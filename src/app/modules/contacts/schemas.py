"""Pydantic schemas for contacts."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from app.modules.contacts.models import ContactType


class ContactCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    rut: str | None = Field(None, description="Chilean RUT in any common spelling")
    email: EmailStr | None = None
    phone: str | None = Field(None, max_length=32)
    company: str | None = Field(None, max_length=255)
    address: str | None = Field(None, max_length=500)
    contact_type: ContactType = ContactType.CUSTOMER
    notes: str | None = None
    is_active: bool = True


class ContactUpdate(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=255)
    rut: str | None = None
    email: EmailStr | None = None
    phone: str | None = Field(None, max_length=32)
    company: str | None = Field(None, max_length=255)
    address: str | None = Field(None, max_length=500)
    contact_type: ContactType | None = None
    notes: str | None = None
    is_active: bool | None = None


class ContactResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    rut: str | None
    email: str | None
    phone: str | None
    company: str | None
    address: str | None
    contact_type: ContactType
    notes: str | None
    is_active: bool
    created_at: datetime
    updated_at: datetime


class ContactListResponse(BaseModel):
    items: list[ContactResponse]
    total: int
    page: int
    page_size: int
