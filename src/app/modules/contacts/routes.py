"""Contact API routes."""

from uuid import UUID

from fastapi import Query, status

from app.api.dependencies import Pagination
from app.core.auth.dependencies import TenantId
from app.modules.contacts import router
from app.modules.contacts.models import ContactType
from app.modules.contacts.schemas import (
    ContactCreate,
    ContactListResponse,
    ContactResponse,
    ContactUpdate,
)
from app.modules.contacts.services import ContactSvc


@router.get("", response_model=ContactListResponse, summary="List contacts")
async def list_contacts(
    tenant_id: TenantId,
    service: ContactSvc,
    pagination: Pagination,
    search: str | None = Query(None, description="Matches name, email, RUT or company"),
    contact_type: ContactType | None = None,
) -> ContactListResponse:
    contacts, total = await service.list_contacts(
        tenant_id,
        page=pagination.page,
        page_size=pagination.page_size,
        search=search,
        contact_type=contact_type,
    )
    return ContactListResponse(
        items=[ContactResponse.model_validate(c) for c in contacts],
        total=total,
        page=pagination.page,
        page_size=pagination.page_size,
    )


@router.post(
    "",
    response_model=ContactResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create contact",
)
async def create_contact(
    data: ContactCreate, tenant_id: TenantId, service: ContactSvc
) -> ContactResponse:
    contact = await service.create_contact(tenant_id, data)
    return ContactResponse.model_validate(contact)


@router.get("/{contact_id}", response_model=ContactResponse)
async def get_contact(
    contact_id: UUID, tenant_id: TenantId, service: ContactSvc
) -> ContactResponse:
    contact = await service.get_contact(contact_id, tenant_id)
    return ContactResponse.model_validate(contact)


@router.patch("/{contact_id}", response_model=ContactResponse)
async def update_contact(
    contact_id: UUID, data: ContactUpdate, tenant_id: TenantId, service: ContactSvc
) -> ContactResponse:
    contact = await service.update_contact(contact_id, tenant_id, data)
    return ContactResponse.model_validate(contact)


@router.delete("/{contact_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_contact(contact_id: UUID, tenant_id: TenantId, service: ContactSvc) -> None:
    await service.delete_contact(contact_id, tenant_id)
