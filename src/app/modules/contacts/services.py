"""Contact service for business logic."""

from typing import Annotated
from uuid import UUID

import structlog
from fastapi import Depends

from app.core.errors import ConflictError, NotFoundError
from app.modules.contacts.models import Contact
from app.modules.contacts.repos import ContactRepo
from app.modules.contacts.schemas import ContactCreate, ContactUpdate
from app.modules.staff.services import normalize_rut


logger = structlog.get_logger()


class ContactService:
    def __init__(self, repo: ContactRepo) -> None:
        self.repo = repo

    async def list_contacts(
        self,
        tenant_id: UUID,
        page: int = 1,
        page_size: int = 20,
        search: str | None = None,
        contact_type: str | None = None,
    ) -> tuple[list[Contact], int]:
        return await self.repo.list_contacts(
            tenant_id,
            page=page,
            page_size=page_size,
            search=search,
            contact_type=contact_type,
        )

    async def get_contact(self, contact_id: UUID, tenant_id: UUID) -> Contact:
        contact = await self.repo.get(contact_id, tenant_id)
        if not contact:
            raise NotFoundError(
                "Contact not found",
                resource="contact",
                resource_id=str(contact_id),
            )
        return contact

    async def _checked_rut(
        self, rut: str, tenant_id: UUID, exclude_id: UUID | None = None
    ) -> str:
        formatted = normalize_rut(rut)
        existing = await self.repo.get_by_rut(formatted, tenant_id)
        if existing and existing.id != exclude_id:
            raise ConflictError(
                "A contact with this RUT already exists",
                error_code="rut_exists",
                details={"rut": formatted},
            )
        return formatted

    async def create_contact(self, tenant_id: UUID, data: ContactCreate) -> Contact:
        """Create a contact; the RUT, if any, is validated and formatted.

        Raises:
            ValidationError: If the RUT check digit is wrong
            ConflictError: If another contact has the RUT
        """
        values = data.model_dump()
        if data.rut:
            values["rut"] = await self._checked_rut(data.rut, tenant_id)
        contact = await self.repo.create(Contact(tenant_id=tenant_id, **values))
        logger.info("contact_created", contact_id=str(contact.id))
        return contact

    async def update_contact(
        self, contact_id: UUID, tenant_id: UUID, data: ContactUpdate
    ) -> Contact:
        contact = await self.get_contact(contact_id, tenant_id)
        changes = data.model_dump(exclude_unset=True)
        if changes.get("rut"):
            changes["rut"] = await self._checked_rut(
                changes["rut"], tenant_id, exclude_id=contact.id
            )
        for field, value in changes.items():
            setattr(contact, field, value)
        return await self.repo.update(contact)

    async def delete_contact(self, contact_id: UUID, tenant_id: UUID) -> None:
        contact = await self.get_contact(contact_id, tenant_id)
        contact.soft_delete()
        await self.repo.update(contact)


ContactSvc = Annotated[ContactService, Depends(ContactService)]
