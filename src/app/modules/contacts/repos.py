"""Contact repository for database operations."""

from typing import Annotated
from uuid import UUID

from fastapi import Depends
from sqlalchemy import or_, select

from app.api.dependencies import DBSession
from app.core.database import paginate
from app.modules.contacts.models import Contact


class ContactRepository:
    def __init__(self, session: DBSession) -> None:
        self.session = session

    async def list_contacts(
        self,
        tenant_id: UUID,
        page: int = 1,
        page_size: int = 20,
        search: str | None = None,
        contact_type: str | None = None,
    ) -> tuple[list[Contact], int]:
        stmt = select(Contact).where(
            Contact.tenant_id == tenant_id,
            Contact.is_deleted.is_(False),
        )
        if search:
            pattern = f"%{search}%"
            stmt = stmt.where(
                or_(
                    Contact.name.ilike(pattern),
                    Contact.email.ilike(pattern),
                    Contact.rut.ilike(pattern),
                    Contact.company.ilike(pattern),
                )
            )
        if contact_type:
            stmt = stmt.where(Contact.contact_type == contact_type)
        return await paginate(self.session, stmt.order_by(Contact.name), page, page_size)

    async def get(self, contact_id: UUID, tenant_id: UUID) -> Contact | None:
        stmt = select(Contact).where(
            Contact.id == contact_id,
            Contact.tenant_id == tenant_id,
            Contact.is_deleted.is_(False),
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_rut(self, rut: str, tenant_id: UUID) -> Contact | None:
        stmt = select(Contact).where(
            Contact.rut == rut,
            Contact.tenant_id == tenant_id,
            Contact.is_deleted.is_(False),
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def create(self, contact: Contact) -> Contact:
        self.session.add(contact)
        await self.session.flush()
        await self.session.refresh(contact)
        return contact

    async def update(self, contact: Contact) -> Contact:
        await self.session.flush()
        await self.session.refresh(contact)
        return contact


ContactRepo = Annotated[ContactRepository, Depends(ContactRepository)]
