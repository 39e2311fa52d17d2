"""Tenant repository."""

from typing import Annotated
from uuid import UUID

from fastapi import Depends
from sqlalchemy import select

from app.api.dependencies import DBSession
from app.modules.tenants.models import Tenant


class TenantRepository:
    """Database access for tenants. Tenants are not tenant-scoped themselves."""

    def __init__(self, session: DBSession) -> None:
        self.session = session

    async def create(self, tenant: Tenant) -> Tenant:
        self.session.add(tenant)
        await self.session.flush()
        await self.session.refresh(tenant)
        return tenant

    async def get_by_id(self, tenant_id: UUID) -> Tenant | None:
        return await self.session.get(Tenant, tenant_id)

    async def get_by_slug(self, slug: str) -> Tenant | None:
        result = await self.session.execute(select(Tenant).where(Tenant.slug == slug))
        return result.scalar_one_or_none()

    async def list_syncable(self) -> list[Tenant]:
        """Active tenants with a RUT, i.e. those that can receive tax documents."""
        stmt = (
            select(Tenant)
            .where(Tenant.is_active.is_(True), Tenant.rut.is_not(None))
            .order_by(Tenant.name)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def update(self, tenant: Tenant) -> Tenant:
        await self.session.flush()
        await self.session.refresh(tenant)
        return tenant


TenantRepo = Annotated[TenantRepository, Depends(TenantRepository)]
