"""Tenant service."""

from typing import Annotated, Any
from uuid import UUID

from fastapi import Depends

from app.core.errors import NotFoundError
from app.modules.tenants.models import Tenant
from app.modules.tenants.repos import TenantRepo
from app.modules.tenants.schemas import TenantUpdate


class TenantService:
    def __init__(self, repo: TenantRepo) -> None:
        self.repo = repo

    async def get_tenant(self, tenant_id: UUID) -> Tenant:
        tenant = await self.repo.get_by_id(tenant_id)
        if not tenant:
            raise NotFoundError(
                "Tenant not found",
                resource="tenant",
                resource_id=str(tenant_id),
            )
        return tenant

    async def update_tenant(self, tenant_id: UUID, data: TenantUpdate) -> Tenant:
        tenant = await self.get_tenant(tenant_id)

        if data.name is not None:
            tenant.name = data.name
        if data.rut is not None:
            tenant.rut = data.rut
        if data.settings:
            tenant.settings = {**(tenant.settings or {}), **data.settings}

        return await self.repo.update(tenant)

    async def save_setting(self, tenant_id: UUID, key: str, value: Any) -> Tenant:
        """Store a single key in the tenant's settings."""
        tenant = await self.get_tenant(tenant_id)
        tenant.settings = {**(tenant.settings or {}), key: value}
        return await self.repo.update(tenant)


TenantSvc = Annotated[TenantService, Depends(TenantService)]
