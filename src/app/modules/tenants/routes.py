"""Tenant API routes."""

from app.core.auth.dependencies import CurrentSuperuser, TenantId
from app.modules.tenants import router
from app.modules.tenants.schemas import TenantResponse, TenantUpdate
from app.modules.tenants.services import TenantSvc


@router.get(
    "/current",
    response_model=TenantResponse,
    summary="Get current tenant",
)
async def get_current_tenant(tenant_id: TenantId, service: TenantSvc) -> TenantResponse:
    tenant = await service.get_tenant(tenant_id)
    return TenantResponse.model_validate(tenant)


@router.patch(
    "/current",
    response_model=TenantResponse,
    summary="Update current tenant",
    description="Update name, RUT and settings. Requires an administrator.",
)
async def update_current_tenant(
    data: TenantUpdate,
    tenant_id: TenantId,
    service: TenantSvc,
    current_user: CurrentSuperuser,  # noqa: ARG001 - required for auth
) -> TenantResponse:
    tenant = await service.update_tenant(tenant_id, data)
    return TenantResponse.model_validate(tenant)
