"""PTO API routes."""

from uuid import UUID

from fastapi import Query, status

from app.api.dependencies import Pagination
from app.core.auth.dependencies import OptionalUserId, TenantId
from app.modules.pto import router
from app.modules.pto.models import PTOStatus
from app.modules.pto.schemas import PTOCreate, PTODeny, PTOListResponse, PTOResponse
from app.modules.pto.services import PTOSvc


@router.get("", response_model=PTOListResponse, summary="List PTO requests")
async def list_requests(
    tenant_id: TenantId,
    service: PTOSvc,
    pagination: Pagination,
    staff_id: UUID | None = None,
    request_status: PTOStatus | None = Query(None, alias="status"),
) -> PTOListResponse:
    requests, total = await service.list_requests(
        tenant_id,
        page=pagination.page,
        page_size=pagination.page_size,
        staff_id=staff_id,
        status=request_status,
    )
    return PTOListResponse(
        items=[PTOResponse.model_validate(r) for r in requests],
        total=total,
        page=pagination.page,
        page_size=pagination.page_size,
    )


@router.post(
    "",
    response_model=PTOResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Request PTO",
)
async def create_request(data: PTOCreate, tenant_id: TenantId, service: PTOSvc) -> PTOResponse:
    request = await service.create_request(tenant_id, data)
    return PTOResponse.model_validate(request)


@router.get("/{request_id}", response_model=PTOResponse, summary="Get PTO request")
async def get_request(request_id: UUID, tenant_id: TenantId, service: PTOSvc) -> PTOResponse:
    request = await service.get_request(request_id, tenant_id)
    return PTOResponse.model_validate(request)


@router.post("/{request_id}/approve", response_model=PTOResponse, summary="Approve PTO")
async def approve_request(
    request_id: UUID, tenant_id: TenantId, user_id: OptionalUserId, service: PTOSvc
) -> PTOResponse:
    request = await service.approve_request(request_id, tenant_id, reviewer_id=user_id)
    return PTOResponse.model_validate(request)


@router.post("/{request_id}/deny", response_model=PTOResponse, summary="Deny PTO")
async def deny_request(
    request_id: UUID,
    tenant_id: TenantId,
    user_id: OptionalUserId,
    service: PTOSvc,
    data: PTODeny | None = None,
) -> PTOResponse:
    request = await service.deny_request(
        request_id,
        tenant_id,
        denial_reason=data.denial_reason if data else None,
        reviewer_id=user_id,
    )
    return PTOResponse.model_validate(request)


@router.post("/{request_id}/cancel", response_model=PTOResponse, summary="Cancel PTO")
async def cancel_request(request_id: UUID, tenant_id: TenantId, service: PTOSvc) -> PTOResponse:
    request = await service.cancel_request(request_id, tenant_id)
    return PTOResponse.model_validate(request)
