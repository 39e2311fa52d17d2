"""Payroll API routes."""

from uuid import UUID

from fastapi import Query, status

from app.api.dependencies import Pagination
from app.core.auth.dependencies import TenantId
from app.modules.payroll import router
from app.modules.payroll.models import PayrollStatus
from app.modules.payroll.schemas import (
    PayrollCalculation,
    PayrollPeriod,
    PayrollRunCreate,
    PayrollRunListResponse,
    PayrollRunResponse,
    PayrollRunUpdate,
)
from app.modules.payroll.services import PayrollSvc


@router.post("/calculate", response_model=PayrollCalculation, summary="Calculate pay")
async def calculate_payroll(
    data: PayrollPeriod, tenant_id: TenantId, service: PayrollSvc
) -> PayrollCalculation:
    return await service.calculate(tenant_id, data)


@router.get("/runs", response_model=PayrollRunListResponse, summary="List payroll runs")
async def list_runs(
    tenant_id: TenantId,
    service: PayrollSvc,
    pagination: Pagination,
    staff_id: UUID | None = None,
    run_status: PayrollStatus | None = Query(None, alias="status"),
) -> PayrollRunListResponse:
    runs, total = await service.list_runs(
        tenant_id,
        page=pagination.page,
        page_size=pagination.page_size,
        staff_id=staff_id,
        status=run_status,
    )
    return PayrollRunListResponse(
        items=[PayrollRunResponse.model_validate(r) for r in runs],
        total=total,
        page=pagination.page,
        page_size=pagination.page_size,
    )


@router.post(
    "/runs",
    response_model=PayrollRunResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create payroll run",
)
async def create_run(
    data: PayrollRunCreate, tenant_id: TenantId, service: PayrollSvc
) -> PayrollRunResponse:
    run = await service.create_run(tenant_id, data)
    return PayrollRunResponse.model_validate(run)


@router.get("/runs/{run_id}", response_model=PayrollRunResponse)
async def get_run(run_id: UUID, tenant_id: TenantId, service: PayrollSvc) -> PayrollRunResponse:
    run = await service.get_run(run_id, tenant_id)
    return PayrollRunResponse.model_validate(run)


@router.patch("/runs/{run_id}", response_model=PayrollRunResponse)
async def update_run(
    run_id: UUID, data: PayrollRunUpdate, tenant_id: TenantId, service: PayrollSvc
) -> PayrollRunResponse:
    run = await service.update_run(run_id, tenant_id, data)
    return PayrollRunResponse.model_validate(run)


@router.delete(
    "/runs/{run_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    description="Paid runs cannot be deleted.",
)
async def delete_run(run_id: UUID, tenant_id: TenantId, service: PayrollSvc) -> None:
    await service.delete_run(run_id, tenant_id)
