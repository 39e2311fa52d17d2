"""Staff API routes."""

import datetime as dt
from uuid import UUID

from fastapi import Query, status

from app.api.dependencies import Pagination
from app.core.auth.dependencies import TenantId
from app.modules.staff import router
from app.modules.staff.schemas import (
    AttendanceResponse,
    CheckInRequest,
    CheckOutRequest,
    ShiftCreate,
    ShiftResponse,
    StaffCreate,
    StaffListResponse,
    StaffResponse,
    StaffUpdate,
)
from app.modules.staff.services import StaffSvc


# ============================================================
# Staff
# ============================================================


@router.get("", response_model=StaffListResponse, summary="List staff")
async def list_staff(
    tenant_id: TenantId,
    service: StaffSvc,
    pagination: Pagination,
    include_inactive: bool = False,
    department: str | None = None,
) -> StaffListResponse:
    staff, total = await service.list_staff(
        tenant_id,
        pagination.page,
        pagination.page_size,
        include_inactive=include_inactive,
        department=department,
    )
    return StaffListResponse(
        items=[StaffResponse.model_validate(s) for s in staff],
        total=total,
        page=pagination.page,
        page_size=pagination.page_size,
    )


@router.post(
    "",
    response_model=StaffResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create staff member",
)
async def create_staff(
    data: StaffCreate, tenant_id: TenantId, service: StaffSvc
) -> StaffResponse:
    staff = await service.create_staff(tenant_id, data)
    return StaffResponse.model_validate(staff)


@router.get("/{staff_id}", response_model=StaffResponse, summary="Get staff member")
async def get_staff(staff_id: UUID, tenant_id: TenantId, service: StaffSvc) -> StaffResponse:
    staff = await service.get_staff(staff_id, tenant_id)
    return StaffResponse.model_validate(staff)


@router.patch("/{staff_id}", response_model=StaffResponse, summary="Update staff member")
async def update_staff(
    staff_id: UUID, data: StaffUpdate, tenant_id: TenantId, service: StaffSvc
) -> StaffResponse:
    staff = await service.update_staff(staff_id, tenant_id, data)
    return StaffResponse.model_validate(staff)


@router.delete(
    "/{staff_id}",
    response_model=StaffResponse,
    summary="Deactivate staff member",
)
async def deactivate_staff(
    staff_id: UUID, tenant_id: TenantId, service: StaffSvc
) -> StaffResponse:
    staff = await service.deactivate_staff(staff_id, tenant_id)
    return StaffResponse.model_validate(staff)


# ============================================================
# Shifts
# ============================================================


@router.get(
    "/{staff_id}/shifts", response_model=list[ShiftResponse], summary="List shifts"
)
async def list_shifts(
    staff_id: UUID, tenant_id: TenantId, service: StaffSvc
) -> list[ShiftResponse]:
    shifts = await service.list_shifts(staff_id, tenant_id)
    return [ShiftResponse.model_validate(s) for s in shifts]


@router.post(
    "/{staff_id}/shifts",
    response_model=ShiftResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create shift",
)
async def create_shift(
    staff_id: UUID, data: ShiftCreate, tenant_id: TenantId, service: StaffSvc
) -> ShiftResponse:
    shift = await service.create_shift(staff_id, tenant_id, data)
    return ShiftResponse.model_validate(shift)


@router.delete(
    "/{staff_id}/shifts/{shift_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete shift",
)
async def delete_shift(
    staff_id: UUID, shift_id: UUID, tenant_id: TenantId, service: StaffSvc
) -> None:
    await service.delete_shift(staff_id, shift_id, tenant_id)


# ============================================================
# Attendance
# ============================================================


@router.get(
    "/{staff_id}/attendance",
    response_model=list[AttendanceResponse],
    summary="List attendance",
)
async def list_attendance(
    staff_id: UUID,
    tenant_id: TenantId,
    service: StaffSvc,
    date_from: dt.date | None = Query(None, alias="from"),
    date_to: dt.date | None = Query(None, alias="to"),
) -> list[AttendanceResponse]:
    records = await service.list_attendance(staff_id, tenant_id, date_from, date_to)
    return [AttendanceResponse.model_validate(r) for r in records]


@router.post(
    "/{staff_id}/attendance/check-in",
    response_model=AttendanceResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Check in",
)
async def check_in(
    staff_id: UUID,
    tenant_id: TenantId,
    service: StaffSvc,
    data: CheckInRequest | None = None,
) -> AttendanceResponse:
    record = await service.check_in(staff_id, tenant_id, data or CheckInRequest())
    return AttendanceResponse.model_validate(record)


@router.post(
    "/{staff_id}/attendance/check-out",
    response_model=AttendanceResponse,
    summary="Check out",
    description="Closes the open check-in and records the hours worked.",
)
async def check_out(
    staff_id: UUID,
    tenant_id: TenantId,
    service: StaffSvc,
    data: CheckOutRequest | None = None,
) -> AttendanceResponse:
    record = await service.check_out(staff_id, tenant_id, data or CheckOutRequest())
    return AttendanceResponse.model_validate(record)
