"""Staff service for business logic."""

import datetime as dt
from decimal import ROUND_HALF_UP, Decimal
from typing import Annotated
from uuid import UUID

import structlog
from fastapi import Depends

from app.core.errors import BadRequestError, ConflictError, NotFoundError, ValidationError
from app.core.utils.chile import format_rut, validate_rut
from app.modules.staff.models import Attendance, Shift, Staff
from app.modules.staff.repos import StaffRepo
from app.modules.staff.schemas import (
    CheckInRequest,
    CheckOutRequest,
    ShiftCreate,
    StaffCreate,
    StaffUpdate,
)


logger = structlog.get_logger()

TWO_PLACES = Decimal("0.01")


def hours_between(start: dt.datetime, end: dt.datetime) -> Decimal:
    """Elapsed hours, rounded to two decimals."""
    seconds = Decimal(str((end - start).total_seconds()))
    return (seconds / Decimal(3600)).quantize(TWO_PLACES, rounding=ROUND_HALF_UP)


def normalize_rut(rut: str) -> str:
    """Validate a RUT and return it formatted.

    Raises:
        ValidationError: If the check digit does not match
    """
    if not validate_rut(rut):
        raise ValidationError(
            "Invalid RUT",
            errors=[{"field": "rut", "message": "RUT check digit does not match"}],
        )
    return format_rut(rut)


class StaffService:
    def __init__(self, repo: StaffRepo) -> None:
        self.repo = repo

    # ============================================================
    # Staff
    # ============================================================

    async def list_staff(
        self,
        tenant_id: UUID,
        page: int = 1,
        page_size: int = 20,
        include_inactive: bool = False,
        department: str | None = None,
    ) -> tuple[list[Staff], int]:
        return await self.repo.list_staff(
            tenant_id, page, page_size, include_inactive, department
        )

    async def get_staff(self, staff_id: UUID, tenant_id: UUID) -> Staff:
        staff = await self.repo.get(staff_id, tenant_id)
        if not staff:
            raise NotFoundError(
                "Staff member not found",
                resource="staff",
                resource_id=str(staff_id),
            )
        return staff

    async def _ensure_rut_free(
        self, rut: str, tenant_id: UUID, exclude_id: UUID | None = None
    ) -> None:
        existing = await self.repo.get_by_rut(rut, tenant_id)
        if existing and existing.id != exclude_id:
            raise ConflictError(
                "A staff member with this RUT already exists",
                error_code="rut_exists",
                details={"rut": rut},
            )

    async def create_staff(self, tenant_id: UUID, data: StaffCreate) -> Staff:
        """Create a staff member. The RUT is stored formatted.

        Raises:
            ValidationError: If the RUT is invalid
            ConflictError: If the RUT is already used in this tenant
        """
        values = data.model_dump()
        if data.rut:
            values["rut"] = normalize_rut(data.rut)
            await self._ensure_rut_free(values["rut"], tenant_id)

        staff = await self.repo.create(Staff(tenant_id=tenant_id, **values))
        logger.info("staff_created", staff_id=str(staff.id))
        return staff

    async def update_staff(
        self, staff_id: UUID, tenant_id: UUID, data: StaffUpdate
    ) -> Staff:
        staff = await self.get_staff(staff_id, tenant_id)
        changes = data.model_dump(exclude_unset=True)

        if changes.get("rut"):
            changes["rut"] = normalize_rut(changes["rut"])
            if changes["rut"] != staff.rut:
                await self._ensure_rut_free(changes["rut"], tenant_id, exclude_id=staff.id)

        for field, value in changes.items():
            setattr(staff, field, value)
        return await self.repo.update(staff)

    async def deactivate_staff(self, staff_id: UUID, tenant_id: UUID) -> Staff:
        staff = await self.get_staff(staff_id, tenant_id)
        staff.is_active = False
        logger.info("staff_deactivated", staff_id=str(staff_id))
        return await self.repo.update(staff)

    # ============================================================
    # Shifts
    # ============================================================

    async def list_shifts(self, staff_id: UUID, tenant_id: UUID) -> list[Shift]:
        await self.get_staff(staff_id, tenant_id)
        return await self.repo.list_shifts(staff_id, tenant_id)

    async def create_shift(
        self, staff_id: UUID, tenant_id: UUID, data: ShiftCreate
    ) -> Shift:
        await self.get_staff(staff_id, tenant_id)
        values = data.model_dump()
        # A one-off shift has no weekday and vice versa
        if data.is_recurring:
            values["specific_date"] = None
        else:
            values["day_of_week"] = None
        return await self.repo.create_shift(
            Shift(tenant_id=tenant_id, staff_id=staff_id, **values)
        )

    async def delete_shift(self, staff_id: UUID, shift_id: UUID, tenant_id: UUID) -> None:
        shift = await self.repo.get_shift(shift_id, staff_id, tenant_id)
        if not shift:
            raise NotFoundError("Shift not found", resource="shift", resource_id=str(shift_id))
        await self.repo.delete_shift(shift)

    # ============================================================
    # Attendance
    # ============================================================

    async def list_attendance(
        self,
        staff_id: UUID,
        tenant_id: UUID,
        date_from: dt.date | None = None,
        date_to: dt.date | None = None,
    ) -> list[Attendance]:
        await self.get_staff(staff_id, tenant_id)
        return await self.repo.list_attendance(staff_id, tenant_id, date_from, date_to)

    async def check_in(
        self, staff_id: UUID, tenant_id: UUID, data: CheckInRequest
    ) -> Attendance:
        """Open an attendance record for today.

        Raises:
            BadRequestError: If the staff member is already checked in
        """
        await self.get_staff(staff_id, tenant_id)
        if await self.repo.get_open_attendance(staff_id, tenant_id):
            raise BadRequestError(
                "Staff member is already checked in",
                error_code="already_checked_in",
            )
        if data.shift_id and not await self.repo.get_shift(data.shift_id, staff_id, tenant_id):
            raise NotFoundError(
                "Shift not found", resource="shift", resource_id=str(data.shift_id)
            )

        now = dt.datetime.now(dt.UTC)
        record = Attendance(
            tenant_id=tenant_id,
            staff_id=staff_id,
            shift_id=data.shift_id,
            date=now.date(),
            check_in=now,
            status=data.status,
            notes=data.notes,
        )
        (record,) = await self.repo.add_attendance(record)
        return record

    async def check_out(
        self, staff_id: UUID, tenant_id: UUID, data: CheckOutRequest
    ) -> Attendance:
        """Close the open attendance record and compute its hours.

        Raises:
            BadRequestError: If there is no open check-in
        """
        await self.get_staff(staff_id, tenant_id)
        record = await self.repo.get_open_attendance(staff_id, tenant_id)
        if not record or not record.check_in:
            raise BadRequestError(
                "No open check-in for this staff member",
                error_code="not_checked_in",
            )

        record.check_out = dt.datetime.now(dt.UTC)
        record.total_hours = hours_between(record.check_in, record.check_out)
        if data.notes:
            record.notes = data.notes
        return await self.repo.update_attendance(record)


StaffSvc = Annotated[StaffService, Depends(StaffService)]
