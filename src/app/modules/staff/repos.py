"""Staff repository for database operations."""

import datetime as dt
from decimal import Decimal
from typing import Annotated
from uuid import UUID

from fastapi import Depends
from sqlalchemy import func, select

from app.api.dependencies import DBSession
from app.core.database import paginate
from app.modules.staff.models import Attendance, Shift, Staff


class StaffRepository:
    """Data access for staff and their shifts and attendance."""

    def __init__(self, session: DBSession) -> None:
        self.session = session

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
        stmt = select(Staff).where(Staff.tenant_id == tenant_id)
        if not include_inactive:
            stmt = stmt.where(Staff.is_active.is_(True))
        if department:
            stmt = stmt.where(Staff.department == department)
        stmt = stmt.order_by(Staff.last_name, Staff.first_name)
        return await paginate(self.session, stmt, page, page_size)

    async def get(self, staff_id: UUID, tenant_id: UUID) -> Staff | None:
        stmt = select(Staff).where(Staff.id == staff_id, Staff.tenant_id == tenant_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_for_update(self, staff_id: UUID, tenant_id: UUID) -> Staff | None:
        """Load a staff row locked until the transaction ends."""
        stmt = (
            select(Staff)
            .where(Staff.id == staff_id, Staff.tenant_id == tenant_id)
            .with_for_update()
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_rut(self, rut: str, tenant_id: UUID) -> Staff | None:
        stmt = select(Staff).where(Staff.rut == rut, Staff.tenant_id == tenant_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def create(self, staff: Staff) -> Staff:
        self.session.add(staff)
        await self.session.flush()
        await self.session.refresh(staff)
        return staff

    async def update(self, staff: Staff) -> Staff:
        await self.session.flush()
        await self.session.refresh(staff)
        return staff

    # ============================================================
    # Shifts
    # ============================================================

    async def list_shifts(
        self, staff_id: UUID, tenant_id: UUID, active_only: bool = False
    ) -> list[Shift]:
        stmt = select(Shift).where(Shift.staff_id == staff_id, Shift.tenant_id == tenant_id)
        if active_only:
            stmt = stmt.where(Shift.is_active.is_(True))
        stmt = stmt.order_by(Shift.day_of_week, Shift.specific_date, Shift.start_time)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def get_shift(
        self, shift_id: UUID, staff_id: UUID, tenant_id: UUID
    ) -> Shift | None:
        stmt = select(Shift).where(
            Shift.id == shift_id,
            Shift.staff_id == staff_id,
            Shift.tenant_id == tenant_id,
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def create_shift(self, shift: Shift) -> Shift:
        self.session.add(shift)
        await self.session.flush()
        await self.session.refresh(shift)
        return shift

    async def delete_shift(self, shift: Shift) -> None:
        await self.session.delete(shift)
        await self.session.flush()

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
        stmt = select(Attendance).where(
            Attendance.staff_id == staff_id,
            Attendance.tenant_id == tenant_id,
        )
        if date_from:
            stmt = stmt.where(Attendance.date >= date_from)
        if date_to:
            stmt = stmt.where(Attendance.date <= date_to)
        result = await self.session.execute(stmt.order_by(Attendance.date.desc()))
        return list(result.scalars().all())

    async def get_open_attendance(self, staff_id: UUID, tenant_id: UUID) -> Attendance | None:
        """Latest attendance with a check-in and no check-out."""
        stmt = (
            select(Attendance)
            .where(
                Attendance.staff_id == staff_id,
                Attendance.tenant_id == tenant_id,
                Attendance.check_in.is_not(None),
                Attendance.check_out.is_(None),
            )
            .order_by(Attendance.check_in.desc())
            .limit(1)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def add_attendance(self, *records: Attendance) -> list[Attendance]:
        self.session.add_all(records)
        await self.session.flush()
        return list(records)

    async def update_attendance(self, record: Attendance) -> Attendance:
        await self.session.flush()
        await self.session.refresh(record)
        return record

    async def sum_hours(
        self,
        staff_id: UUID,
        tenant_id: UUID,
        date_from: dt.date,
        date_to: dt.date,
    ) -> Decimal:
        """Hours of checked-out attendance between two dates, inclusive."""
        stmt = select(func.coalesce(func.sum(Attendance.total_hours), 0)).where(
            Attendance.staff_id == staff_id,
            Attendance.tenant_id == tenant_id,
            Attendance.date >= date_from,
            Attendance.date <= date_to,
            Attendance.check_out.is_not(None),
        )
        result = await self.session.execute(stmt)
        return Decimal(result.scalar_one())


StaffRepo = Annotated[StaffRepository, Depends(StaffRepository)]
