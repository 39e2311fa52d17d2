"""Payroll repository for database operations."""

from typing import Annotated
from uuid import UUID

from fastapi import Depends
from sqlalchemy import select

from app.api.dependencies import DBSession
from app.core.database import paginate
from app.modules.payroll.models import PayrollRun


class PayrollRepository:
    def __init__(self, session: DBSession) -> None:
        self.session = session

    async def list_runs(
        self,
        tenant_id: UUID,
        page: int = 1,
        page_size: int = 20,
        staff_id: UUID | None = None,
        status: str | None = None,
    ) -> tuple[list[PayrollRun], int]:
        stmt = select(PayrollRun).where(PayrollRun.tenant_id == tenant_id)
        if staff_id:
            stmt = stmt.where(PayrollRun.staff_id == staff_id)
        if status:
            stmt = stmt.where(PayrollRun.status == status)
        stmt = stmt.order_by(PayrollRun.period_end.desc(), PayrollRun.created_at.desc())
        return await paginate(self.session, stmt, page, page_size)

    async def get(self, run_id: UUID, tenant_id: UUID) -> PayrollRun | None:
        stmt = select(PayrollRun).where(
            PayrollRun.id == run_id,
            PayrollRun.tenant_id == tenant_id,
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def create(self, run: PayrollRun) -> PayrollRun:
        self.session.add(run)
        await self.session.flush()
        await self.session.refresh(run)
        return run

    async def update(self, run: PayrollRun) -> PayrollRun:
        await self.session.flush()
        await self.session.refresh(run)
        return run

    async def delete(self, run: PayrollRun) -> None:
        await self.session.delete(run)
        await self.session.flush()


PayrollRepo = Annotated[PayrollRepository, Depends(PayrollRepository)]
