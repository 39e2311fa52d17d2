"""PTO repository for database operations."""

from typing import Annotated
from uuid import UUID

from fastapi import Depends
from sqlalchemy import select

from app.api.dependencies import DBSession
from app.core.database import paginate
from app.modules.pto.models import PTORequest


class PTORepository:
    def __init__(self, session: DBSession) -> None:
        self.session = session

    async def list_requests(
        self,
        tenant_id: UUID,
        page: int = 1,
        page_size: int = 20,
        staff_id: UUID | None = None,
        status: str | None = None,
    ) -> tuple[list[PTORequest], int]:
        stmt = select(PTORequest).where(PTORequest.tenant_id == tenant_id)
        if staff_id:
            stmt = stmt.where(PTORequest.staff_id == staff_id)
        if status:
            stmt = stmt.where(PTORequest.status == status)
        stmt = stmt.order_by(PTORequest.requested_date.desc())
        return await paginate(self.session, stmt, page, page_size)

    async def get(self, request_id: UUID, tenant_id: UUID) -> PTORequest | None:
        stmt = select(PTORequest).where(
            PTORequest.id == request_id,
            PTORequest.tenant_id == tenant_id,
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_for_update(self, request_id: UUID, tenant_id: UUID) -> PTORequest | None:
        """Load a request locked until the transaction ends, refreshing any cached copy."""
        stmt = (
            select(PTORequest)
            .where(
                PTORequest.id == request_id,
                PTORequest.tenant_id == tenant_id,
            )
            .with_for_update()
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def create(self, request: PTORequest) -> PTORequest:
        self.session.add(request)
        await self.session.flush()
        await self.session.refresh(request)
        return request

    async def update(self, request: PTORequest) -> PTORequest:
        await self.session.flush()
        await self.session.refresh(request)
        return request


PTORepo = Annotated[PTORepository, Depends(PTORepository)]
