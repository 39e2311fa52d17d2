"""PTO approvals racing on committed rows."""

import asyncio
import datetime as dt
from unittest.mock import AsyncMock

import pytest
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from app.core.errors import BadRequestError
from app.modules.pto.models import PTORequest, PTOStatus
from app.modules.pto.repos import PTORepository
from app.modules.pto.services import PTOService
from app.modules.staff.models import Staff
from app.modules.staff.repos import StaffRepository
from app.modules.tenants.models import Tenant


pytestmark = pytest.mark.integration


async def approve(factory: async_sessionmaker[AsyncSession], request_id, tenant_id) -> PTORequest:
    async with factory() as session, session.begin():
        service = PTOService(PTORepository(session), StaffRepository(session), AsyncMock())
        return await service.approve_request(request_id, tenant_id)


async def test_concurrent_approvals_book_days_once(engine: AsyncEngine):
    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with factory() as session, session.begin():
        tenant = Tenant(name="Muralla Café", slug="muralla")
        session.add(tenant)
        await session.flush()
        staff = Staff(
            tenant_id=tenant.id,
            first_name="Camila",
            last_name="Rojas",
            vacation_days_total=15,
            vacation_days_used=0,
        )
        session.add(staff)
        await session.flush()
        request = PTORequest(
            tenant_id=tenant.id,
            staff_id=staff.id,
            start_date=dt.date(2026, 3, 2),
            end_date=dt.date(2026, 3, 6),
            days_requested=5,
            status=PTOStatus.PENDING,
        )
        session.add(request)

    results = await asyncio.gather(
        approve(factory, request.id, tenant.id),
        approve(factory, request.id, tenant.id),
        return_exceptions=True,
    )

    approved = [r for r in results if isinstance(r, PTORequest)]
    rejected = [r for r in results if isinstance(r, BadRequestError)]
    assert len(approved) == 1
    assert len(rejected) == 1
    assert rejected[0].error_code == "invalid_status"

    async with factory() as session:
        reloaded = await session.get(Staff, staff.id)
        assert reloaded.vacation_days_used == 5
