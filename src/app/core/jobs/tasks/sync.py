"""OpenFactura sync jobs."""

import datetime as dt
from typing import Any
from uuid import UUID

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from app.clients.openfactura import OpenFacturaClient
from app.modules.invoices.repos import TaxDocumentRepository
from app.modules.notifications.repos import NotificationRepository
from app.modules.notifications.services import NotificationService
from app.modules.sync.services import SyncService
from app.modules.tenants.repos import TenantRepository
from app.modules.tenants.services import TenantService
from app.modules.users.repos import UserRepository


log = structlog.get_logger()


def build_sync_service(session: AsyncSession) -> SyncService:
    return SyncService(
        TaxDocumentRepository(session),
        TenantService(TenantRepository(session)),
        NotificationService(NotificationRepository(session), UserRepository(session)),
        OpenFacturaClient(),
    )


async def sync_tenant_documents(
    ctx: dict[str, Any],
    tenant_id: str,
    date_from: str | None = None,
    date_to: str | None = None,
) -> dict[str, Any]:
    """Sync one tenant. Dates are ISO strings; missing ones use the default range."""
    async with ctx["db_session_factory"]() as session:
        stats = await build_sync_service(session).sync_tenant(
            UUID(tenant_id),
            dt.date.fromisoformat(date_from) if date_from else None,
            dt.date.fromisoformat(date_to) if date_to else None,
        )
        await session.commit()
    return stats.model_dump(mode="json")


async def sync_all_tenants(ctx: dict[str, Any]) -> dict[str, int]:
    """Sync every active tenant that has a RUT."""
    async with ctx["db_session_factory"]() as session:
        results = await build_sync_service(session).sync_all()

    failed = sum(1 for r in results if not r.success)
    log.info("sync_all_tenants_complete", tenants=len(results), failed=failed)
    return {"tenants": len(results), "failed": failed}
