"""Sync API routes."""

import secrets
from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials

from app.config import settings
from app.core.auth.dependencies import TenantId, bearer_scheme
from app.core.errors import UnauthorizedError
from app.modules.sync import router
from app.modules.sync.schemas import (
    AutoSyncResponse,
    SyncRequest,
    SyncStats,
    SyncStatusResponse,
)
from app.modules.sync.services import SyncSvc


async def verify_cron_secret(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
) -> None:
    """Accept only ``Authorization: Bearer <CRON_SECRET>``.

    Raises:
        UnauthorizedError: If no secret is configured or it does not match
    """
    expected = settings.cron_secret
    if (
        not expected
        or not credentials
        or not secrets.compare_digest(credentials.credentials, expected)
    ):
        raise UnauthorizedError("Invalid cron secret", error_code="invalid_cron_secret")


@router.post(
    "/openfactura",
    response_model=SyncStats,
    summary="Sync received documents from OpenFactura",
    description=(
        "Pulls received documents for the range (default: the configured "
        "lookback up to today) and upserts them."
    ),
)
async def sync_openfactura(
    tenant_id: TenantId,
    service: SyncSvc,
    data: SyncRequest | None = None,
) -> SyncStats:
    data = data or SyncRequest()
    return await service.sync_tenant(tenant_id, data.date_from, data.date_to)


@router.get("/status", response_model=SyncStatusResponse, summary="Sync status")
async def sync_status(tenant_id: TenantId, service: SyncSvc) -> SyncStatusResponse:
    return await service.status(tenant_id)


@router.post(
    "/auto",
    response_model=AutoSyncResponse,
    dependencies=[Depends(verify_cron_secret)],
    summary="Sync every tenant",
    description="Scheduler entry point; requires the cron secret as bearer token.",
)
async def sync_all_tenants(service: SyncSvc) -> AutoSyncResponse:
    results = await service.sync_all()
    succeeded = sum(1 for r in results if r.success)
    return AutoSyncResponse(
        tenants=len(results),
        succeeded=succeeded,
        failed=len(results) - succeeded,
        results=results,
    )
