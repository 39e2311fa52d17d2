"""Pydantic schemas for document sync."""

import datetime as dt
from uuid import UUID

from pydantic import BaseModel, Field


class SyncRequest(BaseModel):
    date_from: dt.date | None = None
    date_to: dt.date | None = None


class SyncStats(BaseModel):
    """Counters of one sync run; stored on the tenant as ``last_openfactura_sync``."""

    date_from: dt.date | None = None
    date_to: dt.date | None = None
    total_documents: int = 0
    new_documents: int = 0
    updated_documents: int = 0
    skipped_documents: int = 0
    errors: int = 0
    pages: int = 0
    chunks: int = 0
    start_time: dt.datetime | None = None
    end_time: dt.datetime | None = None
    duration_ms: int = 0


class SyncStatusResponse(BaseModel):
    last_sync: SyncStats | None
    documents_by_status: dict[str, int]
    recent_documents: int = Field(..., description="Documents created in the last 7 days")
    next_sync_due: dt.datetime | None
    is_overdue: bool


class TenantSyncResult(BaseModel):
    tenant_id: UUID
    tenant_name: str
    success: bool
    stats: SyncStats | None = None
    error: str | None = None


class AutoSyncResponse(BaseModel):
    tenants: int
    succeeded: int
    failed: int
    results: list[TenantSyncResult]
