"""OpenFactura document sync.

A run walks the requested range in chunks of ``OPENFACTURA_SYNC_CHUNK_DAYS``,
pages through the received documents of each chunk, fetches the JSON detail
of every document for its lines and upserts it on (tenant, folio, emitter).
Each document is written inside its own savepoint so a bad record only
counts as an error. One run per tenant holds a Redis lock.
"""

import asyncio
import datetime as dt
from collections.abc import Iterator
from typing import Annotated, Any, Literal
from uuid import UUID

import structlog
from fastapi import Depends
from redis.exceptions import RedisError
from sqlalchemy.exc import SQLAlchemyError

from app.clients.base import ClientNotConfiguredError
from app.clients.dependencies import OpenFactura
from app.clients.openfactura import OpenFacturaClient, OpenFacturaError
from app.config import settings
from app.core.cache.redis import LockNotAcquired, redis_lock
from app.core.constants import (
    RECENT_DOCUMENTS_DAYS,
    SYNC_INTERVAL_HOURS,
    SYNC_LOCK_TTL_SECONDS,
)
from app.core.errors import (
    AppException,
    BadRequestError,
    ConflictError,
    ServiceUnavailableError,
)
from app.core.utils.chile import rut_for_api
from app.modules.invoices.mapping import detail_lines, document_fields, emitter_rut
from app.modules.invoices.models import TaxDocument, TaxDocumentItem
from app.modules.invoices.repos import TaxDocumentRepo
from app.modules.notifications.models import NotificationTrigger
from app.modules.notifications.services import NotificationSvc
from app.modules.sync.schemas import SyncStats, SyncStatusResponse, TenantSyncResult
from app.modules.tenants.models import Tenant
from app.modules.tenants.services import TenantSvc


logger = structlog.get_logger()

LAST_SYNC_KEY = "last_openfactura_sync"

UpsertOutcome = Literal["new", "updated", "skipped"]


def date_chunks(
    start: dt.date, end: dt.date, days: int
) -> Iterator[tuple[dt.date, dt.date]]:
    """Split ``[start, end]`` into consecutive inclusive ranges of at most ``days`` days."""
    if days < 1:
        raise ValueError("days must be at least 1")
    current = start
    while current <= end:
        chunk_end = min(current + dt.timedelta(days=days - 1), end)
        yield current, chunk_end
        current = chunk_end + dt.timedelta(days=1)


def lock_key(tenant_id: UUID) -> str:
    return f"sync:openfactura:{tenant_id}"


class SyncService:
    def __init__(
        self,
        documents: TaxDocumentRepo,
        tenants: TenantSvc,
        notifications: NotificationSvc,
        openfactura: OpenFactura,
    ) -> None:
        self.documents = documents
        self.tenants = tenants
        self.notifications = notifications
        self.openfactura = openfactura
        self.request_delay = settings.openfactura_request_delay_ms / 1000

    async def _pause(self) -> None:
        if self.request_delay > 0:
            await asyncio.sleep(self.request_delay)

    # ============================================================
    # Running a sync
    # ============================================================

    async def sync_tenant(
        self,
        tenant_id: UUID,
        date_from: dt.date | None = None,
        date_to: dt.date | None = None,
    ) -> SyncStats:
        """Sync one tenant's received documents.

        Raises:
            BadRequestError: If the range is inverted or the tenant has no RUT
            ConflictError: If a sync of this tenant is already running
            ServiceUnavailableError: If OpenFactura or Redis is unavailable
        """
        date_to = date_to or dt.date.today()
        date_from = date_from or date_to - dt.timedelta(
            days=settings.openfactura_sync_lookback_days
        )
        if date_from > date_to:
            raise BadRequestError(
                "date_from must not be after date_to",
                error_code="invalid_date_range",
            )

        tenant = await self.tenants.get_tenant(tenant_id)
        if not tenant.rut:
            raise BadRequestError(
                "The tenant has no RUT configured",
                error_code="tenant_rut_missing",
            )

        try:
            async with redis_lock(lock_key(tenant_id), SYNC_LOCK_TTL_SECONDS):
                stats = await self._run(tenant, date_from, date_to)
        except LockNotAcquired as e:
            raise ConflictError(
                "A sync for this tenant is already running",
                error_code="sync_in_progress",
            ) from e
        except ClientNotConfiguredError as e:
            raise ServiceUnavailableError(
                "OpenFactura API key is not configured",
                error_code="openfactura_not_configured",
            ) from e
        except RedisError as e:
            raise ServiceUnavailableError(
                "Sync lock is unavailable",
                error_code="lock_unavailable",
            ) from e

        await self.tenants.save_setting(tenant_id, LAST_SYNC_KEY, stats.model_dump(mode="json"))
        await self.notifications.process_rules(
            tenant_id,
            NotificationTrigger.SYNC_COMPLETED,
            {
                **stats.model_dump(mode="json"),
                "tenant": {"id": str(tenant.id), "name": tenant.name},
            },
            context_type="sync",
        )
        return stats

    async def _run(self, tenant: Tenant, date_from: dt.date, date_to: dt.date) -> SyncStats:
        log = logger.bind(tenant_id=str(tenant.id))
        stats = SyncStats(
            date_from=date_from,
            date_to=date_to,
            start_time=dt.datetime.now(dt.UTC),
        )
        log.info("openfactura_sync_started", date_from=str(date_from), date_to=str(date_to))

        async with self.openfactura as client:
            for chunk_start, chunk_end in date_chunks(
                date_from, date_to, settings.openfactura_sync_chunk_days
            ):
                stats.chunks += 1
                await self._sync_chunk(client, tenant, chunk_start, chunk_end, stats)

        stats.end_time = dt.datetime.now(dt.UTC)
        stats.duration_ms = int((stats.end_time - stats.start_time).total_seconds() * 1000)
        log.info("openfactura_sync_completed", **stats.model_dump(mode="json"))
        return stats

    async def _sync_chunk(
        self,
        client: OpenFacturaClient,
        tenant: Tenant,
        chunk_start: dt.date,
        chunk_end: dt.date,
        stats: SyncStats,
    ) -> None:
        page = 1
        while True:
            try:
                data = await client.list_received(page, chunk_start, chunk_end)
            except OpenFacturaError as e:
                stats.errors += 1
                logger.warning(
                    "openfactura_page_failed",
                    tenant_id=str(tenant.id),
                    page=page,
                    chunk_start=str(chunk_start),
                    error=str(e),
                )
                return

            stats.pages += 1
            documents = data.get("data") or []
            for document in documents:
                stats.total_documents += 1
                await self._sync_document(client, tenant, document, stats)

            current_page = int(data.get("current_page") or page)
            last_page = int(data.get("last_page") or current_page)
            if not documents or current_page >= last_page:
                return
            page = current_page + 1
            await self._pause()

    async def _sync_document(
        self,
        client: OpenFacturaClient,
        tenant: Tenant,
        document: dict[str, Any],
        stats: SyncStats,
    ) -> None:
        items: list[dict[str, Any]] | None = None
        try:
            detail = await client.get_document(
                emitter_rut(document), document.get("TipoDTE"), document.get("Folio"), "json"
            )
            items = detail_lines(detail)
        except OpenFacturaError as e:
            logger.warning(
                "openfactura_detail_failed",
                folio=document.get("Folio"),
                emitter=emitter_rut(document),
                error=str(e),
            )
        await self._pause()

        try:
            async with self.documents.session.begin_nested():
                outcome = await self._upsert(tenant, document, items)
        except (SQLAlchemyError, ValueError, TypeError, KeyError) as e:
            stats.errors += 1
            logger.warning(
                "openfactura_document_failed",
                folio=document.get("Folio"),
                emitter=emitter_rut(document),
                error=str(e),
            )
            return

        match outcome:
            case "new":
                stats.new_documents += 1
            case "updated":
                stats.updated_documents += 1
            case "skipped":
                stats.skipped_documents += 1

    async def _upsert(
        self,
        tenant: Tenant,
        document: dict[str, Any],
        items: list[dict[str, Any]] | None,
    ) -> UpsertOutcome:
        """Insert or refresh one document. Soft-deleted documents are left alone.

        An existing document keeps its local status and notes; its lines are
        replaced only when the detail could be fetched.
        """
        fields = document_fields(document, rut_for_api(tenant.rut or ""), tenant.name)
        existing = await self.documents.get_by_natural_key(
            tenant.id, fields["folio"], fields["emitter_rut"]
        )

        if existing is None:
            await self.documents.create(
                TaxDocument(
                    tenant_id=tenant.id,
                    **fields,
                    items=[TaxDocumentItem(**item) for item in items or []],
                )
            )
            return "new"

        if existing.is_deleted:
            return "skipped"

        fields.pop("status")
        for field, value in fields.items():
            setattr(existing, field, value)
        if items is not None:
            existing.items = [TaxDocumentItem(**item) for item in items]
        await self.documents.update(existing)
        return "updated"

    async def sync_all(self) -> list[TenantSyncResult]:
        """Sync every active tenant with a RUT, committing after each one.

        A failing tenant is reported in the results, never raised.
        """
        session = self.documents.session
        results: list[TenantSyncResult] = []

        targets = [(t.id, t.name) for t in await self.tenants.repo.list_syncable()]

        for tenant_id, tenant_name in targets:
            try:
                stats = await self.sync_tenant(tenant_id)
                await session.commit()
            except (AppException, SQLAlchemyError, RedisError, OSError) as e:
                await session.rollback()
                message = e.message if isinstance(e, AppException) else str(e)
                logger.warning("tenant_sync_failed", tenant_id=str(tenant_id), error=message)
                results.append(
                    TenantSyncResult(
                        tenant_id=tenant_id, tenant_name=tenant_name, success=False, error=message
                    )
                )
                continue
            results.append(
                TenantSyncResult(
                    tenant_id=tenant_id, tenant_name=tenant_name, success=True, stats=stats
                )
            )

        logger.info(
            "auto_sync_finished",
            tenants=len(results),
            failed=sum(1 for r in results if not r.success),
        )
        return results

    # ============================================================
    # Status
    # ============================================================

    async def status(self, tenant_id: UUID) -> SyncStatusResponse:
        tenant = await self.tenants.get_tenant(tenant_id)
        raw = (tenant.settings or {}).get(LAST_SYNC_KEY)
        last_sync = SyncStats.model_validate(raw) if raw else None

        counts = await self.documents.count_by(tenant_id, "status")
        now = dt.datetime.now(dt.UTC)
        recent = await self.documents.count_created_since(
            tenant_id, now - dt.timedelta(days=RECENT_DOCUMENTS_DAYS)
        )

        next_due = None
        if last_sync and last_sync.end_time:
            next_due = last_sync.end_time + dt.timedelta(hours=SYNC_INTERVAL_HOURS)

        return SyncStatusResponse(
            last_sync=last_sync,
            documents_by_status={
                status.lower(): counts.get(status, 0)
                for status in ("APPROVED", "DRAFT", "REJECTED", "CANCELLED")
            },
            recent_documents=recent,
            next_sync_due=next_due,
            is_overdue=next_due is None or now > next_due,
        )


SyncSvc = Annotated[SyncService, Depends(SyncService)]
