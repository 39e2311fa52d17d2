"""Tax document repository for database operations."""

import datetime as dt
from decimal import Decimal
from typing import Annotated
from uuid import UUID

from fastapi import Depends
from sqlalchemy import Select, func, or_, select

from app.api.dependencies import DBSession
from app.core.database import paginate
from app.modules.invoices.models import TaxDocument, TaxDocumentStatus


SORT_COLUMNS = {
    "folio": TaxDocument.folio,
    "total_amount": TaxDocument.total_amount,
    "issued_at": TaxDocument.issued_at,
    "created_at": TaxDocument.created_at,
}


class TaxDocumentRepository:
    def __init__(self, session: DBSession) -> None:
        self.session = session

    def _live(self, tenant_id: UUID) -> Select[tuple[TaxDocument]]:
        return select(TaxDocument).where(
            TaxDocument.tenant_id == tenant_id,
            TaxDocument.is_deleted.is_(False),
        )

    async def list_documents(
        self,
        tenant_id: UUID,
        page: int = 1,
        page_size: int = 20,
        search: str | None = None,
        status: str | None = None,
        document_type: str | None = None,
        date_from: dt.date | None = None,
        date_to: dt.date | None = None,
        sort_by: str = "issued_at",
        sort_order: str = "desc",
    ) -> tuple[list[TaxDocument], int]:
        stmt = self._live(tenant_id)
        if search:
            pattern = f"%{search}%"
            stmt = stmt.where(
                or_(
                    TaxDocument.folio.ilike(pattern),
                    TaxDocument.emitter_name.ilike(pattern),
                    TaxDocument.receiver_name.ilike(pattern),
                    TaxDocument.receiver_rut.ilike(pattern),
                )
            )
        if status:
            stmt = stmt.where(TaxDocument.status == status)
        if document_type:
            stmt = stmt.where(TaxDocument.document_type == document_type)
        if date_from:
            stmt = stmt.where(TaxDocument.issued_at >= date_from)
        if date_to:
            stmt = stmt.where(TaxDocument.issued_at <= date_to)

        column = SORT_COLUMNS.get(sort_by, TaxDocument.issued_at)
        ordering = column.asc() if sort_order == "asc" else column.desc()
        stmt = stmt.order_by(ordering, TaxDocument.id)
        return await paginate(self.session, stmt, page, page_size)

    async def get(self, document_id: UUID, tenant_id: UUID) -> TaxDocument | None:
        stmt = self._live(tenant_id).where(TaxDocument.id == document_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_natural_key(
        self, tenant_id: UUID, folio: str, emitter_rut: str
    ) -> TaxDocument | None:
        """Look up by (folio, emitter) including soft-deleted rows."""
        stmt = select(TaxDocument).where(
            TaxDocument.tenant_id == tenant_id,
            TaxDocument.folio == folio,
            TaxDocument.emitter_rut == emitter_rut,
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def create(self, document: TaxDocument) -> TaxDocument:
        self.session.add(document)
        await self.session.flush()
        await self.session.refresh(document)
        return document

    async def update(self, document: TaxDocument) -> TaxDocument:
        await self.session.flush()
        await self.session.refresh(document)
        return document

    async def count_by(self, tenant_id: UUID, column_name: str) -> dict[str, int]:
        column = getattr(TaxDocument, column_name)
        stmt = (
            select(column, func.count())
            .where(TaxDocument.tenant_id == tenant_id, TaxDocument.is_deleted.is_(False))
            .group_by(column)
        )
        result = await self.session.execute(stmt)
        return {key: count for key, count in result.all()}

    async def approved_total(self, tenant_id: UUID) -> Decimal:
        stmt = select(func.coalesce(func.sum(TaxDocument.total_amount), 0)).where(
            TaxDocument.tenant_id == tenant_id,
            TaxDocument.is_deleted.is_(False),
            TaxDocument.status == TaxDocumentStatus.APPROVED,
        )
        result = await self.session.execute(stmt)
        return Decimal(result.scalar_one())

    async def count_created_since(self, tenant_id: UUID, since: dt.datetime) -> int:
        stmt = select(func.count()).where(
            TaxDocument.tenant_id == tenant_id,
            TaxDocument.is_deleted.is_(False),
            TaxDocument.created_at >= since,
        )
        result = await self.session.execute(stmt)
        return result.scalar_one()


TaxDocumentRepo = Annotated[TaxDocumentRepository, Depends(TaxDocumentRepository)]
