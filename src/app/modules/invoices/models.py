"""Tax document database models."""

import datetime as dt
from decimal import Decimal
from enum import StrEnum
from typing import Any
from uuid import UUID

from sqlalchemy import (
    Date,
    DateTime,
    ForeignKey,
    Integer,
    Numeric,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.core.constants import MAX_RUT_LENGTH
from app.core.database.base import (
    Base,
    SoftDeleteMixin,
    TenantMixin,
    TimestampMixin,
    UUIDMixin,
)


class TaxDocumentType(StrEnum):
    FACTURA = "FACTURA"
    FACTURA_EXENTA = "FACTURA_EXENTA"
    BOLETA = "BOLETA"
    BOLETA_EXENTA = "BOLETA_EXENTA"
    NOTA_CREDITO = "NOTA_CREDITO"
    NOTA_DEBITO = "NOTA_DEBITO"
    GUIA_DESPACHO = "GUIA_DESPACHO"


class TaxDocumentStatus(StrEnum):
    DRAFT = "DRAFT"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"
    CANCELLED = "CANCELLED"


class DocumentSource(StrEnum):
    MANUAL = "MANUAL"
    OPENFACTURA = "OPENFACTURA"


class TaxDocument(Base, UUIDMixin, TimestampMixin, TenantMixin, SoftDeleteMixin):
    """A DTE issued to or by the tenant.

    ``(tenant_id, folio, emitter_rut)`` identifies a document; the sync
    upserts on it. Soft-deleted rows keep their key.
    """

    __tablename__ = "tax_documents"
    __table_args__ = (
        UniqueConstraint(
            "tenant_id", "folio", "emitter_rut", name="uq_tax_documents_tenant_folio_emitter"
        ),
    )

    folio: Mapped[str] = mapped_column(String(32), nullable=False, index=True)
    document_type: Mapped[str] = mapped_column(
        String(32), nullable=False, default=TaxDocumentType.FACTURA, index=True
    )
    document_code: Mapped[int] = mapped_column(Integer, nullable=False)
    emitter_rut: Mapped[str] = mapped_column(String(MAX_RUT_LENGTH), nullable=False)
    emitter_name: Mapped[str | None] = mapped_column(String(255))
    receiver_rut: Mapped[str | None] = mapped_column(String(MAX_RUT_LENGTH))
    receiver_name: Mapped[str | None] = mapped_column(String(255))
    issued_at: Mapped[dt.date] = mapped_column(Date, nullable=False, index=True)
    received_at: Mapped[dt.datetime | None] = mapped_column(DateTime(timezone=True))
    exempt_amount: Mapped[Decimal] = mapped_column(Numeric(14, 2), nullable=False, default=0)
    net_amount: Mapped[Decimal] = mapped_column(Numeric(14, 2), nullable=False, default=0)
    tax_amount: Mapped[Decimal] = mapped_column(Numeric(14, 2), nullable=False, default=0)
    total_amount: Mapped[Decimal] = mapped_column(Numeric(14, 2), nullable=False, default=0)
    currency: Mapped[str] = mapped_column(String(3), nullable=False, default="CLP")
    status: Mapped[str] = mapped_column(
        String(32), nullable=False, default=TaxDocumentStatus.DRAFT, index=True
    )
    payment_form: Mapped[str | None] = mapped_column(String(16))
    purchase_transaction_type: Mapped[int | None] = mapped_column(Integer)
    source: Mapped[str] = mapped_column(
        String(32), nullable=False, default=DocumentSource.MANUAL
    )
    raw_response: Mapped[dict[str, Any] | None] = mapped_column(JSONB)
    notes: Mapped[str | None] = mapped_column(Text)

    items: Mapped[list["TaxDocumentItem"]] = relationship(
        back_populates="tax_document",
        cascade="all, delete-orphan",
        lazy="selectin",
        order_by="TaxDocumentItem.line_number",
    )

    def __repr__(self) -> str:
        return f"<TaxDocument(folio={self.folio}, emitter={self.emitter_rut})>"


class TaxDocumentItem(Base, UUIDMixin, TimestampMixin):
    __tablename__ = "tax_document_items"

    tax_document_id: Mapped[UUID] = mapped_column(
        ForeignKey("tax_documents.id", ondelete="CASCADE"), nullable=False, index=True
    )
    line_number: Mapped[int] = mapped_column(Integer, nullable=False)
    name: Mapped[str] = mapped_column(String(500), nullable=False)
    description: Mapped[str | None] = mapped_column(Text)
    quantity: Mapped[Decimal] = mapped_column(Numeric(14, 4), nullable=False, default=1)
    unit_price: Mapped[Decimal] = mapped_column(Numeric(14, 2), nullable=False, default=0)
    discount: Mapped[Decimal] = mapped_column(Numeric(14, 2), nullable=False, default=0)
    amount: Mapped[Decimal] = mapped_column(Numeric(14, 2), nullable=False, default=0)

    tax_document: Mapped[TaxDocument] = relationship(back_populates="items")
