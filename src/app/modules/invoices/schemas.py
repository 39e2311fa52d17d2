"""Pydantic schemas for tax documents."""

import datetime as dt
from decimal import Decimal
from typing import Annotated, Any, Literal
from uuid import UUID

from pydantic import AfterValidator, BaseModel, ConfigDict, Field

from app.core.utils.chile import rut_for_api, validate_rut
from app.modules.invoices.models import DocumentSource, TaxDocumentStatus, TaxDocumentType


SortField = Literal["folio", "total_amount", "issued_at", "created_at"]
SortOrder = Literal["asc", "desc"]


def _api_rut(value: str) -> str:
    if not validate_rut(value):
        raise ValueError("Invalid RUT")
    return rut_for_api(value)


ApiRut = Annotated[str, AfterValidator(_api_rut)]


# ============================================================
# Items
# ============================================================


class TaxDocumentItemCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=500)
    description: str | None = None
    quantity: Decimal = Field(Decimal(1), gt=0)
    unit_price: Decimal = Field(Decimal(0), ge=0)
    discount: Decimal = Field(Decimal(0), ge=0)


class TaxDocumentItemResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    line_number: int
    name: str
    description: str | None
    quantity: Decimal
    unit_price: Decimal
    discount: Decimal
    amount: Decimal


# ============================================================
# Documents
# ============================================================


class TaxDocumentCreate(BaseModel):
    """Manual document. With items, net is the sum of item amounts."""

    folio: str = Field(..., min_length=1, max_length=32)
    document_type: TaxDocumentType = TaxDocumentType.FACTURA
    emitter_rut: ApiRut
    emitter_name: str | None = Field(None, max_length=255)
    receiver_rut: ApiRut | None = None
    receiver_name: str | None = Field(None, max_length=255)
    issued_at: dt.date
    net_amount: Decimal = Field(Decimal(0), ge=0)
    exempt_amount: Decimal = Field(Decimal(0), ge=0)
    currency: str = Field("CLP", min_length=3, max_length=3)
    status: TaxDocumentStatus = TaxDocumentStatus.DRAFT
    payment_form: str | None = Field(None, max_length=16)
    notes: str | None = None
    items: list[TaxDocumentItemCreate] = Field(default_factory=list)


class TaxDocumentUpdate(BaseModel):
    status: TaxDocumentStatus | None = None
    notes: str | None = None


class TaxDocumentResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    folio: str
    document_type: TaxDocumentType
    document_code: int
    emitter_rut: str
    emitter_name: str | None
    receiver_rut: str | None
    receiver_name: str | None
    issued_at: dt.date
    received_at: dt.datetime | None
    exempt_amount: Decimal
    net_amount: Decimal
    tax_amount: Decimal
    total_amount: Decimal
    currency: str
    status: TaxDocumentStatus
    payment_form: str | None
    purchase_transaction_type: int | None
    source: DocumentSource
    notes: str | None
    created_at: dt.datetime
    updated_at: dt.datetime


class TaxDocumentDetailResponse(TaxDocumentResponse):
    items: list[TaxDocumentItemResponse]


class TaxDocumentListResponse(BaseModel):
    items: list[TaxDocumentResponse]
    total: int
    page: int
    page_size: int


class TaxDocumentStats(BaseModel):
    total: int
    by_status: dict[str, int]
    by_document_type: dict[str, int]
    approved_total_amount: Decimal


# ============================================================
# Received documents (not persisted)
# ============================================================


class ReceivedDocument(BaseModel):
    id: str
    emitter_rut: str
    emitter_name: str | None
    document_code: int | None
    document_type_name: str
    folio: int | str | None
    issued_at: str | None
    received_sii_at: str | None
    received_of_at: str | None
    exempt_amount: Decimal
    net_amount: Decimal
    tax_amount: Decimal
    total_amount: Decimal
    payment_form: str | None
    payment_form_name: str | None
    purchase_transaction_type: int | None
    purchase_transaction_name: str | None
    acknowledgements: list[dict[str, Any]] = Field(default_factory=list)


class ReceivedTypeSummary(BaseModel):
    document_code: int | None
    name: str
    count: int
    total_amount: Decimal


class ReceivedPagination(BaseModel):
    current_page: int
    last_page: int
    total: int
    per_page: int


class ReceivedDocumentsResponse(BaseModel):
    documents: list[ReceivedDocument]
    pagination: ReceivedPagination
    total_amount: Decimal
    summary: list[ReceivedTypeSummary]
    filters: dict[str, Any]
