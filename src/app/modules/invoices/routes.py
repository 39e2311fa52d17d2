"""Tax document API routes."""

import datetime as dt
from typing import Literal
from uuid import UUID

from fastapi import Query, Response, status
from fastapi.responses import JSONResponse

from app.api.dependencies import Pagination
from app.core.auth.dependencies import TenantId
from app.modules.invoices import router
from app.modules.invoices.models import TaxDocumentStatus, TaxDocumentType
from app.modules.invoices.schemas import (
    ReceivedDocumentsResponse,
    SortField,
    SortOrder,
    TaxDocumentCreate,
    TaxDocumentDetailResponse,
    TaxDocumentListResponse,
    TaxDocumentResponse,
    TaxDocumentStats,
    TaxDocumentUpdate,
)
from app.modules.invoices.services import InvoiceSvc


@router.get("", response_model=TaxDocumentListResponse, summary="List tax documents")
async def list_documents(
    tenant_id: TenantId,
    service: InvoiceSvc,
    pagination: Pagination,
    search: str | None = Query(
        None, description="Matches folio, emitter name, receiver name or receiver RUT"
    ),
    document_status: TaxDocumentStatus | None = Query(None, alias="status"),
    document_type: TaxDocumentType | None = None,
    date_from: dt.date | None = None,
    date_to: dt.date | None = None,
    sort_by: SortField = "issued_at",
    sort_order: SortOrder = "desc",
) -> TaxDocumentListResponse:
    documents, total = await service.list_documents(
        tenant_id,
        page=pagination.page,
        page_size=pagination.page_size,
        search=search,
        status=document_status,
        document_type=document_type,
        date_from=date_from,
        date_to=date_to,
        sort_by=sort_by,
        sort_order=sort_order,
    )
    return TaxDocumentListResponse(
        items=[TaxDocumentResponse.model_validate(d) for d in documents],
        total=total,
        page=pagination.page,
        page_size=pagination.page_size,
    )


@router.get("/stats", response_model=TaxDocumentStats, summary="Document statistics")
async def document_stats(tenant_id: TenantId, service: InvoiceSvc) -> TaxDocumentStats:
    return await service.stats(tenant_id)


@router.get(
    "/received",
    response_model=ReceivedDocumentsResponse,
    summary="Browse documents received at OpenFactura",
    description="Reads one page from OpenFactura; nothing is stored.",
)
async def browse_received(
    tenant_id: TenantId,
    service: InvoiceSvc,
    page: int = Query(1, ge=1),
    date_from: dt.date | None = None,
    date_to: dt.date | None = None,
    document_code: int | None = Query(None, description="SII code, e.g. 33"),
    emitter_rut: str | None = None,
) -> ReceivedDocumentsResponse:
    result = await service.browse_received(
        page=page,
        date_from=date_from,
        date_to=date_to,
        document_code=document_code,
        emitter_rut=emitter_rut,
    )
    return ReceivedDocumentsResponse.model_validate(result)


@router.post(
    "",
    response_model=TaxDocumentDetailResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create tax document",
)
async def create_document(
    data: TaxDocumentCreate, tenant_id: TenantId, service: InvoiceSvc
) -> TaxDocumentDetailResponse:
    document = await service.create_document(tenant_id, data)
    return TaxDocumentDetailResponse.model_validate(document)


@router.get("/{document_id}", response_model=TaxDocumentDetailResponse)
async def get_document(
    document_id: UUID, tenant_id: TenantId, service: InvoiceSvc
) -> TaxDocumentDetailResponse:
    document = await service.get_document(document_id, tenant_id)
    return TaxDocumentDetailResponse.model_validate(document)


@router.patch("/{document_id}", response_model=TaxDocumentDetailResponse)
async def update_document(
    document_id: UUID, data: TaxDocumentUpdate, tenant_id: TenantId, service: InvoiceSvc
) -> TaxDocumentDetailResponse:
    document = await service.update_document(document_id, tenant_id, data)
    return TaxDocumentDetailResponse.model_validate(document)


@router.post("/{document_id}/approve", response_model=TaxDocumentDetailResponse)
async def approve_document(
    document_id: UUID, tenant_id: TenantId, service: InvoiceSvc
) -> TaxDocumentDetailResponse:
    document = await service.approve_document(document_id, tenant_id)
    return TaxDocumentDetailResponse.model_validate(document)


@router.delete("/{document_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_document(document_id: UUID, tenant_id: TenantId, service: InvoiceSvc) -> None:
    await service.delete_document(document_id, tenant_id)


@router.get(
    "/{document_id}/document",
    summary="Fetch the document from OpenFactura",
    responses={
        200: {
            "content": {
                "application/pdf": {},
                "application/xml": {},
                "application/json": {},
            }
        }
    },
)
async def fetch_document(
    document_id: UUID,
    tenant_id: TenantId,
    service: InvoiceSvc,
    format: Literal["pdf", "xml", "json", "status", "cedible"] = "pdf",  # noqa: A002
) -> Response:
    document = await service.fetch_document_file(document_id, tenant_id, format)
    if document.data is not None:
        return JSONResponse(document.data)
    return Response(
        content=document.content,
        media_type=document.media_type,
        headers={"Content-Disposition": f'inline; filename="{document.filename}"'},
    )
