"""Tax document service: manual documents, statistics and the OpenFactura viewer."""

import base64
import binascii
import datetime as dt
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Annotated, Any
from uuid import UUID

import structlog
from fastapi import Depends

from app.clients.base import ClientError, ClientNotConfiguredError
from app.clients.dependencies import OpenFactura
from app.clients.openfactura import (
    BASE64_FORMATS,
    OpenFacturaError,
    OpenFacturaNotFoundError,
)
from app.core.errors import (
    BadGatewayError,
    BadRequestError,
    ConflictError,
    NotFoundError,
    ServiceUnavailableError,
)
from app.core.utils.chile import calculate_iva, get_document_code
from app.modules.invoices.mapping import describe_received
from app.modules.invoices.models import TaxDocument, TaxDocumentItem, TaxDocumentStatus
from app.modules.invoices.repos import TaxDocumentRepo
from app.modules.invoices.schemas import (
    TaxDocumentCreate,
    TaxDocumentItemCreate,
    TaxDocumentStats,
    TaxDocumentUpdate,
)


logger = structlog.get_logger()

TWO_PLACES = Decimal("0.01")

MEDIA_TYPES = {
    "pdf": "application/pdf",
    "cedible": "application/pdf",
    "xml": "application/xml; charset=utf-8",
}


@dataclass
class DocumentFile:
    """Decoded document content, or the JSON body for json/status."""

    media_type: str
    content: bytes | None = None
    filename: str | None = None
    data: dict[str, Any] | None = None


def compute_totals(
    items: list[TaxDocumentItemCreate],
    net_amount: Decimal,
    exempt_amount: Decimal,
) -> tuple[list[Decimal], Decimal, Decimal, Decimal]:
    """Line amounts, net, IVA and total of a document.

    With items the net is the sum of ``quantity * unit_price - discount``;
    without them the given net is used.

    Returns:
        Tuple of (line amounts, net, tax, total)
    """
    amounts = [
        (item.quantity * item.unit_price - item.discount).quantize(
            TWO_PLACES, rounding=ROUND_HALF_UP
        )
        for item in items
    ]
    net = sum(amounts, Decimal(0)) if items else net_amount
    tax = calculate_iva(net)
    return amounts, net, tax, net + tax + exempt_amount


class InvoiceService:
    def __init__(self, repo: TaxDocumentRepo, openfactura: OpenFactura) -> None:
        self.repo = repo
        self.openfactura = openfactura

    # ============================================================
    # Stored documents
    # ============================================================

    async def list_documents(
        self, tenant_id: UUID, **filters: Any
    ) -> tuple[list[TaxDocument], int]:
        return await self.repo.list_documents(tenant_id, **filters)

    async def get_document(self, document_id: UUID, tenant_id: UUID) -> TaxDocument:
        document = await self.repo.get(document_id, tenant_id)
        if not document:
            raise NotFoundError(
                "Tax document not found",
                resource="tax_document",
                resource_id=str(document_id),
            )
        return document

    async def create_document(self, tenant_id: UUID, data: TaxDocumentCreate) -> TaxDocument:
        """Create a manual document with derived totals.

        Raises:
            ConflictError: If the tenant already has this folio from this emitter
        """
        if await self.repo.get_by_natural_key(tenant_id, data.folio, data.emitter_rut):
            raise ConflictError(
                "A document with this folio already exists for the emitter",
                error_code="document_exists",
                details={"folio": data.folio, "emitter_rut": data.emitter_rut},
            )

        amounts, net, tax, total = compute_totals(
            data.items, data.net_amount, data.exempt_amount
        )
        document = TaxDocument(
            tenant_id=tenant_id,
            **data.model_dump(exclude={"items", "net_amount"}),
            document_code=get_document_code(data.document_type),
            net_amount=net,
            tax_amount=tax,
            total_amount=total,
            items=[
                TaxDocumentItem(
                    line_number=index,
                    amount=amount,
                    **item.model_dump(),
                )
                for index, (item, amount) in enumerate(
                    zip(data.items, amounts, strict=True), start=1
                )
            ],
        )
        document = await self.repo.create(document)
        logger.info(
            "tax_document_created",
            document_id=str(document.id),
            folio=document.folio,
            total=str(document.total_amount),
        )
        return document

    async def update_document(
        self, document_id: UUID, tenant_id: UUID, data: TaxDocumentUpdate
    ) -> TaxDocument:
        document = await self.get_document(document_id, tenant_id)
        for field, value in data.model_dump(exclude_unset=True).items():
            setattr(document, field, value)
        return await self.repo.update(document)

    async def approve_document(self, document_id: UUID, tenant_id: UUID) -> TaxDocument:
        """Move a DRAFT document to APPROVED.

        Raises:
            BadRequestError: If the document is not a draft
        """
        document = await self.get_document(document_id, tenant_id)
        if document.status != TaxDocumentStatus.DRAFT:
            raise BadRequestError(
                f"Only draft documents can be approved (status is {document.status})",
                error_code="invalid_status",
                details={"status": document.status},
            )
        document.status = TaxDocumentStatus.APPROVED
        return await self.repo.update(document)

    async def delete_document(self, document_id: UUID, tenant_id: UUID) -> None:
        document = await self.get_document(document_id, tenant_id)
        document.soft_delete()
        await self.repo.update(document)

    async def stats(self, tenant_id: UUID) -> TaxDocumentStats:
        by_status = await self.repo.count_by(tenant_id, "status")
        by_type = await self.repo.count_by(tenant_id, "document_type")
        return TaxDocumentStats(
            total=sum(by_status.values()),
            by_status=by_status,
            by_document_type=by_type,
            approved_total_amount=await self.repo.approved_total(tenant_id),
        )

    # ============================================================
    # OpenFactura
    # ============================================================

    def _upstream_error(self, error: ClientError) -> Exception:
        if isinstance(error, ClientNotConfiguredError):
            return ServiceUnavailableError(
                "OpenFactura API key is not configured",
                error_code="openfactura_not_configured",
            )
        if isinstance(error, OpenFacturaNotFoundError):
            return NotFoundError(error.error_message, resource="openfactura_document")
        return BadGatewayError(
            "OpenFactura request failed",
            error_code="openfactura_error",
            details={
                "upstream_error": error.error_code,
                "upstream_status": error.status_code,
            },
        )

    async def fetch_document_file(
        self, document_id: UUID, tenant_id: UUID, fmt: str
    ) -> DocumentFile:
        """Fetch a stored document from OpenFactura in the given format.

        Raises:
            ServiceUnavailableError: If no API key is configured
            NotFoundError: If the document is unknown here or at OpenFactura
            BadGatewayError: If OpenFactura fails or sends no content
        """
        document = await self.get_document(document_id, tenant_id)
        try:
            async with self.openfactura as client:
                data = await client.get_document(
                    document.emitter_rut, document.document_code, document.folio, fmt
                )
        except (ClientNotConfiguredError, OpenFacturaError) as e:
            raise self._upstream_error(e) from e

        if fmt not in BASE64_FORMATS:
            return DocumentFile(media_type="application/json", data=data)

        encoded = data.get(fmt)
        if not encoded:
            raise BadGatewayError(
                f"OpenFactura returned no {fmt} content",
                error_code="openfactura_empty_document",
            )
        try:
            content = base64.b64decode(encoded)
        except (binascii.Error, ValueError) as e:
            raise BadGatewayError(
                f"OpenFactura returned invalid {fmt} content",
                error_code="openfactura_invalid_document",
            ) from e

        suffix = "-cedible" if fmt == "cedible" else ""
        extension = "xml" if fmt == "xml" else "pdf"
        return DocumentFile(
            media_type=MEDIA_TYPES[fmt],
            content=content,
            filename=f"documento{suffix}-{document.folio}.{extension}",
        )

    async def browse_received(
        self,
        page: int = 1,
        date_from: dt.date | None = None,
        date_to: dt.date | None = None,
        document_code: int | None = None,
        emitter_rut: str | None = None,
    ) -> dict[str, Any]:
        """One page of documents received at OpenFactura, without storing them."""
        filters: dict[str, dict[str, Any]] = {}
        if document_code:
            filters["TipoDTE"] = {"eq": document_code}
        if emitter_rut:
            filters["RUTEmisor"] = {"eq": emitter_rut.split("-")[0].replace(".", "")}

        try:
            async with self.openfactura as client:
                data = await client.list_received(page, date_from, date_to, filters)
        except (ClientNotConfiguredError, OpenFacturaError) as e:
            raise self._upstream_error(e) from e

        documents = [describe_received(doc) for doc in data.get("data") or []]

        summary: dict[int | None, dict[str, Any]] = {}
        for doc in documents:
            entry = summary.setdefault(
                doc["document_code"],
                {
                    "document_code": doc["document_code"],
                    "name": doc["document_type_name"],
                    "count": 0,
                    "total_amount": Decimal(0),
                },
            )
            entry["count"] += 1
            entry["total_amount"] += doc["total_amount"]

        request_filters: dict[str, Any] = dict(filters)
        emission = {
            key: value.isoformat()
            for key, value in (("gte", date_from), ("lte", date_to))
            if value
        }
        if emission:
            request_filters["FchEmis"] = emission

        return {
            "documents": documents,
            "pagination": {
                "current_page": data.get("current_page", page),
                "last_page": data.get("last_page", page),
                "total": data.get("total", len(documents)),
                "per_page": len(documents),
            },
            "total_amount": sum((d["total_amount"] for d in documents), Decimal(0)),
            "summary": list(summary.values()),
            "filters": request_filters,
        }


InvoiceSvc = Annotated[InvoiceService, Depends(InvoiceService)]
