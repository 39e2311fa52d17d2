"""API tests for tax document routes."""

from unittest.mock import AsyncMock
from uuid import uuid4

from app.core.errors import ServiceUnavailableError
from app.modules.invoices.services import DocumentFile, InvoiceService


async def test_pdf_is_streamed_inline(client, override):
    service = override(InvoiceService, AsyncMock())
    service.fetch_document_file.return_value = DocumentFile(
        media_type="application/pdf", content=b"%PDF-1.4", filename="documento-77.pdf"
    )

    response = await client.get(f"/api/v1/invoices/{uuid4()}/document")

    assert response.status_code == 200
    assert response.content == b"%PDF-1.4"
    assert response.headers["content-type"] == "application/pdf"
    assert 'filename="documento-77.pdf"' in response.headers["content-disposition"]
    assert service.fetch_document_file.await_args.args[2] == "pdf"


async def test_status_format_returns_json(client, override):
    service = override(InvoiceService, AsyncMock())
    service.fetch_document_file.return_value = DocumentFile(
        media_type="application/json", data={"status": "ACEPTADO"}
    )

    response = await client.get(
        f"/api/v1/invoices/{uuid4()}/document", params={"format": "status"}
    )

    assert response.json() == {"status": "ACEPTADO"}


async def test_unknown_format_is_rejected(client, override):
    override(InvoiceService, AsyncMock())

    response = await client.get(f"/api/v1/invoices/{uuid4()}/document", params={"format": "doc"})

    assert response.status_code == 422


async def test_unconfigured_openfactura_is_503(client, override):
    service = override(InvoiceService, AsyncMock())
    service.browse_received.side_effect = ServiceUnavailableError(
        "OpenFactura API key is not configured", error_code="openfactura_not_configured"
    )

    response = await client.get("/api/v1/invoices/received")

    assert response.status_code == 503
    assert response.json()["type"].endswith("/errors/openfactura_not_configured")
