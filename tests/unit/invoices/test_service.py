"""Unit tests for InvoiceService."""

import base64
import datetime as dt
import json
from decimal import Decimal
from unittest.mock import AsyncMock
from uuid import uuid4

import httpx
import pytest

from app.clients.openfactura import OpenFacturaClient
from app.core.errors import (
    BadGatewayError,
    BadRequestError,
    ConflictError,
    NotFoundError,
    ServiceUnavailableError,
)
from app.modules.invoices.models import TaxDocumentStatus
from app.modules.invoices.schemas import TaxDocumentCreate, TaxDocumentItemCreate
from app.modules.invoices.services import InvoiceService, compute_totals
from tests.factories.records import TaxDocumentFactory


@pytest.fixture
def repo() -> AsyncMock:
    repo = AsyncMock()
    repo.create.side_effect = lambda document: document
    repo.update.side_effect = lambda document: document
    repo.get_by_natural_key.return_value = None
    return repo


def make_service(repo, handler=None, api_key="test-key") -> InvoiceService:
    client = OpenFacturaClient(
        api_key=api_key,
        transport=httpx.MockTransport(handler or (lambda request: httpx.Response(500))),
    )
    return InvoiceService(repo, client)


class TestComputeTotals:
    def test_items_define_the_net(self):
        items = [
            TaxDocumentItemCreate(name="Harina", quantity=Decimal("2"), unit_price=Decimal("5000")),
            TaxDocumentItemCreate(
                name="Levadura", quantity=Decimal("1.5"), unit_price=Decimal("999"), discount=Decimal("0.5")
            ),
        ]

        amounts, net, tax, total = compute_totals(items, Decimal("1"), Decimal("0"))

        assert amounts == [Decimal("10000.00"), Decimal("1498.00")]
        assert net == Decimal("11498.00")
        assert tax == Decimal("2185")
        assert total == Decimal("13683.00")

    def test_without_items_uses_given_net(self):
        _, net, tax, total = compute_totals([], Decimal("10000"), Decimal("500"))

        assert net == Decimal("10000")
        assert tax == Decimal("1900")
        assert total == Decimal("12400")


class TestManualDocuments:
    async def test_create_derives_totals_and_lines(self, repo, tenant_id):
        service = make_service(repo)
        data = TaxDocumentCreate(
            folio="1001",
            emitter_rut="76.543.210-3",
            issued_at=dt.date(2026, 2, 10),
            items=[TaxDocumentItemCreate(name="Café", quantity=Decimal("4"), unit_price=Decimal("2500"))],
        )

        document = await service.create_document(tenant_id, data)

        assert document.emitter_rut == "76543210-3"
        assert document.document_code == 33
        assert document.net_amount == Decimal("10000.00")
        assert document.tax_amount == Decimal("1900")
        assert document.total_amount == Decimal("11900.00")
        assert [item.line_number for item in document.items] == [1]
        repo.get_by_natural_key.assert_awaited_once_with(tenant_id, "1001", "76543210-3")

    def test_invalid_emitter_rut_is_rejected(self):
        with pytest.raises(ValueError):
            TaxDocumentCreate(folio="1", emitter_rut="76543210-9", issued_at=dt.date(2026, 1, 1))

    async def test_duplicate_folio_conflicts(self, repo, tenant_id):
        repo.get_by_natural_key.return_value = TaxDocumentFactory.build(tenant_id=tenant_id)
        service = make_service(repo)

        with pytest.raises(ConflictError) as exc_info:
            await service.create_document(
                tenant_id,
                TaxDocumentCreate(folio="1", emitter_rut="76543210-3", issued_at=dt.date(2026, 1, 1)),
            )

        assert exc_info.value.error_code == "document_exists"

    async def test_approve_draft(self, repo, tenant_id):
        repo.get.return_value = TaxDocumentFactory.build(tenant_id=tenant_id)

        document = await make_service(repo).approve_document(uuid4(), tenant_id)

        assert document.status == TaxDocumentStatus.APPROVED

    async def test_approve_requires_draft(self, repo, tenant_id):
        repo.get.return_value = TaxDocumentFactory.build(
            tenant_id=tenant_id, status=TaxDocumentStatus.CANCELLED
        )

        with pytest.raises(BadRequestError):
            await make_service(repo).approve_document(uuid4(), tenant_id)

    async def test_stats(self, repo, tenant_id):
        repo.count_by.side_effect = [{"APPROVED": 3, "DRAFT": 1}, {"FACTURA": 4}]
        repo.approved_total.return_value = Decimal("35700")

        stats = await make_service(repo).stats(tenant_id)

        assert stats.total == 4
        assert stats.by_document_type == {"FACTURA": 4}
        assert stats.approved_total_amount == Decimal("35700")


class TestFetchDocumentFile:
    async def test_pdf_is_decoded(self, repo, tenant_id):
        document = TaxDocumentFactory.build(tenant_id=tenant_id, folio="1532")
        repo.get.return_value = document
        seen: list[str] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request.url.path)
            assert request.headers["apikey"] == "test-key"
            return httpx.Response(200, json={"pdf": base64.b64encode(b"%PDF-1.4").decode()})

        result = await make_service(repo, handler).fetch_document_file(
            document.id, tenant_id, "pdf"
        )

        assert seen == ["/v2/dte/document/76543210-3/33/1532/pdf"]
        assert result.content == b"%PDF-1.4"
        assert result.media_type == "application/pdf"
        assert result.filename == "documento-1532.pdf"

    async def test_json_is_passed_through(self, repo, tenant_id):
        repo.get.return_value = TaxDocumentFactory.build(tenant_id=tenant_id)

        result = await make_service(
            repo, lambda request: httpx.Response(200, json={"json": {"Documento": {}}})
        ).fetch_document_file(uuid4(), tenant_id, "json")

        assert result.data == {"json": {"Documento": {}}}
        assert result.content is None

    async def test_empty_content_is_bad_gateway(self, repo, tenant_id):
        repo.get.return_value = TaxDocumentFactory.build(tenant_id=tenant_id)

        with pytest.raises(BadGatewayError) as exc_info:
            await make_service(
                repo, lambda request: httpx.Response(200, json={})
            ).fetch_document_file(uuid4(), tenant_id, "xml")

        assert exc_info.value.error_code == "openfactura_empty_document"

    async def test_upstream_404_is_not_found(self, repo, tenant_id):
        repo.get.return_value = TaxDocumentFactory.build(tenant_id=tenant_id)

        with pytest.raises(NotFoundError):
            await make_service(
                repo, lambda request: httpx.Response(404)
            ).fetch_document_file(uuid4(), tenant_id, "pdf")

    async def test_upstream_failure_is_bad_gateway(self, repo, tenant_id):
        repo.get.return_value = TaxDocumentFactory.build(tenant_id=tenant_id)

        with pytest.raises(BadGatewayError) as exc_info:
            await make_service(
                repo, lambda request: httpx.Response(503, text="maintenance")
            ).fetch_document_file(uuid4(), tenant_id, "pdf")

        assert exc_info.value.details["upstream_status"] == 503

    async def test_missing_api_key(self, repo, tenant_id, monkeypatch):
        monkeypatch.setattr("app.clients.openfactura.settings.openfactura_api_key", None)
        repo.get.return_value = TaxDocumentFactory.build(tenant_id=tenant_id)

        with pytest.raises(ServiceUnavailableError):
            await make_service(repo, api_key=None).fetch_document_file(uuid4(), tenant_id, "pdf")


async def test_browse_received_summarises_page(repo):
    captured: dict = {}

    def handler(request: httpx.Request) -> httpx.Response:
        captured.update(json.loads(request.content))
        return httpx.Response(
            200,
            json={
                "current_page": 1,
                "last_page": 3,
                "total": 250,
                "data": [
                    {"RUTEmisor": 76543210, "DV": "3", "TipoDTE": 33, "Folio": 1, "MntTotal": 11900},
                    {"RUTEmisor": 76543210, "DV": "3", "TipoDTE": 33, "Folio": 2, "MntTotal": 5950},
                    {"RUTEmisor": 76543210, "DV": "3", "TipoDTE": 61, "Folio": 9, "MntTotal": 1190},
                ],
            },
        )

    result = await make_service(repo, handler).browse_received(
        page=1,
        date_from=dt.date(2026, 2, 1),
        date_to=dt.date(2026, 2, 28),
        emitter_rut="76.543.210-3",
    )

    assert captured["Page"] == "1"
    assert captured["FchEmis"] == {"gte": "2026-02-01", "lte": "2026-02-28"}
    assert captured["RUTEmisor"] == {"eq": "76543210"}
    assert result["pagination"]["last_page"] == 3
    assert result["total_amount"] == Decimal("19040")
    summary = {entry["document_code"]: entry for entry in result["summary"]}
    assert summary[33]["count"] == 2
    assert summary[61]["name"] == "Nota de Crédito Electrónica"
