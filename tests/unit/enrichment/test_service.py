"""Unit tests for EnrichmentService."""

import json
from unittest.mock import AsyncMock, patch
from uuid import uuid4

import pytest

from app.clients.llm import LLMError, LLMResponse
from app.clients.web_fetch import PageMetadata, WebFetchError
from app.core.errors import BadGatewayError, BadRequestError, NotFoundError
from app.modules.enrichment.schemas import EnrichmentRequest
from app.modules.enrichment.services import GROUNDED_COST, STANDARD_COST, EnrichmentService
from tests.factories.products import ProductFactory


GEMINI_ANSWER = {
    "name": "Alfajor de Manjar",
    "brand": "Costa",
    "category": "Confites",
    "type": "ready_product",
    "tags": ["vegetariano"],
}
OPENAI_ANSWER = {"name": "alfajor de manjar", "brand": "Costa", "category": "Dulces"}
GROUNDED_ANSWER = {"name": "Alfajor Costa Manjar 40 g", "ean": "7802215505034", "verified": True}


def llm(answer: dict, provider: str, **extra) -> LLMResponse:
    return LLMResponse(text=f"```json\n{json.dumps(answer)}\n```", provider=provider, model="m", **extra)


async def gemini_generate(prompt, temperature=0.3, grounded=False):
    if grounded:
        return llm(GROUNDED_ANSWER, "gemini", search_queries=["alfajor costa"], sources=["https://costa.cl"])
    return llm(GEMINI_ANSWER, "gemini")


@pytest.fixture
def repo() -> AsyncMock:
    return AsyncMock()


@pytest.fixture
def gemini() -> AsyncMock:
    client = AsyncMock()
    client.generate.side_effect = gemini_generate
    return client


@pytest.fixture
def openai() -> AsyncMock:
    client = AsyncMock()
    client.generate.return_value = llm(OPENAI_ANSWER, "openai")
    return client


@pytest.fixture
def image_search() -> AsyncMock:
    client = AsyncMock()
    client.is_configured = True
    client.search_images.side_effect = lambda query: (
        ["https://img.cl/barcode.jpg"] if query.isdigit() else ["https://img.cl/name.jpg", "https://img.cl/barcode.jpg"]
    )
    return client


@pytest.fixture
def service(repo, gemini, openai, image_search) -> EnrichmentService:
    return EnrichmentService(repo, gemini, openai, image_search)


async def test_standard_and_grounded_methods(service, tenant_id):
    response = await service.enrich(tenant_id, EnrichmentRequest(name="alfajor", ean="7802215505034"))

    methods = {m.name: m for m in response.enrichment_methods}
    assert set(methods) == {"standard", "grounded"}

    standard = methods["standard"]
    assert standard.data["name"] == "Alfajor de Manjar"
    assert standard.data["category"] == "Confites"
    assert standard.data["type"] == "READY_PRODUCT"
    assert standard.data["images"] == ["https://img.cl/barcode.jpg", "https://img.cl/name.jpg"]
    assert standard.metadata["fields"]["name"]["confidence"] == "high"
    assert standard.metadata["fields"]["category"]["confidence"] == "medium"
    assert standard.cost == STANDARD_COST
    # per-field agreement does not raise the method above medium
    assert standard.confidence == "medium"

    grounded = methods["grounded"]
    assert grounded.data["ean"] == "7802215505034"
    assert grounded.metadata["verified"] is True
    assert grounded.metadata["search_queries"] == ["alfajor costa"]
    assert grounded.cost == GROUNDED_COST


async def test_one_provider_down_gives_medium_confidence(service, openai, tenant_id):
    openai.generate.side_effect = LLMError("API_ERROR", "quota")

    response = await service.enrich(tenant_id, EnrichmentRequest(name="alfajor"))

    standard = next(m for m in response.enrichment_methods if m.name == "standard")
    assert standard.confidence == "medium"
    assert standard.metadata["sources"]["openai"] is False


async def test_source_url_adds_web_extraction(service, tenant_id):
    page = PageMetadata(
        url="https://tienda.cl/p/alfajor-manjar",
        title="Alfajor | Tienda",
        og_title="Alfajor de manjar",
        og_image="https://tienda.cl/alfajor.jpg",
        og_site_name="Tienda",
    )
    with patch(
        "app.modules.enrichment.services.fetch_page_metadata", new_callable=AsyncMock, return_value=page
    ):
        response = await service.enrich(
            tenant_id, EnrichmentRequest(source_url="https://tienda.cl/p/alfajor-manjar")
        )

    web = next(m for m in response.enrichment_methods if m.name == "web_extraction")
    assert web.data["name"] == "Alfajor de manjar"
    assert web.data["images"] == ["https://tienda.cl/alfajor.jpg"]
    assert web.cost == 0.0


async def test_failed_methods_are_dropped(service, gemini, tenant_id):
    async def only_standard(prompt, temperature=0.3, grounded=False):
        if grounded:
            raise LLMError("API_ERROR", "grounding unavailable")
        return llm(GEMINI_ANSWER, "gemini")

    gemini.generate.side_effect = only_standard
    with patch(
        "app.modules.enrichment.services.fetch_page_metadata",
        new_callable=AsyncMock,
        side_effect=WebFetchError("HTTP_ERROR", "403"),
    ):
        response = await service.enrich(
            tenant_id, EnrichmentRequest(name="alfajor", source_url="https://tienda.cl/p/1")
        )

    assert [m.name for m in response.enrichment_methods] == ["standard"]


async def test_everything_failing_is_bad_gateway(service, gemini, openai, tenant_id):
    gemini.generate.side_effect = LLMError("API_ERROR", "down")
    openai.generate.side_effect = LLMError("API_ERROR", "down")

    with pytest.raises(BadGatewayError) as exc_info:
        await service.enrich(tenant_id, EnrichmentRequest(name="alfajor"))

    assert exc_info.value.error_code == "enrichment_failed"


async def test_identity_is_required(service, tenant_id):
    with pytest.raises(BadRequestError):
        await service.enrich(tenant_id, EnrichmentRequest(brand="Costa"))


async def test_stored_product_fills_missing_fields(service, repo, tenant_id):
    product = ProductFactory.build(tenant_id=tenant_id, name="Alfajor", brand="Costa")
    repo.get.return_value = product

    response = await service.enrich(tenant_id, EnrichmentRequest(product_id=product.id))

    assert response.current_data["name"] == "Alfajor"
    assert response.current_data["brand"] == "Costa"
    assert response.current_data["id"] == str(product.id)


async def test_unknown_product(service, repo, tenant_id):
    repo.get.return_value = None

    with pytest.raises(NotFoundError):
        await service.enrich(tenant_id, EnrichmentRequest(product_id=uuid4()))


async def test_images_skipped_without_search_credentials(service, image_search):
    image_search.is_configured = False

    images, counts = await service.find_images("Alfajor", "Costa", "7802215505034")

    assert images == []
    assert counts == {"images_by_barcode": 0, "images_by_name": 0}
    image_search.search_images.assert_not_awaited()
