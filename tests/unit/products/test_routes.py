"""API tests for product routes."""

from unittest.mock import AsyncMock
from uuid import uuid4

from app.core.errors import ConflictError, NotFoundError
from app.modules.products.services import ProductService
from tests.factories.products import ProductFactory, ProductVariantFactory


async def test_list_products_paginates(client, override, tenant_id):
    service = override(ProductService, AsyncMock())
    service.list_products.return_value = ([ProductFactory.build(tenant_id=tenant_id)], 1)

    response = await client.get("/api/v1/products", params={"page": 2, "search": "pan"})

    assert response.status_code == 200
    body = response.json()
    assert body["total"] == 1
    assert body["page"] == 2
    assert len(body["items"]) == 1
    kwargs = service.list_products.await_args.kwargs
    assert kwargs["search"] == "pan"
    assert kwargs["page"] == 2


async def test_create_product_returns_201(client, override, tenant_id):
    service = override(ProductService, AsyncMock())
    service.create_product.return_value = ProductFactory.build(
        tenant_id=tenant_id, name="Empanada", sku="EMP-1"
    )

    response = await client.post(
        "/api/v1/products", json={"name": "Empanada", "sku": "EMP-1", "price": "2500"}
    )

    assert response.status_code == 201
    assert response.json()["sku"] == "EMP-1"


async def test_create_product_rejects_negative_price(client, override):
    override(ProductService, AsyncMock())

    response = await client.post("/api/v1/products", json={"name": "x", "price": "-1"})

    assert response.status_code == 422
    assert response.json()["errors"][0]["field"] == "price"


async def test_sku_conflict_is_problem_detail(client, override):
    service = override(ProductService, AsyncMock())
    service.create_product.side_effect = ConflictError(
        "SKU already in use", error_code="sku_exists", details={"sku": "EMP-1"}
    )

    response = await client.post("/api/v1/products", json={"name": "x", "sku": "EMP-1"})

    assert response.status_code == 409
    body = response.json()
    assert body["type"].endswith("/errors/sku_exists")
    assert body["sku"] == "EMP-1"
    assert body["instance"] == "/api/v1/products"


async def test_missing_product_is_404(client, override):
    service = override(ProductService, AsyncMock())
    service.get_product.side_effect = NotFoundError("Product not found", resource="product")

    response = await client.get(f"/api/v1/products/{uuid4()}")

    assert response.status_code == 404
    assert response.json()["resource"] == "product"


async def test_delete_product_returns_204(client, override, tenant_id):
    service = override(ProductService, AsyncMock())
    product_id = uuid4()

    response = await client.delete(f"/api/v1/products/{product_id}")

    assert response.status_code == 204
    service.delete_product.assert_awaited_once_with(product_id, tenant_id)


async def test_duplicate_product(client, override, tenant_id):
    service = override(ProductService, AsyncMock())
    service.duplicate_product.return_value = ProductFactory.build(
        tenant_id=tenant_id, name="Queque (copia)", sku=None
    )

    response = await client.post(f"/api/v1/products/{uuid4()}/duplicate")

    assert response.status_code == 201
    assert response.json()["sku"] is None


async def test_list_variants(client, override, tenant_id):
    service = override(ProductService, AsyncMock())
    product_id = uuid4()
    service.list_variants.return_value = [
        ProductVariantFactory.build(tenant_id=tenant_id, product_id=product_id)
    ]

    response = await client.get(f"/api/v1/products/{product_id}/variants")

    assert response.status_code == 200
    assert response.json()[0]["product_id"] == str(product_id)
