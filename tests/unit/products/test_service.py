"""Unit tests for ProductService."""

from decimal import Decimal
from unittest.mock import AsyncMock
from uuid import uuid4

import pytest

from app.core.errors import ConflictError, NotFoundError
from app.modules.products.schemas import (
    ProductCreate,
    ProductUpdate,
    VariantCreate,
    VariantUpdate,
)
from app.modules.products.services import DUPLICATE_SUFFIX, ProductService
from tests.factories.products import ProductFactory, ProductVariantFactory


def _passthrough(obj):
    return obj


@pytest.fixture
def repo() -> AsyncMock:
    repo = AsyncMock()
    repo.create.side_effect = _passthrough
    repo.update.side_effect = _passthrough
    repo.create_variant.side_effect = _passthrough
    repo.update_variant.side_effect = _passthrough
    return repo


@pytest.fixture
def service(repo: AsyncMock) -> ProductService:
    return ProductService(repo)


class TestCreateProduct:
    async def test_creates_product_for_tenant(self, service, repo, tenant_id):
        repo.get_by_sku.return_value = None

        product = await service.create_product(
            tenant_id, ProductCreate(name="Pan amasado", sku="PAN-002", price=Decimal("1500"))
        )

        assert product.tenant_id == tenant_id
        assert product.sku == "PAN-002"
        repo.get_by_sku.assert_awaited_once_with("PAN-002", tenant_id)

    async def test_duplicate_sku_conflicts(self, service, repo, tenant_id):
        repo.get_by_sku.return_value = ProductFactory.build(tenant_id=tenant_id, sku="PAN-002")

        with pytest.raises(ConflictError) as exc_info:
            await service.create_product(tenant_id, ProductCreate(name="Otro", sku="PAN-002"))

        assert exc_info.value.error_code == "sku_exists"
        repo.create.assert_not_awaited()

    async def test_product_without_sku_skips_lookup(self, service, repo, tenant_id):
        await service.create_product(tenant_id, ProductCreate(name="Sin código"))

        repo.get_by_sku.assert_not_awaited()


class TestUpdateProduct:
    async def test_missing_product_is_not_found(self, service, repo, tenant_id):
        repo.get.return_value = None

        with pytest.raises(NotFoundError):
            await service.update_product(uuid4(), tenant_id, ProductUpdate(name="x"))

    async def test_changing_sku_to_taken_value_conflicts(self, service, repo, tenant_id):
        product = ProductFactory.build(tenant_id=tenant_id, sku="A-1")
        repo.get.return_value = product
        repo.get_by_sku.return_value = ProductFactory.build(tenant_id=tenant_id, sku="B-2")

        with pytest.raises(ConflictError):
            await service.update_product(product.id, tenant_id, ProductUpdate(sku="B-2"))

    async def test_only_sent_fields_change(self, service, repo, tenant_id):
        product = ProductFactory.build(tenant_id=tenant_id, price=Decimal("1000"), stock=3)
        repo.get.return_value = product

        updated = await service.update_product(
            product.id, tenant_id, ProductUpdate(price=Decimal("1200"))
        )

        assert updated.price == Decimal("1200")
        assert updated.stock == 3


class TestDuplicateProduct:
    async def test_copy_has_no_sku_and_suffixed_name(self, service, repo, tenant_id):
        source = ProductFactory.build(
            tenant_id=tenant_id, name="Queque", tags=["vegano"], price=Decimal("3500")
        )
        repo.get.return_value = source

        copy = await service.duplicate_product(source.id, tenant_id)

        assert copy.name == f"Queque{DUPLICATE_SUFFIX}"
        assert copy.sku is None
        assert copy.price == Decimal("3500")
        assert copy.tags == ["vegano"]
        assert copy.tags is not source.tags
        repo.create.assert_awaited_once()


class TestVariants:
    async def test_create_variant_requires_product(self, service, repo, tenant_id):
        repo.get.return_value = None

        with pytest.raises(NotFoundError):
            await service.create_variant(uuid4(), tenant_id, VariantCreate(name="Grande"))

    async def test_create_variant_links_product(self, service, repo, tenant_id):
        product = ProductFactory.build(tenant_id=tenant_id)
        repo.get.return_value = product

        variant = await service.create_variant(
            product.id, tenant_id, VariantCreate(name="Grande", price=Decimal("2500"))
        )

        assert variant.product_id == product.id
        assert variant.tenant_id == tenant_id

    async def test_delete_variant_soft_deletes(self, service, repo, tenant_id):
        variant = ProductVariantFactory.build(tenant_id=tenant_id)
        repo.get_variant.return_value = variant

        await service.delete_variant(variant.product_id, variant.id, tenant_id)

        assert variant.is_deleted is True
        assert variant.deleted_at is not None

    async def test_unknown_variant_is_not_found(self, service, repo, tenant_id):
        repo.get_variant.return_value = None

        with pytest.raises(NotFoundError) as exc_info:
            await service.update_variant(uuid4(), uuid4(), tenant_id, VariantUpdate(name="x"))

        assert exc_info.value.details["resource"] == "product_variant"
