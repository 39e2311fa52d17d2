"""Product service for business logic."""

from typing import Annotated
from uuid import UUID

import structlog
from fastapi import Depends

from app.core.errors import ConflictError, NotFoundError
from app.modules.products.models import Product, ProductVariant
from app.modules.products.repos import ProductRepo
from app.modules.products.schemas import (
    ProductCreate,
    ProductUpdate,
    VariantCreate,
    VariantUpdate,
)


logger = structlog.get_logger()

DUPLICATE_SUFFIX = " (copia)"


class ProductService:
    """Product catalogue operations, scoped to one tenant per call."""

    def __init__(self, repo: ProductRepo) -> None:
        self.repo = repo

    async def list_products(
        self,
        tenant_id: UUID,
        page: int = 1,
        page_size: int = 20,
        search: str | None = None,
        category: str | None = None,
        product_type: str | None = None,
        is_active: bool | None = None,
    ) -> tuple[list[Product], int]:
        return await self.repo.list_products(
            tenant_id,
            page=page,
            page_size=page_size,
            search=search,
            category=category,
            product_type=product_type,
            is_active=is_active,
        )

    async def get_product(self, product_id: UUID, tenant_id: UUID) -> Product:
        """Get a live product of the tenant.

        Raises:
            NotFoundError: If the product is missing, deleted or in another tenant
        """
        product = await self.repo.get(product_id, tenant_id)
        if not product:
            raise NotFoundError(
                "Product not found",
                resource="product",
                resource_id=str(product_id),
            )
        return product

    async def _ensure_sku_free(
        self, sku: str, tenant_id: UUID, exclude_id: UUID | None = None
    ) -> None:
        existing = await self.repo.get_by_sku(sku, tenant_id)
        if existing and existing.id != exclude_id:
            raise ConflictError(
                "SKU already in use",
                error_code="sku_exists",
                details={"sku": sku},
            )

    async def create_product(self, tenant_id: UUID, data: ProductCreate) -> Product:
        """Create a product.

        Raises:
            ConflictError: If the SKU is already used by another live product
        """
        if data.sku:
            await self._ensure_sku_free(data.sku, tenant_id)

        product = await self.repo.create(Product(tenant_id=tenant_id, **data.model_dump()))
        logger.info("product_created", product_id=str(product.id), sku=product.sku)
        return product

    async def update_product(
        self, product_id: UUID, tenant_id: UUID, data: ProductUpdate
    ) -> Product:
        product = await self.get_product(product_id, tenant_id)
        changes = data.model_dump(exclude_unset=True)

        new_sku = changes.get("sku")
        if new_sku and new_sku != product.sku:
            await self._ensure_sku_free(new_sku, tenant_id, exclude_id=product.id)

        for field, value in changes.items():
            setattr(product, field, value)
        return await self.repo.update(product)

    async def delete_product(self, product_id: UUID, tenant_id: UUID) -> None:
        product = await self.get_product(product_id, tenant_id)
        await self.repo.soft_delete(product)
        logger.info("product_deleted", product_id=str(product_id))

    async def duplicate_product(self, product_id: UUID, tenant_id: UUID) -> Product:
        """Copy a product. The copy has no SKU and its name is suffixed."""
        source = await self.get_product(product_id, tenant_id)
        copy = Product(
            tenant_id=tenant_id,
            name=f"{source.name}{DUPLICATE_SUFFIX}",
            description=source.description,
            short_description=source.short_description,
            sku=None,
            ean=source.ean,
            category=source.category,
            brand=source.brand,
            type=source.type,
            format=source.format,
            tags=list(source.tags or []),
            images=list(source.images or []),
            price=source.price,
            cost=source.cost,
            stock=source.stock,
            is_active=source.is_active,
        )
        return await self.repo.create(copy)

    # ============================================================
    # Variants
    # ============================================================

    async def list_variants(self, product_id: UUID, tenant_id: UUID) -> list[ProductVariant]:
        await self.get_product(product_id, tenant_id)
        return await self.repo.list_variants(product_id, tenant_id)

    async def _get_variant(
        self, variant_id: UUID, product_id: UUID, tenant_id: UUID
    ) -> ProductVariant:
        variant = await self.repo.get_variant(variant_id, product_id, tenant_id)
        if not variant:
            raise NotFoundError(
                "Variant not found",
                resource="product_variant",
                resource_id=str(variant_id),
            )
        return variant

    async def create_variant(
        self, product_id: UUID, tenant_id: UUID, data: VariantCreate
    ) -> ProductVariant:
        await self.get_product(product_id, tenant_id)
        variant = ProductVariant(
            tenant_id=tenant_id,
            product_id=product_id,
            **data.model_dump(),
        )
        return await self.repo.create_variant(variant)

    async def update_variant(
        self,
        product_id: UUID,
        variant_id: UUID,
        tenant_id: UUID,
        data: VariantUpdate,
    ) -> ProductVariant:
        variant = await self._get_variant(variant_id, product_id, tenant_id)
        for field, value in data.model_dump(exclude_unset=True).items():
            setattr(variant, field, value)
        return await self.repo.update_variant(variant)

    async def delete_variant(
        self, product_id: UUID, variant_id: UUID, tenant_id: UUID
    ) -> None:
        variant = await self._get_variant(variant_id, product_id, tenant_id)
        variant.soft_delete()
        await self.repo.update_variant(variant)


ProductSvc = Annotated[ProductService, Depends(ProductService)]
