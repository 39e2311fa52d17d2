"""Product repository for database operations."""

from datetime import UTC, datetime
from typing import Annotated
from uuid import UUID

from fastapi import Depends
from sqlalchemy import or_, select, update

from app.api.dependencies import DBSession
from app.core.database import paginate
from app.modules.products.models import Product, ProductVariant


class ProductRepository:
    """Data access for products and variants. Soft-deleted rows are never returned."""

    def __init__(self, session: DBSession) -> None:
        self.session = session

    # ============================================================
    # Products
    # ============================================================

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
        stmt = select(Product).where(
            Product.tenant_id == tenant_id,
            Product.is_deleted.is_(False),
        )
        if search:
            pattern = f"%{search}%"
            stmt = stmt.where(
                or_(
                    Product.name.ilike(pattern),
                    Product.sku.ilike(pattern),
                    Product.ean.ilike(pattern),
                    Product.brand.ilike(pattern),
                )
            )
        if category:
            stmt = stmt.where(Product.category == category)
        if product_type:
            stmt = stmt.where(Product.type == product_type)
        if is_active is not None:
            stmt = stmt.where(Product.is_active.is_(is_active))

        return await paginate(self.session, stmt.order_by(Product.name), page, page_size)

    async def get(self, product_id: UUID, tenant_id: UUID) -> Product | None:
        stmt = select(Product).where(
            Product.id == product_id,
            Product.tenant_id == tenant_id,
            Product.is_deleted.is_(False),
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_sku(self, sku: str, tenant_id: UUID) -> Product | None:
        stmt = select(Product).where(
            Product.sku == sku,
            Product.tenant_id == tenant_id,
            Product.is_deleted.is_(False),
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def create(self, product: Product) -> Product:
        self.session.add(product)
        await self.session.flush()
        await self.session.refresh(product)
        return product

    async def update(self, product: Product) -> Product:
        await self.session.flush()
        await self.session.refresh(product)
        return product

    async def soft_delete(self, product: Product) -> None:
        """Soft delete a product together with its variants."""
        product.soft_delete()
        await self.session.execute(
            update(ProductVariant)
            .where(
                ProductVariant.product_id == product.id,
                ProductVariant.is_deleted.is_(False),
            )
            .values(is_deleted=True, deleted_at=datetime.now(UTC))
        )
        await self.session.flush()

    # ============================================================
    # Variants
    # ============================================================

    async def list_variants(self, product_id: UUID, tenant_id: UUID) -> list[ProductVariant]:
        stmt = (
            select(ProductVariant)
            .where(
                ProductVariant.product_id == product_id,
                ProductVariant.tenant_id == tenant_id,
                ProductVariant.is_deleted.is_(False),
            )
            .order_by(ProductVariant.created_at)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def get_variant(
        self, variant_id: UUID, product_id: UUID, tenant_id: UUID
    ) -> ProductVariant | None:
        stmt = select(ProductVariant).where(
            ProductVariant.id == variant_id,
            ProductVariant.product_id == product_id,
            ProductVariant.tenant_id == tenant_id,
            ProductVariant.is_deleted.is_(False),
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def create_variant(self, variant: ProductVariant) -> ProductVariant:
        self.session.add(variant)
        await self.session.flush()
        await self.session.refresh(variant)
        return variant

    async def update_variant(self, variant: ProductVariant) -> ProductVariant:
        await self.session.flush()
        await self.session.refresh(variant)
        return variant


ProductRepo = Annotated[ProductRepository, Depends(ProductRepository)]
