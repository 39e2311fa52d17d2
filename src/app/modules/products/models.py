"""Product database models."""

from decimal import Decimal
from enum import StrEnum
from uuid import UUID

from sqlalchemy import Boolean, ForeignKey, Index, Integer, Numeric, String, Text, text
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column

from app.core.constants import MAX_EAN_LENGTH, MAX_SKU_LENGTH, SHORT_DESCRIPTION_MAX_LENGTH
from app.core.database.base import (
    Base,
    SoftDeleteMixin,
    TenantMixin,
    TimestampMixin,
    UUIDMixin,
)


class ProductType(StrEnum):
    INPUT = "INPUT"
    READY_PRODUCT = "READY_PRODUCT"
    MANUFACTURED = "MANUFACTURED"
    MADE_TO_ORDER = "MADE_TO_ORDER"
    SERVICE = "SERVICE"


class ProductFormat(StrEnum):
    PACKAGED = "PACKAGED"
    FROZEN = "FROZEN"
    FRESH = "FRESH"


class Product(Base, UUIDMixin, TimestampMixin, TenantMixin, SoftDeleteMixin):
    """A sellable or stocked item.

    A SKU, when set, is unique among the tenant's live products.
    """

    __tablename__ = "products"
    __table_args__ = (
        Index(
            "uq_products_tenant_sku",
            "tenant_id",
            "sku",
            unique=True,
            postgresql_where=text("sku IS NOT NULL AND is_deleted = false"),
        ),
    )

    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    description: Mapped[str | None] = mapped_column(Text)
    short_description: Mapped[str | None] = mapped_column(
        String(SHORT_DESCRIPTION_MAX_LENGTH)
    )
    sku: Mapped[str | None] = mapped_column(String(MAX_SKU_LENGTH))
    ean: Mapped[str | None] = mapped_column(String(MAX_EAN_LENGTH), index=True)
    category: Mapped[str | None] = mapped_column(String(100), index=True)
    brand: Mapped[str | None] = mapped_column(String(100))
    type: Mapped[str] = mapped_column(
        String(32), nullable=False, default=ProductType.READY_PRODUCT
    )
    format: Mapped[str | None] = mapped_column(String(32))
    tags: Mapped[list[str]] = mapped_column(JSONB, default=list, server_default="[]")
    images: Mapped[list[str]] = mapped_column(JSONB, default=list, server_default="[]")

    price: Mapped[Decimal] = mapped_column(Numeric(12, 2), default=0, nullable=False)
    cost: Mapped[Decimal | None] = mapped_column(Numeric(12, 2))
    stock: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    def __repr__(self) -> str:
        return f"<Product(id={self.id}, name={self.name}, sku={self.sku})>"


class ProductVariant(Base, UUIDMixin, TimestampMixin, TenantMixin, SoftDeleteMixin):
    """A size, flavour or presentation of a product."""

    __tablename__ = "product_variants"

    product_id: Mapped[UUID] = mapped_column(
        ForeignKey("products.id", ondelete="CASCADE"), nullable=False, index=True
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    sku: Mapped[str | None] = mapped_column(String(MAX_SKU_LENGTH))
    price: Mapped[Decimal | None] = mapped_column(Numeric(12, 2))
    stock: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
