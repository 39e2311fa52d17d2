"""Pydantic schemas for products."""

from datetime import datetime
from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from app.core.constants import MAX_EAN_LENGTH, MAX_SKU_LENGTH, SHORT_DESCRIPTION_MAX_LENGTH
from app.modules.products.models import ProductFormat, ProductType


# ============================================================
# Product
# ============================================================


class ProductBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    description: str | None = None
    short_description: str | None = Field(None, max_length=SHORT_DESCRIPTION_MAX_LENGTH)
    sku: str | None = Field(None, max_length=MAX_SKU_LENGTH)
    ean: str | None = Field(None, max_length=MAX_EAN_LENGTH)
    category: str | None = Field(None, max_length=100)
    brand: str | None = Field(None, max_length=100)
    type: ProductType = ProductType.READY_PRODUCT
    format: ProductFormat | None = None
    tags: list[str] = Field(default_factory=list)
    images: list[str] = Field(default_factory=list)
    price: Decimal = Field(Decimal(0), ge=0)
    cost: Decimal | None = Field(None, ge=0)
    stock: int = 0
    is_active: bool = True


class ProductCreate(ProductBase):
    pass


class ProductUpdate(BaseModel):
    """Partial update; only fields that are sent are changed."""

    name: str | None = Field(None, min_length=1, max_length=255)
    description: str | None = None
    short_description: str | None = Field(None, max_length=SHORT_DESCRIPTION_MAX_LENGTH)
    sku: str | None = Field(None, max_length=MAX_SKU_LENGTH)
    ean: str | None = Field(None, max_length=MAX_EAN_LENGTH)
    category: str | None = Field(None, max_length=100)
    brand: str | None = Field(None, max_length=100)
    type: ProductType | None = None
    format: ProductFormat | None = None
    tags: list[str] | None = None
    images: list[str] | None = None
    price: Decimal | None = Field(None, ge=0)
    cost: Decimal | None = Field(None, ge=0)
    stock: int | None = None
    is_active: bool | None = None


class ProductResponse(ProductBase):
    id: UUID
    tenant_id: UUID
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ProductListResponse(BaseModel):
    items: list[ProductResponse]
    total: int
    page: int
    page_size: int


# ============================================================
# Variant
# ============================================================


class VariantCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    sku: str | None = Field(None, max_length=MAX_SKU_LENGTH)
    price: Decimal | None = Field(None, ge=0)
    stock: int = 0
    is_active: bool = True


class VariantUpdate(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=255)
    sku: str | None = Field(None, max_length=MAX_SKU_LENGTH)
    price: Decimal | None = Field(None, ge=0)
    stock: int | None = None
    is_active: bool | None = None


class VariantResponse(VariantCreate):
    id: UUID
    product_id: UUID
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
