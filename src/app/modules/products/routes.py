"""Product API routes."""

from uuid import UUID

from fastapi import Query, status

from app.api.dependencies import Pagination
from app.core.auth.dependencies import TenantId
from app.modules.products import router
from app.modules.products.models import ProductType
from app.modules.products.schemas import (
    ProductCreate,
    ProductListResponse,
    ProductResponse,
    ProductUpdate,
    VariantCreate,
    VariantResponse,
    VariantUpdate,
)
from app.modules.products.services import ProductSvc


# ============================================================
# Products
# ============================================================


@router.get("", response_model=ProductListResponse, summary="List products")
async def list_products(
    tenant_id: TenantId,
    service: ProductSvc,
    pagination: Pagination,
    search: str | None = Query(None, description="Matches name, SKU, EAN or brand"),
    category: str | None = None,
    type: ProductType | None = None,  # noqa: A002
    is_active: bool | None = None,
) -> ProductListResponse:
    products, total = await service.list_products(
        tenant_id,
        page=pagination.page,
        page_size=pagination.page_size,
        search=search,
        category=category,
        product_type=type,
        is_active=is_active,
    )
    return ProductListResponse(
        items=[ProductResponse.model_validate(p) for p in products],
        total=total,
        page=pagination.page,
        page_size=pagination.page_size,
    )


@router.post(
    "",
    response_model=ProductResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create product",
)
async def create_product(
    data: ProductCreate, tenant_id: TenantId, service: ProductSvc
) -> ProductResponse:
    product = await service.create_product(tenant_id, data)
    return ProductResponse.model_validate(product)


@router.get("/{product_id}", response_model=ProductResponse, summary="Get product")
async def get_product(
    product_id: UUID, tenant_id: TenantId, service: ProductSvc
) -> ProductResponse:
    product = await service.get_product(product_id, tenant_id)
    return ProductResponse.model_validate(product)


@router.patch("/{product_id}", response_model=ProductResponse, summary="Update product")
async def update_product(
    product_id: UUID, data: ProductUpdate, tenant_id: TenantId, service: ProductSvc
) -> ProductResponse:
    product = await service.update_product(product_id, tenant_id, data)
    return ProductResponse.model_validate(product)


@router.delete(
    "/{product_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete product",
    description="Soft delete a product and its variants.",
)
async def delete_product(product_id: UUID, tenant_id: TenantId, service: ProductSvc) -> None:
    await service.delete_product(product_id, tenant_id)


@router.post(
    "/{product_id}/duplicate",
    response_model=ProductResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Duplicate product",
)
async def duplicate_product(
    product_id: UUID, tenant_id: TenantId, service: ProductSvc
) -> ProductResponse:
    product = await service.duplicate_product(product_id, tenant_id)
    return ProductResponse.model_validate(product)


# ============================================================
# Variants
# ============================================================


@router.get(
    "/{product_id}/variants",
    response_model=list[VariantResponse],
    summary="List product variants",
)
async def list_variants(
    product_id: UUID, tenant_id: TenantId, service: ProductSvc
) -> list[VariantResponse]:
    variants = await service.list_variants(product_id, tenant_id)
    return [VariantResponse.model_validate(v) for v in variants]


@router.post(
    "/{product_id}/variants",
    response_model=VariantResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create product variant",
)
async def create_variant(
    product_id: UUID, data: VariantCreate, tenant_id: TenantId, service: ProductSvc
) -> VariantResponse:
    variant = await service.create_variant(product_id, tenant_id, data)
    return VariantResponse.model_validate(variant)


@router.patch(
    "/{product_id}/variants/{variant_id}",
    response_model=VariantResponse,
    summary="Update product variant",
)
async def update_variant(
    product_id: UUID,
    variant_id: UUID,
    data: VariantUpdate,
    tenant_id: TenantId,
    service: ProductSvc,
) -> VariantResponse:
    variant = await service.update_variant(product_id, variant_id, tenant_id, data)
    return VariantResponse.model_validate(variant)


@router.delete(
    "/{product_id}/variants/{variant_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete product variant",
)
async def delete_variant(
    product_id: UUID, variant_id: UUID, tenant_id: TenantId, service: ProductSvc
) -> None:
    await service.delete_variant(product_id, variant_id, tenant_id)
