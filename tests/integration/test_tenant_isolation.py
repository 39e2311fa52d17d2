"""Tenant isolation against a real database."""

import pytest
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.auth.backend import create_access_token, hash_password
from app.modules.tenants.models import Tenant
from app.modules.users.models import User


pytestmark = pytest.mark.integration


async def make_member(db: AsyncSession, slug: str) -> tuple[Tenant, str]:
    tenant = Tenant(name=slug.title(), slug=slug, rut=None)
    db.add(tenant)
    await db.flush()
    user = User(
        tenant_id=tenant.id,
        email=f"admin@{slug}.cl",
        password_hash=hash_password("password123"),
        full_name="Admin",
        is_superuser=True,
    )
    db.add(user)
    await db.flush()
    return tenant, create_access_token(user.id, tenant.id)


async def test_products_are_scoped_to_tenant(db: AsyncSession, live_client: AsyncClient):
    _, token_a = await make_member(db, "panaderia")
    _, token_b = await make_member(db, "cafeteria")

    created = await live_client.post(
        "/api/v1/products",
        json={"name": "Marraqueta", "sku": "PAN-1", "price": "350"},
        headers={"Authorization": f"Bearer {token_a}"},
    )
    assert created.status_code == 201
    product_id = created.json()["id"]

    other = await live_client.get(
        f"/api/v1/products/{product_id}", headers={"Authorization": f"Bearer {token_b}"}
    )
    assert other.status_code == 404

    listing = await live_client.get(
        "/api/v1/products", headers={"Authorization": f"Bearer {token_b}"}
    )
    assert listing.json()["total"] == 0

    # The same SKU is free in another tenant
    same_sku = await live_client.post(
        "/api/v1/products",
        json={"name": "Marraqueta", "sku": "PAN-1", "price": "400"},
        headers={"Authorization": f"Bearer {token_b}"},
    )
    assert same_sku.status_code == 201


async def test_header_tenant_must_exist(live_client: AsyncClient):
    response = await live_client.get(
        "/api/v1/contacts", headers={"X-Tenant-ID": "00000000-0000-0000-0000-000000000000"}
    )

    assert response.status_code == 401
