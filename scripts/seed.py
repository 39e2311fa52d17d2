#!/usr/bin/env python
"""
Generate demo/seed data for development.

    python scripts/seed.py --scenario default
    python scripts/seed.py --scenario demo
"""

import argparse
import asyncio
import datetime as dt
import sys
from decimal import Decimal

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.auth.backend import hash_password
from app.core.database import async_session_factory
from app.modules.notifications.models import (
    NotificationRule,
    NotificationTemplate,
    NotificationTrigger,
    NotificationType,
)
from app.modules.products.models import Product, ProductType, ProductVariant
from app.modules.staff.models import EmploymentType, Shift, Staff
from app.modules.tenants.models import Tenant
from app.modules.users.models import User


DEMO_PASSWORD = "muralla-demo-1"


async def get_or_create_tenant(
    session: AsyncSession, name: str, slug: str, rut: str | None
) -> tuple[Tenant, bool]:
    result = await session.execute(select(Tenant).where(Tenant.slug == slug))
    existing = result.scalar_one_or_none()
    if existing:
        print(f"Tenant already exists: {existing.name}")
        return existing, False

    tenant = Tenant(name=name, slug=slug, rut=rut, is_active=True)
    session.add(tenant)
    await session.flush()
    print(f"Created tenant: {tenant.name} ({tenant.id})")
    return tenant, True


async def seed_default() -> None:
    """One tenant with an administrator."""
    async with async_session_factory() as session:
        tenant, created = await get_or_create_tenant(
            session, "Muralla Café", "muralla", "76.123.456-0"
        )
        if created:
            session.add(
                User(
                    tenant_id=tenant.id,
                    email="admin@muralla.cl",
                    password_hash=hash_password(DEMO_PASSWORD),
                    full_name="Administrador",
                    is_superuser=True,
                )
            )
            print(f"Created admin@muralla.cl (password: {DEMO_PASSWORD})")
        await session.commit()


async def seed_demo() -> None:
    """Default tenant plus staff, shifts, products and PTO notifications."""
    await seed_default()

    async with async_session_factory() as session:
        result = await session.execute(select(Tenant).where(Tenant.slug == "muralla"))
        tenant = result.scalar_one()

        existing = await session.execute(
            select(Staff.id).where(Staff.tenant_id == tenant.id).limit(1)
        )
        if existing.first():
            print("Demo data already present")
            return

        barista = Staff(
            tenant_id=tenant.id,
            first_name="Camila",
            last_name="Rojas",
            email="camila@muralla.cl",
            rut="12.345.678-5",
            position="Barista",
            department="Sala",
            employment_type=EmploymentType.HOURLY,
            hourly_rate=Decimal("4500"),
            hire_date=dt.date(2024, 3, 1),
        )
        baker = Staff(
            tenant_id=tenant.id,
            first_name="Diego",
            last_name="Muñoz",
            position="Panadero",
            department="Cocina",
            employment_type=EmploymentType.FULL_TIME,
            base_salary=Decimal("750000"),
        )
        session.add_all([barista, baker])
        await session.flush()

        for weekday in range(5):
            session.add(
                Shift(
                    tenant_id=tenant.id,
                    staff_id=barista.id,
                    day_of_week=weekday,
                    start_time=dt.time(8, 0),
                    end_time=dt.time(16, 0),
                )
            )

        bread = Product(
            tenant_id=tenant.id,
            name="Pan de masa madre",
            sku="PAN-001",
            category="Panadería",
            type=ProductType.MANUFACTURED,
            price=Decimal("4200"),
            stock=12,
        )
        session.add(bread)
        await session.flush()
        session.add(
            ProductVariant(
                tenant_id=tenant.id,
                product_id=bread.id,
                name="Media unidad",
                price=Decimal("2300"),
                stock=6,
            )
        )

        template = NotificationTemplate(
            tenant_id=tenant.id,
            name="PTO solicitado",
            type=NotificationType.IN_APP,
            subject="Nueva solicitud de vacaciones",
            content="{{staff.full_name}} pidió {{days_requested}} días desde {{start_date}}.",
            variables=["staff.full_name", "days_requested", "start_date"],
        )
        session.add(template)
        await session.flush()
        session.add(
            NotificationRule(
                tenant_id=tenant.id,
                name="Avisar a todos de nuevas solicitudes",
                template_id=template.id,
                trigger=NotificationTrigger.PTO_REQUESTED,
                recipients=[{"type": "all"}],
            )
        )

        await session.commit()
        print("Created demo staff, shifts, products and notification rules")


async def main(scenario: str) -> None:
    """Run the seeding based on scenario."""
    if scenario == "default":
        await seed_default()
    elif scenario == "demo":
        await seed_demo()
    else:
        print(f"Unknown scenario: {scenario}")
        print("Available scenarios: default, demo")
        sys.exit(1)


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Seed database with demo data")
    parser.add_argument(
        "--scenario",
        "-s",
        default="default",
        help="Seed scenario to run (default, demo)",
    )
    args = parser.parse_args()

    asyncio.run(main(args.scenario))
