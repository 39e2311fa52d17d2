"""Alembic environment.

Uses the application's settings for the database URL and imports every
model module so ``Base.metadata`` is complete for autogenerate.
"""

import asyncio
from logging.config import fileConfig

from alembic import context
from sqlalchemy import pool
from sqlalchemy.engine import Connection
from sqlalchemy.ext.asyncio import async_engine_from_config

from app.config import settings
from app.core.database.base import Base

# Register all models with Base.metadata
from app.modules.contacts import models as contacts_models  # noqa: F401
from app.modules.events import models as events_models  # noqa: F401
from app.modules.invoices import models as invoices_models  # noqa: F401
from app.modules.notifications import models as notifications_models  # noqa: F401
from app.modules.payroll import models as payroll_models  # noqa: F401
from app.modules.products import models as products_models  # noqa: F401
from app.modules.pto import models as pto_models  # noqa: F401
from app.modules.staff import models as staff_models  # noqa: F401
from app.modules.tenants import models as tenants_models  # noqa: F401
from app.modules.users import models as users_models  # noqa: F401


config = context.config
config.set_main_option("sqlalchemy.url", settings.async_database_url.replace("%", "%%"))

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata


def run_migrations_offline() -> None:
    """Emit SQL to the script output without a database connection."""
    context.configure(
        url=config.get_main_option("sqlalchemy.url"),
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        compare_type=True,
    )

    with context.begin_transaction():
        context.run_migrations()


def do_run_migrations(connection: Connection) -> None:
    context.configure(
        connection=connection,
        target_metadata=target_metadata,
        compare_type=True,
    )

    with context.begin_transaction():
        context.run_migrations()


async def run_migrations_online() -> None:
    connectable = async_engine_from_config(
        config.get_section(config.config_ini_section, {}),
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )

    async with connectable.connect() as connection:
        await connection.run_sync(do_run_migrations)

    await connectable.dispose()


if context.is_offline_mode():
    run_migrations_offline()
else:
    asyncio.run(run_migrations_online())
