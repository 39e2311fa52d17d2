"""Pytest configuration and shared fixtures.

API tests run the real application. The database session and the tenant
dependency are replaced through ``dependency_overrides``; each test
overrides the services it talks to. Tests marked ``integration`` need a
PostgreSQL database and are skipped by default.
"""

from collections.abc import AsyncGenerator, Callable, Generator
from typing import Any
from unittest.mock import AsyncMock
from uuid import UUID, uuid4

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from app.core.auth.dependencies import get_optional_user_id, get_tenant_id
from app.core.database import get_db
from app.main import create_app
from tests.fakes import fake_session


@pytest.fixture
def tenant_id() -> UUID:
    return uuid4()


@pytest.fixture
def user_id() -> UUID:
    return uuid4()


@pytest.fixture
def db_session() -> AsyncMock:
    return fake_session()


@pytest.fixture
def app(tenant_id: UUID, user_id: UUID, db_session: AsyncMock) -> Generator[FastAPI, None, None]:
    """Application with the tenant and session dependencies replaced."""
    application = create_app()
    application.dependency_overrides[get_db] = lambda: db_session
    application.dependency_overrides[get_tenant_id] = lambda: tenant_id
    application.dependency_overrides[get_optional_user_id] = lambda: user_id
    yield application
    application.dependency_overrides.clear()


@pytest.fixture
def override(app: FastAPI) -> Callable[[Any, Any], Any]:
    """Replace a dependency (usually a service class) with a stand-in.

    Usage:
        service = override(ProductService, AsyncMock())
    """

    def _override(dependency: Any, replacement: Any) -> Any:
        app.dependency_overrides[dependency] = lambda: replacement
        return replacement

    return _override


@pytest.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """Provide async HTTP client for API testing."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as client:
        yield client
