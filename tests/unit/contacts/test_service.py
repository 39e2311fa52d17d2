"""Unit tests for ContactService."""

from unittest.mock import AsyncMock

import pytest

from app.core.errors import ConflictError, ValidationError
from app.modules.contacts.models import ContactType
from app.modules.contacts.schemas import ContactCreate, ContactUpdate
from app.modules.contacts.services import ContactService
from tests.factories.records import ContactFactory


@pytest.fixture
def repo() -> AsyncMock:
    repo = AsyncMock()
    repo.create.side_effect = lambda contact: contact
    repo.update.side_effect = lambda contact: contact
    repo.get_by_rut.return_value = None
    return repo


@pytest.fixture
def service(repo) -> ContactService:
    return ContactService(repo)


async def test_create_formats_rut(service, tenant_id):
    contact = await service.create_contact(
        tenant_id,
        ContactCreate(name="Molino Sur", rut="76543210-3", contact_type=ContactType.SUPPLIER),
    )

    assert contact.rut == "76.543.210-3"
    assert contact.contact_type == ContactType.SUPPLIER


async def test_invalid_rut_is_rejected(service, repo, tenant_id):
    with pytest.raises(ValidationError):
        await service.create_contact(tenant_id, ContactCreate(name="x", rut="76543210-9"))

    repo.create.assert_not_awaited()


async def test_duplicate_rut_conflicts(service, repo, tenant_id):
    repo.get_by_rut.return_value = ContactFactory.build(tenant_id=tenant_id)

    with pytest.raises(ConflictError):
        await service.create_contact(tenant_id, ContactCreate(name="x", rut="76.543.210-3"))


async def test_update_may_keep_own_rut(service, repo, tenant_id):
    contact = ContactFactory.build(tenant_id=tenant_id, rut="76.543.210-3")
    repo.get.return_value = contact
    repo.get_by_rut.return_value = contact

    updated = await service.update_contact(
        contact.id, tenant_id, ContactUpdate(rut="765432103", phone="+56 9 1234 5678")
    )

    assert updated.phone == "+56 9 1234 5678"


async def test_delete_is_soft(service, repo, tenant_id):
    contact = ContactFactory.build(tenant_id=tenant_id)
    repo.get.return_value = contact

    await service.delete_contact(contact.id, tenant_id)

    assert contact.is_deleted is True
