"""PTO API tests."""

import datetime as dt
from unittest.mock import AsyncMock
from uuid import uuid4

from app.modules.pto.models import PTOStatus
from app.modules.pto.services import PTOService
from tests.factories.staff import PTORequestFactory


def pto(**kwargs):
    return PTORequestFactory.build(
        id=uuid4(), staff_id=uuid4(), requested_date=dt.datetime.now(dt.UTC), **kwargs
    )


async def test_approve_records_reviewer(client, override, tenant_id, user_id):
    service = override(PTOService, AsyncMock())
    service.approve_request.return_value = pto(status=PTOStatus.APPROVED, reviewed_by=user_id)
    request_id = uuid4()

    response = await client.post(f"/api/v1/pto/{request_id}/approve")

    assert response.status_code == 200
    assert response.json()["status"] == "APPROVED"
    service.approve_request.assert_awaited_once_with(request_id, tenant_id, reviewer_id=user_id)


async def test_deny_with_reason(client, override, tenant_id, user_id):
    service = override(PTOService, AsyncMock())
    service.deny_request.return_value = pto(status=PTOStatus.DENIED, denial_reason="Temporada alta")
    request_id = uuid4()

    response = await client.post(
        f"/api/v1/pto/{request_id}/deny", json={"denial_reason": "Temporada alta"}
    )

    assert response.status_code == 200
    service.deny_request.assert_awaited_once_with(
        request_id, tenant_id, denial_reason="Temporada alta", reviewer_id=user_id
    )


async def test_deny_without_body(client, override, tenant_id, user_id):
    service = override(PTOService, AsyncMock())
    service.deny_request.return_value = pto(status=PTOStatus.DENIED)
    request_id = uuid4()

    await client.post(f"/api/v1/pto/{request_id}/deny")

    assert service.deny_request.await_args.kwargs["denial_reason"] is None

