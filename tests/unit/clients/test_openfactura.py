"""Unit tests for the OpenFactura client."""

import datetime as dt
import json

import httpx
import pytest

from app.clients.base import ClientNotConfiguredError
from app.clients.openfactura import (
    OpenFacturaClient,
    OpenFacturaError,
    OpenFacturaNotFoundError,
)


def client_for(handler) -> OpenFacturaClient:
    return OpenFacturaClient(
        api_key="key-123",
        base_url="https://openfactura.test/",
        transport=httpx.MockTransport(handler),
    )


async def test_list_received_builds_payload():
    requests: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(200, json={"current_page": 2, "last_page": 5, "data": []})

    async with client_for(handler) as client:
        data = await client.list_received(
            2, dt.date(2026, 1, 1), dt.date(2026, 1, 30), {"TipoDTE": {"eq": 33}}
        )

    (request,) = requests
    assert request.method == "POST"
    assert str(request.url) == "https://openfactura.test/v2/dte/document/received"
    assert request.headers["apikey"] == "key-123"
    assert json.loads(request.content) == {
        "Page": "2",
        "FchEmis": {"gte": "2026-01-01", "lte": "2026-01-30"},
        "TipoDTE": {"eq": 33},
    }
    assert data["last_page"] == 5


async def test_get_document_path():
    seen: list[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request.url.path)
        return httpx.Response(200, json={"xml": "PGR0ZS8+"})

    async with client_for(handler) as client:
        await client.get_document("76543210-3", 33, 1532, "xml")

    assert seen == ["/v2/dte/document/76543210-3/33/1532/xml"]


async def test_unsupported_format_is_rejected_locally():
    async with client_for(lambda request: httpx.Response(200, json={})) as client:
        with pytest.raises(OpenFacturaError) as exc_info:
            await client.get_document("76543210-3", 33, 1, "docx")

    assert exc_info.value.error_code == "VALIDATION_ERROR"


@pytest.mark.parametrize(
    ("response", "error_type", "code"),
    [
        (httpx.Response(404), OpenFacturaNotFoundError, "NOT_FOUND"),
        (httpx.Response(401, text="bad key"), OpenFacturaError, "API_ERROR"),
        (httpx.Response(200, text="<html>"), OpenFacturaError, "INVALID_RESPONSE"),
        (httpx.Response(200, json=[]), OpenFacturaError, "INVALID_RESPONSE"),
    ],
)
async def test_error_responses(response, error_type, code):
    async with client_for(lambda request: response) as client:
        with pytest.raises(error_type) as exc_info:
            await client.list_received(1)

    assert exc_info.value.error_code == code


async def test_connection_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("refused", request=request)

    async with client_for(handler) as client:
        with pytest.raises(OpenFacturaError) as exc_info:
            await client.list_received(1)

    assert exc_info.value.error_code == "CONNECTION_ERROR"


async def test_missing_key_fails_on_enter(monkeypatch):
    monkeypatch.setattr("app.clients.openfactura.settings.openfactura_api_key", None)
    client = OpenFacturaClient()

    assert client.is_configured is False
    with pytest.raises(ClientNotConfiguredError):
        async with client:
            pass


async def test_request_outside_context_fails():
    with pytest.raises(OpenFacturaError) as exc_info:
        await OpenFacturaClient(api_key="k").list_received(1)

    assert exc_info.value.error_code == "CLIENT_NOT_INITIALIZED"
