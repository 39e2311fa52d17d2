"""Unit tests for the Cloudinary upload client."""

import hashlib
from urllib.parse import parse_qs

import httpx
import pytest

from app.clients.base import ClientNotConfiguredError
from app.clients.cloudinary import CloudinaryClient, CloudinaryError, sign_params


def test_signature_uses_sorted_non_empty_params():
    params = {"timestamp": 1700000000, "folder": "productos", "public_id": "p1", "eager": ""}

    expected = hashlib.sha1(
        b"folder=productos&public_id=p1&timestamp=1700000000secret"
    ).hexdigest()
    assert sign_params(params, "secret") == expected


async def test_upload_posts_signed_form():
    captured: dict = {}

    def handler(request: httpx.Request) -> httpx.Response:
        captured["url"] = str(request.url)
        captured["form"] = {k: v[0] for k, v in parse_qs(request.content.decode()).items()}
        return httpx.Response(
            200, json={"secure_url": "https://res.cloudinary.com/x.jpg", "public_id": "productos/p1"}
        )

    client = CloudinaryClient("demo", "api-key", "api-secret", transport=httpx.MockTransport(handler))
    result = await client.upload_from_url("https://img.cl/a.jpg", "productos", "p1")

    assert captured["url"] == "https://api.cloudinary.com/v1_1/demo/image/upload"
    form = captured["form"]
    assert form["file"] == "https://img.cl/a.jpg"
    assert form["api_key"] == "api-key"
    signed = {k: form[k] for k in ("folder", "public_id", "timestamp", "transformation")}
    assert form["signature"] == sign_params(signed, "api-secret")
    assert result["secure_url"] == "https://res.cloudinary.com/x.jpg"


async def test_upload_error_message_is_kept():
    client = CloudinaryClient(
        "demo",
        "k",
        "s",
        transport=httpx.MockTransport(
            lambda request: httpx.Response(400, json={"error": {"message": "Resource not found"}})
        ),
    )

    with pytest.raises(CloudinaryError) as exc_info:
        await client.upload_from_url("https://img.cl/missing.jpg", "productos", "p1")

    assert exc_info.value.error_message == "Resource not found"
    assert exc_info.value.status_code == 400


async def test_unconfigured(monkeypatch):
    monkeypatch.setattr("app.clients.cloudinary.settings.cloudinary_cloud_name", None)

    with pytest.raises(ClientNotConfiguredError):
        await CloudinaryClient().upload_from_url("https://img.cl/a.jpg", "f", "p")
