"""
OpenFactura (Haulmer) API client.

Connection Details:
    - Base URL: https://api.haulmer.com (OPENFACTURA_BASE_URL)
    - Auth: ``apikey`` header

Endpoints:
    - POST /v2/dte/document/received - page through documents received by the company
    - GET /v2/dte/document/{rut}/{code}/{folio}/{format} - one document as
      pdf, xml, cedible (base64 in JSON), json or status
"""

from __future__ import annotations

from datetime import date
from typing import Any

import httpx
import structlog

from app.clients.base import ClientError, ClientNotConfiguredError
from app.config import settings


logger = structlog.get_logger()

RECEIVED_PATH = "/v2/dte/document/received"
DOCUMENT_FORMATS = ("pdf", "xml", "json", "status", "cedible")
BASE64_FORMATS = ("pdf", "xml", "cedible")


class OpenFacturaError(ClientError):
    """OpenFactura request failed."""


class OpenFacturaNotFoundError(OpenFacturaError):
    def __init__(self, message: str = "Document not found in OpenFactura") -> None:
        super().__init__("NOT_FOUND", message, status_code=404)


class OpenFacturaClient:
    """
    Async HTTP client for the OpenFactura document API.

    Example:
        async with OpenFacturaClient() as client:
            page = await client.list_received(1, date(2025, 1, 1), date(2025, 1, 31))
    """

    def __init__(
        self,
        api_key: str | None = None,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._api_key = api_key or settings.openfactura_api_key
        self._base_url = (base_url or settings.openfactura_base_url).rstrip("/")
        self._timeout = timeout or settings.http_timeout_seconds
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    @property
    def is_configured(self) -> bool:
        return bool(self._api_key)

    async def __aenter__(self) -> OpenFacturaClient:
        if not self._api_key:
            raise ClientNotConfiguredError("OpenFactura")
        self._client = httpx.AsyncClient(
            base_url=self._base_url,
            headers={"apikey": self._api_key, "Content-Type": "application/json"},
            timeout=self._timeout,
            transport=self._transport,
        )
        return self

    async def __aexit__(self, *args: object) -> None:
        if self._client:
            await self._client.aclose()
            self._client = None

    async def _request(self, method: str, path: str, **kwargs: Any) -> dict[str, Any]:
        if not self._client:
            raise OpenFacturaError(
                "CLIENT_NOT_INITIALIZED", "Client not initialized. Use 'async with' context."
            )

        try:
            response = await self._client.request(method, path, **kwargs)
        except httpx.HTTPError as e:
            raise OpenFacturaError("CONNECTION_ERROR", str(e)) from e

        if response.status_code == 404:
            raise OpenFacturaNotFoundError()
        if response.status_code >= 400:
            raise OpenFacturaError(
                "API_ERROR",
                f"OpenFactura returned {response.status_code}: {response.text[:500]}",
                status_code=response.status_code,
            )

        try:
            data = response.json()
        except ValueError as e:
            raise OpenFacturaError("INVALID_RESPONSE", "Response is not JSON") from e
        if not isinstance(data, dict):
            raise OpenFacturaError(
                "INVALID_RESPONSE", f"Expected a JSON object, got {type(data).__name__}"
            )
        return data

    async def list_received(
        self,
        page: int,
        date_from: date | None = None,
        date_to: date | None = None,
        filters: dict[str, dict[str, Any]] | None = None,
    ) -> dict[str, Any]:
        """
        Fetch one page of received documents.

        Args:
            page: 1-based page number
            date_from: Lower bound on FchEmis (inclusive)
            date_to: Upper bound on FchEmis (inclusive)
            filters: Extra filters keyed by field, e.g. ``{"TipoDTE": {"eq": 33}}``

        Returns:
            dict with current_page, last_page, total and data
        """
        payload: dict[str, Any] = {"Page": str(page)}

        emission: dict[str, str] = {}
        if date_from:
            emission["gte"] = date_from.isoformat()
        if date_to:
            emission["lte"] = date_to.isoformat()
        if emission:
            payload["FchEmis"] = emission
        if filters:
            payload.update(filters)

        data = await self._request("POST", RECEIVED_PATH, json=payload)
        logger.info(
            "openfactura_page_fetched",
            page=data.get("current_page", page),
            last_page=data.get("last_page"),
            count=len(data.get("data") or []),
        )
        return data

    async def get_document(
        self,
        rut: str,
        document_code: int,
        folio: str | int,
        fmt: str = "json",
    ) -> dict[str, Any]:
        """Fetch a document in one of ``DOCUMENT_FORMATS``.

        ``rut`` is the emitter in ``12345678-5`` form. For pdf, xml and cedible
        the payload holds the file base64-encoded under the format's key.
        """
        if fmt not in DOCUMENT_FORMATS:
            raise OpenFacturaError("VALIDATION_ERROR", f"Unsupported format: {fmt}")
        return await self._request(
            "GET", f"/v2/dte/document/{rut}/{document_code}/{folio}/{fmt}"
        )
