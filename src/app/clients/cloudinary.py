"""
Cloudinary signed upload client.

Images are uploaded by remote URL; Cloudinary fetches them itself.
Signature: SHA-1 of the sorted ``key=value`` pairs joined with ``&``,
followed by the API secret.
"""

import hashlib
import time
from typing import Any

import httpx
import structlog

from app.clients.base import ClientError, ClientNotConfiguredError
from app.config import settings


logger = structlog.get_logger()

UPLOAD_URL = "https://api.cloudinary.com/v1_1/{cloud_name}/image/upload"
DEFAULT_TRANSFORMATION = "c_limit,h_1200,w_1200/q_auto:good/f_auto"


class CloudinaryError(ClientError):
    """Upload failed."""


def sign_params(params: dict[str, Any], api_secret: str) -> str:
    to_sign = "&".join(
        f"{key}={params[key]}" for key in sorted(params) if params[key] not in (None, "")
    )
    return hashlib.sha1(f"{to_sign}{api_secret}".encode()).hexdigest()  # noqa: S324


class CloudinaryClient:
    def __init__(
        self,
        cloud_name: str | None = None,
        api_key: str | None = None,
        api_secret: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._cloud_name = cloud_name or settings.cloudinary_cloud_name
        self._api_key = api_key or settings.cloudinary_api_key
        self._api_secret = api_secret or settings.cloudinary_api_secret
        self._transport = transport

    @property
    def is_configured(self) -> bool:
        return bool(self._cloud_name and self._api_key and self._api_secret)

    async def upload_from_url(
        self,
        image_url: str,
        folder: str,
        public_id: str,
        transformation: str = DEFAULT_TRANSFORMATION,
    ) -> dict[str, Any]:
        """Upload a remote image.

        Returns:
            Cloudinary's upload result (secure_url, public_id, width, height,
            format, bytes, ...)
        """
        if not self.is_configured:
            raise ClientNotConfiguredError("Cloudinary")

        params: dict[str, Any] = {
            "folder": folder,
            "public_id": public_id,
            "timestamp": int(time.time()),
            "transformation": transformation,
        }
        form = {
            **params,
            "file": image_url,
            "api_key": self._api_key,
            "signature": sign_params(params, self._api_secret or ""),
        }

        try:
            async with httpx.AsyncClient(
                timeout=settings.http_timeout_seconds, transport=self._transport
            ) as client:
                response = await client.post(
                    UPLOAD_URL.format(cloud_name=self._cloud_name), data=form
                )
        except httpx.HTTPError as e:
            raise CloudinaryError("CONNECTION_ERROR", str(e)) from e

        if response.status_code >= 400:
            try:
                message = response.json().get("error", {}).get("message", response.text)
            except ValueError:
                message = response.text
            raise CloudinaryError("UPLOAD_FAILED", message, status_code=response.status_code)

        result = response.json()
        logger.info(
            "cloudinary_upload_completed",
            public_id=result.get("public_id"),
            bytes=result.get("bytes"),
        )
        return result
