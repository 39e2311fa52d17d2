"""Image upload service."""

import time
import unicodedata
from typing import Annotated
from urllib.parse import urlparse

import structlog
from fastapi import Depends

from app.clients import ClientNotConfiguredError
from app.clients.cloudinary import CloudinaryError
from app.clients.dependencies import Cloudinary
from app.core.errors import BadGatewayError, BadRequestError, ServiceUnavailableError
from app.core.utils.text import generate_slug


logger = structlog.get_logger()


def build_public_id(product_name: str | None, timestamp: int | None = None) -> str:
    """ASCII slug of the product name followed by a timestamp."""
    ascii_name = (
        unicodedata.normalize("NFKD", product_name or "")
        .encode("ascii", "ignore")
        .decode()
    )
    slug = generate_slug(ascii_name, max_length=60).strip("-") or "product"
    return f"{slug}-{timestamp or int(time.time())}"


class UploadService:
    def __init__(self, cloudinary: Cloudinary) -> None:
        self.cloudinary = cloudinary

    async def upload_image(
        self,
        image_url: str,
        product_name: str | None = None,
        folder: str = "products",
    ) -> dict:
        """Copy a remote image into Cloudinary.

        Raises:
            BadRequestError: If the URL is not http(s)
            ServiceUnavailableError: If Cloudinary is not configured
            BadGatewayError: If Cloudinary rejects the upload
        """
        if urlparse(image_url).scheme not in ("http", "https"):
            raise BadRequestError(
                "Image URL must be http or https",
                error_code="invalid_image_url",
            )

        public_id = build_public_id(product_name)
        try:
            result = await self.cloudinary.upload_from_url(image_url, folder, public_id)
        except ClientNotConfiguredError as e:
            raise ServiceUnavailableError(
                "Image hosting is not configured",
                error_code="upload_not_configured",
            ) from e
        except CloudinaryError as e:
            logger.error("image_upload_failed", image_url=image_url, error=e.error_message)
            raise BadGatewayError(
                "Image upload failed",
                error_code="upload_failed",
                details={"reason": e.error_message},
            ) from e

        return {
            "url": result.get("secure_url") or result.get("url"),
            "public_id": result.get("public_id", f"{folder}/{public_id}"),
            "width": result.get("width"),
            "height": result.get("height"),
            "format": result.get("format"),
            "bytes": result.get("bytes"),
        }


UploadSvc = Annotated[UploadService, Depends(UploadService)]
