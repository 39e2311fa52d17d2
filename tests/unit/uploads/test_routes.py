"""Upload API tests."""

from unittest.mock import AsyncMock

from app.modules.uploads.services import UploadService


async def test_upload_image(client, override):
    service = override(UploadService, AsyncMock())
    service.upload_image.return_value = {
        "url": "https://res.cloudinary.com/x.jpg",
        "public_id": "menu/x",
        "width": 10,
        "height": 10,
        "format": "jpg",
        "bytes": 100,
    }

    response = await client.post(
        "/api/v1/uploads/images",
        json={"image_url": "https://img.cl/x.jpg", "product_name": "Torta", "folder": "menu"},
    )

    assert response.status_code == 200
    assert response.json()["success"] is True
    service.upload_image.assert_awaited_once_with("https://img.cl/x.jpg", "Torta", "menu")


async def test_folder_is_validated(client, override):
    override(UploadService, AsyncMock())

    response = await client.post(
        "/api/v1/uploads/images",
        json={"image_url": "https://img.cl/x.jpg", "folder": "../etc"},
    )

    assert response.status_code == 422
