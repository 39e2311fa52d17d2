"""Pydantic schemas for image uploads."""

from pydantic import BaseModel, Field


class ImageUploadRequest(BaseModel):
    image_url: str = Field(..., min_length=1)
    product_name: str | None = Field(None, max_length=255)
    folder: str = Field("products", min_length=1, max_length=100, pattern=r"^[\w\-/]+$")


class ImageUploadResponse(BaseModel):
    success: bool = True
    url: str
    public_id: str
    width: int | None = None
    height: int | None = None
    format: str | None = None
    bytes: int | None = None
