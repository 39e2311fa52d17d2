"""FastAPI dependencies that hand out client instances.

Routes and services receive clients through these so tests can swap them
with ``app.dependency_overrides``.
"""

from typing import Annotated

from fastapi import Depends

from app.clients.cloudinary import CloudinaryClient
from app.clients.gemini import GeminiClient
from app.clients.image_search import ImageSearchClient
from app.clients.openai_client import OpenAIClient
from app.clients.openfactura import OpenFacturaClient


def get_gemini_client() -> GeminiClient:
    return GeminiClient()


def get_openai_client() -> OpenAIClient:
    return OpenAIClient()


def get_image_search_client() -> ImageSearchClient:
    return ImageSearchClient()


def get_cloudinary_client() -> CloudinaryClient:
    return CloudinaryClient()


def get_openfactura_client() -> OpenFacturaClient:
    """A fresh, not yet entered client; callers use ``async with``."""
    return OpenFacturaClient()


Gemini = Annotated[GeminiClient, Depends(get_gemini_client)]
OpenAI = Annotated[OpenAIClient, Depends(get_openai_client)]
ImageSearch = Annotated[ImageSearchClient, Depends(get_image_search_client)]
Cloudinary = Annotated[CloudinaryClient, Depends(get_cloudinary_client)]
OpenFactura = Annotated[OpenFacturaClient, Depends(get_openfactura_client)]
