"""Enrichment module - AI-assisted product data suggestions."""

from fastapi import APIRouter


router = APIRouter(prefix="/enrichment", tags=["enrichment"])

__module_info__ = {
    "name": "enrichment",
    "version": "1.0.0",
    "description": "Product enrichment with Gemini, OpenAI, web metadata and image search",
    "dependencies": ["products"],
}

from app.modules.enrichment import routes  # noqa: E402, F401
