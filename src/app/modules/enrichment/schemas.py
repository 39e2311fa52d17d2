"""Pydantic schemas for product enrichment."""

from typing import Any, Literal
from uuid import UUID

from pydantic import BaseModel, Field, HttpUrl


Confidence = Literal["high", "medium", "low"]


class EnrichmentRequest(BaseModel):
    """What is known about the product.

    When ``product_id`` is given the stored product fills any field left
    empty here.
    """

    product_id: UUID | None = None
    name: str | None = Field(None, max_length=255)
    ean: str | None = Field(None, max_length=32)
    source_url: HttpUrl | None = None
    brand: str | None = Field(None, max_length=100)
    category: str | None = Field(None, max_length=100)
    description: str | None = None


class EnrichmentMethodResult(BaseModel):
    name: str
    description: str
    data: dict[str, Any]
    metadata: dict[str, Any] = Field(default_factory=dict)
    cost: float = 0.0
    confidence: Confidence


class EnrichmentResponse(BaseModel):
    success: bool = True
    current_data: dict[str, Any]
    enrichment_methods: list[EnrichmentMethodResult]
