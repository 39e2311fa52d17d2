"""Product enrichment.

Three independent methods run concurrently and each produces a full
suggestion for the product:

- ``standard``: Gemini and OpenAI answer the same prompt; answers are merged
  field by field and images come from Google Custom Search.
- ``web_extraction``: title and OpenGraph metadata of ``source_url``.
- ``grounded``: one Gemini call with Google Search grounding.

A failing method is dropped from the response. Only when all of them fail
does the request fail.
"""

import asyncio
from collections.abc import Awaitable
from typing import Annotated, Any
from uuid import UUID

import structlog
from fastapi import Depends

from app.clients import ClientError
from app.clients.dependencies import Gemini, ImageSearch, OpenAI
from app.clients.llm import parse_json_response
from app.clients.web_fetch import fetch_page_metadata, name_from_url
from app.core.constants import MAX_IMAGE_SUGGESTIONS
from app.core.errors import BadGatewayError, BadRequestError, NotFoundError
from app.modules.enrichment.normalize import merge_provider_results, normalize_suggestion
from app.modules.enrichment.prompts import (
    SYSTEM_PROMPT,
    build_enrichment_prompt,
    build_grounded_prompt,
)
from app.modules.enrichment.schemas import (
    EnrichmentMethodResult,
    EnrichmentRequest,
    EnrichmentResponse,
)
from app.modules.products.repos import ProductRepo


logger = structlog.get_logger()

STANDARD_COST = 0.001
GROUNDED_COST = 0.035
STANDARD_TEMPERATURE = 0.3
GROUNDED_TEMPERATURE = 0.2

_CURRENT_FIELDS = ("name", "ean", "brand", "category", "description")


class EnrichmentMethodError(Exception):
    """A method produced nothing usable."""


class EnrichmentService:
    def __init__(
        self,
        repo: ProductRepo,
        gemini: Gemini,
        openai: OpenAI,
        image_search: ImageSearch,
    ) -> None:
        self.repo = repo
        self.gemini = gemini
        self.openai = openai
        self.image_search = image_search

    async def enrich(self, tenant_id: UUID, request: EnrichmentRequest) -> EnrichmentResponse:
        """Run every applicable method and collect the ones that succeed.

        Raises:
            NotFoundError: If ``product_id`` is not a product of the tenant
            BadRequestError: If there is no name, EAN or source URL to work from
            BadGatewayError: If every method failed
        """
        current = await self._current_data(tenant_id, request)
        source_url = current.get("source_url")

        if not (current.get("name") or current.get("ean") or source_url):
            raise BadRequestError(
                "Product name, EAN or source URL is required",
                error_code="missing_product_identity",
            )

        methods: dict[str, Awaitable[EnrichmentMethodResult]] = {
            "standard": self._standard(current),
        }
        if source_url:
            methods["web_extraction"] = self._web_extraction(source_url)
        methods["grounded"] = self._grounded(current)

        outcomes = await asyncio.gather(*methods.values(), return_exceptions=True)

        results: list[EnrichmentMethodResult] = []
        for name, outcome in zip(methods, outcomes, strict=True):
            if isinstance(outcome, EnrichmentMethodResult):
                results.append(outcome)
            elif isinstance(outcome, Exception):
                logger.warning(
                    "enrichment_method_failed",
                    method=name,
                    error_type=type(outcome).__name__,
                    error=str(outcome),
                )
            else:
                raise outcome

        if not results:
            raise BadGatewayError(
                "All enrichment methods failed",
                error_code="enrichment_failed",
            )

        logger.info(
            "product_enriched",
            product_id=current.get("id"),
            methods=[r.name for r in results],
        )
        return EnrichmentResponse(current_data=current, enrichment_methods=results)

    async def _current_data(
        self, tenant_id: UUID, request: EnrichmentRequest
    ) -> dict[str, Any]:
        current: dict[str, Any] = {
            field: getattr(request, field) for field in _CURRENT_FIELDS
        }
        current["source_url"] = str(request.source_url) if request.source_url else None

        if request.product_id:
            product = await self.repo.get(request.product_id, tenant_id)
            if not product:
                raise NotFoundError(
                    "Product not found",
                    resource="product",
                    resource_id=str(request.product_id),
                )
            current["id"] = str(product.id)
            current["type"] = product.type
            current["format"] = product.format
            for field in _CURRENT_FIELDS:
                if not current.get(field):
                    current[field] = getattr(product, field)

        return current

    # ============================================================
    # Standard: Gemini + OpenAI + image search
    # ============================================================

    async def _ask_gemini(self, prompt: str) -> dict[str, Any] | None:
        try:
            response = await self.gemini.generate(prompt, temperature=STANDARD_TEMPERATURE)
            return parse_json_response(response.text, "gemini")
        except ClientError as e:
            logger.warning("enrichment_provider_failed", provider="gemini", error=str(e))
            return None

    async def _ask_openai(self, prompt: str) -> dict[str, Any] | None:
        try:
            response = await self.openai.generate(
                prompt, system_prompt=SYSTEM_PROMPT, temperature=STANDARD_TEMPERATURE
            )
            return parse_json_response(response.text, "openai")
        except ClientError as e:
            logger.warning("enrichment_provider_failed", provider="openai", error=str(e))
            return None

    async def _search_images(self, query: str | None) -> list[str]:
        if not query or not self.image_search.is_configured:
            return []
        try:
            return await self.image_search.search_images(query)
        except ClientError as e:
            logger.warning("image_search_failed", query=query, error=str(e))
            return []

    async def find_images(
        self, name: str | None, brand: str | None, ean: str | None
    ) -> tuple[list[str], dict[str, int]]:
        """Barcode hits first, then name hits, deduplicated and capped."""
        name_query = " ".join(part for part in (brand, name) if part) or None
        by_barcode, by_name = await asyncio.gather(
            self._search_images(ean),
            self._search_images(name_query),
        )

        images: list[str] = []
        for url in [*by_barcode, *by_name]:
            if url.startswith("http") and url not in images:
                images.append(url)

        counts = {"images_by_barcode": len(by_barcode), "images_by_name": len(by_name)}
        return images[:MAX_IMAGE_SUGGESTIONS], counts

    async def _standard(self, current: dict[str, Any]) -> EnrichmentMethodResult:
        prompt = build_enrichment_prompt(current)
        gemini_raw, openai_raw = await asyncio.gather(
            self._ask_gemini(prompt), self._ask_openai(prompt)
        )
        if gemini_raw is None and openai_raw is None:
            raise EnrichmentMethodError("Neither Gemini nor OpenAI answered")

        merged, fields = merge_provider_results(
            normalize_suggestion(gemini_raw, apply_defaults=False) if gemini_raw else None,
            normalize_suggestion(openai_raw, apply_defaults=False) if openai_raw else None,
        )

        images, image_counts = await self.find_images(
            merged.get("name") or current.get("name"),
            merged.get("brand") or current.get("brand"),
            merged.get("ean") or current.get("ean"),
        )
        merged["images"] = images
        data = normalize_suggestion(merged)
        data["name"] = data["name"] or current.get("name")

        return EnrichmentMethodResult(
            name="standard",
            description="Gemini + OpenAI + Google Images",
            data=data,
            metadata={
                "fields": fields,
                "sources": {
                    "gemini": gemini_raw is not None,
                    "openai": openai_raw is not None,
                    **image_counts,
                },
            },
            cost=STANDARD_COST,
            confidence="medium",
        )

    # ============================================================
    # Web extraction
    # ============================================================

    async def _web_extraction(self, source_url: str) -> EnrichmentMethodResult:
        page = await fetch_page_metadata(source_url)
        data = normalize_suggestion(
            {
                "name": page.best_title or name_from_url(source_url),
                "description": page.best_description,
                "brand": page.og_site_name,
                "images": [page.og_image] if page.og_image else [],
            }
        )
        return EnrichmentMethodResult(
            name="web_extraction",
            description="Metadata read from the product page",
            data=data,
            metadata={"page": page.to_dict()},
            cost=0.0,
            confidence="medium",
        )

    # ============================================================
    # Premium grounding
    # ============================================================

    async def _grounded(self, current: dict[str, Any]) -> EnrichmentMethodResult:
        response = await self.gemini.generate(
            build_grounded_prompt(current),
            temperature=GROUNDED_TEMPERATURE,
            grounded=True,
        )
        raw = parse_json_response(response.text, "gemini")
        data = normalize_suggestion(raw)
        data["name"] = data["name"] or current.get("name")

        return EnrichmentMethodResult(
            name="grounded",
            description="Gemini with Google Search grounding",
            data=data,
            metadata={
                "search_queries": response.search_queries,
                "sources": response.sources,
                "verified": bool(raw.get("verified")),
            },
            cost=GROUNDED_COST,
            confidence="high",
        )


EnrichmentSvc = Annotated[EnrichmentService, Depends(EnrichmentService)]
