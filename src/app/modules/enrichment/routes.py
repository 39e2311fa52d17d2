"""Enrichment API routes."""

from app.core.auth.dependencies import TenantId
from app.modules.enrichment import router
from app.modules.enrichment.schemas import EnrichmentRequest, EnrichmentResponse
from app.modules.enrichment.services import EnrichmentSvc


@router.post(
    "/products",
    response_model=EnrichmentResponse,
    summary="Suggest product data",
    description=(
        "Runs the standard (Gemini + OpenAI + image search), web extraction and "
        "grounded methods concurrently. Methods that fail are left out; if all "
        "fail the response is 502. Suggestions are not saved."
    ),
)
async def enrich_product(
    data: EnrichmentRequest, tenant_id: TenantId, service: EnrichmentSvc
) -> EnrichmentResponse:
    return await service.enrich(tenant_id, data)
