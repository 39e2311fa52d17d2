"""Upload API routes."""

from app.core.auth.dependencies import TenantId
from app.modules.uploads import router
from app.modules.uploads.schemas import ImageUploadRequest, ImageUploadResponse
from app.modules.uploads.services import UploadSvc


@router.post(
    "/images",
    response_model=ImageUploadResponse,
    summary="Upload image by URL",
    description="Fetches the image into Cloudinary, limited to 1200x1200 with automatic quality and format.",
)
async def upload_image(
    data: ImageUploadRequest,
    tenant_id: TenantId,  # noqa: ARG001 - uploads require a tenant
    service: UploadSvc,
) -> ImageUploadResponse:
    result = await service.upload_image(data.image_url, data.product_name, data.folder)
    return ImageUploadResponse(**result)
