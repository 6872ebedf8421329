import logging

from fastapi import APIRouter, Depends, File, Form, UploadFile

from app.api.deps import get_app_settings, get_transform_service
from app.api.errors import error_response
from app.core.config import Settings
from app.schemas import ErrorResponse, StylesResponse, TransformResponse
from app.services.gemini import ImageGenerationError
from app.services.transform import TransformService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["transform"])


@router.post(
    "/transform",
    response_model=TransformResponse,
    responses={500: {"model": ErrorResponse}},
)
async def transform_image(
    file: UploadFile | None = File(None),
    style: str | None = Form(None),
    service: TransformService = Depends(get_transform_service),
):
    try:
        if file is None or style is None:
            raise ValueError("Form fields file and style are required")
        image = await file.read()
        mime_type = file.content_type or "application/octet-stream"
        result = await service.transform(image, mime_type, style)
    except ImageGenerationError as exc:
        logger.exception("Image generation failed for style %r", style)
        return error_response(str(exc))
    except Exception:
        logger.exception("Error during image processing")
        return error_response("Failed to transform image")

    return TransformResponse(transformed_image_url=result.public_url)


@router.get("/styles", response_model=StylesResponse)
async def list_styles(settings: Settings = Depends(get_app_settings)) -> StylesResponse:
    return StylesResponse(styles=settings.available_styles, default=settings.default_style)
