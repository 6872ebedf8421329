import logging

from fastapi import APIRouter, Depends

from app.api.deps import get_storage
from app.api.errors import error_response
from app.schemas import ErrorResponse, UploadUrlRequest, UploadUrlResponse
from app.services.storage import StorageService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["uploads"])


@router.post(
    "/upload-url",
    response_model=UploadUrlResponse,
    responses={500: {"model": ErrorResponse}},
)
async def create_upload_url(
    payload: UploadUrlRequest,
    storage: StorageService = Depends(get_storage),
):
    try:
        object_key = storage.generate_upload_key(payload.file_name)
        url = storage.create_presigned_put(object_key, payload.file_type)
    except Exception:
        logger.exception("Failed to presign upload for %s", payload.file_name)
        return error_response("Failed to generate presigned URL")

    logger.info("Issued upload URL for %s", object_key)
    return UploadUrlResponse(url=url)
