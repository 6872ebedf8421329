from app.schemas.storage import UploadUrlRequest, UploadUrlResponse
from app.schemas.transform import ErrorResponse, StylesResponse, TransformResponse

__all__ = [
    "UploadUrlRequest",
    "UploadUrlResponse",
    "TransformResponse",
    "StylesResponse",
    "ErrorResponse",
]
