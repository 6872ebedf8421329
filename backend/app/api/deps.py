from fastapi import Request

from app.core.config import Settings, get_settings
from app.services.storage import StorageService
from app.services.transform import TransformService


def get_app_settings(request: Request) -> Settings:
    return getattr(request.app.state, "settings", None) or get_settings()


def get_storage(request: Request) -> StorageService:
    return request.app.state.storage


def get_transform_service(request: Request) -> TransformService:
    return request.app.state.transform_service
