import importlib
import os
import sys
from pathlib import Path

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

# Ensure project root is on sys.path
PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from app.core.config import get_settings
from app.services import storage as storage_service
from app.services.gemini import NoImageReturnedError
from app.services.transform import TransformService


class DummyStorage(storage_service.StorageService):
    def __init__(self, settings) -> None:  # type: ignore[super-init-not-called]
        self.settings = settings
        self.bucket = "dummy"
        self.objects: dict[str, dict] = {}
        self.fail_presign = False
        self.fail_upload = False

    def create_presigned_put(self, key: str, content_type: str, expires_in: int | None = None) -> str:  # type: ignore[override]
        if self.fail_presign:
            raise RuntimeError("signer unavailable")
        ttl = expires_in or self.settings.upload_url_ttl
        return f"https://example.com/put/{key}?content-type={content_type}&expires={ttl}"

    async def upload_bytes(self, key, data, content_type="image/png", cache_control="public, max-age=31536000"):  # type: ignore[override]
        if self.fail_upload:
            raise RuntimeError("bucket unreachable")
        self.objects[key] = {
            "data": data,
            "content_type": content_type,
            "cache_control": cache_control,
        }


class FakeImageModel:
    def __init__(self) -> None:
        self.result: bytes | None = b"\x89PNG transformed"
        self.calls: list[dict] = []

    async def generate_image(self, prompt: str, image: bytes, mime_type: str) -> bytes:
        self.calls.append({"prompt": prompt, "image": image, "mime_type": mime_type})
        if self.result is None:
            raise NoImageReturnedError()
        return self.result


@pytest.fixture(scope="session", autouse=True)
def configure_environment():
    os.environ["ENV"] = "test"
    os.environ["AWS_REGION"] = "eu-west-1"
    os.environ["AWS_ACCESS_KEY_ID"] = "test"
    os.environ["AWS_SECRET_ACCESS_KEY"] = "test"
    os.environ["AWS_S3_BUCKET_NAME"] = "test-bucket"
    os.environ["CLOUDFRONT_DOMAIN"] = "cdn.example.com"
    os.environ["GEMINI_API_KEY"] = "test-key"
    os.environ["TRANSFORM_PROMPT_TEMPLATE"] = "Make this {{style}}"
    get_settings.cache_clear()


@pytest.fixture(scope="session")
def app_instance(configure_environment):
    from app import main as app_module

    importlib.reload(app_module)
    return app_module.app


@pytest.fixture
def storage(app_instance):
    return DummyStorage(app_instance.state.settings)


@pytest.fixture
def image_model():
    return FakeImageModel()


@pytest_asyncio.fixture
async def client(app_instance, storage, image_model):
    # Setup state for tests, mimicking lifespan events
    settings = app_instance.state.settings
    app_instance.state.storage = storage
    app_instance.state.transform_service = TransformService(storage, image_model, settings)  # type: ignore[arg-type]

    transport = ASGITransport(app=app_instance)
    async with AsyncClient(transport=transport, base_url="http://testserver") as client:
        yield client
