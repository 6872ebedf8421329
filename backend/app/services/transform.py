from __future__ import annotations

import logging
from dataclasses import dataclass

from app.core.config import Settings, get_settings
from app.services.gemini import GeminiImageService
from app.services.prompt import build_prompt
from app.services.storage import StorageService

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TransformResult:
    object_key: str
    public_url: str


class TransformService:
    def __init__(
        self,
        storage: StorageService,
        image_model: GeminiImageService,
        settings: Settings | None = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.storage = storage
        self.image_model = image_model

    def prompt_for(self, style: str) -> str:
        return build_prompt(self.settings.prompt_template, style)

    async def transform(self, image: bytes, mime_type: str, style: str) -> TransformResult:
        prompt = self.prompt_for(style)
        logger.info("Transforming %d byte %s image: %s", len(image), mime_type, prompt)

        # Nothing is written unless the model hands back an image.
        transformed = await self.image_model.generate_image(prompt, image, mime_type)

        object_key = self.storage.generate_result_key()
        await self.storage.upload_bytes(object_key, transformed)
        return TransformResult(
            object_key=object_key,
            public_url=self.storage.public_url(object_key),
        )
