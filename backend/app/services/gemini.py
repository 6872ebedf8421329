import base64
import logging
from typing import Any

from google import genai
from google.genai import types

from app.core.config import Settings, get_settings

logger = logging.getLogger(__name__)

RESPONSE_MODALITIES = ["TEXT", "IMAGE"]


class ImageGenerationError(Exception):
    """Raised when the generative model cannot produce a transformed image."""


class NoImageReturnedError(ImageGenerationError):
    def __init__(self) -> None:
        super().__init__("No transformed image received from Gemini.")


def extract_inline_image(response: Any) -> bytes:
    """
    Return the bytes of the first inline data part of the first candidate.

    The SDK hands back raw bytes; a base64 string is decoded for responses
    that were deserialised from JSON by hand.
    """
    candidates = getattr(response, "candidates", None) or []
    content = getattr(candidates[0], "content", None) if candidates else None
    parts = getattr(content, "parts", None) or []

    for part in parts:
        inline_data = getattr(part, "inline_data", None)
        data = getattr(inline_data, "data", None) if inline_data else None
        if not data:
            continue
        if isinstance(data, str):
            return base64.b64decode(data)
        return bytes(data)

    raise NoImageReturnedError()


class GeminiImageService:
    """Sends an image plus instruction to a Gemini image-generation model."""

    def __init__(
        self,
        settings: Settings | None = None,
        client: genai.Client | None = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.model = self.settings.gemini_model
        self.client = client or genai.Client(api_key=self.settings.gemini_api_key)

    def _build_contents(self, prompt: str, image: bytes, mime_type: str) -> list[types.Content]:
        return [
            types.Content(
                role="user",
                parts=[
                    types.Part(text=prompt),
                    types.Part(inline_data=types.Blob(mime_type=mime_type, data=image)),
                ],
            )
        ]

    async def generate_image(self, prompt: str, image: bytes, mime_type: str) -> bytes:
        """
        Ask the model to transform ``image`` according to ``prompt``.

        :raises NoImageReturnedError: the response carries no inline image data.
        :raises ImageGenerationError: the model call itself failed.
        """
        try:
            response = await self.client.aio.models.generate_content(
                model=self.model,
                contents=self._build_contents(prompt, image, mime_type),
                config=types.GenerateContentConfig(response_modalities=RESPONSE_MODALITIES),
            )
        except Exception as exc:
            raise ImageGenerationError(f"Gemini API error: {exc}") from exc

        data = extract_inline_image(response)
        logger.debug("Gemini returned %d bytes of image data", len(data))
        return data
