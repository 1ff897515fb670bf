import asyncio
import logging
from dataclasses import dataclass

from google import genai
from google.genai import errors as genai_errors
from google.genai import types

from gfx_interpreter.config import settings
from gfx_interpreter.errors import ImageGenerationError, ProviderNotConfiguredError

logger = logging.getLogger(__name__)

# Retry configuration
MAX_RETRIES = 3
RETRY_DELAY = 1.0  # seconds


@dataclass(frozen=True)
class GeneratedImage:
    data: bytes
    mime_type: str = "image/png"


class GeminiService:
    """Service for generating images with Nano Banana (Gemini)."""

    def __init__(self, api_key: str | None = None, model: str | None = None) -> None:
        self._api_key = api_key
        self._model = model
        self._client: genai.Client | None = None

    @property
    def model(self) -> str:
        return self._model or settings.gemini_image_model

    @property
    def client(self) -> genai.Client:
        if self._client is None:
            api_key = self._api_key or settings.gemini_api_key
            if not api_key:
                raise ProviderNotConfiguredError("No Gemini API key configured for image generation")
            self._client = genai.Client(api_key=api_key)
        return self._client

    async def generate_image(self, prompt: str, aspect_ratio: str = "16:9") -> GeneratedImage:
        """Generate one image from a text prompt, retrying on provider errors."""
        last_error: Exception | None = None

        for attempt in range(MAX_RETRIES):
            try:
                response = await self.client.aio.models.generate_content(
                    model=self.model,
                    contents=[prompt],
                    config=types.GenerateContentConfig(
                        response_modalities=["IMAGE", "TEXT"],
                        image_config=types.ImageConfig(aspect_ratio=aspect_ratio),
                    ),
                )

                # Handle null response cases
                if not response.candidates:
                    raise ImageGenerationError("Gemini API returned no candidates")

                candidate = response.candidates[0]
                if candidate.content is None or not candidate.content.parts:
                    finish_reason = getattr(candidate, "finish_reason", "UNKNOWN")
                    raise ImageGenerationError(
                        f"Gemini API returned no content. Finish reason: {finish_reason}"
                    )

                for part in candidate.content.parts:
                    if part.inline_data is not None and part.inline_data.data:
                        return GeneratedImage(
                            data=part.inline_data.data,
                            mime_type=part.inline_data.mime_type or "image/png",
                        )

                raise ImageGenerationError("No image returned from Gemini API")

            except (ImageGenerationError, genai_errors.APIError) as e:
                last_error = e
                if attempt < MAX_RETRIES - 1:
                    delay = RETRY_DELAY * (attempt + 1)
                    logger.warning(
                        "Image generation attempt %d failed (%s); retrying in %.1fs",
                        attempt + 1,
                        e,
                        delay,
                    )
                    await asyncio.sleep(delay)
                    continue

        raise ImageGenerationError(f"Gemini API failed after {MAX_RETRIES} attempts: {last_error}")


gemini_service = GeminiService()
