"""Shared test fixtures."""

import asyncio
import io

import pytest
from PIL import Image

from gfx_interpreter.config import Settings
from gfx_interpreter.errors import ImageGenerationError
from gfx_interpreter.services.gemini_service import GeneratedImage
from gfx_interpreter.services.placeholders import PlaceholderResolver
from gfx_interpreter.services.texture_store import InMemoryObjectStorage, InMemoryPromptCache

FALLBACK_URL = "https://example.test/placeholder.png"


def make_png(width: int = 64, height: int = 36, color: str = "#06B6D4") -> bytes:
    buffer = io.BytesIO()
    Image.new("RGB", (width, height), color).save(buffer, format="PNG")
    return buffer.getvalue()


class FakeGenerator:
    """Image generator that records prompts instead of calling Gemini."""

    def __init__(self, fail: bool = False, delay: float = 0.0) -> None:
        self.fail = fail
        self.delay = delay
        self.prompts: list[str] = []

    @property
    def calls(self) -> int:
        return len(self.prompts)

    async def generate_image(self, prompt: str, aspect_ratio: str = "16:9") -> GeneratedImage:
        self.prompts.append(prompt)
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.fail:
            raise ImageGenerationError("provider unavailable")
        return GeneratedImage(data=make_png(), mime_type="image/png")


@pytest.fixture
def test_settings() -> Settings:
    return Settings(
        _env_file=None,
        supabase_url="",
        supabase_anon_key="",
        fallback_image_url=FALLBACK_URL,
        generation_timeout=5.0,
        thumbnail_timeout=5.0,
        cache_lookup_timeout=5.0,
    )


@pytest.fixture
def generator() -> FakeGenerator:
    return FakeGenerator()


@pytest.fixture
def prompt_cache() -> InMemoryPromptCache:
    return InMemoryPromptCache()


@pytest.fixture
def object_storage() -> InMemoryObjectStorage:
    return InMemoryObjectStorage()


@pytest.fixture
def resolver(generator, prompt_cache, object_storage, test_settings) -> PlaceholderResolver:
    return PlaceholderResolver(
        generator=generator,
        cache=prompt_cache,
        storage=object_storage,
        settings=test_settings,
    )
