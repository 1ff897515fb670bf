"""Resolve image placeholders embedded in an AI reply.

``{{LOGO:league:team}}`` and ``{{PEXELS:query}}`` are static lookups.
``{{GENERATE:query}}`` is served from the organization's cache of generated
images, or generated with Gemini, stored, cached and then served. Every
failure degrades to the shared fallback image; nothing here raises to the
caller.
"""

import asyncio
import hashlib
import logging
import re
import secrets
import time
from typing import Callable, Protocol

from gfx_interpreter.config import Settings, settings as default_settings
from gfx_interpreter.errors import InterpreterError, StorageError
from gfx_interpreter.models.schemas import PlaceholderCacheEntry
from gfx_interpreter.services.gemini_service import GeneratedImage, gemini_service
from gfx_interpreter.services.image_processor import image_processor
from gfx_interpreter.services.sports_logos import resolve_logo_placeholders
from gfx_interpreter.services.stock_photos import resolve_stock_placeholders
from gfx_interpreter.services.texture_store import (
    ObjectStorage,
    PromptCache,
    create_texture_store,
)

logger = logging.getLogger(__name__)

GENERATE_PATTERN = re.compile(r"\{\{GENERATE:([^}]+)\}\}")

AI_GENERATED_TAGS = ["ai-generated", "auto"]
ASPECT_RATIO = "16:9"

# Recorded size when the generated bytes can't be inspected
IMAGE_WIDTH = 1280
IMAGE_HEIGHT = 720

# Progress messages show at most this much of a prompt
PROGRESS_PROMPT_CHARS = 30

ProgressCallback = Callable[[str, int, int], None]

_QUOTES = "\"'`“”‘’"

_LOGO_WORDS = ("logo", "crest", "emblem", "badge")
_VECTOR_WORDS = ("vector", "flat", "graphic")

# Keyword -> style suffix appended to non-logo prompts; first match wins
PROMPT_ENHANCEMENTS: dict[str, str] = {
    "basketball": "Professional basketball action shot, dynamic lighting, sports broadcast quality, HD, cinematic",
    "football": "American football game action, stadium atmosphere, broadcast quality, dramatic lighting, HD",
    "soccer": "Professional soccer match, stadium environment, broadcast quality, dynamic action, HD",
    "baseball": "Baseball game action, stadium setting, broadcast quality, dramatic lighting, HD",
    "hockey": "Ice hockey action shot, arena lighting, broadcast quality, dynamic movement, HD",
    "stadium": "Professional sports stadium, dramatic lighting, broadcast quality, cinematic, HD",
    "arena": "Sports arena interior, professional lighting, broadcast quality, atmospheric, HD",
    "city": "Modern city skyline, professional photography, broadcast quality, cinematic lighting, HD",
    "skyline": "Dramatic city skyline, golden hour or night, broadcast quality, cinematic, HD",
    "downtown": "Urban downtown scene, professional quality, broadcast ready, atmospheric lighting, HD",
    "background": "Professional dark abstract background, subtle texture, broadcast quality, HD",
    "texture": "High-quality abstract texture, dark tones, professional, broadcast ready, HD",
    "gradient": "Smooth professional gradient, broadcast quality, subtle colors, HD",
    "abstract": "Modern abstract design, professional quality, broadcast ready, dark tones, HD",
    "weather": "Dramatic weather scene, professional photography, broadcast quality, cinematic, HD",
    "storm": "Dramatic storm clouds, cinematic lighting, broadcast quality, atmospheric, HD",
    "clouds": "Beautiful cloud formation, professional photography, broadcast quality, HD",
}
DEFAULT_ENHANCEMENT = (
    "professional quality, suitable for broadcast graphics, high resolution, "
    "cinematic lighting, 16:9 aspect ratio"
)


class ImageGenerator(Protocol):
    async def generate_image(self, prompt: str, aspect_ratio: str = ASPECT_RATIO) -> GeneratedImage: ...


def normalize_prompt(prompt: str) -> str:
    """Canonical form used for deduplication: unquoted, single-spaced, lowercase."""
    return " ".join(prompt.strip().strip(_QUOTES).split()).lower()


def hash_prompt(prompt: str) -> str:
    digest = hashlib.sha256(normalize_prompt(prompt).encode("utf-8")).hexdigest()
    return f"prompt_{digest[:16]}"


def enhance_prompt_for_broadcast(prompt: str) -> str:
    """Add style keywords suited to broadcast graphics.

    Logos get a flat vector treatment; known subjects get a category style;
    everything else gets a generic broadcast-quality suffix.
    """
    query = prompt.strip()
    lowered = query.lower()

    is_logo = any(word in lowered for word in _LOGO_WORDS) or (
        "team" in lowered and ("flag" in lowered or "national" in lowered)
    )
    if is_logo:
        if any(word in lowered for word in _VECTOR_WORDS):
            return f"{query}, clean sharp edges, solid colors, no gradients, centered, simple background"
        return (
            f"{query}, vector graphic style, flat design, clean sharp edges, solid colors, "
            "no gradients, centered, simple solid color background, "
            "professional sports logo illustration"
        )

    for keyword, enhancement in PROMPT_ENHANCEMENTS.items():
        if keyword in lowered:
            return f"{query}, {enhancement}"
    return f"{query}, {DEFAULT_ENHANCEMENT}"


def extract_generate_placeholders(text: str) -> list[str]:
    return [match.strip() for match in GENERATE_PATTERN.findall(text)]


def replace_generate_with_placeholder(text: str, url: str | None = None) -> str:
    """Swap every ``{{GENERATE:...}}`` for the fallback image without generating."""
    fallback = url or default_settings.placeholder_url
    return GENERATE_PATTERN.sub(lambda _: fallback, text)


def _short_prompt(prompt: str) -> str:
    if len(prompt) > PROGRESS_PROMPT_CHARS:
        return prompt[:PROGRESS_PROMPT_CHARS] + "..."
    return prompt


class PlaceholderResolver:
    """Resolves all image placeholders in a piece of text.

    Identical GENERATE prompts (after normalization) resolve once per call, and
    concurrent calls for the same organization and prompt share one generation.
    """

    def __init__(
        self,
        generator: ImageGenerator | None = None,
        cache: PromptCache | None = None,
        storage: ObjectStorage | None = None,
        settings: Settings | None = None,
    ) -> None:
        self.settings = settings or default_settings
        if cache is None or storage is None:
            default_cache, default_storage = create_texture_store(self.settings)
            cache = cache or default_cache
            storage = storage or default_storage
        self.generator = generator or gemini_service
        self.cache = cache
        self.storage = storage
        self._inflight: dict[tuple[str, str], asyncio.Future[str]] = {}

    @property
    def fallback_url(self) -> str:
        return self.settings.placeholder_url

    async def resolve(
        self,
        text: str,
        organization_id: str | None,
        user_id: str | None,
        access_token: str | None = None,
        on_progress: ProgressCallback | None = None,
        parallel: bool = False,
    ) -> str:
        """Return ``text`` with every LOGO, PEXELS and GENERATE placeholder replaced.

        Unknown LOGO teams keep their token. Without an organization and user
        every GENERATE token becomes the fallback image. GENERATE prompts run
        one at a time with per-prompt progress unless ``parallel`` is set, in
        which case progress is reported only at the start and the end.
        """
        resolved = resolve_logo_placeholders(text)
        resolved = resolve_stock_placeholders(resolved)

        prompts: dict[str, str] = {}
        for prompt in extract_generate_placeholders(resolved):
            prompts.setdefault(hash_prompt(prompt), prompt)
        if not prompts:
            return resolved

        if not organization_id or not user_id:
            logger.warning("Cannot generate images without organization and user; using fallback")
            return replace_generate_with_placeholder(resolved, self.fallback_url)

        total = len(prompts)
        logger.info("Resolving %d GENERATE placeholder(s)", total)
        if on_progress:
            on_progress("Generating AI images...", 0, total)

        urls: dict[str, str] = {}
        if parallel:
            results = await asyncio.gather(
                *(
                    self.get_or_generate(prompt, organization_id, user_id, access_token)
                    for prompt in prompts.values()
                )
            )
            urls = dict(zip(prompts, results))
            if on_progress:
                on_progress("AI images ready", total, total)
        else:
            for current, (prompt_hash, prompt) in enumerate(prompts.items(), start=1):
                if on_progress:
                    on_progress(f"Generating: {_short_prompt(prompt)}", current, total)
                urls[prompt_hash] = await self.get_or_generate(
                    prompt, organization_id, user_id, access_token
                )

        return GENERATE_PATTERN.sub(lambda match: urls[hash_prompt(match.group(1).strip())], resolved)

    async def get_or_generate(
        self,
        prompt: str,
        organization_id: str,
        user_id: str,
        access_token: str | None = None,
    ) -> str:
        """URL for a prompt, sharing any in-flight generation of the same prompt."""
        key = (organization_id, hash_prompt(prompt))
        future = self._inflight.get(key)
        if future is None:
            future = asyncio.ensure_future(
                self._get_or_generate(prompt, organization_id, user_id, access_token)
            )
            self._inflight[key] = future
            future.add_done_callback(lambda _: self._inflight.pop(key, None))
        return await asyncio.shield(future)

    async def _get_or_generate(
        self,
        prompt: str,
        organization_id: str,
        user_id: str,
        access_token: str | None,
    ) -> str:
        prompt_hash = hash_prompt(prompt)
        cached = await self._lookup(organization_id, prompt_hash)
        if cached:
            return cached

        try:
            image = await asyncio.wait_for(
                self.generator.generate_image(enhance_prompt_for_broadcast(prompt), ASPECT_RATIO),
                timeout=self.settings.generation_timeout,
            )
        except asyncio.TimeoutError:
            logger.warning(
                "Image generation timed out after %.0fs for %r; using fallback",
                self.settings.generation_timeout,
                prompt,
            )
            return self.fallback_url
        except InterpreterError as e:
            logger.warning("Image generation failed for %r: %s; using fallback", prompt, e)
            return self.fallback_url
        except Exception:
            logger.exception("Unexpected image generation error for %r; using fallback", prompt)
            return self.fallback_url

        try:
            return await self._store(image, prompt, prompt_hash, organization_id, user_id, access_token)
        except StorageError as e:
            logger.warning("Storing generated image failed for %r: %s; using fallback", prompt, e)
        except Exception:
            logger.exception("Unexpected storage error for %r; using fallback", prompt)
        return self.fallback_url

    async def _lookup(self, organization_id: str, prompt_hash: str) -> str | None:
        try:
            return await asyncio.wait_for(
                self.cache.query_by_hash(organization_id, prompt_hash),
                timeout=self.settings.cache_lookup_timeout,
            )
        except asyncio.TimeoutError:
            logger.warning("Cache lookup timed out for %s; generating", prompt_hash)
        except StorageError as e:
            logger.warning("Cache lookup failed for %s: %s; generating", prompt_hash, e)
        except Exception:
            logger.exception("Unexpected cache lookup error for %s; generating", prompt_hash)
        return None

    async def _store(
        self,
        image: GeneratedImage,
        prompt: str,
        prompt_hash: str,
        organization_id: str,
        user_id: str,
        access_token: str | None,
    ) -> str:
        extension = "jpg" if image.mime_type == "image/jpeg" else "png"
        filename = f"{int(time.time() * 1000)}-{secrets.token_hex(3)}-ai-{prompt_hash}.{extension}"
        storage_path = f"{organization_id}/{filename}"

        thumbnail_url = await self._upload_thumbnail(
            image.data, f"{organization_id}/thumbnails/{filename}.jpg", access_token
        )
        url = await self.storage.put(storage_path, image.data, image.mime_type, access_token=access_token)

        try:
            width, height = image_processor.get_image_dimensions(image.data)
        except (OSError, ValueError):
            width, height = IMAGE_WIDTH, IMAGE_HEIGHT

        entry = PlaceholderCacheEntry(
            organization_id=organization_id,
            prompt_hash=prompt_hash,
            url=url,
            prompt=prompt,
            thumbnail_url=thumbnail_url,
            storage_path=storage_path,
            size=len(image.data),
            tags=list(AI_GENERATED_TAGS),
            width=width,
            height=height,
            uploaded_by=user_id,
        )
        try:
            await self.cache.insert(entry, access_token=access_token)
        except StorageError as e:
            # The upload succeeded, so the URL is still usable
            logger.warning("Could not save texture record for %s: %s", prompt_hash, e)

        logger.info("Generated image for %r saved at %s", prompt, url)
        return url

    async def _upload_thumbnail(self, data: bytes, path: str, access_token: str | None) -> str | None:
        try:
            thumbnail = await asyncio.wait_for(
                asyncio.to_thread(image_processor.make_thumbnail, data),
                timeout=self.settings.thumbnail_timeout,
            )
            return await self.storage.put(path, thumbnail, "image/jpeg", access_token=access_token)
        except asyncio.TimeoutError:
            logger.warning("Thumbnail generation timed out for %s", path)
        except (OSError, ValueError, StorageError) as e:
            logger.warning("Thumbnail skipped for %s: %s", path, e)
        return None


placeholder_resolver = PlaceholderResolver()
