"""Object storage and prompt-hash cache for generated images."""

import logging
from typing import Protocol

import httpx

from gfx_interpreter.config import Settings
from gfx_interpreter.errors import StorageError
from gfx_interpreter.models.schemas import PlaceholderCacheEntry

logger = logging.getLogger(__name__)

# Table holding one row per stored texture
TEXTURES_TABLE = "organization_textures"


class PromptCache(Protocol):
    async def query_by_hash(self, organization_id: str, prompt_hash: str) -> str | None: ...

    async def insert(
        self, entry: PlaceholderCacheEntry, access_token: str | None = None
    ) -> None: ...


class ObjectStorage(Protocol):
    async def put(
        self,
        path: str,
        data: bytes,
        content_type: str,
        access_token: str | None = None,
    ) -> str: ...


class InMemoryPromptCache:
    """Process-local cache, used when no storage backend is configured."""

    def __init__(self) -> None:
        self.entries: dict[tuple[str, str], PlaceholderCacheEntry] = {}

    async def query_by_hash(self, organization_id: str, prompt_hash: str) -> str | None:
        entry = self.entries.get((organization_id, prompt_hash))
        return entry.url if entry else None

    async def insert(self, entry: PlaceholderCacheEntry, access_token: str | None = None) -> None:
        self.entries[(entry.organization_id, entry.prompt_hash)] = entry


class InMemoryObjectStorage:
    def __init__(self, base_url: str = "memory://textures") -> None:
        self.base_url = base_url.rstrip("/")
        self.objects: dict[str, tuple[bytes, str]] = {}

    async def put(
        self,
        path: str,
        data: bytes,
        content_type: str,
        access_token: str | None = None,
    ) -> str:
        self.objects[path] = (data, content_type)
        return f"{self.base_url}/{path}"


class SupabaseTextureStore:
    """Storage bucket + ``organization_textures`` table over the Supabase REST API.

    Implements both ``ObjectStorage`` and ``PromptCache``. Writes use the
    caller's bearer token so row-level policies apply; lookups use the anon key.
    """

    def __init__(
        self,
        base_url: str,
        anon_key: str,
        bucket: str,
        lookup_timeout: float = 5.0,
        upload_timeout: float = 60.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.anon_key = anon_key
        self.bucket = bucket
        self.lookup_timeout = lookup_timeout
        self.upload_timeout = upload_timeout
        self._transport = transport

    @classmethod
    def from_settings(cls, settings: Settings) -> "SupabaseTextureStore":
        return cls(
            base_url=settings.supabase_url,
            anon_key=settings.supabase_anon_key,
            bucket=settings.textures_bucket,
            lookup_timeout=settings.cache_lookup_timeout,
            upload_timeout=settings.generation_timeout,
        )

    def public_url(self, path: str) -> str:
        return f"{self.base_url}/storage/v1/object/public/{self.bucket}/{path}"

    def _headers(self, access_token: str | None = None) -> dict[str, str]:
        return {
            "apikey": self.anon_key,
            "Authorization": f"Bearer {access_token or self.anon_key}",
        }

    def _client(self, timeout: float) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=timeout, transport=self._transport)

    async def query_by_hash(self, organization_id: str, prompt_hash: str) -> str | None:
        """URL of an earlier image for this prompt hash, matched on the texture name."""
        params = {
            "select": "file_url",
            "organization_id": f"eq.{organization_id}",
            "name": f"ilike.*{prompt_hash}*",
            "limit": "1",
        }
        try:
            async with self._client(self.lookup_timeout) as client:
                response = await client.get(
                    f"{self.base_url}/rest/v1/{TEXTURES_TABLE}",
                    params=params,
                    headers=self._headers(),
                )
        except httpx.HTTPError as e:
            raise StorageError(f"Cache lookup failed: {e}") from e

        if response.status_code != 200:
            raise StorageError(f"Cache lookup error: {response.status_code} - {response.text}")

        try:
            rows = response.json()
        except ValueError as e:
            raise StorageError(f"Cache lookup returned invalid JSON: {e}") from e
        if not isinstance(rows, list):
            raise StorageError(f"Cache lookup returned {type(rows).__name__}, expected a list")
        if not rows or not isinstance(rows[0], dict):
            return None
        file_url = rows[0].get("file_url")
        if not isinstance(file_url, str) or not file_url:
            return None
        logger.info("Found cached image for prompt hash %s", prompt_hash)
        return file_url

    async def put(
        self,
        path: str,
        data: bytes,
        content_type: str,
        access_token: str | None = None,
    ) -> str:
        headers = self._headers(access_token) | {
            "Content-Type": content_type,
            "x-upsert": "true",
        }
        try:
            async with self._client(self.upload_timeout) as client:
                response = await client.post(
                    f"{self.base_url}/storage/v1/object/{self.bucket}/{path}",
                    content=data,
                    headers=headers,
                )
        except httpx.HTTPError as e:
            raise StorageError(f"Upload of {path} failed: {e}") from e

        if response.status_code not in (200, 201):
            raise StorageError(f"Upload of {path} failed: {response.status_code} - {response.text}")

        logger.info("Uploaded %s (%d bytes)", path, len(data))
        return self.public_url(path)

    async def insert(self, entry: PlaceholderCacheEntry, access_token: str | None = None) -> None:
        storage_path = entry.storage_path or entry.url.rsplit(f"/{self.bucket}/", 1)[-1]
        payload = {
            "organization_id": entry.organization_id,
            "name": f"AI: {entry.prompt[:50]} ({entry.prompt_hash})",
            "file_name": storage_path.rsplit("/", 1)[-1],
            "file_url": entry.url,
            "thumbnail_url": entry.thumbnail_url,
            "storage_path": storage_path,
            "media_type": "image",
            "size": entry.size,
            "width": entry.width,
            "height": entry.height,
            "duration": None,
            "uploaded_by": entry.uploaded_by,
            "tags": entry.tags,
        }
        headers = self._headers(access_token) | {
            "Content-Type": "application/json",
            "Prefer": "return=minimal",
        }
        try:
            async with self._client(self.lookup_timeout) as client:
                response = await client.post(
                    f"{self.base_url}/rest/v1/{TEXTURES_TABLE}",
                    json=payload,
                    headers=headers,
                )
        except httpx.HTTPError as e:
            raise StorageError(f"Saving texture record failed: {e}") from e

        if response.status_code not in (200, 201, 204):
            raise StorageError(
                f"Saving texture record failed: {response.status_code} - {response.text}"
            )


def create_texture_store(settings: Settings) -> tuple[PromptCache, ObjectStorage]:
    """Supabase-backed cache and storage when configured, in-memory otherwise."""
    if settings.storage_configured:
        store = SupabaseTextureStore.from_settings(settings)
        return store, store
    logger.info("Supabase not configured; generated images are kept in memory")
    return InMemoryPromptCache(), InMemoryObjectStorage()
