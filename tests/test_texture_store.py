import json

import httpx
import pytest

from gfx_interpreter.config import Settings
from gfx_interpreter.errors import StorageError
from gfx_interpreter.models.schemas import PlaceholderCacheEntry
from gfx_interpreter.services.placeholders import PlaceholderResolver
from gfx_interpreter.services.texture_store import (
    InMemoryObjectStorage,
    InMemoryPromptCache,
    SupabaseTextureStore,
    create_texture_store,
)

BASE_URL = "https://proj.supabase.co"


def make_store(handler) -> SupabaseTextureStore:
    return SupabaseTextureStore(BASE_URL, "anon-key", "Texures", transport=httpx.MockTransport(handler))


@pytest.mark.asyncio
async def test_query_by_hash_returns_first_match():
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == "/rest/v1/organization_textures"
        assert request.url.params["organization_id"] == "eq.org-1"
        assert request.url.params["name"] == "ilike.*prompt_abc*"
        assert request.headers["apikey"] == "anon-key"
        return httpx.Response(200, json=[{"file_url": "https://cdn.test/a.png"}])

    assert await make_store(handler).query_by_hash("org-1", "prompt_abc") == "https://cdn.test/a.png"


@pytest.mark.asyncio
async def test_query_by_hash_miss():
    store = make_store(lambda request: httpx.Response(200, json=[]))

    assert await store.query_by_hash("org-1", "prompt_abc") is None


@pytest.mark.asyncio
async def test_query_error_raises_storage_error():
    store = make_store(lambda request: httpx.Response(500, text="boom"))

    with pytest.raises(StorageError):
        await store.query_by_hash("org-1", "prompt_abc")


@pytest.mark.asyncio
async def test_put_uploads_with_user_token():
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.method == "POST"
        assert request.url.path == "/storage/v1/object/Texures/org-1/a.png"
        assert request.headers["Authorization"] == "Bearer user-token"
        assert request.headers["x-upsert"] == "true"
        assert request.headers["Content-Type"] == "image/png"
        assert request.content == b"png-bytes"
        return httpx.Response(200, json={"Key": "Texures/org-1/a.png"})

    url = await make_store(handler).put("org-1/a.png", b"png-bytes", "image/png", access_token="user-token")

    assert url == f"{BASE_URL}/storage/v1/object/public/Texures/org-1/a.png"


@pytest.mark.asyncio
async def test_put_failure_raises_storage_error():
    store = make_store(lambda request: httpx.Response(403, text="denied"))

    with pytest.raises(StorageError):
        await store.put("org-1/a.png", b"png-bytes", "image/png")


@pytest.mark.asyncio
async def test_insert_writes_texture_row():
    captured = {}

    def handler(request: httpx.Request) -> httpx.Response:
        captured.update(json.loads(request.content))
        return httpx.Response(201)

    entry = PlaceholderCacheEntry(
        organization_id="org-1",
        prompt_hash="prompt_abc",
        url=f"{BASE_URL}/storage/v1/object/public/Texures/org-1/a.png",
        prompt="sunset over the bay",
        storage_path="org-1/a.png",
        size=9,
        width=1280,
        height=720,
        uploaded_by="user-1",
    )

    await make_store(handler).insert(entry, access_token="user-token")

    assert captured["name"] == "AI: sunset over the bay (prompt_abc)"
    assert captured["file_name"] == "a.png"
    assert captured["storage_path"] == "org-1/a.png"
    assert captured["media_type"] == "image"
    assert captured["tags"] == ["ai-generated", "auto"]


def test_create_texture_store_without_supabase_uses_memory():
    cache, storage = create_texture_store(Settings(_env_file=None, supabase_url="", supabase_anon_key=""))

    assert isinstance(cache, InMemoryPromptCache)
    assert isinstance(storage, InMemoryObjectStorage)


def test_create_texture_store_with_supabase():
    settings = Settings(_env_file=None, supabase_url=BASE_URL, supabase_anon_key="anon-key")

    cache, storage = create_texture_store(settings)

    assert cache is storage
    assert isinstance(cache, SupabaseTextureStore)
    assert settings.placeholder_url == (
        f"{BASE_URL}/storage/v1/object/public/Texures/do-no-delete/placeholder.png"
    )


@pytest.mark.asyncio
async def test_query_non_json_body_raises_storage_error():
    store = make_store(lambda request: httpx.Response(200, text="<html>gateway</html>"))

    with pytest.raises(StorageError):
        await store.query_by_hash("org-1", "prompt_abc")


@pytest.mark.asyncio
async def test_query_non_list_body_raises_storage_error():
    store = make_store(lambda request: httpx.Response(200, json={"message": "bad gateway"}))

    with pytest.raises(StorageError):
        await store.query_by_hash("org-1", "prompt_abc")


@pytest.mark.asyncio
async def test_query_row_without_url_is_a_miss():
    store = make_store(lambda request: httpx.Response(200, json=[{"file_url": None}]))

    assert await store.query_by_hash("org-1", "prompt_abc") is None


@pytest.mark.asyncio
async def test_resolver_generates_when_cache_returns_html(generator, object_storage, test_settings):
    def handler(request: httpx.Request) -> httpx.Response:
        if request.method == "GET":
            return httpx.Response(200, text="<html>gateway</html>")
        return httpx.Response(201)

    resolver = PlaceholderResolver(
        generator=generator,
        cache=make_store(handler),
        storage=object_storage,
        settings=test_settings,
    )

    resolved = await resolver.resolve("{{GENERATE:sunset}}", "org-1", "user-1")

    assert generator.calls == 1
    assert resolved.startswith("memory://textures/org-1/")
