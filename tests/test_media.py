import io
from types import SimpleNamespace

import pytest
from conftest import make_png
from PIL import Image

from gfx_interpreter.errors import ImageGenerationError, ProviderNotConfiguredError
from gfx_interpreter.services import gemini_service as gemini_module
from gfx_interpreter.services.debug_saver import DebugSaver
from gfx_interpreter.services.gemini_service import GeminiService, GeneratedImage
from gfx_interpreter.services.image_processor import image_processor


def test_thumbnail_is_scaled_jpeg():
    thumbnail = image_processor.make_thumbnail(make_png(1280, 720))

    image = Image.open(io.BytesIO(thumbnail))
    assert image.format == "JPEG"
    assert image.size == (400, 225)


def test_small_images_keep_their_size():
    thumbnail = image_processor.make_thumbnail(make_png(64, 36))

    assert image_processor.get_image_dimensions(thumbnail) == (64, 36)


class FakeModels:
    def __init__(self, responses):
        self.responses = list(responses)
        self.calls = []

    async def generate_content(self, model, contents, config):
        self.calls.append((model, contents, config))
        return self.responses.pop(0)


def _image_response(data=b"png-bytes", mime_type="image/png"):
    part = SimpleNamespace(inline_data=SimpleNamespace(data=data, mime_type=mime_type))
    return SimpleNamespace(candidates=[SimpleNamespace(content=SimpleNamespace(parts=[part]))])


def _service(models):
    service = GeminiService(api_key="test-key", model="test-model")
    service._client = SimpleNamespace(aio=SimpleNamespace(models=models))
    return service


@pytest.mark.asyncio
async def test_generate_image_returns_first_inline_image():
    models = FakeModels([_image_response()])

    image = await _service(models).generate_image("a sunset", "16:9")

    assert image == GeneratedImage(data=b"png-bytes", mime_type="image/png")
    model, contents, config = models.calls[0]
    assert model == "test-model"
    assert contents == ["a sunset"]
    assert config.image_config.aspect_ratio == "16:9"


@pytest.mark.asyncio
async def test_generate_image_retries_then_fails(monkeypatch):
    monkeypatch.setattr(gemini_module, "RETRY_DELAY", 0)
    models = FakeModels([SimpleNamespace(candidates=[])] * gemini_module.MAX_RETRIES)

    with pytest.raises(ImageGenerationError):
        await _service(models).generate_image("a sunset")

    assert len(models.calls) == gemini_module.MAX_RETRIES


@pytest.mark.asyncio
async def test_generate_image_recovers_after_empty_response(monkeypatch):
    monkeypatch.setattr(gemini_module, "RETRY_DELAY", 0)
    models = FakeModels([SimpleNamespace(candidates=[]), _image_response(b"jpeg", "image/jpeg")])

    image = await _service(models).generate_image("a sunset")

    assert image.mime_type == "image/jpeg"
    assert len(models.calls) == 2


def test_missing_api_key_is_reported(monkeypatch):
    monkeypatch.setattr(gemini_module.settings, "gemini_api_key", "")

    with pytest.raises(ProviderNotConfiguredError):
        GeminiService().client


def test_debug_saver_is_disabled_without_directory(monkeypatch):
    monkeypatch.setattr("gfx_interpreter.services.debug_saver.settings.debug_dir", None)

    saver = DebugSaver("turn")
    saver.save_response("ignored")

    assert saver.enabled is False


def test_debug_saver_writes_stages(tmp_path):
    saver = DebugSaver("turn 1/a", tmp_path)
    saver.save_stage(1, "extracted", {"type": "create"})

    assert saver.session_dir.name.endswith("turn_1_a")
    assert (saver.session_dir / "01_extracted.json").read_text().startswith("{")
