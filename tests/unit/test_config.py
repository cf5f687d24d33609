"""
Unit Tests for environment configuration and thumbnails.
"""
import io

import httpx
import pytest
from PIL import Image

from main import create_app, lifespan
from services.openai.assistant import AssistantError, NeurologyAssistant
from services.thumbnail_generator import ThumbnailGenerator
from utils.config import DEFAULT_TABULAR_CLASSIFIER_URL, AppConfig


class TestAppConfig:
    def test_defaults(self):
        config = AppConfig.from_env({})
        assert config.openai_api_key is None
        assert config.image_classifier_url is None
        assert config.tabular_classifier_url == DEFAULT_TABULAR_CLASSIFIER_URL
        assert config.tabular_dispatch_delay == 0.5
        assert config.classifier_timeout is None
        assert config.log_level == "INFO"

    def test_overrides(self):
        config = AppConfig.from_env(
            {
                "OPENAI_API_KEY": " sk-test ",
                "OPENAI_MODEL": "gpt-4.1-mini",
                "IMAGE_CLASSIFIER_URL": "https://scans.example/predict",
                "TABULAR_DISPATCH_DELAY": "0",
                "CLASSIFIER_TIMEOUT": "12.5",
                "LOG_LEVEL": "debug",
            }
        )
        assert config.openai_api_key == "sk-test"
        assert config.openai_model == "gpt-4.1-mini"
        assert config.image_classifier_url == "https://scans.example/predict"
        assert config.tabular_dispatch_delay == 0.0
        assert config.classifier_timeout == 12.5
        assert config.log_level == "DEBUG"

    @pytest.mark.parametrize("env", [{"CLASSIFIER_TIMEOUT": "soon"}, {"TABULAR_DISPATCH_DELAY": "-1"}])
    def test_invalid_values(self, env):
        with pytest.raises(RuntimeError):
            AppConfig.from_env(env)


class TestThumbnailGenerator:
    def test_fits_within_max_size(self, png_bytes):
        thumb = ThumbnailGenerator(max_size=(160, 160)).create_thumbnail(png_bytes)
        image = Image.open(io.BytesIO(thumb))
        assert image.format == "PNG"
        assert image.size == (160, 120)

    def test_rejects_non_image(self):
        with pytest.raises(ValueError):
            ThumbnailGenerator().create_thumbnail(b"definitely not an image")

    def test_decompression_bomb_is_rejected(self, png_bytes, monkeypatch):
        monkeypatch.setattr(Image, "MAX_IMAGE_PIXELS", 1000)
        with pytest.raises(ValueError, match="too large"):
            ThumbnailGenerator().create_thumbnail(png_bytes)


@pytest.mark.asyncio
class TestLifespan:
    """Tests for the clients the app builds at startup."""

    @pytest.fixture
    def startup_env(self, monkeypatch):
        monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
        monkeypatch.delenv("CLASSIFIER_TIMEOUT", raising=False)
        monkeypatch.delenv("OPENAI_BASE_URL", raising=False)

    async def test_openai_client_does_not_retry(self, startup_env):
        app = create_app()
        async with lifespan(app):
            client = app.state.openai_client
            assert client.max_retries == 0
            assert client.timeout is None
            assert app.state.http_client.timeout.read is None

    async def test_failed_assistant_call_reaches_upstream_once(self, startup_env):
        calls = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request.url.path)
            return httpx.Response(500, json={"error": {"message": "upstream failure", "type": "server_error"}})

        app = create_app()
        async with lifespan(app):
            async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as http_client:
                client = app.state.openai_client.copy(http_client=http_client)
                with pytest.raises(AssistantError):
                    await NeurologyAssistant(client, "gpt-4.1").ask("What is MCI?")

        assert calls == ["/v1/responses"]

    async def test_classifier_timeout_applies_to_both_clients(self, startup_env, monkeypatch):
        monkeypatch.setenv("CLASSIFIER_TIMEOUT", "15")
        app = create_app()
        async with lifespan(app):
            assert app.state.openai_client.timeout == 15.0
            assert app.state.http_client.timeout.read == 15.0
