"""
Pytest Configuration and Fixtures

Shared fixtures for the prediction and assistant flows. Upstream classifiers
are replaced by `httpx.MockTransport`, the OpenAI client by `AsyncMock`.
"""
import io
import json
import sys
from pathlib import Path
from types import SimpleNamespace
from typing import Callable, Optional
from unittest.mock import AsyncMock, Mock

import httpx
import pytest
from PIL import Image

# Add app to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from utils.config import AppConfig  # noqa: E402

IMAGE_URL = "http://image-classifier.test/predict"
TABULAR_URL = "http://tabular-classifier.test/predict"


@pytest.fixture
def app_config() -> AppConfig:
    """Configuration pointing at fake upstreams, without the cosmetic delay."""
    return AppConfig(
        openai_api_key="test-key",
        openai_model="gpt-4.1",
        image_classifier_url=IMAGE_URL,
        tabular_classifier_url=TABULAR_URL,
        tabular_dispatch_delay=0.0,
    )


@pytest.fixture
def png_bytes() -> bytes:
    """A small grayscale PNG standing in for a brain scan."""
    image = Image.new("L", (320, 240), color=128)
    buffer = io.BytesIO()
    image.save(buffer, format="PNG")
    return buffer.getvalue()


@pytest.fixture
def make_http_client():
    """Factory for an AsyncClient whose requests are answered by `handler`."""

    def factory(handler: Callable[[httpx.Request], httpx.Response]) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(handler))

    return factory


@pytest.fixture
def json_reply():
    """Factory for a MockTransport handler that always answers with `payload`."""

    def factory(payload, status_code: int = 200) -> Callable[[httpx.Request], httpx.Response]:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(status_code, json=payload)

        return handler

    return factory


def _openai_response(text: Optional[str]):
    content = [SimpleNamespace(type="output_text", text=text)] if text is not None else []
    return SimpleNamespace(
        output=[SimpleNamespace(type="message", content=content)],
        output_text=text or "",
        usage=SimpleNamespace(input_tokens=12, output_tokens=34),
    )


@pytest.fixture
def make_openai_client():
    """Factory for a fake AsyncOpenAI whose Responses API returns `text`."""

    def factory(text: Optional[str] = None, side_effect=None) -> Mock:
        client = Mock()
        client.responses.create = AsyncMock(return_value=_openai_response(text), side_effect=side_effect)
        return client

    return factory


@pytest.fixture
def answer_text() -> str:
    """A well-formed schema-constrained answer body."""
    return json.dumps(
        {
            "title": "Understanding Alzheimer's",
            "introduction": "Alzheimer's disease is a progressive neurodegenerative disorder.",
            "keyPoints": ["Memory loss is an early sign", "Risk increases with age"],
            "activities": ["Daily walks", "Puzzles"],
            "resources": ["https://www.alz.org"],
        }
    )
