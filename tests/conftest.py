import io
from types import SimpleNamespace
from unittest.mock import Mock

import pytest
from PIL import Image


@pytest.fixture
def png_bytes():
    """A small but real PNG image."""
    buf = io.BytesIO()
    Image.new("RGB", (8, 8), color=(200, 180, 140)).save(buf, format="PNG")
    return buf.getvalue()


@pytest.fixture
def no_api_key(monkeypatch):
    monkeypatch.delenv("MISTRAL_API_KEY", raising=False)


@pytest.fixture
def api_key(monkeypatch):
    monkeypatch.setenv("MISTRAL_API_KEY", "test-key")
    return "test-key"


def make_chat_response(content):
    """Shape of a mistralai ChatCompletionResponse, as far as we read it."""
    message = SimpleNamespace(content=content)
    return SimpleNamespace(choices=[SimpleNamespace(message=message)])


@pytest.fixture
def mistral_client():
    client = Mock()
    client.chat.complete.return_value = make_chat_response("En la ciudad de los Reyes")
    return client
