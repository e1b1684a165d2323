from __future__ import annotations

import asyncio
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest

pytest.importorskip("google.genai")

from captioncraft.caption.types import EncodedMedia
from captioncraft.errors import ModelInvocationError
from captioncraft.model.adapter import DEFAULT_MODEL, GeminiClient, build_contents


def _client_with(generate: AsyncMock) -> GeminiClient:
    sdk = MagicMock()
    sdk.aio.models.generate_content = generate
    return GeminiClient(api_key="test-key", client=sdk)


def test_invoke_returns_response_text() -> None:
    generate = AsyncMock(return_value=SimpleNamespace(text='{"short":"a"}'))
    client = _client_with(generate)

    result = asyncio.run(client.invoke("Write captions"))

    assert result == '{"short":"a"}'
    kwargs = generate.call_args.kwargs
    assert kwargs["model"] == DEFAULT_MODEL
    assert kwargs["contents"] == ["Write captions"]


def test_invoke_sends_inline_media() -> None:
    generate = AsyncMock(return_value=SimpleNamespace(text="{}"))
    client = _client_with(generate)
    media = EncodedMedia(data="aGVsbG8=", mime_type="image/png")

    asyncio.run(client.invoke("Describe", media))

    contents = generate.call_args.kwargs["contents"]
    assert contents[0] == "Describe"
    part = contents[1]
    assert part.inline_data.data == b"hello"
    assert part.inline_data.mime_type == "image/png"


def test_missing_text_is_returned_as_empty_string() -> None:
    client = _client_with(AsyncMock(return_value=SimpleNamespace(text=None)))

    assert asyncio.run(client.invoke("Write")) == ""


def test_network_failure_becomes_model_invocation_error() -> None:
    client = _client_with(AsyncMock(side_effect=httpx.ConnectError("offline")))

    with pytest.raises(ModelInvocationError):
        asyncio.run(client.invoke("Write"))


def test_non_text_response_is_rejected() -> None:
    client = _client_with(AsyncMock(return_value=SimpleNamespace(text=123)))

    with pytest.raises(ModelInvocationError):
        asyncio.run(client.invoke("Write"))


def test_sdk_client_is_built_from_api_key() -> None:
    with patch("captioncraft.model.adapter.genai.Client") as factory:
        GeminiClient(api_key="secret-key", model="gemini-test")

    factory.assert_called_once_with(api_key="secret-key")


def test_api_key_is_hidden_from_repr() -> None:
    client = _client_with(AsyncMock())

    assert "test-key" not in repr(client)


def test_build_contents_text_only() -> None:
    assert build_contents("prompt") == ["prompt"]
