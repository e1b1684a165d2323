from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Optional

import httpx
from google import genai
from google.genai import errors as genai_errors
from google.genai import types

from captioncraft.caption.types import EncodedMedia
from captioncraft.errors import ModelInvocationError

from .interfaces import ModelClientProtocol

DEFAULT_MODEL = "gemini-2.5-pro"

logger = logging.getLogger(__name__)


def build_contents(prompt: str, media: Optional[EncodedMedia] = None) -> list[Any]:
    if media is None:
        return [prompt]
    return [prompt, types.Part.from_bytes(data=media.to_bytes(), mime_type=media.mime_type)]


@dataclass
class GeminiClient(ModelClientProtocol):
    """Thin async wrapper around ``models.generate_content``.

    One call per request; failures are raised as :class:`ModelInvocationError`.
    """

    api_key: str = field(repr=False)
    model: str = DEFAULT_MODEL
    client: Any = field(default=None, repr=False)

    def __post_init__(self) -> None:
        if self.client is None:
            self.client = genai.Client(api_key=self.api_key)

    async def invoke(self, prompt: str, media: Optional[EncodedMedia] = None) -> str:
        contents = build_contents(prompt, media)
        try:
            response = await self.client.aio.models.generate_content(
                model=self.model,
                contents=contents,
            )
        except genai_errors.APIError as exc:
            raise ModelInvocationError(f"Gemini API error {exc.code}: {exc.message}") from exc
        except httpx.HTTPError as exc:
            raise ModelInvocationError("Failed to reach the Gemini endpoint") from exc

        text = getattr(response, "text", None)
        if text is None:
            logger.warning("Gemini returned no text for model %s", self.model)
            return ""
        if not isinstance(text, str):
            raise ModelInvocationError("Unexpected response format from Gemini")
        return text


__all__ = ["DEFAULT_MODEL", "GeminiClient", "build_contents"]
