from __future__ import annotations

from typing import Optional, Protocol

from captioncraft.caption.types import EncodedMedia


class ModelClientProtocol(Protocol):
    async def invoke(self, prompt: str, media: Optional[EncodedMedia] = None) -> str:
        """Send ``prompt`` (and optional inline media) and return the raw response text."""
