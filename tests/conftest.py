from __future__ import annotations

import asyncio
import io
import itertools
from pathlib import Path
import sys
from typing import Optional

import pytest
from PIL import Image

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from captioncraft.caption.types import EncodedMedia


VALID_RESPONSE = '{"short": "Sunset vibes", "medium": "Golden hour by the sea.", "long": "The sun dips low and paints the water gold."}'


class FakeModelClient:
    """Records calls and replays a canned response (or raises)."""

    def __init__(self, response: str = VALID_RESPONSE, error: Optional[Exception] = None) -> None:
        self.response = response
        self.error = error
        self.calls: list[tuple[str, Optional[EncodedMedia]]] = []
        self.gate: Optional[asyncio.Event] = None

    async def invoke(self, prompt: str, media: Optional[EncodedMedia] = None) -> str:
        self.calls.append((prompt, media))
        if self.gate is not None:
            await self.gate.wait()
        if self.error is not None:
            raise self.error
        return self.response


def make_png_bytes(size: tuple[int, int] = (4, 4), fmt: str = "PNG") -> bytes:
    buffer = io.BytesIO()
    Image.new("RGB", size, color=(200, 120, 40)).save(buffer, format=fmt)
    return buffer.getvalue()


@pytest.fixture()
def fake_client() -> FakeModelClient:
    return FakeModelClient()


@pytest.fixture()
def png_bytes() -> bytes:
    return make_png_bytes()


@pytest.fixture()
def sequential_ids():
    counter = itertools.count(1)
    return lambda: f"cap-{next(counter)}"
