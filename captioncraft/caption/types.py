from __future__ import annotations

import base64
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from captioncraft.errors import InputValidationError


class Variant(str, Enum):
    """Caption length variants, in display order."""

    SHORT = "short"
    MEDIUM = "medium"
    LONG = "long"


VARIANT_ORDER: tuple[Variant, ...] = (Variant.SHORT, Variant.MEDIUM, Variant.LONG)


class GenerationMode(str, Enum):
    """Input modes offered by the UI."""

    TEXT = "text"
    IMAGE = "image"


@dataclass(frozen=True)
class Caption:
    id: str
    text: str
    variant: Variant


@dataclass(frozen=True)
class EncodedMedia:
    """Transmission-ready image: base64 payload plus its media type."""

    data: str
    mime_type: str

    def to_bytes(self) -> bytes:
        return base64.b64decode(self.data)


@dataclass(frozen=True)
class ResponseRecord:
    """Parsed model output keyed by variant name.

    ``missing`` lists the keys that were absent (or null) in the model output;
    their text is empty.
    """

    short: str
    medium: str
    long: str
    missing: tuple[str, ...] = field(default=(), compare=False)

    def text_for(self, variant: Variant) -> str:
        return getattr(self, variant.value)


@dataclass(frozen=True)
class GenerationRequest:
    mode: GenerationMode
    text: Optional[str] = None
    media: Optional[EncodedMedia] = None

    def __post_init__(self) -> None:
        if self.text is not None and self.media is not None:
            raise InputValidationError("A generation request carries either text or an image, not both")
        if self.mode is GenerationMode.TEXT and (self.text is None or not self.text.strip()):
            raise InputValidationError("Text generation requires non-empty input")
        if self.mode is GenerationMode.IMAGE and self.media is None:
            raise InputValidationError("Image generation requires an encoded image")

    @classmethod
    def for_text(cls, text: str) -> "GenerationRequest":
        return cls(mode=GenerationMode.TEXT, text=text)

    @classmethod
    def for_image(cls, media: EncodedMedia) -> "GenerationRequest":
        return cls(mode=GenerationMode.IMAGE, media=media)


__all__ = [
    "Caption",
    "EncodedMedia",
    "GenerationMode",
    "GenerationRequest",
    "ResponseRecord",
    "VARIANT_ORDER",
    "Variant",
]
