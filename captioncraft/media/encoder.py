"""Convert uploaded images into the inline payload the model API expects."""

from __future__ import annotations

import asyncio
import base64
import io
from pathlib import Path
from typing import BinaryIO, Optional, Union

from PIL import Image, UnidentifiedImageError

from captioncraft.caption.types import EncodedMedia
from captioncraft.errors import EncodingError

ImageSource = Union[str, Path, bytes, bytearray, BinaryIO]

# Multi-picture JPEGs from phones and cameras are still JPEG on the wire.
_FORMAT_MIME_OVERRIDES = {"MPO": "image/jpeg"}

# Extensions offered by the uploader; each decodes to a type the model API accepts.
UPLOAD_EXTENSIONS = ("jpg", "jpeg", "png", "webp")


def _read_source(source: ImageSource) -> bytes:
    if isinstance(source, (bytes, bytearray)):
        return bytes(source)
    if isinstance(source, (str, Path)):
        try:
            return Path(source).read_bytes()
        except OSError as exc:
            raise EncodingError(f"Unable to read image file {source}") from exc
    getvalue = getattr(source, "getvalue", None)
    if callable(getvalue):
        return bytes(getvalue())
    read = getattr(source, "read", None)
    if callable(read):
        try:
            if hasattr(source, "seek"):
                source.seek(0)
            return bytes(read())
        except OSError as exc:
            raise EncodingError("Unable to read image stream") from exc
    raise EncodingError(f"Unsupported image source type: {type(source).__name__}")


def _detect_mime(blob: bytes) -> Optional[str]:
    try:
        with Image.open(io.BytesIO(blob)) as img:
            img.verify()
            fmt = img.format
    except (UnidentifiedImageError, OSError, SyntaxError, ValueError) as exc:
        raise EncodingError("Image data is corrupt or in an unsupported format") from exc
    if fmt in _FORMAT_MIME_OVERRIDES:
        return _FORMAT_MIME_OVERRIDES[fmt]
    return Image.MIME.get(fmt or "")


def encode_image_sync(source: ImageSource, *, mime_type: Optional[str] = None) -> EncodedMedia:
    blob = _read_source(source)
    if not blob:
        raise EncodingError("Image source is empty")
    detected = _detect_mime(blob)
    resolved = detected or mime_type
    if not resolved:
        raise EncodingError("Unable to determine the image media type")
    return EncodedMedia(data=base64.b64encode(blob).decode("ascii"), mime_type=resolved)


async def encode_image(source: ImageSource, *, mime_type: Optional[str] = None) -> EncodedMedia:
    """Read and verify ``source`` off the event loop and return its base64 payload.

    Pillow's detected format wins over ``mime_type``; the declared type is only
    used when Pillow cannot name one.
    """

    return await asyncio.to_thread(encode_image_sync, source, mime_type=mime_type)


__all__ = ["ImageSource", "UPLOAD_EXTENSIONS", "encode_image", "encode_image_sync"]
