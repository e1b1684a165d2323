"""Image encoding helpers."""

from .encoder import encode_image, encode_image_sync

__all__ = ["encode_image", "encode_image_sync"]
