from __future__ import annotations

import uuid
from typing import Callable, Optional

from .types import VARIANT_ORDER, Caption, ResponseRecord


def new_caption_id() -> str:
    return str(uuid.uuid4())


class CaptionMaterializer:
    """Turn a parsed response into one identity-bearing caption per variant."""

    def __init__(self, id_factory: Optional[Callable[[], str]] = None) -> None:
        self._id_factory = id_factory or new_caption_id
        self._issued: set[str] = set()

    def _next_id(self) -> str:
        caption_id = self._id_factory()
        if caption_id in self._issued:
            raise ValueError(f"Caption id {caption_id!r} was already issued")
        self._issued.add(caption_id)
        return caption_id

    def materialize(self, record: ResponseRecord) -> tuple[Caption, ...]:
        return tuple(
            Caption(id=self._next_id(), text=record.text_for(variant), variant=variant)
            for variant in VARIANT_ORDER
        )


__all__ = ["CaptionMaterializer", "new_caption_id"]
