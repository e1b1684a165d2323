from __future__ import annotations

import logging
from typing import Callable, Optional

from captioncraft.caption.types import Caption

from .state import SessionState

logger = logging.getLogger(__name__)

ClipboardWriter = Callable[[str], None]


def copy_caption(
    state: SessionState,
    caption: Caption,
    writer: ClipboardWriter,
    *,
    now: Optional[float] = None,
) -> bool:
    """Copy ``caption`` through ``writer`` and start its confirmation window."""

    try:
        writer(caption.text)
    except Exception:
        logger.exception("Copy failed for caption %s", caption.id)
        return False
    state.mark_copied(caption.id, now=now)
    return True


__all__ = ["ClipboardWriter", "copy_caption"]
