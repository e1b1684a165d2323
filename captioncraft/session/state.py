"""Explicit per-session application state.

The session owns the single busy flag that serialises generation requests
across both input modes, the caption batch of each mode, and the transient
copy confirmation.  It is created when the UI session starts and dropped with
it; nothing here is persisted.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Callable, Dict, Optional, Sequence

from captioncraft.caption.types import Caption, GenerationMode

DEFAULT_COPY_FEEDBACK_SECONDS = 2.0
# How often the UI redraws caption cards so an expired "Copied!" label disappears.
COPY_REFRESH_SECONDS = 0.5


@dataclass(frozen=True)
class ImageSelection:
    """An image picked by the user, not yet encoded for the model."""

    name: str
    data: bytes = field(repr=False)
    mime_type: Optional[str] = None


@dataclass
class CopyFeedback:
    caption_id: str
    copied_at: float


@dataclass
class SessionState:
    copy_feedback_seconds: float = DEFAULT_COPY_FEEDBACK_SECONDS
    active_mode: GenerationMode = GenerationMode.TEXT
    text_input: str = ""
    image: Optional[ImageSelection] = None
    image_key: Optional[str] = None
    busy: bool = False
    notification: Optional[str] = None
    captions: Dict[GenerationMode, tuple[Caption, ...]] = field(
        default_factory=lambda: {mode: () for mode in GenerationMode}
    )
    copied: Optional[CopyFeedback] = None

    # ------------------------------------------------------------------
    # Input
    # ------------------------------------------------------------------
    def switch_mode(self, mode: GenerationMode) -> None:
        self.active_mode = GenerationMode(mode)

    def set_text(self, text: str) -> None:
        self.text_input = text or ""

    def select_image(self, selection: ImageSelection) -> None:
        """Replace the selected image; the image batch no longer matches and is cleared."""

        self.image = selection
        self.captions[GenerationMode.IMAGE] = ()

    def clear_image(self) -> None:
        self.image = None
        self.image_key = None
        self.captions[GenerationMode.IMAGE] = ()

    def sync_upload(self, key: Optional[str], load: Callable[[], ImageSelection]) -> None:
        """Mirror the uploader widget: ``key`` identifies the current upload, ``None`` when emptied.

        ``load`` is only called when the upload changed.
        """

        if key is None:
            if self.image is not None or self.image_key is not None:
                self.clear_image()
            return
        if key != self.image_key:
            self.select_image(load())
            self.image_key = key

    def has_valid_input(self, mode: GenerationMode) -> bool:
        if GenerationMode(mode) is GenerationMode.TEXT:
            return bool(self.text_input.strip())
        return self.image is not None

    def can_generate(self, mode: GenerationMode) -> bool:
        return not self.busy and self.has_valid_input(mode)

    # ------------------------------------------------------------------
    # Generation lifecycle
    # ------------------------------------------------------------------
    def begin_generation(self, mode: GenerationMode) -> bool:
        """Claim the busy flag for ``mode``; returns ``False`` when the request is refused."""

        mode = GenerationMode(mode)
        if not self.can_generate(mode):
            return False
        self.busy = True
        self.notification = None
        self.captions[mode] = ()
        return True

    def complete_generation(self, mode: GenerationMode, captions: Sequence[Caption]) -> None:
        self.captions[GenerationMode(mode)] = tuple(captions)

    def fail_generation(self, mode: GenerationMode, message: str) -> None:
        self.captions[GenerationMode(mode)] = ()
        self.notification = message

    def release(self) -> None:
        self.busy = False

    def take_notification(self) -> Optional[str]:
        message, self.notification = self.notification, None
        return message

    def captions_for(self, mode: GenerationMode) -> tuple[Caption, ...]:
        return self.captions[GenerationMode(mode)]

    # ------------------------------------------------------------------
    # Copy confirmation
    # ------------------------------------------------------------------
    def mark_copied(self, caption_id: str, now: Optional[float] = None) -> None:
        self.copied = CopyFeedback(caption_id=caption_id, copied_at=_now(now))

    def is_copied(self, caption_id: str, now: Optional[float] = None) -> bool:
        if self.copied is None or self.copied.caption_id != caption_id:
            return False
        return _now(now) - self.copied.copied_at < self.copy_feedback_seconds


def _now(now: Optional[float]) -> float:
    return time.monotonic() if now is None else now


__all__ = ["CopyFeedback", "ImageSelection", "SessionState"]
