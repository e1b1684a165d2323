"""Generation lifecycle: Idle -> Generating -> Idle, with one request in flight."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Awaitable, Callable, Optional

from captioncraft.caption.contract import extract_response_record
from captioncraft.caption.materialize import CaptionMaterializer
from captioncraft.caption.prompting import build_prompt
from captioncraft.caption.types import Caption, EncodedMedia, GenerationMode, GenerationRequest
from captioncraft.errors import CaptionCraftError, InputValidationError
from captioncraft.logging_utils import RunLogger
from captioncraft.media.encoder import ImageSource, encode_image
from captioncraft.model.interfaces import ModelClientProtocol

from .state import SessionState

Encoder = Callable[..., Awaitable[EncodedMedia]]

FAILURE_MESSAGES = {
    GenerationMode.TEXT: "Text caption generation failed.",
    GenerationMode.IMAGE: "Image caption generation failed.",
}


class GenerationStatus(str, Enum):
    COMPLETED = "completed"
    REJECTED = "rejected"
    FAILED = "failed"


@dataclass(frozen=True)
class GenerationOutcome:
    mode: GenerationMode
    status: GenerationStatus
    captions: tuple[Caption, ...] = ()
    message: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status is GenerationStatus.COMPLETED


class GenerationController:
    """Orchestrates prompt, encoding, model call, extraction and materialisation.

    The busy flag lives on the :class:`SessionState` passed to each call.  It
    is checked and claimed before the first suspension point and released on
    every exit path.
    """

    def __init__(
        self,
        client: ModelClientProtocol,
        *,
        materializer: Optional[CaptionMaterializer] = None,
        encoder: Encoder = encode_image,
        logger: Optional[RunLogger] = None,
    ) -> None:
        self.client = client
        self.materializer = materializer or CaptionMaterializer()
        self.encoder = encoder
        self.logger = logger

    def _log(self, step: str, message: str, level: str = "INFO") -> None:
        if self.logger is not None:
            self.logger.log(step, message, level=level)

    async def _step(self, step: str, message, awaitable):
        if self.logger is None:
            return await awaitable
        return await self.logger.atimed(step, message, awaitable)

    async def generate(self, state: SessionState, mode: GenerationMode) -> GenerationOutcome:
        mode = GenerationMode(mode)
        if not state.begin_generation(mode):
            reason = "busy" if state.busy else "invalid input"
            self._log("guard", f"{mode.value} request ignored ({reason})", level="DEBUG")
            return GenerationOutcome(mode=mode, status=GenerationStatus.REJECTED)

        try:
            request = await self._build_request(state, mode)
            prompt = build_prompt(mode, request.text)
            raw_text = await self._step(
                "invoke",
                lambda text: f"{mode.value} response received ({len(text)} chars)",
                self.client.invoke(prompt, request.media),
            )
            record = extract_response_record(raw_text)
            if record.missing:
                self._log("extract", f"response missing keys: {', '.join(record.missing)}", level="WARN")
            captions = self.materializer.materialize(record)
            state.complete_generation(mode, captions)
        except CaptionCraftError as exc:
            self._log("error", f"{mode.value} caption error: {exc}", level="ERROR")
            return self._fail(state, mode)
        except Exception as exc:
            if self.logger is not None:
                self.logger.log_exception("error", f"{mode.value} caption error", exc)
            return self._fail(state, mode)
        finally:
            state.release()

        self._log("done", f"{mode.value} captions ready ({len(captions)})")
        return GenerationOutcome(mode=mode, status=GenerationStatus.COMPLETED, captions=captions)

    def _fail(self, state: SessionState, mode: GenerationMode) -> GenerationOutcome:
        message = FAILURE_MESSAGES[mode]
        state.fail_generation(mode, message)
        return GenerationOutcome(mode=mode, status=GenerationStatus.FAILED, message=message)

    async def generate_text(self, state: SessionState) -> GenerationOutcome:
        return await self.generate(state, GenerationMode.TEXT)

    async def generate_image(self, state: SessionState) -> GenerationOutcome:
        return await self.generate(state, GenerationMode.IMAGE)

    async def _build_request(self, state: SessionState, mode: GenerationMode) -> GenerationRequest:
        if mode is GenerationMode.TEXT:
            return GenerationRequest.for_text(state.text_input)
        selection = state.image
        if selection is None:
            raise InputValidationError("Image generation requires a selected image")
        source: ImageSource = selection.data
        media = await self._step(
            "encode",
            lambda encoded: f"encoded {selection.name} as {encoded.mime_type}",
            self.encoder(source, mime_type=selection.mime_type),
        )
        return GenerationRequest.for_image(media)


__all__ = [
    "FAILURE_MESSAGES",
    "GenerationController",
    "GenerationOutcome",
    "GenerationStatus",
]
