"""Session state, copy feedback and the generation controller."""

from .clipboard import copy_caption
from .controller import GenerationController, GenerationOutcome, GenerationStatus
from .state import ImageSelection, SessionState

__all__ = [
    "GenerationController",
    "GenerationOutcome",
    "GenerationStatus",
    "ImageSelection",
    "SessionState",
    "copy_caption",
]
