"""Caption contract: prompts, response extraction and caption records."""

from .contract import extract_response_record
from .materialize import CaptionMaterializer
from .prompting import build_prompt
from .types import (
    VARIANT_ORDER,
    Caption,
    EncodedMedia,
    GenerationMode,
    GenerationRequest,
    ResponseRecord,
    Variant,
)

__all__ = [
    "Caption",
    "CaptionMaterializer",
    "EncodedMedia",
    "GenerationMode",
    "GenerationRequest",
    "ResponseRecord",
    "VARIANT_ORDER",
    "Variant",
    "build_prompt",
    "extract_response_record",
]
