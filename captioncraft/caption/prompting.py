"""Instruction prompts that pin the model to the three-key JSON contract."""

from __future__ import annotations

from typing import Mapping, Optional

from captioncraft.errors import InputValidationError

from .types import VARIANT_ORDER, GenerationMode, Variant

TEXT_ROLE = "You are an AI social media caption generator."
IMAGE_ROLE = "You are an AI image caption generator."

TEXT_VARIANT_HINTS: Mapping[Variant, str] = {
    Variant.SHORT: "one-line caption",
    Variant.MEDIUM: "two-line caption",
    Variant.LONG: "more descriptive, multi-line caption",
}

IMAGE_VARIANT_HINTS: Mapping[Variant, str] = {
    Variant.SHORT: "quick catchy line",
    Variant.MEDIUM: "slightly detailed line",
    Variant.LONG: "storytelling caption",
}


def _json_template(hints: Mapping[Variant, str]) -> str:
    lines = [f'  "{variant.value}": "{hints[variant]}"' for variant in VARIANT_ORDER]
    return "{\n" + ",\n".join(lines) + "\n}"


def build_prompt(mode: GenerationMode, text: Optional[str] = None) -> str:
    """Return the instruction string for ``mode``.

    Text mode appends the user's input verbatim on the final line.
    """

    mode = GenerationMode(mode)
    if mode is GenerationMode.IMAGE:
        return (
            f"{IMAGE_ROLE} Only respond with JSON in the format:\n"
            f"{_json_template(IMAGE_VARIANT_HINTS)}\n"
            "Do not include any extra text or markdown."
        )

    if text is None or not text.strip():
        raise InputValidationError("Text prompt requires non-empty input")
    return (
        f"{TEXT_ROLE} Only respond with JSON in the format:\n"
        f"{_json_template(TEXT_VARIANT_HINTS)}\n"
        "Do not include any extra text or markdown.\n\n"
        f"Text: {text}"
    )


__all__ = ["build_prompt", "IMAGE_VARIANT_HINTS", "TEXT_VARIANT_HINTS"]
