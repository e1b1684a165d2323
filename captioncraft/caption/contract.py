"""Response contract: pull the caption JSON object out of free-form model text.

The model is asked for bare JSON but may wrap it in prose or markdown fences.
Extraction takes the first ``{`` and the nearest ``}`` after it and parses
exactly that fragment.  The match is never widened, so a literal ``}`` inside
a caption, or a nested object, makes the fragment unparseable and the
extraction fails.
"""

from __future__ import annotations

import json
from typing import Any, Mapping

from captioncraft.errors import MalformedJsonError, NoJsonFoundError

from .types import VARIANT_ORDER, ResponseRecord


def find_json_fragment(raw_text: str) -> str:
    """Return the shortest ``{...}`` fragment starting at the first ``{``."""

    start = raw_text.find("{")
    if start < 0:
        raise NoJsonFoundError("No JSON object found in model response")
    end = raw_text.find("}", start + 1)
    if end < 0:
        raise MalformedJsonError("JSON object in model response is not closed")
    return raw_text[start : end + 1]


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    return str(value)


def record_from_mapping(data: Mapping[str, Any]) -> ResponseRecord:
    missing = tuple(
        variant.value for variant in VARIANT_ORDER if data.get(variant.value) is None
    )
    return ResponseRecord(
        short=_as_text(data.get("short")),
        medium=_as_text(data.get("medium")),
        long=_as_text(data.get("long")),
        missing=missing,
    )


def extract_response_record(raw_text: str) -> ResponseRecord:
    """Parse the first JSON object in ``raw_text`` into a :class:`ResponseRecord`.

    Missing keys do not fail the extraction; their captions are empty.
    """

    fragment = find_json_fragment(raw_text or "")
    try:
        data = json.loads(fragment)
    except json.JSONDecodeError as exc:
        raise MalformedJsonError(f"Invalid JSON in model response: {exc.msg}") from exc
    if not isinstance(data, Mapping):  # pragma: no cover - a braced fragment always decodes to a dict
        raise MalformedJsonError("Model response JSON is not an object")
    return record_from_mapping(data)


__all__ = ["extract_response_record", "find_json_fragment", "record_from_mapping"]
