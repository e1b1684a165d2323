from __future__ import annotations

import pytest

from captioncraft.caption.materialize import CaptionMaterializer
from captioncraft.caption.types import ResponseRecord, Variant


def _record() -> ResponseRecord:
    return ResponseRecord(short="a", medium="b", long="c")


def test_materialize_yields_three_captions_in_variant_order() -> None:
    captions = CaptionMaterializer().materialize(_record())

    assert [caption.variant for caption in captions] == [Variant.SHORT, Variant.MEDIUM, Variant.LONG]
    assert [caption.text for caption in captions] == ["a", "b", "c"]


def test_ids_are_unique_across_batches() -> None:
    materializer = CaptionMaterializer()

    seen: set[str] = set()
    for _ in range(50):
        for caption in materializer.materialize(_record()):
            assert caption.id not in seen
            seen.add(caption.id)

    assert len(seen) == 150


def test_each_call_returns_a_new_sequence(sequential_ids) -> None:
    materializer = CaptionMaterializer(id_factory=sequential_ids)

    first = materializer.materialize(_record())
    second = materializer.materialize(_record())

    assert [c.id for c in first] == ["cap-1", "cap-2", "cap-3"]
    assert [c.id for c in second] == ["cap-4", "cap-5", "cap-6"]
    assert first is not second


def test_empty_text_is_kept() -> None:
    captions = CaptionMaterializer().materialize(ResponseRecord(short="a", medium="", long=""))

    assert captions[1].text == ""
    assert len(captions) == 3


def test_reused_id_is_rejected() -> None:
    materializer = CaptionMaterializer(id_factory=lambda: "same")

    with pytest.raises(ValueError):
        materializer.materialize(_record())
