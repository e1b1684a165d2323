from __future__ import annotations

import pytest

from captioncraft.caption.contract import extract_response_record, find_json_fragment
from captioncraft.caption.types import ResponseRecord
from captioncraft.errors import MalformedJsonError, NoJsonFoundError, ResponseFormatError


def test_bare_object_extracts_all_variants() -> None:
    record = extract_response_record('{"short":"a","medium":"b","long":"c"}')

    assert record == ResponseRecord(short="a", medium="b", long="c")
    assert record.missing == ()


def test_surrounding_prose_is_ignored() -> None:
    raw = 'Here you go: {"short":"a","medium":"b","long":"c"} hope it helps!'

    record = extract_response_record(raw)

    assert (record.short, record.medium, record.long) == ("a", "b", "c")


def test_markdown_fence_is_ignored() -> None:
    raw = '```json\n{\n  "short": "a",\n  "medium": "b",\n  "long": "c"\n}\n```'

    record = extract_response_record(raw)

    assert record.long == "c"


def test_extraction_is_deterministic() -> None:
    raw = 'noise {"short":"x","medium":"y","long":"z"} noise'

    assert extract_response_record(raw) == extract_response_record(raw)


def test_text_without_brace_raises_no_json_found() -> None:
    with pytest.raises(NoJsonFoundError):
        extract_response_record("Sorry, I cannot help with that.")


def test_empty_text_raises_no_json_found() -> None:
    with pytest.raises(NoJsonFoundError):
        extract_response_record("")


def test_truncated_object_raises_malformed_json() -> None:
    with pytest.raises(MalformedJsonError):
        extract_response_record('{"short": "a", "medium": "b"')


def test_invalid_fragment_raises_malformed_json() -> None:
    with pytest.raises(MalformedJsonError):
        extract_response_record("{short: a, medium: b}")


def test_errors_share_response_format_base() -> None:
    with pytest.raises(ResponseFormatError):
        extract_response_record("nothing here")


def test_missing_keys_pass_through_as_empty_text() -> None:
    record = extract_response_record('{"short": "only short"}')

    assert record.short == "only short"
    assert record.medium == ""
    assert record.long == ""
    assert record.missing == ("medium", "long")


def test_null_value_is_treated_as_missing() -> None:
    record = extract_response_record('{"short": null, "medium": "m", "long": "l"}')

    assert record.short == ""
    assert record.missing == ("short",)


def test_non_string_values_are_stringified() -> None:
    record = extract_response_record('{"short": 1, "medium": true, "long": "l"}')

    assert record.short == "1"
    assert record.medium == "True"


def test_only_first_object_is_used() -> None:
    raw = '{"short":"first","medium":"m","long":"l"} {"short":"second","medium":"m","long":"l"}'

    assert extract_response_record(raw).short == "first"


# Boundary cases of the shortest-match policy: the fragment ends at the first
# closing brace and is never widened.

def test_closing_brace_inside_caption_breaks_extraction() -> None:
    raw = '{"short": "smile :}", "medium": "b", "long": "c"}'

    assert find_json_fragment(raw) == '{"short": "smile :}'
    with pytest.raises(MalformedJsonError):
        extract_response_record(raw)


def test_nested_object_breaks_extraction() -> None:
    raw = '{"short": "a", "meta": {"x": 1}, "medium": "b", "long": "c"}'

    with pytest.raises(MalformedJsonError):
        extract_response_record(raw)
