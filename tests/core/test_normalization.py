"""Tests for tag and text normalization."""

import pytest

from lockedin.core.exceptions import ValidationError
from lockedin.core.normalization import (
    MAX_TAG_LENGTH,
    is_storable,
    lookup_key,
    normalize_tag,
    normalize_tags,
    strip_or_none,
)


def test_tag_is_trimmed_and_lowercased() -> None:
    assert normalize_tag("  Linear Algebra ") == "linear algebra"


def test_batch_is_sorted_and_unique() -> None:
    assert normalize_tags(["Math", "math ", "Exam"]) == ["exam", "math"]


@pytest.mark.parametrize("tag", ["", "   ", "a" * (MAX_TAG_LENGTH + 1)])
def test_invalid_tags_rejected(tag) -> None:
    with pytest.raises(ValidationError) as exc_info:
        normalize_tag(tag)

    assert exc_info.value.field == "tag"


def test_one_bad_tag_fails_batch() -> None:
    with pytest.raises(ValidationError):
        normalize_tags(["ok", ""])


@pytest.mark.parametrize("tags", ["math", None, 7])
def test_batch_must_be_a_collection(tags) -> None:
    with pytest.raises(ValidationError) as exc_info:
        normalize_tags(tags)

    assert exc_info.value.field == "tags"


def test_lookup_key_skips_length_limit() -> None:
    overlong = "X" * (MAX_TAG_LENGTH + 1)

    assert lookup_key(f" {overlong} ") == overlong.lower()
    assert is_storable(overlong.lower()) is False
    assert is_storable("x" * MAX_TAG_LENGTH) is True


@pytest.mark.parametrize("tag", ["", "   ", None])
def test_lookup_key_rejects_blank(tag) -> None:
    with pytest.raises(ValidationError):
        lookup_key(tag)


def test_strip_or_none() -> None:
    assert strip_or_none("  notes ") == "notes"
    assert strip_or_none("   ") is None
    assert strip_or_none(None) is None
