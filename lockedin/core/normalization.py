"""
Input normalization helpers.

Dependencies: lockedin.core.exceptions
System role: Canonical forms for tags and free-text fields
"""

from collections.abc import Iterable

from lockedin.core.exceptions import ValidationError

MAX_TAG_LENGTH = 50


def strip_or_none(value: str | None) -> str | None:
    """Trim a string; blank strings become None."""
    if value is None:
        return None
    stripped = value.strip()
    return stripped or None


def normalize_tag(tag: str) -> str:
    """
    Trim and lower-case a tag.

    Raises:
        ValidationError: If the tag is empty after trimming or too long
    """
    normalized = lookup_key(tag)
    if not is_storable(normalized):
        raise ValidationError(
            f"Tag cannot exceed {MAX_TAG_LENGTH} characters",
            field="tag",
            details={"length": len(normalized)},
        )
    return normalized


def lookup_key(tag: str) -> str:
    """
    Trim and lower-case a tag used only to look rows up.

    No length limit applies; an overlong key simply matches nothing.

    Raises:
        ValidationError: If the tag is not a string or is empty after trimming
    """
    if not isinstance(tag, str):
        raise ValidationError("Tag must be a string", field="tag")
    normalized = tag.strip().lower()
    if not normalized:
        raise ValidationError("Tag cannot be empty or whitespace-only", field="tag")
    return normalized


def is_storable(tag: str) -> bool:
    """Whether a looked-up key could ever have been stored."""
    return len(tag) <= MAX_TAG_LENGTH


def normalize_tags(tags: Iterable[str]) -> list[str]:
    """
    Normalize a collection of tags into a sorted, de-duplicated list.

    The whole batch is rejected if any single tag is invalid.
    """
    if isinstance(tags, (str, bytes)) or not isinstance(tags, Iterable):
        raise ValidationError("Tags must be a list of strings", field="tags")
    return sorted({normalize_tag(tag) for tag in tags})
