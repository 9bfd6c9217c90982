"""Utilities for deciding whether form values count as filled."""

from __future__ import annotations

from typing import Any

from models.fields import FieldConfig, FieldKind
from wizard.media_validation import MediaValidator

_DEFAULT_MEDIA = MediaValidator()


def is_blank(value: Any) -> bool:
    """Return ``True`` when ``value`` should be treated as missing.

    Empty strings, empty collections, ``None`` and ``False`` are all blank.
    """

    if value is None or value is False:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (list, tuple, set, frozenset, dict)):
        return len(value) == 0
    return False


def non_blank_entries(value: Any) -> list[str]:
    """Return the entries of a list value that contain visible text."""

    if not isinstance(value, (list, tuple)):
        return []
    return [entry.strip() for entry in value if isinstance(entry, str) and entry.strip()]


def selection_count(value: Any) -> int:
    if isinstance(value, (list, tuple, set, frozenset)):
        return len([item for item in value if not is_blank(item)])
    return 0


def is_field_filled(
    config: FieldConfig,
    value: Any,
    field_id: str = "",
    *,
    media: MediaValidator | None = None,
) -> bool:
    """Return ``True`` when ``value`` satisfies ``config`` for progress accounting."""

    kind = config.kind
    if kind is FieldKind.FILE_COLLECTION:
        validator = media or _DEFAULT_MEDIA
        return validator.is_complete(field_id, value if isinstance(value, (list, tuple)) else [], config)
    if kind is FieldKind.ORDERED_LIST:
        return bool(non_blank_entries(value))
    if kind is FieldKind.MULTI_CHOICE:
        minimum = config.min_selections if config.min_selections is not None else 1
        return selection_count(value) >= max(minimum, 1)
    if kind is FieldKind.BOOLEAN:
        return value is True or (not isinstance(value, bool) and not is_blank(value))
    return isinstance(value, str) and bool(value.strip())


__all__ = ["is_blank", "is_field_filled", "non_blank_entries", "selection_count"]
