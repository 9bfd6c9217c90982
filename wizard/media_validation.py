"""Two-tier validation for file-collection fields.

``validate_fast`` only counts files and runs on every value change.
``validate_full`` additionally inspects the size and type of each file and
runs on blur or submission.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from models.fields import FieldConfig, FileDescriptor

logger = logging.getLogger(__name__)

_BYTES_PER_MB = 1024 * 1024


def _plural(count: int, noun: str) -> str:
    return f"{count} {noun}" if count == 1 else f"{count} {noun}s"


def _format_megabytes(value: float) -> str:
    return f"{value:g}"


def _file_count(files: Any) -> int:
    if isinstance(files, (list, tuple)):
        return len(files)
    return 0


def minimum_file_count(config: FieldConfig) -> int:
    """Return the number of files needed before the field counts as filled."""

    minimum = config.validation.min_items
    if minimum is not None:
        return minimum
    return 1 if config.required else 0


def is_accepted_type(descriptor: FileDescriptor, accepted: Sequence[str]) -> bool:
    """Return ``True`` when the file's MIME type or extension is allowed.

    ``accepted`` entries follow the HTML ``accept`` attribute: ``image/*``
    wildcards, exact MIME types, or ``.ext`` extensions.
    """

    if not accepted:
        return True
    mime_type = descriptor.mime_type.strip().lower()
    extension = descriptor.extension
    for entry in accepted:
        if entry.startswith("."):
            if extension == entry:
                return True
        elif entry.endswith("/*"):
            if mime_type.startswith(entry[:-1]):
                return True
        elif mime_type == entry:
            return True
    return False


class MediaValidator:
    """Validate file collections without ever reading file contents."""

    def validate_fast(self, field_id: str, files: Any, config: FieldConfig) -> str | None:
        """Check only how many files were supplied."""

        count = _file_count(files)
        rules = config.validation
        minimum = minimum_file_count(config)
        if count == 0 and config.required:
            return rules.message or f"{config.label} is required"
        if count and count < minimum:
            return f"Please upload at least {_plural(minimum, 'file')}"
        if rules.max_items is not None and count > rules.max_items:
            return f"Too many files: maximum {_plural(rules.max_items, 'file')} allowed"
        return None

    def validate_full(self, field_id: str, files: Any, config: FieldConfig) -> str | None:
        """Run :meth:`validate_fast`, then check every file's size and type."""

        error = self.validate_fast(field_id, files, config)
        if error or not _file_count(files):
            return error

        rules = config.validation
        max_bytes = rules.max_size_mb * _BYTES_PER_MB if rules.max_size_mb is not None else None
        accepted = rules.accepted_types
        for raw in files:
            descriptor = FileDescriptor.coerce(raw)
            if max_bytes is not None and descriptor.size > max_bytes:
                return (
                    f'File "{descriptor.name}" exceeds the maximum size of '
                    f"{_format_megabytes(rules.max_size_mb)} MB"
                )
            if not is_accepted_type(descriptor, accepted):
                return f'File "{descriptor.name}" is not an accepted file type'
        logger.debug("Full media validation passed for %s (%d files)", field_id, len(files))
        return None

    def is_complete(self, field_id: str, files: Any, config: FieldConfig) -> bool:
        """Return ``True`` when the field counts as filled for progress purposes."""

        if not config.required:
            return True
        return _file_count(files) >= max(minimum_file_count(config), 1)


__all__ = ["MediaValidator", "is_accepted_type", "minimum_file_count"]
