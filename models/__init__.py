"""Pydantic models for the Get Featured form configuration and progress."""

from .fields import (
    FieldConfig,
    FieldKind,
    FieldOption,
    FieldsLayout,
    FileDescriptor,
    SECTION_NAMES,
    ValidationRules,
    kind_from_remote_type,
)
from .progress import FieldStatus, ProgressInfo

__all__ = [
    "FieldConfig",
    "FieldKind",
    "FieldOption",
    "FieldStatus",
    "FieldsLayout",
    "FileDescriptor",
    "ProgressInfo",
    "SECTION_NAMES",
    "ValidationRules",
    "kind_from_remote_type",
]
