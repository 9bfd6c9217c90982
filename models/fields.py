"""Pydantic models describing the Get Featured form configuration."""

from __future__ import annotations

import re
from collections.abc import Mapping
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class FieldKind(StrEnum):
    """Enumerate the value shapes a form field can hold."""

    TEXT = "text"
    EMAIL = "email"
    PHONE = "phone"
    URL = "url"
    PARAGRAPH = "paragraph"
    BOOLEAN = "boolean"
    SINGLE_CHOICE = "single-choice"
    MULTI_CHOICE = "multi-choice"
    ORDERED_LIST = "ordered-list"
    FILE_COLLECTION = "file-collection"


# Field type names used by the form builder documents.
_REMOTE_TYPE_KINDS: Mapping[str, FieldKind] = {
    "text": FieldKind.TEXT,
    "email": FieldKind.EMAIL,
    "tel": FieldKind.PHONE,
    "url": FieldKind.URL,
    "textarea": FieldKind.PARAGRAPH,
    "radio": FieldKind.SINGLE_CHOICE,
    "select": FieldKind.SINGLE_CHOICE,
    "multi-checkbox": FieldKind.MULTI_CHOICE,
    "bullet-array": FieldKind.ORDERED_LIST,
    "file-upload": FieldKind.FILE_COLLECTION,
}


def kind_from_remote_type(type_name: str, *, option_count: int = 0) -> FieldKind:
    """Return the :class:`FieldKind` for a form builder ``type_name``.

    Checkboxes are ambiguous in the builder: a checkbox with several options
    stores a list of selections, a single checkbox stores a boolean.
    """

    normalized = (type_name or "").strip().lower()
    if normalized == "checkbox":
        return FieldKind.MULTI_CHOICE if option_count > 1 else FieldKind.BOOLEAN
    try:
        return FieldKind(normalized)
    except ValueError:
        pass
    kind = _REMOTE_TYPE_KINDS.get(normalized)
    if kind is None:
        raise ValueError(f"Unsupported field type: {type_name!r}")
    return kind


class ValidationRules(BaseModel):
    """Validation settings attached to a single field."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    min_length: int | None = Field(None, alias="minLength", ge=0)
    max_length: int | None = Field(None, alias="maxLength", ge=0)
    min_chars: int | None = Field(None, alias="minChars", ge=0)
    pattern: str | None = None
    min_items: int | None = Field(None, alias="minFiles", ge=0)
    max_items: int | None = Field(None, alias="maxFiles", ge=0)
    max_size_mb: float | None = Field(None, alias="maxSize", gt=0)
    accept: str | None = None
    message: str | None = None
    validate_on_blur: bool = Field(True, alias="validateOnBlur")
    clear_error_on_focus: bool = Field(True, alias="clearErrorOnFocus")

    @field_validator("pattern")
    @classmethod
    def _pattern_must_compile(cls, value: str | None) -> str | None:
        if value is None:
            return None
        try:
            re.compile(value)
        except re.error as exc:
            raise ValueError(f"invalid pattern: {exc}") from exc
        return value

    @field_validator("message")
    @classmethod
    def _blank_message_is_none(cls, value: str | None) -> str | None:
        if value is None or not value.strip():
            return None
        return value

    @property
    def compiled_pattern(self) -> re.Pattern[str] | None:
        if self.pattern is None:
            return None
        return re.compile(self.pattern)

    @property
    def accepted_types(self) -> tuple[str, ...]:
        """Return the lower-cased entries of ``accept``."""

        if not self.accept:
            return ()
        return tuple(
            entry.strip().lower() for entry in self.accept.split(",") if entry.strip()
        )


class FieldOption(BaseModel):
    """Selectable option for choice fields."""

    model_config = ConfigDict(frozen=True)

    id: str
    label: str
    description: str | None = None


class FieldConfig(BaseModel):
    """Static description of one form field."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    kind: FieldKind
    label: str
    required: bool = False
    validation: ValidationRules = Field(default_factory=ValidationRules)
    options: tuple[FieldOption, ...] = ()
    min_selections: int | None = Field(None, alias="minSelections", ge=0)
    max_selections: int | None = Field(None, alias="maxSelections", ge=0)
    max_points: int | None = Field(None, alias="maxPoints", ge=1)
    placeholder: str | None = None
    helper_text: str | None = Field(None, alias="helperText")


SECTION_NAMES: tuple[str, ...] = (
    "profile",
    "integration",
    "cover",
    "local_spotlight",
    "rising_star",
    "top_treatment",
)


class FieldsLayout(BaseModel):
    """All field configurations grouped by form section."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    profile: dict[str, FieldConfig] = Field(default_factory=dict)
    integration: dict[str, FieldConfig] = Field(default_factory=dict, alias="glamlinkIntegration")
    cover: dict[str, FieldConfig] = Field(default_factory=dict)
    local_spotlight: dict[str, FieldConfig] = Field(default_factory=dict, alias="localSpotlight")
    rising_star: dict[str, FieldConfig] = Field(default_factory=dict, alias="risingStar")
    top_treatment: dict[str, FieldConfig] = Field(default_factory=dict, alias="topTreatment")

    def section(self, name: str) -> Mapping[str, FieldConfig]:
        if name not in SECTION_NAMES:
            raise KeyError(name)
        return getattr(self, name)

    def sections(self) -> dict[str, Mapping[str, FieldConfig]]:
        return {name: self.section(name) for name in SECTION_NAMES}


class FileDescriptor(BaseModel):
    """Metadata of an uploaded file; the engine never reads file contents."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str = ""
    size: int = Field(0, ge=0)
    mime_type: str = Field("", alias="type")

    @property
    def extension(self) -> str:
        _, dot, suffix = self.name.rpartition(".")
        return f".{suffix.lower()}" if dot and suffix else ""

    @classmethod
    def coerce(cls, raw: Any) -> "FileDescriptor":
        """Build a descriptor from a mapping or an upload object.

        Streamlit ``UploadedFile`` instances expose ``name``, ``size`` and
        ``type`` attributes, which is all that is needed here.
        """

        if isinstance(raw, FileDescriptor):
            return raw
        if isinstance(raw, Mapping):
            name = raw.get("name")
            size = raw.get("size")
            mime_type = raw.get("type") or raw.get("mime_type")
        else:
            name = getattr(raw, "name", None)
            size = getattr(raw, "size", None)
            mime_type = getattr(raw, "type", None)
        return cls(
            name=str(name or ""),
            size=int(size) if isinstance(size, (int, float)) and size > 0 else 0,
            type=str(mime_type or ""),
        )


__all__ = [
    "FieldConfig",
    "FieldKind",
    "FieldOption",
    "FieldsLayout",
    "FileDescriptor",
    "SECTION_NAMES",
    "ValidationRules",
    "kind_from_remote_type",
]
