"""Field registry and remote form configuration helpers.

The static defaults in :mod:`config.fields` can be overridden by form builder
documents (one document per feature variant, each with titled sections of
fields). This module converts those documents into a :class:`FieldsLayout`,
merges them over the defaults, and exposes the result through
:class:`FieldRegistry`, the read-only lookup the validators and the progress
calculator share.
"""

from __future__ import annotations

import json
import logging
import re
from collections.abc import Iterator, Mapping, Sequence
from pathlib import Path
from typing import Any

from pydantic import ValidationError

import config as engine_config
from config.fields import default_fields_layout
from constants.keys import FormDataKeys
from core.errors import FormConfigError
from models.fields import SECTION_NAMES, FieldConfig, FieldsLayout, kind_from_remote_type

logger = logging.getLogger(__name__)


VARIANT_SECTIONS: Mapping[str, str] = {
    "cover": "cover",
    "local-spotlight": "local_spotlight",
    "rising-star": "rising_star",
    "top-treatment": "top_treatment",
}
SHARED_SECTIONS: tuple[str, ...] = ("profile", "integration")
# Variant assumed while the applicant has not picked an application type.
DEFAULT_VARIANT = "local-spotlight"

# First match wins when a field id is looked up without a variant.
_LOOKUP_ORDER: tuple[str, ...] = (
    "profile",
    "cover",
    "local_spotlight",
    "top_treatment",
    "rising_star",
    "integration",
)

_DOCUMENT_SECTIONS: Mapping[str, str] = {
    **VARIANT_SECTIONS,
    "profile": "profile",
    "glamlink": "integration",
}

_VALIDATION_KEYS: tuple[str, ...] = (
    "minLength",
    "maxLength",
    "minChars",
    "minFiles",
    "maxFiles",
    "maxSize",
    "accept",
    "message",
    "validateOnBlur",
    "clearErrorOnFocus",
)
_FIELD_KEYS: tuple[str, ...] = (
    "placeholder",
    "helperText",
    "maxPoints",
    "minSelections",
    "maxSelections",
)


class FieldRegistry:
    """Read-only access to the merged field configuration."""

    def __init__(self, layout: FieldsLayout | None = None) -> None:
        self._layout = layout if layout is not None else default_fields_layout()
        self._warned_variants: set[str] = set()

    @property
    def layout(self) -> FieldsLayout:
        return self._layout

    @property
    def variants(self) -> tuple[str, ...]:
        return tuple(VARIANT_SECTIONS)

    def section(self, name: str) -> Mapping[str, FieldConfig]:
        return self._layout.section(name)

    def lookup(self, field_id: str) -> FieldConfig | None:
        """Return the configuration for ``field_id`` or ``None`` when unknown."""

        for section_name in _LOOKUP_ORDER:
            config = self._layout.section(section_name).get(field_id)
            if config is not None:
                return config
        return None

    def resolve_variant(self, snapshot: Mapping[str, Any], variant: str | None = None) -> str:
        """Return ``variant`` or the application type selected in ``snapshot``.

        Falls back to :data:`DEFAULT_VARIANT` so an unanswered application type
        never hides the variant-specific required fields.
        """

        if variant:
            return variant
        selected = snapshot.get(FormDataKeys.APPLICATION_TYPE)
        if isinstance(selected, str) and selected.strip():
            return selected.strip()
        return DEFAULT_VARIANT

    def variant_section_name(self, variant: str | None) -> str | None:
        if not variant:
            return None
        section_name = VARIANT_SECTIONS.get(variant)
        if section_name is None and variant not in self._warned_variants:
            self._warned_variants.add(variant)
            logger.warning("Unknown form variant %r; only shared sections apply", variant)
        return section_name

    def variant_fields(self, variant: str | None) -> Mapping[str, FieldConfig]:
        section_name = self.variant_section_name(variant)
        if section_name is None:
            return {}
        return self._layout.section(section_name)

    def config_for(self, field_id: str, variant: str | None = None) -> FieldConfig | None:
        """Return the configuration of ``field_id`` as seen by ``variant``.

        Variant sections can redefine a field that exists elsewhere (for
        example ``workPhotos``), so the active variant is consulted first.
        """

        variant_config = self.variant_fields(variant).get(field_id)
        if variant_config is not None:
            return variant_config
        return self.lookup(field_id)

    def section_for(self, field_id: str, variant: str | None = None) -> str | None:
        section_name = self.variant_section_name(variant)
        if section_name is not None and field_id in self._layout.section(section_name):
            return section_name
        for name in _LOOKUP_ORDER:
            if field_id in self._layout.section(name):
                return name
        return None

    def iter_form_fields(self, variant: str | None) -> Iterator[tuple[str, str, FieldConfig]]:
        """Yield ``(section, field_id, config)`` for every field shown for ``variant``."""

        section_names = list(SHARED_SECTIONS)
        variant_section = self.variant_section_name(variant)
        if variant_section is not None:
            section_names.append(variant_section)
        for section_name in section_names:
            for field_id, config in self._layout.section(section_name).items():
                yield section_name, field_id, config


def _document_section(document_id: str, section: Mapping[str, Any]) -> str | None:
    section_id = str(section.get("id") or "").lower()
    title = str(section.get("title") or "").lower()
    if section_id == "profile" or "profile" in title:
        return "profile"
    if section_id == "glamlink" or "glamlink" in title:
        return "integration"
    return _DOCUMENT_SECTIONS.get(document_id)


def transform_field_config(field: Mapping[str, Any]) -> FieldConfig:
    """Convert one form builder field document into a :class:`FieldConfig`."""

    field_id = str(field.get("name") or "")
    options = field.get("options") or []
    if not isinstance(options, Sequence) or isinstance(options, (str, bytes)):
        raise FormConfigError("Field options must be a list", field_id=field_id)
    try:
        kind = kind_from_remote_type(str(field.get("type") or ""), option_count=len(options))
    except ValueError as exc:
        raise FormConfigError(str(exc), field_id=field_id) from exc

    payload: dict[str, Any] = {
        "kind": kind,
        "label": field.get("label") or field_id,
        "required": bool(field.get("required")),
        "options": [
            {"id": option.get("id"), "label": option.get("label"), "description": option.get("description")}
            for option in options
            if isinstance(option, Mapping)
        ],
    }
    for key in _FIELD_KEYS:
        if field.get(key) is not None:
            payload[key] = field[key]

    raw_validation = field.get("validation")
    validation: dict[str, Any] = {}
    if isinstance(raw_validation, Mapping):
        validation = {key: raw_validation[key] for key in _VALIDATION_KEYS if raw_validation.get(key) is not None}
        pattern = raw_validation.get("pattern")
        if pattern:
            try:
                re.compile(str(pattern))
            except re.error as exc:
                logger.warning("Dropping invalid pattern for field %s: %s", field_id, exc)
            else:
                validation["pattern"] = str(pattern)
    if "maxLength" not in validation and field.get("maxLength") is not None:
        validation["maxLength"] = field["maxLength"]
    payload["validation"] = validation

    try:
        return FieldConfig.model_validate(payload)
    except ValidationError as exc:
        raise FormConfigError("Invalid field configuration", field_id=field_id) from exc


def transform_remote_configs(documents: Sequence[Mapping[str, Any]]) -> FieldsLayout:
    """Build a :class:`FieldsLayout` from enabled form builder documents.

    Documents are processed by their ``order`` value; later documents
    overwrite fields of earlier ones that share a section and field id.
    """

    if not isinstance(documents, Sequence) or isinstance(documents, (str, bytes)):
        raise FormConfigError("Remote form configuration must be a list of form documents")

    sections: dict[str, dict[str, FieldConfig]] = {name: {} for name in SECTION_NAMES}
    enabled = [doc for doc in documents if isinstance(doc, Mapping) and doc.get("enabled", True)]
    enabled.sort(key=lambda doc: doc.get("order") if isinstance(doc.get("order"), (int, float)) else 0)
    for document in enabled:
        document_id = str(document.get("id") or "")
        for section in document.get("sections") or []:
            if not isinstance(section, Mapping):
                continue
            target = _document_section(document_id, section)
            if target is None:
                logger.debug("Skipping section %r of unknown form %r", section.get("title"), document_id)
                continue
            for field in section.get("fields") or []:
                if not isinstance(field, Mapping) or not field.get("name"):
                    continue
                sections[target][str(field["name"])] = transform_field_config(field)
    return FieldsLayout(**sections)


def merge_layouts(defaults: FieldsLayout, override: FieldsLayout | None) -> FieldsLayout:
    """Return ``defaults`` with every field present in ``override`` replaced."""

    if override is None:
        return defaults
    merged = {
        name: {**defaults.section(name), **override.section(name)}
        for name in SECTION_NAMES
    }
    return FieldsLayout(**merged)


def load_override_file(path: str | Path) -> FieldsLayout:
    """Load an override from ``path``.

    The file holds either a list of form builder documents or a mapping that
    already follows the :class:`FieldsLayout` shape.
    """

    file_path = Path(path)
    try:
        payload = json.loads(file_path.read_text(encoding="utf-8"))
    except FileNotFoundError as exc:
        logger.error("Form configuration override missing at %s", file_path)
        raise FormConfigError(f"Override file not found: {file_path}") from exc
    except json.JSONDecodeError as exc:
        logger.error("Form configuration override at %s is not valid JSON", file_path)
        raise FormConfigError(f"Override file is not valid JSON: {file_path}") from exc

    if isinstance(payload, list):
        return transform_remote_configs(payload)
    if isinstance(payload, Mapping):
        try:
            return FieldsLayout.model_validate(payload)
        except ValidationError as exc:
            raise FormConfigError(f"Override file has an invalid layout: {file_path}") from exc
    raise FormConfigError(f"Unsupported override payload in {file_path}")


def build_registry(
    override: FieldsLayout | Sequence[Mapping[str, Any]] | None = None,
    *,
    path: str | Path | None = None,
) -> FieldRegistry:
    """Return a registry of the defaults merged with an optional override.

    ``override`` may be a ready layout or raw form builder documents. When
    neither ``override`` nor ``path`` is given, ``GET_FEATURED_FORM_CONFIG_PATH``
    is consulted.
    """

    layout = default_fields_layout()
    if override is not None:
        if not isinstance(override, FieldsLayout):
            override = transform_remote_configs(override)
        layout = merge_layouts(layout, override)
    else:
        source = path or engine_config.FORM_CONFIG_PATH
        if source:
            layout = merge_layouts(layout, load_override_file(source))
    return FieldRegistry(layout)


__all__ = [
    "DEFAULT_VARIANT",
    "FieldRegistry",
    "SHARED_SECTIONS",
    "VARIANT_SECTIONS",
    "build_registry",
    "load_override_file",
    "merge_layouts",
    "transform_field_config",
    "transform_remote_configs",
]
