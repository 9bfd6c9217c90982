"""Field-level validation for the Get Featured form.

:class:`FieldValidator` is the cheap path that runs on every value change.
Results are memoised per field id for a few seconds; the cached value includes
everything the result depends on (the field value, the variant, and the
values of governing fields), so a cache hit always matches what a fresh run
would return.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any, Final

from pydantic import AnyUrl, TypeAdapter, ValidationError

import config as engine_config
from core.form_config import FieldRegistry
from core.regexes import EMAIL_SHAPE_RE, MIN_PHONE_DIGITS, NON_DIGIT_RE, PHONE_CHARS_RE
from models.fields import FieldConfig, FieldKind
from state.validation_cache import ValidationCache
from utils.performance import PerformanceMonitor
from wizard.media_validation import MediaValidator
from wizard.missing_fields import is_blank, non_blank_entries, selection_count
from wizard.rules import CONDITIONAL_RULES, ConditionalRule, rule_for

logger = logging.getLogger(__name__)

_URL_ADAPTER: Final[TypeAdapter[AnyUrl]] = TypeAdapter(AnyUrl)

# Fallback wording for minimum-length errors on fields without a custom message.
_MIN_CHARS_MESSAGES: Final[Mapping[str, str]] = {
    "email": "Email must be at least {count} characters (e.g., a@b.co)",
    "businessAddress": "Please enter a complete address (minimum {count} characters)",
    "bio": "Bio must be at least {count} characters to provide meaningful information",
    "phone": "Phone number must be at least {count} digits",
}


def is_valid_url(candidate: str) -> bool:
    """Return ``True`` when ``candidate`` parses as an absolute URL."""

    try:
        _URL_ADAPTER.validate_python(candidate)
    except (ValidationError, TypeError):
        return False
    return True


def _required_error(field_id: str, value: Any, config: FieldConfig) -> str | None:
    message = config.validation.message
    kind = config.kind
    if kind is FieldKind.ORDERED_LIST:
        if not non_blank_entries(value):
            return message or f"{config.label} is required"
        return None
    if kind is FieldKind.MULTI_CHOICE:
        count = selection_count(value)
        if count == 0:
            return message or "Please select at least one option"
        minimum = config.min_selections or 1
        if count < minimum:
            return message or f"Please select at least {minimum} options"
        return None
    if kind is FieldKind.BOOLEAN:
        if is_blank(value):
            return message or "This field is required"
        return None
    if not isinstance(value, str) or not value.strip():
        return message or f"{config.label} is required"
    return None


def _format_error(config: FieldConfig, text: str) -> str | None:
    message = config.validation.message
    kind = config.kind
    if kind is FieldKind.EMAIL and not EMAIL_SHAPE_RE.match(text):
        return message or "Please enter a valid email address"
    if kind is FieldKind.PHONE:
        if not PHONE_CHARS_RE.match(text):
            return message or "Please enter a valid phone number"
        if len(NON_DIGIT_RE.sub("", text)) < MIN_PHONE_DIGITS:
            return message or f"Phone number must be at least {MIN_PHONE_DIGITS} digits"
    if kind is FieldKind.URL and not is_valid_url(text):
        return message or "Please enter a valid URL"
    pattern = config.validation.compiled_pattern
    if pattern is not None and not pattern.fullmatch(text):
        return f"{config.label} has an invalid format"
    return None


def _min_chars_error(field_id: str, config: FieldConfig, text: str) -> str | None:
    min_chars = config.validation.min_chars
    if not min_chars or len(text) >= min_chars:
        return None
    if config.validation.message:
        return config.validation.message
    template = _MIN_CHARS_MESSAGES.get(field_id)
    if template is not None:
        return template.format(count=min_chars)
    if not config.required:
        return f"If provided, {config.label} must be at least {min_chars} characters"
    return f"{config.label} must be at least {min_chars} characters"


def _min_length_error(config: FieldConfig, text: str) -> str | None:
    min_length = config.validation.min_length
    if not min_length or len(text) >= min_length:
        return None
    return config.validation.message or f"{config.label} must be at least {min_length} characters long"


def _max_length_error(config: FieldConfig, text: str) -> str | None:
    max_length = config.validation.max_length
    if max_length is not None and len(text) > max_length:
        return f"{config.label} must be {max_length} characters or less"
    return None


def _list_entries_error(config: FieldConfig, value: Any) -> str | None:
    entries = non_blank_entries(value)
    min_chars = config.validation.min_chars
    if min_chars:
        for entry in entries:
            if len(entry) < min_chars:
                return config.validation.message or (
                    f"Each entry in {config.label} must be at least {min_chars} characters"
                )
    if config.max_points is not None and len(entries) > config.max_points:
        return f"{config.label} accepts at most {config.max_points} entries"
    return None


def _selection_limit_error(config: FieldConfig, value: Any) -> str | None:
    if config.max_selections is not None and selection_count(value) > config.max_selections:
        return f"Please select no more than {config.max_selections} options"
    return None


class FieldValidator:
    """Validate single field values against the registry configuration."""

    def __init__(
        self,
        registry: FieldRegistry,
        *,
        cache: ValidationCache | None = None,
        media: MediaValidator | None = None,
        monitor: PerformanceMonitor | None = None,
        rules: Iterable[ConditionalRule] = CONDITIONAL_RULES,
    ) -> None:
        self._registry = registry
        self._cache = cache if cache is not None else ValidationCache(engine_config.VALIDATION_CACHE_TTL)
        self._media = media or MediaValidator()
        self._monitor = monitor or PerformanceMonitor("FieldValidator")
        self._rules = tuple(rules)

    @property
    def cache(self) -> ValidationCache:
        return self._cache

    @property
    def monitor(self) -> PerformanceMonitor:
        return self._monitor

    def _active_rule(self, field_id: str, snapshot: Mapping[str, Any]) -> ConditionalRule | None:
        rule = rule_for(field_id, self._rules)
        if rule is not None and rule.is_active(snapshot):
            return rule
        return None

    def _cache_value(
        self, field_id: str, value: Any, snapshot: Mapping[str, Any], variant: str | None
    ) -> tuple[Any, ...]:
        rule = rule_for(field_id, self._rules)
        governing = snapshot.get(rule.governing_field) if rule is not None else None
        return (value, variant, governing)

    def validate(
        self,
        field_id: str,
        value: Any,
        snapshot: Mapping[str, Any],
        *,
        variant: str | None = None,
    ) -> str | None:
        """Return the first validation error for ``value`` or ``None``.

        File collections are only counted here; their size and type checks
        belong to :meth:`validate_full`.
        """

        variant = self._registry.resolve_variant(snapshot, variant)
        started_at = self._monitor.start_validation()
        cache_value = self._cache_value(field_id, value, snapshot, variant)
        cached = self._cache.get(field_id, cache_value)
        if cached is not None:
            self._monitor.record_cache_hit()
            logger.debug("Validation cache hit for %s", field_id)
            return cached.error

        error = self._compute(field_id, value, snapshot, variant)
        self._cache.put(field_id, cache_value, error)
        self._monitor.end_validation(started_at, error, field_id=field_id)
        return error

    def validate_full(
        self,
        field_id: str,
        value: Any,
        snapshot: Mapping[str, Any],
        *,
        variant: str | None = None,
    ) -> str | None:
        """Run every check, including per-file inspection for file collections."""

        variant = self._registry.resolve_variant(snapshot, variant)
        config = self._registry.config_for(field_id, variant)
        if config is None or config.kind is not FieldKind.FILE_COLLECTION:
            return self.validate(field_id, value, snapshot, variant=variant)

        started_at = self._monitor.start_validation()
        rule = self._active_rule(field_id, snapshot)
        if not config.required and rule is None and is_blank(value):
            error = None
        else:
            error = self._media.validate_full(field_id, value, config)
            if error is None and rule is not None and is_blank(value):
                error = rule.message
        self._monitor.end_validation(started_at, error, field_id=field_id)
        return error

    def _compute(
        self,
        field_id: str,
        value: Any,
        snapshot: Mapping[str, Any],
        variant: str | None,
    ) -> str | None:
        config = self._registry.config_for(field_id, variant)
        if config is None:
            logger.debug("No configuration for field %s; skipping validation", field_id)
            return None

        rule = self._active_rule(field_id, snapshot)
        if not config.required and rule is None and is_blank(value):
            return None

        error: str | None = None
        if config.kind is FieldKind.FILE_COLLECTION:
            error = self._media.validate_fast(field_id, value, config)
        elif config.required:
            error = _required_error(field_id, value, config)

        if error is None and rule is not None and is_blank(value):
            error = rule.message

        if error is None and isinstance(value, str) and value.strip():
            text = value.strip()
            error = (
                _format_error(config, text)
                or _min_chars_error(field_id, config, text)
                or _min_length_error(config, text)
                or _max_length_error(config, text)
            )

        if error is None and config.kind is FieldKind.ORDERED_LIST:
            error = _list_entries_error(config, value)
        if error is None and config.kind is FieldKind.MULTI_CHOICE:
            error = _selection_limit_error(config, value)
        return error


__all__ = ["FieldValidator", "is_valid_url"]
