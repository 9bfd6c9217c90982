"""Completion tracking for the Get Featured form."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from decimal import ROUND_HALF_UP, Decimal
from typing import Any

from core.form_config import SHARED_SECTIONS, FieldRegistry
from models.fields import FieldConfig
from models.progress import ProgressInfo
from state.validation_cache import CompletionCache
from wizard.media_validation import MediaValidator
from wizard.missing_fields import is_field_filled
from wizard.rules import (
    CONDITIONAL_RULES,
    FIELD_EQUIVALENCES,
    ConditionalRule,
    FieldEquivalence,
    active_rules,
    equivalents_of,
    shared_fields_for,
)

logger = logging.getLogger(__name__)


def percentage(completed: int, total: int) -> int:
    """Return ``completed / total`` as a whole percentage, rounding halves up."""

    if total <= 0:
        return 0
    ratio = Decimal(100 * completed) / Decimal(total)
    return int(ratio.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


class ProgressCalculator:
    """Compute missing required fields and overall progress for a variant.

    The calculator is pure with respect to ``(variant, snapshot)``. An optional
    :class:`CompletionCache` only skips repeated completion checks.
    """

    def __init__(
        self,
        registry: FieldRegistry,
        *,
        media: MediaValidator | None = None,
        completion_cache: CompletionCache | None = None,
        rules: Iterable[ConditionalRule] = CONDITIONAL_RULES,
        equivalences: Iterable[FieldEquivalence] = FIELD_EQUIVALENCES,
    ) -> None:
        self._registry = registry
        self._media = media or MediaValidator()
        self._cache = completion_cache
        self._rules = tuple(rules)
        self._equivalences = tuple(equivalences)

    def required_universe(
        self, variant: str | None, snapshot: Mapping[str, Any]
    ) -> list[tuple[str, str, FieldConfig]]:
        """Return ``(section, field_id, config)`` for every field required right now."""

        universe: list[tuple[str, str, FieldConfig]] = []
        seen: set[str] = set()
        for section_name, field_id, config in self._registry.iter_form_fields(variant):
            if config.required and field_id not in seen:
                seen.add(field_id)
                universe.append((section_name, field_id, config))

        visible = set(SHARED_SECTIONS)
        variant_section = self._registry.variant_section_name(variant)
        if variant_section is not None:
            visible.add(variant_section)
        for rule in active_rules(snapshot, self._rules):
            field_id = rule.dependent_field
            if field_id in seen:
                continue
            section_name = self._registry.section_for(field_id, variant)
            if section_name not in visible:
                continue
            config = self._registry.config_for(field_id, variant)
            if config is None:
                continue
            seen.add(field_id)
            universe.append((section_name, field_id, config))
        return universe

    def _is_filled(self, section_name: str, field_id: str, config: FieldConfig, value: Any) -> bool:
        if self._cache is None:
            return is_field_filled(config, value, field_id, media=self._media)
        key = (section_name, field_id)
        cached = self._cache.get(key, value)
        if cached is not None:
            return cached.is_completed
        filled = is_field_filled(config, value, field_id, media=self._media)
        self._cache.put(key, value, filled)
        return filled

    def _substitutes(self, field_id: str, variant: str | None) -> list[str]:
        variant_fields = self._registry.variant_fields(variant)
        substitutes = [name for name in equivalents_of(field_id, self._equivalences) if name in variant_fields]
        substitutes.extend(shared_fields_for(field_id, self._equivalences))
        return substitutes

    def _is_satisfied(
        self,
        section_name: str,
        field_id: str,
        config: FieldConfig,
        snapshot: Mapping[str, Any],
        variant: str | None,
    ) -> bool:
        if self._is_filled(section_name, field_id, config, snapshot.get(field_id)):
            return True
        for substitute in self._substitutes(field_id, variant):
            substitute_config = self._registry.config_for(substitute, variant)
            if substitute_config is None:
                continue
            substitute_section = self._registry.section_for(substitute, variant) or section_name
            if self._is_filled(substitute_section, substitute, substitute_config, snapshot.get(substitute)):
                return True
        return False

    def _missing(
        self, variant: str | None, snapshot: Mapping[str, Any]
    ) -> tuple[list[tuple[str, str, FieldConfig]], list[str]]:
        universe = self.required_universe(variant, snapshot)
        missing = [
            config.label
            for section_name, field_id, config in universe
            if not self._is_satisfied(section_name, field_id, config, snapshot, variant)
        ]
        return universe, missing

    def missing_fields(self, variant: str | None, snapshot: Mapping[str, Any]) -> list[str]:
        """Return labels of required fields that are still empty, in form order."""

        variant = self._registry.resolve_variant(snapshot, variant)
        return self._missing(variant, snapshot)[1]

    def section_completion(self, variant: str | None, snapshot: Mapping[str, Any]) -> dict[str, bool]:
        """Return whether each visible section has all of its required fields."""

        variant = self._registry.resolve_variant(snapshot, variant)
        sections = list(SHARED_SECTIONS)
        variant_section = self._registry.variant_section_name(variant)
        if variant_section is not None:
            sections.append(variant_section)
        completion = dict.fromkeys(sections, True)
        for section_name, field_id, config in self.required_universe(variant, snapshot):
            if not self._is_satisfied(section_name, field_id, config, snapshot, variant):
                completion[section_name] = False
        return completion

    def progress(self, variant: str | None, snapshot: Mapping[str, Any]) -> ProgressInfo:
        variant = self._registry.resolve_variant(snapshot, variant)
        universe, missing = self._missing(variant, snapshot)
        total = len(universe)
        completed = total - len(missing)
        info = ProgressInfo(
            total_fields=total,
            completed_fields=completed,
            missing_fields=len(missing),
            progress_percentage=percentage(completed, total),
            is_complete=not missing,
        )
        logger.debug("Progress for %s: %d/%d fields", variant or "<no variant>", completed, total)
        return info


__all__ = ["ProgressCalculator", "percentage"]
