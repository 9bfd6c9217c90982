"""Declarative conditional-requirement and field-equivalence tables.

Both the field validator and the progress calculator read these tables, so a
new rule or equivalence only needs a new row here.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from typing import Any


def is_truthy(value: Any) -> bool:
    if isinstance(value, str):
        return bool(value.strip())
    return bool(value)


def equals(expected: str) -> Callable[[Any], bool]:
    def _predicate(value: Any) -> bool:
        return isinstance(value, str) and value.strip() == expected

    return _predicate


def contains(expected: str) -> Callable[[Any], bool]:
    def _predicate(value: Any) -> bool:
        if isinstance(value, (list, tuple, set, frozenset)):
            return expected in value
        return False

    return _predicate


@dataclass(frozen=True)
class ConditionalRule:
    """Makes ``dependent_field`` required while ``predicate`` holds for ``governing_field``."""

    governing_field: str
    dependent_field: str
    predicate: Callable[[Any], bool]
    message: str

    def is_active(self, snapshot: Mapping[str, Any]) -> bool:
        return bool(self.predicate(snapshot.get(self.governing_field)))


@dataclass(frozen=True)
class FieldEquivalence:
    """Lets ``shared_field`` and any of ``equivalent_fields`` satisfy each other."""

    shared_field: str
    equivalent_fields: tuple[str, ...]


CONDITIONAL_RULES: tuple[ConditionalRule, ...] = (
    ConditionalRule(
        "certifications",
        "certificationDetails",
        is_truthy,
        "Please add your certification details",
    ),
    ConditionalRule(
        "promotionOffer",
        "promotionDetails",
        is_truthy,
        "Please describe the promotion you would like to offer",
    ),
    ConditionalRule(
        "contentPlanningRadio",
        "contentPlanningDate",
        equals("schedule-day"),
        "Please tell us which dates work for your content day",
    ),
    ConditionalRule(
        "bookingPreference",
        "bookingLink",
        equals("external"),
        "Booking link is required when using external booking",
    ),
    ConditionalRule(
        "primarySpecialties",
        "otherSpecialty",
        contains("other"),
        'Please specify your specialty when "Other" is selected',
    ),
    ConditionalRule(
        "mentorshipOffer",
        "mentorshipDetails",
        is_truthy,
        "Please describe the training you offer",
    ),
)

FIELD_EQUIVALENCES: tuple[FieldEquivalence, ...] = (
    FieldEquivalence("primarySpecialties", ("specialties",)),
    FieldEquivalence("businessName", ("treatmentName",)),
    FieldEquivalence("instagramHandle", ("instagram",)),
)


def rule_for(field_id: str, rules: Iterable[ConditionalRule] = CONDITIONAL_RULES) -> ConditionalRule | None:
    """Return the rule gating ``field_id``, if any."""

    for rule in rules:
        if rule.dependent_field == field_id:
            return rule
    return None


def active_rules(
    snapshot: Mapping[str, Any], rules: Iterable[ConditionalRule] = CONDITIONAL_RULES
) -> list[ConditionalRule]:
    return [rule for rule in rules if rule.is_active(snapshot)]


def equivalents_of(
    shared_field: str, equivalences: Iterable[FieldEquivalence] = FIELD_EQUIVALENCES
) -> tuple[str, ...]:
    for equivalence in equivalences:
        if equivalence.shared_field == shared_field:
            return equivalence.equivalent_fields
    return ()


def shared_fields_for(
    variant_field: str, equivalences: Iterable[FieldEquivalence] = FIELD_EQUIVALENCES
) -> tuple[str, ...]:
    return tuple(
        equivalence.shared_field
        for equivalence in equivalences
        if variant_field in equivalence.equivalent_fields
    )


__all__ = [
    "CONDITIONAL_RULES",
    "ConditionalRule",
    "FIELD_EQUIVALENCES",
    "FieldEquivalence",
    "active_rules",
    "contains",
    "equals",
    "equivalents_of",
    "is_truthy",
    "rule_for",
    "shared_fields_for",
]
