from __future__ import annotations

from wizard.missing_fields import is_blank, is_field_filled
from models.fields import FieldConfig, FieldKind
from wizard.rules import (
    CONDITIONAL_RULES,
    active_rules,
    contains,
    equals,
    equivalents_of,
    is_truthy,
    rule_for,
    shared_fields_for,
)


def test_predicates() -> None:
    assert is_truthy(True)
    assert not is_truthy("  ")
    assert equals("external")(" external ")
    assert not equals("external")(None)
    assert contains("other")(["hair", "other"])
    assert not contains("other")("other")


def test_rule_lookup_and_activation() -> None:
    rule = rule_for("bookingLink")
    assert rule is not None
    assert rule.governing_field == "bookingPreference"
    assert rule_for("email") is None

    active = active_rules({"certifications": True, "bookingPreference": "glamlink"})
    assert [item.dependent_field for item in active] == ["certificationDetails"]
    assert len({item.dependent_field for item in CONDITIONAL_RULES}) == len(CONDITIONAL_RULES)


def test_equivalence_lookup() -> None:
    assert equivalents_of("businessName") == ("treatmentName",)
    assert shared_fields_for("specialties") == ("primarySpecialties",)
    assert equivalents_of("email") == ()


def test_blank_values() -> None:
    assert is_blank(None)
    assert is_blank(False)
    assert is_blank("   ")
    assert is_blank([])
    assert not is_blank(0)
    assert not is_blank(["x"])


def test_field_filled_by_kind() -> None:
    multi = FieldConfig(kind=FieldKind.MULTI_CHOICE, label="Pick", required=True, min_selections=2)
    assert not is_field_filled(multi, ["a"])
    assert is_field_filled(multi, ["a", "b"])

    bullets = FieldConfig(kind=FieldKind.ORDERED_LIST, label="Points", required=True)
    assert not is_field_filled(bullets, ["", " "])
    assert is_field_filled(bullets, ["", "point"])

    boolean = FieldConfig(kind=FieldKind.BOOLEAN, label="Agree", required=True)
    assert not is_field_filled(boolean, False)
    assert is_field_filled(boolean, True)

    text = FieldConfig(kind=FieldKind.TEXT, label="Name", required=True)
    assert not is_field_filled(text, "  ")
    assert is_field_filled(text, "Jo")
