from __future__ import annotations

from typing import Any

import pytest
import streamlit as st

from config import EngineSettings
from constants.keys import StateKeys
from core.form_config import FieldRegistry
from models.fields import FieldConfig, FieldKind, FieldsLayout
from models.progress import FieldStatus
from state.ensure_state import ensure_form_state, get_form_session, reset_form_state
from tests.helpers import FakeClock, FakeTimerFactory, make_files
from wizard.session import FormValidationSession


def _shared_answers() -> dict[str, Any]:
    return {
        "email": "jane@example.com",
        "fullName": "Jane Doe",
        "phone": "(555) 123-4567",
        "businessName": "Jane's Studio",
        "businessAddress": "123 Main Street, Springfield",
        "primarySpecialties": ["hair_stylist"],
        "instagramHandle": "@janedoe",
        "excitementFeatures": ["discovery"],
        "painPoints": ["no-shows"],
        "instagramConsent": True,
        "contentPlanningRadio": "create-video",
        "hearAboutLocalSpotlight": "A friend told me about it",
    }


@pytest.fixture
def form_data() -> dict[str, Any]:
    return {"applicationType": "local-spotlight"}


@pytest.fixture
def session(
    registry: FieldRegistry,
    settings: EngineSettings,
    clock: FakeClock,
    timers: FakeTimerFactory,
    form_data: dict[str, Any],
) -> FormValidationSession:
    return FormValidationSession(
        registry,
        settings=settings,
        store={},
        snapshot_provider=lambda: form_data,
        clock=clock,
        timer_factory=timers,
    )


def test_change_does_not_surface_new_errors(session: FormValidationSession, form_data: dict[str, Any]) -> None:
    form_data["email"] = "a@b"
    error = session.validate_on_change("email", "a@b")

    assert error is not None
    assert session.errors == {}
    assert session.field_status("email") is FieldStatus.VALIDATED_FAST


def test_blur_records_error_and_change_clears_it(session: FormValidationSession, form_data: dict[str, Any]) -> None:
    form_data["email"] = "a@b"
    session.validate_on_blur("email")
    assert "email" in session.errors
    assert session.field_status("email") is FieldStatus.VALIDATED_FULL

    form_data["email"] = "a@b.co"
    assert session.validate_on_change("email", "a@b.co") is None
    assert "email" not in session.errors


def test_change_updates_visible_error(session: FormValidationSession, form_data: dict[str, Any]) -> None:
    session.validate_on_blur("phone")
    assert session.errors["phone"]

    session.validate_on_change("phone", "555-CALL")
    assert session.errors["phone"] == "Phone number must be at least 10 digits"


def test_blur_runs_full_media_checks(session: FormValidationSession, form_data: dict[str, Any]) -> None:
    form_data["workPhotos"] = make_files(3, size=200 * 1024 * 1024)

    assert session.validate_on_change("workPhotos", form_data["workPhotos"]) is None
    error = session.validate_on_blur("workPhotos")

    assert error is not None and "exceeds the maximum size" in error
    assert session.errors["workPhotos"] == error


def test_focus_clears_error(session: FormValidationSession) -> None:
    session.validate_on_blur("fullName")
    assert "fullName" in session.errors

    session.on_focus("fullName")
    assert "fullName" not in session.errors


def test_focus_honours_variant_configuration(settings: EngineSettings, timers: FakeTimerFactory) -> None:
    sticky = FieldConfig.model_validate(
        {"kind": "text", "label": "Notes", "required": True, "validation": {"clearErrorOnFocus": False}}
    )
    layout = FieldsLayout(
        profile={"notes": FieldConfig(kind=FieldKind.TEXT, label="Notes", required=True)},
        cover={"notes": sticky},
    )
    form_data: dict[str, Any] = {"applicationType": "cover"}
    session = FormValidationSession(
        FieldRegistry(layout), settings=settings, store={}, snapshot_provider=lambda: form_data, timer_factory=timers
    )

    session.validate_on_blur("notes")
    session.on_focus("notes")
    assert "notes" in session.errors

    form_data["applicationType"] = "rising-star"
    session.on_focus("notes")
    assert "notes" not in session.errors


def test_blur_on_unknown_field_is_ignored(session: FormValidationSession) -> None:
    assert session.validate_on_blur("unknownField") is None
    assert session.errors == {}


def test_untouched_status_by_default(session: FormValidationSession) -> None:
    assert session.field_status("email") is FieldStatus.UNTOUCHED


def test_clear_all_errors(session: FormValidationSession) -> None:
    session.validate_on_blur("fullName")
    session.validate_on_blur("email")
    session.clear_all_errors()
    assert session.errors == {}


def test_change_schedules_debounced_progress(
    session: FormValidationSession, form_data: dict[str, Any], timers: FakeTimerFactory
) -> None:
    form_data["fullName"] = "Jane Doe"
    session.validate_on_change("fullName", "Jane Doe")

    assert session.committed_progress is None
    timers.last.fire()

    assert session.committed_progress == session.progress()


def test_forced_update_matches_fresh_computation(
    session: FormValidationSession, form_data: dict[str, Any], timers: FakeTimerFactory
) -> None:
    session.validate_on_change("fullName", "Jane Doe")
    form_data["fullName"] = "Jane Doe"
    form_data["email"] = "jane@example.com"
    session.notify_form_data_changed()
    pending = timers.last

    forced = session.force_progress_update()
    pending.fire()

    assert forced == session.calculator.progress(None, dict(form_data))
    assert session.committed_progress == forced
    assert session.progress() == forced


def test_submission_validates_every_field(session: FormValidationSession, form_data: dict[str, Any]) -> None:
    form_data.update({"email": "a@b", "workPhotos": make_files(1)})

    check = session.validate_for_submission()

    assert check.is_complete is False
    assert "email" in check.errors
    assert "workPhotos" in check.errors
    assert "Work Experience" in check.missing_fields
    assert check.progress == session.committed_progress
    assert session.errors == dict(check.errors)
    assert session.field_status("workExperience") is FieldStatus.VALIDATED_FULL


def test_submission_without_application_type_requires_default_variant(
    registry: FieldRegistry, settings: EngineSettings, timers: FakeTimerFactory
) -> None:
    form_data = _shared_answers()
    session = FormValidationSession(
        registry, settings=settings, store={}, snapshot_provider=lambda: form_data, timer_factory=timers
    )

    check = session.validate_for_submission()

    assert check.is_complete is False
    assert check.missing_fields == ("Work Photos", "Work Experience")
    assert check.progress.progress_percentage < 100
    assert not session.is_form_complete


def test_submission_of_complete_form(session: FormValidationSession, form_data: dict[str, Any]) -> None:
    form_data.update(
        {
            **_shared_answers(),
            "workPhotos": make_files(3),
            "workExperience": "Ten years running a salon focused on curly hair and colour work.",
        }
    )

    check = session.validate_for_submission()

    assert check.errors == {}
    assert check.missing_fields == ()
    assert check.is_complete is True
    assert check.progress.progress_percentage == 100
    assert session.is_form_complete
    assert session.tab_validation_state() == {"profile": True, "integration": True, "local_spotlight": True}


def test_metrics_count_cache_hits(session: FormValidationSession) -> None:
    session.validate_on_change("email", "a@b")
    session.validate_on_change("email", "a@b")

    metrics = session.metrics()
    assert metrics.validation_count == 2
    assert metrics.cache_hits == 1


def test_reset_and_dispose(session: FormValidationSession, timers: FakeTimerFactory) -> None:
    session.validate_on_blur("fullName")
    session.validate_on_change("fullName", "")
    pending = timers.last

    session.reset()
    assert session.errors == {}
    assert session.field_status("fullName") is FieldStatus.UNTOUCHED
    assert len(session.validation_cache) == 0
    assert pending.cancelled

    session.dispose()
    session.notify_form_data_changed()
    assert timers.last is pending
    assert session.committed_progress is None


def test_namespaced_store_keys(registry: FieldRegistry, settings: EngineSettings, timers: FakeTimerFactory) -> None:
    store: dict[str, Any] = {StateKeys.scoped(StateKeys.FORM_DATA, "demo"): {"fullName": ""}}
    session = FormValidationSession(registry, settings=settings, store=store, namespace="demo", timer_factory=timers)

    session.validate_on_blur("fullName")

    assert "fullName" in store[StateKeys.scoped(StateKeys.FORM_ERRORS, "demo")]


def test_session_state_helpers() -> None:
    ensure_form_state()
    assert st.session_state[StateKeys.FORM_DATA] == {}

    session = get_form_session(FieldRegistry())
    assert get_form_session() is session

    st.session_state[StateKeys.FORM_DATA]["fullName"] = ""
    session.validate_on_blur("fullName")
    assert "fullName" in st.session_state[StateKeys.FORM_ERRORS]

    reset_form_state()
    assert StateKeys.FORM_SESSION not in st.session_state
    assert st.session_state[StateKeys.FORM_ERRORS] == {}
    assert session.scheduler.disposed
