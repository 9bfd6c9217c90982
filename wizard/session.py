"""Per-form validation session used by the Get Featured pages.

A :class:`FormValidationSession` owns every cache, the progress scheduler and
the instrumentation for one form. Error messages and field statuses live in a
mutable store (``st.session_state`` by default) so they survive Streamlit
reruns; the scheduler slots stay on the session object because its timer
thread must never touch Streamlit state.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping, MutableMapping
from dataclasses import dataclass
from typing import Any

import streamlit as st

from config import EngineSettings
from constants.keys import StateKeys
from core.form_config import FieldRegistry
from models.progress import FieldStatus, ProgressInfo
from state.debounce import DebouncedProgress, TimerFactory
from state.validation_cache import CompletionCache, ValidationCache
from utils.performance import PerformanceMetrics, PerformanceMonitor
from wizard.media_validation import MediaValidator
from wizard.progress import ProgressCalculator
from wizard.rules import CONDITIONAL_RULES, FIELD_EQUIVALENCES, ConditionalRule, FieldEquivalence
from wizard.validation import FieldValidator

logger = logging.getLogger(__name__)

SnapshotProvider = Callable[[], Mapping[str, Any]]


@dataclass(frozen=True)
class SubmissionCheck:
    """Outcome of validating the whole form before submission."""

    is_complete: bool
    errors: Mapping[str, str]
    missing_fields: tuple[str, ...]
    progress: ProgressInfo


class FormValidationSession:
    """Validation, error bookkeeping and progress tracking for one form."""

    def __init__(
        self,
        registry: FieldRegistry,
        *,
        settings: EngineSettings | None = None,
        store: MutableMapping[str, Any] | None = None,
        namespace: str | None = None,
        snapshot_provider: SnapshotProvider | None = None,
        rules: tuple[ConditionalRule, ...] = CONDITIONAL_RULES,
        equivalences: tuple[FieldEquivalence, ...] = FIELD_EQUIVALENCES,
        clock: Callable[[], float] | None = None,
        timer_factory: TimerFactory | None = None,
    ) -> None:
        self.registry = registry
        self.settings = settings or EngineSettings()
        self._store = store
        self._namespace = namespace
        self._snapshot_provider = snapshot_provider or self._stored_snapshot

        self.media = MediaValidator()
        self.validation_cache = ValidationCache(self.settings.validation_cache_ttl, clock=clock)
        self.completion_cache = CompletionCache(self.settings.completion_cache_ttl, clock=clock)
        self.monitor = PerformanceMonitor(
            "FormValidationSession", slow_threshold_ms=self.settings.slow_validation_ms
        )
        self.validator = FieldValidator(
            registry,
            cache=self.validation_cache,
            media=self.media,
            monitor=self.monitor,
            rules=rules,
        )
        self.calculator = ProgressCalculator(
            registry,
            media=self.media,
            completion_cache=self.completion_cache,
            rules=rules,
            equivalences=equivalences,
        )
        self.scheduler = DebouncedProgress(
            delay=self.settings.debounce_delay,
            min_change=self.settings.min_progress_change,
            timer_factory=timer_factory,
        )

    # ------------------------------------------------------------------
    # store access
    # ------------------------------------------------------------------
    @property
    def store(self) -> MutableMapping[str, Any]:
        return self._store if self._store is not None else st.session_state

    def _key(self, key: str) -> str:
        return StateKeys.scoped(key, self._namespace)

    def _stored_snapshot(self) -> Mapping[str, Any]:
        data = self.store.get(self._key(StateKeys.FORM_DATA))
        return data if isinstance(data, Mapping) else {}

    def _snapshot(self, snapshot: Mapping[str, Any] | None) -> dict[str, Any]:
        return dict(snapshot if snapshot is not None else self._snapshot_provider())

    def _error_map(self) -> dict[str, str]:
        key = self._key(StateKeys.FORM_ERRORS)
        errors = self.store.get(key)
        if not isinstance(errors, dict):
            errors = {}
            self.store[key] = errors
        return errors

    def _status_map(self) -> dict[str, FieldStatus]:
        key = self._key(StateKeys.FIELD_STATUS)
        statuses = self.store.get(key)
        if not isinstance(statuses, dict):
            statuses = {}
            self.store[key] = statuses
        return statuses

    @property
    def errors(self) -> dict[str, str]:
        """Copy of the errors currently shown to the user."""

        return dict(self._error_map())

    def field_status(self, field_id: str) -> FieldStatus:
        return self._status_map().get(field_id, FieldStatus.UNTOUCHED)

    # ------------------------------------------------------------------
    # field events
    # ------------------------------------------------------------------
    def validate_on_change(
        self, field_id: str, value: Any, snapshot: Mapping[str, Any] | None = None
    ) -> str | None:
        """Validate ``value`` on the fast path and schedule a progress update.

        An error already on display is updated or cleared; new errors only
        surface on blur or submission.
        """

        current = self._snapshot(snapshot)
        current[field_id] = value
        error = self.validator.validate(field_id, value, current)
        self._status_map()[field_id] = FieldStatus.VALIDATED_FAST

        errors = self._error_map()
        if field_id in errors:
            if error:
                errors[field_id] = error
            else:
                del errors[field_id]
        self._schedule(current)
        return error

    def validate_on_blur(self, field_id: str, snapshot: Mapping[str, Any] | None = None) -> str | None:
        """Run the full check for ``field_id`` and record the outcome."""

        current = self._snapshot(snapshot)
        variant = self.registry.resolve_variant(current)
        config = self.registry.config_for(field_id, variant)
        if config is None:
            return None
        if not config.validation.validate_on_blur:
            logger.debug("Blur validation disabled for %s", field_id)
            return None

        error = self.validator.validate_full(field_id, current.get(field_id), current, variant=variant)
        self._record(field_id, error)
        self._status_map()[field_id] = FieldStatus.VALIDATED_FULL
        return error

    def on_focus(self, field_id: str, snapshot: Mapping[str, Any] | None = None) -> None:
        variant = self.registry.resolve_variant(self._snapshot(snapshot))
        config = self.registry.config_for(field_id, variant)
        if config is not None and config.validation.clear_error_on_focus:
            self.clear_field_error(field_id)

    def _record(self, field_id: str, error: str | None) -> None:
        errors = self._error_map()
        if error:
            errors[field_id] = error
        else:
            errors.pop(field_id, None)

    def clear_field_error(self, field_id: str) -> None:
        self._error_map().pop(field_id, None)

    def clear_all_errors(self) -> None:
        self._error_map().clear()

    # ------------------------------------------------------------------
    # progress
    # ------------------------------------------------------------------
    def missing_fields(self, variant: str | None = None) -> list[str]:
        return self.calculator.missing_fields(variant, self._snapshot(None))

    def progress(self, variant: str | None = None) -> ProgressInfo:
        """Compute progress directly from the current snapshot."""

        return self.calculator.progress(variant, self._snapshot(None))

    @property
    def committed_progress(self) -> ProgressInfo | None:
        """Value a progress bar should render."""

        return self.scheduler.committed

    @property
    def latest_progress(self) -> ProgressInfo | None:
        return self.scheduler.latest()

    def _schedule(self, snapshot: Mapping[str, Any]) -> None:
        frozen = dict(snapshot)
        self.scheduler.schedule(lambda: self.calculator.progress(None, frozen))

    def notify_form_data_changed(self) -> None:
        self._schedule(self._snapshot(None))

    def force_progress_update(self, variant: str | None = None) -> ProgressInfo:
        """Recompute and commit progress for the current snapshot right away."""

        current = self._snapshot(None)
        return self.scheduler.force_now(lambda: self.calculator.progress(variant, current))

    def tab_validation_state(self, variant: str | None = None) -> dict[str, bool]:
        return self.calculator.section_completion(variant, self._snapshot(None))

    @property
    def is_form_complete(self) -> bool:
        return self.progress().is_complete

    def validate_for_submission(self, variant: str | None = None) -> SubmissionCheck:
        """Validate every visible field on the full path and force progress.

        The error map is replaced by the submission results.
        """

        current = self._snapshot(None)
        variant = self.registry.resolve_variant(current, variant)
        progress = self.scheduler.force_now(lambda: self.calculator.progress(variant, current))

        errors: dict[str, str] = {}
        statuses = self._status_map()
        for _section, field_id, _config in self.registry.iter_form_fields(variant):
            error = self.validator.validate_full(field_id, current.get(field_id), current, variant=variant)
            statuses[field_id] = FieldStatus.VALIDATED_FULL
            if error:
                errors[field_id] = error

        error_map = self._error_map()
        error_map.clear()
        error_map.update(errors)
        missing = tuple(self.calculator.missing_fields(variant, current))
        if errors or missing:
            logger.info(
                "Submission blocked: %d field errors, %d missing fields", len(errors), len(missing)
            )
        return SubmissionCheck(
            is_complete=progress.is_complete and not errors,
            errors=dict(errors),
            missing_fields=missing,
            progress=progress,
        )

    # ------------------------------------------------------------------
    # lifecycle
    # ------------------------------------------------------------------
    def metrics(self) -> PerformanceMetrics:
        return self.monitor.metrics()

    def reset(self) -> None:
        """Cancel pending work and forget cached results, errors and statuses."""

        self.scheduler.clear()
        self.validation_cache.clear()
        self.completion_cache.clear()
        self.monitor.reset()
        self._error_map().clear()
        self._status_map().clear()

    def dispose(self) -> None:
        self.reset()
        self.scheduler.dispose()


__all__ = ["FormValidationSession", "SnapshotProvider", "SubmissionCheck"]
