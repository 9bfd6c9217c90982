"""Helpers for initializing the form keys in Streamlit session state."""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from types import MappingProxyType
from typing import Any

import streamlit as st

from config import EngineSettings
from constants.keys import StateKeys
from core.form_config import FieldRegistry, build_registry
from wizard.session import FormValidationSession

logger = logging.getLogger(__name__)


_DEFAULT_STATE_FACTORIES: Mapping[str, Callable[[], Any]] = MappingProxyType(
    {
        StateKeys.FORM_DATA: dict,
        StateKeys.FORM_ERRORS: dict,
        StateKeys.FIELD_STATUS: dict,
    }
)


def ensure_form_state(namespace: str | None = None) -> None:
    """Initialize ``st.session_state`` with the keys the form engine reads.

    Existing values are kept; a value of the wrong type is replaced with a
    fresh default.
    """

    for key, factory in _DEFAULT_STATE_FACTORIES.items():
        scoped = StateKeys.scoped(key, namespace)
        if not isinstance(st.session_state.get(scoped), dict):
            st.session_state[scoped] = factory()


def get_form_session(
    registry: FieldRegistry | None = None,
    *,
    settings: EngineSettings | None = None,
    namespace: str | None = None,
) -> FormValidationSession:
    """Return the form session stored in ``st.session_state``, creating it once.

    A new session is created when ``registry`` differs from the stored one.
    """

    ensure_form_state(namespace)
    key = StateKeys.scoped(StateKeys.FORM_SESSION, namespace)
    session = st.session_state.get(key)
    if isinstance(session, FormValidationSession) and (registry is None or session.registry is registry):
        return session
    if isinstance(session, FormValidationSession):
        session.dispose()

    session = FormValidationSession(
        registry or build_registry(),
        settings=settings or EngineSettings.from_env(),
        namespace=namespace,
    )
    st.session_state[key] = session
    logger.debug("Created form validation session %s", key)
    return session


def reset_form_state(namespace: str | None = None) -> None:
    """Dispose the stored session and reinitialize the form keys."""

    session = st.session_state.get(StateKeys.scoped(StateKeys.FORM_SESSION, namespace))
    if isinstance(session, FormValidationSession):
        session.dispose()
    for key in (*_DEFAULT_STATE_FACTORIES, StateKeys.FORM_SESSION):
        st.session_state.pop(StateKeys.scoped(key, namespace), None)
    ensure_form_state(namespace)


__all__ = ["ensure_form_state", "get_form_session", "reset_form_state"]
