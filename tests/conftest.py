from pathlib import Path
import sys
from dataclasses import dataclass

import streamlit as st

import pytest


ROOT = Path(__file__).resolve().parents[1]
if sys.path[:1] != [str(ROOT)]:
    # Keep the project root ahead of tests/ so top-level packages win.
    sys.path.insert(0, str(ROOT))

from config import EngineSettings
from core.form_config import FieldRegistry
from tests.helpers import FakeClock, FakeTimerFactory


@dataclass
class _SessionDict(dict[str, object]):
    """Lightweight replacement for ``st.session_state`` during tests."""

    def clear(self) -> None:  # type: ignore[override]
        super().clear()


@pytest.fixture(autouse=True)
def _stub_streamlit_session_state(monkeypatch: pytest.MonkeyPatch) -> None:
    """Replace Streamlit's runtime-bound session state with a plain dictionary."""

    session_state = _SessionDict()
    monkeypatch.setattr(st, "session_state", session_state, raising=False)
    yield


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def timers() -> FakeTimerFactory:
    return FakeTimerFactory()


@pytest.fixture
def registry() -> FieldRegistry:
    return FieldRegistry()


@pytest.fixture
def settings() -> EngineSettings:
    return EngineSettings(
        validation_cache_ttl=5.0,
        completion_cache_ttl=3.0,
        debounce_delay=0.2,
        min_progress_change=1.0,
        slow_validation_ms=16.0,
    )
