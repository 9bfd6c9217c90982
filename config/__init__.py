"""Central configuration for the Get Featured form engine.

Timing values are read from the environment once at import time and bundled
into :class:`EngineSettings`. Sessions receive their settings explicitly so two
forms (or two tests) never share mutable configuration.

``FORM_VALIDATION_CACHE_TTL`` and ``FORM_COMPLETION_CACHE_TTL`` control how long
(in seconds) a cached validation or completion result stays fresh.
``FORM_PROGRESS_DEBOUNCE_DELAY`` is the quiet period before progress is
recomputed and ``FORM_PROGRESS_MIN_CHANGE`` the percentage-point delta that
counts as a significant progress change.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field

try:
    from dotenv import load_dotenv

    load_dotenv()
except ImportError:
    pass


logger = logging.getLogger(__name__)


_DEFAULT_VALIDATION_CACHE_TTL = 5.0
_DEFAULT_COMPLETION_CACHE_TTL = 3.0
_DEFAULT_DEBOUNCE_DELAY = 0.2
_DEFAULT_MIN_PROGRESS_CHANGE = 1.0
_DEFAULT_SLOW_VALIDATION_MS = 16.0


def _parse_positive_float_env(value: str | None, *, env_var: str, default: float) -> float:
    """Return a positive float parsed from ``value`` or ``default``."""

    if value is None or not value.strip():
        return default
    try:
        parsed = float(value.strip())
    except ValueError:
        logger.warning("Ignoring non-numeric %s=%r; using %s", env_var, value, default)
        return default
    if parsed <= 0:
        logger.warning("Ignoring non-positive %s=%r; using %s", env_var, value, default)
        return default
    return parsed


def _env_float(env_var: str, default: float) -> float:
    return _parse_positive_float_env(os.getenv(env_var), env_var=env_var, default=default)


VALIDATION_CACHE_TTL = _env_float("FORM_VALIDATION_CACHE_TTL", _DEFAULT_VALIDATION_CACHE_TTL)
COMPLETION_CACHE_TTL = _env_float("FORM_COMPLETION_CACHE_TTL", _DEFAULT_COMPLETION_CACHE_TTL)
PROGRESS_DEBOUNCE_DELAY = _env_float("FORM_PROGRESS_DEBOUNCE_DELAY", _DEFAULT_DEBOUNCE_DELAY)
PROGRESS_MIN_CHANGE = _env_float("FORM_PROGRESS_MIN_CHANGE", _DEFAULT_MIN_PROGRESS_CHANGE)
SLOW_VALIDATION_MS = _env_float("FORM_SLOW_VALIDATION_MS", _DEFAULT_SLOW_VALIDATION_MS)
FORM_CONFIG_PATH = os.getenv("GET_FEATURED_FORM_CONFIG_PATH", "").strip() or None


@dataclass(frozen=True)
class EngineSettings:
    """Timing and instrumentation settings for one form session."""

    validation_cache_ttl: float = field(default_factory=lambda: VALIDATION_CACHE_TTL)
    completion_cache_ttl: float = field(default_factory=lambda: COMPLETION_CACHE_TTL)
    debounce_delay: float = field(default_factory=lambda: PROGRESS_DEBOUNCE_DELAY)
    min_progress_change: float = field(default_factory=lambda: PROGRESS_MIN_CHANGE)
    slow_validation_ms: float = field(default_factory=lambda: SLOW_VALIDATION_MS)

    def __post_init__(self) -> None:
        for name in (
            "validation_cache_ttl",
            "completion_cache_ttl",
            "min_progress_change",
            "slow_validation_ms",
        ):
            if getattr(self, name) <= 0:
                msg = f"{name} must be > 0"
                raise ValueError(msg)
        if self.debounce_delay < 0:
            msg = "debounce_delay must be >= 0"
            raise ValueError(msg)

    @classmethod
    def from_env(cls) -> "EngineSettings":
        """Return settings parsed from the current process environment."""

        return cls(
            validation_cache_ttl=_env_float("FORM_VALIDATION_CACHE_TTL", _DEFAULT_VALIDATION_CACHE_TTL),
            completion_cache_ttl=_env_float("FORM_COMPLETION_CACHE_TTL", _DEFAULT_COMPLETION_CACHE_TTL),
            debounce_delay=_env_float("FORM_PROGRESS_DEBOUNCE_DELAY", _DEFAULT_DEBOUNCE_DELAY),
            min_progress_change=_env_float("FORM_PROGRESS_MIN_CHANGE", _DEFAULT_MIN_PROGRESS_CHANGE),
            slow_validation_ms=_env_float("FORM_SLOW_VALIDATION_MS", _DEFAULT_SLOW_VALIDATION_MS),
        )


__all__ = [
    "COMPLETION_CACHE_TTL",
    "EngineSettings",
    "FORM_CONFIG_PATH",
    "PROGRESS_DEBOUNCE_DELAY",
    "PROGRESS_MIN_CHANGE",
    "SLOW_VALIDATION_MS",
    "VALIDATION_CACHE_TTL",
]
