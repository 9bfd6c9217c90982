"""Validation instrumentation counters.

The counters are observability only: nothing in the engine reads them to
make a decision.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass

LOGGER = logging.getLogger("get_featured.performance")


@dataclass(frozen=True, slots=True)
class PerformanceMetrics:
    """Snapshot of the counters collected by :class:`PerformanceMonitor`."""

    validation_count: int
    cache_hits: int
    error_count: int
    slow_validations: int
    total_time_ms: float

    @property
    def computed_validations(self) -> int:
        return self.validation_count - self.cache_hits

    @property
    def cache_hit_rate(self) -> float:
        if not self.validation_count:
            return 0.0
        return self.cache_hits / self.validation_count

    @property
    def average_time_ms(self) -> float:
        computed = self.computed_validations
        if computed <= 0:
            return 0.0
        return self.total_time_ms / computed


class PerformanceMonitor:
    """Count validation calls, cache hits and time spent validating."""

    def __init__(
        self,
        name: str,
        *,
        slow_threshold_ms: float = 16.0,
        timer: Callable[[], float] | None = None,
    ) -> None:
        self.name = name
        self.slow_threshold_ms = slow_threshold_ms
        self._timer = timer or time.perf_counter
        self.reset()

    def reset(self) -> None:
        self._validation_count = 0
        self._cache_hits = 0
        self._error_count = 0
        self._slow_validations = 0
        self._total_time_ms = 0.0

    def start_validation(self) -> float:
        """Register a validation call and return its start mark."""

        self._validation_count += 1
        return self._timer()

    def record_cache_hit(self) -> None:
        self._cache_hits += 1

    def end_validation(self, started_at: float, error: str | None, *, field_id: str = "") -> None:
        """Record the duration of a validation that was actually computed."""

        elapsed_ms = (self._timer() - started_at) * 1000.0
        self._total_time_ms += elapsed_ms
        if error:
            self._error_count += 1
        if elapsed_ms >= self.slow_threshold_ms:
            self._slow_validations += 1
            LOGGER.debug("%s: slow validation for %s took %.1f ms", self.name, field_id or "<field>", elapsed_ms)

    def metrics(self) -> PerformanceMetrics:
        return PerformanceMetrics(
            validation_count=self._validation_count,
            cache_hits=self._cache_hits,
            error_count=self._error_count,
            slow_validations=self._slow_validations,
            total_time_ms=self._total_time_ms,
        )


__all__ = ["PerformanceMetrics", "PerformanceMonitor"]
