"""Debounced publication of progress values.

Form edits arrive in bursts. :class:`DebouncedProgress` waits for a quiet
period before recomputing progress and only republishes the result when it
differs noticeably from what the UI already shows.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from typing import Protocol

from models.progress import ProgressInfo

logger = logging.getLogger(__name__)


class TimerHandle(Protocol):
    def start(self) -> None: ...

    def cancel(self) -> None: ...


TimerFactory = Callable[[float, Callable[[], None]], TimerHandle]
Recompute = Callable[[], ProgressInfo]


def _thread_timer(delay: float, callback: Callable[[], None]) -> TimerHandle:
    timer = threading.Timer(delay, callback)
    timer.daemon = True
    return timer


def is_significant_change(
    previous: ProgressInfo | None, current: ProgressInfo, *, min_change: float = 1.0
) -> bool:
    """Return ``True`` when ``current`` is worth republishing over ``previous``."""

    if previous is None:
        return True
    if abs(current.progress_percentage - previous.progress_percentage) >= min_change:
        return True
    if current.is_complete != previous.is_complete:
        return True
    return current.missing_fields != previous.missing_fields


class DebouncedProgress:
    """Two-slot progress holder with a single cancellable timer.

    ``latest`` is the most recent computation, ``committed`` the value the UI
    should render. Each schedule, forced update, cancel or dispose bumps a
    generation counter; a timer only commits when its generation is still
    current, so a forced update always wins over a pending timer.
    """

    def __init__(
        self,
        *,
        delay: float = 0.2,
        min_change: float = 1.0,
        timer_factory: TimerFactory | None = None,
        on_commit: Callable[[ProgressInfo], None] | None = None,
    ) -> None:
        if delay < 0:
            msg = "delay must be >= 0"
            raise ValueError(msg)
        self.delay = delay
        self.min_change = min_change
        self._timer_factory = timer_factory or _thread_timer
        self._on_commit = on_commit
        self._lock = threading.RLock()
        self._timer: TimerHandle | None = None
        self._generation = 0
        self._committed: ProgressInfo | None = None
        self._latest: ProgressInfo | None = None
        self._disposed = False

    @property
    def committed(self) -> ProgressInfo | None:
        with self._lock:
            return self._committed

    @property
    def pending(self) -> bool:
        with self._lock:
            return self._timer is not None

    @property
    def disposed(self) -> bool:
        return self._disposed

    def latest(self) -> ProgressInfo | None:
        """Return the most recent computation, committed or not."""

        with self._lock:
            return self._latest

    def schedule(self, recompute: Recompute) -> None:
        """Restart the quiet period; ``recompute`` runs once it elapses."""

        with self._lock:
            if self._disposed:
                logger.debug("Ignoring schedule on a disposed progress scheduler")
                return
            self._cancel_timer()
            self._generation += 1
            generation = self._generation
            timer = self._timer_factory(self.delay, lambda: self._fire(generation, recompute))
            self._timer = timer
        timer.start()

    def force_now(self, recompute: Recompute) -> ProgressInfo:
        """Cancel any pending timer, recompute synchronously and commit."""

        with self._lock:
            self._cancel_timer()
            self._generation += 1
            value = recompute()
            self._latest = value
            self._commit(value)
            return value

    def cancel(self) -> None:
        """Drop a pending recompute without touching the slots."""

        with self._lock:
            self._cancel_timer()
            self._generation += 1

    def clear(self) -> None:
        """Cancel and forget both slots."""

        with self._lock:
            self.cancel()
            self._committed = None
            self._latest = None

    def dispose(self) -> None:
        """Cancel and refuse any further scheduling."""

        with self._lock:
            self.cancel()
            self._disposed = True

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _fire(self, generation: int, recompute: Recompute) -> None:
        with self._lock:
            if self._disposed or generation != self._generation:
                logger.debug("Discarding stale progress timer (generation %d)", generation)
                return
            self._timer = None
            try:
                value = recompute()
            except Exception:
                logger.exception("Debounced progress recompute failed")
                return
            self._latest = value
            if is_significant_change(self._committed, value, min_change=self.min_change):
                self._commit(value)
            else:
                logger.debug("Suppressed insignificant progress change (%d%%)", value.progress_percentage)

    def _commit(self, value: ProgressInfo) -> None:
        self._committed = value
        if self._on_commit is not None:
            self._on_commit(value)


__all__ = ["DebouncedProgress", "TimerFactory", "TimerHandle", "is_significant_change"]
