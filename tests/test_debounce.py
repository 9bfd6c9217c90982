from __future__ import annotations

from collections.abc import Callable

import pytest

from models.progress import ProgressInfo
from state.debounce import DebouncedProgress, is_significant_change
from tests.helpers import FakeTimerFactory


def _info(completed: int, total: int = 200) -> ProgressInfo:
    missing = total - completed
    return ProgressInfo(
        total_fields=total,
        completed_fields=completed,
        missing_fields=missing,
        progress_percentage=round(100 * completed / total) if total else 0,
        is_complete=missing == 0,
    )


def _returning(value: ProgressInfo) -> Callable[[], ProgressInfo]:
    return lambda: value


@pytest.fixture
def scheduler(timers: FakeTimerFactory) -> DebouncedProgress:
    return DebouncedProgress(delay=0.2, min_change=1.0, timer_factory=timers)


def test_first_value_is_always_significant() -> None:
    assert is_significant_change(None, _info(0))


def test_small_percentage_change_with_same_missing_count_is_not_significant() -> None:
    previous = ProgressInfo(
        total_fields=10, completed_fields=5, missing_fields=5, progress_percentage=50, is_complete=False
    )
    current = previous.model_copy()
    assert not is_significant_change(previous, current)


def test_missing_count_change_is_significant() -> None:
    assert is_significant_change(_info(100), _info(101))


def test_completion_flip_is_significant() -> None:
    assert is_significant_change(_info(199), _info(200))


def test_schedule_restarts_the_timer(scheduler: DebouncedProgress, timers: FakeTimerFactory) -> None:
    scheduler.schedule(_returning(_info(10)))
    scheduler.schedule(_returning(_info(20)))

    assert len(timers.timers) == 2
    assert timers.timers[0].cancelled
    assert timers.last.started
    assert timers.last.delay == pytest.approx(0.2)
    assert scheduler.pending


def test_coalesced_edits_commit_only_the_last_value(
    scheduler: DebouncedProgress, timers: FakeTimerFactory
) -> None:
    calls: list[int] = []

    def _recompute(value: int) -> Callable[[], ProgressInfo]:
        def _run() -> ProgressInfo:
            calls.append(value)
            return _info(value)

        return _run

    for value in (10, 20, 30):
        scheduler.schedule(_recompute(value))

    for timer in timers.timers:
        timer.fire()

    assert calls == [30]
    assert scheduler.committed == _info(30)
    assert scheduler.latest() == _info(30)
    assert not scheduler.pending


def test_insignificant_change_is_tracked_but_not_committed(timers: FakeTimerFactory) -> None:
    scheduler = DebouncedProgress(delay=0.2, min_change=5.0, timer_factory=timers)
    first = ProgressInfo(total_fields=10, completed_fields=5, missing_fields=5, progress_percentage=50, is_complete=False)
    scheduler.schedule(_returning(first))
    timers.last.fire()
    assert scheduler.committed == first

    same_count = first.model_copy(update={"progress_percentage": 52})
    scheduler.schedule(_returning(same_count))
    timers.last.fire()

    assert scheduler.latest() == same_count
    assert scheduler.committed == first


def test_force_now_wins_over_pending_timer(scheduler: DebouncedProgress, timers: FakeTimerFactory) -> None:
    scheduler.schedule(_returning(_info(10)))
    pending = timers.last

    forced = scheduler.force_now(_returning(_info(50)))
    pending.fire()

    assert pending.cancelled
    assert forced == _info(50)
    assert scheduler.committed == _info(50)
    assert scheduler.latest() == _info(50)


def test_force_now_commits_even_without_significant_change(scheduler: DebouncedProgress) -> None:
    scheduler.force_now(_returning(_info(10)))
    scheduler.force_now(_returning(_info(10)))
    assert scheduler.committed == _info(10)


def test_cancel_drops_the_pending_recompute(scheduler: DebouncedProgress, timers: FakeTimerFactory) -> None:
    scheduler.schedule(_returning(_info(10)))
    scheduler.cancel()
    timers.last.fire()

    assert scheduler.committed is None
    assert scheduler.latest() is None


def test_dispose_ignores_late_callbacks(scheduler: DebouncedProgress, timers: FakeTimerFactory) -> None:
    scheduler.schedule(_returning(_info(10)))
    scheduler.dispose()
    timers.last.fire()
    scheduler.schedule(_returning(_info(20)))

    assert scheduler.disposed
    assert scheduler.committed is None
    assert len(timers.timers) == 1


def test_on_commit_receives_committed_values(timers: FakeTimerFactory) -> None:
    received: list[ProgressInfo] = []
    scheduler = DebouncedProgress(timer_factory=timers, on_commit=received.append)

    scheduler.schedule(_returning(_info(10)))
    timers.last.fire()
    scheduler.force_now(_returning(_info(10)))

    assert received == [_info(10), _info(10)]


def test_negative_delay_is_rejected() -> None:
    with pytest.raises(ValueError):
        DebouncedProgress(delay=-1)
