from __future__ import annotations

import logging

import pytest

from tests.helpers import FakeClock
from utils.performance import PerformanceMonitor


def test_utils_resolves_to_the_project_package() -> None:
    import utils

    assert utils.PerformanceMonitor is PerformanceMonitor


def test_counters_and_derived_values() -> None:
    timer = FakeClock(0.0)
    monitor = PerformanceMonitor("fields", timer=timer)

    started = monitor.start_validation()
    timer.advance(0.004)
    monitor.end_validation(started, "Email is required", field_id="email")

    started = monitor.start_validation()
    timer.advance(0.002)
    monitor.end_validation(started, None, field_id="phone")

    monitor.start_validation()
    monitor.record_cache_hit()

    metrics = monitor.metrics()
    assert metrics.validation_count == 3
    assert metrics.cache_hits == 1
    assert metrics.computed_validations == 2
    assert metrics.error_count == 1
    assert metrics.slow_validations == 0
    assert metrics.total_time_ms == pytest.approx(6.0)
    assert metrics.average_time_ms == pytest.approx(3.0)
    assert metrics.cache_hit_rate == pytest.approx(1 / 3)


def test_slow_validation_is_logged(caplog: pytest.LogCaptureFixture) -> None:
    timer = FakeClock(0.0)
    monitor = PerformanceMonitor("fields", slow_threshold_ms=16.0, timer=timer)

    with caplog.at_level(logging.DEBUG, logger="get_featured.performance"):
        started = monitor.start_validation()
        timer.advance(0.020)
        monitor.end_validation(started, None, field_id="bio")

    assert monitor.metrics().slow_validations == 1
    assert "slow validation for bio" in caplog.text


def test_reset_clears_counters() -> None:
    monitor = PerformanceMonitor("fields")
    monitor.start_validation()
    monitor.record_cache_hit()
    monitor.reset()

    metrics = monitor.metrics()
    assert metrics.validation_count == 0
    assert metrics.cache_hit_rate == 0.0
    assert metrics.average_time_ms == 0.0
