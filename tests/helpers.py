"""Typed helpers for the test-suite."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any


class FakeClock:
    """Manually advanced replacement for ``time.monotonic``."""

    def __init__(self, start: float = 100.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeTimer:
    """Timer handle that only fires when a test calls :meth:`fire`."""

    def __init__(self, delay: float, callback: Callable[[], None]) -> None:
        self.delay = delay
        self.callback = callback
        self.started = False
        self.cancelled = False

    def start(self) -> None:
        self.started = True

    def cancel(self) -> None:
        self.cancelled = True

    def fire(self) -> None:
        self.callback()


class FakeTimerFactory:
    def __init__(self) -> None:
        self.timers: list[FakeTimer] = []

    def __call__(self, delay: float, callback: Callable[[], None]) -> FakeTimer:
        timer = FakeTimer(delay, callback)
        self.timers.append(timer)
        return timer

    @property
    def last(self) -> FakeTimer:
        return self.timers[-1]


def make_file(name: str = "photo.jpg", size: int = 1024, mime_type: str = "image/jpeg") -> dict[str, Any]:
    """Return a file descriptor shaped like the upload component's output."""

    return {"name": name, "size": size, "type": mime_type}


def make_files(count: int, *, size: int = 1024, mime_type: str = "image/jpeg") -> list[dict[str, Any]]:
    return [make_file(f"photo-{index}.jpg", size, mime_type) for index in range(count)]
