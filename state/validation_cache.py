"""Short-lived memoisation of validation and completion results.

Entries are advisory: an entry is only used while the stored value equals the
current value and the entry is younger than the cache TTL. Dropping the cache
never changes a result, it only causes the work to be redone.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Hashable, Mapping
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from models.fields import FileDescriptor

logger = logging.getLogger(__name__)

EntryT = TypeVar("EntryT", bound="_TimestampedEntry")


def freeze_value(value: Any) -> Any:
    """Return an immutable copy of ``value`` suitable for equality checks.

    Lists are copied so a host that mutates its list in place cannot make a
    stale entry look fresh. Uploaded files are reduced to name, size and type.
    """

    if value is None or isinstance(value, (str, bytes, bool, int, float)):
        return value
    if isinstance(value, FileDescriptor):
        return ("file", value.name, value.size, value.mime_type)
    if isinstance(value, (list, tuple)):
        return tuple(freeze_value(item) for item in value)
    if isinstance(value, (set, frozenset)):
        return frozenset(freeze_value(item) for item in value)
    if isinstance(value, Mapping):
        return tuple((key, freeze_value(item)) for key, item in value.items())
    if hasattr(value, "name") and hasattr(value, "size"):
        return freeze_value(FileDescriptor.coerce(value))
    return value


@dataclass(frozen=True, slots=True)
class _TimestampedEntry:
    value: Any
    timestamp: float


@dataclass(frozen=True, slots=True)
class ValidationCacheEntry(_TimestampedEntry):
    """Cached outcome of validating one field value."""

    is_valid: bool
    error: str | None


@dataclass(frozen=True, slots=True)
class CompletionCacheEntry(_TimestampedEntry):
    """Cached outcome of a field-completion check."""

    is_completed: bool


class _FreshnessCache(Generic[EntryT]):
    def __init__(self, ttl: float, *, clock: Callable[[], float] | None = None) -> None:
        if ttl <= 0:
            msg = "ttl must be > 0"
            raise ValueError(msg)
        self.ttl = ttl
        self._clock = clock or time.monotonic
        self._entries: dict[Hashable, EntryT] = {}

    def now(self) -> float:
        return self._clock()

    def get(self, key: Hashable, value: Any) -> EntryT | None:
        """Return the entry for ``key`` when it is fresh for ``value``."""

        entry = self._entries.get(key)
        if entry is None:
            return None
        if entry.value != freeze_value(value):
            return None
        if self._clock() - entry.timestamp >= self.ttl:
            return None
        return entry

    def _store(self, key: Hashable, entry: EntryT) -> EntryT:
        self._entries[key] = entry
        return entry

    def discard(self, key: Hashable) -> None:
        self._entries.pop(key, None)

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries


class ValidationCache(_FreshnessCache[ValidationCacheEntry]):
    """Field id → last validation result."""

    def put(self, field_id: str, value: Any, error: str | None) -> ValidationCacheEntry:
        return self._store(
            field_id,
            ValidationCacheEntry(
                value=freeze_value(value),
                timestamp=self._clock(),
                is_valid=error is None,
                error=error,
            ),
        )


class CompletionCache(_FreshnessCache[CompletionCacheEntry]):
    """``(section, field id)`` → last completion check."""

    def put(self, key: tuple[str, str], value: Any, is_completed: bool) -> CompletionCacheEntry:
        return self._store(
            key,
            CompletionCacheEntry(value=freeze_value(value), timestamp=self._clock(), is_completed=is_completed),
        )


__all__ = [
    "CompletionCache",
    "CompletionCacheEntry",
    "ValidationCache",
    "ValidationCacheEntry",
    "freeze_value",
]
