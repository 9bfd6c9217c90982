from __future__ import annotations

from types import SimpleNamespace

import pytest

from state.validation_cache import CompletionCache, ValidationCache, freeze_value
from tests.helpers import FakeClock


def test_entry_is_fresh_for_same_value_within_ttl(clock: FakeClock) -> None:
    cache = ValidationCache(5.0, clock=clock)
    cache.put("email", "a@b", "Too short")

    clock.advance(4.9)
    entry = cache.get("email", "a@b")

    assert entry is not None
    assert entry.error == "Too short"
    assert entry.is_valid is False


def test_entry_expires_at_ttl(clock: FakeClock) -> None:
    cache = ValidationCache(5.0, clock=clock)
    cache.put("email", "a@b.co", None)
    clock.advance(5.0)
    assert cache.get("email", "a@b.co") is None


def test_different_value_misses(clock: FakeClock) -> None:
    cache = ValidationCache(5.0, clock=clock)
    cache.put("email", "a@b", "Too short")
    assert cache.get("email", "a@b.c") is None


def test_in_place_list_mutation_is_not_a_stale_hit(clock: FakeClock) -> None:
    cache = CompletionCache(3.0, clock=clock)
    photos = ["a.jpg"]
    cache.put(("cover", "workPhotos"), photos, False)

    photos.append("b.jpg")

    assert cache.get(("cover", "workPhotos"), photos) is None


def test_clear_and_discard(clock: FakeClock) -> None:
    cache = ValidationCache(5.0, clock=clock)
    cache.put("email", "x", None)
    cache.put("phone", "y", None)

    cache.discard("email")
    assert "email" not in cache
    assert len(cache) == 1

    cache.clear()
    assert len(cache) == 0


def test_ttl_must_be_positive() -> None:
    with pytest.raises(ValueError):
        ValidationCache(0)


def test_freeze_value_reduces_uploads_to_metadata() -> None:
    upload = SimpleNamespace(name="a.jpg", size=10, type="image/jpeg")
    frozen = freeze_value([upload, {"name": "a.jpg", "size": 10, "type": "image/jpeg"}])

    assert frozen[0] == ("file", "a.jpg", 10, "image/jpeg")
    assert isinstance(frozen, tuple)
    assert freeze_value({"b", "a"}) == frozenset({"a", "b"})
