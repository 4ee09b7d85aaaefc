import pytest

from paceon.core.cache import TTLCache


def test_set_then_get_returns_value(clock):
    cache = TTLCache(ttl_seconds=300, clock=clock)
    cache.set("k", "v")
    assert cache.get("k") == "v"


def test_get_missing_key_is_none(clock):
    assert TTLCache(clock=clock).get("nope") is None


def test_entry_expires_at_ttl(clock):
    cache = TTLCache(ttl_seconds=300, clock=clock)
    cache.set("k", "v")
    clock.advance(299.9)
    assert cache.get("k") == "v"
    clock.advance(0.1)
    assert cache.get("k") is None
    assert len(cache) == 0


def test_set_overwrites_and_refreshes_timestamp(clock):
    cache = TTLCache(ttl_seconds=10, clock=clock)
    cache.set("k", "old")
    clock.advance(8)
    cache.set("k", "new")
    clock.advance(8)
    assert cache.get("k") == "new"
    assert cache.keys() == ["k"]


def test_invalidate_removes_entry_within_ttl(clock):
    cache = TTLCache(ttl_seconds=300, clock=clock)
    cache.set("k", "v")
    assert cache.invalidate("k") is True
    assert cache.get("k") is None
    assert cache.invalidate("k") is False


def test_clear_removes_everything(clock):
    cache = TTLCache(clock=clock)
    cache.set("a", 1)
    cache.set("b", 2)
    assert cache.clear() == 2
    assert cache.get("a") is None and cache.get("b") is None


def test_sweep_removes_only_expired_entries(clock):
    cache = TTLCache(ttl_seconds=60, clock=clock)
    cache.set("old", 1)
    clock.advance(45)
    cache.set("fresh", 2)
    clock.advance(20)
    assert cache.sweep() == 1
    assert cache.keys() == ["fresh"]
    assert cache.get("fresh") == 2


def test_max_items_evicts_oldest(clock):
    cache = TTLCache(ttl_seconds=60, max_items=2, clock=clock)
    cache.set("a", 1)
    clock.advance(1)
    cache.set("b", 2)
    clock.advance(1)
    cache.set("c", 3)
    assert sorted(cache.keys()) == ["b", "c"]


def test_non_positive_ttl_rejected():
    with pytest.raises(ValueError):
        TTLCache(ttl_seconds=0)
