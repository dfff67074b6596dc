"""Unit tests for the in-memory TTL cache."""

from kinowoche.utils.cache import TTLCache


class FakeClock:
    def __init__(self) -> None:
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now


class TestTTLCache:
    def test_returns_stored_value(self) -> None:
        cache = TTLCache(10)
        cache.set("k", {"poster": "x"})
        assert cache.get("k") == {"poster": "x"}

    def test_missing_key_returns_none(self) -> None:
        assert TTLCache(10).get("nope") is None

    def test_entry_expires_after_ttl(self) -> None:
        clock = FakeClock()
        cache = TTLCache(10, clock=clock)
        cache.set("k", "v")

        clock.now += 10
        assert cache.get("k") == "v"

        clock.now += 0.5
        assert cache.get("k") is None
        assert len(cache) == 0

    def test_per_entry_ttl_overrides_default(self) -> None:
        clock = FakeClock()
        cache = TTLCache(10, clock=clock)
        cache.set("short", "v", ttl=1)
        cache.set("long", "v")

        clock.now += 5
        assert cache.get("short") is None
        assert cache.get("long") == "v"

    def test_empty_values_are_not_stored(self) -> None:
        cache = TTLCache(10)
        assert cache.set("none", None) is False
        assert cache.set("empty", {}) is False
        assert cache.set("blank", "") is False
        assert len(cache) == 0

    def test_set_overwrites_wholesale(self) -> None:
        cache = TTLCache(10)
        cache.set("k", "old")
        cache.set("k", "new")
        assert cache.get("k") == "new"

    def test_delete_and_clear(self) -> None:
        cache = TTLCache(10)
        cache.set("a", 1)
        cache.set("b", 2)
        cache.delete("a")
        assert "a" not in cache
        assert "b" in cache
        cache.clear()
        assert len(cache) == 0
