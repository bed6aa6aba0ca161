"""Tests for the in-memory LRU cache."""

from tour_resolver.adapters.cache import InMemoryCache


class FakeClock:
    def __init__(self):
        self.now = 0.0

    def __call__(self):
        return self.now


class TestInMemoryCache:
    def test_get_missing(self):
        assert InMemoryCache().get("nope") is None

    def test_set_and_get(self):
        cache = InMemoryCache()
        cache.set("k", [1, 2])
        assert cache.get("k") == [1, 2]

    def test_entries_expire(self):
        clock = FakeClock()
        cache = InMemoryCache(default_ttl_seconds=10, clock=clock)
        cache.set("k", "v")
        clock.now = 9.9
        assert cache.get("k") == "v"
        clock.now = 10.0
        assert cache.get("k") is None
        assert cache.size() == 0

    def test_per_entry_ttl(self):
        clock = FakeClock()
        cache = InMemoryCache(default_ttl_seconds=100, clock=clock)
        cache.set("short", "v", ttl=1)
        clock.now = 2
        assert cache.get("short") is None

    def test_lru_eviction(self):
        cache = InMemoryCache(max_size=2)
        cache.set("a", 1)
        cache.set("b", 2)
        cache.get("a")
        cache.set("c", 3)
        assert cache.get("b") is None
        assert cache.get("a") == 1
        assert cache.get("c") == 3

    def test_invalidate_and_clear(self):
        cache = InMemoryCache()
        cache.set("a", 1)
        cache.set("b", 2)
        assert cache.invalidate("a") is True
        assert cache.invalidate("a") is False
        assert cache.clear() == 1
        assert cache.size() == 0

    def test_stats(self):
        cache = InMemoryCache()
        cache.set("a", 1)
        cache.get("a")
        cache.get("missing")
        assert cache.stats() == {"size": 1, "hits": 1, "misses": 1, "hit_rate_percent": 50.0}
