"""Tests for the snapshot cache."""

import pytest

from campaign_metrics.services.cache import DEFAULT_CACHE_KEY, MetricsCache


class FakeClock:
    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def cache(clock) -> MetricsCache:
    return MetricsCache(ttl=3600, max_entries=3, clock=clock)


class TestMetricsCache:
    """Tests for MetricsCache."""

    def test_default_key(self) -> None:
        assert DEFAULT_CACHE_KEY == "meta_campaigns"

    def test_set_and_get(self, cache) -> None:
        cache.set("meta_campaigns", [1, 2])
        assert cache.get("meta_campaigns") == [1, 2]
        assert "meta_campaigns" in cache

    def test_missing(self, cache) -> None:
        assert cache.get("nope") is None

    def test_fresh_within_ttl(self, cache, clock) -> None:
        cache.set("k", "v")
        clock.now += 3600
        assert cache.get("k") == "v"

    def test_expired(self, cache, clock) -> None:
        """Entries older than the TTL are dropped on read."""
        cache.set("k", "v")
        clock.now += 3601
        assert cache.get("k") is None
        assert len(cache) == 0

    def test_set_refreshes_timestamp(self, cache, clock) -> None:
        cache.set("k", "old")
        clock.now += 3000
        cache.set("k", "new")
        clock.now += 3000
        assert cache.get("k") == "new"

    def test_evicts_oldest(self, cache) -> None:
        for key in ("a", "b", "c", "d"):
            cache.set(key, key)
        assert len(cache) == 3
        assert cache.get("a") is None
        assert cache.get("d") == "d"

    def test_invalidate(self, cache) -> None:
        cache.set("k", "v")
        cache.invalidate("k")
        cache.invalidate("never-set")
        assert cache.get("k") is None

    def test_clear(self, cache) -> None:
        cache.set("a", 1)
        cache.set("b", 2)
        cache.clear()
        assert len(cache) == 0
