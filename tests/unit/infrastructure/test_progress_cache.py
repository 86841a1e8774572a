"""Tests for the process-local progress cache."""

import threading

import pytest

from chatterly.application.progress.use_cases.dtos import ProgressReport
from chatterly.domain.progress.metrics import ProgressMetrics, SessionStats
from chatterly.infrastructure.progress.progress_cache import ProgressCache


class FakeClock:
    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


def _report(total_sessions: int) -> ProgressReport:
    return ProgressReport(
        metrics=ProgressMetrics(session_stats=SessionStats(total_sessions=total_sessions))
    )


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def cache(clock: FakeClock) -> ProgressCache:
    return ProgressCache(ttl_seconds=300, max_entries=5, clock=clock)


class TestProgressCacheFreshness:
    def test_miss_on_empty_cache(self, cache: ProgressCache) -> None:
        assert cache.get("user-1") is None

    def test_hit_within_ttl(self, cache: ProgressCache, clock: FakeClock) -> None:
        cache.set("user-1", _report(3))
        clock.now = 299.9
        assert cache.get("user-1") == _report(3)

    def test_expired_at_ttl(self, cache: ProgressCache, clock: FakeClock) -> None:
        cache.set("user-1", _report(3))
        clock.now = 300
        assert cache.get("user-1") is None

    def test_invalidate_forces_recompute(self, cache: ProgressCache) -> None:
        calls = []

        def compute() -> ProgressReport:
            calls.append(1)
            return _report(len(calls))

        assert cache.get_or_compute("user-1", compute) == _report(1)
        assert cache.get_or_compute("user-1", compute) == _report(1)
        cache.invalidate("user-1")
        assert cache.get_or_compute("user-1", compute) == _report(2)
        assert len(calls) == 2

    def test_failed_compute_is_not_cached(self, cache: ProgressCache) -> None:
        def compute() -> ProgressReport:
            raise RuntimeError("store down")

        with pytest.raises(RuntimeError):
            cache.get_or_compute("user-1", compute)
        assert "user-1" not in cache

    def test_invalidate_unknown_user_is_noop(self, cache: ProgressCache) -> None:
        cache.invalidate("nobody")
        assert len(cache) == 0

    @pytest.mark.parametrize(("ttl", "max_entries"), [(0, 10), (-1, 10), (300, 0)])
    def test_bounds_must_be_positive(self, ttl: float, max_entries: int) -> None:
        with pytest.raises(ValueError):
            ProgressCache(ttl_seconds=ttl, max_entries=max_entries)


class TestProgressCacheEviction:
    def test_entries_older_than_twice_ttl_are_purged_on_write(
        self, cache: ProgressCache, clock: FakeClock
    ) -> None:
        cache.set("old", _report(1))
        clock.now = 601
        cache.set("new", _report(2))

        assert "old" not in cache
        assert "new" in cache

    def test_stale_but_recent_entries_survive_purge(
        self, cache: ProgressCache, clock: FakeClock
    ) -> None:
        cache.set("stale", _report(1))
        clock.now = 450
        cache.set("new", _report(2))

        assert "stale" in cache
        assert cache.get("stale") is None

    def test_oldest_fifth_evicted_over_capacity(
        self, cache: ProgressCache, clock: FakeClock
    ) -> None:
        for i in range(6):
            clock.now = float(i)
            cache.set(f"user-{i}", _report(i))

        # 6 entries > 5: floor(6 * 0.2) = 1 oldest entry removed
        assert len(cache) == 5
        assert "user-0" not in cache
        assert "user-5" in cache


class TestProgressCacheConcurrency:
    def test_concurrent_writes_keep_the_cache_consistent(self) -> None:
        cache = ProgressCache(ttl_seconds=300, max_entries=50)

        def writer(offset: int) -> None:
            for i in range(200):
                cache.set(f"user-{offset}-{i % 20}", _report(i))
                cache.get(f"user-{offset}-{i % 7}")
                cache.invalidate(f"user-{offset}-{i % 11}")

        threads = [threading.Thread(target=writer, args=(n,)) for n in range(4)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len(cache) <= 50
