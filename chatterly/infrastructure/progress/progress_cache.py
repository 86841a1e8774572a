"""
Process-local progress cache.

Maps a user id to the last computed ProgressReport and the time it was
computed. One instance is created at startup and shared by all requests.
"""

import math
import threading
import time
from collections.abc import Callable
from dataclasses import dataclass

import structlog

from chatterly.application.progress.use_cases.dtos import ProgressReport

logger = structlog.get_logger(__name__)

DEFAULT_TTL_SECONDS = 300.0
DEFAULT_MAX_ENTRIES = 1000
EVICTION_FRACTION = 0.2


@dataclass(frozen=True)
class CacheEntry:
    report: ProgressReport
    computed_at: float


class ProgressCache:
    """
    Bounded, time-expiring cache of progress snapshots, safe across threads.

    - Reads within ``ttl_seconds`` of the computation are hits.
    - Every write purges entries older than twice the TTL; if more than
      ``max_entries`` remain, the oldest 20% by computation time are evicted.
    """

    def __init__(
        self,
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        max_entries: int = DEFAULT_MAX_ENTRIES,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if ttl_seconds <= 0:
            raise ValueError("ttl_seconds must be positive")
        if max_entries <= 0:
            raise ValueError("max_entries must be positive")
        self.ttl_seconds = ttl_seconds
        self.max_entries = max_entries
        self._clock = clock
        self._entries: dict[str, CacheEntry] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, user_id: object) -> bool:
        with self._lock:
            return user_id in self._entries

    def get(self, user_id: str) -> ProgressReport | None:
        """Return the cached snapshot if it is still fresh."""
        with self._lock:
            entry = self._entries.get(user_id)
            if entry is None or self._clock() - entry.computed_at >= self.ttl_seconds:
                return None
            return entry.report

    def set(self, user_id: str, report: ProgressReport) -> None:
        """Store a snapshot, replacing any previous one, then run eviction."""
        with self._lock:
            now = self._clock()
            self._entries[user_id] = CacheEntry(report=report, computed_at=now)
            self._evict(now)

    def get_or_compute(
        self, user_id: str, compute: Callable[[], ProgressReport]
    ) -> ProgressReport:
        """
        Return the fresh cached snapshot, or compute, store and return a new one.

        Errors raised by ``compute`` propagate and nothing is stored. The
        computation runs outside the lock, so two concurrent misses for the
        same user may both compute; the later write wins.
        """
        cached = self.get(user_id)
        if cached is not None:
            logger.debug("progress_cache_hit", user_id=user_id)
            return cached

        logger.debug("progress_cache_miss", user_id=user_id)
        report = compute()
        self.set(user_id, report)
        return report

    def invalidate(self, user_id: str) -> None:
        with self._lock:
            self._entries.pop(user_id, None)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def _evict(self, now: float) -> None:
        max_age = self.ttl_seconds * 2
        expired = [uid for uid, e in self._entries.items() if now - e.computed_at > max_age]
        for uid in expired:
            del self._entries[uid]

        if len(self._entries) > self.max_entries:
            oldest_first = sorted(self._entries.items(), key=lambda item: item[1].computed_at)
            to_remove = math.floor(len(oldest_first) * EVICTION_FRACTION)
            for uid, _ in oldest_first[:to_remove]:
                del self._entries[uid]
            logger.info("progress_cache_evicted", expired=len(expired), evicted=to_remove)
