"""Use case for computing and serving learner progress."""

from datetime import timedelta

import structlog

from chatterly.application.achievements.protocols.badge_repository import (
    BadgeRepositoryProtocol,
)
from chatterly.application.common.clock import Clock, utc_now
from chatterly.application.practice.protocols.session_repository import (
    SessionRepositoryProtocol,
)
from chatterly.application.practice.protocols.turn_repository import TurnRepositoryProtocol
from chatterly.application.progress.protocols.progress_cache import ProgressCacheProtocol
from chatterly.application.progress.use_cases.dtos import ProgressReport
from chatterly.domain.common.value_objects import UserId
from chatterly.domain.progress.metrics import ProgressMetrics
from chatterly.domain.progress.services.progress_calculator import build_progress_metrics

logger = structlog.get_logger(__name__)

RECENT_BADGE_WINDOW = timedelta(days=30)


class ProgressUseCase:
    """Progress reports behind a per-user cache, with an all-zero fallback."""

    def __init__(
        self,
        session_repository: SessionRepositoryProtocol,
        turn_repository: TurnRepositoryProtocol,
        badge_repository: BadgeRepositoryProtocol,
        progress_cache: ProgressCacheProtocol,
        clock: Clock = utc_now,
    ) -> None:
        """Initialize use case with repository protocols and the shared cache."""
        self.session_repository = session_repository
        self.turn_repository = turn_repository
        self.badge_repository = badge_repository
        self.progress_cache = progress_cache
        self.clock = clock

    def compute_progress(self, user_id: str) -> ProgressMetrics:
        """
        Compute a fresh snapshot from the store, bypassing the cache.

        Raises:
            StoreError: If sessions or turns cannot be read
        """
        user_id_vo = UserId(user_id)
        sessions = self.session_repository.find_all_by_user(user_id_vo)
        turns = self.turn_repository.find_by_sessions([s.id for s in sessions])
        return build_progress_metrics(sessions, turns, self.clock())

    def get_progress(self, user_id: str) -> ProgressReport:
        """
        Get the user's progress report, served from the cache while fresh.

        A cache hit reads nothing from the store. Never raises for
        computation failures: the all-zero report is returned instead and
        is not cached.
        """
        try:
            return self.progress_cache.get_or_compute(user_id, lambda: self._build_report(user_id))
        except Exception as e:
            logger.error("progress_calculation_failed", user_id=user_id, error=str(e))
            return ProgressReport(metrics=ProgressMetrics.empty(), is_fallback=True)

    def invalidate_progress_cache(self, user_id: str) -> None:
        self.progress_cache.invalidate(user_id)
        logger.debug("progress_cache_invalidated", user_id=user_id)

    def _build_report(self, user_id: str) -> ProgressReport:
        metrics = self.compute_progress(user_id)
        return ProgressReport(
            metrics=metrics, badges_earned_this_month=self._recent_badge_count(user_id)
        )

    def _recent_badge_count(self, user_id: str) -> int:
        since = self.clock() - RECENT_BADGE_WINDOW
        try:
            return self.badge_repository.count_awarded_since(UserId(user_id), since)
        except Exception as e:
            logger.warning("recent_badge_lookup_failed", user_id=user_id, error=str(e))
            return 0
