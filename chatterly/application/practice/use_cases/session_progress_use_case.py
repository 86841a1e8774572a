"""Use case for the detailed progress snapshot written after a session completes."""

from dataclasses import asdict
from datetime import timedelta
from typing import Any

import structlog

from chatterly.application.achievements.protocols.badge_awarder import (
    BadgeProgressReaderProtocol,
)
from chatterly.application.common.clock import Clock, utc_now
from chatterly.application.practice.protocols.session_repository import (
    SessionRepositoryProtocol,
)
from chatterly.application.practice.protocols.turn_repository import TurnRepositoryProtocol
from chatterly.application.progress.protocols.progress_cache import ProgressCacheProtocol
from chatterly.domain.common.value_objects import SessionId, UserId
from chatterly.domain.practice.entities import PracticeSession
from chatterly.domain.progress.services.score_extractor import extract_scores
from chatterly.exceptions import SessionNotFoundError

logger = structlog.get_logger(__name__)


class SessionProgressUseCase:
    """Recompute per-turn metrics for one completed session and store them on it."""

    def __init__(
        self,
        session_repository: SessionRepositoryProtocol,
        turn_repository: TurnRepositoryProtocol,
        badge_reader: BadgeProgressReaderProtocol,
        progress_cache: ProgressCacheProtocol,
        recent_badge_window_minutes: int = 5,
        clock: Clock = utc_now,
    ) -> None:
        """Initialize use case with repository protocols."""
        self.session_repository = session_repository
        self.turn_repository = turn_repository
        self.badge_reader = badge_reader
        self.progress_cache = progress_cache
        self.recent_badge_window = timedelta(minutes=recent_badge_window_minutes)
        self.clock = clock

    def refresh_session_progress(self, session_id: int, user_id: str) -> PracticeSession:
        """
        Merge session metrics, score series and badge progress into the
        session's progress snapshot.

        Badge lookups are best-effort and fall back to empty lists.

        Raises:
            SessionNotFoundError: If the session is not found
            StoreError: If the session or its turns cannot be read or saved
        """
        session = self.session_repository.find_by_id(SessionId(session_id), UserId(user_id))
        if session is None:
            raise SessionNotFoundError(session_id)

        turns = self.turn_repository.find_by_session(session.id)
        scores = extract_scores(turns)
        total = session.total_turns

        details: dict[str, Any] = {
            "session_metrics": {
                "completion_time_minutes": session.duration_minutes,
                "turns_completed": session.completed_turns,
                "turns_total": total,
                "completion_rate": (session.completed_turns / total) * 100 if total else 0,
            },
            "performance_scores": {
                "pronunciation_scores": list(scores.pronunciation),
                "grammar_scores": list(scores.grammar),
                "overall_average": scores.overall_average,
            },
            "badge_progress": {
                "badges_earned_this_session": self._recent_badges(user_id),
                "progress_toward_next": self._progress_toward_next(user_id),
            },
        }

        session.attach_progress_details(details)
        session = self.session_repository.save(session)
        self.progress_cache.invalidate(user_id)

        logger.info("session_progress_refreshed", session_id=session_id, user_id=user_id)
        return session

    def _recent_badges(self, user_id: str) -> list[str]:
        since = self.clock() - self.recent_badge_window
        try:
            return self.badge_reader.recent_badge_types(user_id, since)
        except Exception as e:
            logger.warning("recent_badge_lookup_failed", user_id=user_id, error=str(e))
            return []

    def _progress_toward_next(self, user_id: str) -> list[dict[str, Any]]:
        try:
            return [asdict(p) for p in self.badge_reader.progress_toward_next(user_id)]
        except Exception as e:
            logger.warning("badge_progress_lookup_failed", user_id=user_id, error=str(e))
            return []
