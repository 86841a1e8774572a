"""Use case for listing and awarding badges."""

from datetime import datetime

import structlog

from chatterly.application.achievements.protocols.badge_repository import (
    BadgeRepositoryProtocol,
)
from chatterly.application.common.clock import Clock, utc_now
from chatterly.application.practice.protocols.session_repository import (
    SessionRepositoryProtocol,
)
from chatterly.application.practice.protocols.turn_repository import TurnRepositoryProtocol
from chatterly.domain.achievements.entities import EarnedBadge
from chatterly.domain.achievements.services import (
    BadgeOverview,
    BadgeProgress,
    BadgeProgressEvaluator,
    BadgeQualificationService,
)
from chatterly.domain.common.value_objects import UserId

logger = structlog.get_logger(__name__)


class BadgeUseCase:
    """Badge display data and evaluate-then-award."""

    def __init__(
        self,
        session_repository: SessionRepositoryProtocol,
        turn_repository: TurnRepositoryProtocol,
        badge_repository: BadgeRepositoryProtocol,
        evaluator: BadgeProgressEvaluator,
        qualification_service: BadgeQualificationService,
        clock: Clock = utc_now,
    ) -> None:
        """Initialize use case with repository protocols and domain services."""
        self.session_repository = session_repository
        self.turn_repository = turn_repository
        self.badge_repository = badge_repository
        self.evaluator = evaluator
        self.qualification_service = qualification_service
        self.clock = clock

    def list_badges(self, user_id: str) -> BadgeOverview:
        """
        Get earned badges, available badges and progress toward the latter.

        Reading the earned badges is the primary read and propagates store
        errors. If the session count cannot be read, progress is empty.
        """
        user_id_vo = UserId(user_id)
        earned = self.badge_repository.find_by_user(user_id_vo)

        total_sessions: int | None
        try:
            total_sessions = self.session_repository.count_by_user(user_id_vo)
        except Exception as e:
            logger.warning("badge_progress_sessions_unavailable", user_id=user_id, error=str(e))
            total_sessions = None

        return self.evaluator.evaluate(earned, total_sessions)

    def progress_toward_next(self, user_id: str) -> list[BadgeProgress]:
        """Progress entries for the badges the user has not earned yet."""
        return self.list_badges(user_id).progress

    def award_badges(self, user_id: str) -> list[EarnedBadge]:
        """
        Award every badge the user's history now qualifies for.

        Insert-if-absent: badges the user already holds are skipped, so
        calling this repeatedly never duplicates an award.

        Returns:
            The badges newly awarded by this call
        """
        user_id_vo = UserId(user_id)
        now = self.clock()
        sessions = self.session_repository.find_all_by_user(user_id_vo)
        turns = self.turn_repository.find_by_sessions([s.id for s in sessions])

        already_earned = self.badge_repository.find_badge_types(user_id_vo)
        awarded: list[EarnedBadge] = []
        for award in self.qualification_service.qualify(sessions, turns, now):
            if award.badge_type in already_earned:
                continue
            badge = self.badge_repository.add_if_absent(
                EarnedBadge.create(user_id_vo, award.badge_type, now, award.badge_data)
            )
            if badge is not None:
                awarded.append(badge)
                logger.info("badge_awarded", user_id=user_id, badge_type=badge.badge_type)
        return awarded

    def recent_badge_types(self, user_id: str, since: datetime) -> list[str]:
        """Badge types awarded to the user at or after ``since``."""
        badges = self.badge_repository.find_awarded_since(UserId(user_id), since)
        return [badge.badge_type for badge in badges]
