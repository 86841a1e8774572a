"""Partition the catalog into earned and available badges and report progress."""

from collections.abc import Iterable
from dataclasses import dataclass

from chatterly.domain.achievements.catalog import BadgeCatalog
from chatterly.domain.achievements.entities.badge_definition import BadgeDefinition
from chatterly.domain.achievements.entities.earned_badge import EarnedBadge
from chatterly.domain.common.rounding import round_half_up_int


@dataclass(frozen=True)
class BadgeProgress:
    badge_id: str
    current_progress: int
    required_progress: int
    percentage: int


@dataclass(frozen=True)
class EarnedBadgeView:
    """An earned badge decorated with its catalog definition."""

    badge: EarnedBadge
    definition: BadgeDefinition


@dataclass(frozen=True)
class BadgeOverview:
    earned: list[EarnedBadgeView]
    available: list[BadgeDefinition]
    progress: list[BadgeProgress]


def _positive_int(value: object, default: int = 1) -> int:
    if isinstance(value, bool) or not isinstance(value, int | float) or value <= 0:
        return default
    return int(value)


class BadgeProgressEvaluator:
    """
    Read-only badge evaluator.

    Computes display and progress data only; it never awards badges, so
    running it repeatedly cannot create or duplicate earned badges.

    Progress is only tracked for ``session_count`` criteria. Streak, score,
    consistency and special criteria report 0 until they are earned.
    """

    def __init__(self, catalog: BadgeCatalog) -> None:
        self.catalog = catalog

    @staticmethod
    def percentage(current: int, required: int) -> int:
        """Percentage of ``required`` reached, clamped to 100."""
        return min(100, round_half_up_int(current / required * 100))

    def progress_for(self, badge: BadgeDefinition, total_sessions: int) -> BadgeProgress:
        criteria = badge.criteria
        current = 0
        required = 1

        if criteria.kind == "session_count":
            current = total_sessions
            required = _positive_int(criteria.threshold)
        elif criteria.kind == "streak_days":
            required = _positive_int(criteria.threshold)
        elif criteria.kind == "performance_consistency":
            required = _positive_int(criteria.condition("sessions"))

        return BadgeProgress(
            badge_id=badge.id,
            current_progress=current,
            required_progress=required,
            percentage=self.percentage(current, required),
        )

    def evaluate(
        self, earned_badges: Iterable[EarnedBadge], total_sessions: int | None
    ) -> BadgeOverview:
        """
        Build the badge overview for one user.

        Args:
            earned_badges: The user's earned badges, in display order
            total_sessions: The user's session count, or None when it could
                not be read; progress is then empty

        Returns:
            BadgeOverview with earned, available and progress entries
        """
        earned: list[EarnedBadgeView] = []
        for badge in earned_badges:
            definition = self.catalog.get(badge.badge_type) or BadgeDefinition.unknown(
                badge.badge_type
            )
            earned.append(EarnedBadgeView(badge=badge, definition=definition))

        earned_types = {view.badge.badge_type for view in earned}
        available = [d for d in self.catalog if d.id not in earned_types]

        if total_sessions is None:
            progress: list[BadgeProgress] = []
        else:
            progress = [self.progress_for(badge, total_sessions) for badge in available]

        return BadgeOverview(earned=earned, available=available, progress=progress)
