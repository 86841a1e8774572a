from .badge_progress_evaluator import (
    BadgeOverview,
    BadgeProgress,
    BadgeProgressEvaluator,
    EarnedBadgeView,
)
from .badge_qualification_service import BadgeAward, BadgeQualificationService

__all__ = [
    "BadgeAward",
    "BadgeOverview",
    "BadgeProgress",
    "BadgeProgressEvaluator",
    "BadgeQualificationService",
    "EarnedBadgeView",
]
