from .badge_definition import (
    BadgeCategory,
    BadgeCriteria,
    BadgeDefinition,
    BadgeRarity,
    CriteriaKind,
)
from .earned_badge import EarnedBadge

__all__ = [
    "BadgeCategory",
    "BadgeCriteria",
    "BadgeDefinition",
    "BadgeRarity",
    "CriteriaKind",
    "EarnedBadge",
]
