"""Achievements context schemas."""

from chatterly.infrastructure.achievements.schemas.badge_schemas import (
    BadgeCriteria,
    BadgeDefinition,
    BadgeProgress,
    BadgesResponse,
    EarnedBadge,
)

__all__ = [
    "BadgeCriteria",
    "BadgeDefinition",
    "BadgeProgress",
    "BadgesResponse",
    "EarnedBadge",
]
