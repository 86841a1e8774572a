"""Common value objects shared across all domain modules."""

from .ids import EarnedBadgeId, SessionId, TurnId, UserId

__all__ = [
    "EarnedBadgeId",
    "SessionId",
    "TurnId",
    "UserId",
]
