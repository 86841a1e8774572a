"""
EarnedBadge entity: a badge awarded to one user, exactly once.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from chatterly.domain.common.entity import Entity
from chatterly.domain.common.value_objects import EarnedBadgeId, UserId


@dataclass
class EarnedBadge(Entity[EarnedBadgeId]):
    """
    Badge awarded to a user.

    Business Rules:
    - At most one EarnedBadge per (user, badge_type)
    - Never deleted in normal operation
    """

    id: EarnedBadgeId
    user_id: UserId
    badge_type: str
    awarded_at: datetime | None = None
    badge_data: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def create(
        cls,
        user_id: UserId,
        badge_type: str,
        awarded_at: datetime,
        badge_data: dict[str, Any] | None = None,
    ) -> "EarnedBadge":
        """Create a new award (ID will be 0 until persisted)."""
        return cls(
            id=EarnedBadgeId.generate(),
            user_id=user_id,
            badge_type=badge_type,
            awarded_at=awarded_at,
            badge_data=dict(badge_data or {}),
        )
