from datetime import datetime
from typing import Protocol

from chatterly.domain.achievements.entities import EarnedBadge
from chatterly.domain.common.value_objects import UserId


class BadgeRepositoryProtocol(Protocol):
    def find_by_user(self, user_id: UserId) -> list[EarnedBadge]:
        """Earned badges, most recently awarded first."""
        ...

    def find_badge_types(self, user_id: UserId) -> set[str]: ...

    def add_if_absent(self, badge: EarnedBadge) -> EarnedBadge | None:
        """Insert the badge unless the user already holds it; returns None when skipped."""
        ...

    def find_awarded_since(self, user_id: UserId, since: datetime) -> list[EarnedBadge]: ...

    def count_awarded_since(self, user_id: UserId, since: datetime) -> int: ...
