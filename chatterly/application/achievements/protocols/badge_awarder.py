from datetime import datetime
from typing import Protocol

from chatterly.domain.achievements.entities import EarnedBadge
from chatterly.domain.achievements.services import BadgeProgress


class BadgeAwarderProtocol(Protocol):
    def award_badges(self, user_id: str) -> list[EarnedBadge]: ...


class BadgeProgressReaderProtocol(Protocol):
    def recent_badge_types(self, user_id: str, since: datetime) -> list[str]: ...

    def progress_toward_next(self, user_id: str) -> list[BadgeProgress]: ...
