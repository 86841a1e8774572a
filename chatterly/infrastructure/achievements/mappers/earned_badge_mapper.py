"""Mapper for EarnedBadge ORM ↔ Domain conversion."""

from chatterly.domain.achievements.entities import EarnedBadge
from chatterly.domain.common.value_objects import EarnedBadgeId, UserId
from chatterly.infrastructure.common.store import ensure_utc
from chatterly.models import Badge as BadgeORM


class EarnedBadgeMapper:
    """Mapper for EarnedBadge ORM ↔ Domain conversion."""

    def to_domain(self, orm_model: BadgeORM) -> EarnedBadge:
        """Convert ORM model to domain entity."""
        return EarnedBadge(
            id=EarnedBadgeId(orm_model.id),
            user_id=UserId(orm_model.user_id),
            badge_type=orm_model.badge_type,
            awarded_at=ensure_utc(orm_model.awarded_at),
            badge_data=dict(orm_model.badge_data or {}),
        )

    def to_orm(self, domain_entity: EarnedBadge) -> BadgeORM:
        """Convert domain entity to a new ORM model; earned badges are never updated."""
        orm_model = BadgeORM(
            user_id=domain_entity.user_id.value,
            badge_type=domain_entity.badge_type,
            badge_data=domain_entity.badge_data or None,
        )
        if domain_entity.awarded_at is not None:
            orm_model.awarded_at = domain_entity.awarded_at
        return orm_model
