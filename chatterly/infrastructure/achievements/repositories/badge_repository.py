"""Repository for EarnedBadge domain entities."""

from datetime import datetime

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from chatterly.domain.achievements.entities import EarnedBadge
from chatterly.domain.common.value_objects import UserId
from chatterly.infrastructure.achievements.mappers.earned_badge_mapper import EarnedBadgeMapper
from chatterly.infrastructure.common.store import store_operation
from chatterly.models import Badge as BadgeORM


class BadgeRepository:
    """Repository for EarnedBadge domain entities."""

    def __init__(self, db: Session) -> None:
        self.db = db
        self.mapper = EarnedBadgeMapper()

    def find_by_user(self, user_id: UserId) -> list[EarnedBadge]:
        """Earned badges of a user ordered by awarded_at DESC."""
        with store_operation(self.db, "fetch_badges"):
            stmt = (
                select(BadgeORM)
                .where(BadgeORM.user_id == user_id.value)
                .order_by(BadgeORM.awarded_at.desc(), BadgeORM.id.desc())
            )
            orm_models = self.db.execute(stmt).scalars().all()
            return [self.mapper.to_domain(orm) for orm in orm_models]

    def find_badge_types(self, user_id: UserId) -> set[str]:
        with store_operation(self.db, "fetch_badges"):
            stmt = select(BadgeORM.badge_type).where(BadgeORM.user_id == user_id.value)
            return set(self.db.execute(stmt).scalars().all())

    def add_if_absent(self, badge: EarnedBadge) -> EarnedBadge | None:
        """
        Insert a badge unless the user already holds one of the same type.

        The (user_id, badge_type) unique constraint settles concurrent awards:
        the losing insert is rolled back and reported as skipped.

        Returns:
            The stored badge, or None if the user already had it
        """
        with store_operation(self.db, "insert_badge"):
            orm_model = self.mapper.to_orm(badge)
            self.db.add(orm_model)
            try:
                self.db.commit()
            except IntegrityError:
                self.db.rollback()
                return None
            self.db.refresh(orm_model)
            return self.mapper.to_domain(orm_model)

    def find_awarded_since(self, user_id: UserId, since: datetime) -> list[EarnedBadge]:
        with store_operation(self.db, "fetch_badges"):
            stmt = (
                select(BadgeORM)
                .where(BadgeORM.user_id == user_id.value, BadgeORM.awarded_at >= since)
                .order_by(BadgeORM.awarded_at.desc(), BadgeORM.id.desc())
            )
            orm_models = self.db.execute(stmt).scalars().all()
            return [self.mapper.to_domain(orm) for orm in orm_models]

    def count_awarded_since(self, user_id: UserId, since: datetime) -> int:
        with store_operation(self.db, "count_badges"):
            stmt = select(func.count(BadgeORM.id)).where(
                BadgeORM.user_id == user_id.value, BadgeORM.awarded_at >= since
            )
            return self.db.execute(stmt).scalar() or 0
