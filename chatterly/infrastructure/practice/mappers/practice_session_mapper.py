"""Mapper for PracticeSession ORM ↔ Domain conversion."""

from chatterly.domain.common.value_objects import SessionId, UserId
from chatterly.domain.practice.entities import PracticeSession
from chatterly.infrastructure.common.store import ensure_utc
from chatterly.models import PracticeSession as PracticeSessionORM


class PracticeSessionMapper:
    """Mapper for PracticeSession ORM ↔ Domain conversion."""

    def to_domain(self, orm_model: PracticeSessionORM) -> PracticeSession:
        """Convert ORM model to domain entity."""
        return PracticeSession(
            id=SessionId(orm_model.id),
            user_id=UserId(orm_model.user_id),
            target_language=orm_model.target_language,
            difficulty_level=orm_model.difficulty_level,  # type: ignore[arg-type]
            persona_id=orm_model.persona_id,
            started_at=ensure_utc(orm_model.started_at),
            ended_at=ensure_utc(orm_model.ended_at),
            total_turns=orm_model.total_turns,
            completed_turns=orm_model.completed_turns,
            overall_progress=orm_model.overall_progress_json,
            created_at=ensure_utc(orm_model.created_at),
        )

    def to_orm(
        self, domain_entity: PracticeSession, orm_model: PracticeSessionORM | None = None
    ) -> PracticeSessionORM:
        """Convert domain entity to ORM model."""
        if orm_model:
            # Counters and completion are written by dedicated conditional updates.
            orm_model.overall_progress_json = domain_entity.overall_progress
            return orm_model

        orm_model = PracticeSessionORM(
            user_id=domain_entity.user_id.value,
            target_language=domain_entity.target_language,
            difficulty_level=domain_entity.difficulty_level,
            persona_id=domain_entity.persona_id,
            started_at=domain_entity.started_at,
            ended_at=domain_entity.ended_at,
            total_turns=domain_entity.total_turns,
            completed_turns=domain_entity.completed_turns,
            overall_progress_json=domain_entity.overall_progress,
        )
        if domain_entity.created_at is not None:
            orm_model.created_at = domain_entity.created_at
        return orm_model
