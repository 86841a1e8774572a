"""Mapper for LearningTurn ORM ↔ Domain conversion."""

from chatterly.domain.common.value_objects import SessionId, TurnId
from chatterly.domain.practice.entities import LearningTurn
from chatterly.domain.practice.feedback import Feedback
from chatterly.infrastructure.common.store import ensure_utc
from chatterly.models import LearningTurn as LearningTurnORM


class LearningTurnMapper:
    """Mapper for LearningTurn ORM ↔ Domain conversion."""

    def to_domain(self, orm_model: LearningTurnORM) -> LearningTurn:
        """Convert ORM model to domain entity."""
        return LearningTurn(
            id=TurnId(orm_model.id),
            session_id=SessionId(orm_model.session_id),
            turn_number=orm_model.turn_number,
            target_sentence=orm_model.target_sentence,
            sentence_meaning=orm_model.sentence_meaning,
            user_transcript=orm_model.user_transcript,
            pronunciation_feedback=Feedback.from_payload(orm_model.pronunciation_feedback_json),
            grammar_feedback=Feedback.from_payload(orm_model.grammar_feedback_json),
            completed=orm_model.turn_completed,
            created_at=ensure_utc(orm_model.created_at),
        )

    def to_orm(
        self, domain_entity: LearningTurn, orm_model: LearningTurnORM | None = None
    ) -> LearningTurnORM:
        """Convert domain entity to ORM model."""
        pronunciation = domain_entity.pronunciation_feedback
        grammar = domain_entity.grammar_feedback
        if orm_model:
            orm_model.user_transcript = domain_entity.user_transcript
            orm_model.pronunciation_feedback_json = pronunciation.payload if pronunciation else None
            orm_model.grammar_feedback_json = grammar.payload if grammar else None
            orm_model.turn_completed = domain_entity.completed
            return orm_model

        return LearningTurnORM(
            session_id=domain_entity.session_id.value,
            turn_number=domain_entity.turn_number,
            target_sentence=domain_entity.target_sentence,
            sentence_meaning=domain_entity.sentence_meaning,
            user_transcript=domain_entity.user_transcript,
            pronunciation_feedback_json=pronunciation.payload if pronunciation else None,
            grammar_feedback_json=grammar.payload if grammar else None,
            turn_completed=domain_entity.completed,
        )
