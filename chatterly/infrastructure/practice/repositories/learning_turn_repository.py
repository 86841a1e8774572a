"""Repository for LearningTurn domain entities."""

from collections.abc import Sequence

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from chatterly.domain.common.exceptions import ValidationError
from chatterly.domain.common.value_objects import SessionId, TurnId
from chatterly.domain.practice.entities import LearningTurn
from chatterly.exceptions import TurnNotFoundError
from chatterly.infrastructure.common.store import store_operation
from chatterly.infrastructure.practice.mappers.learning_turn_mapper import LearningTurnMapper
from chatterly.models import LearningTurn as LearningTurnORM


class LearningTurnRepository:
    """Repository for LearningTurn domain entities."""

    def __init__(self, db: Session) -> None:
        self.db = db
        self.mapper = LearningTurnMapper()

    def add(self, turn: LearningTurn) -> LearningTurn:
        """
        Insert a new turn.

        Raises:
            ValidationError: If the turn number is already taken in the session
            StoreError: If the write fails for any other reason
        """
        with store_operation(self.db, "insert_turn"):
            orm_model = self.mapper.to_orm(turn)
            self.db.add(orm_model)
            try:
                self.db.commit()
            except IntegrityError as e:
                self.db.rollback()
                if self.turn_number_exists(turn.session_id, turn.turn_number):
                    raise ValidationError(
                        f"Turn number {turn.turn_number} already exists in this session",
                        field="turn_number",
                        value=turn.turn_number,
                    ) from e
                raise
            self.db.refresh(orm_model)
            return self.mapper.to_domain(orm_model)

    def find_by_id(self, turn_id: TurnId, session_id: SessionId) -> LearningTurn | None:
        with store_operation(self.db, "fetch_turn"):
            stmt = select(LearningTurnORM).where(
                LearningTurnORM.id == turn_id.value,
                LearningTurnORM.session_id == session_id.value,
            )
            orm_model = self.db.execute(stmt).scalar_one_or_none()
            return self.mapper.to_domain(orm_model) if orm_model else None

    def find_by_session(self, session_id: SessionId) -> list[LearningTurn]:
        """Turns of one session ordered by turn_number ASC."""
        with store_operation(self.db, "fetch_turns"):
            stmt = (
                select(LearningTurnORM)
                .where(LearningTurnORM.session_id == session_id.value)
                .order_by(LearningTurnORM.turn_number.asc())
            )
            orm_models = self.db.execute(stmt).scalars().all()
            return [self.mapper.to_domain(orm) for orm in orm_models]

    def find_by_sessions(self, session_ids: Sequence[SessionId]) -> list[LearningTurn]:
        """Turns of several sessions ordered by created_at ASC, then id."""
        if not session_ids:
            return []
        with store_operation(self.db, "fetch_turns"):
            stmt = (
                select(LearningTurnORM)
                .where(LearningTurnORM.session_id.in_([sid.value for sid in session_ids]))
                .order_by(LearningTurnORM.created_at.asc(), LearningTurnORM.id.asc())
            )
            orm_models = self.db.execute(stmt).scalars().all()
            return [self.mapper.to_domain(orm) for orm in orm_models]

    def turn_number_exists(self, session_id: SessionId, turn_number: int) -> bool:
        with store_operation(self.db, "fetch_turn"):
            stmt = select(LearningTurnORM.id).where(
                LearningTurnORM.session_id == session_id.value,
                LearningTurnORM.turn_number == turn_number,
            )
            return self.db.execute(stmt).first() is not None

    def save(self, turn: LearningTurn) -> LearningTurn:
        """Persist transcript, feedback and completed flag of an existing turn."""
        with store_operation(self.db, "update_turn"):
            orm_model = self.db.get(LearningTurnORM, turn.id.value)
            if orm_model is None:
                raise TurnNotFoundError(turn.id.value, turn.session_id.value)
            self.mapper.to_orm(turn, orm_model)
            self.db.commit()
            self.db.refresh(orm_model)
            return self.mapper.to_domain(orm_model)
