"""Repository for PracticeSession domain entities."""

from sqlalchemy import case, func, select, update
from sqlalchemy.orm import Session

from chatterly.domain.common.exceptions import InvalidStateError
from chatterly.domain.common.value_objects import SessionId, UserId
from chatterly.domain.practice.entities import PracticeSession, SessionStatus
from chatterly.exceptions import SessionNotFoundError
from chatterly.infrastructure.common.store import store_operation
from chatterly.infrastructure.practice.mappers.practice_session_mapper import (
    PracticeSessionMapper,
)
from chatterly.models import PracticeSession as PracticeSessionORM


class PracticeSessionRepository:
    """Repository for PracticeSession domain entities."""

    def __init__(self, db: Session) -> None:
        self.db = db
        self.mapper = PracticeSessionMapper()

    def add(self, session: PracticeSession) -> PracticeSession:
        """Insert a new session and return it with its database id."""
        with store_operation(self.db, "insert_session"):
            orm_model = self.mapper.to_orm(session)
            self.db.add(orm_model)
            self.db.commit()
            self.db.refresh(orm_model)
            return self.mapper.to_domain(orm_model)

    def find_by_id(self, session_id: SessionId, user_id: UserId) -> PracticeSession | None:
        """
        Find a session by ID with user ownership check.

        Args:
            session_id: The session ID
            user_id: The user ID for ownership verification

        Returns:
            PracticeSession entity if found and owned by user, None otherwise
        """
        with store_operation(self.db, "fetch_session"):
            stmt = select(PracticeSessionORM).where(
                PracticeSessionORM.id == session_id.value,
                PracticeSessionORM.user_id == user_id.value,
            )
            orm_model = self.db.execute(stmt).scalar_one_or_none()
            return self.mapper.to_domain(orm_model) if orm_model else None

    def find_all_by_user(self, user_id: UserId) -> list[PracticeSession]:
        """All sessions of a user ordered by created_at ASC."""
        with store_operation(self.db, "fetch_sessions"):
            stmt = (
                select(PracticeSessionORM)
                .where(PracticeSessionORM.user_id == user_id.value)
                .order_by(PracticeSessionORM.created_at.asc(), PracticeSessionORM.id.asc())
            )
            orm_models = self.db.execute(stmt).scalars().all()
            return [self.mapper.to_domain(orm) for orm in orm_models]

    def list_by_user(
        self,
        user_id: UserId,
        status: SessionStatus | None = None,
        limit: int = 10,
        offset: int = 0,
    ) -> list[PracticeSession]:
        """
        Get a page of a user's sessions.

        Args:
            user_id: The user ID
            status: Optional status filter derived from started_at / ended_at
            limit: Maximum number of sessions
            offset: Number of sessions to skip

        Returns:
            List of session entities ordered by created_at DESC
        """
        with store_operation(self.db, "list_sessions"):
            stmt = select(PracticeSessionORM).where(PracticeSessionORM.user_id == user_id.value)
            if status == "completed":
                stmt = stmt.where(PracticeSessionORM.ended_at.is_not(None))
            elif status == "in_progress":
                stmt = stmt.where(
                    PracticeSessionORM.ended_at.is_(None),
                    PracticeSessionORM.started_at.is_not(None),
                )
            elif status == "created":
                stmt = stmt.where(PracticeSessionORM.started_at.is_(None))

            stmt = (
                stmt.order_by(PracticeSessionORM.created_at.desc(), PracticeSessionORM.id.desc())
                .offset(offset)
                .limit(limit)
            )
            orm_models = self.db.execute(stmt).scalars().all()
            return [self.mapper.to_domain(orm) for orm in orm_models]

    def count_by_user(self, user_id: UserId) -> int:
        with store_operation(self.db, "count_sessions"):
            stmt = select(func.count(PracticeSessionORM.id)).where(
                PracticeSessionORM.user_id == user_id.value
            )
            return self.db.execute(stmt).scalar() or 0

    def complete(self, session: PracticeSession) -> PracticeSession:
        """
        Write the completion of a session, at most once.

        The update only matches a row whose ended_at is still empty, so of
        two overlapping completions only the first is stored.

        Raises:
            SessionNotFoundError: If the session no longer exists
            InvalidStateError: If the row was completed by another request
            StoreError: If the write fails
        """
        with store_operation(self.db, "complete_session"):
            stmt = (
                update(PracticeSessionORM)
                .where(
                    PracticeSessionORM.id == session.id.value,
                    PracticeSessionORM.ended_at.is_(None),
                )
                .values(
                    ended_at=session.ended_at,
                    completed_turns=session.completed_turns,
                    overall_progress_json=session.overall_progress,
                )
                .execution_options(synchronize_session=False)
            )
            result = self.db.execute(stmt)
            if result.rowcount == 0:
                self.db.rollback()
                if self.db.get(PracticeSessionORM, session.id.value) is None:
                    raise SessionNotFoundError(session.id.value)
                raise InvalidStateError(
                    "Session has already been completed",
                    current_state="completed",
                    action="complete",
                )
            self.db.commit()
            orm_model = self.db.get(PracticeSessionORM, session.id.value)
            if orm_model is None:
                raise SessionNotFoundError(session.id.value)
            return self.mapper.to_domain(orm_model)

    def save(self, session: PracticeSession) -> PracticeSession:
        """
        Persist the progress snapshot of an existing session.

        Completion fields are only written by ``complete``.

        Raises:
            SessionNotFoundError: If the session no longer exists
            StoreError: If the write fails
        """
        with store_operation(self.db, "update_session"):
            orm_model = self.db.get(PracticeSessionORM, session.id.value)
            if orm_model is None:
                raise SessionNotFoundError(session.id.value)
            self.mapper.to_orm(session, orm_model)
            self.db.commit()
            self.db.refresh(orm_model)
            return self.mapper.to_domain(orm_model)

    def raise_total_turns(self, session_id: SessionId, turn_number: int) -> int:
        """Set total_turns to max(total_turns, turn_number) in a single statement."""
        with store_operation(self.db, "raise_total_turns"):
            stmt = (
                update(PracticeSessionORM)
                .where(PracticeSessionORM.id == session_id.value)
                .values(
                    total_turns=case(
                        (PracticeSessionORM.total_turns < turn_number, turn_number),
                        else_=PracticeSessionORM.total_turns,
                    )
                )
            )
            self.db.execute(stmt)
            self.db.commit()
            total = self.db.execute(
                select(PracticeSessionORM.total_turns).where(
                    PracticeSessionORM.id == session_id.value
                )
            ).scalar_one()
            return int(total)

    def adjust_completed_turns(self, session_id: SessionId, delta: int) -> None:
        """Add delta to completed_turns in a single statement, clamped to [0, total_turns]."""
        with store_operation(self.db, "adjust_completed_turns"):
            adjusted = PracticeSessionORM.completed_turns + delta
            stmt = (
                update(PracticeSessionORM)
                .where(PracticeSessionORM.id == session_id.value)
                .values(
                    completed_turns=case(
                        (adjusted < 0, 0),
                        (adjusted > PracticeSessionORM.total_turns, PracticeSessionORM.total_turns),
                        else_=adjusted,
                    )
                )
            )
            self.db.execute(stmt)
            self.db.commit()
