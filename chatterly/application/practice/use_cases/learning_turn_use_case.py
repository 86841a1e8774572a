"""Use case for learning turns within a practice session."""

import structlog

from chatterly.application.achievements.protocols.badge_awarder import BadgeAwarderProtocol
from chatterly.application.practice.protocols.session_repository import (
    SessionRepositoryProtocol,
)
from chatterly.application.practice.protocols.turn_repository import TurnRepositoryProtocol
from chatterly.application.practice.use_cases.activity_hooks import refresh_after_activity
from chatterly.application.practice.use_cases.dtos import TurnUpdate
from chatterly.application.progress.protocols.progress_cache import ProgressCacheProtocol
from chatterly.domain.common.exceptions import ValidationError
from chatterly.domain.common.value_objects import SessionId, TurnId, UserId
from chatterly.domain.practice.entities import LearningTurn, PracticeSession
from chatterly.exceptions import SessionNotFoundError, TurnNotFoundError

logger = structlog.get_logger(__name__)


class LearningTurnUseCase:
    """Create, read and update the turns of a practice session."""

    def __init__(
        self,
        session_repository: SessionRepositoryProtocol,
        turn_repository: TurnRepositoryProtocol,
        badge_awarder: BadgeAwarderProtocol,
        progress_cache: ProgressCacheProtocol,
    ) -> None:
        """Initialize use case with repository protocols."""
        self.session_repository = session_repository
        self.turn_repository = turn_repository
        self.badge_awarder = badge_awarder
        self.progress_cache = progress_cache

    def _get_session(self, session_id: int, user_id: str) -> PracticeSession:
        session = self.session_repository.find_by_id(SessionId(session_id), UserId(user_id))
        if session is None:
            raise SessionNotFoundError(session_id)
        return session

    def create_turn(
        self,
        session_id: int,
        user_id: str,
        turn_number: int,
        target_sentence: str,
        sentence_meaning: str | None = None,
        payload_session_id: int | None = None,
    ) -> LearningTurn:
        """
        Add a turn to a session.

        The session's total_turns is raised to max(total_turns, turn_number)
        in the store, so turns may be created out of order.

        Args:
            session_id: Session the turn belongs to
            user_id: Trusted id of the learner
            turn_number: 1-based turn number, unique within the session
            target_sentence: Sentence the learner should say
            sentence_meaning: Optional gloss of the sentence
            payload_session_id: Session id sent in the request body, if any

        Returns:
            The persisted turn

        Raises:
            ValidationError: On a session id mismatch, a turn number below 1
                or a duplicate turn number
            SessionNotFoundError: If the session is not found
            InvalidStateError: If the session is already completed
        """
        if payload_session_id is not None and payload_session_id != session_id:
            raise ValidationError(
                "Session ID mismatch", field="session_id", value=payload_session_id
            )

        session = self._get_session(session_id, user_id)
        turn = LearningTurn.create(
            session_id=session.id,
            turn_number=turn_number,
            target_sentence=target_sentence,
            sentence_meaning=sentence_meaning,
        )
        session.ensure_modifiable("create_turn")

        if self.turn_repository.turn_number_exists(session.id, turn_number):
            raise ValidationError(
                f"Turn number {turn_number} already exists in this session",
                field="turn_number",
                value=turn_number,
            )

        turn = self.turn_repository.add(turn)
        total_turns = self.session_repository.raise_total_turns(session.id, turn_number)

        logger.info(
            "turn_created",
            session_id=session_id,
            turn_id=turn.id.value,
            turn_number=turn_number,
            total_turns=total_turns,
        )
        refresh_after_activity(
            user_id, self.badge_awarder, self.progress_cache, award_badges=False
        )
        return turn

    def list_turns(self, session_id: int, user_id: str) -> list[LearningTurn]:
        """List a session's turns ordered by turn number."""
        session = self._get_session(session_id, user_id)
        return self.turn_repository.find_by_session(session.id)

    def get_turn(self, session_id: int, turn_id: int, user_id: str) -> LearningTurn:
        session = self._get_session(session_id, user_id)
        turn = self.turn_repository.find_by_id(TurnId(turn_id), session.id)
        if turn is None:
            raise TurnNotFoundError(turn_id, session_id)
        return turn

    def update_turn(
        self, session_id: int, turn_id: int, user_id: str, update: TurnUpdate
    ) -> LearningTurn:
        """
        Apply a partial update to a turn.

        When the completed flag flips, the session's completed_turns counter
        is adjusted in the store (+1 or -1, kept within [0, total_turns]).
        That adjustment is secondary: if it fails the error is logged and the
        turn update still stands.

        Args:
            session_id: Session the turn belongs to
            turn_id: ID of the turn to update
            user_id: Trusted id of the learner
            update: Fields to change

        Returns:
            The updated turn

        Raises:
            ValidationError: If the update carries no fields
            SessionNotFoundError: If the session is not found
            TurnNotFoundError: If the turn is not found in the session
            InvalidStateError: If the session is already completed
        """
        if update.is_empty:
            raise ValidationError("At least one field must be provided for a turn update")

        session = self._get_session(session_id, user_id)
        session.ensure_modifiable("update_turn")

        turn = self.turn_repository.find_by_id(TurnId(turn_id), session.id)
        if turn is None:
            raise TurnNotFoundError(turn_id, session_id)

        if update.user_transcript is not None:
            turn.record_transcript(update.user_transcript)
        if update.pronunciation_feedback is not None:
            turn.record_pronunciation_feedback(update.pronunciation_feedback)
        if update.grammar_feedback is not None:
            turn.record_grammar_feedback(update.grammar_feedback)
        delta = turn.set_completed(update.completed) if update.completed is not None else 0

        turn = self.turn_repository.save(turn)

        if delta:
            try:
                self.session_repository.adjust_completed_turns(session.id, delta)
            except Exception as e:
                logger.warning(
                    "completed_turns_update_failed",
                    session_id=session_id,
                    turn_id=turn_id,
                    delta=delta,
                    error=str(e),
                )

        logger.info("turn_updated", session_id=session_id, turn_id=turn_id, delta=delta)
        refresh_after_activity(
            user_id,
            self.badge_awarder,
            self.progress_cache,
            award_badges=update.carries_feedback or delta > 0,
        )
        return turn
