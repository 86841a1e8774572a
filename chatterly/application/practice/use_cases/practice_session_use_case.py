"""Use case for the practice session lifecycle."""

import structlog

from chatterly.application.achievements.protocols.badge_awarder import BadgeAwarderProtocol
from chatterly.application.common.clock import Clock, utc_now
from chatterly.application.practice.protocols.session_repository import (
    SessionRepositoryProtocol,
)
from chatterly.application.practice.protocols.turn_repository import TurnRepositoryProtocol
from chatterly.application.practice.use_cases.activity_hooks import refresh_after_activity
from chatterly.application.practice.use_cases.dtos import SessionCompletion
from chatterly.application.progress.protocols.progress_cache import ProgressCacheProtocol
from chatterly.domain.common.domain_event import DomainEvent
from chatterly.domain.common.exceptions import ValidationError
from chatterly.domain.common.value_objects import SessionId, UserId
from chatterly.domain.practice.entities import (
    DifficultyLevel,
    PracticeSession,
    SessionStatus,
)
from chatterly.domain.practice.events import PracticeSessionCompleted
from chatterly.exceptions import SessionNotFoundError

logger = structlog.get_logger(__name__)

MAX_PAGE_SIZE = 100


class PracticeSessionUseCase:
    """Create, read and complete practice sessions."""

    def __init__(
        self,
        session_repository: SessionRepositoryProtocol,
        turn_repository: TurnRepositoryProtocol,
        badge_awarder: BadgeAwarderProtocol,
        progress_cache: ProgressCacheProtocol,
        minimum_session_turns: int = 1,
        clock: Clock = utc_now,
    ) -> None:
        """Initialize use case with repository protocols."""
        self.session_repository = session_repository
        self.turn_repository = turn_repository
        self.badge_awarder = badge_awarder
        self.progress_cache = progress_cache
        self.minimum_session_turns = minimum_session_turns
        self.clock = clock

    def create_session(
        self,
        user_id: str,
        target_language: str,
        difficulty_level: DifficultyLevel,
        persona_id: str | None = None,
    ) -> PracticeSession:
        """
        Start a new practice session.

        Args:
            user_id: Trusted id of the learner
            target_language: ISO language code, at least 2 characters
            difficulty_level: beginner, intermediate or advanced
            persona_id: Optional conversation persona

        Returns:
            The persisted session, in progress with zeroed turn counters

        Raises:
            ValidationError: If the language or difficulty is invalid
        """
        session = PracticeSession.create(
            user_id=UserId(user_id),
            target_language=target_language,
            difficulty_level=difficulty_level,
            now=self.clock(),
            persona_id=persona_id,
        )
        session = self.session_repository.add(session)

        logger.info("session_created", session_id=session.id.value, user_id=user_id)
        refresh_after_activity(user_id, self.badge_awarder, self.progress_cache)
        return session

    def get_session(self, session_id: int, user_id: str) -> PracticeSession:
        """
        Get a session owned by the user.

        Raises:
            SessionNotFoundError: If the session does not exist or belongs to someone else
        """
        session = self.session_repository.find_by_id(SessionId(session_id), UserId(user_id))
        if session is None:
            raise SessionNotFoundError(session_id)
        return session

    def list_sessions(
        self,
        user_id: str,
        status: SessionStatus | None = None,
        limit: int = 10,
        offset: int = 0,
    ) -> list[PracticeSession]:
        """List the user's sessions newest first, optionally filtered by status."""
        if limit < 1 or limit > MAX_PAGE_SIZE:
            raise ValidationError(
                f"Limit must be between 1 and {MAX_PAGE_SIZE}", field="limit", value=limit
            )
        if offset < 0:
            raise ValidationError("Offset cannot be negative", field="offset", value=offset)
        return self.session_repository.list_by_user(
            UserId(user_id), status=status, limit=limit, offset=offset
        )

    def complete_session(self, session_id: int, user_id: str) -> SessionCompletion:
        """
        Complete a session and write its summary.

        Badge awarding and cache invalidation follow the completion as
        best-effort work; the detailed per-session metrics are refreshed
        separately by SessionProgressUseCase.

        Args:
            session_id: ID of the session to complete
            user_id: Trusted id of the learner

        Returns:
            The completed session and its summary

        Raises:
            SessionNotFoundError: If the session is not found
            InvalidStateError: If already completed or below the minimum turn count
        """
        session = self.get_session(session_id, user_id)
        turns = self.turn_repository.find_by_session(session.id)

        summary = session.complete(turns, self.clock(), self.minimum_session_turns)
        session = self._complete_and_dispatch(session)

        logger.info(
            "session_completed",
            session_id=session_id,
            user_id=user_id,
            completed_turns=summary.completed_turns,
            total_turns=summary.total_turns,
        )
        return SessionCompletion(session=session, summary=summary)

    def _complete_and_dispatch(self, session: PracticeSession) -> PracticeSession:
        events = session.collect_events()
        saved = self.session_repository.complete(session)
        for event in events:
            self._dispatch(event)
        return saved

    def _dispatch(self, event: DomainEvent) -> None:
        if isinstance(event, PracticeSessionCompleted):
            refresh_after_activity(
                event.user_id.value, self.badge_awarder, self.progress_cache
            )
