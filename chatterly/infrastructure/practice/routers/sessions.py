"""API routes for practice sessions."""

import logging
from typing import Annotated

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session, sessionmaker

from chatterly.application.practice.use_cases.practice_session_use_case import (
    PracticeSessionUseCase,
)
from chatterly.core import container
from chatterly.database import get_session_factory
from chatterly.domain.common.exceptions import DomainError
from chatterly.domain.practice.entities import PracticeSession as PracticeSessionEntity
from chatterly.domain.practice.entities import SessionStatus
from chatterly.exceptions import ChatterlyError
from chatterly.infrastructure.common.di import inject_use_case
from chatterly.infrastructure.common.identity import CurrentUserId
from chatterly.infrastructure.practice.schemas import (
    PracticeSession,
    PracticeSessionCreateRequest,
    SessionCompleteResponse,
    SessionSummary,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/sessions", tags=["sessions"])


def to_session_schema(session: PracticeSessionEntity) -> PracticeSession:
    return PracticeSession(
        id=session.id.value,
        user_id=session.user_id.value,
        target_language=session.target_language,
        difficulty_level=session.difficulty_level,
        persona_id=session.persona_id,
        status=session.status,
        started_at=session.started_at,
        ended_at=session.ended_at,
        total_turns=session.total_turns,
        completed_turns=session.completed_turns,
        overall_progress_json=session.overall_progress,
        created_at=session.created_at,
    )


def refresh_session_progress(
    session_factory: sessionmaker[Session], session_id: int, user_id: str
) -> None:
    """
    Write the detailed progress snapshot of a completed session.

    Runs after the completion response has been sent, on its own database
    session. Failures are logged; the completion itself already stands.
    """
    db = session_factory()
    try:
        with container.db.override(db):
            use_case = container.session_progress_use_case()
        use_case.refresh_session_progress(session_id, user_id)
    except Exception as e:
        logger.error(
            f"Failed to refresh progress for session {session_id}: {e!s}", exc_info=True
        )
    finally:
        db.close()


@router.post(
    "",
    response_model=PracticeSession,
    status_code=status.HTTP_201_CREATED,
)
def create_session(
    request: PracticeSessionCreateRequest,
    user_id: CurrentUserId,
    use_case: PracticeSessionUseCase = Depends(
        inject_use_case(container.practice_session_use_case)
    ),
) -> PracticeSession:
    """
    Start a new practice session for the current user.

    Args:
        request: Language, difficulty and optional persona
        user_id: Trusted id of the learner
        use_case: PracticeSessionUseCase injected via dependency container

    Returns:
        The created session, in progress with zeroed turn counters

    Raises:
        HTTPException: If creation fails unexpectedly
    """
    try:
        session = use_case.create_session(
            user_id=user_id,
            target_language=request.target_language,
            difficulty_level=request.difficulty_level,
            persona_id=request.persona_id,
        )
        return to_session_schema(session)
    except (ChatterlyError, DomainError):
        raise
    except Exception as e:
        logger.error(f"Failed to create session for user {user_id}: {e!s}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An unexpected error occurred. Please try again later.",
        ) from e


@router.get(
    "",
    response_model=list[PracticeSession],
    status_code=status.HTTP_200_OK,
)
def list_sessions(
    user_id: CurrentUserId,
    session_status: Annotated[SessionStatus | None, Query(alias="status")] = None,
    limit: int = 10,
    offset: int = 0,
    use_case: PracticeSessionUseCase = Depends(
        inject_use_case(container.practice_session_use_case)
    ),
) -> list[PracticeSession]:
    """
    List the current user's sessions, newest first.

    Args:
        session_status: Optional status filter
        limit: Page size, 1 to 100
        offset: Number of sessions to skip
    """
    try:
        sessions = use_case.list_sessions(
            user_id=user_id, status=session_status, limit=limit, offset=offset
        )
        return [to_session_schema(session) for session in sessions]
    except (ChatterlyError, DomainError):
        raise
    except Exception as e:
        logger.error(f"Failed to list sessions for user {user_id}: {e!s}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An unexpected error occurred. Please try again later.",
        ) from e


@router.get(
    "/{session_id}",
    response_model=PracticeSession,
    status_code=status.HTTP_200_OK,
)
def get_session(
    session_id: int,
    user_id: CurrentUserId,
    use_case: PracticeSessionUseCase = Depends(
        inject_use_case(container.practice_session_use_case)
    ),
) -> PracticeSession:
    """Get one of the current user's sessions."""
    try:
        return to_session_schema(use_case.get_session(session_id, user_id))
    except (ChatterlyError, DomainError):
        raise
    except Exception as e:
        logger.error(f"Failed to get session {session_id}: {e!s}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An unexpected error occurred. Please try again later.",
        ) from e


@router.post(
    "/{session_id}/complete",
    response_model=SessionCompleteResponse,
    status_code=status.HTTP_200_OK,
)
def complete_session(
    session_id: int,
    user_id: CurrentUserId,
    background_tasks: BackgroundTasks,
    session_factory: Annotated[sessionmaker[Session], Depends(get_session_factory)],
    use_case: PracticeSessionUseCase = Depends(
        inject_use_case(container.practice_session_use_case)
    ),
) -> SessionCompleteResponse:
    """
    Complete a session and return its summary.

    The detailed progress snapshot is written in the background once the
    response has been sent.

    Args:
        session_id: ID of the session to complete
        user_id: Trusted id of the learner
        background_tasks: Scheduler for the progress snapshot
        session_factory: Source of the background task's database session
        use_case: PracticeSessionUseCase injected via dependency container

    Returns:
        The completed session and its summary

    Raises:
        HTTPException: If completion fails unexpectedly
    """
    try:
        completion = use_case.complete_session(session_id, user_id)
    except (ChatterlyError, DomainError):
        raise
    except Exception as e:
        logger.error(f"Failed to complete session {session_id}: {e!s}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An unexpected error occurred. Please try again later.",
        ) from e

    background_tasks.add_task(refresh_session_progress, session_factory, session_id, user_id)

    summary = completion.summary
    return SessionCompleteResponse(
        session=to_session_schema(completion.session),
        summary=SessionSummary(
            completion_rate=summary.completion_rate,
            average_pronunciation_score=summary.average_pronunciation_score,
            average_grammar_score=summary.average_grammar_score,
            duration_minutes=summary.duration_minutes,
            message=summary.message,
        ),
    )
