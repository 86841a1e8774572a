"""API routes for the learning turns of a practice session."""

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from chatterly.application.practice.use_cases.dtos import TurnUpdate
from chatterly.application.practice.use_cases.learning_turn_use_case import LearningTurnUseCase
from chatterly.core import container
from chatterly.domain.common.exceptions import DomainError
from chatterly.domain.practice.entities import LearningTurn as LearningTurnEntity
from chatterly.exceptions import ChatterlyError
from chatterly.infrastructure.common.di import inject_use_case
from chatterly.infrastructure.common.identity import CurrentUserId
from chatterly.infrastructure.practice.schemas import (
    LearningTurn,
    LearningTurnCreateRequest,
    LearningTurnUpdateRequest,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/sessions/{session_id}/turns", tags=["turns"])


def to_turn_schema(turn: LearningTurnEntity) -> LearningTurn:
    pronunciation = turn.pronunciation_feedback
    grammar = turn.grammar_feedback
    return LearningTurn(
        id=turn.id.value,
        session_id=turn.session_id.value,
        turn_number=turn.turn_number,
        target_sentence=turn.target_sentence,
        sentence_meaning=turn.sentence_meaning,
        user_transcript=turn.user_transcript,
        pronunciation_feedback_json=pronunciation.payload if pronunciation else None,
        grammar_feedback_json=grammar.payload if grammar else None,
        turn_completed=turn.completed,
        created_at=turn.created_at,
    )


@router.post(
    "",
    response_model=LearningTurn,
    status_code=status.HTTP_201_CREATED,
)
def create_turn(
    session_id: int,
    request: LearningTurnCreateRequest,
    user_id: CurrentUserId,
    use_case: LearningTurnUseCase = Depends(inject_use_case(container.learning_turn_use_case)),
) -> LearningTurn:
    """
    Add a turn to one of the current user's sessions.

    Args:
        session_id: ID of the session
        request: Turn number, target sentence and optional meaning
        user_id: Trusted id of the learner
        use_case: LearningTurnUseCase injected via dependency container

    Returns:
        The created turn

    Raises:
        HTTPException: If creation fails unexpectedly
    """
    try:
        turn = use_case.create_turn(
            session_id=session_id,
            user_id=user_id,
            turn_number=request.turn_number,
            target_sentence=request.target_sentence,
            sentence_meaning=request.sentence_meaning,
            payload_session_id=request.session_id,
        )
        return to_turn_schema(turn)
    except (ChatterlyError, DomainError):
        raise
    except Exception as e:
        logger.error(f"Failed to create turn in session {session_id}: {e!s}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An unexpected error occurred. Please try again later.",
        ) from e


@router.get(
    "",
    response_model=list[LearningTurn],
    status_code=status.HTTP_200_OK,
)
def list_turns(
    session_id: int,
    user_id: CurrentUserId,
    use_case: LearningTurnUseCase = Depends(inject_use_case(container.learning_turn_use_case)),
) -> list[LearningTurn]:
    """List a session's turns ordered by turn number."""
    try:
        return [to_turn_schema(turn) for turn in use_case.list_turns(session_id, user_id)]
    except (ChatterlyError, DomainError):
        raise
    except Exception as e:
        logger.error(f"Failed to list turns of session {session_id}: {e!s}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An unexpected error occurred. Please try again later.",
        ) from e


@router.get(
    "/{turn_id}",
    response_model=LearningTurn,
    status_code=status.HTTP_200_OK,
)
def get_turn(
    session_id: int,
    turn_id: int,
    user_id: CurrentUserId,
    use_case: LearningTurnUseCase = Depends(inject_use_case(container.learning_turn_use_case)),
) -> LearningTurn:
    try:
        return to_turn_schema(use_case.get_turn(session_id, turn_id, user_id))
    except (ChatterlyError, DomainError):
        raise
    except Exception as e:
        logger.error(f"Failed to get turn {turn_id}: {e!s}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An unexpected error occurred. Please try again later.",
        ) from e


@router.patch(
    "/{turn_id}",
    response_model=LearningTurn,
    status_code=status.HTTP_200_OK,
)
def update_turn(
    session_id: int,
    turn_id: int,
    request: LearningTurnUpdateRequest,
    user_id: CurrentUserId,
    use_case: LearningTurnUseCase = Depends(inject_use_case(container.learning_turn_use_case)),
) -> LearningTurn:
    """
    Record the learner's attempt on a turn.

    Args:
        session_id: ID of the session
        turn_id: ID of the turn to update
        request: Transcript, feedback payloads and/or completed flag
        user_id: Trusted id of the learner
        use_case: LearningTurnUseCase injected via dependency container

    Returns:
        The updated turn

    Raises:
        HTTPException: If the update fails unexpectedly
    """
    try:
        turn = use_case.update_turn(
            session_id=session_id,
            turn_id=turn_id,
            user_id=user_id,
            update=TurnUpdate(
                user_transcript=request.user_transcript,
                pronunciation_feedback=request.pronunciation_feedback_json,
                grammar_feedback=request.grammar_feedback_json,
                completed=request.turn_completed,
            ),
        )
        return to_turn_schema(turn)
    except (ChatterlyError, DomainError):
        raise
    except Exception as e:
        logger.error(f"Failed to update turn {turn_id}: {e!s}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An unexpected error occurred. Please try again later.",
        ) from e
