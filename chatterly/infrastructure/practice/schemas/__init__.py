"""Practice context schemas."""

from chatterly.infrastructure.practice.schemas.session_schemas import (
    PracticeSession,
    PracticeSessionCreateRequest,
    SessionCompleteResponse,
    SessionSummary,
)
from chatterly.infrastructure.practice.schemas.turn_schemas import (
    LearningTurn,
    LearningTurnCreateRequest,
    LearningTurnUpdateRequest,
)

__all__ = [
    "LearningTurn",
    "LearningTurnCreateRequest",
    "LearningTurnUpdateRequest",
    "PracticeSession",
    "PracticeSessionCreateRequest",
    "SessionCompleteResponse",
    "SessionSummary",
]
