from .learning_turn import LearningTurn
from .practice_session import (
    DIFFICULTY_LEVELS,
    DifficultyLevel,
    PracticeSession,
    SessionStatus,
    SessionSummary,
)

__all__ = [
    "DIFFICULTY_LEVELS",
    "DifficultyLevel",
    "LearningTurn",
    "PracticeSession",
    "SessionStatus",
    "SessionSummary",
]
