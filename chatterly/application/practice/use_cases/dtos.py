"""DTOs for practice session use cases."""

from dataclasses import dataclass
from typing import Any

from chatterly.domain.practice.entities import PracticeSession, SessionSummary


@dataclass
class TurnUpdate:
    """Partial update of a learning turn; None leaves a field unchanged."""

    user_transcript: str | None = None
    pronunciation_feedback: Any = None
    grammar_feedback: Any = None
    completed: bool | None = None

    @property
    def is_empty(self) -> bool:
        return (
            self.user_transcript is None
            and self.pronunciation_feedback is None
            and self.grammar_feedback is None
            and self.completed is None
        )

    @property
    def carries_feedback(self) -> bool:
        return self.pronunciation_feedback is not None or self.grammar_feedback is not None


@dataclass
class SessionCompletion:
    """Result of completing a session."""

    session: PracticeSession
    summary: SessionSummary
