"""
LearningTurn entity: one sentence-level exchange inside a practice session.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any

from chatterly.domain.common.entity import Entity
from chatterly.domain.common.exceptions import ValidationError
from chatterly.domain.common.value_objects import SessionId, TurnId
from chatterly.domain.practice.feedback import Feedback


@dataclass
class LearningTurn(Entity[TurnId]):
    """
    A single practice turn.

    Business Rules:
    - Turn numbers are 1-based and unique within a session
    - The target sentence cannot be empty
    - The completed flag may be toggled back to pending
    """

    id: TurnId
    session_id: SessionId
    turn_number: int
    target_sentence: str
    sentence_meaning: str | None = None
    user_transcript: str | None = None
    pronunciation_feedback: Feedback | None = None
    grammar_feedback: Feedback | None = None
    completed: bool = False
    created_at: datetime | None = None

    def __post_init__(self) -> None:
        """Validate invariants."""
        if isinstance(self.turn_number, bool) or self.turn_number < 1:
            raise ValidationError(
                "Turn number must be at least 1", field="turn_number", value=self.turn_number
            )
        if not self.target_sentence or not self.target_sentence.strip():
            raise ValidationError("Target sentence cannot be empty", field="target_sentence")

    @property
    def pronunciation_score(self) -> float | None:
        return self.pronunciation_feedback.overall_score if self.pronunciation_feedback else None

    @property
    def grammar_score(self) -> float | None:
        return self.grammar_feedback.overall_score if self.grammar_feedback else None

    def record_transcript(self, transcript: str) -> None:
        self.user_transcript = transcript

    def record_pronunciation_feedback(self, payload: Any) -> None:
        self.pronunciation_feedback = Feedback.from_payload(payload)

    def record_grammar_feedback(self, payload: Any) -> None:
        self.grammar_feedback = Feedback.from_payload(payload)

    def set_completed(self, completed: bool) -> int:
        """
        Set the completed flag.

        Args:
            completed: New flag value

        Returns:
            The change to apply to the owning session's completed_turns
            counter: +1 for pending -> done, -1 for done -> pending, else 0.
        """
        previous = self.completed
        self.completed = completed
        if completed and not previous:
            return 1
        if previous and not completed:
            return -1
        return 0

    @classmethod
    def create(
        cls,
        session_id: SessionId,
        turn_number: int,
        target_sentence: str,
        sentence_meaning: str | None = None,
    ) -> "LearningTurn":
        """Create a new pending turn (ID will be 0 until persisted)."""
        return cls(
            id=TurnId.generate(),
            session_id=session_id,
            turn_number=turn_number,
            target_sentence=target_sentence.strip() if target_sentence else target_sentence,
            sentence_meaning=sentence_meaning,
        )
