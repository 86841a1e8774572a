"""
PracticeSession aggregate root.
"""

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Literal, get_args

from chatterly.domain.common.aggregate_root import AggregateRoot
from chatterly.domain.common.exceptions import (
    InvalidStateError,
    InvariantViolationError,
    ValidationError,
)
from chatterly.domain.common.rounding import round_half_up_int
from chatterly.domain.common.value_objects import SessionId, UserId
from chatterly.domain.practice.entities.learning_turn import LearningTurn
from chatterly.domain.practice.events import PracticeSessionCompleted
from chatterly.domain.progress.services.score_extractor import extract_scores

DifficultyLevel = Literal["beginner", "intermediate", "advanced"]
SessionStatus = Literal["created", "in_progress", "completed"]

DIFFICULTY_LEVELS: tuple[str, ...] = get_args(DifficultyLevel)


def minutes_between(started_at: datetime | None, ended_at: datetime | None) -> int:
    """Whole minutes between two timestamps, halves rounded up; 0 if either is missing."""
    if started_at is None or ended_at is None:
        return 0
    return round_half_up_int((ended_at - started_at).total_seconds() / 60)


@dataclass(frozen=True)
class SessionSummary:
    """Summary written to a session when it is completed."""

    completion_rate: float
    average_pronunciation_score: float
    average_grammar_score: float
    duration_minutes: int
    total_turns: int
    completed_turns: int
    completed_at: datetime

    @property
    def message(self) -> str:
        return (
            f"Session completed! You completed {self.completed_turns} "
            f"out of {self.total_turns} turns."
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "completion_rate": self.completion_rate,
            "average_pronunciation_score": self.average_pronunciation_score,
            "average_grammar_score": self.average_grammar_score,
            "duration_minutes": self.duration_minutes,
            "total_turns": self.total_turns,
            "completed_turns": self.completed_turns,
            "completed_at": self.completed_at.isoformat(),
        }


@dataclass
class PracticeSession(AggregateRoot[SessionId]):
    """
    Practice session aggregate root.

    State machine: created (no started_at) -> in_progress (started, not
    ended) -> completed (ended_at set, terminal).

    Business Rules:
    - completed_turns never exceeds total_turns, and neither is negative
    - total_turns is a high-water mark of created turn numbers
    - ended_at is set once; a completed session only accepts progress details
    """

    id: SessionId
    user_id: UserId
    target_language: str
    difficulty_level: DifficultyLevel
    persona_id: str | None = None
    started_at: datetime | None = None
    ended_at: datetime | None = None
    total_turns: int = 0
    completed_turns: int = 0
    overall_progress: dict[str, Any] | None = None
    created_at: datetime | None = None

    def __post_init__(self) -> None:
        """Validate invariants."""
        if not self.target_language or len(self.target_language.strip()) < 2:
            raise ValidationError(
                "Target language must be at least 2 characters",
                field="target_language",
                value=self.target_language,
            )
        if self.difficulty_level not in DIFFICULTY_LEVELS:
            raise ValidationError(
                f"Difficulty level must be one of: {', '.join(DIFFICULTY_LEVELS)}",
                field="difficulty_level",
                value=self.difficulty_level,
            )
        if self.total_turns < 0 or self.completed_turns < 0:
            raise InvariantViolationError("PracticeSession", "turn counters cannot be negative")
        if self.completed_turns > self.total_turns:
            raise InvariantViolationError(
                "PracticeSession", "completed_turns cannot exceed total_turns"
            )

    @property
    def status(self) -> SessionStatus:
        if self.ended_at is not None:
            return "completed"
        if self.started_at is not None:
            return "in_progress"
        return "created"

    @property
    def is_completed(self) -> bool:
        return self.ended_at is not None

    @property
    def duration_minutes(self) -> int:
        return minutes_between(self.started_at, self.ended_at)

    def ensure_modifiable(self, action: str) -> None:
        """
        Guard mutations of turns and counters.

        Raises:
            InvalidStateError: If the session has already been completed
        """
        if self.is_completed:
            raise InvalidStateError(
                "Session has already been completed", current_state=self.status, action=action
            )

    def complete(
        self, turns: Sequence[LearningTurn], now: datetime, minimum_turns: int = 1
    ) -> SessionSummary:
        """
        Complete the session and compute its summary.

        Args:
            turns: All turns of this session
            now: Completion timestamp
            minimum_turns: Minimum total_turns required to complete

        Returns:
            The summary that was embedded into overall_progress

        Raises:
            InvalidStateError: If already completed or below the minimum turn count
        """
        if self.is_completed:
            raise InvalidStateError(
                "Session has already been completed", current_state=self.status, action="complete"
            )
        if self.total_turns < minimum_turns:
            raise InvalidStateError(
                f"Session must have at least {minimum_turns} turn(s) to be completed",
                current_state=self.status,
                action="complete",
            )

        scores = extract_scores(turns)
        completed_count = sum(1 for turn in turns if turn.completed)
        turn_count = len(turns)
        summary = SessionSummary(
            completion_rate=(completed_count / turn_count) * 100 if turn_count else 0.0,
            average_pronunciation_score=scores.average_pronunciation,
            average_grammar_score=scores.average_grammar,
            duration_minutes=minutes_between(self.started_at or now, now),
            total_turns=turn_count,
            completed_turns=completed_count,
            completed_at=now,
        )

        self.ended_at = now
        self.completed_turns = min(completed_count, self.total_turns)
        self.overall_progress = summary.to_dict()
        self._record_event(
            PracticeSessionCompleted(
                session_id=self.id,
                user_id=self.user_id,
                completed_turns=self.completed_turns,
                total_turns=self.total_turns,
            )
        )
        return summary

    def attach_progress_details(self, details: dict[str, Any]) -> None:
        """Merge detailed post-completion metrics into the progress snapshot."""
        self.overall_progress = {**(self.overall_progress or {}), **details}

    @classmethod
    def create(
        cls,
        user_id: UserId,
        target_language: str,
        difficulty_level: DifficultyLevel,
        now: datetime,
        persona_id: str | None = None,
    ) -> "PracticeSession":
        """
        Factory method for starting a new practice session.

        The session starts immediately, with zeroed turn counters.
        """
        return cls(
            id=SessionId.generate(),
            user_id=user_id,
            target_language=target_language.strip() if target_language else target_language,
            difficulty_level=difficulty_level,
            persona_id=persona_id,
            started_at=now,
            created_at=now,
        )
