"""Pydantic schemas for practice session API request/response validation."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

from chatterly.domain.practice.entities import DifficultyLevel, SessionStatus


class PracticeSessionCreateRequest(BaseModel):
    """Schema for starting a practice session."""

    target_language: str = Field(
        ..., min_length=2, max_length=16, description="ISO code of the language to practice"
    )
    difficulty_level: DifficultyLevel = Field(..., description="Learner level for the session")
    persona_id: str | None = Field(None, description="Optional conversation persona")


class PracticeSession(BaseModel):
    """Schema for a practice session response."""

    id: int
    user_id: str
    target_language: str
    difficulty_level: DifficultyLevel
    persona_id: str | None
    status: SessionStatus = Field(..., description="Derived from started_at and ended_at")
    started_at: datetime | None
    ended_at: datetime | None
    total_turns: int
    completed_turns: int
    overall_progress_json: dict[str, Any] | None = Field(
        None, description="Completion summary and detailed progress snapshot"
    )
    created_at: datetime | None

    model_config = {"from_attributes": True}


class SessionSummary(BaseModel):
    """Schema for the summary returned when a session is completed."""

    completion_rate: float = Field(..., description="Completed turns as a percentage of all turns")
    average_pronunciation_score: float
    average_grammar_score: float
    duration_minutes: int
    message: str = Field(..., description="Human readable completion message")


class SessionCompleteResponse(BaseModel):
    """Schema for session completion response."""

    session: PracticeSession = Field(..., description="Completed session")
    summary: SessionSummary = Field(..., description="Completion summary")
