"""Pydantic schemas for learning turn API request/response validation."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field


class LearningTurnCreateRequest(BaseModel):
    """Schema for adding a turn to a session."""

    session_id: int | None = Field(
        None, description="Optional; must match the session in the URL when given"
    )
    turn_number: int = Field(..., ge=1, description="1-based turn number, unique per session")
    target_sentence: str = Field(..., min_length=1, description="Sentence the learner should say")
    sentence_meaning: str | None = Field(None, description="Translation or gloss")


class LearningTurnUpdateRequest(BaseModel):
    """Schema for a partial turn update. Omitted or null fields are left unchanged."""

    user_transcript: str | None = Field(None, description="What the learner actually said")
    pronunciation_feedback_json: Any = Field(
        None, description="Pronunciation feedback payload, scored by overall_score"
    )
    grammar_feedback_json: Any = Field(
        None, description="Grammar feedback payload, scored by overall_score"
    )
    turn_completed: bool | None = Field(None, description="Whether the turn is done")


class LearningTurn(BaseModel):
    """Schema for a learning turn response."""

    id: int
    session_id: int
    turn_number: int
    target_sentence: str
    sentence_meaning: str | None
    user_transcript: str | None
    pronunciation_feedback_json: Any = None
    grammar_feedback_json: Any = None
    turn_completed: bool
    created_at: datetime | None

    model_config = {"from_attributes": True}
