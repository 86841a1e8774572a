"""Database models."""

from datetime import UTC, datetime
from typing import Any

from sqlalchemy import (
    JSON,
    Boolean,
    CheckConstraint,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from chatterly.database import Base


def _utc_now() -> datetime:
    return datetime.now(UTC)


class PracticeSession(Base):
    """One practice run by a user in one target language."""

    __tablename__ = "sessions"
    __table_args__ = (
        CheckConstraint("total_turns >= 0", name="ck_sessions_total_turns_non_negative"),
        CheckConstraint(
            "completed_turns >= 0 AND completed_turns <= total_turns",
            name="ck_sessions_completed_turns_bounded",
        ),
        Index("ix_sessions_user_created", "user_id", "created_at"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    user_id: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    target_language: Mapped[str] = mapped_column(String(16), nullable=False)
    difficulty_level: Mapped[str] = mapped_column(String(20), nullable=False)
    persona_id: Mapped[str | None] = mapped_column(String(255), nullable=True)
    started_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    ended_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    total_turns: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    completed_turns: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    overall_progress_json: Mapped[dict[str, Any] | None] = mapped_column(JSON, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utc_now, nullable=False
    )

    turns: Mapped[list["LearningTurn"]] = relationship(
        back_populates="session", cascade="all, delete-orphan", passive_deletes=True
    )

    def __repr__(self) -> str:
        """String representation of PracticeSession."""
        return f"<PracticeSession(id={self.id}, user_id='{self.user_id}')>"


class LearningTurn(Base):
    """One sentence-level exchange within a practice session."""

    __tablename__ = "learning_turns"
    __table_args__ = (
        UniqueConstraint("session_id", "turn_number", name="uq_learning_turns_session_number"),
        CheckConstraint("turn_number >= 1", name="ck_learning_turns_turn_number_positive"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    session_id: Mapped[int] = mapped_column(
        ForeignKey("sessions.id", ondelete="CASCADE"), nullable=False, index=True
    )
    turn_number: Mapped[int] = mapped_column(Integer, nullable=False)
    target_sentence: Mapped[str] = mapped_column(Text, nullable=False)
    sentence_meaning: Mapped[str | None] = mapped_column(Text, nullable=True)
    user_transcript: Mapped[str | None] = mapped_column(Text, nullable=True)
    pronunciation_feedback_json: Mapped[Any | None] = mapped_column(JSON, nullable=True)
    grammar_feedback_json: Mapped[Any | None] = mapped_column(JSON, nullable=True)
    turn_completed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utc_now, nullable=False
    )

    session: Mapped[PracticeSession] = relationship(back_populates="turns")

    def __repr__(self) -> str:
        """String representation of LearningTurn."""
        return f"<LearningTurn(id={self.id}, session_id={self.session_id}, n={self.turn_number})>"


class Badge(Base):
    """A badge awarded to a user; at most one row per (user, badge type)."""

    __tablename__ = "badges"
    __table_args__ = (UniqueConstraint("user_id", "badge_type", name="uq_badges_user_type"),)

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    user_id: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    badge_type: Mapped[str] = mapped_column(String(100), nullable=False)
    awarded_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utc_now, nullable=False
    )
    badge_data: Mapped[dict[str, Any] | None] = mapped_column(JSON, nullable=True)

    def __repr__(self) -> str:
        """String representation of Badge."""
        return f"<Badge(user_id='{self.user_id}', badge_type='{self.badge_type}')>"
