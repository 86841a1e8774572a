"""
ProgressMetrics snapshot and its nested sections.

All values are raw (unrounded); rounding for display happens at the HTTP
boundary.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from types import MappingProxyType
from typing import Literal

Trend = Literal["improving", "stable", "declining"]


@dataclass(frozen=True)
class StreakInfo:
    current_streak: int = 0
    longest_streak: int = 0
    streak_start_date: datetime | None = None


@dataclass(frozen=True)
class SessionStats:
    total_sessions: int = 0
    completed_sessions: int = 0
    total_turns: int = 0
    completed_turns: int = 0


@dataclass(frozen=True)
class PerformanceTrends:
    pronunciation_trend: Trend = "stable"
    grammar_trend: Trend = "stable"
    overall_trend: Trend = "stable"


@dataclass(frozen=True)
class LanguageStats:
    languages_practiced: tuple[str, ...] = ()
    favorite_language: str | None = None
    sessions_by_language: Mapping[str, int] = field(default_factory=lambda: MappingProxyType({}))

    def __post_init__(self) -> None:
        # Read-only copy, detached from the caller's dict
        object.__setattr__(
            self, "sessions_by_language", MappingProxyType(dict(self.sessions_by_language))
        )


@dataclass(frozen=True)
class TimeStats:
    total_learning_time_minutes: int = 0
    average_session_duration: float = 0.0
    sessions_this_week: int = 0
    sessions_this_month: int = 0


@dataclass(frozen=True)
class ProgressMetrics:
    """Immutable per-user progress snapshot, recomputable from session and turn rows."""

    completion_rate: float = 0.0
    average_pronunciation_score: float = 0.0
    average_grammar_score: float = 0.0
    learning_velocity: float = 0.0
    streak_info: StreakInfo = field(default_factory=StreakInfo)
    session_stats: SessionStats = field(default_factory=SessionStats)
    performance_trends: PerformanceTrends = field(default_factory=PerformanceTrends)
    language_stats: LanguageStats = field(default_factory=LanguageStats)
    time_stats: TimeStats = field(default_factory=TimeStats)
    last_session_date: datetime | None = None

    @classmethod
    def empty(cls) -> "ProgressMetrics":
        """All-zero snapshot served when metrics cannot be computed."""
        return cls()
