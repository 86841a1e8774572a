"""Pydantic schemas for the progress API response."""

from datetime import datetime

from pydantic import BaseModel, Field

from chatterly.domain.progress.metrics import Trend


class OverallStats(BaseModel):
    total_sessions: int = 0
    completed_sessions: int = 0
    current_streak: int = 0
    longest_streak: int = 0
    total_learning_time: int = Field(0, description="Minutes spent in completed sessions")
    favorite_language: str | None = None


class PerformanceMetrics(BaseModel):
    average_pronunciation_score: float = 0.0
    average_grammar_score: float = 0.0
    completion_rate: float = Field(0.0, description="Completed sessions as a percentage")
    improvement_trend: Trend = "stable"
    learning_velocity: float = Field(0.0, description="Completed sessions per week")


class RecentActivity(BaseModel):
    last_session_date: datetime | None = None
    sessions_this_week: int = 0
    sessions_this_month: int = 0
    badges_earned_this_month: int = 0


class LanguageStats(BaseModel):
    languages_practiced: list[str] = Field(default_factory=list)
    sessions_by_language: dict[str, int] = Field(default_factory=dict)


class DetailedMetrics(BaseModel):
    pronunciation_trend: Trend = "stable"
    grammar_trend: Trend = "stable"
    average_session_duration: float = 0.0
    total_turns: int = 0
    completed_turns: int = 0


class ProgressResponse(BaseModel):
    """
    Schema for the learner progress response.

    Averages, rates and velocity are rounded to one decimal place.
    """

    overall_stats: OverallStats
    performance_metrics: PerformanceMetrics
    recent_activity: RecentActivity
    language_stats: LanguageStats
    detailed_metrics: DetailedMetrics
