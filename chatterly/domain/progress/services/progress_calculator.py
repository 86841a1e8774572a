"""
Aggregate metrics builder.

Turns a user's raw session and turn rows into one ProgressMetrics snapshot.
Pure: the same rows and ``now`` always produce an identical snapshot.
"""

from collections.abc import Sequence
from datetime import datetime, timedelta
from typing import TYPE_CHECKING

from chatterly.domain.progress.metrics import (
    LanguageStats,
    PerformanceTrends,
    ProgressMetrics,
    SessionStats,
    TimeStats,
)
from chatterly.domain.progress.services.score_extractor import extract_scores
from chatterly.domain.progress.services.streak_calculator import (
    SECONDS_PER_DAY,
    calculate_streak,
)
from chatterly.domain.progress.services.trend_analyzer import (
    calculate_trend,
    determine_overall_trend,
)

if TYPE_CHECKING:
    from chatterly.domain.practice.entities.learning_turn import LearningTurn
    from chatterly.domain.practice.entities.practice_session import PracticeSession

DAYS_PER_WEEK = 7
WEEK_WINDOW = timedelta(days=7)
MONTH_WINDOW = timedelta(days=30)


def calculate_learning_velocity(sessions: Sequence["PracticeSession"]) -> float:
    """Completed sessions per week between the first and last completion (at least one week)."""
    ended = [s.ended_at for s in sessions if s.ended_at is not None]
    if not ended:
        return 0.0
    elapsed_weeks = (max(ended) - min(ended)).total_seconds() / (SECONDS_PER_DAY * DAYS_PER_WEEK)
    return len(ended) / max(1.0, elapsed_weeks)


def calculate_language_stats(sessions: Sequence["PracticeSession"]) -> LanguageStats:
    """
    Count sessions per target language.

    The favorite language is the one with the most sessions; on a tie the
    language first practiced later wins.
    """
    by_language: dict[str, int] = {}
    for session in sessions:
        if session.target_language:
            by_language[session.target_language] = by_language.get(session.target_language, 0) + 1

    favorite: str | None = None
    favorite_count = 0
    for language, count in by_language.items():
        if favorite is None or count >= favorite_count:
            favorite, favorite_count = language, count

    return LanguageStats(
        languages_practiced=tuple(by_language),
        favorite_language=favorite,
        sessions_by_language=by_language,
    )


def calculate_time_stats(sessions: Sequence["PracticeSession"], now: datetime) -> TimeStats:
    week_ago = now - WEEK_WINDOW
    month_ago = now - MONTH_WINDOW

    total_minutes = 0
    timed_sessions = 0
    this_week = 0
    this_month = 0

    for session in sessions:
        if session.ended_at is None:
            continue
        if session.ended_at >= week_ago:
            this_week += 1
        if session.ended_at >= month_ago:
            this_month += 1
        if session.started_at is not None:
            total_minutes += session.duration_minutes
            timed_sessions += 1

    return TimeStats(
        total_learning_time_minutes=total_minutes,
        average_session_duration=total_minutes / timed_sessions if timed_sessions else 0.0,
        sessions_this_week=this_week,
        sessions_this_month=this_month,
    )


def build_progress_metrics(
    sessions: Sequence["PracticeSession"],
    turns: Sequence["LearningTurn"],
    now: datetime,
) -> ProgressMetrics:
    """
    Build the progress snapshot for one user.

    Args:
        sessions: All of the user's sessions, in creation order
        turns: All turns of those sessions, in chronological order
        now: Reference time for the weekly and monthly windows

    Returns:
        ProgressMetrics with unrounded values
    """
    total_sessions = len(sessions)
    completed_sessions = sum(1 for s in sessions if s.ended_at is not None)

    scores = extract_scores(turns)
    pronunciation_trend = calculate_trend(scores.pronunciation)
    grammar_trend = calculate_trend(scores.grammar)

    ended = [s.ended_at for s in sessions if s.ended_at is not None]

    return ProgressMetrics(
        completion_rate=(completed_sessions / total_sessions) * 100 if total_sessions else 0.0,
        average_pronunciation_score=scores.average_pronunciation,
        average_grammar_score=scores.average_grammar,
        learning_velocity=calculate_learning_velocity(sessions),
        streak_info=calculate_streak(sessions),
        session_stats=SessionStats(
            total_sessions=total_sessions,
            completed_sessions=completed_sessions,
            total_turns=len(turns),
            completed_turns=sum(1 for t in turns if t.completed),
        ),
        performance_trends=PerformanceTrends(
            pronunciation_trend=pronunciation_trend,
            grammar_trend=grammar_trend,
            overall_trend=determine_overall_trend(pronunciation_trend, grammar_trend, sessions),
        ),
        language_stats=calculate_language_stats(sessions),
        time_stats=calculate_time_stats(sessions, now),
        last_session_date=max(ended) if ended else None,
    )
