"""API routes for learner progress."""

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from chatterly.application.progress.use_cases.dtos import ProgressReport
from chatterly.application.progress.use_cases.progress_use_case import ProgressUseCase
from chatterly.core import container
from chatterly.domain.common.exceptions import DomainError
from chatterly.domain.common.rounding import round_half_up
from chatterly.exceptions import ChatterlyError
from chatterly.infrastructure.common.di import inject_use_case
from chatterly.infrastructure.common.identity import CurrentUserId
from chatterly.infrastructure.progress.schemas import (
    DetailedMetrics,
    LanguageStats,
    OverallStats,
    PerformanceMetrics,
    ProgressResponse,
    RecentActivity,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/progress", tags=["progress"])


def _one_decimal(value: float) -> float:
    return round_half_up(value, 1)


def to_progress_response(report: ProgressReport) -> ProgressResponse:
    metrics = report.metrics
    return ProgressResponse(
        overall_stats=OverallStats(
            total_sessions=metrics.session_stats.total_sessions,
            completed_sessions=metrics.session_stats.completed_sessions,
            current_streak=metrics.streak_info.current_streak,
            longest_streak=metrics.streak_info.longest_streak,
            total_learning_time=metrics.time_stats.total_learning_time_minutes,
            favorite_language=metrics.language_stats.favorite_language,
        ),
        performance_metrics=PerformanceMetrics(
            average_pronunciation_score=_one_decimal(metrics.average_pronunciation_score),
            average_grammar_score=_one_decimal(metrics.average_grammar_score),
            completion_rate=_one_decimal(metrics.completion_rate),
            improvement_trend=metrics.performance_trends.overall_trend,
            learning_velocity=_one_decimal(metrics.learning_velocity),
        ),
        recent_activity=RecentActivity(
            last_session_date=metrics.last_session_date,
            sessions_this_week=metrics.time_stats.sessions_this_week,
            sessions_this_month=metrics.time_stats.sessions_this_month,
            badges_earned_this_month=report.badges_earned_this_month,
        ),
        language_stats=LanguageStats(
            languages_practiced=list(metrics.language_stats.languages_practiced),
            sessions_by_language=dict(metrics.language_stats.sessions_by_language),
        ),
        detailed_metrics=DetailedMetrics(
            pronunciation_trend=metrics.performance_trends.pronunciation_trend,
            grammar_trend=metrics.performance_trends.grammar_trend,
            average_session_duration=_one_decimal(metrics.time_stats.average_session_duration),
            total_turns=metrics.session_stats.total_turns,
            completed_turns=metrics.session_stats.completed_turns,
        ),
    )


@router.get(
    "",
    response_model=ProgressResponse,
    status_code=status.HTTP_200_OK,
)
def get_progress(
    user_id: CurrentUserId,
    use_case: ProgressUseCase = Depends(inject_use_case(container.progress_use_case)),
) -> ProgressResponse:
    """
    Get the current user's learning progress.

    Served from a per-user cache while fresh. When the metrics
    cannot be computed an all-zero response is returned instead of an error.

    Args:
        user_id: Trusted id of the learner
        use_case: ProgressUseCase injected via dependency container

    Returns:
        Progress grouped into overall, performance, activity, language and
        detailed sections
    """
    try:
        return to_progress_response(use_case.get_progress(user_id))
    except (ChatterlyError, DomainError):
        raise
    except Exception as e:
        logger.error(f"Failed to get progress for user {user_id}: {e!s}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An unexpected error occurred. Please try again later.",
        ) from e
