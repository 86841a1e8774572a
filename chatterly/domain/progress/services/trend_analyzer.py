"""Classify score series as improving, stable or declining."""

from collections.abc import Sequence
from typing import TYPE_CHECKING

from chatterly.domain.progress.metrics import Trend

if TYPE_CHECKING:
    from chatterly.domain.practice.entities.practice_session import PracticeSession

TREND_THRESHOLD = 2
MIN_TREND_POINTS = 4
RECENT_SESSION_WINDOW = 5
RECENT_COMPLETION_CUTOFF = 0.8


def calculate_trend(scores: Sequence[float]) -> Trend:
    """
    Compare the mean of the second half of a series against the first half.

    Args:
        scores: Chronological scores

    Returns:
        "improving" if the second half is more than TREND_THRESHOLD higher,
        "declining" if more than TREND_THRESHOLD lower, otherwise "stable".
        Series shorter than MIN_TREND_POINTS are always "stable".
    """
    if len(scores) < MIN_TREND_POINTS:
        return "stable"

    midpoint = len(scores) // 2
    first_half = scores[:midpoint]
    second_half = scores[midpoint:]
    difference = sum(second_half) / len(second_half) - sum(first_half) / len(first_half)

    if difference > TREND_THRESHOLD:
        return "improving"
    if difference < -TREND_THRESHOLD:
        return "declining"
    return "stable"


def determine_overall_trend(
    pronunciation_trend: Trend,
    grammar_trend: Trend,
    sessions: Sequence["PracticeSession"],
) -> Trend:
    """
    Combine the per-skill trends, weighting recent session completion.

    Sessions must be in creation order; the last RECENT_SESSION_WINDOW are
    considered recent.
    """
    either_improving = "improving" in (pronunciation_trend, grammar_trend)
    both_declining = pronunciation_trend == grammar_trend == "declining"

    if len(sessions) >= RECENT_SESSION_WINDOW:
        recent = sessions[-RECENT_SESSION_WINDOW:]
        recent_completion = sum(1 for s in recent if s.ended_at is not None) / len(recent)
        if recent_completion > RECENT_COMPLETION_CUTOFF and either_improving:
            return "improving"
        if both_declining:
            return "declining"

    if either_improving:
        return "improving"
    if both_declining:
        return "declining"
    return "stable"
