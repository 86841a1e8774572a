"""Practice streaks derived from session timestamps."""

import math
from collections.abc import Iterable
from datetime import date, datetime, timedelta
from typing import TYPE_CHECKING

from chatterly.domain.progress.metrics import StreakInfo

if TYPE_CHECKING:
    from chatterly.domain.practice.entities.practice_session import PracticeSession

SECONDS_PER_DAY = 86400


def calculate_streak(sessions: Iterable["PracticeSession"]) -> StreakInfo:
    """
    Compute current and longest streaks from completed sessions.

    Two completed sessions are consecutive when their ended_at values are
    at most one whole day apart (floor of the difference in days), so
    several sessions on the same day extend a streak.

    Returns:
        StreakInfo where current_streak is the run ending at the most recent
        completed session and streak_start_date is that run's earliest
        ended_at. No completed sessions gives zeros and no start date.
    """
    ended = sorted(s.ended_at for s in sessions if s.ended_at is not None)
    if not ended:
        return StreakInfo()

    run = 1
    longest = 1
    current: int | None = None
    streak_start = ended[-1]

    for i in range(len(ended) - 2, -1, -1):
        gap_days = math.floor((ended[i + 1] - ended[i]).total_seconds() / SECONDS_PER_DAY)
        if gap_days <= 1:
            run += 1
            if current is None:
                streak_start = ended[i]
        else:
            if current is None:
                current = run
            run = 1
        longest = max(longest, run)

    return StreakInfo(
        current_streak=run if current is None else current,
        longest_streak=longest,
        streak_start_date=streak_start,
    )


def longest_calendar_streak(timestamps: Iterable[datetime]) -> int:
    """Longest run of consecutive calendar days containing at least one timestamp."""
    days: list[date] = sorted({ts.date() for ts in timestamps})
    if not days:
        return 0

    longest = run = 1
    for previous, current in zip(days, days[1:], strict=False):
        run = run + 1 if current - previous == timedelta(days=1) else 1
        longest = max(longest, run)
    return longest
