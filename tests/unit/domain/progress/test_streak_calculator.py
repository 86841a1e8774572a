"""Tests for streak calculation."""

from datetime import UTC, datetime, timedelta

from chatterly.domain.common.value_objects import SessionId, UserId
from chatterly.domain.practice.entities import PracticeSession
from chatterly.domain.progress.services.streak_calculator import (
    calculate_streak,
    longest_calendar_streak,
)

DAY_ONE = datetime(2025, 6, 1, 18, 0, tzinfo=UTC)


def _ended(*days: float) -> list[PracticeSession]:
    """Sessions completed the given number of days after DAY_ONE."""
    return [
        PracticeSession(
            id=SessionId(i + 1),
            user_id=UserId("user-1"),
            target_language="it",
            difficulty_level="beginner",
            started_at=DAY_ONE + timedelta(days=day) - timedelta(minutes=20),
            ended_at=DAY_ONE + timedelta(days=day),
        )
        for i, day in enumerate(days)
    ]


class TestCalculateStreak:
    def test_no_completed_sessions(self) -> None:
        open_session = _ended(0)[0]
        open_session.ended_at = None

        streak = calculate_streak([open_session])

        assert streak.current_streak == 0
        assert streak.longest_streak == 0
        assert streak.streak_start_date is None

    def test_three_consecutive_days(self) -> None:
        streak = calculate_streak(_ended(0, 1, 2))

        assert streak.current_streak == 3
        assert streak.longest_streak == 3
        assert streak.streak_start_date == DAY_ONE

    def test_gap_resets_current_streak(self) -> None:
        streak = calculate_streak(_ended(0, 1, 2, 6))

        assert streak.current_streak == 1
        assert streak.longest_streak == 3
        assert streak.streak_start_date == DAY_ONE + timedelta(days=6)

    def test_order_of_input_does_not_matter(self) -> None:
        assert calculate_streak(_ended(2, 0, 1)) == calculate_streak(_ended(0, 1, 2))

    def test_same_day_sessions_extend_the_run(self) -> None:
        streak = calculate_streak(_ended(0, 0.1, 0.2))
        assert streak.current_streak == 3

    def test_just_under_two_days_apart_is_consecutive(self) -> None:
        streak = calculate_streak(_ended(0, 1.99))
        assert streak.current_streak == 2

    def test_current_streak_after_older_longer_run(self) -> None:
        streak = calculate_streak(_ended(0, 1, 2, 3, 10, 11))

        assert streak.current_streak == 2
        assert streak.longest_streak == 4


class TestLongestCalendarStreak:
    def test_empty(self) -> None:
        assert longest_calendar_streak([]) == 0

    def test_counts_distinct_consecutive_days(self) -> None:
        timestamps = [
            DAY_ONE,
            DAY_ONE + timedelta(hours=1),
            DAY_ONE + timedelta(days=1),
            DAY_ONE + timedelta(days=2),
            DAY_ONE + timedelta(days=5),
        ]
        assert longest_calendar_streak(timestamps) == 3
