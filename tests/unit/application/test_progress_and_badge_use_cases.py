"""Tests for the progress, badge and session progress use cases."""

from collections.abc import Callable
from datetime import timedelta
from typing import Any

import pytest

from chatterly.application.achievements.use_cases.badge_use_case import BadgeUseCase
from chatterly.application.practice.use_cases.dtos import TurnUpdate
from chatterly.application.practice.use_cases.learning_turn_use_case import LearningTurnUseCase
from chatterly.application.practice.use_cases.practice_session_use_case import (
    PracticeSessionUseCase,
)
from chatterly.application.practice.use_cases.session_progress_use_case import (
    SessionProgressUseCase,
)
from chatterly.application.progress.use_cases.progress_use_case import ProgressUseCase
from chatterly.domain.achievements.catalog import BadgeCatalog
from chatterly.domain.achievements.services import (
    BadgeProgressEvaluator,
    BadgeQualificationService,
)
from chatterly.domain.progress.metrics import ProgressMetrics
from chatterly.exceptions import SessionNotFoundError, StoreError
from chatterly.infrastructure.progress.progress_cache import ProgressCache

USER = "learner-1"


@pytest.fixture
def badges(
    session_repository: Any, turn_repository: Any, badge_repository: Any, clock: Any
) -> BadgeUseCase:
    catalog = BadgeCatalog()
    return BadgeUseCase(
        session_repository,
        turn_repository,
        badge_repository,
        BadgeProgressEvaluator(catalog),
        BadgeQualificationService(catalog),
        clock=clock,
    )


@pytest.fixture
def sessions(
    session_repository: Any,
    turn_repository: Any,
    badges: BadgeUseCase,
    progress_cache: ProgressCache,
    clock: Any,
) -> PracticeSessionUseCase:
    return PracticeSessionUseCase(
        session_repository, turn_repository, badges, progress_cache, clock=clock
    )


@pytest.fixture
def turns(
    session_repository: Any,
    turn_repository: Any,
    badges: BadgeUseCase,
    progress_cache: ProgressCache,
) -> LearningTurnUseCase:
    return LearningTurnUseCase(session_repository, turn_repository, badges, progress_cache)


@pytest.fixture
def progress(
    session_repository: Any,
    turn_repository: Any,
    badge_repository: Any,
    progress_cache: ProgressCache,
    clock: Any,
) -> ProgressUseCase:
    return ProgressUseCase(
        session_repository, turn_repository, badge_repository, progress_cache, clock=clock
    )


class TestBadgeAwarding:
    def test_first_session_awards_first_steps_once(
        self, sessions: PracticeSessionUseCase, badges: BadgeUseCase
    ) -> None:
        sessions.create_session(USER, "es", "beginner")

        assert badges.award_badges(USER) == []
        overview = badges.list_badges(USER)
        assert [view.badge.badge_type for view in overview.earned] == ["first_session"]
        assert overview.earned[0].badge.badge_data == {"session_count": 1}

    def test_high_score_feedback_awards_performance_badge(
        self,
        sessions: PracticeSessionUseCase,
        turns: LearningTurnUseCase,
        badges: BadgeUseCase,
    ) -> None:
        session_id = sessions.create_session(USER, "es", "beginner").id.value
        turn = turns.create_turn(session_id, USER, 1, "Hola")

        turns.update_turn(
            session_id,
            turn.id.value,
            USER,
            TurnUpdate(pronunciation_feedback={"overall_score": 93}),
        )

        earned = {view.badge.badge_type for view in badges.list_badges(USER).earned}
        assert earned == {"first_session", "perfect_pronunciation"}

    def test_progress_empty_when_sessions_unreadable(
        self, badges: BadgeUseCase, session_repository: Any
    ) -> None:
        def broken(*args: Any) -> int:
            raise StoreError("count_sessions")

        session_repository.count_by_user = broken

        overview = badges.list_badges(USER)

        assert overview.progress == []
        assert len(overview.available) == 20

    def test_recent_badge_types(
        self, sessions: PracticeSessionUseCase, badges: BadgeUseCase, clock: Any
    ) -> None:
        sessions.create_session(USER, "es", "beginner")

        assert badges.recent_badge_types(USER, clock.now - timedelta(minutes=5)) == [
            "first_session"
        ]
        assert badges.recent_badge_types(USER, clock.now + timedelta(days=1)) == []


class TestProgressUseCase:
    def test_progress_is_cached_until_invalidated(
        self,
        progress: ProgressUseCase,
        session_repository: Any,
        sessions: PracticeSessionUseCase,
    ) -> None:
        sessions.create_session(USER, "es", "beginner")
        assert progress.get_progress(USER).metrics.session_stats.total_sessions == 1

        # Written behind the use cases' back: the cached snapshot is still served
        session_repository.rows[2] = session_repository.rows[1]
        assert progress.get_progress(USER).metrics.session_stats.total_sessions == 1

        progress.invalidate_progress_cache(USER)
        assert progress.get_progress(USER).metrics.session_stats.total_sessions == 2

    def test_cache_hit_reads_nothing_from_the_store(
        self,
        progress: ProgressUseCase,
        sessions: PracticeSessionUseCase,
        session_repository: Any,
        turn_repository: Any,
        badge_repository: Any,
    ) -> None:
        sessions.create_session(USER, "es", "beginner")
        calls: list[str] = []

        def recording(name: str, method: Callable[..., Any]) -> Callable[..., Any]:
            def wrapper(*args: Any) -> Any:
                calls.append(name)
                return method(*args)

            return wrapper

        for repository, name in [
            (session_repository, "find_all_by_user"),
            (turn_repository, "find_by_sessions"),
            (badge_repository, "count_awarded_since"),
        ]:
            setattr(repository, name, recording(name, getattr(repository, name)))

        first = progress.get_progress(USER)
        assert calls == ["find_all_by_user", "find_by_sessions", "count_awarded_since"]

        calls.clear()
        second = progress.get_progress(USER)

        assert calls == []
        assert second == first
        assert second.badges_earned_this_month == 1

    def test_failure_returns_uncached_fallback(
        self,
        progress: ProgressUseCase,
        session_repository: Any,
        progress_cache: ProgressCache,
    ) -> None:
        def broken(*args: Any) -> list[Any]:
            raise StoreError("fetch_sessions")

        session_repository.find_all_by_user = broken

        report = progress.get_progress(USER)

        assert report.is_fallback is True
        assert report.metrics == ProgressMetrics.empty()
        assert report.badges_earned_this_month == 0
        assert USER not in progress_cache

    def test_badge_count_failure_keeps_metrics(
        self,
        progress: ProgressUseCase,
        sessions: PracticeSessionUseCase,
        badge_repository: Any,
    ) -> None:
        sessions.create_session(USER, "es", "beginner")
        assert progress.get_progress(USER).badges_earned_this_month == 1

        badge_repository.fail_reads = True
        progress.invalidate_progress_cache(USER)
        report = progress.get_progress(USER)

        assert report.is_fallback is False
        assert report.metrics.session_stats.total_sessions == 1
        assert report.badges_earned_this_month == 0


class TestSessionProgressUseCase:
    def test_refresh_merges_details_into_summary(
        self,
        session_repository: Any,
        turn_repository: Any,
        badges: BadgeUseCase,
        sessions: PracticeSessionUseCase,
        turns: LearningTurnUseCase,
        progress_cache: ProgressCache,
        clock: Any,
    ) -> None:
        session_id = sessions.create_session(USER, "es", "beginner").id.value
        turn = turns.create_turn(session_id, USER, 1, "Hola")
        turns.update_turn(
            session_id,
            turn.id.value,
            USER,
            TurnUpdate(
                completed=True,
                pronunciation_feedback={"overall_score": 80},
                grammar_feedback={"overall_score": 70},
            ),
        )
        sessions.complete_session(session_id, USER)
        use_case = SessionProgressUseCase(
            session_repository, turn_repository, badges, progress_cache, clock=clock
        )

        session = use_case.refresh_session_progress(session_id, USER)

        snapshot = session.overall_progress
        assert snapshot is not None
        assert snapshot["completion_rate"] == 100
        assert snapshot["session_metrics"]["turns_completed"] == 1
        assert snapshot["session_metrics"]["turns_total"] == 1
        assert snapshot["performance_scores"] == {
            "pronunciation_scores": [80.0],
            "grammar_scores": [70.0],
            "overall_average": 75.0,
        }
        assert "first_session" in snapshot["badge_progress"]["badges_earned_this_session"]
        progress_ids = {p["badge_id"] for p in snapshot["badge_progress"]["progress_toward_next"]}
        assert "first_session" not in progress_ids
        assert "getting_started" in progress_ids

    def test_unknown_session(
        self,
        session_repository: Any,
        turn_repository: Any,
        badges: BadgeUseCase,
        progress_cache: ProgressCache,
    ) -> None:
        use_case = SessionProgressUseCase(
            session_repository, turn_repository, badges, progress_cache
        )

        with pytest.raises(SessionNotFoundError):
            use_case.refresh_session_progress(99, USER)
