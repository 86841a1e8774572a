"""In-memory collaborators for application use case tests."""

from collections.abc import Iterable
from dataclasses import replace
from datetime import UTC, datetime, timedelta

import pytest

from chatterly.domain.achievements.entities import EarnedBadge
from chatterly.domain.common.exceptions import InvalidStateError, ValidationError
from chatterly.domain.common.value_objects import EarnedBadgeId, SessionId, TurnId, UserId
from chatterly.domain.practice.entities import LearningTurn, PracticeSession, SessionStatus
from chatterly.exceptions import SessionNotFoundError, StoreError, TurnNotFoundError
from chatterly.infrastructure.progress.progress_cache import ProgressCache

START = datetime(2025, 8, 4, 9, 0, tzinfo=UTC)


class SteppingClock:
    """Returns START, then one minute later on every call."""

    def __init__(self) -> None:
        self.now = START

    def __call__(self) -> datetime:
        current = self.now
        self.now += timedelta(minutes=1)
        return current


class InMemorySessionRepository:
    def __init__(self) -> None:
        self.rows: dict[int, PracticeSession] = {}
        self.fail_adjust = False

    def add(self, session: PracticeSession) -> PracticeSession:
        saved = replace(session, id=SessionId(len(self.rows) + 1))
        self.rows[saved.id.value] = saved
        return replace(saved)

    def find_by_id(self, session_id: SessionId, user_id: UserId) -> PracticeSession | None:
        row = self.rows.get(session_id.value)
        return replace(row) if row and row.user_id == user_id else None

    def find_all_by_user(self, user_id: UserId) -> list[PracticeSession]:
        return [replace(s) for s in self.rows.values() if s.user_id == user_id]

    def list_by_user(
        self,
        user_id: UserId,
        status: SessionStatus | None = None,
        limit: int = 10,
        offset: int = 0,
    ) -> list[PracticeSession]:
        rows = [s for s in reversed(self.rows.values()) if s.user_id == user_id]
        if status is not None:
            rows = [s for s in rows if s.status == status]
        return rows[offset : offset + limit]

    def count_by_user(self, user_id: UserId) -> int:
        return len(self.find_all_by_user(user_id))

    def complete(self, session: PracticeSession) -> PracticeSession:
        row = self.rows.get(session.id.value)
        if row is None:
            raise SessionNotFoundError(session.id.value)
        if row.ended_at is not None:
            raise InvalidStateError(
                "Session has already been completed", current_state="completed", action="complete"
            )
        row.ended_at = session.ended_at
        row.completed_turns = session.completed_turns
        row.overall_progress = session.overall_progress
        return replace(row)

    def save(self, session: PracticeSession) -> PracticeSession:
        row = self.rows.get(session.id.value)
        if row is None:
            raise SessionNotFoundError(session.id.value)
        row.overall_progress = session.overall_progress
        return replace(row)

    def raise_total_turns(self, session_id: SessionId, turn_number: int) -> int:
        row = self.rows[session_id.value]
        row.total_turns = max(row.total_turns, turn_number)
        return row.total_turns

    def adjust_completed_turns(self, session_id: SessionId, delta: int) -> None:
        if self.fail_adjust:
            raise StoreError("adjust_completed_turns", "connection lost")
        row = self.rows[session_id.value]
        row.completed_turns = min(max(row.completed_turns + delta, 0), row.total_turns)


class InMemoryTurnRepository:
    def __init__(self) -> None:
        self.rows: dict[int, LearningTurn] = {}

    def add(self, turn: LearningTurn) -> LearningTurn:
        if self.turn_number_exists(turn.session_id, turn.turn_number):
            raise ValidationError("Turn number already exists", field="turn_number")
        saved = replace(turn, id=TurnId(len(self.rows) + 1), created_at=START)
        self.rows[saved.id.value] = saved
        return replace(saved)

    def find_by_id(self, turn_id: TurnId, session_id: SessionId) -> LearningTurn | None:
        row = self.rows.get(turn_id.value)
        return replace(row) if row and row.session_id == session_id else None

    def find_by_session(self, session_id: SessionId) -> list[LearningTurn]:
        turns = [replace(t) for t in self.rows.values() if t.session_id == session_id]
        return sorted(turns, key=lambda t: t.turn_number)

    def find_by_sessions(self, session_ids: Iterable[SessionId]) -> list[LearningTurn]:
        wanted = set(session_ids)
        return [replace(t) for t in self.rows.values() if t.session_id in wanted]

    def turn_number_exists(self, session_id: SessionId, turn_number: int) -> bool:
        return any(
            t.session_id == session_id and t.turn_number == turn_number
            for t in self.rows.values()
        )

    def save(self, turn: LearningTurn) -> LearningTurn:
        if turn.id.value not in self.rows:
            raise TurnNotFoundError(turn.id.value, turn.session_id.value)
        self.rows[turn.id.value] = replace(turn)
        return replace(turn)


class InMemoryBadgeRepository:
    def __init__(self) -> None:
        self.rows: list[EarnedBadge] = []
        self.fail_reads = False

    def _check(self) -> None:
        if self.fail_reads:
            raise StoreError("fetch_badges", "connection lost")

    def find_by_user(self, user_id: UserId) -> list[EarnedBadge]:
        self._check()
        return [b for b in reversed(self.rows) if b.user_id == user_id]

    def find_badge_types(self, user_id: UserId) -> set[str]:
        return {b.badge_type for b in self.find_by_user(user_id)}

    def add_if_absent(self, badge: EarnedBadge) -> EarnedBadge | None:
        if badge.badge_type in self.find_badge_types(badge.user_id):
            return None
        saved = replace(badge, id=EarnedBadgeId(len(self.rows) + 1))
        self.rows.append(saved)
        return saved

    def find_awarded_since(self, user_id: UserId, since: datetime) -> list[EarnedBadge]:
        return [
            b
            for b in self.find_by_user(user_id)
            if b.awarded_at is not None and b.awarded_at >= since
        ]

    def count_awarded_since(self, user_id: UserId, since: datetime) -> int:
        return len(self.find_awarded_since(user_id, since))


class RecordingBadgeAwarder:
    def __init__(self, error: Exception | None = None) -> None:
        self.calls: list[str] = []
        self.error = error

    def award_badges(self, user_id: str) -> list[EarnedBadge]:
        self.calls.append(user_id)
        if self.error is not None:
            raise self.error
        return []


@pytest.fixture
def clock() -> SteppingClock:
    return SteppingClock()


@pytest.fixture
def session_repository() -> InMemorySessionRepository:
    return InMemorySessionRepository()


@pytest.fixture
def turn_repository() -> InMemoryTurnRepository:
    return InMemoryTurnRepository()


@pytest.fixture
def badge_repository() -> InMemoryBadgeRepository:
    return InMemoryBadgeRepository()


@pytest.fixture
def badge_awarder() -> RecordingBadgeAwarder:
    return RecordingBadgeAwarder()


@pytest.fixture
def failing_badge_awarder() -> RecordingBadgeAwarder:
    return RecordingBadgeAwarder(error=RuntimeError("badge store unavailable"))


@pytest.fixture
def progress_cache() -> ProgressCache:
    return ProgressCache()
