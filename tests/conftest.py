"""Pytest configuration and fixtures."""

import os
from collections.abc import Callable, Generator
from datetime import UTC, datetime
from typing import Any

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["ENVIRONMENT"] = "test"

import pytest  # noqa: E402
from dependency_injector import providers  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import Session, sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from chatterly import models  # noqa: E402
from chatterly.core import container  # noqa: E402
from chatterly.database import Base, get_session_factory  # noqa: E402
from chatterly.infrastructure.progress.progress_cache import ProgressCache  # noqa: E402
from chatterly.main import app  # noqa: E402

TEST_USER_ID = "user-123"
OTHER_USER_ID = "user-456"

# A single in-memory database shared by the test thread and the app thread
test_engine = create_engine(
    "sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool
)

TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)


class FakeClock:
    """Monotonic clock that only moves when told to."""

    def __init__(self, start: float = 1_000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def db_session() -> Generator[Session, None, None]:
    """Create a fresh database for each test."""
    Base.metadata.create_all(bind=test_engine)

    session = TestSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=test_engine)


@pytest.fixture
def cache_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def progress_cache(cache_clock: FakeClock) -> Generator[ProgressCache, None, None]:
    """Replace the process-wide progress cache with a fresh one on a fake clock."""
    cache = ProgressCache(ttl_seconds=300, max_entries=1000, clock=cache_clock)
    container.progress_cache.override(providers.Object(cache))
    try:
        yield cache
    finally:
        container.progress_cache.reset_override()


@pytest.fixture
def client(
    db_session: Session, progress_cache: ProgressCache
) -> Generator[TestClient, Any, None]:
    """Create a test client acting as TEST_USER_ID."""
    app.dependency_overrides[get_session_factory] = lambda: TestSessionLocal

    with TestClient(app, headers={"X-User-Id": TEST_USER_ID}) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def make_session(db_session: Session) -> Callable[..., models.PracticeSession]:
    """Insert a session row directly, bypassing the API."""

    def _make(
        user_id: str = TEST_USER_ID,
        target_language: str = "es",
        difficulty_level: str = "beginner",
        started_at: datetime | None = None,
        ended_at: datetime | None = None,
        total_turns: int = 0,
        completed_turns: int = 0,
    ) -> models.PracticeSession:
        started = started_at or datetime.now(UTC)
        session = models.PracticeSession(
            user_id=user_id,
            target_language=target_language,
            difficulty_level=difficulty_level,
            started_at=started,
            ended_at=ended_at,
            total_turns=total_turns,
            completed_turns=completed_turns,
            created_at=started,
        )
        db_session.add(session)
        db_session.commit()
        db_session.refresh(session)
        return session

    return _make
