from typing import Protocol

from chatterly.domain.common.value_objects import SessionId, UserId
from chatterly.domain.practice.entities import PracticeSession, SessionStatus


class SessionRepositoryProtocol(Protocol):
    def add(self, session: PracticeSession) -> PracticeSession: ...

    def find_by_id(self, session_id: SessionId, user_id: UserId) -> PracticeSession | None: ...

    def find_all_by_user(self, user_id: UserId) -> list[PracticeSession]:
        """All sessions of the user in creation order."""
        ...

    def list_by_user(
        self,
        user_id: UserId,
        status: SessionStatus | None = None,
        limit: int = 10,
        offset: int = 0,
    ) -> list[PracticeSession]:
        """A page of sessions, newest first."""
        ...

    def count_by_user(self, user_id: UserId) -> int: ...

    def complete(self, session: PracticeSession) -> PracticeSession:
        """Store a completion unless the row is already completed (InvalidStateError)."""
        ...

    def save(self, session: PracticeSession) -> PracticeSession:
        """Store the progress snapshot of an existing session."""
        ...

    def raise_total_turns(self, session_id: SessionId, turn_number: int) -> int:
        """Atomically set total_turns to max(total_turns, turn_number); returns the new value."""
        ...

    def adjust_completed_turns(self, session_id: SessionId, delta: int) -> None:
        """Atomically add delta to completed_turns, kept within [0, total_turns]."""
        ...
