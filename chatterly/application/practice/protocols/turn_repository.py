from collections.abc import Sequence
from typing import Protocol

from chatterly.domain.common.value_objects import SessionId, TurnId
from chatterly.domain.practice.entities import LearningTurn


class TurnRepositoryProtocol(Protocol):
    def add(self, turn: LearningTurn) -> LearningTurn: ...

    def find_by_id(self, turn_id: TurnId, session_id: SessionId) -> LearningTurn | None: ...

    def find_by_session(self, session_id: SessionId) -> list[LearningTurn]:
        """Turns of one session ordered by turn number."""
        ...

    def find_by_sessions(self, session_ids: Sequence[SessionId]) -> list[LearningTurn]:
        """Turns of several sessions in chronological order."""
        ...

    def turn_number_exists(self, session_id: SessionId, turn_number: int) -> bool: ...

    def save(self, turn: LearningTurn) -> LearningTurn: ...
