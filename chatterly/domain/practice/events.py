"""Domain events raised by practice sessions."""

from dataclasses import dataclass

from chatterly.domain.common.domain_event import DomainEvent
from chatterly.domain.common.value_objects import SessionId, UserId


@dataclass(frozen=True, kw_only=True)
class PracticeSessionCompleted(DomainEvent):
    """A practice session reached its terminal state."""

    session_id: SessionId
    user_id: UserId
    completed_turns: int
    total_turns: int
