"""
Base class for Aggregate Roots.

An aggregate root guards the invariants of its cluster and records domain
events that the application layer dispatches once the aggregate is saved.

Example:
    @dataclass
    class PracticeSession(AggregateRoot[SessionId]):
        def complete(self, now: datetime) -> None:
            self.ended_at = now
            self._record_event(PracticeSessionCompleted(...))
"""

from dataclasses import dataclass, field
from typing import Generic

from .domain_event import DomainEvent
from .entity import Entity, IdType


@dataclass
class AggregateRoot(Entity[IdType], Generic[IdType]):
    """Base class for Aggregate Roots in the domain model."""

    _events: list[DomainEvent] = field(
        default_factory=list, repr=False, compare=False, kw_only=True
    )

    def _record_event(self, event: DomainEvent) -> None:
        """Record a domain event to be dispatched after persistence."""
        self._events.append(event)

    def collect_events(self) -> list[DomainEvent]:
        """
        Collect and clear all recorded domain events.

        Called by use cases after the aggregate has been saved.
        """
        events = self._events.copy()
        self._events.clear()
        return events

