"""
Domain building blocks

Plain dataclasses with no Django imports:
- Entity: identity plus audit timestamps
- ValueObject: immutable, compared by value
- Aggregate: entity that records domain events until the unit of work
  pulls them
- DomainEvent: immutable fact about an aggregate
"""

from abc import ABC
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import List
from uuid import UUID, uuid4


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(kw_only=True)
class Entity(ABC):
    """Identity-bearing object; equal when ids are equal."""
    id: UUID = field(default_factory=uuid4)
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)

    def touch(self) -> None:
        self.updated_at = utcnow()

    def __eq__(self, other):
        return isinstance(other, self.__class__) and self.id == other.id

    def __hash__(self):
        return hash(self.id)


@dataclass(frozen=True)
class ValueObject(ABC):
    """Immutable; two instances with the same fields are interchangeable."""


@dataclass(kw_only=True, eq=False)
class Aggregate(Entity):
    """
    Consistency boundary

    Mutating methods record events with add_event(); nothing is published
    until a unit of work pulls them and its transaction commits.
    """
    _events: List['DomainEvent'] = field(default_factory=list, repr=False, init=False)

    def add_event(self, event: 'DomainEvent') -> None:
        self._events.append(event)

    def pull_events(self) -> List['DomainEvent']:
        """Return recorded events and forget them."""
        pulled, self._events = self._events, []
        return pulled

    def clear_events(self) -> None:
        self._events.clear()

    @property
    def events(self) -> List['DomainEvent']:
        return list(self._events)


@dataclass(kw_only=True)
class DomainEvent:
    """Something that happened to an aggregate, stamped when it happened."""
    event_id: UUID = field(default_factory=uuid4)
    occurred_at: datetime = field(default_factory=utcnow)
    aggregate_id: UUID | None = None

    @property
    def event_type(self) -> str:
        return type(self).__name__

    def to_dict(self) -> dict:
        """Flat, JSON-friendly form used for logging."""
        return {
            'event_id': str(self.event_id),
            'event_type': self.event_type,
            'occurred_at': self.occurred_at.isoformat(),
            'aggregate_id': str(self.aggregate_id) if self.aggregate_id else None,
        }
