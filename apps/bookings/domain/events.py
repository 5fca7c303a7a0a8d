"""
Booking Domain Events

Events that represent things that have happened to a booking.
They are published after successful transaction commits.
"""

from dataclasses import dataclass, fields
from datetime import date
from decimal import Decimal
from enum import Enum
from uuid import UUID

from shared.domain.base import DomainEvent

_BASE_FIELDS = {"event_id", "occurred_at", "aggregate_id"}


def _plain(value):
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (UUID, Decimal)):
        return str(value)
    if isinstance(value, date):
        return value.isoformat()
    return value


@dataclass(kw_only=True)
class BookingEvent(DomainEvent):
    """Base class for everything that happens to a booking."""
    booking_id: UUID
    car_id: UUID

    def to_dict(self) -> dict:
        data = super().to_dict()
        for item in fields(self):
            if item.name not in _BASE_FIELDS:
                data[item.name] = _plain(getattr(self, item.name))
        return data


@dataclass(kw_only=True)
class BookingCreated(BookingEvent):
    """A new PENDING booking was accepted."""
    user_id: UUID
    start_date: date
    end_date: date
    total_price: Decimal


@dataclass(kw_only=True)
class BookingStatusChanged(BookingEvent):
    """Booking moved along the transition table (status update)."""
    old_status: str
    new_status: str


@dataclass(kw_only=True)
class BookingCancelled(BookingEvent):
    """Booking was cancelled; the record is kept."""
    old_status: str
