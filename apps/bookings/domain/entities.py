"""
Booking Domain Entities

Core business entities for the booking domain:
- Booking: Main aggregate representing a car rental reservation
- BookingStatus: FSM states for the booking lifecycle
- RentableCar: Read-only snapshot of the car being booked
"""

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from uuid import UUID

from shared.domain.base import Aggregate
from shared.domain.exceptions import InvalidState, InvalidTransition
from shared.domain.value_objects import DateRange

from .events import BookingCancelled, BookingCreated, BookingStatusChanged
from .pricing import compute_total


class BookingStatus(Enum):
    """
    Booking Status Finite State Machine

    State transitions:
    - PENDING -> CONFIRMED (back office accepted the request)
    - PENDING -> CANCELLED
    - CONFIRMED -> ACTIVE (car picked up)
    - CONFIRMED -> CANCELLED
    - ACTIVE -> COMPLETED (car returned)
    """
    PENDING = 'PENDING'
    CONFIRMED = 'CONFIRMED'
    ACTIVE = 'ACTIVE'
    COMPLETED = 'COMPLETED'
    CANCELLED = 'CANCELLED'


TRANSITIONS = {
    BookingStatus.PENDING: frozenset({BookingStatus.CONFIRMED, BookingStatus.CANCELLED}),
    BookingStatus.CONFIRMED: frozenset({BookingStatus.ACTIVE, BookingStatus.CANCELLED}),
    BookingStatus.ACTIVE: frozenset({BookingStatus.COMPLETED}),
    BookingStatus.COMPLETED: frozenset(),
    BookingStatus.CANCELLED: frozenset(),
}

# Bookings in these states occupy the car's calendar
BLOCKING_STATUSES = frozenset({
    BookingStatus.PENDING,
    BookingStatus.CONFIRMED,
    BookingStatus.ACTIVE,
})

CANCELABLE_STATUSES = frozenset({BookingStatus.PENDING, BookingStatus.CONFIRMED})


class CarStatus(Enum):
    AVAILABLE = 'AVAILABLE'
    RENTED = 'RENTED'
    MAINTENANCE = 'MAINTENANCE'
    UNAVAILABLE = 'UNAVAILABLE'


@dataclass(frozen=True)
class RentableCar:
    """The slice of a car the booking domain needs."""
    id: UUID
    daily_rate: Decimal
    status: CarStatus

    @property
    def is_available(self) -> bool:
        return self.status == CarStatus.AVAILABLE


def can_transition(current: BookingStatus, requested: BookingStatus) -> bool:
    return requested in TRANSITIONS[current]


@dataclass(kw_only=True, eq=False)
class Booking(Aggregate):
    """
    Booking Aggregate Root

    A user's reservation of a car for an inclusive date range.

    Key invariants:
    - period.end_date >= period.start_date
    - total_price is fixed when the booking is opened
    - status only moves along TRANSITIONS
    - only PENDING, CONFIRMED and ACTIVE bookings block the car's dates
    """

    user_id: UUID
    car_id: UUID
    period: DateRange
    total_price: Decimal
    status: BookingStatus = BookingStatus.PENDING
    pickup_location: str = ''
    dropoff_location: str = ''

    @classmethod
    def open(
        cls,
        *,
        user_id: UUID,
        car: RentableCar,
        period: DateRange,
        pickup_location: str = '',
        dropoff_location: str = '',
    ) -> 'Booking':
        """
        Open a new PENDING booking for `car`

        The caller is responsible for checking date conflicts under the
        car's row lock; this only enforces what the car snapshot can tell.
        Events: BookingCreated
        """
        if not car.is_available:
            raise InvalidState("Car is not available for booking")

        booking = cls(
            user_id=user_id,
            car_id=car.id,
            period=period,
            total_price=compute_total(car.daily_rate, period.start_date, period.end_date),
            pickup_location=pickup_location or '',
            dropoff_location=dropoff_location or '',
        )
        booking.add_event(BookingCreated(
            aggregate_id=booking.id,
            booking_id=booking.id,
            car_id=booking.car_id,
            user_id=booking.user_id,
            start_date=period.start_date,
            end_date=period.end_date,
            total_price=booking.total_price,
        ))
        return booking

    def transition_to(self, requested: BookingStatus) -> BookingStatus:
        """
        Move to `requested` along the transition table

        Returns the previous status.
        Events: BookingStatusChanged
        """
        if not can_transition(self.status, requested):
            raise InvalidTransition(self.status.value, requested.value)

        previous = self.status
        self.status = requested
        self.touch()

        self.add_event(BookingStatusChanged(
            aggregate_id=self.id,
            booking_id=self.id,
            car_id=self.car_id,
            old_status=previous.value,
            new_status=requested.value,
        ))
        return previous

    def cancel(self) -> BookingStatus:
        """
        Cancel booking (PENDING/CONFIRMED -> CANCELLED)

        Returns the previous status.
        Events: BookingCancelled
        """
        if self.status not in CANCELABLE_STATUSES:
            raise InvalidState(f"Cannot cancel booking with status {self.status.value}")

        previous = self.status
        self.status = BookingStatus.CANCELLED
        self.touch()

        self.add_event(BookingCancelled(
            aggregate_id=self.id,
            booking_id=self.id,
            car_id=self.car_id,
            old_status=previous.value,
        ))
        return previous

    def relocate(self, pickup_location: str | None = None, dropoff_location: str | None = None):
        """Change pickup/dropoff locations; empty values are ignored."""
        if pickup_location:
            self.pickup_location = pickup_location
        if dropoff_location:
            self.dropoff_location = dropoff_location
        self.touch()

    def blocks_dates(self) -> bool:
        return self.status in BLOCKING_STATUSES

    @property
    def start_date(self):
        return self.period.start_date

    @property
    def end_date(self):
        return self.period.end_date

    def __str__(self):
        return f"Booking {self.id} ({self.status.value}, {self.period})"
