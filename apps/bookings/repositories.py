"""
Booking repositories

Translate between Django rows and the booking domain objects. Handlers
receive repository instances explicitly; nothing here holds global state.
"""

from __future__ import annotations

from uuid import UUID

from django.db import transaction  # type: ignore
from django.utils import timezone  # type: ignore

from apps.cars.models import Car
from shared.domain.exceptions import NotFound
from shared.domain.value_objects import DateRange

from .domain.entities import Booking, BookingStatus, CarStatus, RentableCar
from .models import Booking as BookingModel
from .query import BookingQuery, to_q


def _lock_queryset_if_possible(queryset):
    """Apply select_for_update when inside transaction.atomic()."""
    if not transaction.get_connection().in_atomic_block:
        return queryset
    # Backends without SELECT ... FOR UPDATE (SQLite) ignore the clause
    return queryset.select_for_update()


class DjangoCarRepository:
    """Car access needed by booking use cases."""

    def get_by_id(self, car_id: UUID, *, lock: bool = False) -> RentableCar | None:
        """
        Load a car snapshot

        With lock=True inside a transaction the car row stays locked until
        commit, serializing every booking write for that car.
        """
        queryset = Car.objects.filter(pk=car_id).only("id", "daily_rate", "status").order_by()
        if lock:
            queryset = _lock_queryset_if_possible(queryset)

        car = queryset.first()
        if car is None:
            return None
        return RentableCar(id=car.id, daily_rate=car.daily_rate, status=CarStatus(car.status))

    def transition_status(self, car_id: UUID, expected: CarStatus, target: CarStatus) -> bool:
        """Set the car to `target` only if it is still `expected`; returns whether it moved."""
        updated = Car.objects.filter(pk=car_id, status=expected.value).update(
            status=target.value,
            updated_at=timezone.now(),
        )
        return bool(updated)


class DjangoBookingRepository:

    def get(self, query: BookingQuery, *, lock: bool = False) -> Booking | None:
        queryset = BookingModel.objects.filter(to_q(query)).order_by()
        if lock:
            queryset = _lock_queryset_if_possible(queryset)
        row = queryset.first()
        return self._to_entity(row) if row is not None else None

    def get_by_id(
        self,
        booking_id: UUID,
        *,
        user_id: UUID | None = None,
        lock: bool = False,
    ) -> Booking | None:
        """Booking by id, optionally only if owned by `user_id`."""
        return self.get(BookingQuery(booking_id=booking_id, user_id=user_id), lock=lock)

    def exists(self, query: BookingQuery) -> bool:
        return BookingModel.objects.filter(to_q(query)).exists()

    def add(self, booking: Booking) -> None:
        BookingModel.objects.create(
            id=booking.id,
            user_id=booking.user_id,
            car_id=booking.car_id,
            start_date=booking.period.start_date,
            end_date=booking.period.end_date,
            total_price=booking.total_price,
            status=booking.status.value,
            pickup_location=booking.pickup_location,
            dropoff_location=booking.dropoff_location,
        )

    def save(self, booking: Booking) -> None:
        """Persist the mutable fields in a single UPDATE."""
        updated = BookingModel.objects.filter(pk=booking.id).update(
            status=booking.status.value,
            pickup_location=booking.pickup_location,
            dropoff_location=booking.dropoff_location,
            updated_at=timezone.now(),
        )
        if not updated:
            raise NotFound("Booking not found")

    @staticmethod
    def _to_entity(row: BookingModel) -> Booking:
        return Booking(
            id=row.id,
            created_at=row.created_at,
            updated_at=row.updated_at,
            user_id=row.user_id,
            car_id=row.car_id,
            period=DateRange(row.start_date, row.end_date),
            total_price=row.total_price,
            status=BookingStatus(row.status),
            pickup_location=row.pickup_location,
            dropoff_location=row.dropoff_location,
        )
