"""Booking read-side helpers shared with other apps."""

from __future__ import annotations

from datetime import date
from uuid import UUID

from shared.domain.value_objects import DateRange

from .conf import booking_settings
from .query import BookingQuery
from .repositories import DjangoBookingRepository


def has_conflict(
    car_id: UUID,
    start_date: date,
    end_date: date,
    *,
    exclude_booking_id: UUID | None = None,
    inclusive: bool | None = None,
    repository: DjangoBookingRepository | None = None,
) -> bool:
    """
    True if a blocking booking of `car_id` overlaps [start_date, end_date]

    Boundary handling follows BOOKINGS["INCLUSIVE_BOUNDARIES"] unless
    `inclusive` is given. Call it under the car's row lock when the answer
    decides a write.
    """
    if inclusive is None:
        inclusive = booking_settings().inclusive_boundaries
    repository = repository or DjangoBookingRepository()

    query = BookingQuery.conflicts_for(
        car_id,
        DateRange(start_date, end_date),
        inclusive_boundaries=inclusive,
        exclude_booking_id=exclude_booking_id,
    )
    return repository.exists(query)
