"""
Booking queries

BookingQuery is a structured description of "which bookings"; to_q() is
the single place that turns it into an ORM filter. The conflict check and
the list endpoints both go through it.
"""

from __future__ import annotations

from dataclasses import dataclass
from uuid import UUID

from django.db.models import F, Q  # type: ignore

from shared.domain.value_objects import DateRange

from .domain.entities import BLOCKING_STATUSES, BookingStatus


@dataclass(frozen=True)
class BookingQuery:
    booking_id: UUID | None = None
    user_id: UUID | None = None
    car_id: UUID | None = None
    statuses: frozenset[BookingStatus] | None = None
    overlapping: DateRange | None = None
    inclusive_boundaries: bool = True
    exclude_booking_id: UUID | None = None

    @classmethod
    def conflicts_for(
        cls,
        car_id: UUID,
        period: DateRange,
        *,
        inclusive_boundaries: bool = True,
        exclude_booking_id: UUID | None = None,
    ) -> "BookingQuery":
        """Blocking bookings of `car_id` that overlap `period`."""
        return cls(
            car_id=car_id,
            statuses=BLOCKING_STATUSES,
            overlapping=period,
            inclusive_boundaries=inclusive_boundaries,
            exclude_booking_id=exclude_booking_id,
        )


def overlap_q(period: DateRange, *, inclusive: bool = True) -> Q:
    """
    Rows whose [start_date, end_date] overlaps `period`

    Mirrors DateRange.overlaps_with(): in exclusive mode a stored row
    occupies [start_date, end_date), or just start_date when it is a
    same-day rental.
    """
    if inclusive:
        return Q(start_date__lte=period.end_date) & Q(end_date__gte=period.start_date)

    same_day_row = Q(end_date=F("start_date")) & Q(start_date__gte=period.start_date)
    return Q(start_date__lt=period.occupied_until) & (
        Q(end_date__gt=period.start_date) | same_day_row
    )


def to_q(query: BookingQuery) -> Q:
    q = Q()
    if query.booking_id is not None:
        q &= Q(pk=query.booking_id)
    if query.user_id is not None:
        q &= Q(user_id=query.user_id)
    if query.car_id is not None:
        q &= Q(car_id=query.car_id)
    if query.statuses is not None:
        q &= Q(status__in=sorted(s.value for s in query.statuses))
    if query.overlapping is not None:
        q &= overlap_q(query.overlapping, inclusive=query.inclusive_boundaries)
    if query.exclude_booking_id is not None:
        q &= ~Q(pk=query.exclude_booking_id)
    return q
