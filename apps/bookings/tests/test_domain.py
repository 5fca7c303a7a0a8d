"""Unit tests for the booking domain (no database)."""

from __future__ import annotations

from datetime import date, datetime, timedelta
from decimal import Decimal
from uuid import uuid4

import pytest

from apps.bookings.domain.entities import (
    BLOCKING_STATUSES,
    Booking,
    BookingStatus,
    CarStatus,
    RentableCar,
    TRANSITIONS,
)
from apps.bookings.domain.events import BookingCancelled, BookingCreated, BookingStatusChanged
from apps.bookings.domain.policies import RELEASE, RENT, CarStatusPolicy, car_status_change
from apps.bookings.domain.pricing import billable_days, compute_total
from apps.bookings.models import Booking as BookingModel
from shared.domain.exceptions import InvalidState, InvalidTransition, ValidationError
from shared.domain.value_objects import DateRange

JUNE_1 = date(2024, 6, 1)


def _car(status=CarStatus.AVAILABLE, rate="45.00") -> RentableCar:
    return RentableCar(id=uuid4(), daily_rate=Decimal(rate), status=status)


def _booking(status=BookingStatus.PENDING) -> Booking:
    booking = Booking.open(
        user_id=uuid4(),
        car=_car(),
        period=DateRange(JUNE_1, date(2024, 6, 4)),
    )
    booking.status = status
    booking.clear_events()
    return booking


# ===== Pricing =====

def test_three_day_rental_costs_three_days():
    assert compute_total(Decimal("45"), JUNE_1, date(2024, 6, 4)) == Decimal("135.00")


def test_same_day_rental_costs_one_day():
    assert compute_total(Decimal("45.50"), JUNE_1, JUNE_1) == Decimal("45.50")


def test_partial_day_is_billed_in_full():
    start = datetime(2024, 6, 1, 9, 0)
    assert billable_days(start, datetime(2024, 6, 1, 15, 0)) == 1
    assert billable_days(start, datetime(2024, 6, 2, 10, 0)) == 2
    assert billable_days(start, datetime(2024, 6, 3, 9, 0)) == 2


def test_total_is_rounded_to_cents():
    assert compute_total("33.333", JUNE_1, date(2024, 6, 4)) == Decimal("100.00")
    assert compute_total(Decimal("0.005"), JUNE_1, JUNE_1) == Decimal("0.01")


@pytest.mark.parametrize("rate", [Decimal("0"), Decimal("-10")])
def test_non_positive_rate_is_rejected(rate):
    with pytest.raises(ValidationError):
        compute_total(rate, JUNE_1, date(2024, 6, 2))


def test_end_before_start_is_rejected():
    with pytest.raises(ValidationError):
        billable_days(date(2024, 6, 4), JUNE_1)


def test_mixing_dates_and_datetimes_is_rejected():
    with pytest.raises(ValidationError):
        billable_days(JUNE_1, datetime(2024, 6, 2, 12, 0))


# ===== Date ranges =====

def test_touching_ranges_overlap_when_inclusive():
    first = DateRange(JUNE_1, date(2024, 6, 4))
    second = DateRange(date(2024, 6, 4), date(2024, 6, 6))
    assert first.overlaps_with(second)
    assert not first.overlaps_with(second, inclusive=False)


def test_disjoint_ranges_never_overlap():
    first = DateRange(JUNE_1, date(2024, 6, 3))
    second = DateRange(date(2024, 6, 4), date(2024, 6, 6))
    assert not first.overlaps_with(second)
    assert not first.overlaps_with(second, inclusive=False)


def test_same_day_ranges_occupy_their_day_in_exclusive_mode():
    day = DateRange(date(2024, 6, 4), date(2024, 6, 4))
    assert day.overlaps_with(DateRange(date(2024, 6, 4), date(2024, 6, 4)), inclusive=False)
    assert day.overlaps_with(DateRange(date(2024, 6, 3), date(2024, 6, 6)), inclusive=False)
    assert not day.overlaps_with(DateRange(JUNE_1, date(2024, 6, 4)), inclusive=False)


def test_date_range_rejects_reversed_dates():
    with pytest.raises(ValidationError):
        DateRange(date(2024, 6, 4), JUNE_1)


# ===== Status lifecycle =====

def test_terminal_statuses_have_no_transitions():
    assert TRANSITIONS[BookingStatus.COMPLETED] == frozenset()
    assert TRANSITIONS[BookingStatus.CANCELLED] == frozenset()


def test_model_status_choices_match_domain_statuses():
    assert {value for value, _ in BookingModel.Status.choices} == {s.value for s in BookingStatus}


def test_open_creates_pending_booking_with_fixed_price():
    car = _car(rate="45")
    booking = Booking.open(
        user_id=uuid4(),
        car=car,
        period=DateRange(JUNE_1, date(2024, 6, 4)),
        pickup_location="Airport",
    )

    assert booking.status == BookingStatus.PENDING
    assert booking.total_price == Decimal("135.00")
    assert booking.car_id == car.id
    assert booking.pickup_location == "Airport"
    assert booking.dropoff_location == ""
    [event] = booking.events
    assert isinstance(event, BookingCreated)
    assert event.to_dict()["total_price"] == "135.00"


@pytest.mark.parametrize("status", [CarStatus.RENTED, CarStatus.MAINTENANCE, CarStatus.UNAVAILABLE])
def test_open_rejects_car_that_is_not_available(status):
    with pytest.raises(InvalidState):
        Booking.open(user_id=uuid4(), car=_car(status=status), period=DateRange(JUNE_1, JUNE_1))


def test_confirm_then_activate_then_complete():
    booking = _booking()
    assert booking.transition_to(BookingStatus.CONFIRMED) == BookingStatus.PENDING
    booking.transition_to(BookingStatus.ACTIVE)
    booking.transition_to(BookingStatus.COMPLETED)

    assert booking.status == BookingStatus.COMPLETED
    assert [e.new_status for e in booking.events] == ["CONFIRMED", "ACTIVE", "COMPLETED"]
    assert all(isinstance(e, BookingStatusChanged) for e in booking.events)


def test_confirmed_cannot_go_back_to_pending():
    booking = _booking(BookingStatus.CONFIRMED)

    with pytest.raises(InvalidTransition) as excinfo:
        booking.transition_to(BookingStatus.PENDING)

    assert booking.status == BookingStatus.CONFIRMED
    assert booking.events == []
    assert excinfo.value.message == "Cannot change booking status from CONFIRMED to PENDING"


def test_same_status_is_not_a_transition():
    with pytest.raises(InvalidTransition):
        _booking(BookingStatus.PENDING).transition_to(BookingStatus.PENDING)


@pytest.mark.parametrize("status", [BookingStatus.PENDING, BookingStatus.CONFIRMED])
def test_cancel_from_cancelable_status(status):
    booking = _booking(status)

    assert booking.cancel() == status
    assert booking.status == BookingStatus.CANCELLED
    [event] = booking.events
    assert isinstance(event, BookingCancelled)
    assert event.old_status == status.value


@pytest.mark.parametrize(
    "status",
    [BookingStatus.ACTIVE, BookingStatus.COMPLETED, BookingStatus.CANCELLED],
)
def test_cancel_from_other_statuses_fails(status):
    booking = _booking(status)

    with pytest.raises(InvalidState):
        booking.cancel()
    assert booking.status == status


def test_only_pending_confirmed_and_active_block_dates():
    for status in BookingStatus:
        assert _booking(status).blocks_dates() == (status in BLOCKING_STATUSES)


def test_relocate_ignores_empty_values():
    booking = _booking()
    booking.relocate(pickup_location="Downtown", dropoff_location="")
    assert booking.pickup_location == "Downtown"
    assert booking.dropoff_location == ""


# ===== Car status policy =====

def test_manual_policy_never_moves_the_car():
    for previous, targets in TRANSITIONS.items():
        for current in targets:
            assert car_status_change(CarStatusPolicy.MANUAL, previous, current) is None


@pytest.mark.parametrize(
    "previous, current, expected",
    [
        (BookingStatus.PENDING, BookingStatus.CONFIRMED, RENT),
        (BookingStatus.CONFIRMED, BookingStatus.ACTIVE, None),
        (BookingStatus.ACTIVE, BookingStatus.COMPLETED, RELEASE),
        (BookingStatus.CONFIRMED, BookingStatus.CANCELLED, RELEASE),
        (BookingStatus.PENDING, BookingStatus.CANCELLED, None),
    ],
)
def test_on_confirm_policy(previous, current, expected):
    assert car_status_change(CarStatusPolicy.ON_CONFIRM, previous, current) == expected


@pytest.mark.parametrize(
    "previous, current, expected",
    [
        (BookingStatus.PENDING, BookingStatus.CONFIRMED, None),
        (BookingStatus.CONFIRMED, BookingStatus.ACTIVE, RENT),
        (BookingStatus.ACTIVE, BookingStatus.COMPLETED, RELEASE),
        (BookingStatus.CONFIRMED, BookingStatus.CANCELLED, None),
    ],
)
def test_on_activate_policy(previous, current, expected):
    assert car_status_change(CarStatusPolicy.ON_ACTIVATE, previous, current) == expected


def test_week_long_rental_spans_seven_days():
    assert billable_days(JUNE_1, JUNE_1 + timedelta(days=7)) == 7
