"""Use-case tests for the booking command handlers and conflict query."""

from __future__ import annotations

from datetime import date, timedelta
from decimal import Decimal
from unittest import skipUnless
from uuid import uuid4

from django.core.exceptions import ImproperlyConfigured
from django.db import connection, transaction
from django.test import TestCase, override_settings
from django.test.utils import CaptureQueriesContext

from apps.bookings.application.command_handlers import (
    CancelBookingCommand,
    CancelBookingHandler,
    CreateBookingCommand,
    CreateBookingHandler,
    UpdateBookingCommand,
    UpdateBookingHandler,
)
from apps.bookings.conf import BookingSettings, booking_settings
from apps.bookings.domain.entities import BookingStatus
from apps.bookings.domain.events import BookingCancelled, BookingCreated
from apps.bookings.domain.policies import CarStatusPolicy
from apps.bookings.models import Booking
from apps.bookings.repositories import DjangoBookingRepository, DjangoCarRepository, _lock_queryset_if_possible
from apps.bookings.services import has_conflict
from apps.cars.models import Agency, Car
from apps.users.models import User
from shared.application.message_bus import MessageBus
from shared.application.uow import DjangoUnitOfWork
from shared.domain.exceptions import Conflict, InvalidState, InvalidTransition, NotFound
from shared.domain.value_objects import DateRange

JUNE_1 = date(2024, 6, 1)


def make_car(**overrides) -> Car:
    agency = Agency.objects.create(name="Downtown", address="1 Main St", city="Lisbon", country="Portugal")
    fields = {
        "agency": agency,
        "make": "Toyota",
        "model": "Corolla",
        "year": 2022,
        "license_plate": f"AA-{Car.objects.count():02d}-BB",
        "transmission": Car.Transmission.AUTOMATIC,
        "fuel_type": Car.FuelType.HYBRID,
        "seats": 5,
        "daily_rate": Decimal("45.00"),
    }
    fields.update(overrides)
    return Car.objects.create(**fields)


class HandlerTestCase(TestCase):
    policy = CarStatusPolicy.MANUAL
    inclusive = True

    def setUp(self) -> None:
        self.user = User.objects.create_user(email="driver@example.com", password="DriverPass1", name="Driver")
        self.car = make_car()
        self.bus = MessageBus()
        self.published = []
        self.bus.register_event_handler(BookingCreated, self.published.append)
        self.bus.register_event_handler(BookingCancelled, self.published.append)

    def handler(self, handler_class):
        return handler_class(
            DjangoBookingRepository(),
            DjangoCarRepository(),
            config=BookingSettings(car_status_policy=self.policy, inclusive_boundaries=self.inclusive),
            uow_factory=lambda: DjangoUnitOfWork(bus=self.bus),
        )

    def create(self, start: date, end: date, **kwargs):
        return self.handler(CreateBookingHandler).handle(
            CreateBookingCommand(user_id=self.user.id, car_id=kwargs.pop("car_id", self.car.id),
                                 start_date=start, end_date=end, **kwargs)
        )

    def set_status(self, booking_id, status: BookingStatus):
        return self.handler(UpdateBookingHandler).handle(
            UpdateBookingCommand(booking_id=booking_id, requested_by=None, status=status)
        )


class CreateBookingHandlerTests(HandlerTestCase):
    def test_rental_scenario(self) -> None:
        booking = self.create(JUNE_1, date(2024, 6, 4))

        row = Booking.objects.get(pk=booking.id)
        self.assertEqual(row.total_price, Decimal("135.00"))
        self.assertEqual(row.status, Booking.Status.PENDING)

        with self.assertRaises(Conflict):
            self.create(date(2024, 6, 3), date(2024, 6, 5))
        self.assertEqual(Booking.objects.count(), 1)

    def test_events_are_published_after_commit(self) -> None:
        with self.captureOnCommitCallbacks(execute=True) as callbacks:
            booking = self.create(JUNE_1, date(2024, 6, 2))

        self.assertEqual(len(callbacks), 1)
        [event] = self.published
        self.assertIsInstance(event, BookingCreated)
        self.assertEqual(event.booking_id, booking.id)

    def test_rejected_booking_publishes_nothing(self) -> None:
        self.create(JUNE_1, date(2024, 6, 4))
        self.published.clear()

        with self.captureOnCommitCallbacks(execute=True):
            with self.assertRaises(Conflict):
                self.create(JUNE_1, JUNE_1)

        self.assertEqual(self.published, [])

    def test_unknown_car(self) -> None:
        with self.assertRaises(NotFound):
            self.create(JUNE_1, date(2024, 6, 2), car_id=uuid4())

    def test_rented_car_is_refused_whatever_the_dates(self) -> None:
        Car.objects.filter(pk=self.car.pk).update(status=Car.Status.RENTED)

        with self.assertRaises(InvalidState):
            self.create(date(2030, 1, 1), date(2030, 1, 2))

    def test_touching_ranges_conflict_by_default(self) -> None:
        self.create(JUNE_1, date(2024, 6, 4))

        with self.assertRaises(Conflict):
            self.create(date(2024, 6, 4), date(2024, 6, 6))

    def test_cancelled_and_completed_bookings_do_not_block(self) -> None:
        first = self.create(JUNE_1, date(2024, 6, 4))
        self.handler(CancelBookingHandler).handle(CancelBookingCommand(booking_id=first.id, requested_by=None))
        second = self.create(JUNE_1, date(2024, 6, 4))
        for status in (BookingStatus.CONFIRMED, BookingStatus.ACTIVE, BookingStatus.COMPLETED):
            self.set_status(second.id, status)

        self.create(date(2024, 6, 2), date(2024, 6, 3))
        self.assertEqual(Booking.objects.count(), 3)

    def test_other_cars_are_independent(self) -> None:
        other = make_car()
        self.create(JUNE_1, date(2024, 6, 4))
        self.create(JUNE_1, date(2024, 6, 4), car_id=other.id)
        self.assertEqual(Booking.objects.count(), 2)


class ExclusiveBoundaryTests(HandlerTestCase):
    inclusive = False

    def test_back_to_back_bookings_are_allowed(self) -> None:
        self.create(JUNE_1, date(2024, 6, 4))
        self.create(date(2024, 6, 4), date(2024, 6, 6))
        self.assertEqual(Booking.objects.count(), 2)

    def test_same_day_booking_still_occupies_its_day(self) -> None:
        self.create(date(2024, 6, 4), date(2024, 6, 4))

        with self.assertRaises(Conflict):
            self.create(date(2024, 6, 4), date(2024, 6, 4))
        with self.assertRaises(Conflict):
            self.create(date(2024, 6, 3), date(2024, 6, 5))
        self.create(JUNE_1, date(2024, 6, 4))

    def test_query_agrees_with_date_range_overlap(self) -> None:
        stored = [
            (JUNE_1, date(2024, 6, 4)),
            (date(2024, 6, 10), date(2024, 6, 10)),
        ]
        for start, end in stored:
            Booking.objects.create(user=self.user, car=self.car, start_date=start, end_date=end,
                                   total_price=Decimal("45.00"))

        for offset in range(14):
            for length in range(4):
                start = JUNE_1 - timedelta(days=2) + timedelta(days=offset)
                candidate = DateRange(start, start + timedelta(days=length))
                expected = any(candidate.overlaps_with(DateRange(s, e), inclusive=False) for s, e in stored)
                self.assertEqual(
                    has_conflict(self.car.id, candidate.start_date, candidate.end_date, inclusive=False),
                    expected,
                    str(candidate),
                )


class UpdateBookingHandlerTests(HandlerTestCase):
    def test_owner_scoped_lookup(self) -> None:
        booking = self.create(JUNE_1, date(2024, 6, 2))
        stranger = User.objects.create_user(email="other@example.com", password="OtherPass1", name="Other")

        with self.assertRaises(NotFound):
            self.handler(UpdateBookingHandler).handle(
                UpdateBookingCommand(booking_id=booking.id, requested_by=stranger.id, pickup_location="Port")
            )

    def test_locations_only(self) -> None:
        booking = self.create(JUNE_1, date(2024, 6, 2), pickup_location="Airport", dropoff_location="Station")

        self.handler(UpdateBookingHandler).handle(
            UpdateBookingCommand(booking_id=booking.id, requested_by=self.user.id,
                                 pickup_location="", dropoff_location="Harbour")
        )

        row = Booking.objects.get(pk=booking.id)
        self.assertEqual(row.pickup_location, "Airport")
        self.assertEqual(row.dropoff_location, "Harbour")
        self.assertEqual(row.status, Booking.Status.PENDING)

    def test_cancelled_status_outside_the_table_is_an_invalid_transition(self) -> None:
        booking = self.create(JUNE_1, date(2024, 6, 2))
        self.set_status(booking.id, BookingStatus.CONFIRMED)
        self.set_status(booking.id, BookingStatus.ACTIVE)

        with self.assertRaises(InvalidTransition) as excinfo:
            self.set_status(booking.id, BookingStatus.CANCELLED)

        self.assertEqual(excinfo.exception.message, "Cannot change booking status from ACTIVE to CANCELLED")
        self.assertEqual(Booking.objects.get(pk=booking.id).status, Booking.Status.ACTIVE)

    def test_cancelled_status_from_pending_cancels(self) -> None:
        booking = self.create(JUNE_1, date(2024, 6, 2))

        self.set_status(booking.id, BookingStatus.CANCELLED)

        self.assertEqual(Booking.objects.get(pk=booking.id).status, Booking.Status.CANCELLED)

    def test_manual_policy_leaves_car_alone(self) -> None:
        booking = self.create(JUNE_1, date(2024, 6, 2))
        self.set_status(booking.id, BookingStatus.CONFIRMED)

        self.car.refresh_from_db()
        self.assertEqual(self.car.status, Car.Status.AVAILABLE)


class OnConfirmPolicyTests(HandlerTestCase):
    policy = CarStatusPolicy.ON_CONFIRM

    def test_car_is_rented_from_confirmation_until_completion(self) -> None:
        booking = self.create(JUNE_1, date(2024, 6, 2))

        self.set_status(booking.id, BookingStatus.CONFIRMED)
        self.car.refresh_from_db()
        self.assertEqual(self.car.status, Car.Status.RENTED)

        self.set_status(booking.id, BookingStatus.ACTIVE)
        self.set_status(booking.id, BookingStatus.COMPLETED)
        self.car.refresh_from_db()
        self.assertEqual(self.car.status, Car.Status.AVAILABLE)

    def test_cancelling_a_confirmed_booking_releases_the_car(self) -> None:
        booking = self.create(JUNE_1, date(2024, 6, 2))
        self.set_status(booking.id, BookingStatus.CONFIRMED)

        self.handler(CancelBookingHandler).handle(CancelBookingCommand(booking_id=booking.id, requested_by=self.user.id))

        self.car.refresh_from_db()
        self.assertEqual(self.car.status, Car.Status.AVAILABLE)

    def test_car_in_maintenance_is_not_touched(self) -> None:
        booking = self.create(JUNE_1, date(2024, 6, 2))
        Car.objects.filter(pk=self.car.pk).update(status=Car.Status.MAINTENANCE)

        self.set_status(booking.id, BookingStatus.CONFIRMED)

        self.car.refresh_from_db()
        self.assertEqual(self.car.status, Car.Status.MAINTENANCE)


class OnActivatePolicyTests(HandlerTestCase):
    policy = CarStatusPolicy.ON_ACTIVATE

    def test_car_is_rented_only_while_active(self) -> None:
        booking = self.create(JUNE_1, date(2024, 6, 2))
        self.set_status(booking.id, BookingStatus.CONFIRMED)
        self.car.refresh_from_db()
        self.assertEqual(self.car.status, Car.Status.AVAILABLE)

        self.set_status(booking.id, BookingStatus.ACTIVE)
        self.car.refresh_from_db()
        self.assertEqual(self.car.status, Car.Status.RENTED)

        self.set_status(booking.id, BookingStatus.COMPLETED)
        self.car.refresh_from_db()
        self.assertEqual(self.car.status, Car.Status.AVAILABLE)


class CancelBookingHandlerTests(HandlerTestCase):
    def test_cancel_keeps_the_record(self) -> None:
        booking = self.create(JUNE_1, date(2024, 6, 2))

        with self.captureOnCommitCallbacks(execute=True):
            self.handler(CancelBookingHandler).handle(
                CancelBookingCommand(booking_id=booking.id, requested_by=self.user.id)
            )

        self.assertEqual(Booking.objects.get(pk=booking.id).status, Booking.Status.CANCELLED)
        self.assertIsInstance(self.published[-1], BookingCancelled)

    def test_completed_booking_cannot_be_cancelled(self) -> None:
        booking = self.create(JUNE_1, date(2024, 6, 2))
        for status in (BookingStatus.CONFIRMED, BookingStatus.ACTIVE, BookingStatus.COMPLETED):
            self.set_status(booking.id, status)

        with self.assertRaises(InvalidState):
            self.handler(CancelBookingHandler).handle(CancelBookingCommand(booking_id=booking.id, requested_by=None))
        self.assertEqual(Booking.objects.get(pk=booking.id).status, Booking.Status.COMPLETED)


class CarLockTests(HandlerTestCase):
    def test_locked_read_selects_for_update_inside_a_transaction(self) -> None:
        with transaction.atomic():
            queryset = _lock_queryset_if_possible(Car.objects.filter(pk=self.car.id))

        self.assertTrue(queryset.query.select_for_update)

    @skipUnless(connection.features.has_select_for_update, "backend has no SELECT ... FOR UPDATE")
    def test_car_row_is_locked_inside_the_unit_of_work(self) -> None:
        with CaptureQueriesContext(connection) as queries:
            with DjangoUnitOfWork(bus=self.bus):
                car = DjangoCarRepository().get_by_id(self.car.id, lock=True)

        self.assertEqual(car.id, self.car.id)
        self.assertTrue(any("FOR UPDATE" in query["sql"] for query in queries.captured_queries))

    def test_unlocked_read_does_not_select_for_update(self) -> None:
        with CaptureQueriesContext(connection) as queries:
            with DjangoUnitOfWork(bus=self.bus):
                DjangoCarRepository().get_by_id(self.car.id)

        self.assertFalse(any("FOR UPDATE" in query["sql"] for query in queries.captured_queries))


class BookingSettingsTests(TestCase):
    def test_defaults(self) -> None:
        with override_settings(BOOKINGS={}):
            config = booking_settings()
        self.assertEqual(config.car_status_policy, CarStatusPolicy.MANUAL)
        self.assertTrue(config.inclusive_boundaries)

    def test_policy_is_case_insensitive(self) -> None:
        with override_settings(BOOKINGS={"CAR_STATUS_POLICY": "ON_CONFIRM", "INCLUSIVE_BOUNDARIES": False}):
            config = booking_settings()
        self.assertEqual(config.car_status_policy, CarStatusPolicy.ON_CONFIRM)
        self.assertFalse(config.inclusive_boundaries)

    def test_unknown_policy(self) -> None:
        with override_settings(BOOKINGS={"CAR_STATUS_POLICY": "sometimes"}):
            with self.assertRaises(ImproperlyConfigured):
                booking_settings()
