"""
Booking Command Handlers

These are the use cases for the booking domain.
They orchestrate domain operations within transactions.

Commands:
- CreateBookingCommand: Create a new booking
- UpdateBookingCommand: Change status and/or locations of a booking
- CancelBookingCommand: Cancel a booking
"""

from dataclasses import dataclass
from datetime import date
from uuid import UUID

import structlog

from shared.application.uow import DjangoUnitOfWork
from shared.domain.exceptions import Conflict, InvalidState, InvalidTransition, NotFound, ValidationError
from shared.domain.value_objects import DateRange
from apps.bookings.conf import BookingSettings, booking_settings
from apps.bookings.domain.entities import Booking, BookingStatus, can_transition
from apps.bookings.domain.policies import car_status_change
from apps.bookings.services import has_conflict

logger = structlog.get_logger(__name__)


# ===== Commands =====

@dataclass
class CreateBookingCommand:
    user_id: UUID
    car_id: UUID
    start_date: date
    end_date: date
    pickup_location: str = ''
    dropoff_location: str = ''


@dataclass
class UpdateBookingCommand:
    """
    Command to update a booking

    requested_by limits the lookup to the owner's bookings;
    None means a back-office caller who may touch any booking.
    """
    booking_id: UUID
    requested_by: UUID | None
    status: BookingStatus | None = None
    pickup_location: str | None = None
    dropoff_location: str | None = None


@dataclass
class CancelBookingCommand:
    booking_id: UUID
    requested_by: UUID | None


# ===== Command Handlers =====

class _BookingHandler:

    def __init__(self, booking_repo, car_repo, *, config: BookingSettings | None = None,
                 uow_factory=DjangoUnitOfWork):
        self.booking_repo = booking_repo
        self.car_repo = car_repo
        self.config = config or booking_settings()
        self.uow_factory = uow_factory

    def _load_booking(self, booking_id: UUID, requested_by: UUID | None) -> Booking:
        booking = self.booking_repo.get_by_id(booking_id, user_id=requested_by, lock=True)
        if booking is None:
            raise NotFound("Booking not found")
        return booking

    def _sync_car_status(self, booking: Booking, previous: BookingStatus, log) -> None:
        """Apply the configured car status policy to previous -> booking.status."""
        change = car_status_change(self.config.car_status_policy, previous, booking.status)
        if change is None:
            return

        moved = self.car_repo.transition_status(booking.car_id, change.expected, change.target)
        if moved:
            log.info("car.status_changed", car_id=str(booking.car_id), status=change.target.value)
        else:
            log.warning(
                "car.status_unchanged",
                car_id=str(booking.car_id),
                expected=change.expected.value,
                target=change.target.value,
            )


class CreateBookingHandler(_BookingHandler):
    """
    Handler for CreateBooking command

    Double booking prevention:
    1. Start database transaction (atomic)
    2. Lock the car row with SELECT FOR UPDATE
    3. Reject missing or non-AVAILABLE cars
    4. Check overlapping blocking bookings
    5. Create the PENDING booking with its fixed total price
    6. Commit, then publish events

    Every create for the same car queues on step 2, so the conflict check
    and the insert are atomic with respect to each other.
    """

    def handle(self, command: CreateBookingCommand) -> Booking:
        if not command.car_id or command.start_date is None or command.end_date is None:
            raise ValidationError("Car ID, start date, and end date are required")

        period = DateRange(command.start_date, command.end_date)
        log = logger.bind(
            user_id=str(command.user_id),
            car_id=str(command.car_id),
            period=str(period),
        )

        with self.uow_factory() as uow:
            car = self.car_repo.get_by_id(command.car_id, lock=True)
            if car is None:
                raise NotFound("Car not found")
            if not car.is_available:
                log.info("booking.rejected", reason="car_unavailable", car_status=car.status.value)
                raise InvalidState("Car is not available for booking")

            if has_conflict(
                car.id,
                period.start_date,
                period.end_date,
                inclusive=self.config.inclusive_boundaries,
                repository=self.booking_repo,
            ):
                log.info("booking.rejected", reason="dates_taken")
                raise Conflict("Car is already booked for the selected dates")

            booking = Booking.open(
                user_id=command.user_id,
                car=car,
                period=period,
                pickup_location=command.pickup_location,
                dropoff_location=command.dropoff_location,
            )
            self.booking_repo.add(booking)
            uow.collect_events(booking)

        log.info("booking.created", booking_id=str(booking.id), total_price=str(booking.total_price))
        return booking


class UpdateBookingHandler(_BookingHandler):
    """
    Handler for UpdateBooking command

    Every requested status, CANCELLED included, is checked against the
    transition table first; a legal CANCELLED then records a cancellation.
    Dates are fixed once a booking exists.
    """

    def handle(self, command: UpdateBookingCommand) -> Booking:
        log = logger.bind(booking_id=str(command.booking_id))

        with self.uow_factory() as uow:
            booking = self._load_booking(command.booking_id, command.requested_by)
            previous = booking.status

            if command.status is not None and not can_transition(previous, command.status):
                raise InvalidTransition(previous.value, command.status.value)

            if command.status == BookingStatus.CANCELLED:
                booking.cancel()
            elif command.status is not None:
                booking.transition_to(command.status)
            booking.relocate(command.pickup_location, command.dropoff_location)

            self.booking_repo.save(booking)
            if booking.status != previous:
                self._sync_car_status(booking, previous, log)
            uow.collect_events(booking)

        if booking.status != previous:
            log.info("booking.status_changed", old_status=previous.value, new_status=booking.status.value)
        return booking


class CancelBookingHandler(_BookingHandler):
    """Handler for CancelBooking command (PENDING/CONFIRMED -> CANCELLED)"""

    def handle(self, command: CancelBookingCommand) -> Booking:
        log = logger.bind(booking_id=str(command.booking_id))

        with self.uow_factory() as uow:
            booking = self._load_booking(command.booking_id, command.requested_by)
            previous = booking.cancel()
            self.booking_repo.save(booking)
            self._sync_car_status(booking, previous, log)
            uow.collect_events(booking)

        log.info("booking.cancelled", old_status=previous.value)
        return booking
