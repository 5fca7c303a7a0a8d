"""Subscribers for booking domain events."""

import structlog

from .domain.events import BookingEvent

logger = structlog.get_logger("apps.bookings.events")


def log_booking_event(event: BookingEvent) -> None:
    """Audit trail: one structured log line per committed booking event."""
    logger.info("booking.event", **event.to_dict())


def register(bus) -> None:
    bus.register_event_handler(BookingEvent, log_booking_event)
