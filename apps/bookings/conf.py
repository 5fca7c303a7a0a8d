"""Booking settings read from ``settings.BOOKINGS``."""

from dataclasses import dataclass

from django.conf import settings  # type: ignore
from django.core.exceptions import ImproperlyConfigured  # type: ignore

from .domain.policies import CarStatusPolicy

DEFAULTS = {
    "CAR_STATUS_POLICY": CarStatusPolicy.MANUAL.value,
    "INCLUSIVE_BOUNDARIES": True,
}


@dataclass(frozen=True)
class BookingSettings:
    car_status_policy: CarStatusPolicy = CarStatusPolicy.MANUAL
    inclusive_boundaries: bool = True


def booking_settings() -> BookingSettings:
    """Current booking settings; read on every call so override_settings applies."""
    configured = {**DEFAULTS, **getattr(settings, "BOOKINGS", {})}

    raw_policy = str(configured["CAR_STATUS_POLICY"]).strip().lower()
    try:
        policy = CarStatusPolicy(raw_policy)
    except ValueError as exc:
        allowed = ", ".join(p.value for p in CarStatusPolicy)
        raise ImproperlyConfigured(
            f"BOOKINGS['CAR_STATUS_POLICY'] must be one of: {allowed} (got {raw_policy!r})"
        ) from exc

    return BookingSettings(
        car_status_policy=policy,
        inclusive_boundaries=bool(configured["INCLUSIVE_BOUNDARIES"]),
    )
