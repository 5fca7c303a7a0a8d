"""
Car Status Policy

Decides whether a booking status change should also move the car's own
status. The policy is deployment configuration (BOOKINGS["CAR_STATUS_POLICY"]).
"""

from dataclasses import dataclass
from enum import Enum

from .entities import BookingStatus, CarStatus


class CarStatusPolicy(Enum):
    MANUAL = 'manual'            # car status is only ever changed by back office
    ON_CONFIRM = 'on_confirm'    # car is RENTED from confirmation until release
    ON_ACTIVATE = 'on_activate'  # car is RENTED only while the rental is ACTIVE


@dataclass(frozen=True)
class CarStatusChange:
    """Move the car from `expected` to `target`, only if it is still `expected`."""
    expected: CarStatus
    target: CarStatus


RENT = CarStatusChange(expected=CarStatus.AVAILABLE, target=CarStatus.RENTED)
RELEASE = CarStatusChange(expected=CarStatus.RENTED, target=CarStatus.AVAILABLE)

# Statuses during which the car is held out of the fleet, per policy
_HOLDING = {
    CarStatusPolicy.MANUAL: frozenset(),
    CarStatusPolicy.ON_CONFIRM: frozenset({BookingStatus.CONFIRMED, BookingStatus.ACTIVE}),
    CarStatusPolicy.ON_ACTIVATE: frozenset({BookingStatus.ACTIVE}),
}


def car_status_change(
    policy: CarStatusPolicy,
    previous: BookingStatus,
    current: BookingStatus,
) -> CarStatusChange | None:
    """
    Car status change implied by a booking moving previous -> current

    Examples (on_confirm):
        - PENDING -> CONFIRMED: RENT
        - CONFIRMED -> ACTIVE: None (already held)
        - ACTIVE -> COMPLETED: RELEASE
        - PENDING -> CANCELLED: None (never held)
    """
    holding = _HOLDING[policy]
    was_held = previous in holding
    is_held = current in holding

    if is_held and not was_held:
        return RENT
    if was_held and not is_held:
        return RELEASE
    return None
