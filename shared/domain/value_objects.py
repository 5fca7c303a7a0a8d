"""
Common Value Objects

Value objects used across domains:
- DateRange: Represents a rental period (pickup date to return date)
"""

from dataclasses import dataclass
from datetime import date, timedelta

from shared.domain.base import ValueObject
from shared.domain.exceptions import ValidationError


@dataclass(frozen=True)
class DateRange(ValueObject):
    """
    Date range value object

    Represents a range from start_date to end_date, both inclusive.
    A same-day range (start_date == end_date) is a valid one-day range.
    """
    start_date: date
    end_date: date

    def __post_init__(self):
        if self.start_date is None or self.end_date is None:
            raise ValidationError("Start date and end date are required")
        if self.end_date < self.start_date:
            raise ValidationError(
                f"End date ({self.end_date}) cannot be before start date ({self.start_date})"
            )

    def overlaps_with(self, other: 'DateRange', *, inclusive: bool = True) -> bool:
        """
        Check if this range overlaps with another

        Inclusive mode treats touching boundaries as overlapping:
            - DateRange(1, 4) overlaps with DateRange(4, 6) -> True
        Exclusive mode frees the car on the return day, so back-to-back
        ranges do not overlap, while any two ranges sharing an occupied
        day still do:
            - DateRange(1, 4) overlaps with DateRange(4, 6) -> False
            - DateRange(4, 4) overlaps with DateRange(4, 4) -> True
        """
        if not isinstance(other, DateRange):
            raise TypeError("Can only check overlap with another DateRange")

        if inclusive:
            return (self.start_date <= other.end_date and
                    self.end_date >= other.start_date)

        return (self.start_date < other.occupied_until and
                other.start_date < self.occupied_until)

    @property
    def occupied_until(self) -> date:
        """First day the car is free again when the return day is not occupied."""
        if self.end_date == self.start_date:
            return self.start_date + timedelta(days=1)
        return self.end_date

    def contains(self, check_date: date) -> bool:
        return self.start_date <= check_date <= self.end_date

    def __len__(self) -> int:
        """Number of calendar days between start and end (0 for same-day)."""
        return (self.end_date - self.start_date).days

    def __str__(self):
        return f"{self.start_date.isoformat()} - {self.end_date.isoformat()}"

    def __repr__(self):
        return f"DateRange({self.start_date}, {self.end_date})"
