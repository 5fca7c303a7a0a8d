"""
Rental Pricing

Total price of a rental = billable days x daily rate, in a single implicit
currency. A day is billed in full as soon as any part of it is used; the
minimum billed duration is one day.
"""

from datetime import date, datetime, timedelta
from decimal import Decimal, ROUND_HALF_UP

from shared.domain.exceptions import ValidationError

CENT = Decimal("0.01")
ONE_DAY = timedelta(days=1)


def billable_days(start: date, end: date) -> int:
    """
    Days billed for [start, end]

    Examples:
        - 2024-06-01 -> 2024-06-04: 3
        - 2024-06-01 -> 2024-06-01: 1 (same day)
        - 09:00 -> 15:00 on the same day: 1 (sub-day rounds up)
        - 09:00 -> 10:00 the next day: 2
    """
    if start is None or end is None:
        raise ValidationError("Start date and end date are required")
    if isinstance(start, datetime) != isinstance(end, datetime):
        raise ValidationError("Start and end must both be dates or both be datetimes")
    if end < start:
        raise ValidationError("End date cannot be before start date")

    days, remainder = divmod(end - start, ONE_DAY)
    if remainder:
        days += 1
    return max(days, 1)


def compute_total(daily_rate, start: date, end: date) -> Decimal:
    """Total price for renting at `daily_rate` from `start` to `end`."""
    rate = daily_rate if isinstance(daily_rate, Decimal) else Decimal(str(daily_rate))
    if rate <= 0:
        raise ValidationError("Daily rate must be positive")

    total = rate * billable_days(start, end)
    return total.quantize(CENT, rounding=ROUND_HALF_UP)
