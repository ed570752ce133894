"""Fortnightly rental income.

Rent is received every 14 days starting on the rental start date, so the
number of payments landing in a calendar month varies between 2 and 3.
"""

from datetime import date, timedelta
from decimal import Decimal

from src.engine.dates import month_end
from src.models.scenario import RentalParameters

PAYMENT_INTERVAL_DAYS = 14


def rental_payment_dates(anchor: date, period_start: date, period_end: date) -> list[date]:
    """Fortnightly payment dates in [period_start, period_end], none before ``anchor``."""
    first = max(anchor, period_start)
    offset = (first - anchor).days
    cycles = -(-offset // PAYMENT_INTERVAL_DAYS)  # ceil
    payment = anchor + timedelta(days=cycles * PAYMENT_INTERVAL_DAYS)

    dates: list[date] = []
    while payment <= period_end:
        dates.append(payment)
        payment += timedelta(days=PAYMENT_INTERVAL_DAYS)
    return dates


def monthly_rental(
    rental: RentalParameters, anchor: date, year: int, month: int
) -> tuple[Decimal, list[date]]:
    """Rent received in a calendar month and the dates it was paid."""
    if rental.weekly_rent <= 0:
        return Decimal("0"), []
    first_day = date(year, month, 1)
    dates = rental_payment_dates(anchor, first_day, month_end(first_day))
    return rental.fortnightly_payment * len(dates), dates
