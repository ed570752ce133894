"""Calendar month arithmetic shared by the schedule and cash-flow engines."""

import calendar
from datetime import date


def add_months(dt: date, months: int) -> date:
    """Return ``dt`` moved by ``months`` calendar months.

    The day is clamped to the last valid day (Jan 31 + 1 month = Feb 28/29).
    """
    year = dt.year + (dt.month - 1 + months) // 12
    month = (dt.month - 1 + months) % 12 + 1
    day = min(dt.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)


def month_end(dt: date) -> date:
    return dt.replace(day=calendar.monthrange(dt.year, dt.month)[1])


def same_month(a: date, b: date) -> bool:
    return a.year == b.year and a.month == b.month


def months_between(start: date, end: date) -> int:
    """Whole calendar months from ``start``'s month to ``end``'s month."""
    return (end.year - start.year) * 12 + (end.month - start.month)
