"""Fiscal year boundaries.

The fiscal year start month is 0-based (0 = January, 6 = July). Fiscal year
N runs from the start month of calendar year N to the month before it in
year N + 1 and is labelled "FY{N}-{N+1}".
"""

from datetime import date, timedelta

from src.engine.dates import add_months


def fiscal_year_for(year: int, month: int, start_month: int) -> int:
    """Fiscal year containing calendar ``month`` (1-12) of ``year``."""
    return year if month - 1 >= start_month else year - 1


def fiscal_year_of(d: date, start_month: int) -> int:
    return fiscal_year_for(d.year, d.month, start_month)


def fiscal_year_label(fiscal_year: int) -> str:
    return f"FY{fiscal_year}-{fiscal_year + 1}"


def fiscal_year_start(fiscal_year: int, start_month: int) -> date:
    return date(fiscal_year, start_month + 1, 1)


def fiscal_year_end(fiscal_year: int, start_month: int) -> date:
    """Last calendar day of the fiscal year."""
    return add_months(fiscal_year_start(fiscal_year, start_month), 12) - timedelta(days=1)


def months_remaining_in_fiscal_year(d: date, start_month: int) -> int:
    """Months from ``d``'s month to fiscal year end, both inclusive (1-12)."""
    return 12 - ((d.month - 1 - start_month) % 12)
