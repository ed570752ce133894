"""Negative gearing tax benefit.

A loss on the property (deductible expenses plus depreciation exceeding
rental income) offsets other income at a flat marginal rate.

Pure functions: Decimal in, Decimal out. No I/O.
"""

from decimal import Decimal

from src.config import settings

ZERO = Decimal("0")


def negative_gearing_loss(
    total_expenses: Decimal,
    depreciation: Decimal,
    total_income: Decimal,
) -> Decimal:
    """Deductions in excess of income; zero when the property is positively geared."""
    return max(ZERO, total_expenses + depreciation - total_income)


def tax_benefit(
    total_expenses: Decimal,
    depreciation: Decimal,
    total_income: Decimal,
    tax_rate: Decimal | None = None,
) -> Decimal:
    """Tax saved from a negatively geared year.

    Args:
        tax_rate: Marginal rate as a fraction. Defaults to ``settings.tax_rate``.
    """
    rate = settings.tax_rate if tax_rate is None else tax_rate
    return negative_gearing_loss(total_expenses, depreciation, total_income) * rate


def net_position(total_income: Decimal, total_expenses: Decimal, benefit: Decimal) -> Decimal:
    """Cash position after tax: income - expenses + tax benefit."""
    return total_income - total_expenses + benefit
