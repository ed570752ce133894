"""Straight-line depreciation of fixtures and building items by fiscal year.

Pure functions. An item depreciates at cost x rate per year, pro-rated in the
fiscal year it is purchased by the months remaining in that year, and not at
all before purchase.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable

from src.engine.fiscal import (
    fiscal_year_end,
    fiscal_year_of,
    months_remaining_in_fiscal_year,
)
from src.models.scenario import DepreciationItem

ZERO = Decimal("0")


@dataclass(frozen=True)
class DepreciationLine:
    """Depreciation for one item in one fiscal year."""
    description: str
    fiscal_year: int
    amount: Decimal
    months: int  # 12 for a full year


def item_depreciation(item: DepreciationItem, fiscal_year: int, start_month: int) -> DepreciationLine:
    """Depreciation for ``item`` in ``fiscal_year``.

    Args:
        item: The depreciating asset.
        fiscal_year: Fiscal year number (the calendar year it starts in).
        start_month: Fiscal year start month, 0-based.
    """
    if item.start_date > fiscal_year_end(fiscal_year, start_month):
        return DepreciationLine(item.description, fiscal_year, ZERO, 0)

    annual = item.annual_depreciation
    if fiscal_year_of(item.start_date, start_month) == fiscal_year:
        months = months_remaining_in_fiscal_year(item.start_date, start_month)
        return DepreciationLine(item.description, fiscal_year, annual * months / 12, months)

    return DepreciationLine(item.description, fiscal_year, annual, 12)


def fiscal_year_depreciation(
    items: Iterable[DepreciationItem],
    fiscal_year: int,
    start_month: int,
) -> Decimal:
    """Total depreciation across all items for one fiscal year."""
    return sum(
        (item_depreciation(item, fiscal_year, start_month).amount for item in items),
        ZERO,
    )


def depreciation_schedule(
    items: Iterable[DepreciationItem],
    fiscal_years: Iterable[int],
    start_month: int,
) -> list[DepreciationLine]:
    """Per-item, per-year breakdown, skipping years with nothing to claim."""
    items = list(items)
    lines: list[DepreciationLine] = []
    for fy in fiscal_years:
        for item in items:
            line = item_depreciation(item, fy, start_month)
            if line.amount > 0:
                lines.append(line)
    return lines
