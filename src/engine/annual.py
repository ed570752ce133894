"""Fiscal year summary: income, expenses, loan split, depreciation and tax.

Pure functions: dataclasses in, dataclasses out. No I/O.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable, Mapping

from src.engine.depreciation import fiscal_year_depreciation
from src.engine.fiscal import fiscal_year_for, fiscal_year_label
from src.engine.tax import net_position, tax_benefit
from src.models.results import AnnualSummaryEntry, CashFlowEntry, LoanResult
from src.models.scenario import DepreciationItem

ZERO = Decimal("0")


@dataclass
class _FiscalYearTotals:
    total_expenses: Decimal = ZERO
    total_income: Decimal = ZERO
    interest_paid: Decimal = ZERO
    principal_paid: Decimal = ZERO


def annual_summary(
    cash_flow: Mapping[tuple[int, int], CashFlowEntry],
    fiscal_year_start_month: int,
    depreciation_items: Iterable[DepreciationItem] = (),
    loans: Iterable[LoanResult] = (),
    tax_rate: Decimal | None = None,
) -> dict[str, AnnualSummaryEntry]:
    """Regroup monthly cash flow into fiscal years.

    Interest and principal come from each loan's own schedule entry for the
    month rather than from the cash-flow expense lines.

    Args:
        cash_flow: Monthly entries keyed by (year, month).
        fiscal_year_start_month: 0 = January .. 11 = December.
        depreciation_items: Straight-line depreciating assets.
        loans: Loan results whose interest/principal is reported (primary or
            merged split loan, plus equity).
        tax_rate: Negative gearing rate; defaults to ``settings.tax_rate``.

    Returns:
        Entries keyed by "FY{start}-{end}", in fiscal year order.
    """
    loans = [loan for loan in loans if not loan.is_empty]
    items = list(depreciation_items)

    totals: dict[int, _FiscalYearTotals] = {}
    for entry in sorted(cash_flow.values(), key=lambda e: e.key):
        fy = fiscal_year_for(entry.year, entry.month, fiscal_year_start_month)
        year_totals = totals.setdefault(fy, _FiscalYearTotals())
        year_totals.total_expenses += entry.total_expenses
        year_totals.total_income += entry.total_income

        for loan in loans:
            payment = loan.entry_for(entry.year, entry.month)
            if payment is not None:
                year_totals.interest_paid += payment.interest
                year_totals.principal_paid += payment.principal

    summary: dict[str, AnnualSummaryEntry] = {}
    for fy in sorted(totals):
        t = totals[fy]
        depreciation = fiscal_year_depreciation(items, fy, fiscal_year_start_month)
        benefit = tax_benefit(t.total_expenses, depreciation, t.total_income, tax_rate)
        label = fiscal_year_label(fy)
        summary[label] = AnnualSummaryEntry(
            fiscal_year=label,
            start_year=fy,
            end_year=fy + 1,
            total_expenses=t.total_expenses,
            total_income=t.total_income,
            interest_paid=t.interest_paid,
            principal_paid=t.principal_paid,
            depreciation=depreciation,
            tax_benefit=benefit,
            net_position=net_position(t.total_income, t.total_expenses, benefit),
        )

    return summary


def annual_totals(summary: Mapping[str, AnnualSummaryEntry]) -> dict[str, Decimal]:
    """Whole-horizon totals across all fiscal years."""
    keys = (
        "total_expenses",
        "total_income",
        "interest_paid",
        "principal_paid",
        "depreciation",
        "tax_benefit",
        "net_position",
    )
    return {
        key: sum((getattr(entry, key) for entry in summary.values()), ZERO)
        for key in keys
    }
