"""Combine independently computed loan schedules into a single reporting view.

Used for split loans (two tranches reported as one primary loan) and for the
primary + equity "combined" view.

Rates on shared dates are a simple mean of the two inputs, not weighted by
balance, so the blended rate is only an approximation when balances differ.
"""

from dataclasses import replace
from datetime import date
from decimal import Decimal
from functools import reduce
from typing import Sequence

from src.models.results import AmortizationEntry, LoanResult


def _merge_entries(a: AmortizationEntry, b: AmortizationEntry) -> AmortizationEntry:
    return AmortizationEntry(
        month_index=min(a.month_index, b.month_index),
        date=a.date,
        scheduled_payment=a.scheduled_payment + b.scheduled_payment,
        principal=a.principal + b.principal,
        interest=a.interest + b.interest,
        ending_balance=a.ending_balance + b.ending_balance,
        rate_percent=(a.rate_percent + b.rate_percent) / 2,
        extra_payment=a.extra_payment + b.extra_payment,
        extra_payment_description=a.extra_payment_description or b.extra_payment_description,
        total_payment=a.total_payment + b.total_payment,
    )


def merge_schedules(
    schedule_a: Sequence[AmortizationEntry],
    schedule_b: Sequence[AmortizationEntry],
) -> tuple[AmortizationEntry, ...]:
    """Join two schedules on exact payment date, summing monetary fields.

    Entries without a counterpart pass through unchanged. Output is sorted by
    date; ``month_index`` is the position in the merged schedule.
    """
    by_date: dict[date, AmortizationEntry] = {}
    for entry in [*schedule_a, *schedule_b]:
        existing = by_date.get(entry.date)
        by_date[entry.date] = entry if existing is None else _merge_entries(existing, entry)

    merged = sorted(by_date.values(), key=lambda e: e.date)
    return tuple(
        e if e.month_index == i else replace(e, month_index=i)
        for i, e in enumerate(merged, start=1)
    )


def merge_all(*schedules: Sequence[AmortizationEntry]) -> tuple[AmortizationEntry, ...]:
    """Pairwise merge of any number of schedules."""
    return reduce(merge_schedules, schedules, ())


def merge_results(*results: LoanResult) -> LoanResult:
    """Merge loan results: schedules joined by date, totals summed."""
    non_empty = [r for r in results if not r.is_empty]
    if not non_empty:
        return LoanResult()
    if len(non_empty) == 1:
        return non_empty[0]
    return LoanResult(
        schedule=merge_all(*(r.schedule for r in non_empty)),
        total_interest=sum((r.total_interest for r in non_empty), Decimal("0")),
        total_principal=sum((r.total_principal for r in non_empty), Decimal("0")),
        monthly_payment=sum((r.monthly_payment for r in non_empty), Decimal("0")),
    )
