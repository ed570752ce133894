"""Amortization schedule computation with rate changes and extra payments.

Pure functions: Decimal in, dataclass out. No I/O.

Payment policy: the scheduled payment is fixed at origination. A rate change
shifts the interest/principal split but not the payment, unless
``recalculate_on_rate_change`` is set, in which case the remaining balance is
re-amortized over the remaining months at the new rate.
"""

from datetime import date
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable

from src.engine.dates import add_months, months_between, same_month
from src.models.results import (
    AmortizationEntry,
    ExtraPaymentSummaryEntry,
    LoanResult,
    LoanSummary,
    RateChangeSummaryEntry,
    StagedPaymentSummaryEntry,
)
from src.models.scenario import ExtraPayment, RateChange, StagedExtraPayment

TWO_PLACES = Decimal("0.01")
ZERO = Decimal("0")

# Residual balance below this is folded into the current month's principal
BALANCE_EPSILON = Decimal("0.005")


def round_money(amount: Decimal) -> Decimal:
    return amount.quantize(TWO_PLACES, ROUND_HALF_UP)


def monthly_payment(principal: Decimal, annual_rate_percent: Decimal, months: int) -> Decimal:
    """Standard amortizing payment for ``months`` payments.

    M = P * [r(1+r)^n] / [(1+r)^n - 1], or P / n when the rate is zero.
    """
    if principal <= 0 or months <= 0:
        return ZERO
    r = Decimal(annual_rate_percent) / 1200
    if r == 0:
        return principal / months
    factor = (1 + r) ** months
    return principal * (r * factor) / (factor - 1)


def active_rate(
    rate_changes: list[RateChange], payment_date: date, initial_rate_percent: Decimal
) -> Decimal:
    """Latest rate change effective on or before ``payment_date``.

    ``rate_changes`` must be sorted by effective date.
    """
    rate = initial_rate_percent
    for change in rate_changes:
        if change.effective_date > payment_date:
            break
        rate = change.annual_rate_percent
    return rate


def expand_staged_payments(staged: Iterable[StagedExtraPayment]) -> list[ExtraPayment]:
    """One ExtraPayment per calendar month covered by each staged payment."""
    payments: list[ExtraPayment] = []
    for sp in staged:
        if sp.amount <= 0 or sp.end_date < sp.start_date:
            continue
        for offset in range(months_between(sp.start_date, sp.end_date) + 1):
            payments.append(ExtraPayment(
                date=add_months(sp.start_date, offset),
                amount=sp.amount,
                description=sp.description,
                target=sp.target,
            ))
    return payments


def _collect_extra(
    extra_payments: list[ExtraPayment],
    payment_date: date,
    applied: set[date],
) -> tuple[Decimal, str]:
    """Sum unapplied extra payments dated in the same month as ``payment_date``.

    ``applied`` is keyed by exact payment date: once an extra dated on a given
    day has been applied, further entries for that day are ignored.
    """
    amount = ZERO
    descriptions: list[str] = []
    for payment in extra_payments:
        if payment.amount <= 0 or payment.date in applied:
            continue
        if not same_month(payment.date, payment_date):
            continue
        applied.add(payment.date)
        amount += payment.amount
        if payment.description and payment.description not in descriptions:
            descriptions.append(payment.description)
    return amount, ", ".join(descriptions)


def amortization_schedule(
    principal: Decimal,
    term_years: int,
    annual_rate_percent: Decimal,
    start_date: date,
    rate_changes: Iterable[RateChange] | None = None,
    extra_payments: Iterable[ExtraPayment] | None = None,
    recalculate_on_rate_change: bool = False,
) -> LoanResult:
    """Generate the month-by-month schedule for one loan.

    Args:
        principal: Loan amount. Zero or negative yields an empty result.
        term_years: Loan term; the schedule never exceeds term_years * 12 entries.
            A balance still outstanding after the last month stays on that entry.
        annual_rate_percent: Initial annual rate in percent (e.g. 6 for 6%).
        start_date: Date of the first payment.
        rate_changes: Rate change events, in any order.
        extra_payments: Extra principal payments already filtered to this loan.
        recalculate_on_rate_change: Re-amortize the payment when the rate changes.
    """
    if principal is None or principal <= 0 or term_years <= 0:
        return LoanResult()

    total_months = term_years * 12
    initial_payment = monthly_payment(principal, annual_rate_percent, total_months)
    changes = sorted(rate_changes or (), key=lambda c: c.effective_date)
    extras = list(extra_payments or ())
    applied: set[date] = set()

    payment = initial_payment
    current_rate = annual_rate_percent
    balance = principal
    total_interest = ZERO
    total_principal = ZERO
    entries: list[AmortizationEntry] = []

    for month in range(1, total_months + 1):
        payment_date = add_months(start_date, month - 1)

        rate = active_rate(changes, payment_date, annual_rate_percent)
        if rate != current_rate:
            current_rate = rate
            if recalculate_on_rate_change:
                payment = monthly_payment(balance, rate, total_months - month + 1)

        interest = balance * rate / 1200
        principal_paid = payment - interest
        scheduled = payment

        # Final payment adjustment
        if principal_paid > balance - BALANCE_EPSILON:
            principal_paid = balance
            scheduled = principal_paid + interest

        extra, description = _collect_extra(extras, payment_date, applied)
        remaining = balance - principal_paid
        if extra > remaining:
            extra = remaining
        if remaining - extra < BALANCE_EPSILON:
            extra = remaining
        if extra <= 0:
            extra = ZERO
            description = ""

        balance = remaining - extra
        total_interest += interest
        total_principal += principal_paid + extra

        entries.append(AmortizationEntry(
            month_index=month,
            date=payment_date,
            scheduled_payment=scheduled,
            principal=principal_paid,
            interest=interest,
            ending_balance=balance,
            rate_percent=rate,
            extra_payment=extra,
            extra_payment_description=description,
            total_payment=principal_paid + interest + extra,
        ))

        if balance <= 0:
            break

    return LoanResult(
        schedule=tuple(entries),
        total_interest=total_interest,
        total_principal=total_principal,
        monthly_payment=initial_payment,
    )


def summarize_loan(
    result: LoanResult,
    principal: Decimal,
    annual_rate_percent: Decimal,
    term_years: int,
) -> LoanSummary:
    """Headline figures for a computed loan, including savings from extras."""
    term_months = term_years * 12
    baseline_interest = result.monthly_payment * term_months - principal
    return LoanSummary(
        principal=principal,
        initial_rate_percent=annual_rate_percent,
        initial_payment=result.monthly_payment,
        term_months=term_months,
        actual_months=result.months,
        total_interest=result.total_interest,
        interest_saved=max(ZERO, baseline_interest - result.total_interest) if result.schedule else ZERO,
        total_extra_payments=result.total_extra_payments,
        total_paid=result.total_principal + result.total_interest,
        payoff_date=result.payoff_date,
    )


def rate_change_summary(result: LoanResult) -> list[RateChangeSummaryEntry]:
    """Rate in force at origination and at every month the rate changed."""
    summary: list[RateChangeSummaryEntry] = []
    previous_rate: Decimal | None = None
    for entry in result.schedule:
        if entry.rate_percent != previous_rate:
            summary.append(RateChangeSummaryEntry(
                month_index=entry.month_index,
                date=entry.date,
                rate_percent=entry.rate_percent,
                payment=entry.scheduled_payment,
            ))
            previous_rate = entry.rate_percent
    return summary


def extra_payment_summary(result: LoanResult) -> list[ExtraPaymentSummaryEntry]:
    """Every month an extra payment was applied, with the balance left after it."""
    return [
        ExtraPaymentSummaryEntry(
            month_index=entry.month_index,
            date=entry.date,
            amount=entry.extra_payment,
            balance_after=entry.ending_balance,
            description=entry.extra_payment_description,
        )
        for entry in result.schedule
        if entry.extra_payment > 0
    ]


def staged_payment_summary(
    staged: Iterable[StagedExtraPayment], result: LoanResult
) -> list[StagedPaymentSummaryEntry]:
    """Planned contribution of each staged payment over the months the loan runs.

    Months after payoff are not counted, so a range running past the end of
    the schedule is capped at its last payment.
    """
    summary: list[StagedPaymentSummaryEntry] = []
    for sp in staged:
        covered = 0
        if sp.amount > 0 and sp.end_date >= sp.start_date:
            first = (sp.start_date.year, sp.start_date.month)
            last = (sp.end_date.year, sp.end_date.month)
            covered = sum(
                1 for e in result.schedule if first <= (e.date.year, e.date.month) <= last
            )
        summary.append(StagedPaymentSummaryEntry(
            start_date=sp.start_date,
            end_date=sp.end_date,
            amount=sp.amount,
            months_covered=covered,
            total_contribution=sp.amount * covered,
            description=sp.description,
        ))
    return summary


def yearly_debt_summary(result: LoanResult) -> list[dict[str, Decimal]]:
    """Aggregate an amortization schedule by loan year (12 payments per year).

    Returns list of dicts with keys: year, principal, interest, extra,
    debt_service, ending_balance
    """
    yearly: list[dict[str, Decimal]] = []
    year_principal = ZERO
    year_interest = ZERO
    year_extra = ZERO
    year_debt_service = ZERO

    for p in result.schedule:
        year_principal += p.principal
        year_interest += p.interest
        year_extra += p.extra_payment
        year_debt_service += p.total_payment

        if p.month_index % 12 == 0 or p is result.schedule[-1]:
            year_num = (p.month_index - 1) // 12 + 1
            yearly.append({
                "year": Decimal(year_num),
                "principal": year_principal,
                "interest": year_interest,
                "extra": year_extra,
                "debt_service": year_debt_service,
                "ending_balance": p.ending_balance,
            })
            year_principal = ZERO
            year_interest = ZERO
            year_extra = ZERO
            year_debt_service = ZERO

    return yearly
