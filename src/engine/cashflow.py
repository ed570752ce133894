"""Monthly cash flow: loan payments, recurring and one-off expenses, rent.

Pure functions: dataclasses in, dataclasses out. No I/O.
"""

import logging
from datetime import date
from decimal import Decimal

from src.engine.dates import add_months, same_month
from src.engine.debt import round_money
from src.engine.rental import monthly_rental
from src.models.results import CashFlowEntry, ExpenseLineItem, LoanResult
from src.models.scenario import MiscRepair, PropertyScenario, RecurringExpenses, SettlementCosts

logger = logging.getLogger(__name__)

ZERO = Decimal("0")

# Calendar quarters (Jan, Apr, Jul, Oct), independent of the fiscal year
QUARTER_MONTHS = (1, 4, 7, 10)


def cash_flow_end_date(start: date, *loans: LoanResult) -> date:
    """Later of ``start`` and the last payment date across ``loans``."""
    end = start
    for loan in loans:
        if loan.payoff_date is not None and loan.payoff_date > end:
            end = loan.payoff_date
    return end


def loan_payment_line(label: str, loan: LoanResult, year: int, month: int) -> ExpenseLineItem | None:
    entry = loan.entry_for(year, month)
    if entry is None:
        return None
    notes = f"Interest: ${round_money(entry.interest)}, Principal: ${round_money(entry.principal)}"
    if entry.extra_payment > 0:
        notes += f", Extra: ${round_money(entry.extra_payment)}"
    return ExpenseLineItem(category=label, amount=entry.total_payment, notes=notes)


def recurring_expense_lines(expenses: RecurringExpenses, month: int) -> list[ExpenseLineItem]:
    """Quarterly rates and land tax on calendar-quarter months, insurance every month."""
    lines: list[ExpenseLineItem] = []

    if month in QUARTER_MONTHS:
        quarterly = [
            ("Land Tax (Quarterly)", expenses.land_tax),
            ("Council Rates (Quarterly)", expenses.council_rates),
            ("Strata Rates (Quarterly)", expenses.strata_rates),
            ("Water Rates (Quarterly)", expenses.water_rates),
        ]
        for category, annual in quarterly:
            amount = annual / 4
            if amount > 0:
                lines.append(ExpenseLineItem(
                    category=category,
                    amount=amount,
                    notes=f"Quarterly payment ({round_money(amount)} x 4 = {round_money(annual)} yearly)",
                ))

    insurance = expenses.insurance / 12
    if insurance > 0:
        lines.append(ExpenseLineItem(
            category="Home & Contents Insurance",
            amount=insurance,
            notes=f"Monthly payment ({round_money(insurance)} x 12 = {round_money(expenses.insurance)} yearly)",
        ))

    return lines


def agent_fee_line(settlement: SettlementCosts, rental: Decimal) -> ExpenseLineItem | None:
    if settlement.agent_fees_percentage <= 0 or rental <= 0:
        return None
    return ExpenseLineItem(
        category="Agent Fees",
        amount=rental * settlement.agent_fees_percentage / 100,
        notes=f"{settlement.agent_fees_percentage}% of rental income (${round_money(rental)})",
    )


def repair_lines(repairs: tuple[MiscRepair, ...], current: date) -> list[ExpenseLineItem]:
    return [
        ExpenseLineItem(category="Miscellaneous Repair", amount=r.amount, notes=r.description)
        for r in repairs
        if same_month(r.date, current)
    ]


def settlement_cost_lines(settlement: SettlementCosts) -> list[ExpenseLineItem]:
    return [
        ExpenseLineItem(category=label, amount=amount, notes="One-time settlement cost")
        for label, amount in settlement.flat_costs()
        if amount > 0
    ]


def monthly_cash_flow(
    scenario: PropertyScenario,
    primary: LoanResult,
    equity: LoanResult | None = None,
) -> dict[tuple[int, int], CashFlowEntry]:
    """Build one cash-flow entry per calendar month.

    The range runs from the loan start month to the last payment of the
    primary (or combined split) loan and the equity loan, inclusive.

    Args:
        scenario: Property scenario supplying rent and expense configuration.
        primary: Primary loan result; for split loans, the merged schedule.
        equity: Equity loan result, if any.
    """
    equity = equity or LoanResult()
    start = scenario.loan_start_date
    end = cash_flow_end_date(start, primary, equity)
    rental_anchor = scenario.rental_start_date

    cash_flow: dict[tuple[int, int], CashFlowEntry] = {}
    offset = 0
    current = start
    while (current.year, current.month) <= (end.year, end.month):
        year, month = current.year, current.month

        loan_lines = [
            line for line in (
                loan_payment_line("Primary Loan Payment", primary, year, month),
                loan_payment_line("Equity Loan Payment", equity, year, month),
            )
            if line is not None
        ]
        loan_payment = sum((line.amount for line in loan_lines), ZERO)

        expenses = recurring_expense_lines(scenario.recurring_expenses, month)

        rental, payment_dates = ZERO, []
        # No rent until the iteration date reaches the rental start
        if current >= rental_anchor:
            rental, payment_dates = monthly_rental(scenario.rental, rental_anchor, year, month)
        fee = agent_fee_line(scenario.settlement_costs, rental)
        if fee is not None:
            expenses.append(fee)

        expenses.extend(repair_lines(scenario.misc_repairs, current))

        if offset == 0:
            expenses.extend(settlement_cost_lines(scenario.settlement_costs))

        total_expenses = loan_payment + sum((e.amount for e in expenses), ZERO)
        cash_flow[(year, month)] = CashFlowEntry(
            date=current,
            year=year,
            month=month,
            loan_payment=loan_payment,
            loan_payments=tuple(loan_lines),
            expenses=tuple(expenses),
            rental=rental,
            total_expenses=total_expenses,
            total_income=rental,
            net_cash_flow=rental - total_expenses,
            rental_payment_dates=tuple(payment_dates),
        )

        offset += 1
        current = add_months(start, offset)

    logger.debug("Cash flow built for %d months (%s to %s)", len(cash_flow), start, end)
    return cash_flow


def total_net_cash_flow(cash_flow: dict[tuple[int, int], CashFlowEntry]) -> Decimal:
    return sum((e.net_cash_flow for e in cash_flow.values()), ZERO)
