from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal


@dataclass(frozen=True)
class AmortizationEntry:
    month_index: int  # 1-based
    date: date
    scheduled_payment: Decimal
    principal: Decimal  # Excludes extra payment
    interest: Decimal
    ending_balance: Decimal
    rate_percent: Decimal
    extra_payment: Decimal = Decimal("0")
    extra_payment_description: str = ""
    total_payment: Decimal = Decimal("0")  # principal + interest + extra


@dataclass(frozen=True)
class LoanResult:
    schedule: tuple[AmortizationEntry, ...] = ()
    total_interest: Decimal = Decimal("0")
    total_principal: Decimal = Decimal("0")
    monthly_payment: Decimal = Decimal("0")

    @property
    def is_empty(self) -> bool:
        return not self.schedule

    @property
    def months(self) -> int:
        return len(self.schedule)

    @property
    def payoff_date(self) -> date | None:
        return self.schedule[-1].date if self.schedule else None

    @property
    def total_extra_payments(self) -> Decimal:
        return sum((e.extra_payment for e in self.schedule), Decimal("0"))

    def entry_for(self, year: int, month: int) -> AmortizationEntry | None:
        """First schedule entry falling in the given calendar month (1-12)."""
        for entry in self.schedule:
            if entry.date.year == year and entry.date.month == month:
                return entry
        return None


@dataclass(frozen=True)
class LoanSummary:
    principal: Decimal
    initial_rate_percent: Decimal
    initial_payment: Decimal
    term_months: int
    actual_months: int
    total_interest: Decimal
    interest_saved: Decimal  # Versus paying the initial payment for the full term
    total_extra_payments: Decimal
    total_paid: Decimal
    payoff_date: date | None

    @property
    def months_saved(self) -> int:
        return self.term_months - self.actual_months


@dataclass(frozen=True)
class RateChangeSummaryEntry:
    month_index: int
    date: date
    rate_percent: Decimal
    payment: Decimal


@dataclass(frozen=True)
class ExtraPaymentSummaryEntry:
    month_index: int
    date: date
    amount: Decimal
    balance_after: Decimal
    description: str = ""


@dataclass(frozen=True)
class StagedPaymentSummaryEntry:
    start_date: date
    end_date: date
    amount: Decimal
    months_covered: int  # Scheduled months inside the range
    total_contribution: Decimal
    description: str = ""


@dataclass(frozen=True)
class ExpenseLineItem:
    category: str
    amount: Decimal
    notes: str = ""


@dataclass(frozen=True)
class CashFlowEntry:
    date: date
    year: int
    month: int  # 1-12
    loan_payment: Decimal = Decimal("0")
    loan_payments: tuple[ExpenseLineItem, ...] = ()  # Breakdown of loan_payment
    expenses: tuple[ExpenseLineItem, ...] = ()  # Everything except loan payments
    rental: Decimal = Decimal("0")
    total_expenses: Decimal = Decimal("0")
    total_income: Decimal = Decimal("0")
    net_cash_flow: Decimal = Decimal("0")
    rental_payment_dates: tuple[date, ...] = ()

    @property
    def key(self) -> tuple[int, int]:
        return (self.year, self.month)

    @property
    def rental_payment_count(self) -> int:
        return len(self.rental_payment_dates)


@dataclass(frozen=True)
class AnnualSummaryEntry:
    fiscal_year: str  # "FY2024-2025"
    start_year: int
    end_year: int
    total_expenses: Decimal = Decimal("0")
    total_income: Decimal = Decimal("0")
    interest_paid: Decimal = Decimal("0")
    principal_paid: Decimal = Decimal("0")
    depreciation: Decimal = Decimal("0")
    tax_benefit: Decimal = Decimal("0")
    net_position: Decimal = Decimal("0")


@dataclass(frozen=True)
class YearlyInvestmentReport:
    year: int  # Loan year, 1-based
    loan_paid_off: bool = False

    # Debt
    principal_paid: Decimal = Decimal("0")  # Includes extra payments
    interest_paid: Decimal = Decimal("0")
    total_paid: Decimal = Decimal("0")
    remaining_principal: Decimal = Decimal("0")

    # Equity
    property_value: Decimal = Decimal("0")
    equity: Decimal = Decimal("0")  # Value - remaining principal

    # Income
    rental_income: Decimal = Decimal("0")
    expenses: Decimal = Decimal("0")
    net_income: Decimal = Decimal("0")  # Rent - expenses - loan payments
    roi_percent: Decimal = Decimal("0")  # Net income as % of amount borrowed


@dataclass(frozen=True)
class CalculationResult:
    primary: LoanResult = field(default_factory=LoanResult)
    split1: LoanResult = field(default_factory=LoanResult)
    split2: LoanResult = field(default_factory=LoanResult)
    equity: LoanResult = field(default_factory=LoanResult)
    combined: LoanResult = field(default_factory=LoanResult)  # Primary + equity
    cash_flow: dict[tuple[int, int], CashFlowEntry] = field(default_factory=dict)
    annual_summary: dict[str, AnnualSummaryEntry] = field(default_factory=dict)
    yearly_report: tuple[YearlyInvestmentReport, ...] = ()
