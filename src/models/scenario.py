from dataclasses import dataclass, field, fields
from datetime import date
from decimal import Decimal
from enum import Enum


class LoanTarget(Enum):
    PRIMARY = "primary"
    SPLIT1 = "split1"
    SPLIT2 = "split2"
    EQUITY = "equity"


@dataclass(frozen=True)
class RateChange:
    effective_date: date
    annual_rate_percent: Decimal  # e.g. Decimal("5.25")


@dataclass(frozen=True)
class ExtraPayment:
    date: date
    amount: Decimal
    description: str = "Extra Payment"
    target: LoanTarget = LoanTarget.PRIMARY


@dataclass(frozen=True)
class StagedExtraPayment:
    """A fixed extra amount paid every month between two dates (inclusive)."""
    start_date: date
    end_date: date
    amount: Decimal
    description: str = "Staged Extra Payment"
    target: LoanTarget = LoanTarget.PRIMARY


@dataclass(frozen=True)
class MiscRepair:
    date: date
    amount: Decimal
    description: str = "Repair"


@dataclass(frozen=True)
class DepreciationItem:
    description: str
    cost_basis: Decimal
    annual_rate_percent: Decimal  # Straight-line, % of cost per year
    start_date: date

    @property
    def annual_depreciation(self) -> Decimal:
        return self.cost_basis * self.annual_rate_percent / 100


@dataclass(frozen=True)
class SplitLoan:
    amount1: Decimal = Decimal("0")
    amount2: Decimal = Decimal("0")
    rate1_percent: Decimal = Decimal("4.5")
    rate2_percent: Decimal = Decimal("5.0")


@dataclass(frozen=True)
class EquityLoan:
    start_date: date
    amount: Decimal = Decimal("0")
    term_years: int = 30
    interest_rate_percent: Decimal = Decimal("4.5")


@dataclass(frozen=True)
class RentalParameters:
    weekly_rent: Decimal = Decimal("0")
    start_date: date | None = None  # None = rent starts with the loan

    @property
    def fortnightly_payment(self) -> Decimal:
        return self.weekly_rent * 2


@dataclass(frozen=True)
class SettlementCosts:
    """One-time costs paid at settlement. All flat amounts except agent fees."""
    stamp_duty: Decimal = Decimal("0")
    transfer_fee: Decimal = Decimal("0")
    mortgage_fee: Decimal = Decimal("0")
    government_fee: Decimal = Decimal("0")
    bank_wealth_package: Decimal = Decimal("0")
    solicitor_fees: Decimal = Decimal("0")
    conveyancer_fees: Decimal = Decimal("0")
    property_inspection: Decimal = Decimal("0")
    furnishings: Decimal = Decimal("0")
    bank_cheque_fee: Decimal = Decimal("0")
    bank_settlement_fee: Decimal = Decimal("0")
    land_titles_office_fees: Decimal = Decimal("0")
    initial_utilities: Decimal = Decimal("0")
    initial_strata_fees: Decimal = Decimal("0")

    # Charged monthly on rental income, not at settlement
    agent_fees_percentage: Decimal = Decimal("0")

    def flat_costs(self) -> list[tuple[str, Decimal]]:
        """(label, amount) for every flat cost, in declaration order."""
        return [
            (f.name.replace("_", " ").title(), getattr(self, f.name))
            for f in fields(self)
            if f.name != "agent_fees_percentage"
        ]


@dataclass(frozen=True)
class RecurringExpenses:
    """Annual totals. Rates and land tax are billed quarterly, insurance monthly."""
    land_tax: Decimal = Decimal("0")
    council_rates: Decimal = Decimal("0")
    strata_rates: Decimal = Decimal("0")
    water_rates: Decimal = Decimal("0")
    insurance: Decimal = Decimal("0")

    @property
    def annual_total(self) -> Decimal:
        return self.land_tax + self.council_rates + self.strata_rates + self.water_rates + self.insurance


@dataclass(frozen=True)
class PropertyScenario:
    # Primary loan
    loan_start_date: date
    loan_amount: Decimal = Decimal("0")
    loan_term_years: int = 30
    interest_rate_percent: Decimal = Decimal("4.5")

    # Optional secondary borrowings
    split_loan: SplitLoan | None = None  # Replaces the primary loan when set
    equity_loan: EquityLoan | None = None

    # Income
    rental: RentalParameters = field(default_factory=RentalParameters)

    # Costs
    settlement_costs: SettlementCosts = field(default_factory=SettlementCosts)
    recurring_expenses: RecurringExpenses = field(default_factory=RecurringExpenses)
    misc_repairs: tuple[MiscRepair, ...] = ()

    # Loan events
    rate_changes: tuple[RateChange, ...] = ()
    extra_payments: tuple[ExtraPayment, ...] = ()
    staged_extra_payments: tuple[StagedExtraPayment, ...] = ()

    # Tax
    depreciation_items: tuple[DepreciationItem, ...] = ()
    fiscal_year_start_month: int = 6  # 0 = January .. 11 = December

    # Yearly projection
    property_value: Decimal = Decimal("0")
    annual_property_value_increase_percent: Decimal = Decimal("0")
    annual_rent_increase_percent: Decimal = Decimal("0")

    @property
    def has_split_loan(self) -> bool:
        return self.split_loan is not None

    @property
    def primary_principal(self) -> Decimal:
        """Amount borrowed on the primary loan, or across both splits."""
        if self.split_loan is not None:
            return self.split_loan.amount1 + self.split_loan.amount2
        return self.loan_amount

    @property
    def has_equity_loan(self) -> bool:
        return self.equity_loan is not None and self.equity_loan.amount > 0

    @property
    def rental_start_date(self) -> date:
        return self.rental.start_date or self.loan_start_date

    def extra_payments_for(self, target: LoanTarget) -> list[ExtraPayment]:
        return [p for p in self.extra_payments if p.target == target]

    def staged_payments_for(self, target: LoanTarget) -> list[StagedExtraPayment]:
        return [p for p in self.staged_extra_payments if p.target == target]
