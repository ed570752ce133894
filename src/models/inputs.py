"""Pydantic input schemas: loose form/JSON data in, frozen PropertyScenario out.

Amounts that are missing or not numeric become 0, missing collections become
empty, and list rows without a date are dropped. Dates that are present but
malformed raise a ValidationError.
"""

import logging
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, Field, field_validator

from src.config import settings
from src.models.scenario import (
    DepreciationItem,
    EquityLoan,
    ExtraPayment,
    LoanTarget,
    MiscRepair,
    PropertyScenario,
    RateChange,
    RecurringExpenses,
    RentalParameters,
    SettlementCosts,
    SplitLoan,
    StagedExtraPayment,
)

logger = logging.getLogger(__name__)

# Form names for extra payment targets
_TARGET_ALIASES = {
    "splitloan1": LoanTarget.SPLIT1,
    "splitloan2": LoanTarget.SPLIT2,
    "equityloan": LoanTarget.EQUITY,
}


def parse_decimal(value: Any) -> Decimal | None:
    """Decimal from a number or numeric string ("1,250.50"); None if not numeric."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, Decimal):
        return value if value.is_finite() else None
    try:
        result = Decimal(str(value).replace(",", "").replace("$", "").strip())
    except (InvalidOperation, ValueError):
        return None
    return result if result.is_finite() else None


def _money(value: Any) -> Decimal:
    result = parse_decimal(value)
    return result if result is not None else Decimal("0")


def _blank_to_none(value: Any) -> Any:
    if isinstance(value, str) and not value.strip():
        return None
    return value


Money = Annotated[Decimal, BeforeValidator(_money)]
OptionalMoney = Annotated[Decimal | None, BeforeValidator(parse_decimal)]
OptionalDate = Annotated[date | None, BeforeValidator(_blank_to_none)]


def _loan_target(value: Any) -> Any:
    if value is None or value == "":
        return LoanTarget.PRIMARY
    if isinstance(value, str):
        return _TARGET_ALIASES.get(value.replace("_", "").lower(), value.lower())
    return value


Target = Annotated[LoanTarget, BeforeValidator(_loan_target)]


def _positive_int_or(default: int):
    def validate(value: Any) -> int:
        number = parse_decimal(value)
        if number is None or number <= 0:
            return default
        return int(number)
    return validate


class SplitLoanInput(BaseModel):
    amount1: Money = Decimal("0")
    amount2: Money = Decimal("0")
    rate1_percent: OptionalMoney = None
    rate2_percent: OptionalMoney = None

    def to_model(self) -> SplitLoan:
        return SplitLoan(
            amount1=self.amount1,
            amount2=self.amount2,
            rate1_percent=self.rate1_percent if self.rate1_percent is not None else Decimal("4.5"),
            rate2_percent=self.rate2_percent if self.rate2_percent is not None else Decimal("5.0"),
        )


class EquityLoanInput(BaseModel):
    start_date: OptionalDate = None
    amount: Money = Decimal("0")
    term_years: Annotated[int, BeforeValidator(_positive_int_or(settings.default_loan_term_years))] = (
        settings.default_loan_term_years
    )
    interest_rate_percent: OptionalMoney = None

    def to_model(self, default_start: date) -> EquityLoan:
        return EquityLoan(
            start_date=self.start_date or default_start,
            amount=self.amount,
            term_years=self.term_years,
            interest_rate_percent=(
                self.interest_rate_percent
                if self.interest_rate_percent is not None
                else settings.default_interest_rate_percent
            ),
        )


class SettlementCostsInput(BaseModel):
    stamp_duty: Money = Decimal("0")
    transfer_fee: Money = Decimal("0")
    mortgage_fee: Money = Decimal("0")
    government_fee: Money = Decimal("0")
    bank_wealth_package: Money = Decimal("0")
    solicitor_fees: Money = Decimal("0")
    conveyancer_fees: Money = Decimal("0")
    property_inspection: Money = Decimal("0")
    furnishings: Money = Decimal("0")
    bank_cheque_fee: Money = Decimal("0")
    bank_settlement_fee: Money = Decimal("0")
    land_titles_office_fees: Money = Decimal("0")
    initial_utilities: Money = Decimal("0")
    initial_strata_fees: Money = Decimal("0")
    agent_fees_percentage: Money = Decimal("0")

    def to_model(self) -> SettlementCosts:
        return SettlementCosts(**self.model_dump())


class RecurringExpensesInput(BaseModel):
    land_tax: Money = Decimal("0")
    council_rates: Money = Decimal("0")
    strata_rates: Money = Decimal("0")
    water_rates: Money = Decimal("0")
    insurance: Money = Decimal("0")

    def to_model(self) -> RecurringExpenses:
        return RecurringExpenses(**self.model_dump())


class RateChangeInput(BaseModel):
    date: OptionalDate = None
    rate_percent: OptionalMoney = None


class MiscRepairInput(BaseModel):
    date: OptionalDate = None
    amount: OptionalMoney = None
    description: str | None = None


class ExtraPaymentInput(BaseModel):
    date: OptionalDate = None
    amount: OptionalMoney = None
    description: str | None = None
    target: Target = LoanTarget.PRIMARY


class StagedExtraPaymentInput(BaseModel):
    start_date: OptionalDate = None
    end_date: OptionalDate = None
    amount: OptionalMoney = None
    description: str | None = None
    target: Target = LoanTarget.PRIMARY


class DepreciationItemInput(BaseModel):
    description: str | None = None
    cost: OptionalMoney = None
    rate_percent: OptionalMoney = None
    start_date: OptionalDate = None


class ScenarioInput(BaseModel):
    """Everything the calculator reads from the form or an imported scenario."""

    model_config = {"extra": "ignore"}

    # Primary loan
    loan_start_date: date = Field(default_factory=date.today)
    loan_amount: Money = Decimal("0")
    loan_term_years: Annotated[int, BeforeValidator(_positive_int_or(settings.default_loan_term_years))] = (
        settings.default_loan_term_years
    )
    interest_rate_percent: OptionalMoney = None
    fiscal_year_start_month: int = settings.fiscal_year_start_month

    split_loan: SplitLoanInput | None = None
    equity_loan: EquityLoanInput | None = None

    # Rental
    weekly_rent: Money = Decimal("0")
    rental_start_date: OptionalDate = None

    # Yearly projection
    property_value: Money = Decimal("0")
    annual_property_value_increase_percent: Money = Decimal("0")
    annual_rent_increase_percent: Money = Decimal("0")

    settlement_costs: SettlementCostsInput = Field(default_factory=SettlementCostsInput)
    recurring_expenses: RecurringExpensesInput = Field(default_factory=RecurringExpensesInput)

    rate_changes: list[RateChangeInput] = Field(default_factory=list)
    misc_repairs: list[MiscRepairInput] = Field(default_factory=list)
    extra_payments: list[ExtraPaymentInput] = Field(default_factory=list)
    staged_extra_payments: list[StagedExtraPaymentInput] = Field(default_factory=list)
    depreciation_items: list[DepreciationItemInput] = Field(default_factory=list)

    @field_validator("fiscal_year_start_month", mode="before")
    @classmethod
    def clamp_fiscal_month(cls, value: Any) -> int:
        number = parse_decimal(value)
        if number is None:
            return settings.fiscal_year_start_month
        return min(11, max(0, int(number)))

    @field_validator(
        "rate_changes",
        "misc_repairs",
        "extra_payments",
        "staged_extra_payments",
        "depreciation_items",
        mode="before",
    )
    @classmethod
    def none_to_empty(cls, value: Any) -> Any:
        return [] if value is None else value

    def to_scenario(self) -> PropertyScenario:
        start = self.loan_start_date

        rate_changes = []
        for rc in self.rate_changes:
            if rc.date is None or rc.rate_percent is None:
                logger.warning("Skipping incomplete rate change: %s", rc)
                continue
            rate_changes.append(RateChange(effective_date=rc.date, annual_rate_percent=rc.rate_percent))

        repairs = tuple(
            MiscRepair(date=r.date, amount=r.amount, description=r.description or "Repair")
            for r in self.misc_repairs
            if r.date is not None and r.amount is not None
        )

        extras = tuple(
            ExtraPayment(
                date=p.date,
                amount=p.amount,
                description=p.description or "Extra Payment",
                target=p.target,
            )
            for p in self.extra_payments
            if p.date is not None and p.amount is not None
        )

        staged = tuple(
            StagedExtraPayment(
                start_date=p.start_date,
                end_date=p.end_date,
                amount=p.amount,
                description=p.description or "Staged Extra Payment",
                target=p.target,
            )
            for p in self.staged_extra_payments
            if p.start_date is not None and p.end_date is not None and p.amount is not None
        )

        depreciation = tuple(
            DepreciationItem(
                description=d.description,
                cost_basis=d.cost,
                annual_rate_percent=(
                    d.rate_percent
                    if d.rate_percent is not None
                    else settings.default_depreciation_rate_percent
                ),
                start_date=d.start_date or start,
            )
            for d in self.depreciation_items
            if d.description and d.cost is not None
        )

        return PropertyScenario(
            loan_start_date=start,
            loan_amount=self.loan_amount,
            loan_term_years=self.loan_term_years,
            interest_rate_percent=(
                self.interest_rate_percent
                if self.interest_rate_percent is not None
                else settings.default_interest_rate_percent
            ),
            split_loan=self.split_loan.to_model() if self.split_loan else None,
            equity_loan=self.equity_loan.to_model(start) if self.equity_loan else None,
            rental=RentalParameters(
                weekly_rent=self.weekly_rent,
                start_date=self.rental_start_date or start,
            ),
            settlement_costs=self.settlement_costs.to_model(),
            recurring_expenses=self.recurring_expenses.to_model(),
            misc_repairs=repairs,
            rate_changes=tuple(sorted(rate_changes, key=lambda c: c.effective_date)),
            extra_payments=extras,
            staged_extra_payments=staged,
            depreciation_items=depreciation,
            fiscal_year_start_month=self.fiscal_year_start_month,
            property_value=self.property_value,
            annual_property_value_increase_percent=self.annual_property_value_increase_percent,
            annual_rent_increase_percent=self.annual_rent_increase_percent,
        )
