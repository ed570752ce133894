"""Canonical test fixtures used across all engine tests.

Fixture: $500K investment unit, 30yr loan at 6% from 1 July 2024.
Rent: $600/week paid fortnightly from 1 August 2024, 7% agent fees.
Fiscal year: July to June.
"""

import pytest
from dataclasses import replace
from datetime import date
from decimal import Decimal

from src.models.scenario import (
    DepreciationItem,
    EquityLoan,
    MiscRepair,
    PropertyScenario,
    RecurringExpenses,
    RentalParameters,
    SettlementCosts,
    SplitLoan,
)


@pytest.fixture
def canonical_scenario() -> PropertyScenario:
    """$500K loan, rented from August, with settlement and running costs."""
    return PropertyScenario(
        loan_start_date=date(2024, 7, 1),
        loan_amount=Decimal("500000"),
        loan_term_years=30,
        interest_rate_percent=Decimal("6"),
        rental=RentalParameters(
            weekly_rent=Decimal("600"),
            start_date=date(2024, 8, 1),
        ),
        settlement_costs=SettlementCosts(
            stamp_duty=Decimal("20000"),
            solicitor_fees=Decimal("1500"),
            agent_fees_percentage=Decimal("7"),
        ),
        recurring_expenses=RecurringExpenses(
            land_tax=Decimal("2000"),
            council_rates=Decimal("1600"),
            strata_rates=Decimal("4000"),
            water_rates=Decimal("800"),
            insurance=Decimal("1200"),
        ),
        misc_repairs=(
            MiscRepair(date=date(2025, 3, 14), amount=Decimal("450"), description="Hot water service"),
        ),
        depreciation_items=(
            DepreciationItem(
                description="Building",
                cost_basis=Decimal("300000"),
                annual_rate_percent=Decimal("2.5"),
                start_date=date(2024, 7, 1),
            ),
            DepreciationItem(
                description="Carpets",
                cost_basis=Decimal("8000"),
                annual_rate_percent=Decimal("10"),
                start_date=date(2024, 10, 15),
            ),
        ),
        fiscal_year_start_month=6,
    )


@pytest.fixture
def split_scenario(canonical_scenario) -> PropertyScenario:
    """Canonical scenario with the loan split into fixed and variable tranches."""
    return replace(
        canonical_scenario,
        split_loan=SplitLoan(
            amount1=Decimal("300000"),
            amount2=Decimal("200000"),
            rate1_percent=Decimal("5.5"),
            rate2_percent=Decimal("6.5"),
        ),
    )


@pytest.fixture
def equity_scenario(canonical_scenario) -> PropertyScenario:
    """Canonical scenario plus a 10yr equity loan drawn in January 2026."""
    return replace(
        canonical_scenario,
        equity_loan=EquityLoan(
            start_date=date(2026, 1, 1),
            amount=Decimal("50000"),
            term_years=10,
            interest_rate_percent=Decimal("7"),
        ),
    )
