"""Loan-year investment projection: property value, equity, net income and ROI.

Loan year N covers payments (N-1)*12+1 through N*12. Property value and rent
grow at flat annual rates, compounding from year 2. Running costs are the
scenario's annual recurring expenses, held flat.

Pure functions: dataclasses in, dataclasses out. No I/O.
"""

from decimal import Decimal

from src.engine.debt import yearly_debt_summary
from src.models.results import LoanResult, YearlyInvestmentReport
from src.models.scenario import PropertyScenario

ZERO = Decimal("0")
WEEKS_PER_YEAR = 52


def grown(amount: Decimal, annual_increase_percent: Decimal, year: int) -> Decimal:
    """``amount`` after ``year - 1`` years of compound growth."""
    return amount * (1 + Decimal(annual_increase_percent) / 100) ** (year - 1)


def annual_rent(scenario: PropertyScenario, year: int) -> Decimal:
    base = scenario.rental.weekly_rent * WEEKS_PER_YEAR
    return grown(base, scenario.annual_rent_increase_percent, year)


def property_value(scenario: PropertyScenario, year: int) -> Decimal:
    return grown(scenario.property_value, scenario.annual_property_value_increase_percent, year)


def yearly_investment_report(
    scenario: PropertyScenario,
    loan: LoanResult,
    years: int | None = None,
) -> list[YearlyInvestmentReport]:
    """Year-by-year returns on the property over the loan term.

    Args:
        scenario: Supplies rent, running costs, valuation and growth rates.
        loan: Primary loan result; for split loans, the merged schedule.
        years: Number of years to project. Defaults to the loan term.

    Years after the loan is paid off carry no loan payments and report the
    full property value as equity.
    """
    years = years or scenario.loan_term_years
    debt_by_year = {int(row["year"]): row for row in yearly_debt_summary(loan)}
    expenses = scenario.recurring_expenses.annual_total
    borrowed = scenario.primary_principal

    reports: list[YearlyInvestmentReport] = []
    for year in range(1, years + 1):
        value = property_value(scenario, year)
        rent = annual_rent(scenario, year)

        debt_year = debt_by_year.get(year)
        if debt_year is None:
            principal = interest = remaining = ZERO
        else:
            principal = debt_year["principal"] + debt_year["extra"]
            interest = debt_year["interest"]
            remaining = debt_year["ending_balance"]
        total_paid = principal + interest

        net_income = rent - expenses - total_paid
        roi = net_income / borrowed * 100 if borrowed > 0 else ZERO

        reports.append(YearlyInvestmentReport(
            year=year,
            loan_paid_off=debt_year is None,
            principal_paid=principal,
            interest_paid=interest,
            total_paid=total_paid,
            remaining_principal=remaining,
            property_value=value,
            equity=value - remaining,
            rental_income=rent,
            expenses=expenses,
            net_income=net_income,
            roi_percent=roi,
        ))

    return reports
