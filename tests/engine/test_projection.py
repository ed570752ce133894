from dataclasses import replace
from datetime import date
from decimal import Decimal

import pytest

from src.engine.calculator import build_loans
from src.engine.debt import yearly_debt_summary
from src.engine.projection import annual_rent, grown, property_value, yearly_investment_report
from src.models.scenario import ExtraPayment


@pytest.fixture
def growth_scenario(canonical_scenario):
    """Canonical scenario valued at $600K, growing 5% a year with 3% rent rises."""
    return replace(
        canonical_scenario,
        property_value=Decimal("600000"),
        annual_property_value_increase_percent=Decimal("5"),
        annual_rent_increase_percent=Decimal("3"),
    )


def _report(scenario, years=None):
    return yearly_investment_report(scenario, build_loans(scenario)["primary"], years)


class TestGrowth:
    def test_first_year_is_base(self):
        assert grown(Decimal("1000"), Decimal("5"), 1) == Decimal("1000")

    def test_compounds(self):
        assert grown(Decimal("1000"), Decimal("10"), 3) == Decimal("1210")

    def test_property_value(self, growth_scenario):
        assert property_value(growth_scenario, 1) == Decimal("600000")
        assert property_value(growth_scenario, 2) == Decimal("630000")
        assert property_value(growth_scenario, 3) == Decimal("661500")

    def test_annual_rent(self, growth_scenario):
        # $600/week * 52
        assert annual_rent(growth_scenario, 1) == Decimal("31200")
        assert annual_rent(growth_scenario, 2) == Decimal("32136")


class TestYearlyInvestmentReport:
    def test_one_row_per_loan_year(self, growth_scenario):
        report = _report(growth_scenario)
        assert len(report) == 30
        assert [r.year for r in report[:3]] == [1, 2, 3]
        assert not any(r.loan_paid_off for r in report)

    def test_years_override(self, growth_scenario):
        assert len(_report(growth_scenario, years=5)) == 5

    def test_first_year(self, growth_scenario):
        loan = build_loans(growth_scenario)["primary"]
        debt = yearly_debt_summary(loan)[0]
        first = yearly_investment_report(growth_scenario, loan)[0]

        assert first.property_value == Decimal("600000")
        assert first.rental_income == Decimal("31200")
        assert first.expenses == Decimal("9600")
        assert first.principal_paid == debt["principal"]
        assert first.interest_paid == debt["interest"]
        assert first.total_paid == first.principal_paid + first.interest_paid
        assert first.remaining_principal == debt["ending_balance"]

    def test_equity_and_net_income(self, growth_scenario):
        for r in _report(growth_scenario):
            assert r.equity == r.property_value - r.remaining_principal
            assert r.net_income == r.rental_income - r.expenses - r.total_paid
            assert r.roi_percent == r.net_income / Decimal("500000") * 100

    def test_equity_grows(self, growth_scenario):
        report = _report(growth_scenario)
        assert report[1].equity > report[0].equity
        assert report[-1].remaining_principal < Decimal("0.01")

    def test_years_after_payoff(self, growth_scenario):
        scenario = replace(
            growth_scenario,
            extra_payments=(ExtraPayment(date=date(2025, 1, 1), amount=Decimal("1000000")),),
        )
        report = _report(scenario)
        assert len(report) == 30
        assert not report[0].loan_paid_off
        assert abs(report[0].principal_paid - Decimal("500000")) < Decimal("0.000001")
        assert report[0].remaining_principal == 0

        second = report[1]
        assert second.loan_paid_off
        assert second.total_paid == 0
        assert second.equity == second.property_value
        assert second.net_income == second.rental_income - second.expenses

    def test_extras_count_as_principal(self, growth_scenario):
        scenario = replace(
            growth_scenario,
            extra_payments=(ExtraPayment(date=date(2024, 12, 1), amount=Decimal("20000")),),
        )
        debt = yearly_debt_summary(build_loans(scenario)["primary"])[0]
        first = _report(scenario)[0]
        assert first.principal_paid == debt["principal"] + Decimal("20000")

    def test_nothing_borrowed(self, growth_scenario):
        scenario = replace(growth_scenario, loan_amount=Decimal("0"))
        report = _report(scenario)
        assert len(report) == 30
        assert all(r.roi_percent == 0 for r in report)
        assert all(r.loan_paid_off for r in report)
        assert report[0].equity == Decimal("600000")

    def test_split_loan_principal(self, split_scenario):
        assert split_scenario.primary_principal == Decimal("500000")
        report = _report(split_scenario)
        assert len(report) == 30
        first = report[0]
        assert first.roi_percent == first.net_income / Decimal("500000") * 100
