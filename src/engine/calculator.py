"""Calculation orchestrator: composes the engine modules into a full result.

Loans → (merge split loans) → monthly cash flow → fiscal year summary, plus
the loan-year investment projection.
Every run builds a fresh CalculationResult; nothing is updated in place.
"""

import logging
import threading

from src.engine.annual import annual_summary
from src.engine.cashflow import monthly_cash_flow
from src.engine.debt import amortization_schedule, expand_staged_payments
from src.engine.merge import merge_results
from src.engine.projection import yearly_investment_report
from src.models.results import CalculationResult, LoanResult
from src.models.scenario import ExtraPayment, LoanTarget, PropertyScenario

logger = logging.getLogger(__name__)


class CalculationError(RuntimeError):
    """Raised when a scenario cannot be calculated."""


def _extras(scenario: PropertyScenario, target: LoanTarget) -> list[ExtraPayment]:
    return scenario.extra_payments_for(target) + expand_staged_payments(
        scenario.staged_payments_for(target)
    )


def build_loans(scenario: PropertyScenario) -> dict[str, LoanResult]:
    """Schedule every loan in the scenario.

    Returns results keyed primary, split1, split2 and equity; loans that do
    not apply are empty. With a split loan, ``primary`` is the merged view of
    both splits.
    """
    split1 = split2 = LoanResult()
    if scenario.split_loan is not None:
        split = scenario.split_loan
        split1 = amortization_schedule(
            principal=split.amount1,
            term_years=scenario.loan_term_years,
            annual_rate_percent=split.rate1_percent,
            start_date=scenario.loan_start_date,
            rate_changes=scenario.rate_changes,
            extra_payments=_extras(scenario, LoanTarget.SPLIT1),
        )
        split2 = amortization_schedule(
            principal=split.amount2,
            term_years=scenario.loan_term_years,
            annual_rate_percent=split.rate2_percent,
            start_date=scenario.loan_start_date,
            rate_changes=scenario.rate_changes,
            extra_payments=_extras(scenario, LoanTarget.SPLIT2),
        )
        primary = merge_results(split1, split2)
    else:
        primary = amortization_schedule(
            principal=scenario.loan_amount,
            term_years=scenario.loan_term_years,
            annual_rate_percent=scenario.interest_rate_percent,
            start_date=scenario.loan_start_date,
            rate_changes=scenario.rate_changes,
            extra_payments=_extras(scenario, LoanTarget.PRIMARY),
        )

    equity = LoanResult()
    if scenario.has_equity_loan:
        loan = scenario.equity_loan
        equity = amortization_schedule(
            principal=loan.amount,
            term_years=loan.term_years,
            annual_rate_percent=loan.interest_rate_percent,
            start_date=loan.start_date,
            rate_changes=scenario.rate_changes,
            extra_payments=_extras(scenario, LoanTarget.EQUITY),
        )

    return {"primary": primary, "split1": split1, "split2": split2, "equity": equity}


def run_calculation(scenario: PropertyScenario) -> CalculationResult:
    """Run the complete calculation for one property scenario.

    Raises:
        CalculationError: Any unexpected failure. No partial result is returned.
    """
    try:
        loans = build_loans(scenario)
        primary, equity = loans["primary"], loans["equity"]

        cash_flow = monthly_cash_flow(scenario, primary, equity)
        summary = annual_summary(
            cash_flow,
            scenario.fiscal_year_start_month,
            scenario.depreciation_items,
            loans=(primary, equity),
        )
        yearly_report = yearly_investment_report(scenario, primary)
    except Exception as e:
        logger.exception("Calculation failed for scenario starting %s", scenario.loan_start_date)
        raise CalculationError(f"Calculation failed: {e}") from e

    logger.info(
        "Calculated %d loan months, %d cash flow months, %d fiscal years",
        primary.months + equity.months,
        len(cash_flow),
        len(summary),
    )
    return CalculationResult(
        primary=primary,
        split1=loans["split1"],
        split2=loans["split2"],
        equity=equity,
        combined=merge_results(primary, equity),
        cash_flow=cash_flow,
        annual_summary=summary,
        yearly_report=tuple(yearly_report),
    )


class Calculator:
    """Holds the latest result for a scenario and serialises recalculation.

    A successful run replaces the result wholesale; a failed run clears it so
    callers never see stale figures.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._result: CalculationResult | None = None

    @property
    def result(self) -> CalculationResult | None:
        return self._result

    def calculate(self, scenario: PropertyScenario) -> CalculationResult:
        with self._lock:
            self._result = None
            result = run_calculation(scenario)
            self._result = result
            return result

    def reset(self) -> None:
        with self._lock:
            self._result = None
