from datetime import date
from decimal import Decimal

from src.engine.debt import amortization_schedule
from src.engine.merge import merge_all, merge_results, merge_schedules
from src.models.results import AmortizationEntry, LoanResult


def _entry(month_index, d, payment, rate="5", extra="0", description=""):
    payment = Decimal(payment)
    return AmortizationEntry(
        month_index=month_index,
        date=d,
        scheduled_payment=payment,
        principal=payment / 2,
        interest=payment / 2,
        ending_balance=Decimal("1000"),
        rate_percent=Decimal(rate),
        extra_payment=Decimal(extra),
        extra_payment_description=description,
        total_payment=payment + Decimal(extra),
    )


class TestMergeSchedules:
    def test_shared_dates_summed(self):
        a = [_entry(1, date(2024, 7, 1), "100"), _entry(2, date(2024, 8, 1), "100")]
        b = [_entry(1, date(2024, 7, 1), "50"), _entry(2, date(2024, 8, 1), "50")]
        merged = merge_schedules(a, b)
        assert len(merged) == 2
        assert merged[0].scheduled_payment == Decimal("150")
        assert merged[0].principal == Decimal("75")
        assert merged[0].ending_balance == Decimal("2000")
        assert merged[0].total_payment == Decimal("150")

    def test_rate_is_simple_mean(self):
        a = [_entry(1, date(2024, 7, 1), "100", rate="5")]
        b = [_entry(1, date(2024, 7, 1), "100", rate="6")]
        assert merge_schedules(a, b)[0].rate_percent == Decimal("5.5")

    def test_unmatched_entries_pass_through(self):
        a = [_entry(1, date(2024, 7, 1), "100"), _entry(2, date(2024, 8, 1), "100")]
        b = [_entry(1, date(2024, 8, 1), "50")]
        merged = merge_schedules(a, b)
        assert merged[0].scheduled_payment == Decimal("100")
        assert merged[1].scheduled_payment == Decimal("150")

    def test_sorted_and_renumbered(self):
        a = [_entry(1, date(2025, 1, 1), "100")]
        b = [_entry(1, date(2024, 7, 1), "50"), _entry(2, date(2024, 8, 1), "50")]
        merged = merge_schedules(a, b)
        assert [e.date for e in merged] == [date(2024, 7, 1), date(2024, 8, 1), date(2025, 1, 1)]
        assert [e.month_index for e in merged] == [1, 2, 3]

    def test_first_description_kept(self):
        a = [_entry(1, date(2024, 7, 1), "100", extra="10", description="Bonus")]
        b = [_entry(1, date(2024, 7, 1), "100", extra="20", description="Refund")]
        merged = merge_schedules(a, b)[0]
        assert merged.extra_payment == Decimal("30")
        assert merged.extra_payment_description == "Bonus"

    def test_commutative_on_money(self):
        a = [_entry(1, date(2024, 7, 1), "100"), _entry(2, date(2024, 8, 1), "100")]
        b = [_entry(1, date(2024, 8, 1), "70"), _entry(2, date(2024, 9, 1), "70")]
        ab = merge_schedules(a, b)
        ba = merge_schedules(b, a)
        assert [(e.date, e.total_payment) for e in ab] == [(e.date, e.total_payment) for e in ba]

    def test_empty_inputs(self):
        assert merge_schedules([], []) == ()
        a = [_entry(1, date(2024, 7, 1), "100")]
        assert merge_schedules(a, []) == tuple(a)

    def test_merge_all(self):
        d = date(2024, 7, 1)
        merged = merge_all([_entry(1, d, "10")], [_entry(1, d, "20")], [_entry(1, d, "30")])
        assert len(merged) == 1
        assert merged[0].scheduled_payment == Decimal("60")


class TestMergeResults:
    def test_split_loans(self):
        start = date(2024, 7, 1)
        split1 = amortization_schedule(Decimal("300000"), 30, Decimal("5.5"), start)
        split2 = amortization_schedule(Decimal("200000"), 30, Decimal("6.5"), start)
        merged = merge_results(split1, split2)
        assert merged.months == 360
        assert merged.total_interest == split1.total_interest + split2.total_interest
        assert merged.total_principal == split1.total_principal + split2.total_principal
        assert merged.monthly_payment == split1.monthly_payment + split2.monthly_payment
        assert merged.schedule[0].interest == split1.schedule[0].interest + split2.schedule[0].interest
        assert merged.schedule[-1].ending_balance == 0

    def test_single_result_returned_as_is(self):
        loan = amortization_schedule(Decimal("100000"), 10, Decimal("5"), date(2024, 7, 1))
        assert merge_results(loan, LoanResult()) is loan

    def test_all_empty(self):
        assert merge_results(LoanResult(), LoanResult()).is_empty
        assert merge_results().is_empty
