from datetime import date
from decimal import Decimal

from src.engine.rental import monthly_rental, rental_payment_dates
from src.models.scenario import RentalParameters

ANCHOR = date(2024, 7, 1)


class TestRentalPaymentDates:
    def test_three_payment_month(self):
        dates = rental_payment_dates(ANCHOR, date(2024, 7, 1), date(2024, 7, 31))
        assert dates == [date(2024, 7, 1), date(2024, 7, 15), date(2024, 7, 29)]

    def test_following_month_continues_cadence(self):
        dates = rental_payment_dates(ANCHOR, date(2024, 8, 1), date(2024, 8, 31))
        assert dates == [date(2024, 8, 12), date(2024, 8, 26)]

    def test_nothing_before_anchor(self):
        assert rental_payment_dates(ANCHOR, date(2024, 6, 1), date(2024, 6, 30)) == []

    def test_mid_month_anchor(self):
        anchor = date(2024, 7, 20)
        dates = rental_payment_dates(anchor, date(2024, 7, 1), date(2024, 7, 31))
        assert dates == [date(2024, 7, 20)]

    def test_fourteen_day_spacing(self):
        dates = rental_payment_dates(ANCHOR, date(2024, 7, 1), date(2025, 6, 30))
        assert len(dates) == 27
        assert all((b - a).days == 14 for a, b in zip(dates, dates[1:]))


class TestMonthlyRental:
    def test_fortnightly_amount(self):
        rental = RentalParameters(weekly_rent=Decimal("400"))
        amount, dates = monthly_rental(rental, ANCHOR, 2024, 7)
        # 3 fortnightly payments of $800
        assert amount == Decimal("2400")
        assert len(dates) == 3

    def test_two_payment_month(self):
        rental = RentalParameters(weekly_rent=Decimal("400"))
        amount, _ = monthly_rental(rental, ANCHOR, 2024, 8)
        assert amount == Decimal("1600")

    def test_month_bounds_inclusive(self):
        rental = RentalParameters(weekly_rent=Decimal("400"))
        _, july = monthly_rental(rental, ANCHOR, 2024, 7)
        assert july[0] == date(2024, 7, 1)
        _, august = monthly_rental(rental, date(2024, 8, 3), 2024, 8)
        assert august == [date(2024, 8, 3), date(2024, 8, 17), date(2024, 8, 31)]

    def test_no_rent(self):
        rental = RentalParameters(weekly_rent=Decimal("0"))
        assert monthly_rental(rental, ANCHOR, 2024, 7) == (Decimal("0"), [])

    def test_before_rental_start(self):
        rental = RentalParameters(weekly_rent=Decimal("400"))
        amount, dates = monthly_rental(rental, date(2024, 9, 1), 2024, 8)
        assert amount == 0
        assert dates == []
