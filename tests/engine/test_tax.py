from decimal import Decimal

from src.config import settings
from src.engine.tax import negative_gearing_loss, net_position, tax_benefit


class TestNegativeGearingLoss:
    def test_loss(self):
        """Loss = expenses + depreciation - income."""
        loss = negative_gearing_loss(
            total_expenses=Decimal("40000"),
            depreciation=Decimal("8000"),
            total_income=Decimal("30000"),
        )
        assert loss == Decimal("18000")

    def test_positively_geared(self):
        loss = negative_gearing_loss(
            total_expenses=Decimal("20000"),
            depreciation=Decimal("1000"),
            total_income=Decimal("30000"),
        )
        assert loss == 0


class TestTaxBenefit:
    def test_default_rate(self):
        benefit = tax_benefit(Decimal("40000"), Decimal("8000"), Decimal("30000"))
        assert benefit == Decimal("8100")  # 18000 * 0.45

    def test_positively_geared_no_benefit(self):
        assert tax_benefit(Decimal("20000"), Decimal("0"), Decimal("30000")) == 0

    def test_custom_rate(self):
        benefit = tax_benefit(
            Decimal("40000"), Decimal("8000"), Decimal("30000"), tax_rate=Decimal("0.325")
        )
        assert benefit == Decimal("5850")

    def test_rate_from_settings(self, monkeypatch):
        monkeypatch.setattr(settings, "tax_rate", Decimal("0.30"))
        benefit = tax_benefit(Decimal("40000"), Decimal("8000"), Decimal("30000"))
        assert benefit == Decimal("5400")


class TestNetPosition:
    def test_includes_benefit(self):
        assert net_position(Decimal("30000"), Decimal("40000"), Decimal("8100")) == Decimal("-1900")
