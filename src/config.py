from decimal import Decimal

from pydantic_settings import BaseSettings


# Flat marginal rate applied to negative gearing losses
DEFAULT_TAX_RATE = Decimal("0.45")


class Settings(BaseSettings):
    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "env_prefix": "PROPCALC_"}

    # Tax
    tax_rate: Decimal = DEFAULT_TAX_RATE

    # Scenario defaults
    fiscal_year_start_month: int = 6  # 0 = January, 6 = July
    default_interest_rate_percent: Decimal = Decimal("4.5")
    default_loan_term_years: int = 30
    default_depreciation_rate_percent: Decimal = Decimal("2.5")


settings = Settings()
