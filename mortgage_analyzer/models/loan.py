from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import Enum

from mortgage_analyzer.config import settings


class CompoundingMode(Enum):
    MONTHLY = "monthly"          # Nominal rate pro-rated per period
    SEMI_ANNUAL = "semi-annual"  # Canadian fixed-rate convention


class PaymentFrequency(Enum):
    MONTHLY = "monthly"
    SEMI_MONTHLY = "semi-monthly"
    BI_WEEKLY = "bi-weekly"
    ACCELERATED_BI_WEEKLY = "accelerated-biweekly"

    @property
    def periods_per_year(self) -> int:
        return _PERIODS_PER_YEAR[self]

    @property
    def is_bi_weekly(self) -> bool:
        return self in (PaymentFrequency.BI_WEEKLY, PaymentFrequency.ACCELERATED_BI_WEEKLY)


_PERIODS_PER_YEAR = {
    PaymentFrequency.MONTHLY: 12,
    PaymentFrequency.SEMI_MONTHLY: 24,
    PaymentFrequency.BI_WEEKLY: 26,
    PaymentFrequency.ACCELERATED_BI_WEEKLY: 26,
}


@dataclass(frozen=True)
class LoanInputs:
    # Purchase
    home_price: Decimal
    down_payment: Decimal = Decimal("0")

    # Financing
    annual_rate_pct: Decimal = Decimal("0")  # e.g. 6 for 6%
    amortization_years: Decimal = Decimal(settings.default_amortization_years)
    term_years: Decimal = Decimal(settings.default_term_years)  # Renewal horizon
    compounding: CompoundingMode = CompoundingMode.MONTHLY
    frequency: PaymentFrequency = PaymentFrequency.MONTHLY

    # Escrow (PITI); ignored unless use_escrow is set
    use_escrow: bool = False
    tax_rate_pct: Decimal = Decimal("0")  # Annual, % of home price
    insurance_annual: Decimal = Decimal("0")
    hoa_monthly: Decimal = Decimal("0")
    pmi_rate_pct: Decimal = Decimal("0")  # Annual, % of original loan

    # Pay debt vs invest comparison
    use_opportunity_cost: bool = False
    invest_rate_pct: Decimal = Decimal(str(settings.default_invest_rate_pct))

    # Constant extra principal per period
    extra_payment: Decimal = Decimal("0")
    start_date: date | None = None

    @property
    def principal(self) -> Decimal:
        return self.home_price - self.down_payment

    @property
    def has_strategy(self) -> bool:
        """True when the actual schedule differs from the standard monthly baseline."""
        return self.extra_payment > 0 or self.frequency != PaymentFrequency.MONTHLY
