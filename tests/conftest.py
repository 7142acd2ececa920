"""Canonical test fixtures used across all engine tests.

Fixture: $300K home, $60K down (80% LTV), 6% nominal, 30yr amortization, monthly.
"""

from dataclasses import replace
from datetime import date
from decimal import Decimal

import pytest

from mortgage_analyzer.models.loan import LoanInputs, PaymentFrequency


@pytest.fixture
def canonical_loan() -> LoanInputs:
    """$240K loan, standard monthly, no escrow or extra payment."""
    return LoanInputs(
        home_price=Decimal("300000"),
        down_payment=Decimal("60000"),
        annual_rate_pct=Decimal("6"),
        amortization_years=Decimal("30"),
        term_years=Decimal("5"),
    )


@pytest.fixture
def extra_payment_loan(canonical_loan) -> LoanInputs:
    """Canonical loan with $200 extra principal every period."""
    return replace(canonical_loan, extra_payment=Decimal("200"))


@pytest.fixture
def low_down_pmi_loan(canonical_loan) -> LoanInputs:
    """5% down with 0.5% PMI: starts above 80% LTV."""
    return replace(
        canonical_loan,
        down_payment=Decimal("15000"),
        use_escrow=True,
        pmi_rate_pct=Decimal("0.5"),
    )


@pytest.fixture
def accelerated_dated_loan(canonical_loan) -> LoanInputs:
    """Accelerated bi-weekly with escrow, a start date and the invest comparison."""
    return replace(
        canonical_loan,
        frequency=PaymentFrequency.ACCELERATED_BI_WEEKLY,
        use_escrow=True,
        tax_rate_pct=Decimal("1.2"),
        insurance_annual=Decimal("1500"),
        hoa_monthly=Decimal("50"),
        use_opportunity_cost=True,
        invest_rate_pct=Decimal("7"),
        start_date=date(2026, 11, 1),
    )
