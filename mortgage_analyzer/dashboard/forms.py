"""Calculator form values to a validated loan request."""

from datetime import date
from decimal import Decimal, InvalidOperation

from mortgage_analyzer.api.schemas import LoanRequest
from mortgage_analyzer.config import settings
from mortgage_analyzer.models.loan import CompoundingMode, PaymentFrequency


def form_number(value, default="0") -> Decimal:
    """Blank or unparseable form values become the benign default."""
    if value is None or value == "":
        return Decimal(default)
    try:
        return Decimal(str(value))
    except InvalidOperation:
        return Decimal(default)


def build_request(
    home_price, down_payment, rate, amortization, term, compounding, frequency,
    extra, start, piti, tax, insurance, hoa, pmi, opp_cost, invest_rate,
) -> LoanRequest:
    """Raises pydantic.ValidationError on out-of-range values, as the API does."""
    use_escrow = bool(piti)
    return LoanRequest(
        home_price=form_number(home_price),
        down_payment=form_number(down_payment),
        annual_rate_pct=form_number(rate),
        amortization_years=form_number(amortization, str(settings.default_amortization_years)),
        term_years=form_number(term, str(settings.default_term_years)),
        compounding=CompoundingMode(compounding),
        frequency=PaymentFrequency(frequency),
        use_escrow=use_escrow,
        tax_rate_pct=form_number(tax) if use_escrow else Decimal("0"),
        insurance_annual=form_number(insurance) if use_escrow else Decimal("0"),
        hoa_monthly=form_number(hoa) if use_escrow else Decimal("0"),
        pmi_rate_pct=form_number(pmi) if use_escrow else Decimal("0"),
        use_opportunity_cost=bool(opp_cost),
        invest_rate_pct=form_number(invest_rate, str(settings.default_invest_rate_pct)),
        extra_payment=form_number(extra),
        start_date=date.fromisoformat(start[:10]) if start else None,
    )
