"""Rate normalization: nominal annual rates to effective per-period rates.

Pure functions: Decimal in, Decimal out. No I/O.
"""

from decimal import Decimal

from mortgage_analyzer.models.loan import CompoundingMode

HUNDRED = Decimal("100")


def effective_periodic_rate(
    annual_rate_pct: Decimal,
    compounding: CompoundingMode,
    periods_per_year: int,
) -> Decimal:
    """Interest rate charged per payment period.

    Semi-annual compounding keeps the true effective annual yield for any
    payment frequency:
        r_p = (1 + r/2) ^ (2/periods_per_year) - 1

    Monthly (nominal) compounding simply pro-rates:
        r_p = r / periods_per_year
    """
    annual_rate = annual_rate_pct / HUNDRED
    if annual_rate == 0:
        return Decimal("0")
    if compounding == CompoundingMode.SEMI_ANNUAL:
        return (1 + annual_rate / 2) ** (Decimal(2) / Decimal(periods_per_year)) - 1
    return annual_rate / periods_per_year


def standard_monthly_rate(annual_rate_pct: Decimal, compounding: CompoundingMode) -> Decimal:
    """Monthly rate of the standard schedule the base payment is priced on.

    For semi-annual compounding this is (1 + r/2)^(1/6) - 1.
    """
    return effective_periodic_rate(annual_rate_pct, compounding, 12)


def invest_rate_per_period(invest_rate_pct: Decimal, periods_per_year: int) -> Decimal:
    """Periodic return equivalent to an annual investment return."""
    annual_rate = invest_rate_pct / HUNDRED
    if annual_rate <= -1:
        raise ValueError(f"Investment return must be above -100%, got {invest_rate_pct}%")
    if annual_rate == 0:
        return Decimal("0")
    return (1 + annual_rate) ** (Decimal(1) / Decimal(periods_per_year)) - 1
