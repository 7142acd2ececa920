"""Opportunity cost comparison: accelerated payoff vs investing the difference.

Pure functions. No I/O (schedules passed in as arguments).
"""

import logging
from decimal import Decimal

from mortgage_analyzer.engine.rates import invest_rate_per_period
from mortgage_analyzer.models.loan import LoanInputs
from mortgage_analyzer.models.results import (
    OpportunityCostProjection,
    ProjectionPath,
    ProjectionPoint,
    ScheduleResult,
)

logger = logging.getLogger(__name__)

PAYOFF_FIRST = "Pay Off Debt Faster"
INVEST_EXTRA = "Invest Extra Cashflow"


def payoff_first_path(
    actual: ScheduleResult,
    home_price: Decimal,
    invest_rate_pct: Decimal,
    horizon: Decimal,
) -> ProjectionPath:
    """Net worth when the loan is paid down on the accelerated schedule.

    Equity (home price - balance) until payoff, then the freed P&I + extra is
    invested every period until the horizon: home price + portfolio.
    """
    if not actual.records:
        return ProjectionPath(name=PAYOFF_FIRST)

    first = actual.records[0]
    freed = first.principal + first.interest + first.extra
    periods_per_year = actual.summary.periods_per_year
    rate = invest_rate_per_period(invest_rate_pct, periods_per_year)

    points = [ProjectionPoint(r.year_fraction, home_price - r.balance) for r in actual.records]

    portfolio = Decimal("0")
    step = Decimal(1) / periods_per_year
    current = points[-1].year_fraction
    while current < horizon:
        current += step
        portfolio = (portfolio + freed) * (1 + rate)
        points.append(ProjectionPoint(current, home_price + portfolio))

    return ProjectionPath(name=PAYOFF_FIRST, points=tuple(points))


def annual_surplus(baseline: ScheduleResult, actual: ScheduleResult) -> Decimal:
    """Yearly outlay of the actual strategy beyond the baseline's P&I, floored at 0."""
    first_actual = actual.records[0]
    first_base = baseline.records[0]
    annual_budget = (
        (first_actual.principal + first_actual.interest + first_actual.extra)
        * actual.summary.periods_per_year
    )
    annual_base = (first_base.principal + first_base.interest) * baseline.summary.periods_per_year
    return max(Decimal("0"), annual_budget - annual_base)


def invest_extra_path(
    baseline: ScheduleResult,
    actual: ScheduleResult,
    home_price: Decimal,
    invest_rate_pct: Decimal,
) -> ProjectionPath:
    """Net worth when staying on the baseline and investing the difference.

    Contributes annual_surplus / periods_per_year every baseline period:
    home price - baseline balance + portfolio.
    """
    if not baseline.records or not actual.records:
        return ProjectionPath(name=INVEST_EXTRA)

    periods_per_year = baseline.summary.periods_per_year
    rate = invest_rate_per_period(invest_rate_pct, periods_per_year)
    contribution = annual_surplus(baseline, actual) / periods_per_year

    points = []
    portfolio = Decimal("0")
    for r in baseline.records:
        portfolio = (portfolio + contribution) * (1 + rate)
        points.append(ProjectionPoint(r.year_fraction, home_price - r.balance + portfolio))

    return ProjectionPath(name=INVEST_EXTRA, points=tuple(points))


def project_opportunity_cost(
    baseline: ScheduleResult,
    actual: ScheduleResult,
    inputs: LoanInputs,
) -> OpportunityCostProjection:
    """Build both net worth paths over the baseline's payoff horizon."""
    horizon = baseline.records[-1].year_fraction if baseline.records else Decimal("0")
    if actual.records and actual.records[-1].year_fraction > horizon:
        logger.warning(
            "Actual schedule ends after baseline (%s > %s); payoff path is truncated at its payoff",
            actual.records[-1].year_fraction, horizon,
        )

    return OpportunityCostProjection(
        payoff_first=payoff_first_path(actual, inputs.home_price, inputs.invest_rate_pct, horizon),
        invest_extra=invest_extra_path(baseline, actual, inputs.home_price, inputs.invest_rate_pct),
        horizon=horizon,
    )
