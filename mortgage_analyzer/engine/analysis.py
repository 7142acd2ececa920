"""Analysis orchestrator: baseline vs actual schedules plus derived metrics.

Pure computation. No I/O. LoanInputs in, AnalysisResult out.
"""

import logging
import math
from decimal import Decimal

from mortgage_analyzer.engine.debt import build_schedule, yearly_summary
from mortgage_analyzer.engine.opportunity_cost import project_opportunity_cost
from mortgage_analyzer.models.loan import LoanInputs, PaymentFrequency
from mortgage_analyzer.models.results import (
    AnalysisResult,
    PaymentBreakdown,
    PayoffTime,
    ScheduleResult,
    ScheduleSummary,
)

logger = logging.getLogger(__name__)


def payoff_time(summary: ScheduleSummary, frequency: PaymentFrequency) -> PayoffTime:
    """Whole years plus leftover periods until payoff."""
    years, periods = divmod(summary.periods_to_payoff, summary.periods_per_year)
    unit = "periods" if frequency.is_bi_weekly else "months"
    return PayoffTime(years=years, periods=periods, unit=unit)


def balance_at_term(schedule: ScheduleResult, term_years: Decimal) -> Decimal:
    """Balance owed when the term ends, 0 if the loan is already paid off."""
    term_periods = math.ceil(term_years * schedule.summary.periods_per_year)
    if term_periods < len(schedule.records):
        return schedule.records[max(0, term_periods - 1)].balance
    return Decimal("0")


def first_payment_breakdown(schedule: ScheduleResult) -> PaymentBreakdown:
    if not schedule.records:
        return PaymentBreakdown()
    r = schedule.records[0]
    return PaymentBreakdown(
        principal=r.principal,
        interest=r.interest,
        tax=r.tax,
        insurance=r.insurance,
        hoa=r.hoa,
        pmi=r.pmi,
        extra=r.extra,
    )


def interest_and_escrow_saved(baseline: ScheduleResult, actual: ScheduleResult) -> Decimal:
    """Lifetime interest + escrow avoided by the actual strategy."""
    base_cost = baseline.summary.total_interest + baseline.summary.total_escrow
    actual_cost = actual.summary.total_interest + actual.summary.total_escrow
    return base_cost - actual_cost


def years_to_payoff(summary: ScheduleSummary) -> Decimal:
    return Decimal(summary.periods_to_payoff) / summary.periods_per_year


def run_analysis(inputs: LoanInputs) -> AnalysisResult:
    """Run the complete loan analysis.

    Builds the standard monthly baseline and the user's actual schedule, and
    the pay-debt-vs-invest projection when it is enabled and the strategy
    differs from the baseline.
    """
    baseline = build_schedule(inputs, baseline=True)
    actual = build_schedule(inputs)

    projection = None
    if inputs.use_opportunity_cost and inputs.has_strategy:
        projection = project_opportunity_cost(baseline, actual, inputs)

    logger.debug(
        "Analysis: baseline %d periods, actual %d periods at %d/yr",
        baseline.summary.periods_to_payoff,
        actual.summary.periods_to_payoff,
        actual.summary.periods_per_year,
    )

    return AnalysisResult(
        baseline=baseline,
        actual=actual,
        mortgage_amount=inputs.principal,
        has_strategy=inputs.has_strategy,
        payoff_time=payoff_time(actual.summary, inputs.frequency),
        balance_at_term=balance_at_term(actual, inputs.term_years),
        interest_and_escrow_saved=interest_and_escrow_saved(baseline, actual),
        first_payment=first_payment_breakdown(actual),
        baseline_years_to_payoff=years_to_payoff(baseline.summary),
        actual_years_to_payoff=years_to_payoff(actual.summary),
        yearly=yearly_summary(actual),
        projection=projection,
    )
