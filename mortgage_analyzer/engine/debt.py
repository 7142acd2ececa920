"""Amortization schedule computation.

Pure functions: Decimal in, dataclass out. No I/O.
"""

import logging
import math
from decimal import Decimal

from mortgage_analyzer.engine.dates import period_position
from mortgage_analyzer.engine.rates import effective_periodic_rate, standard_monthly_rate
from mortgage_analyzer.models.loan import LoanInputs, PaymentFrequency
from mortgage_analyzer.models.results import (
    PeriodRecord,
    ScheduleResult,
    ScheduleSummary,
    YearlyTotals,
)

logger = logging.getLogger(__name__)

HUNDRED = Decimal("100")
PAYOFF_EPSILON = Decimal("0.009")  # Balance treated as paid off
RESIDUE_SNAP = Decimal("0.01")  # Smaller ending balances snap to zero
PMI_DROP_LTV = Decimal("0.80")  # Of original home price
SAFETY_CAP_YEARS = 5  # Extra years allowed past the amortization period


def fixed_payment(principal: Decimal, periodic_rate: Decimal, total_periods) -> Decimal:
    """Fixed payment that retires principal over total_periods.

    P * [r(1+r)^n] / [(1+r)^n - 1], or straight-line P / n at zero rate.
    """
    if total_periods <= 0:
        raise ValueError(f"total_periods must be positive, got {total_periods}")
    if principal == 0:
        return Decimal("0")
    if periodic_rate == 0:
        return principal / total_periods
    factor = (1 + periodic_rate) ** total_periods
    return principal * (periodic_rate * factor) / (factor - 1)


def periodic_pi(monthly_pi: Decimal, frequency: PaymentFrequency) -> Decimal:
    """Principal & interest per period, derived from the standard monthly payment.

    Accelerated bi-weekly pays half the monthly amount 26 times a year (13
    monthly payments' worth); true bi-weekly spreads 12 monthly payments over 26.
    """
    if frequency == PaymentFrequency.SEMI_MONTHLY:
        return monthly_pi / 2
    if frequency == PaymentFrequency.BI_WEEKLY:
        return monthly_pi * 12 / 26
    if frequency == PaymentFrequency.ACCELERATED_BI_WEEKLY:
        return monthly_pi / 2
    return monthly_pi


def base_monthly_pi(inputs: LoanInputs) -> Decimal:
    """Monthly P&I of the standard schedule over the full amortization period."""
    return fixed_payment(
        inputs.principal,
        standard_monthly_rate(inputs.annual_rate_pct, inputs.compounding),
        inputs.amortization_years * 12,
    )


def safety_cap(amortization_years: Decimal, periods_per_year: int) -> int:
    """Hard limit on schedule length: the amortization period plus five years."""
    return math.ceil(amortization_years * periods_per_year) + periods_per_year * SAFETY_CAP_YEARS


def build_schedule(inputs: LoanInputs, baseline: bool = False) -> ScheduleResult:
    """Generate the period-by-period schedule until payoff.

    Args:
        inputs: Loan parameters
        baseline: Force standard monthly payments with no extra payment,
            for the comparison reference schedule

    Stops once the balance is within PAYOFF_EPSILON of zero or the safety cap
    is reached. A capped schedule is returned as-is; check `paid_off`.
    """
    frequency = PaymentFrequency.MONTHLY if baseline else inputs.frequency
    extra_payment = Decimal("0") if baseline else inputs.extra_payment
    periods_per_year = frequency.periods_per_year

    principal = inputs.principal
    pi = periodic_pi(base_monthly_pi(inputs), frequency)
    rate = effective_periodic_rate(inputs.annual_rate_pct, inputs.compounding, periods_per_year)

    # Escrow, pro-rated to the payment frequency
    if inputs.use_escrow:
        tax = inputs.home_price * inputs.tax_rate_pct / HUNDRED / periods_per_year
        insurance = inputs.insurance_annual / periods_per_year
        hoa = inputs.hoa_monthly * 12 / periods_per_year
        pmi_rate_pct = inputs.pmi_rate_pct
    else:
        tax = insurance = hoa = pmi_rate_pct = Decimal("0")
    pmi_amount = principal * pmi_rate_pct / HUNDRED / periods_per_year
    pmi_drop_balance = inputs.home_price * PMI_DROP_LTV
    pmi_active = pmi_rate_pct > 0

    if principal > 0 and pi <= principal * rate:
        logger.warning(
            "Periodic payment %s does not cover first-period interest %s; schedule will not amortize",
            pi, principal * rate,
        )

    records: list[PeriodRecord] = []
    balance = principal
    total_interest = Decimal("0")
    total_principal = Decimal("0")
    total_extra = Decimal("0")
    total_escrow = Decimal("0")

    max_periods = safety_cap(inputs.amortization_years, periods_per_year)
    for period in range(1, max_periods + 1):
        if balance <= PAYOFF_EPSILON:
            break

        # PMI cancels for good once the balance reaches 80% of the original price
        if pmi_active and balance <= pmi_drop_balance:
            pmi_active = False
        pmi = pmi_amount if pmi_active else Decimal("0")
        escrow = tax + insurance + hoa + pmi

        interest = balance * rate
        principal_paid = pi - interest
        extra = extra_payment

        # Final payment adjustment
        if principal_paid + extra > balance:
            principal_paid = balance - extra
            if principal_paid < 0:
                extra = balance
                principal_paid = Decimal("0")

        balance -= principal_paid + extra
        if balance < RESIDUE_SNAP:
            balance = Decimal("0")

        total_interest += interest
        total_principal += principal_paid
        total_extra += extra
        total_escrow += escrow

        label, position = period_position(period, periods_per_year, frequency, inputs.start_date)

        records.append(PeriodRecord(
            period=period,
            year_fraction=position,
            date_label=label,
            ltv_pct=balance / inputs.home_price * HUNDRED,
            principal=principal_paid,
            interest=interest,
            escrow=escrow,
            extra=extra,
            payment=principal_paid + interest + escrow + extra,
            balance=balance,
            tax=tax,
            insurance=insurance,
            hoa=hoa,
            pmi=pmi,
            total_interest=total_interest,
            total_principal=total_principal,
            total_extra=total_extra,
            total_escrow=total_escrow,
        ))

    if balance > PAYOFF_EPSILON:
        logger.warning(
            "Schedule hit safety cap of %d periods with %s still owed", max_periods, balance
        )

    return ScheduleResult(
        records=tuple(records),
        summary=ScheduleSummary(
            periods_to_payoff=len(records),
            periods_per_year=periods_per_year,
            periodic_pi=pi,
            total_interest=total_interest,
            total_principal=total_principal,
            total_extra=total_extra,
            total_escrow=total_escrow,
        ),
    )


def yearly_summary(schedule: ScheduleResult) -> list[YearlyTotals]:
    """Aggregate a schedule by whole year of its year_fraction axis.

    Calendar years when the schedule is dated, loan years otherwise.
    """
    yearly: list[YearlyTotals] = []
    current_year: int | None = None
    year_principal = Decimal("0")
    year_interest = Decimal("0")
    year_extra = Decimal("0")
    year_escrow = Decimal("0")
    ending_balance = Decimal("0")

    for r in schedule.records:
        year = math.floor(r.year_fraction)
        if current_year is not None and year != current_year:
            yearly.append(YearlyTotals(
                year=current_year,
                principal=year_principal,
                interest=year_interest,
                extra=year_extra,
                escrow=year_escrow,
                ending_balance=ending_balance,
            ))
            year_principal = Decimal("0")
            year_interest = Decimal("0")
            year_extra = Decimal("0")
            year_escrow = Decimal("0")

        current_year = year
        year_principal += r.principal
        year_interest += r.interest
        year_extra += r.extra
        year_escrow += r.escrow
        ending_balance = r.balance

    if current_year is not None:
        yearly.append(YearlyTotals(
            year=current_year,
            principal=year_principal,
            interest=year_interest,
            extra=year_extra,
            escrow=year_escrow,
            ending_balance=ending_balance,
        ))

    return yearly
