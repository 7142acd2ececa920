from dataclasses import dataclass, field
from decimal import Decimal


@dataclass(frozen=True)
class PeriodRecord:
    period: int  # 1-based
    year_fraction: Decimal
    date_label: str
    ltv_pct: Decimal  # Against original home price

    # Payment split
    principal: Decimal
    interest: Decimal
    escrow: Decimal  # tax + insurance + hoa + pmi
    extra: Decimal
    payment: Decimal  # principal + interest + escrow + extra
    balance: Decimal  # Ending balance

    # Escrow components
    tax: Decimal = Decimal("0")
    insurance: Decimal = Decimal("0")
    hoa: Decimal = Decimal("0")
    pmi: Decimal = Decimal("0")

    # Running totals through this period
    total_interest: Decimal = Decimal("0")
    total_principal: Decimal = Decimal("0")
    total_extra: Decimal = Decimal("0")
    total_escrow: Decimal = Decimal("0")


@dataclass(frozen=True)
class ScheduleSummary:
    periods_to_payoff: int
    periods_per_year: int
    periodic_pi: Decimal
    total_interest: Decimal = Decimal("0")
    total_principal: Decimal = Decimal("0")
    total_extra: Decimal = Decimal("0")
    total_escrow: Decimal = Decimal("0")


@dataclass(frozen=True)
class ScheduleResult:
    records: tuple[PeriodRecord, ...]
    summary: ScheduleSummary

    @property
    def final_balance(self) -> Decimal:
        return self.records[-1].balance if self.records else Decimal("0")

    @property
    def paid_off(self) -> bool:
        """False when the safety cap stopped the schedule with principal still owed."""
        return self.final_balance == 0


@dataclass(frozen=True)
class YearlyTotals:
    year: int
    principal: Decimal
    interest: Decimal
    extra: Decimal
    escrow: Decimal
    ending_balance: Decimal


@dataclass(frozen=True)
class ProjectionPoint:
    year_fraction: Decimal
    net_worth: Decimal


@dataclass(frozen=True)
class ProjectionPath:
    name: str
    points: tuple[ProjectionPoint, ...] = ()

    @property
    def final_value(self) -> Decimal:
        return self.points[-1].net_worth if self.points else Decimal("0")


@dataclass(frozen=True)
class OpportunityCostProjection:
    """Net worth of paying the loan off early vs investing the same cash flow."""

    payoff_first: ProjectionPath
    invest_extra: ProjectionPath
    horizon: Decimal  # Baseline payoff, in year_fraction units


@dataclass(frozen=True)
class PayoffTime:
    years: int
    periods: int
    unit: str  # "months" or "periods"

    def __str__(self) -> str:
        return f"{self.years} yrs, {self.periods} {self.unit}"


@dataclass(frozen=True)
class PaymentBreakdown:
    principal: Decimal = Decimal("0")
    interest: Decimal = Decimal("0")
    tax: Decimal = Decimal("0")
    insurance: Decimal = Decimal("0")
    hoa: Decimal = Decimal("0")
    pmi: Decimal = Decimal("0")
    extra: Decimal = Decimal("0")

    @property
    def principal_and_interest(self) -> Decimal:
        return self.principal + self.interest

    @property
    def total(self) -> Decimal:
        return (
            self.principal + self.interest + self.tax + self.insurance
            + self.hoa + self.pmi + self.extra
        )


@dataclass
class AnalysisResult:
    baseline: ScheduleResult
    actual: ScheduleResult

    mortgage_amount: Decimal = Decimal("0")
    has_strategy: bool = False
    payoff_time: PayoffTime | None = None
    balance_at_term: Decimal = Decimal("0")
    interest_and_escrow_saved: Decimal = Decimal("0")
    first_payment: PaymentBreakdown = field(default_factory=PaymentBreakdown)
    baseline_years_to_payoff: Decimal = Decimal("0")
    actual_years_to_payoff: Decimal = Decimal("0")
    yearly: list[YearlyTotals] = field(default_factory=list)
    projection: OpportunityCostProjection | None = None
