"""Pydantic schemas for API request/response models."""

from datetime import date
from decimal import Decimal, ROUND_HALF_UP

from pydantic import BaseModel, Field, ValidationError, model_validator

from mortgage_analyzer.config import settings
from mortgage_analyzer.models.loan import CompoundingMode, LoanInputs, PaymentFrequency
from mortgage_analyzer.models.results import (
    AnalysisResult,
    OpportunityCostProjection,
    PeriodRecord,
    ProjectionPath,
    ScheduleSummary,
    YearlyTotals,
)

TWO_PLACES = Decimal("0.01")
FOUR_PLACES = Decimal("0.0001")


def _money(v: Decimal) -> Decimal:
    return v.quantize(TWO_PLACES, ROUND_HALF_UP)


def _ratio(v: Decimal) -> Decimal:
    return v.quantize(FOUR_PLACES, ROUND_HALF_UP)


# ---- Request schemas ----

class LoanRequest(BaseModel):
    home_price: Decimal = Field(..., gt=0, description="Purchase price")
    down_payment: Decimal = Field(Decimal("0"), ge=0)
    annual_rate_pct: Decimal = Field(Decimal("0"), ge=0, description="Nominal annual rate, e.g. 6 for 6%")
    amortization_years: Decimal = Field(Decimal(settings.default_amortization_years), gt=0)
    term_years: Decimal = Field(Decimal(settings.default_term_years), ge=0)
    compounding: CompoundingMode = CompoundingMode.MONTHLY
    frequency: PaymentFrequency = PaymentFrequency.MONTHLY

    use_escrow: bool = False
    tax_rate_pct: Decimal = Field(Decimal("0"), ge=0)
    insurance_annual: Decimal = Field(Decimal("0"), ge=0)
    hoa_monthly: Decimal = Field(Decimal("0"), ge=0)
    pmi_rate_pct: Decimal = Field(Decimal("0"), ge=0)

    use_opportunity_cost: bool = False
    invest_rate_pct: Decimal = Field(
        Decimal(str(settings.default_invest_rate_pct)), gt=-100, description="Annual investment return, %",
    )

    extra_payment: Decimal = Field(Decimal("0"), ge=0, description="Extra principal per period")
    start_date: date | None = Field(None, description="First payment date")

    @model_validator(mode="after")
    def down_payment_within_price(self) -> "LoanRequest":
        if self.down_payment > self.home_price:
            raise ValueError("Down payment cannot exceed home price.")
        return self

    def to_inputs(self) -> LoanInputs:
        return LoanInputs(**self.model_dump())


def validation_message(exc: ValidationError) -> str:
    """First validation error as a one-line message for forms and the CLI."""
    err = exc.errors()[0]
    msg = err["msg"].removeprefix("Value error, ")
    if not err["loc"]:
        return msg
    field = str(err["loc"][-1]).replace("_pct", "").replace("_", " ").title()
    return f"{field}: {msg}"


# ---- Response schemas ----

class PeriodResponse(BaseModel):
    period: int
    year_fraction: Decimal
    date_label: str
    ltv_pct: Decimal
    payment: Decimal
    principal: Decimal
    interest: Decimal
    escrow: Decimal
    tax: Decimal
    insurance: Decimal
    hoa: Decimal
    pmi: Decimal
    extra: Decimal
    balance: Decimal
    total_interest: Decimal
    total_principal: Decimal
    total_extra: Decimal
    total_escrow: Decimal

    @classmethod
    def from_record(cls, r: PeriodRecord) -> "PeriodResponse":
        return cls(
            period=r.period,
            year_fraction=_ratio(r.year_fraction),
            date_label=r.date_label,
            ltv_pct=_ratio(r.ltv_pct),
            payment=_money(r.payment),
            principal=_money(r.principal),
            interest=_money(r.interest),
            escrow=_money(r.escrow),
            tax=_money(r.tax),
            insurance=_money(r.insurance),
            hoa=_money(r.hoa),
            pmi=_money(r.pmi),
            extra=_money(r.extra),
            balance=_money(r.balance),
            total_interest=_money(r.total_interest),
            total_principal=_money(r.total_principal),
            total_extra=_money(r.total_extra),
            total_escrow=_money(r.total_escrow),
        )


class SummaryResponse(BaseModel):
    periods_to_payoff: int
    periods_per_year: int
    periodic_pi: Decimal
    total_interest: Decimal
    total_principal: Decimal
    total_extra: Decimal
    total_escrow: Decimal
    paid_off: bool = True

    @classmethod
    def from_summary(cls, s: ScheduleSummary, paid_off: bool = True) -> "SummaryResponse":
        return cls(
            periods_to_payoff=s.periods_to_payoff,
            periods_per_year=s.periods_per_year,
            periodic_pi=_money(s.periodic_pi),
            total_interest=_money(s.total_interest),
            total_principal=_money(s.total_principal),
            total_extra=_money(s.total_extra),
            total_escrow=_money(s.total_escrow),
            paid_off=paid_off,
        )


class ScheduleResponse(BaseModel):
    summary: SummaryResponse
    records: list[PeriodResponse]


class YearlyTotalsResponse(BaseModel):
    year: int
    principal: Decimal
    interest: Decimal
    extra: Decimal
    escrow: Decimal
    ending_balance: Decimal

    @classmethod
    def from_totals(cls, y: YearlyTotals) -> "YearlyTotalsResponse":
        return cls(
            year=y.year,
            principal=_money(y.principal),
            interest=_money(y.interest),
            extra=_money(y.extra),
            escrow=_money(y.escrow),
            ending_balance=_money(y.ending_balance),
        )


class ProjectionPathResponse(BaseModel):
    name: str
    year_fractions: list[Decimal]
    net_worth: list[Decimal]

    @classmethod
    def from_path(cls, path: ProjectionPath) -> "ProjectionPathResponse":
        return cls(
            name=path.name,
            year_fractions=[_ratio(p.year_fraction) for p in path.points],
            net_worth=[_money(p.net_worth) for p in path.points],
        )


class ProjectionResponse(BaseModel):
    horizon: Decimal
    payoff_first: ProjectionPathResponse
    invest_extra: ProjectionPathResponse

    @classmethod
    def from_projection(cls, p: OpportunityCostProjection) -> "ProjectionResponse":
        return cls(
            horizon=_ratio(p.horizon),
            payoff_first=ProjectionPathResponse.from_path(p.payoff_first),
            invest_extra=ProjectionPathResponse.from_path(p.invest_extra),
        )


class PaymentBreakdownResponse(BaseModel):
    principal: Decimal
    interest: Decimal
    tax: Decimal
    insurance: Decimal
    hoa: Decimal
    pmi: Decimal
    extra: Decimal
    total: Decimal


class AnalysisResponse(BaseModel):
    mortgage_amount: Decimal
    has_strategy: bool
    paid_off_in: str
    balance_at_term: Decimal
    interest_and_escrow_saved: Decimal
    baseline_years_to_payoff: Decimal
    actual_years_to_payoff: Decimal
    first_payment: PaymentBreakdownResponse
    baseline: SummaryResponse
    actual: SummaryResponse
    records: list[PeriodResponse]
    yearly: list[YearlyTotalsResponse]
    projection: ProjectionResponse | None = None

    @classmethod
    def from_result(cls, result: AnalysisResult) -> "AnalysisResponse":
        fp = result.first_payment
        return cls(
            mortgage_amount=_money(result.mortgage_amount),
            has_strategy=result.has_strategy,
            paid_off_in=str(result.payoff_time),
            balance_at_term=_money(result.balance_at_term),
            interest_and_escrow_saved=_money(result.interest_and_escrow_saved),
            baseline_years_to_payoff=_ratio(result.baseline_years_to_payoff),
            actual_years_to_payoff=_ratio(result.actual_years_to_payoff),
            first_payment=PaymentBreakdownResponse(
                principal=_money(fp.principal),
                interest=_money(fp.interest),
                tax=_money(fp.tax),
                insurance=_money(fp.insurance),
                hoa=_money(fp.hoa),
                pmi=_money(fp.pmi),
                extra=_money(fp.extra),
                total=_money(fp.total),
            ),
            baseline=SummaryResponse.from_summary(result.baseline.summary, result.baseline.paid_off),
            actual=SummaryResponse.from_summary(result.actual.summary, result.actual.paid_off),
            records=[PeriodResponse.from_record(r) for r in result.actual.records],
            yearly=[YearlyTotalsResponse.from_totals(y) for y in result.yearly],
            projection=(
                ProjectionResponse.from_projection(result.projection)
                if result.projection is not None else None
            ),
        )
