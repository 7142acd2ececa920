from dataclasses import replace
from decimal import Decimal

from mortgage_analyzer.engine.debt import build_schedule
from mortgage_analyzer.engine.opportunity_cost import (
    INVEST_EXTRA,
    PAYOFF_FIRST,
    annual_surplus,
    invest_extra_path,
    payoff_first_path,
    project_opportunity_cost,
)
from mortgage_analyzer.models.loan import PaymentFrequency

TOL = Decimal("1e-9")


def _schedules(loan):
    return build_schedule(loan, baseline=True), build_schedule(loan)


class TestAnnualSurplus:
    def test_extra_payment_surplus(self, extra_payment_loan):
        baseline, actual = _schedules(extra_payment_loan)
        # Same monthly P&I, so the surplus is the extra payment annualized
        assert abs(annual_surplus(baseline, actual) - Decimal("2400")) < TOL

    def test_accelerated_bi_weekly_surplus(self, canonical_loan):
        loan = replace(canonical_loan, frequency=PaymentFrequency.ACCELERATED_BI_WEEKLY)
        baseline, actual = _schedules(loan)
        # 26 half payments = 13 monthly payments, one more than baseline
        expected = baseline.summary.periodic_pi
        assert abs(annual_surplus(baseline, actual) - expected) < TOL

    def test_true_bi_weekly_has_no_surplus(self, canonical_loan):
        loan = replace(canonical_loan, frequency=PaymentFrequency.BI_WEEKLY)
        baseline, actual = _schedules(loan)
        assert annual_surplus(baseline, actual) < TOL


class TestPayoffFirstPath:
    def test_tracks_equity_then_invests(self, extra_payment_loan):
        baseline, actual = _schedules(extra_payment_loan)
        horizon = baseline.records[-1].year_fraction
        path = payoff_first_path(actual, Decimal("300000"), Decimal("7"), horizon)

        assert path.name == PAYOFF_FIRST
        n = len(actual.records)
        for point, r in zip(path.points[:n], actual.records):
            assert point.year_fraction == r.year_fraction
            assert point.net_worth == Decimal("300000") - r.balance

        # After payoff the home is owned outright and the portfolio grows
        invested = path.points[n:]
        assert invested
        for prev, cur in zip(invested, invested[1:]):
            assert cur.net_worth > prev.net_worth
        assert invested[0].net_worth > Decimal("300000")
        assert path.points[-1].year_fraction >= horizon

    def test_first_investment_period(self, extra_payment_loan):
        baseline, actual = _schedules(extra_payment_loan)
        first = actual.records[0]
        freed = first.principal + first.interest + first.extra
        path = payoff_first_path(actual, Decimal("300000"), Decimal("0"), baseline.records[-1].year_fraction)
        assert path.points[len(actual.records)].net_worth == Decimal("300000") + freed

    def test_empty_schedule(self, canonical_loan):
        loan = replace(canonical_loan, down_payment=Decimal("300000"))
        actual = build_schedule(loan)
        path = payoff_first_path(actual, Decimal("300000"), Decimal("7"), Decimal("0"))
        assert path.points == ()


class TestInvestExtraPath:
    def test_one_point_per_baseline_period(self, extra_payment_loan):
        baseline, actual = _schedules(extra_payment_loan)
        path = invest_extra_path(baseline, actual, Decimal("300000"), Decimal("7"))
        assert path.name == INVEST_EXTRA
        assert len(path.points) == len(baseline.records)
        assert [p.year_fraction for p in path.points] == [r.year_fraction for r in baseline.records]

    def test_zero_return_accumulates_contributions(self, extra_payment_loan):
        baseline, actual = _schedules(extra_payment_loan)
        path = invest_extra_path(baseline, actual, Decimal("300000"), Decimal("0"))
        for i, (point, r) in enumerate(zip(path.points, baseline.records), start=1):
            portfolio = point.net_worth - (Decimal("300000") - r.balance)
            assert abs(portfolio - Decimal("200") * i) < TOL

    def test_no_surplus_is_equity_only(self, canonical_loan):
        loan = replace(canonical_loan, frequency=PaymentFrequency.BI_WEEKLY)
        baseline, actual = _schedules(loan)
        path = invest_extra_path(baseline, actual, Decimal("300000"), Decimal("7"))
        for point, r in zip(path.points, baseline.records):
            assert abs(point.net_worth - (Decimal("300000") - r.balance)) < Decimal("1e-6")


class TestProjectOpportunityCost:
    def test_common_horizon(self, extra_payment_loan):
        baseline, actual = _schedules(extra_payment_loan)
        projection = project_opportunity_cost(baseline, actual, extra_payment_loan)
        assert projection.horizon == baseline.records[-1].year_fraction
        assert projection.invest_extra.points[-1].year_fraction == projection.horizon
        assert projection.payoff_first.points[-1].year_fraction >= projection.horizon

    def test_both_paths_end_above_home_price(self, extra_payment_loan):
        baseline, actual = _schedules(extra_payment_loan)
        projection = project_opportunity_cost(baseline, actual, extra_payment_loan)
        # Both strategies own the home outright by the horizon, plus a portfolio
        assert projection.payoff_first.final_value > Decimal("300000")
        assert projection.invest_extra.final_value > Decimal("300000")

    def test_does_not_mutate_schedules(self, extra_payment_loan):
        baseline, actual = _schedules(extra_payment_loan)
        before = (baseline.records, actual.records)
        project_opportunity_cost(baseline, actual, extra_payment_loan)
        assert (baseline.records, actual.records) == before

    def test_dated_projection(self, accelerated_dated_loan):
        baseline, actual = _schedules(accelerated_dated_loan)
        projection = project_opportunity_cost(baseline, actual, accelerated_dated_loan)
        assert projection.horizon > Decimal("2050")
        assert projection.payoff_first.points[0].year_fraction > Decimal("2026")
