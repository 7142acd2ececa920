"""Plotly figure builders for the calculator page.

Each builder takes engine results and returns a go.Figure; no Dash state.
"""

import plotly.graph_objects as go

from mortgage_analyzer.engine.debt import PMI_DROP_LTV
from mortgage_analyzer.models.loan import LoanInputs
from mortgage_analyzer.models.results import (
    AnalysisResult,
    OpportunityCostProjection,
    ScheduleResult,
    YearlyTotals,
)

COLORS = {
    "principal": "#2563eb",
    "interest": "#ef4444",
    "escrow": "#f59e0b",
    "insurance": "#8b5cf6",
    "hoa": "#14b8a6",
    "pmi": "#ec4899",
    "extra": "#10b981",
    "balance": "#64748b",
    "invest": "#8b5cf6",
}


def _x(schedule: ScheduleResult) -> list[float]:
    return [float(r.year_fraction) for r in schedule.records]


def term_end_x(result: AnalysisResult, inputs: LoanInputs) -> float:
    """x position of the end of the term on the year_fraction axis."""
    if inputs.start_date is not None and result.baseline.records:
        return float(result.baseline.records[0].year_fraction + inputs.term_years)
    return float(inputs.term_years)


def _add_term_line(fig: go.Figure, x: float) -> None:
    fig.add_vline(
        x=x,
        line=dict(color=COLORS["interest"], width=2, dash="dot"),
        annotation_text="Term End",
        annotation_position="top",
    )


def _layout(fig: go.Figure, title: str, xaxis_title: str, yaxis_title: str) -> go.Figure:
    fig.update_layout(
        title=title,
        xaxis_title=xaxis_title,
        yaxis_title=yaxis_title,
        hovermode="x unified",
        legend=dict(orientation="h", y=-0.2),
        margin=dict(t=65, r=10, l=50, b=40),
    )
    return fig


def payment_breakdown_figure(result: AnalysisResult) -> go.Figure:
    """Donut of the first period's payment components."""
    fp = result.first_payment
    parts = [
        ("Principal", fp.principal, COLORS["principal"]),
        ("Interest", fp.interest, COLORS["interest"]),
        ("Taxes", fp.tax, COLORS["escrow"]),
        ("Insurance", fp.insurance, COLORS["insurance"]),
        ("HOA", fp.hoa, COLORS["hoa"]),
        ("PMI", fp.pmi, COLORS["pmi"]),
        ("Extra", fp.extra, COLORS["extra"]),
    ]
    parts = [p for p in parts if p[1] > 0]

    fig = go.Figure(go.Pie(
        labels=[p[0] for p in parts],
        values=[float(p[1]) for p in parts],
        marker=dict(colors=[p[2] for p in parts]),
        hole=0.75,
        textinfo="none",
        hovertemplate="<b>%{label}</b><br>$%{value:,.2f}<extra></extra>",
    ))
    fig.update_layout(
        showlegend=False,
        margin=dict(t=0, b=0, l=0, r=0),
        annotations=[dict(text=f"<b>Total/Period</b><br>${float(fp.total):,.2f}", showarrow=False)],
    )
    return fig


def principal_interest_figure(result: AnalysisResult) -> go.Figure:
    """Donut of the first period's principal and interest only."""
    fp = result.first_payment
    fig = go.Figure(go.Pie(
        labels=["Principal", "Interest"],
        values=[float(fp.principal), float(fp.interest)],
        marker=dict(colors=[COLORS["principal"], COLORS["interest"]]),
        hole=0.6,
        textinfo="none",
        hovertemplate="<b>%{label}</b><br>$%{value:,.2f}<extra></extra>",
    ))
    fig.update_layout(
        showlegend=False,
        margin=dict(t=0, b=0, l=0, r=0),
        annotations=[dict(
            text=f"<b>P & I Only</b><br>${float(fp.principal_and_interest):,.2f}", showarrow=False,
        )],
    )
    return fig


def periodic_composition_figure(result: AnalysisResult) -> go.Figure:
    """Interest and principal portion of each actual payment."""
    x = _x(result.actual)
    fig = go.Figure()
    fig.add_trace(go.Scatter(
        x=x,
        y=[float(r.interest) for r in result.actual.records],
        name="Interest Portion",
        fill="tozeroy",
        line=dict(color=COLORS["interest"]),
    ))
    fig.add_trace(go.Scatter(
        x=x,
        y=[float(r.principal) for r in result.actual.records],
        name="Principal Portion",
        fill="tonexty",
        line=dict(color=COLORS["principal"]),
    ))
    return _layout(fig, "Periodic Payment Comp.", "Year", "Amount ($)")


def balance_figure(result: AnalysisResult, inputs: LoanInputs) -> go.Figure:
    fig = go.Figure()
    fig.add_trace(go.Scatter(
        x=_x(result.baseline),
        y=[float(r.balance) for r in result.baseline.records],
        name="Balance (Std Monthly)",
        fill="tozeroy",
        line=dict(color=COLORS["principal"]),
    ))
    if result.has_strategy:
        fig.add_trace(go.Scatter(
            x=_x(result.actual),
            y=[float(r.balance) for r in result.actual.records],
            name="Balance (Actual)",
            line=dict(color=COLORS["extra"], width=3),
        ))
    _add_term_line(fig, term_end_x(result, inputs))
    return _layout(fig, "Mortgage Balance Over Time", "Year", "Balance ($)")


def equity_figure(result: AnalysisResult) -> go.Figure:
    """Equity built against the original loan amount."""
    principal = float(result.mortgage_amount)
    fig = go.Figure()
    fig.add_trace(go.Scatter(
        x=_x(result.baseline),
        y=[principal - float(r.balance) for r in result.baseline.records],
        name="Equity (Std Monthly)",
        line=dict(color=COLORS["principal"]),
    ))
    if result.has_strategy:
        fig.add_trace(go.Scatter(
            x=_x(result.actual),
            y=[principal - float(r.balance) for r in result.actual.records],
            name="Equity (Actual)",
            line=dict(color=COLORS["extra"]),
        ))
    return _layout(fig, "Equity Build-Up", "Year", "Equity ($)")


def cumulative_outflow_figure(result: AnalysisResult, inputs: LoanInputs) -> go.Figure:
    x = _x(result.actual)
    records = result.actual.records
    fig = go.Figure()
    fig.add_trace(go.Scatter(
        x=x, y=[float(r.total_interest) for r in records],
        name="Interest", stackgroup="one", line=dict(color=COLORS["interest"]),
    ))
    fig.add_trace(go.Scatter(
        x=x, y=[float(r.total_principal) for r in records],
        name="Principal", stackgroup="one", line=dict(color=COLORS["principal"]),
    ))
    if inputs.use_escrow:
        fig.add_trace(go.Scatter(
            x=x, y=[float(r.total_escrow) for r in records],
            name="Escrow", stackgroup="one", line=dict(color=COLORS["escrow"]),
        ))
    return _layout(fig, "Cumulative Outflow", "Year", "Total Paid ($)")


def annual_split_figure(yearly: list[YearlyTotals], use_escrow: bool) -> go.Figure:
    years = [y.year for y in yearly]
    series = [("Interest", "interest", COLORS["interest"])]
    if use_escrow:
        series.append(("Escrow", "escrow", COLORS["escrow"]))
    series += [
        ("Principal", "principal", COLORS["principal"]),
        ("Extra", "extra", COLORS["extra"]),
    ]

    fig = go.Figure()
    for name, attr, color in series:
        fig.add_trace(go.Bar(
            x=years, y=[float(getattr(y, attr)) for y in yearly],
            name=name, marker_color=color,
        ))
    fig.update_layout(barmode="stack")
    return _layout(fig, "Annual Cash Flow Split", "Year", "Amount ($)")


def ltv_figure(result: AnalysisResult, inputs: LoanInputs) -> go.Figure:
    """Loan-to-value against the 80% line where PMI drops."""
    fig = go.Figure()
    fig.add_trace(go.Scatter(
        x=_x(result.baseline),
        y=[float(r.ltv_pct) for r in result.baseline.records],
        name="LTV (Std)",
        line=dict(color=COLORS["principal"]),
    ))
    if result.has_strategy:
        fig.add_trace(go.Scatter(
            x=_x(result.actual),
            y=[float(r.ltv_pct) for r in result.actual.records],
            name="LTV (Actual)",
            line=dict(color=COLORS["extra"], width=3),
        ))
    first_ltv = float(result.actual.records[0].ltv_pct) if result.actual.records else 100.0
    fig.update_yaxes(range=[0, max(105.0, first_ltv)])
    fig.add_hline(
        y=float(PMI_DROP_LTV * 100),
        line=dict(color=COLORS["interest"], width=2, dash="dash"),
        annotation_text="80% LTV (PMI Drops)",
        annotation_position="bottom right",
    )
    _add_term_line(fig, term_end_x(result, inputs))
    return _layout(fig, "LTV & PMI Drop", "Year", "LTV (%)")


def lifetime_cost_figure(result: AnalysisResult, use_escrow: bool) -> go.Figure:
    s = result.actual.summary
    series = [("Interest", s.total_interest, COLORS["interest"])]
    if use_escrow:
        series.append(("Escrow", s.total_escrow, COLORS["escrow"]))
    series += [
        ("Principal", s.total_principal, COLORS["principal"]),
        ("Extra Payments", s.total_extra, COLORS["extra"]),
    ]

    fig = go.Figure()
    for name, value, color in series:
        fig.add_trace(go.Bar(x=["Total Cost"], y=[float(value)], name=name, marker_color=color))
    fig.update_layout(barmode="stack")
    return _layout(fig, "Lifetime Cost Breakdown", "", "Amount ($)")


def opportunity_cost_figure(projection: OpportunityCostProjection) -> go.Figure:
    fig = go.Figure()
    for path, color, dash in (
        (projection.payoff_first, COLORS["extra"], None),
        (projection.invest_extra, COLORS["invest"], "dot"),
    ):
        fig.add_trace(go.Scatter(
            x=[float(p.year_fraction) for p in path.points],
            y=[float(p.net_worth) for p in path.points],
            name=path.name,
            line=dict(color=color, width=3, dash=dash),
        ))
    return _layout(fig, "Projection: Pay Debt vs Invest", "Year", "Net Worth ($)")


def total_cost_comparison_figure(result: AnalysisResult) -> go.Figure:
    """Interest + escrow, standard monthly vs actual."""
    base = result.baseline.summary
    actual = result.actual.summary
    costs = [
        float(base.total_interest + base.total_escrow),
        float(actual.total_interest + actual.total_escrow),
    ]
    fig = go.Figure(go.Bar(
        x=["Std Monthly", "Actual"],
        y=costs,
        text=[f"${c:,.2f}" for c in costs],
        textposition="auto",
        marker_color=[COLORS["interest"], COLORS["extra"]],
    ))
    return _layout(fig, "Total Cost Comparison", "", "$")


def payoff_time_figure(result: AnalysisResult) -> go.Figure:
    years = [
        round(float(result.baseline_years_to_payoff), 1),
        round(float(result.actual_years_to_payoff), 1),
    ]
    fig = go.Figure(go.Bar(
        x=["Std Monthly", "Actual"],
        y=years,
        text=[f"{y:.1f} Years" for y in years],
        textposition="auto",
        marker_color=[COLORS["principal"], COLORS["extra"]],
    ))
    return _layout(fig, "Time to Pay Off", "", "Years")
