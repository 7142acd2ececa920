"""Calculator page — loan inputs, payoff metrics, charts and amortization table."""

from datetime import date

import dash
from dash import html, dcc, callback, Input, Output, State
from pydantic import ValidationError

from mortgage_analyzer.api.schemas import validation_message
from mortgage_analyzer.config import settings
from mortgage_analyzer.dashboard import figures
from mortgage_analyzer.dashboard.forms import build_request, form_number
from mortgage_analyzer.engine.analysis import run_analysis
from mortgage_analyzer.models.loan import CompoundingMode, LoanInputs, PaymentFrequency
from mortgage_analyzer.models.results import AnalysisResult

dash.register_page(__name__, path="/", name="Calculator")

BTN_STYLE = {
    "padding": "0.75rem 2rem",
    "fontSize": "1rem",
    "backgroundColor": "#1a1a2e",
    "color": "white",
    "border": "none",
    "cursor": "pointer",
}

FIELD_STYLE = {"width": "100%", "padding": "0.5rem", "fontSize": "0.95rem"}

ERROR_STYLE = {
    "backgroundColor": "#fdecea",
    "color": "#b71c1c",
    "padding": "0.75rem 1rem",
    "borderRadius": "8px",
}


def _next_month_start(today: date | None = None) -> date:
    today = today or date.today()
    if today.month == 12:
        return date(today.year + 1, 1, 1)
    return date(today.year, today.month + 1, 1)


# ---------------------------------------------------------------------------
# Layout
# ---------------------------------------------------------------------------


def _field(label, component):
    return html.Div([
        html.Label(label, style={"fontSize": "0.85rem", "marginBottom": "0.25rem", "display": "block"}),
        component,
    ], style={"flex": "1", "minWidth": "140px"})


def _row(*children):
    return html.Div(list(children), style={"display": "flex", "gap": "1rem", "marginBottom": "0.75rem"})


layout = html.Div([
    html.H2("Mortgage Calculator"),

    _row(
        _field("Home Price ($)", dcc.Input(id="home-price", type="number", value=300000, style=FIELD_STYLE)),
        _field("Down Payment ($)", dcc.Input(id="down-payment", type="number", value=60000, style=FIELD_STYLE)),
        _field("Interest Rate (%)", dcc.Input(id="interest-rate", type="number", value=6, step=0.01, style=FIELD_STYLE)),
        _field("Amortization (years)", dcc.Input(
            id="amortization", type="number", value=settings.default_amortization_years, style=FIELD_STYLE,
        )),
        _field("Term (years)", dcc.Input(
            id="term", type="number", value=settings.default_term_years, style=FIELD_STYLE,
        )),
    ),
    _row(
        _field("Compounding", dcc.Dropdown(
            id="compounding",
            options=[
                {"label": "Monthly", "value": CompoundingMode.MONTHLY.value},
                {"label": "Semi-Annual", "value": CompoundingMode.SEMI_ANNUAL.value},
            ],
            value=CompoundingMode.MONTHLY.value,
            clearable=False,
        )),
        _field("Payment Frequency", dcc.Dropdown(
            id="payment-frequency",
            options=[
                {"label": "Monthly", "value": PaymentFrequency.MONTHLY.value},
                {"label": "Semi-Monthly", "value": PaymentFrequency.SEMI_MONTHLY.value},
                {"label": "Bi-Weekly", "value": PaymentFrequency.BI_WEEKLY.value},
                {"label": "Accelerated Bi-Weekly", "value": PaymentFrequency.ACCELERATED_BI_WEEKLY.value},
            ],
            value=PaymentFrequency.MONTHLY.value,
            clearable=False,
        )),
        _field("Extra Payment / Period ($)", dcc.Input(id="extra-payment", type="number", value=0, style=FIELD_STYLE)),
        _field("First Payment Date", dcc.DatePickerSingle(id="first-payment-date", date=_next_month_start())),
    ),

    dcc.Checklist(
        id="piti-toggle",
        options=[{"label": " Include taxes, insurance, HOA & PMI (PITI)", "value": "on"}],
        value=[],
        style={"margin": "0.5rem 0"},
    ),
    _row(
        _field("Property Tax (% of price / yr)", dcc.Input(id="property-tax", type="number", value=1.2, step=0.01, style=FIELD_STYLE)),
        _field("Home Insurance ($ / yr)", dcc.Input(id="home-insurance", type="number", value=1500, style=FIELD_STYLE)),
        _field("HOA ($ / mo)", dcc.Input(id="hoa-fees", type="number", value=0, style=FIELD_STYLE)),
        _field("PMI Rate (% / yr)", dcc.Input(id="pmi-rate", type="number", value=0.5, step=0.01, style=FIELD_STYLE)),
    ),

    dcc.Checklist(
        id="opp-cost-toggle",
        options=[{"label": " Compare paying debt faster vs investing", "value": "on"}],
        value=[],
        style={"margin": "0.5rem 0"},
    ),
    _row(
        _field("Investment Return (% / yr)", dcc.Input(
            id="invest-rate", type="number", value=settings.default_invest_rate_pct, step=0.1, style=FIELD_STYLE,
        )),
    ),

    html.Button("Calculate", id="calculate-btn", n_clicks=0, style=BTN_STYLE),
    dcc.Loading(html.Div(id="calculator-results", style={"marginTop": "2rem"})),
])


# ---------------------------------------------------------------------------
# Callbacks
# ---------------------------------------------------------------------------


@callback(
    Output("calculator-results", "children"),
    Input("calculate-btn", "n_clicks"),
    [
        State("home-price", "value"),
        State("down-payment", "value"),
        State("interest-rate", "value"),
        State("amortization", "value"),
        State("term", "value"),
        State("compounding", "value"),
        State("payment-frequency", "value"),
        State("extra-payment", "value"),
        State("first-payment-date", "date"),
        State("piti-toggle", "value"),
        State("property-tax", "value"),
        State("home-insurance", "value"),
        State("hoa-fees", "value"),
        State("pmi-rate", "value"),
        State("opp-cost-toggle", "value"),
        State("invest-rate", "value"),
    ],
)
def calculate(
    n_clicks, home_price, down_payment, rate, amortization, term, compounding,
    frequency, extra, start, piti, tax, insurance, hoa, pmi, opp_cost, invest_rate,
):
    if form_number(home_price) <= 0:
        return html.Div("Home Price must be a positive number.", style=ERROR_STYLE)

    try:
        req = build_request(
            home_price, down_payment, rate, amortization, term, compounding, frequency,
            extra, start, piti, tax, insurance, hoa, pmi, opp_cost, invest_rate,
        )
    except ValidationError as e:
        return html.Div(validation_message(e), style=ERROR_STYLE)

    inputs = req.to_inputs()
    return build_results(run_analysis(inputs), inputs)


# ---------------------------------------------------------------------------
# Results
# ---------------------------------------------------------------------------


def _dollar(v) -> str:
    return f"${float(v):,.2f}"


def build_results(result: AnalysisResult, inputs: LoanInputs):
    payment_label = "True Periodic Payment (PITI)" if inputs.use_escrow else "Periodic Payment (P & I)"

    summary = html.Div([
        _metric_card("Mortgage Amount", _dollar(result.mortgage_amount)),
        _metric_card(payment_label, _dollar(result.first_payment.total)),
        _metric_card("Balance at Term", _dollar(result.balance_at_term)),
        _metric_card("Paid Off In", str(result.payoff_time)),
        _metric_card("Interest & Escrow Saved", _dollar(result.interest_and_escrow_saved)),
    ], style={"display": "flex", "gap": "1rem", "marginBottom": "2rem", "flexWrap": "wrap"})

    def graph(fig):
        return dcc.Graph(figure=fig, config={"displayModeBar": False}, style={"width": "50%"})

    charts = [
        html.Div([
            graph(figures.payment_breakdown_figure(result)),
            graph(figures.principal_interest_figure(result)),
        ], style={"display": "flex", "gap": "1rem"}),
        html.Div([
            graph(figures.balance_figure(result, inputs)),
            graph(figures.periodic_composition_figure(result)),
        ], style={"display": "flex", "gap": "1rem"}),
        html.Div([
            graph(figures.equity_figure(result)),
            graph(figures.cumulative_outflow_figure(result, inputs)),
        ], style={"display": "flex", "gap": "1rem"}),
        html.Div([
            graph(figures.annual_split_figure(result.yearly, inputs.use_escrow)),
            graph(figures.lifetime_cost_figure(result, inputs.use_escrow)),
        ], style={"display": "flex", "gap": "1rem"}),
    ]
    if inputs.use_escrow:
        charts.append(dcc.Graph(figure=figures.ltv_figure(result, inputs), config={"displayModeBar": False}))
    if result.projection is not None:
        charts.append(dcc.Graph(
            figure=figures.opportunity_cost_figure(result.projection), config={"displayModeBar": False},
        ))
    if result.has_strategy:
        charts.append(html.Div([
            graph(figures.total_cost_comparison_figure(result)),
            graph(figures.payoff_time_figure(result)),
        ], style={"display": "flex", "gap": "1rem"}))

    return html.Div([
        summary,
        *charts,
        html.H3("Amortization Schedule", style={"marginTop": "2rem"}),
        _schedule_table(result, inputs.use_escrow),
    ])


def _schedule_table(result: AnalysisResult, use_escrow: bool):
    header = [html.Th("Date"), html.Th("Payment"), html.Th("Principal"), html.Th("Interest")]
    if use_escrow:
        header.append(html.Th("Escrow"))
    header += [html.Th("Extra"), html.Th("Balance")]

    rows = []
    for r in result.actual.records:
        cells = [
            html.Td(r.date_label),
            html.Td(html.Strong(_dollar(r.payment))),
            html.Td(_dollar(r.principal)),
            html.Td(_dollar(r.interest)),
        ]
        if use_escrow:
            cells.append(html.Td(_dollar(r.escrow), style={"color": "#8b5cf6"}))
        cells += [html.Td(_dollar(r.extra)), html.Td(html.Strong(_dollar(r.balance)))]
        rows.append(html.Tr(cells))

    return html.Table(
        [html.Thead(html.Tr(header)), html.Tbody(rows)],
        style={"width": "100%", "borderCollapse": "collapse", "fontSize": "0.9rem"},
    )


def _metric_card(label, value):
    return html.Div([
        html.Div(value, style={"fontSize": "1.5rem", "fontWeight": "bold"}),
        html.Div(label, style={"fontSize": "0.85rem", "color": "#666"}),
    ], style={
        "backgroundColor": "white",
        "border": "1px solid #ddd",
        "borderRadius": "8px",
        "padding": "1rem 1.5rem",
        "minWidth": "150px",
        "textAlign": "center",
    })
