"""Installment simulator: flat vs declining-balance for the same purchase."""

from decimal import Decimal, InvalidOperation

import dash
from dash import html, dcc, callback, Input, Output, State, no_update

from cardwise.dashboard.figures import balance_curves, interest_split
from cardwise.engine.amortization import annuity_schedule, flat_schedule
from cardwise.engine.effective_rate import flat_to_effective_annual_rate
from cardwise.engine.errors import InvalidArgument
from cardwise.engine.installments import DEFAULT_TENORS, principal_with_fees

dash.register_page(__name__, path="/simulator", name="Installment Simulator")

BTN_STYLE = {
    "padding": "0.75rem 2rem",
    "fontSize": "1rem",
    "backgroundColor": "#1a1a2e",
    "color": "white",
    "border": "none",
    "cursor": "pointer",
}

FIELD_STYLE = {"width": "100%", "padding": "0.5rem", "fontSize": "0.95rem"}


def _field(label, component):
    return html.Div([
        html.Label(label, style={"fontSize": "0.85rem", "marginBottom": "0.25rem", "display": "block"}),
        component,
    ], style={"flex": "1", "minWidth": "140px"})


def _kpi(label, value):
    return html.Div([
        html.Div(label, style={"fontSize": "0.8rem", "color": "#666"}),
        html.Div(value, style={"fontSize": "1.4rem", "fontWeight": "bold"}),
    ], style={"padding": "1rem", "border": "1px solid #ddd", "borderRadius": "6px", "flex": "1"})


layout = html.Div([
    html.H2("Installment Simulator"),
    html.P("Compare a flat-rate plan with a declining-balance plan for the same purchase."),

    html.Div([
        _field("Transaction Amount", dcc.Input(id="sim-amount", type="number", placeholder="5000000", style=FIELD_STYLE)),
        _field("Tenor (months)", dcc.Dropdown(
            id="sim-tenor",
            options=[{"label": f"{t} months", "value": t} for t in DEFAULT_TENORS],
            value=12,
            clearable=False,
        )),
        _field("Annual Flat Rate (%)", dcc.Input(id="sim-rate", type="number", placeholder="21", step=0.01, style=FIELD_STYLE)),
    ], style={"display": "flex", "gap": "1rem", "marginBottom": "0.75rem"}),
    html.Div([
        _field("Bank Admin Fee (%)", dcc.Input(id="sim-bank-fee", type="number", placeholder="1.5", step=0.01, style=FIELD_STYLE)),
        _field("Marketplace Admin Fee (%)", dcc.Input(id="sim-market-fee", type="number", placeholder="0.5", step=0.01, style=FIELD_STYLE)),
        html.Div([
            html.Label(" ", style={"fontSize": "0.85rem", "display": "block"}),
            html.Button("Simulate", id="sim-btn", n_clicks=0, style=BTN_STYLE),
        ], style={"flex": "0 0 auto"}),
    ], style={"display": "flex", "gap": "1rem", "alignItems": "end", "marginBottom": "1.5rem"}),

    html.Div(id="sim-error", style={"color": "#e94560", "marginBottom": "1rem"}),
    html.Div(id="sim-kpis", style={"display": "flex", "gap": "1rem", "marginBottom": "1.5rem"}),
    dcc.Graph(id="sim-balance-chart"),
    dcc.Graph(id="sim-split-chart"),
])


def _to_decimal(value) -> Decimal | None:
    if value in (None, ""):
        return None
    try:
        return Decimal(str(value))
    except InvalidOperation:
        return None


@callback(
    Output("sim-kpis", "children"),
    Output("sim-balance-chart", "figure"),
    Output("sim-split-chart", "figure"),
    Output("sim-error", "children"),
    Input("sim-btn", "n_clicks"),
    State("sim-amount", "value"),
    State("sim-tenor", "value"),
    State("sim-rate", "value"),
    State("sim-bank-fee", "value"),
    State("sim-market-fee", "value"),
    prevent_initial_call=True,
)
def simulate(n_clicks, amount, tenor, rate, bank_fee, market_fee):
    amount_dec = _to_decimal(amount)
    rate_dec = _to_decimal(rate)
    if amount_dec is None or rate_dec is None:
        return no_update, no_update, no_update, "Enter an amount and an annual rate."

    try:
        principal = principal_with_fees(amount_dec, _to_decimal(bank_fee), _to_decimal(market_fee))
        flat = flat_schedule(principal, rate_dec, int(tenor))
        # Same nominal rate expressed per month for the declining-balance plan
        annuity = annuity_schedule(principal, rate_dec / 12, int(tenor))
        apr = flat_to_effective_annual_rate(rate_dec, int(tenor))
    except InvalidArgument as e:
        return no_update, no_update, no_update, str(e)

    kpis = [
        _kpi("Financed principal", f"{principal:,.0f}"),
        _kpi("Flat installment", f"{flat.monthly_installment:,.0f}"),
        _kpi("Flat total interest", f"{flat.total_interest:,.0f}"),
        _kpi("Declining installment", f"{annuity.monthly_installment:,.0f}"),
        _kpi("Flat effective APR", f"{apr:.2f}%"),
    ]
    return kpis, balance_curves(flat, annuity), interest_split(flat), ""
