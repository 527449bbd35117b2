"""Overview page: debt by card and bill reminders from an uploaded ledger snapshot."""

import base64
from datetime import date

import dash
from dash import html, dcc, callback, Input, Output

from cardwise.api.schemas import LedgerSnapshot
from cardwise.config import settings
from cardwise.dashboard.figures import debt_by_card_chart
from cardwise.data.snapshot import SnapshotError, parse_snapshot
from cardwise.engine.ledger import classify_bills, summarize_portfolio

dash.register_page(__name__, path="/", name="Overview")


def _reminder_list(title, reminders, color):
    items = [
        html.Li(
            f"{r.card.display_name}: {r.outstanding_balance:,.0f} {settings.currency} "
            f"due {r.due_date.isoformat()}"
        )
        for r in reminders
    ]
    return html.Div([
        html.H3(title, style={"color": color}),
        html.Ul(items) if items else html.P("Nothing here."),
    ], style={"flex": "1"})


layout = html.Div([
    html.H2("Debt Overview"),
    html.P("Upload a ledger snapshot (JSON with cards and transactions)."),

    dcc.Upload(
        id="ledger-upload",
        children=html.Div(["Drag and drop or ", html.A("select a snapshot file")]),
        style={
            "width": "100%",
            "padding": "1.5rem",
            "borderWidth": "1px",
            "borderStyle": "dashed",
            "borderRadius": "6px",
            "textAlign": "center",
            "marginBottom": "1.5rem",
        },
    ),

    html.Div(id="overview-error", style={"color": "#e94560", "marginBottom": "1rem"}),
    html.Div(id="overview-totals", style={"marginBottom": "1.5rem"}),
    dcc.Graph(id="debt-chart"),
    html.Div(id="overview-reminders", style={"display": "flex", "gap": "2rem"}),
])


@callback(
    Output("ledger-store", "data"),
    Output("overview-error", "children"),
    Input("ledger-upload", "contents"),
    prevent_initial_call=True,
)
def store_snapshot(contents):
    # contents is "data:<mime>;base64,<payload>"
    _, payload = contents.split(",", 1)
    try:
        snapshot = parse_snapshot(base64.b64decode(payload), "upload")
    except SnapshotError as e:
        return dash.no_update, str(e)
    return snapshot.model_dump(mode="json"), ""


@callback(
    Output("overview-totals", "children"),
    Output("debt-chart", "figure"),
    Output("overview-reminders", "children"),
    Input("ledger-store", "data"),
)
def render_overview(data):
    if not data:
        return html.P("No snapshot loaded."), debt_by_card_chart([]), []

    snapshot = LedgerSnapshot.model_validate(data)
    cards = snapshot.card_models()
    transactions = snapshot.transaction_models()
    today = date.today()

    summary = summarize_portfolio(cards, transactions, today)
    bills = classify_bills(cards, transactions, today, window_days=settings.reminder_window_days)

    nearest = summary.next_due_date.isoformat() if summary.next_due_date else "N/A"
    totals = html.Div([
        html.Div(f"Total debt: {summary.total_outstanding:,.0f} {settings.currency}",
                 style={"fontSize": "1.4rem", "fontWeight": "bold"}),
        html.Div(f"Cards: {len(cards)} · Nearest due date: {nearest}"),
    ])
    reminders = [
        _reminder_list("Overdue", bills.overdue, "#e94560"),
        _reminder_list("Due within a week", bills.upcoming, "#f39c12"),
    ]
    return totals, debt_by_card_chart(summary.cards), reminders
