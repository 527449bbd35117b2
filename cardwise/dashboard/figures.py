"""Plotly figure builders shared by dashboard pages."""

import plotly.graph_objects as go

from cardwise.models.results import CardDebt, InstallmentPlan

FLAT_COLOR = "#1a1a2e"
ANNUITY_COLOR = "#e94560"


def balance_curves(flat: InstallmentPlan, annuity: InstallmentPlan) -> go.Figure:
    """Remaining balance per month under both conventions."""
    fig = go.Figure()
    for plan, name, color in (
        (flat, "Flat rate", FLAT_COLOR),
        (annuity, "Declining balance", ANNUITY_COLOR),
    ):
        months = [0] + [p.month for p in plan.schedule]
        balances = [float(plan.principal)] + [float(p.remaining_balance) for p in plan.schedule]
        fig.add_trace(go.Scatter(
            x=months, y=balances,
            mode="lines+markers",
            name=f"{name} ({plan.monthly_installment:,.0f}/mo)",
            line=dict(color=color, width=3),
        ))
    fig.update_layout(
        title="Remaining Balance",
        xaxis_title="Month",
        yaxis_title="Balance",
        hovermode="x unified",
    )
    return fig


def interest_split(plan: InstallmentPlan) -> go.Figure:
    """Stacked principal/interest per month."""
    months = [p.month for p in plan.schedule]
    fig = go.Figure()
    fig.add_trace(go.Bar(
        x=months, y=[float(p.principal_payment) for p in plan.schedule],
        name="Principal", marker_color=FLAT_COLOR,
    ))
    fig.add_trace(go.Bar(
        x=months, y=[float(p.interest_payment) for p in plan.schedule],
        name="Interest", marker_color=ANNUITY_COLOR,
    ))
    fig.update_layout(
        barmode="stack",
        title=f"Payment Split ({plan.convention.value})",
        xaxis_title="Month",
        yaxis_title="Amount",
    )
    return fig


def debt_by_card_chart(debts: list[CardDebt]) -> go.Figure:
    """Outstanding debt per card. Surplus balances plot as zero."""
    names = [d.card.display_name for d in debts]
    values = [max(float(d.outstanding_balance), 0.0) for d in debts]
    fig = go.Figure(go.Bar(x=names, y=values, marker_color=FLAT_COLOR))
    fig.update_layout(
        title="Total Debt by Card",
        xaxis_tickangle=-45,
        yaxis_title="Outstanding",
    )
    return fig
