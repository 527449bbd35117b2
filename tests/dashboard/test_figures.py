from decimal import Decimal

from cardwise.dashboard.figures import balance_curves, debt_by_card_chart, interest_split
from cardwise.engine.amortization import annuity_schedule, flat_schedule
from cardwise.models.results import CardDebt


def test_balance_curves_start_at_principal():
    flat = flat_schedule(Decimal("1000000"), Decimal("21"), 6)
    annuity = annuity_schedule(Decimal("1000000"), Decimal("1.75"), 6)
    fig = balance_curves(flat, annuity)
    assert len(fig.data) == 2
    for trace in fig.data:
        assert list(trace.x) == [0, 1, 2, 3, 4, 5, 6]
        assert trace.y[0] == 1000000.0


def test_interest_split_stacks():
    plan = annuity_schedule(Decimal("1000000"), Decimal("1.75"), 6)
    fig = interest_split(plan)
    assert fig.layout.barmode == "stack"
    principal, interest = fig.data
    assert interest.y[0] == 17500.0
    assert principal.y[0] == 159523.0


def test_debt_chart_clamps_surplus(make_card):
    debts = [
        CardDebt(card=make_card("a", 12), outstanding_balance=Decimal("1500000")),
        CardDebt(card=make_card("b", 5), outstanding_balance=Decimal("-20000")),
    ]
    fig = debt_by_card_chart(debts)
    assert list(fig.data[0].x) == ["Card a", "Card b"]
    assert list(fig.data[0].y) == [1500000.0, 0.0]


def test_debt_chart_empty():
    assert list(debt_by_card_chart([]).data[0].x) == []
