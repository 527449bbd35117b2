"""Canonical test fixtures used across engine and API tests.

Ledger: three cards, today = 2024-06-10.
  card-a: due day 12, 1,500,000 outstanding (upcoming)
  card-b: due day 5, 300,000 outstanding (overdue)
  card-c: due day 8, fully paid off (no reminder)
"""

import dataclasses
from datetime import date, datetime
from decimal import Decimal

import pytest

from cardwise.api.schemas import CardSchema, LedgerSnapshot, TransactionSchema
from cardwise.models.card import Card
from cardwise.models.ledger import (
    InstallmentDetails,
    Transaction,
    TransactionCategory,
    TransactionStatus,
)

TODAY = date(2024, 6, 10)


def _build_card(card_id: str, due_date: int, **kwargs) -> Card:
    defaults = dict(
        credit_limit=Decimal("20000000"),
        billing_date=max(due_date - 15, 1),
        interest_rate=Decimal("21"),
        bank_name="Bank Central Asia",
        card_name=f"Card {card_id}",
        last4_digits="1234",
    )
    defaults.update(kwargs)
    return Card(id=card_id, due_date=due_date, **defaults)


def _build_txn(
    txn_id: str,
    card_id: str,
    amount: str,
    category: TransactionCategory = TransactionCategory.SHOPPING,
    when: datetime = datetime(2024, 5, 20, 12, 0),
    **kwargs,
) -> Transaction:
    return Transaction(
        id=txn_id,
        card_id=card_id,
        date=when,
        amount=Decimal(amount),
        category=category,
        **kwargs,
    )


@pytest.fixture
def make_card():
    """Card builder: make_card(card_id, due_day, **overrides)."""
    return _build_card


@pytest.fixture
def make_txn():
    """Transaction builder: make_txn(txn_id, card_id, amount, category, when=..., **overrides)."""
    return _build_txn


@pytest.fixture
def today() -> date:
    return TODAY


@pytest.fixture
def cards() -> list[Card]:
    return [
        _build_card("card-a", 12),
        _build_card("card-b", 5),
        _build_card("card-c", 8),
    ]


@pytest.fixture
def transactions() -> list[Transaction]:
    return [
        _build_txn("t1", "card-a", "2000000", TransactionCategory.SHOPPING),
        _build_txn("t2", "card-a", "500000", TransactionCategory.FOOD),
        _build_txn(
            "t3", "card-a", "1000000", TransactionCategory.PAYMENT,
            when=datetime(2024, 6, 1, 9, 0), status=TransactionStatus.PAID,
        ),
        _build_txn("t4", "card-b", "300000", TransactionCategory.TRANSPORTATION),
        _build_txn("t5", "card-c", "750000", TransactionCategory.ENTERTAINMENT),
        _build_txn(
            "t6", "card-c", "750000", TransactionCategory.PAYMENT,
            status=TransactionStatus.PAID,
        ),
        # Installment conversion still being paid off on card-a
        _build_txn(
            "t7", "card-a", "0", TransactionCategory.OTHER,
            installment_details=InstallmentDetails(
                monthly_installment=Decimal("504167"), tenor=12
            ),
        ),
        # Belongs to a card that is not in the snapshot
        _build_txn("t8", "card-gone", "999999", TransactionCategory.SHOPPING),
    ]


@pytest.fixture
def snapshot(cards, transactions) -> LedgerSnapshot:
    return LedgerSnapshot(
        cards=[CardSchema(**dataclasses.asdict(c)) for c in cards],
        transactions=[TransactionSchema.from_model(t) for t in transactions],
    )
