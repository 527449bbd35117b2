"""Ledger aggregation: balances, due dates, bill classification.

Pure functions over snapshots of cards and transactions. No I/O.
"""

import calendar
from datetime import date, datetime, timedelta, timezone
from decimal import Decimal
from typing import Iterable

from cardwise.models.card import Card
from cardwise.models.ledger import Transaction
from cardwise.models.results import (
    BillClassification,
    BillReminder,
    CardDebt,
    PortfolioSummary,
)

UPCOMING_WINDOW_DAYS = 7


def _day_in_month(year: int, month: int, day: int) -> date:
    """Date for a day-of-month anchor, clamped to the month's last day."""
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(day, last_day))


def _add_months(year: int, month: int, months: int) -> tuple[int, int]:
    index = year * 12 + (month - 1) + months
    return index // 12, index % 12 + 1


def _as_utc(moment: datetime) -> datetime:
    """Naive timestamps are taken to be UTC so they order against aware ones."""
    return moment if moment.tzinfo is not None else moment.replace(tzinfo=timezone.utc)


def outstanding_balance(card_id: str, transactions: Iterable[Transaction]) -> Decimal:
    """Charges minus payments for one card. Negative means a surplus."""
    charges = Decimal("0")
    payments = Decimal("0")
    for t in transactions:
        if t.card_id != card_id:
            continue
        if t.is_payment:
            payments += t.amount
        else:
            charges += t.amount
    return charges - payments


def portfolio_balance(cards: Iterable[Card], transactions: Iterable[Transaction]) -> Decimal:
    """Sum of per-card balances. Transactions for unknown cards are ignored."""
    card_ids = {card.id for card in cards}
    total = Decimal("0")
    for t in transactions:
        if t.card_id not in card_ids:
            continue
        total += -t.amount if t.is_payment else t.amount
    return total


def monthly_installment_due(card_id: str, transactions: Iterable[Transaction]) -> Decimal:
    """Sum of monthly installments across a card's unpaid installment plans."""
    return sum(
        (
            t.installment_details.monthly_installment
            for t in transactions
            if t.card_id == card_id and t.is_active_installment
        ),
        Decimal("0"),
    )


def payment_history(card_id: str, transactions: Iterable[Transaction]) -> list[Transaction]:
    """A card's payments, newest first."""
    payments = [t for t in transactions if t.card_id == card_id and t.is_payment]
    return sorted(payments, key=lambda t: _as_utc(t.date), reverse=True)


def debt_by_card(cards: Iterable[Card], transactions: Iterable[Transaction]) -> list[CardDebt]:
    transactions = list(transactions)
    return [
        CardDebt(
            card=card,
            outstanding_balance=outstanding_balance(card.id, transactions),
            monthly_installment_due=monthly_installment_due(card.id, transactions),
        )
        for card in cards
    ]


def due_date_this_cycle(card: Card, today: date) -> date:
    """This month's occurrence of the card's due day, not advanced."""
    return _day_in_month(today.year, today.month, card.due_date)


def next_due_date(card: Card, today: date) -> date:
    """Next occurrence of the card's due day on or after today.

    Due days past the end of a month clamp to that month's last day
    (31 in February becomes the 28th or 29th).
    """
    due = due_date_this_cycle(card, today)
    if due < today:
        year, month = _add_months(today.year, today.month, 1)
        due = _day_in_month(year, month, card.due_date)
    return due


def earliest_due_date(cards: Iterable[Card], today: date) -> date | None:
    dates = [next_due_date(card, today) for card in cards]
    return min(dates) if dates else None


def classify_bills(
    cards: Iterable[Card],
    transactions: Iterable[Transaction],
    today: date,
    window_days: int = UPCOMING_WINDOW_DAYS,
) -> BillClassification:
    """Split cards carrying a positive balance into overdue and upcoming bills.

    Overdue: this cycle's due date is before today, most recently missed first.
    Upcoming: due within [today, today + window_days], soonest first.
    Cards with zero or negative balance never appear.
    """
    transactions = list(transactions)
    window_end = today + timedelta(days=window_days)
    overdue: list[BillReminder] = []
    upcoming: list[BillReminder] = []

    for card in cards:
        balance = outstanding_balance(card.id, transactions)
        if balance <= 0:
            continue

        due = due_date_this_cycle(card, today)
        reminder = BillReminder(card=card, outstanding_balance=balance, due_date=due)
        if due < today:
            overdue.append(reminder)
        elif due <= window_end:
            upcoming.append(reminder)

    overdue.sort(key=lambda r: r.due_date, reverse=True)
    upcoming.sort(key=lambda r: r.due_date)
    return BillClassification(overdue=overdue, upcoming=upcoming)


def summarize_portfolio(
    cards: Iterable[Card], transactions: Iterable[Transaction], today: date
) -> PortfolioSummary:
    cards = list(cards)
    transactions = list(transactions)
    return PortfolioSummary(
        cards=debt_by_card(cards, transactions),
        total_outstanding=portfolio_balance(cards, transactions),
        next_due_date=earliest_due_date(cards, today),
    )


def next_limit_increase_date(card: Card) -> date | None:
    """When the card becomes eligible to request a limit increase again."""
    months = card.limit_increase_reminder.months
    last = card.last_limit_increase_date
    if months is None or last is None:
        return None
    year, month = _add_months(last.year, last.month, months)
    return _day_in_month(year, month, last.day)


def limit_increase_due(card: Card, today: date) -> bool:
    eligible = next_limit_increase_date(card)
    return eligible is not None and today >= eligible
