"""Ledger routes: balances, bill reminders, payments.

Each request carries the cards/transactions snapshot; nothing is stored here.
"""

from datetime import date, datetime, timezone

from fastapi import APIRouter, HTTPException

from cardwise.api.schemas import (
    BalancesResponse,
    BillReminderResponse,
    BillsResponse,
    CardDebtResponse,
    CardLedgerRequest,
    LedgerRequest,
    PaymentRequest,
    TransactionSchema,
)
from cardwise.config import settings
from cardwise.engine.installments import record_payment as build_payment_transaction
from cardwise.engine.ledger import (
    classify_bills,
    limit_increase_due,
    next_due_date,
    payment_history,
    summarize_portfolio,
)
from cardwise.models.results import BillReminder

router = APIRouter(prefix="/api/v1/ledger", tags=["ledger"])


def _reminder_response(r: BillReminder) -> BillReminderResponse:
    return BillReminderResponse(
        card_id=r.card.id,
        card_name=r.card.display_name,
        outstanding_balance=r.outstanding_balance,
        due_date=r.due_date,
    )


@router.post("/balances", response_model=BalancesResponse)
async def balances(req: LedgerRequest):
    """Per-card outstanding balances, portfolio total and the nearest due date."""
    today = req.today or date.today()
    summary = summarize_portfolio(req.card_models(), req.transaction_models(), today)
    return BalancesResponse(
        cards=[
            CardDebtResponse(
                card_id=d.card.id,
                card_name=d.card.display_name,
                outstanding_balance=d.outstanding_balance,
                monthly_installment_due=d.monthly_installment_due,
                next_due_date=next_due_date(d.card, today),
                limit_increase_due=limit_increase_due(d.card, today),
            )
            for d in summary.cards
        ],
        total_outstanding=summary.total_outstanding,
        next_due_date=summary.next_due_date,
    )


@router.post("/bills", response_model=BillsResponse)
async def bills(req: LedgerRequest):
    """Overdue and upcoming bills for cards carrying a positive balance."""
    today = req.today or date.today()
    classification = classify_bills(
        req.card_models(),
        req.transaction_models(),
        today,
        window_days=settings.reminder_window_days,
    )
    return BillsResponse(
        today=today,
        overdue=[_reminder_response(r) for r in classification.overdue],
        upcoming=[_reminder_response(r) for r in classification.upcoming],
    )


@router.post("/payments", response_model=TransactionSchema)
async def record_payment(req: PaymentRequest):
    """Build the payment entry for a card. Persisting it is the caller's job."""
    txn = build_payment_transaction(req.card.to_model(), req.amount, datetime.now(timezone.utc))
    return TransactionSchema.from_model(txn)


@router.post("/history", response_model=list[TransactionSchema])
async def history(req: CardLedgerRequest):
    """A card's payments, newest first."""
    if not any(c.id == req.card_id for c in req.cards):
        raise HTTPException(status_code=404, detail=f"Unknown card: {req.card_id}")
    payments = payment_history(req.card_id, req.transaction_models())
    return [TransactionSchema.from_model(t) for t in payments]
