"""Installment planning helpers layered on the amortization engine.

Pure functions: plans and ledger entries out, nothing persisted here.
"""

import uuid
from datetime import datetime
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, Optional

from cardwise.engine.amortization import TWO_PLACES, flat_schedule
from cardwise.engine.errors import InvalidArgument
from cardwise.models.card import Card
from cardwise.models.ledger import (
    InstallmentDetails,
    Transaction,
    TransactionCategory,
    TransactionStatus,
)
from cardwise.models.results import InstallmentPlan

# Tenor options offered by card issuers for purchase conversion
DEFAULT_TENORS: tuple[int, ...] = (3, 6, 12, 18, 24)


def principal_with_fees(
    amount: Decimal,
    bank_fee_pct: Optional[Decimal] = None,
    marketplace_fee_pct: Optional[Decimal] = None,
) -> Decimal:
    """Transaction amount plus bank and marketplace admin fees.

    Fees are percentages of the original amount and are financed with it.
    """
    if not amount.is_finite():
        raise InvalidArgument(f"amount must be finite, got {amount}")
    total = amount
    for fee_pct in (bank_fee_pct, marketplace_fee_pct):
        if fee_pct is None:
            continue
        if not fee_pct.is_finite():
            raise InvalidArgument(f"admin fee must be finite, got {fee_pct}")
        if fee_pct < 0:
            raise InvalidArgument(f"admin fee must not be negative, got {fee_pct}")
        total += amount * fee_pct / 100
    return total.quantize(TWO_PLACES, ROUND_HALF_UP)


def compare_tenors(
    principal: Decimal,
    annual_rate_pct: Decimal,
    tenors: Iterable[int] = DEFAULT_TENORS,
) -> list[InstallmentPlan]:
    """Flat plans for each tenor, in the order given."""
    return [flat_schedule(principal, annual_rate_pct, tenor) for tenor in tenors]


def apply_installment(
    card: Card,
    plan: InstallmentPlan,
    principal: Decimal,
    when: datetime,
    description: Optional[str] = None,
) -> Transaction:
    """Ledger entry that books a converted purchase against a card.

    The full financed principal is charged now; the plan's monthly installment
    is carried on the entry so payment screens can show what is due each month.
    """
    if not principal.is_finite() or principal <= 0:
        raise InvalidArgument(f"principal must be positive, got {principal}")

    return Transaction(
        id=str(uuid.uuid4()),
        card_id=card.id,
        date=when,
        amount=principal,
        category=TransactionCategory.OTHER,
        status=TransactionStatus.UNPAID,
        description=description or f"Installment: {principal} over {plan.tenor} months",
        installment_details=InstallmentDetails(
            monthly_installment=plan.monthly_installment,
            tenor=plan.tenor,
        ),
    )


def record_payment(card: Card, amount: Decimal, when: datetime) -> Transaction:
    if not amount.is_finite() or amount <= 0:
        raise InvalidArgument(f"payment amount must be positive, got {amount}")

    return Transaction(
        id=str(uuid.uuid4()),
        card_id=card.id,
        date=when,
        amount=amount,
        category=TransactionCategory.PAYMENT,
        status=TransactionStatus.PAID,
        description="Credit card payment",
    )
