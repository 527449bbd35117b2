"""Ledger entry data types."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional


class TransactionCategory(Enum):
    SHOPPING = "shopping"
    FOOD = "food"
    TRANSPORTATION = "transportation"
    ENTERTAINMENT = "entertainment"
    OTHER = "other"
    PAYMENT = "payment"


class TransactionStatus(Enum):
    PAID = "paid"
    UNPAID = "unpaid"


@dataclass(frozen=True)
class InstallmentDetails:
    monthly_installment: Decimal
    tenor: int


@dataclass(frozen=True)
class Transaction:
    id: str
    card_id: str
    date: datetime
    amount: Decimal  # Magnitude; direction comes from the category
    category: TransactionCategory
    status: TransactionStatus = TransactionStatus.UNPAID  # Advisory only
    description: str = ""
    installment_details: Optional[InstallmentDetails] = None

    @property
    def is_payment(self) -> bool:
        return self.category is TransactionCategory.PAYMENT

    @property
    def is_active_installment(self) -> bool:
        return self.installment_details is not None and self.status is TransactionStatus.UNPAID
