from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from enum import Enum

from cardwise.models.card import Card


class InterestConvention(Enum):
    FLAT = "flat"  # Annual rate on the original principal
    ANNUITY = "annuity"  # Monthly rate on the declining balance


@dataclass(frozen=True)
class InstallmentPeriod:
    month: int
    principal_payment: Decimal
    interest_payment: Decimal
    remaining_balance: Decimal

    @property
    def total_payment(self) -> Decimal:
        return self.principal_payment + self.interest_payment


@dataclass(frozen=True)
class InstallmentPlan:
    convention: InterestConvention
    principal: Decimal
    rate_pct: Decimal
    tenor: int
    monthly_installment: Decimal
    total_payment: Decimal
    total_interest: Decimal
    schedule: tuple[InstallmentPeriod, ...] = ()


@dataclass(frozen=True)
class BillReminder:
    card: Card
    outstanding_balance: Decimal
    due_date: date

    def days_from(self, today: date) -> int:
        """Signed day distance: negative when overdue."""
        return (self.due_date - today).days


@dataclass(frozen=True)
class BillClassification:
    overdue: list[BillReminder] = field(default_factory=list)
    upcoming: list[BillReminder] = field(default_factory=list)


@dataclass(frozen=True)
class CardDebt:
    card: Card
    outstanding_balance: Decimal
    monthly_installment_due: Decimal = Decimal("0")

    @property
    def has_surplus(self) -> bool:
        return self.outstanding_balance < 0


@dataclass(frozen=True)
class PortfolioSummary:
    cards: list[CardDebt] = field(default_factory=list)
    total_outstanding: Decimal = Decimal("0")
    next_due_date: date | None = None
