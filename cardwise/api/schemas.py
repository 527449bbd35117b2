"""Pydantic schemas for API request/response models."""

from datetime import date, datetime
from decimal import Decimal

from pydantic import BaseModel, Field

from cardwise.models.card import Card, LimitIncreaseReminder
from cardwise.models.ledger import (
    InstallmentDetails,
    Transaction,
    TransactionCategory,
    TransactionStatus,
)
from cardwise.models.results import InstallmentPlan


# ---- Ledger snapshot schemas ----

class CardSchema(BaseModel):
    id: str
    bank_name: str = ""
    card_name: str = ""
    last4_digits: str = Field("", pattern=r"^(\d{4})?$")
    credit_limit: Decimal = Field(..., ge=0)
    billing_date: int = Field(..., ge=1, le=31)
    due_date: int = Field(..., ge=1, le=31)
    interest_rate: Decimal = Field(..., ge=0, description="Percent")
    limit_increase_reminder: LimitIncreaseReminder = LimitIncreaseReminder.NONE
    last_limit_increase_date: date | None = None

    def to_model(self) -> Card:
        return Card(
            id=self.id,
            credit_limit=self.credit_limit,
            billing_date=self.billing_date,
            due_date=self.due_date,
            interest_rate=self.interest_rate,
            bank_name=self.bank_name,
            card_name=self.card_name,
            last4_digits=self.last4_digits,
            limit_increase_reminder=self.limit_increase_reminder,
            last_limit_increase_date=self.last_limit_increase_date,
        )


class InstallmentDetailsSchema(BaseModel):
    monthly_installment: Decimal = Field(..., ge=0)
    tenor: int = Field(..., ge=1)


class TransactionSchema(BaseModel):
    id: str
    card_id: str
    date: datetime
    description: str = ""
    amount: Decimal = Field(..., ge=0)
    category: TransactionCategory
    status: TransactionStatus = TransactionStatus.UNPAID
    installment_details: InstallmentDetailsSchema | None = None

    def to_model(self) -> Transaction:
        details = None
        if self.installment_details is not None:
            details = InstallmentDetails(
                monthly_installment=self.installment_details.monthly_installment,
                tenor=self.installment_details.tenor,
            )
        return Transaction(
            id=self.id,
            card_id=self.card_id,
            date=self.date,
            amount=self.amount,
            category=self.category,
            status=self.status,
            description=self.description,
            installment_details=details,
        )

    @classmethod
    def from_model(cls, t: Transaction) -> "TransactionSchema":
        details = None
        if t.installment_details is not None:
            details = InstallmentDetailsSchema(
                monthly_installment=t.installment_details.monthly_installment,
                tenor=t.installment_details.tenor,
            )
        return cls(
            id=t.id,
            card_id=t.card_id,
            date=t.date,
            description=t.description,
            amount=t.amount,
            category=t.category,
            status=t.status,
            installment_details=details,
        )


class LedgerSnapshot(BaseModel):
    cards: list[CardSchema] = []
    transactions: list[TransactionSchema] = []

    def card_models(self) -> list[Card]:
        return [c.to_model() for c in self.cards]

    def transaction_models(self) -> list[Transaction]:
        return [t.to_model() for t in self.transactions]


# ---- Request schemas ----

class FlatPlanRequest(BaseModel):
    principal: Decimal = Field(..., description="Amount converted to installments")
    annual_rate_pct: Decimal = Field(..., description="Annual flat rate, e.g. 21 for 21%")
    tenor_months: int


class AnnuityPlanRequest(BaseModel):
    principal: Decimal
    monthly_rate_pct: Decimal = Field(..., description="Per-month rate, e.g. 1.75 for 1.75%")
    tenor_months: int


class CompareTenorsRequest(BaseModel):
    principal: Decimal
    annual_rate_pct: Decimal
    tenors: list[int] | None = None


class EffectiveRateRequest(BaseModel):
    annual_flat_rate_pct: Decimal
    tenor_months: int


class ApplyInstallmentRequest(BaseModel):
    card: CardSchema
    transaction_amount: Decimal
    annual_rate_pct: Decimal | None = Field(None, description="Defaults to the card's rate")
    tenor_months: int
    bank_fee_pct: Decimal | None = None
    marketplace_fee_pct: Decimal | None = None
    description: str | None = None


class AdviceRequest(FlatPlanRequest):
    bank_name: str | None = None


class LedgerRequest(LedgerSnapshot):
    today: date | None = None


class CardLedgerRequest(LedgerSnapshot):
    card_id: str


class PaymentRequest(BaseModel):
    card: CardSchema
    amount: Decimal


class ReminderEmailRequest(BaseModel):
    recipient_name: str
    card_name: str
    bank_name: str
    due_date: date
    amount_due: Decimal


# ---- Response schemas ----

class InstallmentPeriodResponse(BaseModel):
    month: int
    principal_payment: Decimal
    interest_payment: Decimal
    remaining_balance: Decimal


class InstallmentPlanResponse(BaseModel):
    convention: str
    principal: Decimal
    rate_pct: Decimal
    tenor: int
    monthly_installment: Decimal
    total_payment: Decimal
    total_interest: Decimal
    schedule: list[InstallmentPeriodResponse] = []

    @classmethod
    def from_plan(cls, plan: InstallmentPlan) -> "InstallmentPlanResponse":
        return cls(
            convention=plan.convention.value,
            principal=plan.principal,
            rate_pct=plan.rate_pct,
            tenor=plan.tenor,
            monthly_installment=plan.monthly_installment,
            total_payment=plan.total_payment,
            total_interest=plan.total_interest,
            schedule=[
                InstallmentPeriodResponse(
                    month=p.month,
                    principal_payment=p.principal_payment,
                    interest_payment=p.interest_payment,
                    remaining_balance=p.remaining_balance,
                )
                for p in plan.schedule
            ],
        )


class EffectiveRateResponse(BaseModel):
    annual_flat_rate_pct: Decimal
    tenor_months: int
    effective_monthly_rate_pct: Decimal
    effective_annual_rate_pct: Decimal


class AdviceResponse(BaseModel):
    plan: InstallmentPlanResponse
    advice: str | None = None


class CardDebtResponse(BaseModel):
    card_id: str
    card_name: str
    outstanding_balance: Decimal
    monthly_installment_due: Decimal
    next_due_date: date
    limit_increase_due: bool = False


class BalancesResponse(BaseModel):
    cards: list[CardDebtResponse]
    total_outstanding: Decimal
    next_due_date: date | None = None


class BillReminderResponse(BaseModel):
    card_id: str
    card_name: str
    outstanding_balance: Decimal
    due_date: date


class BillsResponse(BaseModel):
    today: date
    overdue: list[BillReminderResponse]
    upcoming: list[BillReminderResponse]


class ReminderEmailResponse(BaseModel):
    subject: str
    body: str


class SuggestionsResponse(BaseModel):
    suggestions: list[str]
