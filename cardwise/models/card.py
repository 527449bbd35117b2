from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import Enum


class LimitIncreaseReminder(Enum):
    THREE_MONTHS = "three_months"
    SIX_MONTHS = "six_months"
    NONE = "none"

    @property
    def months(self) -> int | None:
        intervals = {
            LimitIncreaseReminder.THREE_MONTHS: 3,
            LimitIncreaseReminder.SIX_MONTHS: 6,
        }
        return intervals.get(self)


@dataclass(frozen=True)
class Card:
    id: str
    credit_limit: Decimal
    billing_date: int  # Day of month, 1-31
    due_date: int  # Day of month, 1-31
    interest_rate: Decimal  # Percent; unit depends on the calculation used
    bank_name: str = ""
    card_name: str = ""
    last4_digits: str = ""
    limit_increase_reminder: LimitIncreaseReminder = LimitIncreaseReminder.NONE
    last_limit_increase_date: date | None = None

    @property
    def display_name(self) -> str:
        return self.card_name or self.id
