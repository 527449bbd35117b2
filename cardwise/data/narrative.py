"""Claude API client for installment advice, reminder emails and name suggestions.

The engine's numbers are passed in as prompt context; nothing here computes
money. Every method degrades to None (or an empty list) when the client is
missing or the call fails.
"""

import json
import logging
from dataclasses import dataclass
from datetime import date
from decimal import Decimal

import anthropic

from cardwise.config import settings
from cardwise.models.results import InstallmentPlan, InterestConvention

logger = logging.getLogger(__name__)

MAX_SUGGESTIONS = 5


@dataclass(frozen=True)
class ReminderEmail:
    subject: str
    body: str  # HTML paragraph


def build_client(api_key: str | None = None) -> anthropic.AsyncAnthropic | None:
    """AsyncAnthropic client, or None if no API key is configured."""
    key = api_key if api_key is not None else settings.anthropic_api_key
    if not key:
        logger.debug("Anthropic API key not configured, advice disabled")
        return None
    return anthropic.AsyncAnthropic(api_key=key)


def _money(amount: Decimal) -> str:
    return f"{amount:,.0f} {settings.currency}"


class AdviceService:
    def __init__(
        self,
        client: anthropic.AsyncAnthropic | None,
        model: str | None = None,
        max_tokens: int | None = None,
        language: str | None = None,
    ):
        self.client = client
        self.model = model or settings.advice_model
        self.max_tokens = max_tokens or settings.advice_max_tokens
        self.language = language or settings.advice_language

    async def _complete(self, prompt: str) -> str | None:
        if self.client is None:
            return None
        try:
            message = await self.client.messages.create(
                model=self.model,
                max_tokens=self.max_tokens,
                messages=[{"role": "user", "content": prompt}],
            )
            return message.content[0].text
        except Exception as e:
            logger.warning("Claude advice generation failed: %s", e)
            return None

    async def _complete_json(self, prompt: str) -> dict | None:
        text = await self._complete(prompt)
        if text is None:
            return None
        try:
            data = json.loads(text.strip().removeprefix("```json").removesuffix("```"))
        except json.JSONDecodeError:
            logger.warning("Claude returned non-JSON output: %.80s", text)
            return None
        if not isinstance(data, dict):
            logger.warning("Claude returned JSON %s, expected an object", type(data).__name__)
            return None
        return data

    async def installment_advice(
        self, plan: InstallmentPlan, bank_name: str | None = None
    ) -> str | None:
        """Short advice paragraph about an already computed plan."""
        if plan.convention is InterestConvention.FLAT:
            rate_line = f"Annual flat interest rate: {plan.rate_pct}%"
            convention_note = (
                "Explain that this is a flat-rate calculation: simple, but its effective "
                "rate is higher than it looks compared with a declining-balance rate, "
                "especially for longer tenors."
            )
        else:
            rate_line = f"Monthly interest rate (declining balance): {plan.rate_pct}%"
            convention_note = (
                "Explain that interest is charged on the remaining balance, so the "
                "interest share of each payment shrinks over time."
            )

        if bank_name:
            rate_task = (
                f"Compare the rate with typical credit card installment rates at {bank_name} "
                "and say whether it is competitive, average or high."
            )
        else:
            rate_task = "Comment on the total interest relative to the principal."

        prompt = f"""You are a financial advisor specializing in credit card debt management. A user is converting a purchase into an installment plan. The numbers below are final; do not recalculate them.

Principal: {_money(plan.principal)}
{rate_line}
Tenor: {plan.tenor} months
Monthly installment: {_money(plan.monthly_installment)}
Total interest: {_money(plan.total_interest)}
Total payment: {_money(plan.total_payment)}

Write one short paragraph of advice in {self.language}.
- {convention_note}
- {rate_task}
- Give one practical tip, such as paying on time to avoid late fees.

No headers or bullet points."""

        return await self._complete(prompt)

    async def reminder_email(
        self,
        recipient_name: str,
        card_name: str,
        bank_name: str,
        due_date: date,
        amount_due: Decimal,
    ) -> ReminderEmail | None:
        prompt = f"""You are a helpful financial assistant. Write a friendly, clear reminder email in {self.language} for an upcoming credit card payment.

Recipient: {recipient_name}
Card: {card_name} ({bank_name})
Due date: {due_date.isoformat()}
Amount due: {_money(amount_due)}

Return only a JSON object with keys "subject" and "body".
- subject: concise, naming the card.
- body: one simple HTML paragraph that states the amount and due date and asks the recipient to pay on time to avoid penalties."""

        data = await self._complete_json(prompt)
        if data is None:
            return None
        subject = data.get("subject")
        body = data.get("body")
        if not subject or not body:
            logger.warning("Reminder email response missing subject or body")
            return None
        return ReminderEmail(subject=str(subject), body=str(body))

    async def suggest_bank_names(self, query: str) -> list[str]:
        prompt = f"""You help users of a credit card tracker fill in forms. Suggest up to {MAX_SUGGESTIONS} names of banks that issue credit cards in Indonesia matching the query below. If the query is empty, suggest popular banks.

Query: "{query}"

Return only a JSON object: {{"suggestions": ["Bank Central Asia", "Bank Mandiri"]}}"""

        return await self._suggestions(prompt)

    async def suggest_card_names(self, bank_name: str, query: str) -> list[str]:
        if not bank_name:
            return []

        prompt = f"""You help users of a credit card tracker fill in forms. Suggest up to {MAX_SUGGESTIONS} credit card products issued by "{bank_name}" matching the query below. If the query is empty, suggest the bank's popular cards.

Query: "{query}"

Return only a JSON object: {{"suggestions": ["BCA Card Platinum", "BCA Everyday Card"]}}"""

        return await self._suggestions(prompt)

    async def _suggestions(self, prompt: str) -> list[str]:
        data = await self._complete_json(prompt)
        if data is None:
            return []
        suggestions = data.get("suggestions", [])
        if not isinstance(suggestions, list):
            return []
        return [str(s) for s in suggestions[:MAX_SUGGESTIONS]]
