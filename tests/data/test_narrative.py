"""Tests for the Claude-backed advice service."""

import json
from datetime import date
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from cardwise.data.narrative import (
    MAX_SUGGESTIONS,
    AdviceService,
    ReminderEmail,
    build_client,
)
from cardwise.engine.amortization import annuity_schedule, flat_schedule


def _client_returning(text: str) -> AsyncMock:
    mock_message = MagicMock()
    mock_message.content = [MagicMock(text=text)]

    mock_client = AsyncMock()
    mock_client.messages.create = AsyncMock(return_value=mock_message)
    return mock_client


@pytest.fixture
def flat_plan():
    return flat_schedule(Decimal("5000000"), Decimal("21"), 12)


# ── Client construction ──────────────────────────────────────────

class TestBuildClient:
    def test_no_key(self):
        with patch("cardwise.data.narrative.settings") as mock_settings:
            mock_settings.anthropic_api_key = ""
            assert build_client() is None

    def test_explicit_key(self):
        with patch("anthropic.AsyncAnthropic") as mock_cls:
            client = build_client("test-key")
        mock_cls.assert_called_once_with(api_key="test-key")
        assert client is mock_cls.return_value


# ── Installment advice ───────────────────────────────────────────

class TestInstallmentAdvice:
    async def test_no_client(self, flat_plan):
        service = AdviceService(None)
        assert await service.installment_advice(flat_plan) is None

    async def test_success(self, flat_plan):
        client = _client_returning("Cicilan ini cukup wajar.")
        service = AdviceService(client, model="test-model", max_tokens=100, language="English")

        advice = await service.installment_advice(flat_plan, bank_name="Bank Mandiri")

        assert advice == "Cicilan ini cukup wajar."
        kwargs = client.messages.create.call_args.kwargs
        assert kwargs["model"] == "test-model"
        assert kwargs["max_tokens"] == 100
        prompt = kwargs["messages"][0]["content"]
        assert "504,167" in prompt
        assert "Bank Mandiri" in prompt
        assert "flat" in prompt
        assert "English" in prompt

    async def test_annuity_prompt(self):
        plan = annuity_schedule(Decimal("1000000"), Decimal("1.75"), 6)
        client = _client_returning("ok")
        await AdviceService(client).installment_advice(plan)
        prompt = client.messages.create.call_args.kwargs["messages"][0]["content"]
        assert "declining balance" in prompt
        assert "177,023" in prompt

    async def test_api_failure_returns_none(self, flat_plan):
        client = AsyncMock()
        client.messages.create = AsyncMock(side_effect=RuntimeError("overloaded"))
        assert await AdviceService(client).installment_advice(flat_plan) is None


# ── Reminder emails ──────────────────────────────────────────────

class TestReminderEmail:
    async def test_success(self):
        payload = json.dumps({"subject": "Tagihan BCA Platinum", "body": "<p>Halo Budi</p>"})
        service = AdviceService(_client_returning(payload))

        email = await service.reminder_email(
            "Budi", "BCA Platinum", "Bank Central Asia", date(2024, 6, 12), Decimal("1500000")
        )

        assert email == ReminderEmail(subject="Tagihan BCA Platinum", body="<p>Halo Budi</p>")

    async def test_fenced_json(self):
        payload = '```json\n{"subject": "S", "body": "B"}\n```'
        service = AdviceService(_client_returning(payload))
        email = await service.reminder_email("A", "C", "B", date(2024, 6, 12), Decimal("1"))
        assert email.subject == "S"

    async def test_not_json(self):
        service = AdviceService(_client_returning("Sure! Here is your email."))
        assert await service.reminder_email("A", "C", "B", date(2024, 6, 12), Decimal("1")) is None

    async def test_missing_body(self):
        service = AdviceService(_client_returning('{"subject": "S"}'))
        assert await service.reminder_email("A", "C", "B", date(2024, 6, 12), Decimal("1")) is None


# ── Suggestions ──────────────────────────────────────────────────

class TestSuggestions:
    async def test_bank_names(self):
        payload = json.dumps({"suggestions": ["Bank Central Asia", "Bank Mandiri"]})
        service = AdviceService(_client_returning(payload))
        assert await service.suggest_bank_names("bank") == ["Bank Central Asia", "Bank Mandiri"]

    async def test_capped(self):
        payload = json.dumps({"suggestions": [f"Bank {i}" for i in range(10)]})
        service = AdviceService(_client_returning(payload))
        assert len(await service.suggest_bank_names("")) == MAX_SUGGESTIONS

    async def test_card_names_need_bank(self):
        client = _client_returning("{}")
        assert await AdviceService(client).suggest_card_names("", "plat") == []
        client.messages.create.assert_not_called()

    async def test_card_names(self):
        payload = json.dumps({"suggestions": ["BCA Card Platinum"]})
        client = _client_returning(payload)
        result = await AdviceService(client).suggest_card_names("Bank Central Asia", "plat")
        assert result == ["BCA Card Platinum"]
        prompt = client.messages.create.call_args.kwargs["messages"][0]["content"]
        assert "Bank Central Asia" in prompt

    async def test_bad_shape(self):
        service = AdviceService(_client_returning('{"suggestions": "BCA"}'))
        assert await service.suggest_bank_names("b") == []

    async def test_json_array_rejected(self):
        service = AdviceService(_client_returning('["BCA"]'))
        assert await service.suggest_bank_names("b") == []

    async def test_no_client(self):
        assert await AdviceService(None).suggest_bank_names("b") == []
