"""Assistant routes backed by the advice service: reminder emails and form suggestions."""

from fastapi import APIRouter, Depends, HTTPException

from cardwise.api.deps import get_advice_service
from cardwise.api.schemas import (
    ReminderEmailRequest,
    ReminderEmailResponse,
    SuggestionsResponse,
)
from cardwise.data.narrative import AdviceService

router = APIRouter(prefix="/api/v1", tags=["assistant"])


@router.post("/reminders/email", response_model=ReminderEmailResponse)
async def reminder_email(
    req: ReminderEmailRequest,
    service: AdviceService = Depends(get_advice_service),
):
    email = await service.reminder_email(
        recipient_name=req.recipient_name,
        card_name=req.card_name,
        bank_name=req.bank_name,
        due_date=req.due_date,
        amount_due=req.amount_due,
    )
    if email is None:
        raise HTTPException(status_code=503, detail="Reminder email generation unavailable")
    return ReminderEmailResponse(subject=email.subject, body=email.body)


@router.get("/suggestions/banks", response_model=SuggestionsResponse)
async def suggest_banks(
    query: str = "",
    service: AdviceService = Depends(get_advice_service),
):
    return SuggestionsResponse(suggestions=await service.suggest_bank_names(query))


@router.get("/suggestions/cards", response_model=SuggestionsResponse)
async def suggest_cards(
    bank: str = "",
    query: str = "",
    service: AdviceService = Depends(get_advice_service),
):
    return SuggestionsResponse(suggestions=await service.suggest_card_names(bank, query))
