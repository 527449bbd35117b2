"""Installment routes: schedules, tenor comparison, applying a plan to a card."""

from datetime import datetime, timezone

from fastapi import APIRouter, Depends

from cardwise.api.deps import get_advice_service
from cardwise.api.schemas import (
    AdviceRequest,
    AdviceResponse,
    AnnuityPlanRequest,
    ApplyInstallmentRequest,
    CompareTenorsRequest,
    EffectiveRateRequest,
    EffectiveRateResponse,
    FlatPlanRequest,
    InstallmentPlanResponse,
    TransactionSchema,
)
from cardwise.data.narrative import AdviceService
from cardwise.engine.amortization import annuity_schedule, flat_schedule
from cardwise.engine.effective_rate import (
    flat_to_effective_annual_rate,
    flat_to_effective_monthly_rate,
)
from cardwise.engine.installments import (
    DEFAULT_TENORS,
    apply_installment as build_installment_transaction,
    compare_tenors,
    principal_with_fees,
)

router = APIRouter(prefix="/api/v1/installments", tags=["installments"])


@router.post("/flat", response_model=InstallmentPlanResponse)
async def flat_plan(req: FlatPlanRequest):
    """Flat-rate plan: annual rate charged on the original principal."""
    plan = flat_schedule(req.principal, req.annual_rate_pct, req.tenor_months)
    return InstallmentPlanResponse.from_plan(plan)


@router.post("/annuity", response_model=InstallmentPlanResponse)
async def annuity_plan(req: AnnuityPlanRequest):
    """Declining-balance plan: monthly rate charged on the remaining balance."""
    plan = annuity_schedule(req.principal, req.monthly_rate_pct, req.tenor_months)
    return InstallmentPlanResponse.from_plan(plan)


@router.post("/compare", response_model=list[InstallmentPlanResponse])
async def compare(req: CompareTenorsRequest):
    plans = compare_tenors(req.principal, req.annual_rate_pct, req.tenors or DEFAULT_TENORS)
    return [InstallmentPlanResponse.from_plan(p) for p in plans]


@router.post("/effective-rate", response_model=EffectiveRateResponse)
async def effective_rate(req: EffectiveRateRequest):
    return EffectiveRateResponse(
        annual_flat_rate_pct=req.annual_flat_rate_pct,
        tenor_months=req.tenor_months,
        effective_monthly_rate_pct=flat_to_effective_monthly_rate(
            req.annual_flat_rate_pct, req.tenor_months
        ),
        effective_annual_rate_pct=flat_to_effective_annual_rate(
            req.annual_flat_rate_pct, req.tenor_months
        ),
    )


@router.post("/apply", response_model=TransactionSchema)
async def apply_installment(req: ApplyInstallmentRequest):
    """Compute the plan for a purchase (plus admin fees) and return the ledger entry to store.

    Persisting the entry is the caller's job.
    """
    card = req.card.to_model()
    principal = principal_with_fees(
        req.transaction_amount, req.bank_fee_pct, req.marketplace_fee_pct
    )
    rate = req.annual_rate_pct if req.annual_rate_pct is not None else card.interest_rate
    plan = flat_schedule(principal, rate, req.tenor_months)
    txn = build_installment_transaction(
        card, plan, principal, datetime.now(timezone.utc), description=req.description
    )
    return TransactionSchema.from_model(txn)


@router.post("/advice", response_model=AdviceResponse)
async def advice(
    req: AdviceRequest,
    service: AdviceService = Depends(get_advice_service),
):
    """Flat plan plus narrative advice. Advice is null when generation is unavailable."""
    plan = flat_schedule(req.principal, req.annual_rate_pct, req.tenor_months)
    text = await service.installment_advice(plan, bank_name=req.bank_name)
    return AdviceResponse(plan=InstallmentPlanResponse.from_plan(plan), advice=text)
