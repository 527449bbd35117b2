"""Installment schedule computation: flat-rate and annuity conventions.

Pure functions: Decimal in, dataclass out. No I/O.
"""

from decimal import Decimal, ROUND_HALF_UP

from cardwise.engine.errors import InvalidArgument
from cardwise.models.results import InstallmentPeriod, InstallmentPlan, InterestConvention

WHOLE_UNIT = Decimal("1")
TWO_PLACES = Decimal("0.01")


def _round_unit(amount: Decimal) -> Decimal:
    return amount.quantize(WHOLE_UNIT, ROUND_HALF_UP)


def _validate(principal: Decimal, rate_pct: Decimal, tenor_months: int) -> None:
    if not (principal.is_finite() and rate_pct.is_finite()):
        raise InvalidArgument(f"principal and rate must be finite, got {principal} and {rate_pct}")
    if isinstance(tenor_months, bool) or not isinstance(tenor_months, int):
        raise InvalidArgument(f"tenor must be a whole number of months, got {tenor_months!r}")
    if tenor_months <= 0:
        raise InvalidArgument(f"tenor must be positive, got {tenor_months}")
    if principal <= 0:
        raise InvalidArgument(f"principal must be positive, got {principal}")
    if rate_pct < 0:
        raise InvalidArgument(f"rate must not be negative, got {rate_pct}")


def annuity_payment(principal: Decimal, monthly_rate: Decimal, n_periods: int) -> Decimal:
    """Unrounded fixed payment for a declining-balance loan.

    monthly_rate is a fraction (0.0175 for 1.75%).
    """
    if monthly_rate == 0:
        return principal / n_periods
    # M = P * [i(1+i)^n] / [(1+i)^n - 1]
    factor = (1 + monthly_rate) ** n_periods
    return principal * (monthly_rate * factor) / (factor - 1)


def flat_schedule(
    principal: Decimal, annual_rate_pct: Decimal, tenor_months: int
) -> InstallmentPlan:
    """Flat-rate installment plan.

    Interest is charged on the original principal for the whole term, so the
    principal and interest portions are identical every month.

    Args:
        principal: Amount converted to installments
        annual_rate_pct: Annual flat rate in percent (e.g. 21 for 21%)
        tenor_months: Number of monthly installments
    """
    _validate(principal, annual_rate_pct, tenor_months)

    tenor = Decimal(tenor_months)
    total_interest = principal * (annual_rate_pct / 100) * (tenor / 12)
    total_payment = principal + total_interest
    installment = _round_unit(total_payment / tenor)

    monthly_principal = (principal / tenor).quantize(TWO_PLACES, ROUND_HALF_UP)
    monthly_interest = (total_interest / tenor).quantize(TWO_PLACES, ROUND_HALF_UP)

    schedule = tuple(
        InstallmentPeriod(
            month=month,
            principal_payment=monthly_principal,
            interest_payment=monthly_interest,
            # principal - monthly_principal * m, kept exact so the last month lands on zero
            remaining_balance=(principal * (tenor - month) / tenor).quantize(
                TWO_PLACES, ROUND_HALF_UP
            ),
        )
        for month in range(1, tenor_months + 1)
    )

    return InstallmentPlan(
        convention=InterestConvention.FLAT,
        principal=principal,
        rate_pct=annual_rate_pct,
        tenor=tenor_months,
        monthly_installment=installment,
        total_payment=total_payment.quantize(TWO_PLACES, ROUND_HALF_UP),
        total_interest=total_interest.quantize(TWO_PLACES, ROUND_HALF_UP),
        schedule=schedule,
    )


def annuity_schedule(
    principal: Decimal, monthly_rate_pct: Decimal, tenor_months: int
) -> InstallmentPlan:
    """Declining-balance installment plan with a fixed monthly payment.

    Interest is rounded to whole units each month and the installment is never
    adjusted, so the final remaining balance keeps whatever rounding residue
    accumulated (typically a few units either side of zero).

    Args:
        principal: Loan amount
        monthly_rate_pct: Per-month rate in percent (e.g. 1.75 for 1.75%)
        tenor_months: Number of monthly payments
    """
    _validate(principal, monthly_rate_pct, tenor_months)

    i = monthly_rate_pct / 100
    installment = _round_unit(annuity_payment(principal, i, tenor_months))
    total_payment = installment * tenor_months

    periods: list[InstallmentPeriod] = []
    balance = principal

    for month in range(1, tenor_months + 1):
        interest = _round_unit(balance * i)
        principal_paid = installment - interest
        balance -= principal_paid

        periods.append(InstallmentPeriod(
            month=month,
            principal_payment=principal_paid,
            interest_payment=interest,
            remaining_balance=balance,
        ))

    return InstallmentPlan(
        convention=InterestConvention.ANNUITY,
        principal=principal,
        rate_pct=monthly_rate_pct,
        tenor=tenor_months,
        monthly_installment=installment,
        total_payment=total_payment,
        total_interest=total_payment - principal,
        schedule=tuple(periods),
    )


def compute_schedule(
    convention: InterestConvention,
    principal: Decimal,
    rate_pct: Decimal,
    tenor_months: int,
) -> InstallmentPlan:
    """Dispatch on convention. The rate is annual for FLAT and monthly for ANNUITY."""
    if convention is InterestConvention.FLAT:
        return flat_schedule(principal, rate_pct, tenor_months)
    if convention is InterestConvention.ANNUITY:
        return annuity_schedule(principal, rate_pct, tenor_months)
    raise InvalidArgument(f"unknown interest convention: {convention!r}")


def yearly_summary(plan: InstallmentPlan) -> list[dict[str, Decimal]]:
    """Aggregate a schedule by 12-month block.

    Returns list of dicts with keys: year, principal, interest, payments, ending_balance
    """
    yearly: list[dict[str, Decimal]] = []
    year_principal = Decimal("0")
    year_interest = Decimal("0")

    for p in plan.schedule:
        year_principal += p.principal_payment
        year_interest += p.interest_payment

        if p.month % 12 == 0 or p.month == len(plan.schedule):
            yearly.append({
                "year": Decimal((p.month - 1) // 12 + 1),
                "principal": year_principal,
                "interest": year_interest,
                "payments": year_principal + year_interest,
                "ending_balance": p.remaining_balance,
            })
            year_principal = Decimal("0")
            year_interest = Decimal("0")

    return yearly
