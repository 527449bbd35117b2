"""Effective (declining-balance) rate implied by a flat-rate plan, using scipy.

Pure functions. No I/O.
"""

from decimal import Decimal, ROUND_HALF_UP

from scipy.optimize import brentq

from cardwise.engine.errors import InvalidArgument

FOUR_PLACES = Decimal("0.0001")


def effective_monthly_rate(
    principal: Decimal, monthly_installment: Decimal, tenor_months: int
) -> Decimal:
    """Monthly rate (percent) at which an annuity of this size repays principal.

    Solves P = M * (1 - (1+r)^-n) / r for r with Brent's method.
    Returns 0 when the installments do not exceed principal / tenor.
    """
    if not (principal.is_finite() and monthly_installment.is_finite()):
        raise InvalidArgument("principal and installment must be finite")
    if principal <= 0:
        raise InvalidArgument(f"principal must be positive, got {principal}")
    if isinstance(tenor_months, bool) or not isinstance(tenor_months, int) or tenor_months <= 0:
        raise InvalidArgument(f"tenor must be a positive whole number, got {tenor_months!r}")

    if monthly_installment * tenor_months <= principal:
        return Decimal("0")

    p = float(principal)
    m = float(monthly_installment)
    n = tenor_months

    def residual(rate: float) -> float:
        return m * (1 - (1 + rate) ** -n) / rate - p

    # Search between 0.0001% and 100% per month
    try:
        rate = brentq(residual, 1e-6, 1.0, xtol=1e-12, maxiter=1000)
    except ValueError:
        # No root in range (installment larger than any sane rate implies)
        raise InvalidArgument("installment implies a monthly rate above 100%") from None
    return (Decimal(str(rate)) * 100).quantize(FOUR_PLACES, ROUND_HALF_UP)


def flat_to_effective_monthly_rate(annual_flat_rate_pct: Decimal, tenor_months: int) -> Decimal:
    """Monthly effective rate (percent) of a flat annual rate.

    Independent of principal, so it is solved on a fixed loan without rounding
    the installment.
    """
    if not annual_flat_rate_pct.is_finite():
        raise InvalidArgument(f"rate must be finite, got {annual_flat_rate_pct}")
    if annual_flat_rate_pct < 0:
        raise InvalidArgument(f"rate must not be negative, got {annual_flat_rate_pct}")
    if isinstance(tenor_months, bool) or not isinstance(tenor_months, int) or tenor_months <= 0:
        raise InvalidArgument(f"tenor must be a positive whole number, got {tenor_months!r}")
    if annual_flat_rate_pct == 0:
        return Decimal("0")
    unit = Decimal("1000000")
    tenor = Decimal(tenor_months)
    total = unit + unit * (annual_flat_rate_pct / 100) * (tenor / 12)
    return effective_monthly_rate(unit, total / tenor, tenor_months)


def flat_to_effective_annual_rate(annual_flat_rate_pct: Decimal, tenor_months: int) -> Decimal:
    """Nominal annual effective rate (monthly effective x 12) of a flat rate."""
    monthly = flat_to_effective_monthly_rate(annual_flat_rate_pct, tenor_months)
    return (monthly * 12).quantize(FOUR_PLACES, ROUND_HALF_UP)
