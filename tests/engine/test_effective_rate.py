from decimal import Decimal

import pytest

from cardwise.engine.amortization import annuity_payment, flat_schedule
from cardwise.engine.effective_rate import (
    effective_monthly_rate,
    flat_to_effective_annual_rate,
    flat_to_effective_monthly_rate,
)
from cardwise.engine.errors import InvalidArgument
from cardwise.engine.installments import DEFAULT_TENORS


class TestEffectiveMonthlyRate:
    def test_recovers_annuity_rate(self):
        payment = annuity_payment(Decimal("1000000"), Decimal("0.0175"), 6)
        rate = effective_monthly_rate(Decimal("1000000"), payment, 6)
        assert abs(rate - Decimal("1.75")) < Decimal("0.001")

    def test_no_interest_is_zero(self):
        assert effective_monthly_rate(Decimal("1200000"), Decimal("100000"), 12) == 0

    def test_installments_below_principal_is_zero(self):
        assert effective_monthly_rate(Decimal("1200000"), Decimal("90000"), 12) == 0

    def test_implausible_installment(self):
        # Paying double the principal every month has no root below 100%
        with pytest.raises(InvalidArgument):
            effective_monthly_rate(Decimal("1000"), Decimal("2000"), 2)

    def test_bad_inputs(self):
        with pytest.raises(InvalidArgument):
            effective_monthly_rate(Decimal("0"), Decimal("100"), 12)
        with pytest.raises(InvalidArgument):
            effective_monthly_rate(Decimal("1000"), Decimal("100"), 0)


class TestFlatToEffective:
    def test_typical_card_plan(self):
        """21% flat over 12 months is roughly 3% a month on the declining balance."""
        monthly = flat_to_effective_monthly_rate(Decimal("21"), 12)
        assert Decimal("3.0") < monthly < Decimal("3.1")
        annual = flat_to_effective_annual_rate(Decimal("21"), 12)
        assert Decimal("36") < annual < Decimal("38")

    def test_effective_exceeds_flat(self):
        monthly = flat_to_effective_monthly_rate(Decimal("21"), 12)
        assert monthly > Decimal("21") / 12

    def test_matches_plan_installment(self):
        plan = flat_schedule(Decimal("5000000"), Decimal("21"), 12)
        from_plan = effective_monthly_rate(plan.principal, plan.monthly_installment, plan.tenor)
        from_rate = flat_to_effective_monthly_rate(Decimal("21"), 12)
        # Only the whole-unit rounding of the installment separates the two
        assert abs(from_plan - from_rate) < Decimal("0.001")

    def test_across_default_tenors(self):
        rates = {t: flat_to_effective_monthly_rate(Decimal("21"), t) for t in DEFAULT_TENORS}
        # Rises over short tenors, then eases off slightly past a year
        assert rates[3] < rates[6] < rates[12]
        assert rates[24] < rates[18] < rates[12]
        assert all(rate > Decimal("21") / 12 for rate in rates.values())

    @pytest.mark.parametrize("tenor, expected", [
        (3, Decimal("2.6027")),
        (6, Decimal("2.9295")),
        (12, Decimal("3.0618")),
        (24, Decimal("3.0187")),
    ])
    def test_reference_values(self, tenor, expected):
        rate = flat_to_effective_monthly_rate(Decimal("21"), tenor)
        assert abs(rate - expected) <= Decimal("0.0002")

    def test_zero_rate(self):
        assert flat_to_effective_monthly_rate(Decimal("0"), 12) == 0
        assert flat_to_effective_annual_rate(Decimal("0"), 12) == 0

    def test_bad_inputs(self):
        with pytest.raises(InvalidArgument):
            flat_to_effective_monthly_rate(Decimal("-1"), 12)
        with pytest.raises(InvalidArgument):
            flat_to_effective_monthly_rate(Decimal("21"), 0)


class TestNonFinite:
    @pytest.mark.parametrize("value", ["NaN", "Infinity", "-Infinity"])
    def test_effective_monthly_rate(self, value):
        with pytest.raises(InvalidArgument):
            effective_monthly_rate(Decimal(value), Decimal("100000"), 12)
        with pytest.raises(InvalidArgument):
            effective_monthly_rate(Decimal("1000000"), Decimal(value), 12)

    @pytest.mark.parametrize("value", ["NaN", "Infinity"])
    def test_flat_rate(self, value):
        with pytest.raises(InvalidArgument):
            flat_to_effective_monthly_rate(Decimal(value), 12)
