"""Tests for risk flag evaluation - thresholds, ordering, display sentinel."""

from __future__ import annotations

from alpharadar.models import RiskFlag
from alpharadar.utils.red_flags import (
    NO_MAJOR_FLAGS,
    check_one_sided_flow,
    describe_risk_flags,
    evaluate_risk_flags,
)


class TestEvaluateRiskFlags:

    def test_all_four_flags_in_order(self):
        """$40k liquidity, 1h old, 10 buys / 100 sells, -50% → every flag."""
        flags = evaluate_risk_flags(
            liquidity_usd=40_000, pair_age_hours=1, buys=10, sells=100, price_change_24h=-50,
        )
        assert flags == [
            RiskFlag.LOW_LIQUIDITY,
            RiskFlag.VERY_NEW_PAIR,
            RiskFlag.ONE_SIDED_FLOW,
            RiskFlag.EXTREME_VOLATILITY,
        ]

    def test_positive_spike_is_also_volatile(self):
        flags = evaluate_risk_flags(100_000, 24, 50, 50, 50)
        assert flags == [RiskFlag.EXTREME_VOLATILITY]

    def test_clean_token_has_no_flags(self):
        assert evaluate_risk_flags(300_000, 48, 900, 700, 12) == []

    def test_thresholds_are_strict(self):
        """Exactly $50k, exactly 3h, exactly 45% → nothing fires."""
        assert evaluate_risk_flags(50_000, 3, 40, 10, 45) == []

    def test_unknown_age_counts_as_new(self):
        assert RiskFlag.VERY_NEW_PAIR in evaluate_risk_flags(300_000, 0, 10, 10, 0)

    def test_threshold_overrides(self):
        flags = evaluate_risk_flags(80_000, 48, 10, 10, 0, thresholds={"min_liquidity_usd": 100_000})
        assert flags == [RiskFlag.LOW_LIQUIDITY]


class TestOneSidedFlow:

    def test_no_transactions_never_flags(self):
        assert check_one_sided_flow(0, 0) is False

    def test_buy_heavy(self):
        assert check_one_sided_flow(41, 10) is True
        assert check_one_sided_flow(40, 10) is False

    def test_sell_heavy(self):
        assert check_one_sided_flow(2, 10) is True
        assert check_one_sided_flow(3, 12) is False

    def test_buys_without_sells_use_unit_denominator(self):
        assert check_one_sided_flow(5, 0) is True
        assert check_one_sided_flow(4, 0) is False


def test_describe_risk_flags_sentinel():
    assert describe_risk_flags([]) == [NO_MAJOR_FLAGS]
    assert describe_risk_flags((RiskFlag.LOW_LIQUIDITY,)) == ["low_liquidity"]
