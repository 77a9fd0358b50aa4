"""Tests for opportunity scoring - sub-score formulas, clamping, rounding."""

from __future__ import annotations

import itertools

import pytest

from alpharadar.scoring import OpportunityScorer, clamp, momentum_score, round_half_up
from tests.mocks.mock_radar import ALL_FLAGS, make_token


@pytest.fixture
def scorer():
    return OpportunityScorer()


class TestHelpers:

    def test_round_half_up(self):
        assert round_half_up(2.5) == 3
        assert round_half_up(3.5) == 4
        assert round_half_up(2.49) == 2
        assert round_half_up(-2.5) == -2

    def test_clamp(self):
        assert clamp(-5, 0, 100) == 0
        assert clamp(150, 0, 100) == 100
        assert clamp(42.5, 0, 100) == 42.5

    def test_momentum_score(self):
        # 100k vol → 20, 150 tx → 15, +10% → 12
        assert momentum_score(100_000, 150, 10) == 47
        assert momentum_score(10_000_000, 0, 0) == 100
        # Negative moves add nothing
        assert momentum_score(0, 0, -90) == 0


class TestSubScores:

    def test_liquidity_quality(self, scorer):
        assert scorer.liquidity_quality(125_000) == 50
        assert scorer.liquidity_quality(1_000_000) == 100

    def test_launch_momentum(self, scorer):
        # 150k → 22.5, 500 tx → 12.5, +30% → 27
        assert scorer.launch_momentum(150_000, 500, 30) == pytest.approx(62.0)
        assert scorer.launch_momentum(150_000, 500, -30) == pytest.approx(35.0)

    def test_risk_deduction_caps_at_65(self, scorer):
        assert scorer.risk_deduction(4, 1) == 56
        assert scorer.risk_deduction(6, 1) == 65
        assert scorer.risk_deduction(0, 2) == 0
        assert scorer.risk_deduction(0, 1.9) == 8

    def test_smart_wallet_placeholder(self, scorer):
        assert scorer.smart_wallet_placeholder(100) == 80
        assert scorer.smart_wallet_placeholder(0) == 35


class TestComposite:

    def test_clean_deep_token(self, scorer):
        token = make_token(
            liquidity_usd=300_000, volume_24h=600_000, price_change_24h=12,
            tx_24h=1600, pair_age_hours=48, momentum_score=100,
        )
        result = scorer.score(token)

        # 80×0.35 + 100×0.30 + 100×0.20 − 0
        assert result.score == 78
        assert result.breakdown.smart_wallet == 80
        assert result.breakdown.launch_momentum == 100
        assert result.breakdown.liquidity_quality == 100
        assert result.breakdown.risk_deduction == 0

    def test_weighting_uses_unrounded_subscores(self, scorer):
        token = make_token(
            liquidity_usd=40_000, volume_24h=90_000, price_change_24h=-50,
            tx_24h=110, pair_age_hours=1, momentum_score=29, risk_flags=ALL_FLAGS,
        )
        result = scorer.score(token)

        # 48.05×0.35 + 16.25×0.30 + 16×0.20 − 56×0.15 = 16.49
        assert result.score == 16
        assert result.breakdown.smart_wallet == 48
        assert result.breakdown.launch_momentum == 16
        assert result.breakdown.risk_deduction == 56

    def test_custom_weights(self):
        scorer = OpportunityScorer({"scoring": {"weights": {"smart_wallet": 0.0}}})
        token = make_token(liquidity_usd=250_000, volume_24h=0, price_change_24h=0, tx_24h=0)
        assert scorer.score(token).score == 20

    def test_bounds_hold_across_extremes(self, scorer):
        liquidity = [0, 49_999, 250_000, 10**9]
        volume = [0, 300_000, 10**9]
        change = [-99.9, 0, 45.1, 10_000]
        tx = [0, 40, 100_000]
        age = [0, 1.5, 2, 500]

        for liq, vol, chg, txs, hours in itertools.product(liquidity, volume, change, tx, age):
            token = make_token(
                liquidity_usd=liq, volume_24h=vol, price_change_24h=chg, tx_24h=txs,
                pair_age_hours=hours, momentum_score=momentum_score(vol, txs, chg),
                risk_flags=ALL_FLAGS if liq < 50_000 else (),
            )
            result = scorer.score(token)
            b = result.breakdown
            assert 0 <= result.score <= 100
            assert 0 <= b.liquidity_quality <= 100
            assert 0 <= b.launch_momentum <= 100
            assert 0 <= b.smart_wallet <= 100
            assert 0 <= b.risk_deduction <= 65
