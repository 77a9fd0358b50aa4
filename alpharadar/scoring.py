"""
Opportunity Scoring
Four clamped sub-scores blended into a weighted composite.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Dict, Optional

from alpharadar.config import DEFAULT_CONFIG
from alpharadar.models import RadarToken, ScoreBreakdown


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def round_half_up(value: float) -> int:
    """Nearest integer, halves away from -inf (2.5 -> 3, -2.5 -> -2)."""
    return int(math.floor(value + 0.5))


def momentum_score(volume_24h: float, tx_24h: int, price_change_24h: float) -> int:
    """Radar momentum: volume, activity and upside move, 0-100."""
    raw = (volume_24h / 200_000) * 40 + (tx_24h / 300) * 30 + max(price_change_24h, 0) * 1.2
    return round_half_up(clamp(raw, 0, 100))


@dataclass(frozen=True)
class ScoredToken:
    """Pre-correlation result for one radar token."""
    score: int
    breakdown: ScoreBreakdown


class OpportunityScorer:
    """Calculate composite scores from radar metrics."""

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        scoring = (config or DEFAULT_CONFIG).get("scoring", DEFAULT_CONFIG["scoring"])
        self.weights = {**DEFAULT_CONFIG["scoring"]["weights"], **scoring.get("weights", {})}

    def liquidity_quality(self, liquidity_usd: float) -> float:
        # $250k of liquidity earns full marks
        return clamp((liquidity_usd / 250_000) * 100, 0, 100)

    def launch_momentum(self, volume_24h: float, tx_24h: int, price_change_24h: float) -> float:
        raw = (volume_24h / 300_000) * 45 + tx_24h / 40 + max(price_change_24h, 0) * 0.9
        return clamp(raw, 0, 100)

    def risk_deduction(self, flag_count: int, pair_age_hours: float) -> float:
        launch_penalty = 8 if pair_age_hours < 2 else 0
        return clamp(flag_count * 12 + launch_penalty, 0, 65)

    def smart_wallet_placeholder(self, momentum: int) -> float:
        """Stand-in until wallet correlation replaces it."""
        return clamp(35 + momentum * 0.45, 0, 100)

    def score(self, token: RadarToken) -> ScoredToken:
        """
        Score one token before wallet correlation.

        Weighting happens on the unrounded sub-scores; only the breakdown
        shown to the user is rounded.
        """
        liquidity = self.liquidity_quality(token.liquidity_usd)
        momentum = self.launch_momentum(token.volume_24h, token.tx_24h, token.price_change_24h)
        risk = self.risk_deduction(len(token.risk_flags), token.pair_age_hours)
        smart = self.smart_wallet_placeholder(token.momentum_score)

        w = self.weights
        weighted = (
            smart * w["smart_wallet"]
            + momentum * w["launch_momentum"]
            + liquidity * w["liquidity_quality"]
            - risk * w["risk_deduction"]
        )

        return ScoredToken(
            score=int(clamp(round_half_up(weighted), 0, 100)),
            breakdown=ScoreBreakdown(
                smart_wallet=round_half_up(smart),
                launch_momentum=round_half_up(momentum),
                liquidity_quality=round_half_up(liquidity),
                risk_deduction=round_half_up(risk),
            ),
        )
