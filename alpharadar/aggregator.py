"""Opportunity aggregation - join scores with wallet activity, dedupe, rank."""

from __future__ import annotations

import logging
from typing import Any, Sequence

from alpharadar.config import DEFAULT_CONFIG
from alpharadar.models import AlertEvent, Opportunity, RadarToken, WalletActivityEvent
from alpharadar.scoring import OpportunityScorer, clamp, round_half_up
from alpharadar.wallets import group_by_symbol

log = logging.getLogger("alpharadar.aggregator")


class OpportunityAggregator:
    """Blend base scores with wallet boosts into a ranked, deduplicated list."""

    def __init__(self, scorer: OpportunityScorer | None = None, config: dict[str, Any] | None = None):
        self.scorer = scorer or OpportunityScorer(config)
        scoring = {**DEFAULT_CONFIG["scoring"], **(config or {}).get("scoring", {})}
        self.blend = {**DEFAULT_CONFIG["scoring"]["blend"], **scoring.get("blend", {})}
        self.boost_min = scoring["wallet_boost_min"]
        self.boost_max = scoring["wallet_boost_max"]
        self.max_opportunities = int(scoring["max_opportunities"])

    def wallet_boost(self, events: Sequence[WalletActivityEvent]) -> float:
        """Mean wallet quality, clamped. No wallets averages to 0, i.e. the floor."""
        total = sum(event.quality_score for event in events)
        return clamp(total / max(len(events), 1), self.boost_min, self.boost_max)

    def build(self, token: RadarToken, events: Sequence[WalletActivityEvent]) -> Opportunity:
        scored = self.scorer.score(token)
        boost = self.wallet_boost(events)
        final = clamp(round_half_up(scored.score * self.blend["base"] + boost * self.blend["wallet"]), 0, 100)

        return Opportunity(
            key=token.key,
            symbol=token.symbol,
            chain_id=token.chain_id,
            token_address=token.token_address,
            dex_url=token.dex_url,
            score=int(final),
            score_breakdown=scored.breakdown.model_copy(update={"smart_wallet": round_half_up(boost)}),
            risk_flags=token.risk_flags,
            wallets_involved=tuple(event.wallet_name for event in events),
        )

    def aggregate(
        self,
        tokens: Sequence[RadarToken],
        wallet_feed: Sequence[WalletActivityEvent],
    ) -> list[Opportunity]:
        """
        Score every token, keep the best per identity key, rank.

        Keys are chain + contract, never the symbol: two tokens sharing a
        ticker on different chains are distinct opportunities. On a key
        collision the strictly higher score replaces the entry in place;
        ties keep the first one seen.
        """
        by_symbol = group_by_symbol(wallet_feed)
        deduped: dict[str, Opportunity] = {}

        for token in tokens:
            opp = self.build(token, by_symbol.get(token.symbol, []))
            existing = deduped.get(opp.key)
            if existing is None or opp.score > existing.score:
                deduped[opp.key] = opp
            else:
                log.debug("Dropped duplicate %s (score %d <= %d)", opp.key, opp.score, existing.score)

        ranked = sorted(deduped.values(), key=lambda o: o.score, reverse=True)
        return ranked[: self.max_opportunities]


def derive_alerts(opportunities: Sequence[Opportunity], threshold: int = 70) -> list[AlertEvent]:
    return [
        AlertEvent(key=f"{opp.key}:high-score", symbol=opp.symbol, score=opp.score)
        for opp in opportunities
        if opp.score >= threshold
    ]
