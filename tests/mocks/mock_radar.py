"""RadarToken builders for scorer/aggregator tests."""

from __future__ import annotations

from typing import Any

from alpharadar.models import RadarToken, RiskFlag, identity_key


def make_token(
    symbol: str = "TEST",
    chain_id: str = "solana",
    token_address: str = "TestMint111111111111111111111111111111111111",
    **overrides: Any,
) -> RadarToken:
    fields: dict[str, Any] = {
        "key": identity_key(chain_id, token_address),
        "symbol": symbol,
        "name": f"{symbol} Token",
        "chain_id": chain_id,
        "token_address": token_address,
        "dex_url": f"https://dexscreener.com/{chain_id}/{token_address}",
        "liquidity_usd": 100_000.0,
        "volume_24h": 100_000.0,
        "price_change_24h": 5.0,
        "tx_24h": 200,
        "pair_age_hours": 24.0,
        "momentum_score": 50,
        "risk_flags": (),
    }
    fields.update(overrides)
    return RadarToken(**fields)


ALL_FLAGS = (
    RiskFlag.LOW_LIQUIDITY,
    RiskFlag.VERY_NEW_PAIR,
    RiskFlag.ONE_SIDED_FLOW,
    RiskFlag.EXTREME_VOLATILITY,
)
