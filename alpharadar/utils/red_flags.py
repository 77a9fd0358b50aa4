"""
Red Flag Detection - negative evidence from raw pair metrics.

Detects, in this order:
1. Low liquidity (thin pool, easy to move)
2. Very new pair (launch window, no track record)
3. One-sided flow (buys/sells ratio > 4 or < 0.25)
4. Extreme volatility (|24h change| > 45 points)
"""
from __future__ import annotations

from typing import Any

from alpharadar.models import RiskFlag

NO_MAJOR_FLAGS = "no_major_flags"

_DEFAULTS: dict[str, float] = {
    "min_liquidity_usd": 50_000,
    "min_pair_age_hours": 3,
    "max_flow_ratio": 4.0,
    "min_flow_ratio": 0.25,
    "max_abs_price_change_pct": 45,
}


def check_one_sided_flow(
    buys: int,
    sells: int,
    max_ratio: float = 4.0,
    min_ratio: float = 0.25,
) -> bool:
    """True when order flow is lopsided in either direction.

    Pairs with no transactions are never flagged.
    """
    if buys + sells <= 0:
        return False
    ratio = buys / max(sells, 1)
    return ratio > max_ratio or ratio < min_ratio


def evaluate_risk_flags(
    liquidity_usd: float,
    pair_age_hours: float,
    buys: int,
    sells: int,
    price_change_24h: float,
    thresholds: dict[str, Any] | None = None,
) -> list[RiskFlag]:
    """Derive ordered risk flags from raw metrics.

    Args:
        liquidity_usd: Pool liquidity in USD
        pair_age_hours: Hours since pair creation (0 when unknown)
        buys: 24h buy count
        sells: 24h sell count
        price_change_24h: 24h price change in percent
        thresholds: Overrides for the ``risk_flags`` config section

    Returns:
        Flags in evaluation order; empty list when nothing fires
    """
    t = {**_DEFAULTS, **(thresholds or {})}
    flags: list[RiskFlag] = []

    if liquidity_usd < t["min_liquidity_usd"]:
        flags.append(RiskFlag.LOW_LIQUIDITY)
    if pair_age_hours < t["min_pair_age_hours"]:
        flags.append(RiskFlag.VERY_NEW_PAIR)
    if check_one_sided_flow(buys, sells, t["max_flow_ratio"], t["min_flow_ratio"]):
        flags.append(RiskFlag.ONE_SIDED_FLOW)
    if abs(price_change_24h) > t["max_abs_price_change_pct"]:
        flags.append(RiskFlag.EXTREME_VOLATILITY)

    return flags


def describe_risk_flags(flags: list[RiskFlag] | tuple[RiskFlag, ...]) -> list[str]:
    """Display labels, with a sentinel when the token is clean."""
    if not flags:
        return [NO_MAJOR_FLAGS]
    return [flag.value for flag in flags]
