"""Meme radar - boosted-token discovery enriched with pair metadata.

1. Pull the latest boosts from DexScreener
2. Dedupe by chainId:tokenAddress, cap the fan-out
3. Fetch pairs per token concurrently, pick the pair on the boosted chain
4. Normalize into RadarToken with risk flags and a momentum score

Best effort throughout: a failed discovery call yields an empty radar, a
failed token lookup drops that token only.
"""

from __future__ import annotations

import logging
import time
from typing import Any

import httpx

from alpharadar.clients.base import APIError
from alpharadar.clients.dexscreener import BoostEntry, DexPair, DexScreenerClient
from alpharadar.config import DEFAULT_CONFIG
from alpharadar.models import RadarToken, identity_key
from alpharadar.scoring import momentum_score
from alpharadar.utils.async_batch import batch_gather
from alpharadar.utils.red_flags import evaluate_risk_flags

log = logging.getLogger("alpharadar.radar")

MS_PER_HOUR = 3_600_000
DEXSCREENER_WEB = "https://dexscreener.com"

FEED_ERRORS = (APIError, httpx.HTTPError, ValueError)


def now_ms() -> int:
    return int(time.time() * 1000)


def unique_boosts(boosts: list[BoostEntry], limit: int) -> list[BoostEntry]:
    """First-seen order, exact chainId:tokenAddress identity, capped at ``limit``.

    Rows without a chain or address are dropped before the cap, so they never
    take a fan-out slot from a usable boost.
    """
    unique: dict[str, BoostEntry] = {}
    for boost in boosts:
        if not boost.chain_id or not boost.token_address:
            log.debug("Skipping boost without chain/address: %r", boost)
            continue
        unique.setdefault(f"{boost.chain_id}:{boost.token_address}", boost)
    return list(unique.values())[:limit]


def select_pair(pairs: list[DexPair], chain_id: str) -> DexPair | None:
    """Pair on the boosted chain, else whatever DexScreener listed first."""
    for pair in pairs:
        if pair.chain_id == chain_id:
            return pair
    return pairs[0] if pairs else None


def pair_age_hours(pair_created_at: float, now: int) -> float:
    if not pair_created_at:
        return 0.0
    return (now - pair_created_at) / MS_PER_HOUR


def build_radar_token(
    boost: BoostEntry,
    pair: DexPair,
    now: int,
    thresholds: dict[str, Any] | None = None,
) -> RadarToken:
    """Normalize one boost + its selected pair into a RadarToken."""
    liquidity = pair.liquidity.usd
    volume = pair.volume.h24
    change = pair.price_change.h24
    buys = pair.txns.h24.buys
    sells = pair.txns.h24.sells
    tx_24h = buys + sells
    age = pair_age_hours(pair.pair_created_at, now)

    return RadarToken(
        key=identity_key(boost.chain_id, boost.token_address),
        symbol=pair.base_token.symbol or "UNK",
        name=pair.base_token.name or "Unknown",
        chain_id=boost.chain_id,
        token_address=boost.token_address,
        dex_url=f"{DEXSCREENER_WEB}/{boost.chain_id}/{boost.token_address}",
        liquidity_usd=liquidity,
        volume_24h=volume,
        price_change_24h=change,
        tx_24h=tx_24h,
        pair_age_hours=age,
        momentum_score=momentum_score(volume, tx_24h, change),
        risk_flags=tuple(evaluate_risk_flags(liquidity, age, buys, sells, change, thresholds)),
    )


async def fetch_radar(
    client: DexScreenerClient,
    config: dict[str, Any] | None = None,
    now: int | None = None,
) -> list[RadarToken]:
    """Fetch up to ``radar.max_tokens`` radar tokens. Never raises."""
    config = config or DEFAULT_CONFIG
    radar_cfg = {**DEFAULT_CONFIG["radar"], **config.get("radar", {})}
    thresholds = config.get("risk_flags")

    try:
        boosts = await client.get_latest_boosts()
    except FEED_ERRORS as e:
        log.warning("Boost feed unavailable, radar empty: %s", e)
        return []

    candidates = unique_boosts(boosts, int(radar_cfg["fanout_limit"]))
    if not candidates:
        return []

    cycle_now = now if now is not None else now_ms()

    async def enrich(boost: BoostEntry) -> RadarToken | None:
        try:
            pairs = await client.get_token_pairs(boost.token_address)
        except FEED_ERRORS as e:
            log.info("Pair lookup failed for %s:%s: %s", boost.chain_id, boost.token_address, e)
            return None
        pair = select_pair(pairs, boost.chain_id)
        if pair is None:
            log.debug("No pairs for %s:%s", boost.chain_id, boost.token_address)
            return None
        return build_radar_token(boost, pair, cycle_now, thresholds)

    results = await batch_gather(
        candidates,
        enrich,
        max_concurrent=int(radar_cfg["fanout_concurrency"]),
        timeout=float(radar_cfg["per_token_timeout_seconds"]),
    )

    tokens = [token for token in results if token is not None]
    log.info("Radar: %d boosts, %d unique, %d enriched", len(boosts), len(candidates), len(tokens))
    return tokens[: int(radar_cfg["max_tokens"])]
