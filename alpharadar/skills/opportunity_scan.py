"""Opportunity Scan - one radar cycle, printed as a JSON snapshot.

Pipeline:
1. Meme radar from DexScreener boosts + pair metadata
2. Synthetic wallet feed over the top radar tokens
3. Score, correlate, dedupe by chain + contract, rank
4. High-score alerts

Always exits 0: upstream failures only shrink the snapshot.

Usage:
    python3 -m alpharadar.skills.opportunity_scan [--compact] [--config PATH]
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import os
import sys
import time
from pathlib import Path
from typing import Any

from alpharadar.aggregator import OpportunityAggregator, derive_alerts
from alpharadar.clients.dexscreener import DexScreenerClient
from alpharadar.config import load_radar_config
from alpharadar.models import OpportunitySnapshot
from alpharadar.radar import fetch_radar, now_ms
from alpharadar.utils.red_flags import describe_risk_flags
from alpharadar.wallets import WALLET_REGISTRY, WalletCorrelator


def _log(msg: str) -> None:
    ts = time.strftime("%H:%M:%S")
    print(f"[opportunity-scan {ts}] {msg}", file=sys.stderr)


async def scan_opportunities(
    client: DexScreenerClient | None = None,
    config: dict[str, Any] | None = None,
    now: int | None = None,
) -> OpportunitySnapshot:
    """Run one full cycle and assemble the snapshot.

    Args:
        client: Shared DexScreener client. When omitted one is created from
            config and closed before returning.
        config: Radar config (defaults to config/radar.yaml).
        now: Cycle clock in epoch ms; pinned in tests.
    """
    config = config if config is not None else load_radar_config()
    owns_client = client is None
    if client is None:
        client = DexScreenerClient.from_config(config)

    try:
        cycle_now = now if now is not None else now_ms()
        radar = await fetch_radar(client, config, now=cycle_now)
    finally:
        if owns_client:
            await client.close()

    wallet_feed = WalletCorrelator(WALLET_REGISTRY, config).correlate(radar, cycle_now)
    opportunities = OpportunityAggregator(config=config).aggregate(radar, wallet_feed)
    threshold = int(config.get("scoring", {}).get("alert_threshold", 70))

    return OpportunitySnapshot(
        generated_at=now_ms() if now is None else now,
        opportunities=tuple(opportunities),
        wallet_feed=tuple(wallet_feed),
        meme_radar=tuple(radar),
        alerts=tuple(derive_alerts(opportunities, threshold)),
    )


def main() -> None:
    parser = argparse.ArgumentParser(description="Alpha Radar - Opportunity Scan")
    parser.add_argument("--compact", action="store_true", help="Single-line JSON output")
    parser.add_argument("--config", type=Path, help="Path to radar.yaml")
    args = parser.parse_args()

    # stdout carries the JSON snapshot; logs go to stderr with the _log lines
    logging.basicConfig(
        level=os.getenv("ALPHARADAR_LOG_LEVEL", "WARNING").upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )
    config = load_radar_config(args.config)
    snapshot = asyncio.run(scan_opportunities(config=config))

    _log(
        f"{len(snapshot.meme_radar)} radar / {len(snapshot.opportunities)} opportunities / "
        f"{len(snapshot.alerts)} alerts"
    )
    for opp in snapshot.opportunities:
        _log(f"  {opp.score:>3} {opp.symbol:<12} {opp.key}  {', '.join(describe_risk_flags(opp.risk_flags))}")

    print(json.dumps(snapshot.to_payload(), indent=None if args.compact else 2))
    sys.exit(0)


if __name__ == "__main__":
    main()
