"""Tracked-wallet correlator - synthetic activity for the wallet feed.

Not on-chain data. Each of the top radar tokens (fetch order) is paired with
a registry wallet by index, cycling through the registry, and a trade is
derived from the token's own metrics. Same input, same feed.
"""

from __future__ import annotations

from typing import Any, Sequence

from alpharadar.config import DEFAULT_CONFIG
from alpharadar.models import RadarToken, WalletActivityEvent, WalletRegistryEntry, WalletTag
from alpharadar.scoring import round_half_up

MS_PER_MINUTE = 60_000

WALLET_REGISTRY: tuple[WalletRegistryEntry, ...] = (
    WalletRegistryEntry(id="w1", name="ApexFlow", tag=WalletTag.SMART_MONEY, quality_score=86, win_rate=62),
    WalletRegistryEntry(id="w2", name="SolSniper-9", tag=WalletTag.SNIPER, quality_score=79, win_rate=58),
    WalletRegistryEntry(id="w3", name="MomoRotate", tag=WalletTag.MOMENTUM, quality_score=74, win_rate=55),
    WalletRegistryEntry(id="w4", name="BlueWhale-R", tag=WalletTag.SWING, quality_score=83, win_rate=60),
)


class WalletCorrelator:
    """Maps registry wallets onto radar tokens."""

    def __init__(
        self,
        registry: Sequence[WalletRegistryEntry] = WALLET_REGISTRY,
        config: dict[str, Any] | None = None,
    ):
        if not registry:
            raise ValueError("wallet registry must not be empty")
        self.registry = tuple(registry)
        self.settings = {**DEFAULT_CONFIG["wallets"], **(config or {}).get("wallets", {})}

    def trade_size(self, token: RadarToken, index: int) -> int:
        s = self.settings
        base = max(token.liquidity_usd * s["liquidity_size_fraction"], s["min_size_usd"])
        return round_half_up(base + index * s["size_step_usd"])

    def correlate(self, tokens: Sequence[RadarToken], now: int) -> list[WalletActivityEvent]:
        """One event per token for the first ``wallets.max_tokens`` tokens.

        Timestamps step back ``spacing_minutes`` per index, so the feed is
        newest-first by construction.
        """
        spacing_ms = int(self.settings["spacing_minutes"] * MS_PER_MINUTE)
        events: list[WalletActivityEvent] = []

        for i, token in enumerate(tokens[: int(self.settings["max_tokens"])]):
            wallet = self.registry[i % len(self.registry)]
            events.append(
                WalletActivityEvent(
                    wallet_id=wallet.id,
                    wallet_name=wallet.name,
                    tag=wallet.tag,
                    token=token.symbol,
                    side="buy" if token.price_change_24h >= 0 else "sell",
                    size_usd=self.trade_size(token, i),
                    quality_score=wallet.quality_score,
                    timestamp=now - i * spacing_ms,
                )
            )

        return events


def group_by_symbol(events: Sequence[WalletActivityEvent]) -> dict[str, list[WalletActivityEvent]]:
    grouped: dict[str, list[WalletActivityEvent]] = {}
    for event in events:
        grouped.setdefault(event.token, []).append(event)
    return grouped
