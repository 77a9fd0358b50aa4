"""Radar records - the typed shapes that flow through the pipeline.

Python attribute names are snake_case; every model serializes to the
camelCase JSON the dashboard consumes via ``to_payload()``.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field


# ── Enums ────────────────────────────────────────────────────────────


class RiskFlag(str, Enum):
    LOW_LIQUIDITY = "low_liquidity"
    VERY_NEW_PAIR = "very_new_pair"
    ONE_SIDED_FLOW = "one_sided_flow"
    EXTREME_VOLATILITY = "extreme_volatility"


class WalletTag(str, Enum):
    SNIPER = "sniper"
    SWING = "swing"
    MOMENTUM = "momentum"
    SMART_MONEY = "smart-money"


Side = Literal["buy", "sell"]


class _Record(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


def identity_key(chain_id: str, token_address: str) -> str:
    """Chain + contract identity. Never the ticker."""
    return f"{chain_id}:{token_address.lower()}"


# ── Radar ────────────────────────────────────────────────────────────


class RadarToken(_Record):
    key: str
    symbol: str
    name: str
    chain_id: str = Field(alias="chainId")
    token_address: str = Field(alias="tokenAddress")
    dex_url: str = Field(alias="dexUrl")
    liquidity_usd: float = Field(alias="liquidityUsd")
    volume_24h: float = Field(alias="volume24h")
    price_change_24h: float = Field(alias="priceChange24h")
    tx_24h: int = Field(alias="tx24h")
    pair_age_hours: float = Field(alias="pairAgeHours")
    momentum_score: int = Field(alias="momentumScore", ge=0, le=100)
    risk_flags: tuple[RiskFlag, ...] = Field(default=(), alias="riskFlags")


# ── Scoring ──────────────────────────────────────────────────────────


class ScoreBreakdown(_Record):
    smart_wallet: int = Field(alias="smartWallet", ge=0, le=100)
    launch_momentum: int = Field(alias="launchMomentum", ge=0, le=100)
    liquidity_quality: int = Field(alias="liquidityQuality", ge=0, le=100)
    risk_deduction: int = Field(alias="riskDeduction", ge=0, le=65)


# ── Wallets ──────────────────────────────────────────────────────────


class WalletRegistryEntry(_Record):
    id: str
    name: str
    tag: WalletTag
    quality_score: int = Field(alias="qualityScore", ge=0, le=100)
    win_rate: float = Field(alias="winRate")


class WalletActivityEvent(_Record):
    wallet_id: str = Field(alias="walletId")
    wallet_name: str = Field(alias="walletName")
    tag: WalletTag
    token: str
    side: Side
    size_usd: int = Field(alias="sizeUsd")
    quality_score: int = Field(alias="qualityScore")
    timestamp: int


# ── Output ───────────────────────────────────────────────────────────


class Opportunity(_Record):
    key: str
    symbol: str
    chain_id: str = Field(alias="chainId")
    token_address: str = Field(alias="tokenAddress")
    dex_url: str = Field(alias="dexUrl")
    score: int = Field(ge=0, le=100)
    score_breakdown: ScoreBreakdown = Field(alias="scoreBreakdown")
    risk_flags: tuple[RiskFlag, ...] = Field(default=(), alias="riskFlags")
    wallets_involved: tuple[str, ...] = Field(default=(), alias="walletsInvolved")


class AlertEvent(_Record):
    key: str
    type: Literal["high_score"] = "high_score"
    symbol: str
    score: int


class OpportunitySnapshot(_Record):
    generated_at: int = Field(alias="generatedAt")
    opportunities: tuple[Opportunity, ...] = ()
    wallet_feed: tuple[WalletActivityEvent, ...] = Field(default=(), alias="walletFeed")
    meme_radar: tuple[RadarToken, ...] = Field(default=(), alias="memeRadar")
    alerts: tuple[AlertEvent, ...] = ()
