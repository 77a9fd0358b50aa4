"""DexScreener API client - free, no-auth token discovery.

Endpoints:
- Token boosts (latest/v1): freshly boosted tokens (paid promotions, but signals attention)
- Token pairs (latest/dex/tokens/{address}): every pair listing a token, across chains

Responses are validated into permissive models at this boundary: absent or
non-numeric numbers become 0, absent arrays become empty, unknown fields are
ignored. Everything past this module works on typed records.
"""

from __future__ import annotations

import math
from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, TypeAdapter

from alpharadar.clients.base import BaseClient


def _safe_float(val: Any) -> float:
    """Null-safe float conversion - DexScreener omits fields on thin pairs."""
    if val is None or isinstance(val, bool):
        return 0.0
    try:
        number = float(val)
    except (TypeError, ValueError):
        return 0.0
    return number if math.isfinite(number) else 0.0


def _safe_int(val: Any) -> int:
    return int(_safe_float(val))


def _safe_str(val: Any) -> str:
    if val is None:
        return ""
    return str(val)


def _or_empty(val: Any) -> Any:
    return {} if val is None else val


SafeFloat = Annotated[float, BeforeValidator(_safe_float)]
SafeInt = Annotated[int, BeforeValidator(_safe_int)]
SafeStr = Annotated[str, BeforeValidator(_safe_str)]


class _Payload(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class BoostEntry(_Payload):
    """One row of /token-boosts/latest/v1."""

    chain_id: SafeStr = Field(default="", alias="chainId")
    token_address: SafeStr = Field(default="", alias="tokenAddress")


class PairLiquidity(_Payload):
    usd: SafeFloat = 0.0


class PairVolume(_Payload):
    h24: SafeFloat = 0.0


class PairPriceChange(_Payload):
    h24: SafeFloat = 0.0


class TxnCounts(_Payload):
    buys: SafeInt = 0
    sells: SafeInt = 0


class PairTxns(_Payload):
    h24: Annotated[TxnCounts, BeforeValidator(_or_empty)] = Field(default_factory=TxnCounts)


class BaseToken(_Payload):
    symbol: SafeStr = ""
    name: SafeStr = ""


class DexPair(_Payload):
    """One pair from /latest/dex/tokens/{address}."""

    chain_id: SafeStr = Field(default="", alias="chainId")
    pair_created_at: SafeFloat = Field(default=0.0, alias="pairCreatedAt")
    liquidity: Annotated[PairLiquidity, BeforeValidator(_or_empty)] = Field(default_factory=PairLiquidity)
    volume: Annotated[PairVolume, BeforeValidator(_or_empty)] = Field(default_factory=PairVolume)
    price_change: Annotated[PairPriceChange, BeforeValidator(_or_empty)] = Field(
        default_factory=PairPriceChange, alias="priceChange"
    )
    txns: Annotated[PairTxns, BeforeValidator(_or_empty)] = Field(default_factory=PairTxns)
    base_token: Annotated[BaseToken, BeforeValidator(_or_empty)] = Field(
        default_factory=BaseToken, alias="baseToken"
    )


class TokenPairsResponse(_Payload):
    pairs: Annotated[list[DexPair], BeforeValidator(lambda v: [] if v is None else v)] = Field(
        default_factory=list
    )


_BOOSTS = TypeAdapter(list[BoostEntry])


class DexScreenerClient(BaseClient):
    """DexScreener free API - no auth required.

    Rate limit: ~60 req/min (undocumented but generous for free tier).
    Both endpoints are cached for ``cache_ttl`` seconds.
    """

    BASE_URL = "https://api.dexscreener.com"

    def __init__(
        self,
        base_url: str = BASE_URL,
        timeout: float = 12.0,
        cache_ttl: float = 30.0,
        rate_limit: float = 5.0,
        **kwargs: Any,
    ):
        super().__init__(
            base_url=base_url,
            headers={
                "Accept": "application/json",
                "User-Agent": "AlphaRadar/1.0",
            },
            rate_limit=rate_limit,
            timeout=timeout,
            provider_name="dexscreener",
            **kwargs,
        )
        self.cache_ttl = cache_ttl

    @classmethod
    def from_config(cls, config: dict[str, Any], **kwargs: Any) -> DexScreenerClient:
        cfg = config.get("dexscreener", {})
        return cls(
            base_url=cfg.get("base_url", cls.BASE_URL),
            timeout=float(cfg.get("timeout_seconds", 12.0)),
            cache_ttl=float(cfg.get("cache_ttl_seconds", 30.0)),
            rate_limit=float(cfg.get("rate_limit_per_second", 5.0)),
            **kwargs,
        )

    async def get_latest_boosts(self) -> list[BoostEntry]:
        """GET /token-boosts/latest/v1 - freshly boosted tokens.

        The response is a top-level list; anything else is a schema error.
        """
        data = await self.get("/token-boosts/latest/v1", cache_ttl=self.cache_ttl)
        return _BOOSTS.validate_python(data)

    async def get_token_pairs(self, token_address: str) -> list[DexPair]:
        """GET /latest/dex/tokens/{tokenAddress} - every pair listing this token."""
        data = await self.get(f"/latest/dex/tokens/{token_address}", cache_ttl=self.cache_ttl)
        return TokenPairsResponse.model_validate(data or {}).pairs
