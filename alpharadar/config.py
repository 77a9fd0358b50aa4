"""Configuration loader for Alpha Radar.

Loads config/radar.yaml (or $ALPHARADAR_CONFIG) over built-in defaults.
"""

from __future__ import annotations

import copy
import os
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv

load_dotenv()

WORKSPACE = Path(__file__).resolve().parent.parent
CONFIG_DIR = WORKSPACE / "config"

DEFAULT_CONFIG: dict[str, Any] = {
    "dexscreener": {
        "base_url": "https://api.dexscreener.com",
        "timeout_seconds": 12.0,
        "cache_ttl_seconds": 30.0,
        "rate_limit_per_second": 5.0,
    },
    "radar": {
        "fanout_limit": 8,
        "fanout_concurrency": 8,
        "max_tokens": 10,
        "per_token_timeout_seconds": 10.0,
    },
    "risk_flags": {
        "min_liquidity_usd": 50_000,
        "min_pair_age_hours": 3,
        "max_flow_ratio": 4.0,
        "min_flow_ratio": 0.25,
        "max_abs_price_change_pct": 45,
    },
    "scoring": {
        "weights": {
            "smart_wallet": 0.35,
            "launch_momentum": 0.30,
            "liquidity_quality": 0.20,
            "risk_deduction": 0.15,
        },
        "blend": {
            "base": 0.7,
            "wallet": 0.3,
        },
        "wallet_boost_min": 40,
        "wallet_boost_max": 95,
        "max_opportunities": 8,
        "alert_threshold": 70,
    },
    "wallets": {
        "max_tokens": 5,
        "liquidity_size_fraction": 0.04,
        "min_size_usd": 12_000,
        "size_step_usd": 2_200,
        "spacing_minutes": 6,
    },
    "server": {
        "host": "0.0.0.0",
        "port": 8080,
    },
}


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def default_config() -> dict[str, Any]:
    """Return a fresh copy of the built-in defaults."""
    return copy.deepcopy(DEFAULT_CONFIG)


def load_radar_config(path: Path | None = None) -> dict[str, Any]:
    """Load config/radar.yaml merged over defaults.

    A missing file yields the defaults. Environment overrides:
    ALPHARADAR_CONFIG (path), ALPHARADAR_HOST, ALPHARADAR_PORT.
    """
    if path is None:
        env_path = os.getenv("ALPHARADAR_CONFIG")
        path = Path(env_path) if env_path else CONFIG_DIR / "radar.yaml"

    loaded: dict[str, Any] = {}
    if path.exists():
        loaded = yaml.safe_load(path.read_text()) or {}

    config = _deep_merge(DEFAULT_CONFIG, loaded)

    if os.getenv("ALPHARADAR_HOST"):
        config["server"]["host"] = os.environ["ALPHARADAR_HOST"]
    if os.getenv("ALPHARADAR_PORT"):
        config["server"]["port"] = int(os.environ["ALPHARADAR_PORT"])

    return config
