"""Base HTTP client for the Alpha Radar feed layer.

One attempt per request. A failure of any kind (status, transport, body)
surfaces as APIError and the caller drops whatever depended on it.

Provides:
- Rate limiting (token bucket with reservations)
- Timeout handling
- Response caching (TTL-based, expired entries swept on write)
"""

from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass
from typing import Any

import httpx

log = logging.getLogger("alpharadar.clients")


class RateLimiter:
    """Token bucket shared by every request on one client.

    A caller that finds the bucket empty still takes its token, driving the
    balance negative, so concurrent fan-out callers queue behind each other
    instead of all waking after the same short wait.
    """

    def __init__(self, max_per_second: float):
        self.max_per_second = max_per_second
        self._tokens = max_per_second
        self._last_refill = time.monotonic()

    def reserve(self) -> float:
        """Take one token. Returns seconds to wait before using it."""
        now = time.monotonic()
        elapsed = now - self._last_refill
        self._tokens = min(self.max_per_second, self._tokens + elapsed * self.max_per_second)
        self._last_refill = now

        self._tokens -= 1.0
        if self._tokens >= 0:
            return 0.0
        return -self._tokens / self.max_per_second

    async def acquire(self) -> None:
        wait = self.reserve()
        if wait > 0:
            log.debug("Rate limiter: waiting %.2fs", wait)
            await asyncio.sleep(wait)


@dataclass
class CacheEntry:
    data: Any
    expires_at: float


class ResponseCache:
    """In-memory TTL cache for decoded responses.

    Token lookups are keyed per address and boosted tokens rotate, so keys
    are rarely read again once stale. Every ``set`` sweeps expired entries;
    the store never holds more than one TTL window of responses.
    """

    def __init__(self) -> None:
        self._store: dict[str, CacheEntry] = {}

    def get(self, key: str) -> Any | None:
        entry = self._store.get(key)
        if entry is None:
            return None
        if time.monotonic() > entry.expires_at:
            del self._store[key]
            return None
        return entry.data

    def set(self, key: str, data: Any, ttl_seconds: float) -> None:
        now = time.monotonic()
        self.sweep(now)
        self._store[key] = CacheEntry(data=data, expires_at=now + ttl_seconds)

    def sweep(self, now: float | None = None) -> int:
        """Drop expired entries. Returns how many were removed."""
        now = time.monotonic() if now is None else now
        expired = [key for key, entry in self._store.items() if now > entry.expires_at]
        for key in expired:
            del self._store[key]
        return len(expired)

    def clear(self) -> None:
        self._store.clear()

    def __len__(self) -> int:
        return len(self._store)


class APIError(Exception):
    """Failed upstream call: HTTP status, transport failure or unreadable body."""

    def __init__(self, message: str, status_code: int = 0, provider: str = ""):
        super().__init__(message)
        self.status_code = status_code
        self.provider = provider


class BaseClient:
    """Base async HTTP client with rate limiting and caching.

    Usage:
        async with BaseClient(base_url="https://api.dexscreener.com", rate_limit=5.0) as client:
            data = await client.get("/token-boosts/latest/v1", cache_ttl=30)
    """

    def __init__(
        self,
        base_url: str = "",
        headers: dict[str, str] | None = None,
        rate_limit: float = 10.0,
        timeout: float = 10.0,
        provider_name: str = "",
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.provider_name = provider_name
        self.timeout = timeout
        self._rate_limiter = RateLimiter(max_per_second=rate_limit)
        self._cache = ResponseCache()
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            headers=headers or {},
            timeout=httpx.Timeout(timeout),
            transport=transport,
        )

    async def close(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> BaseClient:
        return self

    async def __aexit__(self, *exc: Any) -> None:
        await self.close()

    async def get(
        self,
        path: str,
        params: dict[str, Any] | None = None,
        cache_ttl: float = 0,
    ) -> Any:
        """GET ``path`` and decode JSON. ``cache_ttl > 0`` serves repeats from cache."""
        cache_key = f"GET:{path}:{params}" if cache_ttl > 0 else ""
        if cache_key:
            cached = self._cache.get(cache_key)
            if cached is not None:
                return cached

        data = await self._request("GET", path, params=params)

        if cache_key:
            self._cache.set(cache_key, data, cache_ttl)
        return data

    def _status_error(self, response: httpx.Response) -> APIError:
        status = response.status_code
        if status == 429:
            message = f"Rate limited by {self.provider_name}"
        elif status >= 500:
            message = f"Server error from {self.provider_name}: {status}"
        else:
            message = f"Client error from {self.provider_name}: {status} - {response.text[:200]}"
        return APIError(message, status_code=status, provider=self.provider_name)

    async def _request(self, method: str, path: str, params: dict[str, Any] | None = None) -> Any:
        await self._rate_limiter.acquire()

        try:
            response = await self._client.request(method, path, params=params)
        except httpx.TransportError as e:
            raise APIError(f"Connection error to {self.provider_name}: {e}", provider=self.provider_name) from e

        if response.status_code >= 400:
            raise self._status_error(response)

        try:
            return response.json()
        except ValueError as e:
            raise APIError(
                f"Malformed JSON from {self.provider_name}: {e}",
                status_code=response.status_code,
                provider=self.provider_name,
            ) from e
