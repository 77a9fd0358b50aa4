"""Alpha Radar HTTP endpoint.

Routes:
- GET /api/opportunities - fresh snapshot per call, always 200
- GET /health            - liveness

One DexScreener client lives on the app so its response cache spans
requests.

Usage:
    python3 -m alpharadar.server
"""

from __future__ import annotations

import logging
import os
from typing import Any, AsyncIterator

from aiohttp import web

from alpharadar.clients.dexscreener import DexScreenerClient
from alpharadar.config import load_radar_config
from alpharadar.skills.opportunity_scan import scan_opportunities

log = logging.getLogger("alpharadar.server")

CONFIG_KEY = web.AppKey("config", dict)
CLIENT_KEY = web.AppKey("dexscreener", DexScreenerClient)


async def opportunities_handler(request: web.Request) -> web.Response:
    snapshot = await scan_opportunities(
        client=request.app[CLIENT_KEY],
        config=request.app[CONFIG_KEY],
    )
    return web.json_response(snapshot.to_payload())


async def health_handler(request: web.Request) -> web.Response:
    return web.json_response({"status": "ok"})


def create_app(
    config: dict[str, Any] | None = None,
    client: DexScreenerClient | None = None,
) -> web.Application:
    """Build the app. A passed-in client is used as-is and not closed."""
    app = web.Application()
    app[CONFIG_KEY] = config if config is not None else load_radar_config()

    async def dexscreener_ctx(app: web.Application) -> AsyncIterator[None]:
        if client is not None:
            app[CLIENT_KEY] = client
            yield
            return
        app[CLIENT_KEY] = DexScreenerClient.from_config(app[CONFIG_KEY])
        yield
        await app[CLIENT_KEY].close()

    app.cleanup_ctx.append(dexscreener_ctx)
    app.router.add_get("/api/opportunities", opportunities_handler)
    app.router.add_get("/health", health_handler)
    return app


def main() -> None:
    logging.basicConfig(
        level=os.getenv("ALPHARADAR_LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    config = load_radar_config()
    server_cfg = config["server"]
    log.info("Alpha Radar listening on %s:%s", server_cfg["host"], server_cfg["port"])
    web.run_app(create_app(config), host=server_cfg["host"], port=int(server_cfg["port"]))


if __name__ == "__main__":
    main()
