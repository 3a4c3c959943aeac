import asyncio
from typing import Any, Dict, List, Optional

import aiohttp

from .config import COINGECKO_API, VS_CURRENCY, MARKETS_PER_PAGE, PRICE_CHANGE_WINDOWS
from .logging_setup import log
from .models import CoinMarket, MarketSnapshot, TrendingCoin

MARKETS_PARAMS = {
    "vs_currency": VS_CURRENCY,
    "order": "market_cap_desc",
    "per_page": str(MARKETS_PER_PAGE),
    "page": "1",
    "sparkline": "false",
    "price_change_percentage": PRICE_CHANGE_WINDOWS,
}


class CoinGeckoClient:
    """Read-only client for the public CoinGecko API.

    Every fetch returns ``None`` on failure (transport error, non-200 status,
    unexpected payload); callers check for it and answer with a "try again
    later" message. There is no retry and no timeout beyond aiohttp's default.
    """

    def __init__(self, base_url: str = COINGECKO_API):
        self.base_url = base_url.rstrip("/")

    async def _get_json(self, path: str, params: Optional[Dict[str, str]] = None) -> Any:
        url = f"{self.base_url}{path}"
        try:
            async with aiohttp.ClientSession() as s:
                async with s.get(url, params=params) as r:
                    if r.status != 200:
                        log.warning(f"CoinGecko {path}: HTTP {r.status}")
                        return None
                    return await r.json()
        except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as e:
            log.warning(f"CoinGecko {path} failed: {type(e).__name__}: {e}")
            return None

    async def fetch_market_snapshot(self) -> Optional[MarketSnapshot]:
        data = await self._get_json("/coins/markets", MARKETS_PARAMS)
        if data is None:
            return None
        if not isinstance(data, list):
            log.warning(f"CoinGecko /coins/markets: unexpected payload {type(data).__name__}")
            return None
        return tuple(CoinMarket.from_api(d) for d in data if isinstance(d, dict))

    async def fetch_trending(self) -> Optional[List[TrendingCoin]]:
        data = await self._get_json("/search/trending")
        if data is None:
            return None
        coins = data.get("coins") if isinstance(data, dict) else None
        if not isinstance(coins, list):
            log.warning("CoinGecko /search/trending: no 'coins' list in payload")
            return None
        return [TrendingCoin.from_api(c) for c in coins if isinstance(c, dict)]


def find_coin(snapshot: MarketSnapshot, coin: str) -> Optional[CoinMarket]:
    for c in snapshot:
        if c.matches(coin): return c
    return None
