import math
from typing import Awaitable, Callable, Dict, List, Optional, Sequence

from . import formatting as fmt
from .coingecko import CoinGeckoClient, find_coin
from .logging_setup import log
from .models import normalize_coin
from .registry import AlertRegistry

Handler = Callable[[int, Sequence[str]], Awaitable[str]]


def parse_price(v: str) -> Optional[float]:
    try:
        x = float(v.replace(",", "").replace("$", "").strip())
    except ValueError:
        return None
    if not math.isfinite(x) or x < 0: return None
    return x

def split_command(text: str):
    """'/alert@CryptoBot btc 50000' -> ('alert', ['btc', '50000']); non-commands -> (None, [])."""
    parts = (text or "").split()
    if not parts or not parts[0].startswith("/"):
        return None, []
    name = parts[0][1:].split("@", 1)[0].lower()
    return name, parts[1:]


class CommandDispatcher:
    """Routes chat commands to their handler and returns the reply text."""

    def __init__(self, registry: AlertRegistry, market: CoinGeckoClient):
        self.registry = registry
        self.market = market
        self.handlers: Dict[str, Handler] = {
            "start": self.start,
            "help": self.help,
            "price": self.price,
            "trending": self.trending,
            "alert": self.alert,
            "myalerts": self.myalerts,
            "unalert": self.unalert,
            "market": self.market_overview,
        }

    async def dispatch(self, user_id: int, text: str) -> Optional[str]:
        name, args = split_command(text)
        if name is None:
            return None
        return await self.run(name, user_id, args)

    async def run(self, name: str, user_id: int, args: Sequence[str] = ()) -> Optional[str]:
        handler = self.handlers.get(name)
        if handler is None:
            log.debug(f"Ignoring unknown command /{name} from {user_id}")
            return None
        log.debug(f"/{name} {' '.join(args)} from {user_id}")
        return await handler(user_id, list(args))

    # ------- handlers -------

    async def start(self, user_id: int, args: List[str]) -> str:
        return fmt.WELCOME_TEXT

    async def help(self, user_id: int, args: List[str]) -> str:
        return fmt.HELP_TEXT

    async def price(self, user_id: int, args: List[str]) -> str:
        if not args or not normalize_coin(args[0]):
            return fmt.PRICE_USAGE
        snapshot = await self.market.fetch_market_snapshot()
        if snapshot is None:
            return fmt.PRICE_UNAVAILABLE
        coin = find_coin(snapshot, args[0])
        if coin is None:
            return fmt.NOT_FOUND
        return fmt.price_card(coin)

    async def trending(self, user_id: int, args: List[str]) -> str:
        coins = await self.market.fetch_trending()
        if coins is None:
            return fmt.TRENDING_UNAVAILABLE
        return fmt.trending_text(coins)

    async def alert(self, user_id: int, args: List[str]) -> str:
        if len(args) < 2 or not normalize_coin(args[0]):
            return fmt.ALERT_USAGE
        target = parse_price(args[1])
        if target is None:
            return fmt.INVALID_PRICE
        rec = self.registry.set_alert(user_id, args[0], target)
        log.info(f"Alert set by {user_id}: {rec.coin} >= {rec.target_price}")
        return fmt.alert_set_text(rec)

    async def myalerts(self, user_id: int, args: List[str]) -> str:
        return fmt.alerts_text(self.registry.list_alerts(user_id))

    async def unalert(self, user_id: int, args: List[str]) -> str:
        if not args or not normalize_coin(args[0]):
            return fmt.UNALERT_USAGE
        coin = normalize_coin(args[0])
        removed = self.registry.remove_alert((user_id, coin))
        if removed:
            log.info(f"Alert removed by {user_id}: {coin}")
        return fmt.alert_removed_text(coin, removed)

    async def market_overview(self, user_id: int, args: List[str]) -> str:
        snapshot = await self.market.fetch_market_snapshot()
        if snapshot is None:
            return fmt.MARKET_UNAVAILABLE
        return fmt.market_text(snapshot)
