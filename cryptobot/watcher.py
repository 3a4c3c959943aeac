import asyncio
import enum
from typing import Awaitable, Callable, Optional

from .coingecko import CoinGeckoClient, find_coin
from .config import ALERT_CHECK_SECONDS
from .formatting import alert_fired_text
from .logging_setup import log
from .registry import AlertRegistry

Notify = Callable[[int, str], Awaitable[None]]


class WatcherState(enum.Enum):
    IDLE = "idle"
    EVALUATING = "evaluating"


class AlertWatcher:
    """Fires one-shot price alerts once per interval.

    Each tick fetches a single market snapshot (skipped when there are no
    alerts), notifies every owner whose coin is at or above target, and
    removes those alerts.
    """

    def __init__(self, registry: AlertRegistry, market: CoinGeckoClient, notify: Notify,
                 interval: float = ALERT_CHECK_SECONDS):
        self.registry = registry
        self.market = market
        self.notify = notify
        self.interval = interval
        self.state = WatcherState.IDLE
        self._task: Optional[asyncio.Task] = None

    async def tick(self) -> int:
        self.state = WatcherState.EVALUATING
        try:
            return await self._evaluate()
        finally:
            self.state = WatcherState.IDLE

    async def _evaluate(self) -> int:
        if not len(self.registry):
            return 0
        snapshot = await self.market.fetch_market_snapshot()
        if snapshot is None:
            log.warning(f"Alert check skipped: no market data ({len(self.registry)} alert(s) pending)")
            return 0

        fired = 0
        for key in self.registry.keys():
            # read the live record: it may have been replaced or removed during the fetch
            rec = self.registry.get(key)
            if rec is None:
                continue
            coin = find_coin(snapshot, rec.coin)
            if coin is None or coin.current_price is None or coin.current_price < rec.target_price:
                continue
            # drop before the send: an alert set while the DM is in flight must survive
            self.registry.remove_alert(key)
            fired += 1
            try:
                await self.notify(rec.user_id, alert_fired_text(coin))
                log.info(f"Alert fired for user {rec.user_id} | coin={rec.coin} target={rec.target_price} curr={coin.current_price}")
            except Exception:
                log.exception(f"Failed to deliver alert for user {rec.user_id} ({rec.coin})")
        return fired

    async def run(self):
        while True:
            try:
                await self.tick()
            except Exception:
                log.exception("alert watcher tick error")
            await asyncio.sleep(self.interval)

    def start(self) -> asyncio.Task:
        if self._task is None or self._task.done():
            self._task = asyncio.create_task(self.run(), name="alert-watcher")
            log.info(f"Alert watcher started (every {self.interval}s)")
        return self._task

    async def stop(self):
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None
        log.info("Alert watcher stopped")
