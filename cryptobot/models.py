from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

AlertKey = Tuple[int, str]   # (user_id, coin)


def normalize_coin(coin: str) -> str:
    return (coin or "").strip().lower()


def _num(v: Any) -> Optional[float]:
    if v is None or isinstance(v, bool): return None
    try: return float(v)
    except (TypeError, ValueError): return None


@dataclass(frozen=True)
class AlertRecord:
    user_id: int
    coin: str                # lower-cased id or ticker symbol
    target_price: float

    @property
    def key(self) -> AlertKey:
        return (self.user_id, self.coin)


@dataclass(frozen=True)
class CoinMarket:
    id: str
    symbol: str
    name: str
    current_price: Optional[float] = None
    market_cap: Optional[float] = None
    total_volume: Optional[float] = None
    ath: Optional[float] = None
    ath_change_percentage: Optional[float] = None
    change_1h: Optional[float] = None
    change_24h: Optional[float] = None
    change_7d: Optional[float] = None

    @classmethod
    def from_api(cls, d: Dict[str, Any]) -> "CoinMarket":
        return cls(
            id=(d.get("id") or "").lower(),
            symbol=(d.get("symbol") or "").lower(),
            name=d.get("name") or d.get("id") or "?",
            current_price=_num(d.get("current_price")),
            market_cap=_num(d.get("market_cap")),
            total_volume=_num(d.get("total_volume")),
            ath=_num(d.get("ath")),
            ath_change_percentage=_num(d.get("ath_change_percentage")),
            change_1h=_num(d.get("price_change_percentage_1h_in_currency")),
            change_24h=_num(d.get("price_change_percentage_24h")),
            change_7d=_num(d.get("price_change_percentage_7d_in_currency")),
        )

    def matches(self, coin: str) -> bool:
        c = normalize_coin(coin)
        return c == self.id or c == self.symbol


# ordered by market cap, as returned upstream
MarketSnapshot = Tuple[CoinMarket, ...]


@dataclass(frozen=True)
class TrendingCoin:
    id: str
    name: str
    symbol: str
    market_cap_rank: Optional[int] = None

    @classmethod
    def from_api(cls, entry: Dict[str, Any]) -> "TrendingCoin":
        item = entry.get("item") or entry
        rank = item.get("market_cap_rank")
        return cls(
            id=item.get("id") or "",
            name=item.get("name") or item.get("id") or "?",
            symbol=item.get("symbol") or "",
            market_cap_rank=(int(rank) if isinstance(rank, (int, float)) and not isinstance(rank, bool) else None),
        )
