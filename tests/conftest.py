from unittest.mock import AsyncMock

import pytest

from cryptobot.models import CoinMarket, TrendingCoin
from cryptobot.registry import AlertRegistry


def coin_payload(id_="bitcoin", symbol="btc", name="Bitcoin", price=50500.0, **extra):
    d = {
        "id": id_, "symbol": symbol, "name": name,
        "current_price": price,
        "market_cap": 990_000_000_000,
        "total_volume": 35_000_000_000,
        "ath": 73_738,
        "ath_change_percentage": -31.5,
        "price_change_percentage_1h_in_currency": 0.12,
        "price_change_percentage_24h": -3.456,
        "price_change_percentage_7d_in_currency": 5.0,
    }
    d.update(extra)
    return d


def snapshot_of(*payloads):
    return tuple(CoinMarket.from_api(p) for p in payloads)


class FakeMarket:
    """Stands in for CoinGeckoClient; counts fetches."""

    def __init__(self, snapshot=None, trending=None):
        self.fetch_market_snapshot = AsyncMock(return_value=snapshot)
        self.fetch_trending = AsyncMock(return_value=trending)


@pytest.fixture
def registry():
    return AlertRegistry()


@pytest.fixture
def market_snapshot():
    return snapshot_of(
        coin_payload(),
        coin_payload("ethereum", "eth", "Ethereum", 3100.0, market_cap=370_000_000_000, total_volume=15_000_000_000,
                     price_change_percentage_24h=4.2),
        coin_payload("solana", "sol", "Solana", 150.0, market_cap=70_000_000_000, total_volume=3_000_000_000,
                     price_change_percentage_24h=9.75),
        coin_payload("tether", "usdt", "Tether", 1.0, market_cap=110_000_000_000, total_volume=50_000_000_000,
                     price_change_percentage_24h=None),
    )


@pytest.fixture
def trending_coins():
    return [
        TrendingCoin(id=f"coin{i}", name=f"Coin {i}", symbol=f"c{i}", market_cap_rank=i * 10)
        for i in range(1, 10)
    ]
