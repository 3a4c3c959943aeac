import math
from typing import Iterable, List, Optional, Sequence

from .config import TRENDING_LIMIT, GAINERS_LIMIT
from .models import AlertRecord, CoinMarket, TrendingCoin

NA = "N/A"
UP, DOWN = "🟢", "🔴"
SIG_DIGITS, MAX_DECIMALS = 8, 18

COMMANDS_TEXT = (
    "/price <crypto> - Get detailed price info\n"
    "/trending - Show trending cryptocurrencies\n"
    "/alert <crypto> <price> - Set price alert\n"
    "/myalerts - View your active alerts\n"
    "/unalert <crypto> - Remove one of your alerts\n"
    "/market - Overall market stats\n"
)

WELCOME_TEXT = "🚀 Welcome to CryptoBot!\n\nAvailable commands:\n" + COMMANDS_TEXT + "/help - Show all commands"
HELP_TEXT = "🤖 Available Commands:\n\n" + COMMANDS_TEXT + "/help - Show this help message\n\n💡 Example: /price bitcoin"

PRICE_USAGE     = "Please specify a cryptocurrency. Example: /price bitcoin"
ALERT_USAGE     = "Please use format: /alert bitcoin 50000"
UNALERT_USAGE   = "Please specify a cryptocurrency. Example: /unalert bitcoin"
INVALID_PRICE   = "Please enter a valid price"
NOT_FOUND       = "Cryptocurrency not found. Please check the name and try again."
NO_ALERTS       = "You have no active alerts"
PRICE_UNAVAILABLE    = "Unable to fetch price data. Please try again later."
TRENDING_UNAVAILABLE = "Unable to fetch trending coins. Please try again later."
MARKET_UNAVAILABLE   = "Unable to fetch market data. Please try again later."


def format_change(pct: Optional[float]) -> str:
    """Signed percentage with a direction marker, or N/A when missing."""
    if pct is None: return NA
    return f"{UP if pct >= 0 else DOWN} {pct:.2f}%"

def format_usd(x: Optional[float]) -> str:
    if x is None: return NA
    if x == 0 or abs(x) >= 1: return f"${x:,.2f}"
    # sub-dollar prices: up to SIG_DIGITS significant digits, trailing zeros dropped
    decimals = min(SIG_DIGITS - 1 - math.floor(math.log10(abs(x))), MAX_DECIMALS)
    s = f"{x:.{decimals}f}".rstrip("0")
    return f"${s}00" if s.endswith(".") else f"${s}"

def format_billions(x: Optional[float]) -> str:
    return NA if x is None else f"${x / 1e9:,.2f}B"

def format_millions(x: Optional[float]) -> str:
    return NA if x is None else f"${x / 1e6:,.2f}M"


def price_card(c: CoinMarket) -> str:
    return (
        f"💰 {c.name} ({c.symbol.upper()})\n\n"
        f"Current Price: {format_usd(c.current_price)}\n"
        f"Market Cap: {format_billions(c.market_cap)}\n"
        f"24h Volume: {format_millions(c.total_volume)}\n\n"
        f"Price Changes:\n"
        f"1h: {format_change(c.change_1h)}\n"
        f"24h: {format_change(c.change_24h)}\n"
        f"7d: {format_change(c.change_7d)}\n\n"
        f"All Time High: {format_usd(c.ath)}\n"
        f"ATH Change: {format_change(c.ath_change_percentage)}"
    )

def trending_text(coins: Sequence[TrendingCoin], limit: int = TRENDING_LIMIT) -> str:
    lines = ["🔥 Trending Cryptocurrencies:", ""]
    for i, c in enumerate(coins[:limit], 1):
        rank = f"#{c.market_cap_rank}" if c.market_cap_rank is not None else NA
        lines.append(f"{i}. {c.name} ({c.symbol.upper()})")
        lines.append(f"   Market Cap Rank: {rank}")
        lines.append("")
    return "\n".join(lines).rstrip()

def top_gainers(snapshot: Iterable[CoinMarket], limit: int = GAINERS_LIMIT) -> List[CoinMarket]:
    # coins without a 24h change sort last
    ranked = sorted(snapshot, key=lambda c: (c.change_24h is None, -(c.change_24h or 0.0)))
    return ranked[:limit]

def market_text(snapshot: Sequence[CoinMarket], limit: int = GAINERS_LIMIT) -> str:
    total_mc  = sum(c.market_cap for c in snapshot if c.market_cap is not None)
    total_vol = sum(c.total_volume for c in snapshot if c.total_volume is not None)
    gainers = "\n".join(f"{c.symbol.upper()}: {format_change(c.change_24h)}" for c in top_gainers(snapshot, limit))
    return (
        "📊 Crypto Market Overview\n\n"
        f"Total Market Cap: {format_billions(total_mc)}\n"
        f"24h Volume: {format_billions(total_vol)}\n\n"
        "Top Gainers (24h):\n" + (gainers or NA)
    )

def alerts_text(records: Iterable[AlertRecord]) -> str:
    lines = [f"{r.coin.upper()}: {format_usd(r.target_price)}" for r in records]
    if not lines: return NO_ALERTS
    return "🔔 Your Active Alerts:\n\n" + "\n".join(lines)

def alert_set_text(r: AlertRecord) -> str:
    return f"✅ Alert set for {r.coin.upper()} at {format_usd(r.target_price)}"

def alert_removed_text(coin: str, removed: bool) -> str:
    if removed: return f"🗑️ Removed alert for {coin.upper()}"
    return f"No active alert for {coin.upper()}"

def alert_fired_text(c: CoinMarket) -> str:
    return f"🚨 Alert: {c.name} has reached {format_usd(c.current_price)}"
