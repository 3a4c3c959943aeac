import os
from dotenv import load_dotenv

load_dotenv()

# ---- Config / Env ----
TOKEN               = os.getenv("DISCORD_TOKEN")
LOG_LEVEL           = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_COLOR           = os.getenv("LOG_COLOR", "auto").strip().lower()   # auto | 1 | 0

COINGECKO_API       = os.getenv("COINGECKO_API", "https://api.coingecko.com/api/v3").rstrip("/")
ALERT_CHECK_SECONDS = int(os.getenv("ALERT_CHECK_SECONDS", "60"))

# ---- Upstream query ----
VS_CURRENCY         = "usd"
MARKETS_PER_PAGE    = 20
PRICE_CHANGE_WINDOWS = "1h,24h,7d"

# ---- Display ----
TRENDING_LIMIT      = 7
GAINERS_LIMIT       = 3
