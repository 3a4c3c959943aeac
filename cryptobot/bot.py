from typing import Optional, Sequence

import discord
from discord import app_commands
from discord.ext import commands

from .coingecko import CoinGeckoClient
from .config import ALERT_CHECK_SECONDS, COINGECKO_API, LOG_LEVEL
from .dispatcher import CommandDispatcher
from .logging_setup import log
from .registry import AlertRegistry
from .watcher import AlertWatcher


class Bot(commands.Bot):
    """Discord front-end: slash commands, plain-text commands in DMs, alert DMs."""

    def __init__(self, registry: Optional[AlertRegistry] = None, market: Optional[CoinGeckoClient] = None):
        intents = discord.Intents.default()
        # DM content is delivered without the privileged message_content intent
        intents.message_content = False
        super().__init__(command_prefix="!", intents=intents)  # prefix unused, slash commands only
        self.registry = registry if registry is not None else AlertRegistry()
        self.market = market if market is not None else CoinGeckoClient(COINGECKO_API)
        self.dispatcher = CommandDispatcher(self.registry, self.market)
        self.watcher = AlertWatcher(self.registry, self.market, self.send_dm, ALERT_CHECK_SECONDS)

    async def send_dm(self, user_id: int, text: str):
        user = self.get_user(user_id) or await self.fetch_user(user_id)
        await user.send(text)

    async def _respond(self, inter: discord.Interaction, name: str, args: Sequence[str] = ()):
        await inter.response.defer(thinking=True)
        reply = await self.dispatcher.run(name, inter.user.id, args)
        await inter.followup.send(reply or "🤷")

    async def setup_hook(self):
        self.watcher.start()

        @self.tree.command(name="start", description="Welcome message and command list")
        async def start(inter: discord.Interaction):
            await self._respond(inter, "start")

        @self.tree.command(name="help", description="Show all commands")
        async def help_(inter: discord.Interaction):
            await self._respond(inter, "help")

        @self.tree.command(name="price", description="Get detailed price info for a top-20 coin")
        @app_commands.describe(coin="Coin id or ticker, e.g. bitcoin or btc")
        async def price(inter: discord.Interaction, coin: str):
            await self._respond(inter, "price", [coin])

        @self.tree.command(name="trending", description="Show trending cryptocurrencies")
        async def trending(inter: discord.Interaction):
            await self._respond(inter, "trending")

        @self.tree.command(name="alert", description="DM me when a coin reaches a price (one-shot)")
        @app_commands.describe(coin="Coin id or ticker", price="Target price in USD, e.g. 50000")
        async def alert(inter: discord.Interaction, coin: str, price: str):
            await self._respond(inter, "alert", [coin, price])

        @self.tree.command(name="myalerts", description="View your active alerts")
        async def myalerts(inter: discord.Interaction):
            await self._respond(inter, "myalerts")

        @self.tree.command(name="unalert", description="Remove one of your alerts")
        @app_commands.describe(coin="Coin id or ticker the alert was set for")
        async def unalert(inter: discord.Interaction, coin: str):
            await self._respond(inter, "unalert", [coin])

        @self.tree.command(name="market", description="Overall market stats and top gainers")
        async def market(inter: discord.Interaction):
            await self._respond(inter, "market")

        synced = await self.tree.sync()
        log.info(f"Synced {len(synced)} slash commands")

    async def on_message(self, message: discord.Message):
        if message.author.bot or message.guild is not None:
            return
        reply = await self.dispatcher.dispatch(message.author.id, message.content)
        if reply:
            await message.channel.send(reply)

    async def on_ready(self):
        guilds = ", ".join([f"{g.name}({g.id})" for g in self.guilds]) or "none"
        log.info(f"✅ Logged in as {self.user} | Guilds: [{guilds}] | LOG_LEVEL={LOG_LEVEL} | check every {ALERT_CHECK_SECONDS}s")

    async def close(self):
        await self.watcher.stop()
        await super().close()
