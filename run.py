import asyncio
import signal
import sys

from cryptobot.config import TOKEN
from cryptobot.logging_setup import setup_logging, log
from cryptobot.bot import Bot


async def main(token: str):
    bot = Bot()
    loop = asyncio.get_running_loop()

    def shutdown(sig: signal.Signals):
        log.info(f"Received {sig.name}, shutting down")
        asyncio.ensure_future(bot.close())

    for sig in (signal.SIGINT, signal.SIGTERM):
        try:
            loop.add_signal_handler(sig, shutdown, sig)
        except NotImplementedError:  # Windows event loops
            pass
    async with bot:
        await bot.start(token)


if __name__ == "__main__":
    setup_logging()
    if not TOKEN:
        log.error("DISCORD_TOKEN is not set; add it to the environment or .env")
        sys.exit(1)
    try:
        asyncio.run(main(TOKEN))
    except KeyboardInterrupt:
        pass
    except Exception:
        log.exception("Bot failed to start")
        sys.exit(1)
