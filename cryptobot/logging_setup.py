import logging
import sys
from typing import IO, Optional

from .config import LOG_LEVEL, LOG_COLOR

RESET, GRAY, CYAN = "\x1b[0m", "\x1b[90m", "\x1b[36m"
LEVEL_COLORS = {
    "DEBUG": "\x1b[34m", "INFO": "\x1b[32m", "WARNING": "\x1b[33m",
    "ERROR": "\x1b[31m", "CRITICAL": "\x1b[31m\x1b[1m",
}

# third-party loggers and the level they are capped at
THIRD_PARTY_LEVELS = {
    "aiohttp": logging.WARNING,
    "discord": logging.WARNING,
    "discord.http": logging.WARNING,
    "discord.gateway": logging.INFO,
}


class ColorFormatter(logging.Formatter):
    """``HH:MM:SS | LEVEL | logger | message``, ANSI-coloured when ``color`` is set."""

    def __init__(self, fmt: str = "%(message)s", color: bool = True):
        super().__init__(fmt)
        self.color = color

    def _paint(self, text: str, code: str) -> str:
        return f"{code}{text}{RESET}" if self.color and code else text

    def format(self, rec):
        t = self._paint(self.formatTime(rec, "%H:%M:%S"), GRAY)
        lvl = self._paint(rec.levelname, LEVEL_COLORS.get(rec.levelname, ""))
        name = self._paint(rec.name, CYAN)
        return f"{t} | {lvl} | {name} | {super().format(rec)}"


def use_color(stream: IO, setting: str = LOG_COLOR) -> bool:
    if setting in ("1", "true", "yes", "on"): return True
    if setting in ("0", "false", "no", "off"): return False
    isatty = getattr(stream, "isatty", None)
    return bool(isatty and isatty())


def setup_logging(level: str = LOG_LEVEL, stream: Optional[IO] = None, color: str = LOG_COLOR) -> logging.Handler:
    """Install a single formatted handler on the root logger and return it."""
    stream = stream or sys.stderr
    root = logging.getLogger()
    root.setLevel(level)
    h = logging.StreamHandler(stream)
    h.setFormatter(ColorFormatter(color=use_color(stream, color)))
    root.handlers[:] = [h]
    for name, lvl in THIRD_PARTY_LEVELS.items():
        logging.getLogger(name).setLevel(lvl)
    return h

log = logging.getLogger("cryptobot")
