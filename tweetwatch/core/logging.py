"""Console logging setup."""

import logging

from rich.console import Console
from rich.logging import RichHandler

DATE_FORMAT = "[%Y-%m-%d %H:%M:%S]"

# Library loggers and the level they run at outside of DEBUG
QUIET_LOGGERS: dict[str, int] = {
    "twitchio": logging.INFO,
    "twitchio.http": logging.WARNING,
    "twitchio.websockets": logging.WARNING,
    "asyncpg": logging.WARNING,
    "asyncio": logging.ERROR,
}


def _rich_handler() -> RichHandler:
    handler = RichHandler(
        console=Console(force_terminal=True, width=120),
        show_path=False,
        markup=True,
        rich_tracebacks=True,
        tracebacks_width=120,
    )
    handler.setFormatter(logging.Formatter(fmt="%(message)s", datefmt=DATE_FORMAT))
    return handler


def setup_logging(log_level: str = "INFO") -> None:
    """Route all logging through rich at ``log_level``.

    Falls back to plain stream output when the rich console cannot start.
    """
    level = getattr(logging, log_level.upper(), logging.INFO)
    logger = logging.getLogger("Bot")

    try:
        logging.basicConfig(level=level, handlers=[_rich_handler()], force=True)
    except Exception as e:
        logging.basicConfig(
            level=level,
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt=DATE_FORMAT,
            force=True,
        )
        logger.warning(f"Failed to setup Rich logging: {e}, using standard logging")

    debug = level == logging.DEBUG
    for name, quiet_level in QUIET_LOGGERS.items():
        verbose = debug and name.startswith("twitchio")
        logging.getLogger(name).setLevel(logging.DEBUG if verbose else quiet_level)

    logger.debug(f"Logging configured at {logging.getLevelName(level)}")
