"""tweetwatch entry point."""

from __future__ import annotations

import asyncio
import logging

from tweetwatch.core.bot import Bot
from tweetwatch.core.config import get_settings, validate_env_vars
from tweetwatch.core.database import DatabaseManager, PoolConfig
from tweetwatch.core.logging import setup_logging
from tweetwatch.shared.repositories.brain import MemoryBrain, PostgresBrain

LOGGER: logging.Logger = logging.getLogger("Bot")


def main() -> None:
    validate_env_vars()
    settings = get_settings()
    setup_logging(settings.log_level)

    async def runner() -> None:
        db: DatabaseManager | None = None
        brain: MemoryBrain
        if settings.database_url:
            db = DatabaseManager(settings.database_url, PoolConfig())
            await db.connect()
            brain = PostgresBrain(db.pool)
        else:
            LOGGER.warning("DATABASE_URL not set; configuration will not survive restarts")
            brain = MemoryBrain()

        try:
            await brain.load()
            async with Bot(settings=settings, brain=brain, pool=db.pool if db else None) as bot:
                await bot.start()
        finally:
            if db is not None:
                await db.disconnect()

    try:
        asyncio.run(runner())
    except KeyboardInterrupt:
        LOGGER.warning("Shutting down due to KeyboardInterrupt...")


if __name__ == "__main__":
    main()
