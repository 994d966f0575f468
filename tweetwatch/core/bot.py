"""Twitch Bot class: component loading and chat subscription."""

from __future__ import annotations

import logging

import asyncpg
import twitchio
from twitchio import eventsub
from twitchio.ext import commands

from tweetwatch.core.config import BOT_SCOPES, COMPONENTS_DIR, TweetwatchSettings
from tweetwatch.shared.repositories.brain import MemoryBrain

LOGGER: logging.Logger = logging.getLogger("Bot")


class Bot(commands.Bot):
    """Chat bot hosting the Twitter monitoring component."""

    def __init__(
        self,
        *,
        settings: TweetwatchSettings,
        brain: MemoryBrain,
        pool: asyncpg.Pool | None = None,
    ) -> None:
        self.settings = settings
        self.brain = brain
        self.pool = pool

        super().__init__(
            client_id=settings.client_id,
            client_secret=settings.client_secret,
            bot_id=settings.bot_id,
            owner_id=settings.owner_id,
            prefix="!",
        )

    # ------------------------------------------------------------------
    # Setup
    # ------------------------------------------------------------------

    async def setup_hook(self) -> None:
        for file in sorted(COMPONENTS_DIR.glob("*.py")):
            if file.stem == "__init__":
                continue
            module_name = f"tweetwatch.components.{file.stem}"
            try:
                await self.load_module(module_name)
            except Exception as e:
                LOGGER.error(f"Failed to load component {module_name}: {e}")

        await self.subscribe_chat(self.settings.owner_id)

    async def subscribe_chat(self, broadcaster_user_id: str) -> None:
        subscription = eventsub.ChatMessageSubscription(
            broadcaster_user_id=broadcaster_user_id, user_id=self.settings.bot_id
        )
        try:
            await self.subscribe_websocket(payload=subscription)
            LOGGER.info(f"Subscribed to chat for channel: {broadcaster_user_id}")
        except Exception as e:
            LOGGER.exception(f"Failed to subscribe channel {broadcaster_user_id}: {e}")

    # ------------------------------------------------------------------
    # Events
    # ------------------------------------------------------------------

    async def event_ready(self) -> None:
        LOGGER.info("Successfully logged in as: %s", self.bot_id)
        LOGGER.info(
            "Authorize the bot account at: http://localhost:4343/oauth?scopes=%s&force_verify=true",
            "%20".join(BOT_SCOPES),
        )

    async def event_oauth_authorized(
        self, payload: twitchio.authentication.UserTokenPayload
    ) -> None:
        await self.add_token(payload.access_token, payload.refresh_token)
        if payload.user_id == self.bot_id:
            LOGGER.info("Bot account authorized")
        elif payload.user_id:
            LOGGER.info(f"Channel authorized: {payload.user_id}")

    async def event_message(self, payload: twitchio.ChatMessage) -> None:
        if payload.chatter.id == self.bot_id:
            return
        LOGGER.debug(f"[{payload.chatter.name}#{payload.broadcaster.name}]: {payload.text}")
        await super().event_message(payload)
