"""Twitter monitoring component: chat commands, prompts and activity relay."""

from __future__ import annotations

import asyncio
import logging
import re
from typing import TYPE_CHECKING, Any

import twitchio
from twitchio.ext import commands

from tweetwatch.core.conversation import ConversationManager, PendingConversation
from tweetwatch.core.pg_listener import ACTIVITY_CHANNEL, decode_activity_payload, pg_listen
from tweetwatch.monitoring import messages, router
from tweetwatch.monitoring.formatter import render_lines
from tweetwatch.monitoring.service import CommandContext, TwitterMonitor
from tweetwatch.shared.models.activity import (
    ActivityNotification,
    FormattedReply,
    MonitoringIntent,
    PostRequest,
)

if TYPE_CHECKING:
    from tweetwatch.core.bot import Bot

LOGGER = logging.getLogger("TwitterMonitorComponent")

# Event names dispatched on the bot (listeners receive them as event_<name>)
TWEET_EVENT = "tweeter_tweet"
ACTIVITY_EVENT = "bot_activity"


def strip_address(text: str, bot_name: str, prefix: str = "!") -> str | None:
    """Return the command text when the message addresses the bot, else None.

    Accepted forms: ``!twitter ...``, ``@bot twitter ...``, ``bot twitter ...``.
    """
    stripped = text.strip()
    if stripped.startswith(prefix):
        return stripped[len(prefix) :].strip()
    mention = re.match(rf"@?{re.escape(bot_name)}\b[:,]?\s*", stripped, re.IGNORECASE)
    if mention:
        return stripped[mention.end() :].strip()
    return None


class TwitterMonitorComponent(commands.Component):
    """Routes chat to TwitterMonitor and relays activity into post requests."""

    def __init__(self, bot: Bot) -> None:
        self.bot = bot
        settings = bot.settings
        self.conversations = ConversationManager(
            timeout=settings.conversation_timeout, on_retry=self._send_retry_hint
        )
        self.monitor = TwitterMonitor(
            brain=bot.brain,
            accounts=settings.tweeter_accounts,
            conversations=self.conversations,
            reply=self.send_reply,
            emit_post=self.emit_post,
            emit_activity=self.emit_activity,
            bot_name=settings.bot_name,
            monitoring_override=settings.twitter_monitoring_enabled,
            restore_events=settings.twitter_restore_events,
        )
        self._listen_task: asyncio.Task | None = None
        self._command_tasks: set[asyncio.Task] = set()

    async def component_load(self) -> None:
        self.monitor.load()
        if not self.bot.settings.has_twitter_credentials:
            LOGGER.warning("TWITTER_CONSUMER_KEY/SECRET not set; post requests may be rejected")
        if self.bot.pool is not None:
            self._listen_task = asyncio.create_task(
                pg_listen(self.bot.pool, ACTIVITY_CHANNEL, self._handle_activity_notify)
            )
        LOGGER.info(
            f"TwitterMonitorComponent loaded (monitoring={self.monitor.toggle.state.name}, "
            f"events={len(self.monitor.catalog.list_enabled())}/{len(self.monitor.catalog)})"
        )

    async def component_teardown(self) -> None:
        self.conversations.cancel_all()
        if self._listen_task is not None:
            self._listen_task.cancel()
            self._listen_task = None

    # ------------------------------------------------------------------
    # Outbound
    # ------------------------------------------------------------------

    async def send_reply(self, reply: FormattedReply) -> None:
        ctx: CommandContext = reply.context
        message: twitchio.ChatMessage = ctx.raw
        for line in render_lines(reply):
            await message.broadcaster.send_message(
                message=line,
                sender=self.bot.bot_id,
                token_for=self.bot.bot_id,
                reply_to_message_id=str(message.id),
            )

    def emit_post(self, request: PostRequest) -> None:
        self.bot.dispatch(TWEET_EVENT, request)

    def emit_activity(self, notification: ActivityNotification) -> None:
        self.bot.dispatch(ACTIVITY_EVENT, notification)

    async def _send_retry_hint(self, conversation: PendingConversation, source: Any) -> None:
        if source is None:
            return
        ctx = CommandContext(*conversation.key, text=source.text, raw=source)
        await self.send_reply(FormattedReply(context=ctx, message=messages.CONVERSATION_RETRY))

    # ------------------------------------------------------------------
    # Inbound
    # ------------------------------------------------------------------

    def _context(self, payload: twitchio.ChatMessage, text: str) -> CommandContext:
        return CommandContext(
            channel_id=payload.broadcaster.id,
            chatter_id=payload.chatter.id,
            text=text,
            raw=payload,
        )

    def _start_command(self, command_id: str, ctx: CommandContext) -> None:
        # Commands may wait on prompts, so they must not block the message listener
        task = asyncio.create_task(self.monitor.handle(command_id, ctx))
        self._command_tasks.add(task)
        task.add_done_callback(self._command_tasks.discard)

    @commands.Component.listener()
    async def event_message(self, payload: twitchio.ChatMessage) -> None:
        if payload.chatter.id == self.bot.bot_id or not payload.text:
            return

        addressed = strip_address(payload.text, self.bot.settings.bot_name)
        command_id = router.match_command(addressed) if addressed is not None else None
        if command_id is None:
            # Not a new command: may be the answer to a pending prompt.
            # Raw text is tried before the unaddressed form.
            key = (payload.broadcaster.id, payload.chatter.id)
            await self.conversations.feed(key, payload.text, source=payload, fallback=addressed)
            return

        LOGGER.debug(f"{command_id} Reg Ex match.")
        self._start_command(command_id, self._context(payload, addressed))

    @commands.Component.listener()
    async def event_monitoring_intent(self, payload: MonitoringIntent) -> None:
        if payload.intent_id not in router.COMMAND_IDS:
            return
        LOGGER.debug(f"{payload.intent_id} Natural Language match.")
        self._start_command(payload.intent_id, self._context(payload.message, payload.message.text))

    @commands.Component.listener()
    async def event_bot_activity(self, payload: ActivityNotification | dict) -> None:
        try:
            if isinstance(payload, ActivityNotification):
                self.monitor.dispatcher.dispatch(payload)
            else:
                self.monitor.dispatcher.handle_payload(payload)
        except Exception as e:
            LOGGER.error(f"Bot activity dispatch failed: {e}")

    async def _handle_activity_notify(self, connection, pid, channel, payload) -> None:
        data = decode_activity_payload(payload)
        if data is not None:
            self.bot.dispatch(ACTIVITY_EVENT, data)


async def setup(bot: Bot) -> None:
    await bot.add_component(TwitterMonitorComponent(bot))
    LOGGER.info("TwitterMonitor component loaded")


async def teardown(bot: Bot) -> None: ...
