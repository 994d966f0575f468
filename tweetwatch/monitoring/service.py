"""Twitter monitoring commands over the event catalog and toggle."""

from __future__ import annotations

import logging
import re
from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass
from typing import Any

from tweetwatch.core.conversation import (
    ConversationAborted,
    ConversationKey,
    ConversationManager,
    ConversationState,
    numbered_list_pattern,
)
from tweetwatch.monitoring import messages, router
from tweetwatch.monitoring.accounts import AccountSelector
from tweetwatch.monitoring.catalog import EventCatalog, parse_indices
from tweetwatch.monitoring.dispatcher import ActivityDispatcher
from tweetwatch.monitoring.errors import AccountSelectionAborted, TwitterMonitorError
from tweetwatch.monitoring.formatter import rules_as_attachments
from tweetwatch.monitoring.toggle import MonitoringState, MonitoringToggle
from tweetwatch.shared.models.activity import ActivityNotification, FormattedReply, PostRequest
from tweetwatch.shared.models.twitter_account import TwitterCredentials
from tweetwatch.shared.repositories.brain import MemoryBrain

LOGGER = logging.getLogger("TwitterMonitor")

BRAIN_TWITTER_EVENTS = "bm.twitter.events"

_ANY_TEXT = re.compile(r"(.*\S.*)", re.DOTALL)


@dataclass
class CommandContext:
    """Originating chat request for a command."""

    channel_id: str
    chatter_id: str
    text: str
    raw: Any = None

    @property
    def key(self) -> ConversationKey:
        return (self.channel_id, self.chatter_id)


ReplyFn = Callable[[FormattedReply], Awaitable[None]]
CommandHandler = Callable[[CommandContext], Awaitable[None]]


class TwitterMonitor:
    """Owns the catalog, toggle and account selection for one bot process."""

    def __init__(
        self,
        *,
        brain: MemoryBrain,
        accounts: Mapping[str, TwitterCredentials],
        conversations: ConversationManager,
        reply: ReplyFn,
        emit_post: Callable[[PostRequest], None],
        emit_activity: Callable[[ActivityNotification], None],
        bot_name: str = "hubot",
        monitoring_override: str | bool | None = None,
        restore_events: bool = True,
        catalog: EventCatalog | None = None,
    ) -> None:
        self.brain = brain
        self.bot_name = bot_name
        self.restore_events = restore_events
        self.conversations = conversations
        self.catalog = catalog if catalog is not None else EventCatalog.default()
        self.toggle = MonitoringToggle(brain, monitoring_override)
        self.selector = AccountSelector(accounts, brain, conversations)
        self.dispatcher = ActivityDispatcher(
            self.catalog, self.toggle, brain, emit_post, emit_activity
        )
        self._reply = reply
        self._handlers: dict[str, CommandHandler] = {
            router.HELP: self.help,
            router.ENABLE: self.enable,
            router.DISABLE: self.disable,
            router.EDIT_TWEETS: self.edit_tweets,
            router.LIST_TWEETS: self.list_tweets,
            router.EDIT_EVENTS: self.edit_events,
        }

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    def load(self) -> None:
        """Read toggle and (optionally) stored catalog edits from the brain."""
        self.toggle.load()
        if not self.restore_events:
            return
        records = self.brain.get(BRAIN_TWITTER_EVENTS)
        if isinstance(records, list):
            restored = self.catalog.restore(records)
            LOGGER.info(f"Restored {restored} Twitter event rules from brain")

    async def save_events(self) -> None:
        await self.brain.set(BRAIN_TWITTER_EVENTS, self.catalog.to_records())

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    async def handle(self, command_id: str, ctx: CommandContext) -> None:
        """Run a command; every failure ends in a chat reply."""
        handler = self._handlers.get(command_id)
        if handler is None:
            LOGGER.warning(f"Unknown command id: {command_id}")
            return

        LOGGER.debug(f"{command_id} text={ctx.text!r}")
        try:
            await handler(ctx)
        except ConversationAborted as e:
            LOGGER.info(f"{command_id} ended early: {e.reason}")
            await self._say(ctx, messages.CONVERSATION_CANCELLED)
        except TwitterMonitorError as e:
            LOGGER.warning(f"{command_id} failed: {e}")
            await self._say(ctx, messages.COMMAND_FAILURE)
        except Exception:
            LOGGER.exception(f"{command_id} raised")
            await self._say(ctx, messages.COMMAND_FAILURE)

    async def _say(self, ctx: CommandContext, message: str) -> None:
        await self._reply(FormattedReply(context=ctx, message=message))

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    async def help(self, ctx: CommandContext) -> None:
        LOGGER.info("Listing help twitter...")
        entries = [
            (router.ENABLE, messages.HELP_ENABLE),
            (router.DISABLE, messages.HELP_DISABLE),
            (router.EDIT_TWEETS, messages.HELP_EDIT_TWEETS),
            (router.LIST_TWEETS, messages.HELP_LIST_TWEETS),
            (router.EDIT_EVENTS, messages.HELP_EDIT_EVENTS),
        ]
        text = "".join(
            f"{self.bot_name} {router.usage(command_id)} - {description}\n"
            for command_id, description in entries
        )
        await self._say(ctx, "\n" + text)

    async def enable(self, ctx: CommandContext) -> None:
        LOGGER.info("Enabling twitter monitoring...")
        if self.toggle.is_enabled:
            await self._say(ctx, messages.MONITORING_ALREADY)
            return

        try:
            username = await self.selector.select(ctx.key, lambda text: self._say(ctx, text))
        except AccountSelectionAborted as e:
            LOGGER.error(f"An error occurred enabling twitter monitoring: {e}")
            await self._say(ctx, messages.SET_USERNAME_FAILURE)
            return

        await self.toggle.commit(MonitoringState.ENABLED)
        await self._say(ctx, messages.MONITORING_CONFIRMATION.format(username))
        await self._say(
            ctx, messages.EDIT_TWEET_INSTRUCTIONS.format(router.usage(router.EDIT_TWEETS))
        )
        await self._say(
            ctx, messages.EDIT_EVENT_INSTRUCTIONS.format(router.usage(router.EDIT_EVENTS))
        )
        await self._reply(rules_as_attachments(ctx, self.catalog.list_enabled()))

    async def disable(self, ctx: CommandContext) -> None:
        LOGGER.info("Disabling twitter monitoring...")
        if self.toggle.is_disabled:
            await self._say(ctx, messages.MONITORING_NOTHING)
            return
        await self._say(ctx, messages.MONITORING_DISABLED)
        await self.toggle.commit(MonitoringState.DISABLED)

    async def edit_tweets(self, ctx: CommandContext) -> None:
        LOGGER.info("Edit a tweet...")
        await self._say(ctx, messages.EDIT_TWEETS_PROMPT)
        await self._say(ctx, self.catalog.numbered_listing())

        selection = await self.conversations.ask(
            ctx.key, ConversationState.AWAITING_SELECTION, numbered_list_pattern(len(self.catalog))
        )
        index = int(selection.group(1))
        rule = self.catalog.get(index)
        LOGGER.info(f"Edit message for {rule.title}.")

        await self._say(ctx, messages.MESSAGE_PROMPT)
        response = await self.conversations.ask(
            ctx.key, ConversationState.AWAITING_MESSAGE_EDIT, _ANY_TEXT
        )
        text = response.group(1).strip()

        await self._say(ctx, messages.MESSAGE_NEW.format(text))
        self.catalog.set_message(index, text)
        LOGGER.info(f"New message for {rule.title} will be {text}.")
        await self.save_events()

    async def list_tweets(self, ctx: CommandContext) -> None:
        LOGGER.info("Listing tweets...")
        await self._reply(rules_as_attachments(ctx, self.catalog.list_all()))

    async def edit_events(self, ctx: CommandContext) -> None:
        LOGGER.info("Listing twitter events...")
        prompt = messages.EDIT_EVENTS_PROMPT.format(messages.EDIT_EVENTS_HINT)
        await self._say(ctx, prompt + self.catalog.numbered_listing())

        selection = await self.conversations.ask(
            ctx.key, ConversationState.AWAITING_EVENT_EDIT, router.EDIT_EVENTS_REPLY
        )
        indices = parse_indices(selection.group(2), 1, len(self.catalog))
        if not indices:
            await self._say(ctx, messages.EDIT_EVENTS_NONE)
            return

        event_list = self.catalog.describe_indices(indices)
        enabled = selection.group(1).lower() == "enable"
        template = messages.EDIT_EVENTS_ENABLE_OK if enabled else messages.EDIT_EVENTS_DISABLE_OK
        await self._say(ctx, template.format(event_list))
        self.catalog.set_enabled(indices, enabled)
        await self.save_events()
