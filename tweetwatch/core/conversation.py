"""Multi-turn prompt handling for chat commands.

A command that needs more input calls ``ask()`` and is suspended on a future
until the same chatter, in the same channel, sends a matching reply. Each
pending conversation moves to exactly one terminal state: resolved,
cancelled, timed out or superseded.
"""

from __future__ import annotations

import asyncio
import enum
import logging
import re
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

LOGGER = logging.getLogger("Conversation")

ConversationKey = tuple[str, str]  # (channel_id, chatter_id)

EXIT_WORDS = frozenset({"exit", "cancel", "quit"})
DEFAULT_TIMEOUT = 60.0


class ConversationState(str, enum.Enum):
    AWAITING_ACCOUNT = "awaiting_account"
    AWAITING_SELECTION = "awaiting_selection"
    AWAITING_MESSAGE_EDIT = "awaiting_message_edit"
    AWAITING_EVENT_EDIT = "awaiting_event_edit"


class ConversationAborted(Exception):
    """The pending prompt ended without a usable reply."""

    def __init__(self, key: ConversationKey, reason: str) -> None:
        super().__init__(f"Conversation {key} aborted: {reason}")
        self.key = key
        self.reason = reason


@dataclass
class PendingConversation:
    key: ConversationKey
    state: ConversationState
    pattern: re.Pattern[str]
    future: asyncio.Future[re.Match[str]]
    created_at: datetime = field(default_factory=datetime.now)


# Called with the pending conversation and the non-matching source message
RetryHint = Callable[[PendingConversation, Any], Awaitable[None]]


class ConversationManager:
    """Pending prompts keyed by (channel_id, chatter_id)."""

    def __init__(self, timeout: float = DEFAULT_TIMEOUT, on_retry: RetryHint | None = None) -> None:
        self.timeout = timeout
        self.on_retry = on_retry
        self._pending: dict[ConversationKey, PendingConversation] = {}

    def pending(self, key: ConversationKey) -> PendingConversation | None:
        return self._pending.get(key)

    @property
    def active_count(self) -> int:
        return len(self._pending)

    async def ask(
        self,
        key: ConversationKey,
        state: ConversationState,
        pattern: re.Pattern[str] | str,
        timeout: float | None = None,
    ) -> re.Match[str]:
        """Wait for the chatter's next matching reply.

        Raises ConversationAborted on exit words, timeout, or when a newer
        ``ask`` for the same key supersedes this one.
        """
        previous = self._pending.get(key)
        if previous is not None and not previous.future.done():
            previous.future.set_exception(ConversationAborted(key, "superseded"))
            LOGGER.debug(f"Superseded {previous.state.value} for {key}")

        compiled = re.compile(pattern, re.IGNORECASE) if isinstance(pattern, str) else pattern
        loop = asyncio.get_running_loop()
        conversation = PendingConversation(
            key=key, state=state, pattern=compiled, future=loop.create_future()
        )
        self._pending[key] = conversation
        LOGGER.debug(f"Waiting on {key} ({state.value})")

        try:
            return await asyncio.wait_for(
                asyncio.shield(conversation.future),
                timeout=timeout if timeout is not None else self.timeout,
            )
        except asyncio.TimeoutError:
            waited = (datetime.now() - conversation.created_at).total_seconds()
            LOGGER.info(f"Conversation {key} timed out in {state.value} after {waited:.1f}s")
            raise ConversationAborted(key, "timeout") from None
        finally:
            if self._pending.get(key) is conversation:
                del self._pending[key]
            if not conversation.future.done():
                conversation.future.cancel()

    async def feed(
        self,
        key: ConversationKey,
        text: str,
        source: Any = None,
        fallback: str | None = None,
    ) -> bool:
        """Offer a chat message to the pending conversation for ``key``.

        ``text`` is tried first and resolves the prompt unchanged. ``fallback``
        (e.g. the text with a bot mention removed) is only tried when ``text``
        does not match.

        Returns True when the message belonged to a conversation (matched,
        cancelled it, or was answered with a retry hint).
        """
        conversation = self._pending.get(key)
        if conversation is None or conversation.future.done():
            return False

        candidates = [text.strip()]
        if fallback is not None and fallback.strip() != candidates[0]:
            candidates.append(fallback.strip())

        if any(reply.lower() in EXIT_WORDS for reply in candidates):
            conversation.future.set_exception(ConversationAborted(key, "cancelled"))
            LOGGER.info(f"Conversation {key} cancelled by user")
            return True

        match = next(
            (m for m in map(conversation.pattern.search, candidates) if m is not None), None
        )
        if match is None:
            LOGGER.debug(f"Reply {candidates[0]!r} does not match {conversation.pattern.pattern!r}")
            if self.on_retry is not None:
                await self.on_retry(conversation, source)
            return True

        conversation.future.set_result(match)
        return True

    def cancel_all(self) -> None:
        for key, conversation in list(self._pending.items()):
            if not conversation.future.done():
                conversation.future.set_exception(ConversationAborted(key, "shutdown"))
        self._pending.clear()


def numbered_list_pattern(count: int) -> re.Pattern[str]:
    """Pattern accepting a single number from 1 to ``count``."""
    if count < 1:
        return re.compile(r"(?!)")
    choices = "|".join(str(n) for n in range(count, 0, -1))
    return re.compile(rf"^\s*({choices})\s*$")
