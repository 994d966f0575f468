"""Tests for the prompt/reply conversation manager."""

import asyncio
import logging
from unittest.mock import AsyncMock

import pytest

from tweetwatch.core.conversation import (
    ConversationAborted,
    ConversationManager,
    ConversationState,
    numbered_list_pattern,
)

KEY = ("1001", "2002")
OTHER_CHATTER = ("1001", "3003")


async def _pending(manager, key=KEY):
    for _ in range(100):
        conversation = manager.pending(key)
        if conversation is not None and not conversation.future.done():
            return conversation
        await asyncio.sleep(0)
    raise AssertionError("ask() never registered")


class TestNumberedListPattern:
    def test_accepts_each_choice(self):
        pattern = numbered_list_pattern(3)
        assert [pattern.search(str(n)).group(1) for n in (1, 2, 3)] == ["1", "2", "3"]

    def test_rejects_out_of_range_and_text(self):
        pattern = numbered_list_pattern(3)
        for text in ("0", "4", "13", "one", "1 2"):
            assert pattern.search(text) is None

    def test_two_digit_choice_not_split(self):
        assert numbered_list_pattern(12).search("12").group(1) == "12"

    def test_empty_list_matches_nothing(self):
        assert numbered_list_pattern(0).search("1") is None


class TestAskAndFeed:
    @pytest.mark.asyncio
    async def test_matching_reply_resolves(self):
        manager = ConversationManager(timeout=1.0)
        task = asyncio.create_task(
            manager.ask(KEY, ConversationState.AWAITING_SELECTION, numbered_list_pattern(3))
        )
        await _pending(manager)

        assert await manager.feed(KEY, " 2 ") is True
        match = await task
        assert match.group(1) == "2"
        assert manager.pending(KEY) is None
        assert manager.active_count == 0

    @pytest.mark.asyncio
    async def test_feed_without_conversation_is_ignored(self):
        manager = ConversationManager(timeout=1.0)
        assert await manager.feed(KEY, "2") is False

    @pytest.mark.asyncio
    async def test_other_chatter_does_not_answer(self):
        manager = ConversationManager(timeout=1.0)
        task = asyncio.create_task(
            manager.ask(KEY, ConversationState.AWAITING_SELECTION, numbered_list_pattern(3))
        )
        await _pending(manager)

        assert await manager.feed(OTHER_CHATTER, "1") is False
        assert not task.done()

        await manager.feed(KEY, "3")
        assert (await task).group(1) == "3"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("word", ["exit", "Cancel", " QUIT "])
    async def test_exit_words_abort(self, word):
        manager = ConversationManager(timeout=1.0)
        task = asyncio.create_task(
            manager.ask(KEY, ConversationState.AWAITING_ACCOUNT, numbered_list_pattern(2))
        )
        await _pending(manager)

        assert await manager.feed(KEY, word) is True
        with pytest.raises(ConversationAborted) as exc_info:
            await task
        assert exc_info.value.reason == "cancelled"
        assert manager.pending(KEY) is None

    @pytest.mark.asyncio
    async def test_non_matching_reply_gets_retry_hint(self):
        on_retry = AsyncMock()
        manager = ConversationManager(timeout=1.0, on_retry=on_retry)
        task = asyncio.create_task(
            manager.ask(KEY, ConversationState.AWAITING_SELECTION, numbered_list_pattern(3))
        )
        conversation = await _pending(manager)

        assert await manager.feed(KEY, "seven", source="msg") is True
        on_retry.assert_awaited_once_with(conversation, "msg")
        assert not task.done()

        await manager.feed(KEY, "1")
        assert (await task).group(1) == "1"

    @pytest.mark.asyncio
    async def test_raw_text_preferred_over_fallback(self):
        manager = ConversationManager(timeout=1.0)
        task = asyncio.create_task(
            manager.ask(KEY, ConversationState.AWAITING_MESSAGE_EDIT, r"(.*\S.*)")
        )
        await _pending(manager)

        await manager.feed(KEY, "hubot is back online", fallback="is back online")
        assert (await task).group(1) == "hubot is back online"

    @pytest.mark.asyncio
    async def test_fallback_used_when_raw_text_does_not_match(self):
        manager = ConversationManager(timeout=1.0)
        task = asyncio.create_task(
            manager.ask(KEY, ConversationState.AWAITING_SELECTION, numbered_list_pattern(3))
        )
        await _pending(manager)

        assert await manager.feed(KEY, "!3", fallback="3") is True
        assert (await task).group(1) == "3"

    @pytest.mark.asyncio
    async def test_exit_word_in_fallback_aborts(self):
        manager = ConversationManager(timeout=1.0)
        task = asyncio.create_task(
            manager.ask(KEY, ConversationState.AWAITING_SELECTION, numbered_list_pattern(3))
        )
        await _pending(manager)

        await manager.feed(KEY, "@hubot cancel", fallback="cancel")
        with pytest.raises(ConversationAborted):
            await task

    @pytest.mark.asyncio
    async def test_timeout_aborts(self):
        manager = ConversationManager(timeout=0.01)
        with pytest.raises(ConversationAborted) as exc_info:
            await manager.ask(KEY, ConversationState.AWAITING_MESSAGE_EDIT, r"(.+)")
        assert exc_info.value.reason == "timeout"
        assert manager.pending(KEY) is None

    @pytest.mark.asyncio
    async def test_timeout_logs_time_waited(self, caplog):
        manager = ConversationManager(timeout=0.01)
        with caplog.at_level(logging.INFO, logger="Conversation"):
            with pytest.raises(ConversationAborted):
                await manager.ask(KEY, ConversationState.AWAITING_ACCOUNT, r"(.+)")

        assert "timed out in awaiting_account after" in caplog.text

    @pytest.mark.asyncio
    async def test_per_call_timeout_overrides_default(self):
        manager = ConversationManager(timeout=60.0)
        with pytest.raises(ConversationAborted):
            await manager.ask(KEY, ConversationState.AWAITING_MESSAGE_EDIT, r"(.+)", timeout=0.01)

    @pytest.mark.asyncio
    async def test_new_ask_supersedes_previous(self):
        manager = ConversationManager(timeout=1.0)
        first = asyncio.create_task(
            manager.ask(KEY, ConversationState.AWAITING_SELECTION, numbered_list_pattern(3))
        )
        await _pending(manager)
        second = asyncio.create_task(
            manager.ask(KEY, ConversationState.AWAITING_EVENT_EDIT, r"(enable|disable)")
        )

        with pytest.raises(ConversationAborted) as exc_info:
            await first
        assert exc_info.value.reason == "superseded"

        conversation = await _pending(manager)
        assert conversation.state is ConversationState.AWAITING_EVENT_EDIT
        await manager.feed(KEY, "enable")
        assert (await second).group(1) == "enable"

    @pytest.mark.asyncio
    async def test_cancel_all(self):
        manager = ConversationManager(timeout=1.0)
        task = asyncio.create_task(
            manager.ask(KEY, ConversationState.AWAITING_SELECTION, numbered_list_pattern(3))
        )
        await _pending(manager)

        manager.cancel_all()
        with pytest.raises(ConversationAborted) as exc_info:
            await task
        assert exc_info.value.reason == "shutdown"
        assert manager.active_count == 0
