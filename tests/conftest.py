"""Shared fixtures for tweetwatch tests."""

import asyncio

import pytest

from tweetwatch.core.conversation import ConversationManager
from tweetwatch.monitoring.service import CommandContext, TwitterMonitor
from tweetwatch.shared.models.twitter_account import TwitterCredentials
from tweetwatch.shared.repositories.brain import MemoryBrain

CHANNEL_ID = "1001"
CHATTER_ID = "2002"


class ReplyRecorder:
    """Async reply callback that keeps every FormattedReply."""

    def __init__(self):
        self.replies = []

    async def __call__(self, reply):
        self.replies.append(reply)

    @property
    def messages(self):
        return [r.message for r in self.replies if r.message is not None]

    @property
    def last_message(self):
        return self.messages[-1]


def make_accounts(*names):
    return {
        name: TwitterCredentials(access_token="foo", access_token_secret="bar") for name in names
    }


@pytest.fixture
def brain():
    return MemoryBrain()


@pytest.fixture
def replies():
    return ReplyRecorder()


@pytest.fixture
def posts():
    return []


@pytest.fixture
def activities():
    return []


@pytest.fixture
def ctx():
    return CommandContext(channel_id=CHANNEL_ID, chatter_id=CHATTER_ID, text="")


@pytest.fixture
def make_monitor(brain, replies, posts, activities):
    """Factory for TwitterMonitor wired to in-memory collaborators."""

    def factory(accounts=("hubot",), timeout=1.0, **kwargs):
        conversations = ConversationManager(timeout=timeout)
        monitor = TwitterMonitor(
            brain=brain,
            accounts=make_accounts(*accounts),
            conversations=conversations,
            reply=replies,
            emit_post=posts.append,
            emit_activity=activities.append,
            bot_name="hubot",
            **kwargs,
        )
        monitor.load()
        return monitor

    return factory


@pytest.fixture
def wait_for_prompt():
    """Yield to the loop until a conversation is pending for the key."""

    async def waiter(conversations, state=None, key=(CHANNEL_ID, CHATTER_ID)):
        for _ in range(200):
            pending = conversations.pending(key)
            if (
                pending is not None
                and not pending.future.done()
                and (state is None or pending.state is state)
            ):
                return pending
            await asyncio.sleep(0)
        raise AssertionError(f"No pending conversation for {key} in {state}")

    return waiter


@pytest.fixture
def key():
    return (CHANNEL_ID, CHATTER_ID)


@pytest.fixture
def accounts():
    """Factory building TWEETER_ACCOUNTS-style mappings from usernames."""
    return make_accounts
