"""Posting account selection."""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable, Mapping

from tweetwatch.core.conversation import (
    ConversationAborted,
    ConversationKey,
    ConversationManager,
    ConversationState,
    numbered_list_pattern,
)
from tweetwatch.monitoring import messages
from tweetwatch.monitoring.errors import AccountSelectionAborted, NoAccountsConfigured
from tweetwatch.shared.models.twitter_account import TwitterCredentials
from tweetwatch.shared.repositories.brain import MemoryBrain

LOGGER = logging.getLogger("AccountSelector")

BRAIN_TWITTER_USERNAME = "bm.twitter.username"


class AccountSelector:
    """Chooses the posting account, prompting when several are configured."""

    def __init__(
        self,
        accounts: Mapping[str, TwitterCredentials],
        brain: MemoryBrain,
        conversations: ConversationManager,
    ) -> None:
        self.accounts = accounts
        self._brain = brain
        self._conversations = conversations

    @property
    def usernames(self) -> list[str]:
        return list(self.accounts.keys())

    @property
    def selected(self) -> str | None:
        return self._brain.get(BRAIN_TWITTER_USERNAME)

    def prompt_text(self) -> str:
        return messages.SET_USERNAME_PROMPT + "".join(
            f"\n{index}. {name}" for index, name in enumerate(self.usernames, start=1)
        )

    async def select(
        self,
        key: ConversationKey,
        send_prompt: Callable[[str], Awaitable[None]],
    ) -> str:
        """Select and persist the posting account.

        Raises AccountSelectionAborted when no account is configured or the
        prompt is abandoned.
        """
        usernames = self.usernames
        if not usernames:
            raise NoAccountsConfigured("TWEETER_ACCOUNTS has no accounts")

        if len(usernames) == 1:
            username = usernames[0]
        else:
            await send_prompt(self.prompt_text())
            try:
                match = await self._conversations.ask(
                    key, ConversationState.AWAITING_ACCOUNT, numbered_list_pattern(len(usernames))
                )
            except ConversationAborted as e:
                raise AccountSelectionAborted(f"Account selection {e.reason}") from e
            username = usernames[int(match.group(1)) - 1]

        await self._brain.set(BRAIN_TWITTER_USERNAME, username)
        LOGGER.info(f"Twitter account set to {username}")
        return username
